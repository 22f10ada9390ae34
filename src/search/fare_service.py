from decimal import Decimal, ROUND_HALF_UP
from typing import Optional, Union
from src.config import settings

CENT = Decimal("0.01")

class FareCalculator:
    """Linear distance pricing: kilometres times a fixed per-kilometre rate"""

    def __init__(self, price_per_km: Optional[Union[Decimal, float, str]] = None):
        if price_per_km is None:
            price_per_km = settings.PRICE_PER_KM
        self.price_per_km = Decimal(str(price_per_km))

    def price_for_distance(self, distance_km: int) -> float:
        """Price for a distance, rounded once to 2 decimal places"""
        amount = (Decimal(distance_km) * self.price_per_km).quantize(CENT, rounding=ROUND_HALF_UP)
        return float(amount)
