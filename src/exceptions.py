"""Exceptions raised by the itinerary search service."""


class ItinerarySearchError(Exception):
    """Base exception for itinerary search errors."""

    pass


class InvalidArgumentError(ItinerarySearchError):
    """Raised when a request is missing or carries an invalid parameter."""

    pass


class StationNotFoundError(ItinerarySearchError):
    """Raised when a station reference does not resolve to a known station."""

    def __init__(self, reference: str):
        self.reference = reference
        super().__init__(f"Station not found: {reference}")


class ScheduleInsertError(ItinerarySearchError):
    """Raised when a train schedule cannot be stored."""

    pass
