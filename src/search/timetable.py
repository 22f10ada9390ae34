from datetime import time

MINUTES_PER_DAY = 1440

def time_to_minutes(value: time) -> int:
    return value.hour * 60 + value.minute

def minutes_to_time(minutes: int) -> str:
    """Format minutes after midnight as "HH:MM", wrapping into a single day"""
    minutes %= MINUTES_PER_DAY
    return f"{minutes // 60:02d}:{minutes % 60:02d}"

def format_time(value: time) -> str:
    return value.strftime("%H:%M")

def duration_minutes(depart: time, arrive: time) -> int:
    """Minutes from depart to arrive, wrapping past midnight; always in [0, 1440)"""
    return (time_to_minutes(arrive) - time_to_minutes(depart)) % MINUTES_PER_DAY
