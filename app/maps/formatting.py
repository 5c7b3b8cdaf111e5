"""Human-readable route summaries."""
import math


def format_distance(meters: float) -> str:
    if meters < 1000:
        # Halves round up, not to even.
        return f"{math.floor(meters + 0.5)} m"
    return f"{meters / 1000:.1f} km"


def format_duration(seconds: float) -> str:
    hours = int(seconds // 3600)
    minutes = int((seconds % 3600) // 60)
    if hours > 0:
        return f"{hours}h {minutes}m"
    return f"{minutes} min"
