from datetime import timedelta


def format_duration(value: timedelta) -> str:
    """Compact minute-rounded duration: "0m", "25m", "1h5m"."""
    seconds = max(0.0, value.total_seconds())
    minutes = int(seconds / 60 + 0.5)
    hours, minutes = divmod(minutes, 60)
    if hours:
        return f"{hours}h{minutes}m"
    return f"{minutes}m"


__all__ = ["format_duration"]
