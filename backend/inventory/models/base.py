from datetime import datetime, timezone


def utc_now() -> datetime:
    """Текущее время в UTC, всегда с tzinfo"""
    return datetime.now(timezone.utc)
