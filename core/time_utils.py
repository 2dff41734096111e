from datetime import date, datetime, timezone


def now_utc() -> datetime:
    """Return a timezone-aware UTC datetime."""
    return datetime.now(timezone.utc)


def today_iso() -> str:
    """Current UTC date as YYYY-MM-DD, the format used for ledger dates."""
    return now_utc().date().isoformat()


def is_iso_date(value: str | None) -> bool:
    if not value:
        return False
    try:
        date.fromisoformat(value)
    except ValueError:
        return False
    return True
