"""Conversion of human date aliases to the formats the SleepIQ API expects."""

from datetime import date, datetime, timedelta

from .const import DATE_FORMAT, DEFAULT_TIME_LENGTH, MONTH_FORMAT, MONTHS


def convert_date_alias(alias: str, now: datetime | None = None) -> str:
    """Convert 'today', 'yesterday' or '' to a YYYY-MM-DD date.

    Any other value is returned unchanged and assumed to already be a date.
    """
    now = now or datetime.now()

    alias_lower = alias.lower()

    if alias_lower in ("today", ""):
        return now.strftime(DATE_FORMAT)
    if alias_lower == "yesterday":
        return (now - timedelta(days=1)).strftime(DATE_FORMAT)
    return alias


def convert_time_length(alias: str) -> str:
    """Normalize a time length such as 'd1', 'w1' or 'm1'; '' means one day."""
    if not alias:
        return DEFAULT_TIME_LENGTH
    return alias.upper()


def convert_monthly_date_alias(alias: str, now: datetime | None = None) -> str:
    """Convert a month alias to a YYYY-MM date.

    Supported aliases are 'this' (current month), 'last' (previous month)
    and month names. A month name that has not been reached yet this year
    resolves to the previous year, except 'december', which always uses
    the current year.

    Args:
        alias: Month alias, case-insensitive.
        now: Reference instant, defaults to the current local time.

    Returns:
        The YYYY-MM date, or ``alias`` unchanged if it is not recognized.

    """
    now = now or datetime.now()
    alias_lower = alias.lower()

    if alias_lower == "this":
        return now.strftime(MONTH_FORMAT)

    if alias_lower == "last":
        year, month = (now.year, now.month - 1) if now.month > 1 else (now.year - 1, 12)
        return f"{year:04d}-{month:02d}"

    month = MONTHS.get(alias_lower)
    if month is None:
        return alias

    reached = month <= now.month or month == MONTHS["december"]
    year = now.year if reached else now.year - 1
    return f"{year:04d}-{month:02d}"


def format_date(value: date) -> str:
    """Format a date or datetime as YYYY-MM-DD."""
    return value.strftime(DATE_FORMAT)
