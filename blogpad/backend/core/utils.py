"""
Core Utilities.

Shared utility functions used across the backend.
All modules should import utilities from this module.
"""

from datetime import datetime, timezone
from zoneinfo import ZoneInfo

THAI_MONTHS = (
    "มกราคม", "กุมภาพันธ์", "มีนาคม", "เมษายน", "พฤษภาคม", "มิถุนายน",
    "กรกฎาคม", "สิงหาคม", "กันยายน", "ตุลาคม", "พฤศจิกายน", "ธันวาคม",
)

ENGLISH_MONTHS = (
    "January", "February", "March", "April", "May", "June",
    "July", "August", "September", "October", "November", "December",
)

# Thai dates count years in the Buddhist era.
BUDDHIST_ERA_OFFSET = 543

SUPPORTED_LOCALES = ("th_TH", "en_GB", "en_US")


def utc_now() -> datetime:
    """
    Return current UTC time as timezone-naive datetime.

    All datetime values in the application should be timezone-naive
    and assumed to be UTC. This ensures consistent behavior across
    the codebase and simplifies storage.

    Returns:
        Current UTC time with tzinfo stripped
    """
    return datetime.now(timezone.utc).replace(tzinfo=None)


def format_long_datetime(value: datetime, locale: str, tz_name: str) -> str:
    """
    Render a naive UTC datetime as a long local date with hour and minute.

    Args:
        value: Naive datetime assumed to be UTC
        locale: One of th_TH, en_GB, en_US
        tz_name: IANA timezone used for display

    Returns:
        e.g. "17 ตุลาคม 2569 เวลา 14:05 น." or "17 October 2026 at 14:05"

    Timestamps that cannot be shifted into tz_name (the first or last
    hours of year 1 and year 9999) fall back to "YYYY-MM-DD HH:MM UTC".

    Raises:
        ValueError: If the locale is not supported
    """
    if locale not in SUPPORTED_LOCALES:
        raise ValueError(f"Unsupported locale: {locale}")

    try:
        local = value.replace(tzinfo=timezone.utc).astimezone(ZoneInfo(tz_name))
    except OverflowError:
        return f"{value.isoformat(sep=' ', timespec='minutes')} UTC"

    if locale == "th_TH":
        month = THAI_MONTHS[local.month - 1]
        year = local.year + BUDDHIST_ERA_OFFSET
        return f"{local.day} {month} {year} เวลา {local:%H:%M} น."
    if locale == "en_GB":
        month = ENGLISH_MONTHS[local.month - 1]
        return f"{local.day} {month} {local.year} at {local:%H:%M}"

    # en_US
    month = ENGLISH_MONTHS[local.month - 1]
    hour = local.hour % 12 or 12
    meridiem = "AM" if local.hour < 12 else "PM"
    return f"{month} {local.day}, {local.year} at {hour}:{local:%M} {meridiem}"
