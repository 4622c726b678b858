"""Timestamps expressed in the application timezone.

Domain objects carry aware datetimes; database columns store the same
wall-clock time without ``tzinfo``.
"""

from __future__ import annotations

import re
from datetime import datetime, timedelta, timezone, tzinfo
from functools import lru_cache
from typing import Final

from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from app.config import get_settings

_UTC_OFFSET: Final[re.Pattern[str]] = re.compile(
    r"^(?:UTC|GMT)?(?P<sign>[+-])(?P<hours>\d{1,2})(?::?(?P<minutes>\d{2}))?$",
    re.IGNORECASE,
)


@lru_cache(maxsize=1)
def get_app_timezone() -> tzinfo:
    """Return the timezone named by ``APP_TIMEZONE``.

    IANA names (``Europe/Madrid``) and fixed offsets (``UTC-05:00``, ``+0200``)
    are accepted; anything else resolves to UTC.
    """

    name = (get_settings().app_timezone or "").strip()
    if not name or name.upper() in {"UTC", "GMT", "Z"}:
        return timezone.utc

    offset = _UTC_OFFSET.match(name)
    if offset:
        delta = timedelta(
            hours=int(offset.group("hours")), minutes=int(offset.group("minutes") or 0)
        )
        return timezone(-delta if offset.group("sign") == "-" else delta)

    try:
        return ZoneInfo(name)
    except (ZoneInfoNotFoundError, ValueError):
        return timezone.utc


def now_in_app_timezone() -> datetime:
    return datetime.now(tz=get_app_timezone())


def now_in_app_naive_datetime() -> datetime:
    """Current wall-clock time in the app timezone, as stored in the database."""

    return now_in_app_timezone().replace(tzinfo=None)


def ensure_app_timezone(value: datetime | None) -> datetime | None:
    """Attach (naive input) or convert to (aware input) the app timezone."""

    if value is None:
        return None
    if value.tzinfo is None:
        return value.replace(tzinfo=get_app_timezone())
    return value.astimezone(get_app_timezone())


def ensure_app_naive_datetime(value: datetime | None) -> datetime | None:
    localized = ensure_app_timezone(value)
    return localized.replace(tzinfo=None) if localized is not None else None
