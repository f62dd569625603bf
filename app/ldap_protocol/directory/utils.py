"""Directory helpers.

Windows filetime reference:
https://github.com/jleclanche/winfiletime/blob/master/winfiletime/filetime.py

Copyright (c) 2025 MultiFactor
License: https://github.com/MultiDirectoryLab/MultiDirectory/blob/main/LICENSE
"""

from calendar import timegm
from datetime import UTC, datetime

_EPOCH_AS_FILETIME = 116444736000000000  # January 1, 1970 as MS file time
_HUNDREDS_OF_NS = 10000000

NEVER_EXPIRES = 0x7FFFFFFFFFFFFFFF


def identity_to_bare_username(identity: str) -> str:
    """Strip the domain prefix from ``DOMAIN\\user``.

    CORP\\jdoe -> jdoe
    jdoe -> jdoe
    :param str identity: directory identity
    :return str: username without domain
    """
    entries = [part for part in identity.split("\\") if part]
    if len(entries) == 2:
        return entries[1]
    return identity


def utcnow() -> datetime:
    """Get aware UTC now."""
    return datetime.now(UTC)


def as_utc(value: datetime) -> datetime:
    """Treat naive datetimes as UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value.astimezone(UTC)


def is_expired(value: datetime | None, now: datetime | None = None) -> bool:
    """Check that an expiration date is set and already passed."""
    if value is None:
        return False
    return as_utc(value) < (now or utcnow())


def dt_to_ft(dt: datetime) -> int:
    """Convert a datetime to a Windows filetime.

    If the object is time zone-naive, it is forced to UTC before conversion.
    """
    dt = as_utc(dt)
    filetime = _EPOCH_AS_FILETIME + (timegm(dt.timetuple()) * _HUNDREDS_OF_NS)
    return filetime + (dt.microsecond * 10)


def ft_to_dt(filetime: int) -> datetime | None:
    """Convert a Windows filetime number to an aware UTC datetime.

    0 and the maximal value both mean that the account never expires.
    """
    if filetime in (0, NEVER_EXPIRES):
        return None

    s, ns100 = divmod(filetime - _EPOCH_AS_FILETIME, _HUNDREDS_OF_NS)
    return datetime.fromtimestamp(s, tz=UTC).replace(microsecond=ns100 // 10)


def shift_years(value: datetime, years: int) -> datetime:
    """Move date by whole years, Feb 29 falls back to Feb 28."""
    try:
        return value.replace(year=value.year + years)
    except ValueError:
        return value.replace(year=value.year + years, day=28)
