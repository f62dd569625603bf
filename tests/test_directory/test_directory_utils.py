"""Test directory helpers.

Copyright (c) 2025 MultiFactor
License: https://github.com/MultiDirectoryLab/MultiDirectory/blob/main/LICENSE
"""

from datetime import UTC, datetime, timedelta

import pytest

from ldap_protocol.directory import (
    identity_to_bare_username,
    is_expired,
    shift_years,
    utcnow,
)
from ldap_protocol.directory.utils import NEVER_EXPIRES, dt_to_ft, ft_to_dt


@pytest.mark.parametrize(
    ("identity", "username"),
    [
        ("CORP\\jdoe", "jdoe"),
        ("jdoe", "jdoe"),
        ("jdoe@corp.test", "jdoe@corp.test"),
        ("A\\B\\C", "A\\B\\C"),
    ],
)
def test_identity_to_bare_username(identity: str, username: str) -> None:
    """Test domain prefix is stripped only from two segments."""
    assert identity_to_bare_username(identity) == username


def test_filetime_conversion() -> None:
    """Test known filetime value."""
    value = datetime(2024, 1, 1, tzinfo=UTC)

    assert dt_to_ft(value) == 133485408000000000
    assert ft_to_dt(133485408000000000) == value


def test_naive_datetime_is_utc() -> None:
    """Test naive datetime converts as UTC."""
    assert dt_to_ft(datetime(2024, 1, 1)) == 133485408000000000


@pytest.mark.parametrize("filetime", [0, NEVER_EXPIRES])
def test_never_expires(filetime: int) -> None:
    """Test special filetime values mean no expiration."""
    assert ft_to_dt(filetime) is None


def test_is_expired() -> None:
    """Test expiration check."""
    now = utcnow()

    assert not is_expired(None)
    assert is_expired(now - timedelta(seconds=1), now)
    assert not is_expired(now + timedelta(days=1), now)
    assert is_expired(datetime(2000, 1, 1))


def test_shift_years_leap_day() -> None:
    """Test Feb 29 falls back to Feb 28."""
    value = datetime(2024, 2, 29, 12, tzinfo=UTC)

    assert shift_years(value, -1) == datetime(2023, 2, 28, 12, tzinfo=UTC)
    assert shift_years(value, 4) == datetime(2028, 2, 29, 12, tzinfo=UTC)
