"""Test settings.

Copyright (c) 2025 MultiFactor
License: https://github.com/MultiDirectoryLab/MultiDirectory/blob/main/LICENSE
"""

import pytest
from pydantic import ValidationError

from config import Settings
from tests.constants import SETTINGS_ENV


def test_defaults(settings: Settings) -> None:
    """Test defaults of a minimal environment."""
    assert settings.UPDATE_FIELD is None
    assert settings.BASE_DN == "dc=corp,dc=test"
    assert not settings.USE_PINNING
    assert settings.AD_PORT == 636
    assert settings.RUN_INTERVAL_SECONDS < 0


def test_update_field_stripped() -> None:
    """Test update field whitespace is ignored."""
    assert Settings(**SETTINGS_ENV, AD_UPDATE_FIELD=" ").UPDATE_FIELD is None
    assert (
        Settings(**SETTINGS_ENV, AD_UPDATE_FIELD=" logonHours ").UPDATE_FIELD
        == "logonHours"
    )


def test_explicit_base_dn() -> None:
    """Test configured base dn wins over domain."""
    settings = Settings(**SETTINGS_ENV, AD_BASE_DN="OU=Staff,DC=corp,DC=test")
    assert settings.BASE_DN == "OU=Staff,DC=corp,DC=test"


@pytest.mark.parametrize(
    ("environment", "pinning"),
    [("local", False), ("LOCAL", False), ("production", True)],
)
def test_pinning(environment: str, pinning: bool) -> None:
    """Test pinning is enabled outside local environment."""
    settings = Settings(**SETTINGS_ENV, ENVIRONMENT=environment)
    assert settings.USE_PINNING is pinning


def test_from_os(monkeypatch: pytest.MonkeyPatch) -> None:
    """Test settings are read from environment."""
    for key, value in SETTINGS_ENV.items():
        monkeypatch.setenv(key, value)
    monkeypatch.setenv("AD_UPDATE_FIELD", "logonHours")
    monkeypatch.setenv("RUN_INTERVAL_SECONDS", "300")

    settings = Settings.from_os()

    assert settings.UPDATE_FIELD == "logonHours"
    assert settings.RUN_INTERVAL_SECONDS == 300.0
    assert str(settings.API_URL) == "https://workflow.test/"


def test_required() -> None:
    """Test missing connection settings fail validation."""
    with pytest.raises(ValidationError):
        Settings(API_URL="https://workflow.test/")  # type: ignore
