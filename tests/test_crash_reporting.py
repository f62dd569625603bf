"""Test crash reporting.

Copyright (c) 2025 MultiFactor
License: https://github.com/MultiDirectoryLab/MultiDirectory/blob/main/LICENSE
"""

from unittest.mock import patch

from config import Settings
from crash_reporting import init_crash_reporting, report_exception
from tests.constants import SETTINGS_ENV


def test_disabled_without_dsn(settings: Settings) -> None:
    """Test collector is not started without dsn."""
    with patch("crash_reporting.sentry_sdk") as sdk:
        init_crash_reporting(settings)

    sdk.init.assert_not_called()


def test_init_with_dsn() -> None:
    """Test collector is started with job tags."""
    settings = Settings(
        **SETTINGS_ENV,
        CRASH_REPORT_DSN="https://key@crash.test/1",
        ENVIRONMENT="production",
    )
    with patch("crash_reporting.sentry_sdk") as sdk:
        init_crash_reporting(settings)

    sdk.init.assert_called_once_with(
        dsn="https://key@crash.test/1",
        environment="production",
        debug=False,
    )
    sdk.set_tag.assert_any_call("job", "ADBlocker")


def test_report_exception() -> None:
    """Test error is sent to the collector."""
    error = RuntimeError("boom")
    with patch("crash_reporting.sentry_sdk") as sdk:
        report_exception(error)

    sdk.capture_exception.assert_called_once_with(error)
