"""Crash reporting.

Copyright (c) 2025 MultiFactor
License: https://github.com/MultiDirectoryLab/MultiDirectory/blob/main/LICENSE
"""

import sentry_sdk
from loguru import logger as loguru_logger

from config import Settings

log = loguru_logger.bind(name="adblocker")


def init_crash_reporting(settings: Settings) -> None:
    """Start crash collector, unhandled exceptions are sent as well.

    :param Settings settings: app settings
    """
    if not settings.CRASH_REPORT_DSN:
        log.info("Crash reporting is disabled")
        return

    sentry_sdk.init(
        dsn=settings.CRASH_REPORT_DSN,
        environment=settings.ENVIRONMENT,
        debug=settings.DEBUG,
    )
    sentry_sdk.set_tag("job", settings.JOB_NAME)
    sentry_sdk.set_tag("environment", settings.ENVIRONMENT)
    log.info("Crash reporting initialized")


def report_exception(exc: BaseException) -> None:
    """Log error with traceback and send it to the collector.

    Without initialized collector only the log record is written.
    """
    log.opt(exception=exc).error("ERROR")
    sentry_sdk.capture_exception(exc)
