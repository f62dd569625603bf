"""Main ADBlocker module.

Copyright (c) 2024 MultiFactor
License: https://github.com/MultiDirectoryLab/MultiDirectory/blob/main/LICENSE
"""

import asyncio
import sys
from datetime import UTC, datetime

from loguru import logger

from config import Settings
from crash_reporting import init_crash_reporting
from schedule import scheduler_factory

log = logger.bind(name="adblocker")


def _setup_logging(settings: Settings) -> None:
    logger.remove()
    logger.add(sys.stderr, level="DEBUG" if settings.DEBUG else "INFO")
    logger.add(
        "logs/adblocker_{time:DD-MM-YYYY}.log",
        filter=lambda rec: rec["extra"].get("name") == "adblocker",
        retention="10 days",
        rotation="1d",
        colorize=False,
    )


def _now() -> str:
    return datetime.now(UTC).strftime("%d/%m/%Y %H:%M:%S.%f")[:-3]


def main() -> None:
    """Run blocking job."""
    settings = Settings.from_os()
    _setup_logging(settings)
    init_crash_reporting(settings)

    log.info("Start task")
    log.info(f"Start Time: {_now()}")
    try:
        asyncio.run(scheduler_factory(settings))
    finally:
        log.info(f"End Time: {_now()}")
        log.info("End Task")


if __name__ == "__main__":
    main()
