"""Runner for reconciliation cycles.

Copyright (c) 2025 MultiFactor
License: https://github.com/MultiDirectoryLab/MultiDirectory/blob/main/LICENSE
"""

import asyncio

from dishka import AsyncContainer, Scope, make_async_container
from loguru import logger as loguru_logger

from config import Settings
from crash_reporting import report_exception
from ioc import MainProvider
from ldap_protocol.reconciliation import ReconciliationEngine

log = loguru_logger.bind(name="adblocker")


async def run_reconciliation(container: AsyncContainer) -> None:
    """Run one cycle in request scope.

    :param AsyncContainer container: container
    """
    async with container(scope=Scope.REQUEST) as ctnr:
        engine = await ctnr.get(ReconciliationEngine)
        await engine.run()


async def scheduler_factory(settings: Settings) -> None:
    """Run cycles, once or periodically."""
    container = make_async_container(
        MainProvider(),
        context={Settings: settings},
    )

    try:
        while True:
            try:
                await run_reconciliation(container)
            except Exception as err:
                report_exception(err)

            # NOTE: one-time run
            if settings.RUN_INTERVAL_SECONDS < 0.0:
                break

            log.info("Next run in {}s", settings.RUN_INTERVAL_SECONDS)
            await asyncio.sleep(settings.RUN_INTERVAL_SECONDS)
    finally:
        await container.close()


__all__ = ["run_reconciliation", "scheduler_factory"]
