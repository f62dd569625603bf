"""Reconciliation of blocking requests with the directory.

Copyright (c) 2025 MultiFactor
License: https://github.com/MultiDirectoryLab/MultiDirectory/blob/main/LICENSE
"""

from datetime import UTC, datetime
from typing import Awaitable, Callable

from loguru import logger as loguru_logger

from crash_reporting import report_exception
from ldap_protocol.blocking import AbstractBlockingStrategy
from ldap_protocol.directory import (
    AbstractDirectoryGateway,
    AttributeUnavailableError,
    UserNotFoundError,
)
from workflow import (
    BlockRequest,
    BlockResult,
    RequestResult,
    UnblockRequest,
    ValidateRequest,
    WorkflowAPIClient,
)

log = loguru_logger.bind(name="adblocker")

USER_NOT_FOUND = "AD User not found."
INVALID_CREDENTIALS = "AD User credentials are invalid."
UPDATE_FIELD_FAILED = (
    "Operation failed. The defined update field is invalid "
    "or the user entry could not be loaded."
)
VALIDATE_UPDATE_FIELD_FAILED = (
    "Could not validate user credentials. The update field is invalid "
    "or the user entry could not be loaded."
)


def _timestamp() -> str:
    return datetime.now(UTC).strftime("%d/%m/%Y %H:%M:%S.%f")[:-3]


def _error_message(err: Exception) -> str:
    return str(err) or type(err).__name__


class ReconciliationEngine:
    """Apply pending workflow requests to directory users.

    Stages run one after another, a failing stage is reported and the
    next one still runs. Every item inside a stage is isolated: its
    failure turns into an unsuccessful result for that item only.
    """

    def __init__(
        self,
        api: WorkflowAPIClient,
        directory: AbstractDirectoryGateway,
        strategy: AbstractBlockingStrategy,
        on_error: Callable[[BaseException], None] = report_exception,
    ) -> None:
        """Set collaborators.

        :param WorkflowAPIClient api: remote workflow service
        :param AbstractDirectoryGateway directory: user records access
        :param AbstractBlockingStrategy strategy: blocking variant
        :param Callable on_error: stage failure reporter
        """
        self.api = api
        self.directory = directory
        self.strategy = strategy
        self.on_error = on_error

    async def run(self) -> None:
        """Run all stages, then send the heartbeat."""
        await self._run_stage("blocking", self.run_blocking_stage)
        await self._run_stage("validation", self.run_validation_stage)
        await self._run_stage("unblock", self.run_unblock_stage)
        await self.api.update_task_runtime()

    async def _run_stage(
        self,
        name: str,
        stage: Callable[[], Awaitable[None]],
    ) -> None:
        log.info(f"Started running {name} task: {_timestamp()}")
        try:
            await stage()
        except Exception as err:
            log.error(f"The {name} task was aborted: {err}")
            self.on_error(err)
        else:
            log.info(f"Ended running {name} task: {_timestamp()}")

    async def _send(self, send: Awaitable[None]) -> None:
        try:
            await send
        except Exception as err:
            log.error(f"Result was not delivered: {err}")
            self.on_error(err)

    async def run_blocking_stage(self) -> None:
        """Block every pending user and post the outcome."""
        for request in await self.api.get_users_to_block():
            result = await self.block_user(request)
            await self._send(self.api.post_block_result(result))

    async def run_validation_stage(self) -> None:
        """Check every pending credential request."""
        for request in await self.api.get_blocked_login_requests():
            result = await self.validate_login(request)
            await self._send(self.api.put_blocked_login_result(result))

    async def run_unblock_stage(self) -> None:
        """Unblock every pending user."""
        for request in await self.api.get_unblock_user_requests():
            result = await self.unblock_user(request)
            await self._send(self.api.put_unblock_user_result(result))

    async def block_user(self, request: BlockRequest) -> BlockResult:
        """Block one user.

        Already blocked users are reported as success without an
        expiration date to restore.
        """
        try:
            async with self.directory.open_user(request.identity) as user:
                outcome = await self.strategy.block(user)
        except UserNotFoundError:
            log.warning(f"User {request.identity} not found in AD.")
            return BlockResult(
                oid=request.oid,
                success=False,
                message=USER_NOT_FOUND,
            )
        except AttributeUnavailableError:
            log.error(
                f"User {request.identity} was not processed. "
                "The update field is invalid "
                "or the user entry could not be loaded.",
            )
            return BlockResult(
                oid=request.oid,
                success=False,
                message=UPDATE_FIELD_FAILED,
            )
        except Exception as err:
            log.exception(f"Blocking of {request.identity} failed")
            return BlockResult(
                oid=request.oid,
                success=False,
                message=_error_message(err),
            )

        if outcome.blocked:
            log.info(f"Blocked User {request.identity}")

        return BlockResult(
            oid=request.oid,
            account_expiration_date=outcome.original_expiration,
            success=True,
            message="",
        )

    async def validate_login(self, request: ValidateRequest) -> RequestResult:
        """Check credentials of one blocked user."""
        try:
            async with self.directory.open_user(request.identity) as user:
                valid = await self.strategy.validate(user, request.password)
        except UserNotFoundError:
            log.warning(f"User {request.identity} not found in AD.")
            return RequestResult(
                id=request.id,
                success=False,
                message=USER_NOT_FOUND,
            )
        except AttributeUnavailableError:
            log.error(VALIDATE_UPDATE_FIELD_FAILED)
            return RequestResult(
                id=request.id,
                success=False,
                message=VALIDATE_UPDATE_FIELD_FAILED,
            )
        except Exception as err:
            log.exception(f"Validation of {request.identity} failed")
            return RequestResult(
                id=request.id,
                success=False,
                message=_error_message(err),
            )

        return RequestResult(
            id=request.id,
            success=valid,
            message="" if valid else INVALID_CREDENTIALS,
        )

    async def unblock_user(self, request: UnblockRequest) -> RequestResult:
        """Unblock one user."""
        try:
            async with self.directory.open_user(request.identity) as user:
                await self.strategy.unblock(
                    user,
                    request.requested_expiration,
                )
        except UserNotFoundError:
            log.warning(f"User {request.identity} not found in AD.")
            return RequestResult(
                id=request.id,
                success=False,
                message=USER_NOT_FOUND,
            )
        except AttributeUnavailableError:
            log.error(
                f"Unblocked User {request.identity} failed. "
                "The defined update field is invalid "
                "or the user entry could not be loaded.",
            )
            return RequestResult(
                id=request.id,
                success=False,
                message=UPDATE_FIELD_FAILED,
            )
        except Exception as err:
            log.exception(f"Unblocking of {request.identity} failed")
            return RequestResult(
                id=request.id,
                success=False,
                message=_error_message(err),
            )

        log.info(f"Unblocked User {request.identity}")
        return RequestResult(id=request.id, success=True, message="")
