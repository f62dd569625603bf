"""Workflow API client.

Copyright (c) 2025 MultiFactor
License: https://github.com/MultiDirectoryLab/MultiDirectory/blob/main/LICENSE
"""

from typing import Any, TypeVar

import httpx
from loguru import logger as loguru_logger
from pydantic import BaseModel, TypeAdapter

from .exceptions import WorkflowAPIError, WorkflowConnectionError
from .schemas import (
    BlockRequest,
    BlockResult,
    RequestResult,
    UnblockRequest,
    ValidateRequest,
)

log = loguru_logger.bind(name="adblocker")

T = TypeVar("T", bound=BaseModel)


class WorkflowAPIClient:
    """Remote workflow service integration.

    All endpoints are relative to the base url of the bound client, which
    also carries the application credentials headers.
    """

    USERS_TO_BLOCK_URL = "api/blockedloginrequests/userstoblock"
    BLOCK_URL = "api/blockedloginrequests/block"
    BLOCKED_LOGIN_REQUESTS_URL = "api/blockedloginrequests"
    UNBLOCK_USER_REQUESTS_URL = "api/unblockuserrequests"
    TASK_RUNTIME_URL = "api/blockedloginrequests/taskruntime"

    client: httpx.AsyncClient

    def __init__(self, client: httpx.AsyncClient) -> None:
        """Set client.

        :param httpx.AsyncClient client: client with base url and headers
        """
        self.client = client

    async def _request(
        self,
        method: str,
        url: str,
        **kwargs: Any,
    ) -> httpx.Response:
        try:
            response = await self.client.request(method, url, **kwargs)
        except httpx.TransportError as err:
            raise WorkflowConnectionError(
                f"{method} {url} failed: {err}",
            ) from err

        if not response.is_success:
            raise WorkflowAPIError(
                f"{method} {url} returned {response.status_code}: "
                f"{response.text}",
            )
        return response

    async def _get_list(self, url: str, model: type[T]) -> list[T]:
        response = await self._request("GET", url)
        return TypeAdapter(list[model]).validate_python(  # type: ignore
            response.json(),
        )

    async def _send(self, method: str, url: str, result: BaseModel) -> None:
        await self._request(
            method,
            url,
            json=result.model_dump(mode="json", by_alias=True),
        )

    async def get_users_to_block(self) -> list[BlockRequest]:
        """Get users pending blocking."""
        return await self._get_list(self.USERS_TO_BLOCK_URL, BlockRequest)

    async def post_block_result(self, result: BlockResult) -> None:
        """Report block outcome."""
        await self._send("POST", self.BLOCK_URL, result)

    async def get_blocked_login_requests(self) -> list[ValidateRequest]:
        """Get pending credential checks."""
        return await self._get_list(
            self.BLOCKED_LOGIN_REQUESTS_URL,
            ValidateRequest,
        )

    async def put_blocked_login_result(self, result: RequestResult) -> None:
        """Report credential check outcome."""
        await self._send("PUT", self.BLOCKED_LOGIN_REQUESTS_URL, result)

    async def get_unblock_user_requests(self) -> list[UnblockRequest]:
        """Get users pending unblocking."""
        return await self._get_list(
            self.UNBLOCK_USER_REQUESTS_URL,
            UnblockRequest,
        )

    async def put_unblock_user_result(self, result: RequestResult) -> None:
        """Report unblock outcome."""
        await self._send("PUT", self.UNBLOCK_USER_REQUESTS_URL, result)

    async def update_task_runtime(self) -> None:
        """Send heartbeat."""
        await self._request("POST", self.TASK_RUNTIME_URL, content=b"")
        log.debug("Task runtime updated")
