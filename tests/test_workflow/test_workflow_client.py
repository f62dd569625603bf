"""Test workflow API client.

Copyright (c) 2025 MultiFactor
License: https://github.com/MultiDirectoryLab/MultiDirectory/blob/main/LICENSE
"""

from datetime import UTC, datetime
from unittest.mock import AsyncMock, Mock

import httpx
import pytest

from tests.constants import BLOCK_REQUESTS
from workflow import (
    BlockResult,
    RequestResult,
    WorkflowAPIClient,
    WorkflowAPIError,
    WorkflowConnectionError,
)


def _client(response: httpx.Response | Exception) -> WorkflowAPIClient:
    http_client = Mock(spec=httpx.AsyncClient)
    if isinstance(response, Exception):
        http_client.request = AsyncMock(side_effect=response)
    else:
        http_client.request = AsyncMock(return_value=response)
    return WorkflowAPIClient(http_client)


@pytest.mark.asyncio
async def test_get_users_to_block() -> None:
    """Test block requests are parsed from PascalCase payload."""
    api = _client(httpx.Response(200, json=BLOCK_REQUESTS))

    requests = await api.get_users_to_block()

    api.client.request.assert_awaited_once_with(  # type: ignore
        "GET",
        "api/blockedloginrequests/userstoblock",
    )
    assert [(r.oid, r.identity) for r in requests] == [
        ("11", "CORP\\jdoe"),
        ("12", "CORP\\ghost"),
        ("13", "CORP\\asmith"),
    ]


@pytest.mark.asyncio
async def test_get_blocked_login_requests() -> None:
    """Test password is parsed and hidden from repr."""
    api = _client(
        httpx.Response(
            200,
            json=[{"Id": 7, "AdUserName": "jdoe", "Password": "P@ssw0rd"}],
        ),
    )

    [request] = await api.get_blocked_login_requests()

    assert request.id == 7
    assert request.password == "P@ssw0rd"
    assert "P@ssw0rd" not in repr(request)


@pytest.mark.asyncio
async def test_get_unblock_user_requests() -> None:
    """Test requested expiration is optional."""
    api = _client(
        httpx.Response(
            200,
            json=[
                {"Id": 1, "AdUserName": "jdoe"},
                {
                    "Id": 2,
                    "AdUserName": "asmith",
                    "AccountExpirationDate": "2030-01-01T00:00:00Z",
                },
            ],
        ),
    )

    first, second = await api.get_unblock_user_requests()

    assert first.requested_expiration is None
    assert second.requested_expiration == datetime(2030, 1, 1, tzinfo=UTC)
    api.client.request.assert_awaited_once_with(  # type: ignore
        "GET",
        "api/unblockuserrequests",
    )


@pytest.mark.asyncio
async def test_post_block_result() -> None:
    """Test block result is posted with wire names."""
    api = _client(httpx.Response(200))

    await api.post_block_result(
        BlockResult(
            oid="11",
            account_expiration_date=datetime(2030, 1, 1, tzinfo=UTC),
            success=True,
        ),
    )

    api.client.request.assert_awaited_once_with(  # type: ignore
        "POST",
        "api/blockedloginrequests/block",
        json={
            "Oid": "11",
            "AccountExpirationDate": "2030-01-01T00:00:00Z",
            "Success": True,
            "Message": "",
        },
    )


@pytest.mark.asyncio
async def test_put_results() -> None:
    """Test validate and unblock results are put."""
    api = _client(httpx.Response(204))
    result = RequestResult(id=3, success=False, message="AD User not found.")
    payload = {"Id": 3, "Success": False, "Message": "AD User not found."}

    await api.put_blocked_login_result(result)
    await api.put_unblock_user_result(result)

    assert api.client.request.await_args_list[0].args == (  # type: ignore
        "PUT",
        "api/blockedloginrequests",
    )
    assert api.client.request.await_args_list[1].args == (  # type: ignore
        "PUT",
        "api/unblockuserrequests",
    )
    for call in api.client.request.await_args_list:  # type: ignore
        assert call.kwargs == {"json": payload}


@pytest.mark.asyncio
async def test_update_task_runtime() -> None:
    """Test heartbeat is an empty post."""
    api = _client(httpx.Response(200))

    await api.update_task_runtime()

    api.client.request.assert_awaited_once_with(  # type: ignore
        "POST",
        "api/blockedloginrequests/taskruntime",
        content=b"",
    )


@pytest.mark.asyncio
async def test_error_status() -> None:
    """Test non success status raises."""
    api = _client(httpx.Response(401, text="Unauthorized"))

    with pytest.raises(WorkflowAPIError, match="401"):
        await api.get_users_to_block()


@pytest.mark.asyncio
async def test_transport_error() -> None:
    """Test transport failure raises connection error."""
    api = _client(httpx.ConnectTimeout("timed out"))

    with pytest.raises(WorkflowConnectionError):
        await api.update_task_runtime()
