"""Test main config.

Copyright (c) 2024 MultiFactor
License: https://github.com/MultiDirectoryLab/MultiDirectory/blob/main/LICENSE
"""

from datetime import timedelta
from unittest.mock import AsyncMock, Mock

import pytest

from config import Settings
from ldap_protocol.blocking import (
    AttributeBlockingStrategy,
    ExpirationBlockingStrategy,
)
from ldap_protocol.directory import utcnow
from tests.constants import (
    LOGON_HOURS_DISABLED,
    LOGON_HOURS_ENABLED,
    SETTINGS_ENV,
)
from workflow import WorkflowAPIClient


@pytest.fixture
def settings() -> Settings:
    """Get settings."""
    return Settings(**SETTINGS_ENV)


@pytest.fixture
def expiration_strategy() -> ExpirationBlockingStrategy:
    """Get expiration based strategy."""
    return ExpirationBlockingStrategy()


@pytest.fixture
def attribute_strategy() -> AttributeBlockingStrategy:
    """Get attribute based strategy over logonHours."""
    return AttributeBlockingStrategy(
        field="logonHours",
        enable_value=LOGON_HOURS_ENABLED,
        disable_value=LOGON_HOURS_DISABLED,
    )


@pytest.fixture
def api() -> Mock:
    """Get workflow API mock with empty queues."""
    api = Mock(spec=WorkflowAPIClient)
    api.get_users_to_block = AsyncMock(return_value=[])
    api.get_blocked_login_requests = AsyncMock(return_value=[])
    api.get_unblock_user_requests = AsyncMock(return_value=[])
    api.post_block_result = AsyncMock()
    api.put_blocked_login_result = AsyncMock()
    api.put_unblock_user_result = AsyncMock()
    api.update_task_runtime = AsyncMock()
    return api


@pytest.fixture
def expired():
    """Get date one month in the past."""
    return utcnow() - timedelta(days=30)


@pytest.fixture
def future():
    """Get date one month ahead."""
    return utcnow() + timedelta(days=30)
