"""Remote workflow service integration.

Copyright (c) 2025 MultiFactor
License: https://github.com/MultiDirectoryLab/MultiDirectory/blob/main/LICENSE
"""

from .client import WorkflowAPIClient
from .exceptions import (
    PublicKeyPinningError,
    WorkflowAPIError,
    WorkflowConnectionError,
    WorkflowError,
)
from .pinning import get_public_key_string, make_pinning_hook
from .schemas import (
    BlockRequest,
    BlockResult,
    RequestResult,
    UnblockRequest,
    ValidateRequest,
)

__all__ = [
    "BlockRequest",
    "BlockResult",
    "PublicKeyPinningError",
    "RequestResult",
    "UnblockRequest",
    "ValidateRequest",
    "WorkflowAPIClient",
    "WorkflowAPIError",
    "WorkflowConnectionError",
    "WorkflowError",
    "get_public_key_string",
    "make_pinning_hook",
]
