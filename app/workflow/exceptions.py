"""Workflow API exceptions.

Copyright (c) 2025 MultiFactor
License: https://github.com/MultiDirectoryLab/MultiDirectory/blob/main/LICENSE
"""

from enum import IntEnum, unique

from errors import BaseDomainException


@unique
class ErrorCodes(IntEnum):
    """Error codes."""

    BASE_ERROR = 0
    WORKFLOW_API_ERROR = 1
    WORKFLOW_CONNECTION_ERROR = 2
    PUBLIC_KEY_PINNING_ERROR = 3


class WorkflowError(BaseDomainException):
    """Workflow API base exception."""

    code: ErrorCodes = ErrorCodes.BASE_ERROR


class WorkflowAPIError(WorkflowError):
    """Non success status returned."""

    code = ErrorCodes.WORKFLOW_API_ERROR


class WorkflowConnectionError(WorkflowError):
    """Transport failure."""

    code = ErrorCodes.WORKFLOW_CONNECTION_ERROR


class PublicKeyPinningError(WorkflowError):
    """Server certificate key differs from the pinned one."""

    code = ErrorCodes.PUBLIC_KEY_PINNING_ERROR
