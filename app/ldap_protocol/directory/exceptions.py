"""Directory backend exceptions.

Copyright (c) 2025 MultiFactor
License: https://github.com/MultiDirectoryLab/MultiDirectory/blob/main/LICENSE
"""

from enum import IntEnum, unique

from errors import BaseDomainException


@unique
class ErrorCodes(IntEnum):
    """Error codes."""

    BASE_ERROR = 0
    USER_NOT_FOUND_ERROR = 1
    ATTRIBUTE_UNAVAILABLE_ERROR = 2
    ENCODING_ERROR = 3
    DIRECTORY_WRITE_ERROR = 4
    DIRECTORY_CONNECTION_ERROR = 5
    EXPIRATION_UNAVAILABLE_ERROR = 6


class DirectoryError(BaseDomainException):
    """Directory base exception."""

    code: ErrorCodes = ErrorCodes.BASE_ERROR


class UserNotFoundError(DirectoryError):
    """Identity does not resolve to a directory user."""

    code = ErrorCodes.USER_NOT_FOUND_ERROR
    default_message = "AD User not found."


class AttributeUnavailableError(DirectoryError):
    """Raw attributes cannot be read or written on this entry."""

    code = ErrorCodes.ATTRIBUTE_UNAVAILABLE_ERROR
    default_message = (
        "The defined update field is invalid "
        "or the user entry could not be loaded."
    )


class EncodingError(DirectoryError):
    """Malformed hexadecimal attribute value."""

    code = ErrorCodes.ENCODING_ERROR


class DirectoryWriteError(DirectoryError):
    """Staged changes could not be persisted."""

    code = ErrorCodes.DIRECTORY_WRITE_ERROR


class DirectoryConnectionError(DirectoryError):
    """Directory server is unreachable or refused the service bind."""

    code = ErrorCodes.DIRECTORY_CONNECTION_ERROR


class ExpirationUnavailableError(DirectoryError):
    """Account expiration date cannot be read from this entry."""

    code = ErrorCodes.EXPIRATION_UNAVAILABLE_ERROR
    default_message = (
        "Operation failed. The account expiration date "
        "of the user entry could not be loaded."
    )
