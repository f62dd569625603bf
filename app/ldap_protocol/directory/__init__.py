"""Directory user access.

Copyright (c) 2025 MultiFactor
License: https://github.com/MultiDirectoryLab/MultiDirectory/blob/main/LICENSE
"""

from .base import AbstractDirectoryGateway, DirectoryUser
from .codec import AttributeValue, hex_to_bytes, resolve_attribute_value
from .dataclasses import DirectoryAttributeSnapshot
from .exceptions import (
    AttributeUnavailableError,
    DirectoryConnectionError,
    DirectoryError,
    DirectoryWriteError,
    EncodingError,
    ExpirationUnavailableError,
    UserNotFoundError,
)
from .ldap3_gateway import LDAP3DirectoryGateway
from .utils import (
    as_utc,
    identity_to_bare_username,
    is_expired,
    shift_years,
    utcnow,
)

__all__ = [
    "AbstractDirectoryGateway",
    "AttributeUnavailableError",
    "AttributeValue",
    "DirectoryAttributeSnapshot",
    "DirectoryConnectionError",
    "DirectoryError",
    "DirectoryUser",
    "DirectoryWriteError",
    "EncodingError",
    "ExpirationUnavailableError",
    "LDAP3DirectoryGateway",
    "UserNotFoundError",
    "as_utc",
    "hex_to_bytes",
    "identity_to_bare_username",
    "is_expired",
    "resolve_attribute_value",
    "shift_years",
    "utcnow",
]
