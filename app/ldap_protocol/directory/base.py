"""Abstract directory gateway.

Copyright (c) 2025 MultiFactor
License: https://github.com/MultiDirectoryLab/MultiDirectory/blob/main/LICENSE
"""

from abc import ABC, abstractmethod
from contextlib import AbstractAsyncContextManager
from datetime import datetime

from loguru import logger as loguru_logger

from .codec import AttributeValue
from .dataclasses import DirectoryAttributeSnapshot

log = loguru_logger.bind(name="adblocker")


class DirectoryUser(ABC):
    """Single located user record.

    Setters only stage changes, nothing reaches the directory until
    :meth:`save` is awaited. Credential checks always run against the
    persisted state.
    """

    identity: str

    def __init__(self, identity: str) -> None:
        """Set identity the record was located by."""
        self.identity = identity

    @abstractmethod
    def get_expiration_date(self) -> datetime | None:
        """Get account expiration date, None means never.

        :raises ExpirationUnavailableError: entry was loaded without it
        """

    @abstractmethod
    def set_expiration_date(self, value: datetime | None) -> None:
        """Stage a new account expiration date."""

    @abstractmethod
    def get_attribute(self, name: str) -> DirectoryAttributeSnapshot:
        """Get raw attribute value.

        :raises AttributeUnavailableError: raw attributes are not exposed
        """

    @abstractmethod
    def set_attribute(self, name: str, value: AttributeValue | None) -> None:
        """Stage replacing all attribute values, None clears it.

        :raises AttributeUnavailableError: raw attributes are not exposed
        """

    @abstractmethod
    def restore_attribute(self, snapshot: DirectoryAttributeSnapshot) -> None:
        """Stage writing back every value captured in ``snapshot``.

        :raises AttributeUnavailableError: raw attributes are not exposed
        """

    @abstractmethod
    async def validate_credentials(self, username: str, password: str) -> bool:
        """Check password against the directory domain."""

    @abstractmethod
    async def save(self) -> None:
        """Persist staged changes.

        :raises DirectoryWriteError: backend refused the change
        """


class AbstractDirectoryGateway(ABC):
    """Directory access for one work item at a time."""

    @abstractmethod
    def open_user(
        self,
        identity: str,
    ) -> AbstractAsyncContextManager[DirectoryUser]:
        """Locate user and keep the record open for the block.

        :param str identity: ``DOMAIN\\user``, bare name or UPN
        :raises UserNotFoundError: identity does not resolve
        """
