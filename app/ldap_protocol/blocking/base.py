"""Abstract blocking strategy.

Copyright (c) 2025 MultiFactor
License: https://github.com/MultiDirectoryLab/MultiDirectory/blob/main/LICENSE
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import datetime

from loguru import logger as loguru_logger

from ldap_protocol.directory import DirectoryUser, identity_to_bare_username

log = loguru_logger.bind(name="adblocker")


@dataclass(frozen=True)
class BlockOutcome:
    """Result of a block call.

    ``blocked`` is False when the account was already blocked and left
    untouched. ``original_expiration`` is the expiration date the
    workflow service has to restore on unblock.
    """

    blocked: bool
    original_expiration: datetime | None = None


class AbstractBlockingStrategy(ABC):
    """Way of expressing blocked state in a directory entry."""

    @abstractmethod
    async def block(self, user: DirectoryUser) -> BlockOutcome:
        """Block user account."""

    @abstractmethod
    async def unblock(
        self,
        user: DirectoryUser,
        requested_expiration: datetime | None = None,
    ) -> bool:
        """Unblock user account.

        :return bool: True when the entry was changed
        """

    @abstractmethod
    async def validate(self, user: DirectoryUser, password: str) -> bool:
        """Check credentials of a blocked account, leave it blocked."""

    @staticmethod
    async def _check_credentials(user: DirectoryUser, password: str) -> bool:
        username = identity_to_bare_username(user.identity)
        valid = await user.validate_credentials(username, password)
        log.info(f"UserName: {user.identity}")
        return valid
