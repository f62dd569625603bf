"""Blocking through a configured directory attribute.

Copyright (c) 2025 MultiFactor
License: https://github.com/MultiDirectoryLab/MultiDirectory/blob/main/LICENSE
"""

from datetime import datetime

from ldap_protocol.directory import DirectoryUser, resolve_attribute_value

from .base import AbstractBlockingStrategy, BlockOutcome, log


class AttributeBlockingStrategy(AbstractBlockingStrategy):
    """Blocked account carries the disable sentinel in ``field``."""

    def __init__(
        self,
        field: str,
        enable_value: str,
        disable_value: str,
    ) -> None:
        """Set attribute name and sentinel values.

        :param str field: attribute name, e.g. ``logonHours``
        :param str enable_value: value of an enabled account
        :param str disable_value: value of a blocked account
        """
        self.field = field
        self.enable_value = enable_value
        self.disable_value = disable_value

    async def _write(self, user: DirectoryUser, value: str) -> None:
        snapshot = user.get_attribute(self.field)
        user.set_attribute(
            self.field,
            resolve_attribute_value(self.field, snapshot.raw_value, value),
        )
        await user.save()

    async def block(self, user: DirectoryUser) -> BlockOutcome:
        """Write disable value."""
        await self._write(user, self.disable_value)
        return BlockOutcome(blocked=True)

    async def unblock(
        self,
        user: DirectoryUser,
        requested_expiration: datetime | None = None,  # noqa: ARG002
    ) -> bool:
        """Write enable value."""
        await self._write(user, self.enable_value)
        return True

    async def validate(self, user: DirectoryUser, password: str) -> bool:
        """Enable the account for the credential check.

        The captured value is written back whatever the check returns
        or raises.
        """
        snapshot = user.get_attribute(self.field)
        user.set_attribute(
            self.field,
            resolve_attribute_value(
                self.field,
                snapshot.raw_value,
                self.enable_value,
            ),
        )
        await user.save()
        log.info(f"User {user.identity} unblocked")

        try:
            return await self._check_credentials(user, password)
        finally:
            user.restore_attribute(snapshot)
            await user.save()
            log.info(f"User {user.identity} blocked")
