"""Blocking through account expiration date.

Copyright (c) 2025 MultiFactor
License: https://github.com/MultiDirectoryLab/MultiDirectory/blob/main/LICENSE
"""

from datetime import datetime

from ldap_protocol.directory import (
    DirectoryUser,
    as_utc,
    is_expired,
    shift_years,
    utcnow,
)

from .base import AbstractBlockingStrategy, BlockOutcome, log


class ExpirationBlockingStrategy(AbstractBlockingStrategy):
    """Blocked account has expiration date in the past."""

    async def block(self, user: DirectoryUser) -> BlockOutcome:
        """Move expiration date one year back.

        Already expired accounts are not touched, their current date is
        not an original to restore.
        """
        current = user.get_expiration_date()
        if is_expired(current):
            log.info(
                f"User {user.identity} is already blocked "
                "and was not processed again.",
            )
            return BlockOutcome(blocked=False)

        user.set_expiration_date(shift_years(utcnow(), -1))
        await user.save()
        return BlockOutcome(blocked=True, original_expiration=current)

    async def unblock(
        self,
        user: DirectoryUser,
        requested_expiration: datetime | None = None,
    ) -> bool:
        """Restore requested expiration date or clear it.

        Requested dates that are already in the past would keep the
        account blocked, so the expiration is cleared instead.
        """
        now = utcnow()
        if not is_expired(user.get_expiration_date(), now):
            return False

        if requested_expiration is None or as_utc(requested_expiration) > now:
            user.set_expiration_date(requested_expiration)
        else:
            user.set_expiration_date(None)

        await user.save()
        return True

    async def validate(self, user: DirectoryUser, password: str) -> bool:
        """Lift expiration for the credential check, then put it back."""
        original = user.get_expiration_date()
        if not is_expired(original):
            return await self._check_credentials(user, password)

        user.set_expiration_date(shift_years(utcnow(), 1))
        await user.save()
        log.info(f"User {user.identity} unblocked")

        try:
            return await self._check_credentials(user, password)
        finally:
            user.set_expiration_date(original)
            await user.save()
            log.info(f"User {user.identity} blocked")
