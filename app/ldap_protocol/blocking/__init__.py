"""Blocking strategies.

Copyright (c) 2025 MultiFactor
License: https://github.com/MultiDirectoryLab/MultiDirectory/blob/main/LICENSE
"""

from config import Settings

from .attribute import AttributeBlockingStrategy
from .base import AbstractBlockingStrategy, BlockOutcome
from .expiration import ExpirationBlockingStrategy


def get_blocking_strategy(settings: Settings) -> AbstractBlockingStrategy:
    """Select strategy once for the whole run.

    A non-blank update field switches all operations to attribute based
    blocking.
    """
    if settings.UPDATE_FIELD:
        return AttributeBlockingStrategy(
            field=settings.UPDATE_FIELD,
            enable_value=settings.AD_UPDATE_FIELD_ENABLE_VALUE,
            disable_value=settings.AD_UPDATE_FIELD_DISABLE_VALUE,
        )
    return ExpirationBlockingStrategy()


__all__ = [
    "AbstractBlockingStrategy",
    "AttributeBlockingStrategy",
    "BlockOutcome",
    "ExpirationBlockingStrategy",
    "get_blocking_strategy",
]
