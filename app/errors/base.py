"""Errors base.

Copyright (c) 2025 MultiFactor
License: https://github.com/MultiDirectoryLab/MultiDirectory/blob/main/LICENSE
"""

from enum import IntEnum


class BaseDomainException(Exception):  # noqa N818
    """Base exception.

    Every concrete error carries a ``code`` so failures reported back to
    the workflow service can be told apart in logs and crash reports.
    """

    code: IntEnum
    default_message: str = ""

    def __init_subclass__(cls) -> None:
        """Initialize subclass."""
        super().__init_subclass__()

        if not hasattr(cls, "code"):
            raise AttributeError("code must be set")

    def __init__(self, *args: object) -> None:
        """Fall back to the class message when none is given."""
        if not args and self.default_message:
            args = (self.default_message,)
        super().__init__(*args)
