"""Data classes for directory records.

Copyright (c) 2025 MultiFactor
License: https://github.com/MultiDirectoryLab/MultiDirectory/blob/main/LICENSE
"""

from dataclasses import dataclass

from .codec import AttributeValue


@dataclass(frozen=True)
class DirectoryAttributeSnapshot:
    """Raw attribute value captured before a temporary change.

    ``raw_value`` is the first stored value, ``values`` keeps every value
    of a multi-valued attribute for the restore.
    """

    name: str
    raw_value: AttributeValue | None
    values: tuple[AttributeValue, ...] = ()

    @property
    def is_binary_encoded(self) -> bool:
        return isinstance(self.raw_value, bytes)

    @property
    def stored_values(self) -> list[AttributeValue]:
        """Get all values to write back, empty when none was stored."""
        if self.values:
            return list(self.values)
        if self.raw_value is None:
            return []
        return [self.raw_value]
