"""Attribute value coercion between workflow strings and directory values.

Copyright (c) 2025 MultiFactor
License: https://github.com/MultiDirectoryLab/MultiDirectory/blob/main/LICENSE
"""

import re

from .exceptions import EncodingError

BINARY_ATTRIBUTES = frozenset({"logonhours"})

_HEX_RE = re.compile(r"[0-9a-fA-F]*")

AttributeValue = str | bytes


def hex_to_bytes(value: str) -> bytes:
    """Decode a plain hex string, two characters per byte.

    :param str value: hex string, e.g. ``FF00FF``
    :raises EncodingError: odd length or non-hex characters
    :return bytes: decoded bytes
    """
    if len(value) % 2:
        raise EncodingError(f"Hex value has odd length: {len(value)}")

    if not _HEX_RE.fullmatch(value):
        raise EncodingError(f"Hex value contains invalid characters: {value}")

    return bytes.fromhex(value)


def resolve_attribute_value(
    name: str,
    current: AttributeValue | None,
    desired: str,
) -> AttributeValue:
    """Convert a configured string to the attribute's stored form.

    Binary attributes are recognised by name (``logonHours``) or by the
    type of the value currently stored; everything else, including an
    attribute that has no value yet, is written as a plain string.

    :param str name: attribute name
    :param AttributeValue | None current: value stored in the directory
    :param str desired: string representation from settings or payload
    :return AttributeValue: value to write
    """
    if name.lower() in BINARY_ATTRIBUTES or isinstance(current, bytes):
        return hex_to_bytes(desired)
    return desired
