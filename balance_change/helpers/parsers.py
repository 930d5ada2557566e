"""Parsing utilities for hex quantities and ether amounts."""

import re

from typing import Any

from balance_change.helpers.constants import ETHER_DECIMALS, WEI_PER_ETHER
from balance_change.helpers.errors import MalformedAmountError


_HEX_QUANTITY = re.compile(r"-?0[xX][0-9a-fA-F]+")


def parse_hex_quantity(hex_value: Any) -> int:
    """Parse a 0x-prefixed hex string to an integer.

    Unlike ``int(value, 16)`` this rejects a missing prefix, whitespace and
    underscores, so only what the remote API actually emits is accepted.

    Args:
        hex_value: Hex-encoded string such as ``"0x3e8"``

    Returns:
        int: Parsed integer value

    Raises:
        ValueError: If the value is not a well-formed hex quantity

    Example:
        >>> parse_hex_quantity("0xff")
        255
        >>> parse_hex_quantity("-0x10")
        -16
    """
    if not isinstance(hex_value, str) or not _HEX_QUANTITY.fullmatch(hex_value):
        msg = f"Not a hex quantity: {hex_value!r}"
        raise ValueError(msg)

    if hex_value.startswith("-"):
        return -int(hex_value[3:], 16)
    return int(hex_value[2:], 16)


def parse_hex_amount(hex_value: Any) -> int:
    """Parse a transaction value (in wei) from its hex representation.

    Args:
        hex_value: Hex-encoded amount

    Returns:
        int: Amount in wei

    Raises:
        MalformedAmountError: If the value cannot be parsed
    """
    try:
        return parse_hex_quantity(hex_value)
    except ValueError as e:
        raise MalformedAmountError(str(e)) from e


def to_hex_tag(number: int) -> str:
    """Render a block number as a hex tag.

    Example:
        >>> to_hex_tag(1000)
        '0x3e8'
    """
    if number < 0:
        msg = f"Block number cannot be negative: {number}"
        raise ValueError(msg)
    return hex(number)


def format_ether(wei: int) -> str:
    """Format a wei amount as an exact decimal ether string.

    The fraction keeps every significant digit and at least one digit, so the
    output never goes through floating point.

    Args:
        wei: Amount in wei

    Returns:
        str: Amount in ether

    Example:
        >>> format_ether(10**18)
        '1.0'
        >>> format_ether(100)
        '0.0000000000000001'
        >>> format_ether(0)
        '0.0'
    """
    sign = "-" if wei < 0 else ""
    whole, fraction = divmod(abs(wei), WEI_PER_ETHER)
    fraction_digits = str(fraction).rjust(ETHER_DECIMALS, "0").rstrip("0") or "0"
    return f"{sign}{whole}.{fraction_digits}"


__all__ = [
    "format_ether",
    "parse_hex_amount",
    "parse_hex_quantity",
    "to_hex_tag",
]
