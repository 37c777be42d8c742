#
# This file is part of the pciids project
#
# Copyright (c) 2025 Tiago Coutinho
# Distributed under the GPLv3 license. See LICENSE for more info.

"""Utility functions used by the library. Mostly for internal usage"""

import functools
import re
import string

from .types import Optional, Sequence

int16 = functools.partial(int, base=16)

HEX_DIGITS = frozenset(string.hexdigits)


@functools.cache
def _hex_regex(width: int) -> re.Pattern:
    return re.compile(rf"[0-9a-fA-F]{{{width}}}")


def is_hex(text: str) -> bool:
    """True if text is a non empty sequence of hexadecimal digits"""
    return bool(text) and all(c in HEX_DIGITS for c in text)


def parse_hex(text: str, width: int) -> Optional[int]:
    """
    Strict hexadecimal identifier decoding.

    Contrary to `int(text, 16)`, prefixes (`0x`), signs, underscores and
    surrounding whitespace are rejected and the number of digits must be
    exactly *width*.

    Args:
        text (str): text to be decoded
        width (int): expected number of hexadecimal digits (2 or 4)

    Returns:
        int or None: the decoded value or None if text is not a valid id
    """
    if _hex_regex(width).fullmatch(text):
        return int16(text)


def parse_hex_path(text: str, widths: Sequence[int], sep: str = ":") -> tuple[int, ...]:
    """
    Decode a separated sequence of identifiers like "8086:1234" or "03:00:00".

    Fewer members than *widths* are accepted (a partial key), more are not.

    Raises:
        ValueError if any member is not a valid identifier
    """
    members = text.split(sep)
    if len(members) > len(widths):
        raise ValueError(f"Too many identifiers in {text!r} (max {len(widths)})")
    result = []
    for member, width in zip(members, widths):
        value = parse_hex(member, width)
        if value is None:
            raise ValueError(f"Invalid identifier {member!r} in {text!r} (expected {width} hex digits)")
        result.append(value)
    return tuple(result)


def hex_id(value: int, width: int = 4) -> str:
    """Returns the canonical lower case text of an identifier (ex: 0x8086 -> '8086')"""
    return f"{value:0{width}x}"
