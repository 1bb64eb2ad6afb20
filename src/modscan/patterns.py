"""
Hex-nibble byte patterns ("48 8D 0? ?? EB").

Each byte is two hex characters separated from the next by one space; either
character may be '?' to match any nibble. Patterns are static tables, so they are
validated once when a signature is defined, not on every scan.
"""
from __future__ import annotations

import re
from functools import lru_cache

WILDCARD = "?"
SEPARATOR = " "

_HEX_DIGITS = frozenset("0123456789ABCDEFabcdef")


class PatternError(ValueError):
    """Malformed pattern text in a signature table."""


def pattern_size(pattern: str) -> int:
    """Number of bytes described by the pattern (2 chars per byte + 1 space between)."""
    return (len(pattern) + 1) // 3


def nibble_value(ch: str) -> int:
    """4-bit value of a hex digit."""
    return int(ch, 16)


def validate_pattern(pattern: str) -> None:
    """Raise PatternError unless pattern is well-formed nibble-pattern text."""
    if not pattern:
        raise PatternError("empty pattern")
    if (len(pattern) + 1) % 3 != 0:
        raise PatternError(f"bad pattern length {len(pattern)}: {pattern!r}")
    for i, ch in enumerate(pattern):
        if i % 3 == 2:
            if ch != SEPARATOR:
                raise PatternError(f"expected separator at {i}: {pattern!r}")
        elif ch != WILDCARD and ch not in _HEX_DIGITS:
            raise PatternError(f"bad nibble {ch!r} at {i}: {pattern!r}")


def byte_masks(pattern: str) -> tuple[tuple[int, int], ...]:
    """
    Per pattern byte, (value, mask): a data byte b matches when b & mask == value.
    A fixed high nibble contributes 0xF0 to the mask, a fixed low nibble 0x0F.
    """
    out: list[tuple[int, int]] = []
    for k in range(pattern_size(pattern)):
        hi = pattern[k * 3]
        lo = pattern[k * 3 + 1]
        value = 0
        mask = 0
        if hi != WILDCARD:
            value |= nibble_value(hi) << 4
            mask |= 0xF0
        if lo != WILDCARD:
            value |= nibble_value(lo)
            mask |= 0x0F
        out.append((value, mask))
    return tuple(out)


def _byte_class(value: int, mask: int) -> bytes:
    if mask == 0xFF:
        return re.escape(bytes([value]))
    if mask == 0:
        return b"."
    members = b"".join(b"\\x%02x" % b for b in range(256) if b & mask == value)
    return b"[" + members + b"]"


@lru_cache(maxsize=None)
def compile_pattern(pattern: str) -> re.Pattern[bytes]:
    """
    Compile pattern text to a bytes regex. The body sits in a zero-width
    lookahead so finditer reports overlapping matches at every start offset.
    """
    body = b"".join(_byte_class(v, m) for v, m in byte_masks(pattern))
    return re.compile(b"(?=" + body + b")", re.DOTALL)

