"""
Wildcard pattern scanner: find every match of a nibble pattern in a buffer and
collect what a per-match callback returns.
"""
from __future__ import annotations

from typing import Callable, Optional, TypeVar

from modscan.patterns import compile_pattern, pattern_size

T = TypeVar("T")


def find_pattern(
    data: bytes,
    pattern: str,
    on_match: Callable[[int], list[T]],
    start: int = 0,
    end: Optional[int] = None,
) -> list[T]:
    """
    Scan data[start:end] for pattern and return the concatenation of
    on_match(offset) for every match, in ascending offset order.

    Offsets passed to on_match are relative to start, as if the caller had
    sliced the buffer there. Overlapping matches are all reported. A match must
    lie wholly inside the window, so nothing past the buffer is ever compared.
    Pattern text must be well-formed (see patterns.validate_pattern).
    """
    if end is None or end > len(data):
        end = len(data)
    start = max(start, 0)
    out: list[T] = []
    if end - start < pattern_size(pattern):
        return out
    for m in compile_pattern(pattern).finditer(data, start, end):
        out.extend(on_match(m.start() - start))
    return out
