"""Splitting unsigned integers into low and high halves and joining them back."""

from __future__ import annotations

import time

_WIDTHS = (16, 32, 64)


def _half_mask(bits: int) -> tuple[int, int]:
    if bits not in _WIDTHS:
        raise ValueError(f"unsupported width {bits}; expected one of {_WIDTHS}")
    half = bits // 2
    return half, (1 << half) - 1


def current_ts() -> int:
    """Seconds since the Unix epoch, truncated to an unsigned 32-bit value."""
    seconds = int(time.time())
    if seconds < 0:
        raise RuntimeError("Time went backwards")
    return seconds & 0xFFFF_FFFF


def lo(value: int, bits: int = 32) -> int:
    """The low half of a ``bits``-wide unsigned value."""
    _, mask = _half_mask(bits)
    return value & mask


def hi(value: int, bits: int = 32) -> int:
    """The high half of a ``bits``-wide unsigned value."""
    half, mask = _half_mask(bits)
    return (value >> half) & mask


def construct(hi: int, lo: int, bits: int = 32) -> int:
    """Join two halves into one ``bits``-wide unsigned value."""
    half, mask = _half_mask(bits)
    return (lo & mask) | ((hi & mask) << half)