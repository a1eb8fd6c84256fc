"""Byte swapping of 16- and 32-bit values for writing big-endian catalogs."""

from __future__ import annotations

import sys
from typing import Callable, NamedTuple


def swap_word21(value: int) -> int:
    """Swap the two bytes of a 16-bit value."""
    value &= 0xFFFF
    return ((value & 0xFF00) >> 8) | ((value & 0x00FF) << 8)


def swap_word12(value: int) -> int:
    """Return a 16-bit value unchanged."""
    return value & 0xFFFF


def swap_long4321(value: int) -> int:
    """Reverse the four bytes of a 32-bit value."""
    value &= 0xFFFFFFFF
    return (
        ((value & 0xFF000000) >> 24)
        | ((value & 0x00FF0000) >> 8)
        | ((value & 0x0000FF00) << 8)
        | ((value & 0x000000FF) << 24)
    )


def swap_long1234(value: int) -> int:
    """Return a 32-bit value unchanged."""
    return value & 0xFFFFFFFF


class Swappers(NamedTuple):
    """The word and long swap functions chosen for a byte order."""

    word: Callable[[int], int]
    long: Callable[[int], int]


def choose_swappers(byteorder: str | None = None) -> Swappers:
    """Pick the swap functions for ``byteorder`` ('little' or 'big').

    Defaults to the byte order of the running machine.
    """
    order = sys.byteorder if byteorder is None else byteorder
    if order == "little":
        return Swappers(swap_word21, swap_long4321)
    if order == "big":
        return Swappers(swap_word12, swap_long1234)
    raise ValueError(f"unsupported byte order: {byteorder!r}")