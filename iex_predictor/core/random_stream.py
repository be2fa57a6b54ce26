"""Seeded pseudo-random streams used to keep simulations reproducible."""

from __future__ import annotations

_MASK_32 = 0xFFFFFFFF
_WEYL_INCREMENT = 0x6D2B79F5
_TWO_POW_32 = 4294967296.0


def _imul(a: int, b: int) -> int:
    """32-bit wrapping multiplication of two unsigned integers."""

    return (a * b) & _MASK_32


class RandomStream:
    """Mulberry32 generator carrying only its own 32-bit state.

    Calling the stream returns the next float in ``[0, 1)``. Two streams
    created from the same seed yield identical sequences independently of
    each other; there is no shared or global state.
    """

    __slots__ = ("_state",)

    def __init__(self, seed: int) -> None:
        self._state = int(seed) & _MASK_32

    def __call__(self) -> float:
        self._state = (self._state + _WEYL_INCREMENT) & _MASK_32
        t = self._state
        t = _imul(t ^ (t >> 15), t | 1)
        t ^= (t + _imul(t ^ (t >> 7), t | 61)) & _MASK_32
        return ((t ^ (t >> 14)) & _MASK_32) / _TWO_POW_32


def create_stream(seed: int) -> RandomStream:
    """Return a fresh stream positioned at the start of ``seed``'s sequence."""

    return RandomStream(seed)


__all__ = ["RandomStream", "create_stream"]
