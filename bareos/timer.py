"""Timer tick counter and real-time clock access."""

from __future__ import annotations

from enum import IntEnum
from typing import Callable

TICK_HZ = 18


class RtcRegister(IntEnum):
    SECONDS = 0x00
    MINUTES = 0x02
    HOURS = 0x04
    DAY = 0x07
    MONTH = 0x08
    YEAR = 0x09


_VALID_REGISTERS = frozenset(RtcRegister)


def bcd_to_binary(value: int) -> int:
    """Decode a packed BCD byte."""
    value &= 0xFF
    return (value >> 4) * 10 + (value & 0x0F)


class Timer:
    """Counts timer interrupts, which arrive about 18 times a second."""

    def __init__(self) -> None:
        self._ticks = 0

    def tick(self) -> None:
        self._ticks += 1

    def ticks_elapsed(self) -> int:
        return self._ticks

    def seconds_elapsed(self) -> int:
        return self._ticks // TICK_HZ


class RealTimeClock:
    """Reads decoded values from a CMOS clock.

    ``reader`` takes a register number and returns its raw BCD byte.
    """

    def __init__(self, reader: Callable[[int], int]) -> None:
        self._reader = reader

    def get(self, register: int) -> int:
        """Return the decoded register value, or 0 for an unknown register."""
        if register not in _VALID_REGISTERS:
            return 0
        return bcd_to_binary(self._reader(int(register)))