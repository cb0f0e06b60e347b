"""PC speaker driven by channel 2 of the programmable interval timer."""

from __future__ import annotations

PIT_FREQUENCY = 1193180
PIT_COMMAND_PORT = 0x43
PIT_CHANNEL2_PORT = 0x42
SPEAKER_PORT = 0x61
SQUARE_WAVE_COMMAND = 0xB6
_GATE_BITS = 0x03


class PcSpeaker:
    """The speaker and its I/O ports.

    ``ports`` holds the last value of each port; ``writes`` logs every
    (port, value) written, in order.
    """

    def __init__(self, control: int = 0) -> None:
        self.ports: dict[int, int] = {SPEAKER_PORT: control & 0xFF}
        self.writes: list[tuple[int, int]] = []
        self._latch: list[int] = []

    def _outb(self, port: int, value: int) -> None:
        value &= 0xFF
        self.writes.append((port, value))
        self.ports[port] = value
        if port == PIT_COMMAND_PORT:
            self._latch = []
        elif port == PIT_CHANNEL2_PORT:
            self._latch.append(value)

    def _inb(self, port: int) -> int:
        return self.ports.get(port, 0)

    @property
    def divisor(self) -> int | None:
        """The 16-bit divisor loaded into the timer, or None if none was loaded."""
        if len(self._latch) < 2:
            return None
        return self._latch[0] | (self._latch[1] << 8)

    @property
    def playing(self) -> bool:
        return self._inb(SPEAKER_PORT) & _GATE_BITS == _GATE_BITS

    def play(self, frequency: int) -> None:
        """Start a tone of about ``frequency`` Hz."""
        if frequency <= 0:
            raise ValueError("frequency must be positive")
        divisor = PIT_FREQUENCY // frequency
        self._outb(PIT_COMMAND_PORT, SQUARE_WAVE_COMMAND)
        self._outb(PIT_CHANNEL2_PORT, divisor)
        self._outb(PIT_CHANNEL2_PORT, divisor >> 8)
        control = self._inb(SPEAKER_PORT)
        if control != control | _GATE_BITS:
            self._outb(SPEAKER_PORT, control | _GATE_BITS)

    def stop(self) -> None:
        self._outb(SPEAKER_PORT, self._inb(SPEAKER_PORT) & ~_GATE_BITS)