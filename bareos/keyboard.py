"""PS/2 set-1 keyboard: scancode translation and an input ring buffer."""

from __future__ import annotations

from collections import deque
from typing import Callable, Iterable

ESC = 0x1B
SHIFT_L = 0x2A
SHIFT_R = 0x36
CTRL_L = 0x1D
CTRL_L_RELEASE = 0x9D
CAPSLOCK = 0x3A
RELEASE_OFFSET = 0x80
KEY_COUNT = 0x54
BUFFER_SIZE = 256
REGISTERS_CANT = 17

SC_UP = 0x48
SC_DOWN = 0x50
SC_LEFT = 0x4B
SC_RIGHT = 0x4D

KEY_ARROW_UP = chr(0x80)
KEY_ARROW_DOWN = chr(0x81)
KEY_ARROW_LEFT = chr(0x82)
KEY_ARROW_RIGHT = chr(0x83)

REGISTER_NAMES = (
    "RAX", "RBX", "RCX", "RDX", "RSI", "RDI", "RBP", "R8", "R9",
    "R10", "R11", "R12", "R13", "R14", "R15", "RIP", "RSP",
)

_UNSHIFTED = (
    "\0\x1b1234567890-=\b\tqwertyuiop[]\n\0asdfghjkl;'`\0\\zxcvbnm,./\0\0\0 "
).ljust(KEY_COUNT, "\0")
_SHIFTED = (
    "\0\x1b!@#$%^&*()_+\b\tQWERTYUIOP{}\n\0ASDFGHJKL:\"~\0|ZXCVBNM<>?\0\0\0 "
).ljust(KEY_COUNT, "\0")

_ARROWS = {
    SC_UP: KEY_ARROW_UP,
    SC_DOWN: KEY_ARROW_DOWN,
    SC_LEFT: KEY_ARROW_LEFT,
    SC_RIGHT: KEY_ARROW_RIGHT,
}


def scancode_to_ascii(scancode: int, shift: bool = False, caps_lock: bool = False) -> str | None:
    """Translate a scancode to a character, or None if it produces none."""
    if scancode in _ARROWS:
        return _ARROWS[scancode]
    if not 0 <= scancode < KEY_COUNT:
        return None
    character = (_SHIFTED if shift else _UNSHIFTED)[scancode]
    if character == "\0":
        return None
    if caps_lock and "a" <= character <= "z":
        character = character.upper()
    return character


class Keyboard:
    """Keyboard state: modifier flags, buffered characters and a register snapshot.

    ``register_source`` is called on Ctrl+R and must return at least 17 values
    in the order of REGISTER_NAMES; without one the snapshot is all zeros.
    """

    def __init__(self, register_source: Callable[[], Iterable[int]] | None = None) -> None:
        self._register_source = register_source
        self._buffer: deque[str] = deque()
        self.shift = False
        self.caps_lock = False
        self.ctrl = False
        self._registers: tuple[int, ...] | None = None

    def _update_flags(self, scancode: int) -> None:
        if scancode == CTRL_L:
            self.ctrl = True
        elif scancode == CTRL_L_RELEASE:
            self.ctrl = False
        elif scancode in (SHIFT_L, SHIFT_R):
            self.shift = True
        elif scancode in (SHIFT_L + RELEASE_OFFSET, SHIFT_R + RELEASE_OFFSET):
            self.shift = False
        elif scancode == CAPSLOCK:
            self.caps_lock = not self.caps_lock

    def _capture_registers(self) -> None:
        if self._register_source is None:
            values = (0,) * REGISTERS_CANT
        else:
            values = tuple(self._register_source())[:REGISTERS_CANT]
            if len(values) < REGISTERS_CANT:
                raise ValueError(f"register source must supply {REGISTERS_CANT} values")
        self._registers = values

    def handle_scancode(self, scancode: int) -> None:
        """Process one scancode as the keyboard interrupt would."""
        self._update_flags(scancode)
        character = scancode_to_ascii(scancode, self.shift, self.caps_lock)
        if self.ctrl and character in ("r", "R"):
            self._capture_registers()
        elif character is not None and len(self._buffer) < BUFFER_SIZE:
            self._buffer.append(character)

    def getchar(self) -> str | None:
        """Pop the oldest buffered character, or None if the buffer is empty."""
        return self._buffer.popleft() if self._buffer else None

    def registers(self) -> tuple[int, ...] | None:
        """Return the last register snapshot, or None if none was taken."""
        return self._registers