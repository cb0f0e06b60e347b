"""A text-mode console that writes characters into a grid of cells."""

from __future__ import annotations

_DIGITS = "0123456789ABCDEFGHIJKLMNOPQRSTUVWXYZ"
_U64 = 2**64


def to_base(value: int, base: int) -> str:
    """Render an unsigned 64-bit value in ``base`` with upper-case digits."""
    if not 2 <= base <= len(_DIGITS):
        raise ValueError(f"base must be between 2 and {len(_DIGITS)}")
    value %= _U64
    digits = []
    while True:
        value, remainder = divmod(value, base)
        digits.append(_DIGITS[remainder])
        if not value:
            break
    return "".join(reversed(digits))


class NaiveConsole:
    """Sequential character output with no scrolling.

    Characters written past the last cell are dropped but still advance the cursor.
    """

    def __init__(self, width: int = 80, height: int = 25) -> None:
        if width < 1 or height < 1:
            raise ValueError("console dimensions must be positive")
        self.width = width
        self.height = height
        self._cells = [" "] * (width * height)
        self.cursor = 0

    def print(self, text: str) -> None:
        for character in text.split("\0", 1)[0]:
            self.print_char(character)

    def print_char(self, character: str) -> None:
        if self.cursor < len(self._cells):
            self._cells[self.cursor] = character
        self.cursor += 1

    def newline(self) -> None:
        """Pad with spaces up to the start of the next row."""
        self.print_char(" ")
        while self.cursor % self.width:
            self.print_char(" ")

    def print_dec(self, value: int) -> None:
        self.print_base(value, 10)

    def print_hex(self, value: int) -> None:
        self.print_base(value, 16)

    def print_bin(self, value: int) -> None:
        self.print_base(value, 2)

    def print_base(self, value: int, base: int) -> None:
        self.print(to_base(value, base))

    def clear(self) -> None:
        self._cells = [" "] * (self.width * self.height)
        self.cursor = 0

    def lines(self) -> list[str]:
        """Return the screen contents, one string per row."""
        return [
            "".join(self._cells[row * self.width : (row + 1) * self.width])
            for row in range(self.height)
        ]