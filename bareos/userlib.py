"""User-space C-style library built on the kernel's system calls."""

from __future__ import annotations

from .timer import RtcRegister

STDIN = 0
STDOUT = 1
BUFFER_SIZE = 256

_BLANKS = " \t"
_LEADING_SPACE = " \t\n"
_LINE_END = "\n\0"
_REST_OF_LINE = "[^\\n]"
_MAX_NUMBER_LENGTH = 31


def _is_digit(character: str) -> bool:
    return "0" <= character <= "9"


def atoi(text: str) -> int:
    """Parse a leading decimal integer; text with no digits gives 0."""
    index = 0
    while index < len(text) and text[index] in _LEADING_SPACE:
        index += 1
    sign = 1
    if index < len(text) and text[index] in "+-":
        sign = -1 if text[index] == "-" else 1
        index += 1
    result = 0
    while index < len(text) and _is_digit(text[index]):
        result = result * 10 + int(text[index])
        index += 1
    return sign * result


def _skip_blanks(text: str, pos: int) -> int:
    while text[pos] in _BLANKS:
        pos += 1
    return pos


def _take_line(text: str, pos: int) -> tuple[int, str]:
    end = pos
    while text[end] not in _LINE_END:
        end += 1
    return end, text[pos:end]


class UserLib:
    """Console I/O and helpers for user programs.

    ``system`` provides the system calls: ``read(fd, count)`` returning a
    string, ``write(fd, data)``, ``get_time(register)``, ``clear_screen()``
    and ``set_font_scale(scale)``.
    """

    def __init__(self, system) -> None:
        self.system = system

    def _read_char(self, fd: int) -> str:
        while True:
            character = self.system.read(fd, 1)
            if character:
                return character

    def putchar(self, character: str) -> None:
        self.system.write(STDOUT, character)

    def getchar(self) -> str:
        """Wait for and return one character from standard input."""
        return self._read_char(STDIN)

    def fgets(self, n: int, fd: int = STDIN) -> str | None:
        """Read at most ``n - 1`` characters, stopping after a newline."""
        if n <= 0:
            return None
        chars: list[str] = []
        while len(chars) < n - 1:
            character = self._read_char(fd)
            chars.append(character)
            if character == "\n":
                break
        return "".join(chars)

    def printf(self, fmt: str, *args) -> int:
        """Print with %s, %d and %c conversions; return the characters written."""
        values = iter(args)
        pieces: list[str] = []
        chars = iter(fmt)
        for character in chars:
            if character != "%":
                pieces.append(character)
                continue
            spec = next(chars, None)
            if spec is None:
                pieces.append("%")
                break
            if spec not in ("s", "d", "c"):
                pieces.append("%" + spec)
                continue
            try:
                value = next(values)
            except StopIteration:
                raise TypeError("not enough arguments for format string") from None
            if spec == "s":
                pieces.append(str(value).split("\0", 1)[0])
            elif spec == "d":
                pieces.append(str(int(value)))
            elif isinstance(value, int):
                pieces.append(chr(value & 0xFF))
            else:
                pieces.append(str(value)[:1])
        text = "".join(pieces)
        for character in text:
            self.putchar(character)
        return len(text)

    def scanf(self, fmt: str) -> list:
        """Read one line and convert it by ``fmt``; return the converted values.

        Supports %d, %c, %s and %[^\\n]; %s and %[^\\n] take the rest of the line.
        """
        text = self.fgets(BUFFER_SIZE, STDIN) + "\0"
        values: list = []
        pos = 0
        i = 0
        while i < len(fmt):
            character = fmt[i]
            if character in _LEADING_SPACE:
                pos = _skip_blanks(text, pos)
                i += 1
                continue
            if text[pos] in _LINE_END:
                break
            if character == "%":
                i += 1
                if fmt.startswith(_REST_OF_LINE, i):
                    i += len(_REST_OF_LINE)
                    pos, value = _take_line(text, pos)
                    if value:
                        values.append(value)
                    continue
                spec = fmt[i] if i < len(fmt) else ""
                if spec == "s":
                    pos, value = _take_line(text, pos)
                    if value:
                        values.append(value)
                elif spec == "d":
                    pos = _skip_blanks(text, pos)
                    start = pos
                    if text[pos] in "+-":
                        pos += 1
                    if _is_digit(text[pos]):
                        while _is_digit(text[pos]):
                            pos += 1
                        values.append(atoi(text[start:pos][:_MAX_NUMBER_LENGTH]))
                        pos = _skip_blanks(text, pos)
                elif spec == "c":
                    if text[pos] != "\0":
                        values.append(text[pos])
                        pos += 1
            elif text[pos] == character:
                pos += 1
            else:
                break
            if text[pos] in _LINE_END:
                break
            i += 1
        return values

    def clear_screen(self) -> None:
        self.system.clear_screen()

    def get_time(self) -> str:
        """Return the clock time as HH:MM:SS."""
        hours = self.system.get_time(RtcRegister.HOURS)
        minutes = self.system.get_time(RtcRegister.MINUTES)
        seconds = self.system.get_time(RtcRegister.SECONDS)
        return f"{hours:02d}:{minutes:02d}:{seconds:02d}"

    def set_font_scale(self, scale: int) -> None:
        self.system.set_font_scale(scale)