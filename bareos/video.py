"""Linear framebuffer text output using the 8x16 bitmap font."""

from __future__ import annotations

from .font import FONT_HEIGHT, FONT_WIDTH, glyph

BACKGROUND_COLOR = 0x000000
FOREGROUND_COLOR = 0xFFFFFF

TAB_WIDTH = 8


class Framebuffer:
    """A block of pixel memory laid out row by row, low colour byte first."""

    def __init__(self, width: int = 1024, height: int = 768, bpp: int = 24) -> None:
        if width < 1 or height < 1:
            raise ValueError("framebuffer dimensions must be positive")
        if bpp not in (24, 32):
            raise ValueError("bits per pixel must be 24 or 32")
        self.width = width
        self.height = height
        self.bpp = bpp
        self.bytes_per_pixel = bpp // 8
        self.pitch = width * self.bytes_per_pixel
        self.data = bytearray(self.pitch * height)

    def offset(self, x: int, y: int) -> int:
        return x * self.bytes_per_pixel + y * self.pitch

    def pixel(self, x: int, y: int) -> int:
        """Return the 24-bit colour stored at (x, y)."""
        if not (0 <= x < self.width and 0 <= y < self.height):
            raise IndexError(f"pixel ({x}, {y}) is outside the framebuffer")
        start = self.offset(x, y)
        return int.from_bytes(self.data[start : start + 3], "little")


class VideoDriver:
    """Draws text on a framebuffer and keeps a text cursor in pixel units."""

    def __init__(self, framebuffer: Framebuffer) -> None:
        self.framebuffer = framebuffer
        self.cursor_x = 0
        self.cursor_y = 0
        self.font_scale = 1
        self._special = {"\n": self.new_line, "\b": self.back_space, "\t": self.tab}

    @property
    def _cell_width(self) -> int:
        return FONT_WIDTH * self.font_scale

    @property
    def _cell_height(self) -> int:
        return FONT_HEIGHT * self.font_scale

    def put_pixel(self, color: int, x: int, y: int) -> None:
        """Store the low three bytes of ``color`` at (x, y); writes past the end are dropped."""
        fb = self.framebuffer
        start = fb.offset(x, y)
        if 0 <= start and start + 3 <= len(fb.data):
            fb.data[start : start + 3] = (color & 0xFFFFFF).to_bytes(3, "little")

    def _fill(self, x: int, y: int, width: int, height: int, color: int) -> None:
        for dy in range(height):
            for dx in range(width):
                self.put_pixel(color, x + dx, y + dy)

    def _fill_rows(self, first: int, last: int, color: int) -> None:
        fb = self.framebuffer
        step = fb.bytes_per_pixel
        channels = (color & 0xFFFFFF).to_bytes(3, "little")
        for y in range(max(first, 0), min(last, fb.height)):
            row = y * fb.pitch
            end = row + fb.width * step
            for channel, value in enumerate(channels):
                fb.data[row + channel : end : step] = bytes([value]) * fb.width

    def set_font_scale(self, scale: int) -> None:
        self.font_scale = max(scale, 1)
        fb = self.framebuffer
        if self.cursor_x >= fb.width:
            self.cursor_x = 0
            self.cursor_y += self._cell_height
        if self.cursor_y >= fb.height:
            self._scroll_up()
            self.cursor_y = fb.height - self._cell_height

    def put_char(
        self, character: str, foreground: int = FOREGROUND_COLOR, background: int = BACKGROUND_COLOR
    ) -> None:
        """Draw one character at the cursor; newline, backspace and tab move the cursor."""
        handler = self._special.get(character)
        if handler is not None:
            handler()
            return
        scale = self.font_scale
        for y, bits in enumerate(glyph(ord(character) & 0xFF)):
            for x in range(FONT_WIDTH):
                color = foreground if bits & (0x80 >> x) else background
                self._fill(self.cursor_x + x * scale, self.cursor_y + y * scale, scale, scale, color)
        self.cursor_x += self._cell_width
        if self.cursor_x >= self.framebuffer.width:
            self.new_line()

    def put_string(
        self, text: str, foreground: int = FOREGROUND_COLOR, background: int = BACKGROUND_COLOR
    ) -> None:
        for character in text.split("\0", 1)[0]:
            self.put_char(character, foreground, background)

    def clear_screen(self) -> None:
        self._fill_rows(0, self.framebuffer.height, BACKGROUND_COLOR)
        self.cursor_x = 0
        self.cursor_y = 0

    def new_line(self) -> None:
        self.cursor_x = 0
        height = self.framebuffer.height
        if self.cursor_y + self._cell_height < height:
            self.cursor_y += self._cell_height
        else:
            self._scroll_up()
            self.cursor_y = height - self._cell_height

    def back_space(self) -> None:
        """Step back one cell, wrapping to the previous line, and erase it."""
        if self.cursor_x >= self._cell_width:
            self.cursor_x -= self._cell_width
        elif self.cursor_y >= self._cell_height:
            self.cursor_y -= self._cell_height
            self.cursor_x = self.framebuffer.width - self._cell_width
        else:
            return
        self._fill(self.cursor_x, self.cursor_y, self._cell_width, self._cell_height, BACKGROUND_COLOR)

    def tab(self) -> None:
        step = self._cell_width * TAB_WIDTH
        self.cursor_x = (self.cursor_x // step + 1) * step
        if self.cursor_x >= self.framebuffer.width:
            self.new_line()

    def move_cursor_left(self) -> None:
        if self.cursor_x >= self._cell_width:
            self.cursor_x -= self._cell_width
        elif self.cursor_y >= self._cell_height:
            self.cursor_y -= self._cell_height
            self.cursor_x = self.framebuffer.width - self._cell_width

    def move_cursor_right(self) -> None:
        fb = self.framebuffer
        if self.cursor_x + self._cell_width < fb.width:
            self.cursor_x += self._cell_width
        elif self.cursor_y + self._cell_height < fb.height:
            self.cursor_x = 0
            self.cursor_y += self._cell_height

    def move_cursor_up(self) -> None:
        if self.cursor_y >= self._cell_height:
            self.cursor_y -= self._cell_height

    def move_cursor_down(self) -> None:
        if self.cursor_y + self._cell_height < self.framebuffer.height:
            self.cursor_y += self._cell_height

    def draw_cursor(self, color: int) -> None:
        """Draw an underline two pixels above the bottom of the cursor cell."""
        y = self.cursor_y + self._cell_height - 2
        for x in range(self._cell_width):
            self.put_pixel(color, self.cursor_x + x, y)

    def _scroll_up(self) -> None:
        fb = self.framebuffer
        shift = self._cell_height * fb.pitch
        move = (fb.height - self._cell_height) * fb.pitch
        if move > 0:
            fb.data[0:move] = fb.data[shift : shift + move]
        self._fill_rows(fb.height - self._cell_height, fb.height, BACKGROUND_COLOR)