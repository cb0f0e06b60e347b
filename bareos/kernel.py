"""System calls and interrupt dispatch tying the drivers together."""

from __future__ import annotations

from enum import IntEnum

from .audio import PcSpeaker
from .keyboard import REGISTERS_CANT, Keyboard
from .timer import TICK_HZ, RealTimeClock, Timer
from .video import BACKGROUND_COLOR, FOREGROUND_COLOR, VideoDriver

STDIN = 0
STDOUT = 1
MIN_FONT_SCALE = 1
MAX_FONT_SCALE = 5

TIMER_IRQ = 0
KEYBOARD_IRQ = 1


class Syscall(IntEnum):
    READ = 0
    WRITE = 1
    GET_TIME = 2
    GET_REGISTERS = 3
    CLEAR_SCREEN = 4
    BEEP = 5
    SLEEP = 6
    SET_FONT_SCALE = 7


class Kernel:
    """The kernel's system-call and interrupt entry points.

    ``idle`` is called while sleeping, in place of halting until the next
    interrupt; by default it delivers one timer interrupt.
    """

    def __init__(
        self,
        keyboard: Keyboard,
        video: VideoDriver,
        speaker: PcSpeaker,
        timer: Timer,
        rtc: RealTimeClock,
    ) -> None:
        self.keyboard = keyboard
        self.video = video
        self.speaker = speaker
        self.timer = timer
        self.rtc = rtc
        self.idle = lambda: self.irq(TIMER_IRQ)
        self._handlers = {
            Syscall.READ: self.read,
            Syscall.WRITE: self.write,
            Syscall.GET_TIME: self.get_time,
            Syscall.GET_REGISTERS: self.get_registers,
            Syscall.CLEAR_SCREEN: self.clear_screen,
            Syscall.BEEP: self.beep,
            Syscall.SLEEP: self.sleep,
            Syscall.SET_FONT_SCALE: self.set_font_scale,
        }

    def read(self, fd: int, count: int) -> str:
        """Take up to ``count`` buffered keys, stopping after a newline."""
        if fd != STDIN or count <= 0:
            return ""
        chars: list[str] = []
        while len(chars) < count:
            character = self.keyboard.getchar()
            if character is None:
                break
            chars.append(character)
            if character == "\n":
                break
        return "".join(chars)

    def write(self, fd: int, data: str) -> int:
        """Draw ``data`` on the screen; return how many characters were written."""
        if fd != STDOUT:
            return 0
        for character in data:
            self.video.put_char(character, FOREGROUND_COLOR, BACKGROUND_COLOR)
        return len(data)

    def get_time(self, register: int) -> int:
        return self.rtc.get(register & 0xFF)

    def get_registers(self) -> tuple[int, ...]:
        """Return the last register snapshot, or zeros if none was taken."""
        snapshot = self.keyboard.registers()
        return snapshot if snapshot is not None else (0,) * REGISTERS_CANT

    def clear_screen(self) -> None:
        self.video.clear_screen()

    def beep(self, frequency: int, duration: int) -> None:
        self.speaker.play(frequency)
        self.sleep(duration)
        self.speaker.stop()

    def sleep(self, duration: int) -> None:
        """Wait ``duration`` milliseconds, rounded up to whole timer ticks."""
        target = self.timer.ticks_elapsed() + (duration * TICK_HZ + 999) // 1000
        while self.timer.ticks_elapsed() < target:
            self.idle()

    def set_font_scale(self, scale: int) -> None:
        if not MIN_FONT_SCALE <= scale <= MAX_FONT_SCALE:
            raise ValueError(
                f"font scale must be between {MIN_FONT_SCALE} and {MAX_FONT_SCALE}"
            )
        self.video.set_font_scale(scale)

    def dispatch(self, number: int, *args):
        """Run system call ``number``; unknown numbers return None."""
        try:
            handler = self._handlers[Syscall(number)]
        except ValueError:
            return None
        return handler(*args)

    def irq(self, number: int, scancode: int | None = None) -> None:
        """Handle a hardware interrupt; the keyboard one needs its scancode."""
        if number == TIMER_IRQ:
            self.timer.tick()
        elif number == KEYBOARD_IRQ:
            if scancode is None:
                raise ValueError("keyboard interrupt needs a scancode")
            self.keyboard.handle_scancode(scancode)