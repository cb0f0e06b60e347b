from collections import deque

import pytest

from bareos.audio import PcSpeaker
from bareos.kernel import Kernel
from bareos.keyboard import Keyboard
from bareos.timer import RealTimeClock, RtcRegister, Timer
from bareos.userlib import BUFFER_SIZE, UserLib, atoi
from bareos.video import Framebuffer, VideoDriver


class FakeSystem:
    def __init__(self, keys="", empty_reads=0):
        self.pending = deque(keys)
        self.empty_reads = empty_reads
        self.output = []
        self.cleared = 0
        self.scale = None
        self.clock = {RtcRegister.HOURS: 14, RtcRegister.MINUTES: 30, RtcRegister.SECONDS: 45}

    def read(self, fd, count):
        if self.empty_reads:
            self.empty_reads -= 1
            return ""
        if not self.pending:
            raise EOFError("no more input")
        taken = []
        while self.pending and len(taken) < count:
            taken.append(self.pending.popleft())
        return "".join(taken)

    def write(self, fd, data):
        if fd == 1:
            self.output.append(data)
        return len(data)

    def get_time(self, register):
        return self.clock[register]

    def clear_screen(self):
        self.cleared += 1

    def set_font_scale(self, scale):
        self.scale = scale

    @property
    def text(self):
        return "".join(self.output)


@pytest.mark.parametrize(
    "text, expected",
    [("  -42abc", -42), ("+7", 7), ("abc", 0), ("\t\n12", 12), ("", 0)],
)
def test_atoi(text, expected):
    assert atoi(text) == expected


def test_putchar_writes_to_stdout():
    system = FakeSystem()
    UserLib(system).putchar("z")
    assert system.output == ["z"]


def test_getchar_waits_through_empty_reads():
    system = FakeSystem("q", empty_reads=3)
    assert UserLib(system).getchar() == "q"
    assert system.empty_reads == 0


def test_fgets_stops_after_newline():
    system = FakeSystem("abc\ndef")
    lib = UserLib(system)
    assert lib.fgets(10, 0) == "abc\n"
    assert "".join(system.pending) == "def"


def test_fgets_limits_length():
    lib = UserLib(FakeSystem("abcdef"))
    assert lib.fgets(3, 0) == "ab"


def test_fgets_rejects_non_positive_size():
    assert UserLib(FakeSystem("x")).fgets(0, 0) is None


def test_printf_conversions():
    system = FakeSystem()
    count = UserLib(system).printf("%s-%d-%c", "ab", -15, "x")
    assert system.text == "ab--15-x"
    assert count == len(system.text)


def test_printf_zero_and_unknown_spec():
    system = FakeSystem()
    lib = UserLib(system)
    lib.printf("%d", 0)
    lib.printf("%q")
    assert system.text == "0%q"


def test_printf_character_from_int():
    system = FakeSystem()
    UserLib(system).printf("%c", ord("A"))
    assert system.text == "A"


def test_printf_missing_argument():
    with pytest.raises(TypeError):
        UserLib(FakeSystem()).printf("%d")


@pytest.mark.parametrize(
    "fmt, line, expected",
    [
        ("%d", "  12 \n", [12]),
        ("%d %d", "3 4\n", [3, 4]),
        ("%d", "-7\n", [-7]),
        ("%s", "hello world\n", ["hello world"]),
        ("%c", "xyz\n", ["x"]),
        ("%d", "abc\n", []),
        ("a%d", "b5\n", []),
        ("a%d", "a5\n", [5]),
        ("%[^\\n]", "two words\n", ["two words"]),
    ],
)
def test_scanf(fmt, line, expected):
    assert UserLib(FakeSystem(line)).scanf(fmt) == expected


def test_scanf_reads_at_most_a_buffer():
    system = FakeSystem("9" * (BUFFER_SIZE + 10))
    UserLib(system).scanf("%s")
    assert len(system.pending) == 11


def test_get_time_format():
    assert UserLib(FakeSystem()).get_time() == "14:30:45"


def test_clear_and_font_scale_delegate():
    system = FakeSystem()
    lib = UserLib(system)
    lib.clear_screen()
    lib.set_font_scale(2)
    assert system.cleared == 1
    assert system.scale == 2


def test_with_kernel_keyboard():
    keyboard = Keyboard()
    kernel = Kernel(
        keyboard,
        VideoDriver(Framebuffer(64, 32)),
        PcSpeaker(),
        Timer(),
        RealTimeClock(lambda register: 0),
    )
    for scancode in (0x23, 0x17, 0x1C):
        kernel.irq(1, scancode)
    assert UserLib(kernel).fgets(10, 0) == "hi\n"