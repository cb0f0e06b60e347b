import pytest

from bareos.timer import TICK_HZ, RealTimeClock, RtcRegister, Timer, bcd_to_binary


def test_timer_starts_at_zero():
    timer = Timer()
    assert timer.ticks_elapsed() == 0
    assert timer.seconds_elapsed() == 0


def test_timer_counts_ticks_and_seconds():
    timer = Timer()
    for _ in range(TICK_HZ * 2 + 5):
        timer.tick()
    assert timer.ticks_elapsed() == TICK_HZ * 2 + 5
    assert timer.seconds_elapsed() == 2


@pytest.mark.parametrize("number", range(100))
def test_bcd_round_trip(number):
    assert bcd_to_binary(int(str(number), 16)) == number


def test_bcd_masks_to_byte():
    assert bcd_to_binary(0x159) == bcd_to_binary(0x59)


def test_rtc_decodes_register():
    seen = []

    def reader(register):
        seen.append(register)
        return 0x45

    clock = RealTimeClock(reader)
    assert clock.get(RtcRegister.MINUTES) == 45
    assert seen == [RtcRegister.MINUTES]


@pytest.mark.parametrize("register", [0x01, 0x03, 0x05, 0x0A, 0xFF])
def test_rtc_invalid_register(register):
    calls = []
    clock = RealTimeClock(lambda r: calls.append(r) or 0x12)
    assert clock.get(register) == 0
    assert calls == []


def test_rtc_accepts_plain_int():
    clock = RealTimeClock(lambda r: 0x23)
    assert clock.get(0x04) == clock.get(RtcRegister.HOURS)