import pytest

from bareos.keyboard import (
    BUFFER_SIZE,
    CAPSLOCK,
    CTRL_L,
    CTRL_L_RELEASE,
    KEY_ARROW_DOWN,
    KEY_ARROW_UP,
    RELEASE_OFFSET,
    REGISTERS_CANT,
    SC_DOWN,
    SC_UP,
    SHIFT_L,
    SHIFT_R,
    Keyboard,
    scancode_to_ascii,
)

A_KEY = 0x1E
ONE_KEY = 0x02
R_KEY = 0x13


def test_plain_letter():
    assert scancode_to_ascii(A_KEY) == "a"


def test_shift_letter_and_digit():
    assert scancode_to_ascii(A_KEY, shift=True) == scancode_to_ascii(A_KEY).upper()
    assert scancode_to_ascii(ONE_KEY, shift=True) == "!"


def test_caps_lock_only_letters():
    assert scancode_to_ascii(A_KEY, caps_lock=True) == scancode_to_ascii(A_KEY, shift=True)
    assert scancode_to_ascii(ONE_KEY, caps_lock=True) == scancode_to_ascii(ONE_KEY)


def test_arrows():
    assert scancode_to_ascii(SC_UP) == KEY_ARROW_UP
    assert scancode_to_ascii(SC_DOWN, shift=True) == KEY_ARROW_DOWN


@pytest.mark.parametrize("scancode", [0x00, CTRL_L, SHIFT_L, SHIFT_R, A_KEY + RELEASE_OFFSET, 0x60])
def test_no_character(scancode):
    assert scancode_to_ascii(scancode) is None


def test_buffer_fifo():
    keyboard = Keyboard()
    keyboard.handle_scancode(A_KEY)
    keyboard.handle_scancode(ONE_KEY)
    assert keyboard.getchar() == scancode_to_ascii(A_KEY)
    assert keyboard.getchar() == scancode_to_ascii(ONE_KEY)
    assert keyboard.getchar() is None


def test_shift_press_release():
    keyboard = Keyboard()
    keyboard.handle_scancode(SHIFT_L)
    keyboard.handle_scancode(A_KEY)
    keyboard.handle_scancode(SHIFT_L + RELEASE_OFFSET)
    keyboard.handle_scancode(A_KEY)
    assert [keyboard.getchar(), keyboard.getchar()] == ["A", "a"]


def test_caps_lock_toggles():
    keyboard = Keyboard()
    keyboard.handle_scancode(CAPSLOCK)
    assert keyboard.caps_lock
    keyboard.handle_scancode(CAPSLOCK)
    assert not keyboard.caps_lock


def test_buffer_drops_when_full():
    keyboard = Keyboard()
    for _ in range(BUFFER_SIZE + 10):
        keyboard.handle_scancode(A_KEY)
    drained = []
    while (character := keyboard.getchar()) is not None:
        drained.append(character)
    assert len(drained) == BUFFER_SIZE


def test_ctrl_r_captures_registers():
    values = list(range(100, 100 + REGISTERS_CANT))
    keyboard = Keyboard(lambda: values)
    assert keyboard.registers() is None
    keyboard.handle_scancode(CTRL_L)
    keyboard.handle_scancode(R_KEY)
    assert keyboard.registers() == tuple(values)
    assert keyboard.getchar() is None


def test_ctrl_release_types_r_again():
    keyboard = Keyboard()
    keyboard.handle_scancode(CTRL_L)
    keyboard.handle_scancode(CTRL_L_RELEASE)
    keyboard.handle_scancode(R_KEY)
    assert keyboard.getchar() == scancode_to_ascii(R_KEY)
    assert keyboard.registers() is None


def test_default_register_snapshot_is_zero():
    keyboard = Keyboard()
    keyboard.handle_scancode(CTRL_L)
    keyboard.handle_scancode(R_KEY)
    assert keyboard.registers() == (0,) * REGISTERS_CANT


def test_short_register_source_rejected():
    keyboard = Keyboard(lambda: [1, 2, 3])
    keyboard.handle_scancode(CTRL_L)
    with pytest.raises(ValueError):
        keyboard.handle_scancode(R_KEY)