import struct

import pytest

from bareos.console import NaiveConsole, to_base
from bareos.modules import ModuleFormatError, load_modules
from bareos.packer import build_image

CODE = 0x400000
DATA = 0x500000


def _payload(*modules):
    body = struct.pack("<I", len(modules))
    for module in modules:
        body += struct.pack("<I", len(module)) + module
    return body


def test_load_two_modules():
    result = load_modules(_payload(b"abc", b"x"), [CODE, DATA])
    assert result == {CODE: b"abc", DATA: b"x"}
    assert list(result) == [CODE, DATA]


def test_load_empty_payload():
    assert load_modules(_payload(), [CODE]) == {}


def test_extra_addresses_unused():
    assert load_modules(_payload(b"q"), [CODE, DATA]) == {CODE: b"q"}


def test_too_few_addresses():
    with pytest.raises(ModuleFormatError):
        load_modules(_payload(b"a", b"b"), [CODE])


def test_truncated_module():
    payload = _payload(b"abcdef")[:-2]
    with pytest.raises(ModuleFormatError):
        load_modules(payload, [CODE])


def test_truncated_count():
    with pytest.raises(ModuleFormatError):
        load_modules(b"\x01\x00", [CODE])


def test_console_report():
    console = NaiveConsole(120, 5)
    load_modules(_payload(b"abc"), [CODE], console)
    first = console.lines()[0]
    assert "Will copy module at 0x" in first
    assert "to 0x" + to_base(CODE, 16) in first
    assert first.rstrip().endswith("[Done]")
    assert console.cursor == 120


def test_round_trip_with_packer(tmp_path):
    kernel = tmp_path / "kernel.bin"
    kernel.write_bytes(b"KERN")
    code = tmp_path / "code.bin"
    code.write_bytes(b"\x90\x90\xc3")
    data = tmp_path / "data.bin"
    data.write_bytes(b"This is sample data.\0")
    out = tmp_path / "packed.bin"
    build_image([kernel, code, data], out)
    payload = out.read_bytes()[len(b"KERN"):]
    assert load_modules(payload, [CODE, DATA]) == {
        CODE: code.read_bytes(),
        DATA: data.read_bytes(),
    }