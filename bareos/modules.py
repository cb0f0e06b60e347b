"""Loading of modules appended after the kernel image."""

from __future__ import annotations

import struct
from typing import Sequence

from .console import NaiveConsole

_U32 = struct.Struct("<I")


class ModuleFormatError(Exception):
    """Raised when a module payload is malformed."""


def _read_u32(view: memoryview, offset: int) -> int:
    if offset + _U32.size > len(view):
        raise ModuleFormatError(f"payload truncated at offset {offset}")
    return _U32.unpack_from(view, offset)[0]


def load_modules(
    payload: bytes, addresses: Sequence[int], console: NaiveConsole | None = None
) -> dict[int, bytes]:
    """Split a module payload into its modules, keyed by target address.

    The payload holds a 32-bit module count followed by each module as a
    32-bit size and its bytes. Offsets reported on the console are relative
    to the start of the payload.
    """
    view = memoryview(bytes(payload))
    count = _read_u32(view, 0)
    offset = _U32.size
    if count > len(addresses):
        raise ModuleFormatError(
            f"payload holds {count} modules but only {len(addresses)} addresses were given"
        )
    loaded: dict[int, bytes] = {}
    for address in addresses[:count]:
        size = _read_u32(view, offset)
        offset += _U32.size
        if offset + size > len(view):
            raise ModuleFormatError(f"module at offset {offset} is truncated")
        if console is not None:
            console.print("  Will copy module at 0x")
            console.print_hex(offset)
            console.print(" to 0x")
            console.print_hex(address)
            console.print(" (")
            console.print_dec(size)
            console.print(" bytes)")
        loaded[address] = bytes(view[offset : offset + size])
        offset += size
        if console is not None:
            console.print(" [Done]")
            console.newline()
    return loaded