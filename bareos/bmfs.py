"""BareMetal File System (BMFS) disk images: layout, directory and file operations."""

from __future__ import annotations

import shutil
import struct
from contextlib import ExitStack
from dataclasses import dataclass
from pathlib import Path
from typing import BinaryIO, Iterator

MIB = 1024 * 1024
BLOCK_SIZE = 2 * MIB
MINIMUM_DISK_SIZE = 6 * MIB

DISK_INFO_OFFSET = 1024
DISK_INFO_SIZE = 512
DIRECTORY_OFFSET = 4096
DIRECTORY_SIZE = 4096
ENTRY_SIZE = 64
MAX_ENTRIES = DIRECTORY_SIZE // ENTRY_SIZE
FILE_SIZE_FIELD = 48
BOOT_OFFSET = 8192
MBR_SIZE = 512
FS_TAG = b"BMFS"

_FILL_CHUNK = 50 * 1024
_ENTRY_FORMAT = struct.Struct("<32sQQQQ")
_UNITS = {"K": 1, "M": 2, "G": 3, "T": 4, "P": 5}
_U64_LIMIT = 2**64

END_MARKER = 0x00
DELETED_MARKER = 0x01


class BmfsError(Exception):
    """Raised when a BMFS operation cannot be carried out."""


@dataclass(frozen=True)
class DirectoryEntry:
    """One 64-byte record of the BMFS directory."""

    name: str
    starting_block: int = 0
    reserved_blocks: int = 0
    file_size: int = 0
    unused: int = 0

    @property
    def is_end(self) -> bool:
        return self.name == ""

    @property
    def is_deleted(self) -> bool:
        return self.name.startswith(chr(DELETED_MARKER))

    def pack(self) -> bytes:
        raw_name = self.name.encode("latin-1")
        if len(raw_name) > 32:
            raise ValueError("file name longer than 32 bytes")
        return _ENTRY_FORMAT.pack(
            raw_name, self.starting_block, self.reserved_blocks, self.file_size, self.unused
        )

    @classmethod
    def unpack(cls, data: bytes) -> "DirectoryEntry":
        if len(data) != ENTRY_SIZE:
            raise ValueError(f"directory entry must be {ENTRY_SIZE} bytes")
        raw_name, start, reserved, size, unused = _ENTRY_FORMAT.unpack(bytes(data))
        name = raw_name.split(b"\0", 1)[0].decode("latin-1")
        return cls(name, start, reserved, size, unused)


def _format_area(handle: BinaryIO) -> tuple[bytearray, bytearray]:
    info = bytearray(DISK_INFO_SIZE)
    info[: len(FS_TAG)] = FS_TAG
    directory = bytearray(DIRECTORY_SIZE)
    handle.seek(DISK_INFO_OFFSET)
    handle.write(info)
    handle.seek(DIRECTORY_OFFSET)
    handle.write(directory)
    handle.flush()
    return info, directory


class BmfsDisk:
    """An open BMFS disk image."""

    def __init__(self, path) -> None:
        self.path = path
        try:
            self._handle: BinaryIO = open(path, "r+b")
        except OSError as exc:
            raise BmfsError(f"Unable to open disk '{path}'") from exc
        self._handle.seek(0, 2)
        self.disk_size_mib = self._handle.tell() // MIB
        self._info = bytearray(self._read_at(DISK_INFO_OFFSET, DISK_INFO_SIZE))
        self._directory = bytearray(self._read_at(DIRECTORY_OFFSET, DIRECTORY_SIZE))

    def _read_at(self, offset: int, size: int) -> bytes:
        self._handle.seek(offset)
        return self._handle.read(size).ljust(size, b"\0")

    def __enter__(self) -> "BmfsDisk":
        return self

    def __exit__(self, *args) -> None:
        self.close()

    def close(self) -> None:
        self._handle.close()

    @property
    def is_formatted(self) -> bool:
        tag = bytes(self._info).split(b"\0", 1)[0]
        return tag.upper() == FS_TAG

    def _require_formatted(self) -> None:
        if not self.is_formatted:
            raise BmfsError("Not a valid BMFS drive (Disk is not BMFS formatted).")

    def _raw_entries(self) -> list[DirectoryEntry]:
        return [
            DirectoryEntry.unpack(self._directory[offset : offset + ENTRY_SIZE])
            for offset in range(0, DIRECTORY_SIZE, ENTRY_SIZE)
        ]

    def _live_slots(self) -> Iterator[tuple[int, DirectoryEntry]]:
        for slot, entry in enumerate(self._raw_entries()):
            if entry.is_end:
                return
            if not entry.is_deleted:
                yield slot, entry

    def _flush_directory(self) -> None:
        self._handle.seek(DIRECTORY_OFFSET)
        self._handle.write(self._directory)
        self._handle.flush()

    def entries(self) -> list[DirectoryEntry]:
        """Return the files on the disk in directory order."""
        self._require_formatted()
        return [entry for _, entry in self._live_slots()]

    def find(self, name: str) -> tuple[int, DirectoryEntry] | None:
        """Return (slot, entry) for the named file, or None."""
        self._require_formatted()
        return next(((slot, e) for slot, e in self._live_slots() if e.name == name), None)

    def format(self) -> None:
        """Write an empty BMFS disk header and directory."""
        self._info, self._directory = _format_area(self._handle)

    def create(self, name: str, max_size_mib: int) -> DirectoryEntry:
        """Reserve space for a new file of at most max_size_mib MiB."""
        self._require_formatted()
        if max_size_mib < 1:
            raise BmfsError("Invalid file size.")
        raw_name = name.encode("latin-1")
        if not raw_name or len(raw_name) >= 32 or b"\0" in raw_name or raw_name[0] == DELETED_MARKER:
            raise BmfsError(f"Invalid file name '{name}'.")
        if max_size_mib % 2:
            max_size_mib += 1
        if self.find(name) is not None:
            raise BmfsError("File already exists.")

        requested = max_size_mib // 2
        num_blocks = self.disk_size_mib // 2
        entries = self._raw_entries()

        used = 0
        first_free = None
        for slot, entry in enumerate(entries):
            if entry.is_end:
                used = slot
                if first_free is None:
                    first_free = slot
                break
            if entry.is_deleted and first_free is None:
                first_free = slot
        if first_free is None:
            raise BmfsError("Cannot create file: no free directory entries.")

        ordered = sorted(entries[:used], key=lambda e: (e.is_deleted, e.starting_block))
        start = 0
        prev_end = 1
        for entry in [*ordered, None]:
            if entry is None or entry.is_deleted:
                this_start = num_blocks - 1
            else:
                this_start = entry.starting_block
            if this_start - prev_end >= requested:
                start = prev_end
                break
            if entry is not None:
                prev_end = entry.starting_block + entry.reserved_blocks
        if start == 0:
            raise BmfsError(f"Cannot create file of size {max_size_mib} MiB.")

        offset = first_free * ENTRY_SIZE
        self._directory[offset : offset + len(raw_name) + 1] = raw_name + b"\0"
        struct.pack_into("<QQQ", self._directory, offset + 32, start, requested, 0)
        if first_free == used and used + 1 < MAX_ENTRIES:
            self._directory[(used + 1) * ENTRY_SIZE] = END_MARKER
        self._flush_directory()
        return DirectoryEntry.unpack(self._directory[offset : offset + ENTRY_SIZE])

    def read(self, name: str, destination=None) -> int:
        """Copy a file out of the disk to a local path; return the byte count."""
        found = self.find(name)
        if found is None:
            raise BmfsError("File not found in BMFS.")
        _, entry = found
        target = Path(destination if destination is not None else entry.name)
        try:
            out = open(target, "wb")
        except OSError as exc:
            raise BmfsError(f"Could not open local file '{target}'") from exc
        with out:
            self._handle.seek(entry.starting_block * BLOCK_SIZE)
            data = self._handle.read(entry.file_size)
            out.write(data)
        return len(data)

    def write(self, name: str, source=None) -> int:
        """Copy a local file into the reserved space of an existing entry."""
        found = self.find(name)
        if found is None:
            raise BmfsError("File not found in BMFS. A file entry must first be created.")
        slot, entry = found
        origin = Path(source if source is not None else name)
        try:
            data = origin.read_bytes()
        except OSError as exc:
            raise BmfsError(f"Could not open local file '{origin}'") from exc
        if entry.reserved_blocks * BLOCK_SIZE < len(data):
            raise BmfsError("Not enough reserved space in BMFS.")
        self._handle.seek(entry.starting_block * BLOCK_SIZE)
        self._handle.write(data)
        struct.pack_into("<Q", self._directory, slot * ENTRY_SIZE + FILE_SIZE_FIELD, len(data))
        self._flush_directory()
        return len(data)

    def delete(self, name: str) -> None:
        """Mark a file's directory entry as deleted."""
        found = self.find(name)
        if found is None:
            raise BmfsError("File not found in BMFS.")
        slot, _ = found
        self._directory[slot * ENTRY_SIZE] = DELETED_MARKER
        self._flush_directory()

    def list_lines(self) -> list[str]:
        """Return the directory listing as printed lines."""
        header = [
            str(self.path),
            f"Disk Size: {self.disk_size_mib} MiB",
            "Name                            |            Size (B)|      Reserved (MiB)",
            "=" * 74,
        ]
        rows = [
            f"{e.name:<32} {e.file_size:>20} {e.reserved_blocks * 2:>20}" for e in self.entries()
        ]
        return header + rows


def parse_disk_size(text: str) -> int:
    """Parse a size such as '6291456', '6M' or '1G' into bytes."""
    size = 0
    factor = 0
    for index, ch in enumerate(text):
        if ch.isdigit() and ch.isascii():
            digit = int(ch)
            if size == 0:
                size = digit
            elif size * 10 + digit < _U64_LIMIT:
                size = size * 10 + digit
            else:
                raise BmfsError("Disk size is too large")
        elif index == 0:
            raise BmfsError("A numeric disk size must be specified")
        else:
            factor = _UNITS.get(ch.upper(), 0)
            if not factor or index + 1 != len(text):
                raise BmfsError(f"Invalid disk size string: '{text}'")
    if size > 0:
        for _ in range(factor):
            size *= 1024
            if size >= _U64_LIMIT:
                raise BmfsError("Disk size is too large")
    if size < MINIMUM_DISK_SIZE:
        raise BmfsError(
            f"Disk size must be at least {MINIMUM_DISK_SIZE} bytes "
            f"({MINIMUM_DISK_SIZE // MIB}MiB)"
        )
    return size


def _open_input(stack: ExitStack, path, message: str) -> BinaryIO | None:
    if path is None:
        return None
    try:
        return stack.enter_context(open(path, "rb"))
    except OSError as exc:
        raise BmfsError(message) from exc


def initialize(disk_path, size, mbr=None, boot=None, kernel=None) -> list[str]:
    """Create a zero-filled, formatted disk image and install boot files.

    Returns the progress messages in the order the steps were done.
    """
    disk_size = parse_disk_size(size)
    boot_type = "boot loader" if kernel is not None else "system"
    messages: list[str] = []
    with ExitStack() as stack:
        mbr_file = _open_input(stack, mbr, f"Unable to open MBR file '{mbr}'")
        boot_file = _open_input(stack, boot, f"Unable to open {boot_type} file '{boot}'")
        kernel_file = _open_input(stack, kernel, f"Unable to open kernel file '{kernel}'")
        try:
            disk = stack.enter_context(open(disk_path, "wb"))
        except OSError as exc:
            raise BmfsError(f"Unable to open disk '{disk_path}'") from exc
        try:
            zeros = memoryview(bytes(_FILL_CHUNK))
            written = 0
            while written < disk_size:
                chunk = min(_FILL_CHUNK, disk_size - written)
                disk.write(zeros[:chunk])
                written += chunk
            messages.append(f"Formatting disk: {written} of {disk_size} bytes (100%)")

            disk.seek(0)
            _format_area(disk)
            messages.append("Format complete.")

            if mbr_file is not None:
                messages.append("Writing master boot record.")
                record = mbr_file.read(MBR_SIZE)
                if len(record) != MBR_SIZE:
                    raise BmfsError(f"Failed to read file '{mbr}'")
                disk.seek(0)
                disk.write(record)

            if boot_file is not None:
                messages.append(f"Writing {boot_type} file.")
                disk.seek(BOOT_OFFSET)
                shutil.copyfileobj(boot_file, disk, _FILL_CHUNK)

            if kernel_file is not None:
                messages.append("Writing kernel.")
                shutil.copyfileobj(kernel_file, disk, _FILL_CHUNK)
        except OSError as exc:
            raise BmfsError(f"Failed to write disk '{disk_path}'") from exc
    messages.append("Disk initialization complete.")
    return messages