"""Command-line front end for BMFS disk images."""

from __future__ import annotations

import re
import sys

from .bmfs import BmfsDisk, BmfsError, initialize

PROG = "bmfs"


def _atoi(text: str) -> int:
    match = re.match(r"\s*([+-]?\d+)", text)
    return int(match.group(1)) if match else 0


def _usage_text(prog: str = PROG) -> str:
    """Return the help text shown when too few arguments are given."""
    return "\n".join(
        [
            "BareMetal File System Utility v1.0 (2013 04 10)",
            "",
            f"Usage: {prog} disk function file",
            "Disk: the name of the disk file",
            "Function: list, read, write, create, delete, format, initialize",
            "File: (if applicable)",
        ]
    )


def _list(disk: BmfsDisk, filename, args) -> None:
    for line in disk.list_lines():
        print(line)


def _format(disk: BmfsDisk, filename, args) -> None:
    if len(args) > 2 and args[2].lower() == "/force":
        disk.format()
        print("Format complete.")
    else:
        print("Format aborted!")


def _create(disk: BmfsDisk, filename, args) -> None:
    if filename is None:
        print("Error: File name not specified.")
        return
    if len(args) > 3:
        size = _atoi(args[3])
    else:
        try:
            size = _atoi(input("Maximum file size in MiB: "))
        except EOFError:
            size = 0
    if size < 1:
        print("Error: Invalid file size.")
        return
    if disk.find(filename) is not None:
        print("Error: File already exists.")
        return
    print("Creating new file...")
    disk.create(filename, size)
    print("Complete")


def _read(disk: BmfsDisk, filename, args) -> None:
    if filename is None:
        print("Error: File name not specified.")
        return
    if disk.find(filename) is None:
        print("Error: File not found in BMFS.")
        return
    print(f"Reading '{filename}' from BMFS to local file... ", end="")
    disk.read(filename, filename)
    print("Complete")


def _write(disk: BmfsDisk, filename, args) -> None:
    if filename is None:
        print("Error: File name not specified.")
        return
    if disk.find(filename) is None:
        print("Error: File not found in BMFS. A file entry must first be created.")
        return
    print(f"Writing local file '{filename}' to BMFS... ", end="")
    disk.write(filename, filename)
    print("Complete")


def _delete(disk: BmfsDisk, filename, args) -> None:
    if filename is None:
        print("Error: File name not specified.")
        return
    if disk.find(filename) is None:
        print("Error: File not found in BMFS.")
        return
    print(f"Deleting file '{filename}' from BMFS... ", end="")
    disk.delete(filename)
    print("Complete")


_COMMANDS = {
    "list": _list,
    "format": _format,
    "create": _create,
    "read": _read,
    "write": _write,
    "delete": _delete,
}


def main(argv=None) -> int:
    """Run the BMFS utility; return the process exit status."""
    args = list(sys.argv[1:] if argv is None else argv)
    if len(args) < 2:
        print(_usage_text())
        return 0

    disk_name, command = args[0], args[1]
    filename = args[2] if len(args) > 2 else None
    name = command.lower()

    if name == "initialize":
        if len(args) < 3:
            print(f"Usage: {PROG} disk {command} size [mbr_file] [bootloader_file] [kernel_file]")
            return 1
        optional = (args[3:6] + [None, None, None])[:3]
        try:
            messages = initialize(disk_name, args[2], *optional)
        except BmfsError as exc:
            print(f"Error: {exc}")
            return 1
        for message in messages:
            print(message)
        return 0

    try:
        disk = BmfsDisk(disk_name)
    except BmfsError as exc:
        print(f"Error: {exc}")
        return 0

    with disk:
        if not disk.is_formatted:
            if name == "format":
                disk.format()
                print("Format complete.")
            else:
                print("Error: Not a valid BMFS drive (Disk is not BMFS formatted).")
            return 0
        handler = _COMMANDS.get(name)
        if handler is None:
            print("Unknown command")
            return 0
        try:
            handler(disk, filename, args)
        except BmfsError as exc:
            print(f"Error: {exc}")
    return 0


if __name__ == "__main__":
    sys.exit(main())