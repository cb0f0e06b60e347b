"""Module packer: appends binary modules to a kernel image.

The packed image is the kernel file, followed by a little-endian 32-bit
count of extra modules, followed by each module as a 32-bit little-endian
size and its bytes.
"""

from __future__ import annotations

import argparse
import os
import struct
import sys
from pathlib import Path
from typing import Iterable, Sequence

OUTPUT_FILE = "packedKernel.bin"
MAX_FILES = 128
VERSION = "x64BareBones ModulePacker v0.2"

_COUNT = struct.Struct("<i")
_SIZE = struct.Struct("<I")


class PackerError(Exception):
    """Raised when an image cannot be packed."""


def check_files(paths: Iterable) -> None:
    """Raise PackerError naming the first path that cannot be read."""
    for path in paths:
        if not os.access(path, os.R_OK):
            raise PackerError(f"Can't open file: {path}")


def build_image(paths: Sequence, output=OUTPUT_FILE) -> int:
    """Write the kernel and modules in ``paths`` to ``output``.

    Returns the number of bytes written.
    """
    paths = list(paths)
    if not paths:
        raise PackerError("A kernel file must be given")
    kernel, modules = paths[0], paths[1:]
    try:
        target = open(output, "wb")
    except OSError as exc:
        raise PackerError("Can't create target file") from exc
    written = 0
    with target:
        try:
            data = Path(kernel).read_bytes()
            target.write(data)
            target.write(_COUNT.pack(len(modules)))
            written += len(data) + _COUNT.size
            for module in modules:
                size = os.stat(module).st_size & 0xFFFFFFFF
                data = Path(module).read_bytes()
                target.write(_SIZE.pack(size))
                target.write(data)
                written += _SIZE.size + len(data)
        except OSError as exc:
            raise PackerError(f"Can't read file: {exc.filename}") from exc
    return written


def _parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="mp",
        description="ModulePacker is an appender of binary files to be loaded all together",
    )
    parser.add_argument(
        "-o",
        "--output",
        metavar="FILE",
        default=OUTPUT_FILE,
        help="Output to FILE instead of standard output",
    )
    parser.add_argument("--version", action="version", version=VERSION)
    parser.add_argument("files", nargs="+", metavar="FILE", help="KernelFile Module1 Module2 ...")
    return parser


def main(argv=None) -> int:
    """Run the packer; return the process exit status."""
    parser = _parser()
    args = parser.parse_args(sys.argv[1:] if argv is None else argv)
    if len(args.files) > MAX_FILES:
        parser.error(f"at most {MAX_FILES} files can be packed")
    try:
        check_files(args.files)
        build_image(args.files, args.output)
    except PackerError as exc:
        print(exc)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())