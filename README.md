# bareos

Tools for building and inspecting the disk image of a small x86-64 teaching
kernel, together with a pure-Python model of that kernel's drivers, system
calls and user-space shell.

* **Image tools**: a BareMetal File System (BMFS) utility that creates,
  formats and manages disk images, and a module packer that appends user
  modules to a kernel binary.
* **Kernel model**: a text console, keyboard driver, framebuffer video
  driver with an 8×16 font, PC speaker, timer, real-time clock, system-call
  dispatcher, and the user-space library and shell that run on top of them.

The package has no third-party dependencies.

## Installation

```
pip install .
```

To run the tests:

```
pip install ".[test]"
pytest
```

## Command-line tools

### `bareos-bmfs`: BMFS disk utility

```
bareos-bmfs DISK FUNCTION [FILE]
```

Functions are `list`, `read`, `write`, `create`, `delete`, `format` and
`initialize`. Function names are not case-sensitive. With fewer than two
arguments, the command prints its usage.

Create a 6 MiB image with a boot record, a boot loader and a packed kernel:

```
bareos-bmfs disk.img initialize 6M bmfs_mbr.sys pure64.sys packedKernel.bin
```

The size is a number of bytes with an optional `K`, `M`, `G`, `T` or `P`
suffix, and the image must be at least 6 MiB. The image is zero-filled and
formatted. The first 512 bytes of the MBR file are then written at offset 0,
and the boot loader at offset 8192. The kernel follows the boot loader
directly. All three files are optional. If the boot loader is given without a
kernel, it is reported as a combined "system" file. `initialize` exits with
status 1 on error.

Managing files on an existing image:

```
bareos-bmfs disk.img list
bareos-bmfs disk.img create notes.txt 2
bareos-bmfs disk.img write notes.txt
bareos-bmfs disk.img read notes.txt
bareos-bmfs disk.img delete notes.txt
bareos-bmfs disk.img format /FORCE
```

* `create` reserves space in MiB, rounded up to whole 2 MiB blocks. It asks
  for the size when none is given on the command line.
* `write` copies the local file of the same name into an entry that was
  created before.
* `read` copies the file back out to a local file of the same name.
* `delete` marks the directory entry as deleted.
* `format` on an already formatted disk requires `/FORCE`. A disk that is not
  BMFS formatted can be formatted without it. Every other function refuses to
  work on an unformatted disk.

### `bareos-pack`: module packer

```
bareos-pack kernel.bin 0000-sampleCodeModule.bin 0001-sampleDataModule.bin -o packedKernel.bin
```

The output is laid out as follows:

1. the kernel;
2. a little-endian 32-bit count of extra modules;
3. each module, preceded by its 32-bit size.

Without `-o`/`--output`, the output goes to `packedKernel.bin`. At most 128
files can be packed. `--version` prints the version. The command exits with
status 1 if an input cannot be read or the output cannot be created.

## Library use

### BMFS images (`bareos.bmfs`)

```python
from bareos.bmfs import BmfsDisk, initialize, parse_disk_size

parse_disk_size("6M")                      # 6291456
for message in initialize("disk.img", "6M", None, None, None):
    print(message)

with BmfsDisk("disk.img") as disk:
    disk.create("notes.txt", 2)             # returns the new DirectoryEntry
    disk.write("notes.txt", "notes.txt")    # local source path; returns bytes written
    disk.read("notes.txt", "copy.txt")      # local destination path; returns bytes read
    print(disk.find("notes.txt"))           # (slot, DirectoryEntry) or None
    for line in disk.list_lines():
        print(line)
    disk.delete("notes.txt")
```

`BmfsDisk.entries()` lists the live directory entries. `DirectoryEntry`
packs to and unpacks from the on-disk 64-byte record with `pack()` and
`DirectoryEntry.unpack()`. Failures raise `bareos.bmfs.BmfsError`. These
include an unopenable disk, an unformatted disk, a missing or duplicate file,
a full directory, no room on the disk, too little reserved space, and an
invalid size string.

### Packing and unpacking modules

* `bareos.packer.check_files(paths)` raises `PackerError` naming the first
  unreadable path.
* `bareos.packer.build_image(paths, output)` writes the packed image and
  returns the number of bytes written.
* `bareos.packer.main(argv)` is the `bareos-pack` command.

On the kernel side, `bareos.modules.load_modules(payload, addresses, console)`
splits a payload (the module count followed by the modules) into a dict of
module bytes keyed by target address. It can report each copy on a
`NaiveConsole`. A truncated payload, or more modules than addresses, raises
`ModuleFormatError`.

### Text console (`bareos.console`)

```python
from bareos.console import NaiveConsole, to_base

console = NaiveConsole(80, 25)
console.print("[Kernel Main]")
console.newline()
console.print_hex(0x400000)
console.lines()[1].rstrip()    # "400000"
to_base(255, 16)               # "FF"
```

The console does not scroll. Characters written past the last cell are
dropped.

### The kernel model

```python
from bareos.audio import PcSpeaker
from bareos.kernel import Kernel, Syscall
from bareos.keyboard import Keyboard
from bareos.timer import RealTimeClock, RtcRegister, Timer
from bareos.video import Framebuffer, VideoDriver

kernel = Kernel(
    Keyboard(),
    VideoDriver(Framebuffer(640, 480)),
    PcSpeaker(),
    Timer(),
    RealTimeClock(lambda register: 0x42),   # raw BCD value of every register
)
kernel.irq(1, 0x23)                         # keyboard interrupt: the 'h' key
kernel.read(0, 10)                          # "h"
kernel.write(1, "hola\n")                   # drawn on the framebuffer; returns 5
kernel.get_time(RtcRegister.MINUTES)        # 42
kernel.dispatch(Syscall.SLEEP, 1000)        # waits 18 timer ticks
```

* `bareos.keyboard.Keyboard` turns set-1 scan codes into characters, with
  Shift, Caps Lock and arrow keys. It buffers up to 256 characters and takes
  a register snapshot on Ctrl+R. `scancode_to_ascii` does the translation on
  its own.
* `bareos.video.Framebuffer` and `bareos.video.VideoDriver` draw glyphs from
  `bareos.font.glyph` with integer scaling. They support newline, tab,
  backspace, cursor movement, a cursor underline and scrolling.
  `Framebuffer.pixel(x, y)` reads a pixel back.
* `bareos.audio.PcSpeaker` records the port writes that program the timer
  channel for a tone (`play`, `stop`, `divisor`, `playing`).
* `bareos.timer.Timer` counts ticks at 18 Hz. `bareos.timer.RealTimeClock`
  decodes BCD clock registers with `bcd_to_binary` and returns 0 for an
  unknown register.
* `bareos.kernel.Kernel` provides the system calls:

  | Call | Notes |
  | --- | --- |
  | `read` | |
  | `write` | |
  | `get_time` | |
  | `get_registers` | |
  | `clear_screen` | |
  | `beep` | |
  | `sleep` | |
  | `set_font_scale` | raises `ValueError` outside 1–5 |

  `dispatch` runs a call by its `Syscall` number and returns `None` for an
  unknown number. `irq` routes interrupt 0 to the timer and interrupt 1,
  with a scan code, to the keyboard. While sleeping, the kernel calls its
  `idle` attribute, which by default delivers one timer interrupt.

### User library and shell

```python
from bareos.shell import Shell, format_registers
from bareos.userlib import UserLib, atoi

lib = UserLib(kernel)
lib.printf("%s = %d%c\n", "x", 42, "!")    # returns the characters written
lib.get_time()                             # "42:42:42"
shell = Shell(lib, kernel)
shell.execute("help")                      # prints the command list
format_registers([0] * 17)                 # "RAX: 0x0000000000000000\n..."
```

* `UserLib` offers `putchar`, `getchar`, `fgets`, `printf` (with `%s`, `%d`
  and `%c`) and `scanf`. `scanf` supports `%d`, `%c`, `%s` and `%[^\n]`, and
  returns the converted values as a list. `clear_screen`, `get_time` and
  `set_font_scale` are also provided.
* `Shell` knows the commands `help`, `exit`, `set-user`, `clear`, `time` and
  `font-size`. `execute` returns `False` for `exit`. `read_line` echoes input,
  handles backspace and beeps on each key. `run` greets the user and loops
  until `exit`.

`getchar`, `fgets`, `scanf`, `read_line` and `run` keep asking the system for
input until a character arrives. With a `Kernel`, queue the keystrokes first
with `kernel.irq(1, scancode)`. Otherwise they never return.

## What the package does not do

* It does not boot or run a kernel. The kernel model is a set of Python
  objects driven by calls, not a machine. There is no CPU, interrupt table,
  boot sequence or module execution.
* It contains no boot sector or boot loader. `initialize` only copies files
  that are given to it.
* It does not convert images to other formats such as VMDK or QCOW2.
* There is no command that starts the shell. The shell is used from Python
  as shown above.