"""An interactive command shell for the user module."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Sequence

from .keyboard import REGISTER_NAMES
from .userlib import UserLib

MAX_LINE_LENGTH = 100
MAX_USER_LENGTH = 10
DEFAULT_USER = "usuario"
WELCOME_MESSAGE = "Bienvenido a la shell del grupo ??\n"
NOT_FOUND_MESSAGE = "Comando no encontrado, escriba help para ver los comandos disponibles\n"
PROMPT_PREFIX = "TP-ARQUI-"
PROMPT_SUFFIX = ":~$ "

BEEP_FREQUENCY = 440
BEEP_DURATION = 100
MIN_FONT_SIZE = 1
MAX_FONT_SIZE = 3


def format_registers(values: Sequence[int]) -> str:
    """Render a register snapshot, one 'NAME: 0x<16 hex digits>' line each."""
    values = list(values)
    if len(values) != len(REGISTER_NAMES):
        raise ValueError(f"expected {len(REGISTER_NAMES)} register values")
    return "".join(
        f"{name}: 0x{value & 0xFFFFFFFFFFFFFFFF:016X}\n"
        for name, value in zip(REGISTER_NAMES, values)
    )


@dataclass(frozen=True)
class ShellCommand:
    name: str
    action: Callable[[], None]
    help: str


class Shell:
    """Reads command lines and runs the matching built-in commands.

    ``system`` must provide ``beep(frequency, duration)``, used as key feedback.
    """

    def __init__(self, lib: UserLib, system) -> None:
        self.lib = lib
        self.system = system
        self.user = DEFAULT_USER
        commands = [
            ShellCommand("help", self._help, ": Muestra los comandos disponibles\n"),
            ShellCommand("exit", self._exit, ": Salir del shell\n"),
            ShellCommand(
                "set-user",
                self._set_user,
                ": Setea el nombre de usuario, con un maximo de 10 caracteres\n",
            ),
            ShellCommand("clear", self._clear, ": Limpia la pantalla\n"),
            ShellCommand("time", self._time, ": Muestra la hora actual\n"),
            ShellCommand("font-size", self._font_size, ": Cambia el tamano de la fuente\n"),
        ]
        self.commands = {command.name: command for command in commands}

    def _print(self, text: str) -> None:
        self.lib.printf("%s", text)

    def _beep(self) -> None:
        self.system.beep(BEEP_FREQUENCY, BEEP_DURATION)

    def read_line(self, max_len: int) -> str:
        """Read an echoed line of at most ``max_len - 1`` characters, with backspace."""
        chars: list[str] = []
        while True:
            character = self.lib.getchar()
            if character == "\n":
                self.lib.putchar("\n")
                break
            if character == "\b":
                if chars:
                    chars.pop()
                    for echo in "\b \b":
                        self.lib.putchar(echo)
                    self._beep()
            elif len(chars) < max_len - 1:
                chars.append(character)
                self.lib.putchar(character)
                self._beep()
        return "".join(chars)

    def prompt(self) -> None:
        self._print(PROMPT_PREFIX)
        self._print(self.user)
        self._print(PROMPT_SUFFIX)

    def execute(self, line: str) -> bool:
        """Run one command line; return False when the shell should exit."""
        if not line:
            return True
        if line.endswith("\n"):
            line = line[:-1]
        if line == "exit":
            return False
        command = self.commands.get(line)
        if command is None:
            self._print(NOT_FOUND_MESSAGE)
        else:
            command.action()
        return True

    def run(self) -> None:
        """Greet the user and run commands until 'exit'."""
        self._print(WELCOME_MESSAGE)
        while True:
            self.prompt()
            if not self.execute(self.read_line(MAX_LINE_LENGTH)):
                return

    def _help(self) -> None:
        self._print("Comandos disponibles:\n")
        for command in self.commands.values():
            self._print(command.name)
            self._print(command.help)

    def _exit(self) -> None:
        self._print("Saliendo del shell...\n")

    def _set_user(self) -> None:
        self._print("Ingrese el nuevo nombre de usuario: ")
        name = self.read_line(MAX_USER_LENGTH + 1)
        self.user = name[: MAX_USER_LENGTH - 1]
        self.lib.printf("Nombre de usuario actualizado a: %s\n", self.user)

    def _clear(self) -> None:
        self.lib.clear_screen()

    def _time(self) -> None:
        self.lib.printf("Hora del sistema: %s\n", self.lib.get_time())

    def _font_size(self) -> None:
        self.lib.printf("Ingrese el nuevo tamaño de la fuente (1-3): ")
        values = self.lib.scanf("%d")
        size = values[0] if values else 0
        if not MIN_FONT_SIZE <= size <= MAX_FONT_SIZE:
            self.lib.printf("Tamaño inválido. Debe estar entre 1 y 3.\n")
            return
        self.lib.set_font_scale(size)
        self._clear()
        self.lib.printf("Tamaño de fuente cambiado a: %d\n", size)