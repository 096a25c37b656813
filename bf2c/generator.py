from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Sequence

from .commands import (
    Add,
    Command,
    LoopEnd,
    LoopStart,
    MoveLeft,
    MoveRight,
    ReadByte,
    Sub,
    WriteByte,
)

MIN_TAPE_SIZE = 30000
BODY_LEVEL = 1


class EofPolicy(str, Enum):
    """What ``,`` stores when the input stream is exhausted."""

    UNCHANGED = "unchanged"
    ZERO = "zero"
    MAX = "max"


@dataclass(frozen=True)
class GeneratorOptions:
    tape_size: int = MIN_TAPE_SIZE
    indent: str = "    "
    eof_policy: EofPolicy = EofPolicy.UNCHANGED
    bounds_exit_status: int = 1

    def __post_init__(self) -> None:
        if self.tape_size < MIN_TAPE_SIZE:
            raise ValueError(f"tape_size must be at least {MIN_TAPE_SIZE}, got {self.tape_size}")
        if not self.indent or self.indent.strip():
            raise ValueError("indent must be a non-empty whitespace string")
        if not (1 <= self.bounds_exit_status <= 255):
            raise ValueError("bounds_exit_status must be between 1 and 255")
        # accept plain strings such as "zero" from adapters
        object.__setattr__(self, "eof_policy", EofPolicy(self.eof_policy))


@dataclass
class CodeGenState:
    output: List[str] = field(default_factory=list)
    level: int = BODY_LEVEL


class CGenerator:
    """Emit a C program that implements a validated command sequence.

    The caller is responsible for validating brackets first; see
    ``bf2c.validator.check_brackets``.
    """

    def __init__(self, options: Optional[GeneratorOptions] = None) -> None:
        self.options = options or GeneratorOptions()

    def generate(self, commands: Sequence[Command]) -> str:
        state = CodeGenState()
        self._emit_prologue(state)
        for command in commands:
            self._emit_command(command, state)
        if commands:
            state.output.append("\n")
        self._emit_epilogue(state)
        return "".join(state.output)

    # --- Skeleton ---

    def _emit_prologue(self, state: CodeGenState) -> None:
        size = self.options.tape_size
        state.output.append("#include <stdio.h>\n\n")
        state.output.append("int main(void) {\n")
        self._line(state, f"unsigned char tape[{size}] = {{0}};")
        self._line(state, "unsigned char *ptr = tape;")
        state.output.append("\n")

    def _emit_epilogue(self, state: CodeGenState) -> None:
        state.level = BODY_LEVEL
        self._line(state, "return 0;")
        state.output.append("}\n")

    # --- Commands ---

    def _emit_command(self, command: Command, state: CodeGenState) -> None:
        if isinstance(command, Add):
            self._line(state, f"*ptr += {command.count};")
        elif isinstance(command, Sub):
            self._line(state, f"*ptr -= {command.count};")
        elif isinstance(command, MoveRight):
            # checked before moving so ptr never leaves the array
            limit = self.options.tape_size - command.count
            self._bounds_check(state, f"ptr - tape >= {limit}", "past the end of")
            self._line(state, f"ptr += {command.count};")
        elif isinstance(command, MoveLeft):
            self._bounds_check(state, f"ptr - tape < {command.count}", "before the start of")
            self._line(state, f"ptr -= {command.count};")
        elif isinstance(command, ReadByte):
            self._line(state, self._read_statement())
        elif isinstance(command, WriteByte):
            self._line(state, "putchar(*ptr);")
        elif isinstance(command, LoopStart):
            self._line(state, "while (*ptr) {")
            state.level += 1
        elif isinstance(command, LoopEnd):
            # floor is unreachable for validated input
            state.level = max(BODY_LEVEL, state.level - 1)
            self._line(state, "}")
        else:
            raise TypeError(f"Unknown command: {command!r}")

    def _bounds_check(self, state: CodeGenState, condition: str, where: str) -> None:
        message = f"Error: pointer would move {where} the tape\\n"
        self._line(
            state,
            f'if ({condition}) {{ fprintf(stderr, "{message}"); '
            f"return {self.options.bounds_exit_status}; }}",
        )

    def _read_statement(self) -> str:
        policy = self.options.eof_policy
        if policy is EofPolicy.ZERO:
            store = "*ptr = (c == EOF) ? 0 : (unsigned char)c;"
        elif policy is EofPolicy.MAX:
            store = "*ptr = (c == EOF) ? 255 : (unsigned char)c;"
        else:
            store = "if (c != EOF) *ptr = (unsigned char)c;"
        return f"{{ int c = getchar(); {store} }}"

    def _line(self, state: CodeGenState, text: str) -> None:
        state.output.append(self.options.indent * state.level + text + "\n")


def generate(commands: Sequence[Command], options: Optional[GeneratorOptions] = None) -> str:
    return CGenerator(options).generate(commands)


__all__ = [
    "CGenerator",
    "EofPolicy",
    "GeneratorOptions",
    "MIN_TAPE_SIZE",
    "generate",
]
