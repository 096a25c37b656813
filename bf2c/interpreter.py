from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Iterable, Iterator, List, Optional, Sequence

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
from .generator import MIN_TAPE_SIZE, EofPolicy
from .validator import check_brackets

DEFAULT_MAX_STEPS = 1_000_000


class StepLimitExceeded(RuntimeError):
    """Raised when execution exceeds the configured step budget."""


class TapeBoundsError(IndexError):
    """Raised when the pointer leaves the tape, mirroring the emitted C check."""


@dataclass
class BrainfuckInterpreter:
    """Execute command sequences with the semantics of the generated C program."""

    tape_size: int = MIN_TAPE_SIZE
    eof_policy: EofPolicy = EofPolicy.UNCHANGED

    tape: bytearray = field(init=False, repr=False)
    pointer: int = field(init=False, repr=False)
    output_buffer: bytearray = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self.eof_policy = EofPolicy(self.eof_policy)
        self.reset()

    def reset(self) -> None:
        self.tape = bytearray(self.tape_size)
        self.pointer = 0
        self.output_buffer = bytearray()

    def run(
        self,
        commands: Sequence[Command],
        input_data: Optional[Iterable[int]] = None,
        max_steps: Optional[int] = None,
    ) -> bytes:
        self.reset()
        jump_map = self._build_jump_map(commands)
        input_iter = iter(list(input_data or []))
        pc = 0
        steps = 0
        while pc < len(commands):
            if max_steps is not None and steps >= max_steps:
                raise StepLimitExceeded("Brainfuck program exceeded allowed step count")
            pc = self._execute(commands[pc], pc, jump_map, input_iter)
            steps += 1
        return bytes(self.output_buffer)

    def _execute(
        self,
        command: Command,
        pc: int,
        jump_map: Dict[int, int],
        input_iter: Iterator[int],
    ) -> int:
        new_pc = pc + 1
        if isinstance(command, Add):
            self.tape[self.pointer] = (self.tape[self.pointer] + command.count) % 256
        elif isinstance(command, Sub):
            self.tape[self.pointer] = (self.tape[self.pointer] - command.count) % 256
        elif isinstance(command, MoveRight):
            self.pointer += command.count
            if self.pointer >= self.tape_size:
                raise TapeBoundsError("Pointer moved past the end of the tape.")
        elif isinstance(command, MoveLeft):
            self.pointer -= command.count
            if self.pointer < 0:
                raise TapeBoundsError("Pointer moved before the start of the tape.")
        elif isinstance(command, WriteByte):
            self.output_buffer.append(self.tape[self.pointer])
        elif isinstance(command, ReadByte):
            self._read(input_iter)
        elif isinstance(command, LoopStart):
            if self.tape[self.pointer] == 0:
                new_pc = jump_map[pc] + 1
        elif isinstance(command, LoopEnd):
            if self.tape[self.pointer] != 0:
                new_pc = jump_map[pc] + 1
        return new_pc

    def _read(self, input_iter: Iterator[int]) -> None:
        try:
            self.tape[self.pointer] = next(input_iter) % 256
        except StopIteration:
            if self.eof_policy is EofPolicy.ZERO:
                self.tape[self.pointer] = 0
            elif self.eof_policy is EofPolicy.MAX:
                self.tape[self.pointer] = 255

    def _build_jump_map(self, commands: Sequence[Command]) -> Dict[int, int]:
        error = check_brackets(commands)
        if error is not None:
            raise error
        jump_map: Dict[int, int] = {}
        stack: List[int] = []
        for index, command in enumerate(commands):
            if isinstance(command, LoopStart):
                stack.append(index)
            elif isinstance(command, LoopEnd):
                start = stack.pop()
                jump_map[start] = index
                jump_map[index] = start
        return jump_map


__all__ = [
    "BrainfuckInterpreter",
    "DEFAULT_MAX_STEPS",
    "StepLimitExceeded",
    "TapeBoundsError",
]
