from __future__ import annotations

from typing import Dict, List, Tuple, Type

from .commands import (
    Add,
    Command,
    CountedCommand,
    LoopEnd,
    LoopStart,
    MoveLeft,
    MoveRight,
    ReadByte,
    SimpleCommand,
    Sub,
    WriteByte,
)

COUNTED: Dict[str, Type[CountedCommand]] = {
    "+": Add,
    "-": Sub,
    ">": MoveRight,
    "<": MoveLeft,
}

SIMPLE: Dict[str, Type[SimpleCommand]] = {
    ",": ReadByte,
    ".": WriteByte,
    "[": LoopStart,
    "]": LoopEnd,
}


def tokenize(source: str) -> Tuple[Command, ...]:
    """Turn Brainfuck source into a run-length encoded command sequence.

    Runs of ``+ - > <`` collapse into one command carrying the run length.
    I/O and loop characters always yield one command each; every other
    character is treated as a comment.
    """
    commands: List[Command] = []
    length = len(source)
    index = 0
    while index < length:
        char = source[index]
        counted = COUNTED.get(char)
        if counted is not None:
            start = index
            while index < length and source[index] == char:
                index += 1
            commands.append(counted(index - start, offset=start))
            continue
        simple = SIMPLE.get(char)
        if simple is not None:
            commands.append(simple(offset=index))
        index += 1
    return tuple(commands)


__all__ = ["tokenize"]
