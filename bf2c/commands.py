from __future__ import annotations

from dataclasses import dataclass, field


class Command:
    """Base class for a single Brainfuck command."""


@dataclass(frozen=True)
class CountedCommand(Command):
    count: int
    offset: int = field(default=0, compare=False)

    def __post_init__(self) -> None:
        if self.count < 1:
            raise ValueError(f"{type(self).__name__} count must be positive, got {self.count}")


@dataclass(frozen=True)
class SimpleCommand(Command):
    offset: int = field(default=0, compare=False)


# === Counted commands (run-length coalesced) ===


@dataclass(frozen=True)
class Add(CountedCommand):
    pass


@dataclass(frozen=True)
class Sub(CountedCommand):
    pass


@dataclass(frozen=True)
class MoveRight(CountedCommand):
    pass


@dataclass(frozen=True)
class MoveLeft(CountedCommand):
    pass


# === Single commands ===


@dataclass(frozen=True)
class ReadByte(SimpleCommand):
    pass


@dataclass(frozen=True)
class WriteByte(SimpleCommand):
    pass


@dataclass(frozen=True)
class LoopStart(SimpleCommand):
    pass


@dataclass(frozen=True)
class LoopEnd(SimpleCommand):
    pass


__all__ = [
    "Command",
    "CountedCommand",
    "SimpleCommand",
    "Add",
    "Sub",
    "MoveRight",
    "MoveLeft",
    "ReadByte",
    "WriteByte",
    "LoopStart",
    "LoopEnd",
]
