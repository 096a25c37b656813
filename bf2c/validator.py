from __future__ import annotations

from enum import Enum
from typing import List, Optional, Sequence

from .commands import Command, LoopEnd, LoopStart


class BracketErrorKind(str, Enum):
    UNMATCHED_LOOP_END = "unmatched_loop_end"
    UNCLOSED_LOOP_START = "unclosed_loop_start"


class BracketError(Exception):
    """Describes why a command sequence is structurally malformed.

    The validator returns instances rather than raising them; callers that
    want exception semantics (``TranspileResult.unwrap`` and the interpreter)
    raise them.
    """

    def __init__(self, kind: BracketErrorKind, index: int, offset: int, depth: int) -> None:
        self.kind = kind
        self.index = index
        self.offset = offset
        self.depth = depth
        super().__init__(self.describe())

    def describe(self) -> str:
        if self.kind is BracketErrorKind.UNMATCHED_LOOP_END:
            return f"Unmatched ']' at position {self.offset}"
        return f"Unclosed '[' at position {self.offset} ({self.depth} loop(s) left open)"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, BracketError):
            return NotImplemented
        return (self.kind, self.index, self.offset, self.depth) == (
            other.kind,
            other.index,
            other.offset,
            other.depth,
        )

    def __hash__(self) -> int:
        return hash((self.kind, self.index, self.offset, self.depth))


def check_brackets(commands: Sequence[Command]) -> Optional[BracketError]:
    """Return the first structural error in ``commands`` or ``None``."""
    open_loops: List[int] = []
    for index, command in enumerate(commands):
        if isinstance(command, LoopStart):
            open_loops.append(index)
        elif isinstance(command, LoopEnd):
            if not open_loops:
                return BracketError(
                    BracketErrorKind.UNMATCHED_LOOP_END,
                    index=index,
                    offset=command.offset,
                    depth=-1,
                )
            open_loops.pop()
    if open_loops:
        # innermost opener still pending
        index = open_loops[-1]
        return BracketError(
            BracketErrorKind.UNCLOSED_LOOP_START,
            index=index,
            offset=commands[index].offset,
            depth=len(open_loops),
        )
    return None


def validate_brackets(commands: Sequence[Command]) -> bool:
    return check_brackets(commands) is None


__all__ = [
    "BracketError",
    "BracketErrorKind",
    "check_brackets",
    "validate_brackets",
]
