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
from .generator import CGenerator, EofPolicy, GeneratorOptions, generate
from .interpreter import BrainfuckInterpreter, StepLimitExceeded, TapeBoundsError
from .tokenizer import tokenize
from .transpiler import BrainfuckToCTranspiler, Malformed, TranspileResult, Transpiled, transpile
from .validator import BracketError, BracketErrorKind, check_brackets, validate_brackets

__all__ = [
    "Add",
    "Command",
    "LoopEnd",
    "LoopStart",
    "MoveLeft",
    "MoveRight",
    "ReadByte",
    "Sub",
    "WriteByte",
    "CGenerator",
    "EofPolicy",
    "GeneratorOptions",
    "generate",
    "BrainfuckInterpreter",
    "StepLimitExceeded",
    "TapeBoundsError",
    "tokenize",
    "BrainfuckToCTranspiler",
    "Malformed",
    "TranspileResult",
    "Transpiled",
    "transpile",
    "BracketError",
    "BracketErrorKind",
    "check_brackets",
    "validate_brackets",
]
