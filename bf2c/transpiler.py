from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional, Tuple, Union

from .commands import Command
from .generator import CGenerator, GeneratorOptions
from .tokenizer import tokenize
from .validator import BracketError, check_brackets

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Transpiled:
    """Successful transpilation: ``code`` is the generated C source."""

    code: str
    commands: Tuple[Command, ...] = ()

    @property
    def ok(self) -> bool:
        return True

    def unwrap(self) -> str:
        return self.code


@dataclass(frozen=True)
class Malformed:
    """Rejected source: carries the structural error, never any C text."""

    error: BracketError

    @property
    def ok(self) -> bool:
        return False

    def unwrap(self) -> str:
        raise self.error


TranspileResult = Union[Transpiled, Malformed]


class BrainfuckToCTranspiler:
    def __init__(self, options: Optional[GeneratorOptions] = None) -> None:
        self.options = options or GeneratorOptions()
        self.generator = CGenerator(self.options)

    def transpile(self, source: str) -> TranspileResult:
        commands = tokenize(source)
        logger.debug("tokenized %d characters into %d commands", len(source), len(commands))

        error = check_brackets(commands)
        if error is not None:
            logger.info("rejected malformed source: %s", error)
            return Malformed(error)

        return Transpiled(code=self.generator.generate(commands), commands=commands)


def transpile(source: str, options: Optional[GeneratorOptions] = None) -> TranspileResult:
    return BrainfuckToCTranspiler(options).transpile(source)


__all__ = [
    "BrainfuckToCTranspiler",
    "Malformed",
    "TranspileResult",
    "Transpiled",
    "transpile",
]
