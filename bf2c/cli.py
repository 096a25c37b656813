from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from .generator import EofPolicy, GeneratorOptions
from .interpreter import DEFAULT_MAX_STEPS, BrainfuckInterpreter, StepLimitExceeded, TapeBoundsError
from .transpiler import BrainfuckToCTranspiler, Malformed

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_MALFORMED_SOURCE = 1
EXIT_IO_ERROR = 3
EXIT_RUNTIME_ERROR = 4


def _read_source(path: str) -> str:
    source_path = Path(path)
    if not source_path.exists():
        raise FileNotFoundError(f"Source file not found: {path}")
    return source_path.read_text(encoding="utf-8")


def _write_output(path: str, data: str) -> None:
    output_path = Path(path)
    output_path.write_text(data, encoding="utf-8")


def _to_input_bytes(data: str) -> List[int]:
    return list(data.encode("utf-8"))


def _write_program_output(data: bytes) -> None:
    # raw bytes, exactly what the generated program would print
    sys.stdout.flush()
    sys.stdout.buffer.write(data)
    sys.stdout.buffer.flush()


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Transpile Brainfuck to C",
        epilog="Source that begins with '-' must follow '--', e.g. bf2c -- '-.'",
    )
    source = parser.add_mutually_exclusive_group(required=True)
    source.add_argument(
        "code",
        nargs="?",
        help="Brainfuck source given directly on the command line (use '--' before it if it starts with '-')",
    )
    source.add_argument("-f", "--file", help="Path to a Brainfuck source file")
    parser.add_argument(
        "-o",
        "--output",
        help="Destination file for the generated C (default: print to stdout)",
    )
    parser.add_argument(
        "--tape-size",
        type=int,
        default=GeneratorOptions.tape_size,
        help="Number of tape cells in the generated program (default: %(default)s)",
    )
    parser.add_argument(
        "--eof",
        choices=[policy.value for policy in EofPolicy],
        default=EofPolicy.UNCHANGED.value,
        help="What ',' stores at end of input (default: %(default)s)",
    )
    parser.add_argument(
        "--run",
        action="store_true",
        help="Execute the program with the reference interpreter instead of emitting C",
    )
    parser.add_argument(
        "--input",
        help="Optional input string supplied to the program when running",
        default="",
    )
    parser.add_argument(
        "--max-steps",
        type=int,
        default=DEFAULT_MAX_STEPS,
        help="Abort --run after this many executed commands (default: %(default)s)",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)
    if args.max_steps < 1:
        parser.error("--max-steps must be at least 1")

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        options = GeneratorOptions(tape_size=args.tape_size, eof_policy=EofPolicy(args.eof))
    except ValueError as exc:
        parser.error(str(exc))

    if args.file is not None:
        try:
            source_text = _read_source(args.file)
        except OSError as exc:
            print(str(exc), file=sys.stderr)
            return EXIT_IO_ERROR
    else:
        source_text = args.code

    result = BrainfuckToCTranspiler(options).transpile(source_text)
    if isinstance(result, Malformed):
        error = result.error
        print(f"Malformed source ({error.kind.value}): {error}", file=sys.stderr)
        return EXIT_MALFORMED_SOURCE

    if args.run:
        interpreter = BrainfuckInterpreter(tape_size=options.tape_size, eof_policy=options.eof_policy)
        try:
            output = interpreter.run(
                result.commands,
                input_data=_to_input_bytes(args.input),
                max_steps=args.max_steps,
            )
        except (TapeBoundsError, StepLimitExceeded) as exc:
            print(f"Runtime error: {exc}", file=sys.stderr)
            return EXIT_RUNTIME_ERROR
        _write_program_output(output)
        return EXIT_OK

    if args.output:
        try:
            _write_output(args.output, result.code)
        except OSError as exc:
            print(f"Failed to write {args.output}: {exc}", file=sys.stderr)
            return EXIT_IO_ERROR
        logger.info("wrote C code to %s", args.output)
    else:
        sys.stdout.write(result.code)

    return EXIT_OK


if __name__ == "__main__":
    raise SystemExit(main())
