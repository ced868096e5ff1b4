"""Command-line interface for the brnfk runtime."""
from __future__ import annotations

import argparse
import logging
from pathlib import Path
import sys

from ..constants import (
    DEFAULT_INPUT_MODE,
    DEFAULT_UNDERFLOW_POLICY,
    HELP_TEXT,
    INPUT_MODE_NAMES,
    REPL_HISTORY_LIMIT,
    UNDERFLOW_POLICIES,
)
from .analysis import (
    export_graphviz,
    format_program,
    hash_program,
    print_program,
    visualize_program,
)
from .capabilities import StreamOutput, create_input
from .engine import TapeVM
from .errors import ExecutionError, LoadError
from .loader import load


def _byte_value(text):
    try:
        value = int(text, 0)
    except ValueError:
        raise argparse.ArgumentTypeError(f"not an integer: {text!r}") from None
    if not 0 <= value <= 255:
        raise argparse.ArgumentTypeError(f"must be between 0 and 255: {value}")
    return value


def _prompt_input():
    """Yield the first byte of each line typed at the REPL's input prompt."""

    while True:
        try:
            line = input("input> ")
        except EOFError:
            return
        yield (line.encode("utf-8") or b"\n")[0]


def _cached_program(history, token=None):
    """Look up a program in the REPL history; the newest one by default."""

    if not history:
        print("No cached programs yet.")
        return None, None
    if token is None:
        index = next(reversed(history))
        return index, history[index]
    if not token.isdigit():
        print("Program index must be an integer.")
        return None, None
    index = int(token)
    if index not in history:
        print(f"No cached program #{index}.")
        return None, None
    return index, history[index]


def run_repl(history_limit=REPL_HISTORY_LIMIT, *, eof=None, underflow=DEFAULT_UNDERFLOW_POLICY):
    """Interactive brnfk shell."""

    print("brnfk REPL: enter a program per line (:help for help)")
    history = {}
    counter = 0

    while True:
        try:
            line = input("brnfk> ")
        except EOFError:
            print()
            break

        stripped = line.strip()
        if not stripped:
            continue

        if stripped.startswith(":"):
            parts = stripped.split()
            cmd = parts[0]

            if cmd in (":quit", ":exit"):
                break
            if cmd == ":help":
                print("Commands: :help, :quit, :hash [n], :dump [n]")
                print(f"History: last {history_limit} programs cached.")
                continue
            if cmd in (":hash", ":dump"):
                index, program = _cached_program(history, parts[1] if len(parts) > 1 else None)
                if program is None:
                    continue
                if cmd == ":hash":
                    print(f"SHA256(program_{index}) = {hash_program(program)}")
                else:
                    print(format_program(program) or "(empty program)")
                continue

            print(f"Unknown command: {cmd}")
            continue

        try:
            program = load(stripped)
        except LoadError as exc:
            print(f"  ✗ {exc}")
            continue

        counter += 1
        history[counter] = program
        while len(history) > history_limit:
            del history[next(iter(history))]

        vm = TapeVM(_prompt_input(), StreamOutput(), eof=eof, underflow=underflow)
        try:
            result = vm.run(program)
        except ExecutionError as exc:
            print(f"\n[#{counter}] ✗ {exc}")
            continue
        print(f"\n[#{counter}] ✓ halted after {result.steps} steps")


def parse_args(args):
    argp = argparse.ArgumentParser(
        prog="brnfk", description="Brainfuck interpreter"
    )

    argp.add_argument("file", nargs="?", help="Program source file")
    argp.add_argument(
        "--input-mode",
        choices=INPUT_MODE_NAMES,
        default=DEFAULT_INPUT_MODE,
        help="'line' yields the first byte of each input line, 'stream' reads raw bytes",
    )
    argp.add_argument(
        "--eof",
        type=_byte_value,
        metavar="N",
        help="Store N when input is exhausted instead of aborting the run",
    )
    argp.add_argument(
        "--underflow",
        choices=UNDERFLOW_POLICIES,
        default=DEFAULT_UNDERFLOW_POLICY,
        help="What '<' does on cell 0: abort the run or stay at 0",
    )
    argp.add_argument(
        "--dump", action="store_true", help="Print the linked instruction listing"
    )
    argp.add_argument(
        "--hash", action="store_true", help="Print the program's SHA-256 digest"
    )
    argp.add_argument(
        "--viz",
        metavar="OUTPUT",
        help="Export the loop nesting tree to an SVG file",
    )
    argp.add_argument(
        "--visualize",
        action="store_true",
        help="Render the loop nesting tree with matplotlib",
    )
    argp.add_argument("--repl", action="store_true", help="Start an interactive REPL")
    argp.add_argument(
        "--debug", action="store_true", help="Log runtime diagnostics to stderr"
    )

    return argp.parse_args(args)


def main(args=None):
    params = parse_args(sys.argv[1:] if args is None else args)

    if params.debug:
        logging.basicConfig(
            level=logging.DEBUG,
            stream=sys.stderr,
            format="%(levelname)s %(name)s: %(message)s",
        )

    if params.repl:
        run_repl(eof=params.eof, underflow=params.underflow)
        return 0

    if params.file is None:
        print(HELP_TEXT, file=sys.stderr)
        return 1

    try:
        data = Path(params.file).read_bytes()
    except OSError as exc:
        print(f"Failed to read input_file at {params.file!r}: {exc}", file=sys.stderr)
        return 1

    try:
        program = load(data)
    except LoadError as exc:
        print(f"Failed to load program: {exc}", file=sys.stderr)
        return 1

    inspect_only = params.dump or params.hash or params.viz or params.visualize
    if params.dump:
        print_program(program)
    if params.hash:
        print(f"SHA256({params.file}) = {hash_program(program)}")
    if params.viz:
        path = export_graphviz(program, params.viz)
        print(f"  ✓ Graphviz visualization exported → {path}", file=sys.stderr)
    if params.visualize:
        visualize_program(program)
    if inspect_only:
        return 0

    vm = TapeVM(
        create_input(params.input_mode),
        StreamOutput(),
        eof=params.eof,
        underflow=params.underflow,
    )
    try:
        vm.run(program)
    except ExecutionError as exc:
        print(f"✗ {exc}", file=sys.stderr)
        return 1
    return 0


__all__ = [
    "main",
    "parse_args",
    "run_repl",
]


if __name__ == "__main__":  # pragma: no cover
    sys.exit(main(sys.argv[1:]))
