"""Shared constant values for the brnfk runtime."""

COMMAND_SYMBOLS = {
    ord(">"): "MOVE_RIGHT",
    ord("<"): "MOVE_LEFT",
    ord("+"): "INC",
    ord("-"): "DEC",
    ord("."): "OUTPUT",
    ord(","): "INPUT",
    ord("["): "LOOP_START",
    ord("]"): "LOOP_END",
}

# ASCII whitespace as understood by the loader (no vertical tab).
WHITESPACE = frozenset(b" \t\n\r\x0c")

CELL_MODULUS = 256

UNDERFLOW_POLICIES = ("error", "saturate")
DEFAULT_UNDERFLOW_POLICY = "error"

INPUT_MODE_NAMES = ("line", "stream")
DEFAULT_INPUT_MODE = "line"

HELP_TEXT = """brnfk - A brainfuck interpreter written in python.
USAGE: brnfk [INPUT_FILE]"""

REPL_HISTORY_LIMIT = 10

__all__ = [
    "CELL_MODULUS",
    "COMMAND_SYMBOLS",
    "DEFAULT_INPUT_MODE",
    "DEFAULT_UNDERFLOW_POLICY",
    "HELP_TEXT",
    "INPUT_MODE_NAMES",
    "REPL_HISTORY_LIMIT",
    "UNDERFLOW_POLICIES",
    "WHITESPACE",
]
