"""Lexer and bracket linker turning raw bytes into a Program."""

from __future__ import annotations

import logging

from ..constants import COMMAND_SYMBOLS, WHITESPACE
from .core import Command, Instruction, Program
from .errors import InvalidCommandError, UnmatchedJumpError

logger = logging.getLogger(__name__)


def _as_bytes(data) -> bytes:
    if isinstance(data, str):
        return data.encode("utf-8")
    return bytes(data)


def load(data) -> Program:
    """Lex and link *data* into a Program.

    Whitespace bytes are skipped. Every ``[`` is paired with its ``]`` in a
    single forward pass using a stack of pending loop-start indices, and both
    halves of a pair record each other's position in the instruction list.

    Raises :class:`InvalidCommandError` for the first byte outside the
    command alphabet and :class:`UnmatchedJumpError` for a ``]`` without an
    open loop or, after the scan, for the innermost ``[`` left open.
    """

    raw = _as_bytes(data)
    jump_stack: list[int] = []
    instructions: list[Instruction] = []

    for offset, byte in enumerate(raw):
        if byte in WHITESPACE:
            continue

        name = COMMAND_SYMBOLS.get(byte)
        if name is None:
            raise InvalidCommandError(offset, byte)
        command = Command[name]
        position = len(instructions)

        if command is Command.LOOP_START:
            jump_stack.append(position)
            instructions.append(Instruction(command, None))
        elif command is Command.LOOP_END:
            if not jump_stack:
                raise UnmatchedJumpError(position)
            matching = jump_stack.pop()
            instructions[matching] = Instruction(Command.LOOP_START, position)
            instructions.append(Instruction(command, matching))
        else:
            instructions.append(Instruction(command))

    if jump_stack:
        raise UnmatchedJumpError(jump_stack.pop())

    program = Program(instructions)
    logger.debug("loaded %d instructions from %d bytes", len(program), len(raw))
    return program


def load_file(path) -> Program:
    """Read *path* as bytes and load it."""

    with open(path, "rb") as f:
        return load(f.read())


__all__ = [
    "load",
    "load_file",
]
