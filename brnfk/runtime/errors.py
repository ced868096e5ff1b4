"""Exception hierarchy for loading and running brnfk programs."""

from __future__ import annotations

from dataclasses import dataclass


class BrnfkError(Exception):
    """Base class for every error raised by the runtime."""


class LoadError(BrnfkError):
    """The source buffer could not be turned into a Program."""


@dataclass(eq=False)
class InvalidCommandError(LoadError):
    index: int
    command: int

    def __str__(self) -> str:
        return (
            f"Found invalid command `{chr(self.command)}` "
            f"(code: {self.command}) at {self.index}"
        )


@dataclass(eq=False)
class UnmatchedJumpError(LoadError):
    index: int

    def __str__(self) -> str:
        return f"No matching jump found for jump at {self.index}"


class ExecutionError(BrnfkError):
    """A run was aborted before the program halted."""


@dataclass(eq=False)
class InputExhaustedError(ExecutionError):
    index: int

    def __str__(self) -> str:
        return f"Input exhausted at instruction {self.index}"


@dataclass(eq=False)
class PointerUnderflowError(ExecutionError):
    index: int

    def __str__(self) -> str:
        return f"Data pointer moved left of cell 0 at instruction {self.index}"


__all__ = [
    "BrnfkError",
    "ExecutionError",
    "InputExhaustedError",
    "InvalidCommandError",
    "LoadError",
    "PointerUnderflowError",
    "UnmatchedJumpError",
]
