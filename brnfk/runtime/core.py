"""Core runtime data structures for brnfk."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
import hashlib
from typing import Iterable, Iterator, Optional

from ..constants import CELL_MODULUS


class Command(Enum):
    MOVE_RIGHT = ">"
    MOVE_LEFT = "<"
    INC = "+"
    DEC = "-"
    OUTPUT = "."
    INPUT = ","
    LOOP_START = "["
    LOOP_END = "]"

    @property
    def symbol(self) -> str:
        return self.value

    @property
    def is_jump(self) -> bool:
        return self in (Command.LOOP_START, Command.LOOP_END)


@dataclass(frozen=True)
class Instruction:
    """One resolved instruction; jumps carry their partner's index."""

    command: Command
    target: Optional[int] = None

    def __repr__(self) -> str:  # pragma: no cover - representation helper
        if self.target is None:
            return f"<{self.command.name}>"
        return f"<{self.command.name}->{self.target}>"


class Program:
    """Immutable, fully linked instruction list produced by the loader."""

    __slots__ = ("_instructions",)

    def __init__(self, instructions: Iterable[Instruction] = ()):
        self._instructions = tuple(instructions)

    @property
    def instructions(self) -> tuple[Instruction, ...]:
        return self._instructions

    def __len__(self) -> int:
        return len(self._instructions)

    def __iter__(self) -> Iterator[Instruction]:
        return iter(self._instructions)

    def __getitem__(self, index: int) -> Instruction:
        return self._instructions[index]

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Program):
            return NotImplemented
        return self._instructions == other._instructions

    def __hash__(self) -> int:
        return hash(self._instructions)

    def __repr__(self) -> str:  # pragma: no cover - representation helper
        return f"Program({len(self._instructions)} instructions)"

    def to_source(self) -> str:
        """Return the canonical program text, without whitespace."""

        return "".join(instr.command.symbol for instr in self._instructions)

    def digest(self) -> str:
        return hashlib.sha256(self.to_source().encode("ascii")).hexdigest()


class Tape:
    """Zero-default, right-growing byte memory for a single run."""

    def __init__(self) -> None:
        self._cells = bytearray()

    def _ensure(self, index: int) -> None:
        if index >= len(self._cells):
            self._cells.extend(bytes(index + 1 - len(self._cells)))

    def inc(self, index: int) -> None:
        self._ensure(index)
        self._cells[index] = (self._cells[index] + 1) % CELL_MODULUS

    def dec(self, index: int) -> None:
        self._ensure(index)
        self._cells[index] = (self._cells[index] - 1) % CELL_MODULUS

    def set(self, index: int, value: int) -> None:
        if not 0 <= value < CELL_MODULUS:
            raise ValueError(f"Cell value out of range: {value}")
        self._ensure(index)
        self._cells[index] = value

    def get(self, index: int) -> int:
        if index < len(self._cells):
            return self._cells[index]
        return 0

    def __len__(self) -> int:
        return len(self._cells)

    def snapshot(self) -> bytes:
        return bytes(self._cells)

    def __repr__(self) -> str:  # pragma: no cover - representation helper
        return f"Tape(len={len(self._cells)})"


__all__ = [
    "Command",
    "Instruction",
    "Program",
    "Tape",
]
