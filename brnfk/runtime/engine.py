"""Tape-based virtual machine executing loaded programs."""

from __future__ import annotations

from dataclasses import dataclass
import logging
from typing import Iterable, Optional

from ..constants import CELL_MODULUS, DEFAULT_UNDERFLOW_POLICY, UNDERFLOW_POLICIES
from .capabilities import BufferOutput, LineInput, StreamOutput, as_input
from .core import Command, Program, Tape
from .errors import ExecutionError, InputExhaustedError, PointerUnderflowError
from .loader import load

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ExecutionResult:
    """Final state of a run that halted normally."""

    steps: int
    data_pointer: int
    tape: bytes


class TapeVM:
    """Interpreter for a loaded :class:`Program`.

    The VM only owns its I/O capabilities and policies. Every call to
    :meth:`run` starts from a fresh tape with both pointers at zero, so one
    VM (and one Program) can be used for any number of runs.

    ``eof`` selects what ``,`` does once the input is exhausted: ``None``
    aborts the run with :class:`InputExhaustedError`, an int stores that
    value. ``underflow`` selects what ``<`` does on cell 0: ``"error"``
    raises :class:`PointerUnderflowError`, ``"saturate"`` leaves the pointer
    at 0.
    """

    def __init__(
        self,
        input: Iterable[int] | None = None,
        output=None,
        *,
        eof: Optional[int] = None,
        underflow: str = DEFAULT_UNDERFLOW_POLICY,
    ):
        if underflow not in UNDERFLOW_POLICIES:
            raise ValueError(f"Unknown underflow policy: {underflow}")
        if eof is not None and not 0 <= eof < CELL_MODULUS:
            raise ValueError(f"EOF value must be a byte, got {eof}")
        self._input = as_input(input if input is not None else LineInput())
        self._output = output if output is not None else StreamOutput()
        self.eof = eof
        self.underflow = underflow

    @property
    def input(self):
        return self._input

    @property
    def output(self):
        return self._output

    def run(self, program: Program) -> ExecutionResult:
        instructions = program.instructions
        length = len(instructions)
        tape = Tape()
        i_ptr = 0
        d_ptr = 0
        steps = 0

        try:
            while i_ptr < length:
                instr = instructions[i_ptr]
                command = instr.command
                steps += 1

                if command is Command.MOVE_RIGHT:
                    d_ptr += 1
                elif command is Command.MOVE_LEFT:
                    if d_ptr == 0:
                        if self.underflow == "error":
                            raise PointerUnderflowError(i_ptr)
                    else:
                        d_ptr -= 1
                elif command is Command.INC:
                    tape.inc(d_ptr)
                elif command is Command.DEC:
                    tape.dec(d_ptr)
                elif command is Command.OUTPUT:
                    self._output.write(tape.get(d_ptr))
                elif command is Command.INPUT:
                    tape.set(d_ptr, self._read(i_ptr))
                elif command is Command.LOOP_START:
                    if tape.get(d_ptr) == 0:
                        i_ptr = instr.target + 1
                        continue
                elif command is Command.LOOP_END:
                    if tape.get(d_ptr) != 0:
                        i_ptr = instr.target + 1
                        continue

                i_ptr += 1
        except ExecutionError as exc:
            logger.debug("run aborted after %d steps: %s", steps, exc)
            raise

        logger.debug("run halted after %d steps, tape length %d", steps, len(tape))
        return ExecutionResult(steps, d_ptr, tape.snapshot())

    def _read(self, i_ptr: int) -> int:
        try:
            return next(self._input)
        except StopIteration:
            if self.eof is None:
                raise InputExhaustedError(i_ptr) from None
            return self.eof


def run_program(program, input=None, output=None, **policies) -> ExecutionResult:
    """Execute *program* once with a fresh VM.

    Unlike :class:`TapeVM`, a missing *input* means no input at all rather
    than the console.
    """

    vm = TapeVM(as_input(input), output, **policies)
    return vm.run(program)


def execute(source, input_data: Iterable[int] | None = b"", **policies) -> bytes:
    """Load *source*, run it against *input_data* and return the output bytes."""

    program = source if isinstance(source, Program) else load(source)
    sink = BufferOutput()
    TapeVM(as_input(input_data), sink, **policies).run(program)
    return sink.getvalue()


__all__ = [
    "ExecutionResult",
    "TapeVM",
    "execute",
    "run_program",
]
