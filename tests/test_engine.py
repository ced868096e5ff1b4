"""Tests for :mod:`brnfk.runtime.engine`."""

import io
import sys

import pytest

from brnfk.runtime.capabilities import BufferOutput
from brnfk.runtime.engine import ExecutionResult, TapeVM, execute, run_program
from brnfk.runtime.errors import (
    ExecutionError,
    InputExhaustedError,
    PointerUnderflowError,
)
from brnfk.runtime.loader import load

HELLO_WORLD = (
    b"++++++++[>++++[>++>+++>+++>+<<<<-]>+>+>->>+[<]<-]>>.>---.+++++++..+++.>>."
    b"<-.<.+++.------.--------.>>+.>++."
)


def test_hello_world():
    assert execute(HELLO_WORLD) == b"Hello World!\n"


def test_echo_single_byte():
    assert execute(b",.", input_data=[65]) == b"A"


def test_run_returns_final_state():
    program = load(b"+++>++")
    result = run_program(program, input=[], output=BufferOutput())

    assert isinstance(result, ExecutionResult)
    assert result.steps == 6
    assert result.data_pointer == 1
    assert result.tape == b"\x03\x02"


def test_empty_program_halts_immediately():
    result = TapeVM([], BufferOutput()).run(load(b""))

    assert result == ExecutionResult(0, 0, b"")


def test_loop_skipped_when_cell_is_zero():
    program = load(b"[.]+.")
    sink = BufferOutput()
    result = TapeVM([], sink).run(program)

    assert sink.getvalue() == b"\x01"
    assert result.steps == 3


def test_loop_runs_until_cell_is_zero():
    assert execute(b"+++[>++<-]>.") == b"\x06"


def test_nested_loops_multiply():
    assert execute(b"++[>+++[>++<-]<-]>>.") == bytes([12])


def test_cell_arithmetic_wraps_during_run():
    assert execute(b"-.+.") == b"\xff\x00"


def test_output_reads_unwritten_cells_as_zero():
    assert execute(b">>>>.") == b"\x00"


def test_output_is_emitted_in_program_order():
    class Recorder:
        def __init__(self):
            self.values = []

        def write(self, value):
            self.values.append(value)

    recorder = Recorder()
    TapeVM([], recorder).run(load(b"+.+.+."))

    assert recorder.values == [1, 2, 3]


def test_input_overwrites_cell():
    assert execute(b"+++++,.", input_data=b"\x07") == b"\x07"


def test_input_exhaustion_aborts_by_default():
    with pytest.raises(InputExhaustedError) as excinfo:
        execute(b"+.,.", input_data=b"")

    assert excinfo.value.index == 2
    assert isinstance(excinfo.value, ExecutionError)


def test_input_exhaustion_with_default_value():
    assert execute(b",.,.", input_data=b"z", eof=0) == b"z\x00"
    assert execute(b",.", input_data=b"", eof=255) == b"\xff"


def test_pointer_underflow_is_fatal_by_default():
    with pytest.raises(PointerUnderflowError) as excinfo:
        execute(b"+><<")

    assert excinfo.value.index == 3


def test_pointer_underflow_saturates_when_requested():
    program = load(b"<<+.>+<.")
    sink = BufferOutput()
    result = TapeVM([], sink, underflow="saturate").run(program)

    assert sink.getvalue() == b"\x01\x01"
    assert result.data_pointer == 0
    assert result.tape == b"\x01\x01"


def test_invalid_policies_are_rejected():
    with pytest.raises(ValueError, match="underflow"):
        TapeVM([], BufferOutput(), underflow="wrap")
    with pytest.raises(ValueError, match="EOF"):
        TapeVM([], BufferOutput(), eof=256)


def test_input_values_outside_byte_range_fail():
    with pytest.raises(ValueError):
        execute(b",", input_data=[300])


def test_program_can_be_reused_across_runs():
    program = load(b",[.-]")

    first = execute(program, input_data=b"\x03")
    second = execute(program, input_data=b"\x02")

    assert first == b"\x03\x02\x01"
    assert second == b"\x02\x01"


def test_each_run_starts_with_fresh_tape():
    vm = TapeVM([], BufferOutput())
    program = load(b"+>++")

    first = vm.run(program)
    second = vm.run(program)

    assert first == second
    assert vm.output.getvalue() == b""


def test_vm_input_is_shared_between_runs():
    vm = TapeVM(b"ab", BufferOutput())
    program = load(b",.")

    vm.run(program)
    vm.run(program)

    assert vm.output.getvalue() == b"ab"
    with pytest.raises(InputExhaustedError):
        vm.run(program)


def test_execute_accepts_text_source():
    assert execute("+++ +++ .") == b"\x06"


@pytest.fixture
def console_with_input(monkeypatch):
    stdin = io.TextIOWrapper(io.BytesIO(b"Z\n"))
    monkeypatch.setattr(sys, "stdin", stdin)
    return stdin


def test_execute_without_input_never_reads_console(console_with_input):
    with pytest.raises(InputExhaustedError) as excinfo:
        execute(b",", input_data=None)

    assert excinfo.value.index == 0
    assert console_with_input.buffer.tell() == 0
    assert execute(b",.", input_data=None, eof=0) == b"\x00"


def test_run_program_without_input_never_reads_console(console_with_input):
    with pytest.raises(InputExhaustedError):
        run_program(load(b",."), output=BufferOutput())

    assert console_with_input.buffer.tell() == 0


def test_vm_without_input_reads_console(console_with_input):
    sink = BufferOutput()
    TapeVM(output=sink).run(load(b",."))

    assert sink.getvalue() == b"Z"
