import pytest

from brnfk import Tape


@pytest.fixture
def tape():
    return Tape()


def test_unwritten_cells_read_as_zero(tape):
    assert tape.get(0) == 0
    assert tape.get(12345) == 0
    assert len(tape) == 0


def test_set_then_get_round_trips(tape):
    tape.set(7, 200)

    assert tape.get(7) == 200
    assert len(tape) == 8
    assert tape.snapshot() == bytes(7) + bytes([200])


def test_read_past_end_does_not_grow(tape):
    tape.set(3, 1)
    before = len(tape)

    assert tape.get(4) == 0
    assert tape.get(1000) == 0
    assert len(tape) == before


def test_increment_wraps_at_255(tape):
    tape.set(0, 255)
    tape.inc(0)
    assert tape.get(0) == 0


def test_decrement_wraps_at_zero(tape):
    tape.dec(5)
    assert tape.get(5) == 255
    assert len(tape) == 6


def test_inc_grows_and_zero_fills_gap(tape):
    tape.inc(2)

    assert tape.snapshot() == b"\x00\x00\x01"


def test_storage_never_shrinks(tape):
    tape.set(9, 4)
    tape.set(0, 1)
    tape.dec(9)

    assert len(tape) == 10


def test_set_rejects_non_byte_values(tape):
    with pytest.raises(ValueError, match="out of range"):
        tape.set(0, 256)
    with pytest.raises(ValueError):
        tape.set(0, -1)
    assert len(tape) == 0
