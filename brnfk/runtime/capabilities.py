"""Input and output capabilities handed to the execution engine.

An input capability is any iterator of ints in ``0..255``; the engine asks
for one value per ``,`` and treats ``StopIteration`` as end of input. An
output capability is any object with a ``write(value)`` method accepting one
byte value per ``.``.
"""
from __future__ import annotations

import sys
from typing import BinaryIO, Iterable, Iterator

from ..constants import DEFAULT_INPUT_MODE


def _stdin() -> BinaryIO:
    return sys.stdin.buffer


def _stdout() -> BinaryIO:
    return sys.stdout.buffer


class LineInput:
    """Console input: each request reads one line and yields its first byte.

    The remainder of the line is discarded. An empty read is end of input, so
    a bare newline still yields byte 10.
    """

    def __init__(self, stream: BinaryIO | None = None) -> None:
        self._stream = stream

    def __iter__(self) -> Iterator[int]:
        return self

    def __next__(self) -> int:
        stream = self._stream if self._stream is not None else _stdin()
        line = stream.readline()
        if not line:
            raise StopIteration
        return line[0]


class StreamInput:
    """Raw input: each request consumes exactly one byte of the stream."""

    def __init__(self, stream: BinaryIO | None = None) -> None:
        self._stream = stream

    def __iter__(self) -> Iterator[int]:
        return self

    def __next__(self) -> int:
        stream = self._stream if self._stream is not None else _stdin()
        chunk = stream.read(1)
        if not chunk:
            raise StopIteration
        return chunk[0]


class BufferOutput:
    """Records every emitted byte in memory."""

    def __init__(self) -> None:
        self._buffer = bytearray()

    def write(self, value: int) -> None:
        self._buffer.append(value)

    def getvalue(self) -> bytes:
        return bytes(self._buffer)

    def __len__(self) -> int:
        return len(self._buffer)


class StreamOutput:
    """Writes each byte to a binary stream and flushes it immediately."""

    def __init__(self, stream: BinaryIO | None = None) -> None:
        self._stream = stream

    def write(self, value: int) -> None:
        stream = self._stream if self._stream is not None else _stdout()
        stream.write(bytes((value,)))
        stream.flush()


INPUT_MODES = {
    "line": LineInput,
    "stream": StreamInput,
}


def create_input(mode: str = DEFAULT_INPUT_MODE, stream: BinaryIO | None = None):
    try:
        factory = INPUT_MODES[mode]
    except KeyError:
        raise ValueError(f"Unknown input mode: {mode}") from None
    return factory(stream)


def as_input(source: Iterable[int] | None) -> Iterator[int]:
    """Normalise *source* to an iterator; ``None`` means no input at all.

    Used by the in-memory helpers; :class:`TapeVM` itself reads the console
    when it is given no input.
    """

    if source is None:
        return iter(())
    return iter(source)


__all__ = [
    "BufferOutput",
    "INPUT_MODES",
    "LineInput",
    "StreamInput",
    "StreamOutput",
    "as_input",
    "create_input",
]
