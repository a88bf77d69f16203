"""
Input and output collaborators.

Sources hand the machine one symbol at a time as an int (None at end of
input); sinks accept one int per OUTPUT and write it straight away.
"""

import io
from typing import List, Optional, Union

MAX_CODEPOINT = 0x10FFFF


def to_char(value: int) -> str:
    """Text form of a cell value; wide values past Unicode keep their low byte."""
    if value > MAX_CODEPOINT:
        value &= 0xFF
    return chr(value)


def _is_binary(stream) -> bool:
    if isinstance(stream, (io.RawIOBase, io.BufferedIOBase)):
        return True
    return 'b' in getattr(stream, 'mode', '')


class BufferInput:
    """Reads successive symbols from an in-memory str or bytes."""

    def __init__(self, data: Union[str, bytes] = ""):
        if isinstance(data, str):
            self.data = [ord(c) for c in data]
        else:
            self.data = list(data)
        self.index = 0

    def read(self) -> Optional[int]:
        if self.index >= len(self.data):
            return None
        value = self.data[self.index]
        self.index += 1
        return value

    @property
    def remaining(self) -> int:
        return len(self.data) - self.index


class StreamInput:
    """Blocking one-symbol reads from a file object (text or binary)."""

    def __init__(self, stream):
        self.stream = stream

    def read(self) -> Optional[int]:
        chunk = self.stream.read(1)
        if not chunk:
            return None
        if isinstance(chunk, bytes):
            return chunk[0]
        return ord(chunk)

    def __iter__(self):
        while True:
            value = self.read()
            if value is None:
                return
            yield value


class BufferOutput:
    """Collects emitted values in memory."""

    def __init__(self):
        self.values: List[int] = []

    def write(self, value: int):
        self.values.append(value)

    @property
    def text(self) -> str:
        return ''.join(to_char(v) for v in self.values)

    def __len__(self):
        return len(self.values)


class StreamOutput:
    """Writes each emitted value to a file object and flushes it."""

    def __init__(self, stream):
        self.stream = stream
        self.binary = _is_binary(stream)

    def write(self, value: int):
        if self.binary:
            self.stream.write(bytes([value & 0xFF]))
        else:
            self.stream.write(to_char(value))
        self.stream.flush()
