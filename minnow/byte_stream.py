"""A flow-controlled in-memory byte stream with writer and reader sides."""

from __future__ import annotations


class ByteStream:
    """A bounded byte pipe: bytes pushed by a writer are peeked and popped by a reader."""

    def __init__(self, capacity: int) -> None:
        self._capacity = capacity
        self._buffer = bytearray()
        self._closed = False
        self._error = False
        self._bytes_pushed = 0
        self._bytes_popped = 0

    def reader(self) -> ByteStream:
        """The reading side of the stream."""
        return self

    def writer(self) -> ByteStream:
        """The writing side of the stream."""
        return self

    # Writer side

    def push(self, data: bytes) -> None:
        """Push as much of ``data`` as the available capacity allows."""
        accepted = data[: self.available_capacity()]
        self._buffer.extend(accepted)
        self._bytes_pushed += len(accepted)

    def close(self) -> None:
        """Signal that nothing more will be written."""
        self._closed = True

    def set_error(self) -> None:
        """Signal that the stream suffered an error."""
        self._error = True

    def is_closed(self) -> bool:
        return self._closed

    def available_capacity(self) -> int:
        return self._capacity - len(self._buffer)

    def bytes_pushed(self) -> int:
        return self._bytes_pushed

    # Reader side

    def peek(self) -> bytes:
        """Return the bytes currently buffered, without removing them."""
        return bytes(self._buffer)

    def pop(self, length: int) -> None:
        """Remove up to ``length`` bytes from the front of the buffer."""
        size = min(length, len(self._buffer))
        del self._buffer[:size]
        self._bytes_popped += size

    def is_finished(self) -> bool:
        """True once the stream is closed and fully popped."""
        return self._closed and not self._buffer

    def has_error(self) -> bool:
        return self._error

    def bytes_buffered(self) -> int:
        return len(self._buffer)

    def bytes_popped(self) -> int:
        return self._bytes_popped


def read(reader: ByteStream, length: int) -> bytes:
    """Peek and pop up to ``length`` bytes from ``reader``."""
    out = bytearray()
    while reader.bytes_buffered() and len(out) < length:
        view = reader.peek()
        if not view:
            raise RuntimeError("peek() returned no bytes while data is buffered")
        view = view[: length - len(out)]
        out.extend(view)
        reader.pop(len(view))
    return bytes(out)