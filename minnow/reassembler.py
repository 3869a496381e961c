"""Reassembles indexed, possibly overlapping substrings into a byte stream."""

from __future__ import annotations

from minnow.byte_stream import ByteStream


class Reassembler:
    """Buffers out-of-order substrings and writes them in order into a stream."""

    def __init__(self) -> None:
        self._next_index = 0
        self._eof_index = 0
        self._segments: dict[int, bytes] = {}
        self._pending = 0
        self._eof_seen = False

    def insert(
        self,
        first_index: int,
        data: bytes,
        is_last_substring: bool,
        output: ByteStream,
    ) -> None:
        """Insert a substring starting at ``first_index`` and push what can be assembled."""
        if data:
            first_index, data = self._preprocess(first_index, data, output)

        while self._segments and min(self._segments) == self._next_index:
            segment = self._segments.pop(self._next_index)
            output.push(segment)
            self._pending -= len(segment)

        if is_last_substring:
            self._eof_seen = True
            self._eof_index = first_index + len(data)
        if self._eof_seen and output.writer().bytes_pushed() == self._eof_index:
            output.close()

    def bytes_pending(self) -> int:
        """How many bytes are held in the reassembler itself."""
        return self._pending

    def _preprocess(
        self, first_index: int, data: bytes, output: ByteStream
    ) -> tuple[int, bytes]:
        capacity = output.available_capacity()
        self._next_index = output.writer().bytes_pushed()
        max_index = (
            output.reader().bytes_popped() + output.reader().bytes_buffered() + capacity
        )
        if self._next_index == max_index:
            output.close()
            return first_index, data
        if first_index >= max_index or first_index + len(data) - 1 < self._next_index:
            return first_index, data

        if first_index + len(data) > max_index:
            data = data[: max_index - first_index]
        if first_index < self._next_index < first_index + len(data):
            data = data[self._next_index - first_index :]
            first_index = self._next_index

        if not self._segments:
            self._pending += len(data)
            self._segments[first_index] = data
            return first_index, data

        self._store(first_index, data)
        return first_index, data

    def _store(self, index: int, data: bytes) -> None:
        for key in sorted(self._segments):
            segment = self._segments[key]
            data_end = index + len(data) - 1
            segment_end = key + len(segment) - 1
            if (
                key <= index <= segment_end
                or index <= key <= data_end
                or data_end + 1 == key
            ):
                index, data = self._merge(index, data, key, segment)
                self._pending -= len(segment)
                del self._segments[key]
        self._pending += len(data)
        self._segments[index] = data

    @staticmethod
    def _merge(
        index: int, data: bytes, cached_index: int, cached: bytes
    ) -> tuple[int, bytes]:
        data_tail = index + len(data) - 1
        cached_tail = cached_index + len(cached) - 1
        if data_tail == 0:
            return index, data + cached
        if index < cached_index and data_tail <= cached_tail:
            return index, data[: cached_index - index] + cached
        if index >= cached_index and data_tail > cached_tail:
            return cached_index, cached + data[cached_index + len(cached) - index :]
        if index >= cached_index and data_tail <= cached_tail:
            return cached_index, cached
        return index, data