import random

import pytest

from minnow.byte_stream import ByteStream, read
from minnow.reassembler import Reassembler


def ins(index, data, last=False):
    return ("insert", index, data, last)


def state(pushed, pending=None):
    return ("state", pushed, pending)


def reads(expected):
    return ("read", expected)


def closed(value):
    return ("closed", value)


def finished(value):
    return ("finished", value)


SCENARIOS = {
    "all within capacity": (2, [
        ins(0, b"ab"), state(2, 0), reads(b"ab"),
        ins(2, b"cd"), state(4, 0), reads(b"cd"),
        ins(4, b"ef"), state(6, 0), reads(b"ef"),
    ]),
    "insert beyond capacity": (2, [
        ins(0, b"ab"), state(2, 0),
        ins(2, b"cd"), state(2, 0),
        reads(b"ab"), state(2, 0),
        ins(2, b"cd"), state(4, 0),
        reads(b"cd"),
    ]),
    "overlapping inserts": (1, [
        ins(0, b"ab"), state(1, 0),
        ins(0, b"ab"), state(1, 0),
        reads(b"a"), state(1, 0),
        ins(0, b"abc"), state(2, 0),
        reads(b"b"), state(2, 0),
    ]),
    "insert beyond capacity repeated with different data": (2, [
        ins(1, b"b"), state(0, 1),
        ins(2, b"bX"), state(0, 1),
        ins(0, b"a"), state(2, 0), reads(b"ab"),
        ins(1, b"bc"), state(3, 0), reads(b"c"),
    ]),
    "dup 1": (65000, [
        ins(0, b"abcd"), state(4), reads(b"abcd"), finished(False),
        ins(0, b"abcd"), state(4), reads(b""), finished(False),
    ]),
    "dup 2": (65000, [
        ins(0, b"abcd"), state(4), reads(b"abcd"), finished(False),
        ins(4, b"abcd"), state(8), reads(b"abcd"), finished(False),
        ins(0, b"abcd"), state(8), reads(b""), finished(False),
        ins(4, b"abcd"), state(8), reads(b""), finished(False),
    ]),
    "dup 4": (65000, [
        ins(0, b"abcd"), state(4), reads(b"abcd"), finished(False),
        ins(0, b"abcdef"), state(6), reads(b"ef"), finished(False),
    ]),
    "overlapping assembled/unread section": (1000, [
        ins(0, b"a"), ins(0, b"ab"), state(2), reads(b"ab"),
    ]),
    "overlapping assembled/read section": (1000, [
        ins(0, b"a"), reads(b"a"),
        ins(0, b"ab"), reads(b"b"), state(2),
    ]),
    "overlapping unassembled section to fill hole": (1000, [
        ins(1, b"b"), reads(b""),
        ins(0, b"ab"), reads(b"ab"), state(2, 0),
    ]),
    "overlapping unassembled section": (1000, [
        ins(1, b"b"), reads(b""),
        ins(1, b"bc"), reads(b""), state(0, 2),
    ]),
    "overlapping unassembled section 2": (1000, [
        ins(2, b"c"), reads(b""),
        ins(1, b"bcd"), reads(b""), state(0, 3),
    ]),
    "overlapping multiple unassembled sections": (1000, [
        ins(1, b"b"), ins(3, b"d"), reads(b""),
        ins(1, b"bcde"), reads(b""), state(0, 4),
    ]),
    "insert over existing section": (1000, [
        ins(2, b"c"), ins(1, b"bcd"), reads(b""), state(0, 3),
        ins(0, b"a"), reads(b"abcd"), state(4, 0),
    ]),
    "insert within existing section": (1000, [
        ins(1, b"bcd"), ins(2, b"c"), reads(b""), state(0, 3),
        ins(0, b"a"), reads(b"abcd"), state(4, 0),
    ]),
    "hole filled with overlap": (20, [
        ins(5, b"fgh"), state(0), reads(b""), finished(False),
        ins(0, b"abc"), state(3),
        ins(0, b"abcdef"), state(8, 0), reads(b"abcdefgh"),
    ]),
    "multiple overlaps": (1000, [
        ins(2, b"c"), ins(4, b"e"), reads(b""), state(0, 2),
        ins(1, b"bcdef"), reads(b""), state(0, 5),
        ins(0, b"a"), reads(b"abcdef"), state(6, 0),
    ]),
    "overlap between two pending": (1000, [
        ins(1, b"bc"), ins(4, b"ef"), reads(b""), state(0, 4),
        ins(2, b"cde"), reads(b""), state(0, 5),
        ins(0, b"a"), reads(b"abcdef"), state(6, 0),
    ]),
    "exact copy": (1000, [
        ins(1, b"b"), reads(b""), state(0, 1),
        ins(1, b"b"), reads(b""), state(0, 1),
        ins(0, b"a"), reads(b"ab"), state(2, 0),
    ]),
    "yet another overlap test": (150, [
        ins(4, b"efgh"), state(0, 4),
        ins(14, b"op"), state(0, 6),
        ins(18, b"s"), state(0, 7),
        ins(0, b"a"), state(1, 7),
        ins(0, b"abcde"), state(8, 3),
        ins(14, b"opqrst"), state(8, 6),
        ins(14, b"op"), state(8, 6),
        ins(8, b"ijklmn"), state(20, 0),
    ]),
    "small capacity with overlapping insert": (2, [
        ins(1, b"bc"), reads(b""), state(0, 1),
        ins(0, b"a"), reads(b"ab"), state(2, 0),
    ]),
    "overlapping multiple unassembled sections 2": (1000, [
        ins(1, b"bcd"), ins(2, b"cde"), reads(b""), state(0, 4),
        ins(0, b"a"), reads(b"abcde"), state(5, 0),
    ]),
    "last substring closes stream": (100, [
        ins(3, b"def", True), closed(False),
        ins(0, b"abc"), ins(3, b""), closed(True),
        reads(b"abcdef"), finished(True),
    ]),
    "empty last substring at start closes stream": (10, [
        ins(0, b"", True), closed(True), finished(True),
    ]),
}


@pytest.mark.parametrize(
    "capacity, steps",
    [pytest.param(cap, steps, id=name) for name, (cap, steps) in SCENARIOS.items()],
)
def test_scenario(capacity, steps):
    stream = ByteStream(capacity)
    reassembler = Reassembler()
    for step in steps:
        match step:
            case ("insert", index, data, last):
                reassembler.insert(index, data, last, stream)
            case ("state", pushed, pending):
                assert stream.bytes_pushed() == pushed
                if pending is not None:
                    assert reassembler.bytes_pending() == pending
            case ("read", expected):
                assert read(stream, stream.bytes_buffered()) == expected
            case ("closed", value):
                assert stream.is_closed() == value
            case ("finished", value):
                assert stream.is_finished() == value


def test_dup_3():
    rng = random.Random(777)
    stream = ByteStream(65000)
    reassembler = Reassembler()
    data = b"abcdefgh"
    reassembler.insert(0, data, False, stream)
    assert stream.bytes_pushed() == 8
    assert read(stream, stream.bytes_buffered()) == data
    for _ in range(1000):
        start = rng.randint(0, 8)
        end = rng.randint(start, 8)
        reassembler.insert(start, data[start:end], False, stream)
        assert stream.bytes_pushed() == 8
        assert read(stream, stream.bytes_buffered()) == b""
        assert not stream.is_finished()