"""The receiving half of a TCP endpoint."""

from __future__ import annotations

from minnow.byte_stream import ByteStream
from minnow.messages import TCPReceiverMessage, TCPSenderMessage
from minnow.reassembler import Reassembler
from minnow.wrapping_integers import Wrap32

_MASK64 = (1 << 64) - 1
_MAX_WINDOW = 65535


class TCPReceiver:
    """Turns incoming segments into stream bytes and reports acknowledgments and windows."""

    def __init__(self) -> None:
        self._zero_point = Wrap32(0)
        self._syn_seen = False
        self._fin_seen = False

    def receive(
        self,
        message: TCPSenderMessage,
        reassembler: Reassembler,
        inbound_stream: ByteStream,
    ) -> None:
        """Insert the segment's payload into the reassembler at its stream index."""
        if not self._syn_seen:
            if not message.syn:
                return
            self._syn_seen = True
            self._zero_point = message.seqno
        if message.fin:
            self._fin_seen = True
        checkpoint = inbound_stream.writer().bytes_pushed() + 1
        absolute = message.seqno.unwrap(self._zero_point, checkpoint)
        stream_index = (absolute + int(message.syn) - 1) & _MASK64
        reassembler.insert(stream_index, message.payload, message.fin, inbound_stream)

    def send(self, inbound_stream: ByteStream) -> TCPReceiverMessage:
        """Build the acknowledgment and window to report back to the sender."""
        window = min(inbound_stream.available_capacity(), _MAX_WINDOW)
        if not self._syn_seen:
            return TCPReceiverMessage(ackno=None, window_size=window)
        next_absolute = inbound_stream.writer().bytes_pushed() + 1
        if self._fin_seen and inbound_stream.writer().is_closed():
            next_absolute += 1
        return TCPReceiverMessage(
            ackno=self._zero_point + next_absolute, window_size=window
        )