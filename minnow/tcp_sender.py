"""The sending half of a TCP endpoint."""

from __future__ import annotations

import random
from collections import deque
from dataclasses import dataclass
from typing import Optional

from minnow.byte_stream import ByteStream, read
from minnow.messages import TCPConfig, TCPReceiverMessage, TCPSenderMessage
from minnow.wrapping_integers import Wrap32

_MASK64 = (1 << 64) - 1


@dataclass
class _Timer:
    ticks: int = 0
    running: bool = False

    def expired(self, ms_since_last_tick: int, timeout: int) -> bool:
        self.ticks += ms_since_last_tick
        return self.running and self.ticks >= timeout

    def start(self) -> None:
        self.ticks = 0
        self.running = True

    def stop(self) -> None:
        self.running = False


class TCPSender:
    """Segments an outbound stream, tracks outstanding segments and retransmits on timeout."""

    def __init__(self, initial_rto_ms: int, fixed_isn: Optional[Wrap32] = None) -> None:
        if fixed_isn is None:
            fixed_isn = Wrap32(random.SystemRandom().getrandbits(32))
        self._isn = fixed_isn
        self._initial_rto_ms = initial_rto_ms
        self._rto_ms = initial_rto_ms
        self._consecutive_retransmissions = 0
        self._ackno = 0
        self._next_seqno = 0
        self._window_size = 1
        self._bytes_in_flight = 0
        self._fin_sent = False
        self._timer = _Timer()
        self._ready: deque[TCPSenderMessage] = deque()
        self._outstanding: deque[TCPSenderMessage] = deque()

    def sequence_numbers_in_flight(self) -> int:
        """How many sequence numbers are sent but not yet acknowledged."""
        return self._bytes_in_flight

    def consecutive_retransmissions(self) -> int:
        """How many retransmissions have happened since the last new acknowledgment."""
        return self._consecutive_retransmissions

    def maybe_send(self) -> Optional[TCPSenderMessage]:
        """Return the next segment to transmit, or None if there is nothing to send now."""
        if not self._ready:
            return None
        if (
            self._consecutive_retransmissions
            and self._timer.running
            and self._timer.ticks > 0
        ):
            return None
        return self._ready.popleft()

    def push(self, outbound_stream: ByteStream) -> None:
        """Fill the receiver's window with segments read from ``outbound_stream``."""
        if self._fin_sent:
            return
        window = self._window_size or 1
        space = (self._ackno + window - self._next_seqno) & _MASK64
        while space > 0 and not self._fin_sent:
            syn = False
            if not self._next_seqno:
                syn = True
                space -= 1
            seqno = Wrap32.wrap(self._next_seqno, self._isn)
            payload = read(outbound_stream, min(space, TCPConfig.MAX_PAYLOAD_SIZE))
            space -= len(payload)
            fin = False
            if outbound_stream.is_finished() and space > 0:
                fin = True
                self._fin_sent = True
                space -= 1
            message = TCPSenderMessage(seqno=seqno, syn=syn, payload=payload, fin=fin)
            length = message.sequence_length()
            if not length:
                return
            self._ready.append(message)
            if not self._timer.running:
                self._timer.start()
            self._outstanding.append(message)
            self._next_seqno += length
            self._bytes_in_flight += length

    def send_empty_message(self) -> TCPSenderMessage:
        """A segment carrying no sequence numbers, stamped with the next seqno."""
        return TCPSenderMessage(seqno=Wrap32.wrap(self._next_seqno, self._isn))

    def receive(self, msg: TCPReceiverMessage) -> None:
        """Process an acknowledgment and window advertisement from the peer."""
        if msg.ackno is not None:
            self._ackno = msg.ackno.unwrap(self._isn, self._next_seqno)
        if self._ackno > self._next_seqno:
            return
        self._window_size = msg.window_size
        acknowledged = False
        while self._outstanding:
            oldest = self._outstanding[0]
            length = oldest.sequence_length()
            seqno = oldest.seqno.unwrap(self._isn, self._next_seqno)
            if seqno + length > self._ackno:
                break
            self._outstanding.popleft()
            self._bytes_in_flight -= length
            acknowledged = True
        if acknowledged:
            self._rto_ms = self._initial_rto_ms
            if self._outstanding:
                self._timer.start()
            else:
                self._timer.stop()
            self._consecutive_retransmissions = 0

    def tick(self, ms_since_last_tick: int) -> None:
        """Advance time and retransmit the oldest outstanding segment on timeout."""
        if (
            not self._timer.expired(ms_since_last_tick, self._rto_ms)
            or not self._outstanding
        ):
            return
        self._ready.append(self._outstanding[0])
        if self._window_size != 0:
            self._rto_ms <<= 1
        self._consecutive_retransmissions += 1
        self.maybe_send()
        self._timer.start()