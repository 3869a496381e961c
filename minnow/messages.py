"""Messages exchanged between TCP senders and receivers, and TCP settings."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import ClassVar, Optional

from minnow.wrapping_integers import Wrap32


@dataclass
class TCPSenderMessage:
    """A segment sent from a TCP sender to its peer's receiver."""

    seqno: Wrap32 = field(default_factory=Wrap32)
    syn: bool = False
    payload: bytes = b""
    fin: bool = False

    def sequence_length(self) -> int:
        """How many sequence numbers this segment occupies."""
        return int(self.syn) + len(self.payload) + int(self.fin)


@dataclass
class TCPReceiverMessage:
    """Acknowledgment number and window sent from a TCP receiver back to the sender."""

    ackno: Optional[Wrap32] = None
    window_size: int = 0


@dataclass
class TCPConfig:
    """Settings for a TCP sender and receiver."""

    DEFAULT_CAPACITY: ClassVar[int] = 64000
    MAX_PAYLOAD_SIZE: ClassVar[int] = 1000
    TIMEOUT_DFLT: ClassVar[int] = 1000
    MAX_RETX_ATTEMPTS: ClassVar[int] = 8

    rt_timeout: int = TIMEOUT_DFLT
    recv_capacity: int = DEFAULT_CAPACITY
    send_capacity: int = DEFAULT_CAPACITY
    fixed_isn: Optional[Wrap32] = None