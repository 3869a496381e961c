"""32-bit sequence numbers that wrap around relative to a zero point."""

from __future__ import annotations

from dataclasses import dataclass

_MOD32 = 1 << 32
_MASK64 = (1 << 64) - 1


@dataclass(frozen=True)
class Wrap32:
    """A 32-bit unsigned integer that starts at an arbitrary zero point and wraps at 2**32."""

    raw_value: int = 0

    def __post_init__(self) -> None:
        object.__setattr__(self, "raw_value", self.raw_value % _MOD32)

    @classmethod
    def wrap(cls, n: int, zero_point: Wrap32) -> Wrap32:
        """Wrap the absolute sequence number ``n`` relative to ``zero_point``."""
        return cls((n + zero_point.raw_value) % _MOD32)

    def unwrap(self, zero_point: Wrap32, checkpoint: int) -> int:
        """Return the absolute sequence number that wraps to this value closest to ``checkpoint``."""
        offset = (self.raw_value - zero_point.raw_value) % _MOD32
        if checkpoint > offset:
            real_checkpoint = (checkpoint - offset + (_MOD32 >> 1)) & _MASK64
            wrap_count = real_checkpoint // _MOD32
            return (wrap_count * _MOD32 + offset) & _MASK64
        return offset

    def __add__(self, n: int) -> Wrap32:
        return Wrap32((self.raw_value + n) % _MOD32)