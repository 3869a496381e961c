"""Byte streams, stream reassembly, wrapping sequence numbers, a TCP sender and receiver, and IPv4 addresses."""

__version__ = "0.1.0"