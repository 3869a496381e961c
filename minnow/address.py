"""IPv4 socket addresses and name resolution."""

from __future__ import annotations

import ipaddress
import socket
from dataclasses import dataclass
from typing import Tuple


def _with_context(error: socket.gaierror, attempt: str) -> socket.gaierror:
    code = error.errno if error.errno is not None else 0
    reason = error.strerror or str(error)
    return socket.gaierror(code, f"{attempt}: {reason}")


@dataclass(frozen=True)
class Address:
    """A socket address: an address family and the matching socket-module address tuple."""

    family: int
    sockaddr: Tuple

    @classmethod
    def _lookup(cls, node: str, service: str, flags: int) -> Address:
        try:
            results = socket.getaddrinfo(node, service, socket.AF_INET, 0, 0, flags)
        except socket.gaierror as error:
            raise _with_context(error, f"getaddrinfo({node}, {service})") from error
        if not results:
            raise RuntimeError("getaddrinfo returned successfully but with no results")
        family, _, _, _, sockaddr = results[0]
        return cls(int(family), tuple(sockaddr))

    @classmethod
    def resolve(cls, hostname: str, service: str) -> Address:
        """Resolve a hostname and service name (e.g. "http") to an IPv4 address."""
        return cls._lookup(hostname, service, socket.AI_ALL)

    @classmethod
    def from_ip_port(cls, ip: str, port: int = 0) -> Address:
        """Build an address from a dotted-quad string and a numeric port, without lookups."""
        if not 0 <= port <= 0xFFFF:
            raise ValueError(f"port out of range: {port}")
        return cls._lookup(ip, str(port), socket.AI_NUMERICHOST | socket.AI_NUMERICSERV)

    @classmethod
    def from_ipv4_numeric(cls, ip_address: int) -> Address:
        """Build an address with port 0 from a 32-bit numeric IPv4 address."""
        return cls(socket.AF_INET, (str(ipaddress.IPv4Address(ip_address)), 0))

    def ip_port(self) -> Tuple[str, int]:
        """The numeric IP address string and port."""
        try:
            host, port = socket.getnameinfo(
                self.sockaddr, socket.NI_NUMERICHOST | socket.NI_NUMERICSERV
            )
        except socket.gaierror as error:
            raise _with_context(error, "getnameinfo") from error
        return host, int(port)

    def ip(self) -> str:
        return self.ip_port()[0]

    def port(self) -> int:
        return self.ip_port()[1]

    def ipv4_numeric(self) -> int:
        """The IPv4 address as an integer in host byte order."""
        if self.family != socket.AF_INET or len(self.sockaddr) != 2:
            raise ValueError("ipv4_numeric called on non-IPV4 address")
        return int(ipaddress.IPv4Address(self.sockaddr[0]))

    def __str__(self) -> str:
        ip, port = self.ip_port()
        return f"{ip}:{port}"