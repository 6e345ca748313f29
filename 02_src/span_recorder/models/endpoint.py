"""Network participant models."""

import ipaddress
import socket
from dataclasses import dataclass


class InetAddress:
    """Host address carried by address annotations."""

    def __init__(self, addr: str):
        self.addr = addr

    def ipv4(self) -> str | None:
        """Dotted IPv4 form of the address, None for IPv6 or garbage."""
        try:
            ip = ipaddress.ip_address(self.addr)
        except ValueError:
            return None
        if isinstance(ip, ipaddress.IPv4Address):
            return str(ip)
        return None

    @classmethod
    def local(cls) -> "InetAddress":
        """Best-effort address of this host."""
        try:
            return cls(socket.gethostbyname(socket.gethostname()))
        except OSError:
            return cls("127.0.0.1")

    def __eq__(self, other: object) -> bool:
        return isinstance(other, InetAddress) and other.addr == self.addr

    def __hash__(self) -> int:
        return hash(self.addr)

    def __repr__(self) -> str:
        return f"InetAddress({self.addr!r})"


@dataclass
class Endpoint:
    """Describes a network participant. Mutable until the span is flushed."""

    service_name: str | None = None
    ipv4: str | None = None
    port: int | None = None

    def set_service_name(self, service_name: str | None) -> None:
        self.service_name = service_name

    def set_ipv4(self, ipv4: str | None) -> None:
        self.ipv4 = ipv4

    def set_port(self, port: int | None) -> None:
        self.port = port

    def is_empty(self) -> bool:
        """True when no field is set."""
        return self.service_name is None and self.ipv4 is None and self.port is None
