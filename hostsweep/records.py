"""Result records produced by the ping and port scanners."""

from __future__ import annotations

import ipaddress
from dataclasses import dataclass, field
from datetime import timedelta

from hostsweep.database import DatabaseResult

IPAddress = ipaddress.IPv4Address | ipaddress.IPv6Address


@dataclass
class PingResult:
    """Outcome of pinging one host."""

    host: IPAddress
    is_up: bool = False
    response_time: timedelta | None = None

    def to_database(self) -> DatabaseResult:
        return DatabaseResult(id=str(self.host), ports=[], services="")


@dataclass
class PortScanResult:
    """Open ports found on one host."""

    ip: IPAddress
    open_ports: list[int] = field(default_factory=list)

    def to_database(self) -> DatabaseResult:
        return DatabaseResult(id=str(self.ip), ports=list(self.open_ports), services="")