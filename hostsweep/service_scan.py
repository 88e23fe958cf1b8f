"""Identify the services listening on open ports."""

from __future__ import annotations

import ipaddress
import json
import socket
import threading
import time
from collections.abc import Iterable, Sequence
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from typing import TypeVar

import requests
from tqdm import tqdm

from hostsweep.database import DatabaseResult
from hostsweep.http_probe import scan_http, scan_https
from hostsweep.records import PortScanResult
from hostsweep.signatures_extra import service_patterns

IPAddress = ipaddress.IPv4Address | ipaddress.IPv6Address
T = TypeVar("T")

HTTP_PORTS = frozenset({80, 8080, *range(8081, 8090)})
HTTPS_PORTS = frozenset({443, 8443})
BASIC_PROBE = b"\x00\n"

_WEB_PROBES = {port: ("http", scan_http) for port in HTTP_PORTS} | {
    port: ("https", scan_https) for port in HTTPS_PORTS
}
_UNKNOWN = ("tcp", "")
_READ_SIZE = 4096
_READ_ATTEMPTS = 3
_READ_PAUSE = 0.05


@dataclass
class ServiceScanResult:
    """Services identified on one host, keyed by port."""

    ip: IPAddress
    open_ports: list[int] = field(default_factory=list)
    services: dict[int, tuple[str, str]] = field(default_factory=dict)

    def to_database(self) -> DatabaseResult:
        services = json.dumps(
            {str(port): list(service) for port, service in self.services.items()},
            separators=(",", ":"),
            ensure_ascii=False,
        )
        return DatabaseResult(id=str(self.ip), ports=list(self.open_ports), services=services)


def identify(ip: IPAddress, port: int, timeout: float) -> tuple[str, str]:
    """Return ``(service name, banner)`` for one open port."""
    web = _WEB_PROBES.get(port)
    if web is not None:
        tag, fetch = web
        try:
            return tag, fetch(ip, port, timeout)
        except requests.RequestException:
            pass
    return basic_identify(ip, port, timeout) or _UNKNOWN


def split_into_chunks(items: Iterable[T], num_chunks: int) -> list[list[T]]:
    """Split ``items`` into at most ``num_chunks`` contiguous, nearly equal parts."""
    if num_chunks < 1:
        raise ValueError("num_chunks must be positive")
    items = list(items)
    size = -(-len(items) // num_chunks)
    if size == 0:
        return []
    return [items[start:start + size] for start in range(0, len(items), size)]


def scan_services(
    port_scan_results: Iterable[PortScanResult], num_threads: int, timeout: float
) -> list[ServiceScanResult]:
    """Identify the service on every open port, using ``num_threads`` workers."""
    hosts: Sequence[PortScanResult] = list(port_scan_results)
    results = [ServiceScanResult(ip=host.ip) for host in hosts]
    chunks = split_into_chunks(hosts, num_threads)
    lock = threading.Lock()

    with tqdm(total=sum(len(host.open_ports) for host in hosts), leave=False) as progress:

        def work(chunk: list[PortScanResult]) -> None:
            for host in chunk:
                for port in host.open_ports:
                    service = identify(host.ip, port, timeout)
                    with lock:
                        target = next((r for r in results if r.ip == host.ip), None)
                        if target is not None:
                            target.open_ports.append(port)
                            target.services[port] = service
                        progress.update(1)

        with ThreadPoolExecutor(max_workers=max(1, len(chunks))) as executor:
            list(executor.map(work, chunks))

    for result in results:
        print(result)
    return results


def try_connect(ip: IPAddress, port: int, timeout: float, probe: bytes) -> bytes | None:
    """Connect, send ``probe`` if any, and return what the peer sends back.

    Returns None if the connection or the write fails.
    """
    try:
        sock = socket.create_connection((str(ip), port), timeout=timeout)
    except OSError:
        return None
    with sock:
        if probe:
            try:
                sock.send(probe)
            except OSError:
                return None
        chunks: list[bytes] = []
        for _ in range(_READ_ATTEMPTS):
            try:
                data = sock.recv(_READ_SIZE)
            except OSError:
                break
            if not data:
                break
            chunks.append(data)
            if len(data) < _READ_SIZE:
                break
            time.sleep(_READ_PAUSE)
        return b"".join(chunks)


def basic_identify(ip: IPAddress, port: int, timeout: float) -> tuple[str, str] | None:
    """Identify a service from its banner; None if the port cannot be reached."""
    response = try_connect(ip, port, timeout, BASIC_PROBE)
    if response is None:
        return None
    if response:
        name = identify_service_from_response(response)
        if name is not None:
            return name, response.decode("utf-8", errors="replace")
    return _UNKNOWN


def identify_service_from_response(response: bytes) -> str | None:
    """Name the service a banner belongs to, or None if it is not recognised."""
    try:
        text = response.decode("utf-8")
    except UnicodeDecodeError:
        pass
    else:
        for pattern, name in service_patterns():
            if pattern.search(text):
                return name

    if len(response) >= 3 and response[0] == 0x16 and response[1] in (0x03, 0x02):
        return "ssl/tls"
    if len(response) >= 5 and response[0] == 0x4A and response[1] == 0x00:
        return "mysql"
    if len(response) >= 4 and response[:4] == b"\x02\x00\x00\x00":
        return "mongodb"
    return None