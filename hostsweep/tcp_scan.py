"""Find open TCP ports by sending SYN segments and waiting for SYN+ACK replies."""

from __future__ import annotations

import errno
import ipaddress
import random
import socket
import struct
import sys
import threading
import time
from collections.abc import Iterable, Iterator

import psutil
from tqdm import tqdm

from hostsweep.ping_scanner import checksum
from hostsweep.records import PortScanResult

IPAddress = ipaddress.IPv4Address | ipaddress.IPv6Address

SYN = 0x02
ACK = 0x10
WINDOW = 64240
DEFAULT_TIMEOUT = 3.0
SEND_DELAY = 100e-6
RETRY_DELAY = 0.5

_POLL_INTERVAL = 0.003
_TCP_HEADER = struct.Struct("!HHIIBBHHH")
_PSEUDO_HEADER = struct.Struct("!4s4sBBH")
_CHECKSUM = struct.Struct("!H")
_LOCALHOST = ipaddress.IPv4Address("127.0.0.1")
_IP_FAMILIES = (socket.AF_INET, socket.AF_INET6)


def build_syn_packet(
    source_ip: ipaddress.IPv4Address | str,
    dest_ip: ipaddress.IPv4Address | str,
    source_port: int,
    dest_port: int,
    sequence: int,
) -> bytes:
    """Build a 20-byte TCP SYN segment with its checksum filled in."""
    source = ipaddress.IPv4Address(source_ip)
    dest = ipaddress.IPv4Address(dest_ip)
    for name, port in (("source_port", source_port), ("dest_port", dest_port)):
        if not 0 <= port <= 0xFFFF:
            raise ValueError(f"{name} out of range: {port}")
    if not 0 <= sequence <= 0xFFFFFFFF:
        raise ValueError(f"sequence out of range: {sequence}")
    header = _TCP_HEADER.pack(source_port, dest_port, sequence, 0, 5 << 4, SYN, WINDOW, 0, 0)
    pseudo = _PSEUDO_HEADER.pack(
        source.packed, dest.packed, 0, socket.IPPROTO_TCP, len(header)
    )
    return header[:16] + _CHECKSUM.pack(checksum(pseudo + header)) + header[18:]


def _interface_flags(stats: object) -> set[str]:
    return {flag for flag in getattr(stats, "flags", "").split(",") if flag}


def _interface_addresses(entries: Iterable[object]) -> list[IPAddress]:
    addresses: list[IPAddress] = []
    for entry in entries:
        if entry.family not in _IP_FAMILIES:
            continue
        try:
            addresses.append(ipaddress.ip_address(entry.address.split("%")[0]))
        except ValueError:
            continue
    return addresses


def _usable_interfaces() -> Iterator[tuple[list[IPAddress], bool]]:
    """Yield the addresses and point-to-point flag of every usable interface."""
    all_stats = psutil.net_if_stats()
    for name, entries in psutil.net_if_addrs().items():
        stats = all_stats.get(name)
        if stats is None or not stats.isup:
            continue
        addresses = _interface_addresses(entries)
        if not addresses:
            continue
        flags = _interface_flags(stats)
        if flags:
            loopback = "loopback" in flags
            running = "running" in flags
        else:
            loopback = any(address.is_loopback for address in addresses)
            running = True
        if loopback or not running or "dormant" in flags:
            continue
        yield addresses, "pointopoint" in flags


def select_source_address() -> ipaddress.IPv4Address:
    """Pick the IPv4 source address, preferring a point-to-point (VPN) interface.

    Raises RuntimeError when no suitable interface or address exists.
    """
    interfaces = list(_usable_interfaces())
    chosen = next((addrs for addrs, p2p in interfaces if p2p), None)
    if chosen is None:
        chosen = next((addrs for addrs, p2p in interfaces if not p2p), None)
    if chosen is None:
        raise RuntimeError("No valid network interface found")
    for address in chosen:
        if isinstance(address, ipaddress.IPv4Address):
            return address
    raise RuntimeError("No IPv4 address found")


def _parse_syn_ack(packet: bytes) -> tuple[ipaddress.IPv4Address, int] | None:
    """Sender address and port of a SYN+ACK segment in a raw IPv4 packet."""
    if len(packet) < 20:
        return None
    segment = packet[(packet[0] & 0x0F) * 4:]
    if len(segment) < _TCP_HEADER.size:
        return None
    flags = ((segment[12] & 0x01) << 8) | segment[13]
    if flags != SYN | ACK:
        return None
    (port,) = _CHECKSUM.unpack_from(segment, 0)
    return ipaddress.IPv4Address(packet[12:16]), port


def _receive(
    sock: socket.socket,
    open_ports: dict[IPAddress, list[int]],
    lock: threading.Lock,
    finished: threading.Event,
    timeout: float,
) -> None:
    finish_at: float | None = None
    while True:
        if finish_at is not None:
            if time.monotonic() - finish_at >= timeout:
                break
        elif finished.is_set():
            finish_at = time.monotonic()
            print(f"Waiting {int(timeout)} seconds for timeout...")
        try:
            packet = sock.recv(65535)
        except socket.timeout:
            continue
        except OSError:
            break
        reply = _parse_syn_ack(packet)
        if reply is None:
            continue
        address, port = reply
        print(f"Discovered open port {port} on {address}")
        with lock:
            ports = open_ports.get(address)
            if ports is not None:
                ports.append(port)


def _send(sock: socket.socket, packet: bytes, dest: ipaddress.IPv4Address) -> None:
    while True:
        try:
            sock.sendto(packet, (str(dest), 0))
            return
        except OSError as exc:
            if exc.errno == errno.ENOBUFS:
                time.sleep(RETRY_DELAY)
                continue
            if exc.errno is None:
                print(f"Failed to send packet: {exc}", file=sys.stderr)
            return


def tcp_scan(
    targets: Iterable[IPAddress], ports: Iterable[int], timeout: float = DEFAULT_TIMEOUT
) -> list[PortScanResult]:
    """SYN-scan every port of every target; one result per target, in order.

    Needs permission to open a raw TCP socket; raises OSError otherwise.
    """
    targets = list(targets)
    ports = list(ports)
    source_ip = select_source_address()
    open_ports: dict[IPAddress, list[int]] = {target: [] for target in targets}
    lock = threading.Lock()
    finished = threading.Event()

    with socket.socket(socket.AF_INET, socket.SOCK_RAW, socket.IPPROTO_TCP) as sock:
        sock.settimeout(_POLL_INTERVAL)
        receiver = threading.Thread(
            target=_receive,
            args=(sock, open_ports, lock, finished, timeout),
            daemon=True,
        )
        receiver.start()
        try:
            with tqdm(total=len(targets) * len(ports), leave=False) as progress:
                for target in targets:
                    dest = ipaddress.IPv4Address(str(target))
                    source = _LOCALHOST if dest.is_loopback else source_ip
                    for port in ports:
                        packet = build_syn_packet(
                            source,
                            dest,
                            random.randint(1, 0xFFFF),
                            port & 0xFFFF,
                            random.getrandbits(32),
                        )
                        _send(sock, packet, dest)
                        progress.update(1)
                        time.sleep(SEND_DELAY)
        finally:
            finished.set()
            receiver.join()

    with lock:
        return [
            PortScanResult(ip=target, open_ports=sorted(set(open_ports[target])))
            for target in targets
        ]