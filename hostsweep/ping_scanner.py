"""Find hosts that answer ICMP echo requests."""

from __future__ import annotations

import ipaddress
import socket
import struct
import threading
import time
from collections.abc import Iterable

from tqdm import tqdm

IPAddress = ipaddress.IPv4Address | ipaddress.IPv6Address

TIMEOUT = 3.0
SEND_DELAY = 10e-6
_POLL_INTERVAL = 0.003
_ECHO_REQUEST = 8
_ECHO_REPLY = 0
_ECHO = struct.Struct("!BBHHH")
_WORD = struct.Struct("!H")


def checksum(data: bytes) -> int:
    """Return the 16-bit ones' complement Internet checksum of ``data``."""
    if len(data) % 2:
        data += b"\x00"
    total = sum(word for (word,) in _WORD.iter_unpack(data))
    while total >> 16:
        total = (total & 0xFFFF) + (total >> 16)
    return ~total & 0xFFFF


def build_echo_request(identifier: int) -> bytes:
    """Build an 8-byte ICMP echo request carrying ``identifier`` as its sequence."""
    if not 0 <= identifier <= 0xFFFF:
        raise ValueError(f"identifier out of range: {identifier}")
    header = _ECHO.pack(_ECHO_REQUEST, 0, 0, 0, identifier)
    return _ECHO.pack(_ECHO_REQUEST, 0, checksum(header), 0, identifier)


def _reply_sequence(packet: bytes) -> int | None:
    """Sequence number of an echo reply in a raw IPv4 packet, else None."""
    if not packet:
        return None
    icmp = packet[(packet[0] & 0x0F) * 4:]
    if len(icmp) < _ECHO.size or icmp[0] != _ECHO_REPLY:
        return None
    return _WORD.unpack_from(icmp, 6)[0]


def _receive(
    sock: socket.socket,
    pending: dict[int, IPAddress],
    lock: threading.Lock,
    results: list[IPAddress],
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
        sequence = _reply_sequence(packet)
        if sequence is None:
            continue
        with lock:
            host = pending.get(sequence)
            if host is not None:
                results.append(host)


def ping_scan(hosts: Iterable[IPAddress], timeout: float = TIMEOUT) -> list[IPAddress]:
    """Ping every host and return those that replied, in order of reply.

    Needs permission to open a raw ICMP socket; raises OSError otherwise.
    """
    hosts = list(hosts)
    pending: dict[int, IPAddress] = {}
    results: list[IPAddress] = []
    lock = threading.Lock()
    finished = threading.Event()

    with socket.socket(socket.AF_INET, socket.SOCK_RAW, socket.IPPROTO_ICMP) as sock:
        sock.settimeout(_POLL_INTERVAL)
        receiver = threading.Thread(
            target=_receive,
            args=(sock, pending, lock, results, finished, timeout),
            daemon=True,
        )
        receiver.start()
        try:
            for index, host in enumerate(tqdm(hosts, leave=False)):
                identifier = index & 0xFFFF
                with lock:
                    pending[identifier] = host
                try:
                    sock.sendto(build_echo_request(identifier), (str(host), 0))
                except OSError:
                    pass
                time.sleep(SEND_DELAY)
        finally:
            finished.set()
            receiver.join()

    with lock:
        return list(results)