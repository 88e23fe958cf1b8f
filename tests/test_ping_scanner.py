import queue
import socket
from ipaddress import ip_address
from unittest import mock

import pytest

from hostsweep import ping_scanner
from hostsweep.ping_scanner import build_echo_request, checksum, ping_scan


class FakeIcmpSocket:
    def __init__(self, responsive):
        self.responsive = set(responsive)
        self.replies = queue.Queue()
        self.sent = []
        self.poll = 0.01

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        return False

    def settimeout(self, value):
        self.poll = value

    def sendto(self, data, address):
        self.sent.append((data, address))
        if address[0] in self.responsive:
            reply = bytearray(data)
            reply[0] = 0
            self.replies.put(b"\x45" + bytes(19) + bytes(reply))

    def recv(self, size):
        try:
            return self.replies.get(timeout=self.poll)
        except queue.Empty:
            raise socket.timeout() from None


def _ip_packet(icmp):
    return b"\x45" + bytes(19) + icmp


def test_echo_request_wire_bytes():
    assert build_echo_request(0) == b"\x08\x00\xf7\xff\x00\x00\x00\x00"


@pytest.mark.parametrize("identifier", [0, 1, 255, 4096, 65535])
def test_echo_request_checksum_verifies(identifier):
    packet = build_echo_request(identifier)
    assert len(packet) == 8
    assert checksum(packet) == 0
    assert int.from_bytes(packet[6:8], "big") == identifier


def test_echo_request_rejects_out_of_range_identifier():
    with pytest.raises(ValueError):
        build_echo_request(65536)


def test_checksum_of_empty_data():
    assert checksum(b"") == 0xFFFF


def test_checksum_pads_odd_length():
    assert checksum(b"\x12\x34\x56") == checksum(b"\x12\x34\x56\x00")


def test_reply_sequence_reads_echo_reply():
    reply = bytearray(build_echo_request(7))
    reply[0] = 0
    assert ping_scanner._reply_sequence(_ip_packet(bytes(reply))) == 7


def test_reply_sequence_ignores_other_types():
    assert ping_scanner._reply_sequence(_ip_packet(build_echo_request(7))) is None
    assert ping_scanner._reply_sequence(_ip_packet(b"\x00\x00")) is None


def test_ping_scan_returns_responding_hosts():
    hosts = [ip_address("192.0.2.1"), ip_address("192.0.2.2"), ip_address("192.0.2.3")]
    fake = FakeIcmpSocket({"192.0.2.1", "192.0.2.3"})
    with mock.patch.object(ping_scanner.socket, "socket", lambda *args, **kwargs: fake):
        up = ping_scan(hosts, 0.05)
    assert up == [hosts[0], hosts[2]]
    assert fake.sent == [
        (build_echo_request(index), (str(host), 0)) for index, host in enumerate(hosts)
    ]


def test_ping_scan_with_no_replies():
    hosts = [ip_address("192.0.2.9")]
    fake = FakeIcmpSocket(set())
    with mock.patch.object(ping_scanner.socket, "socket", lambda *args, **kwargs: fake):
        assert ping_scan(hosts, 0.05) == []
    assert len(fake.sent) == 1