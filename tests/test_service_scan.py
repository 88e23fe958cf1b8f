import json
import socket
import socketserver
import threading
from contextlib import contextmanager
from ipaddress import ip_address

import pytest

from hostsweep.records import PortScanResult
from hostsweep.service_scan import (
    ServiceScanResult,
    basic_identify,
    identify,
    identify_service_from_response,
    scan_services,
    split_into_chunks,
    try_connect,
)

LOCALHOST = ip_address("127.0.0.1")
BANNER = b"SSH-2.0-example\r\n"


@contextmanager
def _banner_server(banner):
    received = []

    class Handler(socketserver.BaseRequestHandler):
        def handle(self):
            received.append(self.request.recv(16))
            if banner:
                self.request.sendall(banner)

    server = socketserver.ThreadingTCPServer(("127.0.0.1", 0), Handler)
    server.daemon_threads = True
    thread = threading.Thread(target=server.serve_forever, daemon=True)
    thread.start()
    try:
        yield server.server_address[1], received
    finally:
        server.shutdown()
        server.server_close()


def _closed_port():
    with socket.socket() as sock:
        sock.bind(("127.0.0.1", 0))
        return sock.getsockname()[1]


def test_identify_ssh_banner():
    assert identify_service_from_response(b"SSH-2.0-OpenSSH_8.9\r\n") == "ssh"


def test_identify_http_status_line():
    assert identify_service_from_response(b"HTTP/1.1 200 OK\r\n") == "http"


def test_identify_any_text_falls_to_catch_all_pattern():
    assert identify_service_from_response(b"zzz") == "minecraft"


@pytest.mark.parametrize(
    "response, expected",
    [
        (b"\x16\x03\xff", "ssl/tls"),
        (b"\x16\x02\xff", "ssl/tls"),
        (b"\x4a\x00\x00\x00\xff", "mysql"),
        (b"\x02\x00\x00\x00\xff", "mongodb"),
        (b"\xff\xfe", None),
    ],
)
def test_identify_binary_responses(response, expected):
    assert identify_service_from_response(response) == expected


def test_split_into_chunks_preserves_items_and_count():
    items = list(range(10))
    chunks = split_into_chunks(items, 3)
    assert [item for chunk in chunks for item in chunk] == items
    assert len(chunks) <= 3
    assert all(len(chunk) <= 4 for chunk in chunks)


def test_split_into_chunks_more_chunks_than_items():
    chunks = split_into_chunks(["a", "b"], 5)
    assert chunks == [["a"], ["b"]]


def test_split_into_chunks_empty():
    assert split_into_chunks([], 4) == []


def test_split_into_chunks_rejects_zero():
    with pytest.raises(ValueError):
        split_into_chunks([1, 2], 0)


def test_to_database_serialises_services_as_json():
    result = ServiceScanResult(ip=LOCALHOST, open_ports=[22], services={22: ("ssh", "banner")})
    row = result.to_database()
    assert row.id == "127.0.0.1"
    assert row.ports == [22]
    assert json.loads(row.services) == {"22": ["ssh", "banner"]}


def test_try_connect_sends_probe_and_reads_banner():
    with _banner_server(BANNER) as (port, received):
        response = try_connect(LOCALHOST, port, 2.0, b"\x00\n")
    assert response == BANNER
    assert received == [b"\x00\n"]


def test_try_connect_closed_port():
    assert try_connect(LOCALHOST, _closed_port(), 1.0, b"") is None


def test_basic_identify_recognises_banner():
    with _banner_server(BANNER) as (port, _):
        assert basic_identify(LOCALHOST, port, 2.0) == ("ssh", BANNER.decode())


def test_basic_identify_silent_service_is_plain_tcp():
    with _banner_server(b"") as (port, _):
        assert basic_identify(LOCALHOST, port, 2.0) == ("tcp", "")


def test_basic_identify_closed_port():
    assert basic_identify(LOCALHOST, _closed_port(), 1.0) is None


def test_identify_unreachable_port_falls_back_to_tcp():
    assert identify(LOCALHOST, _closed_port(), 1.0) == ("tcp", "")


def test_scan_services_collects_results_per_host():
    other = ip_address("127.0.0.2")
    with _banner_server(BANNER) as (port, _):
        results = scan_services(
            [PortScanResult(ip=LOCALHOST, open_ports=[port]), PortScanResult(ip=other)],
            2,
            2.0,
        )
    assert [r.ip for r in results] == [LOCALHOST, other]
    assert results[0].open_ports == [port]
    assert results[0].services == {port: ("ssh", BANNER.decode())}
    assert results[1].open_ports == []
    assert results[1].services == {}


def test_scan_services_rejects_zero_threads():
    with pytest.raises(ValueError):
        scan_services([PortScanResult(ip=LOCALHOST)], 0, 1.0)