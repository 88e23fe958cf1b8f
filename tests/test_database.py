import ipaddress
import struct

import pytest

from hostsweep.database import DatabaseResult, ResultDatabase, join_nums, split_nums
from hostsweep.records import PortScanResult


@pytest.fixture
def db(tmp_path):
    return ResultDatabase(tmp_path / "results.sqlite")


class _ServiceStub:
    def __init__(self, host, ports, services):
        self._row = DatabaseResult(host, ports, services)

    def to_database(self):
        return self._row


def test_join_and_split_round_trip():
    nums = [22, 80, 443, 25565]
    assert split_nums(join_nums(nums, ","), ",") == nums


def test_split_empty_is_empty():
    assert split_nums("", ",") == []


def test_split_bad_parts_become_zero():
    assert split_nums("22,ssh,443", ",") == [22, 0, 443]


def test_split_out_of_range_becomes_zero():
    assert split_nums("99999999999,7", ",") == [0, 7]


def test_split_rejects_whitespace():
    assert split_nums(" 5", ",") == [0]


def test_str_format():
    row = DatabaseResult("10.0.0.1", [80, 443], "{}")
    assert str(row) == "10.0.0.1 - ports: [80,443] services: [{}]"


def test_encode_wire_layout():
    data = DatabaseResult("h", [80, 443], "x").encode()
    assert data == (
        struct.pack("<I", 2)
        + struct.pack("<I", len(b"80,443")) + b"80,443"
        + struct.pack("<I", 1) + b"x"
    )


def test_encode_decode_round_trip():
    row = DatabaseResult("10.1.2.3", [21, 22, 8080], '{"22":["ssh","SSH-2.0"]}')
    assert DatabaseResult.decode(row.id, row.encode()) == row


def test_decode_short_data_is_none():
    assert DatabaseResult.decode("k", b"\x01\x00\x00") is None


def test_decode_truncated_value_is_none():
    data = DatabaseResult("k", [80], "abc").encode()
    assert DatabaseResult.decode("k", data[:-1]) is None


def test_save_and_fetch_by_host(db):
    db.save_rows([DatabaseResult("10.0.0.1", [22, 80], "svc")])
    assert db.get_row_by_host("10.0.0.1") == DatabaseResult("10.0.0.1", [22, 80], "svc")


def test_missing_host_is_none(db):
    db.save_rows([DatabaseResult("10.0.0.1")])
    assert db.get_row_by_host("10.0.0.2") is None


def test_save_replaces_existing_row(db):
    db.save_rows([DatabaseResult("10.0.0.1", [22], "old")])
    db.save_rows([DatabaseResult("10.0.0.1", [443], "new")])
    assert db.get_row_by_host("10.0.0.1") == DatabaseResult("10.0.0.1", [443], "new")


def test_save_prints_summary(db, capsys):
    db.save_rows([DatabaseResult("a"), DatabaseResult("b")])
    assert capsys.readouterr().out.startswith("Saved 2 rows in ")


def test_add_ping_results(db):
    hosts = [ipaddress.ip_address("10.0.0.5"), ipaddress.ip_address("::1")]
    db.add_ping_results(hosts)
    for host in hosts:
        assert db.get_row_by_host(str(host)) == DatabaseResult(str(host), [], "")


def test_add_tcp_results(db):
    db.add_tcp_results([PortScanResult(ipaddress.ip_address("10.0.0.9"), [22, 80])])
    assert db.get_row_by_host("10.0.0.9").ports == [22, 80]


def test_add_service_results(db):
    db.add_service_results([_ServiceStub("10.0.0.3", [80], '{"80":["http",""]}')])
    assert db.get_row_by_host("10.0.0.3").services == '{"80":["http",""]}'


def test_search_by_port_is_substring_and_ordered(db):
    db.save_rows([
        DatabaseResult("10.0.0.3", [8080]),
        DatabaseResult("10.0.0.1", [80]),
        DatabaseResult("10.0.0.2", [22]),
    ])
    found = [row.id for row in db.get_rows_by_port("80")]
    assert found == ["10.0.0.1", "10.0.0.3"]


def test_search_by_service(db):
    db.save_rows([
        DatabaseResult("a", [22], "ssh"),
        DatabaseResult("b", [80], "http"),
    ])
    assert [row.id for row in db.get_rows_by_service("http")] == ["b"]


def test_search_unknown_column_raises(db):
    with pytest.raises(ValueError):
        db.search_substring_in_column("nope", "x")


def test_unreadable_database_gives_empty_results(tmp_path):
    broken = ResultDatabase(tmp_path)
    assert broken.get_rows_by_port("80") == []
    assert broken.get_rows_by_service("http") == []
    assert broken.get_row_by_host("10.0.0.1") is None