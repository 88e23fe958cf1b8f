import pytest

from hostsweep.cli import HELP_TEXT, main, print_help, scan, search
from hostsweep.database import DatabaseResult, ResultDatabase


@pytest.fixture
def database(tmp_path, capsys):
    db = ResultDatabase(tmp_path / "results.sqlite")
    db.save_rows(
        [
            DatabaseResult(id="10.0.0.1", ports=[22, 80], services=""),
            DatabaseResult(id="10.0.0.2", ports=[443], services='{"443":["https","ok"]}'),
        ]
    )
    capsys.readouterr()
    return db


def _lines(capsys):
    return capsys.readouterr().out.splitlines()


def test_print_help_without_command(capsys):
    print_help(None)
    assert capsys.readouterr().out == HELP_TEXT + "\n"


def test_print_help_with_command_reports_invalid(capsys):
    print_help("scan")
    lines = _lines(capsys)
    assert lines[-1] == "Invalid Command!"
    assert "\n".join(lines[:-1]) == HELP_TEXT


def test_search_host_found(database, capsys):
    search(database, "host", "10.0.0.1")
    assert _lines(capsys) == [str(database.get_row_by_host("10.0.0.1"))]


def test_search_host_missing(database, capsys):
    search(database, "host", "10.9.9.9")
    assert _lines(capsys) == ["Could not find host by argument 10.9.9.9"]


def test_search_port(database, capsys):
    search(database, "port", "80")
    assert _lines(capsys) == [str(database.get_row_by_host("10.0.0.1"))]


def test_search_service(database, capsys):
    search(database, "service", "https")
    assert _lines(capsys) == [str(database.get_row_by_host("10.0.0.2"))]


def test_search_invalid_type(database, capsys):
    search(database, "mac", "x")
    assert _lines(capsys) == ["Invalid search type!"]


def test_scan_invalid_type(database, capsys):
    scan(database, "udp", "10.0.0.1")
    assert _lines(capsys) == ["Invalid search type!"]


def test_scan_bad_targets_raise(database):
    with pytest.raises(ValueError):
        scan(database, "ping", "10.0.0.9-10.0.0.1")


def test_main_without_command(tmp_path, monkeypatch, capsys):
    monkeypatch.chdir(tmp_path)
    assert main([]) == 1
    lines = _lines(capsys)
    assert lines[0] == "You must specify a command!"
    assert "\n".join(lines[1:]) == HELP_TEXT


def test_main_unknown_command(tmp_path, monkeypatch, capsys):
    monkeypatch.chdir(tmp_path)
    assert main(["bogus"]) == 0
    lines = _lines(capsys)
    assert lines[0] == "Invalid command!"
    assert "\n".join(lines[1:]) == HELP_TEXT


@pytest.mark.parametrize("argv", [["scan", "ping"], ["SEARCH", "host", "a", "b"]])
def test_main_wrong_argument_count(tmp_path, monkeypatch, capsys, argv):
    monkeypatch.chdir(tmp_path)
    assert main(argv) == 0
    lines = _lines(capsys)
    assert lines[0] == "Invalid Usage!"
    assert lines[-1] == "Invalid Command!"


def test_main_help_is_case_insensitive(tmp_path, monkeypatch, capsys):
    monkeypatch.chdir(tmp_path)
    assert main(["HELP"]) == 0
    assert capsys.readouterr().out == HELP_TEXT + "\n"


def test_main_help_with_command(tmp_path, monkeypatch, capsys):
    monkeypatch.chdir(tmp_path)
    assert main(["help", "scan"]) == 0
    assert _lines(capsys)[-1] == "Invalid Command!"


def test_main_search_missing_host(tmp_path, monkeypatch, capsys):
    monkeypatch.chdir(tmp_path)
    assert main(["search", "host", "10.1.1.1"]) == 0
    assert _lines(capsys) == ["Could not find host by argument 10.1.1.1"]


def test_main_scan_bad_targets_fails(tmp_path, monkeypatch, capsys):
    monkeypatch.chdir(tmp_path)
    assert main(["scan", "ping", "not-an-address"]) == 1
    assert "error:" in capsys.readouterr().err