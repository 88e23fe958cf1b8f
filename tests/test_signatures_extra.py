import re

import pytest

from hostsweep.signatures_core import CORE_SERVICE_PATTERNS
from hostsweep.signatures_extra import EXTRA_SERVICE_PATTERNS, service_patterns


def _extra_table():
    return service_patterns()[len(CORE_SERVICE_PATTERNS):]


def _extra_for(name):
    return [pattern for pattern, service in _extra_table() if service == name]


def _any_match(name, text):
    return any(pattern.search(text) for pattern in _extra_for(name))


def test_core_entries_come_first():
    table = service_patterns()
    assert table[: len(CORE_SERVICE_PATTERNS)] == CORE_SERVICE_PATTERNS


def test_table_is_core_followed_by_extra():
    table = service_patterns()
    assert len(table) == len(CORE_SERVICE_PATTERNS) + len(EXTRA_SERVICE_PATTERNS)
    assert table[len(CORE_SERVICE_PATTERNS):] == EXTRA_SERVICE_PATTERNS


def test_extra_order_boundaries():
    extra = _extra_table()
    assert extra[0][1] == "kubernetes"
    assert extra[-1][1] == "cardano"


def test_every_entry_is_compiled_with_a_name():
    for pattern, name in service_patterns():
        assert isinstance(pattern, re.Pattern) and name


@pytest.mark.parametrize(
    ("name", "text"),
    [
        ("kubernetes-api", "apiVersion: v1\nkind: Pod"),
        ("http2", "PRI * HTTP/2.0\r\n"),
        ("memcached", "STAT pid 1234\r\n"),
        ("riak", "\x83h\x03rest"),
        ("openvpn", "hello OPENVPN server"),
        ("zookeeper", "RO,followers"),
        ("ical", "BEGIN:VCALENDAR\r\n"),
        ("irc", "ERROR :Closing Link: host"),
        ("dns-bind", "[bind9]"),
    ],
)
def test_banner_matches_service(name, text):
    assert _any_match(name, text)


def test_memcached_error_needs_line_ending():
    assert _any_match("memcached", "ERROR\r\n")
    assert not _any_match("memcached", "ERROR")


def test_escaped_backslash_patterns_match_literal_text():
    assert _any_match("ldaps", r"\x30\x84 starttls")
    assert not _any_match("ldaps", "\x30\x84 starttls")


def test_unescaped_dot_matches_any_character():
    assert _any_match("nextjs", "NextXjs")
    assert _any_match("aspnet", "ASP.NET")


def test_ssh_old_version_range():
    assert _any_match("ssh", "SSH-1.5-server")
    assert not _any_match("ssh", "SSH-1.4-server")


def test_unrelated_text_matches_no_extra_cache_pattern():
    assert not _any_match("varnish", "nothing here")