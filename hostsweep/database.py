"""Persistent storage of scan results, keyed by host address."""

from __future__ import annotations

import os
import re
import sqlite3
import struct
import time
from collections.abc import Iterable, Iterator
from contextlib import contextmanager
from dataclasses import dataclass, field
from typing import Protocol

BATCH_SIZE = 1000
COLUMNS = ("default", "ports", "services")

_INT_RE = re.compile(r"[+-]?[0-9]+")
_I32_MIN = -(2**31)
_I32_MAX = 2**31 - 1
_U32 = struct.Struct("<I")


def join_nums(nums: Iterable[int], sep: str) -> str:
    """Join integers into one string separated by ``sep``."""
    return sep.join(str(n) for n in nums)


def _parse_i32(text: str) -> int:
    if _INT_RE.fullmatch(text):
        value = int(text)
        if _I32_MIN <= value <= _I32_MAX:
            return value
    return 0


def split_nums(text: str, sep: str) -> list[int]:
    """Split ``text`` on ``sep`` into integers; unparsable parts become 0."""
    if not text:
        return []
    return [_parse_i32(part) for part in text.split(sep)]


@dataclass
class DatabaseResult:
    """One stored row: a host, its open ports and its services as JSON text."""

    id: str
    ports: list[int] = field(default_factory=list)
    services: str = ""

    def __str__(self) -> str:
        return f"{self.id} - ports: [{self.ports_to_string()}] services: [{self.services}]"

    def ports_to_string(self) -> str:
        return join_nums(self.ports, ",")

    def encode(self) -> bytes:
        """Serialise ports and services as length-prefixed little-endian fields."""
        values = [self.ports_to_string().encode(), self.services.encode()]
        chunks = [_U32.pack(len(values))]
        for value in values:
            chunks.append(_U32.pack(len(value)))
            chunks.append(value)
        return b"".join(chunks)

    @classmethod
    def decode(cls, key: str, data: bytes) -> DatabaseResult | None:
        """Inverse of :meth:`encode`; returns None for short or truncated data."""
        if len(data) < 8:
            return None
        (count,) = _U32.unpack_from(data, 0)
        pos = _U32.size
        values: list[str] = []
        for _ in range(count):
            if pos + _U32.size > len(data):
                return None
            (length,) = _U32.unpack_from(data, pos)
            pos += _U32.size
            if pos + length > len(data):
                return None
            values.append(data[pos:pos + length].decode("utf-8", errors="replace"))
            pos += length
        return cls(
            id=key,
            ports=split_nums(values[0], ",") if values else [],
            services=values[1] if len(values) > 1 else "",
        )


class _Storable(Protocol):
    def to_database(self) -> DatabaseResult: ...


class ResultDatabase:
    """Scan results kept in an SQLite file, one row per host."""

    def __init__(self, path: str | os.PathLike[str]) -> None:
        self.path = os.fspath(path)

    @contextmanager
    def _connect(self) -> Iterator[sqlite3.Connection]:
        conn = sqlite3.connect(self.path)
        try:
            conn.execute(
                "CREATE TABLE IF NOT EXISTS results ("
                "id TEXT PRIMARY KEY, "
                "ports TEXT NOT NULL DEFAULT '', "
                "services TEXT NOT NULL DEFAULT '')"
            )
            yield conn
            conn.commit()
        finally:
            conn.close()

    def add_ping_results(self, results: Iterable[object]) -> None:
        """Store hosts found to be up, with no ports or services."""
        self.save_rows(DatabaseResult(id=str(host)) for host in results)

    def add_tcp_results(self, results: Iterable[_Storable]) -> None:
        self.save_rows(result.to_database() for result in results)

    def add_service_results(self, results: Iterable[_Storable]) -> None:
        self.save_rows(result.to_database() for result in results)

    def save_rows(self, rows: Iterable[DatabaseResult]) -> None:
        """Insert or replace every row, writing in batches."""
        rows = list(rows)
        start = time.perf_counter()
        with self._connect() as conn:
            for offset in range(0, len(rows), BATCH_SIZE):
                batch = rows[offset:offset + BATCH_SIZE]
                conn.executemany(
                    "INSERT OR REPLACE INTO results (id, ports, services) VALUES (?, ?, ?)",
                    [(row.id, row.ports_to_string(), row.services) for row in batch],
                )
        elapsed_ms = int((time.perf_counter() - start) * 1000)
        print(f"Saved {len(rows)} rows in {elapsed_ms}ms")

    @staticmethod
    def _row(record: tuple[str, str, str]) -> DatabaseResult:
        host, ports, services = record
        return DatabaseResult(id=host, ports=split_nums(ports, ","), services=services)

    def get_row_by_host(self, host: str) -> DatabaseResult | None:
        """Return the row for ``host``, or None if absent or unreadable."""
        try:
            with self._connect() as conn:
                record = conn.execute(
                    "SELECT id, ports, services FROM results WHERE id = ?", (host,)
                ).fetchone()
        except sqlite3.Error:
            return None
        return self._row(record) if record else None

    def get_rows_by_port(self, port: str) -> list[DatabaseResult]:
        try:
            return self.search_substring_in_column("ports", port)
        except sqlite3.Error:
            return []

    def get_rows_by_service(self, service: str) -> list[DatabaseResult]:
        try:
            return self.search_substring_in_column("services", service)
        except sqlite3.Error:
            return []

    def search_substring_in_column(self, column: str, substring: str) -> list[DatabaseResult]:
        """Return rows, ordered by host, whose ``column`` text contains ``substring``."""
        if column not in COLUMNS:
            raise ValueError(f"Unknown column: {column!r}")
        with self._connect() as conn:
            records = conn.execute(
                "SELECT id, ports, services FROM results ORDER BY id"
            ).fetchall()
        matches = []
        for record in records:
            value = {"default": "", "ports": record[1], "services": record[2]}[column]
            if substring in value:
                matches.append(self._row(record))
        return matches