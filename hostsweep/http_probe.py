"""Fetch the body a web server returns for its root page."""

from __future__ import annotations

import ipaddress
import warnings

import requests

IPAddress = ipaddress.IPv4Address | ipaddress.IPv6Address


def _fetch(url: str, timeout: float, verify: bool) -> str:
    response = requests.get(url, timeout=timeout, allow_redirects=False, verify=verify)
    try:
        return response.content.decode("utf-8")
    except UnicodeDecodeError:
        return ""


def scan_http(ip: IPAddress, port: int, timeout: float) -> str:
    """GET ``http://ip:port`` without following redirects and return the body.

    A body that is not valid UTF-8 yields an empty string. Connection and
    protocol failures raise :class:`requests.RequestException`.
    """
    return _fetch(f"http://{ip}:{port}", timeout, verify=True)


def scan_https(ip: IPAddress, port: int, timeout: float) -> str:
    """Like :func:`scan_http` over TLS, accepting any certificate."""
    with warnings.catch_warnings():
        warnings.simplefilter("ignore")
        return _fetch(f"https://{ip}:{port}", timeout, verify=False)