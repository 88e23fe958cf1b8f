"""Parsing of target specifications into lists of IP addresses.

A target specification is a comma separated list where each entry is one of:

* a single address: ``192.168.1.1``
* an inclusive IPv4 range: ``192.168.1.1-192.168.1.10``
* an IPv4 CIDR block: ``192.168.1.0/24``
"""

from __future__ import annotations

import ipaddress
import random
import re

IPAddress = ipaddress.IPv4Address | ipaddress.IPv6Address

_PREFIX_RE = re.compile(r"\+?[0-9]+")
_MAX_U8 = 255


def parse_ip_targets(targets: str) -> list[IPAddress]:
    """Expand a comma separated target list into addresses, in random order.

    Raises ValueError if any entry is malformed.
    """
    addresses: list[IPAddress] = []
    for target in targets.split(","):
        target = target.strip()
        if "/" in target:
            addresses.extend(parse_cidr(target))
        elif "-" in target:
            addresses.extend(parse_ip_range(target))
        else:
            addresses.append(ipaddress.ip_address(target))
    random.shuffle(addresses)
    return addresses


def _parse_prefix(text: str) -> int:
    if not _PREFIX_RE.fullmatch(text):
        raise ValueError(f"Invalid CIDR prefix length: {text!r}")
    value = int(text)
    if value > _MAX_U8:
        raise ValueError(f"Invalid CIDR prefix length: {text!r}")
    return value


def parse_cidr(cidr: str) -> list[ipaddress.IPv4Address]:
    """Return every address of an IPv4 CIDR block, host bits of the base ignored."""
    parts = cidr.split("/")
    if len(parts) != 2:
        raise ValueError("Invalid CIDR format")
    base, prefix_text = parts
    base_ip = ipaddress.IPv4Address(base)
    prefix_len = _parse_prefix(prefix_text)
    if prefix_len > 32:
        raise ValueError("Invalid CIDR prefix length")
    network = ipaddress.IPv4Network((base_ip, prefix_len), strict=False)
    return list(network)


def parse_ip_range(text: str) -> list[ipaddress.IPv4Address]:
    """Return every address of an inclusive ``start-end`` IPv4 range."""
    parts = text.split("-")
    if len(parts) != 2:
        raise ValueError("Invalid IP range format")
    start = ipaddress.IPv4Address(parts[0])
    end = ipaddress.IPv4Address(parts[1])
    if start > end:
        raise ValueError("Invalid IP range: start IP is greater than end IP")
    first, last = int(start), int(end)
    return [ipaddress.IPv4Address(value) for value in range(first, last + 1)]