"""IPv4 network sweeps: ICMP ping, TCP SYN port scan and banner-based service detection, with results kept in a searchable SQLite store."""

__version__ = "0.1.0"