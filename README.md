# hostsweep

hostsweep sweeps blocks of IPv4 addresses in three steps:

1. **ping**: sends ICMP echo requests and records the hosts that answer;
2. **tcp**: sends TCP SYN probes to about a thousand common ports on the live hosts
   and records the ports that reply with SYN+ACK;
3. **service**: connects to each open port and guesses which service is behind it.
   Ports 80 and 8080-8089 get an HTTP request, 443 and 8443 an HTTPS request that
   accepts any certificate. Every other port, and any web request that fails, gets a
   short probe, and the banner is matched against an ordered table of signatures.

Results go into an SQLite file named `ping_result_database` in the current
directory, one row per host, where you can search them by host, port or service.

Raw ICMP and TCP sockets need elevated privileges, so run the scans as root or with
the `CAP_NET_RAW` capability.

## Installation

```
pip install .
```

## Usage

```
hostsweep scan <type> <hosts>
hostsweep search <type> <argument>
hostsweep help
```

With no command at all the help text is printed and the exit status is 1. If a scan
fails (a malformed target list, no permission for raw sockets, no usable network
interface) the error is printed to standard error and the exit status is 1.

### Target syntax

`<hosts>` is a comma-separated list. Each entry is one of:

- a single address: `192.168.1.1`
- an inclusive IPv4 range: `192.168.1.1-192.168.1.10`
- an IPv4 CIDR block: `192.168.1.0/24` (host bits of the base address are ignored)

The full set of addresses is shuffled before the scan starts.

### Scanning

```
hostsweep scan ping 10.0.0.0/24
hostsweep scan tcp 10.0.0.1-10.0.0.50
hostsweep scan service 192.168.1.0/24,192.168.2.7
```

`ping` pings every address once and stores the hosts that answered. `tcp` and
`service` work through the targets in chunks of 4096 hosts. Each chunk is pinged
first, and only the hosts that answer are probed further. Replies are awaited for
3 seconds after the last probe is sent.

### Searching

```
hostsweep search host 10.0.0.5
hostsweep search port 22
hostsweep search service ssh
```

A port or service search matches a substring of the stored value, so `port 22` also
matches hosts with port 2222 open. Each matching row is printed as:

```
10.0.0.5 - ports: [22,80] services: [{"22":["ssh","SSH-2.0-..."],"80":["http","..."]}]
```

## Library use

```python
from hostsweep.parse_ip_range import parse_ip_targets
from hostsweep.database import ResultDatabase
from hostsweep.service_scan import identify_service_from_response

hosts = parse_ip_targets("10.0.0.0/30,10.0.0.10")

db = ResultDatabase("ping_result_database")
for row in db.get_rows_by_service("http"):
    print(row.id, row.ports)

print(identify_service_from_response(b"SSH-2.0-OpenSSH_9.0\r\n"))  # "ssh"
```

The modules:

- `hostsweep.parse_ip_range`: `parse_ip_targets`, `parse_cidr`, `parse_ip_range`.
- `hostsweep.ping_scanner`: `ping_scan`, `build_echo_request`, `checksum`.
- `hostsweep.tcp_scan`: `tcp_scan`, `build_syn_packet`, `select_source_address`
  (prefers a point-to-point interface such as a VPN).
- `hostsweep.service_scan`: `scan_services`, `identify`, `basic_identify`,
  `try_connect`, `identify_service_from_response`, `split_into_chunks`,
  `ServiceScanResult`.
- `hostsweep.http_probe`: `scan_http`, `scan_https`.
- `hostsweep.signatures_extra`: `service_patterns()` returns the whole ordered
  signature table.
- `hostsweep.database`: `ResultDatabase`, `DatabaseResult` (with `encode` and
  `decode` for a length-prefixed binary form), `join_nums`, `split_nums`.
- `hostsweep.records`: `PingResult`, `PortScanResult`.

## Limitations

- Pinging and SYN scanning are IPv4 only. A single IPv6 address is accepted in a
  target list, but it is never reported as up and the TCP scan rejects it.
- The store file's name is fixed; the command line has no option to choose another.