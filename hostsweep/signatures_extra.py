"""Banner signatures for network services, second part of the table.

These entries follow the ones in :mod:`hostsweep.signatures_core`. Together
they form the full ordered table returned by :func:`service_patterns`. The
first pattern that matches a banner names its service.
"""

from __future__ import annotations

import re
from functools import lru_cache

from hostsweep.signatures_core import CORE_SERVICE_PATTERNS, ServicePattern

_RAW_PATTERNS: tuple[tuple[str, str], ...] = (
    # Container orchestration
    (r"Kubernetes", "kubernetes"),
    (r"^apiVersion: v\d+", "kubernetes-api"),
    (r"Docker", "docker"),
    (r"docker-registry", "docker-registry"),
    (r"Swarm", "docker-swarm"),
    (r"Mesos", "mesos"),
    (r"Nomad", "nomad"),
    (r"containerd", "containerd"),
    (r"OpenShift", "openshift"),
    # Cloud providers
    (r"AmazonS3", "aws-s3"),
    (r"EC2", "aws-ec2"),
    (r"Lambda", "aws-lambda"),
    (r"Azure", "azure"),
    (r"Blob Storage", "azure-blob"),
    (r"Google Cloud", "gcp"),
    (r"Compute Engine", "gcp-compute"),
    (r"Cloud Storage", "gcp-storage"),
    (r"Firebase", "firebase"),
    (r"Heroku", "heroku"),
    (r"Digital Ocean", "digitalocean"),
    # CI/CD systems
    (r"Jenkins", "jenkins"),
    (r"GitLab", "gitlab"),
    (r"Travis CI", "travis-ci"),
    (r"CircleCI", "circleci"),
    (r"TeamCity", "teamcity"),
    (r"Bamboo", "bamboo"),
    (r"Drone", "drone-ci"),
    (r"Buildkite", "buildkite"),
    # Search engines
    (r"Elasticsearch", "elasticsearch"),
    (r"Solr", "solr"),
    (r"Lucene", "lucene"),
    (r"Sphinx", "sphinx"),
    (r"OpenSearch", "opensearch"),
    # Additional databases
    (r"InfluxDB", "influxdb"),
    (r"CrateDB", "cratedb"),
    (r"Cockroach", "cockroachdb"),
    (r"TimescaleDB", "timescaledb"),
    (r"MariaDB", "mariadb"),
    (r"SingleStore", "singlestore"),
    (r"TiDB", "tidb"),
    (r"Fauna", "faunadb"),
    (r"DynamoDB", "dynamodb"),
    (r"Clickhouse", "clickhouse"),
    (r"ArangoDB", "arangodb"),
    (r"ScyllaDB", "scylladb"),
    (r"^\x83h\x03", "riak"),
    (r"^\x83h\x02", "riak"),
    # Advanced network protocols
    (r"QUIC", "quic"),
    (r"HTTP/3", "http3"),
    (r"gRPC", "grpc"),
    (r"^PRI \* HTTP/2", "http2"),
    (r"Thrift", "thrift"),
    (r"^\x00\x00\x00\x13\x06\x01", "tftp"),
    (r"SCTP", "sctp"),
    (r"DTLS", "dtls"),
    (r"^\x17\xfe", "dtls"),
    (r"^\x16\xfe", "dtls"),
    # Identity and access management
    (r"OAuth", "oauth"),
    (r"SAML", "saml"),
    (r"Keycloak", "keycloak"),
    (r"^\\x30\\x84.*starttls", "ldaps"),
    (r"Okta", "okta"),
    (r"Auth0", "auth0"),
    (r"OpenID", "openid"),
    (r"Kerberos", "kerberos"),
    (r"^\x60\x82", "kerberos"),
    (r"^\x05\x02", "gssapi"),
    # Cache services
    (r"^ERROR\r\n", "memcached"),
    (r"^STAT pid \d+", "memcached"),
    (r"^END\r\n", "memcached"),
    (r"^CLIENT_ERROR", "memcached"),
    (r"^SERVER_ERROR", "memcached"),
    (r"Varnish", "varnish"),
    (r"Squid", "squid"),
    (r"HAProxy", "haproxy"),
    (r"^\\*\\d+\\r\\n\\$\\d+\\r\\n", "redis-resp"),
    # IoT and industrial protocols
    (r"Modbus", "modbus"),
    (r"BACnet", "bacnet"),
    (r"MQTT-SN", "mqtt-sn"),
    (r"DNP3", "dnp3"),
    (r"^\x05\x64", "dnp3"),
    (r"^\x0a\x00", "modbus-tcp"),
    (r"OPC UA", "opcua"),
    (r"^\x47\x77", "bacnet"),
    (r"EtherNet/IP", "ethernet-ip"),
    (r"PROFINET", "profinet"),
    # Security services
    (r"^.*\sOPENVPN\s", "openvpn"),
    (r"Wireguard", "wireguard"),
    (r"IPsec", "ipsec"),
    (r"^\x00\x00\x00\x00\x00\x00\x00\x01", "isakmp"),
    (r"^SSH-1\.[5-9]", "ssh"),
    (r"^\\xff\\x01\\x00", "ipsec-isakmp"),
    (r"IKE", "ike"),
    (r"Fortinet", "fortinet-vpn"),
    (r"Palo Alto", "paloalto"),
    (r"CheckPoint", "checkpoint"),
    # Additional web technologies
    (r"Wordpress", "wordpress"),
    (r"Drupal", "drupal"),
    (r"Joomla", "joomla"),
    (r"Magento", "magento"),
    (r"Laravel", "laravel"),
    (r"Spring Boot", "spring-boot"),
    (r"Next.js", "nextjs"),
    (r"ASP.NET", "aspnet"),
    (r"^HTTP/\\d\\.\\d 5\\d\\d .*cloudflare", "cloudflare"),
    (r"Fastly", "fastly"),
    (r"Akamai", "akamai"),
    # Service discovery
    (r"Consul", "consul"),
    (r"etcd", "etcd"),
    (r"ZooKeeper", "zookeeper"),
    (r"^RO,", "zookeeper"),
    (r"^Zookeeper version", "zookeeper"),
    (r"^notWatching", "zookeeper"),
    (r"Eureka", "eureka"),
    (r"Istio", "istio"),
    (r"Envoy", "envoy"),
    (r"Service Mesh", "service-mesh"),
    # Embedded and IoT systems
    (r"DD-WRT", "dd-wrt"),
    (r"OpenWrt", "openwrt"),
    (r"pfSense", "pfsense"),
    (r"Mikrotik", "mikrotik"),
    (r"RouterOS", "routeros"),
    (r"Ubiquiti", "ubiquiti"),
    (r"UniFi", "unifi"),
    (r"Synology", "synology"),
    (r"QNAP", "qnap"),
    (r"Netgear", "netgear"),
    (r"TP-Link", "tp-link"),
    (r"Asus", "asus"),
    # Industrial control systems
    (r"Siemens", "siemens"),
    (r"S7Comm", "s7comm"),
    (r"^\x03\x00\x00\x16", "s7comm"),
    (r"Allen-Bradley", "allen-bradley"),
    (r"Rockwell", "rockwell"),
    (r"Schneider", "schneider"),
    (r"Honeywell", "honeywell"),
    (r"ABB", "abb"),
    (r"SCADA", "scada"),
    (r"PLC", "plc"),
    # Additional RPC
    (r"^\x4e\x00\x00\x00", "rpc-nfs"),
    (r"^\x01\x86\xa0", "portmap-rpc"),
    (r"JsonRPC", "jsonrpc"),
    (r"XML-RPC", "xmlrpc"),
    (r"^content-length: ", "http-rpc"),
    (r"^POST /RPC2", "xmlrpc"),
    # Distributed systems
    (r"Apache Beam", "apache-beam"),
    (r"Apache Flink", "apache-flink"),
    (r"Apache Spark", "apache-spark"),
    (r"Dask", "dask"),
    (r"Ray", "ray"),
    (r"Akka", "akka"),
    (r"Actor System", "actor-system"),
    (r"Celery", "celery"),
    (r"RQ", "rq"),
    # Legacy protocols
    (r"^\\+OK POP", "pop3"),
    (r"^\\+OK Dovecot", "dovecot-pop3"),
    (r"^gopher:/", "gopher"),
    (r"^1Service", "gopher"),
    (r"^finger:", "finger"),
    (r"Whois", "whois"),
    (r"^%.*whois", "whois"),
    (r"^\\* rlogin", "rlogin"),
    (r"^\\* login", "rlogin"),
    (r"X-Gopher-Menu", "gopher"),
    (r"^150 Opening BINARY mode data", "ftp-data"),
    (r"^\xff\xfb\x01\xff\xfb\x03\xff\xfb\x00\xff\xfd\x18", "telnet"),
    # Network services
    (r"^DHCP", "dhcp"),
    (r"bootp", "bootp"),
    (r"TFTP", "tftp"),
    (r"^Domain Name Server", "dns"),
    (r"^\\x00\\x00\\x10\\x00\\x01", "dns-request"),
    (r"^\\x00\\x00\\x84\\x00\\x01", "dns-response"),
    (r"^PROXY", "proxy-protocol"),
    (r"^\x5b\x62\x69\x6e\x64", "dns-bind"),
    (r"^\\x13\\x03\\x00\\x00", "radius"),
    (r"^\\x01\\x06\\x00", "radius"),
    # Calendar and scheduling
    (r"^\\* OK.*CalDAV", "caldav"),
    (r"^\\* OK.*CardDAV", "carddav"),
    (r"BEGIN:VCALENDAR", "ical"),
    (r"BEGIN:VCARD", "vcard"),
    (r"iCalendar", "icalendar"),
    (r"Exchange Calendar", "exchange-calendar"),
    (r"Google Calendar", "google-calendar"),
    (r"Microsoft Exchange", "ms-exchange"),
    # Instant messaging
    (r"XMPP", "xmpp"),
    (r"^<\\?xml.*jabber", "jabber"),
    (r"^<stream:stream", "xmpp"),
    (r"Slack API", "slack-api"),
    (r"Discord", "discord"),
    (r"Matrix", "matrix"),
    (r"IRC", "irc"),
    (r"^:[a-zA-Z0-9.]+\\s\\d{3}", "irc"),
    (r"^ERROR :Closing Link:", "irc"),
    (r"^PING :", "irc"),
    (r"^:\\S+ NOTICE Auth :", "irc"),
    # Content management
    (r"Alfresco", "alfresco"),
    (r"SharePoint", "sharepoint"),
    (r"Documentum", "documentum"),
    (r"FileNet", "filenet"),
    (r"OpenText", "opentext"),
    (r"Box API", "box-api"),
    (r"Dropbox API", "dropbox-api"),
    (r"Google Drive", "google-drive"),
    (r"OneDrive", "onedrive"),
    # Network storage
    (r"iSCSI", "iscsi"),
    (
        r"^\\x00\\x00\\x00\\x00\\x00\\x00\\x00\\x00\\x00\\x00"
        r"\\x00\\x00\\x00\\x00\\x00\\x00\\x00\\x00\\x00\\x00",
        "iscsi-discovery",
    ),
    (r"Fibre Channel", "fibre-channel"),
    (r"NetApp", "netapp"),
    (r"EMC", "emc"),
    (r"\\x02\\x01\\x00\\x01\\x00", "fibrechannel"),
    (r"NDMP", "ndmp"),
    # Systems management
    (r"^\\xfe\\x54", "syslog"),
    (r"<\\d+>\\w{3}\\s+\\d+\\s\\d+:\\d+:\\d+", "syslog"),
    (r"WMI", "wmi"),
    (r"WBEM", "wbem"),
    (r"WS-Management", "ws-man"),
    (r"^M-SEARCH", "ssdp"),
    (r"NOTIFY", "ssdp-notify"),
    (r"UPnP", "upnp"),
    (r"DLNA", "dlna"),
    # Print services
    (r"IPP/", "ipp"),
    (r"CUPS", "cups"),
    (r"LPD", "lpd"),
    (r"JetDirect", "jetdirect"),
    (r"^\\x01\\x01\\x00\\x", "ipp"),
    # Hardware management
    (r"IPMI", "ipmi"),
    (r"BMC", "bmc"),
    (r"iDRAC", "idrac"),
    (r"iLO", "ilo"),
    (r"DRAC", "drac"),
    (r"Lights Out", "lights-out"),
    (r"\\x06\\x00\\xff\\x07", "ipmi"),
    (r"RMCP", "ipmi-rmcp"),
    # Additional crypto and blockchain
    (r"Cardano", "cardano"),
    (r"Polkadot", "polkadot"),
    (r"Solana", "solana"),
    (r"Chainlink", "chainlink"),
    (r"Near Protocol", "near"),
    (r"Avalanche", "avalanche"),
    (r"Binance", "binance"),
    (r"Hyperledger", "hyperledger"),
    (r"Corda", "corda"),
    (r"^\\xfa\\xce\\xb0\\x0c", "cardano"),
)

EXTRA_SERVICE_PATTERNS: tuple[ServicePattern, ...] = tuple(
    (re.compile(pattern), name) for pattern, name in _RAW_PATTERNS
)
"""Compiled ``(pattern, service name)`` pairs that follow the core table."""


@lru_cache(maxsize=None)
def service_patterns() -> tuple[ServicePattern, ...]:
    """Return the full signature table, core entries first, in matching order."""
    return CORE_SERVICE_PATTERNS + EXTRA_SERVICE_PATTERNS