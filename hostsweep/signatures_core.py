"""Banner signatures for common network services, first part of the table.

Each entry pairs a regular expression with the service name it reveals.
Patterns are tried in order against a banner decoded as text, and the first
one that matches names the service, so the order of the table matters.
"""

from __future__ import annotations

import re

ServicePattern = tuple[re.Pattern[str], str]

_RAW_PATTERNS: tuple[tuple[str, str], ...] = (
    # HTTP and web services
    (r"^HTTP/\d", "http"),
    (r"Server:", "http"),
    (r"<html.*>", "http"),
    (r"<title>.*</title>", "http"),
    (r"^HTTP/\d+\.\d+ 4\d\d", "http"),
    (r"^HTTP/\d+\.\d+ 5\d\d", "http"),
    (r"404 Not Found", "http"),
    (r"301 Moved Permanently", "http"),
    (r"Content-Type: text/html", "http"),
    (r"WebSocket", "websocket"),
    (r"^WebSphere Application Server", "websphere"),
    (r"Apache Tomcat", "tomcat"),
    (r"JBoss", "jboss"),
    (r"nginx", "nginx"),
    (r"Ruby on Rails", "rails"),
    (r"Django", "django"),
    (r"Express", "express"),
    (r"Microsoft-IIS", "iis"),
    (r"Litespeed", "litespeed"),
    (r"lighttpd", "lighttpd"),
    (r"^Jetty", "jetty"),
    (r"^GlassFish Server", "glassfish"),
    (r"^Oracle-Application-Server", "oracle-as"),
    (r"WAF/\d", "waf"),
    (r"Resin/\d", "resin"),
    # SSH
    (r"^SSH-\d", "ssh"),
    (r"^SSH-1\.", "ssh1"),
    (r"^SSH-2\.", "ssh2"),
    (r"OpenSSH", "openssh"),
    (r"Dropbear", "dropbear-ssh"),
    (r"libssh", "libssh"),
    # Email protocols
    (r"^220.*SMTP", "smtp"),
    (r"^220.*ESMTP", "smtp"),
    (r"^220.*mail", "smtp"),
    (r"^220.*Email", "smtp"),
    (r"^220.*Simple Mail", "smtp"),
    (r"^250[ -]", "smtp"),
    (r"^554 ", "smtp"),
    (r"^550 ", "smtp"),
    (r"^220 .*Exchange", "smtp-exchange"),
    (r"^220 .*Postfix", "smtp-postfix"),
    (r"^220 .*Sendmail", "smtp-sendmail"),
    (r"^\+OK", "pop3"),
    (r"^\* OK", "imap"),
    (r"^\* OK .*IMAP", "imap"),
    (r"^\* OK .*Courier-IMAP", "courier-imap"),
    (r"^\* OK .*Dovecot", "dovecot-imap"),
    (r"^\* OK .*UW IMAP", "uw-imap"),
    (r"^\* PREAUTH", "imap"),
    (r"^OK LOGIN", "pop3"),
    (r"^OK CAPA", "pop3"),
    (r"^\+OK Dovecot", "dovecot-pop3"),
    (r"^\+OK Courier", "courier-pop3"),
    (r"^501 5\.5\.4", "smtp"),
    # FTP
    (r"^220.*FTP", "ftp"),
    (r"^220 .*FileZilla", "filezilla-ftp"),
    (r"^220 .*ProFTPD", "proftpd"),
    (r"^220 .*Pure-FTPd", "pure-ftpd"),
    (r"^220 .*vsFTPd", "vsftpd"),
    (r"^220 .*WU-FTPD", "wu-ftpd"),
    (r"^220 Welcome to Pure-FTPd", "pure-ftpd"),
    (r"^220-FileZilla Server", "filezilla-ftp"),
    (r"^220 Microsoft FTP", "microsoft-ftp"),
    (r"^220 .*FRITZ!Box", "fritzbox-ftp"),
    (r"^220 .*IIS .* FTP", "iis-ftp"),
    (r"^220 .*FTP server \(GNU", "gnu-inetutils-ftpd"),
    (r"^220 .*FTP server ready", "generic-ftp"),
    (r"^331 ", "ftp"),
    (r"^530 ", "ftp"),
    # Database servers
    (r"^S\x00\x00\x01\x55\x00\x00", "mysql"),
    (r"^\x5b\x00\x00\x00", "postgres"),
    (r"^220 PostgreSQL", "postgres"),
    (r"PostgreSQL SCRAM-SHA-256", "postgres"),
    (r"^@REDICULOUS", "redis"),
    (r"^@REDISJSON", "redis"),
    (r"^-ERR\sERROR", "redis"),
    (r"^-ERR\s", "redis"),
    (r"^-DENIED\s", "redis"),
    (r"^\\-ERR", "redis"),
    (r"^\\+OK", "redis"),
    (r"^[+]PONG", "redis"),
    (r"^-NOAUTH\s", "redis"),
    (r"^-BUSY\s", "redis"),
    (r"^[$]", "redis"),
    (r"^(\*)", "redis"),
    (r"^redis_version", "redis"),
    (r"Oracle Transparent Network Substrate Protocol", "oracle-tns"),
    (r"^\x00\x00\x00\x00\x04\x00\x00\x00", "oracle-tns"),
    (r"^@\(#\)sybase", "sybase"),
    (r"^\x04\x01\x00", "sybase-ase"),
    (r"^MongoDB", "mongodb"),
    (r"^\x02\x00\x00\x00", "mongodb"),
    (r"^3 ", "mongodb-shell"),
    (r"^MemCache", "memcached"),
    (r"^VERSION ", "memcached"),
    # \Z: the end of the text only, never before a trailing newline.
    (r"^(?:ERROR|CLIENT_ERROR|SERVER_ERROR)\Z", "memcached"),
    (r"^SQLite format 3\x00", "sqlite"),
    (r"CouchDB", "couchdb"),
    (r"^(?:HBase|ZooKeeper)", "hbase"),
    (r"^Cassandra", "cassandra"),
    (r"^\\x00\\x58\\x01\\x00\\x19\\x00\\x00\\x00\\x11\\x00\\x00\\x00\\x00", "cassandra"),
    (r"^DSN=", "odbc"),
    (r"^DLPX-", "delphix"),
    (r"^RIAK", "riak"),
    (r"^neo4j", "neo4j"),
    (
        r"^\\x00\\x00\\x00\\x78\\x00\\x00\\x00\\x00\\x00\\x00\\x00\\x00"
        r"\\x00\\x00\\x00\\x00\\x00\\x00\\x00\\x00\\x00\\x00\\x00\\x00",
        "influxdb",
    ),
    # Telnet and terminal servers
    (r"^220.*telnet", "telnet"),
    (r"^\xff\xfb\x01\xff\xfb\x03", "telnet"),
    (r"^\xff\xfb", "telnet"),
    (r"Welcome to the Telnet Server", "telnet"),
    (r"BusyBox v", "busybox-telnet"),
    (r"^Login:", "telnet"),
    (r"^\r\nlogin: ", "telnet"),
    (r"username:", "telnet"),
    (r"password:", "terminal"),
    (r"You are on a Router", "router-terminal"),
    (r"^\r\n\r\nRTSP/1.0", "rtsp"),
    # Remote desktop and VNC
    (r"^RFB \d", "vnc"),
    (r"^RFB 003.", "vnc"),
    (r"^RFB 004.", "vnc"),
    (r"^\x03\x00\x00", "rdp"),
    (r"^\x03\x00\x00\x0b\x06", "rdp"),
    (r"^\x03\x00\x00\x13", "rdp"),
    (r"^\x03\x00\x00\x03\x0e\x00\x00\x00", "rdp"),
    (r"^Remote Desktop Protocol", "rdp"),
    (r"Microsoft Terminal Server", "rdp"),
    (r"^\x30\x64\xa0", "pcAnywhere"),
    (r"^CONNECTREQUEST", "teamviewer"),
    # LDAP and directory services
    (r"^\x30\x0c\x02\x01\x01\x61", "ldap"),
    (r"^\x30\x84", "ldap"),
    (r"Microsoft Active Directory LDAP", "active-directory"),
    (r"^objectClass", "ldap"),
    (r"OpenLDAP", "openldap"),
    (r"389 Directory Server", "389-ds"),
    (r"^NDS version", "novell-nds"),
    # Web services and APIs
    (r'^\{"jsonrpc', "jsonrpc"),
    (r'^\{"result', "json-api"),
    (r"^<\?xml", "xml-service"),
    (r"<SOAP", "soap"),
    (r"<soap", "soap"),
    (r"<wsdl", "wsdl"),
    (r"^<\\?xml version", "xml-rpc"),
    (r"xmlns:soap", "soap"),
    (r"<faultcode>", "soap"),
    (r"graphql", "graphql"),
    (r"<GraphQLResponse>", "graphql"),
    (r"REST API", "rest-api"),
    (r"Swagger", "swagger-api"),
    (r"OpenAPI", "openapi"),
    (r"^\\d{3} MCom_Perl", "perl-webservice"),
    # Message queues and streaming
    (r"^AMQP", "amqp"),
    (r"^AMQP\x00\x01\x00\x00", "amqp-0-10"),
    (r"^AMQP\x01\x01\x00\x0A", "amqp-1-0"),
    (r"^AMQP\x00\x00\x09\x01", "amqp-0-9-1"),
    (r"RabbitMQ", "rabbitmq"),
    (r"Apache Kafka", "kafka"),
    (r"^JMQ", "jms"),
    (r"ActiveMQ", "activemq"),
    (r"Apache ActiveMQ", "activemq"),
    (r"MQTT", "mqtt"),
    (r"^\\x10\\x", "mqtt"),
    (r"^\\x20\\x", "mqtt"),
    (r"Redis Pub/Sub", "redis-pubsub"),
    (r"ZeroMQ", "zeromq"),
    (r"Apache Pulsar", "pulsar"),
    (r"NSQ", "nsq"),
    # SSL/TLS
    (r"^\x16\x03", "ssl/tls"),
    (r"^\x16\x03\x00", "ssl-3.0"),
    (r"^\x16\x03\x01", "tls-1.0"),
    (r"^\x16\x03\x02", "tls-1.1"),
    (r"^\x16\x03\x03", "tls-1.2"),
    (r"^\x16\x03\x04", "tls-1.3"),
    (r"^\x80\x80", "ssl-2.0"),
    (r"^SSL", "ssl"),
    (r"TLSv1", "tls"),
    (r"StartTLS", "starttls"),
    # RTSP, SIP and media streaming
    (r"^RTSP/\d", "rtsp"),
    (r"^SIP/\d", "sip"),
    (r"^INVITE sip:", "sip"),
    (r"^REGISTER sip:", "sip"),
    (r"User-Agent: .*Asterisk", "asterisk-sip"),
    (r"User-Agent: .*FreeSWITCH", "freeswitch-sip"),
    (r"Server: .*Asterisk", "asterisk"),
    (r"Server: .*FreeSWITCH", "freeswitch"),
    (r"^ICY \d", "shoutcast"),
    (r"^ICE/1\.0", "icecast"),
    (r"Server: Icecast", "icecast"),
    (r"Server: Shoutcast", "shoutcast"),
    (r"^\$\$\$\$\$:", "rtmp"),
    (r"^RTMP/\d", "rtmp"),
    # Network and routing
    (r"^RIP", "rip"),
    (r"^OSPF", "ospf"),
    (r"^BGP", "bgp"),
    (r"^220.*SNMP", "snmp"),
    (r"public\x02\x01\x00\x02\x01\x00", "snmp"),
    (r"^\x30\x2c\x02\x01\x00\x04", "snmp"),
    (r"X-Openstackinternaltoken", "openstack"),
    (r"zabbix", "zabbix-agent"),
    (r"^\\x00\\x00\\x00\\x00\\x00\\x07\\x72\\x", "elasticsearch"),
    # File sharing
    (r"^\\x00\\x00.*SAMBA", "samba"),
    (r"^SMB", "smb"),
    (r"^\\xff\\x53\\x4d\\x42", "smb"),
    (r"NFS server", "nfs"),
    (r"^\\x80\\x00\\x00\\x18", "nfs"),
    (r"^\\x80\\x00\\x00\\x28", "nfs"),
    (r"^\\x05\\x00\\x0b\\x03\\x10\\x00\\x00\\x00", "dcerpc"),
    (r"AFP", "afp"),
    (r"AFPX", "afp"),
    (r"Apple Filing Protocol", "afp"),
    (r"^\\x00\\x00\\x00\\d.\\xc2\\x80\\x80\\x80", "webdav"),
    # Version control
    (r"^git://", "git"),
    (r"git version", "git"),
    (r"\\x30\\x30", "git"),
    (r"git-upload-pack", "git"),
    (r"^\\d{3} <SVN", "svn"),
    (r"Subversion", "svn"),
    (r"Mercurial", "mercurial"),
    # Gaming and game servers
    (r"^\\xff\\xff\\xff\\xff.*cstrikeHalf-Life", "counter-strike"),
    (r"^\\xff\\xff\\xff\\xffinfo", "quake"),
    (r"^\\xff\\xff\\xff\\xffstatusResponse", "minecraft"),
    (r"^\\x01splitnum", "doom"),
    (r"^\\xa1\\x12\\xa1\\x00", "doom"),
    (r"MineCraft", "minecraft"),
    # The empty alternative matches any text at all.
    (r"^MC|", "minecraft"),
    (r"^\\x01player_", "minecraft"),
    (r"^\\xff\\xff\\xff\\xff.*SourceEngine", "source-engine"),
    (r"^\\xff\\xff\\xff\\xff.*Team Fortress", "team-fortress"),
    (r"^\\xff\\xff\\xff\\xff.*Left 4 Dead", "left-4-dead"),
    (r"^\\xff\\xff\\xff\\xff.*Portal", "portal"),
    (r"^\\xff\\xff\\xff\\xff.*Half-Life", "half-life"),
    (r"^\\xff\\xff\\xff\\xff.*Day of Defeat", "day-of-defeat"),
    (r"^\\xff\\xff\\xff\\xff.*L\\.A\\. Noire", "la-noire"),
    (r"^\\xff\\xff\\xff\\xff.*Dota 2", "dota2"),
    (r"^\\x01ping", "arma"),
    (r"^\\x01pong", "arma"),
    # IoT and smart home
    (r"CoAP", "coap"),
    (r"^\\x40\\x01", "coap"),
    (r"^\\x44\\x01", "coap"),
    (r"MQTT", "mqtt"),
    (r"^\\x10\\x..\\x00\\x04MQTT", "mqtt"),
    (r"Sonos", "sonos"),
    (r"Phillips Hue", "philips-hue"),
    (r"Nest", "nest"),
    (r"Z-Wave", "zwave"),
    (r"ZigBee", "zigbee"),
    (r"^\\x01\\x00\\x5e", "hue-api"),
    (r"^\\xd0\\x00\\x01\\x04", "insteon"),
    # Time protocols
    (r"^\\xd3", "ntp"),
    (r"NTP", "ntp"),
    (r"Stratum", "ntp"),
    (r"^\\xe3", "ntp"),
    (r"^\\x24", "ntp-control"),
    (r"chronyd", "chrony"),
    (r"timedatectl", "systemd-timesyncd"),
    # Blockchain and cryptocurrency
    (r"Bitcoin", "bitcoin"),
    (r"\\xf9\\xbe\\xb4\\xd9", "bitcoin"),
    (r"blockchain", "blockchain"),
    (r"Ethereum", "ethereum"),
    (r"geth", "ethereum"),
    (r"Ripple", "ripple"),
    (r"XRP", "ripple"),
    (r"Monero", "monero"),
    (r"Litecoin", "litecoin"),
    # Machine learning and AI services
    (r"TensorFlow", "tensorflow-serving"),
    (r"PyTorch", "pytorch-serving"),
    (r"ONNX", "onnx-runtime"),
    (r"MLFlow", "mlflow"),
    (r"Jupyter", "jupyter"),
    # Storage and backup
    (r"Ceph", "ceph"),
    (r"GlusterFS", "glusterfs"),
    (r"Hadoop", "hadoop"),
    (r"HDFS", "hdfs"),
    (r"Rsync", "rsync"),
    (r"\\x40\\x52\\x53\\x59\\x4e\\x43\\x44", "rsync"),
    (r"BackupPC", "backuppc"),
    (r"Bacula", "bacula"),
    (r"^Hello Bacula", "bacula"),
    (r"Borg Backup", "borg"),
    (r"Veeam", "veeam"),
    (r"Amanda Backup", "amanda"),
    (r"ZFS", "zfs"),
    (
        r"^\\x00\\x00\\x00\\x2c\\x00\\x00\\x00\\x01\\x00\\x00\\x00\\x01"
        r"\\x00\\x00\\x00\\x14rquota",
        "rquota",
    ),
    # Monitoring and management
    (r"Nagios", "nagios"),
    (r"Zabbix", "zabbix"),
    (r"Prometheus", "prometheus"),
    (r"Grafana", "grafana"),
    (r"Munin", "munin"),
    (r"Cacti", "cacti"),
    (r"PRTG", "prtg"),
    (r"^\\x00bgp", "bgp"),
    (r"^\\xff\\xff.*BGP", "bgp"),
    (r"Icinga", "icinga"),
    (r"collectd", "collectd"),
    (r"netdata", "netdata"),
    (r"Elastic", "elasticsearch"),
    (r"opentsdb", "opentsdb"),
    # News and discussion
    (r"220 .*(NNTP|Network News)", "nntp"),
    (r"^200 .*NNTP", "nntp"),
    (r"^200 .*news", "nntp"),
    (r"^200 .*ready", "nntp"),
    (r"^201 ", "nntp"),
    (r"^IHAVE ", "nntp"),
    (r"^GROUP ", "nntp"),
    (r"^MODE READER", "nntp"),
    (r"NNTP-Posting-", "nntp"),
    (r"^502 ", "nntp"),
)

CORE_SERVICE_PATTERNS: tuple[ServicePattern, ...] = tuple(
    (re.compile(pattern), name) for pattern, name in _RAW_PATTERNS
)
"""Compiled ``(pattern, service name)`` pairs, in matching order."""