from alert_models import LogRecord

CLUSTER_HOSTNAME = "hivemq-cluster"
TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M"


def safe_value(value, fallback):
    """Return value, or fallback when it is missing or empty"""
    if not value:
        return fallback
    return value


def safe_hostname(labels):
    """Resolve hostname label, falling back to the cluster name or 'unknown'"""
    hostname = labels.get('hostname')
    if hostname:
        return hostname
    if labels.get('scope') == 'cluster':
        return CLUSTER_HOSTNAME
    return 'unknown'


def split_host_port(value):
    """Split 'host:port' or '[host]:port' into (host, port)"""
    if value.startswith('['):
        end = value.find(']')
        if end < 0:
            raise ValueError(f"missing ']' in address {value!r}")
        if end + 1 == len(value):
            raise ValueError(f"missing port in address {value!r}")
        if value[end + 1] != ':':
            raise ValueError(f"unexpected text after ']' in address {value!r}")
        if value.rfind(':') != end + 1:
            raise ValueError(f"too many colons in address {value!r}")
        host = value[1:end]
        port = value[end + 2:]
        if '[' in host or ']' in host or '[' in port or ']' in port:
            raise ValueError(f"unexpected bracket in address {value!r}")
        return host, port

    colon = value.rfind(':')
    if colon < 0:
        raise ValueError(f"missing port in address {value!r}")
    host = value[:colon]
    port = value[colon + 1:]
    if ':' in host:
        raise ValueError(f"too many colons in address {value!r}")
    if '[' in host or ']' in host or '[' in port or ']' in port:
        raise ValueError(f"unexpected bracket in address {value!r}")
    return host, port


def safe_ip(labels):
    """Derive the host part of the 'instance' label, or 'NA'"""
    instance = labels.get('instance')
    if not instance:
        return 'NA'

    try:
        host, _ = split_host_port(instance)
        return host
    except ValueError:
        pass

    return instance.split(':')[0]


def build_log_record(alert, now):
    """Map an alert onto the JSON log record written for it"""
    return LogRecord(
        timestamp=now.strftime(TIMESTAMP_FORMAT),
        ip=safe_ip(alert.labels),
        hostname=safe_hostname(alert.labels),
        kpi=safe_value(alert.labels.get('alertname'), 'unknown'),
        value='1',
        count=safe_value(alert.annotations.get('current_value'), 'NA'),
        summary=safe_value(alert.annotations.get('summary'), 'no summary'),
    )
