"""IP address normalization and classification."""

import ipaddress

# Ranges that never resolve to a meaningful visitor location
_LOCAL_NETWORKS = (
    ipaddress.ip_network("127.0.0.0/8"),  # loopback
    ipaddress.ip_network("10.0.0.0/8"),  # private
    ipaddress.ip_network("172.16.0.0/12"),  # private
    ipaddress.ip_network("192.168.0.0/16"),  # private
    ipaddress.ip_network("169.254.0.0/16"),  # link-local
    ipaddress.ip_network("100.64.0.0/10"),  # carrier-grade NAT
    ipaddress.ip_network("0.0.0.0/32"),
    ipaddress.ip_network("::1/128"),
    ipaddress.ip_network("fc00::/7"),  # unique local
    ipaddress.ip_network("fe80::/10"),  # link-local
)


def normalize_ip(raw: str) -> str:
    """Canonicalize the textual form of an IP address.

    Strips whitespace, enclosing brackets (``[::1]``), a zone index
    (``fe80::1%eth0``) and lowercases the result. No validation is done.
    """
    ip = raw.strip()
    if ip.startswith("[") and ip.endswith("]"):
        ip = ip[1:-1]
    ip = ip.split("%", 1)[0]
    return ip.lower()


def parse_ip(ip: str) -> ipaddress.IPv4Address | ipaddress.IPv6Address | None:
    """Parse a normalized IP address.

    Returns:
        The address object, or None if ``ip`` is not a valid IPv4/IPv6 literal
    """
    try:
        return ipaddress.ip_address(ip)
    except ValueError:
        return None


def is_local_address(address: ipaddress.IPv4Address | ipaddress.IPv6Address) -> bool:
    """Check if an address is loopback, private, link-local or CGNAT."""
    return any(
        address.version == network.version and address in network
        for network in _LOCAL_NETWORKS
    )


def client_ip_from_headers(
    forwarded_for: str | None,
    real_ip: str | None,
    peer: str | None,
) -> str | None:
    """Pick the visitor IP the way a proxied deployment reports it.

    The first ``X-Forwarded-For`` entry wins, then ``X-Real-IP``, then the
    socket peer address.
    """
    if forwarded_for:
        first = forwarded_for.split(",")[0].strip()
        if first:
            return first
    if real_ip and real_ip.strip():
        return real_ip.strip()
    return peer
