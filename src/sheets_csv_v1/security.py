from __future__ import annotations

import ipaddress
import socket
from urllib.parse import urlsplit

_BLOCKED_HOSTS = {
    "localhost",
    "localhost.localdomain",
}


def is_safe_public_http_url(url: str) -> bool:
    try:
        parsed = urlsplit(url)
        host = (parsed.hostname or "").rstrip(".").lower()
    except ValueError:
        return False

    if parsed.scheme not in {"http", "https"} or not host:
        return False
    if host in _BLOCKED_HOSTS or host.endswith((".local", ".internal")):
        return False

    try:
        return _is_public_address(ipaddress.ip_address(host))
    except ValueError:
        pass

    try:
        resolved = {item[4][0] for item in socket.getaddrinfo(host, None)}
    except (socket.gaierror, UnicodeError):
        # unresolvable names fail later at fetch time
        return True

    return all(_is_public_address(ipaddress.ip_address(raw.split("%", 1)[0])) for raw in resolved)


def _is_public_address(ip: ipaddress.IPv4Address | ipaddress.IPv6Address) -> bool:
    return not (ip.is_loopback or ip.is_private or ip.is_link_local or ip.is_unspecified)
