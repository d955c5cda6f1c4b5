"""
Protection for requests built from on-chain data
"""

import ipaddress
import socket
from typing import Optional, Tuple
from urllib.parse import urlparse
from loguru import logger


# Blocked internal IP ranges (SSRF protection)
BLOCKED_IP_RANGES = [
    ipaddress.ip_network("127.0.0.0/8"),      # Localhost
    ipaddress.ip_network("10.0.0.0/8"),       # Private
    ipaddress.ip_network("172.16.0.0/12"),    # Private
    ipaddress.ip_network("192.168.0.0/16"),   # Private
    ipaddress.ip_network("169.254.0.0/16"),   # Link-local
    ipaddress.ip_network("::1/128"),          # IPv6 localhost
    ipaddress.ip_network("fc00::/7"),         # IPv6 private
    ipaddress.ip_network("fe80::/10"),        # IPv6 link-local
]

ALLOWED_SCHEMES = {"http", "https"}

BLOCKED_HOSTS = {
    "localhost",
    "0.0.0.0",
    "::1",
    "[::1]",
}


def is_internal_ip(ip: str) -> bool:
    """Check if IP address is internal/private"""
    try:
        ip_obj = ipaddress.ip_address(ip)
    except ValueError:
        return True  # Invalid IP, treat as blocked
    return any(ip_obj in blocked_range for blocked_range in BLOCKED_IP_RANGES)


def validate_url_safe(url: str, resolve: bool = True) -> Tuple[bool, Optional[str]]:
    """
    Validate that a URL taken from NFT data is safe to fetch

    Returns:
        (is_safe, error_message)
    """
    try:
        parsed = urlparse(url)
    except ValueError as e:
        return False, f"Invalid URL format: {e}"

    if parsed.scheme not in ALLOWED_SCHEMES:
        return False, f"Invalid URL scheme: {parsed.scheme}. Only http/https allowed."

    if not parsed.hostname:
        return False, "URL must have a hostname"

    if "@" in parsed.netloc:
        return False, "URL contains credentials (not allowed)"

    hostname = parsed.hostname.lower()
    if hostname in BLOCKED_HOSTS:
        return False, f"Blocked hostname: {hostname}"

    try:
        ipaddress.ip_address(hostname)
        literal_ip = True
    except ValueError:
        literal_ip = False

    if literal_ip:
        if is_internal_ip(hostname):
            return False, f"Internal IP address: {hostname}"
        return True, None

    if resolve:
        try:
            resolved_ip = socket.gethostbyname(hostname)
        except socket.gaierror:
            # Unresolvable hosts fail later at request time
            return True, None
        except OSError as e:
            logger.warning(f"Error resolving hostname {hostname}: {e}")
            return True, None
        if is_internal_ip(resolved_ip):
            return False, f"Hostname resolves to internal IP: {resolved_ip}"

    return True, None
