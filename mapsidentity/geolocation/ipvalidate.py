"""IP address validation for geolocation lookups."""

import ipaddress
from typing import Optional, Union

IPAddress = Union[ipaddress.IPv4Address, ipaddress.IPv6Address]

_PRIVATE_V4 = (
    ipaddress.ip_network("10.0.0.0/8"),
    ipaddress.ip_network("172.16.0.0/12"),
    ipaddress.ip_network("192.168.0.0/16"),
    ipaddress.ip_network("127.0.0.0/8"),
)


def validate_ip_address(value: Optional[str]) -> IPAddress:
    """Parse an IPv4/IPv6 address, raising ValueError with a user-facing message.

    Examples:
        >>> validate_ip_address(" 8.8.8.8 ")
        IPv4Address('8.8.8.8')
    """
    if value is None or not str(value).strip():
        raise ValueError("IP address is required")

    try:
        return ipaddress.ip_address(str(value).strip())
    except ValueError:
        raise ValueError(f"Invalid IP address format: '{value}'") from None


def is_private_ip(ip: IPAddress) -> bool:
    """True for addresses that cannot be geolocated.

    IPv4: 10/8, 172.16/12, 192.168/16 and loopback 127/8.
    IPv6: link-local, site-local and loopback.
    """
    if ip.version == 4:
        return any(ip in net for net in _PRIVATE_V4)
    return ip.is_link_local or ip.is_site_local or ip.is_loopback


def describe_ip(value: str) -> dict:
    """Basic facts about an address, including whether it can be geolocated.

    Raises:
        ValueError: If value is not a valid IP address
    """
    ip = validate_ip_address(value)
    private = is_private_ip(ip)
    return {
        "ip_address": str(value).strip(),
        "address_family": "IPv4" if ip.version == 4 else "IPv6",
        "is_ipv4": ip.version == 4,
        "is_ipv6": ip.version == 6,
        "is_loopback": ip.is_loopback,
        "is_private": private,
        "can_geolocate": not private and not ip.is_loopback,
    }


__all__ = [
    "IPAddress",
    "validate_ip_address",
    "is_private_ip",
    "describe_ip",
]
