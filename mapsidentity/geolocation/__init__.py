"""IP address geolocation."""

from mapsidentity.geolocation.geolocationapi import (
    geolocate_ip,
    geolocate_ips,
    geolocate_ips_async,
)
from mapsidentity.geolocation.geolocationclient import (
    GeolocationClient,
    GeolocationError,
)
from mapsidentity.geolocation.ipvalidate import (
    validate_ip_address,
    is_private_ip,
    describe_ip,
)

__all__ = [
    "geolocate_ip",
    "geolocate_ips",
    "geolocate_ips_async",
    "GeolocationClient",
    "GeolocationError",
    "validate_ip_address",
    "is_private_ip",
    "describe_ip",
]
