"""Azure Maps IP geolocation client.

Thin wrapper over the REST endpoint:
    GET {base_url}/geolocation/ip/json?api-version=1.0&ip=<address>
    header: subscription-key

The subscription key is taken from the AZURE_MAPS_SUBSCRIPTION_KEY
environment variable unless passed explicitly.
"""

import logging
import os
from typing import Optional

import requests

logger = logging.getLogger(__name__)

SUBSCRIPTION_KEY_ENV = "AZURE_MAPS_SUBSCRIPTION_KEY"
DEFAULT_BASE_URL = "https://atlas.microsoft.com"
API_VERSION = "1.0"


class GeolocationError(RuntimeError):
    """The geolocation service could not be reached or returned an error."""


class GeolocationClient:
    """Resolve IP addresses to ISO 3166-1 alpha-2 country codes.

    Args:
        subscription_key: Azure Maps key (default: $AZURE_MAPS_SUBSCRIPTION_KEY)
        base_url: Service root, overridable for sovereign clouds and tests
        timeout: Per-request timeout in seconds
        session: Optional requests.Session to reuse connections

    Raises:
        ValueError: If no subscription key is available
    """

    def __init__(
        self,
        subscription_key: Optional[str] = None,
        base_url: str = DEFAULT_BASE_URL,
        timeout: float = 10,
        session: Optional[requests.Session] = None,
    ):
        self.subscription_key = subscription_key or os.environ.get(SUBSCRIPTION_KEY_ENV)
        if not self.subscription_key:
            raise ValueError(f"{SUBSCRIPTION_KEY_ENV} environment variable must be set")

        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.session = session or requests.Session()

    def country_code(self, ip: str) -> Optional[str]:
        """ISO alpha-2 code for `ip`, or None if the service has no country for it.

        Raises:
            GeolocationError: On transport errors or non-2xx responses
        """
        url = f"{self.base_url}/geolocation/ip/json"
        params = {"api-version": API_VERSION, "ip": str(ip)}
        headers = {"subscription-key": self.subscription_key}

        try:
            response = self.session.get(url, params=params, headers=headers, timeout=self.timeout)
            response.raise_for_status()
            payload = response.json()
        except requests.RequestException as e:
            logger.error(f"Azure Maps geolocation request failed for IP {ip}: {e}")
            raise GeolocationError(f"API Error: {e}") from e
        except ValueError as e:
            raise GeolocationError("API Error: response was not valid JSON") from e

        region = payload.get("countryRegion") if isinstance(payload, dict) else None
        if not isinstance(region, dict):
            return None
        iso_code = region.get("isoCode")
        if not isinstance(iso_code, str) or not iso_code.strip():
            return None
        return iso_code.strip().upper()

    def close(self):
        self.session.close()

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        self.close()


__all__ = [
    "SUBSCRIPTION_KEY_ENV",
    "GeolocationError",
    "GeolocationClient",
]
