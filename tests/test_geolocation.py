"""Tests for IP validation and geolocation lookups.

The Azure Maps service is never contacted: the client is exercised against a
mocked requests session, and the API layer against a mocked client.
"""

import ipaddress
from unittest.mock import MagicMock

import pytest
import requests

from mapsidentity.countries.countrymodels import CountryRecord
from mapsidentity.geolocation.geolocationapi import geolocate_ip, geolocate_ips
from mapsidentity.geolocation.geolocationclient import GeolocationClient, GeolocationError
from mapsidentity.geolocation.ipvalidate import describe_ip, is_private_ip, validate_ip_address


CORPUS = (
    CountryRecord("AU", "Australia"),
    CountryRecord("DE", "Germany"),
    CountryRecord("US", "United States"),
)

COUNTRY_BY_IP = {
    "8.8.8.8": "US",
    "1.1.1.1": "AU",
    "2001:4860:4860::8888": "US",
    "5.5.5.5": "DE",
    "9.9.9.9": None,
    "6.6.6.6": "ZZ",
}


def fake_client():
    client = MagicMock(spec=GeolocationClient)

    def country_code(ip):
        if ip == "4.4.4.4":
            raise GeolocationError("API Error: 503 Server Error")
        return COUNTRY_BY_IP[ip]

    client.country_code.side_effect = country_code
    return client


# ---- Validation ----

class TestIPValidation:
    """Test address parsing and classification"""

    def test_valid_addresses(self):
        assert validate_ip_address(" 8.8.8.8 ") == ipaddress.ip_address("8.8.8.8")
        assert validate_ip_address("2001:4898:80e8:b::189").version == 6

    @pytest.mark.parametrize("value", ["", "   ", None])
    def test_required(self, value):
        with pytest.raises(ValueError, match="IP address is required"):
            validate_ip_address(value)

    @pytest.mark.parametrize("value", ["256.1.1.1", "not-an-ip", "1.2.3", "::g"])
    def test_invalid_format(self, value):
        with pytest.raises(ValueError, match="Invalid IP address format"):
            validate_ip_address(value)

    @pytest.mark.parametrize("value,expected", [
        ("10.1.2.3", True),
        ("172.16.0.1", True),
        ("172.31.255.255", True),
        ("172.32.0.1", False),
        ("192.168.0.10", True),
        ("127.0.0.1", True),
        ("8.8.8.8", False),
        ("fe80::1", True),
        ("fec0::1", True),
        ("::1", True),
        ("2001:4860:4860::8888", False),
    ])
    def test_is_private(self, value, expected):
        assert is_private_ip(ipaddress.ip_address(value)) is expected

    def test_describe_public(self):
        assert describe_ip("8.8.8.8") == {
            "ip_address": "8.8.8.8",
            "address_family": "IPv4",
            "is_ipv4": True,
            "is_ipv6": False,
            "is_loopback": False,
            "is_private": False,
            "can_geolocate": True,
        }

    def test_describe_loopback_v6(self):
        info = describe_ip("::1")
        assert info["address_family"] == "IPv6"
        assert info["is_loopback"]
        assert not info["can_geolocate"]


# ---- Client ----

class TestGeolocationClient:
    """Test the REST client against a mocked session"""

    def make_session(self, payload=None, error=None):
        session = MagicMock(spec=requests.Session)
        response = MagicMock()
        response.json.return_value = payload
        if error is not None:
            response.raise_for_status.side_effect = error
        session.get.return_value = response
        return session

    def test_requires_key(self, monkeypatch):
        monkeypatch.delenv("AZURE_MAPS_SUBSCRIPTION_KEY", raising=False)
        with pytest.raises(ValueError, match="AZURE_MAPS_SUBSCRIPTION_KEY"):
            GeolocationClient()

    def test_key_from_env(self, monkeypatch):
        monkeypatch.setenv("AZURE_MAPS_SUBSCRIPTION_KEY", "env-key")
        client = GeolocationClient(session=self.make_session())
        assert client.subscription_key == "env-key"

    def test_country_code(self):
        session = self.make_session({"countryRegion": {"isoCode": "us"}, "ipAddress": "8.8.8.8"})
        client = GeolocationClient("key", session=session, base_url="https://example.test/")

        assert client.country_code("8.8.8.8") == "US"
        session.get.assert_called_once_with(
            "https://example.test/geolocation/ip/json",
            params={"api-version": "1.0", "ip": "8.8.8.8"},
            headers={"subscription-key": "key"},
            timeout=10,
        )

    def test_no_country(self):
        client = GeolocationClient("key", session=self.make_session({"ipAddress": "9.9.9.9"}))
        assert client.country_code("9.9.9.9") is None

    @pytest.mark.parametrize("payload", [
        {"countryRegion": "US"},
        {"countryRegion": ["US"]},
        {"countryRegion": {"isoCode": 840}},
        {"countryRegion": {"isoCode": ""}},
        ["US"],
        None,
    ])
    def test_malformed_payload(self, payload):
        client = GeolocationClient("key", session=self.make_session(payload))
        assert client.country_code("8.8.8.8") is None

    def test_http_error(self):
        session = self.make_session(error=requests.HTTPError("401 Client Error"))
        client = GeolocationClient("key", session=session)
        with pytest.raises(GeolocationError, match="401"):
            client.country_code("8.8.8.8")

    def test_context_manager_closes_session(self):
        session = self.make_session()
        with GeolocationClient("key", session=session):
            pass
        session.close.assert_called_once()


# ---- Single lookup ----

class TestGeolocateIP:
    """Test the single-address envelope"""

    def test_success(self):
        response = geolocate_ip("8.8.8.8", client=fake_client(), corpus=CORPUS)
        assert response == {
            "success": True,
            "ip_address": "8.8.8.8",
            "country": {"code": "US", "name": "United States"},
        }

    def test_invalid(self):
        client = fake_client()
        response = geolocate_ip("nope", client=client, corpus=CORPUS)
        assert response == {"success": False, "error": "Invalid IP address format: 'nope'"}
        client.country_code.assert_not_called()

    def test_private_and_loopback(self):
        client = fake_client()
        assert geolocate_ip("192.168.1.1", client=client, corpus=CORPUS)["error"] == (
            "Private IP address cannot be geolocated"
        )
        assert geolocate_ip("127.0.0.1", client=client, corpus=CORPUS)["error"] == (
            "Loopback address refers to local machine and cannot be geolocated"
        )
        client.country_code.assert_not_called()

    def test_service_error(self):
        response = geolocate_ip("4.4.4.4", client=fake_client(), corpus=CORPUS)
        assert response == {"success": False, "error": "API Error: 503 Server Error"}

    @pytest.mark.parametrize("ip", ["9.9.9.9", "6.6.6.6"])
    def test_no_country(self, ip):
        response = geolocate_ip(ip, client=fake_client(), corpus=CORPUS)
        assert response == {"success": False, "error": "No country data available for this IP address"}

    @pytest.mark.parametrize("payload", [
        {"countryRegion": "US"},
        {"countryRegion": {"isoCode": 840}},
    ])
    def test_malformed_service_response(self, payload):
        session = MagicMock(spec=requests.Session)
        session.get.return_value.json.return_value = payload
        client = GeolocationClient("key", session=session)

        response = geolocate_ip("8.8.8.8", client=client, corpus=CORPUS)
        assert response == {"success": False, "error": "No country data available for this IP address"}

    def test_missing_subscription_key(self, monkeypatch):
        monkeypatch.delenv("AZURE_MAPS_SUBSCRIPTION_KEY", raising=False)
        response = geolocate_ip("8.8.8.8", corpus=CORPUS)
        assert response == {"success": False, "error": "An unexpected error occurred"}

    def test_unexpected_client_error(self):
        client = MagicMock(spec=GeolocationClient)
        client.country_code.side_effect = KeyError("countryRegion")

        response = geolocate_ip("8.8.8.8", client=client, corpus=CORPUS)
        assert response == {"success": False, "error": "An unexpected error occurred"}


# ---- Batch lookup ----

class TestGeolocateIPs:
    """Test batch lookups"""

    def test_mixed_batch(self):
        ips = ["8.8.8.8", "1.1.1.1", "8.8.8.8", "bogus", "10.0.0.1", "4.4.4.4", "9.9.9.9"]
        response = geolocate_ips(ips, client=fake_client(), corpus=CORPUS)

        assert response["success"] is True
        assert response["summary"] == {
            "total": 7,
            "successful": 2,
            "failed": 4,
            "success_rate": 28.6,
        }
        assert response["results"]["successful"] == [
            {"ip_address": "8.8.8.8", "country": {"code": "US", "name": "United States"}},
            {"ip_address": "1.1.1.1", "country": {"code": "AU", "name": "Australia"}},
        ]
        assert response["results"]["failed"] == [
            {"input": "bogus", "error": "Invalid IP address format"},
            {"input": "10.0.0.1", "error": "Private IP address cannot be geolocated"},
            {"input": "4.4.4.4", "error": "API Error: 503 Server Error"},
            {"input": "9.9.9.9", "error": "No country data available"},
        ]

    def test_duplicates_looked_up_once(self):
        client = fake_client()
        geolocate_ips(["5.5.5.5", " 5.5.5.5", "5.5.5.5"], client=client, corpus=CORPUS)
        assert client.country_code.call_count == 1

    def test_ipv6(self):
        response = geolocate_ips(["2001:4860:4860::8888"], client=fake_client(), corpus=CORPUS)
        assert response["summary"]["successful"] == 1

    def test_empty_list(self):
        response = geolocate_ips([], client=fake_client(), corpus=CORPUS)
        assert response == {"success": False, "error": "At least one ip address is required"}

    def test_missing_subscription_key(self, monkeypatch):
        monkeypatch.delenv("AZURE_MAPS_SUBSCRIPTION_KEY", raising=False)
        response = geolocate_ips(["8.8.8.8", "1.1.1.1"], corpus=CORPUS)
        assert response == {"success": False, "error": "Batch processing error"}

    def test_malformed_service_response(self):
        session = MagicMock(spec=requests.Session)
        session.get.return_value.json.return_value = {"countryRegion": "US"}
        client = GeolocationClient("key", session=session)

        response = geolocate_ips(["8.8.8.8"], client=client, corpus=CORPUS)
        assert response["success"] is True
        assert response["results"]["failed"] == [
            {"input": "8.8.8.8", "error": "No country data available"},
        ]

    def test_too_many(self):
        ips = [f"8.8.{i // 256}.{i % 256}" for i in range(101)]
        response = geolocate_ips(ips, client=fake_client(), corpus=CORPUS)
        assert response == {"success": False, "error": "Maximum 100 ip addresses allowed"}
