"""IP geolocation API.

Single and batch lookups of the country an IP address is located in. Batch
lookups fan out through process_batch so that a slow or failing address
only costs its own slot.
"""

import asyncio
import logging
from typing import Iterable, Optional, Sequence

from mapsidentity.batch.batchprocessor import (
    DEFAULT_CONCURRENCY_LIMIT,
    Err,
    Ok,
    batch_summary,
    process_batch,
)
from mapsidentity.countries.countryapi import load_countries
from mapsidentity.countries.countryidentity import resolve_by_code
from mapsidentity.countries.countrymodels import CountryRecord
from mapsidentity.geolocation.geolocationclient import GeolocationClient, GeolocationError
from mapsidentity.geolocation.ipvalidate import is_private_ip, validate_ip_address
from mapsidentity.utils.validation import validate_array_input

logger = logging.getLogger(__name__)

MAX_BATCH_SIZE = 100


def _unlocatable_reason(ip) -> Optional[str]:
    if ip.is_loopback:
        return "Loopback address refers to local machine and cannot be geolocated"
    if is_private_ip(ip):
        return "Private IP address cannot be geolocated"
    return None


def _country_for(code: Optional[str], corpus: Sequence[CountryRecord]) -> Optional[dict]:
    if not code:
        return None
    result = resolve_by_code(code, corpus)
    return result.record.to_dict() if result.found else None


def geolocate_ip(
    ip_address: str,
    client: Optional[GeolocationClient] = None,
    corpus: Optional[Sequence[CountryRecord]] = None,
) -> dict:
    """Country for a single IP address, as a response envelope.

    Args:
        ip_address: IPv4 or IPv6 address, e.g. "8.8.8.8"
        client: GeolocationClient (default: one built from the environment)
        corpus: Country corpus (default: load_countries())

    Returns:
        {"success": True, "ip_address": ..., "country": {"code", "name"}}
        or {"success": False, "error": ...}

    Examples:
        >>> geolocate_ip("192.168.1.1")
        {'success': False, 'error': 'Private IP address cannot be geolocated'}
    """
    try:
        ip = validate_ip_address(ip_address)
    except ValueError as e:
        return {"success": False, "error": str(e)}

    reason = _unlocatable_reason(ip)
    if reason:
        return {"success": False, "error": reason}

    owns_client = client is None
    try:
        client = client or GeolocationClient()
        corpus = load_countries() if corpus is None else corpus

        logger.info(f"Processing geolocation request for IP: {ip}")
        try:
            code = client.country_code(str(ip))
        except GeolocationError as e:
            return {"success": False, "error": str(e)}

        country = _country_for(code, corpus)
        if country is None:
            return {"success": False, "error": "No country data available for this IP address"}

        logger.info(f"Successfully retrieved country: {country['code']} for IP: {ip}")
        return {"success": True, "ip_address": str(ip), "country": country}
    except Exception as e:
        logger.error(f"Unexpected error during geolocation of IP {ip}: {e}")
        return {"success": False, "error": "An unexpected error occurred"}
    finally:
        if owns_client and client is not None:
            client.close()


async def geolocate_ips_async(
    ip_addresses: Iterable[str],
    client: Optional[GeolocationClient] = None,
    corpus: Optional[Sequence[CountryRecord]] = None,
    concurrency_limit: int = DEFAULT_CONCURRENCY_LIMIT,
) -> dict:
    """Countries for up to 100 IP addresses, looked up concurrently.

    Duplicates are removed case-insensitively before lookup; the summary's
    `total` still counts the addresses as given.

    Returns:
        {"success": True, "summary": {...}, "results": {...}} (see batch_summary)
        or {"success": False, "error": ...} when the list itself is invalid
        or the batch could not run (e.g. no subscription key)
    """
    ip_addresses = list(ip_addresses) if ip_addresses is not None else []
    try:
        unique = validate_array_input(ip_addresses, MAX_BATCH_SIZE, "IP address")
    except ValueError as e:
        return {"success": False, "error": str(e)}

    async def lookup(value: str):
        try:
            ip = validate_ip_address(value)
        except ValueError:
            return Err("Invalid IP address format")

        reason = _unlocatable_reason(ip)
        if reason:
            return Err(reason)

        try:
            code = await asyncio.to_thread(client.country_code, str(ip))
        except GeolocationError as e:
            return Err(str(e))

        country = _country_for(code, corpus)
        if country is None:
            return Err("No country data available")
        return Ok({"ip_address": value, "country": country})

    logger.info(f"Processing batch geolocation for {len(unique)} unique IP addresses")
    owns_client = client is None
    try:
        client = client or GeolocationClient()
        corpus = load_countries() if corpus is None else corpus
        items = await process_batch(unique, lookup, concurrency_limit=concurrency_limit)
    except Exception as e:
        logger.error(f"Error in batch geolocation: {e}")
        return {"success": False, "error": "Batch processing error"}
    finally:
        if owns_client and client is not None:
            client.close()

    summary = batch_summary(items, original_count=len(ip_addresses))
    logger.info(
        f"Completed batch geolocation: {summary['summary']['successful']}/{len(unique)} successful"
    )
    return {"success": True, **summary}


def geolocate_ips(
    ip_addresses: Iterable[str],
    client: Optional[GeolocationClient] = None,
    corpus: Optional[Sequence[CountryRecord]] = None,
    concurrency_limit: int = DEFAULT_CONCURRENCY_LIMIT,
) -> dict:
    """Synchronous wrapper around geolocate_ips_async (not for use inside a running loop)."""
    return asyncio.run(
        geolocate_ips_async(
            ip_addresses,
            client=client,
            corpus=corpus,
            concurrency_limit=concurrency_limit,
        )
    )


__all__ = [
    "MAX_BATCH_SIZE",
    "geolocate_ip",
    "geolocate_ips_async",
    "geolocate_ips",
]
