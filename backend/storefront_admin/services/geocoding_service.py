"""
Geocoding Service - address to coordinates via a Nominatim search endpoint
"""
import logging
from typing import Optional

import httpx

from storefront_admin.core.config import settings
from storefront_admin.domain.location import GeocodeResult

logger = logging.getLogger(__name__)

MIN_ADDRESS_LENGTH = 5


def build_full_address(
    address_line1: Optional[str] = None,
    address_line2: Optional[str] = None,
    city: Optional[str] = None,
    state_province: Optional[str] = None,
    postal_code: Optional[str] = None,
    country: Optional[str] = None,
) -> str:
    parts = [address_line1, address_line2, city, state_province, postal_code, country]
    return ", ".join(part.strip() for part in parts if part and part.strip())


class GeocodingService:
    def __init__(
        self,
        base_url: Optional[str] = None,
        user_agent: Optional[str] = None,
        timeout: float = 10.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.base_url = base_url or settings.GEOCODER_URL
        self.user_agent = user_agent or settings.GEOCODER_USER_AGENT
        self.timeout = timeout
        self._transport = transport

    async def geocode_address(self, address: str) -> GeocodeResult:
        """
        Resolve an address to latitude/longitude (first match)

        Raises:
            ValueError: address too short or no match
            httpx.HTTPError: geocoder unreachable or returned an error status
        """
        address = (address or "").strip()
        if len(address) < MIN_ADDRESS_LENGTH:
            raise ValueError("Please enter a more complete address")

        async with httpx.AsyncClient(transport=self._transport, timeout=self.timeout) as client:
            response = await client.get(
                self.base_url,
                params={"format": "json", "q": address, "limit": 1},
                headers={"User-Agent": self.user_agent},
            )
            response.raise_for_status()
            matches = response.json()

        if not matches:
            logger.info(f"No geocoding match for address: {address}")
            raise ValueError("Address not found. Please check the address and try again.")

        first = matches[0]
        return GeocodeResult(
            latitude=float(first["lat"]),
            longitude=float(first["lon"]),
            display_name=first.get("display_name"),
        )
