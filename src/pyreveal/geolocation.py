"""IP geolocation lookup over HTTP."""

from __future__ import annotations

import json
import logging
from typing import Any, Protocol

import aiohttp
from pydantic import ValidationError

from pyreveal._constants import USER_AGENT
from pyreveal.config import RevealConfig
from pyreveal.exceptions import RevealError, RevealTransportError
from pyreveal.models.coordinate import Coordinate
from pyreveal.models.geolocation import GeolocationResponse

_logger = logging.getLogger(__name__)


class GeolocationSource(Protocol):
    """Anything that can locate the visitor.

    Implementations return ``None`` instead of raising when no usable
    coordinate is available; the reveal then simply never starts.
    """

    async def resolve_visitor_location(self) -> Coordinate | None:
        ...


class StaticGeolocationSource:
    """Source that always answers with the same coordinate (or ``None``)."""

    def __init__(self, coordinate: Coordinate | None) -> None:
        self._coordinate = coordinate

    async def resolve_visitor_location(self) -> Coordinate | None:
        return self._coordinate


class IpGeolocationClient:
    """Async client for a JSON IP geolocation endpoint (``ipapi.co`` by default).

    Usage::

        async with IpGeolocationClient(config) as client:
            coordinate = await client.resolve_visitor_location()
    """

    def __init__(
        self,
        config: RevealConfig,
        *,
        session: aiohttp.ClientSession | None = None,
    ) -> None:
        self._config = config
        self._external_session = session is not None
        self._http_session = session

    async def __aenter__(self) -> IpGeolocationClient:
        if self._http_session is None:
            self._http_session = aiohttp.ClientSession(
                timeout=aiohttp.ClientTimeout(total=self._config.http_timeout),
            )
        return self

    async def __aexit__(self, *exc: Any) -> None:
        if not self._external_session and self._http_session is not None:
            await self._http_session.close()
            self._http_session = None

    def _require_session(self) -> aiohttp.ClientSession:
        if self._http_session is None:
            raise RevealError("Client not initialized. Use 'async with IpGeolocationClient(...) as client:'")
        return self._http_session

    async def fetch(self) -> GeolocationResponse:
        """GET the geolocation endpoint and parse the body.

        Raises
        ------
        RevealTransportError
            On network errors, non-200 status, or a body that is not a valid
            geolocation JSON object.
        """
        http = self._require_session()
        url = self._config.geolocation_url
        headers = {"accept": "application/json", "user-agent": USER_AGENT}

        _logger.debug("GET %s", url)

        try:
            async with http.get(url, headers=headers) as resp:
                text = await resp.text()
                if resp.status != 200:
                    raise RevealTransportError(
                        f"HTTP {resp.status} from {url}: {text[:200]}",
                        status_code=resp.status,
                        url=url,
                    )
        except RevealTransportError:
            raise
        except (aiohttp.ClientError, TimeoutError) as exc:
            raise RevealTransportError(f"Request to {url} failed: {exc}", url=url) from exc

        try:
            body = json.loads(text)
        except json.JSONDecodeError as exc:
            raise RevealTransportError(f"Invalid JSON from {url}: {text[:200]}", url=url) from exc

        if not isinstance(body, dict):
            raise RevealTransportError(f"Expected a JSON object from {url}", url=url)

        try:
            return GeolocationResponse.model_validate(body)
        except ValidationError as exc:
            raise RevealTransportError(f"Unexpected geolocation body from {url}: {exc}", url=url) from exc

    async def resolve_visitor_location(self) -> Coordinate | None:
        """Return the visitor coordinate, or ``None`` if it cannot be determined."""
        try:
            response = await self.fetch()
        except RevealTransportError as exc:
            _logger.warning("Geolocation lookup failed: %s", exc)
            return None

        coordinate = response.coordinate
        if coordinate is None:
            _logger.warning(
                "Geolocation body has no usable coordinate (error=%s reason=%s)",
                response.error,
                response.reason,
            )
            return None

        _logger.debug("Visitor located at %s (%s, %s)", coordinate, response.city, response.country_name)
        return coordinate
