"""HTTP fetcher for the satellite position service."""

from __future__ import annotations

import logging
from typing import Protocol

import aiohttp

from pysatloc._constants import BASE_URL, USER_AGENT
from pysatloc.exceptions import SatLocTransportError

_logger = logging.getLogger(__name__)


class Fetcher(Protocol):
    """Structural fetcher interface used by :class:`~pysatloc.stream.SatLocStream`.

    Implementations return the raw response body for any response that
    arrived, and raise :class:`SatLocTransportError` when none did.
    """

    async def fetch(self) -> str:
        ...


class SatLocFetcher:
    """Fetch the raw position payload of one satellite.

    The satellite id is bound to the resource URL at construction. Without
    an injected ``session`` every call opens its own short-lived
    :class:`aiohttp.ClientSession`, so nothing is pooled, retried or cached.
    """

    def __init__(
        self,
        satellite_id: str,
        *,
        base_url: str = BASE_URL,
        session: aiohttp.ClientSession | None = None,
        timeout: float | None = None,
    ) -> None:
        self._satellite_id = satellite_id
        self._url = f"{base_url.rstrip('/')}/{satellite_id}"
        self._http = session
        self._timeout = aiohttp.ClientTimeout(total=timeout)

    @property
    def satellite_id(self) -> str:
        return self._satellite_id

    @property
    def url(self) -> str:
        return self._url

    async def _get(self, http: aiohttp.ClientSession) -> str:
        async with http.get(self._url, headers={"user-agent": USER_AGENT}, timeout=self._timeout) as resp:
            # undecodable bytes become U+FFFD and are left to the JSON parser
            text = await resp.text(errors="replace")
            _logger.debug("GET %s -> HTTP %s (%d chars)", self._url, resp.status, len(text))
            return text

    async def fetch(self) -> str:
        """Issue one GET and return the body text, whatever the status.

        Bytes that are not valid in the response charset are replaced rather
        than raised, so malformed bodies surface as parse failures downstream.

        Raises
        ------
        SatLocTransportError
            If the request could not be completed.
        """
        _logger.debug("GET %s", self._url)

        try:
            if self._http is not None:
                return await self._get(self._http)
            async with aiohttp.ClientSession() as http:
                return await self._get(http)
        except aiohttp.ClientResponseError as exc:
            raise SatLocTransportError(
                f"Request to {self._url} failed: {exc.message}",
                status_code=exc.status,
                url=self._url,
            ) from exc
        except TimeoutError as exc:
            raise SatLocTransportError(
                f"Request to {self._url} timed out",
                url=self._url,
            ) from exc
        except (aiohttp.ClientError, OSError) as exc:
            raise SatLocTransportError(
                f"Request to {self._url} failed: {exc}",
                errno=getattr(exc, "errno", None),
                url=self._url,
            ) from exc
