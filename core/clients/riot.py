"""Thin async client for the Riot Teamfight Tactics endpoints used by the collector."""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

import httpx

from config.riot.defaults import (
    RIOT_API_BASE_URL_TEMPLATE,
    RIOT_API_KEY,
    RIOT_REQUEST_TIMEOUT_SECONDS,
)
from config.riot.regions import Region, RegionGroup
from core.exceptions import ConfigurationError, NotFoundError, ProviderError, RateLimitError

logger = logging.getLogger(__name__)

PROVIDER_NAME = "riot_tft"


def _host(value: Region | RegionGroup | str) -> str:
    return value.value if isinstance(value, (Region, RegionGroup)) else str(value)


def _parse_retry_after(response: httpx.Response) -> Optional[int]:
    raw = response.headers.get("Retry-After")
    if raw is None:
        return None
    try:
        return int(raw)
    except ValueError:
        return None


class RiotTftClient:
    """Issues single HTTP calls; rate limiting is the caller's concern."""

    def __init__(
        self,
        api_key: Optional[str] = None,
        *,
        timeout: float = RIOT_REQUEST_TIMEOUT_SECONDS,
        base_url_template: str = RIOT_API_BASE_URL_TEMPLATE,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        key = api_key if api_key is not None else RIOT_API_KEY
        if not key:
            raise ConfigurationError("RIOT_API_KEY is not set", key="RIOT_API_KEY")

        self._base_url_template = base_url_template
        self._client = httpx.AsyncClient(
            headers={"X-Riot-Token": key, "Accept": "application/json"},
            timeout=timeout,
            transport=transport,
        )

    async def __aenter__(self) -> "RiotTftClient":
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._client.aclose()

    async def get_challenger_league(self, region: Region | str) -> Dict[str, Any]:
        """Return the challenger league list for a platform."""

        return await self._get_json(region, "/tft/league/v1/challenger")

    async def list_match_ids(
        self,
        puuid: str,
        region_group: RegionGroup | str,
        *,
        count: int = 20,
    ) -> List[str]:
        """Return the most recent match ids of a player, newest first."""

        payload = await self._get_json(
            region_group,
            f"/tft/match/v1/matches/by-puuid/{puuid}/ids",
            params={"count": count},
        )
        if not isinstance(payload, list):
            raise ProviderError("Unexpected match list payload", provider=PROVIDER_NAME)
        return [str(match_id) for match_id in payload]

    async def get_match(self, match_id: str, region_group: RegionGroup | str) -> Dict[str, Any]:
        """Return the full match document for ``match_id``."""

        return await self._get_json(region_group, f"/tft/match/v1/matches/{match_id}")

    async def _get_json(
        self,
        host: Region | RegionGroup | str,
        path: str,
        *,
        params: Optional[Dict[str, Any]] = None,
    ) -> Any:
        url = self._base_url_template.format(host=_host(host)) + path
        try:
            response = await self._client.get(url, params=params)
        except httpx.RequestError as exc:
            raise ProviderError(
                f"Request to {path} failed: {exc}",
                provider=PROVIDER_NAME,
                original_error=exc,
            ) from exc

        if response.status_code == 429:
            retry_after = _parse_retry_after(response)
            logger.warning("Riot API rate limited %s (retry after %s)", path, retry_after)
            raise RateLimitError(
                f"Rate limit exceeded for {path}",
                retry_after=retry_after,
                provider=PROVIDER_NAME,
            )
        if response.status_code == 404:
            raise NotFoundError(f"Riot API resource not found: {path}", resource=path)
        if response.status_code >= 400:
            logger.error("Riot API error %s for %s: %s", response.status_code, path, response.text)
            raise ProviderError(
                f"Riot API error {response.status_code}",
                provider=PROVIDER_NAME,
                status_code=response.status_code,
            )

        try:
            return response.json()
        except ValueError as exc:
            raise ProviderError(
                f"Invalid JSON returned for {path}",
                provider=PROVIDER_NAME,
                original_error=exc,
                status_code=response.status_code,
            ) from exc


__all__ = ["RiotTftClient", "PROVIDER_NAME"]
