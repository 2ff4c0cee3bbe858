"""
Weather Service - rain probability from the NOAA gridpoint forecast API

Answers one question for the sunrise alarm: how likely is rain today, as an
integer 0-100. Every failure degrades to 0; nothing here raises to callers.
"""

from datetime import date
from typing import Any, Dict, Optional

import httpx

from models.config import WeatherConfig
from models.errors import WeatherUnavailable
from utils.logger import get_logger, LogCategory

log = get_logger().for_category(LogCategory.WEATHER)


def max_probability_for_day(forecast: Dict[str, Any], day: date) -> int:
    """
    Highest probabilityOfPrecipitation.value over the periods starting on `day`.

    Periods without a usable value, or not shaped like a period, are skipped.
    Returns 0 when nothing matches.
    """
    prefix = day.isoformat()
    best = 0.0
    properties = forecast.get("properties")
    periods = properties.get("periods") if isinstance(properties, dict) else None
    if not isinstance(periods, list):
        return 0
    for period in periods:
        if not isinstance(period, dict):
            continue
        if not str(period.get("startTime", "")).startswith(prefix):
            continue
        pop = period.get("probabilityOfPrecipitation")
        if not isinstance(pop, dict):
            continue
        try:
            value = float(pop["value"])
        except (KeyError, TypeError, ValueError):
            continue
        best = max(best, value)
    return int(max(0.0, min(100.0, best)))


class WeatherService:
    """
    Queries each configured forecast endpoint and returns the maximum
    rain probability for today across all of them.
    """

    def __init__(self, config: WeatherConfig, client: Optional[httpx.AsyncClient] = None):
        self.config = config
        self._client = client
        self._owns_client = client is None
        self.last_probability: Optional[int] = None

    def _get_client(self) -> httpx.AsyncClient:
        if self._client is None:
            self._client = httpx.AsyncClient(
                timeout=self.config.timeout_s,
                headers={"User-Agent": self.config.user_agent, "Accept": "application/geo+json"},
            )
        return self._client

    async def get_rain_probability(self) -> int:
        if not self.config.enabled:
            return 0

        today = date.today()
        best = 0
        for url in self.config.endpoints:
            try:
                forecast = await self._fetch_forecast(url)
            except WeatherUnavailable as ex:
                log.warn("Forecast unavailable, skipping endpoint", url=url, error=str(ex))
                continue
            probability = max_probability_for_day(forecast, today)
            log.debug("Forecast fetched", url=url, probability=probability)
            best = max(best, probability)

        self.last_probability = best
        log.info(f"Rain probability today: {best}%")
        return best

    async def _fetch_forecast(self, url: str) -> Dict[str, Any]:
        try:
            response = await self._get_client().get(url, headers={"User-Agent": self.config.user_agent})
            response.raise_for_status()
            forecast = response.json()
        except httpx.HTTPStatusError as ex:
            raise WeatherUnavailable(f"status {ex.response.status_code}") from ex
        except httpx.HTTPError as ex:
            raise WeatherUnavailable(f"{type(ex).__name__}: {ex}") from ex
        except ValueError as ex:
            raise WeatherUnavailable(f"invalid JSON: {ex}") from ex

        if not isinstance(forecast, dict):
            raise WeatherUnavailable(f"expected a JSON object, got {type(forecast).__name__}")
        return forecast

    async def close(self) -> None:
        if self._client is not None and self._owns_client:
            await self._client.aclose()
            self._client = None
