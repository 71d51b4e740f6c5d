"""
Attach live weather, reviews, guides and news to a finished trip plan.

The four provider calls run concurrently and are collected one by one, so a
failing provider only costs its own section. Per-provider outcome is written
to ``realTimeEnhancements.apiStatus``:

  success   provider answered with a usable value
  fallback  provider raised; its default value was used instead
  error     provider answered with something unusable; an empty list was used
"""

import copy
import logging
from concurrent.futures import ThreadPoolExecutor, as_completed
from datetime import datetime, timezone
from typing import Any, Callable, Optional

from . import SearchAgent, WeatherAgent

logger = logging.getLogger(__name__)

ENRICHED_STATUS = "✅ Enhanced with real-time intelligence from SerpAPI & OpenWeather"
DATA_SOURCE = "SerpAPI + OpenWeather + LLM"
SEARCHES_USED = 3


def _as_dict(value: Any) -> Any:
    return value.to_dict() if hasattr(value, "to_dict") else value


def _as_dict_list(value: Any) -> Optional[list]:
    """List of plain dicts, or None when *value* is not a list."""
    if not isinstance(value, list):
        return None
    items = [_as_dict(item) for item in value]
    return [item for item in items if isinstance(item, dict)]


class EnrichmentOrchestrator:
    """Fan out to the weather and search providers and fold the results into a plan."""

    def __init__(self,
                 weather_fn: Optional[Callable[[str], Any]] = None,
                 reviews_fn: Optional[Callable[[str], list]] = None,
                 guides_fn: Optional[Callable[[str], list]] = None,
                 news_fn: Optional[Callable[[], list]] = None):
        self._weather_fn = weather_fn or WeatherAgent.get_weather_intelligence
        self._reviews_fn = reviews_fn or SearchAgent.search_reviews
        self._guides_fn = guides_fn or SearchAgent.find_guides
        self._news_fn = news_fn or SearchAgent.get_tourism_news

    def _defaults(self, destination: str) -> dict[str, Callable[[], list]]:
        return {
            "reviews": lambda: [r.to_dict() for r in SearchAgent.fallback_reviews(destination)],
            "guides": lambda: [g.to_dict() for g in SearchAgent.official_guides(destination)],
            "news": lambda: [n.to_dict() for n in SearchAgent.fallback_news()],
        }

    def _gather(self, destination: str) -> tuple[dict, dict]:
        calls = {
            "weather": (self._weather_fn, (destination,)),
            "reviews": (self._reviews_fn, (destination,)),
            "guides": (self._guides_fn, (destination,)),
            "news": (self._news_fn, ()),
        }
        results: dict[str, Any] = {}
        failed: dict[str, Exception] = {}
        with ThreadPoolExecutor(max_workers=len(calls)) as pool:
            futures = {pool.submit(fn, *args): name for name, (fn, args) in calls.items()}
            for future in as_completed(futures):
                name = futures[future]
                try:
                    results[name] = future.result()
                except Exception as exc:
                    logger.warning("%s enrichment failed for %s: %s", name, destination, exc)
                    failed[name] = exc
        return results, failed

    def enrich(self, plan: dict, destination: str) -> dict:
        """Return a copy of *plan* with realTimeEnhancements and live weather attached."""
        enriched = copy.deepcopy(plan)
        results, failed = self._gather(destination)
        api_status: dict[str, str] = {}

        # Weather
        weather_info = dict(enriched.get("weatherInfo") or {})
        intelligence = _as_dict(results.get("weather"))
        if "weather" in failed:
            api_status["weather"] = "fallback"
            weather_source = "fallback"
        elif isinstance(intelligence, dict) and intelligence.get("currentSeason"):
            _apply_weather(weather_info, intelligence)
            api_status["weather"] = "success"
            weather_source = "openweather"
        else:
            logger.warning("Weather provider returned unusable data for %s", destination)
            api_status["weather"] = "error"
            weather_source = "fallback"
        enriched["weatherInfo"] = weather_info

        # Search
        sections = {}
        defaults = self._defaults(destination)
        for name in ("reviews", "guides", "news"):
            if name in failed:
                sections[name] = defaults[name]()
                api_status[name] = "fallback"
                continue
            items = _as_dict_list(results.get(name))
            if items is None:
                logger.warning("%s provider returned %s, expected a list", name,
                               type(results.get(name)).__name__)
                sections[name] = []
                api_status[name] = "error"
            else:
                sections[name] = items
                api_status[name] = "success"

        enriched["realTimeEnhancements"] = {
            "attractionReviews": sections["reviews"],
            "localGuides": sections["guides"],
            "currentNews": sections["news"],
            "dataSource": DATA_SOURCE,
            "lastUpdated": datetime.now(timezone.utc).isoformat(),
            "searchesUsed": SEARCHES_USED,
            "weatherSource": weather_source,
            "apiStatus": {k: api_status[k] for k in ("weather", "reviews", "guides", "news")},
        }

        base_status = plan.get("enhancementStatus")
        enriched["enhancementStatus"] = f"{ENRICHED_STATUS} · {base_status}" if base_status else ENRICHED_STATUS
        logger.info("Enriched plan for %s: %s", destination, enriched["realTimeEnhancements"]["apiStatus"])
        return enriched


def _apply_weather(weather_info: dict, intelligence: dict) -> None:
    """Overwrite the seasonal text with live values; humidity/wind/visibility are kept."""
    weather_info["currentSeason"] = intelligence["currentSeason"]
    if intelligence.get("temperature"):
        weather_info["temperature"] = intelligence["temperature"]
    clothing = intelligence.get("clothingRecommendations") or []
    if clothing:
        weather_info["clothing"] = ", ".join(clothing)
    considerations = intelligence.get("seasonalConsiderations") or []
    if considerations:
        weather_info["precautions"] = ", ".join(considerations)
    warnings = intelligence.get("weatherWarnings") or []
    if warnings:
        weather_info["weatherWarnings"] = list(warnings)
    weather_info["dataQuality"] = "live"


def enhancement_stats(plan: dict) -> dict:
    """Counts reported alongside an enriched plan."""
    extras = plan.get("realTimeEnhancements") or {}
    return {
        "reviewsFound": len(extras.get("attractionReviews") or []),
        "guidesFound": len(extras.get("localGuides") or []),
        "newsFound": len(extras.get("currentNews") or []),
        "weatherEnhanced": (extras.get("apiStatus") or {}).get("weather") == "success",
    }
