"""
OpenWeather-backed weather for Jharkhand destinations.

The low-level calls raise WeatherError; callers decide whether to fall back.
``get_weather_report`` is the dashboard view and never raises for upstream
failures, it reports them per part in ``apiStatus`` instead.
"""

import logging
import os
import re
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from datetime import date, datetime, timedelta, timezone
from typing import List, Optional

import requests
from dataclasses_json import LetterCase, dataclass_json
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry

from jharkhand_data import get_coordinates
from trip_utils import canonical_destination_key, current_season

logger = logging.getLogger(__name__)

BASE_URL = "https://api.openweathermap.org/data/2.5"
TIMEOUT = 10

BEST_TIME_TO_VISIT = ("October to March (Winter and Post-Monsoon) - pleasant weather, "
                      "ideal for sightseeing and outdoor activities")

SEASONAL_CONSIDERATIONS = {
    "Winter": [
        "Best time for sightseeing with pleasant weather",
        "Pack warm clothes for early morning and evening",
        "Ideal for outdoor activities and trekking",
    ],
    "Summer": [
        "Very hot during day, plan indoor activities during peak hours",
        "Carry sun protection and stay hydrated",
        "Early morning and evening best for outdoor activities",
    ],
    "Monsoon": [
        "Heavy rainfall may affect travel plans",
        "Roads to remote areas may be difficult",
        "Beautiful green landscapes but limited outdoor activities",
    ],
    "Post-Monsoon": [
        "Pleasant weather with clear skies",
        "Excellent for photography and sightseeing",
        "Waterfalls at their most beautiful",
    ],
}

CLOTHING_BY_SEASON = {
    "Winter": ["Light woolen sweater or cardigan", "Warm jacket for mornings and evenings",
               "Long pants or jeans", "Closed shoes with socks"],
    "Summer": ["Cotton t-shirts and shirts", "Light colored clothing", "Sun hat or cap",
               "Sunglasses", "Comfortable walking shoes"],
    "Monsoon": ["Quick-dry clothing", "Waterproof jacket or raincoat", "Umbrella",
                "Non-slip footwear", "Plastic bags for electronics"],
    "Post-Monsoon": ["Light layers", "Comfortable shoes"],
}


class WeatherError(RuntimeError):
    """OpenWeather is unreachable, unconfigured or returned garbage."""


def create_session() -> requests.Session:
    """Session with a small retry budget for transient upstream errors."""
    session = requests.Session()
    retry_strategy = Retry(
        total=2,
        status_forcelist=[429, 500, 502, 503, 504],
        allowed_methods=["GET"],
        backoff_factor=0.4,
    )
    adapter = HTTPAdapter(max_retries=retry_strategy)
    session.mount("http://", adapter)
    session.mount("https://", adapter)
    return session


_session = create_session()


# ---------------------------------------------------------------------------
# Data types
# ---------------------------------------------------------------------------

@dataclass_json(letter_case=LetterCase.CAMEL)
@dataclass
class WeatherActivity:
    activity: str
    suitable_weather: str
    alternative_if_bad_weather: str
    season: str
    time_of_day: str  # morning, afternoon, evening, any


@dataclass_json(letter_case=LetterCase.CAMEL)
@dataclass
class WeatherAlert:
    type: str       # warning, advisory
    message: str
    severity: str   # low, medium, high
    valid_until: str
    affected_activities: List[str] = field(default_factory=list)


@dataclass_json(letter_case=LetterCase.CAMEL)
@dataclass
class WeatherIntelligence:
    current_season: str
    expected_weather: str
    temperature: str
    rainfall: str
    weather_warnings: List[str] = field(default_factory=list)
    clothing_recommendations: List[str] = field(default_factory=list)
    weather_based_activities: List[WeatherActivity] = field(default_factory=list)
    seasonal_considerations: List[str] = field(default_factory=list)
    best_time_to_visit: str = BEST_TIME_TO_VISIT
    weather_alerts: List[WeatherAlert] = field(default_factory=list)


@dataclass_json(letter_case=LetterCase.CAMEL)
@dataclass
class ForecastDay:
    date: str
    high: int
    low: int
    condition: str
    humidity: int
    chance_of_rain: int
    wind_speed: float
    uv_index: int


# ---------------------------------------------------------------------------
# Low-level calls
# ---------------------------------------------------------------------------

def _fetch(endpoint: str, destination: str) -> dict:
    api_key = os.getenv("OPENWEATHER_API_KEY", "")
    if not api_key:
        raise WeatherError("OPENWEATHER_API_KEY not set")
    coords = get_coordinates(canonical_destination_key(destination))
    try:
        resp = _session.get(
            f"{BASE_URL}/{endpoint}",
            params={"lat": coords["lat"], "lon": coords["lon"], "appid": api_key, "units": "metric"},
            timeout=TIMEOUT,
        )
        resp.raise_for_status()
        data = resp.json()
    except (requests.RequestException, ValueError) as exc:
        raise WeatherError(f"OpenWeather /{endpoint} failed: {exc}") from exc
    if not isinstance(data, dict):
        raise WeatherError(f"OpenWeather /{endpoint} returned {type(data).__name__}")
    return data


def _num(value, default: float = 0.0) -> float:
    try:
        return float(value)
    except (TypeError, ValueError):
        return default


def _condition(payload: dict) -> dict:
    conditions = payload.get("weather")
    if isinstance(conditions, list) and conditions and isinstance(conditions[0], dict):
        return conditions[0]
    return {}


# ---------------------------------------------------------------------------
# Derived text
# ---------------------------------------------------------------------------

def clothing_for_temperature(temp: float) -> str:
    if temp < 15:
        return "Heavy woolens, jacket, warm cap, gloves recommended"
    if temp < 25:
        return "Light woolens, sweater, light jacket for evenings"
    if temp < 35:
        return "Cotton clothes, light fabrics, sun hat recommended"
    return "Light cotton, breathable fabrics, sun protection essential"


def clothing_for_season(temp: float, season: str) -> list[str]:
    recommendations = list(CLOTHING_BY_SEASON.get(season, CLOTHING_BY_SEASON["Post-Monsoon"]))
    if season == "Winter" and temp < 10:
        recommendations.append("Warm cap and light gloves")
    return recommendations


def weather_warnings(current: dict) -> list[str]:
    main = current.get("main") or {}
    wind = current.get("wind") or {}
    temp = _num(main.get("temp"))
    warnings = []
    if temp > 35:
        warnings.append("High temperature alert - stay hydrated and avoid midday sun")
    if "temp" in main and temp < 5:
        warnings.append("Cold weather warning - dress warmly and carry extra layers")
    if "rain" in str(_condition(current).get("main", "")).lower():
        warnings.append("Rainy conditions - carry umbrella and wear appropriate footwear")
    if _num(wind.get("speed")) > 10:
        warnings.append("Windy conditions - secure loose items and be cautious outdoors")
    return warnings


def forecast_warnings(forecast: Optional[dict]) -> list[str]:
    """Warnings from the next 24 hours (eight 3-hour slots) of a /forecast payload."""
    entries = (forecast or {}).get("list")
    if not isinstance(entries, list):
        return []
    upcoming = [e for e in entries[:8] if isinstance(e, dict)]
    warnings = []
    chance = max((_num(e.get("pop")) for e in upcoming), default=0.0)
    if chance >= 0.6:
        warnings.append(f"Rain likely in the next 24 hours ({round(chance * 100)}% chance) "
                        "- keep indoor alternatives ready")
    peak = max((_num((e.get("main") or {}).get("temp_max")) for e in upcoming), default=0.0)
    if peak > 38:
        warnings.append("Heat expected in the next 24 hours - plan outdoor visits for early morning")
    return warnings


def _precautions(current: dict) -> str:
    main = current.get("main") or {}
    temp = _num(main.get("temp"), 20.0)
    precautions = []
    if temp > 30:
        precautions.append("Stay hydrated")
    if temp < 15:
        precautions.append("Keep warm")
    if "rain" in str(_condition(current).get("main", "")).lower():
        precautions.append("Carry rain gear")
    if _num(main.get("humidity")) > 80:
        precautions.append("Be prepared for humid conditions")
    return ", ".join(precautions) or "Take normal weather precautions"


def _rainfall(season: str, current: dict) -> str:
    if season == "Monsoon":
        return "High - expect regular rainfall"
    if season == "Winter":
        return "Minimal - dry season"
    last_hour = (current.get("rain") or {}).get("1h")
    if isinstance(last_hour, (int, float)):
        return f"{last_hour}mm in last hour"
    return "Low to moderate depending on season"


def _activities(condition_main: str, season: str) -> list[WeatherActivity]:
    activities = []
    if season == "Winter":
        activities.append(WeatherActivity(
            "Waterfall visits (Hundru, Dassam, Jonha)", "Clear, sunny days",
            "Visit museums or temples", "Winter", "morning"))
        activities.append(WeatherActivity(
            "Wildlife safaris at Betla National Park", "Clear weather, mild temperatures",
            "Visit Birsa Zoological Park", "Winter", "morning"))
    if "rain" not in condition_main.lower():
        activities.append(WeatherActivity(
            "Temple visits (Baidyanath, Parasnath)", "Any weather except heavy rain",
            "Indoor cultural activities", season, "any"))
    return activities


def _valid_until(hours: int) -> str:
    return (datetime.now(timezone.utc) + timedelta(hours=hours)).isoformat()


def _uv_index(weather_id: int) -> int:
    if 200 <= weather_id < 300:
        return 2  # thunderstorm
    if 300 <= weather_id < 600:
        return 4  # drizzle / rain
    if 600 <= weather_id < 700:
        return 3  # snow
    if 700 <= weather_id < 800:
        return 5  # haze, mist
    if weather_id == 800:
        return 8
    return 6


def build_intelligence(current: dict, season: str, forecast: Optional[dict] = None) -> WeatherIntelligence:
    """Turn OpenWeather /weather (and optionally /forecast) payloads into travel guidance."""
    main = current.get("main") or {}
    condition = _condition(current)
    temp = _num(main.get("temp"))
    temp_min = _num(main.get("temp_min"), temp)
    temp_max = _num(main.get("temp_max"), temp)
    condition_main = str(condition.get("main") or "Clear")

    alerts = []
    if "temp" in main and temp < 8:
        alerts.append(WeatherAlert(
            "warning", "Cold wave conditions - temperatures below 8°C", "medium",
            _valid_until(24), ["Early morning sightseeing", "Outdoor photography"]))

    return WeatherIntelligence(
        current_season=season,
        expected_weather=str(condition.get("description") or condition_main),
        temperature=f"{round(temp)}°C (Range: {round(temp_min)}°C - {round(temp_max)}°C)",
        rainfall=_rainfall(season, current),
        weather_warnings=weather_warnings(current) + forecast_warnings(forecast),
        clothing_recommendations=clothing_for_season(temp, season),
        weather_based_activities=_activities(condition_main, season),
        seasonal_considerations=list(SEASONAL_CONSIDERATIONS[season]),
        weather_alerts=alerts,
    )


# ---------------------------------------------------------------------------
# Provider operations (raise WeatherError)
# ---------------------------------------------------------------------------

def get_weather_intelligence(destination: str, today: Optional[date] = None) -> WeatherIntelligence:
    """Live intelligence from /weather and /forecast, fetched together."""
    with ThreadPoolExecutor(max_workers=2) as pool:
        current_future = pool.submit(_fetch, "weather", destination)
        forecast_future = pool.submit(_fetch, "forecast", destination)
        current = current_future.result()
        forecast = forecast_future.result()
    return build_intelligence(current, current_season(today), forecast)


def get_current_weather(destination: str, today: Optional[date] = None) -> dict:
    current = _fetch("weather", destination)
    main = current.get("main") or {}
    wind = current.get("wind") or {}
    temp = _num(main.get("temp"))
    info = {
        "currentSeason": current_season(today),
        "temperature": f"{round(temp)}°C (feels like {round(_num(main.get('feels_like'), temp))}°C)",
        "clothing": clothing_for_temperature(temp),
        "precautions": _precautions(current),
        "windSpeed": f"{_num(wind.get('speed'))} m/s",
    }
    if isinstance(main.get("humidity"), (int, float)):
        info["humidity"] = f"{main['humidity']}%"
    visibility = current.get("visibility")
    info["visibility"] = (f"{round(visibility / 100) / 10} km"
                          if isinstance(visibility, (int, float)) else "Good")
    return info


def get_weekly_forecast(destination: str) -> list[ForecastDay]:
    """Roughly one entry per day from the 3-hourly, 5-day forecast."""
    forecast = _fetch("forecast", destination)
    entries = forecast.get("list") if isinstance(forecast.get("list"), list) else []
    days = []
    for item in entries[::8][:7]:
        main = item.get("main") or {}
        condition = _condition(item)
        stamp = item.get("dt")
        when = (datetime.fromtimestamp(stamp, tz=timezone.utc)
                if isinstance(stamp, (int, float)) else datetime.now(timezone.utc))
        days.append(ForecastDay(
            date=when.strftime("%d/%m/%Y"),
            high=round(_num(main.get("temp_max"), _num(main.get("temp")))),
            low=round(_num(main.get("temp_min"), _num(main.get("temp")))),
            condition=str(condition.get("description") or "—"),
            humidity=int(_num(main.get("humidity"))),
            chance_of_rain=round(_num(item.get("pop")) * 100),
            wind_speed=_num((item.get("wind") or {}).get("speed")),
            uv_index=_uv_index(int(_num(condition.get("id"), 800))),
        ))
    return days


# ---------------------------------------------------------------------------
# Fallbacks
# ---------------------------------------------------------------------------

def fallback_intelligence(season: str) -> WeatherIntelligence:
    return WeatherIntelligence(
        current_season=season,
        expected_weather="Pleasant and cool" if season == "Winter" else "Variable",
        temperature="10°C - 25°C" if season == "Winter" else "15°C - 30°C",
        rainfall="High" if season == "Monsoon" else "Low",
        clothing_recommendations=clothing_for_season(20, season),
        weather_based_activities=_activities("Clear", season),
        seasonal_considerations=list(SEASONAL_CONSIDERATIONS[season]),
    )


def fallback_current_weather(season: str) -> dict:
    return {
        "currentSeason": season,
        "temperature": "15°C - 22°C" if season == "Winter" else "20°C - 28°C",
        "clothing": clothing_for_temperature(18 if season == "Winter" else 25),
        "precautions": "Standard weather precautions recommended",
    }


def fallback_forecast(today: Optional[date] = None) -> list[ForecastDay]:
    start = today or date.today()
    return [
        ForecastDay((start + timedelta(days=i)).strftime("%d/%m/%Y"), 25, 15, "Pleasant", 60, 10, 5, 6)
        for i in range(7)
    ]


# ---------------------------------------------------------------------------
# Dashboard report
# ---------------------------------------------------------------------------

_FIRST_NUMBER = re.compile(r"-?\d+(?:\.\d+)?")


def _report_alerts(intelligence: WeatherIntelligence, current: dict) -> list[dict]:
    alerts = [
        WeatherAlert("advisory", message, "medium", _valid_until(24),
                     ["Outdoor activities", "Sightseeing"])
        for message in intelligence.weather_warnings
    ]
    match = _FIRST_NUMBER.search(str(current.get("temperature", "")))
    if intelligence.current_season == "Summer" and match and float(match.group()) >= 35:
        alerts.append(WeatherAlert(
            "warning", "High temperature warning - avoid outdoor activities during 11 AM - 4 PM",
            "high", _valid_until(12), ["Waterfall visits", "Trekking", "Wildlife safaris"]))
    if intelligence.current_season == "Monsoon":
        alerts.append(WeatherAlert(
            "advisory", "Monsoon season - roads to remote waterfalls may be challenging",
            "medium", _valid_until(24 * 7), ["Waterfall visits", "Remote sightseeing", "Trekking"]))
    return [a.to_dict() for a in alerts]


def get_weather_report(destination: str, today: Optional[date] = None) -> dict:
    """Current conditions, forecast, intelligence and alerts for one destination.

    The three lookups run together; each failed part is replaced by its
    seasonal fallback and marked ``fallback`` in apiStatus.
    """
    season = current_season(today)
    parts = {
        "current": (get_current_weather, (destination, today), lambda: fallback_current_weather(season)),
        "forecast": (get_weekly_forecast, (destination,), lambda: fallback_forecast(today)),
        "intelligence": (get_weather_intelligence, (destination, today), lambda: fallback_intelligence(season)),
    }
    results, status = {}, {}
    with ThreadPoolExecutor(max_workers=len(parts)) as pool:
        futures = {name: pool.submit(fn, *args) for name, (fn, args, _) in parts.items()}
        for name, future in futures.items():
            try:
                results[name] = future.result()
                status[name] = "success"
            except Exception as exc:
                logger.warning("Weather %s lookup failed for %s: %s", name, destination, exc)
                results[name] = parts[name][2]()
                status[name] = "fallback"

    intelligence = results["intelligence"]
    return {
        "success": True,
        "destination": destination,
        "current": results["current"],
        "forecast": [day.to_dict() for day in results["forecast"]],
        "intelligence": intelligence.to_dict(),
        "alerts": _report_alerts(intelligence, results["current"]),
        "lastUpdated": datetime.now(timezone.utc).isoformat(),
        "apiStatus": status,
    }
