"""
Deterministic trip plans, built without any external call.

Used directly when the model call fails, and as the base that a partial model
answer is merged over. Dispatch is by gazetteer key: destinations with curated
content get a rich builder, everything else gets the generic one.
"""

import logging
from datetime import date
from typing import Callable, Optional

from jharkhand_data import (
    DEFAULT_AIRPORT,
    EMERGENCY_CONTACTS,
    GENERIC_TRAVEL_TIPS,
    HANDICRAFTS,
    LOCAL_CUISINE,
    LOGISTICS,
    RANCHI_ARRIVAL_DAY,
    RANCHI_CULTURAL_EXPERIENCES,
    RANCHI_DAYS,
    RANCHI_TRAVEL_TIPS,
    SEASON_ADVICE,
    SEASON_CLOTHING,
    SEASON_TEMPERATURE,
    get_location,
)
from trip_utils import BudgetAllocation, canonical_destination_key, current_season, format_inr
from TripRequest import TripRequest

logger = logging.getLogger(__name__)

SMART_FALLBACK_STATUS = "✅ Smart fallback used"
GENERIC_FALLBACK_STATUS = "⚠️ Generic fallback used"

MISCELLANEOUS_BUFFER = 500       # advisory contingency, outside the allocated total
GENERIC_ACTIVITY_COST = 500
GENERIC_DAY_COST = 1500
BUDGET_FRIENDLY_LIMIT = 8000     # accommodation share below this reads as budget-friendly


# ---------------------------------------------------------------------------
# Shared sections
# ---------------------------------------------------------------------------

def budget_breakdown(allocation: BudgetAllocation) -> dict:
    """Plan budget section: formatted INR strings plus the raw integers."""
    return {
        "accommodation": format_inr(allocation.accommodation),
        "food": format_inr(allocation.food),
        "transportation": format_inr(allocation.transport),
        "activities": format_inr(allocation.activities),
        "shopping": format_inr(allocation.shopping),
        "miscellaneous": format_inr(MISCELLANEOUS_BUFFER),
        "total": format_inr(allocation.total),
        "dailyAverage": format_inr(allocation.daily_budget),
        "numeric": allocation.to_dict(),
    }


def seasonal_weather(season: str, precautions: str) -> dict:
    return {
        "currentSeason": season,
        "temperature": SEASON_TEMPERATURE[season],
        "clothing": SEASON_CLOTHING[season],
        "precautions": precautions,
        "dataQuality": "fallback",
    }


def _budget_category(allocation: BudgetAllocation) -> str:
    return "Budget-Friendly" if allocation.accommodation < BUDGET_FRIENDLY_LIMIT else "Mid-Range"


def _activity(row: tuple) -> dict:
    time, name, location, duration, cost, category, description = row
    return {
        "time": time,
        "activity": name,
        "location": location,
        "duration": duration,
        "cost": format_inr(cost),
        "category": category,
        "description": description,
    }


def _template_day(day_number: int, template: tuple, travelers: int) -> dict:
    theme, rows, tips = template
    return {
        "day": day_number,
        "theme": theme,
        "activities": [_activity(r) for r in rows],
        "totalDayCost": format_inr(sum(r[4] for r in rows) * travelers),
        "travelTips": list(tips),
    }


# ---------------------------------------------------------------------------
# Builders
# ---------------------------------------------------------------------------

def build_ranchi_plan(request: TripRequest, allocation: BudgetAllocation, season: str) -> dict:
    """Hand-authored Ranchi plan: arrival day, then the curated days in rotation."""
    days = max(1, request.days)
    itinerary = [_template_day(1, RANCHI_ARRIVAL_DAY, request.travelers)]
    for n in range(2, days + 1):
        template = RANCHI_DAYS[(n - 2) % len(RANCHI_DAYS)]
        itinerary.append(_template_day(n, template, request.travelers))

    return {
        "tripOverview": {
            "destination": "Ranchi",
            "state": "Jharkhand",
            "duration": f"{days} days",
            "travelers": request.travelers,
            "totalBudget": format_inr(allocation.total),
            "budgetCategory": _budget_category(allocation),
            "bestTimeToVisit": "October–March",
            "nearestAirport": DEFAULT_AIRPORT,
            "nearestRailway": "Ranchi Junction (RNC)",
            "overview": f'Discover Ranchi, the "City of Waterfalls", blending cascades, '
                        f"gardens, culture, and food over {days} days.",
        },
        "dailyItinerary": itinerary,
        "budgetBreakdown": budget_breakdown(allocation),
        "culturalExperiences": [dict(e) for e in RANCHI_CULTURAL_EXPERIENCES],
        "emergencyContacts": dict(EMERGENCY_CONTACTS),
        "travelTips": list(RANCHI_TRAVEL_TIPS),
        "weatherInfo": seasonal_weather(
            season, "Check rainfall before visiting falls; roads may be slippery",
        ),
        "enhancementStatus": SMART_FALLBACK_STATUS,
    }


def build_generic_plan(request: TripRequest, allocation: BudgetAllocation, season: str) -> dict:
    """One sightseeing activity per day; catalogue details are used when known."""
    days = max(1, request.days)
    destination = request.destination.strip()
    location = get_location(canonical_destination_key(destination))
    highlights = location["highlights"] if location else []

    itinerary = []
    for n in range(1, days + 1):
        description = f"Explore {highlights[(n - 1) % len(highlights)]}" if highlights else ""
        itinerary.append({
            "day": n,
            "theme": f"Day {n} - Explore {destination}",
            "activities": [{
                "time": "09:00",
                "activity": "Sightseeing",
                "location": destination,
                "duration": "4h",
                "cost": format_inr(GENERIC_ACTIVITY_COST),
                "category": "sightseeing",
                "description": description,
            }],
            "totalDayCost": format_inr(GENERIC_DAY_COST),
        })

    if location:
        overview = f"{location['description']} A balanced {days}-day plan covering highlights, local food, and culture."
    else:
        overview = f"Explore {destination} with a balanced plan covering highlights, local food, and culture."

    return {
        "tripOverview": {
            "destination": destination,
            "state": "Jharkhand",
            "duration": f"{days} days",
            "travelers": request.travelers,
            "totalBudget": format_inr(allocation.total),
            "budgetCategory": _budget_category(allocation),
            "bestTimeToVisit": location["best_time"] if location else "Oct–Mar",
            "nearestAirport": location["nearest_airport"] if location else DEFAULT_AIRPORT,
            "nearestRailway": location["nearest_railway"] if location else "Nearest major junction",
            "overview": overview,
        },
        "dailyItinerary": itinerary,
        "budgetBreakdown": budget_breakdown(allocation),
        "culturalExperiences": [],
        "emergencyContacts": dict(EMERGENCY_CONTACTS),
        "travelTips": list(GENERIC_TRAVEL_TIPS),
        "weatherInfo": seasonal_weather(season, "Pack appropriate shoes and a light jacket"),
        "enhancementStatus": GENERIC_FALLBACK_STATUS,
    }


PlanBuilder = Callable[[TripRequest, BudgetAllocation, str], dict]

# Gazetteer key -> builder; anything unlisted is generic
_FALLBACK_BUILDERS: dict[str, PlanBuilder] = {
    "ranchi": build_ranchi_plan,
}


def build_fallback_plan(request: TripRequest, allocation: BudgetAllocation,
                        today: Optional[date] = None) -> dict:
    """Pick the builder for the request's destination and run it."""
    key = canonical_destination_key(request.destination)
    builder = _FALLBACK_BUILDERS.get(key, build_generic_plan)
    logger.info("Building %s fallback plan for %s", builder.__name__, request.destination)
    return builder(request, allocation, current_season(today))


# ---------------------------------------------------------------------------
# Enhanced block (attached on request)
# ---------------------------------------------------------------------------

def build_enhanced_plan(plan: dict, season: str) -> dict:
    """Cuisine, crafts, season advice and a short itinerary digest for *plan*."""
    micro = {}
    for day in (plan.get("dailyItinerary") or [])[:3]:
        names = [a.get("activity", "") for a in day.get("activities", []) if a.get("activity")]
        micro[f"day{day.get('day', len(micro) + 1)}"] = names or [day.get("theme", "")]

    return {
        "localCuisine": {k: list(v) for k, v in LOCAL_CUISINE.items()},
        "handicrafts": {k: list(v) for k, v in HANDICRAFTS.items()},
        "season": {"current": season, "advice": list(SEASON_ADVICE[season])},
        "microItinerary": micro,
        "logistics": {k: list(v) for k, v in LOGISTICS.items()},
    }
