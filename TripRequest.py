from dataclasses import dataclass, field
from typing import Any, List, Optional

from dataclasses_json import LetterCase, dataclass_json

from trip_utils import is_in_scope, parse_budget

MIN_DAYS = 1
MAX_DAYS = 15
MIN_BUDGET = 5000


class RequestRejected(ValueError):
    """A trip request failed validation; the message is shown to the user."""


@dataclass_json(letter_case=LetterCase.CAMEL)
@dataclass(frozen=True)
class TripPreferences:
    interests: List[str] = field(default_factory=list)
    budget_category: Optional[str] = None      # ultra-budget, budget, mid-range, luxury
    accommodation_type: Optional[str] = None   # hostel, guesthouse, hotel, resort, any
    food_preference: Optional[str] = None      # vegetarian, non-vegetarian, vegan, any
    activity_level: Optional[str] = None       # relaxed, moderate, active, adventure
    cultural_interest: Optional[str] = None    # high, medium, low
    transport_preference: Optional[str] = None


@dataclass_json(letter_case=LetterCase.CAMEL)
@dataclass(frozen=True)
class TravelDates:
    start_date: str
    end_date: str


@dataclass_json(letter_case=LetterCase.CAMEL)
@dataclass(frozen=True)
class TripRequest:
    destination: str
    days: int
    budget: str
    travelers: int = 1
    preferences: Optional[TripPreferences] = None
    travel_dates: Optional[TravelDates] = None

    def budget_amount(self) -> int:
        """Budget in whole rupees."""
        return parse_budget(self.budget)

    def interests_text(self) -> str:
        """Comma-separated interests, or a sensible default."""
        if self.preferences and self.preferences.interests:
            return ", ".join(self.preferences.interests)
        return "General sightseeing"

    def start_date_text(self) -> str:
        return self.travel_dates.start_date if self.travel_dates else "Flexible"


def _to_int(value: Any) -> Optional[int]:
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    try:
        number = float(str(value).strip())
    except (TypeError, ValueError):
        return None
    if number != number or number in (float("inf"), float("-inf")):
        return None
    return int(number) if number.is_integer() else None


def validate_trip_request(raw: dict) -> TripRequest:
    """Check a raw request body and build a TripRequest.

    Checks run in order and the first failure raises RequestRejected:
    required fields, day range, minimum budget, destination scope, travelers.
    """
    raw = raw or {}
    destination = str(raw.get("destination") or "").strip()
    days_raw = raw.get("days")
    budget_raw = raw.get("budget")

    if not destination or days_raw in (None, "") or budget_raw in (None, ""):
        raise RequestRejected("Missing required fields: destination, days, and budget")

    days = _to_int(days_raw)
    if days is None or not MIN_DAYS <= days <= MAX_DAYS:
        raise RequestRejected(f"Days must be between {MIN_DAYS} and {MAX_DAYS}")

    budget_str = budget_raw if isinstance(budget_raw, str) else str(budget_raw)
    if parse_budget(budget_str) < MIN_BUDGET:
        raise RequestRejected("Budget must be at least ₹5,000")

    if not is_in_scope(destination):
        raise RequestRejected(
            "Only Jharkhand destinations are supported. Please enter a valid Jharkhand "
            "location like Ranchi, Deoghar, Netarhat, Jamshedpur, Hazaribagh, or Betla."
        )

    travelers_raw = raw.get("travelers")
    travelers = 1 if travelers_raw in (None, "") else _to_int(travelers_raw)
    if travelers is None or travelers < 1:
        raise RequestRejected("Travelers must be at least 1")

    preferences = None
    if isinstance(raw.get("preferences"), dict):
        preferences = TripPreferences.from_dict(raw["preferences"], infer_missing=True)
        if preferences.interests is None:
            preferences = TripPreferences(**{**vars(preferences), "interests": []})

    travel_dates = None
    dates = raw.get("travelDates")
    if isinstance(dates, dict) and dates.get("startDate"):
        travel_dates = TravelDates(
            start_date=str(dates["startDate"]),
            end_date=str(dates.get("endDate") or dates["startDate"]),
        )

    return TripRequest(
        destination=destination,
        days=days,
        budget=budget_str,
        travelers=travelers,
        preferences=preferences,
        travel_dates=travel_dates,
    )
