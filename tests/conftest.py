import sys
import os
import pytest
from datetime import date

# Project root for trip_utils, jharkhand_data, TripRequest and the agents package
_root = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
if _root not in sys.path:
    sys.path.insert(0, _root)

from TripRequest import TripPreferences, TravelDates, TripRequest
from trip_utils import allocate_budget

MONSOON_DAY = date(2026, 7, 15)
WINTER_DAY = date(2026, 1, 10)


@pytest.fixture(autouse=True)
def _no_api_keys(monkeypatch):
    """Keep every test offline regardless of the developer's .env."""
    for key in ("OPENWEATHER_API_KEY", "SERPAPI_API_KEY", "LLM_PROVIDER", "LLM_MODEL"):
        monkeypatch.delenv(key, raising=False)


@pytest.fixture
def ranchi_request():
    return TripRequest(destination="Ranchi", days=3, budget="₹20000", travelers=2)


@pytest.fixture
def deoghar_request():
    return TripRequest(
        destination="Deoghar",
        days=2,
        budget="₹15,000",
        travelers=1,
        preferences=TripPreferences(interests=["temples", "food"]),
        travel_dates=TravelDates(start_date="2026-11-01", end_date="2026-11-02"),
    )


@pytest.fixture
def ranchi_allocation(ranchi_request):
    return allocate_budget(ranchi_request.budget_amount(), ranchi_request.days)
