"""
Unit tests for agents/fallback_plans.py

Tests cover:
- Dispatch between the Ranchi and generic builders
- Structural guarantees (day count, numbering, non-empty activities)
- Budget breakdown matching the allocation
- Seasonal weather text
- Enhanced block
"""
import pytest

from agents import fallback_plans as fp
from trip_utils import allocate_budget, format_inr
from TripRequest import TripRequest

from conftest import MONSOON_DAY, WINTER_DAY


def _request(destination="Ranchi", days=3, budget="₹20000", travelers=2):
    return TripRequest(destination=destination, days=days, budget=budget, travelers=travelers)


def _plan(destination="Ranchi", days=3, budget="₹20000", travelers=2, today=MONSOON_DAY):
    req = _request(destination, days, budget, travelers)
    alloc = allocate_budget(req.budget_amount(), req.days)
    return fp.build_fallback_plan(req, alloc, today), alloc


# ---------------------------------------------------------------------------
# Dispatch
# ---------------------------------------------------------------------------

class TestDispatch:
    def test_ranchi_gets_smart_fallback(self):
        plan, _ = _plan("Ranchi")
        assert plan["enhancementStatus"] == fp.SMART_FALLBACK_STATUS
        assert plan["dailyItinerary"][0]["theme"] == "Arrival & City Highlights"

    def test_ranchi_with_suffix_still_smart(self):
        plan, _ = _plan("ranchi city")
        assert plan["enhancementStatus"] == fp.SMART_FALLBACK_STATUS

    @pytest.mark.parametrize("destination", ["Deoghar", "Netarhat", "Dumka", "Betla National Park"])
    def test_other_destinations_get_generic(self, destination):
        plan, _ = _plan(destination)
        assert plan["enhancementStatus"] == fp.GENERIC_FALLBACK_STATUS
        assert plan["dailyItinerary"][0]["activities"][0]["activity"] == "Sightseeing"


# ---------------------------------------------------------------------------
# Structure
# ---------------------------------------------------------------------------

class TestStructure:
    @pytest.mark.parametrize("destination", ["Ranchi", "Deoghar", "Khunti"])
    @pytest.mark.parametrize("days", [1, 2, 5, 15])
    def test_day_numbers_are_contiguous(self, destination, days):
        plan, _ = _plan(destination, days=days)
        itinerary = plan["dailyItinerary"]
        assert len(itinerary) == days
        assert [d["day"] for d in itinerary] == list(range(1, days + 1))
        assert all(d["activities"] for d in itinerary)

    def test_ranchi_days_cycle_after_arrival(self):
        plan, _ = _plan("Ranchi", days=6)
        themes = [d["theme"] for d in plan["dailyItinerary"]]
        assert themes == [
            "Arrival & City Highlights",
            "Waterfalls Circuit",
            "Zoo & Market",
            "Temples & Lakes",
            "Dassam Falls & Patratu Valley",
            "Waterfalls Circuit",
        ]

    def test_ranchi_day_cost_scales_with_travelers(self):
        plan, _ = _plan("Ranchi", days=2, travelers=2)
        # Hundru 800 + lunch 450 + Jonha 600, for two people
        assert plan["dailyItinerary"][1]["totalDayCost"] == "₹3,700"

    def test_generic_day_costs(self):
        plan, _ = _plan("Dumka", days=2)
        day = plan["dailyItinerary"][0]
        assert day["activities"][0]["cost"] == "₹500"
        assert day["totalDayCost"] == "₹1,500"

    def test_activity_categories_are_known(self):
        plan, _ = _plan("Ranchi", days=5)
        allowed = {"sightseeing", "food", "shopping", "adventure", "religious", "cultural"}
        assert {a["category"] for d in plan["dailyItinerary"] for a in d["activities"]} <= allowed

    def test_sections_present(self):
        plan, _ = _plan("Deoghar")
        for key in ("tripOverview", "dailyItinerary", "budgetBreakdown", "culturalExperiences",
                    "emergencyContacts", "travelTips", "weatherInfo", "enhancementStatus"):
            assert key in plan
        assert plan["emergencyContacts"]["police"] == "100"


# ---------------------------------------------------------------------------
# Budget breakdown
# ---------------------------------------------------------------------------

class TestBudgetBreakdown:
    def test_matches_allocation(self):
        plan, alloc = _plan("Ranchi")
        breakdown = plan["budgetBreakdown"]
        assert breakdown["accommodation"] == format_inr(alloc.accommodation)
        assert breakdown["food"] == format_inr(alloc.food)
        assert breakdown["transportation"] == format_inr(alloc.transport)
        assert breakdown["activities"] == format_inr(alloc.activities)
        assert breakdown["shopping"] == format_inr(alloc.shopping)
        assert breakdown["total"] == "₹20,000"
        assert breakdown["dailyAverage"] == format_inr(alloc.daily_budget)
        assert breakdown["numeric"] == alloc.to_dict()

    def test_miscellaneous_is_fixed_buffer(self):
        plan, _ = _plan("Deoghar", budget="₹90,000")
        assert plan["budgetBreakdown"]["miscellaneous"] == "₹500"

    def test_budget_category(self):
        cheap, _ = _plan("Ranchi", budget="₹15000")
        pricey, _ = _plan("Ranchi", budget="₹50000")
        assert cheap["tripOverview"]["budgetCategory"] == "Budget-Friendly"
        assert pricey["tripOverview"]["budgetCategory"] == "Mid-Range"


# ---------------------------------------------------------------------------
# Overview + weather
# ---------------------------------------------------------------------------

class TestOverviewAndWeather:
    def test_monsoon_weather_text(self):
        plan, _ = _plan("Ranchi", today=MONSOON_DAY)
        weather = plan["weatherInfo"]
        assert weather["currentSeason"] == "Monsoon"
        assert weather["temperature"] == "20–30°C"
        assert weather["clothing"] == "Raincoat, quick-dry"
        assert weather["dataQuality"] == "fallback"

    def test_winter_weather_text(self):
        plan, _ = _plan("Dumka", today=WINTER_DAY)
        assert plan["weatherInfo"]["clothing"] == "Light woolens"

    def test_catalogued_generic_uses_catalogue(self):
        plan, _ = _plan("Deoghar")
        overview = plan["tripOverview"]
        assert overview["nearestAirport"] == "Deoghar Airport (DGH)"
        assert overview["nearestRailway"] == "Jasidih Junction (24 km)"
        assert "Baidyanath" in plan["dailyItinerary"][0]["activities"][0]["description"]

    def test_uncatalogued_generic_defaults(self):
        plan, _ = _plan("Khunti")
        overview = plan["tripOverview"]
        assert overview["destination"] == "Khunti"
        assert overview["nearestRailway"] == "Nearest major junction"
        assert overview["bestTimeToVisit"] == "Oct–Mar"

    def test_builders_do_not_share_mutable_data(self):
        first, _ = _plan("Ranchi")
        first["emergencyContacts"]["police"] = "999"
        first["travelTips"].append("x")
        second, _ = _plan("Ranchi")
        assert second["emergencyContacts"]["police"] == "100"
        assert "x" not in second["travelTips"]


# ---------------------------------------------------------------------------
# Enhanced block
# ---------------------------------------------------------------------------

class TestEnhancedPlan:
    def test_micro_itinerary_from_first_three_days(self):
        plan, _ = _plan("Ranchi", days=5)
        enhanced = fp.build_enhanced_plan(plan, "Winter")
        assert list(enhanced["microItinerary"]) == ["day1", "day2", "day3"]
        assert "Rock Garden" in enhanced["microItinerary"]["day1"]

    def test_uses_given_season(self):
        plan, _ = _plan("Deoghar")
        enhanced = fp.build_enhanced_plan(plan, "Summer")
        assert enhanced["season"]["current"] == "Summer"
        assert "Stay hydrated" in enhanced["season"]["advice"]

    def test_static_sections(self):
        enhanced = fp.build_enhanced_plan({}, "Monsoon")
        assert "Litti chokha" in enhanced["localCuisine"]["highlights"]
        assert enhanced["handicrafts"]["buy"]
        assert enhanced["logistics"]["packing"] == ["Poncho", "Dry bag", "Spare socks"]
        assert enhanced["microItinerary"] == {}
