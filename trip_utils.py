"""Budget, destination and season helpers shared by the planner and the API."""
import math
import re
from dataclasses import dataclass
from datetime import date
from typing import Optional

from dataclasses_json import LetterCase, dataclass_json

from jharkhand_data import GAZETTEER, LOCATION_ALIASES

SEASONS = ("Winter", "Summer", "Monsoon", "Post-Monsoon")

_SHARES = {
    "accommodation": 0.40,
    "food": 0.25,
    "transport": 0.20,
    "activities": 0.10,
    "shopping": 0.05,
}

# Order in which a negative rounding remainder is absorbed once shopping hits 0
_DEFICIT_ORDER = ("shopping", "activities", "transport", "food", "accommodation")


class UnsupportedDestinationError(ValueError):
    """Destination is outside the Jharkhand gazetteer."""


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


# ---------------------------------------------------------------------------
# Money
# ---------------------------------------------------------------------------

def parse_budget(budget) -> int:
    """Parse an INR budget like '₹20,000' or 20000 into whole rupees (0 if unparseable)."""
    if isinstance(budget, bool):
        return 0
    if isinstance(budget, (int, float)):
        return int(budget) if math.isfinite(budget) and budget > 0 else 0
    if not isinstance(budget, str):
        return 0
    cleaned = re.sub(r"[₹,\s]", "", budget)
    if cleaned.lower().startswith("rs."):
        cleaned = cleaned[3:]
    try:
        value = float(cleaned)
    except ValueError:
        return 0
    return int(value) if math.isfinite(value) and value > 0 else 0


def format_inr(amount) -> str:
    """Format whole rupees with Indian digit grouping, e.g. 125000 -> '₹1,25,000'."""
    try:
        n = int(round(float(amount)))
    except (TypeError, ValueError):
        n = 0
    sign = "-" if n < 0 else ""
    digits = str(abs(n))
    if len(digits) > 3:
        head, tail = digits[:-3], digits[-3:]
        groups = []
        while len(head) > 2:
            groups.insert(0, head[-2:])
            head = head[:-2]
        if head:
            groups.insert(0, head)
        digits = ",".join(groups + [tail])
    return f"{sign}₹{digits}"


@dataclass_json(letter_case=LetterCase.CAMEL)
@dataclass(frozen=True)
class BudgetAllocation:
    accommodation: int
    food: int
    transport: int
    activities: int
    shopping: int
    daily_budget: int
    total: int

    def components(self) -> dict[str, int]:
        return {name: getattr(self, name) for name in _SHARES}


def allocate_budget(total, days) -> BudgetAllocation:
    """Split *total* rupees across the five spending categories.

    Each share is rounded half-up independently; the signed remainder is then
    folded into shopping so the parts always sum to *total*. A negative
    remainder drains shopping to 0 first and then the next category in
    ``_DEFICIT_ORDER``.
    """
    try:
        t = float(total)
    except (TypeError, ValueError):
        t = 0.0
    t = int(math.floor(t)) if math.isfinite(t) and t > 0 else 0
    try:
        d = int(days)
    except (TypeError, ValueError):
        d = 1
    d = max(1, d)

    parts = {name: _round_half_up(t * share) for name, share in _SHARES.items()}
    delta = t - sum(parts.values())
    if delta > 0:
        parts["shopping"] += delta
    else:
        deficit = -delta
        for name in _DEFICIT_ORDER:
            if not deficit:
                break
            taken = min(parts[name], deficit)
            parts[name] -= taken
            deficit -= taken

    return BudgetAllocation(daily_budget=_round_half_up(t / d), total=t, **parts)


# ---------------------------------------------------------------------------
# Destinations
# ---------------------------------------------------------------------------

def normalize_destination(text) -> str:
    """Trim, lower-case, collapse whitespace and rewrite known aliases."""
    lowered = re.sub(r"\s+", " ", str(text or "").strip().lower())
    return LOCATION_ALIASES.get(lowered, lowered)


def is_in_scope(text) -> bool:
    """True when *text* names a Jharkhand destination from the gazetteer."""
    normalized = normalize_destination(text)
    if not normalized:
        return False
    return any(loc in normalized or normalized in loc for loc in GAZETTEER)


def canonical_destination_key(text) -> Optional[str]:
    """Gazetteer key for *text* ('Ranchi city' -> 'ranchi'), or None."""
    normalized = normalize_destination(text)
    if not normalized:
        return None
    if normalized in GAZETTEER:
        return normalized
    for loc in GAZETTEER:
        if loc in normalized:
            return loc
    return None


# ---------------------------------------------------------------------------
# Seasons
# ---------------------------------------------------------------------------

def resolve_season(on: date) -> str:
    month = on.month
    if month == 12 or month <= 2:
        return "Winter"
    if month <= 5:
        return "Summer"
    if month <= 9:
        return "Monsoon"
    return "Post-Monsoon"


def current_season(today: Optional[date] = None) -> str:
    return resolve_season(today or date.today())
