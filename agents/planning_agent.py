"""
Jharkhand Trip Planner (direct litellm call)

One plan = one LLM round-trip:

  1. Scope check             → no LLM, rejects before anything is spent
  2. Budget allocation       → deterministic 40/25/20/10/5 split
  3. Plan generation         → 1 LLM call (system + user prompt)
  4. Parse + merge           → model JSON merged over a deterministic fallback

If the model call fails for any reason the fallback plan is returned as-is,
so the fallback doubles as the retry strategy. Malformed or partial model
output never blanks a section the fallback would have filled.
"""

from __future__ import annotations

import copy
import json
import logging
import os
import re
from datetime import date
from typing import Any, Callable, Optional

import litellm

from trip_utils import (
    BudgetAllocation,
    UnsupportedDestinationError,
    allocate_budget,
    current_season,
    format_inr,
    is_in_scope,
)
from TripRequest import TripRequest

from .fallback_plans import build_fallback_plan

logger = logging.getLogger(__name__)

# Silence litellm's own verbose logging
litellm.suppress_debug_info = True
# Drop params unsupported by the active model (e.g. temperature on some models)
litellm.drop_params = True

AI_PLAN_STATUS = "🤖 AI-generated plan"

ACTIVITY_CATEGORIES = {"sightseeing", "food", "shopping", "adventure", "religious", "cultural"}

_OBJECT_SECTIONS = ("tripOverview", "budgetBreakdown", "emergencyContacts", "weatherInfo")
_ARRAY_SECTIONS = ("culturalExperiences", "travelTips")

# Raw integers always come from the allocation; the formatted figures are the model's to override
_ALLOCATION_KEY = "numeric"


class ModelError(RuntimeError):
    """The model call failed (timeout, quota, network, empty answer)."""


# ---------------------------------------------------------------------------
# LLM model helper  (supports OpenAI, Gemini, Claude via LLM_PROVIDER)
# ---------------------------------------------------------------------------

_LLM_DEFAULTS = {
    "openai":    "gpt-4o-mini",
    "gemini":    "gemini-1.5-flash",
    "anthropic": "claude-sonnet-4-20250514",
}


def _llm_name() -> str:
    """Return the litellm model string (provider/model format)."""
    provider = os.getenv("LLM_PROVIDER", "gemini").lower().strip()
    if provider not in _LLM_DEFAULTS:
        provider = "gemini"
    model = os.getenv("LLM_MODEL", _LLM_DEFAULTS[provider])
    if provider == "openai":
        return model  # litellm uses bare model name for OpenAI
    return f"{provider}/{model}"


def _llm_call(system_prompt: str, user_prompt: str, temperature: float = 0.6) -> str:
    """Make a single litellm.completion() call and return the text content.

    Raises ModelError for anything that leaves us without usable text.
    """
    try:
        response = litellm.completion(
            model=_llm_name(),
            messages=[
                {"role": "system", "content": system_prompt},
                {"role": "user", "content": user_prompt},
            ],
            temperature=temperature,
        )
        content = response.choices[0].message.content
    except Exception as exc:
        raise ModelError(f"LLM call failed: {exc}") from exc
    if not content or not content.strip():
        raise ModelError("LLM returned an empty response")
    return content.strip()


# ---------------------------------------------------------------------------
# Prompts
# ---------------------------------------------------------------------------

def _system_prompt(request: TripRequest, allocation: BudgetAllocation, season: str) -> str:
    return " ".join([
        "You are PLANORA AI, a Jharkhand travel expert and planner.",
        f"Deliver a {request.days}-day plan for {request.destination} within {format_inr(allocation.total)}.",
        f"Season: {season}. Output short, structured JSON only.",
        "Keys: tripOverview, dailyItinerary, budgetBreakdown, culturalExperiences, "
        "emergencyContacts, travelTips, weatherInfo, enhancementStatus.",
        "Keep under 1800 tokens.",
    ])


def _user_prompt(request: TripRequest) -> str:
    return " ".join([
        f"Destination: {request.destination}, Jharkhand.",
        f"Days: {request.days}. Travelers: {request.travelers}.",
        f"Budget: {request.budget}. Interests: {request.interests_text()}.",
        f"Dates: {request.start_date_text()}. Include costs, timings, weather tips, and recommendations.",
        "Return JSON only.",
    ])


# ---------------------------------------------------------------------------
# Response parsing
# ---------------------------------------------------------------------------

_FENCE_RE = re.compile(r"```(?:json)?\s*(.*?)```", re.DOTALL | re.IGNORECASE)


def _top_level_spans(text: str) -> list[tuple[int, int]]:
    """(start, end) of every balanced top-level {...} span, ignoring braces in strings."""
    spans: list[tuple[int, int]] = []
    depth = 0
    start = 0
    in_string = False
    escaped = False
    for i, ch in enumerate(text):
        if in_string:
            if escaped:
                escaped = False
            elif ch == "\\":
                escaped = True
            elif ch == '"':
                in_string = False
            continue
        if ch == '"' and depth:
            in_string = True
        elif ch == "{":
            if depth == 0:
                start = i
            depth += 1
        elif ch == "}" and depth:
            depth -= 1
            if depth == 0:
                spans.append((start, i + 1))
    return spans


def extract_json(text: str) -> Optional[str]:
    """Pull the JSON candidate out of a model answer.

    A fenced code block wins. Otherwise the last top-level brace span is used,
    but only when nothing except whitespace follows it.
    """
    if not text:
        return None
    fenced = _FENCE_RE.search(text)
    if fenced and fenced.group(1).strip():
        return fenced.group(1).strip()
    spans = _top_level_spans(text)
    if spans:
        start, end = spans[-1]
        if not text[end:].strip():
            return text[start:end]
    return None


def _present(value: Any) -> bool:
    return value not in (None, "", [], {})


def _normalise_itinerary(model_days: list, fallback_days: list[dict], destination: str) -> list[dict]:
    """Fit the model's days onto 1..N, filling gaps from the fallback days."""
    valid = [d for d in model_days if isinstance(d, dict)]
    itinerary = []
    for i, base in enumerate(fallback_days):
        if i >= len(valid):
            day = copy.deepcopy(base)
        else:
            day = copy.deepcopy(valid[i])
            activities = [a for a in day.get("activities") or [] if isinstance(a, dict)]
            day["activities"] = activities or copy.deepcopy(base["activities"])
            day["theme"] = day.get("theme") or base["theme"]
            day["totalDayCost"] = day.get("totalDayCost") or base["totalDayCost"]
            if isinstance(day["totalDayCost"], (int, float)):
                day["totalDayCost"] = format_inr(day["totalDayCost"])
            for item in day["activities"]:
                item.setdefault("time", "")
                item["activity"] = item.get("activity") or "Sightseeing"
                item.setdefault("location", destination)
                item.setdefault("duration", "")
                item.setdefault("description", "")
                cost = item.get("cost", 0)
                item["cost"] = format_inr(cost) if isinstance(cost, (int, float)) else (cost or "₹0")
                if item.get("category") not in ACTIVITY_CATEGORIES:
                    item["category"] = "sightseeing"
        day["day"] = i + 1
        itinerary.append(day)
    return itinerary


def merge_with_fallback(partial: dict, fallback: dict, allocation: BudgetAllocation) -> dict:
    """Overlay a (possibly partial) model plan onto a fallback plan.

    Objects merge key-by-key, lists replace wholesale when non-empty. Only
    ``budgetBreakdown.numeric`` is forced back to *allocation*. A model
    itinerary counts only when it holds at least one day object.
    """
    plan = copy.deepcopy(fallback)

    for key in _OBJECT_SECTIONS:
        section = partial.get(key)
        if isinstance(section, dict):
            plan[key].update({k: v for k, v in section.items() if _present(v)})

    model_days = partial.get("dailyItinerary")
    has_model_days = isinstance(model_days, list) and any(isinstance(d, dict) for d in model_days)
    for key in _ARRAY_SECTIONS:
        value = partial.get(key)
        if isinstance(value, list) and value:
            plan[key] = copy.deepcopy(value)
    if has_model_days:
        plan["dailyItinerary"] = _normalise_itinerary(
            model_days, fallback["dailyItinerary"], fallback["tripOverview"]["destination"],
        )

    plan["budgetBreakdown"][_ALLOCATION_KEY] = allocation.to_dict()

    status = partial.get("enhancementStatus")
    if isinstance(status, str) and status.strip():
        plan["enhancementStatus"] = status.strip()
    elif has_model_days:
        plan["enhancementStatus"] = AI_PLAN_STATUS
    return plan


def parse_model_response(text: str, request: TripRequest, allocation: BudgetAllocation,
                         today: Optional[date] = None) -> dict:
    """Turn model text into a complete plan; unusable text yields the fallback plan."""
    fallback = build_fallback_plan(request, allocation, today)
    candidate = extract_json(text or "")
    if candidate is None:
        logger.warning("No JSON found in model response for %s; using fallback plan",
                       request.destination)
        return fallback
    try:
        parsed = json.loads(candidate)
    except json.JSONDecodeError as exc:
        logger.warning("Model JSON did not parse: %s", exc)
        return fallback
    if not isinstance(parsed, dict):
        logger.warning("Model JSON was %s, expected an object", type(parsed).__name__)
        return fallback
    return merge_with_fallback(parsed, fallback, allocation)


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

class TripPlanner:
    """Scope check, budget split, one LLM call, merge over fallback.

    ``llm_call`` and ``today`` can be injected for tests; by default the
    module-level ``_llm_call`` and the wall clock are used.
    """

    def __init__(self, llm_call: Optional[Callable[[str, str], str]] = None,
                 today: Optional[date] = None):
        self._llm_call = llm_call
        self._today = today

    def generate_trip_plan(self, request: TripRequest) -> dict:
        if not is_in_scope(request.destination):
            raise UnsupportedDestinationError("Only Jharkhand destinations are supported")

        allocation = allocate_budget(request.budget_amount(), request.days)
        season = current_season(self._today)
        system_prompt = _system_prompt(request, allocation, season)
        user_prompt = _user_prompt(request)

        call = self._llm_call or _llm_call
        try:
            text = call(system_prompt, user_prompt)
        except Exception as exc:
            logger.warning("Plan generation failed for %s, using fallback: %s",
                           request.destination, exc)
            return build_fallback_plan(request, allocation, self._today)

        logger.info("Model answered for %s (%d chars)", request.destination, len(text or ""))
        return parse_model_response(text, request, allocation, self._today)


planner = TripPlanner()
