"""
Follow-up chat about Jharkhand trips.

Conversations must mention a Jharkhand destination unless a generated plan is
supplied as context. Model failures degrade to a polite apology reply.
"""

import json
import logging
from datetime import date
from typing import Any, Optional

import litellm

from jharkhand_data import GAZETTEER
from trip_utils import current_season

from .fallback_plans import build_enhanced_plan
from .planning_agent import _llm_name

logger = logging.getLogger(__name__)

# Destinations the chat recognises in free text
CHAT_DESTINATIONS = GAZETTEER[:13]

# Client-facing model ids -> litellm model strings
CHAT_MODELS = {
    "gemini-1.5-pro": "gemini/gemini-1.5-pro-latest",
    "gemini-1.5-flash": "gemini/gemini-1.5-flash-latest",
    "gemini-1.0-pro": "gemini/gemini-1.0-pro",
    "gemini-2.0-flash": "gemini/gemini-2.0-flash-exp",
}

MAX_TURNS = 10
MAX_PLAN_CONTEXT = 2000

SYSTEM_PROMPT = (
    "You are PLANORA AI, a Jharkhand-only trip planner. Provide concise, day-wise itineraries, "
    "INR budgets, hotel booking tips with contact, weather notes, transport, and safety for "
    "Ranchi/Deoghar/Netarhat/Jamshedpur/Hazaribagh/Betla. Be practical and structured."
)

APOLOGY = ("Sorry, I couldn't reach the planning assistant just now. Please try again in a "
           "moment, or switch the model.")


class ChatRejected(ValueError):
    """The chat request cannot be answered; carries a machine-readable code."""

    def __init__(self, message: str, code: str, hint: str):
        super().__init__(message)
        self.code = code
        self.hint = hint

    def to_dict(self) -> dict:
        return {
            "error": str(self),
            "code": self.code,
            "hint": self.hint,
            "destinations": list(CHAT_DESTINATIONS),
        }


def _message_text(message: Any) -> str:
    """Text of a chat message given as {'content': str} or {'parts': [{'type': 'text', ...}]}."""
    if not isinstance(message, dict):
        return ""
    content = message.get("content")
    if isinstance(content, str):
        return content
    parts = message.get("parts")
    if isinstance(parts, list):
        return " ".join(
            str(p.get("text", "")) for p in parts
            if isinstance(p, dict) and p.get("type") == "text"
        )
    return ""


def is_jharkhand_query(messages: list) -> bool:
    text = " ".join(_message_text(m) for m in messages).lower()
    return any(loc in text for loc in CHAT_DESTINATIONS)


def _plan_summary(plan: dict) -> str:
    summary = {
        "tripOverview": plan.get("tripOverview", {}),
        "days": [
            {"day": d.get("day"), "theme": d.get("theme"),
             "activities": [a.get("activity") for a in d.get("activities", [])]}
            for d in plan.get("dailyItinerary", []) if isinstance(d, dict)
        ],
        "budgetBreakdown": {k: v for k, v in (plan.get("budgetBreakdown") or {}).items()
                            if k != "numeric"},
    }
    return json.dumps(summary, ensure_ascii=False)[:MAX_PLAN_CONTEXT]


def _chat_model(model: Optional[str]) -> str:
    return CHAT_MODELS.get(model or "", _llm_name())


def answer(messages: list, plan: Optional[dict] = None, model: Optional[str] = None,
           context: Optional[str] = None, today: Optional[date] = None) -> dict:
    """Answer the latest turn of *messages*.

    Raises ChatRejected for empty conversations and, when no plan is given,
    for conversations that name no Jharkhand destination.
    """
    if not isinstance(messages, list) or not messages:
        raise ChatRejected(
            "No messages provided.", "BAD_REQUEST",
            "Send at least one user message mentioning a Jharkhand destination.",
        )
    if plan is None and not is_jharkhand_query(messages):
        raise ChatRejected(
            "This planner supports Jharkhand destinations only (e.g., Ranchi, Deoghar, Netarhat, "
            "Jamshedpur, Hazaribagh, Betla). Please include a Jharkhand location.",
            "JHARKHAND_ONLY",
            "Add a supported destination in your question.",
        )

    if context == "planTrip-json":
        return {
            "enhancementStatus": "ok",
            "enhanced": build_enhanced_plan(plan or {}, current_season(today)),
        }

    system = SYSTEM_PROMPT
    if plan:
        system += "\nThe traveller's current plan (JSON, may be truncated): " + _plan_summary(plan)

    conversation = [{"role": "system", "content": system}]
    for message in messages[-MAX_TURNS:]:
        role = message.get("role") if isinstance(message, dict) else None
        text = _message_text(message)
        if role in ("user", "assistant") and text.strip():
            conversation.append({"role": role, "content": text})

    model_name = _chat_model(model)
    try:
        response = litellm.completion(model=model_name, messages=conversation, temperature=0.6)
        reply = (response.choices[0].message.content or "").strip()
    except Exception as exc:
        logger.warning("Chat completion failed (%s): %s", model_name, exc)
        reply = ""
    return {"reply": reply or APOLOGY, "model": model or model_name}
