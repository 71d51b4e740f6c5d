"""FastAPI Backend - Jharkhand Trip Planner"""
import logging
import os
import uuid

# Load .env before anything else
from dotenv import load_dotenv
load_dotenv()

from fastapi import FastAPI, HTTPException, Query
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pydantic import BaseModel, ConfigDict
from typing import Any, Dict, List, Optional

from jharkhand_data import get_popular_destinations
from trip_utils import UnsupportedDestinationError, current_season
from TripRequest import RequestRejected, validate_trip_request
from agents import WeatherAgent, chat_agent
from agents.enrichment_agent import EnrichmentOrchestrator, enhancement_stats
from agents.fallback_plans import build_enhanced_plan
from agents.planning_agent import _llm_name, planner

logging.basicConfig(
    level=os.getenv("LOG_LEVEL", "INFO"),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)

# FastAPI app
app = FastAPI(
    title="Jharkhand Trip Planner API",
    description="LLM trip planning for Jharkhand with live weather, reviews, guides and news",
    version="1.0.0",
)

# CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

enricher = EnrichmentOrchestrator()


# Pydantic models
class TripPlanBody(BaseModel):
    # validate_trip_request owns the rules and error messages
    model_config = ConfigDict(extra="allow")

    destination: Optional[Any] = None
    days: Optional[Any] = None
    budget: Optional[Any] = None
    travelers: Optional[Any] = None
    preferences: Optional[Dict[str, Any]] = None
    travelDates: Optional[Dict[str, Any]] = None


class ChatBody(BaseModel):
    messages: List[Dict[str, Any]] = []
    model: Optional[str] = None
    context: Optional[str] = None
    tripPlan: Optional[Dict[str, Any]] = None


# Trip planning
@app.post("/api/plan-trip")
def plan_trip(body: TripPlanBody, enhanced: bool = False):
    """Validate, generate, enrich. Upstream failures degrade the plan instead of failing."""
    try:
        trip_request = validate_trip_request(body.model_dump(exclude_none=True))
    except RequestRejected as e:
        raise HTTPException(status_code=400, detail=str(e))

    logger.info("Planning trip for %s, %d days, %s", trip_request.destination,
                trip_request.days, trip_request.budget)
    try:
        base_plan = planner.generate_trip_plan(trip_request)
        trip_plan = enricher.enrich(base_plan, trip_request.destination)
        if enhanced:
            trip_plan["enhanced"] = build_enhanced_plan(trip_plan, current_season())
    except UnsupportedDestinationError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except Exception as e:
        logger.exception("Trip planning failed for %s", trip_request.destination)
        raise HTTPException(status_code=500, detail=f"Planning failed: {str(e)}")

    stats = enhancement_stats(trip_plan)
    logger.info("Trip plan enhanced: %s", stats)
    return {
        "success": True,
        "tripId": f"trip_{uuid.uuid4().hex[:12]}",
        "tripPlan": trip_plan,
        "enhancementStats": stats,
        "message": f"Trip plan generated successfully for {trip_request.destination}!",
    }


# Weather dashboard
@app.get("/api/weather")
def get_weather(destination: Optional[str] = Query(None)):
    if not destination or not destination.strip():
        raise HTTPException(status_code=400, detail="Destination parameter is required")
    try:
        return WeatherAgent.get_weather_report(destination.strip())
    except Exception as e:
        logger.exception("Weather report failed for %s", destination)
        raise HTTPException(status_code=500, detail=f"Failed to fetch weather data: {str(e)}")


# Follow-up chat
@app.post("/api/chat")
def chat(body: ChatBody):
    try:
        return chat_agent.answer(body.messages, plan=body.tripPlan, model=body.model,
                                 context=body.context)
    except chat_agent.ChatRejected as e:
        return JSONResponse(status_code=400, content=e.to_dict())
    except Exception as e:
        logger.exception("Chat request failed")
        raise HTTPException(status_code=500, detail=f"Chat failed: {str(e)}")


# Destination catalogue
@app.get("/api/destinations")
def list_destinations():
    destinations = get_popular_destinations()
    return {"count": len(destinations), "destinations": destinations}


# Health check
@app.get("/health")
def health_check():
    return {
        "status": "ok",
        "version": "1.0.0",
        "llm": _llm_name(),
        "llm_provider": os.getenv("LLM_PROVIDER", "gemini"),
        "weather": "openweather" if os.getenv("OPENWEATHER_API_KEY") else "fallback",
        "search": "serpapi" if os.getenv("SERPAPI_API_KEY") else "fallback",
    }

if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)
