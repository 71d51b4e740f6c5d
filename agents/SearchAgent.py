"""
SerpAPI lookups for traveller reviews, local guides and tourism news.

Every operation raises SearchError when SerpAPI is unconfigured or failing.
The hand-authored defaults (``fallback_reviews``, ``official_guides``,
``fallback_news``) are public so callers can substitute them.
"""

import logging
import os
import re
from dataclasses import dataclass, field
from datetime import date
from typing import List, Optional
from urllib.parse import urlparse

import requests
from dataclasses_json import LetterCase, dataclass_json

from .WeatherAgent import create_session

logger = logging.getLogger(__name__)

SERPAPI_URL = "https://serpapi.com/search.json"
TIMEOUT = 10
MAX_GUIDES = 8

POSITIVE_KEYWORDS = (
    "amazing", "beautiful", "excellent", "wonderful", "great", "fantastic", "must visit",
    "highly recommend", "loved", "perfect", "stunning", "incredible", "awesome",
    "breathtaking", "memorable", "spectacular",
)
RELEVANCE_KEYWORDS = ("jharkhand", "tourism", "new", "festival", "attraction")
VERIFIED_DOMAINS = (
    "justdial.com", "sulekha.com", "tourism.jharkhand.gov.in", "india.com",
    "makemytrip.com", "tripadvisor.in", "goibibo.com",
)

_RATING_PATTERNS = [
    re.compile(r"(\d+\.?\d*)\s*[/\-]\s*5", re.I),
    re.compile(r"(\d+\.?\d*)\s*star", re.I),
    re.compile(r"rated\s+(\d+\.?\d*)", re.I),
]
_PHONE_PATTERNS = [
    re.compile(r"(?:\+91[\s-]?)?[6-9]\d{9}"),
    re.compile(r"\d{5}[\s-]\d{5}"),
    re.compile(r"\d{3}[\s-]\d{3}[\s-]\d{4}"),
    re.compile(r"\d{4}[\s-]\d{3}[\s-]\d{3}"),
]
_DATE_PATTERN = re.compile(r"(\d{1,2}[/-]\d{1,2}[/-]\d{2,4})|(\w{3,9}\s+\d{1,2},?\s+\d{2,4})", re.I)

_session = create_session()


class SearchError(RuntimeError):
    """SerpAPI is unreachable, unconfigured or returned an error payload."""


@dataclass_json(letter_case=LetterCase.CAMEL)
@dataclass
class Review:
    text: str
    source: str
    rating: str
    reviewer: str
    title: str
    url: Optional[str] = None
    date: Optional[str] = None


@dataclass_json(letter_case=LetterCase.CAMEL)
@dataclass
class LocalGuide:
    name: str
    contact: str
    source: str
    description: str
    verified: bool = False
    specializations: List[str] = field(default_factory=list)
    languages: List[str] = field(default_factory=lambda: ["Hindi", "English"])
    price_range: str = "₹800-1500 per day"
    availability: str = "Year-round"
    url: Optional[str] = None


@dataclass_json(letter_case=LetterCase.CAMEL)
@dataclass
class NewsItem:
    title: str
    snippet: str
    source: str
    date: str
    link: str
    relevance: str  # high, medium, low
    thumbnail: Optional[str] = None


# ---------------------------------------------------------------------------
# Request
# ---------------------------------------------------------------------------

def _search(params: dict) -> dict:
    api_key = os.getenv("SERPAPI_API_KEY", "")
    if not api_key:
        raise SearchError("SERPAPI_API_KEY not set")
    query = {"hl": "en", "gl": "in", **params, "api_key": api_key}
    try:
        resp = _session.get(SERPAPI_URL, params=query, timeout=TIMEOUT)
        resp.raise_for_status()
        data = resp.json()
    except (requests.RequestException, ValueError) as exc:
        raise SearchError(f"SerpAPI {params.get('engine')} search failed: {exc}") from exc
    if not isinstance(data, dict):
        raise SearchError("SerpAPI returned a non-object payload")
    if data.get("error"):
        raise SearchError(f"SerpAPI error: {data['error']}")
    return data


def _clean_destination(destination: str) -> str:
    return re.sub(r"\s+", " ", str(destination or "").strip())


# ---------------------------------------------------------------------------
# Text helpers
# ---------------------------------------------------------------------------

def is_positive_review(text: str) -> bool:
    lowered = text.lower()
    return any(k in lowered for k in POSITIVE_KEYWORDS)


def extract_rating(text: str) -> Optional[str]:
    for pattern in _RATING_PATTERNS:
        match = pattern.search(text)
        if match:
            return f"{match.group(1)}/5"
    return None


def extract_phone(text: str) -> Optional[str]:
    """First 10-13 digit phone number in *text*, separators removed."""
    for pattern in _PHONE_PATTERNS:
        match = pattern.search(text)
        if match:
            cleaned = re.sub(r"[\s-]", "", match.group(0))
            if 10 <= len(cleaned) <= 13:
                return cleaned
    return None


def extract_domain(url: str) -> str:
    host = urlparse(url or "").hostname
    return host.replace("www.", "") if host else "Web Source"


def extract_date(text: str) -> str:
    match = _DATE_PATTERN.search(text)
    return match.group(0) if match else date.today().isoformat()


def extract_specializations(text: str) -> list[str]:
    lowered = text.lower()
    tags = [
        label for word, label in (
            ("heritage", "Heritage Tours"),
            ("wildlife", "Wildlife Tours"),
            ("adventure", "Adventure Tours"),
            ("culture", "Cultural Tours"),
            ("temple", "Religious Tours"),
        )
        if word in lowered
    ]
    return tags or ["General Tourism"]


def news_relevance(title: str, snippet: str) -> str:
    content = f"{title} {snippet}".lower()
    score = sum(1 for k in RELEVANCE_KEYWORDS if k in content)
    if score >= 3:
        return "high"
    if score >= 2:
        return "medium"
    return "low"


def _clean_guide_name(title: str) -> str:
    name = re.sub(r"[-|•].*", "", title)
    return re.sub(r"\s+", " ", name).strip()[:60]


def _is_verified(url: str) -> bool:
    return any(domain in (url or "") for domain in VERIFIED_DOMAINS)


def deduplicate_guides(guides: list[LocalGuide]) -> list[LocalGuide]:
    seen = set()
    unique = []
    for guide in guides:
        key = guide.contact or guide.name
        if key in seen:
            continue
        seen.add(key)
        unique.append(guide)
    return unique[:MAX_GUIDES]


# ---------------------------------------------------------------------------
# Extraction
# ---------------------------------------------------------------------------

def extract_reviews(response: dict, destination: str) -> list[Review]:
    reviews = []
    for result in (response.get("organic_results") or [])[:5]:
        snippet = result.get("snippet") or ""
        if not snippet or not is_positive_review(snippet):
            continue
        link = result.get("link") or ""
        reviews.append(Review(
            text=snippet,
            source=extract_domain(link),
            rating=extract_rating(snippet) or "4+ stars",
            reviewer="Verified Visitor",
            title=result.get("title") or "Review",
            url=link or None,
            date=extract_date(snippet),
        ))
    return reviews or fallback_reviews(destination)


def extract_guides(response: dict) -> list[LocalGuide]:
    guides = []
    for result in (response.get("organic_results") or [])[:3]:
        snippet = result.get("snippet") or ""
        phone = extract_phone(f"{snippet} {result.get('title') or ''}")
        if not phone:
            continue
        link = result.get("link") or ""
        guides.append(LocalGuide(
            name=_clean_guide_name(result.get("title") or "Local Guide"),
            contact=phone,
            source=extract_domain(link),
            description=(snippet[:150] + "...").strip(),
            verified=_is_verified(link),
            specializations=extract_specializations(snippet),
            url=link or None,
        ))
    return guides


def extract_news(response: dict) -> list[NewsItem]:
    news = []
    for article in (response.get("news_results") or [])[:6]:
        title = article.get("title") or ""
        if not title:
            continue
        snippet = article.get("snippet") or "Recent tourism update from Jharkhand"
        source = article.get("source")
        if isinstance(source, dict):
            source = source.get("name")
        news.append(NewsItem(
            title=title,
            snippet=snippet,
            source=source or "News",
            date=article.get("date") or "",
            link=article.get("link") or "",
            relevance=news_relevance(title, snippet),
            thumbnail=article.get("thumbnail"),
        ))
    return news


# ---------------------------------------------------------------------------
# Provider operations (raise SearchError)
# ---------------------------------------------------------------------------

def search_reviews(destination: str) -> list[Review]:
    dest = _clean_destination(destination)
    response = _search({
        "engine": "google",
        "q": f'{dest} Jharkhand reviews "amazing" "beautiful" "must visit" '
             "site:tripadvisor.in OR site:google.com OR site:makemytrip.com",
        "location": "Jharkhand, India",
        "num": 8,
    })
    return extract_reviews(response, dest)


def find_guides(destination: str) -> list[LocalGuide]:
    """Guides scraped from two searches, plus the official contacts, deduplicated."""
    dest = _clean_destination(destination)
    queries = [
        f"{dest} tour guide contact Jharkhand site:justdial.com OR site:sulekha.com",
        f"{dest} travel agent phone number Jharkhand",
    ]
    found: list[LocalGuide] = []
    failures = []
    for query in queries:
        try:
            response = _search({"engine": "google", "q": query,
                                "location": "Jharkhand, India", "num": 5})
        except SearchError as exc:
            logger.warning("Guide search failed for %r: %s", query, exc)
            failures.append(exc)
            continue
        found.extend(extract_guides(response))
    if len(failures) == len(queries):
        raise failures[-1]
    return deduplicate_guides(found + official_guides(dest))


def get_tourism_news() -> list[NewsItem]:
    response = _search({
        "engine": "google_news",
        "q": "Jharkhand tourism new attractions festivals events",
        "location": "India",
        "num": 10,
    })
    return extract_news(response) or fallback_news()


# ---------------------------------------------------------------------------
# Defaults
# ---------------------------------------------------------------------------

def fallback_reviews(destination: str) -> list[Review]:
    return [
        Review(
            text=f"{destination} is truly a hidden gem of Jharkhand! The natural beauty and "
                 "cultural richness make it a must-visit destination.",
            source="Traveler Reviews",
            rating="4.5/5 stars",
            reviewer="Jharkhand Explorer",
            title="Amazing Experience",
        ),
        Review(
            text=f"Highly recommend visiting {destination} when in Jharkhand. The local "
                 "hospitality and scenic views are unforgettable.",
            source="Tourism Feedback",
            rating="4.7/5 stars",
            reviewer="Cultural Tourist",
            title="Unforgettable Journey",
        ),
    ]


def official_guides(destination: str = "") -> list[LocalGuide]:
    return [
        LocalGuide(
            name="Jharkhand Tourism Development Corporation",
            contact="0651-2331828",
            source="tourism.jharkhand.gov.in",
            description="Official state tourism body providing certified guides and complete "
                        "tour packages for authentic Jharkhand experiences",
            verified=True,
            specializations=["Heritage Tours", "Cultural Tours", "Wildlife Tours"],
            languages=["Hindi", "English", "Bengali"],
            price_range="₹1000-1500 per day",
        ),
        LocalGuide(
            name="Tourist Helpline Jharkhand",
            contact="0651-2400496",
            source="Government of Jharkhand",
            description="24/7 tourist assistance, emergency help, and local guide booking services",
            verified=True,
            specializations=["General Tourism", "Emergency Assistance"],
            price_range="₹800-1200 per day",
            availability="24/7",
        ),
    ]


def fallback_news() -> list[NewsItem]:
    return [
        NewsItem(
            title="Jharkhand Tourism Promotes Winter Destinations",
            snippet="State tourism department launches new initiatives to promote winter "
                    "tourism in Jharkhand",
            source="Tourism Board",
            date=date.today().isoformat(),
            link="https://tourism.jharkhand.gov.in",
            relevance="high",
        ),
    ]
