"""
Unit tests for agents/SearchAgent.py

Tests cover:
- Text helpers (positive-review filter, rating, phone, relevance, domain)
- Extraction from SerpAPI payloads
- Provider operations with the HTTP session mocked
- Defaults
"""
import pytest
import requests
from unittest.mock import MagicMock, patch

from agents import SearchAgent as sa
from agents import WeatherAgent as wa


def _response(payload):
    resp = MagicMock()
    resp.json.return_value = payload
    return resp


ORGANIC_REVIEWS = {
    "organic_results": [
        {"title": "Hundru Falls - Tripadvisor", "link": "https://www.tripadvisor.in/hundru",
         "snippet": "Amazing waterfall, rated 4.5 by visitors on 12/01/2025."},
        {"title": "Traffic update", "link": "https://news.example.com/x",
         "snippet": "Road closed near Ormanjhi."},
        {"title": "Rock Garden", "link": "https://www.google.com/maps/rock",
         "snippet": "Beautiful evening views, 4 star experience"},
    ]
}

ORGANIC_GUIDES = {
    "organic_results": [
        {"title": "Ranchi Heritage Guides | Justdial", "link": "https://www.justdial.com/ranchi",
         "snippet": "Heritage and temple tours. Call 98765 43210 for bookings."},
        {"title": "No phone here", "link": "https://example.com", "snippet": "Guides available."},
    ]
}

NEWS = {
    "news_results": [
        {"title": "Jharkhand tourism unveils new festival circuit", "snippet": "Big plans",
         "source": {"name": "Times"}, "date": "2 days ago", "link": "https://t.example/1"},
        {"title": "Cricket scores", "snippet": "", "source": "Sports", "link": "https://s.example"},
    ]
}


@pytest.fixture
def api_key(monkeypatch):
    monkeypatch.setenv("SERPAPI_API_KEY", "test-key")


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

class TestTextHelpers:
    def test_positive_review(self):
        assert sa.is_positive_review("A Breathtaking view") is True
        assert sa.is_positive_review("It was ok") is False

    @pytest.mark.parametrize("text,expected", [
        ("Scored 4.5/5 overall", "4.5/5"),
        ("A solid 4 star stay", "4/5"),
        ("rated 3.8 by guests", "3.8/5"),
        ("no score", None),
    ])
    def test_extract_rating(self, text, expected):
        assert sa.extract_rating(text) == expected

    @pytest.mark.parametrize("text,expected", [
        ("Call 9876543210 now", "9876543210"),
        ("Phone +91-9876543210", "+919876543210"),
        ("Reach us on 98765 43210", "9876543210"),
        ("Office 0651-2331828", None),
        ("No number", None),
    ])
    def test_extract_phone(self, text, expected):
        assert sa.extract_phone(text) == expected

    def test_extract_domain(self):
        assert sa.extract_domain("https://www.justdial.com/x") == "justdial.com"
        assert sa.extract_domain("not a url") == "Web Source"

    @pytest.mark.parametrize("title,snippet,expected", [
        ("Jharkhand tourism festival", "", "high"),
        ("New attraction", "", "medium"),
        ("Cricket scores", "", "low"),
    ])
    def test_news_relevance(self, title, snippet, expected):
        assert sa.news_relevance(title, snippet) == expected

    def test_specializations(self):
        assert sa.extract_specializations("heritage and wildlife") == ["Heritage Tours", "Wildlife Tours"]
        assert sa.extract_specializations("") == ["General Tourism"]

    def test_deduplicate_guides_caps_at_eight(self):
        guides = [sa.LocalGuide(name=f"G{i}", contact=str(i % 10), source="s", description="d")
                  for i in range(20)]
        unique = sa.deduplicate_guides(guides)
        assert len(unique) == 8
        assert len({g.contact for g in unique}) == 8


# ---------------------------------------------------------------------------
# Extraction
# ---------------------------------------------------------------------------

class TestExtraction:
    def test_reviews_keep_positive_only(self):
        reviews = sa.extract_reviews(ORGANIC_REVIEWS, "Ranchi")
        assert len(reviews) == 2
        assert reviews[0].source == "tripadvisor.in"
        assert reviews[0].rating == "4.5/5"
        assert reviews[0].date == "12/01/2025"
        assert reviews[1].rating == "4/5"

    def test_no_positive_reviews_uses_defaults(self):
        reviews = sa.extract_reviews({"organic_results": []}, "Deoghar")
        assert len(reviews) == 2
        assert "Deoghar" in reviews[0].text

    def test_guides_need_a_phone(self):
        guides = sa.extract_guides(ORGANIC_GUIDES)
        assert len(guides) == 1
        assert guides[0].name == "Ranchi Heritage Guides"
        assert guides[0].contact == "9876543210"
        assert guides[0].verified is True
        assert "Religious Tours" in guides[0].specializations

    def test_news(self):
        news = sa.extract_news(NEWS)
        assert news[0].source == "Times"
        assert news[0].relevance == "high"
        assert news[1].snippet == "Recent tourism update from Jharkhand"


# ---------------------------------------------------------------------------
# Provider operations
# ---------------------------------------------------------------------------

class TestProviders:
    def test_session_retries_transient_errors(self):
        retries = sa._session.get_adapter(sa.SERPAPI_URL).max_retries
        assert retries.total == 2
        assert 429 in retries.status_forcelist
        assert sa._session is not wa._session

    def test_missing_key_raises(self):
        with pytest.raises(sa.SearchError, match="SERPAPI_API_KEY"):
            sa.search_reviews("Ranchi")
        with pytest.raises(sa.SearchError):
            sa.get_tourism_news()

    def test_search_reviews(self, api_key):
        with patch.object(sa._session, "get", return_value=_response(ORGANIC_REVIEWS)) as get:
            reviews = sa.search_reviews("  Ranchi  ")
        params = get.call_args.kwargs["params"]
        assert params["engine"] == "google"
        assert params["q"].startswith("Ranchi Jharkhand reviews")
        assert params["api_key"] == "test-key"
        assert get.call_args.kwargs["timeout"] == sa.TIMEOUT
        assert len(reviews) == 2

    def test_error_payload_raises(self, api_key):
        with patch.object(sa._session, "get", return_value=_response({"error": "quota"})):
            with pytest.raises(sa.SearchError, match="quota"):
                sa.search_reviews("Ranchi")

    def test_find_guides_merges_official(self, api_key):
        with patch.object(sa._session, "get", return_value=_response(ORGANIC_GUIDES)) as get:
            guides = sa.find_guides("Ranchi")
        assert get.call_count == 2
        contacts = [g.contact for g in guides]
        # same guide found by both queries is kept once
        assert contacts.count("9876543210") == 1
        assert "0651-2331828" in contacts
        assert "0651-2400496" in contacts

    def test_find_guides_tolerates_one_failed_query(self, api_key):
        responses = [requests.ConnectionError("boom"), _response(ORGANIC_GUIDES)]
        with patch.object(sa._session, "get", side_effect=responses):
            guides = sa.find_guides("Ranchi")
        assert len(guides) == 3

    def test_find_guides_raises_when_all_queries_fail(self, api_key):
        with patch.object(sa._session, "get", side_effect=requests.ConnectionError("boom")):
            with pytest.raises(sa.SearchError):
                sa.find_guides("Ranchi")

    def test_news_uses_google_news(self, api_key):
        with patch.object(sa._session, "get", return_value=_response(NEWS)) as get:
            news = sa.get_tourism_news()
        assert get.call_args.kwargs["params"]["engine"] == "google_news"
        assert len(news) == 2

    def test_empty_news_uses_default(self, api_key):
        with patch.object(sa._session, "get", return_value=_response({"news_results": []})):
            news = sa.get_tourism_news()
        assert news[0].source == "Tourism Board"


# ---------------------------------------------------------------------------
# Defaults
# ---------------------------------------------------------------------------

class TestDefaults:
    def test_official_guides(self):
        guides = sa.official_guides()
        assert [g.contact for g in guides] == ["0651-2331828", "0651-2400496"]
        assert all(g.verified for g in guides)

    def test_defaults_serialise(self):
        data = sa.official_guides()[0].to_dict()
        assert data["priceRange"] == "₹1000-1500 per day"
        assert sa.fallback_news()[0].to_dict()["relevance"] == "high"
