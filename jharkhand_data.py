"""
Static Jharkhand travel data - gazetteer, destination catalogue and the
hand-authored content used by the fallback planner
"""

# In-scope destinations. Matching is substring-based in both directions, see
# trip_utils.is_in_scope.
GAZETTEER = [
    "ranchi", "deoghar", "netarhat", "jamshedpur", "hazaribagh", "betla",
    "dhanbad", "bokaro", "parasnath", "giridih", "chaibasa", "palamu", "latehar",
    "dumka", "godda", "pakur", "sahebganj", "koderma", "chatra", "garhwa",
    "ramgarh", "khunti", "simdega", "west singhbhum", "east singhbhum",
]

# Colloquial long names -> gazetteer key
LOCATION_ALIASES = {
    "betla national park": "betla",
    "betla park": "betla",
    "parasnath hill": "parasnath",
    "parasnath hills": "parasnath",
}

DEFAULT_AIRPORT = "Birsa Munda Airport (IXR)"

# Catalogued destinations (keyed by gazetteer entry)
LOCATIONS = {
    "ranchi": {
        "name": "Ranchi",
        "district": "Ranchi",
        "category": "city",
        "coordinates": {"lat": 23.3441, "lon": 85.3096},
        "best_time": "October–March",
        "highlights": ["Hundru Falls", "Dassam Falls", "Jonha Falls", "Rock Garden",
                       "Tagore Hill", "Birsa Zoological Park", "Kanke Dam"],
        "nearest_airport": "Birsa Munda Airport (IXR)",
        "nearest_railway": "Ranchi Junction (RNC)",
        "description": 'Capital of Jharkhand, the "City of Waterfalls", ringed by cascades, '
                       "gardens and tribal heritage.",
        "suggested_days": 3,
    },
    "deoghar": {
        "name": "Deoghar",
        "district": "Deoghar",
        "category": "religious",
        "coordinates": {"lat": 24.4822, "lon": 86.6967},
        "best_time": "October–March",
        "highlights": ["Baidyanath Jyotirlinga Temple", "Naulakha Temple", "Tapovan Hills",
                       "Trikuta Parvat", "Basukinath Temple"],
        "nearest_airport": "Deoghar Airport (DGH)",
        "nearest_railway": "Jasidih Junction (24 km)",
        "description": "Sacred city of the Baidyanath Jyotirlinga, one of the twelve abodes of Lord Shiva.",
        "suggested_days": 2,
    },
    "netarhat": {
        "name": "Netarhat",
        "district": "Latehar",
        "category": "hill-station",
        "coordinates": {"lat": 23.4667, "lon": 84.25},
        "best_time": "October–February",
        "highlights": ["Sunrise Point", "Magnolia Sunset Point", "Upper Ghaghri Falls",
                       "Lower Ghaghri Falls", "Netarhat Vidyalaya"],
        "nearest_airport": "Birsa Munda Airport, Ranchi (156 km)",
        "nearest_railway": "Latehar Railway Station (60 km)",
        "description": "Queen of Chotanagpur, a cool hill station known for its sunrise and sunset points.",
        "suggested_days": 2,
    },
    "jamshedpur": {
        "name": "Jamshedpur",
        "district": "East Singhbhum",
        "category": "city",
        "coordinates": {"lat": 22.8046, "lon": 86.2029},
        "best_time": "October–March",
        "highlights": ["Jubilee Park", "Tata Steel Zoological Park", "Dimna Lake",
                       "Dalma Wildlife Sanctuary", "Bhuvaneshwari Temple"],
        "nearest_airport": "Sonari Airport (IXW)",
        "nearest_railway": "Tatanagar Junction",
        "description": "India's steel city, a planned industrial town of parks, lakes and wide avenues.",
        "suggested_days": 2,
    },
    "hazaribagh": {
        "name": "Hazaribagh",
        "district": "Hazaribagh",
        "category": "wildlife",
        "coordinates": {"lat": 23.9929, "lon": 85.3677},
        "best_time": "November–March",
        "highlights": ["Hazaribagh National Park", "Canary Hill", "Konar Dam",
                       "Hazaribagh Lake", "Isco Rock Paintings"],
        "nearest_airport": "Birsa Munda Airport, Ranchi (93 km)",
        "nearest_railway": "Hazaribagh Road Railway Station",
        "description": "Forested plateau town known for its national park, lakes and rock art.",
        "suggested_days": 2,
    },
    "betla": {
        "name": "Betla National Park",
        "district": "Latehar",
        "category": "wildlife",
        "coordinates": {"lat": 23.8833, "lon": 84.1833},
        "best_time": "November–March",
        "highlights": ["Tiger Reserve", "Elephant Safari", "Palamau Fort", "Betla Fort",
                       "Bird Watching"],
        "nearest_airport": "Birsa Munda Airport, Ranchi (170 km)",
        "nearest_railway": "Daltonganj Railway Station (25 km)",
        "description": "Part of the Palamau Tiger Reserve, home to tigers, elephants and historic forts.",
        "suggested_days": 2,
    },
    "parasnath": {
        "name": "Parasnath Hill",
        "district": "Giridih",
        "category": "religious",
        "coordinates": {"lat": 23.9636, "lon": 86.1636},
        "best_time": "October–February",
        "highlights": ["Highest Peak in Jharkhand", "Jain Temples", "Shikharji Temple",
                       "Trekking Trails"],
        "nearest_airport": "Birsa Munda Airport, Ranchi (180 km)",
        "nearest_railway": "Parasnath Railway Station",
        "description": "Jharkhand's highest peak and a sacred Jain pilgrimage site.",
        "suggested_days": 1,
    },
    "dhanbad": {
        "name": "Dhanbad",
        "district": "Dhanbad",
        "category": "city",
        "coordinates": {"lat": 23.7957, "lon": 86.4304},
        "best_time": "October–March",
        "highlights": ["Maithon Dam", "Panchet Dam", "Topchanchi Lake", "Bhatinda Falls"],
        "nearest_airport": "Birsa Munda Airport, Ranchi (160 km)",
        "nearest_railway": "Dhanbad Junction",
        "description": "The coal capital of India, with dams, lakes and an industrial heritage.",
        "suggested_days": 1,
    },
    "bokaro": {
        "name": "Bokaro",
        "district": "Bokaro",
        "category": "city",
        "coordinates": {"lat": 23.6693, "lon": 86.1511},
        "best_time": "October–March",
        "highlights": ["Garga Dam", "City Park", "Jawaharlal Nehru Biological Park"],
        "nearest_airport": "Birsa Munda Airport, Ranchi (115 km)",
        "nearest_railway": "Bokaro Steel City",
        "description": "Steel township with shaded parks and a reservoir on the Garga river.",
        "suggested_days": 1,
    },
}

EMERGENCY_CONTACTS = {
    "jharkhandTourism": "0651-2331828",
    "police": "100",
    "medical": "108",
    "fireService": "101",
    "localHelpline": "112",
}

SEASON_TEMPERATURE = {
    "Winter": "10–25°C",
    "Summer": "25–40°C",
    "Monsoon": "20–30°C",
    "Post-Monsoon": "15–28°C",
}

SEASON_CLOTHING = {
    "Winter": "Light woolens",
    "Summer": "Cotton, sunscreen",
    "Monsoon": "Raincoat, quick-dry",
    "Post-Monsoon": "Light layers",
}

SEASON_ADVICE = {
    "Winter": ["Best time for outdoor activities", "Pack layers for temperature variation"],
    "Summer": ["Avoid midday sun", "Stay hydrated", "Plan indoor activities during peak hours"],
    "Monsoon": ["Early-start waterfall visits", "Avoid swimming in high flow",
                "Add 30–45 mins for slippery trails"],
    "Post-Monsoon": ["Perfect weather for all activities", "Excellent visibility for photography"],
}

# ---------------------------------------------------------------------------
# Ranchi day templates: (theme, activities, travel tips)
# Activity tuple: (time, activity, location, duration, cost_inr, category, description)
# ---------------------------------------------------------------------------

RANCHI_ARRIVAL_DAY = (
    "Arrival & City Highlights",
    [
        ("10:00", "Check-in", "Hotel", "2h", 0, "sightseeing", "Settle in and freshen up"),
        ("12:30", "Lunch", "Doranda Chowk", "1h", 400, "food", "Local thali & chaats"),
        ("14:00", "Rock Garden", "Kanke Road", "2.5h", 50, "sightseeing", "Lake views & sculptures"),
        ("17:00", "Tagore Hill", "Morabadi", "1.5h", 30, "sightseeing", "Sunset viewpoint"),
    ],
    ["Visit Rock Garden by late afternoon for milder sun",
     "Doranda Chowk is great for pocket-friendly street food"],
)

RANCHI_DAYS = [
    (
        "Waterfalls Circuit",
        [
            ("09:30", "Hundru Falls", "Approx 35 km", "4h", 800, "adventure",
             "Steep steps; excellent monsoon flow"),
            ("14:00", "Lunch", "Nearby eatery", "1h", 450, "food", "Simple veg meals"),
            ("16:00", "Jonha Falls", "Approx 40 km", "2.5h", 600, "sightseeing",
             "Temple nearby; scenic pool"),
        ],
        ["Wear non-slip shoes", "Keep a spare towel and water",
         "Avoid slippery edges during peak monsoon"],
    ),
    (
        "Zoo & Market",
        [
            ("09:00", "Birsa Munda Biological Park", "Ormanjhi", "3h", 80, "sightseeing",
             "Green campus; kids friendly"),
            ("13:00", "Lunch", "Local dhaba", "1h", 350, "food", "Litti-chokha and regional fare"),
            ("14:30", "Shopping", "Main Road Market", "2h", 1000, "shopping",
             "Handicrafts; bamboo & tribal art"),
        ],
        ["Carry cash for small vendors", "Respect local customs and temple dress codes"],
    ),
    (
        "Temples & Lakes",
        [
            ("07:30", "Pahari Mandir", "Pahari Tola", "1.5h", 0, "religious",
             "Hilltop Shiva temple with city views"),
            ("10:00", "Jagannath Temple", "Dhurwa", "1.5h", 0, "religious",
             "17th-century temple modelled on Puri"),
            ("13:00", "Lunch", "Firayalal Chowk", "1h", 400, "food", "Dhuska, ghugni and sweets"),
            ("16:00", "Kanke Dam", "Kanke", "2h", 100, "sightseeing", "Boating and lakeside walk"),
        ],
        ["Start early to beat temple queues", "Remove footwear before entering shrines"],
    ),
    (
        "Dassam Falls & Patratu Valley",
        [
            ("08:30", "Dassam Falls", "Approx 40 km", "3h", 600, "sightseeing",
             "Ten-stream cascade on the Kanchi river"),
            ("13:00", "Lunch", "Highway dhaba", "1h", 350, "food", "Rice, dal and local greens"),
            ("15:30", "Patratu Valley", "Approx 35 km", "2.5h", 500, "adventure",
             "Hairpin-bend drive and reservoir views"),
        ],
        ["Hire a cab for the full day", "Do not swim below the falls"],
    ),
]

RANCHI_CULTURAL_EXPERIENCES = [
    {
        "experience": "Tribal Art Workshop",
        "description": "Hands-on Sohrai & Kohbar motifs introduction",
        "location": "Local Art Center",
        "cost": "₹300",
        "bestTime": "Morning",
        "duration": "2h",
        "difficulty": "easy",
        "culturalSignificance": "Supports local artisans and preserves tribal art traditions",
    },
    {
        "experience": "Tribal Research Institute Museum",
        "description": "Galleries on the Munda, Oraon, Santhal and Ho communities",
        "location": "Morabadi",
        "cost": "₹20",
        "bestTime": "Afternoon",
        "duration": "1.5h",
        "difficulty": "easy",
        "culturalSignificance": "Documents the languages, rituals and crafts of Jharkhand's tribes",
    },
]

RANCHI_TRAVEL_TIPS = [
    "Carry sufficient cash; ATMs can be sparse near waterfalls",
    "Keep sunscreen, water, and walking shoes",
]

GENERIC_TRAVEL_TIPS = [
    "Best travel window: Oct–Mar",
    "Carry a government ID for hotel check-in",
]

# ---------------------------------------------------------------------------
# Enhanced plan content
# ---------------------------------------------------------------------------

LOCAL_CUISINE = {
    "highlights": ["Dhuska with ghugni", "Litti chokha", "Pitha (varieties)",
                   "Bamboo shoot curry", "Mutton curry (khassi)", "Thekua", "Tilkut"],
    "areas": ["Upper Bazar", "Firayalal Chowk", "Kanke Road"],
}

HANDICRAFTS = {
    "buy": ["Dhokra brasswork", "Bamboo/cane craft", "Sohrai/Kohvar art", "Tussar silk"],
    "markets": ["Jharcraft outlets", "Firayalal Chowk", "Ratu Road", "Kanke Road"],
    "notes": ["Prefer Jharcraft-certified", "Pack fragile brass carefully"],
}

LOGISTICS = {
    "transport": ["Cab for falls loop", "UPI + cash", "Confirm last-mile autos"],
    "packing": ["Poncho", "Dry bag", "Spare socks"],
}


def get_location(key: str | None) -> dict | None:
    """Return the catalogue entry for a gazetteer key, or None."""
    if not key:
        return None
    return LOCATIONS.get(key)


def get_coordinates(key: str | None) -> dict:
    """Coordinates for a destination; unknown keys resolve to Ranchi."""
    location = get_location(key) or LOCATIONS["ranchi"]
    return dict(location["coordinates"])


def get_popular_destinations() -> list[dict]:
    """Catalogued destinations, longest suggested stay first."""
    return sorted(
        (
            {"id": key, "name": loc["name"], "district": loc["district"],
             "category": loc["category"], "suggestedDays": loc["suggested_days"],
             "highlights": list(loc["highlights"])}
            for key, loc in LOCATIONS.items()
        ),
        key=lambda d: -d["suggestedDays"],
    )
