"""Suggestion sources for the discovery sidebar and the auto-find-stay action.

Fetch failures never reach the mutation engine: every source degrades to an
empty list (or no accommodation) and logs a warning.
"""

import json
import logging
from collections.abc import Iterable
from enum import Enum
from pathlib import Path
from typing import Any, Protocol

import httpx
from pydantic import ValidationError

from tripboard.config import Settings, get_settings
from tripboard.engine.mutations import ItineraryEngine
from tripboard.models.accommodation import Accommodation
from tripboard.models.activity import FLEXIBLE_TIME, Activity, Suggestion

logger = logging.getLogger(__name__)

FIXTURES_DIR = Path(__file__).parent.parent / "fixtures"


class DiscoveryTab(str, Enum):
    """Sidebar tab."""

    culinary = "culinary"
    exploration = "exploration"
    stay = "stay"
    events = "events"


# Activity categories shown under each tab; "stay" lists accommodations only.
TAB_CATEGORY_MAP: dict[DiscoveryTab, list[str]] = {
    DiscoveryTab.culinary: ["Food"],
    DiscoveryTab.exploration: ["Adventure", "Sightseeing", "Relaxation"],
    DiscoveryTab.stay: [],
    DiscoveryTab.events: ["Nightlife"],
}

FILTERS_BY_TAB: dict[DiscoveryTab, list[str]] = {
    DiscoveryTab.culinary: [
        "Local Favorites",
        "Fine Dining",
        "Budget",
        "Romantic",
        "Spicy",
        "Casual",
    ],
    DiscoveryTab.exploration: [
        "Nature",
        "History",
        "Free",
        "Shopping",
        "Architecture",
        "Walkable",
    ],
    DiscoveryTab.stay: ["Luxury", "Boutique", "Central", "Trendy", "Spa"],
    DiscoveryTab.events: ["Music", "Live", "Culture", "Social"],
}


class SuggestionSource(Protocol):
    """Protocol for discovery suggestion sources."""

    async def get_suggestions(
        self,
        tab: DiscoveryTab,
        destination: str,
        vibe: str,
        budget: float,
        filters: list[str] | None = None,
    ) -> list[Suggestion | Accommodation]:
        """Return activity-like or accommodation-like suggestions for a tab."""
        ...


class AccommodationSuggester(Protocol):
    """Protocol for the auto-find-stay collaborator."""

    async def suggest_accommodation(self, theme: str, budget: float) -> Accommodation | None:
        """Return a single accommodation suited to a day's theme and budget."""
        ...


def parse_suggestion(record: dict[str, Any]) -> Suggestion | Accommodation | None:
    """Classify and validate one raw record (``hotelName`` marks a stay)."""
    try:
        if record.get("hotelName") or record.get("hotel_name"):
            return Accommodation.model_validate(record)
        return Suggestion.model_validate(record)
    except ValidationError as e:
        logger.warning(f"[suggestions] Skipping invalid record id={record.get('id')}: {e}")
        return None


def filter_records(
    records: Iterable[Any],
    tab: DiscoveryTab,
    filters: list[str] | None = None,
) -> list[Suggestion | Accommodation]:
    """Keep records belonging to `tab` that match any active filter tag."""
    allowed = TAB_CATEGORY_MAP.get(tab, [])
    results: list[Suggestion | Accommodation] = []

    for record in records:
        if not isinstance(record, dict):
            continue

        is_stay = bool(record.get("hotelName") or record.get("hotel_name"))
        if tab == DiscoveryTab.stay:
            if not is_stay:
                continue
        elif is_stay or record.get("category") not in allowed:
            continue

        # Any-match between active filters and the record's tags
        if filters and not set(filters) & set(record.get("tags") or []):
            continue

        parsed = parse_suggestion(record)
        if parsed is not None:
            results.append(parsed)

    return results


def load_fixture_records(path: Path | None = None) -> list[Any]:
    """Load raw suggestion records from the bundled fixture file."""
    fixture_path = path or FIXTURES_DIR / "suggestions.json"
    with open(fixture_path) as f:
        data = json.load(f)
    return data if isinstance(data, list) else []


class HttpSuggestionSource:
    """REST-backed suggestion source (``GET {base_url}/suggestions``)."""

    def __init__(
        self,
        base_url: str | None = None,
        client: httpx.AsyncClient | None = None,
        settings: Settings | None = None,
    ) -> None:
        """Initialize source.

        Args:
            base_url: Service root; defaults to settings.suggestions_base_url
            client: Optional httpx client (for testing with mocks)
            settings: Optional settings override
        """
        self._settings = settings or get_settings()
        self._base_url = (base_url or self._settings.suggestions_base_url).rstrip("/")
        self._client = client

    async def get_suggestions(
        self,
        tab: DiscoveryTab,
        destination: str,
        vibe: str,
        budget: float,
        filters: list[str] | None = None,
    ) -> list[Suggestion | Accommodation]:
        """Fetch the catalog and filter it for `tab`; [] on any failure."""
        url = f"{self._base_url}/suggestions"

        close_client = False
        client = self._client
        if client is None:
            client = httpx.AsyncClient(timeout=self._settings.suggestions_timeout_sec)
            close_client = True

        try:
            response = await client.get(url)
            response.raise_for_status()
            data = response.json()
        except (httpx.HTTPError, ValueError) as e:
            logger.warning(f"[suggestions] Fetch failed tab={tab.value} dest={destination}: {e}")
            return []
        finally:
            if close_client:
                await client.aclose()

        if not isinstance(data, list):
            logger.warning(f"[suggestions] Unexpected payload type {type(data).__name__}")
            return []

        return filter_records(data, tab, filters)


class FixtureSuggestionSource:
    """Suggestion source backed by the bundled JSON fixture."""

    def __init__(self, path: Path | None = None) -> None:
        self._records = load_fixture_records(path)

    async def get_suggestions(
        self,
        tab: DiscoveryTab,
        destination: str,
        vibe: str,
        budget: float,
        filters: list[str] | None = None,
    ) -> list[Suggestion | Accommodation]:
        """Filter fixture records for `tab`."""
        return filter_records(self._records, tab, filters)


class FixtureAccommodationSuggester:
    """Picks the best-rated fixture stay within the nightly budget."""

    def __init__(self, path: Path | None = None) -> None:
        self._stays = [
            parsed
            for parsed in filter_records(load_fixture_records(path), DiscoveryTab.stay)
            if isinstance(parsed, Accommodation)
        ]

    async def suggest_accommodation(self, theme: str, budget: float) -> Accommodation | None:
        """Prefer stays whose tags or description mention the theme, then rating."""
        affordable = [s for s in self._stays if budget <= 0 or s.price_per_night <= budget]
        if not affordable:
            return None

        words = {w.lower() for w in theme.split() if len(w) > 2}

        def rank(stay: Accommodation) -> tuple[int, float]:
            text = " ".join([stay.description, *stay.tags]).lower()
            return (sum(1 for w in words if w in text), stay.rating)

        return max(affordable, key=rank).model_copy(deep=True)


def suggestion_to_activity(
    suggestion: Suggestion,
    activity_id: str,
    settings: Settings | None = None,
) -> Activity:
    """Build a board activity from a sidebar suggestion.

    The time stays "Flexible" until the day is recalculated; a missing
    duration defaults to settings.suggestion_activity_minutes.
    """
    settings = settings or get_settings()
    return Activity(
        id=activity_id,
        title=suggestion.title,
        location=suggestion.location,
        description=suggestion.description,
        cost_estimate=suggestion.cost_estimate,
        category=suggestion.category,
        duration_minutes=suggestion.duration_minutes or settings.suggestion_activity_minutes,
        coordinates=suggestion.coordinates,
        time=FLEXIBLE_TIME,
    )


async def auto_find_stay(
    engine: ItineraryEngine,
    day_id: str,
    suggester: AccommodationSuggester,
    budget: float,
) -> Accommodation | None:
    """Ask the suggester for a stay and attach it to a day.

    The await happens before the engine is touched; the engine only receives
    the completed value through `set_accommodation`.

    Returns:
        The attached accommodation, or None when the day is gone, the
        suggester has nothing, or the suggester failed
    """
    day = engine.find_day(day_id)
    if day is None:
        return None

    try:
        suggested = await suggester.suggest_accommodation(day.theme, budget)
    except Exception as e:
        logger.error(f"[auto_find_stay] day_id={day_id} suggester failed: {e}", exc_info=True)
        return None

    if suggested is None:
        logger.info(f"[auto_find_stay] day_id={day_id} no stay within budget={budget}")
        return None

    stay = suggested.model_copy(update={"id": engine.ids.new_id("acc")})
    if not engine.set_accommodation(day_id, stay):
        return None
    return stay
