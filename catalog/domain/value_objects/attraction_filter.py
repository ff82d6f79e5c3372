"""Attraction search filter and the store-level query it compiles to."""
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Tuple


class AccessibilityFlag(str, Enum):
    WHEELCHAIR = "wheelchair"
    AUDIO = "audio"
    ELEVATOR = "elevator"
    SIGN_LANGUAGE = "sign_language"


class SortMode(str, Enum):
    NAME = "name"
    NEWEST = "newest"
    OLDEST = "oldest"
    CATEGORY = "category"


# Boolean Attraction attribute each accessibility flag requires to be true
ACCESSIBILITY_FEATURES = {
    AccessibilityFlag.WHEELCHAIR: "wheelchair_accessible",
    AccessibilityFlag.AUDIO: "has_audio_guide",
    AccessibilityFlag.ELEVATOR: "has_elevator",
    AccessibilityFlag.SIGN_LANGUAGE: "has_sign_language_support",
}


@dataclass(frozen=True)
class AttractionFilter:
    """Validated, normalized search parameters for one request.

    Every field except `sort_mode`, `page` and `limit` may be None, meaning
    "no constraint".
    """
    search_text: Optional[str] = None
    category_id: Optional[int] = None
    metro_station_id: Optional[int] = None
    district: Optional[str] = None
    accessibility_flag: Optional[AccessibilityFlag] = None
    sort_mode: SortMode = SortMode.NAME
    page: int = 1
    limit: int = 12


@dataclass(frozen=True)
class OrderKey:
    field: str
    descending: bool = False


@dataclass(frozen=True)
class AttractionQuery:
    """Conjunctive predicate, ordering and window handed to the record store.

    Text predicates are case-insensitive substring matches. `search_text`
    matches if any of name, short description or full description contains it.
    """
    published_only: bool = True
    category_id: Optional[int] = None
    metro_station_id: Optional[int] = None
    district: Optional[str] = None
    search_text: Optional[str] = None
    required_features: Tuple[str, ...] = ()
    ordering: Tuple[OrderKey, ...] = (OrderKey("name"), OrderKey("id"))
    offset: int = 0
    limit: int = 12
