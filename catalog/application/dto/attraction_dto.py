"""Data Transfer Objects passed between the API layer and attraction use cases."""
from dataclasses import dataclass, field
from decimal import Decimal
from typing import List, Optional

from catalog.domain.entities.attraction import Attraction
from catalog.domain.entities.category import Category


@dataclass
class AttractionDraftDTO:
    """Fields supplied when creating an attraction."""
    name: str
    short_description: str
    full_description: str
    address: str
    category_id: int
    district: Optional[str] = None
    latitude: Optional[Decimal] = None
    longitude: Optional[Decimal] = None
    working_hours: Optional[str] = None
    ticket_price: Optional[str] = None
    website: Optional[str] = None
    phone: Optional[str] = None
    distance_to_metro: Optional[int] = None
    wheelchair_accessible: bool = False
    has_elevator: bool = False
    has_audio_guide: bool = False
    has_sign_language_support: bool = False
    accessibility_notes: Optional[str] = None
    is_published: bool = True
    metro_station_id: Optional[int] = None


@dataclass
class SuggestionDTO:
    """One search-box suggestion."""
    type: str
    id: int
    name: str
    slug: str
    category: Optional[str] = None


@dataclass
class CategoryCountDTO:
    id: int
    name: str
    color: Optional[str]
    count: int


@dataclass
class StatisticsDTO:
    """Admin dashboard totals."""
    total_attractions: int
    published_attractions: int
    draft_attractions: int
    total_categories: int
    attractions_by_category: List[CategoryCountDTO] = field(default_factory=list)
    recent_attractions: List[Attraction] = field(default_factory=list)


@dataclass
class CategoryDraftDTO:
    name: str
    description: Optional[str] = None
    color: Optional[str] = None
