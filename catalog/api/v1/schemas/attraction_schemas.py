"""Pydantic schemas for attraction endpoints."""
from datetime import datetime
from typing import List, Optional

from pydantic import Field

from catalog.api.v1.schemas.common import CamelModel

WEBSITE_PATTERN = r"^https?://[^\s/$.?#].[^\s]*$"
PHONE_PATTERN = r"^(\+7|8)?[\s\-]?\(?[489][0-9]{2}\)?[\s\-]?[0-9]{3}[\s\-]?[0-9]{2}[\s\-]?[0-9]{2}$"


class ImageSchema(CamelModel):
    id: int
    filename: str
    path: str
    alt_text: Optional[str] = None
    is_primary: bool = False


class CategorySummarySchema(CamelModel):
    id: int
    name: str
    slug: str
    color: Optional[str] = None


class MetroStationSchema(CamelModel):
    id: int
    name: str
    line_color: str
    line_name: str


class AttractionSchema(CamelModel):
    """Attraction as returned in listings and detail views."""
    id: int
    name: str
    slug: str
    short_description: str
    full_description: str
    address: str
    district: Optional[str] = None
    latitude: Optional[float] = None
    longitude: Optional[float] = None
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
    category_id: int
    metro_station_id: Optional[int] = None
    created_by: int
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    category: Optional[CategorySummarySchema] = None
    metro_station: Optional[MetroStationSchema] = None
    images: List[ImageSchema] = []


class PaginationSchema(CamelModel):
    current_page: int
    total_pages: int
    total_items: int
    has_next_page: bool
    has_prev_page: bool
    items_per_page: int


class AttractionListResponse(CamelModel):
    success: bool = True
    message: str
    attractions: List[AttractionSchema]
    pagination: PaginationSchema


class AttractionResponse(CamelModel):
    success: bool = True
    message: Optional[str] = None
    attraction: AttractionSchema


class _AttractionFields(CamelModel):
    district: Optional[str] = Field(None, max_length=100)
    latitude: Optional[float] = Field(None, ge=-90, le=90)
    longitude: Optional[float] = Field(None, ge=-180, le=180)
    working_hours: Optional[str] = Field(None, max_length=200)
    ticket_price: Optional[str] = Field(None, max_length=100)
    website: Optional[str] = Field(None, max_length=500, pattern=WEBSITE_PATTERN)
    phone: Optional[str] = Field(None, max_length=20, pattern=PHONE_PATTERN)
    distance_to_metro: Optional[int] = Field(None, ge=1, le=60)
    accessibility_notes: Optional[str] = Field(None, max_length=1000)
    metro_station_id: Optional[int] = Field(None, ge=1)


class AttractionCreateRequest(_AttractionFields):
    name: str = Field(..., min_length=2, max_length=200)
    short_description: str = Field(..., min_length=10, max_length=500)
    full_description: str = Field(..., min_length=50, max_length=5000)
    address: str = Field(..., min_length=5, max_length=300)
    category_id: int = Field(..., ge=1)
    wheelchair_accessible: bool = False
    has_elevator: bool = False
    has_audio_guide: bool = False
    has_sign_language_support: bool = False
    is_published: bool = True


class AttractionUpdateRequest(_AttractionFields):
    """Partial update: only fields present in the body are changed."""
    name: Optional[str] = Field(None, min_length=2, max_length=200)
    short_description: Optional[str] = Field(None, min_length=10, max_length=500)
    full_description: Optional[str] = Field(None, min_length=50, max_length=5000)
    address: Optional[str] = Field(None, min_length=5, max_length=300)
    category_id: Optional[int] = Field(None, ge=1)
    wheelchair_accessible: Optional[bool] = None
    has_elevator: Optional[bool] = None
    has_audio_guide: Optional[bool] = None
    has_sign_language_support: Optional[bool] = None
    is_published: Optional[bool] = None


class SuggestionSchema(CamelModel):
    type: str
    id: int
    name: str
    slug: str
    category: Optional[str] = None


class SuggestionsResponse(CamelModel):
    success: bool = True
    suggestions: List[SuggestionSchema]


class CategoryCountSchema(CamelModel):
    id: int
    name: str
    color: Optional[str] = None
    count: int


class RecentAttractionSchema(CamelModel):
    id: int
    name: str
    is_published: bool
    created_at: Optional[datetime] = None
    category: Optional[CategorySummarySchema] = None


class StatisticsTotalsSchema(CamelModel):
    attractions: int
    published: int
    drafts: int
    categories: int


class StatisticsSchema(CamelModel):
    totals: StatisticsTotalsSchema
    attractions_by_category: List[CategoryCountSchema]
    recent_attractions: List[RecentAttractionSchema]


class StatisticsResponse(CamelModel):
    success: bool = True
    statistics: StatisticsSchema
