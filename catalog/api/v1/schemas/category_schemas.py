"""Pydantic schemas for category and metro station endpoints."""
from typing import List, Optional

from pydantic import Field

from catalog.api.v1.schemas.attraction_schemas import (
    AttractionSchema,
    MetroStationSchema,
    PaginationSchema,
)
from catalog.api.v1.schemas.common import CamelModel

HEX_COLOR_PATTERN = r"^#[0-9A-Fa-f]{6}$"


class CategorySchema(CamelModel):
    id: int
    name: str
    slug: str
    description: Optional[str] = None
    color: Optional[str] = None
    attractions_count: Optional[int] = None


class CategoryListResponse(CamelModel):
    success: bool = True
    message: str
    categories: List[CategorySchema]


class CategoryResponse(CamelModel):
    success: bool = True
    message: str
    category: CategorySchema


class CategoryAttractionsResponse(CamelModel):
    success: bool = True
    message: str
    category: CategorySchema
    attractions: List[AttractionSchema]
    pagination: PaginationSchema


class CategoryCreateRequest(CamelModel):
    name: str = Field(..., min_length=2, max_length=100)
    description: Optional[str] = Field(None, max_length=1000)
    color: Optional[str] = Field(None, pattern=HEX_COLOR_PATTERN)


class CategoryUpdateRequest(CamelModel):
    name: Optional[str] = Field(None, min_length=2, max_length=100)
    description: Optional[str] = Field(None, max_length=1000)
    color: Optional[str] = Field(None, pattern=HEX_COLOR_PATTERN)


class MetroStationListResponse(CamelModel):
    success: bool = True
    metro_stations: List[MetroStationSchema]


class MetroStationResponse(CamelModel):
    success: bool = True
    metro_station: MetroStationSchema
