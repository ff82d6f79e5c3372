"""Attraction domain entity - pure business logic."""
import re
from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from typing import List, Optional

from catalog.domain.entities.category import Category
from catalog.domain.entities.image import Image
from catalog.domain.entities.metro_station import MetroStation

# Characters kept when deriving a slug: latin, cyrillic, digits and whitespace.
_SLUG_STRIP = re.compile(r"[^a-zA-Zа-яА-ЯёЁ0-9\s]")
_SLUG_SPACES = re.compile(r"\s+")


def slugify(name: str) -> str:
    """Turn a display name into a lowercase, hyphen-separated slug."""
    cleaned = _SLUG_STRIP.sub("", name.lower().strip())
    return _SLUG_SPACES.sub("-", cleaned).strip("-")


def unique_slug(name: str, now: Optional[datetime] = None) -> str:
    """Slug suffixed with a millisecond timestamp so renamed records never collide."""
    moment = now or datetime.utcnow()
    return f"{slugify(name)}-{int(moment.timestamp() * 1000)}"


@dataclass
class Attraction:
    """Attraction domain entity."""
    id: Optional[int]
    name: str
    slug: str
    short_description: str
    full_description: str
    address: str
    category_id: int
    created_by: int
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
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    # Related records, populated by repositories on read
    category: Optional[Category] = None
    metro_station: Optional[MetroStation] = None
    images: List[Image] = field(default_factory=list)

    def is_valid(self) -> bool:
        """Validate attraction business rules."""
        return bool(
            self.name and
            self.name.strip() and
            self.slug and
            self.slug.strip() and
            self.category_id and
            self.category_id > 0
        )

    @property
    def primary_image(self) -> Optional[Image]:
        for image in self.images:
            if image.is_primary:
                return image
        return None

    def rename(self, name: str, now: Optional[datetime] = None):
        """Change the display name and regenerate the slug."""
        if not name or not name.strip():
            raise ValueError("Attraction name cannot be empty")
        if name != self.name:
            self.name = name
            self.slug = unique_slug(name, now)
