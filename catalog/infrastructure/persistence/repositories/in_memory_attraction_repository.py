"""In-memory implementation of AttractionRepository for testing.

Filtering and ordering follow the SQLAlchemy repository so either can back the
search use case.
"""
from dataclasses import replace
from datetime import datetime
from typing import Dict, List, Optional, Tuple

from catalog.domain.entities.attraction import Attraction
from catalog.domain.entities.category import Category
from catalog.domain.entities.image import Image
from catalog.domain.errors import ConflictError, NotFoundError
from catalog.domain.repositories.attraction_repository import AttractionRepository
from catalog.domain.value_objects.attraction_filter import AttractionQuery
from catalog.infrastructure.persistence.repositories.in_memory_store import InMemoryStore, contains


class InMemoryAttractionRepository(AttractionRepository):
    """In-memory implementation for testing."""

    def __init__(self, store: Optional[InMemoryStore] = None):
        self.store = store or InMemoryStore()

    def add_image(self, image: Image) -> Image:
        """Attach an image record. Images are read-only through the repository interface."""
        if image.id is None:
            image = replace(image, id=self.store.next_id("images"))
        self.store.images[image.id] = image
        return image

    def _images_of(self, attraction_id: int, primary_only: bool) -> List[Image]:
        images = [image for image in self.store.images.values() if image.attraction_id == attraction_id]
        images.sort(key=lambda image: (not image.is_primary, image.id))
        if primary_only:
            return images[:1] if images and images[0].is_primary else []
        return images

    def _hydrate(self, attraction: Attraction, primary_only: bool = True) -> Attraction:
        return replace(
            attraction,
            category=self.store.categories.get(attraction.category_id),
            metro_station=self.store.metro_stations.get(attraction.metro_station_id),
            images=self._images_of(attraction.id, primary_only),
        )

    def _matches(self, attraction: Attraction, query: AttractionQuery) -> bool:
        if query.published_only and not attraction.is_published:
            return False
        if query.category_id is not None and attraction.category_id != query.category_id:
            return False
        if query.metro_station_id is not None and attraction.metro_station_id != query.metro_station_id:
            return False
        if query.district and not contains(attraction.district, query.district):
            return False
        if query.search_text and not any(
            contains(text, query.search_text)
            for text in (attraction.name, attraction.short_description, attraction.full_description)
        ):
            return False
        return all(getattr(attraction, feature) for feature in query.required_features)

    @staticmethod
    def _sort_value(attraction: Attraction, field: str):
        value = getattr(attraction, field)
        if value is None and field == "created_at":
            return datetime.min
        return value

    async def get_by_id(self, attraction_id: int) -> Optional[Attraction]:
        """Get attraction by ID, with all of its images."""
        attraction = self.store.attractions.get(attraction_id)
        return self._hydrate(attraction, primary_only=False) if attraction else None

    async def search(self, query: AttractionQuery) -> Tuple[List[Attraction], int]:
        matched = [a for a in self.store.attractions.values() if self._matches(a, query)]
        # Stable sorts applied from the least significant key
        for key in reversed(query.ordering):
            matched.sort(key=lambda a: self._sort_value(a, key.field), reverse=key.descending)
        window = matched[query.offset:query.offset + query.limit]
        return [self._hydrate(a) for a in window], len(matched)

    async def suggest_by_name(self, text: str, limit: int) -> List[Attraction]:
        matched = [
            a for a in self.store.attractions.values()
            if a.is_published and contains(a.name, text)
        ]
        matched.sort(key=lambda a: (a.name, a.id))
        return [replace(a, images=[]) for a in matched[:limit]]

    async def create(self, attraction: Attraction) -> Attraction:
        """Create new attraction."""
        if any(existing.slug == attraction.slug for existing in self.store.attractions.values()):
            raise ConflictError(f"Attraction with slug '{attraction.slug}' already exists")
        now = datetime.utcnow()
        stored = replace(
            attraction,
            id=self.store.next_id("attractions"),
            created_at=attraction.created_at or now,
            updated_at=now,
            category=None,
            metro_station=None,
            images=[],
        )
        self.store.attractions[stored.id] = stored
        return self._hydrate(stored, primary_only=False)

    async def update(self, attraction: Attraction) -> Attraction:
        """Update existing attraction."""
        existing = self.store.attractions.get(attraction.id)
        if existing is None:
            raise NotFoundError(f"Attraction {attraction.id} not found")
        stored = replace(
            attraction,
            created_at=existing.created_at,
            updated_at=datetime.utcnow(),
            category=None,
            metro_station=None,
            images=[],
        )
        self.store.attractions[stored.id] = stored
        return self._hydrate(stored, primary_only=False)

    async def delete(self, attraction_id: int) -> bool:
        """Delete attraction and its images."""
        if self.store.attractions.pop(attraction_id, None) is None:
            return False
        for image_id in [i.id for i in self.store.images.values() if i.attraction_id == attraction_id]:
            del self.store.images[image_id]
        return True

    async def count(self, published: Optional[bool] = None) -> int:
        return sum(
            1 for a in self.store.attractions.values()
            if published is None or a.is_published == published
        )

    async def count_published_by_category(self) -> List[Tuple[Category, int]]:
        counts: Dict[int, int] = {}
        for attraction in self.store.attractions.values():
            if attraction.is_published:
                counts[attraction.category_id] = counts.get(attraction.category_id, 0) + 1
        grouped = [
            (self.store.categories[category_id], count)
            for category_id, count in counts.items()
            if category_id in self.store.categories
        ]
        grouped.sort(key=lambda pair: pair[0].name)
        return grouped

    async def list_recent(self, limit: int) -> List[Attraction]:
        ordered = sorted(
            self.store.attractions.values(),
            key=lambda a: (self._sort_value(a, "created_at"), a.id),
            reverse=True,
        )
        return [
            replace(a, category=self.store.categories.get(a.category_id), images=[])
            for a in ordered[:limit]
        ]
