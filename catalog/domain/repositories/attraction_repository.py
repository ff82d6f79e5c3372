"""Attraction repository interface - abstraction for data access."""
from abc import ABC, abstractmethod
from typing import List, Optional, Tuple

from catalog.domain.entities.attraction import Attraction
from catalog.domain.entities.category import Category
from catalog.domain.value_objects.attraction_filter import AttractionQuery


class AttractionRepository(ABC):
    """Repository interface for Attraction entity.

    Implementations raise StoreError for any failure of the underlying store.
    """

    @abstractmethod
    async def get_by_id(self, attraction_id: int) -> Optional[Attraction]:
        """Get attraction by ID with category, metro station and all images."""
        pass

    @abstractmethod
    async def search(self, query: AttractionQuery) -> Tuple[List[Attraction], int]:
        """Run a composed query.

        Returns the requested window of attractions (each with category, metro
        station and only its primary image) and the total number of matches
        ignoring the window.
        """
        pass

    @abstractmethod
    async def suggest_by_name(self, text: str, limit: int) -> List[Attraction]:
        """Published attractions whose name contains `text`, ordered by name."""
        pass

    @abstractmethod
    async def create(self, attraction: Attraction) -> Attraction:
        """Create new attraction."""
        pass

    @abstractmethod
    async def update(self, attraction: Attraction) -> Attraction:
        """Update existing attraction."""
        pass

    @abstractmethod
    async def delete(self, attraction_id: int) -> bool:
        """Delete attraction and its image records. Returns False if it did not exist."""
        pass

    @abstractmethod
    async def count(self, published: Optional[bool] = None) -> int:
        """Count attractions, optionally restricted by publication state."""
        pass

    @abstractmethod
    async def count_published_by_category(self) -> List[Tuple[Category, int]]:
        """Published attraction counts grouped by category."""
        pass

    @abstractmethod
    async def list_recent(self, limit: int) -> List[Attraction]:
        """Most recently created attractions, published or not."""
        pass
