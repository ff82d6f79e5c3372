"""Category repository interface - abstraction for data access."""
from abc import ABC, abstractmethod
from typing import List, Optional

from catalog.domain.entities.category import Category


class CategoryRepository(ABC):
    """Repository interface for Category entity."""

    @abstractmethod
    async def get_by_id(self, category_id: int) -> Optional[Category]:
        """Get category by ID."""
        pass

    @abstractmethod
    async def find_conflicting(self, name: str, slug: str, exclude_id: Optional[int] = None) -> Optional[Category]:
        """Find another category with the same name or slug."""
        pass

    @abstractmethod
    async def list_with_counts(self) -> List[Category]:
        """All categories ordered by name, with `attractions_count` populated."""
        pass

    @abstractmethod
    async def search_by_name(self, text: str, limit: int) -> List[Category]:
        """Categories whose name contains `text`, ordered by name."""
        pass

    @abstractmethod
    async def create(self, category: Category) -> Category:
        """Create new category."""
        pass

    @abstractmethod
    async def update(self, category: Category) -> Category:
        """Update existing category."""
        pass

    @abstractmethod
    async def delete(self, category_id: int) -> bool:
        """Delete category. Returns False if it did not exist."""
        pass

    @abstractmethod
    async def count_all(self) -> int:
        """Count all categories."""
        pass

    @abstractmethod
    async def count_attractions(self, category_id: int) -> int:
        """Count attractions (published or not) in a category."""
        pass
