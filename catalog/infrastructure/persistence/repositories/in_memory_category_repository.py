"""In-memory implementation of CategoryRepository for testing."""
from dataclasses import replace
from datetime import datetime
from typing import List, Optional

from catalog.domain.entities.category import Category
from catalog.domain.errors import NotFoundError
from catalog.domain.repositories.category_repository import CategoryRepository
from catalog.infrastructure.persistence.repositories.in_memory_store import InMemoryStore, contains


class InMemoryCategoryRepository(CategoryRepository):
    """In-memory implementation for testing."""

    def __init__(self, store: Optional[InMemoryStore] = None):
        self.store = store or InMemoryStore()

    async def get_by_id(self, category_id: int) -> Optional[Category]:
        return self.store.categories.get(category_id)

    async def find_conflicting(self, name: str, slug: str, exclude_id: Optional[int] = None) -> Optional[Category]:
        for category in self.store.categories.values():
            if category.id == exclude_id:
                continue
            if category.name.lower() == name.lower() or category.slug == slug:
                return category
        return None

    async def list_with_counts(self) -> List[Category]:
        categories = [
            replace(category, attractions_count=await self.count_attractions(category.id))
            for category in self.store.categories.values()
        ]
        categories.sort(key=lambda c: c.name)
        return categories

    async def search_by_name(self, text: str, limit: int) -> List[Category]:
        matched = [c for c in self.store.categories.values() if contains(c.name, text)]
        matched.sort(key=lambda c: c.name)
        return matched[:limit]

    async def create(self, category: Category) -> Category:
        now = datetime.utcnow()
        stored = replace(category, id=self.store.next_id("categories"), created_at=now, updated_at=now)
        self.store.categories[stored.id] = stored
        return stored

    async def update(self, category: Category) -> Category:
        existing = self.store.categories.get(category.id)
        if existing is None:
            raise NotFoundError(f"Category {category.id} not found")
        stored = replace(category, created_at=existing.created_at, updated_at=datetime.utcnow())
        self.store.categories[stored.id] = stored
        return stored

    async def delete(self, category_id: int) -> bool:
        return self.store.categories.pop(category_id, None) is not None

    async def count_all(self) -> int:
        return len(self.store.categories)

    async def count_attractions(self, category_id: int) -> int:
        return sum(1 for a in self.store.attractions.values() if a.category_id == category_id)
