"""Use cases: category listing and administration."""
import logging
from dataclasses import replace
from typing import Any, Dict, List

from catalog.application.dto.attraction_dto import CategoryDraftDTO
from catalog.config import settings
from catalog.domain.entities.attraction import slugify
from catalog.domain.entities.category import Category
from catalog.domain.errors import ConflictError, NotFoundError, ValidationError
from catalog.domain.repositories.category_repository import CategoryRepository

logger = logging.getLogger(__name__)


class ListCategoriesUseCase:
    def __init__(self, category_repository: CategoryRepository):
        self._category_repo = category_repository

    async def execute(self) -> List[Category]:
        return await self._category_repo.list_with_counts()


class GetCategoryUseCase:
    def __init__(self, category_repository: CategoryRepository):
        self._category_repo = category_repository

    async def execute(self, category_id: int) -> Category:
        category = await self._category_repo.get_by_id(category_id)
        if not category:
            raise NotFoundError(f"Category {category_id} not found")
        return category


class CreateCategoryUseCase:
    """Create a category with a slug derived from its name."""

    def __init__(self, category_repository: CategoryRepository):
        self._category_repo = category_repository

    async def execute(self, draft: CategoryDraftDTO) -> Category:
        name = draft.name.strip()
        slug = slugify(name)
        if not slug:
            raise ValidationError.single("name", "Name must contain letters or digits", draft.name)
        if await self._category_repo.find_conflicting(name, slug):
            raise ConflictError(f"Category '{name}' already exists")
        category = Category(
            id=None,
            name=name,
            slug=slug,
            description=draft.description,
            color=draft.color or settings.DEFAULT_CATEGORY_COLOR,
        )
        if not category.is_valid():
            raise ValidationError.single("name", "Invalid category", draft.name)
        created = await self._category_repo.create(category)
        logger.info(f"Category {created.id} '{created.name}' created")
        return created


class UpdateCategoryUseCase:
    def __init__(self, category_repository: CategoryRepository):
        self._category_repo = category_repository

    async def execute(self, category_id: int, changes: Dict[str, Any]) -> Category:
        category = await self._category_repo.get_by_id(category_id)
        if not category:
            raise NotFoundError(f"Category {category_id} not found")
        category = replace(category)

        if changes.get("name") is not None:
            name = changes["name"].strip()
            slug = slugify(name)
            if not slug:
                raise ValidationError.single("name", "Name must contain letters or digits", changes["name"])
            if await self._category_repo.find_conflicting(name, slug, exclude_id=category_id):
                raise ConflictError(f"Category '{name}' already exists")
            category.name = name
            category.slug = slug
        if "description" in changes:
            category.description = changes["description"]
        if changes.get("color") is not None:
            category.color = changes["color"]

        if not category.is_valid():
            raise ValidationError.single("name", "Invalid category", category.name)
        return await self._category_repo.update(category)


class DeleteCategoryUseCase:
    """Delete a category that no attraction refers to."""

    def __init__(self, category_repository: CategoryRepository):
        self._category_repo = category_repository

    async def execute(self, category_id: int) -> None:
        category = await self._category_repo.get_by_id(category_id)
        if not category:
            raise NotFoundError(f"Category {category_id} not found")
        in_use = await self._category_repo.count_attractions(category_id)
        if in_use:
            raise ConflictError(f"Category {category_id} still has {in_use} attractions")
        await self._category_repo.delete(category_id)
        logger.info(f"Category {category_id} deleted")
