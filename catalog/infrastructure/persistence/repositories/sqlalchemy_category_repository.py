"""SQLAlchemy implementation of CategoryRepository."""
import logging
from datetime import datetime
from typing import List, Optional

from sqlalchemy import func, or_
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from catalog.domain.entities.category import Category as CategoryEntity
from catalog.domain.errors import NotFoundError, StoreError
from catalog.domain.repositories.category_repository import CategoryRepository
from catalog.infrastructure.persistence import models
from catalog.infrastructure.persistence.repositories.sqlalchemy_attraction_repository import (
    category_to_entity as _to_entity,
    like_pattern,
)

logger = logging.getLogger(__name__)


class SQLAlchemyCategoryRepository(CategoryRepository):
    """Category repository using SQLAlchemy."""

    def __init__(self, session: Session):
        self.session = session

    def _fail(self, action: str, error: SQLAlchemyError) -> StoreError:
        self.session.rollback()
        logger.error(f"Category store failure while {action}: {error}")
        return StoreError(f"Failed while {action}")

    async def get_by_id(self, category_id: int) -> Optional[CategoryEntity]:
        try:
            row = self.session.get(models.Category, category_id)
        except SQLAlchemyError as e:
            raise self._fail("loading category", e)
        return _to_entity(row) if row else None

    async def find_conflicting(self, name: str, slug: str, exclude_id: Optional[int] = None) -> Optional[CategoryEntity]:
        try:
            q = self.session.query(models.Category).filter(
                or_(func.lower(models.Category.name) == name.lower(), models.Category.slug == slug)
            )
            if exclude_id is not None:
                q = q.filter(models.Category.id != exclude_id)
            row = q.first()
        except SQLAlchemyError as e:
            raise self._fail("checking category uniqueness", e)
        return _to_entity(row) if row else None

    async def list_with_counts(self) -> List[CategoryEntity]:
        try:
            rows = (
                self.session.query(models.Category, func.count(models.Attraction.id).label("count"))
                .outerjoin(models.Attraction, models.Category.id == models.Attraction.category_id)
                .group_by(models.Category.id)
                .order_by(models.Category.name)
                .all()
            )
        except SQLAlchemyError as e:
            raise self._fail("listing categories", e)
        categories = []
        for row, count in rows:
            category = _to_entity(row)
            category.attractions_count = count
            categories.append(category)
        return categories

    async def search_by_name(self, text: str, limit: int) -> List[CategoryEntity]:
        try:
            rows = (
                self.session.query(models.Category)
                .filter(models.Category.name.ilike(like_pattern(text), escape="\\"))
                .order_by(models.Category.name)
                .limit(limit)
                .all()
            )
        except SQLAlchemyError as e:
            raise self._fail("searching categories", e)
        return [_to_entity(row) for row in rows]

    async def create(self, category: CategoryEntity) -> CategoryEntity:
        now = datetime.utcnow()
        row = models.Category(
            name=category.name,
            slug=category.slug,
            description=category.description,
            color=category.color,
            created_at=now,
            updated_at=now,
        )
        try:
            self.session.add(row)
            self.session.commit()
            self.session.refresh(row)
        except SQLAlchemyError as e:
            raise self._fail("creating category", e)
        return _to_entity(row)

    async def update(self, category: CategoryEntity) -> CategoryEntity:
        try:
            row = self.session.get(models.Category, category.id)
            if not row:
                raise NotFoundError(f"Category {category.id} not found")
            row.name = category.name
            row.slug = category.slug
            row.description = category.description
            row.color = category.color
            row.updated_at = datetime.utcnow()
            self.session.commit()
            self.session.refresh(row)
        except SQLAlchemyError as e:
            raise self._fail("updating category", e)
        return _to_entity(row)

    async def delete(self, category_id: int) -> bool:
        try:
            row = self.session.get(models.Category, category_id)
            if not row:
                return False
            self.session.delete(row)
            self.session.commit()
        except SQLAlchemyError as e:
            raise self._fail("deleting category", e)
        return True

    async def count_all(self) -> int:
        try:
            return self.session.query(func.count(models.Category.id)).scalar() or 0
        except SQLAlchemyError as e:
            raise self._fail("counting categories", e)

    async def count_attractions(self, category_id: int) -> int:
        try:
            return (
                self.session.query(func.count(models.Attraction.id))
                .filter(models.Attraction.category_id == category_id)
                .scalar()
            ) or 0
        except SQLAlchemyError as e:
            raise self._fail("counting category attractions", e)
