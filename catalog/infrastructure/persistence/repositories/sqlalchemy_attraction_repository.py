"""SQLAlchemy implementation of AttractionRepository."""
import logging
from datetime import datetime
from typing import Dict, List, Optional, Tuple

from sqlalchemy import func, or_
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, joinedload, selectinload

from catalog.domain.entities.attraction import Attraction as AttractionEntity
from catalog.domain.entities.category import Category as CategoryEntity
from catalog.domain.entities.image import Image as ImageEntity
from catalog.domain.entities.metro_station import MetroStation as MetroStationEntity
from catalog.domain.errors import NotFoundError, StoreError
from catalog.domain.repositories.attraction_repository import AttractionRepository
from catalog.domain.value_objects.attraction_filter import AttractionQuery
from catalog.infrastructure.persistence import models

logger = logging.getLogger(__name__)

# Attraction fields copied verbatim between the entity and the ORM row
_SCALAR_FIELDS = (
    "name",
    "slug",
    "short_description",
    "full_description",
    "address",
    "district",
    "latitude",
    "longitude",
    "working_hours",
    "ticket_price",
    "website",
    "phone",
    "distance_to_metro",
    "wheelchair_accessible",
    "has_elevator",
    "has_audio_guide",
    "has_sign_language_support",
    "accessibility_notes",
    "is_published",
    "category_id",
    "metro_station_id",
    "created_by",
)

_ORDER_COLUMNS = {
    "id": models.Attraction.id,
    "name": models.Attraction.name,
    "created_at": models.Attraction.created_at,
    "category_id": models.Attraction.category_id,
}


def like_pattern(text: str) -> str:
    """Substring LIKE pattern with the wildcard characters of `text` escaped."""
    escaped = text.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
    return f"%{escaped}%"


def category_to_entity(row: models.Category) -> CategoryEntity:
    return CategoryEntity(
        id=row.id,
        name=row.name,
        slug=row.slug,
        description=row.description,
        color=row.color,
        created_at=row.created_at,
        updated_at=row.updated_at,
    )


def metro_station_to_entity(row: models.MetroStation) -> MetroStationEntity:
    return MetroStationEntity(
        id=row.id,
        name=row.name,
        line_color=row.line_color,
        line_name=row.line_name,
    )


def _image_to_entity(row: models.Image) -> ImageEntity:
    return ImageEntity(
        id=row.id,
        attraction_id=row.attraction_id,
        filename=row.filename,
        path=row.path,
        alt_text=row.alt_text,
        is_primary=bool(row.is_primary),
        created_at=row.created_at,
    )


def _to_entity(row: models.Attraction, images: Optional[List[models.Image]] = None) -> AttractionEntity:
    """Map ORM model to domain entity.

    `images` overrides the row's loaded image collection; listings pass only
    the primary image.
    """
    image_rows = row.images if images is None else images
    # Primary image first, then upload order
    image_rows = sorted(image_rows, key=lambda image: (not image.is_primary, image.id))
    return AttractionEntity(
        id=row.id,
        created_at=row.created_at,
        updated_at=row.updated_at,
        category=category_to_entity(row.category) if row.category else None,
        metro_station=metro_station_to_entity(row.metro_station) if row.metro_station else None,
        images=[_image_to_entity(image) for image in image_rows],
        **{name: getattr(row, name) for name in _SCALAR_FIELDS},
    )


class SQLAlchemyAttractionRepository(AttractionRepository):
    """Attraction repository using SQLAlchemy."""

    def __init__(self, session: Session):
        self.session = session

    def _fail(self, action: str, error: SQLAlchemyError) -> StoreError:
        self.session.rollback()
        logger.error(f"Attraction store failure while {action}: {error}")
        return StoreError(f"Failed while {action}")

    def _filtered(self, query: AttractionQuery):
        """Apply the conjunctive predicate of `query`, without ordering or window."""
        q = self.session.query(models.Attraction)
        if query.published_only:
            q = q.filter(models.Attraction.is_published.is_(True))
        if query.category_id is not None:
            q = q.filter(models.Attraction.category_id == query.category_id)
        if query.metro_station_id is not None:
            q = q.filter(models.Attraction.metro_station_id == query.metro_station_id)
        if query.district:
            q = q.filter(models.Attraction.district.ilike(like_pattern(query.district), escape="\\"))
        if query.search_text:
            pattern = like_pattern(query.search_text)
            q = q.filter(
                or_(
                    models.Attraction.name.ilike(pattern, escape="\\"),
                    models.Attraction.short_description.ilike(pattern, escape="\\"),
                    models.Attraction.full_description.ilike(pattern, escape="\\"),
                )
            )
        for feature in query.required_features:
            q = q.filter(getattr(models.Attraction, feature).is_(True))
        return q

    def _primary_images(self, attraction_ids: List[int]) -> Dict[int, List[models.Image]]:
        if not attraction_ids:
            return {}
        rows = (
            self.session.query(models.Image)
            .filter(
                models.Image.attraction_id.in_(attraction_ids),
                models.Image.is_primary.is_(True),
            )
            .order_by(models.Image.id)
            .all()
        )
        by_attraction: Dict[int, List[models.Image]] = {}
        for image in rows:
            # Exactly one primary image per attraction, even if several are flagged
            by_attraction.setdefault(image.attraction_id, [image])
        return by_attraction

    async def get_by_id(self, attraction_id: int) -> Optional[AttractionEntity]:
        try:
            row = (
                self.session.query(models.Attraction)
                .options(
                    joinedload(models.Attraction.category),
                    joinedload(models.Attraction.metro_station),
                    selectinload(models.Attraction.images),
                )
                .filter(models.Attraction.id == attraction_id)
                .first()
            )
        except SQLAlchemyError as e:
            raise self._fail("loading attraction", e)
        return _to_entity(row) if row else None

    async def search(self, query: AttractionQuery) -> Tuple[List[AttractionEntity], int]:
        try:
            filtered = self._filtered(query)
            total = filtered.order_by(None).count()
            order_by = []
            for key in query.ordering:
                column = _ORDER_COLUMNS[key.field]
                order_by.append(column.desc() if key.descending else column.asc())
            rows = (
                filtered
                .options(
                    joinedload(models.Attraction.category),
                    joinedload(models.Attraction.metro_station),
                )
                .order_by(*order_by)
                .offset(query.offset)
                .limit(query.limit)
                .all()
            )
            images = self._primary_images([row.id for row in rows])
        except SQLAlchemyError as e:
            raise self._fail("searching attractions", e)
        return [_to_entity(row, images.get(row.id, [])) for row in rows], total

    async def suggest_by_name(self, text: str, limit: int) -> List[AttractionEntity]:
        try:
            rows = (
                self.session.query(models.Attraction)
                .filter(
                    models.Attraction.is_published.is_(True),
                    models.Attraction.name.ilike(like_pattern(text), escape="\\"),
                )
                .order_by(models.Attraction.name.asc(), models.Attraction.id.asc())
                .limit(limit)
                .all()
            )
        except SQLAlchemyError as e:
            raise self._fail("loading suggestions", e)
        return [_to_entity(row, []) for row in rows]

    async def create(self, attraction: AttractionEntity) -> AttractionEntity:
        now = datetime.utcnow()
        row = models.Attraction(
            created_at=attraction.created_at or now,
            updated_at=now,
            **{name: getattr(attraction, name) for name in _SCALAR_FIELDS},
        )
        try:
            self.session.add(row)
            self.session.commit()
        except SQLAlchemyError as e:
            raise self._fail("creating attraction", e)
        return await self.get_by_id(row.id)

    async def update(self, attraction: AttractionEntity) -> AttractionEntity:
        try:
            row = self.session.get(models.Attraction, attraction.id)
            if not row:
                raise NotFoundError(f"Attraction {attraction.id} not found")
            for name in _SCALAR_FIELDS:
                setattr(row, name, getattr(attraction, name))
            row.updated_at = datetime.utcnow()
            self.session.commit()
        except SQLAlchemyError as e:
            raise self._fail("updating attraction", e)
        return await self.get_by_id(attraction.id)

    async def delete(self, attraction_id: int) -> bool:
        try:
            row = self.session.get(models.Attraction, attraction_id)
            if not row:
                return False
            self.session.delete(row)
            self.session.commit()
        except SQLAlchemyError as e:
            raise self._fail("deleting attraction", e)
        return True

    async def count(self, published: Optional[bool] = None) -> int:
        try:
            q = self.session.query(func.count(models.Attraction.id))
            if published is not None:
                q = q.filter(models.Attraction.is_published.is_(published))
            return q.scalar() or 0
        except SQLAlchemyError as e:
            raise self._fail("counting attractions", e)

    async def count_published_by_category(self) -> List[Tuple[CategoryEntity, int]]:
        try:
            rows = (
                self.session.query(models.Category, func.count(models.Attraction.id).label("count"))
                .join(models.Attraction, models.Attraction.category_id == models.Category.id)
                .filter(models.Attraction.is_published.is_(True))
                .group_by(models.Category.id)
                .order_by(models.Category.name)
                .all()
            )
        except SQLAlchemyError as e:
            raise self._fail("grouping attractions by category", e)
        return [(category_to_entity(category), count) for category, count in rows]

    async def list_recent(self, limit: int) -> List[AttractionEntity]:
        try:
            rows = (
                self.session.query(models.Attraction)
                .options(joinedload(models.Attraction.category))
                .order_by(models.Attraction.created_at.desc(), models.Attraction.id.desc())
                .limit(limit)
                .all()
            )
        except SQLAlchemyError as e:
            raise self._fail("loading recent attractions", e)
        return [_to_entity(row, []) for row in rows]
