"""Use cases: read, create, update and delete single attractions."""
import logging
from dataclasses import asdict, replace
from datetime import datetime
from typing import Any, Callable, Dict, Optional

from catalog.application.dto.attraction_dto import AttractionDraftDTO
from catalog.domain.entities.attraction import Attraction, unique_slug
from catalog.domain.entities.user import User
from catalog.domain.errors import FieldError, NotFoundError, PermissionDeniedError, ValidationError
from catalog.domain.repositories.attraction_repository import AttractionRepository
from catalog.domain.repositories.category_repository import CategoryRepository
from catalog.domain.repositories.metro_station_repository import MetroStationRepository

logger = logging.getLogger(__name__)

# Attributes a partial update may change
_UPDATABLE_FIELDS = frozenset(AttractionDraftDTO.__dataclass_fields__)
# Columns that cannot be cleared
_REQUIRED_FIELDS = frozenset({
    "name", "short_description", "full_description", "address", "category_id",
    "wheelchair_accessible", "has_elevator", "has_audio_guide",
    "has_sign_language_support", "is_published",
})


class GetAttractionUseCase:
    """Public attraction detail. Drafts are hidden."""

    def __init__(self, attraction_repository: AttractionRepository):
        self._attraction_repo = attraction_repository

    async def execute(self, attraction_id: int, include_unpublished: bool = False) -> Attraction:
        """Execute use case to get one attraction with all of its images.

        Raises:
            NotFoundError: If no attraction has this id
            PermissionDeniedError: If the attraction is unpublished
        """
        attraction = await self._attraction_repo.get_by_id(attraction_id)
        if not attraction:
            raise NotFoundError(f"Attraction {attraction_id} not found")
        if not attraction.is_published and not include_unpublished:
            raise PermissionDeniedError("Attraction is not published")
        return attraction


class _ReferenceChecks:
    """Category and metro station references must point at existing records."""

    def __init__(
        self,
        category_repository: CategoryRepository,
        metro_station_repository: MetroStationRepository,
    ):
        self._category_repo = category_repository
        self._metro_repo = metro_station_repository

    async def check(self, category_id: Optional[int], metro_station_id: Optional[int]):
        if category_id is not None and not await self._category_repo.get_by_id(category_id):
            raise ValidationError.single("categoryId", "Category does not exist", category_id)
        if metro_station_id is not None and not await self._metro_repo.get_by_id(metro_station_id):
            raise ValidationError.single("metroStationId", "Metro station does not exist", metro_station_id)


class CreateAttractionUseCase:
    def __init__(
        self,
        attraction_repository: AttractionRepository,
        category_repository: CategoryRepository,
        metro_station_repository: MetroStationRepository,
        clock: Callable[[], datetime] = datetime.utcnow,
    ):
        self._attraction_repo = attraction_repository
        self._references = _ReferenceChecks(category_repository, metro_station_repository)
        self._clock = clock

    async def execute(self, draft: AttractionDraftDTO, author: User) -> Attraction:
        await self._references.check(draft.category_id, draft.metro_station_id)
        now = self._clock()
        attraction = Attraction(
            id=None,
            slug=unique_slug(draft.name, now),
            created_by=author.id,
            created_at=now,
            **asdict(draft),
        )
        created = await self._attraction_repo.create(attraction)
        logger.info(f"Attraction {created.id} '{created.name}' created by user {author.id}")
        return created


class UpdateAttractionUseCase:
    def __init__(
        self,
        attraction_repository: AttractionRepository,
        category_repository: CategoryRepository,
        metro_station_repository: MetroStationRepository,
        clock: Callable[[], datetime] = datetime.utcnow,
    ):
        self._attraction_repo = attraction_repository
        self._references = _ReferenceChecks(category_repository, metro_station_repository)
        self._clock = clock

    async def execute(self, attraction_id: int, changes: Dict[str, Any]) -> Attraction:
        """Apply a partial update.

        Args:
            attraction_id: Attraction to change
            changes: Attribute name to new value; only keys present are changed

        Returns:
            The updated attraction
        """
        attraction = await self._attraction_repo.get_by_id(attraction_id)
        if not attraction:
            raise NotFoundError(f"Attraction {attraction_id} not found")
        unknown = set(changes) - _UPDATABLE_FIELDS
        if unknown:
            raise ValidationError.single(sorted(unknown)[0], "Field cannot be updated")
        cleared = sorted(k for k, v in changes.items() if v is None and k in _REQUIRED_FIELDS)
        if cleared:
            raise ValidationError([FieldError(field=k, reason="Field cannot be empty") for k in cleared])
        await self._references.check(changes.get("category_id"), changes.get("metro_station_id"))

        updated = replace(attraction, **{k: v for k, v in changes.items() if k != "name"})
        if changes.get("name") is not None:
            try:
                updated.rename(changes["name"], self._clock())
            except ValueError as e:
                raise ValidationError.single("name", str(e), changes["name"])
        result = await self._attraction_repo.update(updated)
        logger.info(f"Attraction {attraction_id} updated: {sorted(changes)}")
        return result


class DeleteAttractionUseCase:
    def __init__(self, attraction_repository: AttractionRepository):
        self._attraction_repo = attraction_repository

    async def execute(self, attraction_id: int) -> None:
        if not await self._attraction_repo.delete(attraction_id):
            raise NotFoundError(f"Attraction {attraction_id} not found")
        logger.info(f"Attraction {attraction_id} deleted")
