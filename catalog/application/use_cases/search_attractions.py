"""Use case: search, filter and paginate attractions."""
import logging
from dataclasses import replace

from catalog.application.services.attraction_query_builder import build_query
from catalog.domain.entities.attraction import Attraction
from catalog.domain.errors import NotFoundError
from catalog.domain.repositories.attraction_repository import AttractionRepository
from catalog.domain.repositories.category_repository import CategoryRepository
from catalog.domain.value_objects.attraction_filter import AttractionFilter
from catalog.domain.value_objects.pagination import PaginationResult

logger = logging.getLogger(__name__)


class SearchAttractionsUseCase:
    """Run one page of an attraction search.

    Public callers only ever see published attractions; `include_unpublished`
    exists for the admin listing.
    """

    def __init__(self, attraction_repository: AttractionRepository):
        self._attraction_repo = attraction_repository

    async def execute(
        self,
        attraction_filter: AttractionFilter,
        include_unpublished: bool = False,
    ) -> PaginationResult[Attraction]:
        """Execute use case to search attractions.

        Args:
            attraction_filter: Normalized filter from the query string
            include_unpublished: Include drafts (admin listing only)

        Returns:
            PaginationResult with the attractions of the requested page
        """
        query = build_query(attraction_filter, include_unpublished=include_unpublished)
        items, total = await self._attraction_repo.search(query)
        logger.debug(
            f"Attraction search page={attraction_filter.page} limit={attraction_filter.limit} "
            f"matched={total}"
        )
        return PaginationResult(
            items=items,
            current_page=attraction_filter.page,
            total_items=total,
            items_per_page=attraction_filter.limit,
        )


class ListCategoryAttractionsUseCase:
    """Search restricted to one category; the category must exist."""

    def __init__(
        self,
        attraction_repository: AttractionRepository,
        category_repository: CategoryRepository,
    ):
        self._search = SearchAttractionsUseCase(attraction_repository)
        self._category_repo = category_repository

    async def execute(self, category_id: int, attraction_filter: AttractionFilter):
        category = await self._category_repo.get_by_id(category_id)
        if not category:
            raise NotFoundError(f"Category {category_id} not found")
        result = await self._search.execute(
            replace(attraction_filter, category_id=category_id)
        )
        return category, result
