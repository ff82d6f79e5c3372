"""Use case: search-box suggestions across attractions and categories."""
from typing import List

from catalog.application.dto.attraction_dto import SuggestionDTO
from catalog.config import settings
from catalog.domain.repositories.attraction_repository import AttractionRepository
from catalog.domain.repositories.category_repository import CategoryRepository


class GetSuggestionsUseCase:
    """Attraction name matches first, then category name matches."""

    def __init__(
        self,
        attraction_repository: AttractionRepository,
        category_repository: CategoryRepository,
    ):
        self._attraction_repo = attraction_repository
        self._category_repo = category_repository

    async def execute(self, text: str) -> List[SuggestionDTO]:
        text = (text or "").strip()
        if len(text) < settings.SEARCH_SUGGESTIONS_MIN_QUERY:
            return []
        text = text[:settings.SEARCH_MAX_LENGTH]

        attractions = await self._attraction_repo.suggest_by_name(
            text, settings.SEARCH_SUGGESTIONS_ATTRACTIONS_LIMIT
        )
        categories = await self._category_repo.search_by_name(
            text, settings.SEARCH_SUGGESTIONS_CATEGORIES_LIMIT
        )
        suggestions = [
            SuggestionDTO(
                type="attraction",
                id=a.id,
                name=a.name,
                slug=a.slug,
                category=a.category.name if a.category else None,
            )
            for a in attractions
        ]
        suggestions.extend(
            SuggestionDTO(type="category", id=c.id, name=c.name, slug=c.slug)
            for c in categories
        )
        return suggestions
