"""Use case: admin dashboard statistics."""
from catalog.application.dto.attraction_dto import CategoryCountDTO, StatisticsDTO
from catalog.config import settings
from catalog.domain.repositories.attraction_repository import AttractionRepository
from catalog.domain.repositories.category_repository import CategoryRepository


class GetStatisticsUseCase:
    def __init__(
        self,
        attraction_repository: AttractionRepository,
        category_repository: CategoryRepository,
    ):
        self._attraction_repo = attraction_repository
        self._category_repo = category_repository

    async def execute(self) -> StatisticsDTO:
        total = await self._attraction_repo.count()
        published = await self._attraction_repo.count(published=True)
        by_category = await self._attraction_repo.count_published_by_category()
        return StatisticsDTO(
            total_attractions=total,
            published_attractions=published,
            draft_attractions=total - published,
            total_categories=await self._category_repo.count_all(),
            attractions_by_category=[
                CategoryCountDTO(id=c.id, name=c.name, color=c.color, count=count)
                for c, count in by_category
            ],
            recent_attractions=await self._attraction_repo.list_recent(settings.RECENT_ATTRACTIONS_LIMIT),
        )
