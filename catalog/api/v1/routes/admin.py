"""Admin-only catalog routes."""
from fastapi import APIRouter, Depends, Request

from catalog.api.dependencies import require_admin
from catalog.api.v1.routes.attractions import attraction_list_response
from catalog.api.v1.schemas.attraction_schemas import (
    AttractionListResponse,
    CategoryCountSchema,
    RecentAttractionSchema,
    StatisticsResponse,
    StatisticsSchema,
    StatisticsTotalsSchema,
)
from catalog.application.services.attraction_query_builder import normalize
from catalog.application.use_cases.catalog_statistics import GetStatisticsUseCase
from catalog.application.use_cases.search_attractions import SearchAttractionsUseCase
from catalog.core.dependencies import get_search_attractions_use_case, get_statistics_use_case

router = APIRouter(prefix="/admin", tags=["admin"], dependencies=[Depends(require_admin)])


@router.get("/attractions", response_model=AttractionListResponse)
async def list_all_attractions(
    request: Request,
    use_case: SearchAttractionsUseCase = Depends(get_search_attractions_use_case),
):
    """Same search as /attractions, including unpublished drafts."""
    result = await use_case.execute(normalize(dict(request.query_params)), include_unpublished=True)
    return attraction_list_response(result)


@router.get("/statistics", response_model=StatisticsResponse)
async def get_statistics(use_case: GetStatisticsUseCase = Depends(get_statistics_use_case)):
    stats = await use_case.execute()
    return StatisticsResponse(
        statistics=StatisticsSchema(
            totals=StatisticsTotalsSchema(
                attractions=stats.total_attractions,
                published=stats.published_attractions,
                drafts=stats.draft_attractions,
                categories=stats.total_categories,
            ),
            attractions_by_category=[
                CategoryCountSchema.model_validate(c) for c in stats.attractions_by_category
            ],
            recent_attractions=[
                RecentAttractionSchema.model_validate(a) for a in stats.recent_attractions
            ],
        )
    )
