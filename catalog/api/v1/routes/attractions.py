"""Attraction API routes - thin layer delegating to use cases."""
from dataclasses import asdict

from fastapi import APIRouter, Depends, Query, Request, status

from catalog.api.dependencies import require_admin
from catalog.api.v1.schemas.attraction_schemas import (
    AttractionCreateRequest,
    AttractionListResponse,
    AttractionResponse,
    AttractionSchema,
    AttractionUpdateRequest,
    PaginationSchema,
    SuggestionSchema,
    SuggestionsResponse,
)
from catalog.api.v1.schemas.common import MessageResponse
from catalog.application.dto.attraction_dto import AttractionDraftDTO
from catalog.application.services.attraction_query_builder import normalize
from catalog.application.use_cases.attraction_suggestions import GetSuggestionsUseCase
from catalog.application.use_cases.manage_attractions import (
    CreateAttractionUseCase,
    DeleteAttractionUseCase,
    GetAttractionUseCase,
    UpdateAttractionUseCase,
)
from catalog.application.use_cases.search_attractions import SearchAttractionsUseCase
from catalog.core.dependencies import (
    get_attraction_use_case,
    get_create_attraction_use_case,
    get_delete_attraction_use_case,
    get_search_attractions_use_case,
    get_suggestions_use_case,
    get_update_attraction_use_case,
)
from catalog.domain.entities.user import User
from catalog.domain.value_objects.pagination import PaginationResult

router = APIRouter(tags=["attractions"])


def pagination_schema(result: PaginationResult) -> PaginationSchema:
    return PaginationSchema(
        current_page=result.current_page,
        total_pages=result.total_pages,
        total_items=result.total_items,
        has_next_page=result.has_next_page,
        has_prev_page=result.has_prev_page,
        items_per_page=result.items_per_page,
    )


def attraction_list_response(result: PaginationResult) -> AttractionListResponse:
    if result.total_items:
        message = f"Found {result.total_items} attractions"
    else:
        message = "No attractions found"
    return AttractionListResponse(
        message=message,
        attractions=[AttractionSchema.model_validate(a) for a in result.items],
        pagination=pagination_schema(result),
    )


@router.get("/attractions", response_model=AttractionListResponse)
async def list_attractions(
    request: Request,
    use_case: SearchAttractionsUseCase = Depends(get_search_attractions_use_case),
):
    """
    Search published attractions.

    Query parameters: page, limit, search, category, metro, district,
    accessibility, sort. Blank values are ignored.
    """
    attraction_filter = normalize(dict(request.query_params))
    result = await use_case.execute(attraction_filter)
    return attraction_list_response(result)


@router.get("/attractions/suggestions", response_model=SuggestionsResponse)
async def get_suggestions(
    query: str = Query("", max_length=200),
    use_case: GetSuggestionsUseCase = Depends(get_suggestions_use_case),
):
    """Autocomplete suggestions for the search box."""
    suggestions = await use_case.execute(query)
    return SuggestionsResponse(
        suggestions=[SuggestionSchema(**asdict(s)) for s in suggestions],
    )


@router.get("/attractions/{attraction_id}", response_model=AttractionResponse)
async def get_attraction(
    attraction_id: int,
    use_case: GetAttractionUseCase = Depends(get_attraction_use_case),
):
    attraction = await use_case.execute(attraction_id)
    return AttractionResponse(attraction=AttractionSchema.model_validate(attraction))


@router.post("/attractions", response_model=AttractionResponse, status_code=status.HTTP_201_CREATED)
async def create_attraction(
    body: AttractionCreateRequest,
    admin: User = Depends(require_admin),
    use_case: CreateAttractionUseCase = Depends(get_create_attraction_use_case),
):
    attraction = await use_case.execute(AttractionDraftDTO(**body.model_dump()), admin)
    return AttractionResponse(
        message="Attraction created successfully",
        attraction=AttractionSchema.model_validate(attraction),
    )


@router.put("/attractions/{attraction_id}", response_model=AttractionResponse)
async def update_attraction(
    attraction_id: int,
    body: AttractionUpdateRequest,
    admin: User = Depends(require_admin),
    use_case: UpdateAttractionUseCase = Depends(get_update_attraction_use_case),
):
    """Partial update; the slug is regenerated when the name changes."""
    attraction = await use_case.execute(attraction_id, body.model_dump(exclude_unset=True))
    return AttractionResponse(
        message="Attraction updated successfully",
        attraction=AttractionSchema.model_validate(attraction),
    )


@router.delete("/attractions/{attraction_id}", response_model=MessageResponse)
async def delete_attraction(
    attraction_id: int,
    admin: User = Depends(require_admin),
    use_case: DeleteAttractionUseCase = Depends(get_delete_attraction_use_case),
):
    await use_case.execute(attraction_id)
    return MessageResponse(message="Attraction deleted successfully")
