"""Category and metro station API routes."""
from fastapi import APIRouter, Depends, Request, status

from catalog.api.dependencies import require_admin
from catalog.api.v1.routes.attractions import pagination_schema
from catalog.api.v1.schemas.attraction_schemas import AttractionSchema, MetroStationSchema
from catalog.api.v1.schemas.category_schemas import (
    CategoryAttractionsResponse,
    CategoryCreateRequest,
    CategoryListResponse,
    CategoryResponse,
    CategorySchema,
    CategoryUpdateRequest,
    MetroStationListResponse,
    MetroStationResponse,
)
from catalog.api.v1.schemas.common import MessageResponse
from catalog.application.dto.attraction_dto import CategoryDraftDTO
from catalog.application.services.attraction_query_builder import normalize
from catalog.application.use_cases.list_metro_stations import (
    GetMetroStationUseCase,
    ListMetroStationsUseCase,
)
from catalog.application.use_cases.manage_categories import (
    CreateCategoryUseCase,
    DeleteCategoryUseCase,
    GetCategoryUseCase,
    ListCategoriesUseCase,
    UpdateCategoryUseCase,
)
from catalog.application.use_cases.search_attractions import ListCategoryAttractionsUseCase
from catalog.core.dependencies import (
    get_category_attractions_use_case,
    get_category_use_case,
    get_create_category_use_case,
    get_delete_category_use_case,
    get_list_categories_use_case,
    get_list_metro_stations_use_case,
    get_metro_station_use_case,
    get_update_category_use_case,
)
from catalog.domain.entities.user import User

router = APIRouter(tags=["categories"])


@router.get("/categories", response_model=CategoryListResponse)
async def list_categories(use_case: ListCategoriesUseCase = Depends(get_list_categories_use_case)):
    """All categories with their attraction counts, sorted by name."""
    categories = await use_case.execute()
    return CategoryListResponse(
        message="Categories retrieved successfully",
        categories=[CategorySchema.model_validate(c) for c in categories],
    )


@router.get("/categories/{category_id}", response_model=CategoryResponse)
async def get_category(
    category_id: int,
    use_case: GetCategoryUseCase = Depends(get_category_use_case),
):
    category = await use_case.execute(category_id)
    return CategoryResponse(
        message="Category retrieved successfully",
        category=CategorySchema.model_validate(category),
    )


@router.get("/categories/{category_id}/attractions", response_model=CategoryAttractionsResponse)
async def list_category_attractions(
    category_id: int,
    request: Request,
    use_case: ListCategoryAttractionsUseCase = Depends(get_category_attractions_use_case),
):
    """Published attractions of one category; accepts the same query parameters as /attractions."""
    category, result = await use_case.execute(category_id, normalize(dict(request.query_params)))
    return CategoryAttractionsResponse(
        message=f'Attractions of category "{category.name}" retrieved successfully',
        category=CategorySchema.model_validate(category),
        attractions=[AttractionSchema.model_validate(a) for a in result.items],
        pagination=pagination_schema(result),
    )


@router.post("/categories", response_model=CategoryResponse, status_code=status.HTTP_201_CREATED)
async def create_category(
    body: CategoryCreateRequest,
    admin: User = Depends(require_admin),
    use_case: CreateCategoryUseCase = Depends(get_create_category_use_case),
):
    category = await use_case.execute(CategoryDraftDTO(**body.model_dump()))
    return CategoryResponse(
        message="Category created successfully",
        category=CategorySchema.model_validate(category),
    )


@router.put("/categories/{category_id}", response_model=CategoryResponse)
async def update_category(
    category_id: int,
    body: CategoryUpdateRequest,
    admin: User = Depends(require_admin),
    use_case: UpdateCategoryUseCase = Depends(get_update_category_use_case),
):
    category = await use_case.execute(category_id, body.model_dump(exclude_unset=True))
    return CategoryResponse(
        message="Category updated successfully",
        category=CategorySchema.model_validate(category),
    )


@router.delete("/categories/{category_id}", response_model=MessageResponse)
async def delete_category(
    category_id: int,
    admin: User = Depends(require_admin),
    use_case: DeleteCategoryUseCase = Depends(get_delete_category_use_case),
):
    """Delete a category. Refused while any attraction still uses it."""
    await use_case.execute(category_id)
    return MessageResponse(message="Category deleted successfully")


@router.get("/metro-stations", response_model=MetroStationListResponse, tags=["metro-stations"])
async def list_metro_stations(
    use_case: ListMetroStationsUseCase = Depends(get_list_metro_stations_use_case),
):
    stations = await use_case.execute()
    return MetroStationListResponse(
        metro_stations=[MetroStationSchema.model_validate(s) for s in stations],
    )


@router.get("/metro-stations/{station_id}", response_model=MetroStationResponse, tags=["metro-stations"])
async def get_metro_station(
    station_id: int,
    use_case: GetMetroStationUseCase = Depends(get_metro_station_use_case),
):
    station = await use_case.execute(station_id)
    return MetroStationResponse(metro_station=MetroStationSchema.model_validate(station))
