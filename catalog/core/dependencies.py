"""Dependency injection for FastAPI routes.

Each request gets its own SQLAlchemy session; repositories and use cases are
built on top of it. Tests override `get_db` or the repository providers.
"""
from fastapi import Depends
from sqlalchemy.orm import Session

from catalog.application.ports.notifications import PasswordResetNotifier
from catalog.application.use_cases.attraction_suggestions import GetSuggestionsUseCase
from catalog.application.use_cases.authenticate_user import (
    GetCurrentUserUseCase,
    LoginUserUseCase,
    RegisterUserUseCase,
)
from catalog.application.use_cases.catalog_statistics import GetStatisticsUseCase
from catalog.application.use_cases.list_metro_stations import (
    GetMetroStationUseCase,
    ListMetroStationsUseCase,
)
from catalog.application.use_cases.manage_attractions import (
    CreateAttractionUseCase,
    DeleteAttractionUseCase,
    GetAttractionUseCase,
    UpdateAttractionUseCase,
)
from catalog.application.use_cases.manage_categories import (
    CreateCategoryUseCase,
    DeleteCategoryUseCase,
    GetCategoryUseCase,
    ListCategoriesUseCase,
    UpdateCategoryUseCase,
)
from catalog.application.use_cases.password_reset import (
    ConsumePasswordResetUseCase,
    RequestPasswordResetUseCase,
    ValidateResetTokenUseCase,
)
from catalog.application.use_cases.search_attractions import (
    ListCategoryAttractionsUseCase,
    SearchAttractionsUseCase,
)
from catalog.domain.repositories import (
    AttractionRepository,
    CategoryRepository,
    MetroStationRepository,
    UserRepository,
)
from catalog.infrastructure.email.notifiers import CeleryPasswordResetNotifier
from catalog.infrastructure.persistence.db import get_db
from catalog.infrastructure.persistence.repositories.sqlalchemy_attraction_repository import (
    SQLAlchemyAttractionRepository,
)
from catalog.infrastructure.persistence.repositories.sqlalchemy_category_repository import (
    SQLAlchemyCategoryRepository,
)
from catalog.infrastructure.persistence.repositories.sqlalchemy_metro_station_repository import (
    SQLAlchemyMetroStationRepository,
)
from catalog.infrastructure.persistence.repositories.sqlalchemy_user_repository import (
    SQLAlchemyUserRepository,
)


# ----- Repositories -----

def get_attraction_repository(db: Session = Depends(get_db)) -> AttractionRepository:
    return SQLAlchemyAttractionRepository(db)


def get_category_repository(db: Session = Depends(get_db)) -> CategoryRepository:
    return SQLAlchemyCategoryRepository(db)


def get_metro_station_repository(db: Session = Depends(get_db)) -> MetroStationRepository:
    return SQLAlchemyMetroStationRepository(db)


def get_user_repository(db: Session = Depends(get_db)) -> UserRepository:
    return SQLAlchemyUserRepository(db)


def get_password_reset_notifier() -> PasswordResetNotifier:
    return CeleryPasswordResetNotifier()


# ----- Attractions -----

def get_search_attractions_use_case(
    attraction_repo: AttractionRepository = Depends(get_attraction_repository),
) -> SearchAttractionsUseCase:
    return SearchAttractionsUseCase(attraction_repo)


def get_category_attractions_use_case(
    attraction_repo: AttractionRepository = Depends(get_attraction_repository),
    category_repo: CategoryRepository = Depends(get_category_repository),
) -> ListCategoryAttractionsUseCase:
    return ListCategoryAttractionsUseCase(attraction_repo, category_repo)


def get_attraction_use_case(
    attraction_repo: AttractionRepository = Depends(get_attraction_repository),
) -> GetAttractionUseCase:
    return GetAttractionUseCase(attraction_repo)


def get_create_attraction_use_case(
    attraction_repo: AttractionRepository = Depends(get_attraction_repository),
    category_repo: CategoryRepository = Depends(get_category_repository),
    metro_repo: MetroStationRepository = Depends(get_metro_station_repository),
) -> CreateAttractionUseCase:
    return CreateAttractionUseCase(attraction_repo, category_repo, metro_repo)


def get_update_attraction_use_case(
    attraction_repo: AttractionRepository = Depends(get_attraction_repository),
    category_repo: CategoryRepository = Depends(get_category_repository),
    metro_repo: MetroStationRepository = Depends(get_metro_station_repository),
) -> UpdateAttractionUseCase:
    return UpdateAttractionUseCase(attraction_repo, category_repo, metro_repo)


def get_delete_attraction_use_case(
    attraction_repo: AttractionRepository = Depends(get_attraction_repository),
) -> DeleteAttractionUseCase:
    return DeleteAttractionUseCase(attraction_repo)


def get_suggestions_use_case(
    attraction_repo: AttractionRepository = Depends(get_attraction_repository),
    category_repo: CategoryRepository = Depends(get_category_repository),
) -> GetSuggestionsUseCase:
    return GetSuggestionsUseCase(attraction_repo, category_repo)


def get_statistics_use_case(
    attraction_repo: AttractionRepository = Depends(get_attraction_repository),
    category_repo: CategoryRepository = Depends(get_category_repository),
) -> GetStatisticsUseCase:
    return GetStatisticsUseCase(attraction_repo, category_repo)


# ----- Categories -----

def get_list_categories_use_case(
    category_repo: CategoryRepository = Depends(get_category_repository),
) -> ListCategoriesUseCase:
    return ListCategoriesUseCase(category_repo)


def get_category_use_case(
    category_repo: CategoryRepository = Depends(get_category_repository),
) -> GetCategoryUseCase:
    return GetCategoryUseCase(category_repo)


def get_create_category_use_case(
    category_repo: CategoryRepository = Depends(get_category_repository),
) -> CreateCategoryUseCase:
    return CreateCategoryUseCase(category_repo)


def get_update_category_use_case(
    category_repo: CategoryRepository = Depends(get_category_repository),
) -> UpdateCategoryUseCase:
    return UpdateCategoryUseCase(category_repo)


def get_delete_category_use_case(
    category_repo: CategoryRepository = Depends(get_category_repository),
) -> DeleteCategoryUseCase:
    return DeleteCategoryUseCase(category_repo)


# ----- Metro stations -----

def get_list_metro_stations_use_case(
    metro_repo: MetroStationRepository = Depends(get_metro_station_repository),
) -> ListMetroStationsUseCase:
    return ListMetroStationsUseCase(metro_repo)


def get_metro_station_use_case(
    metro_repo: MetroStationRepository = Depends(get_metro_station_repository),
) -> GetMetroStationUseCase:
    return GetMetroStationUseCase(metro_repo)


# ----- Auth -----

def get_register_user_use_case(
    user_repo: UserRepository = Depends(get_user_repository),
) -> RegisterUserUseCase:
    return RegisterUserUseCase(user_repo)


def get_login_user_use_case(
    user_repo: UserRepository = Depends(get_user_repository),
) -> LoginUserUseCase:
    return LoginUserUseCase(user_repo)


def get_current_user_use_case(
    user_repo: UserRepository = Depends(get_user_repository),
) -> GetCurrentUserUseCase:
    return GetCurrentUserUseCase(user_repo)


def get_request_password_reset_use_case(
    user_repo: UserRepository = Depends(get_user_repository),
    notifier: PasswordResetNotifier = Depends(get_password_reset_notifier),
) -> RequestPasswordResetUseCase:
    return RequestPasswordResetUseCase(user_repo, notifier)


def get_validate_reset_token_use_case(
    user_repo: UserRepository = Depends(get_user_repository),
) -> ValidateResetTokenUseCase:
    return ValidateResetTokenUseCase(user_repo)


def get_consume_password_reset_use_case(
    user_repo: UserRepository = Depends(get_user_repository),
) -> ConsumePasswordResetUseCase:
    return ConsumePasswordResetUseCase(user_repo)
