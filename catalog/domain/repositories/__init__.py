"""Repository interfaces."""
from catalog.domain.repositories.attraction_repository import AttractionRepository
from catalog.domain.repositories.category_repository import CategoryRepository
from catalog.domain.repositories.metro_station_repository import MetroStationRepository
from catalog.domain.repositories.user_repository import UserRepository

__all__ = [
    "AttractionRepository",
    "CategoryRepository",
    "MetroStationRepository",
    "UserRepository",
]
