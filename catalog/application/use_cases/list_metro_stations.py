"""Use cases: metro station reference data."""
from typing import List

from catalog.domain.entities.metro_station import MetroStation
from catalog.domain.errors import NotFoundError
from catalog.domain.repositories.metro_station_repository import MetroStationRepository


class ListMetroStationsUseCase:
    def __init__(self, metro_station_repository: MetroStationRepository):
        self._metro_repo = metro_station_repository

    async def execute(self) -> List[MetroStation]:
        return await self._metro_repo.list_all()


class GetMetroStationUseCase:
    def __init__(self, metro_station_repository: MetroStationRepository):
        self._metro_repo = metro_station_repository

    async def execute(self, station_id: int) -> MetroStation:
        station = await self._metro_repo.get_by_id(station_id)
        if not station:
            raise NotFoundError(f"Metro station {station_id} not found")
        return station
