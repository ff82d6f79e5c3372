"""In-memory implementation of MetroStationRepository for testing."""
from dataclasses import replace
from typing import List, Optional

from catalog.domain.entities.metro_station import MetroStation
from catalog.domain.repositories.metro_station_repository import MetroStationRepository
from catalog.infrastructure.persistence.repositories.in_memory_store import InMemoryStore


class InMemoryMetroStationRepository(MetroStationRepository):
    """In-memory implementation for testing."""

    def __init__(self, store: Optional[InMemoryStore] = None):
        self.store = store or InMemoryStore()

    def add(self, station: MetroStation) -> MetroStation:
        """Register a station. Stations are reference data with no create operation."""
        if station.id is None:
            station = replace(station, id=self.store.next_id("metro_stations"))
        self.store.metro_stations[station.id] = station
        return station

    async def get_by_id(self, station_id: int) -> Optional[MetroStation]:
        return self.store.metro_stations.get(station_id)

    async def list_all(self) -> List[MetroStation]:
        return sorted(self.store.metro_stations.values(), key=lambda s: s.name)
