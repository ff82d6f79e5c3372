"""Metro station repository interface."""
from abc import ABC, abstractmethod
from typing import List, Optional

from catalog.domain.entities.metro_station import MetroStation


class MetroStationRepository(ABC):

    @abstractmethod
    async def get_by_id(self, station_id: int) -> Optional[MetroStation]:
        pass

    @abstractmethod
    async def list_all(self) -> List[MetroStation]:
        """All stations ordered by name."""
        pass
