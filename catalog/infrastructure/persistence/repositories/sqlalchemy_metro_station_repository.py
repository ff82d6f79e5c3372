"""SQLAlchemy implementation of MetroStationRepository."""
import logging
from typing import List, Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from catalog.domain.entities.metro_station import MetroStation as MetroStationEntity
from catalog.domain.errors import StoreError
from catalog.domain.repositories.metro_station_repository import MetroStationRepository
from catalog.infrastructure.persistence import models
from catalog.infrastructure.persistence.repositories.sqlalchemy_attraction_repository import (
    metro_station_to_entity as _to_entity,
)

logger = logging.getLogger(__name__)


class SQLAlchemyMetroStationRepository(MetroStationRepository):
    """Metro station repository using SQLAlchemy."""

    def __init__(self, session: Session):
        self.session = session

    async def get_by_id(self, station_id: int) -> Optional[MetroStationEntity]:
        try:
            row = self.session.get(models.MetroStation, station_id)
        except SQLAlchemyError as e:
            logger.error(f"Failed to load metro station {station_id}: {e}")
            raise StoreError("Failed while loading metro station")
        return _to_entity(row) if row else None

    async def list_all(self) -> List[MetroStationEntity]:
        try:
            rows = self.session.query(models.MetroStation).order_by(models.MetroStation.name).all()
        except SQLAlchemyError as e:
            logger.error(f"Failed to list metro stations: {e}")
            raise StoreError("Failed while listing metro stations")
        return [_to_entity(row) for row in rows]
