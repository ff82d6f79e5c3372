"""Health check service for monitoring system components."""
import logging
from datetime import datetime
from enum import Enum
from typing import Any, Dict

import redis
from sqlalchemy import text
from sqlalchemy.engine import make_url

from catalog.config import settings
from catalog.infrastructure.persistence.db import engine

logger = logging.getLogger(__name__)


class HealthStatus(str, Enum):
    """Health status values."""
    HEALTHY = "healthy"
    UNHEALTHY = "unhealthy"
    DEGRADED = "degraded"


class HealthCheckService:
    """Service for checking health of system components.

    The database is required for every request. Redis only carries reset
    emails, so losing it degrades the service rather than taking it down.
    """

    def __init__(self, db_engine=None, broker_url: str = None):
        self.engine = db_engine or engine
        self.broker_url = broker_url or settings.CELERY_BROKER_URL

    def check_database(self) -> Dict[str, Any]:
        """Check database connectivity.

        Returns:
            Dictionary with status and details
        """
        url = make_url(str(self.engine.url))
        details = {"backend": url.get_backend_name(), "database": url.database}
        try:
            with self.engine.connect() as conn:
                conn.execute(text("SELECT 1"))
            return {
                "status": HealthStatus.HEALTHY,
                "message": "Database connection successful",
                "details": details,
            }
        except Exception as e:
            logger.error(f"Database health check failed: {e}")
            return {
                "status": HealthStatus.UNHEALTHY,
                "message": "Database connection failed",
                "details": {**details, "error": str(e)},
            }

    def check_redis(self) -> Dict[str, Any]:
        """Check the Celery broker.

        Returns:
            Dictionary with status and details
        """
        try:
            client = redis.Redis.from_url(
                self.broker_url,
                socket_connect_timeout=settings.REDIS_SOCKET_TIMEOUT_SECONDS,
            )
            client.ping()
            return {
                "status": HealthStatus.HEALTHY,
                "message": "Redis connection successful",
                "details": {},
            }
        except Exception as e:
            logger.error(f"Redis health check failed: {e}")
            return {
                "status": HealthStatus.DEGRADED,
                "message": "Redis connection failed; reset emails cannot be queued",
                "details": {"error": str(e)},
            }

    def get_overall_health(self) -> Dict[str, Any]:
        """Get overall system health status.

        Returns:
            Dictionary with overall health and component statuses
        """
        db_health = self.check_database()
        redis_health = self.check_redis()
        component_statuses = [db_health["status"], redis_health["status"]]

        if all(status == HealthStatus.HEALTHY for status in component_statuses):
            overall_status = HealthStatus.HEALTHY
        elif any(status == HealthStatus.UNHEALTHY for status in component_statuses):
            overall_status = HealthStatus.UNHEALTHY
        else:
            overall_status = HealthStatus.DEGRADED

        return {
            "status": overall_status,
            "timestamp": datetime.utcnow().isoformat(),
            "components": {
                "database": db_health,
                "redis": redis_health,
            },
        }


# Global health check service instance
health_service = HealthCheckService()
