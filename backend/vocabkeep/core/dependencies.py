"""FastAPI dependencies for tenant resolution and the scheduling engine."""

from typing import Annotated
from uuid import UUID

from fastapi import Depends, Header, Request

from vocabkeep.core.app_exceptions import InvalidInputError
from vocabkeep.db.session import get_db
from vocabkeep.learning_engine.srs.service import SchedulingEngine

__all__ = ["get_db", "get_engine", "get_tenant_id", "TenantId", "Engine"]


def get_tenant_id(x_tenant_id: Annotated[str | None, Header()] = None) -> UUID:
    """Tenant identifier supplied by the upstream gateway in ``X-Tenant-ID``."""
    if not x_tenant_id:
        raise InvalidInputError("X-Tenant-ID header missing")
    try:
        return UUID(x_tenant_id)
    except ValueError:
        raise InvalidInputError("X-Tenant-ID must be a UUID") from None


def get_engine(request: Request) -> SchedulingEngine:
    """Scheduling engine built at startup from settings."""
    return request.app.state.scheduling_engine


TenantId = Annotated[UUID, Depends(get_tenant_id)]
Engine = Annotated[SchedulingEngine, Depends(get_engine)]
