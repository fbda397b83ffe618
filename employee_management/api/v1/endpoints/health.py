from __future__ import annotations

from fastapi import APIRouter, Depends

from employee_management.core.config import settings
from employee_management.core.cosmos import CosmosStore
from employee_management.core.dependencies import get_cosmos_store

router = APIRouter(prefix="/health", tags=["health"])


@router.get("")
async def health_check(store: CosmosStore | None = Depends(get_cosmos_store)):  # noqa: B008
    services: dict[str, str] = {}

    try:
        ok = store is not None and await store.check_connection()
        services["cosmos_db"] = "ok" if ok else "error"
    except Exception:
        services["cosmos_db"] = "error"

    all_ok = all(v == "ok" for v in services.values())

    return {
        "status": "healthy" if all_ok else "degraded",
        "version": settings.APP_VERSION,
        "services": services,
    }


@router.get("/ready")
async def readiness_probe(store: CosmosStore | None = Depends(get_cosmos_store)):  # noqa: B008
    return {"ready": store is not None and store.initialized}
