from __future__ import annotations

from fastapi import APIRouter

from employee_directory.core.config import settings
from employee_directory.services.employee_service import employee_service
from employee_directory.services.reporting_service import reporting_service

router = APIRouter(prefix="/health", tags=["health"])


@router.get("")
async def health_check():
    services: dict[str, str] = {}

    try:
        if employee_service.initialized and employee_service.store:
            ok = await employee_service.check_connection()
            services[employee_service.store.name] = "ok" if ok else "error"
        else:
            services["employee_store"] = "not_configured"
    except Exception:
        services["employee_store"] = "error"

    all_ok = all(v in ("ok", "not_configured") for v in services.values())

    return {
        "status": "healthy" if all_ok else "degraded",
        "version": settings.APP_VERSION,
        "services": services,
        "reporting_cache_entries": len(reporting_service.cache),
    }


@router.get("/ready")
async def readiness_probe():
    return {"ready": True}
