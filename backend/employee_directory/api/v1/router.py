from fastapi import APIRouter

from employee_directory.api.v1.endpoints import compensation, employees, health, reporting

api_router = APIRouter(prefix="/api/v1")
api_router.include_router(health.router)
api_router.include_router(employees.router)
api_router.include_router(reporting.router)
api_router.include_router(compensation.router)
