from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from employee_directory.api.v1.router import api_router
from employee_directory.core.config import settings
from employee_directory.services.employee_service import employee_service
from employee_directory.services.reporting_service import reporting_service

logging.basicConfig(
    level=logging.DEBUG if settings.DEBUG else settings.LOG_LEVEL.upper(),
    format="%(asctime)s %(levelname)s %(name)s %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(application: FastAPI) -> AsyncIterator[None]:
    try:
        await employee_service.initialize(settings)
    except Exception:
        logger.exception("Failed to initialize EmployeeService - continuing without a store")
    try:
        await reporting_service.initialize(settings)
    except Exception:
        logger.exception("Failed to initialize ReportingService - keeping the default cache")
    yield
    await reporting_service.close()
    await employee_service.close()


app = FastAPI(
    title="Employee Directory API",
    description="Employee records, compensation and reporting structures",
    version=settings.APP_VERSION,
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ALLOW_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(api_router)


@app.get("/")
async def root():
    return {"message": "Employee Directory API"}
