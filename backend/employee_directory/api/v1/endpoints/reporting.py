from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException, status

from employee_directory.core.dependencies import get_current_user
from employee_directory.core.exceptions import DirectoryUnavailable, EmployeeNotFound
from employee_directory.models.auth import UserInfo
from employee_directory.models.reporting import ReportingStructure
from employee_directory.services.reporting_service import reporting_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/reportingStructure", tags=["reporting"])


@router.get("/{employee_id}", response_model=ReportingStructure)
async def get_reporting_structure(
    employee_id: str,
    refresh: bool = False,
    user: UserInfo = Depends(get_current_user),  # noqa: B008
):
    try:
        return await reporting_service.get_reporting_structure(employee_id, refresh=refresh)
    except EmployeeNotFound as err:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Employee with id '{employee_id}' not found",
        ) from err
    except DirectoryUnavailable as err:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Employee directory unavailable",
        ) from err
    except Exception as err:
        logger.exception("Failed to build reporting structure for %s", employee_id)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to build reporting structure",
        ) from err
