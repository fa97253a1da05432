from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException, status

from employee_directory.core.dependencies import get_current_user, require_writer
from employee_directory.core.exceptions import (
    CompensationNotFound,
    DirectoryUnavailable,
    EmployeeNotFound,
)
from employee_directory.models.auth import UserInfo
from employee_directory.models.compensation import Compensation, CompensationCreate
from employee_directory.services.compensation_service import compensation_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/compensation", tags=["compensation"])


@router.post("", response_model=Compensation, status_code=status.HTTP_201_CREATED)
async def create_compensation(
    body: CompensationCreate,
    user: UserInfo = Depends(require_writer),  # noqa: B008
):
    try:
        return await compensation_service.create(body)
    except EmployeeNotFound as err:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Employee with id '{body.employee.employee_id}' not found",
        ) from err
    except DirectoryUnavailable as err:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Employee directory unavailable",
        ) from err
    except Exception as err:
        logger.exception("Failed to create compensation")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to create compensation",
        ) from err


@router.get("/{employee_id}", response_model=Compensation)
async def get_compensation(
    employee_id: str,
    user: UserInfo = Depends(get_current_user),  # noqa: B008
):
    try:
        return await compensation_service.read(employee_id)
    except (EmployeeNotFound, CompensationNotFound) as err:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=str(err),
        ) from err
    except DirectoryUnavailable as err:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Employee directory unavailable",
        ) from err
    except Exception as err:
        logger.exception("Failed to get compensation for %s", employee_id)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to retrieve compensation",
        ) from err
