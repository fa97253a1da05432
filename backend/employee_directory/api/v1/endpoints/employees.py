from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException, status

from employee_directory.core.config import settings
from employee_directory.core.dependencies import get_current_user, require_writer
from employee_directory.core.exceptions import DirectoryUnavailable, EmployeeNotFound
from employee_directory.models.auth import UserInfo
from employee_directory.models.employee import Employee, EmployeeCreate
from employee_directory.services.employee_service import employee_service
from employee_directory.services.reporting_service import reporting_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/employee", tags=["employees"])


def _after_write() -> None:
    if settings.REPORTING_CACHE_CLEAR_ON_WRITE:
        reporting_service.clear_cache()


@router.get("", response_model=list[Employee])
async def list_employees(
    skip: int = 0,
    limit: int = 50,
    user: UserInfo = Depends(get_current_user),  # noqa: B008
):
    try:
        return await employee_service.list_employees(skip=skip, limit=limit)
    except DirectoryUnavailable as err:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Employee directory unavailable",
        ) from err


@router.post("", response_model=Employee, status_code=status.HTTP_201_CREATED)
async def create_employee(
    body: EmployeeCreate,
    user: UserInfo = Depends(require_writer),  # noqa: B008
):
    logger.debug("Received employee create request from %s", user.id)
    try:
        employee = await employee_service.create(body)
    except DirectoryUnavailable as err:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Employee directory unavailable",
        ) from err
    except Exception as err:
        logger.exception("Failed to create employee")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to create employee",
        ) from err

    _after_write()
    return employee


@router.get("/{employee_id}", response_model=Employee)
async def get_employee(
    employee_id: str,
    user: UserInfo = Depends(get_current_user),  # noqa: B008
):
    try:
        return await employee_service.read(employee_id)
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
        logger.exception("Failed to get employee %s", employee_id)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to retrieve employee",
        ) from err


@router.put("/{employee_id}", response_model=Employee)
async def update_employee(
    employee_id: str,
    body: EmployeeCreate,
    user: UserInfo = Depends(require_writer),  # noqa: B008
):
    logger.debug("Received employee update request for id [%s]", employee_id)
    try:
        employee = await employee_service.update(employee_id, body)
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
        logger.exception("Failed to update employee %s", employee_id)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to update employee",
        ) from err

    _after_write()
    return employee
