"""Compensation record models."""

from __future__ import annotations

from datetime import date

from pydantic import Field

from employee_directory.models.employee import CamelModel, Employee


class CompensationEmployeeRef(CamelModel):
    employee_id: str = Field(..., min_length=1)


class CompensationCreate(CamelModel):
    """Request body: the employee is referenced by id only."""

    employee: CompensationEmployeeRef
    salary: float = Field(..., ge=0)
    effective_date: date


class Compensation(CamelModel):
    employee: Employee
    salary: float
    effective_date: date
