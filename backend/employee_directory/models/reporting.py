"""Output models for the reporting structure endpoint."""

from __future__ import annotations

from employee_directory.models.employee import CamelModel, EmployeeBase


class EmployeeNode(EmployeeBase):
    """One node of a rendered hierarchy tree. Carries no manager link."""

    employee_id: str
    direct_reports: list[EmployeeNode] = []


class ReportingStructure(CamelModel):
    employee: EmployeeNode
    number_of_reports: int
