"""Domain errors raised by the directory services."""

from __future__ import annotations


class DirectoryError(Exception):
    """Base class for errors surfaced to callers of the directory services."""


class DirectoryUnavailable(DirectoryError):
    """The backing employee store could not be read."""


class EmployeeNotFound(DirectoryError):
    def __init__(self, employee_id: str | None) -> None:
        self.employee_id = employee_id
        super().__init__(f"Invalid employeeId: {employee_id}")


class CompensationNotFound(DirectoryError):
    def __init__(self, employee_id: str) -> None:
        self.employee_id = employee_id
        super().__init__(f"No compensation found for employeeId: {employee_id}")
