"""Employee models shared by the store, the services and the API."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, field_validator
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Snake_case attributes, camelCase on the wire; both accepted on input."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class EmployeeRef(CamelModel):
    """Reference to another employee inside ``directReports``.

    Only the id is trusted; any denormalized fields on the reference are dropped.
    """

    employee_id: str | None = None


class EmployeeBase(CamelModel):
    first_name: str | None = None
    last_name: str | None = None
    position: str | None = None
    department: str | None = None


class EmployeeCreate(EmployeeBase):
    """Request body for create and full update."""

    direct_reports: list[EmployeeRef] = []

    @field_validator("direct_reports", mode="before")
    @classmethod
    def _none_as_empty(cls, value):
        return [] if value is None else value


class Employee(EmployeeCreate):
    employee_id: str

    def report_ids(self) -> list[str]:
        return [ref.employee_id for ref in self.direct_reports if ref.employee_id]
