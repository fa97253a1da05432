from __future__ import annotations

import logging
import uuid
from datetime import date

from employee_directory.core.exceptions import CompensationNotFound
from employee_directory.models.compensation import Compensation, CompensationCreate
from employee_directory.services.employee_service import EmployeeService, employee_service

logger = logging.getLogger(__name__)


class CompensationService:
    def __init__(self, employees: EmployeeService) -> None:
        self.employees = employees

    async def create(self, data: CompensationCreate) -> Compensation:
        employee = await self.employees.read(data.employee.employee_id)
        record = {
            "id": str(uuid.uuid4()),
            "employeeId": employee.employee_id,
            "salary": data.salary,
            "effectiveDate": data.effective_date.isoformat(),
        }
        await self.employees.require_store().insert_compensation(record)
        logger.info("Created compensation for employee %s", employee.employee_id)
        return Compensation(employee=employee, salary=data.salary, effective_date=data.effective_date)

    async def read(self, employee_id: str) -> Compensation:
        """Latest compensation by effective date, with the employee as currently stored."""
        employee = await self.employees.read(employee_id)
        records = await self.employees.require_store().find_compensation(employee_id)
        if not records:
            raise CompensationNotFound(employee_id)

        latest = max(records, key=lambda r: date.fromisoformat(r["effectiveDate"]))
        return Compensation(
            employee=employee,
            salary=latest["salary"],
            effective_date=date.fromisoformat(latest["effectiveDate"]),
        )


compensation_service = CompensationService(employee_service)
