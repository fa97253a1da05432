"""Persistence backends for employees and compensation records.

``CosmosEmployeeStore`` talks to Azure Cosmos DB. ``InMemoryEmployeeStore``
keeps everything in process and is what the app falls back to when Cosmos DB
is not configured.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

from azure.cosmos.aio import CosmosClient

from employee_directory.models.employee import Employee

logger = logging.getLogger(__name__)


def to_document(employee: Employee) -> dict[str, Any]:
    doc = employee.model_dump(mode="json", by_alias=True)
    doc["id"] = employee.employee_id
    return doc


def _transform_employee(raw: dict[str, Any]) -> Employee:
    data = {key: value for key, value in raw.items() if not key.startswith("_")}
    data["employeeId"] = raw.get("employeeId") or raw.get("id")
    data.pop("id", None)
    return Employee.model_validate(data)


def load_seed_file(path: str | Path) -> list[Employee]:
    with open(path, encoding="utf-8") as fh:
        raw = json.load(fh)
    if not isinstance(raw, list):
        raise ValueError(f"Seed file {path} must contain a JSON list of employees")
    return [_transform_employee(item) for item in raw]


class EmployeeStore:
    """Interface shared by the store backends."""

    name = "abstract"

    async def find_all(self) -> list[Employee]:
        raise NotImplementedError

    async def find_by_id(self, employee_id: str) -> Employee | None:
        raise NotImplementedError

    async def insert(self, employee: Employee) -> Employee:
        raise NotImplementedError

    async def save(self, employee: Employee) -> Employee:
        raise NotImplementedError

    async def insert_compensation(self, record: dict[str, Any]) -> None:
        raise NotImplementedError

    async def find_compensation(self, employee_id: str) -> list[dict[str, Any]]:
        raise NotImplementedError

    async def check_connection(self) -> bool:
        return True

    async def close(self) -> None:
        return None


class InMemoryEmployeeStore(EmployeeStore):
    name = "memory"

    def __init__(self, employees: list[Employee] | None = None) -> None:
        self._employees: dict[str, dict[str, Any]] = {}
        self._compensation: list[dict[str, Any]] = []
        for employee in employees or []:
            self._employees[employee.employee_id] = to_document(employee)

    async def find_all(self) -> list[Employee]:
        return [_transform_employee(doc) for doc in self._employees.values()]

    async def find_by_id(self, employee_id: str) -> Employee | None:
        doc = self._employees.get(employee_id)
        return _transform_employee(doc) if doc is not None else None

    async def insert(self, employee: Employee) -> Employee:
        if employee.employee_id in self._employees:
            raise ValueError(f"Employee {employee.employee_id} already exists")
        self._employees[employee.employee_id] = to_document(employee)
        return employee

    async def save(self, employee: Employee) -> Employee:
        self._employees[employee.employee_id] = to_document(employee)
        return employee

    async def insert_compensation(self, record: dict[str, Any]) -> None:
        self._compensation.append(dict(record))

    async def find_compensation(self, employee_id: str) -> list[dict[str, Any]]:
        return [dict(r) for r in self._compensation if r.get("employeeId") == employee_id]


class CosmosEmployeeStore(EmployeeStore):
    name = "cosmos_db"

    def __init__(
        self,
        endpoint: str,
        key: str,
        database_name: str,
        employees_container: str,
        compensation_container: str,
    ) -> None:
        self.client = CosmosClient(endpoint, key)
        db = self.client.get_database_client(database_name)
        self.employees = db.get_container_client(employees_container)
        self.compensation = db.get_container_client(compensation_container)

    async def find_all(self) -> list[Employee]:
        items: list[Employee] = []
        async for item in self.employees.read_all_items():
            items.append(_transform_employee(item))
        return items

    async def find_by_id(self, employee_id: str) -> Employee | None:
        query = "SELECT * FROM c WHERE c.id = @id"
        params: list[dict[str, str]] = [{"name": "@id", "value": employee_id}]

        async for item in self.employees.query_items(
            query=query,
            parameters=params,
            enable_cross_partition_query=True,
        ):
            return _transform_employee(item)
        return None

    async def insert(self, employee: Employee) -> Employee:
        await self.employees.create_item(body=to_document(employee))
        return employee

    async def save(self, employee: Employee) -> Employee:
        await self.employees.upsert_item(body=to_document(employee))
        return employee

    async def insert_compensation(self, record: dict[str, Any]) -> None:
        await self.compensation.create_item(body=record)

    async def find_compensation(self, employee_id: str) -> list[dict[str, Any]]:
        query = "SELECT * FROM c WHERE c.employeeId = @employeeId"
        params: list[dict[str, str]] = [{"name": "@employeeId", "value": employee_id}]

        items: list[dict[str, Any]] = []
        async for item in self.compensation.query_items(
            query=query,
            parameters=params,
            enable_cross_partition_query=True,
        ):
            items.append(item)
        return items

    async def check_connection(self) -> bool:
        try:
            query = "SELECT VALUE COUNT(1) FROM c"
            async for _ in self.employees.query_items(
                query=query,
                enable_cross_partition_query=True,
            ):
                return True
            return True
        except Exception:
            logger.exception("Cosmos DB connection check failed")
            return False

    async def close(self) -> None:
        await self.client.close()
