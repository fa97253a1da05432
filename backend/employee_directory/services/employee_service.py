"""Employee CRUD and directory snapshots on top of the configured store."""

from __future__ import annotations

import logging
import uuid

from employee_directory.core.config import Settings
from employee_directory.core.exceptions import DirectoryUnavailable, EmployeeNotFound
from employee_directory.core.hierarchy import DirectorySnapshot
from employee_directory.models.employee import Employee, EmployeeCreate
from employee_directory.services.store import (
    CosmosEmployeeStore,
    EmployeeStore,
    InMemoryEmployeeStore,
    load_seed_file,
)

logger = logging.getLogger(__name__)


class EmployeeService:
    def __init__(self, store: EmployeeStore | None = None) -> None:
        self.store: EmployeeStore | None = store
        self.initialized: bool = store is not None

    async def initialize(self, settings: Settings) -> None:
        if self.initialized:
            return

        if settings.COSMOS_DB_ENDPOINT and settings.COSMOS_DB_KEY:
            self.store = CosmosEmployeeStore(
                settings.COSMOS_DB_ENDPOINT,
                settings.COSMOS_DB_KEY,
                settings.COSMOS_DB_DATABASE,
                settings.COSMOS_DB_EMPLOYEES_CONTAINER,
                settings.COSMOS_DB_COMPENSATION_CONTAINER,
            )
            logger.info(
                "EmployeeService initialized (container=%s)",
                settings.COSMOS_DB_EMPLOYEES_CONTAINER,
            )
        else:
            logger.warning("Cosmos DB credentials missing - using in-memory employee store")
            seed = load_seed_file(settings.EMPLOYEE_SEED_FILE) if settings.EMPLOYEE_SEED_FILE else []
            self.store = InMemoryEmployeeStore(seed)
            logger.info("EmployeeService initialized (in-memory, %d employees)", len(seed))

        self.initialized = True

    async def close(self) -> None:
        if self.store:
            await self.store.close()
            self.store = None
            self.initialized = False

    def require_store(self) -> EmployeeStore:
        if not self.store:
            raise DirectoryUnavailable("Employee store is not configured")
        return self.store

    async def load_snapshot(self) -> DirectorySnapshot:
        """Read every employee in one pass. Later writes need a new snapshot."""
        store = self.require_store()
        try:
            employees = await store.find_all()
        except Exception as err:
            logger.exception("Bulk read of the employee directory failed")
            raise DirectoryUnavailable("Failed to read the employee directory") from err
        return DirectorySnapshot(employees)

    async def list_employees(self, skip: int = 0, limit: int = 50) -> list[Employee]:
        snapshot = await self.load_snapshot()
        return list(snapshot.values())[skip : skip + limit]

    async def read(self, employee_id: str) -> Employee:
        logger.debug("Reading employee with id [%s]", employee_id)
        employee = await self.require_store().find_by_id(employee_id)
        if employee is None:
            raise EmployeeNotFound(employee_id)
        return employee

    async def create(self, data: EmployeeCreate) -> Employee:
        employee = Employee(employee_id=str(uuid.uuid4()), **data.model_dump())
        logger.debug("Creating employee [%s]", employee.employee_id)
        return await self.require_store().insert(employee)

    async def update(self, employee_id: str, data: EmployeeCreate) -> Employee:
        store = self.require_store()
        logger.debug("Updating employee [%s]", employee_id)
        if await store.find_by_id(employee_id) is None:
            raise EmployeeNotFound(employee_id)
        return await store.save(Employee(employee_id=employee_id, **data.model_dump()))

    async def check_connection(self) -> bool:
        if not self.store:
            return False
        return await self.store.check_connection()


employee_service = EmployeeService()
