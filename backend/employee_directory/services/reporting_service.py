"""Reporting structure resolver: snapshot, count, tree, cache."""

from __future__ import annotations

import logging

from employee_directory.core.config import Settings
from employee_directory.core.exceptions import EmployeeNotFound
from employee_directory.core.hierarchy import build_tree, count_distinct_reports
from employee_directory.core.report_cache import EvictionPolicy, ReportCache, build_policy
from employee_directory.models.reporting import ReportingStructure
from employee_directory.services.employee_service import EmployeeService, employee_service

logger = logging.getLogger(__name__)


class ReportingService:
    def __init__(
        self,
        employees: EmployeeService,
        policy: EvictionPolicy | None = None,
    ) -> None:
        self.employees = employees
        self.cache: ReportCache[ReportingStructure] = ReportCache(policy)

    async def initialize(self, settings: Settings) -> None:
        self.cache = ReportCache(
            build_policy(
                settings.REPORTING_CACHE_POLICY,
                ttl_seconds=settings.REPORTING_CACHE_TTL_SECONDS,
                max_entries=settings.REPORTING_CACHE_MAX_ENTRIES,
            )
        )
        logger.info(
            "ReportingService initialized (cache policy=%s)",
            type(self.cache.policy).__name__,
        )

    async def close(self) -> None:
        self.cache.clear()

    async def get_reporting_structure(
        self,
        employee_id: str | None,
        *,
        refresh: bool = False,
    ) -> ReportingStructure:
        if employee_id is None or not employee_id.strip():
            raise EmployeeNotFound(employee_id)

        if not refresh:
            cached = self.cache.get(employee_id)
            if cached is not None:
                logger.debug("Reporting structure cache hit for %s", employee_id)
                return cached

        logger.info("Fetching ReportingStructure for employeeId: %s", employee_id)
        snapshot = await self.employees.load_snapshot()
        if employee_id not in snapshot:
            raise EmployeeNotFound(employee_id)

        number_of_reports = count_distinct_reports(employee_id, snapshot)
        tree = build_tree(employee_id, snapshot)
        result = ReportingStructure(employee=tree, number_of_reports=number_of_reports)

        self.cache.put(employee_id, result)
        logger.info(
            "ReportingStructure generated for %s with %d reports",
            employee_id,
            number_of_reports,
        )
        return result

    def invalidate(self, employee_id: str) -> bool:
        return self.cache.invalidate(employee_id)

    def clear_cache(self) -> None:
        self.cache.clear()


reporting_service = ReportingService(employee_service)
