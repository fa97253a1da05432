"""Reporting-line traversal over a point-in-time directory snapshot.

The directory is an arbitrary directed graph: ``directReports`` may contain
cycles, self-references, ids that no longer exist, and employees listed under
more than one manager. Nothing here raises for those conditions.

Counting and tree building deliberately use different bookkeeping:

* ``count_distinct_reports`` keeps one visited set for the whole walk, so an
  employee reachable along several paths is counted once.
* ``build_tree`` keeps only the ancestor path of each node, so a shared
  descendant is rendered under every branch that reaches it while a real
  cycle is still cut where it closes.
"""

from __future__ import annotations

import logging
from collections import deque
from collections.abc import Iterable, Iterator, Mapping
from types import MappingProxyType

from employee_directory.core.exceptions import EmployeeNotFound
from employee_directory.models.employee import Employee
from employee_directory.models.reporting import EmployeeNode

logger = logging.getLogger(__name__)


class DirectorySnapshot(Mapping[str, Employee]):
    """Read-only id -> Employee view built from one bulk read of the store."""

    def __init__(self, employees: Iterable[Employee]) -> None:
        by_id: dict[str, Employee] = {}
        for employee in employees:
            # last write wins on duplicate ids
            by_id[employee.employee_id] = employee
        self._by_id = MappingProxyType(by_id)

    def __getitem__(self, employee_id: str) -> Employee:
        return self._by_id[employee_id]

    def __iter__(self) -> Iterator[str]:
        return iter(self._by_id)

    def __len__(self) -> int:
        return len(self._by_id)

    def report_ids(self, employee: Employee) -> Iterator[str]:
        """Yield the ids of ``employee``'s direct reports that can be followed.

        Source order is kept. Self-references and dangling ids are dropped.
        """
        for report_id in employee.report_ids():
            if report_id == employee.employee_id:
                logger.debug("Skipping self-reference on employee %s", report_id)
                continue
            if report_id not in self._by_id:
                logger.debug("Skipping dangling report %s under %s", report_id, employee.employee_id)
                continue
            yield report_id


def count_distinct_reports(root_id: str, snapshot: DirectorySnapshot) -> int:
    """Number of distinct employees transitively under ``root_id``, excluding the root."""
    visited: set[str] = {root_id}
    queue: deque[str] = deque([root_id])

    while queue:
        current = snapshot.get(queue.popleft())
        if current is None:
            continue
        for report_id in snapshot.report_ids(current):
            if report_id in visited:
                continue
            visited.add(report_id)
            queue.append(report_id)

    return len(visited) - 1


def _to_node(employee: Employee) -> EmployeeNode:
    return EmployeeNode(
        employee_id=employee.employee_id,
        first_name=employee.first_name,
        last_name=employee.last_name,
        position=employee.position,
        department=employee.department,
        direct_reports=[],
    )


def build_tree(root_id: str, snapshot: DirectorySnapshot) -> EmployeeNode:
    """Render the reporting tree under ``root_id``.

    An employee already on the path from the root is emitted as a leaf, which
    closes cycles. Employees reached through disjoint branches appear once per
    branch.
    """
    root = snapshot.get(root_id)
    if root is None:
        raise EmployeeNotFound(root_id)

    root_node = _to_node(root)
    stack: list[tuple[Employee, EmployeeNode, frozenset[str]]] = [
        (root, root_node, frozenset((root_id,))),
    ]

    while stack:
        employee, node, ancestors = stack.pop()
        for report_id in snapshot.report_ids(employee):
            report = snapshot[report_id]
            child = _to_node(report)
            node.direct_reports.append(child)
            if report_id in ancestors:
                logger.debug("Cycle at %s under %s, emitting as leaf", report_id, employee.employee_id)
                continue
            stack.append((report, child, ancestors | {report_id}))

    return root_node
