from __future__ import annotations

import pytest

from employee_directory.core.exceptions import EmployeeNotFound
from employee_directory.core.hierarchy import DirectorySnapshot, build_tree, count_distinct_reports
from employee_directory.models.employee import Employee
from employee_directory.models.reporting import EmployeeNode
from tests.conftest import GEORGE_ID, JOHN_ID, PAUL_ID, PETE_ID, RINGO_ID, beatles, make_employee


def _names(node: EmployeeNode) -> list[str | None]:
    return [child.first_name for child in node.direct_reports]


def _shape(node: EmployeeNode) -> tuple:
    return (node.employee_id, tuple(_shape(c) for c in node.direct_reports))


def test_snapshot_last_write_wins_on_duplicate_ids():
    snapshot = DirectorySnapshot([make_employee("a", first_name="old"), make_employee("a", first_name="new")])

    assert len(snapshot) == 1
    assert snapshot["a"].first_name == "new"


def test_snapshot_is_read_only():
    snapshot = DirectorySnapshot(beatles())

    with pytest.raises(TypeError):
        snapshot._by_id["x"] = make_employee("x")  # type: ignore[index]


def test_report_ids_skip_self_dangling_and_missing_ids():
    employee = make_employee("a", "b", "a", "ghost", "c")
    employee.direct_reports.append(employee.direct_reports[0].model_copy(update={"employee_id": None}))
    snapshot = DirectorySnapshot([employee, make_employee("b"), make_employee("c")])

    assert list(snapshot.report_ids(employee)) == ["b", "c"]


def test_count_beatles():
    snapshot = DirectorySnapshot(beatles())

    assert count_distinct_reports(JOHN_ID, snapshot) == 4
    assert count_distinct_reports(RINGO_ID, snapshot) == 2
    assert count_distinct_reports(PETE_ID, snapshot) == 0


def test_build_tree_beatles():
    tree = build_tree(JOHN_ID, DirectorySnapshot(beatles()))

    assert tree.first_name == "John"
    assert _names(tree) == ["Paul", "Ringo"]
    assert _names(tree.direct_reports[1]) == ["Pete", "George"]
    assert tree.direct_reports[0].direct_reports == []


def test_leaf_employee_has_no_children():
    tree = build_tree(PETE_ID, DirectorySnapshot(beatles()))

    assert tree.employee_id == PETE_ID
    assert tree.direct_reports == []


def test_build_tree_unknown_root_raises():
    with pytest.raises(EmployeeNotFound):
        build_tree("invalid-1234", DirectorySnapshot(beatles()))


def test_count_unknown_root_is_zero():
    assert count_distinct_reports("invalid-1234", DirectorySnapshot(beatles())) == 0


def test_tree_directory_is_rendered_isomorphically():
    employees = [
        make_employee("ceo", "cto", "cfo"),
        make_employee("cto", "dev1", "dev2"),
        make_employee("cfo", "acct"),
        make_employee("dev1", "intern"),
        make_employee("dev2"),
        make_employee("acct"),
        make_employee("intern"),
    ]
    snapshot = DirectorySnapshot(employees)

    assert count_distinct_reports("ceo", snapshot) == 6
    assert _shape(build_tree("ceo", snapshot)) == (
        "ceo",
        (
            ("cto", (("dev1", (("intern", ()),)), ("dev2", ()))),
            ("cfo", (("acct", ()),)),
        ),
    )


def test_two_node_cycle_terminates():
    snapshot = DirectorySnapshot([make_employee("a", "b"), make_employee("b", "a")])

    assert count_distinct_reports("a", snapshot) == 1

    tree = build_tree("a", snapshot)
    assert _shape(tree) == ("a", (("b", (("a", ()),)),))


def test_longer_cycle_is_cut_where_it_closes():
    snapshot = DirectorySnapshot([make_employee("a", "b"), make_employee("b", "c"), make_employee("c", "a")])

    assert count_distinct_reports("b", snapshot) == 2
    assert _shape(build_tree("b", snapshot)) == ("b", (("c", (("a", (("b", ()),)),)),))


def test_self_loop_does_not_affect_count_or_tree():
    employees = beatles()
    george = make_employee(GEORGE_ID, GEORGE_ID, first_name="George")
    snapshot = DirectorySnapshot([*employees[:-1], george])

    assert count_distinct_reports(RINGO_ID, snapshot) == 2
    assert count_distinct_reports(JOHN_ID, snapshot) == 4
    assert build_tree(GEORGE_ID, snapshot).direct_reports == []


def test_dangling_edge_contributes_nothing():
    snapshot = DirectorySnapshot([make_employee("a", "b", "gone"), make_employee("b")])

    assert count_distinct_reports("a", snapshot) == 1
    assert _names(build_tree("a", snapshot)) == ["b"]


def test_diamond_counts_once_and_renders_both_branches():
    snapshot = DirectorySnapshot(
        [
            make_employee("a", "b", "c"),
            make_employee("b", "d"),
            make_employee("c", "d"),
            make_employee("d", "e"),
            make_employee("e"),
        ]
    )

    assert count_distinct_reports("a", snapshot) == 4

    tree = build_tree("a", snapshot)
    shared = ("d", (("e", ()),))
    assert _shape(tree) == ("a", (("b", (shared,)), ("c", (shared,))))


def test_direct_and_indirect_report_of_same_root():
    snapshot = DirectorySnapshot([make_employee("a", "b", "c"), make_employee("b", "c"), make_employee("c")])

    assert count_distinct_reports("a", snapshot) == 2
    assert _shape(build_tree("a", snapshot)) == ("a", (("b", (("c", ()),)), ("c", ())))


def test_count_is_independent_of_edge_order():
    forward = DirectorySnapshot([make_employee("a", "b", "c"), make_employee("b", "c", "a"), make_employee("c", "b")])
    backward = DirectorySnapshot([make_employee("a", "c", "b"), make_employee("b", "a", "c"), make_employee("c", "b")])

    assert count_distinct_reports("a", forward) == count_distinct_reports("a", backward) == 2


def test_children_keep_source_order():
    snapshot = DirectorySnapshot([make_employee("m", "z", "y", "x"), make_employee("x"), make_employee("y"), make_employee("z")])

    assert [c.employee_id for c in build_tree("m", snapshot).direct_reports] == ["z", "y", "x"]


def test_deep_chain_does_not_hit_recursion_limit():
    depth = 3000
    employees = [make_employee(f"e{i}", f"e{i + 1}") for i in range(depth)]
    employees.append(make_employee(f"e{depth}"))
    snapshot = DirectorySnapshot(employees)

    assert count_distinct_reports("e0", snapshot) == depth

    node = build_tree("e0", snapshot)
    levels = 0
    while node.direct_reports:
        node = node.direct_reports[0]
        levels += 1
    assert levels == depth


def test_tree_nodes_are_built_from_snapshot_not_references():
    manager = Employee.model_validate(
        {"employeeId": "m", "directReports": [{"employeeId": "r", "firstName": "Stale", "position": "Old"}]}
    )
    snapshot = DirectorySnapshot([manager, make_employee("r", first_name="Fresh")])

    child = build_tree("m", snapshot).direct_reports[0]
    assert child.first_name == "Fresh"
    assert child.position == "Developer"


def test_paul_is_a_leaf_under_john():
    tree = build_tree(JOHN_ID, DirectorySnapshot(beatles()))

    assert tree.direct_reports[0].employee_id == PAUL_ID
    assert tree.direct_reports[0].direct_reports == []
