from salestree.allocation import AllocationMode
from salestree.derivations import VarianceClass
from salestree.sample_data import sample_tree
from salestree.session import GRAND_TOTAL_LABEL, EditSession


def test_commit_applies_and_clears_staged_input():
    session = EditSession(sample_tree())
    session.stage_input("phones", "1000")

    assert session.commit("phones", AllocationMode.ABSOLUTE)

    assert session.find("electronics").value == 1700
    assert session.staged_input("phones") == ""


def test_commit_with_bad_input_keeps_staging_and_tree():
    session = EditSession(sample_tree())
    tree = session.tree
    session.stage_input("phones", "abc")

    assert not session.commit("phones", AllocationMode.PERCENTAGE)

    assert session.tree is tree
    assert session.staged_input("phones") == "abc"


def test_commit_without_staged_input_is_skipped():
    session = EditSession(sample_tree())

    assert not session.commit("laptops", AllocationMode.ABSOLUTE)
    assert session.find("laptops").value == 700


def test_unknown_row_is_a_no_op():
    session = EditSession(sample_tree())
    session.stage_input("ghost", "10")

    assert not session.commit("ghost", AllocationMode.ABSOLUTE)
    assert session.tree == sample_tree()


def test_percentage_commits_are_not_cumulative():
    session = EditSession(sample_tree())

    session.stage_input("phones", "10")
    session.commit("phones", "percentage")
    session.stage_input("phones", "-10")
    session.commit("phones", "percentage")

    assert session.find("phones").value == 720


def test_table_rows_follow_flatten_order_with_variance():
    session = EditSession(sample_tree())
    session.allocate("tables", "330", AllocationMode.ABSOLUTE)
    session.stage_input("chairs", "5")

    rows = session.table_rows()

    assert [row.label for row in rows] == ["Electronics", "Phones", "Laptops", "Furniture", "Tables", "Chairs"]
    tables = rows[4]
    assert tables.variance == "10%"
    assert tables.variance_class is VarianceClass.ABOVE
    assert rows[3].variance == "3%"
    assert rows[5].staged_input == "5"
    assert rows[0].variance_class is VarianceClass.EQUAL


def test_total_row_uses_captured_baseline():
    session = EditSession(sample_tree())
    session.allocate("electronics", "1250", AllocationMode.ABSOLUTE)

    total = session.total_row()

    assert total.row_id is None
    assert total.label == GRAND_TOTAL_LABEL
    assert total.value == 2250
    assert session.baseline_total == 2500
    assert total.variance == "-10%"
    assert total.variance_class is VarianceClass.BELOW


def test_commit_applies_huge_staged_amount():
    session = EditSession(sample_tree())
    session.stage_input("phones", "1e27")

    assert session.commit("phones", AllocationMode.ABSOLUTE)

    assert session.find("phones").value == 1e27
    assert session.staged_input("phones") == ""
