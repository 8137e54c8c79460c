import math

import pytest

from salestree.allocation import (
    AbsoluteAllocation,
    AllocationMode,
    PercentageAllocation,
    parse_allocation,
    parse_amount,
    resolve_allocation,
    try_parse_amount,
)
from salestree.sample_data import sample_tree
from salestree.tree_store import apply_edit, find_row


def _phones(tree=None):
    return find_row(tree or sample_tree(), "phones")


def test_absolute_mode_uses_parsed_input():
    assert resolve_allocation(_phones(), "1000", AllocationMode.ABSOLUTE) == 1000
    assert resolve_allocation(_phones(), " 12.345 ", "absolute") == 12.35


def test_percentage_mode_is_relative_to_baseline():
    tree = sample_tree()

    value = resolve_allocation(_phones(tree), "10", AllocationMode.PERCENTAGE)
    assert value == 880
    tree = apply_edit(tree, "phones", value)
    assert _phones(tree).value == 880

    value = resolve_allocation(_phones(tree), "-10", AllocationMode.PERCENTAGE)
    assert value == 720
    tree = apply_edit(tree, "phones", value)
    assert _phones(tree).value == 720


@pytest.mark.parametrize("raw", ["", "   ", None, "abc", "12abc", "nan", "inf", "-Infinity", "1_000", True])
def test_unparseable_input_is_skipped(raw):
    assert resolve_allocation(_phones(), raw, AllocationMode.ABSOLUTE) is None
    assert resolve_allocation(_phones(), raw, AllocationMode.PERCENTAGE) is None


def test_zero_and_numbers_are_valid_input():
    assert resolve_allocation(_phones(), "0", AllocationMode.ABSOLUTE) == 0
    assert resolve_allocation(_phones(), 0, AllocationMode.PERCENTAGE) == 800
    assert resolve_allocation(_phones(), 2.5, AllocationMode.ABSOLUTE) == 2.5
    assert resolve_allocation(_phones(), "1e3", AllocationMode.ABSOLUTE) == 1000


def test_unknown_mode_raises():
    with pytest.raises(ValueError):
        resolve_allocation(_phones(), "10", "ratio")


def test_parse_amount_strict_and_lenient():
    assert parse_amount(" -4.5 ") == -4.5
    with pytest.raises(ValueError):
        parse_amount("")
    with pytest.raises(ValueError):
        parse_amount(float("inf"))
    assert try_parse_amount("oops") is None
    assert math.isclose(try_parse_amount("3.3"), 3.3)


def test_parse_allocation_builds_tagged_variants():
    assert parse_allocation("5", AllocationMode.PERCENTAGE) == PercentageAllocation(percent=5.0)
    assert parse_allocation("5", AllocationMode.ABSOLUTE) == AbsoluteAllocation(amount=5.0)
    assert parse_allocation("x", AllocationMode.ABSOLUTE) is None


@pytest.mark.parametrize("raw, expected", [("1e26", 1e26), ("-3e40", -3e40), (1e300, 1e300)])
def test_huge_absolute_input_is_applied(raw, expected):
    assert resolve_allocation(_phones(), raw, AllocationMode.ABSOLUTE) == expected


def test_percentage_overflow_is_skipped():
    assert resolve_allocation(_phones(), "1e308", AllocationMode.PERCENTAGE) is None
