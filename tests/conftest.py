"""Shared fixtures for Budget Diff tests."""

import pytest

from budget_diff.comparison import VersionLineItem, VersionSnapshot, reconcile


def item(identity, amount, name=None, category="X"):
    """Build a line item; the display name defaults to the identity."""
    return VersionLineItem(
        identity=identity,
        display_name=name if name is not None else identity,
        category=category,
        amount=amount,
    )


@pytest.fixture
def scenario_one():
    """a changes 100 -> 150, b is added in v2."""
    v1 = VersionSnapshot(1, [item("a", 100.0)])
    v2 = VersionSnapshot(2, [item("a", 150.0), item("b", 50.0, category="Y")])
    return v1, v2


@pytest.fixture
def scenario_one_diffs(scenario_one):
    return reconcile(*scenario_one)


@pytest.fixture
def mixed_snapshots():
    """One line of every status across three categories."""
    v1 = VersionSnapshot(
        1,
        [
            item("steel", 1000.0, "Steel", "Structure"),
            item("concrete", 500.0, "Concrete", "Structure"),
            item("cabling", 300.0, "Cabling", "Electrical"),
            item("permits", 200.0, "Permits", "Admin"),
        ],
    )
    v2 = VersionSnapshot(
        2,
        [
            item("steel", 1200.0, "Steel", "Structure"),
            item("concrete", 400.0, "Concrete", "Structure"),
            item("cabling", 300.0, "Cabling", "Electrical"),
            item("lighting", 250.0, "Lighting", "Electrical"),
        ],
    )
    return v1, v2


@pytest.fixture
def mixed_diffs(mixed_snapshots):
    return reconcile(*mixed_snapshots)
