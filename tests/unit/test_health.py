"""Unit tests for health aggregation and dispatch."""

import pytest

from trafficsim.core.dispatch import dispatch, dispatched_count
from trafficsim.core.grid import Node
from trafficsim.core.health import overall_health


def nodes_with_levels(levels):
    return [
        Node(id=f"n-0-{i}", x=0.0, y=0.0, label=f"J{i}", congestion_level=float(level))
        for i, level in enumerate(levels)
    ]


class TestOverallHealth:
    """Tests for overall_health."""

    def test_mean_headroom(self):
        assert overall_health(nodes_with_levels([0, 50, 100])) == 50

    def test_all_clear(self):
        assert overall_health(nodes_with_levels([0, 0, 0])) == 100

    def test_all_saturated(self):
        assert overall_health(nodes_with_levels([100, 100])) == 0

    def test_rounds_half_up(self):
        # Headroom 50.5 rounds to 51, not banker's 50
        assert overall_health(nodes_with_levels([49.5])) == 51
        assert overall_health(nodes_with_levels([10.4])) == 90

    def test_empty_is_fully_healthy(self):
        assert overall_health([]) == 100

    def test_returns_int(self):
        assert isinstance(overall_health(nodes_with_levels([33.3])), int)


class TestDispatch:
    """Tests for the dispatch effect."""

    def test_sets_flag(self):
        nodes = nodes_with_levels([10, 20, 30])
        updated = dispatch(nodes, "n-0-1")
        assert [n.police_dispatched for n in updated] == [False, True, False]

    def test_unknown_id_is_noop(self):
        nodes = nodes_with_levels([10, 20])
        assert dispatch(nodes, "n-9-9") == nodes

    def test_idempotent(self):
        nodes = nodes_with_levels([10, 20])
        once = dispatch(nodes, "n-0-0")
        twice = dispatch(once, "n-0-0")
        assert once == twice

    def test_does_not_modify_input(self):
        nodes = nodes_with_levels([10])
        dispatch(nodes, "n-0-0")
        assert nodes[0].police_dispatched is False

    def test_other_fields_untouched(self):
        nodes = nodes_with_levels([42])
        updated = dispatch(nodes, "n-0-0")
        assert updated[0].congestion_level == 42.0
        assert updated[0].label == "J0"

    def test_dispatched_count(self):
        nodes = dispatch(dispatch(nodes_with_levels([1, 2, 3]), "n-0-0"), "n-0-2")
        assert dispatched_count(nodes) == 2
