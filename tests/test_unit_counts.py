"""Tests for unit count aggregation."""

from builders import container, nested_diagram, unit

from chainview.collapse.counts import build_containment_graph, compute_nested_unit_counts


class TestNestedUnitCounts:
    def test_direct_and_nested_units(self):
        nodes, _ = nested_diagram()
        counts = compute_nested_unit_counts(nodes)
        assert counts == {"A": 4, "G": 3}

    def test_independent_of_collapse_state(self):
        expected = compute_nested_unit_counts(nested_diagram()[0])
        for a_collapsed in (False, True):
            for g_collapsed in (False, True):
                nodes, _ = nested_diagram(a_collapsed=a_collapsed, g_collapsed=g_collapsed)
                assert compute_nested_unit_counts(nodes) == expected

    def test_containers_not_counted(self):
        nodes = [container("A"), container("B", "A"), container("C", "B")]
        assert compute_nested_unit_counts(nodes) == {"A": 0, "B": 0, "C": 0}

    def test_units_not_in_result(self):
        nodes = [container("A"), unit("u", "A")]
        assert "u" not in compute_nested_unit_counts(nodes)

    def test_cycle_terminates(self):
        nodes = [container("x", "y"), container("y", "x"), unit("leaf", "x")]
        assert compute_nested_unit_counts(nodes) == {"x": 1, "y": 1}

    def test_dangling_parent_ignored(self):
        nodes = [container("A"), unit("u", "ghost")]
        graph = build_containment_graph(nodes)
        assert graph.number_of_edges() == 0
        assert compute_nested_unit_counts(nodes) == {"A": 0}
