"""Tests for hidden/selected flags and group-container proxy handles."""

from builders import by_id, container, group, unit

from chainview.collapse.nodes import apply_node_flags, apply_unit_counts, attach_toggle_handles


class TestHiddenAndSelected:
    def test_hidden_flag_set_on_every_node(self):
        nodes = [container("A", collapsed=True), unit("B", "A"), unit("C")]
        result = by_id(apply_node_flags(nodes, {"B"}))
        assert result["B"]["hidden"] is True
        assert result["A"]["hidden"] is False
        assert result["C"]["hidden"] is False

    def test_hidden_nodes_lose_selection(self):
        nodes = [container("A", collapsed=True), unit("B", "A", selected=True), unit("C", selected=True)]
        result = by_id(apply_node_flags(nodes, {"B"}))
        assert result["B"]["selected"] is False
        assert result["C"]["selected"] is True

    def test_visible_node_without_selection_key_stays_without_it(self):
        result = apply_node_flags([unit("C")], set())
        assert "selected" not in result[0]

    def test_returns_new_dicts(self):
        nodes = [unit("C", selected=True)]
        result = apply_node_flags(nodes, set())
        assert result[0] is not nodes[0]
        assert "hidden" not in nodes[0]

    def test_passthrough_fields_preserved(self):
        nodes = [unit("C", position={"x": 10, "y": 20}, width=150)]
        result = apply_node_flags(nodes, set())[0]
        assert result["position"] == {"x": 10, "y": 20}
        assert result["width"] == 150


class TestGroupContainerHandles:
    def test_collapsed_group_forces_handles(self):
        node = group("G", collapsed=True)
        node["data"]["inputEnabled"] = False
        result = apply_node_flags([node], set())[0]
        assert result["data"]["inputEnabled"] is True
        assert result["data"]["outputEnabled"] is True
        assert result["connectable"] is False

    def test_expanding_restores_declared_values(self):
        node = group("G", collapsed=True)
        node["data"]["inputEnabled"] = False
        collapsed = apply_node_flags([node], set())[0]

        expanded_input = {**collapsed, "data": {**collapsed["data"], "collapsed": False}}
        restored = apply_node_flags([expanded_input], set())[0]

        assert restored["data"]["inputEnabled"] is False
        assert "outputEnabled" not in restored["data"]
        assert "connectable" not in restored
        assert "declaredConnectivity" not in restored["data"]

    def test_declared_connectable_restored(self):
        node = group("G", collapsed=True, connectable=True)
        collapsed = apply_node_flags([node], set())[0]
        assert collapsed["connectable"] is False

        reopened = {**collapsed, "data": {**collapsed["data"], "collapsed": False}}
        assert apply_node_flags([reopened], set())[0]["connectable"] is True

    def test_recollapse_keeps_original_declaration(self):
        node = group("G", collapsed=True)
        node["data"]["outputEnabled"] = False
        once = apply_node_flags([node], set())[0]
        twice = apply_node_flags([once], set())[0]
        assert twice["data"]["declaredConnectivity"] == {"outputEnabled": False}

    def test_semantic_container_untouched(self):
        node = container("T", collapsed=True, element_type="try-catch")
        result = apply_node_flags([node], set())[0]
        assert "connectable" not in result
        assert "inputEnabled" not in result["data"]

    def test_custom_group_types(self):
        node = container("T", collapsed=True, element_type="try-catch")
        result = apply_node_flags([node], set(), group_types={"try-catch"})[0]
        assert result["connectable"] is False

    def test_expanded_group_without_history_untouched(self):
        node = group("G")
        result = apply_node_flags([node], set())[0]
        assert result["data"] == node["data"]
        assert "connectable" not in result


class TestUnitCountsAndHandles:
    def test_unit_count_only_on_containers(self):
        nodes = [container("A"), container("Empty"), unit("B", "A")]
        result = by_id(apply_unit_counts(nodes, {"A": 1}))
        assert result["A"]["data"]["unitCount"] == 1
        assert result["Empty"]["data"]["unitCount"] == 0
        assert "unitCount" not in result["B"]["data"]

    def test_toggle_handle_only_on_containers(self):
        handles = {}

        def handle_for(node_id):
            return handles.setdefault(node_id, lambda: node_id)

        result = by_id(attach_toggle_handles([container("A"), unit("B", "A")], handle_for))
        assert result["A"]["data"]["onToggleCollapse"] is handles["A"]
        assert "onToggleCollapse" not in result["B"]["data"]
