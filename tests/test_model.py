"""Tests for the Model mutation API."""

import pytest

from tracklayout.ids import ID_INVALID, ID_NULL
from tracklayout.model import (
    AddResult,
    LinkResult,
    Model,
    RemoveResult,
    UnlinkResult,
)
from tracklayout.nodes import END, MOTORIZED, THRU, Node
from tracklayout.section import Destination, Directionality, Section


def make_pair_model() -> Model:
    """Create a model with two THRU nodes and two unlinked sections."""
    model = Model()
    model.new_node(THRU, "n1")
    model.new_node(THRU, "n2")
    model.new_section("s1", Directionality.BIDIR)
    model.new_section("s2", Directionality.BIDIR)
    return model


def snapshot(model: Model) -> tuple:
    """Capture all references held by a model."""
    nodes = {
        node_id: tuple(node.section(i) for i in range(node.slot_count))
        for node_id, node in model.nodes.items()
    }
    sections = {
        section_id: (section.start, section.end)
        for section_id, section in model.sections.items()
    }
    return nodes, sections


# =============================================================================
# Addition
# =============================================================================


class TestAddNode:
    """Tests for Model.add_node."""

    def test_add(self):
        model = Model()
        assert model.add_node(Node(THRU, "n1")) is AddResult.OK
        assert model.node("n1") is not None
        assert model.node_count() == 1

    def test_bad_id(self):
        model = Model()
        assert model.add_node(Node(THRU, ID_NULL)) is AddResult.BAD_ID
        assert model.add_node(Node(THRU, ID_INVALID)) is AddResult.BAD_ID
        assert model.node_count() == 0

    def test_duplicate(self):
        """Adding the same id twice is refused and changes nothing."""
        model = Model()
        assert model.new_node(THRU, "n1") is AddResult.OK
        assert model.new_node(END, "n1") is AddResult.DUPLICATE
        assert model.node_count() == 1
        assert model.node("n1").type is THRU

    def test_node_ids_independent_of_section_ids(self):
        model = Model()
        assert model.new_node(THRU, "x").ok
        assert model.new_section("x").ok

    def test_has_ref(self):
        """A node linked in another model cannot be admitted."""
        other = make_pair_model()
        other.link("s1", "n1", 0, "n2", 0)
        model = Model()
        assert model.add_node(other.node("n1")) is AddResult.HAS_REF
        assert model.node_count() == 0


class TestAddSection:
    """Tests for Model.add_section."""

    def test_add(self):
        model = Model()
        assert model.add_section(Section("s1")) is AddResult.OK
        assert model.section("s1") is not None
        assert model.section_count() == 1

    def test_bad_id(self):
        model = Model()
        assert model.new_section(ID_NULL) is AddResult.BAD_ID
        assert model.new_section("#s1") is AddResult.BAD_ID

    def test_duplicate_id(self):
        model = Model()
        model.new_section("s1")
        assert model.new_section("s1", Directionality.BIDIR) is AddResult.DUPLICATE
        assert model.section("s1").dir is Directionality.UNIDIR

    def test_duplicate_destination_address(self):
        model = Model()
        assert model.new_section("s1", destination=Destination("A1", "One")).ok
        result = model.new_section("s2", destination=Destination("A1", "Two"))
        assert result is AddResult.DUPLICATE
        assert model.section("s2") is None

    def test_distinct_addresses(self):
        model = Model()
        assert model.new_section("s1", destination=Destination("A1", "Same")).ok
        assert model.new_section("s2", destination=Destination("A2", "Same")).ok
        assert model.destination("A2").id == "s2"
        assert model.destination("A3") is None

    def test_has_ref(self):
        other = make_pair_model()
        other.link("s1", "n1", 0, "n2", 0)
        model = Model()
        assert model.add_section(other.section("s1")) is AddResult.HAS_REF


# =============================================================================
# Ownership
# =============================================================================


class TestOwnership:
    """Tests that each model keeps its own copy of added entities."""

    def test_shared_section_stays_independent(self):
        section = Section("s1", Directionality.BIDIR)
        first = Model()
        second = Model()
        for model in (first, second):
            model.new_node(THRU, "n1")
            model.new_node(THRU, "n2")
            assert model.add_section(section).ok

        assert first.link("s1", "n1", 0, "n2", 0).ok
        assert first.section("s1").start == "n1"
        assert second.section("s1").start == ID_NULL
        assert section.start == ID_NULL
        assert second.unlink("s1") is UnlinkResult.NOT_LINKED
        assert second.link("s1", "n2", 1, "n1", 1).ok
        assert first.section("s1").end == "n2"

    def test_added_node_is_copied(self):
        node = Node(THRU, "n1")
        node.metadata["label"] = "West"
        model = Model()
        assert model.add_node(node).ok
        assert model.node("n1") is not node
        assert model.node("n1").metadata == {"label": "West"}
        node.metadata["label"] = "East"
        assert model.node("n1").metadata == {"label": "West"}

    def test_removed_address_can_be_reused(self):
        model = Model()
        assert model.new_section("s1", destination=Destination("A1", "One")).ok
        assert model.remove_section("s1").ok
        assert model.destination("A1") is None
        assert model.new_section("s2", destination=Destination("A1", "Two")).ok
        assert model.destination("A1").id == "s2"


# =============================================================================
# Removal
# =============================================================================


class TestRemove:
    """Tests for Model.remove_node and Model.remove_section."""

    def test_remove_node(self):
        model = make_pair_model()
        assert model.remove_node("n1") is RemoveResult.OK
        assert model.node("n1") is None

    def test_remove_missing(self):
        model = Model()
        assert model.remove_node("n1") is RemoveResult.NOT_FOUND
        assert model.remove_section("s1") is RemoveResult.NOT_FOUND

    def test_remove_referenced_node(self):
        """A linked node stays in the model."""
        model = make_pair_model()
        model.link("s1", "n1", 0, "n2", 0)
        assert model.remove_node("n1") is RemoveResult.REFERENCED
        assert model.node("n1") is not None
        assert model.section("s1").start == "n1"

    def test_remove_referenced_section(self):
        model = make_pair_model()
        model.link("s1", "n1", 0, "n2", 0)
        assert model.remove_section("s1") is RemoveResult.REFERENCED
        assert model.section("s1") is not None

    def test_remove_after_unlink(self):
        model = make_pair_model()
        model.link("s1", "n1", 0, "n2", 0)
        assert model.unlink("s1").ok
        assert model.remove_section("s1").ok
        assert model.remove_node("n1").ok
        assert model.remove_node("n2").ok


# =============================================================================
# Linkage
# =============================================================================


class TestLink:
    """Tests for Model.link and Model.unlink."""

    def test_link(self):
        model = make_pair_model()
        assert model.link("s1", "n1", 1, "n2", 0) is LinkResult.OK

        n1, n2, s1 = model.node("n1"), model.node("n2"), model.section("s1")
        assert n1.section(1) == "s1"
        assert n1.section(0) == ID_NULL
        assert n2.section(0) == "s1"
        assert s1.start == "n1"
        assert s1.end == "n2"

    def test_not_found(self):
        model = make_pair_model()
        before = snapshot(model)
        assert model.link("s9", "n1", 0, "n2", 0) is LinkResult.NOT_FOUND
        assert model.link("s1", "n9", 0, "n2", 0) is LinkResult.NOT_FOUND
        assert model.link("s1", "n1", 0, "n9", 0) is LinkResult.NOT_FOUND
        assert snapshot(model) == before

    def test_slot_out_of_range(self):
        model = make_pair_model()
        before = snapshot(model)
        assert model.link("s1", "n1", 2, "n2", 0) is LinkResult.NOT_FOUND
        assert model.link("s1", "n1", 0, "n2", 5) is LinkResult.NOT_FOUND
        assert model.link("s1", "n1", -1, "n2", 0) is LinkResult.NOT_FOUND
        assert snapshot(model) == before

    def test_same_node(self):
        model = make_pair_model()
        before = snapshot(model)
        assert model.link("s1", "n1", 0, "n1", 1) is LinkResult.SAME_NODE
        assert snapshot(model) == before

    def test_node_occupied(self):
        model = make_pair_model()
        model.link("s1", "n1", 0, "n2", 0)
        before = snapshot(model)
        assert model.link("s2", "n1", 0, "n2", 1) is LinkResult.NODE_OCCUPIED
        assert model.link("s2", "n1", 1, "n2", 0) is LinkResult.NODE_OCCUPIED
        assert snapshot(model) == before

    def test_section_occupied(self):
        model = make_pair_model()
        model.new_node(THRU, "n3")
        model.link("s1", "n1", 0, "n2", 0)
        before = snapshot(model)
        assert model.link("s1", "n1", 1, "n3", 0) is LinkResult.SECTION_OCCUPIED
        assert snapshot(model) == before

    def test_unlink_restores_state(self):
        """link followed by unlink restores the pre-link state."""
        model = make_pair_model()
        before = snapshot(model)
        model.link("s1", "n1", 1, "n2", 0)
        assert model.unlink("s1") is UnlinkResult.OK
        assert snapshot(model) == before

    def test_unlink_keeps_other_links(self):
        model = make_pair_model()
        model.link("s1", "n1", 0, "n2", 0)
        model.link("s2", "n1", 1, "n2", 1)
        model.unlink("s1")
        assert model.node("n1").section(1) == "s2"
        assert model.node("n2").section(1) == "s2"
        assert model.section("s2").start == "n1"

    def test_unlink_errors(self):
        model = make_pair_model()
        assert model.unlink("s9") is UnlinkResult.NOT_FOUND
        assert model.unlink("s1") is UnlinkResult.NOT_LINKED

    def test_link_order_independent(self):
        """Links touching disjoint slots commute."""
        first = make_pair_model()
        first.link("s1", "n1", 0, "n2", 0)
        first.link("s2", "n1", 1, "n2", 1)

        second = make_pair_model()
        second.link("s2", "n1", 1, "n2", 1)
        second.link("s1", "n1", 0, "n2", 0)

        assert snapshot(first) == snapshot(second)

    def test_relink_after_unlink(self):
        model = make_pair_model()
        model.link("s1", "n1", 0, "n2", 0)
        model.unlink("s1")
        assert model.link("s1", "n2", 1, "n1", 1).ok
        assert model.section("s1").start == "n2"

    def test_switch_slots(self):
        model = Model()
        model.new_node(MOTORIZED, "sw")
        for i in range(3):
            model.new_node(END, f"e{i}")
            model.new_section(f"s{i}")
            assert model.link(f"s{i}", "sw", i, f"e{i}", 0).ok
        assert [model.node("sw").section(i) for i in range(3)] == ["s0", "s1", "s2"]


class TestViews:
    """Tests for read-only collection views."""

    def test_views_are_live(self):
        model = Model()
        nodes = model.nodes
        model.new_node(THRU, "n1")
        assert "n1" in nodes

    def test_views_are_read_only(self):
        model = Model()
        with pytest.raises(TypeError):
            model.nodes["n1"] = Node(THRU, "n1")  # type: ignore[index]
        assert model.node("n1") is None

    def test_lookup_missing(self):
        model = Model()
        assert model.node("n1") is None
        assert model.section("s1") is None
