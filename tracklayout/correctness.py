"""Completeness and correctness checks for track layouts.

A model is complete when every node slot and every section endpoint is
linked. It is correct when it is complete and every node is locally
correct, which rules out dead ends and unreachable starting positions for
routed trains.

Local correctness classifies each slot of a node by the travel its type
permits through it:

- INWARD: a train may arrive at the node through this slot
- OUTWARD: a train may leave the node through this slot
- BOTH: both of the above, the section must be bidirectional
- NONE: no routed train uses it, the section must forbid travel

A slot is INWARD when the node could route a train from it to another slot
and its section brings trains to the node (bidirectional, or
unidirectional ending here). The destination slot of such a route is
OUTWARD. An INWARD-only slot needs a unidirectional section ending at the
node, an OUTWARD-only slot one starting at the node.

End nodes are handled apart: a dead end is correct when its only section
is bidirectional or forbidden.
"""

from __future__ import annotations

from enum import Enum

from tracklayout.ids import Identifier
from tracklayout.model import Model
from tracklayout.nodes import END, Node
from tracklayout.section import Section


class SlotRole(Enum):
    """Classification of a node slot by the travel passing through it."""

    NONE = "none"
    INWARD = "inward"
    OUTWARD = "outward"
    BOTH = "both"


def is_complete(model: Model) -> bool:
    """Return True if no node slot or section endpoint is left unlinked.

    An empty model is complete.
    """
    for node in model.nodes.values():
        for slot in range(node.slot_count):
            if not node.section(slot):
                return False
    return all(section.is_connected() for section in model.sections.values())


def _slot_sections(model: Model, node: Node) -> list[Section] | None:
    """Resolve the sections in every slot of a node.

    Returns None if any slot is empty or names an unknown section.
    """
    sections: list[Section] = []
    for slot in range(node.slot_count):
        section = model.section(node.section(slot))
        if section is None:
            return None
        sections.append(section)
    return sections


def _brings_trains_to(section: Section, node_id: Identifier) -> bool:
    """Whether routed trains can arrive at the node through this section."""
    return section.is_bidir() or (section.is_unidir() and section.end == node_id)


def _classify(node: Node, sections: list[Section]) -> list[SlotRole]:
    count = node.slot_count
    inward = [False] * count
    outward = [False] * count

    for start in range(count):
        if not _brings_trains_to(sections[start], node.id):
            continue
        for end in range(count):
            if start != end and node.could_traverse(start, end):
                inward[start] = True
                outward[end] = True

    roles: list[SlotRole] = []
    for slot in range(count):
        if inward[slot] and outward[slot]:
            roles.append(SlotRole.BOTH)
        elif inward[slot]:
            roles.append(SlotRole.INWARD)
        elif outward[slot]:
            roles.append(SlotRole.OUTWARD)
        else:
            roles.append(SlotRole.NONE)
    return roles


def classify_slots(model: Model, node: Node) -> list[SlotRole] | None:
    """Classify every slot of a node as INWARD, OUTWARD, BOTH or NONE.

    Returns None if the node has an empty or dangling slot.
    """
    sections = _slot_sections(model, node)
    if sections is None:
        return None
    return _classify(node, sections)


def _slot_matches(role: SlotRole, section: Section, node_id: Identifier) -> bool:
    if role is SlotRole.BOTH:
        return section.is_bidir()
    if role is SlotRole.NONE:
        return not section.allows_travel()
    if not section.is_unidir():
        return False
    ends_here = section.end == node_id
    if role is SlotRole.INWARD:
        return ends_here
    return not ends_here


def is_locally_correct(model: Model, id: Identifier) -> bool:
    """Check a single node for local correctness.

    Returns False if no node has this id, or if the node has an empty slot.
    """
    node = model.node(id)
    if node is None:
        return False

    sections = _slot_sections(model, node)
    if sections is None:
        return False

    if node.type is END:
        # A dead end must not sit in the middle of a one-way flow
        return not sections[0].is_unidir()

    roles = _classify(node, sections)
    return all(
        _slot_matches(role, section, node.id)
        for role, section in zip(roles, sections)
    )


def is_correct(model: Model) -> bool:
    """Return True if the model is complete and every node is locally correct.

    An empty model is correct.
    """
    if not is_complete(model):
        return False
    return all(is_locally_correct(model, node_id) for node_id in model.nodes)


def incorrect_nodes(model: Model) -> list[Identifier]:
    """Return the sorted ids of all nodes that are not locally correct."""
    return sorted(
        node_id for node_id in model.nodes if not is_locally_correct(model, node_id)
    )
