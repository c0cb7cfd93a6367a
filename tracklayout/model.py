"""The track layout Model.

The model is a directed graph: switches, crossings and section boundaries
are nodes, and track sections are edges. It owns every Node and Section,
keyed by id, and is the only code that writes slot and endpoint references.

Invariants kept between calls:
- node and section ids are valid and unique within their collection
- every non-null slot or endpoint names an entity that exists
- node slots and section endpoints reference each other consistently
- destination addresses are unique

Mutations return a result code instead of raising. A refused mutation
leaves the model unchanged.

Added entities are copied: the object passed to add_node or add_section
is never linked by the model, and stays usable for another model.

The model does no locking. Lookups return live objects that must not be
kept across mutations.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from enum import Enum, auto
from types import MappingProxyType

from tracklayout.ids import ID_NULL, Identifier, SlotId, is_id
from tracklayout.nodes import Node, NodeTypeInfo
from tracklayout.section import Destination, Directionality, Section

logger = logging.getLogger(__name__)


class AddResult(Enum):
    """Outcome of Model.add_node and Model.add_section."""

    OK = auto()
    BAD_ID = auto()  # id is null or invalid
    DUPLICATE = auto()  # id or destination address already present
    HAS_REF = auto()  # entity references other entities

    @property
    def ok(self) -> bool:
        return self is AddResult.OK


class RemoveResult(Enum):
    """Outcome of Model.remove_node and Model.remove_section."""

    OK = auto()
    NOT_FOUND = auto()
    REFERENCED = auto()  # entity is still linked

    @property
    def ok(self) -> bool:
        return self is RemoveResult.OK


class LinkResult(Enum):
    """Outcome of Model.link."""

    OK = auto()
    NOT_FOUND = auto()  # unknown section, node or slot
    NODE_OCCUPIED = auto()
    SECTION_OCCUPIED = auto()
    SAME_NODE = auto()

    @property
    def ok(self) -> bool:
        return self is LinkResult.OK


class UnlinkResult(Enum):
    """Outcome of Model.unlink."""

    OK = auto()
    NOT_FOUND = auto()
    NOT_LINKED = auto()

    @property
    def ok(self) -> bool:
        return self is UnlinkResult.OK


class Model:
    """Container of nodes and sections enforcing referential integrity."""

    def __init__(self) -> None:
        self._nodes: dict[Identifier, Node] = {}
        self._sections: dict[Identifier, Section] = {}
        self._destinations: dict[str, Section] = {}

    @property
    def nodes(self) -> Mapping[Identifier, Node]:
        """Read-only live view of all nodes by id."""
        return MappingProxyType(self._nodes)

    @property
    def sections(self) -> Mapping[Identifier, Section]:
        """Read-only live view of all sections by id."""
        return MappingProxyType(self._sections)

    def node_count(self) -> int:
        return len(self._nodes)

    def section_count(self) -> int:
        return len(self._sections)

    def node(self, id: Identifier) -> Node | None:
        """Get a node by id, or None if not found."""
        return self._nodes.get(id)

    def section(self, id: Identifier) -> Section | None:
        """Get a section by id, or None if not found."""
        return self._sections.get(id)

    def destination(self, address: str) -> Section | None:
        """Get the section carrying the destination with this address."""
        return self._destinations.get(address)

    # -------------------------------------------------------------------------
    # Addition and removal
    # -------------------------------------------------------------------------

    def add_node(self, node: Node) -> AddResult:
        """Add a copy of an unlinked node to the model.

        Returns:
            OK, or BAD_ID, DUPLICATE or HAS_REF if the node was refused.
        """
        if not is_id(node.id):
            result = AddResult.BAD_ID
        elif node.id in self._nodes:
            result = AddResult.DUPLICATE
        elif node.has_references():
            result = AddResult.HAS_REF
        else:
            self._nodes[node.id] = node.copy()
            logger.debug("Added node %s (%s)", node.id, node.type.name)
            return AddResult.OK

        logger.debug("Refused node %r: %s", node.id, result.name)
        return result

    def new_node(self, type: NodeTypeInfo, id: Identifier) -> AddResult:
        """Construct a node and add it to the model."""
        return self.add_node(Node(type, id))

    def add_section(self, section: Section) -> AddResult:
        """Add a copy of an unlinked section to the model.

        A section whose destination address is already used by another
        section is refused as a DUPLICATE.

        Returns:
            OK, or BAD_ID, DUPLICATE or HAS_REF if the section was refused.
        """
        if not is_id(section.id):
            result = AddResult.BAD_ID
        elif section.id in self._sections:
            result = AddResult.DUPLICATE
        elif (
            section.destination is not None
            and section.destination.address in self._destinations
        ):
            result = AddResult.DUPLICATE
        elif section.has_references():
            result = AddResult.HAS_REF
        else:
            owned = section.copy()
            self._sections[section.id] = owned
            if owned.destination is not None:
                self._destinations[owned.destination.address] = owned
            logger.debug("Added section %s (%s)", section.id, section.dir.name)
            return AddResult.OK

        logger.debug("Refused section %r: %s", section.id, result.name)
        return result

    def new_section(
        self,
        id: Identifier,
        dir: Directionality = Directionality.UNIDIR,
        destination: Destination | None = None,
        length: int = 0,
    ) -> AddResult:
        """Construct a section and add it to the model."""
        return self.add_section(Section(id, dir, destination, length))

    def remove_node(self, id: Identifier) -> RemoveResult:
        """Remove a node that no section is linked to."""
        node = self._nodes.get(id)
        if node is None:
            return RemoveResult.NOT_FOUND
        # A linked section always occupies a slot of its nodes
        if node.has_references():
            logger.debug("Refused to remove node %s: still linked", id)
            return RemoveResult.REFERENCED
        del self._nodes[id]
        logger.debug("Removed node %s", id)
        return RemoveResult.OK

    def remove_section(self, id: Identifier) -> RemoveResult:
        """Remove a section that is not linked."""
        section = self._sections.get(id)
        if section is None:
            return RemoveResult.NOT_FOUND
        if section.has_references():
            logger.debug("Refused to remove section %s: still linked", id)
            return RemoveResult.REFERENCED
        del self._sections[id]
        if section.destination is not None:
            del self._destinations[section.destination.address]
        logger.debug("Removed section %s", id)
        return RemoveResult.OK

    # -------------------------------------------------------------------------
    # Linkage
    # -------------------------------------------------------------------------

    def link(
        self,
        section_id: Identifier,
        start_node_id: Identifier,
        start_slot: SlotId,
        end_node_id: Identifier,
        end_slot: SlotId,
    ) -> LinkResult:
        """Link two nodes with a section.

        Args:
            section_id: ID of the section to use
            start_node_id: ID of the node to connect to the section's start
            start_slot: Slot of the start node to connect to
            end_node_id: ID of the node to connect to the section's end
            end_slot: Slot of the end node to connect to

        Returns:
            OK, or NOT_FOUND if an id or slot does not resolve, SAME_NODE if
            both ends are the same node, NODE_OCCUPIED if a slot is taken,
            SECTION_OCCUPIED if the section is already linked.
        """
        section = self._sections.get(section_id)
        start = self._nodes.get(start_node_id)
        end = self._nodes.get(end_node_id)

        if (
            section is None
            or start is None
            or end is None
            or not 0 <= start_slot < start.slot_count
            or not 0 <= end_slot < end.slot_count
        ):
            result = LinkResult.NOT_FOUND
        elif start is end:
            result = LinkResult.SAME_NODE
        elif start.section(start_slot) != ID_NULL or end.section(end_slot) != ID_NULL:
            result = LinkResult.NODE_OCCUPIED
        elif section.is_connected():
            result = LinkResult.SECTION_OCCUPIED
        else:
            start._slots[start_slot] = section_id
            end._slots[end_slot] = section_id
            section._start = start_node_id
            section._end = end_node_id
            logger.debug(
                "Linked %s: %s[%d] -> %s[%d]",
                section_id,
                start_node_id,
                start_slot,
                end_node_id,
                end_slot,
            )
            return LinkResult.OK

        logger.debug("Refused to link %r: %s", section_id, result.name)
        return result

    def unlink(self, section_id: Identifier) -> UnlinkResult:
        """Disconnect a linked section from its nodes.

        The section stays in the model.
        """
        section = self._sections.get(section_id)
        if section is None:
            return UnlinkResult.NOT_FOUND
        if not section.is_connected():
            return UnlinkResult.NOT_LINKED

        for node_id in (section.start, section.end):
            node = self._nodes[node_id]
            slot = node.slot_of(section_id)
            node._slots[slot] = ID_NULL
        section._start = ID_NULL
        section._end = ID_NULL
        logger.debug("Unlinked %s", section_id)
        return UnlinkResult.OK

    def __repr__(self) -> str:
        return f"Model(nodes={len(self._nodes)}, sections={len(self._sections)})"
