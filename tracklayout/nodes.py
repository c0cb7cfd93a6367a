"""Node types and the Node entity.

A node sits at the joint or intersection of sections: a switch, a crossing,
a plain joint between two sections, or a dead end. What a node can do is
fully described by its type, a shared immutable record holding the number
of slots and a matrix of which slot pairs a train could travel between.

Switch slots are numbered COMMON, STRAIGHT and DIVERGING:

- MOTORIZED switches can only be entered from the common track and pick
  the straight or diverging exit.
- PASSIVE switches can only be exited through the common track.
- FIXED switches send trains entering through common to straight, and
  accept trains from diverging towards common.
- MANUAL switches are locked straight; the diverging leg is not routable.

Crossing slots 0/1 form track A and slots 2/3 form track B. Travel between
the two tracks is impossible.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from tracklayout.ids import (
    ID_INVALID,
    ID_NULL,
    SLOT_INVALID,
    Identifier,
    SlotId,
    format_id,
)

MAX_SLOTS = 4

COMMON: SlotId = 0
STRAIGHT: SlotId = 1
DIVERGING: SlotId = 2


@dataclass(frozen=True)
class NodeTypeInfo:
    """Static description of a node kind.

    Attributes:
        name: Type name, as used in model documents.
        slot_count: Number of sections a node of this type connects.
        allowed_routes: ``allowed_routes[a][b]`` is True if a train could
            travel from the section in slot ``a`` to the section in slot ``b``.
    """

    name: str
    slot_count: int
    allowed_routes: tuple[tuple[bool, ...], ...] = field(repr=False)

    def could_traverse(self, from_slot: SlotId, to_slot: SlotId) -> bool:
        """Return True if travel between the two slots is possible.

        Invalid slots always yield False.
        """
        if not (0 <= from_slot < self.slot_count and 0 <= to_slot < self.slot_count):
            return False
        return self.allowed_routes[from_slot][to_slot]

    def __str__(self) -> str:
        return self.name


_ = False
X = True

# 0 <-> 1
THRU = NodeTypeInfo(
    "THRU",
    2,
    (
        (_, X),
        (X, _),
    ),
)

# 0 -> 1, 0 -> 2
MOTORIZED = NodeTypeInfo(
    "MOTORIZED",
    3,
    (
        (_, X, X),
        (_, _, _),
        (_, _, _),
    ),
)

# 1 -> 0, 2 -> 0
PASSIVE = NodeTypeInfo(
    "PASSIVE",
    3,
    (
        (_, _, _),
        (X, _, _),
        (X, _, _),
    ),
)

# 0 -> 1, 2 -> 0
FIXED = NodeTypeInfo(
    "FIXED",
    3,
    (
        (_, X, _),
        (_, _, _),
        (X, _, _),
    ),
)

# 0 -> 1
MANUAL = NodeTypeInfo(
    "MANUAL",
    3,
    (
        (_, X, _),
        (_, _, _),
        (_, _, _),
    ),
)

# 0 <-> 1, 2 <-> 3
CROSSING = NodeTypeInfo(
    "CROSSING",
    4,
    (
        (_, X, _, _),
        (X, _, _, _),
        (_, _, _, X),
        (_, _, X, _),
    ),
)

END = NodeTypeInfo("END", 1, ((_,),))

del _, X

NODE_TYPES: tuple[NodeTypeInfo, ...] = (
    THRU,
    MOTORIZED,
    PASSIVE,
    FIXED,
    MANUAL,
    CROSSING,
    END,
)

_BY_NAME = {node_type.name: node_type for node_type in NODE_TYPES}


def node_type_by_name(name: str) -> NodeTypeInfo | None:
    """Look up a node type by its name, or None if unknown."""
    return _BY_NAME.get(name)


class Node:
    """A node of the track graph.

    Slots hold the ids of connected sections, or ID_NULL. They are only
    written by Model, which keeps them consistent with section endpoints.
    Nodes are identified by their id: two nodes with the same id are equal.
    """

    def __init__(self, type: NodeTypeInfo, id: Identifier) -> None:
        self._type = type
        self._id = id
        self._slots: list[Identifier] = [ID_NULL] * type.slot_count
        self.metadata: dict[str, str] = {}

    @property
    def type(self) -> NodeTypeInfo:
        return self._type

    @property
    def id(self) -> Identifier:
        return self._id

    @property
    def slot_count(self) -> int:
        """Number of sections this node connects, fixed by its type."""
        return self._type.slot_count

    def section(self, slot: SlotId) -> Identifier:
        """Return the id of the section in a slot.

        Returns ID_NULL for an empty slot and ID_INVALID for a slot that
        does not exist.
        """
        if not 0 <= slot < self.slot_count:
            return ID_INVALID
        return self._slots[slot]

    def slot_of(self, section_id: Identifier) -> SlotId:
        """Return the slot occupied by a section, or SLOT_INVALID."""
        for slot, occupant in enumerate(self._slots):
            if occupant == section_id:
                return slot
        return SLOT_INVALID

    def could_traverse(self, from_slot: SlotId, to_slot: SlotId) -> bool:
        """Whether travel between two slots is possible for this node's type.

        Connected sections are not consulted.
        """
        return self._type.could_traverse(from_slot, to_slot)

    def has_references(self) -> bool:
        return any(occupant != ID_NULL for occupant in self._slots)

    def copy(self) -> Node:
        """Return an unlinked node with the same type, id and metadata."""
        node = Node(self._type, self._id)
        node.metadata = dict(self.metadata)
        return node

    def __hash__(self) -> int:
        return hash(self._id)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Node):
            return NotImplemented
        return self._id == other._id

    def __repr__(self) -> str:
        return f"Node({self._type.name}, {self._id!r})"

    def __str__(self) -> str:
        slots = "/".join(format_id(occupant) for occupant in self._slots)
        return f"[{self._type.name} node {self._id} {slots}]"
