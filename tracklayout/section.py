"""Sections and destinations.

A section is a stretch of track connecting exactly two nodes. Routed
trains usually travel a section from its start to its end only; a
bidirectional section allows both ways, in which case start and end are
arbitrary.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

from tracklayout.ids import ID_INVALID, ID_NULL, Identifier, SlotId, format_id


class Directionality(Enum):
    """Allowed travel directions for routed trains."""

    NONE = "NONE"  # routed travel is forbidden
    UNIDIR = "UNIDIR"  # start -> end only
    BIDIR = "BIDIR"  # start -> end and end -> start


@dataclass(frozen=True)
class Destination:
    """A named, addressed stopping point attached to a section.

    Attributes:
        address: Machine-friendly identifier used for routing. Unique
            within a Model. Must be ASCII.
        name: User-friendly label. Never inspected.
    """

    address: str
    name: str
    metadata: dict[str, str] = field(
        default_factory=dict, compare=False, hash=False, repr=False
    )


class Section:
    """A section of track between two nodes.

    Endpoints are either both ID_NULL (unlinked) or both node ids (linked).
    They are only written by Model.
    """

    def __init__(
        self,
        id: Identifier,
        dir: Directionality = Directionality.UNIDIR,
        destination: Destination | None = None,
        length: int = 0,
    ) -> None:
        if length < 0:
            raise ValueError(f"length must be non-negative, got {length}")
        self._id = id
        self._start: Identifier = ID_NULL
        self._end: Identifier = ID_NULL
        self._dir = dir
        self._destination = destination
        self._length = length
        self.metadata: dict[str, str] = {}

    @property
    def id(self) -> Identifier:
        return self._id

    @property
    def start(self) -> Identifier:
        """Id of the node at the start of this section, or ID_NULL."""
        return self._start

    @property
    def end(self) -> Identifier:
        """Id of the node at the end of this section, or ID_NULL."""
        return self._end

    @property
    def dir(self) -> Directionality:
        return self._dir

    @property
    def length(self) -> int:
        """Opaque length value, 0 when unknown."""
        return self._length

    @property
    def destination(self) -> Destination | None:
        return self._destination

    def is_destination(self) -> bool:
        return self._destination is not None

    def is_bidir(self) -> bool:
        return self._dir is Directionality.BIDIR

    def is_unidir(self) -> bool:
        return self._dir is Directionality.UNIDIR

    def allows_travel(self) -> bool:
        """True unless routed travel through this section is forbidden."""
        return self._dir is not Directionality.NONE

    def is_connected(self) -> bool:
        return self._start != ID_NULL

    def node(self, index: SlotId) -> Identifier:
        """Return start for index 0, end for index 1, ID_INVALID otherwise."""
        if index == 0:
            return self._start
        if index == 1:
            return self._end
        return ID_INVALID

    def can_traverse(self, from_index: SlotId, to_index: SlotId) -> bool:
        """Whether routed travel from node ``from_index`` to ``to_index`` is allowed.

        Indices follow node(): 0 is start, 1 is end.
        """
        if self._dir is Directionality.UNIDIR:
            return (from_index, to_index) == (0, 1)
        if self._dir is Directionality.BIDIR:
            return (from_index, to_index) in ((0, 1), (1, 0))
        return False

    def has_references(self) -> bool:
        return self._start != ID_NULL or self._end != ID_NULL

    def copy(self) -> Section:
        """Return an unlinked section with the same attributes and metadata."""
        section = Section(self._id, self._dir, self._destination, self._length)
        section.metadata = dict(self.metadata)
        return section

    def __hash__(self) -> int:
        return hash(self._id)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Section):
            return NotImplemented
        return self._id == other._id

    def __repr__(self) -> str:
        return f"Section({self._id!r}, {self._dir.name})"

    def __str__(self) -> str:
        return f"[Section {self._id} {format_id(self._start)}/{format_id(self._end)}]"
