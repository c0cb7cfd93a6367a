"""Reading and writing model documents.

A model document is a JSON array of exactly two objects: nodes by id, then
sections by id.

    [
      {"n1": {"type": "THRU"}, "n2": {"type": "END", "metadata": {...}}},
      {"s1": {"link": {"startNode": "n1", "startSlot": 0,
                       "endNode": "n2", "endSlot": 0},
              "dir": "BIDIR", "length": 120,
              "dest": {"address": "A1", "name": "Depot"}}}
    ]

Everything but a node's "type" is optional. A section without "dir" is
unidirectional. Reading only guarantees a consistent model, not a complete
or correct one.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import IO, Any

from tracklayout.model import Model
from tracklayout.nodes import Node, node_type_by_name
from tracklayout.section import Destination, Directionality, Section

logger = logging.getLogger(__name__)

_NODE_FIELDS = {"type", "metadata"}
_SECTION_FIELDS = {"link", "dir", "length", "dest", "metadata"}
_LINK_FIELDS = ("startNode", "startSlot", "endNode", "endSlot")
_DEST_FIELDS = {"address", "name", "metadata"}


class ModelFormatError(Exception):
    """Error while reading a model document."""

    pass


class InvalidFormatError(ModelFormatError):
    """The document could not be parsed."""

    pass


class IllegalModelError(ModelFormatError):
    """The document describes a model that violates model invariants."""

    pass


# =============================================================================
# Reading
# =============================================================================


def _expect(value: Any, kind: type, what: str) -> Any:
    # bool is an int subclass but never a valid slot or length
    if not isinstance(value, kind) or (kind is int and isinstance(value, bool)):
        raise InvalidFormatError(f"{what}: expected {kind.__name__}")
    return value


def _check_fields(data: dict[str, Any], allowed: set[str], what: str) -> None:
    for key in data:
        if key not in allowed:
            raise InvalidFormatError(f"{what}: unused field found: {key}")


def _parse_metadata(data: dict[str, Any], what: str) -> dict[str, str]:
    raw = _expect(data.get("metadata", {}), dict, f"{what} metadata")
    return {
        key: _expect(value, str, f"{what} metadata {key}")
        for key, value in raw.items()
    }


def _parse_node(node_id: str, data: Any) -> Node:
    what = f"node {node_id}"
    _expect(data, dict, what)
    _check_fields(data, _NODE_FIELDS, what)
    if "type" not in data:
        raise InvalidFormatError(f"{what}: field not found: type")

    type_name = _expect(data["type"], str, f"{what} type")
    node_type = node_type_by_name(type_name)
    if node_type is None:
        raise InvalidFormatError(f"{what}: unknown node type {type_name!r}")

    node = Node(node_type, node_id)
    node.metadata.update(_parse_metadata(data, what))
    return node


def _parse_destination(section_id: str, data: Any) -> Destination:
    what = f"section {section_id} dest"
    _expect(data, dict, what)
    _check_fields(data, _DEST_FIELDS, what)
    for key in ("address", "name"):
        if key not in data:
            raise InvalidFormatError(f"{what}: field not found: {key}")
    return Destination(
        address=_expect(data["address"], str, f"{what} address"),
        name=_expect(data["name"], str, f"{what} name"),
        metadata=_parse_metadata(data, what),
    )


def _parse_link(section_id: str, data: Any) -> tuple[str, int, str, int]:
    what = f"section {section_id} link"
    _expect(data, dict, what)
    _check_fields(data, set(_LINK_FIELDS), what)
    for key in _LINK_FIELDS:
        if key not in data:
            raise InvalidFormatError(f"{what}: field not found: {key}")
    return (
        _expect(data["startNode"], str, f"{what} startNode"),
        _expect(data["startSlot"], int, f"{what} startSlot"),
        _expect(data["endNode"], str, f"{what} endNode"),
        _expect(data["endSlot"], int, f"{what} endSlot"),
    )


def _parse_section(
    section_id: str, data: Any
) -> tuple[Section, tuple[str, int, str, int] | None]:
    what = f"section {section_id}"
    _expect(data, dict, what)
    _check_fields(data, _SECTION_FIELDS, what)

    dir_name = _expect(data.get("dir", "UNIDIR"), str, f"{what} dir")
    try:
        direction = Directionality[dir_name]
    except KeyError:
        raise InvalidFormatError(
            f"{what}: unknown directionality {dir_name!r}"
        ) from None

    length = _expect(data.get("length", 0), int, f"{what} length")
    if length < 0:
        raise InvalidFormatError(f"{what}: length must be non-negative")

    destination = None
    if "dest" in data:
        destination = _parse_destination(section_id, data["dest"])

    section = Section(section_id, direction, destination, length)
    section.metadata.update(_parse_metadata(data, what))

    link = _parse_link(section_id, data["link"]) if "link" in data else None
    return section, link


def model_from_data(data: Any) -> Model:
    """Build a Model from a decoded model document.

    Args:
        data: The decoded JSON value.

    Returns:
        The described Model.

    Raises:
        InvalidFormatError: If the document does not have the expected shape.
        IllegalModelError: If the Model refuses an entity or a link.
    """
    _expect(data, list, "document")
    if len(data) == 0:
        raise InvalidFormatError("main array is empty")
    if len(data) == 1:
        raise InvalidFormatError("section data not found")
    if len(data) > 2:
        raise InvalidFormatError("unused data in main array found")

    nodes_data = _expect(data[0], dict, "nodes")
    sections_data = _expect(data[1], dict, "sections")

    model = Model()

    for node_id, node_data in nodes_data.items():
        result = model.add_node(_parse_node(node_id, node_data))
        if not result.ok:
            raise IllegalModelError(f"node {node_id!r} refused: {result.name}")

    for section_id, section_data in sections_data.items():
        section, link = _parse_section(section_id, section_data)
        result = model.add_section(section)
        if not result.ok:
            raise IllegalModelError(
                f"section {section_id!r} refused: {result.name}"
            )
        if link is not None:
            link_result = model.link(section_id, *link)
            if not link_result.ok:
                raise IllegalModelError(
                    f"section {section_id!r} link refused: {link_result.name}"
                )

    logger.info(
        "Read model with %d nodes and %d sections",
        model.node_count(),
        model.section_count(),
    )
    return model


def loads_model(text: str) -> Model:
    """Read a model from a JSON string."""
    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        raise InvalidFormatError(f"JSON parse error: {e}") from e
    return model_from_data(data)


def read_model(source: str | Path | IO[str]) -> Model:
    """Read a model from a file path or an open text stream.

    Raises:
        FileNotFoundError: If the path does not exist.
        InvalidFormatError: If the input could not be parsed.
        IllegalModelError: If the input describes an inconsistent model.
    """
    try:
        if isinstance(source, (str, Path)):
            with open(source, encoding="utf-8") as f:
                text = f.read()
        else:
            text = source.read()
    except UnicodeDecodeError as e:
        raise InvalidFormatError(f"encoding error: {e}") from e
    return loads_model(text)


# =============================================================================
# Writing
# =============================================================================


def _section_to_dict(model: Model, section: Section) -> dict[str, Any]:
    data: dict[str, Any] = {}
    if section.is_connected():
        start = model.nodes[section.start]
        end = model.nodes[section.end]
        data["link"] = {
            "startNode": section.start,
            "startSlot": start.slot_of(section.id),
            "endNode": section.end,
            "endSlot": end.slot_of(section.id),
        }
    data["dir"] = section.dir.value
    if section.length > 0:
        data["length"] = section.length
    if section.destination is not None:
        dest: dict[str, Any] = {
            "address": section.destination.address,
            "name": section.destination.name,
        }
        if section.destination.metadata:
            dest["metadata"] = dict(section.destination.metadata)
        data["dest"] = dest
    if section.metadata:
        data["metadata"] = dict(section.metadata)
    return data


def model_to_data(model: Model) -> list[dict[str, Any]]:
    """Convert a model to a JSON-serializable document, ids in sorted order."""
    nodes: dict[str, Any] = {}
    for node_id in sorted(model.nodes):
        node = model.nodes[node_id]
        node_data: dict[str, Any] = {"type": node.type.name}
        if node.metadata:
            node_data["metadata"] = dict(node.metadata)
        nodes[node_id] = node_data

    sections = {
        section_id: _section_to_dict(model, model.sections[section_id])
        for section_id in sorted(model.sections)
    }
    return [nodes, sections]


def dumps_model(model: Model, indent: int | None = 2) -> str:
    """Serialize a model to a JSON string."""
    return json.dumps(model_to_data(model), indent=indent)


def write_model(target: str | Path | IO[str], model: Model, indent: int | None = 2) -> None:
    """Write a model document to a file path or an open text stream.

    Existing files are overwritten.
    """
    text = dumps_model(model, indent=indent)
    if isinstance(target, (str, Path)):
        with open(target, "w", encoding="utf-8") as f:
            f.write(text)
            f.write("\n")
    else:
        target.write(text)
        target.write("\n")
    logger.info("Wrote model with %d nodes", model.node_count())
