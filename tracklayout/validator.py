"""Model validation report.

This module explains why a model is not correct, distinguishing between
errors (the model is not correct) and warnings (informational).
"""

from __future__ import annotations

from dataclasses import dataclass, field

from tracklayout.correctness import SlotRole, classify_slots, incorrect_nodes
from tracklayout.model import Model


@dataclass
class ValidationResult:
    """Result of model validation.

    Attributes:
        is_valid: True if the model is complete and correct (no errors).
        errors: List of issues that make the model incorrect.
        warnings: List of informational issues that don't affect correctness.
    """

    is_valid: bool
    errors: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)


def validate_model(model: Model) -> ValidationResult:
    """Validate a model and describe every problem found.

    Checks:
    - Completeness (empty node slots, unlinked sections)
    - Local correctness of every node
    - Destinations on sections that forbid travel (warning)
    - Nodes whose sections all forbid travel (warning)
    - Empty model (warning)

    Args:
        model: The model to validate.

    Returns:
        ValidationResult with errors and warnings.
    """
    errors: list[str] = []
    warnings: list[str] = []

    if not model.nodes and not model.sections:
        warnings.append("Model is empty")

    errors.extend(_check_completeness(model))
    _check_local_correctness(model, errors)
    _check_unreachable_destinations(model, warnings)
    _check_forbidden_nodes(model, warnings)

    return ValidationResult(
        is_valid=len(errors) == 0,
        errors=errors,
        warnings=warnings,
    )


def _check_completeness(model: Model) -> list[str]:
    """List every empty node slot and unlinked section.

    Args:
        model: The model to check.

    Returns:
        List of error messages.
    """
    errors: list[str] = []
    for node_id in sorted(model.nodes):
        node = model.nodes[node_id]
        for slot in range(node.slot_count):
            if not node.section(slot):
                errors.append(f"Node {node_id}: slot {slot} is not connected")
    for section_id in sorted(model.sections):
        if not model.sections[section_id].is_connected():
            errors.append(f"Section {section_id} is not linked")
    return errors


def _check_local_correctness(model: Model, errors: list[str]) -> None:
    """Report nodes that are complete but not locally correct.

    Incomplete nodes are already reported by the completeness check.

    Args:
        model: The model to check.
        errors: List to append errors to.
    """
    for node_id in incorrect_nodes(model):
        node = model.nodes[node_id]
        roles = classify_slots(model, node)
        if roles is None:
            continue
        summary = ", ".join(
            f"{slot}={role.value}:{model.sections[node.section(slot)].dir.name}"
            for slot, role in enumerate(roles)
        )
        errors.append(
            f"Node {node_id} ({node.type.name}) is not locally correct [{summary}]"
        )


def _check_unreachable_destinations(model: Model, warnings: list[str]) -> None:
    """Warn about destinations that no routed train can reach.

    Args:
        model: The model to check.
        warnings: List to append warnings to.
    """
    for section_id in sorted(model.sections):
        section = model.sections[section_id]
        if section.destination is not None and not section.allows_travel():
            warnings.append(
                f"Destination {section.destination.address} on section "
                f"{section_id} forbids travel"
            )


def _check_forbidden_nodes(model: Model, warnings: list[str]) -> None:
    """Warn about linked nodes that no routed train passes through.

    Args:
        model: The model to check.
        warnings: List to append warnings to.
    """
    for node_id in sorted(model.nodes):
        node = model.nodes[node_id]
        roles = classify_slots(model, node)
        if roles is None:
            continue
        if all(role is SlotRole.NONE for role in roles) and all(
            not model.sections[node.section(slot)].allows_travel()
            for slot in range(node.slot_count)
        ):
            warnings.append(f"Node {node_id} is inside a forbidden region")
