"""tracklayout CLI entry point."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from tracklayout.config import Config, load_config
from tracklayout.correctness import is_complete, is_correct
from tracklayout.io import ModelFormatError, read_model, write_model
from tracklayout.logging_config import setup_logging
from tracklayout.model import Model
from tracklayout.validator import validate_model


def print_model(model: Model) -> None:
    """Print every node and section of a model."""
    print("Nodes:")
    for node_id in sorted(model.nodes):
        print(f"\t{model.nodes[node_id]}")
    print()
    print("Sections:")
    for section_id in sorted(model.sections):
        print(f"\t{model.sections[section_id]}")


def check_model(model: Model, config: Config) -> bool:
    """Print a validation report and return True if requirements are met."""
    result = validate_model(model)
    complete = is_complete(model)
    correct = is_correct(model)

    print(f"Complete: {'yes' if complete else 'no'}")
    print(f"Correct: {'yes' if correct else 'no'}")

    if result.errors:
        print("Errors:")
        for error in result.errors:
            print(f"  - {error}")
    if config.check.show_warnings and result.warnings:
        print("Warnings:")
        for warning in result.warnings:
            print(f"  - {warning}")

    if config.check.require_complete and not complete:
        return False
    if config.check.require_correct and not correct:
        return False
    return True


def main(argv: list[str] | None = None) -> int:
    """Main entry point for the tracklayout command."""
    parser = argparse.ArgumentParser(
        description="tracklayout - Inspect and verify rail track layout models",
    )
    parser.add_argument(
        "model",
        type=Path,
        help="Path to the model document (JSON)",
    )
    parser.add_argument(
        "-c",
        "--config",
        type=Path,
        default=None,
        help="Path to config.toml (optional, uses defaults if not provided)",
    )
    parser.add_argument(
        "--check",
        action="store_true",
        help="Verify completeness and correctness; exit 1 if requirements fail",
    )
    parser.add_argument(
        "-o",
        "--output",
        type=Path,
        default=None,
        help="Write the normalized model document to this file",
    )
    parser.add_argument(
        "-q",
        "--quiet",
        action="store_true",
        help="Do not print the node and section listing",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Verbose output",
    )

    args = parser.parse_args(argv)

    # Load or create config
    if args.config:
        try:
            config = load_config(args.config)
        except FileNotFoundError:
            print(f"Error: Config file not found: {args.config}", file=sys.stderr)
            return 1
        except ValueError as e:
            print(f"Error: Invalid config {args.config}: {e}", file=sys.stderr)
            return 1
    else:
        config = Config()

    level = config.logging.level_number
    if args.verbose:
        level = min(level, logging.INFO)
    setup_logging(level, config.logging.file)

    if args.verbose:
        source = args.config if args.config else "defaults"
        print(f"Using configuration from {source}")

    try:
        model = read_model(args.model)
    except FileNotFoundError:
        print(f"Error: Model file not found: {args.model}", file=sys.stderr)
        return 1
    except ModelFormatError as e:
        print(f"Error: Could not read {args.model}: {e}", file=sys.stderr)
        return 1

    if args.verbose:
        print(
            f"Loaded {model.node_count()} nodes and "
            f"{model.section_count()} sections from {args.model}"
        )

    if not args.quiet:
        print_model(model)

    status = 0
    if args.check:
        if not args.quiet:
            print()
        if not check_model(model, config):
            status = 1

    if args.output is not None:
        write_model(args.output, model, indent=config.output.indent)
        print(f"Written: {args.output}")

    return status


if __name__ == "__main__":
    sys.exit(main())
