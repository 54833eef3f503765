"""
Command line entry point for mettanorm.
"""

from __future__ import annotations

import argparse
import json
import sys
from importlib.metadata import PackageNotFoundError, version
from pathlib import Path

from pydantic import ValidationError

from . import analyze
from .config import load_config
from .knowledge import KnowledgeSetBuilder, validate_entities, validate_eventualities
from .logging import configure_logging
from .models.diagnostics import Severity
from .semantic import SemanticClassifier, to_metrics

VERBOSITY_LEVELS = {1: "INFO", 2: "DEBUG"}


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="mettanorm",
        description="mettanorm CLI: classify MeTTa reasoning output and validate knowledge documents.",
    )
    parser.add_argument(
        "--version",
        action="store_true",
        help="Print the installed mettanorm version and exit.",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="count",
        default=0,
        help="Emit logs to stderr (-v info, -vv debug).",
    )
    parser.add_argument(
        "--log-level",
        help="Explicit log level (overrides -v), for example DEBUG or WARNING.",
    )
    subparsers = parser.add_subparsers(dest="command")

    analyze_cmd = subparsers.add_parser(
        "analyze",
        help="Classify reasoning-engine output into propositions, contradictions, conflicts, violations and compliances.",
    )
    analyze_cmd.add_argument(
        "input",
        nargs="?",
        default="-",
        help="File with engine output, or '-' for stdin (default).",
    )
    analyze_cmd.add_argument(
        "--text",
        help="Engine output given inline instead of a file.",
    )
    analyze_cmd.add_argument(
        "--config",
        help="JSON configuration with extra resolver entries and templates.",
    )
    analyze_cmd.add_argument(
        "--metrics",
        action="store_true",
        help="Print the metrics projection instead of the raw classification.",
    )

    validate_cmd = subparsers.add_parser(
        "validate",
        help="Parse a knowledge document and report validation errors.",
    )
    validate_cmd.add_argument("input", help="Knowledge document (.metta) to validate.")
    return parser


def _read_input(parser: argparse.ArgumentParser, source: str) -> str:
    if source == "-":
        return sys.stdin.read()
    try:
        return Path(source).read_text(encoding="utf-8")
    except OSError as exc:
        parser.error(f"Failed to read {source}: {exc}")


def _print_json(payload) -> None:
    print(json.dumps(payload, ensure_ascii=False, indent=2))


def main(argv: list[str] | None = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)

    try:
        if args.log_level:
            configure_logging(args.log_level, exclusive=True)
        elif args.verbose:
            configure_logging(VERBOSITY_LEVELS.get(args.verbose, "DEBUG"), exclusive=True)
        else:
            configure_logging(exclusive=True)
    except ValueError as exc:
        parser.error(f"Invalid log level: {exc}")

    if args.version:
        try:
            print(version("mettanorm"))
        except PackageNotFoundError:
            print("mettanorm (not installed)")
        return 0

    if args.command == "analyze":
        text = args.text if args.text is not None else _read_input(parser, args.input)
        try:
            config = load_config(args.config)
        except FileNotFoundError as exc:
            parser.error(f"Config file not found: {exc.filename}")
        except ValidationError as exc:
            parser.error(f"Invalid config: {exc}")

        if args.metrics:
            classifier = SemanticClassifier.from_config(config)
            result = classifier.classify(text)
            metrics = to_metrics(result, classifier.resolver, classifier.templates)
            _print_json(metrics.model_dump(mode="json"))
        else:
            _print_json(analyze(text, config).model_dump(mode="json"))
        return 0

    if args.command == "validate":
        text = _read_input(parser, args.input)
        knowledge, diagnostics = KnowledgeSetBuilder().build_with_diagnostics(text)
        errors = validate_eventualities(knowledge) + validate_entities(knowledge)
        _print_json(
            {
                "facts": len(knowledge.facts),
                "eventualities": len(knowledge.eventualities),
                "entities": len(knowledge.entities),
                "errors": errors,
                "diagnostics": [d.model_dump(mode="json") for d in diagnostics],
            }
        )
        has_parse_errors = any(d.severity is Severity.ERROR for d in diagnostics)
        return 1 if errors or has_parse_errors else 0

    parser.print_help()
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
