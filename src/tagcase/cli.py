"""CLI command handlers for tagcase.

Each public ``handle_*`` function corresponds to a CLI subcommand and
encapsulates the wiring and output for that command.  Handlers print
results to stdout; errors are printed to stderr as JSON and end the
process with exit code 1.
"""

from __future__ import annotations

import argparse
import json
import logging
import sys

from tagcase.case import CaseMapping
from tagcase.config import Settings, default_settings, load_settings
from tagcase.errors import ActionableError
from tagcase.logging import configure_file_logging, logger, set_level
from tagcase.tags.lookup import lookup_tag


def handle_case(args: argparse.Namespace, settings: Settings) -> None:
    """Print each input converted with the requested case mapping."""
    if args.mapping:
        mapping = CaseMapping.parse(args.mapping)
    else:
        mapping = settings.case.default_mapping
    logger.debug("Converting %d input(s) with %s", len(args.text), mapping.display_name)
    for text in args.text:
        print(mapping.map(text))


def handle_lookup(args: argparse.Namespace) -> None:
    """Print the value of one entry of a tag literal."""
    value, found = lookup_tag(args.literal, args.key)
    if not found:
        print(f"Tag '{args.key}' not found", file=sys.stderr)
        sys.exit(1)
    _write_raw(value)


def handle_parse(args: argparse.Namespace, settings: Settings) -> None:
    """Parse a tag literal and print the resulting values as JSON."""
    tag = settings.tag.build_tag(args.tag_key)
    if args.separator:
        tag.separator = args.separator
    if args.known:
        tag.known_pair_keys = list(args.known)
    if args.skip_unknown:
        tag.error_on_unknown_key = False

    tag.parse(args.literal)
    print(json.dumps({"raw": tag.raw, "values": tag.values}, indent=2))


def _write_raw(value: str) -> None:
    # Byte escapes that are not valid UTF-8 come back from unquote as
    # surrogates; write them out as the original bytes.
    sys.stdout.flush()
    sys.stdout.buffer.write(value.encode("utf-8", "surrogateescape") + b"\n")
    sys.stdout.buffer.flush()


def _load_settings(args: argparse.Namespace) -> Settings:
    if args.config:
        return load_settings(args.config)
    return default_settings()


def _configure_logging(args: argparse.Namespace, settings: Settings) -> None:
    level = logging.DEBUG if args.verbose else settings.logging.level
    set_level(level)
    log_dir = args.log_dir or settings.logging.log_dir
    if log_dir:
        configure_file_logging(log_dir, level=level)


def build_parser() -> argparse.ArgumentParser:
    """Build the CLI argument parser with all subcommands."""
    parser = argparse.ArgumentParser(
        prog="tagcase",
        description="Case conversion and struct-tag parsing utilities",
    )
    parser.add_argument(
        "--config",
        type=str,
        default=None,
        metavar="PATH",
        help="Settings file (default: built-in defaults)",
    )
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging")
    parser.add_argument(
        "--log-dir",
        type=str,
        default=None,
        metavar="DIR",
        help="Also write logs to a timestamped file in DIR",
    )
    sub = parser.add_subparsers(dest="command", required=True)

    # -- case ----------------------------------------------------------------
    case_p = sub.add_parser("case", help="Convert text to another case")
    case_p.add_argument(
        "--mapping",
        "-m",
        type=str,
        default=None,
        choices=[m.value for m in CaseMapping],
        help="Target case (default: [case].default_mapping from settings)",
    )
    case_p.add_argument("text", nargs="+", help="Text to convert")

    # -- lookup --------------------------------------------------------------
    lookup_p = sub.add_parser("lookup", help="Print one entry of a tag literal")
    lookup_p.add_argument("literal", type=str, help='Tag literal, e.g. json:"name" db:"id"')
    lookup_p.add_argument("key", type=str, help="Entry name to look up")

    # -- parse ---------------------------------------------------------------
    parse_p = sub.add_parser("parse", help="Parse key=value pairs from a tag literal")
    parse_p.add_argument("literal", type=str, help="Tag literal, optionally in backquotes")
    parse_p.add_argument(
        "--tag-key",
        type=str,
        default=None,
        help="Entry to parse (default: [tag].tag_key from settings)",
    )
    parse_p.add_argument("--separator", type=str, default=None, help="Pair separator")
    parse_p.add_argument(
        "--known",
        nargs="+",
        default=None,
        metavar="KEY",
        help="Allowed pair keys (default: accept all)",
    )
    parse_p.add_argument(
        "--skip-unknown",
        action="store_true",
        help="Skip keys that are not allowed instead of failing",
    )

    return parser


def main(argv: list[str] | None = None) -> None:
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        settings = _load_settings(args)
        _configure_logging(args, settings)

        if args.command == "case":
            handle_case(args, settings)
        elif args.command == "lookup":
            handle_lookup(args)
        elif args.command == "parse":
            handle_parse(args, settings)
    except ActionableError as exc:
        logger.debug("Command '%s' failed: %s", args.command, exc.error)
        print(json.dumps(exc.to_dict(), indent=2), file=sys.stderr)
        sys.exit(1)
    except Exception as exc:
        err = ActionableError.from_exception(exc, "cli", args.command)
        logger.debug("Command '%s' failed: %s", args.command, err.error, exc_info=True)
        print(json.dumps(err.to_dict(), indent=2), file=sys.stderr)
        sys.exit(1)
