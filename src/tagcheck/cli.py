"""
tagcheck.cli - Command-line interface.

Main entry point for the tagcheck CLI tool.
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from tagcheck import __version__
from tagcheck.commands import check, config_cmd, init_cmd
from tagcheck.core.models import DeclarationKind, Severity

SEVERITY_CHOICES = [s.value for s in Severity]


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser."""
    parser = argparse.ArgumentParser(
        prog="tagcheck",
        description="Javadoc tag verification for Java sources",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  tagcheck check                              # Run checks from .tagcheck.toml
  tagcheck check src --tag @author            # Require @author on every type
  tagcheck check --tag @version --tag-format '\\d+\\.\\d+'
  tagcheck check --format json                # Output JSON for tooling

Configuration:
  tagcheck init                 # Create .tagcheck.toml in current directory
  tagcheck config path          # Show config file location
  tagcheck config show          # View effective settings

For detailed command help: tagcheck <command> --help
        """,
    )

    # Global options
    parser.add_argument(
        "--version",
        action="version",
        version=f"tagcheck {__version__}",
    )
    parser.add_argument(
        "--config",
        type=Path,
        help="Path to configuration file",
        metavar="PATH",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Verbose output",
    )
    parser.add_argument(
        "-q",
        "--quiet",
        action="store_true",
        help="Suppress non-error output",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # check command
    check_parser = subparsers.add_parser(
        "check",
        help="Check Javadoc comments for a tag",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=f"""
Outcomes:
  type.missingTag   No Javadoc, or the Javadoc lacks the tag (--severity)
  javadoc.writeTag  Tag found with acceptable content (--tag-severity)
  type.tagFormat    Tag found but content fails --tag-format (--severity)

Tokens: {', '.join(k.value for k in DeclarationKind)}
""",
    )
    check_parser.add_argument(
        "paths",
        nargs="*",
        type=Path,
        help="Files or directories to check (default: [scan] paths from config)",
    )
    check_parser.add_argument(
        "--tag",
        help="Tag to require, e.g. @author (replaces configured checks)",
    )
    check_parser.add_argument(
        "--tag-format",
        help="Regex the tag content must contain a match of",
        metavar="REGEX",
    )
    check_parser.add_argument(
        "--tag-severity",
        choices=SEVERITY_CHOICES,
        default="info",
        help="Severity when the tag is found (default: info)",
    )
    check_parser.add_argument(
        "--severity",
        choices=SEVERITY_CHOICES,
        default="error",
        help="Severity for missing tags and format mismatches (default: error)",
    )
    check_parser.add_argument(
        "--tokens",
        help="Comma-separated declaration kinds (default: class,interface,enum,annotation)",
        metavar="KINDS",
    )
    check_parser.add_argument(
        "--literal",
        action="store_true",
        help="Match the tag literally instead of as a regex fragment",
    )
    check_parser.add_argument(
        "--format",
        choices=["text", "json"],
        default=None,
        help="Output format (default: [output] format from config, else text)",
    )
    check_parser.add_argument(
        "--show-ignored",
        action="store_true",
        help="Also print diagnostics with severity 'ignore'",
    )

    # init command
    init_parser = subparsers.add_parser(
        "init",
        help="Create .tagcheck.toml in the current directory",
    )
    init_parser.add_argument(
        "--force",
        action="store_true",
        help="Overwrite an existing config file",
    )

    # config command
    config_parser = subparsers.add_parser(
        "config",
        help="Show configuration",
    )
    config_parser.add_argument(
        "config_action",
        choices=["show", "path"],
        help="show: print effective settings, path: print config file location",
    )

    return parser


def configure_logging(verbose: bool) -> None:
    """Send log records to stderr; DEBUG when verbose, WARNING otherwise."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point."""
    parser = create_parser()
    args = parser.parse_args(argv)

    configure_logging(args.verbose)

    if not args.command:
        parser.print_help()
        return 0

    try:
        if args.command == "check":
            return check.run(args)
        elif args.command == "init":
            return init_cmd.run(args)
        elif args.command == "config":
            return config_cmd.run(args)
        else:
            parser.print_help()
            return 1
    except KeyboardInterrupt:
        print("\nInterrupted", file=sys.stderr)
        return 130


if __name__ == "__main__":
    sys.exit(main())
