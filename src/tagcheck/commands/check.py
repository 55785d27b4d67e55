"""
tagcheck.commands.check - Check Java sources for a Javadoc tag.
"""

from __future__ import annotations

import argparse
import fnmatch
import logging
import sys
from pathlib import Path
from typing import Any, Iterable, List, Optional

from tagcheck.config import (
    find_config_file,
    get_output_settings,
    get_scan_settings,
    get_tag_specs,
    load_config,
)
from tagcheck.core.check import TagSpec, WriteTagCheck
from tagcheck.core.models import FileResult, InvalidConfigurationError
from tagcheck.parsers import JavaSource
from tagcheck.reporters import DiagnosticCollector, JsonReporter, TextReporter

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_ERRORS = 1
EXIT_CONFIG = 2


def run(args: argparse.Namespace) -> int:
    """
    Run the check command.

    Args:
        args: Parsed command line arguments

    Returns:
        Exit code (0 for success, 1 for error diagnostics, 2 for bad configuration)
    """
    config = load_configuration(args)
    if config is None:
        return EXIT_CONFIG

    try:
        specs = build_specs(args, config)
        scan = get_scan_settings(config)
        output = get_output_settings(config)
    except InvalidConfigurationError as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_CONFIG

    if not specs:
        print(
            "Error: No checks configured. Pass --tag or run 'tagcheck init'.",
            file=sys.stderr,
        )
        return EXIT_CONFIG

    paths = args.paths or [Path(p) for p in scan["paths"]]
    files = collect_files(paths, include=scan["include"], exclude=scan["exclude"])
    logger.debug("Checking %d files with %d checks", len(files), len(specs))

    checks = [WriteTagCheck(spec) for spec in specs]
    collector = DiagnosticCollector()
    results = [check_file(file_path, checks, collector) for file_path in files]

    output_format = args.format or output["format"]
    show_ignored = args.show_ignored or output["show_ignored"]

    if output_format == "json":
        reporter = JsonReporter(show_ignored=show_ignored)
    else:
        reporter = TextReporter(show_ignored=show_ignored, quiet=args.quiet)
    reporter.report(results, collector)

    return EXIT_ERRORS if collector.has_errors() else EXIT_OK


def load_configuration(args: argparse.Namespace) -> Optional[dict]:
    """Load configuration from file or use defaults."""
    if args.config:
        config_path = args.config
        if not config_path.exists():
            print(f"Error: Config file not found: {config_path}", file=sys.stderr)
            return None
    else:
        config_path = find_config_file(Path.cwd())

    try:
        return load_config(config_path)
    except (OSError, InvalidConfigurationError) as e:
        print(f"Error loading config: {e}", file=sys.stderr)
        return None


def build_specs(args: argparse.Namespace, config: dict[str, Any]) -> List[TagSpec]:
    """Use the command-line check if ``--tag`` was given, else the configured checks."""
    if args.tag is None:
        return get_tag_specs(config)

    tokens = None
    if args.tokens:
        tokens = [t.strip() for t in args.tokens.split(",") if t.strip()]
    return [
        TagSpec.create(
            tag=args.tag,
            tag_format=args.tag_format,
            tag_severity=args.tag_severity,
            severity=args.severity,
            tokens=tokens,
            literal=args.literal,
        )
    ]


def collect_files(
    paths: Iterable[Path],
    include: List[str],
    exclude: List[str],
) -> List[Path]:
    """
    Expand paths into the sorted list of source files to check.

    Files named explicitly are always checked; directories are searched
    recursively for names matching ``include`` and not matching ``exclude``.
    """
    found: list[Path] = []
    seen: set[Path] = set()

    def add(file_path: Path) -> None:
        resolved = file_path.resolve()
        if resolved not in seen:
            seen.add(resolved)
            found.append(file_path)

    for path in paths:
        if path.is_file():
            add(path)
            continue
        if not path.is_dir():
            logger.warning("Skipping %s: no such file or directory", path)
            continue
        for candidate in sorted(path.rglob("*")):
            if not candidate.is_file():
                continue
            if not any(fnmatch.fnmatch(candidate.name, pattern) for pattern in include):
                continue
            relative = candidate.relative_to(path).as_posix()
            if any(fnmatch.fnmatch(relative, pattern) for pattern in exclude):
                continue
            add(candidate)
    return found


def check_file(
    file_path: Path,
    checks: List[WriteTagCheck],
    collector: DiagnosticCollector,
) -> FileResult:
    """Run every check over one file, sending diagnostics to ``collector``."""
    result = FileResult(path=str(file_path))
    try:
        source = JavaSource.from_file(file_path)
    except OSError as e:
        result.error = str(e)
        return result

    result.declarations = len(source.declarations())
    for check in checks:
        result.diagnostics.extend(check.check_source(source, collector))
    return result
