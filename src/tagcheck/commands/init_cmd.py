"""
tagcheck.commands.init_cmd - Create a starter .tagcheck.toml.
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

import tomlkit

from tagcheck.config.defaults import CONFIG_FILE_NAME, DEFAULT_CONFIG


def build_document() -> tomlkit.TOMLDocument:
    """Build the starter config, with comments explaining each setting."""
    doc = tomlkit.document()
    doc.add(tomlkit.comment("tagcheck configuration"))
    doc.add(tomlkit.nl())

    scan = tomlkit.table()
    scan.add("paths", DEFAULT_CONFIG["scan"]["paths"])
    scan.add("include", DEFAULT_CONFIG["scan"]["include"])
    scan.add("exclude", tomlkit.array())
    scan["exclude"].comment("glob patterns relative to each path, e.g. \"generated/**\"")
    doc.add("scan", scan)

    output = tomlkit.table()
    output.add("format", DEFAULT_CONFIG["output"]["format"])
    output["format"].comment("text or json")
    output.add("show_ignored", DEFAULT_CONFIG["output"]["show_ignored"])
    doc.add("output", output)

    checks = tomlkit.aot()

    author = tomlkit.table()
    author.add("id", "author")
    author.add("tag", "@author")
    author.add("tag_format", "\\S")
    author.add("tag_severity", "info")
    author.add("severity", "error")
    author.add("tokens", ["class", "interface", "enum", "annotation"])
    checks.append(author)

    incomplete = tomlkit.table()
    incomplete.add(tomlkit.comment("warn where @incomplete is found, stay quiet when it is not"))
    incomplete.add("id", "incomplete")
    incomplete.add("tag", "@incomplete")
    incomplete.add("tag_format", "\\S")
    incomplete.add("severity", "ignore")
    incomplete.add("tag_severity", "warning")
    checks.append(incomplete)

    doc.add("checks", checks)
    return doc


def run(args: argparse.Namespace) -> int:
    """Write the starter config to the current directory."""
    target = Path.cwd() / CONFIG_FILE_NAME
    if target.exists() and not args.force:
        print(f"Error: {target} already exists (use --force to overwrite)", file=sys.stderr)
        return 1

    target.write_text(tomlkit.dumps(build_document()), encoding="utf-8")
    if not args.quiet:
        print(f"Created {target}")
    return 0
