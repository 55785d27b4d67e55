"""
tagcheck.reporters.text_reporter - Human-readable output.
"""

from __future__ import annotations

import sys
from typing import Optional, TextIO

from tagcheck.core.models import Diagnostic, FileResult, Severity
from tagcheck.reporters.base import DiagnosticCollector, visible

LEVEL_LABELS = {
    Severity.ERROR: "ERROR",
    Severity.WARNING: "WARN",
    Severity.INFO: "INFO",
    Severity.IGNORE: "IGNORE",
}


def format_diagnostic(diagnostic: Diagnostic) -> str:
    """Format one diagnostic as ``[LEVEL] path:line:col: message [check]``."""
    location = f"{diagnostic.path}:{diagnostic.line}:{diagnostic.column + 1}"
    label = LEVEL_LABELS[diagnostic.severity]
    return f"[{label}] {location}: {diagnostic.message} [{diagnostic.check_id}]"


class TextReporter:
    """Prints diagnostics one per line followed by a summary."""

    def __init__(
        self,
        output: Optional[TextIO] = None,
        show_ignored: bool = False,
        quiet: bool = False,
    ):
        self.output = output or sys.stdout
        self.show_ignored = show_ignored
        self.quiet = quiet

    def report(self, results: list[FileResult], collector: DiagnosticCollector) -> None:
        for result in results:
            if result.error:
                print(f"Error reading {result.path}: {result.error}", file=sys.stderr)

        shown = visible(collector.diagnostics, self.show_ignored)
        for diagnostic in shown:
            print(format_diagnostic(diagnostic), file=self.output)

        if self.quiet:
            return

        counts = collector.counts()
        checked = sum(r.declarations for r in results)
        print("─" * 60, file=self.output)
        print(f"Checked {checked} declarations in {len(results)} files", file=self.output)
        if counts["error"]:
            print(f"❌ {counts['error']} errors", file=self.output)
        if counts["warning"]:
            print(f"⚠️  {counts['warning']} warnings", file=self.output)
        if counts["info"]:
            print(f"ℹ️  {counts['info']} info", file=self.output)
        hidden = len(collector.diagnostics) - len(shown)
        if hidden:
            print(f"   ({hidden} ignored diagnostics hidden)", file=self.output)
        if not counts["error"]:
            print("✓ No errors", file=self.output)
