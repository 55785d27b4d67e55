"""
tagcheck.reporters.json_reporter - Machine-readable output.
"""

from __future__ import annotations

import json
import sys
from typing import Optional, TextIO

from tagcheck.core.models import FileResult
from tagcheck.reporters.base import DiagnosticCollector, visible


class JsonReporter:
    """Writes a single JSON document describing the run."""

    def __init__(self, output: Optional[TextIO] = None, show_ignored: bool = False):
        self.output = output or sys.stdout
        self.show_ignored = show_ignored

    def build(self, results: list[FileResult], collector: DiagnosticCollector) -> dict:
        counts = collector.counts()
        return {
            "files": [
                {
                    "path": r.path,
                    "declarations": r.declarations,
                    "error": r.error,
                }
                for r in results
            ],
            "diagnostics": [
                d.to_dict() for d in visible(collector.diagnostics, self.show_ignored)
            ],
            "summary": {
                "files": len(results),
                "declarations": sum(r.declarations for r in results),
                "total": len(collector.diagnostics),
                **counts,
                "passed": counts["error"] == 0,
            },
        }

    def report(self, results: list[FileResult], collector: DiagnosticCollector) -> None:
        print(json.dumps(self.build(results, collector), indent=2), file=self.output)
