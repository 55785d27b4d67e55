"""
tagcheck.reporters.base - Diagnostic sinks and the reporter interface.
"""

from __future__ import annotations

from typing import Iterable, Protocol

from tagcheck.core.models import Diagnostic, FileResult, Severity


class DiagnosticCollector:
    """Sink that keeps every diagnostic it receives, in emission order."""

    def __init__(self) -> None:
        self.diagnostics: list[Diagnostic] = []

    def emit(self, diagnostic: Diagnostic) -> None:
        self.diagnostics.append(diagnostic)

    def __len__(self) -> int:
        return len(self.diagnostics)

    def __iter__(self):
        return iter(self.diagnostics)

    def with_severity(self, severity: Severity) -> list[Diagnostic]:
        return [d for d in self.diagnostics if d.severity is severity]

    def counts(self) -> dict[str, int]:
        """Number of diagnostics per severity name, including zero counts."""
        result = {severity.value: 0 for severity in Severity}
        for diagnostic in self.diagnostics:
            result[diagnostic.severity.value] += 1
        return result

    def has_errors(self) -> bool:
        return any(d.severity is Severity.ERROR for d in self.diagnostics)


def visible(diagnostics: Iterable[Diagnostic], show_ignored: bool = False) -> list[Diagnostic]:
    """Drop ``ignore`` diagnostics unless asked to keep them."""
    if show_ignored:
        return list(diagnostics)
    return [d for d in diagnostics if d.severity is not Severity.IGNORE]


class Reporter(Protocol):
    """Renders the results of a run."""

    def report(self, results: list[FileResult], collector: DiagnosticCollector) -> None:
        ...
