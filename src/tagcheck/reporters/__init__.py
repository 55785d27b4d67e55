"""
tagcheck.reporters - Diagnostic collection and output formats
"""

from tagcheck.reporters.base import DiagnosticCollector, Reporter, visible
from tagcheck.reporters.json_reporter import JsonReporter
from tagcheck.reporters.text_reporter import TextReporter, format_diagnostic

__all__ = [
    "DiagnosticCollector",
    "JsonReporter",
    "Reporter",
    "TextReporter",
    "format_diagnostic",
    "visible",
]
