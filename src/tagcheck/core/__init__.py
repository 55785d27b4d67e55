"""
tagcheck.core - Tag matching and the write-tag check
"""

from tagcheck.core.check import TagSpec, WriteTagCheck
from tagcheck.core.matcher import compile_format_pattern, compile_tag_pattern, find
from tagcheck.core.models import (
    ACCEPTABLE_TOKENS,
    DEFAULT_TOKENS,
    CommentIndex,
    Declaration,
    DeclarationKind,
    Diagnostic,
    DiagnosticSink,
    DocComment,
    FileResult,
    InvalidConfigurationError,
    MessageKey,
    Severity,
    TagMatch,
)

__all__ = [
    "ACCEPTABLE_TOKENS",
    "DEFAULT_TOKENS",
    "CommentIndex",
    "Declaration",
    "DeclarationKind",
    "Diagnostic",
    "DiagnosticSink",
    "DocComment",
    "FileResult",
    "InvalidConfigurationError",
    "MessageKey",
    "Severity",
    "TagMatch",
    "TagSpec",
    "WriteTagCheck",
    "compile_format_pattern",
    "compile_tag_pattern",
    "find",
]
