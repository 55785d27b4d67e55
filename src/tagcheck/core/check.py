"""
tagcheck.core.check - The write-tag check.

Requires a user-defined tag to be present in the Javadoc comment of each
visited declaration, optionally with content matching ``tag_format``.
When the tag is found it is reported at ``tag_severity`` (default info),
so the check doubles as a way to print tag values such as ``@author``.

To report ``@incomplete`` tags as warnings while staying silent when they
are absent, configure::

    tag = "@incomplete"
    tag_format = "\\S"
    severity = "ignore"
    tag_severity = "warning"
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Iterable, Optional

from tagcheck.core.matcher import compile_format_pattern, compile_tag_pattern, find
from tagcheck.core.models import (
    DEFAULT_TOKENS,
    CommentIndex,
    Declaration,
    DeclarationKind,
    Diagnostic,
    DiagnosticSink,
    InvalidConfigurationError,
    MessageKey,
    Severity,
)

if TYPE_CHECKING:
    from tagcheck.parsers.java import JavaSource

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TagSpec:
    """
    Immutable configuration for one write-tag check.

    Build instances with create() or from_dict(), which compile and
    validate the patterns.

    Attributes:
        tag: Tag name, or None when the check is unconfigured
        tag_pattern: Compiled pattern derived from ``tag``
        tag_format: Pattern the tag content must contain a match of
        tag_severity: Severity for diagnostics reporting a found tag
        severity: Severity for every other diagnostic
        tokens: Declaration kinds the check runs on
        check_id: Name shown next to diagnostics
    """

    tag: Optional[str] = None
    tag_pattern: Optional[re.Pattern] = None
    tag_format: Optional[re.Pattern] = None
    tag_severity: Severity = Severity.INFO
    severity: Severity = Severity.ERROR
    tokens: frozenset = field(default=DEFAULT_TOKENS)
    check_id: str = "WriteTag"

    @classmethod
    def create(
        cls,
        tag: Optional[str] = None,
        tag_format: "str | re.Pattern | None" = None,
        tag_severity: "str | Severity" = Severity.INFO,
        severity: "str | Severity" = Severity.ERROR,
        tokens: Optional[Iterable["str | DeclarationKind"]] = None,
        literal: bool = False,
        check_id: str = "WriteTag",
    ) -> "TagSpec":
        """
        Validate and compile a check configuration.

        Raises:
            InvalidConfigurationError: If any value cannot be used
        """
        if tag is not None and not isinstance(tag, str):
            raise InvalidConfigurationError(f"{check_id}: tag must be a string, got {tag!r}")
        if not isinstance(literal, bool):
            raise InvalidConfigurationError(
                f"{check_id}: literal must be true or false, got {literal!r}"
            )
        tag_pattern = compile_tag_pattern(tag, literal=literal) if tag is not None else None

        if isinstance(tag_format, str):
            format_pattern = compile_format_pattern(tag_format)
        elif tag_format is None or isinstance(tag_format, re.Pattern):
            format_pattern = tag_format
        else:
            raise InvalidConfigurationError(
                f"{check_id}: tag_format must be a string, got {tag_format!r}"
            )

        if tokens is None:
            kinds = DEFAULT_TOKENS
        else:
            kinds = frozenset(DeclarationKind.parse(t) for t in tokens)
            if not kinds:
                raise InvalidConfigurationError(f"{check_id}: tokens must not be empty")

        return cls(
            tag=tag,
            tag_pattern=tag_pattern,
            tag_format=format_pattern,
            tag_severity=Severity.parse(tag_severity),
            severity=Severity.parse(severity),
            tokens=kinds,
            check_id=check_id,
        )

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "TagSpec":
        """Create a TagSpec from a ``[[checks]]`` table.

        Args:
            data: Dictionary with optional keys: id, tag, tag_format,
                  tag_severity, severity, tokens, literal

        Returns:
            TagSpec instance
        """
        tokens = data.get("tokens")
        if isinstance(tokens, str):
            tokens = [t for t in (part.strip() for part in tokens.split(",")) if t]
        return cls.create(
            tag=data.get("tag"),
            tag_format=data.get("tag_format"),
            tag_severity=data.get("tag_severity", "info"),
            severity=data.get("severity", "error"),
            tokens=tokens,
            literal=data.get("literal", False),
            check_id=data.get("id", "WriteTag"),
        )

    @property
    def configured(self) -> bool:
        return self.tag_pattern is not None


class WriteTagCheck:
    """
    Checks declarations for a Javadoc tag and reports the outcome.

    The check keeps no state between visits; severity is passed with each
    emitted diagnostic, so one instance can be shared across threads.
    """

    def __init__(self, spec: TagSpec):
        """
        Initialize the check.

        Args:
            spec: Check configuration
        """
        self.spec = spec

    def visit(
        self,
        declaration: Declaration,
        comments: CommentIndex,
        sink: Optional[DiagnosticSink] = None,
        path: str = "",
    ) -> list[Diagnostic]:
        """
        Check one declaration.

        Args:
            declaration: The declaration to check
            comments: Index used to find the preceding Javadoc comment
            sink: Optional receiver for each diagnostic as it is emitted
            path: Source path recorded on diagnostics

        Returns:
            The diagnostics emitted for this declaration
        """
        spec = self.spec
        emitted: list[Diagnostic] = []
        if not spec.configured:
            return emitted

        def emit(line: int, key: MessageKey, args: tuple, severity: Severity) -> None:
            diagnostic = Diagnostic(
                line=line,
                column=declaration.column,
                key=key,
                args=args,
                severity=severity,
                check_id=spec.check_id,
                path=path,
            )
            emitted.append(diagnostic)
            if sink is not None:
                sink.emit(diagnostic)

        comment = comments.javadoc_before(declaration.line)
        if comment is None:
            logger.debug("%s:%d: no Javadoc before %s", path, declaration.line, declaration.name)
            emit(declaration.line, MessageKey.MISSING_TAG, (spec.tag,), spec.severity)
            return emitted

        matches = find(spec.tag_pattern, comment.lines)
        if not matches:
            emit(declaration.line, MessageKey.MISSING_TAG, (spec.tag,), spec.severity)
            return emitted

        total = len(comment.lines)
        for match in matches:
            # Comment lines are counted back from the declaration line.
            line = declaration.line + match.line_offset - total
            if spec.tag_format is None or spec.tag_format.search(match.content):
                emit(line, MessageKey.WRITE_TAG, (spec.tag, match.content), spec.tag_severity)
            else:
                emit(
                    line,
                    MessageKey.TAG_FORMAT,
                    (spec.tag, spec.tag_format.pattern),
                    spec.severity,
                )
        return emitted

    def check_source(
        self,
        source: "JavaSource",
        sink: Optional[DiagnosticSink] = None,
    ) -> list[Diagnostic]:
        """
        Visit every declaration in a source whose kind is in ``tokens``.

        Args:
            source: Parsed source file
            sink: Optional receiver for each diagnostic

        Returns:
            All diagnostics emitted for the file, in source order
        """
        diagnostics: list[Diagnostic] = []
        for declaration in source.declarations():
            if declaration.kind in self.spec.tokens:
                diagnostics.extend(self.visit(declaration, source, sink, path=source.path))
        return diagnostics
