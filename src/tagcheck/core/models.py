"""
tagcheck.core.models - Data types shared by the tag check and its collaborators.

Provides the declaration, comment, match and diagnostic types along with
the severity and message-key enumerations.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Protocol


class InvalidConfigurationError(ValueError):
    """Raised when a check is configured with values that cannot be used."""


class Severity(Enum):
    """Severity level attached to each diagnostic.

    ``IGNORE`` diagnostics are still computed and emitted; whether they are
    shown is up to the reporter.
    """

    IGNORE = "ignore"
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"

    @classmethod
    def parse(cls, value: "str | Severity") -> "Severity":
        """Parse a severity name (case-insensitive)."""
        if isinstance(value, Severity):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            allowed = ", ".join(s.value for s in cls)
            raise InvalidConfigurationError(
                f"Unknown severity '{value}' (expected one of: {allowed})"
            ) from None


class DeclarationKind(Enum):
    """Kinds of declarations a check can be registered for."""

    INTERFACE_DEF = "interface"
    CLASS_DEF = "class"
    ENUM_DEF = "enum"
    ANNOTATION_DEF = "annotation"
    METHOD_DEF = "method"
    CTOR_DEF = "constructor"
    ENUM_CONSTANT_DEF = "enum-constant"
    ANNOTATION_FIELD_DEF = "annotation-field"

    @classmethod
    def parse(cls, value: "str | DeclarationKind") -> "DeclarationKind":
        """Parse a kind from its value ("class") or member name ("CLASS_DEF")."""
        if isinstance(value, DeclarationKind):
            return value
        text = str(value).strip()
        if text.upper() in cls.__members__:
            return cls[text.upper()]
        try:
            return cls(text.lower())
        except ValueError:
            allowed = ", ".join(k.value for k in cls)
            raise InvalidConfigurationError(
                f"Unknown token '{value}' (expected one of: {allowed})"
            ) from None


DEFAULT_TOKENS = frozenset(
    {
        DeclarationKind.INTERFACE_DEF,
        DeclarationKind.CLASS_DEF,
        DeclarationKind.ENUM_DEF,
        DeclarationKind.ANNOTATION_DEF,
    }
)

ACCEPTABLE_TOKENS = frozenset(DeclarationKind)


class MessageKey(Enum):
    """Message keys for the three diagnostic outcomes."""

    MISSING_TAG = "type.missingTag"
    WRITE_TAG = "javadoc.writeTag"
    TAG_FORMAT = "type.tagFormat"

    @property
    def template(self) -> str:
        return _MESSAGE_TEMPLATES[self]


_MESSAGE_TEMPLATES = {
    MessageKey.MISSING_TAG: "Type Javadoc comment is missing {0} tag.",
    MessageKey.WRITE_TAG: "{0}={1}",
    MessageKey.TAG_FORMAT: "Type Javadoc tag {0} must match pattern '{1}'.",
}


@dataclass(frozen=True)
class Declaration:
    """
    One declaration found in a source file.

    Attributes:
        kind: What was declared
        name: Declared identifier
        line: 1-based line of the first token (annotations and modifiers included)
        column: 0-based column of that token
    """

    kind: DeclarationKind
    name: str
    line: int
    column: int = 0


@dataclass(frozen=True)
class DocComment:
    """
    A Javadoc comment block.

    Attributes:
        lines: Text of the block, one entry per physical line. The first entry
            starts at the opening ``/**`` and the last ends at the closing ``*/``.
        start_line: 1-based line the block starts on
    """

    lines: tuple[str, ...]
    start_line: int

    @property
    def end_line(self) -> int:
        return self.start_line + len(self.lines) - 1


@dataclass(frozen=True)
class TagMatch:
    """A line of a comment on which the tag was found."""

    line_offset: int
    content: str


@dataclass(frozen=True)
class Diagnostic:
    """
    A single outcome reported by a check.

    Attributes:
        line: 1-based line
        column: 0-based column
        key: Message key identifying the outcome
        args: Message arguments (tag name first)
        severity: Severity the diagnostic was emitted at
        check_id: Identifier of the check that produced it
        path: Source file path, when known
    """

    line: int
    column: int
    key: MessageKey
    args: tuple[str, ...]
    severity: Severity
    check_id: str = "WriteTag"
    path: str = ""

    @property
    def message(self) -> str:
        return self.key.template.format(*self.args)

    def to_dict(self) -> dict:
        return {
            "path": self.path,
            "line": self.line,
            "column": self.column,
            "severity": self.severity.value,
            "key": self.key.value,
            "args": list(self.args),
            "message": self.message,
            "check": self.check_id,
        }


class CommentIndex(Protocol):
    """Answers "which Javadoc comment precedes this line?"."""

    def javadoc_before(self, line: int) -> Optional[DocComment]:
        ...


class DiagnosticSink(Protocol):
    """Receives diagnostics as they are emitted."""

    def emit(self, diagnostic: Diagnostic) -> None:
        ...


@dataclass
class FileResult:
    """Diagnostics produced for one source file."""

    path: str
    diagnostics: list[Diagnostic] = field(default_factory=list)
    declarations: int = 0
    error: Optional[str] = None
