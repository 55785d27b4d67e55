"""
tagcheck - Javadoc tag verification for Java sources

Every declaration tells you who wrote it, if you ask nicely.

tagcheck looks for a configured tag (such as ``@author``) in the Javadoc
comment preceding each class, interface, enum or annotation declaration,
validates the tag content against an optional pattern, and reports what
it found at configurable severities.
"""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("tagcheck")
except PackageNotFoundError:
    __version__ = "0.0.0+unknown"  # Not installed
__license__ = "MIT"

from tagcheck.core.check import TagSpec, WriteTagCheck
from tagcheck.core.matcher import compile_tag_pattern, find
from tagcheck.core.models import (
    Declaration,
    DeclarationKind,
    Diagnostic,
    DocComment,
    InvalidConfigurationError,
    MessageKey,
    Severity,
    TagMatch,
)

__all__ = [
    "__version__",
    "Declaration",
    "DeclarationKind",
    "Diagnostic",
    "DocComment",
    "InvalidConfigurationError",
    "MessageKey",
    "Severity",
    "TagMatch",
    "TagSpec",
    "WriteTagCheck",
    "compile_tag_pattern",
    "find",
]
