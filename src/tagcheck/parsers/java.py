"""
tagcheck.parsers.java - Lightweight Java source reader.

Supplies the two things the tag check needs from a source file:

- javadoc_before(line): the Javadoc block immediately preceding a line,
  skipping blank lines and ``//`` comment lines in between
- declarations(): the type, method, constructor, enum constant and
  annotation field declarations, in source order

Comments and string/char literals are masked out before scanning, so
braces and keywords inside them are never mistaken for code. Bodies of
methods, initializers and field initializers are skipped. Coverage is
therefore narrower than a full syntax-tree walk: local classes, and
methods declared inside anonymous classes, are never reported.
"""

from __future__ import annotations

import logging
import re
from pathlib import Path
from typing import Optional

from tagcheck.core.models import Declaration, DeclarationKind, DocComment

logger = logging.getLogger(__name__)

# Identifiers, numbers, multi-char operators we care about, then any symbol.
TOKEN_PATTERN = re.compile(r"[A-Za-z_$][\w$]*|\d[\w.]*|\.\.\.|::|->|\S")

COMMENT_LINE_PATTERN = re.compile(r"^\s*//.*$")

TYPE_KEYWORDS = {
    "class": DeclarationKind.CLASS_DEF,
    "interface": DeclarationKind.INTERFACE_DEF,
    "enum": DeclarationKind.ENUM_DEF,
    # Records have no token kind of their own; the body is still scanned.
    "record": None,
}

SKIPPED_STATEMENTS = {"package", "import"}


class Token:
    __slots__ = ("text", "line", "column")

    def __init__(self, text: str, line: int, column: int):
        self.text = text
        self.line = line
        self.column = column

    def __repr__(self) -> str:
        return f"Token({self.text!r}, {self.line}, {self.column})"


class JavaSource:
    """
    A Java source file prepared for tag checking.

    Args:
        text: File content
        path: Path recorded on diagnostics
    """

    def __init__(self, text: str, path: str = ""):
        self.path = path
        normalized = text.replace("\r\n", "\n").replace("\r", "\n")
        self.lines = normalized.split("\n")

        masked, blocks = _mask_comments_and_literals(normalized)
        self._masked_lines = masked.split("\n")
        line_starts = _line_starts(normalized)

        self._javadocs: dict[int, DocComment] = {}
        for start, end in blocks:
            comment = self._make_comment(line_starts, start, end)
            self._javadocs[comment.end_line] = comment

        self._declarations: Optional[list[Declaration]] = None

    @classmethod
    def from_file(cls, file_path: Path) -> "JavaSource":
        """Read and prepare a source file."""
        content = file_path.read_text(encoding="utf-8", errors="replace")
        return cls(content, path=str(file_path))

    def javadoc_before(self, line: int) -> Optional[DocComment]:
        """
        Find the Javadoc comment preceding a line.

        Args:
            line: 1-based line of a declaration

        Returns:
            The Javadoc block ending just above ``line``, ignoring blank and
            ``//`` comment lines in between, or None
        """
        candidate = line - 1
        while candidate > 1 and (
            self._is_blank(candidate) or self._is_line_comment(candidate)
        ):
            candidate -= 1
        return self._javadocs.get(candidate)

    def javadocs(self) -> list[DocComment]:
        """All Javadoc blocks in the file, in order."""
        return [self._javadocs[key] for key in sorted(self._javadocs)]

    def declarations(self) -> list[Declaration]:
        """All declarations in the file, in source order."""
        if self._declarations is None:
            tokens = _tokenize(self._masked_lines)
            self._declarations = _DeclarationScanner(tokens).scan()
            logger.debug("%s: %d declarations", self.path or "<text>", len(self._declarations))
        return self._declarations

    def _line(self, line: int) -> str:
        if 1 <= line <= len(self.lines):
            return self.lines[line - 1]
        return ""

    def _is_blank(self, line: int) -> bool:
        return not self._line(line).strip()

    def _is_line_comment(self, line: int) -> bool:
        return bool(COMMENT_LINE_PATTERN.match(self._line(line)))

    def _make_comment(self, line_starts: list[int], start: int, end: int) -> DocComment:
        """Build the DocComment for the block spanning text[start:end]."""
        start_line, start_col = _position(line_starts, start)
        end_line, end_col = _position(line_starts, end - 1)

        if start_line == end_line:
            text = [self.lines[start_line - 1][start_col:end_col + 1]]
        else:
            text = [self.lines[start_line - 1][start_col:]]
            text.extend(self.lines[start_line:end_line - 1])
            text.append(self.lines[end_line - 1][:end_col + 1])
        return DocComment(lines=tuple(text), start_line=start_line)


def _mask_comments_and_literals(text: str) -> tuple[str, list[tuple[int, int]]]:
    """
    Blank out comments and literals, keeping line breaks and offsets intact.

    Returns:
        Tuple of (masked text, list of (start, end) offsets of Javadoc blocks)
    """
    out = list(text)
    javadoc_blocks: list[tuple[int, int]] = []
    n = len(text)

    def blank(start: int, end: int) -> None:
        for k in range(start, end):
            if out[k] != "\n":
                out[k] = " "

    i = 0
    while i < n:
        if text.startswith("//", i):
            end = text.find("\n", i)
            end = n if end == -1 else end
        elif text.startswith("/*", i):
            close = text.find("*/", i + 2)
            end = n if close == -1 else close + 2
            # "/**/" is an empty block comment, not Javadoc.
            if close != -1 and text.startswith("/**", i) and not text.startswith("/**/", i):
                javadoc_blocks.append((i, end))
        elif text.startswith('"""', i):
            j = i + 3
            while j < n and not text.startswith('"""', j):
                j += 2 if text[j] == "\\" else 1
            end = min(j + 3, n)
        elif text[i] in "\"'":
            quote = text[i]
            j = i + 1
            while j < n and text[j] != quote and text[j] != "\n":
                j += 2 if text[j] == "\\" else 1
            end = min(j + 1, n)
        else:
            i += 1
            continue
        blank(i, end)
        i = end

    return "".join(out), javadoc_blocks


def _line_starts(text: str) -> list[int]:
    starts = [0]
    for match in re.finditer("\n", text):
        starts.append(match.end())
    return starts


def _position(line_starts: list[int], offset: int) -> tuple[int, int]:
    """Convert a text offset to a (1-based line, 0-based column) pair."""
    lo, hi = 0, len(line_starts) - 1
    while lo < hi:
        mid = (lo + hi + 1) // 2
        if line_starts[mid] <= offset:
            lo = mid
        else:
            hi = mid - 1
    return lo + 1, offset - line_starts[lo]


def _tokenize(lines: list[str]) -> list[Token]:
    tokens: list[Token] = []
    for line_num, line in enumerate(lines, start=1):
        for match in TOKEN_PATTERN.finditer(line):
            tokens.append(Token(match.group(0), line_num, match.start()))
    return tokens


def _is_identifier(text: str) -> bool:
    return bool(text) and (text[0].isalpha() or text[0] in "_$")


class _DeclarationScanner:
    """Walks the token stream of one file and collects declarations."""

    def __init__(self, tokens: list[Token]):
        self.tokens = tokens
        self.pos = 0
        self.found: list[Declaration] = []

    def scan(self) -> list[Declaration]:
        while not self._at_end():
            text = self._peek()
            if text in SKIPPED_STATEMENTS:
                self._skip_statement()
            elif text in (";", "}"):
                self.pos += 1
            else:
                self._advance_member(None, None)
        return self.found

    # -- token helpers -------------------------------------------------

    def _at_end(self) -> bool:
        return self.pos >= len(self.tokens)

    def _peek(self, ahead: int = 0) -> str:
        index = self.pos + ahead
        if index < len(self.tokens):
            return self.tokens[index].text
        return ""

    def _skip_balanced(self, open_char: str, close_char: str) -> None:
        """Skip from an opening bracket to just past its partner."""
        depth = 0
        while not self._at_end():
            text = self._peek()
            self.pos += 1
            if text == open_char:
                depth += 1
            elif text == close_char:
                depth -= 1
                if depth == 0:
                    return

    def _skip_statement(self) -> None:
        """Skip to just past the next ``;`` not nested in brackets."""
        while not self._at_end():
            text = self._peek()
            if text == ";":
                self.pos += 1
                return
            if text == "{":
                self._skip_balanced("{", "}")
            elif text == "(":
                self._skip_balanced("(", ")")
            elif text == "}":
                # Unterminated statement; leave the brace to the caller.
                return
            else:
                self.pos += 1

    def _skip_annotation(self) -> None:
        """Skip ``@Name``, ``@a.b.Name`` or ``@Name(...)``."""
        self.pos += 1
        if _is_identifier(self._peek()):
            self.pos += 1
            while self._peek() == "." and _is_identifier(self._peek(1)):
                self.pos += 2
        if self._peek() == "(":
            self._skip_balanced("(", ")")

    def _record(self, kind: Optional[DeclarationKind], name: str, start: Token) -> None:
        if kind is not None:
            self.found.append(Declaration(kind=kind, name=name, line=start.line, column=start.column))

    # -- grammar -------------------------------------------------------

    def _advance_member(
        self,
        enclosing_kind: Optional[DeclarationKind],
        enclosing_name: Optional[str],
    ) -> None:
        """Consume one member (or top-level type) starting at the current token."""
        start = self.tokens[self.pos]
        if start.text == "{":
            self._skip_balanced("{", "}")
            return
        if start.text == "static" and self._peek(1) == "{":
            self.pos += 1
            self._skip_balanced("{", "}")
            return

        previous = ""
        while not self._at_end():
            text = self._peek()

            if text == "@" and self._peek(1) == "interface":
                self.pos += 2
                self._type_declaration(DeclarationKind.ANNOTATION_DEF, start)
                return
            if text == "@":
                self._skip_annotation()
                continue
            if text in TYPE_KEYWORDS and _is_identifier(self._peek(1)):
                self.pos += 1
                self._type_declaration(TYPE_KEYWORDS[text], start)
                return
            if text == "(" and _is_identifier(previous):
                self._callable_declaration(previous, start, enclosing_kind, enclosing_name)
                return
            if text == "{":
                # Compact record constructor or other block we do not model.
                self._skip_balanced("{", "}")
                return
            if text in ("=", "("):
                # Field initializer
                self._skip_statement()
                return
            if text == ";":
                self.pos += 1
                return
            if text == "}":
                return

            previous = text
            self.pos += 1

    def _type_declaration(self, kind: Optional[DeclarationKind], start: Token) -> None:
        """Handle a type declaration; the keyword has been consumed."""
        name = self._peek()
        self.pos += 1
        self._record(kind, name, start)

        # Type parameters, record components, extends/implements/permits.
        while not self._at_end() and self._peek() not in ("{", ";", "}"):
            if self._peek() == "(":
                self._skip_balanced("(", ")")
            else:
                self.pos += 1
        if self._peek() != "{":
            return

        self.pos += 1
        if kind is DeclarationKind.ENUM_DEF:
            self._enum_constants()
        self._type_body(kind, name)

    def _type_body(self, kind: Optional[DeclarationKind], name: str) -> None:
        """Scan members up to and including the closing brace."""
        while not self._at_end() and self._peek() != "}":
            if self._peek() == ";":
                self.pos += 1
                continue
            before = self.pos
            self._advance_member(kind, name)
            if self.pos == before:
                self.pos += 1
        if not self._at_end():
            self.pos += 1

    def _enum_constants(self) -> None:
        """Scan enum constants up to the ``;`` ending them or the body's ``}``."""
        while not self._at_end():
            text = self._peek()
            if text == ";":
                self.pos += 1
                return
            if text == "}":
                return
            if text == ",":
                self.pos += 1
                continue

            start = self.tokens[self.pos]
            while self._peek() == "@":
                self._skip_annotation()
            name = self._peek()
            if not _is_identifier(name):
                self.pos += 1
                continue
            self.pos += 1
            self._record(DeclarationKind.ENUM_CONSTANT_DEF, name, start)
            if self._peek() == "(":
                self._skip_balanced("(", ")")
            if self._peek() == "{":
                self._skip_balanced("{", "}")

    def _callable_declaration(
        self,
        name: str,
        start: Token,
        enclosing_kind: Optional[DeclarationKind],
        enclosing_name: Optional[str],
    ) -> None:
        """Handle a method, constructor or annotation field; current token is ``(``."""
        if enclosing_kind is DeclarationKind.ANNOTATION_DEF:
            kind = DeclarationKind.ANNOTATION_FIELD_DEF
        elif name == enclosing_name:
            kind = DeclarationKind.CTOR_DEF
        else:
            kind = DeclarationKind.METHOD_DEF
        self._record(kind, name, start)

        self._skip_balanced("(", ")")
        # throws clause, array dims, or an annotation field default value
        while not self._at_end():
            text = self._peek()
            if text == "{" and kind is not DeclarationKind.ANNOTATION_FIELD_DEF:
                self._skip_balanced("{", "}")
                return
            if text == "{":
                self._skip_balanced("{", "}")
            elif text == "(":
                self._skip_balanced("(", ")")
            elif text == ";":
                self.pos += 1
                return
            elif text == "}":
                return
            else:
                self.pos += 1
