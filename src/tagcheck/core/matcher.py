"""
tagcheck.core.matcher - Locate a tag in the lines of a Javadoc comment.

The tag name is a regex fragment: ``@author`` matches literally, while
``@(author|owner)`` accepts either spelling. Pass ``literal=True`` to
escape the tag instead.

The fragment is not grouped, so a top-level alternation such as ``@a|@b``
binds the content capture to the last branch only. When another branch
matches, the content is whatever follows the match, minus leading
whitespace. Write ``@(a|b)`` to keep the branches together.
"""

from __future__ import annotations

import re
from typing import Sequence

from tagcheck.core.models import InvalidConfigurationError, TagMatch

# Tag token, optional whitespace, then the rest of the line. The content is
# always the last group so that tags may carry groups of their own.
TAG_PATTERN_SUFFIX = r"\s*(.*$)"


def compile_tag_pattern(tag: str, literal: bool = False) -> re.Pattern:
    """
    Build the pattern that finds ``tag`` and captures its content.

    Args:
        tag: Tag name, inserted verbatim into the pattern unless ``literal``
        literal: Escape regex metacharacters in ``tag``

    Returns:
        Compiled pattern whose last group holds the tag content

    Raises:
        InvalidConfigurationError: If the tag is empty or not a valid pattern
    """
    if not tag:
        raise InvalidConfigurationError("Tag name must not be empty")

    fragment = re.escape(tag) if literal else tag
    try:
        pattern = re.compile(fragment + TAG_PATTERN_SUFFIX)
    except re.error as e:
        raise InvalidConfigurationError(f"Invalid tag pattern '{tag}': {e}") from e
    return pattern


def compile_format_pattern(tag_format: str) -> re.Pattern:
    """Compile a tag content pattern, raising InvalidConfigurationError if malformed."""
    try:
        return re.compile(tag_format)
    except re.error as e:
        raise InvalidConfigurationError(f"Invalid tag format '{tag_format}': {e}") from e


def find(tag_pattern: re.Pattern, lines: Sequence[str]) -> list[TagMatch]:
    """
    Search every comment line for the tag.

    Each line is searched independently, so a tag repeated on several
    lines yields several matches, in line order.

    Args:
        tag_pattern: Pattern from compile_tag_pattern()
        lines: Comment text, one entry per line

    Returns:
        One TagMatch per matching line (empty if the tag is absent)
    """
    matches: list[TagMatch] = []
    for offset, line in enumerate(lines):
        match = tag_pattern.search(line)
        if not match:
            continue
        start = match.start(tag_pattern.groups)
        if start == -1:
            # Content group did not take part (alternation outside the tag).
            content = line[match.end():].lstrip()
        else:
            content = line[start:]
        matches.append(TagMatch(offset, content))
    return matches
