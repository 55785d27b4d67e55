"""
tagcheck.parsers - Source readers that feed the tag check
"""

from tagcheck.parsers.java import JavaSource

__all__ = [
    "JavaSource",
]
