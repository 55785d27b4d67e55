"""
tagcheck.commands - CLI command implementations
"""

__all__ = [
    "check",
    "config_cmd",
    "init_cmd",
]
