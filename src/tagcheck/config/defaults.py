"""
tagcheck.config.defaults - Default configuration values
"""

CONFIG_FILE_NAME = ".tagcheck.toml"

ENV_PREFIX = "TAGCHECK_"

DEFAULT_CONFIG = {
    "scan": {
        "paths": ["."],
        "include": ["*.java"],
        "exclude": [],
    },
    "output": {
        "format": "text",
        "show_ignored": False,
    },
    "checks": [],
}
