"""
tagcheck.config - Configuration loading and defaults

Configuration lives in ``.tagcheck.toml``, found by walking up from the
working directory. Values are merged over DEFAULT_CONFIG and may then be
overridden by ``TAGCHECK_<SECTION>_<KEY>`` environment variables.
"""

from __future__ import annotations

import copy
import json
import logging
import os
from pathlib import Path
from typing import Any, Optional

import tomlkit
from tomlkit.exceptions import ParseError

from tagcheck.config.defaults import CONFIG_FILE_NAME, DEFAULT_CONFIG, ENV_PREFIX
from tagcheck.core.check import TagSpec
from tagcheck.core.models import InvalidConfigurationError

logger = logging.getLogger(__name__)

__all__ = [
    "CONFIG_FILE_NAME",
    "DEFAULT_CONFIG",
    "find_config_file",
    "get_output_settings",
    "get_scan_settings",
    "get_tag_specs",
    "load_config",
    "merge_configs",
    "parse_toml",
    "parse_toml_document",
]


def parse_toml_document(content: str) -> tomlkit.TOMLDocument:
    """Parse TOML content, keeping comments and layout for round-tripping.

    Raises:
        InvalidConfigurationError: If the content is not valid TOML
    """
    try:
        return tomlkit.parse(content)
    except ParseError as e:
        raise InvalidConfigurationError(f"Invalid TOML: {e}") from e


def parse_toml(content: str) -> dict[str, Any]:
    """Parse TOML content into plain Python dicts and lists."""
    return parse_toml_document(content).unwrap()


def find_config_file(start: Path) -> Optional[Path]:
    """Find the config file in ``start`` or one of its parents.

    The search stops at the first directory containing ``.git``.

    Args:
        start: Directory to start searching from

    Returns:
        Path to the config file, or None if there is none
    """
    current = start.resolve()
    while True:
        candidate = current / CONFIG_FILE_NAME
        if candidate.is_file():
            return candidate
        if (current / ".git").exists() or current.parent == current:
            return None
        current = current.parent


def merge_configs(defaults: dict[str, Any], user: dict[str, Any]) -> dict[str, Any]:
    """Deep-merge ``user`` over ``defaults``. Lists are replaced, not appended."""
    merged = copy.deepcopy(defaults)
    for key, value in user.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = merge_configs(merged[key], value)
        else:
            merged[key] = copy.deepcopy(value)
    return merged


def _try_parse_env_value(value: str) -> Any:
    """Decode booleans and JSON lists/objects; anything else stays a string."""
    if value.lower() == "true":
        return True
    if value.lower() == "false":
        return False
    if value.startswith(("[", "{")):
        try:
            return json.loads(value)
        except json.JSONDecodeError:
            logger.warning("Could not decode %r as JSON; using it as a string", value)
            return value
    return value


def _apply_env_overrides(config: dict[str, Any]) -> dict[str, Any]:
    """Apply ``TAGCHECK_<SECTION>_<KEY>`` environment variables to ``config``.

    ``TAGCHECK_OUTPUT_SHOW_IGNORED=true`` sets ``config["output"]["show_ignored"]``.
    """
    for name, raw in os.environ.items():
        if not name.startswith(ENV_PREFIX):
            continue
        parts = name[len(ENV_PREFIX):].lower().split("_", 1)
        if len(parts) != 2 or not all(parts):
            continue
        section, key = parts
        target = config.setdefault(section, {})
        if not isinstance(target, dict):
            logger.warning("Ignoring %s: [%s] is not a table", name, section)
            continue
        target[key] = _try_parse_env_value(raw)
        logger.debug("Config override from %s", name)
    return config


def load_config(config_path: Optional[Path] = None) -> dict[str, Any]:
    """Load configuration from a file merged over the defaults.

    Args:
        config_path: Config file to read, or None for defaults only

    Returns:
        Effective configuration dict

    Raises:
        InvalidConfigurationError: If the file cannot be parsed
    """
    user: dict[str, Any] = {}
    if config_path is not None:
        logger.debug("Loading config from %s", config_path)
        user = parse_toml(config_path.read_text(encoding="utf-8"))
    config = merge_configs(DEFAULT_CONFIG, user)
    return _apply_env_overrides(config)


def get_tag_specs(config: dict[str, Any]) -> list[TagSpec]:
    """Build one TagSpec per ``[[checks]]`` table.

    Raises:
        InvalidConfigurationError: If a check table is malformed
    """
    checks = config.get("checks", [])
    if not isinstance(checks, list):
        raise InvalidConfigurationError("'checks' must be an array of tables ([[checks]])")

    specs = []
    for index, data in enumerate(checks):
        if not isinstance(data, dict):
            raise InvalidConfigurationError(f"checks[{index}] must be a table")
        data = dict(data)
        data.setdefault("id", f"WriteTag#{index + 1}" if len(checks) > 1 else "WriteTag")
        specs.append(TagSpec.from_dict(data))
    return specs


def _string_list(value: Any, name: str) -> list[str]:
    """Accept a list of strings or one comma-separated string."""
    if isinstance(value, str):
        return [part.strip() for part in value.split(",") if part.strip()]
    if isinstance(value, list) and all(isinstance(item, str) for item in value):
        return list(value)
    raise InvalidConfigurationError(f"{name} must be a list of strings, got {value!r}")


def _boolean(value: Any, name: str) -> bool:
    if isinstance(value, bool):
        return value
    raise InvalidConfigurationError(f"{name} must be true or false, got {value!r}")


def get_scan_settings(config: dict[str, Any]) -> dict[str, list[str]]:
    """Return the ``[scan]`` paths, include and exclude lists.

    Raises:
        InvalidConfigurationError: If a value is neither a string nor a list of strings
    """
    scan = config.get("scan", {})
    if not isinstance(scan, dict):
        raise InvalidConfigurationError("'scan' must be a table")
    defaults = DEFAULT_CONFIG["scan"]
    return {
        key: _string_list(scan.get(key, defaults[key]), f"scan.{key}")
        for key in ("paths", "include", "exclude")
    }


def get_output_settings(config: dict[str, Any]) -> dict[str, Any]:
    """Return the validated ``[output]`` format and show_ignored values."""
    output = config.get("output", {})
    if not isinstance(output, dict):
        raise InvalidConfigurationError("'output' must be a table")
    defaults = DEFAULT_CONFIG["output"]
    output_format = output.get("format", defaults["format"])
    if output_format not in ("text", "json"):
        raise InvalidConfigurationError(
            f"output.format must be 'text' or 'json', got {output_format!r}"
        )
    return {
        "format": output_format,
        "show_ignored": _boolean(
            output.get("show_ignored", defaults["show_ignored"]), "output.show_ignored"
        ),
    }
