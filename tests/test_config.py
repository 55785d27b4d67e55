"""
Tests for tagcheck.config - TOML loading, merging and environment overrides.
"""

import pytest

from tagcheck.config import (
    CONFIG_FILE_NAME,
    DEFAULT_CONFIG,
    _apply_env_overrides,
    _try_parse_env_value,
    find_config_file,
    get_output_settings,
    get_scan_settings,
    get_tag_specs,
    load_config,
    merge_configs,
    parse_toml,
    parse_toml_document,
)
from tagcheck.core.models import InvalidConfigurationError, Severity


class TestParseToml:
    def test_array_of_tables(self):
        result = parse_toml(
            """\
[[checks]]
tag = "@author"
tag_format = '\\S'

[[checks]]
tag = "@version"
tokens = [
    "class",
    "method",
]
"""
        )
        assert result["checks"][0] == {"tag": "@author", "tag_format": "\\S"}
        assert result["checks"][1]["tokens"] == ["class", "method"]
        assert type(result["checks"]) is list

    def test_document_keeps_comments(self):
        doc = parse_toml_document('# keep me\n[output]\nformat = "json"  # or text\n')
        assert "# keep me" in doc.as_string()
        assert "# or text" in doc.as_string()

    def test_invalid_toml(self):
        with pytest.raises(InvalidConfigurationError, match="Invalid TOML"):
            parse_toml("[checks\n")


class TestMergeConfigs:
    def test_user_overrides_defaults(self):
        merged = merge_configs(DEFAULT_CONFIG, {"output": {"format": "json"}})
        assert merged["output"]["format"] == "json"
        assert merged["output"]["show_ignored"] is False
        assert merged["scan"] == DEFAULT_CONFIG["scan"]

    def test_lists_are_replaced(self):
        merged = merge_configs(DEFAULT_CONFIG, {"scan": {"include": ["*.jav"]}})
        assert merged["scan"]["include"] == ["*.jav"]

    def test_defaults_not_mutated(self):
        merged = merge_configs(DEFAULT_CONFIG, {})
        merged["scan"]["paths"].append("other")
        assert DEFAULT_CONFIG["scan"]["paths"] == ["."]


class TestEnvOverrides:
    def test_try_parse_env_value(self):
        assert _try_parse_env_value("TRUE") is True
        assert _try_parse_env_value("false") is False
        assert _try_parse_env_value('["src", "lib"]') == ["src", "lib"]
        assert _try_parse_env_value("[broken") == "[broken"
        assert _try_parse_env_value("json") == "json"

    def test_nested_key(self, monkeypatch):
        monkeypatch.setenv("TAGCHECK_OUTPUT_SHOW_IGNORED", "true")
        config = _apply_env_overrides({"output": {"show_ignored": False}})
        assert config["output"]["show_ignored"] is True

    def test_creates_section(self, monkeypatch):
        monkeypatch.setenv("TAGCHECK_SCAN_PATHS", '["src"]')
        assert _apply_env_overrides({})["scan"]["paths"] == ["src"]

    def test_non_table_section_ignored(self, monkeypatch):
        monkeypatch.setenv("TAGCHECK_CHECKS_TAG", "@author")
        config = _apply_env_overrides({"checks": []})
        assert config["checks"] == []


class TestFindConfigFile:
    def test_found_in_parent(self, tmp_path):
        (tmp_path / CONFIG_FILE_NAME).write_text("", encoding="utf-8")
        nested = tmp_path / "src" / "main"
        nested.mkdir(parents=True)
        assert find_config_file(nested) == (tmp_path / CONFIG_FILE_NAME).resolve()

    def test_stops_at_git_root(self, tmp_path):
        (tmp_path / CONFIG_FILE_NAME).write_text("", encoding="utf-8")
        repo = tmp_path / "repo"
        (repo / ".git").mkdir(parents=True)
        assert find_config_file(repo) is None


class TestLoadConfig:
    def test_defaults_without_file(self, monkeypatch):
        monkeypatch.delenv("TAGCHECK_OUTPUT_FORMAT", raising=False)
        assert load_config(None) == DEFAULT_CONFIG

    def test_file_merged_over_defaults(self, tmp_path):
        path = tmp_path / CONFIG_FILE_NAME
        path.write_text('[scan]\npaths = ["src"]\n\n[[checks]]\ntag = "@author"\n', encoding="utf-8")

        config = load_config(path)

        assert config["scan"]["paths"] == ["src"]
        assert config["scan"]["include"] == ["*.java"]
        assert config["checks"] == [{"tag": "@author"}]


class TestGetTagSpecs:
    def test_single_check_default_id(self):
        [spec] = get_tag_specs({"checks": [{"tag": "@author"}]})
        assert spec.check_id == "WriteTag"

    def test_multiple_checks(self):
        specs = get_tag_specs(
            {
                "checks": [
                    {"tag": "@author"},
                    {"id": "todo", "tag": "@todo", "severity": "ignore"},
                ]
            }
        )
        assert [s.check_id for s in specs] == ["WriteTag#1", "todo"]
        assert specs[1].severity is Severity.IGNORE

    def test_no_checks(self):
        assert get_tag_specs(DEFAULT_CONFIG) == []

    def test_checks_must_be_array(self):
        with pytest.raises(InvalidConfigurationError):
            get_tag_specs({"checks": {"tag": "@author"}})

    def test_bad_pattern_propagates(self):
        with pytest.raises(InvalidConfigurationError):
            get_tag_specs({"checks": [{"tag": "@author", "tag_format": "("}]})


class TestScanSettings:
    def test_defaults(self):
        assert get_scan_settings(DEFAULT_CONFIG) == {
            "paths": ["."],
            "include": ["*.java"],
            "exclude": [],
        }

    def test_string_is_one_pattern_not_characters(self):
        scan = get_scan_settings({"scan": {"paths": "src", "include": "*.java"}})
        assert scan["paths"] == ["src"]
        assert scan["include"] == ["*.java"]

    def test_comma_separated_string(self):
        scan = get_scan_settings({"scan": {"exclude": "gen/*, build/*"}})
        assert scan["exclude"] == ["gen/*", "build/*"]

    def test_env_string_override(self, monkeypatch):
        monkeypatch.setenv("TAGCHECK_SCAN_INCLUDE", "*.java")
        config = _apply_env_overrides(merge_configs(DEFAULT_CONFIG, {}))
        assert get_scan_settings(config)["include"] == ["*.java"]

    @pytest.mark.parametrize("value", [5, True, ["src", 3], {"a": "b"}])
    def test_other_types_rejected(self, value):
        with pytest.raises(InvalidConfigurationError, match="scan.paths must be a list"):
            get_scan_settings({"scan": {"paths": value}})


class TestOutputSettings:
    def test_defaults(self):
        assert get_output_settings(DEFAULT_CONFIG) == {"format": "text", "show_ignored": False}

    @pytest.mark.parametrize("value", ["0", "no", "false", 1])
    def test_show_ignored_must_be_boolean(self, value):
        with pytest.raises(InvalidConfigurationError, match="show_ignored must be true or false"):
            get_output_settings({"output": {"show_ignored": value}})

    def test_unknown_format(self):
        with pytest.raises(InvalidConfigurationError, match="output.format"):
            get_output_settings({"output": {"format": "xml"}})
