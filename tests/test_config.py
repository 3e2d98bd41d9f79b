"""
Tests for configuration loading.
"""

import json

import pytest

from codestructure.core.config import DEFAULT_CONFIG, Config
from codestructure.core.errors import ConfigError
from codestructure.core.languages import LanguageFamily


class TestConfig:
    """Tests for the Config loader."""

    def test_defaults(self):
        """Test the built-in defaults."""
        config = Config.load(None)

        assert config.max_input_bytes() == 2 * 1024 * 1024
        assert config.oversize_policy() == "truncate"
        assert LanguageFamily.TYPESCRIPT in config.languages()
        assert LanguageFamily.UNKNOWN not in config.languages()
        assert "node_modules" in config.ignored_dirs()
        assert config.reporting()["format"] == "text"

    def test_defaults_are_not_shared(self):
        """Test that mutating one config leaves the defaults intact."""
        config = Config.default()
        config.data["analysis"]["max_input_bytes"] = 1
        assert DEFAULT_CONFIG["analysis"]["max_input_bytes"] == 2 * 1024 * 1024

    def test_yaml_overrides_merge(self, write_file):
        """Test that a YAML file overrides only the keys it names."""
        path = write_file("config.yaml", "analysis:\n  oversize: skip\nlanguages:\n  enabled: [ts, go]\n")
        config = Config.load(path)

        assert config.oversize_policy() == "skip"
        assert config.max_input_bytes() == 2 * 1024 * 1024
        assert config.languages() == {LanguageFamily.TYPESCRIPT, LanguageFamily.GO}

    def test_json_config(self, write_file):
        """Test loading a JSON config file."""
        path = write_file("config.json", json.dumps({"reporting": {"format": "json", "json_indent": 4}}))
        config = Config.load(path)

        assert config.reporting() == {"format": "json", "json_indent": 4}

    def test_empty_yaml_file(self, write_file):
        """Test that an empty YAML file means defaults."""
        path = write_file("empty.yml", "")
        assert Config.load(path).data == Config.default().data

    def test_missing_file(self, tmp_path):
        """Test that a missing config file is reported."""
        with pytest.raises(FileNotFoundError):
            Config.load(str(tmp_path / "nope.yaml"))

    def test_malformed_yaml(self, write_file):
        """Test that unparsable YAML raises ConfigError."""
        path = write_file("bad.yaml", "analysis: [unclosed\n")
        with pytest.raises(ConfigError):
            Config.load(path)

    def test_non_mapping_document(self, write_file):
        """Test that a top-level list is rejected."""
        path = write_file("list.yaml", "- a\n- b\n")
        with pytest.raises(ConfigError):
            Config.load(path)

    @pytest.mark.parametrize("overrides", [
        {"analysis": {"max_input_bytes": 0}},
        {"analysis": {"max_input_bytes": "big"}},
        {"analysis": {"max_input_bytes": True}},
        {"analysis": {"oversize": "explode"}},
    ])
    def test_invalid_values(self, overrides):
        """Test validation of analysis settings."""
        with pytest.raises(ConfigError):
            Config.from_dict(overrides)
