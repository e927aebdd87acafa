"""
Unit tests for configuration parser.

Tests the YAML configuration parsing, discovery, validation, and error
handling functionality of the ConfigParser class.
"""

import pytest
import yaml
from pathlib import Path
from unittest.mock import patch

from srch.config.parser import (
    ConfigParser,
    ConfigParseResult,
    ConfigurationError,
    load_config,
    create_config_template
)
from srch.models.config import SrchConfig


class TestConfigParser:
    """Test cases for ConfigParser class."""

    def test_default_config_names(self):
        assert ConfigParser.DEFAULT_CONFIG_NAMES == [
            '.srch.yaml',
            '.srch.yml',
            'srch.yaml',
            'srch.yml'
        ]

    def test_load_config_with_valid_file(self, tmp_path):
        """Test loading configuration from valid YAML file."""
        config_file = tmp_path / "custom.yaml"
        config_file.write_text(yaml.dump({
            'search': {'max_depth': 5, 'include_hidden': True},
            'limits': {'overflow_threshold': 20},
            'output': {'overflow_file': 'overflow.txt', 'location_style': 'green'},
        }))

        result = ConfigParser().load_config(config_file)

        assert isinstance(result, ConfigParseResult)
        assert result.is_default is False
        assert result.config_path == config_file
        assert result.config.search.max_depth == 5
        assert result.config.search.include_hidden is True
        assert result.config.search.ignore_file_names == ['.ignore', '.gitignore']
        assert result.config.limits.overflow_threshold == 20
        assert result.config.limits.binary_sniff_bytes == 1024
        assert result.config.output.overflow_file == 'overflow.txt'
        assert result.config.output.location_style == 'green'

    def test_load_config_missing_file(self, tmp_path):
        with pytest.raises(ConfigurationError, match="not found"):
            ConfigParser().load_config(tmp_path / "missing.yaml")

    def test_load_config_invalid_yaml(self, tmp_path):
        config_file = tmp_path / "bad.yaml"
        config_file.write_text("search: [unclosed\n")

        with pytest.raises(ConfigurationError, match="Invalid YAML"):
            ConfigParser().load_config(config_file)

    def test_load_config_not_a_mapping(self, tmp_path):
        config_file = tmp_path / "list.yaml"
        config_file.write_text("- a\n- b\n")

        with pytest.raises(ConfigurationError, match="YAML object"):
            ConfigParser().load_config(config_file)

    def test_load_config_empty_file(self, tmp_path):
        config_file = tmp_path / "empty.yaml"
        config_file.write_text("   \n")

        result = ConfigParser().load_config(config_file)
        assert result.config == SrchConfig()

    @pytest.mark.parametrize("data", [
        {'search': {'max_depth': -1}},
        {'search': {'ignore_file_names': []}},
        {'search': {'ignore_file_names': ['dir/.ignore']}},
        {'limits': {'overflow_threshold': 0}},
        {'output': {'highlight_style': 'bold nonsensecolor'}},
    ])
    def test_load_config_validation_errors(self, tmp_path, data):
        config_file = tmp_path / "invalid.yaml"
        config_file.write_text(yaml.dump(data))

        with pytest.raises(ConfigurationError, match="validation failed"):
            ConfigParser().load_config(config_file)

    def test_discovery(self, tmp_path):
        """The first existing file in the search paths is used."""
        first = tmp_path / "first"
        second = tmp_path / "second"
        first.mkdir()
        second.mkdir()
        (second / "srch.yml").write_text("search:\n  max_depth: 7\n")

        result = ConfigParser(search_paths=[first, second]).load_config()

        assert result.is_default is False
        assert result.config_path == second / "srch.yml"
        assert result.config.search.max_depth == 7

    def test_discovery_skips_broken_file(self, tmp_path):
        (tmp_path / ".srch.yaml").write_text("search: [broken\n")
        (tmp_path / "srch.yaml").write_text("search:\n  max_depth: 2\n")

        result = ConfigParser(search_paths=[tmp_path]).load_config()

        assert result.config_path == tmp_path / "srch.yaml"
        assert result.config.search.max_depth == 2

    def test_defaults_when_nothing_found(self, tmp_path):
        result = ConfigParser(search_paths=[tmp_path]).load_config()

        assert result.is_default is True
        assert result.config_path is None
        assert result.config == SrchConfig()

    def test_unreadable_file(self, tmp_path):
        config_file = tmp_path / "srch.yaml"
        config_file.write_text("search: {}\n")

        with patch("builtins.open", side_effect=PermissionError("denied")):
            with pytest.raises(ConfigurationError, match="Cannot read"):
                ConfigParser().load_config(config_file)

    def test_template_round_trip(self, tmp_path):
        """The generated template loads back as the default configuration."""
        template = ConfigParser().get_config_template()
        assert template.startswith("# srch configuration")

        config_file = tmp_path / "template.yaml"
        config_file.write_text(template)

        assert ConfigParser().load_config(config_file).config == SrchConfig()


class TestConvenienceFunctions:
    """Test cases for module-level helpers."""

    def test_load_config(self, tmp_path):
        config_file = tmp_path / "c.yaml"
        config_file.write_text("limits:\n  overflow_threshold: 3\n")

        assert load_config(config_file).config.limits.overflow_threshold == 3

    def test_create_config_template(self, tmp_path):
        output_path = tmp_path / "nested" / ".srch.yaml"
        create_config_template(output_path)

        data = yaml.safe_load(output_path.read_text())
        assert set(data) == {'search', 'limits', 'output'}
        assert data['limits']['overflow_threshold'] == 100

    def test_create_config_template_error(self, tmp_path):
        with patch("builtins.open", side_effect=PermissionError("denied")):
            with pytest.raises(ConfigurationError, match="Cannot create"):
                create_config_template(tmp_path / "t.yaml")
