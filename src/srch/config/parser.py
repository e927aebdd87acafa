"""
YAML configuration parser for srch.

This module provides functionality to locate, load and validate YAML
configuration files. It handles configuration file discovery, parsing and
validation, and provides helpful error messages for configuration issues.
"""

import yaml
from pathlib import Path
from typing import Dict, Any, Optional, List, Union
import logging
from dataclasses import dataclass

from pydantic import ValidationError

from ..models.config import SrchConfig


logger = logging.getLogger(__name__)


@dataclass
class ConfigParseResult:
    """
    Result of configuration parsing operation.

    Attributes:
        config: The parsed and validated configuration
        config_path: Path to the configuration file used
        is_default: Whether default configuration was used
    """
    config: SrchConfig
    config_path: Optional[Path]
    is_default: bool


class ConfigurationError(Exception):
    """Raised when configuration parsing or validation fails."""
    pass


class ConfigParser:
    """
    YAML configuration parser with validation and error handling.

    Loads a configuration file (explicit or discovered), validates it and
    converts it to a SrchConfig. Missing files fall back to defaults.
    """

    DEFAULT_CONFIG_NAMES = [
        '.srch.yaml',
        '.srch.yml',
        'srch.yaml',
        'srch.yml'
    ]

    def __init__(self, search_paths: Optional[List[Path]] = None):
        """
        Initialize the configuration parser.

        Args:
            search_paths: Directories searched for a configuration file.
                Defaults to the current directory, the home directory and
                ~/.config/srch.
        """
        self.search_paths = search_paths
        self.logger = logging.getLogger(f"{__name__}.{self.__class__.__name__}")

    def load_config(self, config_path: Optional[Union[str, Path]] = None) -> ConfigParseResult:
        """
        Load and parse configuration from file or use defaults.

        Args:
            config_path: Path to configuration file. If None, searches for default files.

        Returns:
            ConfigParseResult containing parsed configuration and metadata

        Raises:
            ConfigurationError: If configuration is invalid or file cannot be read
        """
        if config_path:
            config_path = Path(config_path).expanduser()
            if not config_path.exists():
                raise ConfigurationError(f"Configuration file not found: {config_path}")
            config_data = self._load_yaml_file(config_path)
            is_default = False
        else:
            config_path, config_data = self._find_and_load_config()
            is_default = config_data is None
            if is_default:
                config_data = {}

        try:
            config = SrchConfig.from_dict(config_data)
        except ValidationError as e:
            raise ConfigurationError(f"Configuration validation failed: {e}") from e

        self.logger.debug(f"Configuration loaded from {config_path or 'defaults'}")

        return ConfigParseResult(
            config=config,
            config_path=config_path,
            is_default=is_default
        )

    def _default_search_paths(self) -> List[Path]:
        return [
            Path.cwd(),
            Path.home(),
            Path.home() / '.config' / 'srch',
        ]

    def _find_and_load_config(self) -> tuple[Optional[Path], Optional[Dict[str, Any]]]:
        """
        Find and load configuration file from default locations.

        A file that exists but fails to load is reported and skipped so that
        a broken file in one location does not mask a valid one elsewhere.

        Returns:
            Tuple of (config_path, config_data) or (None, None) if not found
        """
        search_paths = self.search_paths if self.search_paths is not None else self._default_search_paths()

        for search_path in search_paths:
            for config_name in self.DEFAULT_CONFIG_NAMES:
                config_file = search_path / config_name
                if config_file.exists() and config_file.is_file():
                    try:
                        config_data = self._load_yaml_file(config_file)
                    except ConfigurationError as e:
                        self.logger.warning(f"Failed to load {config_file}: {e}")
                        continue
                    self.logger.debug(f"Found configuration file: {config_file}")
                    return config_file, config_data

        self.logger.debug("No configuration file found, using defaults")
        return None, None

    def _load_yaml_file(self, file_path: Path) -> Dict[str, Any]:
        """
        Load and parse YAML file.

        Args:
            file_path: Path to YAML file

        Returns:
            Parsed YAML data as dictionary

        Raises:
            ConfigurationError: If file cannot be read or parsed
        """
        try:
            with open(file_path, 'r', encoding='utf-8') as f:
                content = f.read()

            if not content.strip():
                self.logger.warning(f"Configuration file is empty: {file_path}")
                return {}

            data = yaml.safe_load(content)

            if data is None:
                return {}

            if not isinstance(data, dict):
                raise ConfigurationError(f"Configuration file must contain a YAML object, got {type(data).__name__}")

            return data

        except yaml.YAMLError as e:
            raise ConfigurationError(f"Invalid YAML syntax in {file_path}: {e}") from e
        except (OSError, UnicodeDecodeError) as e:
            raise ConfigurationError(f"Cannot read configuration file {file_path}: {e}") from e

    def get_config_template(self) -> str:
        """
        Get a template configuration file with all options and comments.

        Returns:
            YAML template as string
        """
        template = SrchConfig().to_dict()

        lines = [
            "# srch configuration",
            "# Command-line flags take precedence over these values",
            "",
        ]

        sections = [
            ("search", "Defaults for search options"),
            ("limits", "Overflow threshold and binary detection sample size"),
            ("output", "Deferred-result file and highlight styles"),
        ]

        for section_name, comment in sections:
            lines.append(f"# {comment}")
            section_yaml = yaml.safe_dump({section_name: template[section_name]},
                                          default_flow_style=False,
                                          sort_keys=False)
            lines.append(section_yaml.rstrip())
            lines.append("")

        return "\n".join(lines)


def load_config(config_path: Optional[Union[str, Path]] = None) -> ConfigParseResult:
    """
    Convenience function to load configuration.

    Args:
        config_path: Path to configuration file (optional)

    Returns:
        ConfigParseResult containing parsed configuration

    Raises:
        ConfigurationError: If configuration is invalid
    """
    parser = ConfigParser()
    return parser.load_config(config_path)


def create_config_template(output_path: Union[str, Path]) -> None:
    """
    Create a template configuration file.

    Args:
        output_path: Where to save the template

    Raises:
        ConfigurationError: If template cannot be created
    """
    parser = ConfigParser()
    template_content = parser.get_config_template()

    try:
        output_path = Path(output_path)
        output_path.parent.mkdir(parents=True, exist_ok=True)

        with open(output_path, 'w', encoding='utf-8') as f:
            f.write(template_content)

    except OSError as e:
        raise ConfigurationError(f"Cannot create template file {output_path}: {e}") from e
