"""Application configuration management."""

from pathlib import Path
from typing import Any, TypeVar

import yaml
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from nighthawk.errors import ConfigFileError

Section = TypeVar("Section", list, dict)


class Settings(BaseSettings):
    """Application settings with environment variable support."""

    model_config = SettingsConfigDict(
        env_prefix="NIGHTHAWK_",
        env_file=[
            ".env",  # Project-level defaults (lower priority)
            Path.home() / ".config" / "nighthawk" / ".env",  # User config (higher priority)
        ],
        env_file_encoding="utf-8",
    )

    # Paths
    config_dir: Path = Field(
        default=Path.home() / ".config" / "nighthawk",
        description="Configuration directory",
    )
    rules_file: str = Field(default="rules.yaml", description="Rules config filename")
    facts_file: str = Field(default="facts.yaml", description="Static facts filename")

    # Logging
    log_level: str = Field(default="INFO", description="Logging level")
    log_dir: Path = Field(
        default=Path.home() / ".local" / "state" / "nighthawk",
        description="Directory for log files (per-rule logs written here)",
    )
    log_rotation_size_mb: int = Field(
        default=5, ge=1, description="Max size per log file in MB before rotation"
    )
    log_backup_count: int = Field(
        default=3, ge=0, description="Number of rotated log files to keep"
    )

    @property
    def rules_path(self) -> Path:
        """Full path to rules file."""
        return self.config_dir / self.rules_file

    @property
    def facts_path(self) -> Path:
        """Full path to facts file."""
        return self.config_dir / self.facts_file

    def ensure_config_dir(self) -> None:
        """Create config directory if it doesn't exist."""
        self.config_dir.mkdir(parents=True, exist_ok=True)


def _read_section(path: Path, key: str, kind: type[Section]) -> Section:
    """Read one top-level section of a YAML file, checking its type."""
    if not path.exists():
        return kind()

    try:
        with open(path) as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigFileError(path, f"invalid YAML: {e}") from e

    if data is None:
        return kind()
    if not isinstance(data, dict):
        raise ConfigFileError(path, f"expected a mapping with a '{key}' key")

    section = data.get(key)
    if section is None:
        return kind()
    if not isinstance(section, kind):
        raise ConfigFileError(path, f"'{key}' must be a {kind.__name__}")
    return section


def load_rules(path: Path) -> list[dict[str, Any]]:
    """
    Load rule definitions from a YAML file.

    Raises:
        ConfigFileError: If the file is not a mapping with a list of rule mappings.
    """
    rules = _read_section(path, "rules", list)
    for index, rule in enumerate(rules, start=1):
        if not isinstance(rule, dict):
            raise ConfigFileError(path, f"rule #{index} must be a mapping")
    return rules


def load_facts(path: Path) -> dict[str, Any]:
    """
    Load static fact values from a YAML file.

    Raises:
        ConfigFileError: If the file is not a mapping with a 'facts' mapping.
    """
    return _read_section(path, "facts", dict)
