"""
Configuration Loader

Handles loading and validating YAML/JSON configuration files for schema builds.
Supports environment variable substitution for deployment-specific values.
"""

import os
import re
from pathlib import Path
from typing import Any, Literal

import yaml
from pydantic import BaseModel, ConfigDict, Field, field_validator
from dotenv import load_dotenv

from schema_builder.core.schema.models import AccessType
from schema_builder.core.schema.rules import SchemaRules
from schema_builder.adapters.sqlalchemy_registry import (
    DEFAULT_ATTACHMENT_TABLES,
    DEFAULT_INTERNAL_NAMESPACES,
    DEFAULT_MIGRATION_TABLES,
)


# Load environment variables from .env file if present
load_dotenv()


class RulesConfig(BaseModel):
    """Extra entries layered over the built-in lookup tables."""

    type_map: dict[str, str] = Field(
        default_factory=dict,
        description="Backend type -> canonical type overrides"
    )
    access_types: dict[str, AccessType] = Field(
        default_factory=dict,
        description="Column name -> access type overrides"
    )


class DiscoveryConfig(BaseModel):
    """Which models discovery leaves out."""

    internal_namespaces: list[str] = Field(
        default_factory=lambda: list(DEFAULT_INTERNAL_NAMESPACES),
        description="Module prefixes of bookkeeping models"
    )
    migration_tables: list[str] = Field(
        default_factory=lambda: list(DEFAULT_MIGRATION_TABLES),
        description="Tables of migration-history models"
    )
    attachment_tables: list[str] = Field(
        default_factory=lambda: list(DEFAULT_ATTACHMENT_TABLES),
        description="Tables of file-attachment internal models"
    )


class OutputConfig(BaseModel):
    """Schema document output settings."""

    path: str | None = Field(default=None, description="Output file (stdout if unset)")
    indent: int = Field(default=2, ge=0, le=8, description="JSON indentation")
    skip_log: str | None = Field(default=None, description="Optional JSON file for skipped items")


class LoggingConfig(BaseModel):
    """Logging configuration."""

    level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = Field(default="INFO")
    console_output: bool = Field(default=True, description="Print progress to stderr")


class BuilderConfig(BaseModel):
    """Root configuration for a schema build."""

    model_config = ConfigDict(populate_by_name=True)

    name: str = Field(default="schema", description="Build name/identifier")
    version: str = Field(default="1.0", description="Configuration version")

    registry: str = Field(..., description="Registry import path, e.g. myapp.models:Base")
    rules: RulesConfig = Field(default_factory=RulesConfig)
    discovery: DiscoveryConfig = Field(default_factory=DiscoveryConfig)
    output: OutputConfig = Field(default_factory=OutputConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    @field_validator("registry")
    @classmethod
    def validate_registry(cls, v: str) -> str:
        """Validate registry import path format."""
        if not re.match(r"^[A-Za-z_][\w.]*:[A-Za-z_][\w.]*$", v):
            raise ValueError(f"Invalid registry path: {v} (expected 'package.module:attribute')")
        return v

    def schema_rules(self) -> SchemaRules:
        """Build the immutable lookup tables for the pipeline."""
        return SchemaRules.with_overrides(
            type_map=self.rules.type_map,
            access_types=self.rules.access_types,
        )


class ConfigLoader:
    """
    Loads and validates build configuration from YAML/JSON files.

    Supports environment variable substitution using ${VAR_NAME} syntax.

    Example:
        >>> loader = ConfigLoader()
        >>> config = loader.load("schema.yaml")
        >>> print(config.registry)
    """

    # Pattern for environment variable substitution
    ENV_PATTERN = re.compile(r"\$\{([^}]+)\}")

    def __init__(self, env_file: Path | None = None):
        """
        Initialize config loader.

        Args:
            env_file: Optional path to .env file
        """
        if env_file:
            load_dotenv(env_file)

    def load(self, config_path: str | Path) -> BuilderConfig:
        """
        Load configuration from file.

        Args:
            config_path: Path to YAML or JSON config file

        Returns:
            Validated BuilderConfig object

        Raises:
            FileNotFoundError: If config file doesn't exist
            ValueError: If config is invalid
        """
        path = Path(config_path)

        if not path.exists():
            raise FileNotFoundError(f"Configuration file not found: {path}")

        content = path.read_text(encoding="utf-8")

        # Substitute environment variables
        content = self._substitute_env_vars(content)

        # Parse YAML (also handles JSON as subset of YAML)
        try:
            data = yaml.safe_load(content)
        except yaml.YAMLError as e:
            raise ValueError(f"Failed to parse configuration: {e}") from e

        if not isinstance(data, dict):
            raise ValueError("Configuration must be a dictionary")

        # Validate with Pydantic
        try:
            return BuilderConfig.model_validate(data)
        except Exception as e:
            raise ValueError(f"Configuration validation failed: {e}") from e

    def _substitute_env_vars(self, content: str) -> str:
        """
        Replace ${VAR_NAME} with environment variable values.

        Args:
            content: Configuration content string

        Returns:
            Content with substituted values
        """
        def replace(match: re.Match[str]) -> str:
            var_name = match.group(1)
            value = os.environ.get(var_name)
            if value is None:
                raise ValueError(
                    f"Environment variable '{var_name}' is not set. "
                    f"Please set it or update the configuration."
                )
            return value

        return self.ENV_PATTERN.sub(replace, content)

    def validate_file(self, config_path: str | Path) -> list[str]:
        """
        Validate a configuration file and return any errors.

        Args:
            config_path: Path to config file

        Returns:
            List of error messages (empty if valid)
        """
        errors: list[str] = []

        try:
            self.load(config_path)
        except FileNotFoundError as e:
            errors.append(str(e))
        except ValueError as e:
            errors.append(str(e))

        return errors

    @staticmethod
    def create_example_config(output_path: str | Path) -> None:
        """
        Create an example configuration file.

        Args:
            output_path: Where to write the example config
        """
        example: dict[str, Any] = {
            "name": "app_schema",
            "version": "1.0",
            "registry": "${SCHEMA_REGISTRY}",
            "rules": {
                "type_map": {
                    "money": "float",
                },
                "access_types": {
                    "password_digest": "hidden",
                },
            },
            "discovery": {
                "internal_namespaces": list(DEFAULT_INTERNAL_NAMESPACES),
                "migration_tables": list(DEFAULT_MIGRATION_TABLES),
                "attachment_tables": list(DEFAULT_ATTACHMENT_TABLES),
            },
            "output": {
                "path": "./schema.json",
                "indent": 2,
            },
            "logging": {
                "level": "INFO",
                "console_output": True,
            },
        }

        path = Path(output_path)
        path.parent.mkdir(parents=True, exist_ok=True)

        with open(path, "w", encoding="utf-8") as f:
            yaml.dump(example, f, default_flow_style=False, sort_keys=False, allow_unicode=True)
