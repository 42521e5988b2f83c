"""
Tests for configuration loading.
"""

import pytest
import yaml

from schema_builder.config import BuilderConfig, ConfigLoader
from schema_builder.core.schema.models import AccessType


VALID_CONFIG = """
name: shop
registry: tests.sample_models:Base
rules:
  type_map:
    MONEY: float
  access_types:
    password_digest: hidden
output:
  indent: 4
logging:
  level: DEBUG
  console_output: false
"""


class TestBuilderConfig:
    """Tests for BuilderConfig model."""

    def test_defaults(self):
        config = BuilderConfig(registry="myapp.models:Base")

        assert config.name == "schema"
        assert config.output.indent == 2
        assert config.output.path is None
        assert config.logging.level == "INFO"
        assert "alembic_version" in config.discovery.migration_tables
        assert "active_storage_blobs" in config.discovery.attachment_tables

    @pytest.mark.parametrize("registry", ["myapp.models", "myapp:", ":Base", "my app:Base"])
    def test_invalid_registry(self, registry):
        with pytest.raises(ValueError):
            BuilderConfig(registry=registry)

    def test_invalid_indent(self):
        with pytest.raises(ValueError):
            BuilderConfig(registry="a:B", output={"indent": 20})

    def test_schema_rules(self):
        config = BuilderConfig(
            registry="a:B",
            rules={"type_map": {"MONEY": "float"}, "access_types": {"token": "hidden"}},
        )

        rules = config.schema_rules()

        assert rules.unify_type("money") == "float"
        assert rules.access_type("token") == AccessType.HIDDEN
        assert rules.access_type("id") == AccessType.READ_ONLY


class TestConfigLoader:
    """Tests for ConfigLoader class."""

    def test_load(self, tmp_path):
        path = tmp_path / "schema.yaml"
        path.write_text(VALID_CONFIG, encoding="utf-8")

        config = ConfigLoader().load(path)

        assert config.name == "shop"
        assert config.registry == "tests.sample_models:Base"
        assert config.rules.access_types == {"password_digest": AccessType.HIDDEN}
        assert config.output.indent == 4
        assert config.logging.console_output is False

    def test_load_json(self, tmp_path):
        path = tmp_path / "schema.json"
        path.write_text('{"registry": "app.models:Base"}', encoding="utf-8")

        assert ConfigLoader().load(path).registry == "app.models:Base"

    def test_env_substitution(self, tmp_path, monkeypatch):
        monkeypatch.setenv("SCHEMA_REGISTRY", "app.models:Base")
        path = tmp_path / "schema.yaml"
        path.write_text("registry: ${SCHEMA_REGISTRY}\n", encoding="utf-8")

        assert ConfigLoader().load(path).registry == "app.models:Base"

    def test_missing_env_var(self, tmp_path, monkeypatch):
        monkeypatch.delenv("SCHEMA_REGISTRY", raising=False)
        path = tmp_path / "schema.yaml"
        path.write_text("registry: ${SCHEMA_REGISTRY}\n", encoding="utf-8")

        with pytest.raises(ValueError, match="SCHEMA_REGISTRY"):
            ConfigLoader().load(path)

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            ConfigLoader().load(tmp_path / "missing.yaml")

    def test_not_a_mapping(self, tmp_path):
        path = tmp_path / "schema.yaml"
        path.write_text("- one\n- two\n", encoding="utf-8")

        with pytest.raises(ValueError, match="dictionary"):
            ConfigLoader().load(path)

    def test_validate_file(self, tmp_path):
        path = tmp_path / "schema.yaml"
        path.write_text("registry: not-a-path\n", encoding="utf-8")

        errors = ConfigLoader().validate_file(path)

        assert len(errors) == 1
        assert "validation failed" in errors[0]

    def test_create_example_config(self, tmp_path, monkeypatch):
        path = tmp_path / "nested" / "schema.yaml"
        ConfigLoader.create_example_config(path)

        data = yaml.safe_load(path.read_text(encoding="utf-8"))
        assert data["registry"] == "${SCHEMA_REGISTRY}"

        monkeypatch.setenv("SCHEMA_REGISTRY", "app.models:Base")
        config = ConfigLoader().load(path)
        assert config.rules.access_types["password_digest"] == AccessType.HIDDEN
