"""Unit tests for configuration management."""

import json
from pathlib import Path
from tempfile import TemporaryDirectory
from unittest.mock import patch

import pytest

from modchart.config import (
    DEFAULT_FILE_NAME,
    FlowchartConfig,
    LogLevel,
    apply_defaults,
    find_config_file,
    load_config,
)


class TestFlowchartConfig:
    """Test FlowchartConfig model."""

    def test_defaults(self):
        """Every option has a documented default."""
        config = FlowchartConfig()
        assert config.file_name == "modules-flowchart.md"
        assert config.output_path is None
        assert config.modules_to_ignore == ["FlowchartModule", "InternalCoreModule"]
        assert config.display_app_module is True
        assert config.root_module == "AppModule"
        assert config.fenced is True
        assert config.logging.level == LogLevel.INFO.value

    def test_aliases_and_field_names(self):
        """camelCase aliases and snake_case names are both accepted."""
        by_alias = FlowchartConfig(**{"displayAppModule": False, "modulesToIgnore": ["X"]})
        by_name = FlowchartConfig(display_app_module=False, modules_to_ignore=["X"])

        assert by_alias == by_name
        assert by_alias.ignore_set == frozenset({"X"})

    def test_default_ignore_list_not_shared(self):
        """Mutating one config's ignore list leaves others alone."""
        first = FlowchartConfig()
        first.modules_to_ignore.append("Other")

        assert FlowchartConfig().modules_to_ignore == ["FlowchartModule", "InternalCoreModule"]

    def test_extra_fields_forbidden(self):
        """Unknown options are rejected."""
        with pytest.raises(ValueError):
            FlowchartConfig(**{"displayAppModules": True})

    def test_empty_root_rejected(self):
        """Root module name must not be blank."""
        with pytest.raises(ValueError):
            FlowchartConfig(root_module="  ")

    def test_empty_file_name_rejected(self):
        """File name must not be blank."""
        with pytest.raises(ValueError):
            FlowchartConfig(file_name="")


class TestApplyDefaults:
    """Test merging partial configuration with defaults."""

    def test_none_gives_defaults(self, tmp_path):
        """No input yields defaults with a derived output path."""
        config = apply_defaults(None, cwd=tmp_path)
        assert config.output_path == tmp_path / DEFAULT_FILE_NAME
        assert config.display_app_module is True

    def test_file_name_drives_output_path(self, tmp_path):
        """The output path uses the configured file name."""
        config = apply_defaults({"fileName": "graph.md"}, cwd=tmp_path)
        assert config.output_path == tmp_path / "graph.md"

    def test_explicit_output_path_wins(self, tmp_path):
        """outputPath overrides fileName."""
        target = tmp_path / "docs" / "modules.md"
        config = apply_defaults(
            {"fileName": "ignored.md", "outputPath": str(target)}, cwd=tmp_path
        )
        assert config.output_path == target

    def test_explicit_false_kept(self, tmp_path):
        """A false displayAppModule is not replaced by the default."""
        config = apply_defaults({"displayAppModule": False}, cwd=tmp_path)
        assert config.display_app_module is False

    def test_defaults_to_working_directory(self, tmp_path):
        """Without cwd the current directory is used."""
        with patch("modchart.config.Path.cwd", return_value=tmp_path):
            config = apply_defaults({})
        assert config.output_path == tmp_path / DEFAULT_FILE_NAME

    def test_model_input_not_mutated(self, tmp_path):
        """Passing a model returns a completed copy."""
        partial = FlowchartConfig(root_module="Root")
        config = apply_defaults(partial, cwd=tmp_path)

        assert partial.output_path is None
        assert config.output_path == tmp_path / DEFAULT_FILE_NAME
        assert config.root_module == "Root"


class TestConfigFileOperations:
    """Test configuration file loading and discovery."""

    def test_load_config_with_file(self):
        """Test loading config from existing file."""
        with TemporaryDirectory() as temp_dir:
            config_file = Path(temp_dir) / ".modchart.json"
            config_data = {
                "rootModule": "MainModule",
                "modulesToIgnore": ["LoggerModule"],
                "fenced": False,
                "logging": {"level": "debug"}
            }

            with open(config_file, "w") as f:
                json.dump(config_data, f)

            config = load_config(config_file)
            assert config.root_module == "MainModule"
            assert config.modules_to_ignore == ["LoggerModule"]
            assert config.fenced is False
            assert config.logging.level == "debug"
            assert config.output_path is not None

    def test_load_config_file_not_found(self):
        """Missing config file falls back to defaults."""
        with TemporaryDirectory() as temp_dir:
            config = load_config(Path(temp_dir) / "nonexistent.json")
            assert config.root_module == "AppModule"

    def test_load_config_invalid_json(self):
        """Test loading config with invalid JSON."""
        with TemporaryDirectory() as temp_dir:
            config_file = Path(temp_dir) / ".modchart.json"
            config_file.write_text("{invalid json")

            with pytest.raises(ValueError, match="Invalid JSON"):
                load_config(config_file)

    def test_load_config_invalid_structure(self):
        """Test loading config with invalid structure."""
        with TemporaryDirectory() as temp_dir:
            config_file = Path(temp_dir) / ".modchart.json"
            config_file.write_text(json.dumps({"invalid": "structure"}))

            with pytest.raises(ValueError, match="Failed to load config"):
                load_config(config_file)

    def test_load_config_non_object(self):
        """A JSON array is not a configuration."""
        with TemporaryDirectory() as temp_dir:
            config_file = Path(temp_dir) / ".modchart.json"
            config_file.write_text(json.dumps(["rootModule", "Root"]))

            with pytest.raises(ValueError, match="Failed to load config"):
                load_config(config_file)

    def test_find_config_file_current_dir(self):
        """Test finding config file in current directory."""
        with TemporaryDirectory() as temp_dir:
            temp_path = Path(temp_dir)
            config_file = temp_path / ".modchart.json"
            config_file.touch()

            assert find_config_file(temp_path) == config_file.resolve()

    def test_find_config_file_parent_dir(self):
        """Test finding config file in a parent directory."""
        with TemporaryDirectory() as temp_dir:
            temp_path = Path(temp_dir)
            config_file = temp_path / ".modchart.json"
            config_file.touch()
            sub_dir = temp_path / "a" / "b"
            sub_dir.mkdir(parents=True)

            assert find_config_file(sub_dir) == config_file.resolve()

    def test_load_config_searches_when_no_path(self, tmp_path):
        """Without a path the config file is discovered."""
        (tmp_path / ".modchart.json").write_text(json.dumps({"rootModule": "Found"}))

        with patch("modchart.config.find_config_file", return_value=tmp_path / ".modchart.json"):
            config = load_config()

        assert config.root_module == "Found"
