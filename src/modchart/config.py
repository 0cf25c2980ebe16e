"""Configuration management for modchart using Pydantic models."""

import json
from collections.abc import Mapping
from enum import Enum
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

CONFIG_FILE_NAME = ".modchart.json"
DEFAULT_FILE_NAME = "modules-flowchart.md"
DEFAULT_ROOT_MODULE = "AppModule"
DEFAULT_MODULES_TO_IGNORE = ["FlowchartModule", "InternalCoreModule"]


class LogLevel(str, Enum):
    """Logging levels."""
    ERROR = "error"
    WARN = "warn"
    INFO = "info"
    DEBUG = "debug"


class LoggingConfig(BaseModel):
    """Logging configuration section."""
    level: LogLevel = LogLevel.INFO

    model_config = ConfigDict(use_enum_values=True)


class FlowchartConfig(BaseModel):
    """Complete modchart configuration model.

    ``output_path`` stays None until :func:`apply_defaults` derives it from
    the working directory and ``file_name``.
    """
    file_name: str = Field(alias="fileName", default=DEFAULT_FILE_NAME)
    output_path: Path | None = Field(alias="outputPath", default=None)
    modules_to_ignore: list[str] = Field(
        alias="modulesToIgnore",
        default_factory=lambda: list(DEFAULT_MODULES_TO_IGNORE),
    )
    display_app_module: bool = Field(alias="displayAppModule", default=True)
    root_module: str = Field(alias="rootModule", default=DEFAULT_ROOT_MODULE)
    fenced: bool = True
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    @field_validator("file_name", "root_module")
    @classmethod
    def validate_not_empty(cls, v):
        if not v.strip():
            raise ValueError("must not be empty")
        return v

    model_config = ConfigDict(populate_by_name=True, extra="forbid")

    @property
    def ignore_set(self) -> frozenset[str]:
        return frozenset(self.modules_to_ignore)


def apply_defaults(
    partial: Mapping | FlowchartConfig | None = None,
    cwd: Path | None = None,
) -> FlowchartConfig:
    """Merge partial configuration with defaults.

    Args:
        partial: Options given by the caller, by alias or field name
        cwd: Directory the default output path is relative to (default: current)

    Returns:
        FlowchartConfig with every field set, including ``output_path``
    """
    if partial is None:
        config = FlowchartConfig()
    elif isinstance(partial, FlowchartConfig):
        config = partial.model_copy(deep=True)
    else:
        config = FlowchartConfig(**partial)

    if config.output_path is None:
        base = Path(cwd) if cwd is not None else Path.cwd()
        config.output_path = base / config.file_name

    return config


def load_config(config_path: str | Path | None = None) -> FlowchartConfig:
    """Load configuration from file with fallback to defaults.

    Args:
        config_path: Optional path to configuration file. If None, searches
                    current directory and parents for .modchart.json

    Returns:
        FlowchartConfig: Loaded and validated configuration, defaults applied

    Raises:
        ValueError: If configuration is invalid
    """
    if config_path is None:
        config_path = find_config_file()
    else:
        config_path = Path(config_path)

    if config_path and config_path.exists():
        try:
            with open(config_path, encoding="utf-8") as f:
                config_data = json.load(f)
            return apply_defaults(config_data)
        except json.JSONDecodeError as e:
            raise ValueError(f"Invalid JSON in config file {config_path}: {e}")
        except (ValidationError, TypeError) as e:
            raise ValueError(f"Failed to load config from {config_path}: {e}")

    return apply_defaults()


def find_config_file(start_dir: Path | None = None) -> Path | None:
    """Find .modchart.json configuration file by searching up directory tree.

    Args:
        start_dir: Directory to start search from (default: current directory)

    Returns:
        Path to config file if found, None otherwise
    """
    if start_dir is None:
        start_dir = Path.cwd()

    current = Path(start_dir).resolve()

    while True:
        config_file = current / CONFIG_FILE_NAME
        if config_file.exists():
            return config_file

        parent = current.parent
        if parent == current:  # Reached root directory
            break
        current = parent

    return None
