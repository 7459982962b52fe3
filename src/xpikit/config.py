"""Project configuration for the `xpikit` command line.

Settings are read from ``xpikit.toml`` (top-level keys) or, failing that,
from the ``[tool.xpikit]`` table of ``pyproject.toml``. Command-line flags
take precedence over both.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

import tomli
from pydantic import BaseModel, Field, ValidationError, field_validator

CONFIG_FILE_NAME = "xpikit.toml"
PYPROJECT_FILE_NAME = "pyproject.toml"

_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class XpikitConfig(BaseModel):
    """Configuration for inspection and packaging.

    Attributes
    ----------
    output_dir
        Default directory for built packages (current directory if unset).
    ignore
        Glob patterns for files left out of packages.
    compress_level
        DEFLATE compression level for built packages.
    log_level
        Log level name for command-line runs.
    """

    output_dir: Path | None = None
    ignore: list[str] = Field(default_factory=list)
    compress_level: int = Field(default=9, ge=0, le=9)
    log_level: str = "WARNING"

    model_config = {"frozen": True, "extra": "forbid"}

    @field_validator("log_level")
    @classmethod
    def _known_level(cls, value: str) -> str:
        level = value.upper()
        if level not in _LOG_LEVELS:
            raise ValueError(f"log_level must be one of {', '.join(_LOG_LEVELS)}")
        return level


def load_config(start: Path | None = None) -> XpikitConfig:
    """Load configuration from `start` (defaults to the current directory).

    Relative ``output_dir`` values are resolved against the directory the
    configuration file lives in.

    Raises
    ------
    ValueError
        If a configuration file cannot be read, is not valid TOML, or holds
        invalid settings.
    """
    base = start if start is not None else Path.cwd()

    data: dict[str, Any] | None = None
    source = base / CONFIG_FILE_NAME
    if source.is_file():
        data = _read_toml(source)
    else:
        source = base / PYPROJECT_FILE_NAME
        if source.is_file():
            tool = _read_toml(source).get("tool", {})
            data = tool.get("xpikit") if isinstance(tool, dict) else None

    if data is None:
        return XpikitConfig()
    if not isinstance(data, dict):
        raise ValueError(f"Invalid xpikit configuration in {source}: expected a table")

    try:
        cfg = XpikitConfig.model_validate(data)
    except ValidationError as e:
        raise ValueError(f"Invalid xpikit configuration in {source}: {e}") from e

    if cfg.output_dir is not None and not cfg.output_dir.is_absolute():
        cfg = cfg.model_copy(update={"output_dir": base / cfg.output_dir})
    return cfg


def _read_toml(path: Path) -> dict[str, Any]:
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as e:
        raise ValueError(f"Failed to read config file: {path}") from e
    try:
        return tomli.loads(text)
    except tomli.TOMLDecodeError as e:
        raise ValueError(f"Failed to parse config file: {path}") from e
