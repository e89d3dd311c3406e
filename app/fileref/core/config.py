"""User configuration for fileref.

Scan defaults applied by the CLI (and available to library users through
FileScanner.apply_settings) are stored in ~/.config/fileref/config.toml:

    log_level = "WARNING"

    [scan]
    follow_symlinks = false
    strict = false
    include_hidden = true
    skip_dirs = [".git", "__pycache__"]
"""

import fnmatch
import logging
import os
import tomllib
from pathlib import Path
from tempfile import NamedTemporaryFile
from typing import Annotated, Literal

import tomli_w
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from fileref.core.errors import ConfigError, ConfigNotFoundError, ConfigParseError
from fileref.core.paths import ensure_config_dir, get_config_path

logger = logging.getLogger(__name__)

LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR"]


class ScanSettings(BaseModel):
    """Default scanner behavior.

    Attributes:
        follow_symlinks: Descend into symlinked directories.
        strict: Fail on unreadable directories instead of skipping them.
        include_hidden: Yield and descend into dot-prefixed entries.
        skip_dirs: Glob patterns of directory names that are never descended into.
    """

    model_config = ConfigDict(extra="forbid")

    follow_symlinks: Annotated[
        bool,
        Field(description="Descend into symlinked directories"),
    ] = False
    strict: Annotated[
        bool,
        Field(description="Raise on unreadable directories"),
    ] = False
    include_hidden: Annotated[
        bool,
        Field(description="Include dot-prefixed entries"),
    ] = True
    skip_dirs: Annotated[
        list[str],
        Field(
            default_factory=list,
            description="Directory name patterns never descended into",
        ),
    ]

    def is_skipped_dir(self, name: str) -> bool:
        """Check if a directory name matches one of the skip patterns."""
        return any(fnmatch.fnmatch(name, pattern) for pattern in self.skip_dirs)


class FileRefConfig(BaseModel):
    """Top-level fileref configuration.

    Attributes:
        log_level: Log level used by the CLI when --verbose is not given.
        scan: Default scanner behavior.
    """

    model_config = ConfigDict(extra="forbid")

    log_level: Annotated[
        LogLevel,
        Field(description="CLI log level"),
    ] = "WARNING"
    scan: ScanSettings = Field(default_factory=ScanSettings)


def load_config(path: Path | None = None) -> FileRefConfig:
    """Load configuration from a TOML file.

    Args:
        path: Path to the config file. If None, uses the default config path.

    Returns:
        Validated FileRefConfig object.

    Raises:
        ConfigNotFoundError: If the config file doesn't exist.
        ConfigParseError: If the TOML syntax is invalid.
        ConfigError: If the content doesn't match the schema.
    """
    config_path = path or get_config_path()

    if not config_path.exists():
        raise ConfigNotFoundError(f"Config not found: {config_path}")

    try:
        with open(config_path, "rb") as f:
            data = tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise ConfigParseError(f"Invalid TOML syntax: {e}") from e
    except OSError as e:
        raise ConfigError(f"Failed to read config: {e}") from e

    try:
        return FileRefConfig.model_validate(data)
    except (ValueError, ValidationError) as e:
        raise ConfigError(f"Invalid config content: {e}") from e


def load_config_or_default(path: Path | None = None) -> FileRefConfig:
    """Load configuration, falling back to defaults when no file exists.

    Parse and validation errors still propagate.
    """
    try:
        return load_config(path)
    except ConfigNotFoundError:
        logger.debug("No config file found, using defaults")
        return FileRefConfig()


def save_config(config: FileRefConfig, path: Path | None = None) -> Path:
    """Save configuration to a TOML file.

    The file is written atomically by first writing to a temporary file
    and then using os.replace() for atomic rename.

    Args:
        config: The FileRefConfig object to save.
        path: Path to save the config. If None, uses the default config path.

    Returns:
        Path where the config was saved.

    Raises:
        ConfigError: If the file cannot be written.
    """
    if path is None:
        try:
            ensure_config_dir()
        except RuntimeError as e:
            raise ConfigError(str(e)) from e
    config_path = path or get_config_path()

    tmp_path: Path | None = None
    try:
        config_path.parent.mkdir(parents=True, exist_ok=True)
        with NamedTemporaryFile(
            mode="wb",
            dir=config_path.parent,
            delete=False,
            suffix=".tmp",
        ) as f:
            tmp_path = Path(f.name)
            tomli_w.dump(config.model_dump(), f)
        os.replace(str(tmp_path), str(config_path))
    except OSError as e:
        if tmp_path is not None and tmp_path.exists():
            tmp_path.unlink()
        raise ConfigError(f"Failed to write config: {e}") from e

    return config_path
