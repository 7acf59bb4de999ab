from __future__ import annotations

from pathlib import Path
from typing import Annotated

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from gather_files.exceptions import ConfigError

CONFIG_FILE_NAME = ".gather-files.yaml"

SUPPORTED_CONFIG_VERSION = 1

# Directories skipped during every recursive walk.
IGNORED_DIRS = frozenset({".git", "target", "node_modules"})

NonEmptyPattern = Annotated[str, Field(min_length=1)]


class Preset(BaseModel):
    """A named bundle of glob patterns describing which files to gather.

    Attributes:
        include: Glob patterns to include, relative to `base`, in output order.
        exclude: Glob patterns to exclude, matched against base-relative paths.
        base: Optional base directory; relative values are joined to the repository root.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    include: list[NonEmptyPattern] = Field(..., min_length=1, description="Include globs")
    exclude: list[str] = Field(default_factory=list, description="Exclude globs")
    base: Path | None = Field(default=None, description="Base directory for the globs")


class ConfigFile(BaseModel):
    """Parsed representation of `.gather-files.yaml`."""

    model_config = ConfigDict(frozen=True)

    version: int = Field(..., description="Configuration schema version")
    presets: dict[str, Preset] = Field(default_factory=dict, description="Presets by name")

    @field_validator("version")
    @classmethod
    def check_version(cls, value: int) -> int:
        if value != SUPPORTED_CONFIG_VERSION:
            msg = f"unsupported config version {value} (expected {SUPPORTED_CONFIG_VERSION})"
            raise ValueError(msg)
        return value

    @classmethod
    def load(cls, path: Path) -> ConfigFile | None:
        """Load configuration from disk if the file exists.

        Args:
            path (Path): location of the configuration file

        Raises:
            ConfigError: if the file cannot be read, parsed or validated

        Returns:
            ConfigFile | None: the validated configuration, or None when the file is absent
        """
        if not path.exists():
            return None
        try:
            contents = path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            raise ConfigError(path=path, message=f"failed to read config: {e}") from e
        try:
            data = yaml.safe_load(contents)
        except yaml.YAMLError as e:
            raise ConfigError(path=path, message=f"failed to parse config: {e}") from e
        if not isinstance(data, dict):
            raise ConfigError(path=path, message="expected a mapping at the top level")
        try:
            return cls.model_validate(data)
        except ValidationError as e:
            raise ConfigError(path=path, message=_summarize_validation_error(e)) from e

    def preset(self, name: str) -> Preset | None:
        """Fetch a preset by name."""
        return self.presets.get(name)


def _summarize_validation_error(error: ValidationError) -> str:
    parts: list[str] = []
    for err in error.errors():
        loc = ".".join(str(x) for x in err["loc"])
        parts.append(f"{loc}: {err['msg']}" if loc else err["msg"])
    return "; ".join(parts)


def resolve_config_path(repo_root: Path, config: str | Path) -> Path:
    """Resolve the configuration path against the repository root unless absolute."""
    path = Path(config)
    return path if path.is_absolute() else repo_root / path
