"""Target resolution: decide whether an argument names a path or a preset."""

from __future__ import annotations

from pathlib import Path
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

from gather_files.config import ConfigFile, Preset
from gather_files.exceptions import ConfigMissingError, PresetNotFoundError
from gather_files.file_manipulation import collect_from_path, collect_from_preset
from gather_files.logging import logger


class PathTarget(BaseModel):
    """A filesystem location gathered by the path collector."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["path"] = "path"
    path: Path
    is_root: bool = Field(default=False, description="Whether no argument was given")

    @property
    def description(self) -> str:
        return f"{'root' if self.is_root else 'path'} {self.path}"


class PresetTarget(BaseModel):
    """A named preset gathered by the preset collector."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["preset"] = "preset"
    name: str
    preset: Preset

    @property
    def description(self) -> str:
        return f"preset '{self.name}'"


Target = PathTarget | PresetTarget


def parse_target_path(argument: str, repo_root: Path) -> Path:
    """Interpret an argument as a path: absolute verbatim, relative joined to the root."""
    path = Path(argument)
    return path if path.is_absolute() else repo_root / path


def resolve_target(
    argument: str | None,
    repo_root: Path,
    config: ConfigFile | None,
) -> Target:
    """Decide which collector handles the argument.

    An existing path always wins over a preset of the same name.

    Args:
        argument (str | None): the user argument; None gathers the whole repository root
        repo_root (Path): the repository root
        config (ConfigFile | None): the loaded configuration, if any

    Raises:
        ConfigMissingError: if the argument is not a path and no configuration exists
        PresetNotFoundError: if the configuration has no preset with that name

    Returns:
        Target: the resolved target
    """
    if argument is None:
        return PathTarget(path=repo_root, is_root=True)

    candidate = parse_target_path(argument, repo_root)
    if candidate.exists():
        return PathTarget(path=candidate)

    if config is None:
        raise ConfigMissingError(preset=argument)
    preset = config.preset(argument)
    if preset is None:
        raise PresetNotFoundError(preset=argument)
    return PresetTarget(name=argument, preset=preset)


def collect_target(target: Target, repo_root: Path) -> list[Path]:
    """Run the collector matching the target kind."""
    logger.info("target_resolved", kind=target.kind, target=target.description)
    if isinstance(target, PresetTarget):
        return collect_from_preset(target.name, target.preset, repo_root)
    return collect_from_path(target.path)
