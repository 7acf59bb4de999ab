from dataclasses import dataclass
from pathlib import Path


@dataclass(eq=False)
class GatherFilesError(Exception):
    """Base exception for errors in the gather_files module."""


@dataclass(eq=False)
class TargetNotFoundError(GatherFilesError):
    """Raised when a path target does not exist."""

    path: Path

    def __str__(self) -> str:
        return f"path '{self.path}' does not exist"


@dataclass(eq=False)
class ConfigMissingError(GatherFilesError):
    """Raised when a preset is requested but no configuration file was found."""

    preset: str

    def __str__(self) -> str:
        return f"no config found when looking for preset '{self.preset}'"


@dataclass(eq=False)
class PresetNotFoundError(GatherFilesError):
    """Raised when the configuration has no preset with the requested name."""

    preset: str

    def __str__(self) -> str:
        return f"preset '{self.preset}' not found in config"


@dataclass(eq=False)
class InvalidGlobPatternError(GatherFilesError):
    """Raised when an include or exclude pattern cannot be compiled."""

    preset: str
    pattern: str
    reason: str = ""

    def __str__(self) -> str:
        message = f"invalid glob '{self.pattern}' in preset '{self.preset}'"
        return f"{message}: {self.reason}" if self.reason else message


@dataclass(eq=False)
class PatternMatchedNothingError(GatherFilesError):
    """Raised when an include pattern yields no file once excludes are applied."""

    preset: str
    pattern: str

    def __str__(self) -> str:
        return f"no files matched pattern '{self.pattern}' in preset '{self.preset}'"


@dataclass(eq=False)
class FileReadError(GatherFilesError):
    """Raised when a selected file cannot be read as UTF-8 text."""

    path: Path
    reason: str = ""

    def __str__(self) -> str:
        message = f"failed to read {self.path}"
        return f"{message}: {self.reason}" if self.reason else message


@dataclass(eq=False)
class ConfigError(GatherFilesError):
    """Raised when the configuration file cannot be read, parsed or validated."""

    path: Path
    message: str

    def __str__(self) -> str:
        return f"invalid config {self.path}: {self.message}"


@dataclass(eq=False)
class ClipboardError(GatherFilesError):
    """Raised when the rendered text cannot be copied to the clipboard."""

    message: str = "failed to copy to clipboard (no supported clipboard command found)"

    def __str__(self) -> str:
        return self.message
