from __future__ import annotations

import os
from pathlib import Path

from dotenv import find_dotenv, load_dotenv
from pydantic import BaseModel, Field

from gather_files.config import CONFIG_FILE_NAME

ENV_FILE = find_dotenv(usecwd=True)

CONFIG_ENV_VAR = "GATHER_FILES_CONFIG"
LOG_FILE_ENV_VAR = "GATHER_FILES_LOG_FILE"


def load_env(env_file: str | None = None) -> bool:
    """Load variables from a `.env` file without overriding the environment."""
    return load_dotenv(env_file or ENV_FILE, override=False)


class Settings(BaseModel):
    """Configuration settings for one gather-files invocation."""

    target: str | None = Field(default=None, description="Directory path or preset name.")
    repo: Path | None = Field(
        default=None,
        description="Repository root; discovered from the current directory when unset.",
    )
    config: str = Field(
        default_factory=lambda: os.environ.get(CONFIG_ENV_VAR) or CONFIG_FILE_NAME,
        description="Path to the config file, relative to the repository root.",
    )
    log_file: str = Field(
        default_factory=lambda: os.environ.get(LOG_FILE_ENV_VAR, ""),
        description="Log file path.",
    )
    stdout: bool = Field(default=False, description="Write to stdout instead of the clipboard.")
