"""
gather_files — Gather files, stitch them together, and copy contents to the clipboard.

Overview
--------
The target is either a path (a file or a directory, relative to the repository
root) or the name of a preset defined in `.gather-files.yaml`:

    version: 1
    presets:
      rust:
        base: .
        include:
          - "src/**/*.rs"
        exclude:
          - "src/lib.rs"

An existing path always takes precedence over a preset with the same name. Without
a target the whole repository root is gathered. `.git`, `target` and
`node_modules` directories are never traversed.

Usage
-----
    - Whole repository:
        gather-files
    - One directory:
        gather-files src
    - A preset, printed instead of copied:
        gather-files rust --stdout > context.txt
"""

from __future__ import annotations

import argparse
import sys
import time
from pathlib import Path
from typing import TYPE_CHECKING

from gather_files import __version__
from gather_files.clipboard import copy_to_clipboard
from gather_files.config import CONFIG_FILE_NAME, ConfigFile, resolve_config_path
from gather_files.exceptions import GatherFilesError
from gather_files.logging import logger, setup_logging
from gather_files.output_construction import render_files
from gather_files.settings import Settings, load_env
from gather_files.targets import collect_target, resolve_target

if TYPE_CHECKING:
    from collections.abc import Sequence


def parse_args(argv: Sequence[str] | None = None) -> Settings:
    """Parse command-line arguments into settings.

    Args:
        argv (Sequence[str] | None): the arguments, defaults to `sys.argv[1:]`

    Returns:
        Settings: the settings of this invocation
    """
    p = argparse.ArgumentParser(
        prog="gather-files",
        description="Gather files, stitch them together, and copy contents to the clipboard.",
    )
    p.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    p.add_argument("target", nargs="?", default=None, help="Directory path or preset name.")
    p.add_argument(
        "--config",
        type=str,
        default=None,
        help=f"Path to config file (default: {CONFIG_FILE_NAME}).",
    )
    p.add_argument("--repo", type=Path, default=None, help="Repository root.")
    p.add_argument(
        "--stdout",
        action="store_true",
        help="Write the gathered text to stdout instead of the clipboard.",
    )
    p.add_argument("--log-file", type=str, default=None, help="Log file path.")
    args = p.parse_args(argv)
    return Settings(**{k: v for k, v in vars(args).items() if v is not None})


def find_repo_root(start: Path) -> Path | None:
    """Find the nearest directory containing `.git`, starting at `start`.

    Args:
        start (Path): the directory to start from

    Returns:
        Path | None: the repository root, or None when no ancestor holds `.git`
    """
    for directory in (start, *start.parents):
        if (directory / ".git").exists():
            return directory
    return None


def run(settings: Settings) -> int:
    """Gather, render and hand the text to the sink.

    Args:
        settings (Settings): the settings of this invocation

    Raises:
        GatherFilesError: on any collection, rendering or sink failure

    Returns:
        int: the process exit code
    """
    start = time.perf_counter()
    current_dir = Path.cwd()
    if settings.repo is not None:
        repo_root = settings.repo.resolve()
    else:
        repo_root = find_repo_root(current_dir) or current_dir

    config = ConfigFile.load(resolve_config_path(repo_root, settings.config))
    target = resolve_target(settings.target, repo_root, config)
    files = collect_target(target, repo_root)

    if not files:
        print(f"No files found for {target.description}.")
        return 0

    rendered, char_count = render_files(files, repo_root)
    if settings.stdout:
        sys.stdout.write(rendered)
        verb, stream = "Wrote", sys.stderr
    else:
        copy_to_clipboard(rendered)
        verb, stream = "Copied", sys.stdout

    elapsed = time.perf_counter() - start
    print(
        f"{verb} {char_count} chars from {len(files)} files ({target.description}) in {elapsed:.2f}s.",
        file=stream,
    )
    return 0


def main(argv: Sequence[str] | None = None) -> int:
    load_env()
    settings = parse_args(argv)
    if settings.log_file:
        setup_logging(settings.log_file)

    try:
        return run(settings)
    except GatherFilesError as e:
        logger.error("gather_failed", error=str(e), error_type=type(e).__name__)
        print(f"error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    raise SystemExit(main())
