from __future__ import annotations

import os
from pathlib import Path
from typing import TYPE_CHECKING

from wcmatch import fnmatch, glob

from gather_files.config import IGNORED_DIRS
from gather_files.exceptions import (
    InvalidGlobPatternError,
    PatternMatchedNothingError,
    TargetNotFoundError,
)
from gather_files.logging import logger

if TYPE_CHECKING:
    from collections.abc import Iterator, Sequence

    from wcmatch._wcparse import WcRegexp

    from gather_files.config import Preset

# Include patterns follow gitignore rules: `*` stops at `/`, `**` spans directories
# and a pattern without a slash matches the file name at any depth.
INCLUDE_FLAGS = glob.GLOBSTAR | glob.BRACE | glob.DOTGLOB | glob.NEGATE | glob.CASE

# Exclude patterns are plain globs over the whole relative path: `*` crosses `/`.
EXCLUDE_FLAGS = fnmatch.BRACE | fnmatch.DOTMATCH | fnmatch.CASE


def relpath(path: Path, root: Path) -> str:
    """Send the display path of `path` relative to `root`.

    Args:
        path (Path): the path to "relativise"
        root (Path): the root to relativise from

    Returns:
        str: the relative path from root to path. If path is not under root, or is
            the root itself, returns the original path as a string.
    """
    try:
        relative = path.relative_to(root)
    except ValueError:
        return str(path)
    if not relative.parts:
        return str(path)
    return str(relative)


def is_readme(path: Path) -> bool:
    """Check whether a file name starts with `readme`, ignoring case."""
    return path.name.lower().startswith("readme")


def is_direct_child(base: Path, path: Path) -> bool:
    """Check whether `path` sits directly inside `base`, with no directory in between."""
    try:
        return len(path.relative_to(base).parts) == 1
    except ValueError:
        return False


def find_preferred_readme(base: Path, files: Sequence[Path]) -> int | None:
    """Find the index of the README that should lead the file set.

    A README that is a direct child of `base` wins. Otherwise the first README in
    set order is used.

    Args:
        base (Path): directory against which direct children are computed
        files (Sequence[Path]): the ordered file set

    Returns:
        int | None: the index of the preferred README, or None if there is none
    """
    fallback: int | None = None
    for idx, path in enumerate(files):
        if not is_readme(path):
            continue
        if is_direct_child(base, path):
            return idx
        if fallback is None:
            fallback = idx
    return fallback


def promote_readme(base: Path, files: list[Path]) -> list[Path]:
    """Move the preferred README to the front, keeping the relative order of the rest.

    Args:
        base (Path): directory against which direct children are computed
        files (list[Path]): the ordered file set, modified in place

    Returns:
        list[Path]: the same list, for chaining
    """
    if len(files) <= 1:
        return files
    idx = find_preferred_readme(base, files)
    if idx:
        files.insert(0, files.pop(idx))
    return files


def is_ignored_dir(name: str) -> bool:
    """Check if a directory name belongs to the ignore-directory set."""
    return name in IGNORED_DIRS


def walk_files(root: Path, *, follow_file_links: bool = False) -> Iterator[Path]:
    """Walk the directory tree rooted at `root` and yield every file.

    Directories listed in `IGNORED_DIRS` are pruned before being descended into.
    Symlinked directories are never entered.

    Args:
        root (Path): the root directory to walk
        follow_file_links (bool, optional): yield symlinks that point to regular files.
            Defaults to False.

    Yields:
        Iterator[Path]: the files found under `root`, in filesystem order
    """
    for current, dirs, files in os.walk(root):
        dirs[:] = [d for d in dirs if not is_ignored_dir(d)]
        for f in files:
            p = Path(current) / f
            if p.is_symlink() and not follow_file_links:
                continue
            if p.is_file():
                yield p


def collect_from_path(path: Path) -> list[Path]:
    """Collect files from a directory (or a single file) recursively.

    Args:
        path (Path): the file or directory to gather

    Raises:
        TargetNotFoundError: if `path` does not exist

    Returns:
        list[Path]: the files sorted by path, with the README promoted to the front
    """
    if not path.exists():
        raise TargetNotFoundError(path=path)
    if path.is_file():
        return [path]
    if is_ignored_dir(path.name):
        files: list[Path] = []
    else:
        files = sorted(walk_files(path))
    promote_readme(path, files)
    logger.info("files_collected", source="path", path=str(path), files=len(files))
    return files


def resolve_base(preset: Preset, repo_root: Path) -> Path:
    """Resolve the effective base of a preset against the repository root."""
    if preset.base is None:
        return repo_root
    if preset.base.is_absolute():
        return preset.base
    return repo_root / preset.base


def ignored_dir_globs() -> list[str]:
    """Build the negative patterns that keep ignored directories out of every match."""
    return [f"!**/{name}/**" for name in sorted(IGNORED_DIRS)]


def check_glob_syntax(pattern: str) -> None:
    """Reject patterns with an unbalanced character class or alternation.

    Args:
        pattern (str): the glob pattern to check

    Raises:
        ValueError: if the pattern is malformed
    """
    depth = 0
    i = 0
    n = len(pattern)
    while i < n:
        c = pattern[i]
        if c == "\\":
            if i + 1 >= n:
                msg = "dangling '\\'"
                raise ValueError(msg)
            i += 2
            continue
        if c == "[":
            j = i + 1
            if j < n and pattern[j] in "!^":
                j += 1
            if j < n and pattern[j] == "]":
                j += 1
            while j < n and pattern[j] != "]":
                j += 1
            if j >= n:
                msg = "unclosed character class; missing ']'"
                raise ValueError(msg)
            i = j + 1
            continue
        if c == "{":
            if depth:
                msg = "nested alternate groups are not allowed"
                raise ValueError(msg)
            depth += 1
        elif c == "}":
            if not depth:
                msg = "unopened alternate group; missing '{'"
                raise ValueError(msg)
            depth -= 1
        i += 1
    if depth:
        msg = "unclosed alternate group; missing '}'"
        raise ValueError(msg)


def compile_include(preset_name: str, pattern: str) -> WcRegexp[str]:
    """Compile one include pattern together with the ignore-directory negations.

    A leading `/` anchors the pattern at the base; otherwise a pattern without a
    slash matches file names at any depth.

    Args:
        preset_name (str): the preset the pattern belongs to, for error messages
        pattern (str): the include pattern

    Raises:
        InvalidGlobPatternError: if the pattern is malformed

    Returns:
        WcRegexp[str]: the compiled matcher, tested against base-relative posix paths
    """
    try:
        check_glob_syntax(pattern)
        flags = INCLUDE_FLAGS
        if pattern.startswith("/"):
            pattern_body = pattern[1:]
        else:
            pattern_body = pattern
            flags |= glob.MATCHBASE
        return glob.compile([pattern_body, *ignored_dir_globs()], flags=flags)
    except ValueError as e:
        raise InvalidGlobPatternError(preset=preset_name, pattern=pattern, reason=str(e)) from e


def to_exclude_glob(pattern: str) -> str:
    """Let `**/` match zero directories, as `a/**/b` also covers `a/b`."""
    pattern = pattern.replace("/**/", "/{,*/}")
    if pattern.startswith("**/"):
        pattern = "{,*/}" + pattern[3:]
    return pattern


def compile_exclude(preset_name: str, patterns: Sequence[str]) -> WcRegexp[str] | None:
    """Compile exclude patterns into one matcher.

    Args:
        preset_name (str): the preset the patterns belong to, for error messages
        patterns (Sequence[str]): glob patterns matched against base-relative paths

    Raises:
        InvalidGlobPatternError: if any pattern is malformed

    Returns:
        WcRegexp[str] | None: the compiled matcher, or None when there is nothing to exclude
    """
    if not patterns:
        return None
    for pattern in patterns:
        try:
            check_glob_syntax(pattern)
        except ValueError as e:
            raise InvalidGlobPatternError(preset=preset_name, pattern=pattern, reason=str(e)) from e
    return fnmatch.compile([to_exclude_glob(p) for p in patterns], flags=EXCLUDE_FLAGS)


def matches_exclude(exclude: WcRegexp[str] | None, base: Path, path: Path) -> bool:
    """Check a file against the exclude matcher using its base-relative path."""
    if exclude is None:
        return False
    try:
        candidate = path.relative_to(base).as_posix()
    except ValueError:
        candidate = path.as_posix()
    return exclude.match(candidate)


def collect_pattern_matches(
    preset_name: str,
    pattern: str,
    base: Path,
    exclude: WcRegexp[str] | None,
) -> list[Path]:
    """Collect the files matched by one include pattern.

    The include pattern and the ignore-directory negations form one compiled set.
    Ignored directories are pruned during the walk, so nothing inside them is visited.
    Only each file's own path is tested: a pattern naming a directory matches nothing.

    Args:
        preset_name (str): the preset being collected, for error messages
        pattern (str): the include pattern
        base (Path): the directory the pattern is anchored at
        exclude (WcRegexp[str] | None): the compiled exclude matcher

    Raises:
        InvalidGlobPatternError: if the include pattern is malformed

    Returns:
        list[Path]: the surviving files, sorted by path
    """
    include = compile_include(preset_name, pattern)
    matches: list[Path] = []
    if not base.is_dir():
        return matches
    for path in walk_files(base, follow_file_links=True):
        if not include.match(path.relative_to(base).as_posix()):
            continue
        if matches_exclude(exclude, base, path):
            continue
        matches.append(path)
    matches.sort()
    return matches


def collect_from_preset(name: str, preset: Preset, repo_root: Path) -> list[Path]:
    """Collect files based on preset patterns.

    Patterns are evaluated in configuration order. A file matched by several patterns
    keeps the position of its first match.

    Args:
        name (str): the preset name, for error messages
        preset (Preset): the preset record
        repo_root (Path): the repository root used to resolve a relative `base`

    Raises:
        InvalidGlobPatternError: if an include or exclude pattern is malformed
        PatternMatchedNothingError: if an include pattern yields no file

    Returns:
        list[Path]: the merged, deduplicated files with the README promoted to the front
    """
    base = resolve_base(preset, repo_root)
    exclude = compile_exclude(name, preset.exclude)
    ordered: dict[Path, None] = {}

    for pattern in preset.include:
        pattern_matches = collect_pattern_matches(name, pattern, base, exclude)
        if not pattern_matches:
            raise PatternMatchedNothingError(preset=name, pattern=pattern)
        logger.info("pattern_matched", preset=name, pattern=pattern, files=len(pattern_matches))
        ordered.update(dict.fromkeys(pattern_matches))

    files = promote_readme(base, list(ordered))
    logger.info("files_collected", source="preset", preset=name, base=str(base), files=len(files))
    return files
