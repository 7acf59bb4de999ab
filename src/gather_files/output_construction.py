from __future__ import annotations

import io
from typing import TYPE_CHECKING

from gather_files.exceptions import FileReadError
from gather_files.file_manipulation import relpath
from gather_files.logging import logger

if TYPE_CHECKING:
    from collections.abc import Sequence
    from pathlib import Path

HEADER_PREFIX = "-------\n# "
HEADER_SUFFIX = "\n\n"


def read_file_text(path: Path) -> str:
    """Read a whole file as UTF-8 text, keeping its line endings untouched.

    Args:
        path (Path): the file path to read

    Raises:
        FileReadError: if the file cannot be opened or is not valid UTF-8

    Returns:
        str: the file contents
    """
    try:
        with path.open(encoding="utf-8", newline="") as f:
            return f.read()
    except (OSError, UnicodeDecodeError) as e:
        raise FileReadError(path=path, reason=str(e)) from e


def append_file_section(out: io.StringIO, display: str, contents: str) -> int:
    """Write one file section and return the number of characters it added.

    Args:
        out (io.StringIO): the buffer receiving the section
        display (str): the display path written in the header
        contents (str): the raw file contents

    Returns:
        int: the number of Unicode scalar values written
    """
    section = f"{HEADER_PREFIX}{display}{HEADER_SUFFIX}{contents}"
    if not contents.endswith("\n"):
        section += "\n"
    section += "\n"
    out.write(section)
    return len(section)


def render_files(files: Sequence[Path], root: Path) -> tuple[str, int]:
    """Render file contents in the gather-files format.

    Each file becomes a section made of a delimiter line, a `# <path>` header, a blank
    line, the raw contents (newline-terminated) and a trailing blank line.

    Args:
        files (Sequence[Path]): the ordered file set
        root (Path): the root used to compute display paths

    Raises:
        FileReadError: if any file cannot be read; nothing is returned in that case

    Returns:
        tuple[str, int]: the rendered text and its length in characters
    """
    out = io.StringIO()
    char_count = 0
    for path in files:
        contents = read_file_text(path)
        char_count += append_file_section(out, relpath(path, root), contents)
    logger.info("files_rendered", files=len(files), chars=char_count)
    return out.getvalue(), char_count
