from __future__ import annotations

import subprocess  # noqa: S404

from gather_files.exceptions import ClipboardError
from gather_files.logging import logger

CLIPBOARD_COMMANDS: list[list[str]] = [
    ["pbcopy"],
    ["wl-copy"],
    ["xclip", "-selection", "clipboard"],
    ["clip"],
]


def try_copy(command: list[str], contents: str) -> bool:
    """Pipe `contents` into a clipboard command.

    Args:
        command (list[str]): the command line to run
        contents (str): the text to copy

    Raises:
        ClipboardError: if the command exists but cannot be run

    Returns:
        bool: True if the command succeeded, False if it is missing or failed
    """
    try:
        out = subprocess.run(  # noqa: S603
            command,
            input=contents.encode("utf-8"),
            capture_output=True,
            check=False,
        )
    except FileNotFoundError:
        return False
    except OSError as e:
        raise ClipboardError(message=f"failed to run '{command[0]}': {e}") from e
    if out.returncode != 0:
        logger.warning("clipboard_command_failed", command=command[0], returncode=out.returncode)
        return False
    return True


def copy_to_clipboard(contents: str) -> str:
    """Copy the provided text to the clipboard, trying common platform utilities.

    Args:
        contents (str): the text to copy

    Raises:
        ClipboardError: if no supported clipboard command works

    Returns:
        str: the name of the command that received the text
    """
    for command in CLIPBOARD_COMMANDS:
        if try_copy(command, contents):
            return command[0]
    raise ClipboardError
