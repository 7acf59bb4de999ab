from __future__ import annotations

import subprocess
from typing import TYPE_CHECKING

import pytest

from gather_files import clipboard
from gather_files.exceptions import ClipboardError

if TYPE_CHECKING:
    from pytest_mock import MockerFixture


def completed(command: list[str], returncode: int) -> subprocess.CompletedProcess[bytes]:
    return subprocess.CompletedProcess(command, returncode, b"", b"")


@pytest.mark.unit
def test_copy_to_clipboard_skips_missing_commands(mocker: MockerFixture) -> None:
    def fake_run(command: list[str], **_: object) -> subprocess.CompletedProcess[bytes]:
        if command[0] in {"pbcopy", "wl-copy"}:
            raise FileNotFoundError(command[0])
        return completed(command, 0)

    run_mock = mocker.patch.object(clipboard.subprocess, "run", side_effect=fake_run)

    assert clipboard.copy_to_clipboard("héllo") == "xclip"
    assert run_mock.call_count == 3
    last_call = run_mock.call_args
    assert last_call.args[0] == ["xclip", "-selection", "clipboard"]
    assert last_call.kwargs["input"] == "héllo".encode()


@pytest.mark.unit
def test_copy_to_clipboard_moves_on_after_failure(mocker: MockerFixture) -> None:
    run_mock = mocker.patch.object(
        clipboard.subprocess,
        "run",
        side_effect=[completed(["pbcopy"], 1), completed(["wl-copy"], 0)],
    )

    assert clipboard.copy_to_clipboard("x") == "wl-copy"
    assert run_mock.call_count == 2


@pytest.mark.unit
def test_copy_to_clipboard_without_any_command(mocker: MockerFixture) -> None:
    mocker.patch.object(clipboard.subprocess, "run", side_effect=FileNotFoundError("missing"))

    with pytest.raises(ClipboardError, match="no supported clipboard command found"):
        clipboard.copy_to_clipboard("x")


@pytest.mark.unit
def test_copy_to_clipboard_reports_os_errors(mocker: MockerFixture) -> None:
    mocker.patch.object(clipboard.subprocess, "run", side_effect=PermissionError("denied"))

    with pytest.raises(ClipboardError, match="failed to run 'pbcopy'"):
        clipboard.copy_to_clipboard("x")
