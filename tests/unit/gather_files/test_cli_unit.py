from __future__ import annotations

from pathlib import Path

import pytest

from gather_files import __version__, cli
from gather_files.config import CONFIG_FILE_NAME
from gather_files.settings import CONFIG_ENV_VAR


@pytest.mark.unit
def test_parse_args_parses_target_and_flags(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv(CONFIG_ENV_VAR, raising=False)

    settings = cli.parse_args(["rust", "--repo", "/repo", "--stdout"])

    assert settings.target == "rust"
    assert settings.repo == Path("/repo")
    assert settings.stdout is True
    assert settings.config == CONFIG_FILE_NAME


@pytest.mark.unit
def test_parse_args_without_target() -> None:
    settings = cli.parse_args(["--config", "custom.yaml"])

    assert settings.target is None
    assert settings.config == "custom.yaml"
    assert settings.stdout is False


@pytest.mark.unit
def test_parse_args_version_flag(capsys: pytest.CaptureFixture[str]) -> None:
    with pytest.raises(SystemExit) as exc_info:
        cli.parse_args(["--version"])

    assert exc_info.value.code == 0
    captured = capsys.readouterr()
    assert __version__ in captured.out


@pytest.mark.unit
def test_find_repo_root_walks_up(tmp_path: Path) -> None:
    (tmp_path / ".git").mkdir()
    nested = tmp_path / "a" / "b"
    nested.mkdir(parents=True)

    assert cli.find_repo_root(nested) == tmp_path
    assert cli.find_repo_root(tmp_path) == tmp_path
