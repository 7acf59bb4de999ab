from __future__ import annotations

import io
from pathlib import Path

import pytest

from gather_files.exceptions import FileReadError
from gather_files.output_construction import append_file_section, render_files


@pytest.mark.unit
def test_render_files_includes_headers(tmp_path: Path) -> None:
    readme = tmp_path / "README.md"
    readme.write_text("Hello world\n", encoding="utf-8")

    text, count = render_files([readme], tmp_path)

    assert text == "-------\n# README.md\n\nHello world\n\n"
    assert count == len(text)


@pytest.mark.unit
def test_render_files_inserts_missing_newline(tmp_path: Path) -> None:
    (tmp_path / "src").mkdir()
    first = tmp_path / "src" / "a.py"
    second = tmp_path / "b.txt"
    first.write_text("print('a')", encoding="utf-8")
    second.write_text("b\n", encoding="utf-8")

    text, count = render_files([first, second], tmp_path)

    assert text == "-------\n# src/a.py\n\nprint('a')\n\n-------\n# b.txt\n\nb\n\n"
    assert count == len(text)


@pytest.mark.unit
def test_render_files_counts_scalar_values(tmp_path: Path) -> None:
    file_path = tmp_path / "unicode.txt"
    file_path.write_text("héllo wörld ✓ 🦀\n", encoding="utf-8")

    text, count = render_files([file_path], tmp_path)

    assert count == len(text)
    assert count < len(text.encode("utf-8"))
    assert "# unicode.txt" in text


@pytest.mark.unit
def test_render_files_keeps_line_endings(tmp_path: Path) -> None:
    file_path = tmp_path / "dos.txt"
    file_path.write_bytes(b"one\r\ntwo\r\n")

    text, count = render_files([file_path], tmp_path)

    assert text.endswith("\n\none\r\ntwo\r\n\n")
    assert count == len(text)


@pytest.mark.unit
def test_render_files_display_outside_root(tmp_path: Path) -> None:
    root = tmp_path / "repo"
    root.mkdir()
    outside = tmp_path / "outside.txt"
    outside.write_text("x", encoding="utf-8")

    text, _ = render_files([outside], root)

    assert text.startswith(f"-------\n# {outside}\n\n")


@pytest.mark.unit
def test_render_files_display_root_itself(tmp_path: Path) -> None:
    file_path = tmp_path / "only.txt"
    file_path.write_text("x\n", encoding="utf-8")

    text, _ = render_files([file_path], file_path)

    assert text.startswith(f"-------\n# {file_path}\n\n")


@pytest.mark.unit
def test_render_files_empty_set() -> None:
    assert render_files([], Path("/repo")) == ("", 0)


@pytest.mark.unit
def test_render_files_rejects_binary(tmp_path: Path) -> None:
    good = tmp_path / "good.txt"
    bad = tmp_path / "bad.bin"
    good.write_text("ok\n", encoding="utf-8")
    bad.write_bytes(b"\xff\xfe\x00\x81")

    with pytest.raises(FileReadError) as exc_info:
        render_files([good, bad], tmp_path)

    assert exc_info.value.path == bad
    assert str(bad) in str(exc_info.value)


@pytest.mark.unit
def test_render_files_missing_file(tmp_path: Path) -> None:
    with pytest.raises(FileReadError, match="failed to read"):
        render_files([tmp_path / "gone.txt"], tmp_path)


@pytest.mark.unit
def test_append_file_section_returns_written_length() -> None:
    out = io.StringIO()

    count = append_file_section(out, "a.txt", "ä")

    assert out.getvalue() == "-------\n# a.txt\n\nä\n\n"
    assert count == len(out.getvalue())
