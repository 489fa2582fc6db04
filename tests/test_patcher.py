"""Tests for writing the token into local config.yaml files."""

from __future__ import annotations

from pathlib import Path

import pytest

from cursorlogin.patcher import patch_config_files, patch_text

SAMPLE = (
    "server:\n"
    "  port: 8080\n"
    "cursor:\n"
    '  cookie: "YOUR_CURSOR_TOKEN_HERE"\n'
    "  model: gpt-4\n"
)


class TestPatchText:

    def test_uppercase_placeholder(self) -> None:
        assert patch_text('cookie: "YOUR_CURSOR_TOKEN_HERE"', "T") == 'cookie: "T"'

    def test_lowercase_placeholder(self) -> None:
        text = 'a: 1\ncookie: "your_cursor_session_token_here"\n'
        assert patch_text(text, "T") == 'a: 1\ncookie: "T"\n'

    def test_every_occurrence_is_replaced(self) -> None:
        text = 'cookie: "YOUR_CURSOR_TOKEN_HERE"\ncookie: "your_cursor_session_token_here"\n'
        assert patch_text(text, "T") == 'cookie: "T"\ncookie: "T"\n'

    def test_unquoted_value_is_not_touched(self) -> None:
        text = "cookie: YOUR_CURSOR_TOKEN_HERE\n"
        assert patch_text(text, "T") == text


class TestPatchConfigFiles:

    def test_patches_root_config(self, tmp_path: Path) -> None:
        cfg = tmp_path / "config.yaml"
        cfg.write_text(SAMPLE)

        patched = patch_config_files("user_42%3A%3Aabc", base_dir=tmp_path)

        assert patched == [cfg]
        assert cfg.read_text() == SAMPLE.replace(
            '"YOUR_CURSOR_TOKEN_HERE"', '"user_42%3A%3Aabc"'
        )

    def test_patches_both_default_locations(self, tmp_path: Path) -> None:
        (tmp_path / "config").mkdir()
        root = tmp_path / "config.yaml"
        nested = tmp_path / "config" / "config.yaml"
        root.write_text(SAMPLE)
        nested.write_text('cookie: "your_cursor_session_token_here"\n')

        patched = patch_config_files("T", base_dir=tmp_path)

        assert patched == [root, nested]
        assert 'cookie: "T"' in root.read_text()
        assert nested.read_text() == 'cookie: "T"\n'

    def test_file_without_placeholder_is_byte_identical(
        self, tmp_path: Path, capsys: pytest.CaptureFixture[str],
    ) -> None:
        cfg = tmp_path / "config.yaml"
        original = b'cursor:\r\n  cookie: "already-set"\r\n'
        cfg.write_bytes(original)
        mtime = cfg.stat().st_mtime_ns

        assert patch_config_files("T", base_dir=tmp_path) == []
        assert cfg.read_bytes() == original
        assert cfg.stat().st_mtime_ns == mtime
        assert "left unchanged" in capsys.readouterr().out

    def test_preserves_crlf_line_endings(self, tmp_path: Path) -> None:
        cfg = tmp_path / "config.yaml"
        cfg.write_bytes(b'a: 1\r\ncookie: "YOUR_CURSOR_TOKEN_HERE"\r\n')

        patch_config_files("T", base_dir=tmp_path)

        assert cfg.read_bytes() == b'a: 1\r\ncookie: "T"\r\n'

    def test_missing_files_are_skipped(self, tmp_path: Path) -> None:
        assert patch_config_files("T", base_dir=tmp_path) == []

    def test_relative_to_working_directory(self, workdir: Path) -> None:
        (workdir / "config.yaml").write_text(SAMPLE)
        patched = patch_config_files("T")
        assert [p.resolve() for p in patched] == [(workdir / "config.yaml").resolve()]

    def test_non_utf8_file_is_patched(self, tmp_path: Path) -> None:
        cfg = tmp_path / "config.yaml"
        cfg.write_bytes(b'# caf\xe9\ncookie: "YOUR_CURSOR_TOKEN_HERE"\n')

        patched = patch_config_files("T", base_dir=tmp_path)

        assert patched == [cfg]
        assert cfg.read_bytes() == b'# caf\xe9\ncookie: "T"\n'

    def test_non_utf8_file_without_placeholder_is_untouched(self, tmp_path: Path) -> None:
        cfg = tmp_path / "config.yaml"
        cfg.write_bytes(b"\xff\xfe\x00garbage")

        assert patch_config_files("T", base_dir=tmp_path) == []
        assert cfg.read_bytes() == b"\xff\xfe\x00garbage"

    def test_directory_in_place_of_file_is_a_warning(
        self, tmp_path: Path, capsys: pytest.CaptureFixture[str],
    ) -> None:
        (tmp_path / "config.yaml").mkdir()
        (tmp_path / "config").mkdir()
        good = tmp_path / "config" / "config.yaml"
        good.write_text(SAMPLE)

        patched = patch_config_files("T", base_dir=tmp_path)

        assert patched == [good]
        assert "Could not read config file ./config.yaml" in capsys.readouterr().err

    def test_write_error_is_a_warning(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch,
        capsys: pytest.CaptureFixture[str],
    ) -> None:
        cfg = tmp_path / "config.yaml"
        cfg.write_text(SAMPLE)

        def refuse(self, data):
            raise PermissionError("read-only file system")

        monkeypatch.setattr(Path, "write_bytes", refuse)

        assert patch_config_files("T", base_dir=tmp_path) == []
        assert "Could not update config file" in capsys.readouterr().err
        assert cfg.read_text() == SAMPLE
