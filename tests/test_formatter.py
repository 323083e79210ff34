"""Tests for writing generated files and running gofmt."""

import pytest

from enumer.codegen.core.config import EnumerConfig
from enumer.codegen.core.errors import FormattingError
from enumer.codegen.languages.go import formatter
from enumer.codegen.languages.go.generator import GoGenerator


class TestWriteAndFormat:
    def test_writes_then_formats(self, tmp_path, fake_gofmt):
        path = tmp_path / "status_enumer.go"

        formatter.write_and_format("package p\n", path)

        assert path.read_text() == "package p\n"
        assert fake_gofmt["calls"] == [["/usr/bin/gofmt", "-w", str(path)]]

    def test_skip_formatting(self, tmp_path, fake_gofmt):
        path = tmp_path / "status_enumer.go"
        formatter.write_and_format("package p\n", path, format_in_place=False)
        assert fake_gofmt["calls"] == []

    def test_gofmt_failure_leaves_file(self, tmp_path, fake_gofmt):
        fake_gofmt["outcome"].update(returncode=2, stderr="expected declaration")
        path = tmp_path / "bad.go"

        with pytest.raises(FormattingError, match="expected declaration"):
            formatter.write_and_format("package p\nnot go", path)

        assert path.exists()

    def test_gofmt_missing(self, tmp_path, monkeypatch):
        monkeypatch.setattr(formatter.shutil, "which", lambda name: None)
        with pytest.raises(FormattingError, match="gofmt not found"):
            formatter.write_and_format("package p\n", tmp_path / "x.go")

    def test_gofmt_cannot_start(self, tmp_path, monkeypatch):
        def _raise(*args, **kwargs):
            raise OSError("permission denied")

        monkeypatch.setattr(formatter.shutil, "which", lambda name: "/usr/bin/gofmt")
        monkeypatch.setattr(formatter.subprocess, "run", _raise)
        with pytest.raises(FormattingError, match="permission denied"):
            formatter.write_and_format("package p\n", tmp_path / "x.go")

    def test_unwritable_path(self, tmp_path, fake_gofmt):
        with pytest.raises(FormattingError, match="Failed to write"):
            formatter.write_and_format("package p\n", tmp_path / "missing" / "x.go")


class TestGeneratorWriteSource:
    def test_respects_format_output(self, tmp_path, fake_gofmt):
        generator = GoGenerator(EnumerConfig(format_output=False))
        generator.write_source("package p\n", tmp_path / "x.go")
        assert fake_gofmt["calls"] == []

    def test_formats_by_default(self, tmp_path, fake_gofmt):
        generator = GoGenerator(EnumerConfig())
        generator.write_source("package p\n", tmp_path / "x.go")
        assert len(fake_gofmt["calls"]) == 1
