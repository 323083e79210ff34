"""Tests for the command-line entry point."""

import json
import shutil

import pytest

from enumer.cli import build_parser, main


@pytest.fixture
def flags_package(tmp_path, testdata):
    shutil.copy(testdata / "flags" / "types.go", tmp_path / "types.go")
    return tmp_path


class TestParser:
    def test_go_style_flags(self):
        args = build_parser().parse_args(
            ["-type=Permission,Status", "-bitmask", "-json", "-trimprefix", "Perm"]
        )
        assert args.type_names == "Permission,Status"
        assert args.bitmask is True
        assert args.json is True
        assert args.yaml is None
        assert args.trim_prefix == "Perm"

    def test_dir_and_symbols_are_exclusive(self):
        with pytest.raises(SystemExit):
            build_parser().parse_args(["-type=A", "--dir", ".", "--symbols", "x.json"])


class TestMain:
    def test_missing_type_is_usage_error(self, capsys):
        assert main([]) == 2

    def test_writes_default_output(self, flags_package, fake_gofmt):
        exit_code = main(["-type=Permission", "-bitmask", "--dir", str(flags_package)])

        assert exit_code == 0
        output = flags_package / "permission_enumer.go"
        assert output.exists()
        code = output.read_text()
        assert "// Command: enumer -type=Permission -bitmask" in code
        assert "func (i Permission) HasAll(flags ...Permission) bool {" in code
        assert fake_gofmt["calls"] == [["/usr/bin/gofmt", "-w", str(output)]]

    def test_explicit_output_name(self, flags_package, fake_gofmt):
        exit_code = main(
            ["-type=Permission", "-output=perm.go", "--dir", str(flags_package), "--no-format"]
        )
        assert exit_code == 0
        assert (flags_package / "perm.go").exists()
        assert "-output=perm.go" in (flags_package / "perm.go").read_text()
        assert fake_gofmt["calls"] == []

    def test_stdout(self, flags_package, capsys):
        assert main(["-type=Permission", "--dir", str(flags_package), "--stdout"]) == 0
        out = capsys.readouterr().out
        assert out.startswith("// Code generated by enumer; DO NOT EDIT.")
        assert not (flags_package / "permission_enumer.go").exists()

    def test_unknown_type_fails_without_output(self, flags_package, fake_gofmt):
        assert main(["-type=Permission,Missing", "--dir", str(flags_package)]) == 1
        assert list(flags_package.glob("*_gen.go")) == []
        assert fake_gofmt["calls"] == []

    def test_missing_package(self, tmp_path):
        assert main(["-type=Permission", "--dir", str(tmp_path)]) == 1

    def test_formatter_failure(self, flags_package, fake_gofmt):
        fake_gofmt["outcome"].update(returncode=1, stderr="boom")
        assert main(["-type=Permission", "--dir", str(flags_package)]) == 1

    def test_symbol_table_input(self, tmp_path, capsys):
        symbols = tmp_path / "symbols.json"
        symbols.write_text(
            json.dumps(
                {
                    "package": "testpkg",
                    "types": ["Color"],
                    "constants": [
                        {"name": "Red", "type": "Color", "value": 0, "comment": "red"},
                        {"name": "Blue", "type": "Color", "value": 1},
                    ],
                }
            )
        )

        exit_code = main(["-type=Color", "-linecomment", "--symbols", str(symbols), "--stdout"])

        assert exit_code == 0
        out = capsys.readouterr().out
        assert '\tRed: "red",\n' in out
        assert '\tBlue: "Blue",\n' in out

    def test_config_file(self, flags_package, tmp_path, capsys):
        config = tmp_path / "enumer.json"
        config.write_text(json.dumps({"type_names": ["Permission"], "sql": True}))

        exit_code = main(["--config", str(config), "--dir", str(flags_package), "--stdout"])

        assert exit_code == 0
        assert "func (i *Permission) Scan(value any) error {" in capsys.readouterr().out

    def test_bad_config_file(self, tmp_path):
        config = tmp_path / "enumer.json"
        config.write_text(json.dumps({"colour": True}))
        assert main(["-type=Permission", "--config", str(config)]) == 1

    def test_mistyped_config_file(self, flags_package, tmp_path, capsys, monkeypatch):
        monkeypatch.setenv("COLUMNS", "200")
        config = tmp_path / "enumer.json"
        config.write_text(json.dumps({"type_names": 5}))

        exit_code = main(["--config", str(config), "--dir", str(flags_package), "--stdout"])

        assert exit_code == 1
        assert "type_names must be a string or a list of strings" in capsys.readouterr().err

    def test_duplicate_type_warned_once(self, flags_package, capsys, monkeypatch):
        monkeypatch.setenv("COLUMNS", "200")

        exit_code = main(["-type=Permission,Permission", "--dir", str(flags_package), "--stdout"])

        assert exit_code == 0
        assert capsys.readouterr().err.count("requested more than once") == 1
