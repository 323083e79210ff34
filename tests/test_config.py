"""Tests for configuration loading and validation."""

import json
from dataclasses import FrozenInstanceError

import pytest

from enumer.codegen.core.config import ConfigError, ConfigManager, EnumerConfig


class TestEnumerConfig:
    def test_immutable(self):
        config = EnumerConfig(type_names=("Status",))
        with pytest.raises(FrozenInstanceError):
            config.bitmask = True  # type: ignore

    def test_sorted_type_names_keep_duplicates(self):
        config = EnumerConfig(type_names=("Zeta", "Alpha", "Zeta"))
        assert config.sorted_type_names == ["Alpha", "Zeta", "Zeta"]

    def test_default_output_single_type(self):
        assert EnumerConfig(type_names=("RunStatus",)).default_output_name() == (
            "runstatus_enumer.go"
        )

    def test_default_output_multiple_types(self):
        assert EnumerConfig(type_names=("A", "B")).default_output_name() == "enums_gen.go"
        assert (
            EnumerConfig(type_names=("A", "B"), bitmask=True).default_output_name()
            == "flags_gen.go"
        )

    def test_explicit_output_wins(self):
        config = EnumerConfig(type_names=("A",), output="custom.go")
        assert config.default_output_name() == "custom.go"

    def test_command_line_flag_order(self):
        config = EnumerConfig(
            type_names=("B", "A"),
            trim_prefix="Dir",
            line_comment=True,
            bitmask=True,
            json=True,
            yaml=True,
            sql=True,
            output="out.go",
        )
        assert config.command_line() == (
            "enumer -type=A,B -trimprefix=Dir -linecomment -json -yaml -sql "
            "-output=out.go -bitmask"
        )

    def test_command_line_minimal(self):
        assert EnumerConfig(type_names=("Status",)).command_line() == "enumer -type=Status"


class TestConfigManager:
    def test_defaults(self):
        config = ConfigManager().get_config()
        assert config == EnumerConfig()

    def test_comma_separated_type_names(self):
        config = ConfigManager().get_config({"type_names": " Status , Color"})
        assert config.type_names == ("Status", "Color")

    def test_none_overrides_are_ignored(self):
        config = ConfigManager().get_config({"type_names": "A", "bitmask": None})
        assert config.bitmask is False

    def test_config_file_then_overrides(self, tmp_path):
        path = tmp_path / "enumer.json"
        path.write_text(json.dumps({"type_names": ["Color"], "json": True, "sql": True}))

        config = ConfigManager().get_config({"sql": False}, config_file=path)

        assert config.type_names == ("Color",)
        assert config.json is True
        assert config.sql is False

    def test_missing_file(self, tmp_path):
        with pytest.raises(ConfigError, match="not found"):
            ConfigManager().get_config(config_file=tmp_path / "missing.json")

    def test_non_json_suffix(self, tmp_path):
        path = tmp_path / "enumer.yaml"
        path.write_text("{}")
        with pytest.raises(ConfigError, match="must be JSON"):
            ConfigManager().get_config(config_file=path)

    def test_invalid_json(self, tmp_path):
        path = tmp_path / "enumer.json"
        path.write_text("{not json")
        with pytest.raises(ConfigError, match="Invalid JSON"):
            ConfigManager().get_config(config_file=path)

    def test_unknown_keys_rejected(self):
        with pytest.raises(ConfigError, match="Unknown configuration keys: colour"):
            ConfigManager().get_config({"colour": True})

    @pytest.mark.parametrize(
        "overrides, message",
        [
            ({"type_names": 5}, "type_names must be a string or a list of strings"),
            ({"type_names": ["Status", 3]}, "type_names must be a string or a list of strings"),
            ({"bitmask": "no"}, "bitmask must be true or false"),
            ({"json": 1}, "json must be true or false"),
            ({"trim_prefix": 7}, "trim_prefix must be a string"),
            ({"output": ["a.go"]}, "output must be a string"),
        ],
    )
    def test_field_types_checked(self, overrides, message):
        with pytest.raises(ConfigError, match=message):
            ConfigManager().get_config(overrides)

    def test_field_types_checked_in_file(self, tmp_path):
        path = tmp_path / "enumer.json"
        path.write_text(json.dumps({"type_names": ["Status"], "bitmask": "no"}))
        with pytest.raises(ConfigError, match="bitmask must be true or false"):
            ConfigManager().get_config(config_file=path)

    def test_save_and_reload(self, tmp_path):
        manager = ConfigManager()
        original = EnumerConfig(type_names=("A", "B"), bitmask=True, trim_prefix="X")
        path = tmp_path / "saved.json"

        manager.save_config(original, path)

        assert manager.get_config(config_file=path) == original

    def test_validate_config_warnings(self):
        config = EnumerConfig(
            type_names=("Status", "Status", "bad-name"),
            trim_prefix="a b",
            output="out.txt",
        )
        warnings = ConfigManager().validate_config(config)

        assert "Invalid Go type name: bad-name" in warnings
        assert not any("more than once" in w for w in warnings)
        assert any("Trim prefix" in w for w in warnings)
        assert any("does not end in .go" in w for w in warnings)

    def test_validate_config_empty(self):
        assert ConfigManager().validate_config(EnumerConfig()) == ["No type names configured"]
