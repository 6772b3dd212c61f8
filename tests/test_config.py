"""Tests for quirk presets and configuration loading."""

import pytest
from vip8 import ConfigError, MachineConfig, Quirks, load_config


class TestQuirks:
    def test_default_is_vip(self):
        assert Quirks() == Quirks.vip()
        assert Quirks().shift_uses_vy
        assert Quirks().memory_increments_i
        assert not Quirks().jump_uses_vx
        assert Quirks().logic_resets_vf

    def test_modern(self):
        quirks = Quirks.modern()
        assert not quirks.shift_uses_vy
        assert not quirks.memory_increments_i
        assert quirks.jump_uses_vx
        assert not quirks.logic_resets_vf

    def test_quirks_are_hashable(self):
        assert len({Quirks.vip(), Quirks.modern(), Quirks()}) == 2


class TestLoadConfig:
    def test_defaults(self):
        config = load_config()
        assert config == MachineConfig()
        assert config.cycles_per_frame == 10
        assert config.timer_hz == 60
        assert config.instruction_frequency == 600

    def test_yaml_file(self, tmp_path):
        path = tmp_path / "machine.yaml"
        path.write_text(
            "cycles_per_frame: 15\n"
            "log_level: DEBUG\n"
            "quirks:\n"
            "  shift_uses_vy: false\n"
            "  jump_uses_vx: true\n"
        )
        config = load_config(str(path))
        assert config.cycles_per_frame == 15
        assert config.log_level == "DEBUG"
        assert config.quirks == Quirks(shift_uses_vy=False, jump_uses_vx=True)

    def test_overrides_win_over_file(self, tmp_path):
        path = tmp_path / "machine.yaml"
        path.write_text("cycles_per_frame: 15\nseed: 3\n")
        config = load_config(str(path), ["cycles_per_frame=20", "quirks.logic_resets_vf=false"])
        assert config.cycles_per_frame == 20
        assert config.seed == 3
        assert not config.quirks.logic_resets_vf

    def test_unknown_key(self):
        with pytest.raises(ConfigError, match="colour"):
            load_config(overrides=["colour=red"])

    def test_unknown_quirk(self):
        with pytest.raises(ConfigError, match="quirks.wrap_sprites"):
            load_config(overrides=["quirks.wrap_sprites=false"])

    def test_invalid_value(self):
        with pytest.raises(ConfigError):
            load_config(overrides=["cycles_per_frame=0"])

    def test_invalid_log_level(self):
        with pytest.raises(ConfigError):
            load_config(overrides=["log_level=LOUD"])

    def test_missing_file(self, tmp_path):
        with pytest.raises(ConfigError):
            load_config(str(tmp_path / "nope.yaml"))

    def test_config_error_is_value_error(self):
        with pytest.raises(ValueError):
            MachineConfig.from_dict({"timer_hz": -1})

    def test_to_dict_round_trip(self):
        config = MachineConfig(cycles_per_frame=12, quirks=Quirks.modern())
        assert MachineConfig.from_dict(config.to_dict()) == config
