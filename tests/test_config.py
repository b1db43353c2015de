"""Tests for configuration validation and the CLI builder."""

from dataclasses import replace

import pytest

from devdeck.config import Config, build_config_from_cli, validate_config
from devdeck.errors import ConfigError
from devdeck.model.card import Setback, Structure


class TestValidateConfig:
    """Unusable rule sets are rejected before any game starts."""

    def test_reference_config_is_valid(self):
        cfg = Config()
        assert validate_config(cfg) is cfg

    @pytest.mark.parametrize("change, message", [
        ({"structures": []}, "structure catalog is empty"),
        ({"structures": [Structure("A", {"array": -1, "class": 2})]}, "negative cost"),
        ({"structures": [Structure("A", {})]}, "costs nothing"),
        ({"structures": [Structure("A", {"gold": 1})]}, "unknown resource"),
        ({"structures": [Structure("A", {"array": 1}), Structure("A", {"class": 1})]}, "duplicate"),
        ({"resource_deck": {"array": -2}}, "negative count"),
        ({"setbacks": [Setback("Castle", "Siege")]}, "unknown structure"),
        ({"players": 1}, "at least 2 players"),
        ({"turn_cap": 0}, "turn cap"),
        ({"time_per_action": {"draw": -5}}, "negative duration"),
        ({"start_cards": {"trade": 3, "steal": 1, "nope": 1}}, "starting trade cards"),
        ({"trade_nope_label": "build"}, "trade nope label"),
        ({"workers": 0}, "workers"),
    ])
    def test_rejects(self, change, message):
        with pytest.raises(ConfigError, match=message):
            validate_config(replace(Config(), **change))

    def test_setbacks_checked_against_custom_catalog(self):
        cfg = replace(Config(), structures=[Structure("Sprite", {"array": 2})])
        with pytest.raises(ConfigError, match="unknown structure"):
            validate_config(cfg)
        validate_config(replace(cfg, setbacks=[Setback("Sprite", "Glitch")]))


class TestBuildConfigFromCli:
    """Flags map onto Config fields."""

    def test_defaults(self):
        cfg, args = build_config_from_cli([])
        assert (cfg.games, cfg.seed, cfg.players, cfg.turn_cap) == (1000, 42, 4, 100)
        assert cfg.trade_nope_label == "steal"
        assert not cfg.write_logs

    def test_flags(self, tmp_path):
        cfg, args = build_config_from_cli([
            "--games", "10", "--seed", "7", "--workers", "3",
            "--out_dir", str(tmp_path), "--trade_nope_label", "trade", "--write_logs",
        ])
        assert (cfg.games, cfg.seed, cfg.workers) == (10, 7, 3)
        assert cfg.out_dir == str(tmp_path)
        assert cfg.trade_nope_label == "trade"
        assert cfg.write_logs
        assert args.games == 10

    def test_catalog_files(self, tmp_path):
        structures = tmp_path / "structures.csv"
        structures.write_text("name,variable,class,function,array\nTower,1,,,1\nWall,,2,,\n", encoding="utf-8")
        setbacks = tmp_path / "setbacks.csv"
        setbacks.write_text("structure,name\nWall,Crack\n", encoding="utf-8")
        cfg, _ = build_config_from_cli(["--structures", str(structures), "--setbacks", str(setbacks)])
        assert cfg.structure_names == ["Tower", "Wall"]
        assert cfg.setbacks == [Setback("Wall", "Crack")]

    def test_invalid_catalog_raises(self, tmp_path):
        structures = tmp_path / "structures.csv"
        structures.write_text("name,variable\nTower,1\n", encoding="utf-8")
        # reference setbacks still point at the reference structures
        with pytest.raises(ConfigError):
            build_config_from_cli(["--structures", str(structures)])
