"""Tests for the TOML configuration loader."""

import logging

import pytest

from bodyweight.config_loader import ConfigLoader, load_config
from bodyweight.constants import CHART_DEFAULTS, DEFAULT_STORAGE_KEY


@pytest.mark.unit
class TestConfigLoader:

    def test_missing_file_uses_defaults(self, tmp_path, caplog):
        with caplog.at_level(logging.WARNING):
            config = load_config(str(tmp_path / "absent.toml"))

        assert config == ConfigLoader.defaults()
        assert config["storage"]["key"] == DEFAULT_STORAGE_KEY
        assert config["chart"]["padding"]["left"] == 40
        assert "not found" in caplog.text

    def test_overrides_are_applied_per_key(self, tmp_path):
        path = tmp_path / "config.toml"
        path.write_text(
            '[storage]\n'
            'path = "/var/lib/weights"\n'
            '\n'
            '[chart]\n'
            'width = 400\n'
            '\n'
            '[chart.padding]\n'
            'left = 50\n'
            '\n'
            '[logging]\n'
            'level = "DEBUG"\n'
        )
        config = load_config(str(path))

        assert config["storage"]["path"] == "/var/lib/weights"
        assert config["storage"]["key"] == DEFAULT_STORAGE_KEY
        assert config["chart"]["width"] == 400
        assert config["chart"]["height"] == CHART_DEFAULTS["height"]
        assert config["chart"]["padding"] == {"top": 20, "right": 16, "bottom": 30, "left": 50}
        assert config["logging"] == {"level": "DEBUG", "structured": False}

    def test_overrides_do_not_leak_into_defaults(self, tmp_path):
        path = tmp_path / "config.toml"
        path.write_text('[chart.padding]\ntop = 99\n')
        load_config(str(path))

        assert CHART_DEFAULTS["padding"]["top"] == 20
        assert ConfigLoader.defaults()["chart"]["padding"]["top"] == 20

    def test_unknown_padding_keys_are_ignored(self, tmp_path, caplog):
        path = tmp_path / "config.toml"
        path.write_text('[chart.padding]\nmiddle = 5\n')
        with caplog.at_level(logging.WARNING):
            config = load_config(str(path))

        assert "middle" not in config["chart"]["padding"]
        assert "middle" in caplog.text

    def test_viz_overrides(self, tmp_path):
        path = tmp_path / "config.toml"
        path.write_text('[viz]\nline_color = "#FF0000"\n')
        config = load_config(str(path))

        assert config["viz"]["line_color"] == "#FF0000"
        assert config["viz"]["grid_color"] == ConfigLoader.DEFAULT_VIZ["grid_color"]

    def test_shipped_config_matches_defaults(self):
        from pathlib import Path
        shipped = Path(__file__).parent.parent / "config.toml"
        assert load_config(str(shipped)) == ConfigLoader.defaults()
