# tests/test_config.py
from pathlib import Path

import pytest
from pydantic import ValidationError

from ratio.config import Config, load_config


def test_load_config_from_yaml(tmp_path: Path):
    config_file = tmp_path / "config.yaml"
    config_file.write_text("""
api:
  base_url: https://ratio.example.com/api
  timeout_seconds: 5

board:
  top_rank_cutoff: 25
  strong_move_pct: 15

grids:
  semis:
    title: Semiconductors
    symbols:
      - NVDA
      - AMD
      - TSM
    display_names:
      TSM: TSMC

log_level: DEBUG
""")

    config = load_config(config_file)

    assert config.api.base_url == "https://ratio.example.com/api"
    assert config.api.timeout_seconds == 5
    assert config.board.top_rank_cutoff == 25
    assert config.board.strong_move_pct == 15
    assert config.log_level == "DEBUG"

    grid_types = config.grid_types()
    assert grid_types["SEMIS"].symbols == ("NVDA", "AMD", "TSM")
    assert grid_types["SEMIS"].label("TSM") == "TSMC"
    assert "MAG7" in grid_types


def test_empty_config_uses_defaults(tmp_path: Path):
    config_file = tmp_path / "config.yaml"
    config_file.write_text("")

    config = load_config(config_file)

    assert config.board.top_rank_cutoff == 10
    assert config.board.strong_move_pct == 10
    assert list(config.grid_types()) == ["MAG7", "INDICES", "CRYPTO"]


def test_override_default_grid():
    config = Config(grids={"mag7": {"symbols": ["AAPL", "MSFT"]}})

    mag7 = config.grid_types()["MAG7"]
    assert mag7.symbols == ("AAPL", "MSFT")
    assert mag7.title == "MAG7"


def test_empty_grid_rejected_at_load(tmp_path: Path):
    config_file = tmp_path / "config.yaml"
    config_file.write_text("""
grids:
  semis:
    symbols: []
""")

    with pytest.raises(ValidationError, match="grid has no symbols"):
        load_config(config_file)


def test_duplicate_grid_symbols_rejected():
    with pytest.raises(ValidationError, match="grid has duplicate symbols"):
        Config(grids={"semis": {"symbols": ["NVDA", "AMD", "NVDA"]}})
