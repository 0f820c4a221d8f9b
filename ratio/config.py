# ratio/config.py
from pathlib import Path

import yaml
from pydantic import BaseModel, field_validator

from ratio.matchup.rosters import DEFAULT_GRID_TYPES, GridType


class ApiConfig(BaseModel):
    base_url: str = "https://web-production-d425.up.railway.app/api"
    timeout_seconds: float = 15


class BoardConfig(BaseModel):
    top_rank_cutoff: int = 10
    strong_move_pct: float = 10


class GridConfig(BaseModel):
    title: str | None = None
    symbols: list[str]
    display_names: dict[str, str] = {}

    @field_validator("symbols")
    @classmethod
    def check_symbols(cls, symbols: list[str]) -> list[str]:
        if not symbols:
            raise ValueError("grid has no symbols")
        if len(set(symbols)) != len(symbols):
            raise ValueError("grid has duplicate symbols")
        return symbols


class Config(BaseModel):
    api: ApiConfig = ApiConfig()
    board: BoardConfig = BoardConfig()
    grids: dict[str, GridConfig] = {}
    log_level: str = "INFO"

    def grid_types(self) -> dict[str, GridType]:
        """默认阵容 + 配置文件中的自定义/覆盖阵容"""
        result = dict(DEFAULT_GRID_TYPES)
        for name, grid in self.grids.items():
            key = name.upper()
            result[key] = GridType(
                name=key,
                title=grid.title or key,
                symbols=tuple(grid.symbols),
                display_names=dict(grid.display_names),
            )
        return result


def load_config(path: Path) -> Config:
    with open(path) as f:
        data = yaml.safe_load(f)
    return Config(**(data or {}))
