# ratio/matchup/models.py
from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType


class Outcome(Enum):
    WIN = "W"
    LOSS = "L"
    TIE = "T"

    @property
    def opposite(self) -> "Outcome":
        if self is Outcome.WIN:
            return Outcome.LOSS
        if self is Outcome.LOSS:
            return Outcome.WIN
        return Outcome.TIE


class CellKind(Enum):
    SELF = "self"  # 对角线
    ABSENT = "absent"  # 缺少 symbol 或条目
    INSUFFICIENT_DATA = "insufficient_data"  # 条目存在但没有结果（N/A / 空）
    RESULT = "result"
    ERROR = "error"  # 结果值非法


@dataclass(frozen=True)
class MatchupCell:
    """单个 (行, 列) 对阵结果"""

    kind: CellKind
    outcome: Outcome | None = None
    percent: float | None = None  # 仅用于展示
    raw: object = None  # ERROR 时保留原始值便于排查

    @classmethod
    def self_cell(cls) -> "MatchupCell":
        return cls(CellKind.SELF)

    @classmethod
    def absent(cls) -> "MatchupCell":
        return cls(CellKind.ABSENT)

    @classmethod
    def insufficient(cls) -> "MatchupCell":
        return cls(CellKind.INSUFFICIENT_DATA)

    @classmethod
    def result(cls, outcome: Outcome, percent: float | None = None) -> "MatchupCell":
        return cls(CellKind.RESULT, outcome=outcome, percent=percent)

    @classmethod
    def error(cls, raw: object) -> "MatchupCell":
        return cls(CellKind.ERROR, raw=raw)


@dataclass(frozen=True)
class WinLossRecord:
    wins: int = 0
    losses: int = 0

    @property
    def total(self) -> int:
        return self.wins + self.losses

    @property
    def win_rate(self) -> float:
        if self.total == 0:
            return 0.0
        return self.wins / self.total * 100


@dataclass(frozen=True)
class Grid:
    """方阵：行列均为 roster，顺序一致"""

    roster: tuple[str, ...]
    cells: Mapping[str, Mapping[str, MatchupCell]]
    display_names: Mapping[str, str] = field(default_factory=dict)
    title: str | None = None

    def __post_init__(self) -> None:
        # 只读视图，构建后不可修改
        cells = {row: MappingProxyType(dict(cols)) for row, cols in self.cells.items()}
        object.__setattr__(self, "cells", MappingProxyType(cells))
        object.__setattr__(self, "display_names", MappingProxyType(dict(self.display_names)))

    def cell(self, row: str, col: str) -> MatchupCell:
        return self.cells.get(row, {}).get(col, MatchupCell.absent())

    def row(self, symbol: str) -> list[MatchupCell]:
        return [self.cell(symbol, col) for col in self.roster]

    def label(self, symbol: str) -> str:
        # 仅影响展示，不参与对阵计算
        return self.display_names.get(symbol, symbol)
