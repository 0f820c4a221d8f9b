# ratio/board/models.py
from dataclasses import dataclass
from datetime import datetime
from enum import Enum


class AssetClass(Enum):
    ALL = "all"
    STOCK = "stock"
    ETF = "etf"
    CRYPTO = "crypto"


@dataclass(frozen=True)
class Asset:
    """单个资产的排名快照"""

    symbol: str
    name: str | None
    type: str  # stock / etf / crypto，未知值原样保留
    rank: int
    wins: int
    losses: int
    win_rate: float  # 0-100
    current_price: float
    ma: float  # 20 周均线
    percent_above_ma: float

    @property
    def above_ma(self) -> bool:
        return self.percent_above_ma > 0

    @property
    def record(self) -> str:
        return f"{self.wins}-{self.losses}"


@dataclass(frozen=True)
class BigBoard:
    """龙虎榜：按排名排序的资产列表 + 最后刷新时间"""

    assets: tuple[Asset, ...] = ()
    last_update: datetime | None = None

    def __len__(self) -> int:
        return len(self.assets)
