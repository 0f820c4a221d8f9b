# ratio/matchup/rosters.py
"""对阵网格的固定阵容（grid type）"""

from collections.abc import Mapping
from dataclasses import dataclass, field

from ratio.errors import UnknownGridTypeError


@dataclass(frozen=True)
class GridType:
    name: str
    title: str
    symbols: tuple[str, ...]
    display_names: dict[str, str] = field(default_factory=dict)

    def __post_init__(self) -> None:
        if not self.symbols:
            raise ValueError(f"Grid type {self.name} has no symbols")
        if len(set(self.symbols)) != len(self.symbols):
            raise ValueError(f"Grid type {self.name} has duplicate symbols")

    def label(self, symbol: str) -> str:
        return self.display_names.get(symbol, symbol)


MAG7 = GridType(
    name="MAG7",
    title="Magnificent 7",
    symbols=("AAPL", "MSFT", "GOOGL", "AMZN", "NVDA", "META", "TSLA"),
)

INDICES = GridType(
    name="INDICES",
    title="Major Indices",
    symbols=("SPY", "QQQ", "DIA", "IWM"),
    display_names={
        "SPY": "S&P 500",
        "QQQ": "Nasdaq 100",
        "DIA": "Dow Jones",
        "IWM": "Russell 2000",
    },
)

CRYPTO = GridType(
    name="CRYPTO",
    title="Top Crypto",
    symbols=("BTC-USD", "ETH-USD", "SOL-USD", "XRP-USD", "BNB-USD"),
    display_names={
        "BTC-USD": "BTC",
        "ETH-USD": "ETH",
        "SOL-USD": "SOL",
        "XRP-USD": "XRP",
        "BNB-USD": "BNB",
    },
)

DEFAULT_GRID_TYPES: dict[str, GridType] = {g.name: g for g in (MAG7, INDICES, CRYPTO)}


def get_grid_type(name: str, grid_types: Mapping[str, GridType] | None = None) -> GridType:
    """按名称查找阵容，大小写不敏感"""
    if grid_types is None:
        grid_types = DEFAULT_GRID_TYPES

    key = name.strip().upper()
    for grid_name, grid_type in grid_types.items():
        if grid_name.upper() == key:
            return grid_type
    raise UnknownGridTypeError(name, list(grid_types))
