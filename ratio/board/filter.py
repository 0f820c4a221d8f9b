# ratio/board/filter.py
from collections.abc import Iterable

from ratio.board.models import Asset, AssetClass
from ratio.errors import InvalidInputError

# 前端筛选标签的复数写法
_CLASS_ALIASES = {
    "stocks": AssetClass.STOCK,
    "etfs": AssetClass.ETF,
}


def parse_asset_class(value: AssetClass | str | None) -> AssetClass:
    if value is None:
        return AssetClass.ALL
    if isinstance(value, AssetClass):
        return value

    key = value.strip().lower()
    if not key:
        return AssetClass.ALL
    if key in _CLASS_ALIASES:
        return _CLASS_ALIASES[key]
    try:
        return AssetClass(key)
    except ValueError:
        raise InvalidInputError(f"unknown asset class {value!r}", field="class") from None


def matches_search(asset: Asset, search: str) -> bool:
    """只匹配 symbol，不匹配 name，大小写不敏感"""
    query = search.strip().lower()
    if not query:
        return True
    return query in asset.symbol.lower()


def matches_class(asset: Asset, asset_class: AssetClass) -> bool:
    if asset_class is AssetClass.ALL:
        return True
    # 未知 type 在任何非 all 筛选下都被排除
    return asset.type == asset_class.value


def filter_assets(
    assets: Iterable[Asset],
    search: str = "",
    asset_class: AssetClass | str | None = AssetClass.ALL,
) -> list[Asset]:
    """
    按 symbol 子串和资产类别筛选龙虎榜

    Args:
        assets: 已按排名排序的资产
        search: symbol 搜索词（空串匹配全部）
        asset_class: all / stock / etf / crypto（也接受 stocks / etfs）

    Returns:
        保持原有顺序的子集
    """
    cls = parse_asset_class(asset_class)
    return [a for a in assets if matches_search(a, search) and matches_class(a, cls)]
