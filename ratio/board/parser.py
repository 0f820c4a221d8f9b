# ratio/board/parser.py
"""/big-board 响应解析"""

import logging
import math
from collections.abc import Mapping
from datetime import UTC, datetime
from typing import Any

from ratio.board.models import Asset, BigBoard
from ratio.errors import InvalidInputError

logger = logging.getLogger(__name__)


def calculate_win_rate(wins: int, losses: int) -> float:
    total = wins + losses
    if total == 0:
        return 0.0
    return wins / total * 100


def _number(record: Mapping[str, Any], key: str, index: int) -> float:
    value = record.get(key)
    if value is None or isinstance(value, bool):
        raise InvalidInputError(f"missing {key}", field=f"rankings[{index}].{key}")
    try:
        number = float(value)
    except (TypeError, ValueError):
        raise InvalidInputError(
            f"{key} is not numeric: {value!r}", field=f"rankings[{index}].{key}"
        ) from None
    if not math.isfinite(number):
        raise InvalidInputError(f"{key} is not finite", field=f"rankings[{index}].{key}")
    return number


def _positive(record: Mapping[str, Any], key: str, index: int) -> float:
    value = _number(record, key, index)
    if value <= 0:
        raise InvalidInputError(f"{key} must be positive", field=f"rankings[{index}].{key}")
    return value


def _count(record: Mapping[str, Any], key: str, index: int) -> int:
    if record.get(key) is None:
        return 0
    value = int(_number(record, key, index))
    if value < 0:
        raise InvalidInputError(f"{key} is negative", field=f"rankings[{index}].{key}")
    return value


def parse_asset(record: Any, index: int = 0) -> Asset:
    if not isinstance(record, Mapping):
        raise InvalidInputError("asset record is not an object", field=f"rankings[{index}]")

    symbol = record.get("symbol")
    if not isinstance(symbol, str) or not symbol.strip():
        raise InvalidInputError("missing symbol", field=f"rankings[{index}].symbol")
    symbol = symbol.strip()

    wins = _count(record, "wins", index)
    losses = _count(record, "losses", index)
    if record.get("win_rate") is None:
        win_rate = calculate_win_rate(wins, losses)
    else:
        win_rate = _number(record, "win_rate", index)
        if not 0 <= win_rate <= 100:
            raise InvalidInputError(
                "win_rate out of range 0-100", field=f"rankings[{index}].win_rate"
            )

    rank = int(_number(record, "rank", index))
    if rank < 1:
        raise InvalidInputError("rank must be >= 1", field=f"rankings[{index}].rank")

    percent_above_ma = _number(record, "percent_above_ma", index)

    # above_ma 以 percent_above_ma 的符号为准
    above_ma = record.get("above_ma")
    if above_ma is not None and bool(above_ma) != (percent_above_ma > 0):
        logger.warning(
            f"{symbol}: above_ma={above_ma} disagrees with percent_above_ma={percent_above_ma:+.2f}"
        )

    name = record.get("name")
    asset_type = record.get("type")
    return Asset(
        symbol=symbol,
        name=name if isinstance(name, str) and name else None,
        type=asset_type if isinstance(asset_type, str) else "",
        rank=rank,
        wins=wins,
        losses=losses,
        win_rate=win_rate,
        current_price=_positive(record, "current_price", index),
        ma=_positive(record, "ma", index),
        percent_above_ma=percent_above_ma,
    )


def parse_timestamp(value: Any) -> datetime | None:
    if value is None or value == "":
        return None
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        # 毫秒时间戳
        try:
            return datetime.fromtimestamp(value / 1000 if value > 1e11 else value, UTC)
        except (OverflowError, OSError, ValueError):
            pass
    if isinstance(value, str):
        try:
            parsed = datetime.fromisoformat(value)
        except ValueError:
            pass
        else:
            # 无时区的按 UTC 处理
            return parsed if parsed.tzinfo else parsed.replace(tzinfo=UTC)
    logger.warning(f"Unparseable last_update: {value!r}")
    return None


def parse_big_board(data: Any) -> BigBoard:
    """
    解析龙虎榜响应

    Args:
        data: {"rankings": [...], "last_update": "..."}

    Returns:
        BigBoard，rankings 缺失时为空榜
    """
    if not isinstance(data, Mapping):
        raise InvalidInputError("big-board payload is not an object")

    rankings = data.get("rankings")
    if rankings is None:
        rankings = []
    if not isinstance(rankings, list):
        raise InvalidInputError("rankings is not a list", field="rankings")

    assets = [parse_asset(r, i) for i, r in enumerate(rankings)]

    seen: set[str] = set()
    for asset in assets:
        if asset.symbol in seen:
            raise InvalidInputError(f"duplicate symbol {asset.symbol}", field="rankings")
        seen.add(asset.symbol)

    logger.debug(f"Parsed big board: {len(assets)} assets")
    return BigBoard(assets=tuple(assets), last_update=parse_timestamp(data.get("last_update")))
