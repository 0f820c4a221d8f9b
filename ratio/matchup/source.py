# ratio/matchup/source.py
import logging
from abc import ABC, abstractmethod
from collections.abc import Iterable, Mapping
from typing import Any

from ratio.board.models import Asset
from ratio.errors import InvalidInputError
from ratio.matchup.models import CellKind, MatchupCell, Outcome

logger = logging.getLogger(__name__)

UNAVAILABLE = "N/A"

_OUTCOMES = {o.value: o for o in Outcome}


class MatchupSource(ABC):
    """对阵数据来源：本地推导 或 服务端提供"""

    @abstractmethod
    def lookup(self, row: str, col: str) -> MatchupCell:
        pass


def compare_strength(row_value: float, col_value: float) -> Outcome:
    if row_value > col_value:
        return Outcome.WIN
    elif row_value < col_value:
        return Outcome.LOSS
    else:
        return Outcome.TIE


class DerivedSource(MatchupSource):
    """按 percent_above_ma 严格比较得出对阵结果"""

    def __init__(self, assets: Iterable[Asset]):
        self.assets = {a.symbol: a for a in assets}

    def lookup(self, row: str, col: str) -> MatchupCell:
        if row == col:
            return MatchupCell.self_cell()

        row_asset = self.assets.get(row)
        col_asset = self.assets.get(col)
        if row_asset is None or col_asset is None:
            return MatchupCell.absent()

        outcome = compare_strength(row_asset.percent_above_ma, col_asset.percent_above_ma)
        margin = row_asset.percent_above_ma - col_asset.percent_above_ma
        return MatchupCell.result(outcome, percent=margin)


def _parse_percent(value: Any) -> float | None:
    if value is None or isinstance(value, bool):
        return None
    try:
        return float(value)
    except (TypeError, ValueError):
        logger.debug(f"Ignoring non-numeric matchup percent: {value!r}")
        return None


def normalize_cell(value: Any) -> MatchupCell:
    """
    统一两种单元格形状

    Args:
        value: "W" / "L" / "T" / "N/A"，或 {"result": ..., "percent": ...}

    Returns:
        RESULT / INSUFFICIENT_DATA / ERROR
    """
    percent = None
    if isinstance(value, Mapping):
        result = value.get("result")
        percent = _parse_percent(value.get("percent"))
    else:
        result = value

    if result is None:
        return MatchupCell.insufficient()
    if not isinstance(result, str):
        return MatchupCell.error(value)

    code = result.strip().upper()
    if code == "" or code == UNAVAILABLE:
        return MatchupCell.insufficient()

    outcome = _OUTCOMES.get(code)
    if outcome is None:
        return MatchupCell.error(value)
    return MatchupCell.result(outcome, percent=percent)


class ProvidedSource(MatchupSource):
    """服务端提供的对阵表 {row: {col: cell}}"""

    def __init__(self, table: Any):
        if not isinstance(table, Mapping):
            raise InvalidInputError("matchup table is not a mapping", field="matchups")
        self.table = table

    def lookup(self, row: str, col: str) -> MatchupCell:
        if row == col:
            return MatchupCell.self_cell()

        row_data = self.table.get(row)
        if row_data is None:
            return MatchupCell.absent()
        if not isinstance(row_data, Mapping):
            logger.warning(f"Matchup row {row} is not a mapping: {row_data!r}")
            return MatchupCell.error(row_data)
        if col not in row_data:
            return MatchupCell.absent()

        cell = normalize_cell(row_data[col])
        if cell.kind is CellKind.ERROR:
            logger.warning(f"Malformed matchup cell {row} vs {col}: {row_data[col]!r}")
        return cell
