# ratio/matchup/grid.py
import logging
from collections.abc import Mapping, Sequence

from ratio.errors import InvalidInputError
from ratio.matchup.models import CellKind, Grid, MatchupCell, Outcome, WinLossRecord
from ratio.matchup.source import MatchupSource

logger = logging.getLogger(__name__)


def build_grid(
    roster: Sequence[str],
    source: MatchupSource,
    display_names: Mapping[str, str] | None = None,
    title: str | None = None,
) -> Grid:
    """
    构建对阵方阵

    Args:
        roster: 有序 symbol 列表，同时作为行和列
        source: DerivedSource 或 ProvidedSource
        display_names: symbol -> 展示名（只影响展示）
        title: 网格标题

    Returns:
        Grid，对角线为 SELF，缺数据的格子为 ABSENT / INSUFFICIENT_DATA / ERROR
    """
    symbols = tuple(roster)
    if len(set(symbols)) != len(symbols):
        raise InvalidInputError("roster contains duplicate symbols", field="roster")

    cells: dict[str, dict[str, MatchupCell]] = {}
    for row in symbols:
        cells[row] = {}
        for col in symbols:
            if row == col:
                cells[row][col] = MatchupCell.self_cell()
            else:
                cells[row][col] = source.lookup(row, col)

    grid = Grid(
        roster=symbols,
        cells=cells,
        display_names=dict(display_names or {}),
        title=title,
    )

    asymmetric = find_asymmetries(grid)
    if asymmetric:
        logger.warning(f"Asymmetric matchups in {title or 'grid'}: {asymmetric}")

    errors = sum(1 for r in symbols for c in symbols if grid.cell(r, c).kind is CellKind.ERROR)
    logger.debug(f"Built {len(symbols)}x{len(symbols)} grid {title or ''} ({errors} error cells)")
    return grid


def win_loss_record(grid: Grid, symbol: str) -> WinLossRecord:
    """只统计 W / L，平局与无数据格子不计入"""
    if symbol not in grid.cells:
        return WinLossRecord()

    wins = 0
    losses = 0
    for cell in grid.row(symbol):
        if cell.kind is not CellKind.RESULT:
            continue
        if cell.outcome is Outcome.WIN:
            wins += 1
        elif cell.outcome is Outcome.LOSS:
            losses += 1
    return WinLossRecord(wins=wins, losses=losses)


def win_loss_records(grid: Grid) -> dict[str, WinLossRecord]:
    return {symbol: win_loss_record(grid, symbol) for symbol in grid.roster}


def find_asymmetries(grid: Grid) -> list[tuple[str, str]]:
    """找出违反 (A,B)=W <=> (B,A)=L 的格子对"""
    pairs = []
    for i, row in enumerate(grid.roster):
        for col in grid.roster[i + 1 :]:
            forward = grid.cell(row, col)
            backward = grid.cell(col, row)
            if forward.kind is not CellKind.RESULT or backward.kind is not CellKind.RESULT:
                continue
            if forward.outcome is None or backward.outcome is not forward.outcome.opposite:
                pairs.append((row, col))
    return pairs


def standings(grid: Grid) -> list[tuple[str, WinLossRecord]]:
    """按胜率、胜场排序；并列时保持 roster 顺序"""
    records = win_loss_records(grid)
    return sorted(
        records.items(),
        key=lambda item: (item[1].win_rate, item[1].wins),
        reverse=True,
    )
