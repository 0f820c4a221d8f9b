# ratio/render/formatter.py
from collections.abc import Sequence
from datetime import datetime

from ratio.board.models import Asset
from ratio.matchup.grid import standings
from ratio.matchup.models import CellKind, Grid, MatchupCell


def change_tier(percent: float, strong_pct: float = 10) -> str:
    if percent > strong_pct:
        return "strong_bull"
    elif percent > 0:
        return "bull"
    elif percent < -strong_pct:
        return "strong_bear"
    elif percent < 0:
        return "bear"
    else:
        return "flat"


def _tier_emoji(percent: float, strong_pct: float) -> str:
    return {
        "strong_bull": "🟢",
        "bull": "🟩",
        "strong_bear": "🔴",
        "bear": "🟥",
        "flat": "⚪",
    }[change_tier(percent, strong_pct)]


def _format_pct(value: float) -> str:
    # 0 不带符号
    sign = "+" if value > 0 else ""
    return f"{sign}{value:.2f}%"


def _status(asset: Asset) -> str:
    return "▲" if asset.above_ma else "▼"


def format_cell(cell: MatchupCell) -> str:
    if cell.kind is CellKind.SELF:
        return "--"
    if cell.kind is CellKind.RESULT and cell.outcome is not None:
        return cell.outcome.value
    if cell.kind is CellKind.ERROR:
        return "ERR"
    return "N/A"


def format_board_row(asset: Asset, top_rank_cutoff: int = 10, strong_pct: float = 10) -> str:
    rank = f"#{asset.rank}"
    if asset.rank <= top_rank_cutoff:
        rank += "*"
    pct = f"{_tier_emoji(asset.percent_above_ma, strong_pct)} {_format_pct(asset.percent_above_ma)}"
    return (
        f"{rank:>5} {asset.symbol:<10} {asset.record:>7} "
        f"{asset.win_rate:>6.1f}% {pct:>12} {_status(asset)}"
    )


def format_board(
    assets: Sequence[Asset],
    last_update: datetime | None = None,
    total: int | None = None,
    top_rank_cutoff: int = 10,
    strong_pct: float = 10,
) -> str:
    updated = last_update.strftime("%H:%M") if last_update else "N/A"
    count = total if total is not None else len(assets)
    header = f"{'Rank':>5} {'Symbol':<10} {'Record':>7} {'Win %':>7} {'% Above MA':>12} Status"

    lines = [
        "📊 RATIO | Asset Strength Rankings",
        f"Assets: {count} | Last Update: {updated}",
        "",
        header,
    ]
    lines.extend(format_board_row(a, top_rank_cutoff, strong_pct) for a in assets)
    if not assets:
        lines.append("  (no matching assets)")
    return "\n".join(lines)


def format_asset_detail(asset: Asset, top_rank_cutoff: int = 10) -> str:
    top = " 🏆" if asset.rank <= top_rank_cutoff else ""
    title = asset.symbol if not asset.name else f"{asset.symbol} ({asset.name})"
    status = "▲ Above MA" if asset.above_ma else "▼ Below MA"

    return f"""{title}
Rank #{asset.rank}{top}

Tournament Record: {asset.record}
Win Rate: {asset.win_rate:.1f}%
% Above 20W MA: {_format_pct(asset.percent_above_ma)}
Current Price: ${asset.current_price:,.2f}
20W MA: ${asset.ma:,.2f}
Status: {status}"""


def format_grid(grid: Grid) -> str:
    labels = [grid.label(s) for s in grid.roster]
    width = max([len(label) for label in labels] + [4])

    lines = []
    if grid.title:
        lines.append(f"⚔️ {grid.title}")
    lines.append(" " * width + " | " + " ".join(f"{label:^{width}}" for label in labels))
    lines.append("-" * len(lines[-1]))
    for symbol, label in zip(grid.roster, labels):
        cells = " ".join(f"{format_cell(c):^{width}}" for c in grid.row(symbol))
        lines.append(f"{label:<{width}} | {cells}")

    lines.append("")
    lines.append("Standings:")
    for symbol, record in standings(grid):
        lines.append(
            f"  {grid.label(symbol):<{width}} {record.wins}-{record.losses} ({record.win_rate:.1f}%)"
        )
    return "\n".join(lines)
