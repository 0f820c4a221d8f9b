"""
龙虎榜 / 对阵网格命令行

用法:
    python -m ratio.main
    python -m ratio.main --search aap --type stocks
    python -m ratio.main --symbol NVDA
    python -m ratio.main --grid MAG7
    python -m ratio.main --grid crypto --derived
"""

import argparse
import asyncio
import logging
import sys
from collections.abc import Mapping, Sequence
from pathlib import Path
from typing import Any

import aiohttp
from pydantic import ValidationError

from ratio.board.filter import filter_assets
from ratio.board.models import BigBoard
from ratio.client.ratio_api import RatioAPIError, RatioClient
from ratio.config import Config, load_config
from ratio.errors import InvalidInputError, UnknownGridTypeError
from ratio.matchup.grid import build_grid
from ratio.matchup.rosters import GridType, get_grid_type
from ratio.matchup.source import DerivedSource, MatchupSource, ProvidedSource
from ratio.render.formatter import format_asset_detail, format_board, format_grid

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


def parse_args(args: Sequence[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="RATIO asset strength rankings")
    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="YAML 配置文件路径",
    )
    parser.add_argument(
        "--search",
        type=str,
        default="",
        help="按 symbol 搜索 (大小写不敏感)",
    )
    parser.add_argument(
        "--type",
        type=str,
        default="all",
        help="资产类别: all / stock / etf / crypto (默认: all)",
    )
    parser.add_argument(
        "--symbol",
        type=str,
        default=None,
        help="显示单个资产详情",
    )
    parser.add_argument(
        "--grid",
        type=str,
        default=None,
        help="显示对阵网格: MAG7 / INDICES / CRYPTO 或配置中的自定义阵容",
    )
    parser.add_argument(
        "--derived",
        action="store_true",
        help="不请求服务端对阵表，直接用 percent_above_ma 推导",
    )
    return parser.parse_args(args)


def render_grid(
    grid_type: GridType,
    board: BigBoard,
    table: Mapping[str, Any] | None = None,
) -> str:
    """有服务端对阵表时用它，否则从龙虎榜指标推导"""
    source: MatchupSource
    if table is not None:
        source = ProvidedSource(table)
    else:
        source = DerivedSource(board.assets)
    grid = build_grid(
        grid_type.symbols,
        source,
        display_names=grid_type.display_names,
        title=grid_type.title,
    )
    return format_grid(grid)


def render_board(args: argparse.Namespace, config: Config, board: BigBoard) -> str:
    if args.symbol:
        wanted = args.symbol.strip().upper()
        asset = next((a for a in board.assets if a.symbol.upper() == wanted), None)
        if asset is None:
            return f"{args.symbol} not found on the board"
        return format_asset_detail(asset, config.board.top_rank_cutoff)

    assets = filter_assets(board.assets, args.search, args.type)
    return format_board(
        assets,
        last_update=board.last_update,
        total=len(board),
        top_rank_cutoff=config.board.top_rank_cutoff,
        strong_pct=config.board.strong_move_pct,
    )


async def fetch_matchups(client: RatioClient, grid_type: GridType) -> Mapping[str, Any] | None:
    try:
        return await client.get_matchups(grid_type.name)
    except (RatioAPIError, aiohttp.ClientError, InvalidInputError) as e:
        logger.warning(f"Matchups for {grid_type.name} unavailable, deriving locally: {e}")
        return None


async def run(args: argparse.Namespace, config: Config, client: RatioClient) -> int:
    grid_type = None
    if args.grid:
        try:
            grid_type = get_grid_type(args.grid, config.grid_types())
        except UnknownGridTypeError as e:
            logger.error(str(e))
            return 2

    try:
        board = await client.get_big_board()
    except (RatioAPIError, aiohttp.ClientError, InvalidInputError) as e:
        logger.error(f"Failed to fetch big board: {e}")
        return 1

    if grid_type is not None:
        table = None if args.derived else await fetch_matchups(client, grid_type)
        print(render_grid(grid_type, board, table))
        return 0

    try:
        print(render_board(args, config, board))
    except InvalidInputError as e:
        logger.error(str(e))
        return 2
    return 0


async def main() -> int:
    args = parse_args()
    try:
        config = load_config(args.config) if args.config else Config()
    except ValidationError as e:
        logger.error(f"Invalid config {args.config}: {e}")
        return 2
    logging.getLogger().setLevel(config.log_level.upper())

    async with RatioClient(
        base_url=config.api.base_url,
        timeout_seconds=config.api.timeout_seconds,
    ) as client:
        return await run(args, config, client)


def cli() -> None:
    sys.exit(asyncio.run(main()))


if __name__ == "__main__":
    cli()
