"""排名服务 API 客户端"""

import json
import logging
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

import aiohttp

from ratio.board.models import BigBoard
from ratio.board.parser import parse_big_board
from ratio.errors import InvalidInputError

logger = logging.getLogger(__name__)


class RatioAPIError(Exception):
    """排名服务 API 错误"""

    def __init__(self, status: int, message: str):
        self.status = status
        self.message = message
        super().__init__(message)


@dataclass
class RatioClient:
    """排名服务 API 客户端"""

    base_url: str = "https://web-production-d425.up.railway.app/api"
    timeout_seconds: float = 15
    _session: aiohttp.ClientSession | None = field(default=None, repr=False)

    async def _request(
        self,
        endpoint: str,
        params: dict[str, Any] | None = None,
    ) -> Any:
        """发送 GET 请求"""
        if self._session is None:
            raise RuntimeError("Session not initialized. Use 'async with' context.")

        url = f"{self.base_url.rstrip('/')}{endpoint}"
        response = await self._session.get(url, params=params)

        if response.status != 200:
            error_text = await response.text()
            try:
                error_data = json.loads(error_text)
            except json.JSONDecodeError:
                raise RatioAPIError(response.status, error_text)
            message = error_text
            if isinstance(error_data, dict):
                message = error_data.get("detail") or error_data.get("error") or error_text
            raise RatioAPIError(response.status, str(message))

        return await response.json()

    async def __aenter__(self) -> "RatioClient":
        timeout = aiohttp.ClientTimeout(total=self.timeout_seconds)
        self._session = aiohttp.ClientSession(timeout=timeout)
        return self

    async def __aexit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        if self._session:
            await self._session.close()
            self._session = None

    async def get_big_board(self) -> BigBoard:
        """获取龙虎榜"""
        data = await self._request("/big-board")
        board = parse_big_board(data)
        logger.info(f"Fetched big board: {len(board)} assets")
        return board

    async def get_matchups(self, grid_type: str) -> Mapping[str, Any]:
        """获取服务端计算好的对阵表 {row: {col: cell}}"""
        data = await self._request(f"/matchups/{grid_type}")
        if not isinstance(data, Mapping):
            raise InvalidInputError("matchups payload is not an object")

        table = data.get("matchups")
        if not isinstance(table, Mapping):
            raise InvalidInputError("matchups is missing or not a mapping", field="matchups")
        return table
