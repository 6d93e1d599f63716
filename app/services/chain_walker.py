"""
Сборка списка последних блоков для главной страницы

Обход идет от вершины по полю previousblockhash. Вершина читается один раз,
дальше каждый шаг зависит от предыдущего, поэтому шаги строго
последовательны. Весь список отражает одну и ту же версию цепи, даже если
демон за время обхода принял новые блоки.

Альтернатива (getblockhash по высотам tip, tip-1, ...) допускает
параллельные запросы, но может смешать две ветки, если во время обхода
произошла реорганизация. Здесь она намеренно не используется.
"""

import logging
from typing import Callable, List

from fastapi.concurrency import run_in_threadpool

from app.schemas.block import RPCBlock
from app.services.errors import BitcoinRPCError, DataUnavailableError

logger = logging.getLogger(__name__)


class ChainWalker:
    """Обход цепи назад от вершины"""

    def __init__(self, client, limit: int = 20):
        """
        Args:
            client: Клиент демона (BitcoinRPCClient или совместимый)
            limit: Максимальное количество блоков
        """
        if limit < 1:
            raise ValueError("limit must be positive")
        self.client = client
        self.limit = limit

    async def _call(self, func: Callable, *args):
        return await run_in_threadpool(func, *args)

    async def walk(self) -> List[RPCBlock]:
        """
        Последние блоки от вершины к генезису

        Возвращает не более limit блоков; меньше, если цепь короче.

        Raises:
            DataUnavailableError: любой запрос к демону завершился ошибкой;
                частичный список отбрасывается
        """
        try:
            tip = await self._call(self.client.get_tip)
            block = await self._call(self.client.get_block, tip.hash, True)
            blocks = [block]

            while len(blocks) < self.limit and block.previousblockhash:
                block = await self._call(
                    self.client.get_block, block.previousblockhash, True
                )
                blocks.append(block)

        except BitcoinRPCError as e:
            logger.error(f"Обход цепи прерван: {e}")
            raise DataUnavailableError(str(e))

        logger.debug(
            f"Обход цепи: {len(blocks)} блоков, "
            f"высоты {blocks[0].height}..{blocks[-1].height}"
        )
        return blocks
