"""
Сервис страниц explorer'а: выборка данных у демона и построение view-моделей
"""

import asyncio
import logging
from datetime import tzinfo
from typing import Any, Dict, List
from zoneinfo import ZoneInfo

from fastapi.concurrency import run_in_threadpool

from app.config import Settings
from app.schemas.block import RPCBlock
from app.schemas.transaction import RPCTransaction
from app.schemas.views import BlockPageModel, LandingPageModel, TxPageModel
from app.services.chain_walker import ChainWalker
from app.services.errors import BitcoinRPCError, DataUnavailableError
from app.services.view_builder import (
    build_block_page,
    build_landing_page,
    build_tx_page,
)

logger = logging.getLogger(__name__)


class ExplorerService:
    """Сервис для построения страниц"""

    def __init__(self, client, settings: Settings):
        self.client = client
        self.settings = settings
        self.tz: tzinfo = ZoneInfo(settings.DISPLAY_TIMEZONE)

    async def resolve_transactions(self, block: RPCBlock) -> List[RPCTransaction]:
        """
        Полные транзакции блока

        Если демон вернул блок только со списком txid, транзакции
        запрашиваются параллельно. Первая ошибка прерывает всю выборку.
        """
        if block.has_full_transactions:
            return list(block.tx)

        semaphore = asyncio.Semaphore(self.settings.RPC_MAX_CONCURRENCY)

        async def fetch(entry):
            if isinstance(entry, RPCTransaction):
                return entry
            async with semaphore:
                return await run_in_threadpool(self.client.get_transaction, entry)

        logger.debug(f"Блок {block.hash}: запрос {len(block.tx)} транзакций")
        return list(await asyncio.gather(*(fetch(entry) for entry in block.tx)))

    async def get_landing_page(self) -> LandingPageModel:
        """
        Главная страница: последние MAIN_PAGE_BLOCKS блоков

        Raises:
            DataUnavailableError: при любой ошибке обхода или выборки транзакций
        """
        walker = ChainWalker(self.client, limit=self.settings.MAIN_PAGE_BLOCKS)
        blocks = await walker.walk()

        try:
            transactions = [await self.resolve_transactions(b) for b in blocks]
        except BitcoinRPCError as e:
            logger.error(f"Не удалось получить транзакции для главной страницы: {e}")
            raise DataUnavailableError(str(e))

        return build_landing_page(blocks, transactions, self.tz)

    async def get_block_page(self, block_hash: str) -> BlockPageModel:
        """
        Страница блока

        Args:
            block_hash: Проверенный хеш блока
        """
        block = await run_in_threadpool(self.client.get_block, block_hash, True)
        transactions = await self.resolve_transactions(block)
        return build_block_page(block, transactions, self.tz)

    async def get_block_hash(self, height: int) -> str:
        """Хеш блока на высоте"""
        return await run_in_threadpool(self.client.get_block_hash, height)

    async def get_tx_page(self, txid: str) -> TxPageModel:
        """Страница транзакции"""
        tx = await run_in_threadpool(self.client.get_transaction, txid)
        return build_tx_page(tx)

    async def get_raw_block(self, block_hash: str) -> Dict[str, Any]:
        return await run_in_threadpool(self.client.get_raw_block, block_hash)

    async def get_raw_transaction(self, txid: str) -> Dict[str, Any]:
        return await run_in_threadpool(self.client.get_raw_transaction, txid)
