"""
Построение view-моделей из данных демона

Только чистые функции: без сети и без состояния. Результат зависит лишь от
входных данных и явно переданного часового пояса.
"""

from datetime import datetime, tzinfo
from decimal import Decimal
from typing import Iterable, Sequence

from app.schemas.block import RPCBlock
from app.schemas.transaction import (
    RPCTransaction,
    TransactionInput,
    TransactionOutput,
)
from app.schemas.views import (
    BlockPageModel,
    BlockPageTx,
    BlockRow,
    InputView,
    LandingPageModel,
    OutputView,
    TxPageModel,
)

DISPLAY_HASH_LENGTH = 10
TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S"


def display_hash(block_hash: str) -> str:
    """Первые 10 символов хеша без ведущих нулей"""
    return block_hash.lstrip("0")[:DISPLAY_HASH_LENGTH]


def format_size(size: int) -> str:
    """Размер в килобайтах (1000 байт), три знака после запятой"""
    return f"{size / 1000:.3f}"


def format_timestamp(epoch: int, tz: tzinfo) -> str:
    """Unix timestamp в виде 'YYYY-MM-DD HH:MM:SS' в заданном поясе"""
    return datetime.fromtimestamp(epoch, tz).strftime(TIMESTAMP_FORMAT)


def format_value(value: Decimal) -> str:
    """Сумма с точностью до минимальной единицы (8 знаков)"""
    return f"{value:.8f}"


def format_difficulty(difficulty: Decimal) -> str:
    return f"{difficulty:.6f}"


def total_value(transactions: Iterable[RPCTransaction]) -> Decimal:
    """Точная сумма всех выходов всех транзакций"""
    return sum((tx.total_out for tx in transactions), Decimal(0))


def build_input(vin: TransactionInput) -> InputView:
    return InputView(
        coinbase=vin.coinbase,
        prev_txid=vin.txid,
        prev_vout=vin.vout,
        script_sig=vin.script_sig.asm if vin.script_sig else "",
        sequence=vin.sequence,
    )


def build_output(vout: TransactionOutput) -> OutputView:
    return OutputView(
        n=vout.n,
        value=format_value(vout.value),
        script_pubkey=vout.script_pubkey.asm,
        type=vout.script_pubkey.type,
        addresses=tuple(vout.script_pubkey.all_addresses),
    )


def build_block_row(
    block: RPCBlock, transactions: Sequence[RPCTransaction], tz: tzinfo
) -> BlockRow:
    """Строка главной страницы"""
    return BlockRow(
        display_hash=display_hash(block.hash),
        hash=block.hash,
        height=block.height,
        previous_hash=block.previousblockhash or "",
        size=format_size(block.size),
        timestamp=format_timestamp(block.time, tz),
        tx_count=len(transactions),
        total_value=format_value(total_value(transactions)),
    )


def build_landing_page(
    blocks: Sequence[RPCBlock],
    transactions: Sequence[Sequence[RPCTransaction]],
    tz: tzinfo,
) -> LandingPageModel:
    """
    Главная страница

    Args:
        blocks: Блоки от вершины вниз по цепи
        transactions: Полные транзакции каждого блока, в том же порядке
        tz: Часовой пояс для отображения времени
    """
    if len(blocks) != len(transactions):
        raise ValueError("blocks and transactions must have the same length")
    rows = tuple(
        build_block_row(block, txs, tz) for block, txs in zip(blocks, transactions)
    )
    return LandingPageModel(rows=rows)


def build_block_tx(tx: RPCTransaction) -> BlockPageTx:
    return BlockPageTx(
        display_hash=tx.txid[:DISPLAY_HASH_LENGTH],
        hash=tx.txid,
        inputs=tuple(build_input(vin) for vin in tx.vin),
        outputs=tuple(build_output(vout) for vout in tx.vout),
        total_value=format_value(tx.total_out),
    )


def build_block_page(
    block: RPCBlock, transactions: Sequence[RPCTransaction], tz: tzinfo
) -> BlockPageModel:
    """Страница блока с полными транзакциями"""
    return BlockPageModel(
        bits=block.bits,
        difficulty=format_difficulty(block.difficulty),
        hash=block.hash,
        height=block.height,
        merkle_root=block.merkleroot,
        next_hash=block.nextblockhash or "",
        nonce=block.nonce,
        previous_hash=block.previousblockhash or "",
        size=format_size(block.size),
        timestamp=format_timestamp(block.time, tz),
        total_value=format_value(total_value(transactions)),
        transactions=tuple(build_block_tx(tx) for tx in transactions),
    )


def build_tx_page(tx: RPCTransaction) -> TxPageModel:
    """Страница транзакции"""
    return TxPageModel(
        hash=tx.txid,
        inputs=tuple(build_input(vin) for vin in tx.vin),
        outputs=tuple(build_output(vout) for vout in tx.vout),
        total_value=format_value(tx.total_out),
    )
