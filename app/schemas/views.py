"""
View-модели страниц: уже отформатированные поля для шаблонов
"""

from typing import Optional, Tuple

from pydantic import BaseModel


class ViewModel(BaseModel):
    """Базовая неизменяемая view-модель"""

    class Config:
        frozen = True


class InputView(ViewModel):
    """Вход транзакции для отображения"""

    coinbase: Optional[str] = None
    prev_txid: Optional[str] = None
    prev_vout: Optional[int] = None
    script_sig: str = ""
    sequence: Optional[int] = None


class OutputView(ViewModel):
    """Выход транзакции для отображения"""

    n: int
    value: str
    script_pubkey: str
    type: str
    addresses: Tuple[str, ...] = ()


class BlockRow(ViewModel):
    """Строка блока на главной странице"""

    display_hash: str
    hash: str
    height: int
    previous_hash: str
    size: str
    timestamp: str
    tx_count: int
    total_value: str


class LandingPageModel(ViewModel):
    """Главная страница: последние блоки, от вершины к генезису"""

    rows: Tuple[BlockRow, ...]


class BlockPageTx(ViewModel):
    """Транзакция в составе страницы блока"""

    display_hash: str
    hash: str
    inputs: Tuple[InputView, ...]
    outputs: Tuple[OutputView, ...]
    total_value: str


class BlockPageModel(ViewModel):
    """Страница блока"""

    bits: str
    difficulty: str
    hash: str
    height: int
    merkle_root: str
    next_hash: str
    nonce: int
    previous_hash: str
    size: str
    timestamp: str
    total_value: str
    transactions: Tuple[BlockPageTx, ...]


class TxPageModel(ViewModel):
    """Страница транзакции"""

    hash: str
    inputs: Tuple[InputView, ...]
    outputs: Tuple[OutputView, ...]
    total_value: str


class ErrorModel(ViewModel):
    """Страница ошибки"""

    message: str
