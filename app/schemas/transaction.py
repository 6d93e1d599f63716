"""
Pydantic схемы транзакций в ответах RPC
"""

from decimal import Decimal
from typing import List, Optional

from pydantic import BaseModel, Field


class ScriptSig(BaseModel):
    """Скрипт разблокировки входа"""

    asm: str = ""
    hex: str = ""


class ScriptPubKey(BaseModel):
    """Скрипт блокировки выхода"""

    asm: str = ""
    hex: str = ""
    type: str = Field("nonstandard", description="Классифицированный тип скрипта")
    addresses: List[str] = Field(
        default_factory=list, description="Адреса (старые версии демона)"
    )
    address: Optional[str] = Field(None, description="Адрес (новые версии демона)")

    @property
    def all_addresses(self) -> List[str]:
        """Адреса выхода независимо от версии демона"""
        if self.addresses:
            return list(self.addresses)
        if self.address:
            return [self.address]
        return []


class TransactionInput(BaseModel):
    """Вход транзакции: ссылка на предыдущий выход или coinbase"""

    txid: Optional[str] = Field(None, description="Hash предыдущей транзакции")
    vout: Optional[int] = Field(
        None, ge=0, description="Индекс выхода в предыдущей транзакции"
    )
    script_sig: Optional[ScriptSig] = Field(None, alias="scriptSig")
    coinbase: Optional[str] = None
    sequence: Optional[int] = None

    class Config:
        populate_by_name = True

    @property
    def is_coinbase(self) -> bool:
        return self.coinbase is not None


class TransactionOutput(BaseModel):
    """Выход транзакции"""

    value: Decimal = Field(..., ge=0, description="Сумма в основных единицах")
    n: int = Field(..., ge=0, description="Индекс выхода в транзакции")
    script_pubkey: ScriptPubKey = Field(..., alias="scriptPubKey")

    class Config:
        populate_by_name = True


class RPCTransaction(BaseModel):
    """Транзакция в ответе getrawtransaction / getblock (verbosity=2)"""

    txid: str = Field(..., pattern=r"^[0-9a-f]{64}$")
    hash: Optional[str] = None
    version: Optional[int] = None
    locktime: Optional[int] = None
    size: Optional[int] = None
    vin: List[TransactionInput] = []
    vout: List[TransactionOutput] = []

    @property
    def total_out(self) -> Decimal:
        """Сумма всех выходов"""
        return sum((out.value for out in self.vout), Decimal(0))
