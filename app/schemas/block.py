"""
Pydantic схемы блоков в ответах RPC
"""

from decimal import Decimal
from typing import List, Optional, Union

from pydantic import AliasChoices, BaseModel, Field, model_validator

from app.schemas.transaction import RPCTransaction

HASH_PATTERN = r"^[0-9a-f]{64}$"


class ChainTip(BaseModel):
    """Вершина цепи: хеш и высота из одного ответа"""

    hash: str = Field(..., alias="bestblockhash", pattern=HASH_PATTERN)
    height: int = Field(..., alias="blocks", ge=0)

    class Config:
        populate_by_name = True


class RPCBlock(BaseModel):
    """Блок в ответе getblock (verbosity=1 или 2)"""

    hash: str = Field(..., pattern=HASH_PATTERN, description="Hash блока")
    height: int = Field(..., ge=0, description="Высота блока")
    time: int = Field(..., description="Время блока (Unix timestamp)")
    size: int = Field(..., ge=0, description="Размер блока в байтах")
    difficulty: Decimal = Field(..., description="Сложность")
    nonce: int = Field(..., description="Nonce")
    bits: str = Field(..., description="Bits")
    merkleroot: str = Field(..., description="Merkle root")
    previousblockhash: Optional[str] = Field(
        None, pattern=HASH_PATTERN, description="Hash предыдущего блока"
    )
    nextblockhash: Optional[str] = Field(
        None, pattern=HASH_PATTERN, description="Hash следующего блока"
    )
    # btcd отдает полные транзакции под ключом rawtx, bitcoind под tx
    tx: List[Union[RPCTransaction, str]] = Field(
        ...,
        min_length=1,
        validation_alias=AliasChoices("tx", "rawtx"),
        description="Txid или полные транзакции",
    )

    @model_validator(mode="after")
    def check_linkage(self) -> "RPCBlock":
        # Только генезис-блок может не иметь предыдущего
        if self.height > 0 and not self.previousblockhash:
            raise ValueError(f"block at height {self.height} has no previous hash")
        return self

    @property
    def txids(self) -> List[str]:
        return [tx if isinstance(tx, str) else tx.txid for tx in self.tx]

    @property
    def has_full_transactions(self) -> bool:
        return all(isinstance(tx, RPCTransaction) for tx in self.tx)
