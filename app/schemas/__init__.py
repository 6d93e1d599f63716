# Pydantic schemas package

from .block import ChainTip, RPCBlock
from .transaction import (
    RPCTransaction,
    ScriptPubKey,
    ScriptSig,
    TransactionInput,
    TransactionOutput,
)
from .views import (
    BlockPageModel,
    BlockPageTx,
    BlockRow,
    ErrorModel,
    InputView,
    LandingPageModel,
    OutputView,
    TxPageModel,
)

__all__ = [
    # RPC schemas
    "ChainTip",
    "RPCBlock",
    "RPCTransaction",
    "ScriptPubKey",
    "ScriptSig",
    "TransactionInput",
    "TransactionOutput",
    # View models
    "BlockPageModel",
    "BlockPageTx",
    "BlockRow",
    "ErrorModel",
    "InputView",
    "LandingPageModel",
    "OutputView",
    "TxPageModel",
]
