# Business logic services package

from app.services.bitcoin_rpc import BitcoinRPCClient
from app.services.chain_walker import ChainWalker
from app.services.explorer_service import ExplorerService

__all__ = [
    "BitcoinRPCClient",
    "ChainWalker",
    "ExplorerService",
]
