"""
RPC клиент для взаимодействия с демоном цепи
"""

import http.client
import logging
import re
import ssl
from typing import Any, Dict, Optional, Type, TypeVar

from bitcoinrpc.authproxy import AuthServiceProxy, JSONRPCException
from pydantic import BaseModel, ValidationError

from app.config import Settings
from app.schemas.block import HASH_PATTERN, ChainTip, RPCBlock
from app.schemas.transaction import RPCTransaction
from app.services.errors import (
    BitcoinRPCError,
    RPCMalformedError,
    RPCNotFoundError,
    RPCUnavailableError,
)

logger = logging.getLogger(__name__)

# RPC_INVALID_ADDRESS_OR_KEY и RPC_INVALID_PARAMETER: нет такого блока/транзакции
NOT_FOUND_CODES = {-5, -8}

ModelT = TypeVar("ModelT", bound=BaseModel)


class BitcoinRPCClient:
    """
    Клиент для взаимодействия с демоном через JSON-RPC

    Каждый вызов открывает собственное HTTP(S) соединение и закрывает его
    после ответа, поэтому один экземпляр можно использовать из многих
    запросов одновременно. Повторных попыток нет: первая ошибка уходит
    вызывающему в виде типизированного исключения.
    """

    def __init__(self, settings: Settings):
        self._settings = settings
        self._ssl_context: Optional[ssl.SSLContext] = None
        if settings.BITCOIN_RPC_USE_TLS:
            self._ssl_context = ssl.create_default_context(
                cafile=settings.BITCOIN_RPC_CERT
            )
            # Сертификат демона самоподписанный и выпущен на его имя хоста
            self._ssl_context.check_hostname = False

    @property
    def service_url(self) -> str:
        scheme = "https" if self._settings.BITCOIN_RPC_USE_TLS else "http"
        return (
            f"{scheme}://{self._settings.BITCOIN_RPC_USER}:"
            f"{self._settings.BITCOIN_RPC_PASSWORD}"
            f"@{self._settings.BITCOIN_RPC_HOST}:{self._settings.BITCOIN_RPC_PORT}/"
        )

    def _open_connection(self) -> http.client.HTTPConnection:
        """Создание соединения с демоном для одного вызова"""
        host = self._settings.BITCOIN_RPC_HOST
        port = self._settings.BITCOIN_RPC_PORT
        timeout = self._settings.BITCOIN_RPC_TIMEOUT
        if self._ssl_context is not None:
            return http.client.HTTPSConnection(
                host, port, timeout=timeout, context=self._ssl_context
            )
        return http.client.HTTPConnection(host, port, timeout=timeout)

    def _execute_rpc_call(self, method: str, *args) -> Any:
        """
        Выполнение одного RPC вызова с переводом ошибок в типизированные
        """
        connection = self._open_connection()
        try:
            proxy = AuthServiceProxy(
                self.service_url,
                timeout=self._settings.BITCOIN_RPC_TIMEOUT,
                connection=connection,
            )
            return getattr(proxy, method)(*args)

        except JSONRPCException as e:
            code = getattr(e, "code", None)
            if code in NOT_FOUND_CODES:
                logger.info(f"RPC {method}{args}: не найдено ({e})")
                raise RPCNotFoundError(f"{method}: {e}")
            logger.error(f"JSON RPC ошибка в {method} (код {code}): {e}")
            raise RPCUnavailableError(f"{method}: {e}")

        except (OSError, http.client.HTTPException) as e:
            logger.error(f"Ошибка соединения в {method}: {e}")
            raise RPCUnavailableError(f"{method}: {e}")

        except ValueError as e:
            # Тело ответа не является JSON
            logger.error(f"Некорректный ответ на {method}: {e}")
            raise RPCMalformedError(f"{method}: {e}")

        finally:
            connection.close()

    def _decode(self, method: str, model: Type[ModelT], result: Any) -> ModelT:
        """Приведение ответа к схеме; несоответствие дает RPCMalformedError"""
        try:
            return model.model_validate(result)
        except ValidationError as e:
            logger.error(f"Ответ на {method} не соответствует схеме: {e}")
            raise RPCMalformedError(f"{method}: {e}")

    # Методы для работы с цепью

    def get_tip(self) -> ChainTip:
        """Хеш и высота вершины цепи из одного ответа"""
        result = self._execute_rpc_call("getblockchaininfo")
        return self._decode("getblockchaininfo", ChainTip, result)

    def get_block_hash(self, height: int) -> str:
        """Получение хеша блока по высоте"""
        result = self._execute_rpc_call("getblockhash", height)
        if not isinstance(result, str):
            raise RPCMalformedError(f"getblockhash: expected string, got {result!r}")
        block_hash = result.lower()
        if not re.fullmatch(HASH_PATTERN, block_hash):
            raise RPCMalformedError(f"getblockhash: not a block hash: {result!r}")
        return block_hash

    # Методы для работы с блоками

    def get_block(self, block_hash: str, include_transactions: bool = True) -> RPCBlock:
        """
        Получение блока

        Args:
            block_hash: Хеш блока
            include_transactions: Запросить полные транзакции (verbosity=2)
                вместо списка txid (verbosity=1)
        """
        verbosity = 2 if include_transactions else 1
        result = self._execute_rpc_call("getblock", block_hash, verbosity)
        return self._decode("getblock", RPCBlock, result)

    def get_raw_block(self, block_hash: str) -> Dict[str, Any]:
        """Блок как есть, без приведения к схеме (для отладочного вывода)"""
        result = self._execute_rpc_call("getblock", block_hash, 1)
        if not isinstance(result, dict):
            raise RPCMalformedError(f"getblock: expected object, got {result!r}")
        return result

    # Методы для работы с транзакциями

    def get_transaction(self, txid: str) -> RPCTransaction:
        """Получение транзакции по txid"""
        result = self._execute_rpc_call("getrawtransaction", txid, True)
        return self._decode("getrawtransaction", RPCTransaction, result)

    def get_raw_transaction(self, txid: str) -> Dict[str, Any]:
        """Транзакция как есть, без приведения к схеме"""
        result = self._execute_rpc_call("getrawtransaction", txid, True)
        if not isinstance(result, dict):
            raise RPCMalformedError(
                f"getrawtransaction: expected object, got {result!r}"
            )
        return result

    def test_connection(self) -> bool:
        """Тестирование подключения к демону"""
        try:
            self.get_tip()
            return True
        except BitcoinRPCError as e:
            logger.error(f"Тест подключения неудачен: {e}")
            return False
