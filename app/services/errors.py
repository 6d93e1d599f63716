"""
Иерархия исключений explorer'а

Каждое исключение несет HTTP статус и короткое сообщение для пользователя.
Подробности (текст ошибки RPC, трассировка) остаются только в логах.
"""

from typing import Optional


class ExplorerError(Exception):
    """Базовое исключение, отображаемое как страница ошибки"""

    status_code: int = 500
    message: str = "Internal error"

    def __init__(self, detail: Optional[str] = None, message: Optional[str] = None):
        if message is not None:
            self.message = message
        super().__init__(detail or self.message)


# Ошибки ввода (проверяются до любого обращения к сети)


class InvalidInputError(ExplorerError):
    """Некорректный сегмент пути"""

    status_code = 400
    message = "Invalid input"


class InvalidHashError(InvalidInputError):
    message = "Invalid block hash"


class InvalidTxIdError(InvalidHashError):
    message = "Invalid transaction id"


class InvalidHeightError(InvalidInputError):
    message = "Invalid block height"


class UnknownSearchTermError(InvalidInputError):
    """Поисковый запрос не похож ни на хеш, ни на высоту"""

    def __init__(self, term: str):
        self.term = term
        super().__init__(message=f"Unknown search value: {term}")


# Ошибки демона


class BitcoinRPCError(ExplorerError):
    """Исключение для ошибок RPC"""

    status_code = 502
    message = "Chain service error"


class RPCNotFoundError(BitcoinRPCError):
    """Демон не знает такой сущности"""

    status_code = 404
    message = "Not found"


class RPCUnavailableError(BitcoinRPCError):
    """Транспорт, авторизация, таймаут или ошибка самого демона"""

    message = "Chain service unavailable"


class RPCMalformedError(BitcoinRPCError):
    """Ответ демона не соответствует ожидаемой схеме"""

    message = "Chain service returned malformed data"


class DataUnavailableError(ExplorerError):
    """Многошаговая выборка прервана, частичный результат отброшен"""

    status_code = 502
    message = "Unable to retrieve latest blocks"


class PageError(ExplorerError):
    """Ошибка уровня страницы с собственным сообщением и статусом причины"""

    def __init__(self, message: str, cause: ExplorerError):
        self.status_code = cause.status_code
        super().__init__(str(cause), message=message)
