"""
Конфигурация приложения Block Explorer
"""

from pathlib import Path
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from pydantic import field_validator
from pydantic_settings import BaseSettings

APP_DIR = Path(__file__).resolve().parent


class Settings(BaseSettings):
    """Настройки приложения"""

    # Общие настройки
    PROJECT_NAME: str = "Block Explorer"
    VERSION: str = "0.1.0"

    # Адреса для прослушивания (host:port)
    LISTENERS: list[str] = ["127.0.0.1:8000"]

    # RPC настройки демона
    BITCOIN_RPC_HOST: str = "127.0.0.1"
    BITCOIN_RPC_PORT: int = 8334
    BITCOIN_RPC_USER: str = "bitcoinrpc"
    BITCOIN_RPC_PASSWORD: str = ""
    BITCOIN_RPC_TIMEOUT: int = 30
    BITCOIN_RPC_USE_TLS: bool = False
    BITCOIN_RPC_CERT: str = str(Path.home() / ".btcd" / "rpc.cert")

    # Максимум параллельных запросов транзакций в рамках одной страницы
    RPC_MAX_CONCURRENCY: int = 8

    # Отображение
    MAIN_PAGE_BLOCKS: int = 20
    DISPLAY_TIMEZONE: str = "UTC"
    TEMPLATES_DIR: str = str(APP_DIR / "templates")
    STATIC_DIR: str = str(APP_DIR / "static")

    # Логирование
    LOG_LEVEL: str = "INFO"

    # Debug режим
    DEBUG: bool = False

    @field_validator("DISPLAY_TIMEZONE")
    @classmethod
    def check_timezone(cls, value: str) -> str:
        """Проверка имени часового пояса"""
        try:
            ZoneInfo(value)
        except (ZoneInfoNotFoundError, ValueError) as e:
            raise ValueError(f"unknown time zone {value!r}") from e
        return value

    class Config:
        env_file = ".env"
        case_sensitive = True
