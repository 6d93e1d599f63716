"""
Контекст приложения: настройки и клиент демона, создаются один раз при старте
"""

from dataclasses import dataclass

from fastapi import Depends, Request

from app.config import Settings
from app.services.bitcoin_rpc import BitcoinRPCClient
from app.services.explorer_service import ExplorerService


@dataclass(frozen=True)
class ExplorerContext:
    """Разделяемое между запросами состояние, только для чтения"""

    settings: Settings
    client: BitcoinRPCClient


def build_context(settings: Settings) -> ExplorerContext:
    return ExplorerContext(settings=settings, client=BitcoinRPCClient(settings))


def get_context(request: Request) -> ExplorerContext:
    """
    Контекст текущего приложения
    Используется как dependency в FastAPI
    """
    return request.app.state.context


def get_explorer_service(
    context: ExplorerContext = Depends(get_context),
) -> ExplorerService:
    """Сервис страниц поверх общего клиента, новый на каждый запрос"""
    return ExplorerService(context.client, context.settings)
