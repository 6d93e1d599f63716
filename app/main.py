"""
Главное FastAPI приложение Block Explorer
"""

import logging
import socket
from contextlib import asynccontextmanager
from pathlib import Path
from typing import List, Optional, Tuple

import uvicorn
from fastapi import FastAPI, Request
from fastapi.concurrency import run_in_threadpool
from fastapi.exception_handlers import http_exception_handler
from fastapi.responses import PlainTextResponse
from fastapi.staticfiles import StaticFiles
from fastapi.templating import Jinja2Templates
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.api import pages
from app.config import Settings
from app.context import build_context
from app.services.errors import ExplorerError

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Создание контекста при старте и освобождение при остановке"""
    settings: Settings = app.state.settings
    context = build_context(settings)
    app.state.context = context

    rpc_address = f"{settings.BITCOIN_RPC_HOST}:{settings.BITCOIN_RPC_PORT}"
    if await run_in_threadpool(context.client.test_connection):
        logger.info(f"Демон {rpc_address} доступен")
    else:
        logger.warning(f"Демон {rpc_address} не отвечает, страницы будут с ошибкой")

    yield

    app.state.context = None
    logger.info("Explorer остановлен")


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """Создание приложения с заданными (или загруженными) настройками"""
    if settings is None:
        settings = Settings()

    app = FastAPI(
        title=settings.PROJECT_NAME,
        version=settings.VERSION,
        description="Read-only explorer блоков и транзакций через JSON-RPC демона",
        docs_url=None,
        redoc_url=None,
        openapi_url=None,
        debug=settings.DEBUG,
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.context = None

    # Настройка шаблонов Jinja2
    app.state.templates = Jinja2Templates(directory=settings.TEMPLATES_DIR)

    # Подключение статических файлов
    static_dir = Path(settings.STATIC_DIR)
    app.mount("/css", StaticFiles(directory=static_dir / "css"), name="css")
    app.mount("/js", StaticFiles(directory=static_dir / "js"), name="js")

    app.include_router(pages.router)

    @app.exception_handler(ExplorerError)
    async def explorer_error_handler(request: Request, exc: ExplorerError):
        return pages.render_error(request, exc.message, exc.status_code)

    @app.exception_handler(StarletteHTTPException)
    async def not_found_handler(request: Request, exc: StarletteHTTPException):
        if exc.status_code == 404:
            return PlainTextResponse("404 - Not found", status_code=404)
        return await http_exception_handler(request, exc)

    @app.exception_handler(Exception)
    async def unexpected_error_handler(request: Request, exc: Exception):
        logger.exception(f"Необработанная ошибка на {request.url.path}: {exc}")
        return pages.render_error(request, "Internal error", 500)

    return app


def parse_listener(address: str) -> Tuple[str, int]:
    """Разбор адреса 'host:port' (IPv6 в квадратных скобках)"""
    host, sep, port = address.rpartition(":")
    if not sep or not port.isdigit():
        raise ValueError(
            f"Некорректный адрес для прослушивания {address!r}: "
            "ожидается host:port или [ipv6]:port"
        )
    return host.strip("[]"), int(port)


def bind_listeners(addresses: List[str]) -> List[socket.socket]:
    """Открытие сокета на каждый адрес"""
    sockets = []
    for address in addresses:
        host, port = parse_listener(address)
        family = socket.AF_INET6 if ":" in host else socket.AF_INET
        sock = socket.create_server((host, port), family=family)
        sockets.append(sock)
        logger.info(f"HTTP server listening on {address}")
    return sockets


def run(settings: Optional[Settings] = None) -> None:
    """Запуск сервера на всех адресах из LISTENERS"""
    if settings is None:
        settings = Settings()

    logging.basicConfig(level=settings.LOG_LEVEL.upper(), format=LOG_FORMAT)

    sockets = bind_listeners(settings.LISTENERS)
    config = uvicorn.Config(
        create_app(settings),
        log_level=settings.LOG_LEVEL.lower(),
    )
    server = uvicorn.Server(config)
    try:
        server.run(sockets=sockets)
    finally:
        for sock in sockets:
            sock.close()


app = create_app()


if __name__ == "__main__":
    run()
