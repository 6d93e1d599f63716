"""
HTML страницы explorer'а
"""

import logging
import pprint
from typing import Any, Optional

from fastapi import APIRouter, Depends, Request
from fastapi.responses import HTMLResponse, PlainTextResponse, RedirectResponse

from app.context import get_explorer_service
from app.schemas.views import ErrorModel
from app.services.errors import BitcoinRPCError, InvalidTxIdError, PageError
from app.services.explorer_service import ExplorerService
from app.services.validators import classify_search, validate_hash, validate_height

logger = logging.getLogger(__name__)

router = APIRouter(tags=["pages"])


def render_page(
    request: Request,
    name: str,
    title: str,
    page: Any,
    status_code: int = 200,
) -> HTMLResponse:
    """Отрисовка шаблона страницы с заголовком и view-моделью"""
    templates = request.app.state.templates
    return templates.TemplateResponse(
        request,
        name,
        {"title": title, "page": page},
        status_code=status_code,
    )


def render_error(request: Request, message: str, status_code: int) -> HTMLResponse:
    """Страница ошибки"""
    return render_page(
        request, "error.html", "Error", ErrorModel(message=message), status_code
    )


def redirect_to(request: Request, route_name: str, segment: str) -> RedirectResponse:
    """Временный редирект (307) на другую страницу"""
    url = request.url_for(route_name, segment=segment)
    return RedirectResponse(str(url), status_code=307)


@router.get("/", response_class=HTMLResponse)
async def landing_page(
    request: Request, service: ExplorerService = Depends(get_explorer_service)
):
    """Главная страница: последние блоки"""
    page = await service.get_landing_page()
    return render_page(request, "index.html", "Welcome", page)


@router.get("/block", response_class=HTMLResponse, name="block_page_empty")
@router.get("/block/{segment:path}", response_class=HTMLResponse, name="block_page")
async def block_page(
    request: Request,
    segment: str = "",
    service: ExplorerService = Depends(get_explorer_service),
):
    """Страница блока по хешу"""
    block_hash = validate_hash(segment)
    try:
        page = await service.get_block_page(block_hash)
    except BitcoinRPCError as e:
        logger.warning(f"Блок {block_hash} недоступен: {e}")
        raise PageError("Unable to retrieve block", e)

    return render_page(request, "block.html", f"Block {page.height}", page)


@router.get("/b", name="height_redirect_empty")
@router.get("/b/{segment:path}", name="height_redirect")
async def height_redirect(
    request: Request,
    segment: str = "",
    service: ExplorerService = Depends(get_explorer_service),
):
    """Редирект с высоты блока на страницу блока"""
    height = validate_height(segment)
    try:
        block_hash = await service.get_block_hash(height)
    except BitcoinRPCError as e:
        logger.warning(f"Нет блока на высоте {height}: {e}")
        raise PageError("Unable to find block at that height", e)

    return redirect_to(request, "block_page", block_hash)


@router.get("/tx", response_class=HTMLResponse, name="tx_page_empty")
@router.get("/tx/{segment:path}", response_class=HTMLResponse, name="tx_page")
async def tx_page(
    request: Request,
    segment: str = "",
    service: ExplorerService = Depends(get_explorer_service),
):
    """Страница транзакции"""
    txid = validate_hash(segment, InvalidTxIdError)
    try:
        page = await service.get_tx_page(txid)
    except BitcoinRPCError as e:
        logger.warning(f"Транзакция {txid} недоступна: {e}")
        raise PageError("Unable to retrieve tx", e)

    return render_page(request, "tx.html", f"Tx {page.hash}", page)


@router.get("/rawblock", name="raw_block_empty")
@router.get("/rawblock/{segment:path}", name="raw_block")
async def raw_block(
    segment: str = "",
    service: ExplorerService = Depends(get_explorer_service),
):
    """Отладочный вывод блока как есть"""
    block_hash = validate_hash(segment)
    try:
        output = await service.get_raw_block(block_hash)
    except BitcoinRPCError as e:
        logger.warning(f"Блок {block_hash} недоступен: {e}")
        raise PageError("Block not found", e)

    return PlainTextResponse(pprint.pformat(output, width=120))


@router.get("/rawtx", name="raw_tx_empty")
@router.get("/rawtx/{segment:path}", name="raw_tx")
async def raw_tx(
    segment: str = "",
    service: ExplorerService = Depends(get_explorer_service),
):
    """Отладочный вывод транзакции как есть"""
    txid = validate_hash(segment, InvalidTxIdError)
    try:
        output = await service.get_raw_transaction(txid)
    except BitcoinRPCError as e:
        logger.warning(f"Транзакция {txid} недоступна: {e}")
        raise PageError("Transaction not found", e)

    return PlainTextResponse(pprint.pformat(output, width=120))


@router.get("/search", name="search_form")
@router.get("/search/{term:path}", name="search")
async def search(request: Request, term: str = "", q: Optional[str] = None):
    """
    Поиск: хеш блока или высота

    Поддерживаемые форматы:
    - Хеш блока (64 hex символа) -> /block/<term>
    - Высота блока (целое число) -> /b/<term>
    """
    if not term and q is not None:
        term = q
    kind, value = classify_search(term)
    if kind == "block":
        return redirect_to(request, "block_page", value)
    return redirect_to(request, "height_redirect", value)
