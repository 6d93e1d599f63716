"""
Проверка сегментов пути до любого обращения к демону
"""

import re
import string
from typing import Tuple, Type

from app.services.errors import (
    InvalidHashError,
    InvalidHeightError,
    UnknownSearchTermError,
)

HASH_LENGTH = 64
HEX_DIGITS = frozenset(string.hexdigits)

# Только ASCII, без пробелов и "_"
INT_PATTERN = re.compile(
    r"[+-]?(?:(?P<prefixed>0[xX][0-9a-fA-F]+|0[oO][0-7]+|0[bB][01]+)|[0-9]+)"
)


def _strip_separator(segment: str) -> str:
    return segment[1:] if segment.startswith("/") else segment


def is_hash(value: str) -> bool:
    """Ровно 64 шестнадцатеричных символа"""
    return len(value) == HASH_LENGTH and all(c in HEX_DIGITS for c in value)


def parse_int(value: str) -> int:
    """
    Разбор целого: десятичная запись или литерал с префиксом 0x/0o/0b

    Raises:
        ValueError: строка не является целым числом
    """
    match = INT_PATTERN.fullmatch(value)
    if match is None:
        raise ValueError(f"not an integer: {value!r}")
    if match.group("prefixed"):
        return int(value, 0)
    return int(value, 10)


def validate_hash(
    segment: str, error: Type[InvalidHashError] = InvalidHashError
) -> str:
    """
    Проверка сегмента пути с хешем блока или txid

    Returns:
        Хеш в нижнем регистре
    """
    value = _strip_separator(segment)
    if not is_hash(value):
        raise error(f"bad hash segment: {segment!r}")
    return value.lower()


def validate_height(segment: str) -> int:
    """Проверка сегмента пути с высотой блока"""
    value = _strip_separator(segment)
    try:
        height = parse_int(value)
    except ValueError:
        raise InvalidHeightError(f"bad height segment: {segment!r}")
    if height < 0:
        raise InvalidHeightError(f"negative height: {height}")
    return height


def classify_search(term: str) -> Tuple[str, str]:
    """
    Классификация поискового запроса

    Сначала проверяется форма хеша, затем целого числа.

    Returns:
        ("block", term) или ("height", term)
    """
    if is_hash(term):
        return "block", term
    try:
        parse_int(term)
    except ValueError:
        raise UnknownSearchTermError(term)
    return "height", term
