"""
Inline resources — data URI кодек

Формат: data:<media_type>;base64,<payload>

Используется дважды:
- SVG изображение → data:image/svg+xml;base64,...
- JSON metadata (с вложенным SVG) → data:application/json;base64,...

Потребитель распознаёт ресурс по префиксу и не делает внешних запросов.
"""

import base64
import binascii
from typing import Final, Tuple, Union

SVG_MEDIA_TYPE: Final[str] = "image/svg+xml"
JSON_MEDIA_TYPE: Final[str] = "application/json"

_PREFIX: Final[str] = "data:"
_BASE64_MARKER: Final[str] = ";base64,"


def encode_data_uri(payload: Union[str, bytes], media_type: str) -> str:
    """
    Кодирование payload в base64 data URI.

    Args:
        payload: Содержимое (str кодируется в UTF-8)
        media_type: MIME тип (например, 'image/svg+xml')

    Returns:
        Строка вида data:<media_type>;base64,<...>

    Examples:
        >>> encode_data_uri("{}", JSON_MEDIA_TYPE)
        'data:application/json;base64,e30='
    """
    if not media_type or "," in media_type or ";" in media_type:
        raise ValueError(f"Invalid media type: {media_type!r}")

    if isinstance(payload, str):
        payload = payload.encode("utf-8")

    encoded = base64.b64encode(payload).decode("ascii")
    return f"{_PREFIX}{media_type}{_BASE64_MARKER}{encoded}"


def decode_data_uri(uri: str) -> Tuple[str, bytes]:
    """
    Декодирование base64 data URI.

    Args:
        uri: Строка data:<media_type>;base64,<...>

    Returns:
        (media_type, payload bytes)

    Raises:
        ValueError: Если строка не является base64 data URI
    """
    if not uri.startswith(_PREFIX):
        raise ValueError("Not a data URI: missing 'data:' prefix")

    header, sep, encoded = uri[len(_PREFIX):].partition(",")
    if not sep:
        raise ValueError("Not a data URI: missing ',' separator")

    if not header.endswith(";base64"):
        raise ValueError("Only base64 data URIs are supported")

    media_type = header[: -len(";base64")]
    try:
        payload = base64.b64decode(encoded, validate=True)
    except binascii.Error as e:
        raise ValueError(f"Invalid base64 payload: {e}")

    return media_type, payload
