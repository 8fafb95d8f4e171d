"""
Request body parsing for JSON and URL-encoded payloads.

Mirrors the defaults of the usual web-framework body parsers: only `application/json` and
`application/x-www-form-urlencoded` are parsed, JSON in strict mode (top-level object or
array only), gzip / deflate bodies are inflated, and reading stops as soon as the size limit
is passed. Failures are raised as HTTP errors so they reach the error stage like any other
request error.
"""

import codecs
import json
import zlib
from typing import Any
from urllib.parse import parse_qs

from fastapi import HTTPException, Request

JSON_TYPE = "application/json"
FORM_TYPE = "application/x-www-form-urlencoded"


def _media_type(content_type: str) -> tuple[str, str | None]:
    """Split a Content-Type header into its media type and charset."""
    media_type, *params = content_type.split(";")
    charset = None
    for param in params:
        key, _, value = param.strip().partition("=")
        if key.strip().lower() == "charset":
            charset = value.strip().strip('"').lower()
    return media_type.strip().lower(), charset


def _check_charset(media_type: str, charset: str) -> None:
    """JSON takes any utf-* charset Python can decode; forms take utf-8 only."""
    if media_type == JSON_TYPE:
        supported = charset.startswith("utf-")
        if supported:
            try:
                codecs.lookup(charset)
            except LookupError:
                supported = False
    else:
        supported = charset == "utf-8"

    if not supported:
        raise HTTPException(status_code=415, detail=f"Unsupported charset: {charset.upper()}")


def _decompressor(content_encoding: str) -> Any:
    """Decompressor for the body's Content-Encoding, or None for identity."""
    encoding = content_encoding.strip().lower()
    if encoding in ("", "identity"):
        return None
    if encoding == "gzip":
        return zlib.decompressobj(16 + zlib.MAX_WBITS)
    if encoding == "deflate":
        return zlib.decompressobj()
    raise HTTPException(
        status_code=415, detail=f"Unsupported content encoding: {content_encoding}"
    )


def _too_large() -> HTTPException:
    return HTTPException(status_code=413, detail="Request entity too large")


async def read_body(request: Request, limit: int) -> bytes:
    """
    Read (and inflate) the request body, stopping as soon as it grows past `limit` bytes.

    Raises:
        HTTPException: 413 past the limit, 415 for an unknown Content-Encoding, 400 when a
            compressed body is corrupt.
    """
    decompressor = _decompressor(request.headers.get("content-encoding", ""))

    declared_length = request.headers.get("content-length")
    if decompressor is None and declared_length and declared_length.isdigit():
        if int(declared_length) > limit:
            raise _too_large()

    received = bytearray()
    try:
        async for chunk in request.stream():
            if decompressor is not None:
                chunk = decompressor.decompress(chunk, limit + 1 - len(received))
            received += chunk
            if len(received) > limit:
                raise _too_large()

        if decompressor is not None:
            received += decompressor.flush()
            if len(received) > limit:
                raise _too_large()
    except zlib.error as e:
        raise HTTPException(status_code=400, detail=f"Malformed compressed body: {e}") from e

    return bytes(received)


def parse_json(raw: bytes, charset: str = "utf-8") -> Any:
    try:
        text = raw.decode(charset)
    except UnicodeDecodeError as e:
        raise HTTPException(status_code=400, detail=f"Malformed JSON body: {e}") from e

    if not text.strip():
        return {}

    try:
        body = json.loads(text)
    except json.JSONDecodeError as e:
        raise HTTPException(status_code=400, detail=f"Malformed JSON body: {e}") from e

    if not isinstance(body, dict | list):
        raise HTTPException(status_code=400, detail="JSON body must be an object or array")
    return body


def parse_form(raw: bytes) -> dict[str, Any]:
    try:
        text = raw.decode("utf-8")
    except UnicodeDecodeError as e:
        raise HTTPException(status_code=400, detail=f"Malformed form body: {e}") from e

    fields = parse_qs(text, keep_blank_values=True)
    return {key: values[0] if len(values) == 1 else values for key, values in fields.items()}


async def parse_body(request: Request, limit: int) -> Any:
    """
    Parse the request body according to its Content-Type.

    Args:
        request (Request): The incoming request.
        limit (int): Largest accepted body in bytes, after inflation.

    Returns:
        The parsed body; an empty dict when there is nothing to parse.

    Raises:
        HTTPException: 413 when the body exceeds the limit, 415 for an unsupported charset
            or content encoding, 400 when the body cannot be parsed.
    """
    content_type = request.headers.get("content-type")
    if not content_type:
        return {}

    media_type, charset = _media_type(content_type)
    if media_type not in (JSON_TYPE, FORM_TYPE):
        return {}

    if charset:
        _check_charset(media_type, charset)

    raw = await read_body(request, limit)

    if media_type == JSON_TYPE:
        return parse_json(raw, charset or "utf-8")
    return parse_form(raw)
