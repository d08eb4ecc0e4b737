# =============================================================================
# app/middleware.py - Request Logging
# =============================================================================
# Logs every request's method and URL. POST bodies are logged as well, with
# credential-like fields masked so passwords and tokens never reach the logs.
# Unhandled errors are converted to the generic 500 response here as well.
# =============================================================================

import json
import logging
from typing import Any
from urllib.parse import parse_qsl

from fastapi import FastAPI, Request

from app.body import FORM_MEDIA_TYPE, MAX_BODY_BYTES, declared_length, is_json, media_type
from app.exceptions import unhandled_exception_handler

logger = logging.getLogger(__name__)

SENSITIVE_KEY_PARTS = ("password", "token", "secret", "authorization")
REDACTED = "[REDACTED]"


def redact(value: Any) -> Any:
    """Recursively mask values stored under credential-like keys."""
    if isinstance(value, dict):
        return {
            key: REDACTED
            if any(part in str(key).lower() for part in SENSITIVE_KEY_PARTS)
            else redact(item)
            for key, item in value.items()
        }
    if isinstance(value, list):
        return [redact(item) for item in value]
    return value


def describe_body(raw: bytes, content_type: str) -> str:
    """Render a request body for the log without leaking credentials."""
    if not raw:
        return "<empty>"

    try:
        if is_json(content_type):
            return json.dumps(redact(json.loads(raw)), indent=2)
        if content_type == FORM_MEDIA_TYPE:
            pairs = parse_qsl(raw.decode("utf-8"), keep_blank_values=True)
            return json.dumps(redact(dict(pairs)), indent=2)
    except (ValueError, UnicodeDecodeError):
        return f"<unparseable {len(raw)} bytes>"

    return f"<{content_type or 'unknown'} {len(raw)} bytes>"


def register_request_logging(app: FastAPI, log_bodies: bool = True) -> None:
    """
    Attach the request logger to `app`.

    Unhandled errors are turned into the generic 500 here rather than in
    Starlette's outermost error middleware, so the response still passes
    back through CORSMiddleware and carries its headers.
    """

    @app.middleware("http")
    async def log_request(request: Request, call_next):
        url = request.url.path
        if request.url.query:
            url = f"{url}?{request.url.query}"
        logger.info(f"{request.method} {url}")

        if log_bodies and request.method == "POST":
            length = declared_length(request)
            if length is None or length > MAX_BODY_BYTES:
                # Not buffered here; read_body enforces the size limit
                logger.info(f"Body: <{length if length is not None else 'unsized'} bytes, not logged>")
            else:
                raw = await request.body()
                logger.info(f"Body: {describe_body(raw, media_type(request))}")

        try:
            return await call_next(request)
        except Exception as exc:
            return await unhandled_exception_handler(request, exc)
