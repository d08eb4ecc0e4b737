# =============================================================================
# app/body.py - Request Body Parsing
# =============================================================================
# Route handlers accept both JSON and URL-encoded bodies. FastAPI's own
# body binding only understands JSON, so handlers declare their body via
# `parse_body(Model)` instead:
#
#   @router.post("")
#   async def create(body: Annotated[MealCreate, Depends(parse_body(MealCreate))]):
#       ...
#
# URL-encoded keys use bracket nesting:
#   exercises[0][name]=Squat&exercises[0][sets]=5&tags[]=legs
#   -> {"exercises": [{"name": "Squat", "sets": "5"}], "tags": ["legs"]}
#
# Malformed payloads are rejected with 400 before the handler runs;
# schema violations go through the regular 422 validation handler.
# =============================================================================

import json
import re
from typing import Any, Callable, Iterable, TypeVar
from urllib.parse import parse_qsl

from fastapi import Request
from fastapi.exceptions import RequestValidationError
from pydantic import BaseModel, ValidationError

from app.exceptions import BadRequestError, FitnessApiException

ModelT = TypeVar("ModelT", bound=BaseModel)

# Same default ceiling as typical Node body parsers (100kb)
MAX_BODY_BYTES = 100 * 1024

JSON_MEDIA_TYPE = "application/json"
FORM_MEDIA_TYPE = "application/x-www-form-urlencoded"

_BRACKETS = re.compile(r"\[([^\[\]]*)\]")

# Bracket segments allowed in one form key, e.g. a[b][c] is depth 2
MAX_FORM_DEPTH = 20


def media_type(request: Request) -> str:
    """Content type without parameters, lower-cased."""
    return request.headers.get("content-type", "").split(";")[0].strip().lower()


def declared_length(request: Request) -> int | None:
    """Content-Length header as an int, or None when absent or unusable."""
    value = request.headers.get("content-length", "").strip()
    return int(value) if value.isdigit() else None


def is_json(content_type: str) -> bool:
    return content_type == JSON_MEDIA_TYPE or content_type.endswith("+json")


# =============================================================================
# URL-encoded Expansion
# =============================================================================

def _split_key(key: str) -> list[str]:
    head = key.split("[", 1)[0]
    segments = _BRACKETS.findall(key[len(head):])
    if len(segments) > MAX_FORM_DEPTH:
        raise BadRequestError(f"Form field '{head}' is nested too deeply.")
    return [head] + segments


def _assign(node: dict[str, Any], parts: list[str], value: str) -> None:
    key = parts[0]

    if len(parts) == 1:
        if key in node:
            existing = node[key]
            if isinstance(existing, dict):
                raise BadRequestError(f"Conflicting form field '{key}'.")
            node[key] = (existing if isinstance(existing, list) else [existing]) + [value]
        else:
            node[key] = value
        return

    if parts[1] == "" and len(parts) == 2:
        existing = node.get(key, [])
        if isinstance(existing, dict):
            raise BadRequestError(f"Conflicting form field '{key}'.")
        node[key] = (existing if isinstance(existing, list) else [existing]) + [value]
        return

    child = node.setdefault(key, {})
    if not isinstance(child, dict):
        raise BadRequestError(f"Conflicting form field '{key}'.")
    _assign(child, parts[1:], value)


def _listify(value: Any) -> Any:
    """Turn dicts keyed only by indices into lists ordered by index."""
    if isinstance(value, dict):
        value = {k: _listify(v) for k, v in value.items()}
        if value and all(k.isdigit() for k in value):
            return [value[k] for k in sorted(value, key=int)]
        return value
    if isinstance(value, list):
        return [_listify(v) for v in value]
    return value


def expand_form(items: Iterable[tuple[str, str]]) -> dict[str, Any]:
    """Build a nested structure from flat URL-encoded key/value pairs."""
    result: dict[str, Any] = {}
    for key, value in items:
        if not key:
            continue
        _assign(result, _split_key(key), value)
    return _listify(result)


# =============================================================================
# Body Reading
# =============================================================================

def _too_large() -> FitnessApiException:
    return FitnessApiException("Request body too large.", status_code=413)


async def read_limited(request: Request, limit: int = MAX_BODY_BYTES) -> bytes:
    """
    Read the request body, never holding more than `limit` bytes.

    A declared Content-Length over the limit is rejected before anything
    is read; bodies without one are counted as they stream in.
    """
    length = declared_length(request)
    if length is not None and length > limit:
        raise _too_large()

    chunks = []
    size = 0
    async for chunk in request.stream():
        size += len(chunk)
        if size > limit:
            raise _too_large()
        chunks.append(chunk)
    return b"".join(chunks)


async def read_body(request: Request) -> Any:
    """
    Parse the raw request body by content type.

    Returns:
        Parsed payload; {} for an empty body

    Raises:
        BadRequestError: Malformed JSON or form payload
        FitnessApiException: 413 for oversized bodies, 415 for other types
    """
    raw = await read_limited(request)
    if not raw:
        return {}

    content_type = media_type(request)

    if is_json(content_type):
        try:
            return json.loads(raw)
        except (json.JSONDecodeError, UnicodeDecodeError):
            raise BadRequestError("Malformed JSON body.")

    if content_type == FORM_MEDIA_TYPE:
        try:
            pairs = parse_qsl(raw.decode("utf-8"), keep_blank_values=True)
        except UnicodeDecodeError:
            raise BadRequestError("Malformed form body.")
        return expand_form(pairs)

    raise FitnessApiException(
        f"Unsupported content type '{content_type or 'unknown'}'.",
        status_code=415,
    )


def parse_body(model: type[ModelT]) -> Callable[[Request], Any]:
    """
    Dependency factory validating the request body against `model`.

    Validation failures are raised as RequestValidationError so they get
    the same 422 response as query/path errors.
    """

    async def dependency(request: Request) -> ModelT:
        payload = await read_body(request)
        try:
            return model.model_validate(payload)
        except ValidationError as exc:
            errors = [
                {**error, "loc": ("body", *error.get("loc", ()))}
                for error in exc.errors(include_url=False)
            ]
            raise RequestValidationError(errors, body=payload)

    return dependency
