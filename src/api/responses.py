"""
HTTP protocol helpers shared by the public and admin routes.

Uniform `{success, error}` envelope, security headers, method and media
type guards, client IP resolution and JSON body parsing.
"""

from __future__ import annotations

import json
from collections.abc import Mapping
from typing import Any
from uuid import UUID

from fastapi import Depends, Request
from fastapi.responses import JSONResponse, Response

from src.api.deps import get_rules
from src.core.errors import ErrorKind, PipelineError
from src.rules.models import Rules

# Routes register every method so unsupported ones get the envelope, not a bare 405
ALL_METHODS = ["GET", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"]

INVALID_REQUEST = "Invalid request"
METHOD_NOT_ALLOWED = "Method not allowed"
UNSUPPORTED_MEDIA_TYPE = "Unsupported Media Type"

_IPV4_MAPPED_PREFIX = "::ffff:"


def get_security_headers(rules: Rules = Depends(get_rules)) -> dict[str, str]:
    return dict(rules.security.response_headers)


def get_client_ip(request: Request) -> str:
    """
    Extract the client IP: first X-Forwarded-For hop, then X-Real-IP, then
    the socket peer. IPv4-mapped IPv6 addresses are reduced to IPv4.
    """
    header = request.headers.get("X-Forwarded-For") or request.headers.get("X-Real-IP")
    if header:
        ip = header.split(",")[0].strip()
    else:
        ip = request.client.host if request.client else ""
    if ip.startswith(_IPV4_MAPPED_PREFIX):
        ip = ip[len(_IPV4_MAPPED_PREFIX) :]
    return ip


def json_response(
    body: Mapping[str, Any],
    status_code: int = 200,
    headers: Mapping[str, str] | None = None,
) -> JSONResponse:
    return JSONResponse(content=dict(body), status_code=status_code, headers=dict(headers or {}))


def success_response(headers: Mapping[str, str] | None = None, **extra: Any) -> JSONResponse:
    return json_response({"success": True, **extra}, 200, headers)


def no_content(headers: Mapping[str, str] | None = None) -> Response:
    return Response(status_code=204, headers=dict(headers or {}))


def error_response(
    error: PipelineError,
    headers: Mapping[str, str] | None = None,
    body_key: str = "success",
) -> JSONResponse:
    """Render a classified error; rate-limit errors carry Retry-After."""
    out = dict(headers or {})
    if error.kind is ErrorKind.RATE_LIMITED and error.retry_after_seconds is not None:
        out["Retry-After"] = str(error.retry_after_seconds)
    if error.kind is ErrorKind.UNAUTHORIZED:
        out.setdefault("WWW-Authenticate", "Bearer")
    body: dict[str, Any] = {body_key: False, "error": error.message}
    return json_response(body, error.status_code, out)


def failure_response(
    message: str,
    status_code: int = 500,
    headers: Mapping[str, str] | None = None,
) -> JSONResponse:
    return json_response({"success": False, "error": message}, status_code, headers)


def method_not_allowed(
    *allowed: str,
    headers: Mapping[str, str] | None = None,
    body_key: str = "success",
) -> JSONResponse:
    out = {**dict(headers or {}), "Allow": ", ".join(allowed)}
    return json_response({body_key: False, "error": METHOD_NOT_ALLOWED}, 405, out)


def require_json_content_type(request: Request) -> None:
    """
    Raises:
        PipelineError: UNSUPPORTED_MEDIA_TYPE
    """
    if "application/json" not in request.headers.get("content-type", ""):
        raise PipelineError(ErrorKind.UNSUPPORTED_MEDIA_TYPE, UNSUPPORTED_MEDIA_TYPE)


async def read_json(request: Request) -> Any:
    """
    Parse the request body as JSON. An empty body parses as None.

    Raises:
        PipelineError: VALIDATION for malformed JSON
    """
    raw = await request.body()
    if not raw.strip():
        return None
    try:
        return json.loads(raw)
    except (ValueError, UnicodeDecodeError):
        raise PipelineError.validation(INVALID_REQUEST) from None


def query_int(request: Request, name: str, default: int) -> int:
    """
    Raises:
        PipelineError: VALIDATION when the parameter is not an integer
    """
    raw = request.query_params.get(name)
    if raw is None or raw == "":
        return default
    try:
        return int(raw)
    except ValueError:
        raise PipelineError.validation(f"{name} must be an integer") from None


def parse_uuid(value: Any, message: str) -> UUID:
    """
    Raises:
        PipelineError: VALIDATION with `message` when value is not a UUID string
    """
    if not isinstance(value, str):
        raise PipelineError.validation(message)
    try:
        return UUID(value)
    except ValueError:
        raise PipelineError.validation(message) from None
