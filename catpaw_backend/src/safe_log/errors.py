"""
Error sanitizing for log output.

sanitize_error() reduces an exception to a small, bounded dict: its type name,
message, status fields, and a filtered view of an attached HTTP response and
request config. Auth headers, request bodies and raw response payloads never
make it into the result; response data and headers are summarized.

Errors are read through attributes or mapping keys, so both exceptions raised
by HTTP clients (httpx, requests) and plain JSON-shaped failure payloads are
classified the same way by http_status() and is_auth_error().
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Optional

import httpx
from pydantic import BaseModel

from .summarize import summarize_value

AUTH_STATUS = 401
# Provider-specific "login expired" code reported instead of an HTTP status.
AUTH_ERROR_CODE = 31001


# PUBLIC_INTERFACE
class RequestSummary(BaseModel):
    """Only the non-secret parts of an HTTP request config."""
    url: Any = None
    method: Any = None
    timeout: Any = None


# PUBLIC_INTERFACE
class ResponseSummary(BaseModel):
    """Status plus summarized data/headers of an HTTP response."""
    status: Any = None
    data: Any = None
    headers: Any = None


# PUBLIC_INTERFACE
class ErrorSummary(BaseModel):
    """Normalized, logging-safe representation of an exception."""
    name: str
    message: Any = None
    code: Any = None
    status: Any = None
    status_code: Any = None
    response: Optional[ResponseSummary] = None
    config: Optional[RequestSummary] = None
    request: Optional[RequestSummary] = None


def _field(obj: Any, name: str) -> Any:
    """Read name from a mapping key or an attribute; None when absent."""
    if obj is None:
        return None
    if isinstance(obj, Mapping):
        return obj.get(name)
    try:
        return getattr(obj, name, None)
    except RuntimeError:
        # httpx raises RuntimeError from .request/.response when they were never set
        return None


def _response_status(response: Any) -> Any:
    status = _field(response, "status")
    if status is None:
        status = _field(response, "status_code")
    return status


def _response_data(response: Any) -> Any:
    if isinstance(response, httpx.Response):
        try:
            return response.json()
        except (ValueError, httpx.ResponseNotRead):
            pass
        try:
            return response.text
        except httpx.ResponseNotRead:
            return None
    return _field(response, "data")


def _summarize_request(obj: Any) -> Optional[RequestSummary]:
    if obj is None:
        return None
    if isinstance(obj, httpx.Request):
        url: Any = obj.url
        method: Any = obj.method
        timeout = obj.extensions.get("timeout")
    else:
        url = _field(obj, "url")
        method = _field(obj, "method")
        timeout = _field(obj, "timeout")
    return RequestSummary(
        url=summarize_value(str(url)) if url is not None else None,
        method=summarize_value(method),
        timeout=summarize_value(timeout),
    )


def _summarize_response(response: Any) -> Optional[ResponseSummary]:
    if response is None:
        return None
    return ResponseSummary(
        status=summarize_value(_response_status(response)),
        data=summarize_value(_response_data(response)),
        headers=summarize_value(_field(response, "headers")),
    )


# PUBLIC_INTERFACE
def is_error_like(value: Any) -> bool:
    """Return True if value is an exception instance."""
    return isinstance(value, BaseException)


# PUBLIC_INTERFACE
def http_status(err: Any) -> Optional[Any]:
    """Return the HTTP status carried by err, its response, or None.

    Checks err.status, err.status_code / statusCode, then the attached
    response's status or status_code.
    """
    for name in ("status", "status_code", "statusCode"):
        value = _field(err, name)
        if value is not None:
            return value
    response = _field(err, "response")
    if response is not None:
        return _response_status(response)
    return None


# PUBLIC_INTERFACE
def is_auth_error(err: Any) -> bool:
    """Return True when err describes an authorization failure.

    An error is auth-classified when any of its status fields equals 401, its
    numeric code equals AUTH_ERROR_CODE, or its response status equals 401.
    """
    if err is None:
        return False
    for name in ("status", "status_code", "statusCode"):
        if _field(err, name) == AUTH_STATUS:
            return True
    code = _field(err, "code")
    if isinstance(code, (int, float)) and not isinstance(code, bool) and code == AUTH_ERROR_CODE:
        return True
    response = _field(err, "response")
    return response is not None and _response_status(response) == AUTH_STATUS


# PUBLIC_INTERFACE
def sanitize_error(err: Any) -> Any:
    """Return a bounded, secret-free representation of err.

    Non-exception input is delegated to summarize_value(). Exceptions become a
    dict with name and message, the status fields that are present, and
    filtered response / config / request views.
    """
    if not is_error_like(err):
        return summarize_value(err)

    status_code = _field(err, "status_code")
    if status_code is None:
        status_code = _field(err, "statusCode")
    summary = ErrorSummary(
        name=type(err).__name__,
        message=summarize_value(str(err)),
        code=summarize_value(_field(err, "code")),
        status=summarize_value(_field(err, "status")),
        status_code=summarize_value(status_code),
        response=_summarize_response(_field(err, "response")),
        config=_summarize_request(_field(err, "config")),
        request=_summarize_request(_field(err, "request")),
    )
    return summary.model_dump(exclude_none=True)
