"""
HTTP response helpers (error contract + success envelopes).

- ok(data, status=200, headers=None)
- created(data, location=None)
- no_content()
- error_response(errors, correlation_id=None)
- result_response(result, ...)
"""

from __future__ import annotations

from typing import Any, Callable, Dict, Optional, Sequence

from starlette.responses import JSONResponse, Response

from devkit.domain import Error, ErrorKind, Result
from devkit.domain.errors import ERROR_CODES


def ok(data: Any, status: int = 200, headers: Optional[Dict[str, str]] = None) -> JSONResponse:
    return JSONResponse({"data": data}, status_code=status, headers=headers or {})


def created(data: Any, location: Optional[str] = None) -> JSONResponse:
    headers = {}
    if location:
        headers["Location"] = location
    return JSONResponse({"data": data}, status_code=201, headers=headers)


def no_content() -> Response:
    return Response(status_code=204)


def error_payload(errors: Sequence[Error], correlation_id: Optional[str] = None) -> Dict[str, Any]:
    """Problem body keyed on the first error's kind, listing every error."""
    kind = errors[0].kind if errors else ErrorKind.UNEXPECTED
    message = errors[0].message if len(errors) == 1 else ERROR_CODES[kind]["message"]
    return {
        "code": kind.code,
        "message": message,
        "details": {"errors": [error.to_dict() for error in errors]},
        "correlation_id": correlation_id or "",
    }


def error_response(errors: Sequence[Error], correlation_id: Optional[str] = None) -> JSONResponse:
    kind = errors[0].kind if errors else ErrorKind.UNEXPECTED
    return JSONResponse({"error": error_payload(errors, correlation_id)}, status_code=kind.http_status)


def result_response(
    result: Result[Any],
    *,
    status: int = 200,
    serialize: Optional[Callable[[Any], Any]] = None,
    location: Optional[str] = None,
    correlation_id: Optional[str] = None,
) -> Response:
    """
    Map a Result onto an HTTP response.

    Success: 204 when status is 204, 201 (with Location) when status is 201,
    otherwise ok(). Failure: status of the first error's kind.
    """
    if result.is_failure():
        return error_response(result.errors, correlation_id)
    if status == 204:
        return no_content()
    data = serialize(result.value) if serialize else result.value
    if status == 201:
        return created(data, location)
    return ok(data, status=status)
