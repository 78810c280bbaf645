from typing import Any, List, Optional

from fastapi.responses import JSONResponse


def envelope(
    data: Any = None,
    message: Optional[str] = None,
    status_code: int = 200,
    **extra: Any,
) -> JSONResponse:
    body = {"success": True}
    if message:
        body["message"] = message
    body["data"] = data
    body.update(extra)
    return JSONResponse(status_code=status_code, content=body)


def error_envelope(
    status_code: int,
    error: str,
    message: Optional[str] = None,
    details: Optional[List[str]] = None,
) -> JSONResponse:
    body = {"success": False, "error": error}
    if message:
        body["message"] = message
    if details:
        body["details"] = details
    return JSONResponse(status_code=status_code, content=body)
