"""Uniform ``{success, message?, data?, error?, details?}`` responses."""
from typing import Any, Optional

from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse

from fieldforce.config import settings


def ok(data: Any = None, message: Optional[str] = None, status_code: int = 200, **extra: Any) -> JSONResponse:
    body: dict[str, Any] = {"success": True}
    if message is not None:
        body["message"] = message
    body["data"] = data
    body.update(extra)
    return JSONResponse(status_code=status_code, content=jsonable_encoder(body))


def fail(error: str, status_code: int, details: Any = None) -> JSONResponse:
    body: dict[str, Any] = {"success": False, "error": error}
    if details is not None:
        body["details"] = details
    return JSONResponse(status_code=status_code, content=jsonable_encoder(body))


def internal_error(error: str, exc: BaseException) -> JSONResponse:
    details = str(exc) if settings.expose_error_details else None
    return fail(error, 500, details)


def violations(errors: list[dict], include_received: bool = False) -> list[dict]:
    """Flatten pydantic error dicts into ``{field, message, code}`` items."""
    items = []
    for err in errors:
        item = {
            "field": ".".join(str(part) for part in err.get("loc", ())),
            "message": err.get("msg", ""),
            "code": err.get("type", ""),
        }
        if include_received:
            item["received"] = None if err.get("type") == "missing" else err.get("input")
        items.append(item)
    return items
