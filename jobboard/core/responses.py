# jobboard/core/responses.py
from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Generic, TypeVar

from fastapi import Request
from fastapi.responses import JSONResponse
from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

T = TypeVar("T")


class CamelModel(BaseModel):
    # JSON em camelCase (vacancyId, maxApplicants, ...); snake_case também é aceito na entrada
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


class ApiResponse(BaseModel, Generic[T]):
    success: bool = True
    data: T
    message: str = "Operation successful"


def ok(data: Any, message: str = "Operation successful") -> dict[str, Any]:
    return {"success": True, "data": data, "message": message}


def error_response(
    request: Request,
    status_code: int,
    kind: str,
    message: Any,
) -> JSONResponse:
    body = {
        "success": False,
        "error": kind,
        "message": message,
        "statusCode": status_code,
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "path": request.url.path,
        "method": request.method,
    }
    return JSONResponse(status_code=status_code, content=body)
