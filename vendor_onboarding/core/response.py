"""Standardized JSON response envelope helpers.

Every endpoint answers with ``{status, info, data, startDT, endDT, tat}``.
The two variants are separate frozen models tagged by ``status`` so an
envelope is built once, complete, and never flipped from success to error.
"""

from __future__ import annotations

import time
from datetime import datetime, timezone
from typing import Any, Generic, Literal, TypeVar

from fastapi import Request
from pydantic import BaseModel, Field

T = TypeVar("T")


class SuccessEnvelope(BaseModel, Generic[T]):
    """`{ status: "success", info, data: {...}, startDT, endDT, tat }`"""

    status: Literal["success"] = "success"
    info: str
    data: T
    start_dt: datetime = Field(alias="startDT")
    end_dt: datetime = Field(alias="endDT")
    tat: float = Field(description="Elapsed seconds between startDT and endDT")

    model_config = {"populate_by_name": True, "frozen": True}


class ErrorEnvelope(BaseModel):
    """`{ status: "error", info, data: null, startDT, endDT, tat }`"""

    status: Literal["error"] = "error"
    info: str
    data: None = None
    start_dt: datetime = Field(alias="startDT")
    end_dt: datetime = Field(alias="endDT")
    tat: float

    model_config = {"populate_by_name": True, "frozen": True}


def _timing(request: Request) -> dict[str, Any]:
    """Return startDT / endDT / tat for the request being answered."""
    end_dt = datetime.now(timezone.utc)
    start_dt = getattr(request.state, "started_at", None) or end_dt
    start_mono = getattr(request.state, "started_monotonic", None)
    tat = round(time.monotonic() - start_mono, 3) if start_mono is not None else 0.0
    return {"start_dt": start_dt, "end_dt": end_dt, "tat": tat}


def success(request: Request, data: T, info: str) -> SuccessEnvelope[T]:
    return SuccessEnvelope[Any](info=info, data=data, **_timing(request))


def error_envelope(request: Request, info: str) -> dict:
    """Build a JSON-ready error envelope for use with JSONResponse."""
    return ErrorEnvelope(info=info, **_timing(request)).model_dump(by_alias=True, mode="json")
