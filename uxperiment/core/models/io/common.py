"""
Shared I/O building blocks.
"""

from __future__ import annotations

from decimal import Decimal
from typing import Any

from pydantic import BaseModel, Field


def decimal_to_float(value: Any) -> Any:
    """Money columns are Decimal in the database and plain numbers on the wire."""
    if isinstance(value, Decimal):
        return float(value)
    return value


class MessageResponse(BaseModel):
    """Plain acknowledgement returned by some delete/maintenance endpoints."""

    message: str = Field(description="Human-readable outcome")
