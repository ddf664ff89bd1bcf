"""
Component view entity models.

Append-only log of component previews. Anonymous visitors are tracked by an
optional client session id; views outlive the user that made them.
"""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from sqlmodel import Field

from ..base import Base, utc_now


class ComponentView(Base, table=True):
    """Single view of a component.

    Table: component_views
    """

    __tablename__ = "component_views"
    __table_args__ = ({"extend_existing": True},)

    id: Optional[int] = Field(default=None, primary_key=True)

    component_id: int = Field(foreign_key="components.id", index=True)
    user_id: Optional[int] = Field(default=None, index=True)
    session_id: Optional[str] = Field(default=None, max_length=128)

    timestamp: datetime = Field(default_factory=utc_now, index=True)

    def __repr__(self) -> str:
        return f"ComponentView(id={self.id}, component_id={self.component_id}, timestamp={self.timestamp})"
