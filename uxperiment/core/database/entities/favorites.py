"""
Favorite entity models.

A favorite marks a component as bookmarked by a user. The pair
(user_id, component_id) is unique.
"""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from sqlalchemy import UniqueConstraint
from sqlmodel import Field

from ..base import Base, utc_now


class Favorite(Base, table=True):
    """User bookmark on a component.

    Table: favorites
    """

    __tablename__ = "favorites"
    __table_args__ = (
        UniqueConstraint("user_id", "component_id", name="uq_favorites_user_component"),
        {"extend_existing": True},
    )

    id: Optional[int] = Field(default=None, primary_key=True)

    user_id: int = Field(foreign_key="users.id", index=True)
    component_id: int = Field(foreign_key="components.id", index=True)

    created_at: datetime = Field(default_factory=utc_now, index=True)

    def __repr__(self) -> str:
        return f"Favorite(id={self.id}, user_id={self.user_id}, component_id={self.component_id})"
