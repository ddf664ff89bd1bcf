"""
Component entity models.

A component is a reusable piece of UI: CSS plus optional HTML markup used for
the live preview. Premium components require an active subscription to view.
"""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from sqlalchemy import Column, Text
from sqlmodel import Field

from ..base import Base, utc_now

DEFAULT_CATEGORY = "Outros"
DEFAULT_COLOR = "#6366F1"


class Component(Base, table=True):
    """CSS/HTML component in the catalogue.

    Table: components
    """

    __tablename__ = "components"
    __table_args__ = ({"extend_existing": True},)

    id: Optional[int] = Field(default=None, primary_key=True)

    name: str = Field(max_length=100, index=True)
    description: Optional[str] = Field(default=None, sa_column=Column(Text, nullable=True))
    category: str = Field(default=DEFAULT_CATEGORY, max_length=64, index=True)
    color: str = Field(default=DEFAULT_COLOR, max_length=7)
    css_content: str = Field(sa_column=Column(Text, nullable=False))
    html_content: Optional[str] = Field(default=None, sa_column=Column(Text, nullable=True))

    requires_subscription: bool = Field(default=False, index=True)
    user_id: Optional[int] = Field(default=None, foreign_key="users.id", index=True)

    created_at: datetime = Field(default_factory=utc_now)
    updated_at: datetime = Field(default_factory=utc_now, sa_column_kwargs={"onupdate": utc_now})

    def __repr__(self) -> str:
        return f"Component(id={self.id}, name={self.name}, category={self.category})"
