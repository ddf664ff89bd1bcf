"""
Site setting entity models.

Key/value configuration editable from the admin dashboard, grouped by
section (e.g. ``general.siteName``, ``appearance.primaryColor``).
"""

from __future__ import annotations

from typing import Optional

from sqlalchemy import Column, Text, UniqueConstraint
from sqlmodel import Field

from ..base import Base


class Setting(Base, table=True):
    """Site setting.

    Table: settings
    """

    __tablename__ = "settings"
    __table_args__ = (
        UniqueConstraint("section", "key", name="uq_settings_section_key"),
        {"extend_existing": True},
    )

    id: Optional[int] = Field(default=None, primary_key=True)

    section: str = Field(max_length=64, index=True)
    key: str = Field(max_length=128)
    value: str = Field(default="", sa_column=Column(Text, nullable=False))

    def __repr__(self) -> str:
        return f"Setting({self.section}.{self.key})"
