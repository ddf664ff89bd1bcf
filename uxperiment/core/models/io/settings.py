"""
Site setting I/O models for API requests and responses.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class SettingRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    section: str
    key: str
    value: str


class SettingCreate(BaseModel):
    section: str = Field(min_length=1, max_length=64)
    key: str = Field(min_length=1, max_length=128)
    value: str = ""


class SettingUpdate(BaseModel):
    value: str
