"""
Pydantic schemas for pricing zones.
"""

from datetime import datetime
from decimal import Decimal
from typing import List, Optional
from uuid import UUID

from pydantic import BaseModel, Field, ConfigDict, field_validator


def _check_row_numbers(rows: Optional[List[int]]) -> Optional[List[int]]:
    if rows is None:
        return rows
    if any(row < 1 for row in rows):
        raise ValueError("row_numbers must be positive")
    if len(rows) != len(set(rows)):
        raise ValueError("row_numbers must not repeat")
    return rows


def _check_name(name: Optional[str]) -> Optional[str]:
    if name is None:
        return name
    if not name.strip():
        raise ValueError("Zone name cannot be blank")
    return name.strip()


class ZoneBase(BaseModel):
    """Base zone schema with common fields."""
    name: str = Field(..., min_length=1, max_length=100, description="Zone name")
    row_numbers: List[int] = Field(..., min_length=1, description="Rows covered by the zone")
    price_multiplier: Decimal = Field(..., gt=0, description="Price multiplier for seats in the zone")

    @field_validator("name")
    @classmethod
    def validate_name(cls, v):
        return _check_name(v)

    @field_validator("row_numbers")
    @classmethod
    def validate_row_numbers(cls, v):
        return _check_row_numbers(v)


class ZoneCreate(ZoneBase):
    """Schema for creating a zone."""
    pass


class ZoneUpdate(BaseModel):
    """Schema for updating a zone."""
    name: Optional[str] = Field(None, min_length=1, max_length=100)
    row_numbers: Optional[List[int]] = Field(None, min_length=1)
    price_multiplier: Optional[Decimal] = Field(None, gt=0)

    @field_validator("name")
    @classmethod
    def validate_name(cls, v):
        return _check_name(v)

    @field_validator("row_numbers")
    @classmethod
    def validate_row_numbers(cls, v):
        return _check_row_numbers(v)


class ZoneResponse(ZoneBase):
    """Schema for zone response."""
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    layout_id: UUID
    created_at: datetime
    updated_at: datetime
