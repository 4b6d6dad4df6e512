"""
Pydantic schemas for buses.
"""

from datetime import datetime
from typing import Optional
from uuid import UUID

from pydantic import BaseModel, Field, ConfigDict, field_validator


class BusCreate(BaseModel):
    """Schema for registering a bus. Its seat diagram is cloned from the template."""
    registration_number: str = Field(..., min_length=1, max_length=50, description="Registration number")
    economic_number: Optional[str] = Field(None, max_length=50, description="Fleet economic number")
    layout_template_id: UUID = Field(..., description="Layout template the bus is built on")

    @field_validator("registration_number")
    @classmethod
    def validate_registration_number(cls, v):
        if not v.strip():
            raise ValueError("Registration number cannot be blank")
        return v.strip()


class BusResponse(BaseModel):
    """Schema for bus response."""
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    registration_number: str
    economic_number: Optional[str]
    status: str
    layout_template_id: UUID
    seat_diagram_id: UUID
    active: bool
    created_at: datetime
    updated_at: datetime

    @field_validator("status", mode="before")
    @classmethod
    def validate_status(cls, v):
        return getattr(v, "value", v)
