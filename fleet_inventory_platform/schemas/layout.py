"""
Pydantic schemas for layout templates, seat diagrams and their spaces.
"""

from datetime import datetime
from typing import Any, Dict, List, Optional
from uuid import UUID

from pydantic import BaseModel, Field, ConfigDict, field_validator, model_validator

from ..models.space import SpaceType, SeatType


class Position(BaseModel):
    """Grid coordinates of a space: 0-based column, 1-based row."""
    x: int = Field(..., description="Column index (0-based, the aisle is a column too)")
    y: int = Field(..., description="Row number (1-based)")


class FloorConfiguration(BaseModel):
    """Seat grid of one floor."""
    floor_number: int = Field(..., ge=1, description="Floor number (1-based)")
    num_rows: int = Field(..., ge=0, description="Number of rows on the floor")
    seats_left: int = Field(..., ge=0, description="Seats left of the aisle")
    seats_right: int = Field(..., ge=0, description="Seats right of the aisle")


def _unique_floor_numbers(floors: Optional[List[FloorConfiguration]]) -> Optional[List[FloorConfiguration]]:
    if floors is None:
        return floors
    numbers = [floor.floor_number for floor in floors]
    if len(numbers) != len(set(numbers)):
        raise ValueError("floor_number must be unique within seats_per_floor")
    return floors


class LayoutTemplateBase(BaseModel):
    """Base layout template schema with common fields."""
    name: str = Field(..., min_length=1, max_length=255, description="Template name")
    description: Optional[str] = Field(None, description="Template description")
    max_capacity: int = Field(0, ge=0, description="Maximum passenger capacity")
    num_floors: int = Field(1, ge=1, le=4, description="Number of floors")
    seats_per_floor: List[FloorConfiguration] = Field(
        ...,
        min_length=1,
        description="Seat grid for each floor"
    )
    is_factory_default: bool = Field(False, description="Whether this is a factory default layout")

    @field_validator("seats_per_floor")
    @classmethod
    def validate_unique_floors(cls, v):
        return _unique_floor_numbers(v)


class LayoutTemplateCreate(LayoutTemplateBase):
    """Schema for creating a layout template. Seats are generated from ``seats_per_floor``."""
    pass


class LayoutTemplateUpdate(BaseModel):
    """Schema for updating a layout template."""
    name: Optional[str] = Field(None, min_length=1, max_length=255)
    description: Optional[str] = None
    max_capacity: Optional[int] = Field(None, ge=0)
    num_floors: Optional[int] = Field(None, ge=1, le=4)
    seats_per_floor: Optional[List[FloorConfiguration]] = Field(None, min_length=1)
    is_factory_default: Optional[bool] = None
    active: Optional[bool] = None

    @field_validator("seats_per_floor")
    @classmethod
    def validate_unique_floors(cls, v):
        return _unique_floor_numbers(v)


class LayoutTemplateResponse(LayoutTemplateBase):
    """Schema for layout template response."""
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    total_seats: int
    active: bool
    created_at: datetime
    updated_at: datetime


class SeatDiagramCreate(BaseModel):
    """Schema for cloning a seat diagram from a layout template."""
    layout_template_id: UUID = Field(..., description="Template to clone")
    name: Optional[str] = Field(
        None,
        min_length=1,
        max_length=255,
        description="Diagram name (defaults to the template name)"
    )


class SeatDiagramResponse(BaseModel):
    """Schema for seat diagram response."""
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    layout_template_id: Optional[UUID]
    name: str
    description: Optional[str]
    max_capacity: int
    num_floors: int
    seats_per_floor: List[FloorConfiguration]
    total_seats: int
    is_factory_default: bool
    is_modified: bool
    active: bool
    created_at: datetime
    updated_at: datetime


class SpaceConfigurationInput(BaseModel):
    """
    Desired state of one layout cell in a batch edit.

    ``floor_number`` and ``position`` are optional here so that missing
    identification is reported by the layout validator together with the
    rest of the batch.
    """
    floor_number: Optional[int] = Field(None, description="Floor number (1-based)")
    position: Optional[Position] = Field(None, description="Grid position")
    space_type: SpaceType = Field(SpaceType.SEAT, description="Cell type")
    seat_number: Optional[str] = Field(None, max_length=20, description="Seat number (seats only)")
    seat_type: Optional[SeatType] = Field(None, description="Seat class (seats only)")
    amenities: Optional[List[str]] = Field(None, description="Seat amenities")
    reclinement_angle: Optional[int] = Field(None, ge=0, le=180, description="Reclinement angle in degrees (seats only)")
    active: Optional[bool] = Field(None, description="Whether the cell is active (defaults to true)")

    @model_validator(mode="after")
    def validate_seat_only_fields(self):
        if self.space_type != SpaceType.SEAT:
            carried = [
                name for name in ("seat_number", "seat_type", "reclinement_angle")
                if getattr(self, name) is not None
            ]
            if carried:
                raise ValueError(
                    f"{', '.join(carried)} only allowed for seat spaces, got {self.space_type.value}"
                )
        return self


class SpaceBatchRequest(BaseModel):
    """Schema for a batch edit of a layout's spaces."""
    spaces: List[SpaceConfigurationInput] = Field(
        ...,
        description="Complete desired set of cells; cells not listed are deactivated"
    )


class SpaceResponse(BaseModel):
    """Schema for space response."""
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    floor_number: int
    position: Position
    space_type: SpaceType
    seat_number: Optional[str]
    seat_type: Optional[SeatType]
    reclinement_angle: Optional[int]
    amenities: List[str]
    meta: Dict[str, Any]
    active: bool


class ReconciliationResult(BaseModel):
    """Outcome of a batch edit."""
    created: int
    updated: int
    deactivated: int
    total_active_seats: int


class SeatDiagramSyncSummary(BaseModel):
    """Changes applied to one seat diagram during a template sync."""
    seat_diagram_id: UUID
    created: int
    updated: int
    deleted: int


class SeatDiagramSyncFailure(BaseModel):
    """A seat diagram whose sync was rolled back."""
    seat_diagram_id: UUID
    error: str


class TemplateSyncResult(BaseModel):
    """Outcome of pushing a template to its seat diagrams."""
    layout_template_id: UUID
    synced: List[SeatDiagramSyncSummary] = Field(default_factory=list)
    skipped: List[UUID] = Field(default_factory=list, description="Modified diagrams left untouched")
    failed: List[SeatDiagramSyncFailure] = Field(default_factory=list)


class TemplateSyncQueued(BaseModel):
    """Response when a template sync runs in the background."""
    layout_template_id: UUID
    task_id: str
    status: str = "queued"
