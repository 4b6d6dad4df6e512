"""
Space models: the individual cells (seats, hallways, bathrooms, ...) of a layout.
"""

import enum
import uuid
from typing import Any, Dict, List, Optional

from sqlalchemy import JSON, Boolean, CheckConstraint, Enum, ForeignKey, Integer, String, UniqueConstraint, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from .base import Base
from ..utils.position import position_key


class SpaceType(str, enum.Enum):
    """Enumeration for layout cell types."""
    SEAT = "seat"
    HALLWAY = "hallway"
    BATHROOM = "bathroom"
    EMPTY = "empty"
    STAIRS = "stairs"


class SeatType(str, enum.Enum):
    """Enumeration for seat classes."""
    REGULAR = "regular"
    PREMIUM = "premium"
    VIP = "vip"
    BUSINESS = "business"
    EXECUTIVE = "executive"


def _enum_values(enum_cls):
    return [member.value for member in enum_cls]


# Seat-only columns stay empty for every other space type
SEAT_FIELDS_ONLY_ON_SEATS = (
    "space_type = 'seat' OR "
    "(seat_number IS NULL AND seat_type IS NULL AND reclinement_angle IS NULL)"
)


class SpaceMixin:
    """Columns shared by template spaces and seat diagram spaces."""

    floor_number: Mapped[int] = mapped_column(Integer, nullable=False)
    position_x: Mapped[int] = mapped_column(Integer, nullable=False)
    position_y: Mapped[int] = mapped_column(Integer, nullable=False)

    space_type: Mapped[SpaceType] = mapped_column(
        Enum(SpaceType, native_enum=False, length=20, values_callable=_enum_values),
        nullable=False,
        default=SpaceType.SEAT
    )

    # Seat-only attributes
    seat_number: Mapped[Optional[str]] = mapped_column(String(20), nullable=True)
    seat_type: Mapped[Optional[SeatType]] = mapped_column(
        Enum(SeatType, native_enum=False, length=20, values_callable=_enum_values),
        nullable=True
    )
    reclinement_angle: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)

    amenities: Mapped[List[str]] = mapped_column(JSON, nullable=False, default=list)
    meta: Mapped[Dict[str, Any]] = mapped_column(JSON, nullable=False, default=dict)
    active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True, index=True)

    @property
    def position(self) -> Dict[str, int]:
        return {"x": self.position_x, "y": self.position_y}

    @property
    def position_key(self) -> str:
        return position_key(self.floor_number, self.position_x, self.position_y)

    @property
    def is_seat(self) -> bool:
        return self.space_type == SpaceType.SEAT


class TemplateSpace(SpaceMixin, Base):
    """A cell of a layout template."""

    __tablename__ = "template_spaces"

    layout_template_id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True),
        ForeignKey("layout_templates.id", ondelete="CASCADE"),
        nullable=False,
        index=True
    )

    __table_args__ = (
        UniqueConstraint(
            "layout_template_id", "floor_number", "position_x", "position_y",
            name="uq_template_spaces_position"
        ),
        CheckConstraint(SEAT_FIELDS_ONLY_ON_SEATS, name="ck_template_spaces_seat_fields"),
        CheckConstraint("floor_number >= 1", name="ck_template_spaces_floor_positive"),
    )

    def __repr__(self) -> str:
        return (
            f"<TemplateSpace(id={self.id}, template_id={self.layout_template_id}, "
            f"key='{self.position_key}', type={self.space_type.value})>"
        )


class SeatDiagramSpace(SpaceMixin, Base):
    """A cell of a bus seat diagram."""

    __tablename__ = "seat_diagram_spaces"

    seat_diagram_id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True),
        ForeignKey("seat_diagrams.id", ondelete="CASCADE"),
        nullable=False,
        index=True
    )

    __table_args__ = (
        UniqueConstraint(
            "seat_diagram_id", "floor_number", "position_x", "position_y",
            name="uq_seat_diagram_spaces_position"
        ),
        CheckConstraint(SEAT_FIELDS_ONLY_ON_SEATS, name="ck_seat_diagram_spaces_seat_fields"),
        CheckConstraint("floor_number >= 1", name="ck_seat_diagram_spaces_floor_positive"),
    )

    def __repr__(self) -> str:
        return (
            f"<SeatDiagramSpace(id={self.id}, seat_diagram_id={self.seat_diagram_id}, "
            f"key='{self.position_key}', type={self.space_type.value})>"
        )
