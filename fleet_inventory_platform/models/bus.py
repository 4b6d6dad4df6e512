"""
Bus model: a vehicle carrying its own seat diagram.
"""

import enum
import uuid
from typing import Optional

from sqlalchemy import Boolean, Enum, ForeignKey, String, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from .base import Base


class BusStatus(enum.Enum):
    """Enumeration for bus operational status."""
    ACTIVE = "active"
    MAINTENANCE = "maintenance"
    OUT_OF_SERVICE = "out_of_service"
    RETIRED = "retired"


class Bus(Base):
    """Bus model linking a vehicle to its seat diagram."""

    __tablename__ = "buses"

    registration_number: Mapped[str] = mapped_column(String(50), nullable=False, unique=True, index=True)
    economic_number: Mapped[Optional[str]] = mapped_column(String(50), nullable=True)

    status: Mapped[BusStatus] = mapped_column(
        Enum(BusStatus, native_enum=False, length=20),
        default=BusStatus.ACTIVE,
        nullable=False
    )

    layout_template_id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True),
        ForeignKey("layout_templates.id", ondelete="RESTRICT"),
        nullable=False,
        index=True
    )
    seat_diagram_id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True),
        ForeignKey("seat_diagrams.id", ondelete="RESTRICT"),
        nullable=False,
        unique=True
    )

    active: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)

    def __repr__(self) -> str:
        return f"<Bus(id={self.id}, registration_number='{self.registration_number}')>"
