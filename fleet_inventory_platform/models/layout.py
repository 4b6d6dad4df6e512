"""
Layout models: reusable layout templates and the per-bus seat diagrams cloned from them.
"""

import uuid
from typing import Any, Dict, List, Optional

from sqlalchemy import JSON, Boolean, CheckConstraint, ForeignKey, Integer, String, Text, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from .base import Base


class LayoutMixin:
    """Shape fields shared by templates and seat diagrams."""

    name: Mapped[str] = mapped_column(String(255), nullable=False, index=True)
    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    max_capacity: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    num_floors: Mapped[int] = mapped_column(Integer, nullable=False, default=1)

    # List of {"floor_number", "num_rows", "seats_left", "seats_right"}
    seats_per_floor: Mapped[List[Dict[str, Any]]] = mapped_column(JSON, nullable=False, default=list)

    total_seats: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    is_factory_default: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)


class LayoutTemplate(LayoutMixin, Base):
    """Reusable seat-layout blueprint."""

    __tablename__ = "layout_templates"

    __table_args__ = (
        CheckConstraint("num_floors >= 1", name="ck_layout_templates_num_floors_positive"),
        CheckConstraint("total_seats >= 0", name="ck_layout_templates_total_seats_non_negative"),
    )

    def __repr__(self) -> str:
        return f"<LayoutTemplate(id={self.id}, name='{self.name}', total_seats={self.total_seats})>"


class SeatDiagram(LayoutMixin, Base):
    """Operational seat layout of one bus, cloned from a template."""

    __tablename__ = "seat_diagrams"

    layout_template_id: Mapped[Optional[uuid.UUID]] = mapped_column(
        Uuid(as_uuid=True),
        ForeignKey("layout_templates.id", ondelete="SET NULL"),
        nullable=True,
        index=True
    )

    # Set once an operator edits this diagram's own spaces; excludes it from template syncs
    is_modified: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False, index=True)

    __table_args__ = (
        CheckConstraint("num_floors >= 1", name="ck_seat_diagrams_num_floors_positive"),
        CheckConstraint("total_seats >= 0", name="ck_seat_diagrams_total_seats_non_negative"),
    )

    def __repr__(self) -> str:
        return (
            f"<SeatDiagram(id={self.id}, template_id={self.layout_template_id}, "
            f"total_seats={self.total_seats}, is_modified={self.is_modified})>"
        )
