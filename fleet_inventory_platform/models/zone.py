"""
Zone models: named row groups carrying a price multiplier.
"""

import uuid
from decimal import Decimal
from typing import List

from sqlalchemy import JSON, CheckConstraint, ForeignKey, Numeric, String, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from .base import Base


class ZoneMixin:
    """Columns shared by template zones and seat diagram zones."""

    name: Mapped[str] = mapped_column(String(100), nullable=False)
    row_numbers: Mapped[List[int]] = mapped_column(JSON, nullable=False, default=list)
    price_multiplier: Mapped[Decimal] = mapped_column(
        Numeric(6, 2),
        nullable=False,
        default=Decimal('1.00')
    )


class TemplateZone(ZoneMixin, Base):
    """Pricing zone of a layout template."""

    __tablename__ = "template_zones"

    layout_template_id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True),
        ForeignKey("layout_templates.id", ondelete="CASCADE"),
        nullable=False,
        index=True
    )

    __table_args__ = (
        CheckConstraint("price_multiplier > 0", name="ck_template_zones_price_multiplier_positive"),
    )

    @property
    def layout_id(self) -> uuid.UUID:
        return self.layout_template_id


class SeatDiagramZone(ZoneMixin, Base):
    """Pricing zone of a seat diagram."""

    __tablename__ = "seat_diagram_zones"

    seat_diagram_id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True),
        ForeignKey("seat_diagrams.id", ondelete="CASCADE"),
        nullable=False,
        index=True
    )

    __table_args__ = (
        CheckConstraint("price_multiplier > 0", name="ck_seat_diagram_zones_price_multiplier_positive"),
    )

    @property
    def layout_id(self) -> uuid.UUID:
        return self.seat_diagram_id
