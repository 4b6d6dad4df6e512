"""initial layout schema

Revision ID: 0001
Revises:
Create Date: 2026-10-19 09:00:00.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = "0001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

SEAT_FIELDS_ONLY_ON_SEATS = (
    "space_type = 'seat' OR "
    "(seat_number IS NULL AND seat_type IS NULL AND reclinement_angle IS NULL)"
)


def _base_columns():
    return [
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.text("now()"), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.text("now()"), nullable=False),
    ]


def _layout_columns():
    return [
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("max_capacity", sa.Integer(), nullable=False),
        sa.Column("num_floors", sa.Integer(), nullable=False),
        sa.Column("seats_per_floor", sa.JSON(), nullable=False),
        sa.Column("total_seats", sa.Integer(), nullable=False),
        sa.Column("is_factory_default", sa.Boolean(), nullable=False),
        sa.Column("active", sa.Boolean(), nullable=False),
    ]


def _space_columns():
    return [
        sa.Column("floor_number", sa.Integer(), nullable=False),
        sa.Column("position_x", sa.Integer(), nullable=False),
        sa.Column("position_y", sa.Integer(), nullable=False),
        sa.Column("space_type", sa.String(length=20), nullable=False),
        sa.Column("seat_number", sa.String(length=20), nullable=True),
        sa.Column("seat_type", sa.String(length=20), nullable=True),
        sa.Column("reclinement_angle", sa.Integer(), nullable=True),
        sa.Column("amenities", sa.JSON(), nullable=False),
        sa.Column("meta", sa.JSON(), nullable=False),
        sa.Column("active", sa.Boolean(), nullable=False),
    ]


def _zone_columns():
    return [
        sa.Column("name", sa.String(length=100), nullable=False),
        sa.Column("row_numbers", sa.JSON(), nullable=False),
        sa.Column("price_multiplier", sa.Numeric(precision=6, scale=2), nullable=False),
    ]


def upgrade() -> None:
    op.create_table(
        "layout_templates",
        *_base_columns(),
        *_layout_columns(),
        sa.CheckConstraint("num_floors >= 1", name="ck_layout_templates_num_floors_positive"),
        sa.CheckConstraint("total_seats >= 0", name="ck_layout_templates_total_seats_non_negative"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_layout_templates_id", "layout_templates", ["id"])
    op.create_index("ix_layout_templates_name", "layout_templates", ["name"])

    op.create_table(
        "seat_diagrams",
        *_base_columns(),
        *_layout_columns(),
        sa.Column("layout_template_id", sa.Uuid(), nullable=True),
        sa.Column("is_modified", sa.Boolean(), nullable=False),
        sa.CheckConstraint("num_floors >= 1", name="ck_seat_diagrams_num_floors_positive"),
        sa.CheckConstraint("total_seats >= 0", name="ck_seat_diagrams_total_seats_non_negative"),
        sa.ForeignKeyConstraint(["layout_template_id"], ["layout_templates.id"], ondelete="SET NULL"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_seat_diagrams_id", "seat_diagrams", ["id"])
    op.create_index("ix_seat_diagrams_name", "seat_diagrams", ["name"])
    op.create_index("ix_seat_diagrams_layout_template_id", "seat_diagrams", ["layout_template_id"])
    op.create_index("ix_seat_diagrams_is_modified", "seat_diagrams", ["is_modified"])

    op.create_table(
        "template_spaces",
        *_base_columns(),
        *_space_columns(),
        sa.Column("layout_template_id", sa.Uuid(), nullable=False),
        sa.CheckConstraint(SEAT_FIELDS_ONLY_ON_SEATS, name="ck_template_spaces_seat_fields"),
        sa.CheckConstraint("floor_number >= 1", name="ck_template_spaces_floor_positive"),
        sa.ForeignKeyConstraint(["layout_template_id"], ["layout_templates.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint(
            "layout_template_id", "floor_number", "position_x", "position_y",
            name="uq_template_spaces_position"
        ),
    )
    op.create_index("ix_template_spaces_id", "template_spaces", ["id"])
    op.create_index("ix_template_spaces_active", "template_spaces", ["active"])
    op.create_index("ix_template_spaces_layout_template_id", "template_spaces", ["layout_template_id"])

    op.create_table(
        "seat_diagram_spaces",
        *_base_columns(),
        *_space_columns(),
        sa.Column("seat_diagram_id", sa.Uuid(), nullable=False),
        sa.CheckConstraint(SEAT_FIELDS_ONLY_ON_SEATS, name="ck_seat_diagram_spaces_seat_fields"),
        sa.CheckConstraint("floor_number >= 1", name="ck_seat_diagram_spaces_floor_positive"),
        sa.ForeignKeyConstraint(["seat_diagram_id"], ["seat_diagrams.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint(
            "seat_diagram_id", "floor_number", "position_x", "position_y",
            name="uq_seat_diagram_spaces_position"
        ),
    )
    op.create_index("ix_seat_diagram_spaces_id", "seat_diagram_spaces", ["id"])
    op.create_index("ix_seat_diagram_spaces_active", "seat_diagram_spaces", ["active"])
    op.create_index("ix_seat_diagram_spaces_seat_diagram_id", "seat_diagram_spaces", ["seat_diagram_id"])

    op.create_table(
        "template_zones",
        *_base_columns(),
        *_zone_columns(),
        sa.Column("layout_template_id", sa.Uuid(), nullable=False),
        sa.CheckConstraint("price_multiplier > 0", name="ck_template_zones_price_multiplier_positive"),
        sa.ForeignKeyConstraint(["layout_template_id"], ["layout_templates.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_template_zones_id", "template_zones", ["id"])
    op.create_index("ix_template_zones_layout_template_id", "template_zones", ["layout_template_id"])

    op.create_table(
        "seat_diagram_zones",
        *_base_columns(),
        *_zone_columns(),
        sa.Column("seat_diagram_id", sa.Uuid(), nullable=False),
        sa.CheckConstraint("price_multiplier > 0", name="ck_seat_diagram_zones_price_multiplier_positive"),
        sa.ForeignKeyConstraint(["seat_diagram_id"], ["seat_diagrams.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_seat_diagram_zones_id", "seat_diagram_zones", ["id"])
    op.create_index("ix_seat_diagram_zones_seat_diagram_id", "seat_diagram_zones", ["seat_diagram_id"])

    op.create_table(
        "buses",
        *_base_columns(),
        sa.Column("registration_number", sa.String(length=50), nullable=False),
        sa.Column("economic_number", sa.String(length=50), nullable=True),
        sa.Column("status", sa.String(length=20), nullable=False),
        sa.Column("layout_template_id", sa.Uuid(), nullable=False),
        sa.Column("seat_diagram_id", sa.Uuid(), nullable=False),
        sa.Column("active", sa.Boolean(), nullable=False),
        sa.ForeignKeyConstraint(["layout_template_id"], ["layout_templates.id"], ondelete="RESTRICT"),
        sa.ForeignKeyConstraint(["seat_diagram_id"], ["seat_diagrams.id"], ondelete="RESTRICT"),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("seat_diagram_id"),
    )
    op.create_index("ix_buses_id", "buses", ["id"])
    op.create_index("ix_buses_registration_number", "buses", ["registration_number"], unique=True)
    op.create_index("ix_buses_layout_template_id", "buses", ["layout_template_id"])


def downgrade() -> None:
    op.drop_table("buses")
    op.drop_table("seat_diagram_zones")
    op.drop_table("template_zones")
    op.drop_table("seat_diagram_spaces")
    op.drop_table("template_spaces")
    op.drop_table("seat_diagrams")
    op.drop_table("layout_templates")
