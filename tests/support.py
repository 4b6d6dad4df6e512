"""Shared helpers for the test suite."""

import unittest
from typing import Any, Dict, List, Optional

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from fleet_inventory_platform.models import Base
from fleet_inventory_platform.schemas.layout import (
    FloorConfiguration,
    LayoutTemplateCreate,
    Position,
    SpaceConfigurationInput,
)

TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"


def floor(floor_number: int = 1, num_rows: int = 2, seats_left: int = 2, seats_right: int = 2) -> Dict[str, int]:
    return {
        "floor_number": floor_number,
        "num_rows": num_rows,
        "seats_left": seats_left,
        "seats_right": seats_right,
    }


def template_data(name: str = "Coach", floors: Optional[List[Dict[str, int]]] = None, **kwargs) -> LayoutTemplateCreate:
    floors = floors or [floor()]
    return LayoutTemplateCreate(
        name=name,
        max_capacity=kwargs.pop("max_capacity", 50),
        num_floors=kwargs.pop("num_floors", len(floors)),
        seats_per_floor=[FloorConfiguration(**f) for f in floors],
        **kwargs
    )


def entry(x: int, y: int, seat_number: Optional[str] = None, floor_number: int = 1, **kwargs: Any) -> SpaceConfigurationInput:
    """A desired space at ``floor_number:x:y``; a seat unless ``space_type`` says otherwise."""
    return SpaceConfigurationInput(
        floor_number=floor_number,
        position=Position(x=x, y=y),
        seat_number=seat_number,
        **kwargs
    )


def entries_from_spaces(spaces) -> List[SpaceConfigurationInput]:
    """Desired configuration reproducing the given spaces exactly."""
    return [
        SpaceConfigurationInput(
            floor_number=space.floor_number,
            position=Position(x=space.position_x, y=space.position_y),
            space_type=space.space_type,
            seat_number=space.seat_number,
            seat_type=space.seat_type,
            amenities=list(space.amenities),
            reclinement_angle=space.reclinement_angle,
            active=space.active,
        )
        for space in spaces
    ]


class DatabaseTestCase(unittest.IsolatedAsyncioTestCase):
    """Test case with a fresh in-memory database per test."""

    async def asyncSetUp(self):
        self.engine = create_async_engine(
            TEST_DATABASE_URL,
            connect_args={"check_same_thread": False},
            poolclass=StaticPool,
        )
        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)

        self.session_factory = async_sessionmaker(self.engine, class_=AsyncSession, expire_on_commit=False)
        self.db = self.session_factory()

    async def asyncTearDown(self):
        await self.db.close()
        await self.engine.dispose()
