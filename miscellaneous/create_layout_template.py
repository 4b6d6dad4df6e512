#!/usr/bin/env python3
"""
Script to create a layout template for the Fleet Inventory Platform.
"""

import asyncio
import os
import sys

# Add the project root to the Python path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from fleet_inventory_platform.database import close_database, get_db_session, init_database
from fleet_inventory_platform.schemas.layout import FloorConfiguration, LayoutTemplateCreate
from fleet_inventory_platform.services.template_service import TemplateService
from fleet_inventory_platform.utils.exceptions import FleetInventoryError


def ask_int(prompt: str, minimum: int = 0) -> int:
    """Prompt until a whole number of at least ``minimum`` is entered."""
    while True:
        raw = input(prompt).strip()
        if raw.isdigit() and int(raw) >= minimum:
            return int(raw)
        print(f"Please enter a whole number >= {minimum}")


async def create_layout_template():
    """Create a layout template interactively."""
    print("Fleet Inventory Platform - Layout Template Creation")
    print("=" * 50)

    name = input("Template name: ").strip()
    if not name:
        print("Name is required!")
        return

    num_floors = ask_int("Number of floors: ", minimum=1)
    floors = []
    for floor_number in range(1, num_floors + 1):
        print(f"\nFloor {floor_number}")
        floors.append(FloorConfiguration(
            floor_number=floor_number,
            num_rows=ask_int("  Rows: "),
            seats_left=ask_int("  Seats left of the aisle: "),
            seats_right=ask_int("  Seats right of the aisle: "),
        ))

    max_capacity = ask_int("Maximum capacity: ")
    factory_default = input("Factory default layout? (y/N): ").strip().lower() == "y"

    template_data = LayoutTemplateCreate(
        name=name,
        max_capacity=max_capacity,
        num_floors=num_floors,
        seats_per_floor=floors,
        is_factory_default=factory_default,
    )

    try:
        print("\nInitializing database connection...")
        await init_database()

        async with get_db_session() as db:
            template = await TemplateService(db).create_template(template_data)

        print(f"Created template {template.id} with {template.total_seats} seats")

    except FleetInventoryError as e:
        print(f"Error creating template: {e.message}")
    finally:
        await close_database()


if __name__ == "__main__":
    asyncio.run(create_layout_template())
