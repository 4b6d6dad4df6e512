"""
API documentation examples for OpenAPI/Swagger.
"""

from typing import Dict, Any

# Layout Template Examples
LAYOUT_TEMPLATE_EXAMPLES: Dict[str, Any] = {
    "single_deck": {
        "summary": "Single Deck Coach",
        "description": "Ten rows of 2 + 2 seats around a central aisle",
        "value": {
            "name": "Coach 40",
            "description": "Standard intercity coach",
            "max_capacity": 40,
            "num_floors": 1,
            "seats_per_floor": [
                {"floor_number": 1, "num_rows": 10, "seats_left": 2, "seats_right": 2}
            ],
            "is_factory_default": True
        }
    },
    "double_deck": {
        "summary": "Double Deck Coach",
        "description": "A short lower deck with 1 + 2 seating and a full upper deck",
        "value": {
            "name": "Double Decker 60",
            "max_capacity": 60,
            "num_floors": 2,
            "seats_per_floor": [
                {"floor_number": 1, "num_rows": 4, "seats_left": 1, "seats_right": 2},
                {"floor_number": 2, "num_rows": 12, "seats_left": 2, "seats_right": 2}
            ]
        }
    }
}

# Space Batch Examples
SPACE_BATCH_EXAMPLES: Dict[str, Any] = {
    "seat_and_bathroom": {
        "summary": "Seats With a Bathroom",
        "description": "The full desired grid; cells not listed are deactivated",
        "value": {
            "spaces": [
                {"floor_number": 1, "position": {"x": 0, "y": 1}, "space_type": "seat", "seat_number": "1"},
                {
                    "floor_number": 1,
                    "position": {"x": 1, "y": 1},
                    "space_type": "seat",
                    "seat_number": "2",
                    "seat_type": "premium",
                    "amenities": ["usb", "reading_light"],
                    "reclinement_angle": 140
                },
                {"floor_number": 1, "position": {"x": 3, "y": 1}, "space_type": "bathroom"}
            ]
        }
    }
}

# Zone Examples
ZONE_EXAMPLES: Dict[str, Any] = {
    "front_rows": {
        "summary": "Front Rows Zone",
        "description": "Charge 25% more for the first two rows",
        "value": {
            "name": "Front",
            "row_numbers": [1, 2],
            "price_multiplier": "1.25"
        }
    }
}

API_EXAMPLES: Dict[str, Dict[str, Any]] = {
    "layout_templates": LAYOUT_TEMPLATE_EXAMPLES,
    "space_batches": SPACE_BATCH_EXAMPLES,
    "zones": ZONE_EXAMPLES,
}
