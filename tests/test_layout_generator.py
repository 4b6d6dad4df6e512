import unittest

from fleet_inventory_platform.models import SeatType, SpaceType
from fleet_inventory_platform.services.layout_generator import (
    calculate_space_meta,
    find_floor_configuration,
    generate_space_records,
    strip_seat_meta,
)
from fleet_inventory_platform.utils.exceptions import ValidationError
from fleet_inventory_platform.utils.position import key_for, position_key

from tests.support import floor


class TestPositionKey(unittest.TestCase):
    def test_format(self):
        self.assertEqual(position_key(1, 0, 1), "1:0:1")
        self.assertEqual(position_key(2, 4, 11), "2:4:11")

    def test_key_for_position_mapping(self):
        self.assertEqual(key_for(1, {"x": 3, "y": 2}), position_key(1, 3, 2))

    def test_distinct_positions_have_distinct_keys(self):
        self.assertNotEqual(position_key(1, 12, 3), position_key(1, 1, 23))


class TestGenerateSpaceRecords(unittest.TestCase):
    def test_single_floor_grid(self):
        records = generate_space_records(1, [floor(num_rows=2, seats_left=2, seats_right=2)])

        self.assertEqual(len(records), 8)
        first_row = [(r["position_x"], r["position_y"], r["seat_number"]) for r in records[:4]]
        self.assertEqual(first_row, [(0, 1, "1"), (1, 1, "2"), (3, 1, "3"), (4, 1, "4")])
        self.assertEqual([r["seat_number"] for r in records], [str(n) for n in range(1, 9)])

    def test_aisle_column_is_never_emitted(self):
        records = generate_space_records(1, [floor(num_rows=3, seats_left=2, seats_right=1)])

        self.assertNotIn(2, {r["position_x"] for r in records})

    def test_seat_counter_spans_floors(self):
        records = generate_space_records(2, [
            floor(1, num_rows=1, seats_left=1, seats_right=2),
            floor(2, num_rows=1, seats_left=2, seats_right=2),
        ])

        self.assertEqual(len(records), 7)
        self.assertEqual([r["floor_number"] for r in records], [1, 1, 1, 2, 2, 2, 2])
        self.assertEqual([r["seat_number"] for r in records], ["1", "2", "3", "4", "5", "6", "7"])

    def test_floors_processed_in_ascending_order(self):
        records = generate_space_records(2, [
            floor(2, num_rows=1, seats_left=1, seats_right=1),
            floor(1, num_rows=1, seats_left=1, seats_right=1),
        ])

        self.assertEqual([(r["floor_number"], r["seat_number"]) for r in records], [(1, "1"), (1, "2"), (2, "3"), (2, "4")])

    def test_generated_seat_defaults(self):
        record = generate_space_records(1, [floor(num_rows=1, seats_left=1, seats_right=0)])[0]

        self.assertEqual(record["space_type"], SpaceType.SEAT)
        self.assertEqual(record["seat_type"], SeatType.REGULAR)
        self.assertEqual(record["reclinement_angle"], 120)
        self.assertEqual(record["amenities"], [])
        self.assertTrue(record["active"])

    def test_explicit_defaults_override_settings(self):
        records = generate_space_records(
            1,
            [floor(num_rows=1, seats_left=1, seats_right=1)],
            default_seat_type=SeatType.PREMIUM,
            default_reclinement_angle=150,
        )

        self.assertEqual({r["seat_type"] for r in records}, {SeatType.PREMIUM})
        self.assertEqual({r["reclinement_angle"] for r in records}, {150})

    def test_window_and_legroom_flags(self):
        records = generate_space_records(1, [floor(num_rows=2, seats_left=2, seats_right=2)])
        by_position = {(r["position_x"], r["position_y"]): r["meta"] for r in records}

        self.assertTrue(by_position[(0, 1)]["is_window"])
        self.assertTrue(by_position[(4, 2)]["is_window"])
        self.assertFalse(by_position[(1, 1)]["is_window"])
        self.assertFalse(by_position[(3, 2)]["is_window"])
        self.assertTrue(by_position[(1, 1)]["is_legroom"])
        self.assertFalse(by_position[(1, 2)]["is_legroom"])
        self.assertEqual(by_position[(3, 2)]["row_index"], 1)
        self.assertEqual(by_position[(3, 2)]["col_index"], 3)

    def test_generation_is_deterministic(self):
        config = [floor(1, 3, 2, 1), floor(2, 2, 1, 1)]

        self.assertEqual(generate_space_records(2, config), generate_space_records(2, config))

    def test_missing_floor_configuration(self):
        with self.assertRaises(ValidationError) as ctx:
            generate_space_records(2, [floor(1)])

        self.assertEqual(ctx.exception.message, "Floor configuration not found for floor 2")

    def test_no_seats_generated(self):
        with self.assertRaises(ValidationError) as ctx:
            generate_space_records(1, [floor(num_rows=0)])

        self.assertEqual(
            ctx.exception.message,
            "Invalid seats_per_floor configuration: no seats would be generated"
        )

    def test_floors_beyond_num_floors_are_ignored(self):
        records = generate_space_records(1, [floor(1, 1, 1, 0), floor(2, 5, 2, 2)])

        self.assertEqual(len(records), 1)


class TestSpaceMeta(unittest.TestCase):
    def test_non_seat_meta_has_no_seat_flags(self):
        meta = calculate_space_meta(2, 3, SpaceType.HALLWAY)

        self.assertEqual(meta, {"row_index": 2, "col_index": 2})

    def test_strip_seat_meta(self):
        meta = {"row_index": 0, "col_index": 0, "is_window": True, "is_legroom": True, "note": "x"}

        self.assertEqual(strip_seat_meta(meta), {"row_index": 0, "col_index": 0, "note": "x"})

    def test_find_floor_configuration(self):
        config = [floor(1), floor(2, num_rows=7)]

        self.assertEqual(find_floor_configuration(config, 2)["num_rows"], 7)
        self.assertIsNone(find_floor_configuration(config, 3))
        self.assertIsNone(find_floor_configuration(None, 1))


if __name__ == "__main__":
    unittest.main()
