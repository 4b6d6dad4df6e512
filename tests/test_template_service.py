import uuid

from fleet_inventory_platform.models import SpaceType
from fleet_inventory_platform.schemas.layout import FloorConfiguration, LayoutTemplateUpdate, SeatDiagramCreate
from fleet_inventory_platform.services.seat_diagram_service import SeatDiagramService
from fleet_inventory_platform.services.template_service import TemplateService
from fleet_inventory_platform.utils.exceptions import (
    LayoutInUseError,
    LayoutTemplateNotFoundError,
    ValidationError,
)

from tests.support import DatabaseTestCase, floor, template_data


class TestTemplateService(DatabaseTestCase):
    async def asyncSetUp(self):
        await super().asyncSetUp()
        self.service = TemplateService(self.db)

    async def test_create_generates_seats(self):
        template = await self.service.create_template(
            template_data(floors=[floor(num_rows=10, seats_left=2, seats_right=2)])
        )

        self.assertEqual(template.total_seats, 40)
        self.assertTrue(template.active)

        spaces = await self.service.list_spaces(template.id)
        self.assertEqual(len(spaces), 40)
        self.assertEqual(sorted(int(space.seat_number) for space in spaces), list(range(1, 41)))
        self.assertTrue(all(space.space_type == SpaceType.SEAT for space in spaces))

    async def test_create_multi_floor(self):
        template = await self.service.create_template(
            template_data(floors=[floor(1, 2, 1, 2), floor(2, 3, 2, 2)])
        )

        self.assertEqual(template.total_seats, 2 * 3 + 3 * 4)
        spaces = await self.service.list_spaces(template.id)
        self.assertEqual({space.floor_number for space in spaces}, {1, 2})

    async def test_create_without_seats_stores_nothing(self):
        with self.assertRaises(ValidationError):
            await self.service.create_template(template_data(floors=[floor(num_rows=0)]))

        self.assertEqual(await self.service.list_templates(active_only=False), [])

    async def test_get_missing_template(self):
        with self.assertRaises(LayoutTemplateNotFoundError):
            await self.service.get_template(uuid.uuid4())

    async def test_list_templates(self):
        await self.service.create_template(template_data(name="B coach"))
        retired = await self.service.create_template(template_data(name="A coach"))
        await self.service.delete_template(retired.id)

        active = await self.service.list_templates()
        everything = await self.service.list_templates(active_only=False)

        self.assertEqual([t.name for t in active], ["B coach"])
        self.assertEqual([t.name for t in everything], ["A coach", "B coach"])

    async def test_update_fields_keeps_spaces(self):
        template = await self.service.create_template(template_data())
        before = [space.id for space in await self.service.list_spaces(template.id)]

        updated = await self.service.update_template(
            template.id, LayoutTemplateUpdate(name="Renamed", max_capacity=10)
        )

        self.assertEqual(updated.name, "Renamed")
        self.assertEqual(updated.max_capacity, 10)
        self.assertEqual([space.id for space in await self.service.list_spaces(template.id)], before)

    async def test_update_with_regeneration(self):
        template = await self.service.create_template(template_data(floors=[floor(num_rows=2)]))

        updated = await self.service.update_template(
            template.id,
            LayoutTemplateUpdate(seats_per_floor=[FloorConfiguration(**floor(num_rows=3, seats_left=1, seats_right=2))]),
            regenerate_seats=True,
        )

        self.assertEqual(updated.total_seats, 9)
        spaces = await self.service.list_spaces(template.id)
        self.assertEqual(len(spaces), 9)
        self.assertEqual({space.position_x for space in spaces}, {0, 2, 3})

    async def test_update_rejects_missing_floor_configuration(self):
        template = await self.service.create_template(template_data())
        template_id = template.id

        with self.assertRaises(ValidationError) as ctx:
            await self.service.update_template(template_id, LayoutTemplateUpdate(num_floors=2))

        self.assertEqual(ctx.exception.message, "Floor configuration not found for floor 2")
        reloaded = await self.service.get_template(template_id)
        self.assertEqual(reloaded.num_floors, 1)

    async def test_regeneration_leaves_seat_diagrams_alone(self):
        template = await self.service.create_template(template_data(floors=[floor(num_rows=2)]))
        diagrams = SeatDiagramService(self.db)
        seat_diagram = await diagrams.create_seat_diagram(SeatDiagramCreate(layout_template_id=template.id))

        await self.service.update_template(
            template.id,
            LayoutTemplateUpdate(seats_per_floor=[FloorConfiguration(**floor(num_rows=1))]),
            regenerate_seats=True,
        )

        self.assertEqual(len(await diagrams.list_spaces(seat_diagram.id)), 8)

    async def test_delete_is_soft(self):
        template = await self.service.create_template(template_data())

        await self.service.delete_template(template.id)

        reloaded = await self.service.get_template(template.id)
        self.assertFalse(reloaded.active)
        self.assertEqual(len(await self.service.list_spaces(template.id)), 8)

    async def test_delete_refused_while_in_use(self):
        template = await self.service.create_template(template_data())
        await SeatDiagramService(self.db).create_seat_diagram(SeatDiagramCreate(layout_template_id=template.id))

        with self.assertRaises(LayoutInUseError) as ctx:
            await self.service.delete_template(template.id)

        self.assertIsInstance(ctx.exception, ValidationError)
        self.assertTrue((await self.service.get_template(template.id)).active)
