import unittest
import uuid
from decimal import Decimal

from pydantic import ValidationError as SchemaValidationError

from fleet_inventory_platform.schemas.layout import SeatDiagramCreate
from fleet_inventory_platform.schemas.zone import ZoneCreate, ZoneUpdate
from fleet_inventory_platform.services.layout_store import SEAT_DIAGRAM, TEMPLATE, LayoutStore
from fleet_inventory_platform.services.seat_diagram_service import SeatDiagramService
from fleet_inventory_platform.services.template_service import TemplateService
from fleet_inventory_platform.services.zone_service import ZoneService, clone_zones
from fleet_inventory_platform.utils.exceptions import LayoutTemplateNotFoundError, ZoneNotFoundError

from tests.support import DatabaseTestCase, template_data


def zone(name="Front", rows=(1, 2), multiplier="1.25"):
    return ZoneCreate(name=name, row_numbers=list(rows), price_multiplier=Decimal(multiplier))


class TestZoneSchemas(unittest.TestCase):
    def test_blank_name_rejected(self):
        with self.assertRaises(SchemaValidationError):
            zone(name="   ")

    def test_name_is_stripped(self):
        self.assertEqual(zone(name="  VIP ").name, "VIP")

    def test_empty_rows_rejected(self):
        with self.assertRaises(SchemaValidationError):
            zone(rows=())

    def test_non_positive_rows_rejected(self):
        with self.assertRaises(SchemaValidationError):
            zone(rows=(0, 1))

    def test_repeated_rows_rejected(self):
        with self.assertRaises(SchemaValidationError):
            zone(rows=(3, 3))

    def test_multiplier_must_be_positive(self):
        with self.assertRaises(SchemaValidationError):
            zone(multiplier="0")


class TestZoneService(DatabaseTestCase):
    async def asyncSetUp(self):
        await super().asyncSetUp()
        self.templates = TemplateService(self.db)
        self.template = await self.templates.create_template(template_data())
        self.service = ZoneService(self.db, TEMPLATE)

    async def test_zone_lifecycle(self):
        created = await self.service.create_zone(self.template.id, zone())
        self.assertEqual(created.layout_id, self.template.id)

        fetched = await self.service.get_zone(self.template.id, created.id)
        self.assertEqual(fetched.row_numbers, [1, 2])

        updated = await self.service.update_zone(
            self.template.id, created.id, ZoneUpdate(price_multiplier=Decimal("2.00"))
        )
        self.assertEqual(updated.price_multiplier, Decimal("2.00"))
        self.assertEqual(updated.name, "Front")

        await self.service.delete_zone(self.template.id, created.id)
        self.assertEqual(await self.service.list_zones(self.template.id), [])

    async def test_zone_is_scoped_to_its_layout(self):
        other = await self.templates.create_template(template_data(name="Other"))
        created = await self.service.create_zone(self.template.id, zone())

        with self.assertRaises(ZoneNotFoundError) as ctx:
            await self.service.get_zone(other.id, created.id)

        self.assertEqual(ctx.exception.message, f"Zone {created.id} not found in layout {other.id}")

    async def test_zone_on_missing_layout(self):
        with self.assertRaises(LayoutTemplateNotFoundError):
            await self.service.create_zone(uuid.uuid4(), zone())

    async def test_seat_diagram_zone_edit_keeps_sync_eligibility(self):
        seat_diagram = await SeatDiagramService(self.db).create_seat_diagram(
            SeatDiagramCreate(layout_template_id=self.template.id)
        )

        await ZoneService(self.db, SEAT_DIAGRAM).create_zone(seat_diagram.id, zone(name="Rear", rows=(2,)))

        self.assertFalse(seat_diagram.is_modified)


class TestCloneZones(DatabaseTestCase):
    async def test_clone_rows_and_records(self):
        template = await TemplateService(self.db).create_template(template_data())
        source = await ZoneService(self.db, TEMPLATE).create_zone(template.id, zone())
        seat_diagram = await SeatDiagramService(self.db).create_seat_diagram(
            SeatDiagramCreate(layout_template_id=template.id)
        )
        store = LayoutStore(self.db, SEAT_DIAGRAM)
        await store.delete_zones(seat_diagram.id)

        copies = clone_zones(store, seat_diagram.id, [
            source,
            {"name": "Back", "row_numbers": [2], "price_multiplier": Decimal("0.80")},
        ])
        await self.db.commit()

        self.assertEqual([c.seat_diagram_id for c in copies], [seat_diagram.id, seat_diagram.id])
        self.assertNotEqual(copies[0].id, source.id)
        self.assertEqual(
            [(c.name, c.row_numbers, c.price_multiplier) for c in copies],
            [("Front", [1, 2], Decimal("1.25")), ("Back", [2], Decimal("0.80"))]
        )
