import asyncio
import os
import tempfile
import unittest
from types import SimpleNamespace
from unittest import mock

from fastapi.testclient import TestClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import NullPool

from fleet_inventory_platform.database import get_db
from fleet_inventory_platform.main import app
from fleet_inventory_platform.models import Base

from tests.support import floor

API = "/api/v1"


def template_body(name="Coach 40", num_rows=10):
    return {
        "name": name,
        "max_capacity": 44,
        "num_floors": 1,
        "seats_per_floor": [floor(num_rows=num_rows)],
    }


class TestLayoutAPI(unittest.TestCase):
    def setUp(self):
        # A file database: the test client runs requests on its own event loop
        self._tmpdir = tempfile.TemporaryDirectory()
        url = f"sqlite+aiosqlite:///{os.path.join(self._tmpdir.name, 'layouts.db')}"
        self.engine = create_async_engine(url, poolclass=NullPool)
        asyncio.run(self._create_tables())

        session_factory = async_sessionmaker(self.engine, class_=AsyncSession, expire_on_commit=False)

        async def override_get_db():
            async with session_factory() as session:
                yield session

        app.dependency_overrides[get_db] = override_get_db
        self.client = TestClient(app)

    def tearDown(self):
        app.dependency_overrides.clear()
        asyncio.run(self.engine.dispose())
        self._tmpdir.cleanup()

    async def _create_tables(self):
        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)

    def create_template(self, **kwargs):
        response = self.client.post(f"{API}/layout-templates/", json=template_body(**kwargs))
        self.assertEqual(response.status_code, 201, response.text)
        return response.json()

    def create_seat_diagram(self, template_id, **body):
        response = self.client.post(f"{API}/seat-diagrams/", json={"layout_template_id": template_id, **body})
        self.assertEqual(response.status_code, 201, response.text)
        return response.json()

    def test_health(self):
        response = self.client.get("/health")

        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json()["service"], "fleet-inventory-platform")
        self.assertIn("X-Request-ID", response.headers)

    def test_create_and_read_template(self):
        template = self.create_template()

        self.assertEqual(template["total_seats"], 40)
        self.assertEqual(template["seats_per_floor"][0]["num_rows"], 10)

        fetched = self.client.get(f"{API}/layout-templates/{template['id']}").json()
        self.assertEqual(fetched["id"], template["id"])

        listed = self.client.get(f"{API}/layout-templates/").json()
        self.assertEqual([t["id"] for t in listed], [template["id"]])

        spaces = self.client.get(f"{API}/layout-templates/{template['id']}/spaces").json()
        self.assertEqual(len(spaces), 40)
        self.assertEqual(spaces[0]["position"], {"x": 0, "y": 1})
        self.assertEqual(spaces[0]["seat_number"], "1")
        self.assertTrue(spaces[0]["meta"]["is_window"])

    def test_template_without_seats_is_rejected(self):
        response = self.client.post(f"{API}/layout-templates/", json=template_body(num_rows=0))

        self.assertEqual(response.status_code, 422)
        self.assertEqual(response.json()["error"]["error_code"], "VALIDATION_ERROR")

    def test_unknown_template(self):
        response = self.client.get(f"{API}/layout-templates/00000000-0000-0000-0000-000000000000")

        self.assertEqual(response.status_code, 404)
        body = response.json()
        self.assertEqual(body["error"]["error_code"], "NOT_FOUND")
        self.assertIn("error_id", body)

    def test_reconcile_template_spaces(self):
        template = self.create_template()

        response = self.client.put(
            f"{API}/layout-templates/{template['id']}/spaces",
            json={"spaces": [{"floor_number": 1, "position": {"x": 0, "y": 1}, "seat_number": "1", "seat_type": "premium"}]},
        )

        self.assertEqual(response.status_code, 200, response.text)
        self.assertEqual(response.json(), {"created": 0, "updated": 1, "deactivated": 39, "total_active_seats": 1})

        active = self.client.get(
            f"{API}/layout-templates/{template['id']}/spaces", params={"active_only": "true"}
        ).json()
        self.assertEqual([space["seat_type"] for space in active], ["premium"])

    def test_invalid_batch_reports_field_errors(self):
        template = self.create_template()
        cell = {"floor_number": 1, "position": {"x": 0, "y": 1}, "seat_number": "1"}

        response = self.client.put(
            f"{API}/layout-templates/{template['id']}/spaces",
            json={"spaces": [cell, {**cell, "seat_number": "2"}]},
        )

        self.assertEqual(response.status_code, 422)
        error = response.json()["error"]
        self.assertEqual(error["message"], "Duplicate positions found in payload")
        self.assertIn("spaces[1].position", error["details"]["field_errors"])
        self.assertIn("X-Request-ID", response.headers)

    def test_update_template_with_regeneration(self):
        template = self.create_template()

        response = self.client.put(
            f"{API}/layout-templates/{template['id']}",
            params={"regenerate_seats": "true"},
            json={"seats_per_floor": [floor(num_rows=3)]},
        )

        self.assertEqual(response.status_code, 200, response.text)
        self.assertEqual(response.json()["total_seats"], 12)

    def test_seat_diagram_edit_and_reset(self):
        template = self.create_template()
        seat_diagram = self.create_seat_diagram(template["id"], name="Unit 1")
        self.assertFalse(seat_diagram["is_modified"])
        self.assertEqual(seat_diagram["total_seats"], 40)

        response = self.client.put(f"{API}/seat-diagrams/{seat_diagram['id']}/spaces", json={"spaces": []})
        self.assertEqual(response.json()["total_active_seats"], 0)

        edited = self.client.get(f"{API}/seat-diagrams/{seat_diagram['id']}").json()
        self.assertTrue(edited["is_modified"])

        response = self.client.post(f"{API}/seat-diagrams/{seat_diagram['id']}/reset")
        self.assertEqual(response.status_code, 200, response.text)
        self.assertEqual(response.json()["updated"], 40)

        reset = self.client.get(f"{API}/seat-diagrams/{seat_diagram['id']}").json()
        self.assertFalse(reset["is_modified"])
        self.assertEqual(reset["total_seats"], 40)

    def test_sync_skips_modified_diagrams(self):
        template = self.create_template()
        following = self.create_seat_diagram(template["id"])
        edited = self.create_seat_diagram(template["id"])
        self.client.put(f"{API}/seat-diagrams/{edited['id']}/spaces", json={"spaces": []})
        self.client.put(
            f"{API}/layout-templates/{template['id']}",
            params={"regenerate_seats": "true"},
            json={"seats_per_floor": [floor(num_rows=5)]},
        )

        response = self.client.post(f"{API}/layout-templates/{template['id']}/spaces/regenerate")

        self.assertEqual(response.status_code, 200, response.text)
        result = response.json()
        self.assertEqual([s["seat_diagram_id"] for s in result["synced"]], [following["id"]])
        self.assertEqual(result["synced"][0]["deleted"], 20)
        self.assertEqual(result["skipped"], [edited["id"]])

    def test_sync_in_background(self):
        template = self.create_template()

        with mock.patch(
            "fleet_inventory_platform.tasks.sync_tasks.sync_template_instances_task.delay",
            return_value=SimpleNamespace(id="task-42"),
        ) as delay:
            response = self.client.post(
                f"{API}/layout-templates/{template['id']}/spaces/regenerate", params={"background": "true"}
            )

        self.assertEqual(response.status_code, 200, response.text)
        self.assertEqual(response.json(), {"layout_template_id": template["id"], "task_id": "task-42", "status": "queued"})
        delay.assert_called_once_with(template["id"])

    def test_template_zones(self):
        template = self.create_template()
        zones_url = f"{API}/layout-templates/{template['id']}/zones/"

        response = self.client.post(zones_url, json={"name": "Front", "row_numbers": [1, 2], "price_multiplier": "1.25"})
        self.assertEqual(response.status_code, 201, response.text)
        zone = response.json()
        self.assertEqual(zone["layout_id"], template["id"])

        response = self.client.put(f"{zones_url}{zone['id']}", json={"row_numbers": [1]})
        self.assertEqual(response.json()["row_numbers"], [1])

        self.assertEqual(len(self.client.get(zones_url).json()), 1)

        bad = self.client.post(zones_url, json={"name": "Back", "row_numbers": [], "price_multiplier": "1"})
        self.assertEqual(bad.status_code, 422)

        other = self.create_template(name="Other")
        response = self.client.get(f"{API}/layout-templates/{other['id']}/zones/{zone['id']}")
        self.assertEqual(response.status_code, 404)

        response = self.client.delete(f"{zones_url}{zone['id']}")
        self.assertEqual(response.status_code, 204)
        self.assertEqual(self.client.get(zones_url).json(), [])

    def test_seat_diagram_zones_are_cloned(self):
        template = self.create_template()
        self.client.post(
            f"{API}/layout-templates/{template['id']}/zones/",
            json={"name": "Front", "row_numbers": [1], "price_multiplier": "1.50"},
        )

        seat_diagram = self.create_seat_diagram(template["id"])

        zones = self.client.get(f"{API}/seat-diagrams/{seat_diagram['id']}/zones/").json()
        self.assertEqual([z["name"] for z in zones], ["Front"])
        self.assertEqual(zones[0]["layout_id"], seat_diagram["id"])

    def test_delete_template(self):
        in_use = self.create_template(name="In use")
        self.create_seat_diagram(in_use["id"])
        unused = self.create_template(name="Unused")

        self.assertEqual(self.client.delete(f"{API}/layout-templates/{in_use['id']}").status_code, 422)
        self.assertEqual(self.client.delete(f"{API}/layout-templates/{unused['id']}").status_code, 204)

        listed = self.client.get(f"{API}/layout-templates/").json()
        self.assertEqual([t["name"] for t in listed], ["In use"])

    def test_buses(self):
        template = self.create_template(name="Coach")

        response = self.client.post(
            f"{API}/buses/", json={"registration_number": "XYZ-9", "layout_template_id": template["id"]}
        )
        self.assertEqual(response.status_code, 201, response.text)
        bus = response.json()
        self.assertEqual(bus["status"], "active")

        self.assertEqual(self.client.get(f"{API}/buses/{bus['id']}").json()["id"], bus["id"])
        seat_diagram = self.client.get(f"{API}/seat-diagrams/{bus['seat_diagram_id']}").json()
        self.assertEqual(seat_diagram["name"], "Coach - XYZ-9")

        duplicate = self.client.post(
            f"{API}/buses/", json={"registration_number": "XYZ-9", "layout_template_id": template["id"]}
        )
        self.assertEqual(duplicate.status_code, 422)

        missing = self.client.get(f"{API}/buses/00000000-0000-0000-0000-000000000000")
        self.assertEqual(missing.status_code, 404)


if __name__ == "__main__":
    unittest.main()
