import unittest
from types import SimpleNamespace
from unittest import mock

from fleet_inventory_platform.cache import CacheKeyBuilder, DistributedLock, cache, layout_lock
from fleet_inventory_platform.services.layout_store import TEMPLATE, LayoutStore
from fleet_inventory_platform.services.reconciliation_service import ReconciliationService
from fleet_inventory_platform.services.template_service import TemplateService
from fleet_inventory_platform.utils.exceptions import CacheServiceError, LayoutLockError

from tests.support import DatabaseTestCase, template_data

LOCKS_ON = SimpleNamespace(enable_layout_locks=True, layout_lock_timeout_seconds=1)


class FakeRedis:
    """Just enough of a Redis client for SET NX and the release script."""

    def __init__(self):
        self.store = {}

    async def set(self, key, value, nx=False, ex=None):
        if nx and key in self.store:
            return None
        self.store[key] = value
        return True

    async def eval(self, script, numkeys, key, identifier):
        if self.store.get(key) == identifier:
            del self.store[key]
            return 1
        return 0

    async def ping(self):
        return True


class FakeRedisMixin:
    def install_fake_redis(self):
        self.redis = FakeRedis()
        client_patch = mock.patch.object(cache, "client", self.redis)
        client_patch.start()
        self.addCleanup(client_patch.stop)

        settings_patch = mock.patch("fleet_inventory_platform.cache.get_settings", return_value=LOCKS_ON)
        settings_patch.start()
        self.addCleanup(settings_patch.stop)


class TestLayoutLock(FakeRedisMixin, unittest.IsolatedAsyncioTestCase):
    async def test_disabled_lock_is_a_no_op(self):
        with mock.patch.object(cache, "client", None):
            async with layout_lock("template", "t-1") as lock:
                self.assertIsNone(lock)

    async def test_enabled_lock_requires_redis(self):
        with mock.patch("fleet_inventory_platform.cache.get_settings", return_value=LOCKS_ON):
            with mock.patch.object(cache, "client", None):
                with self.assertRaises(CacheServiceError):
                    async with layout_lock("template", "t-1"):
                        pass

    async def test_lock_held_for_the_block(self):
        self.install_fake_redis()
        key = CacheKeyBuilder.layout_lock("seat_diagram", "d-1")

        async with layout_lock("seat_diagram", "d-1") as lock:
            self.assertEqual(self.redis.store[key], lock.identifier)

        self.assertNotIn(key, self.redis.store)

    async def test_lock_released_on_error(self):
        self.install_fake_redis()

        with self.assertRaises(RuntimeError):
            async with layout_lock("template", "t-1"):
                raise RuntimeError("boom")

        self.assertEqual(self.redis.store, {})

    async def test_contended_lock_times_out(self):
        self.install_fake_redis()
        self.redis.store[CacheKeyBuilder.layout_lock("template", "t-1")] = "someone-else"

        with self.assertRaises(LayoutLockError) as ctx:
            async with layout_lock("template", "t-1"):
                pass

        self.assertEqual(ctx.exception.details["layout_id"], "t-1")

    async def test_release_keeps_foreign_lock(self):
        self.install_fake_redis()
        lock = DistributedLock(cache, "lock:layout:template:t-1")
        self.redis.store["lock:layout:template:t-1"] = "someone-else"

        self.assertFalse(await lock.release())
        self.assertEqual(self.redis.store["lock:layout:template:t-1"], "someone-else")


class TestLockedReconciliation(FakeRedisMixin, DatabaseTestCase):
    async def test_busy_layout_is_not_edited(self):
        template = await TemplateService(self.db).create_template(template_data())
        self.install_fake_redis()
        self.redis.store[CacheKeyBuilder.layout_lock("template", str(template.id))] = "someone-else"

        with self.assertRaises(LayoutLockError):
            await ReconciliationService(self.db).reconcile_spaces(TEMPLATE, template.id, [])

        spaces = await LayoutStore(self.db, TEMPLATE).list_spaces(template.id, active_only=True)
        self.assertEqual(len(spaces), 8)
