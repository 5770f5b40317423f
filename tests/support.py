"""
Shared helpers for the test suites.
"""
import asyncio
import os
import unittest
import uuid

from fastapi.testclient import TestClient

from repufrenos.config import get_settings
from repufrenos.database import Base, SessionLocal, engine
from repufrenos.schemas.product import Product
from repufrenos.services.catalog import seed_catalog


def run(coro):
    return asyncio.run(coro)


async def _reset_database(seed: bool) -> None:
    import repufrenos.models  # noqa: F401

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
        await conn.run_sync(Base.metadata.create_all)
    if seed:
        async with SessionLocal() as db:
            await seed_catalog(db)


def reset_database(seed: bool = True) -> None:
    """Recreate the tables, loading the bundled catalog unless told not to."""
    run(_reset_database(seed))


def remove_env_file() -> None:
    path = get_settings().env_file_path
    if os.path.exists(path):
        os.remove(path)


def make_product(**overrides) -> Product:
    values = {
        "id": 1,
        "code": "PF-1",
        "name": "Pastilla Freno",
        "brand": "Brembo",
        "model": "P1",
        "compatibility": "Toyota Yaris",
        "price": 10000,
        "category": "Pastillas",
    }
    values.update(overrides)
    return Product(**values)


class ApiTestCase(unittest.TestCase):
    """Fresh database, settings file and client store for every test."""

    def setUp(self):
        from repufrenos.main import app

        reset_database()
        remove_env_file()
        self.client = TestClient(app)
        self.client.headers["X-Client-Id"] = f"test-{uuid.uuid4().hex}"
        self.api = get_settings().api_v1_prefix

    def tearDown(self):
        remove_env_file()

    def admin_headers(self):
        response = self.client.post(f"{self.api}/auth/login", json={"username": "admin", "password": "admin123"})
        self.assertEqual(response.status_code, 200)
        return {"Authorization": f"Bearer {response.json()['access_token']}"}
