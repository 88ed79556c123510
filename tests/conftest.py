"""Shared fixtures: seeded in-memory store and authenticated clients."""

from __future__ import annotations

import pytest
from bson import ObjectId
from fastapi.testclient import TestClient

from potions.auth.service import UserService
from potions.auth.tokens import TokenService
from potions.commons.daos.docdb_dao.in_memory_dao import InMemoryDAO
from potions.configs import COOKIE_NAME
from potions.potions_api.db_api import DBAPI
from potions.webservice.deps import get_db_api, get_user_service
from potions.webservice.main import create_app

POTION_IDS = [ObjectId("65f0c0ffee0000000000000%d" % i) for i in range(1, 5)]

POTIONS = [
    {
        "_id": POTION_IDS[0],
        "name": "Elixir of Vigor",
        "effect": "Restores stamina",
        "vendor_id": "v1",
        "categories": ["healing", "stamina"],
        "price": 12.5,
        "score": 8,
        "ratings": {"strength": 6, "flavor": 3},
    },
    {
        "_id": POTION_IDS[1],
        "name": "Draught of Night",
        "effect": "See in the dark",
        "vendor_id": "v1",
        "categories": ["vision"],
        "price": 20,
        "score": 6,
        "ratings": {"strength": 4, "flavor": 0},
    },
    {
        "_id": POTION_IDS[2],
        "name": "Tonic of Calm",
        "effect": "Soothes nerves",
        "vendor_id": "v2",
        "categories": ["healing"],
        "price": 9.99,
        "score": 10,
        "ratings": {"strength": 2, "flavor": 8},
    },
    {
        "_id": POTION_IDS[3],
        "name": "Brew of Nothing",
        "effect": "None at all",
        "vendor_id": "v3",
        "categories": [],
        "price": 35,
        "score": 1,
        "ratings": {"strength": 1},
    },
]

TEST_SECRET = "test-secret"


def auth_cookie(token_service: TokenService) -> dict:
    return {COOKIE_NAME: token_service.issue({"id": "u1", "username": "tester"})}


@pytest.fixture
def token_service() -> TokenService:
    return TokenService(secret=TEST_SECRET, ttl_seconds=3600)


@pytest.fixture
def memory_dao() -> InMemoryDAO:
    return InMemoryDAO(potions=POTIONS)


@pytest.fixture
def app(token_service, memory_dao):
    app = create_app(token_service=token_service)
    app.dependency_overrides[get_db_api] = lambda: DBAPI(dao=memory_dao)
    app.dependency_overrides[get_user_service] = lambda: UserService(dao=memory_dao)
    return app


@pytest.fixture
def anonymous_client(app) -> TestClient:
    return TestClient(app)


@pytest.fixture
def client(app, token_service) -> TestClient:
    return TestClient(app, cookies=auth_cookie(token_service))
