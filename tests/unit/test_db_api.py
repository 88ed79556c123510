"""DBAPI tests over the in-memory store and a failing DAO."""

from __future__ import annotations

import unittest
from unittest.mock import MagicMock

from conftest import POTION_IDS, POTIONS

from potions.commons.daos.docdb_dao.in_memory_dao import InMemoryDAO
from potions.commons.exceptions import NotFoundError, StoreError, ValidationError
from potions.potions_api.db_api import DBAPI
from potions.query import analytics


class DBAPITest(unittest.TestCase):
    def setUp(self):
        self.db = DBAPI(dao=InMemoryDAO(potions=POTIONS))

    def test_potion_query_and_filters(self):
        assert len(self.db.potion_query()) == len(POTIONS)
        assert [p["name"] for p in self.db.potions_by_vendor("v1")] == ["Elixir of Vigor", "Draught of Night"]
        assert self.db.potions_by_vendor("nobody") == []

    def test_price_range_is_inclusive(self):
        rows = self.db.potions_in_price_range(10, 20)
        assert sorted(p["price"] for p in rows) == [12.5, 20]
        assert all(10 <= p["price"] <= 20 for p in rows)

    def test_field_values_are_flat(self):
        assert self.db.potion_field_values("vendor_id") == ["v1", "v1", "v2", "v3"]
        assert self.db.potion_field_values("missing_field") == []

    def test_get_potion(self):
        potion = self.db.get_potion(str(POTION_IDS[2]))
        assert potion.name == "Tonic of Calm"
        assert potion.to_dict()["_id"] == POTION_IDS[2]

    def test_get_potion_malformed_and_missing(self):
        with self.assertRaises(ValidationError):
            self.db.get_potion("not-an-id")
        with self.assertRaises(NotFoundError):
            self.db.get_potion("0" * 24)

    def test_aggregate(self):
        rows = self.db.aggregate(analytics.average_score_by_vendor())
        assert {r["_id"]: r["averageScore"] for r in rows} == {"v1": 7.0, "v2": 10.0, "v3": 1.0}

    def test_store_errors_propagate(self):
        dao = MagicMock()
        dao.find.side_effect = StoreError("connection refused")
        dao.find_by_id.side_effect = StoreError("connection refused")
        dao.aggregate.side_effect = StoreError("bad pipeline")
        dao.ping.side_effect = StoreError("down")
        db = DBAPI(dao=dao)

        with self.assertRaises(StoreError):
            db.potion_query()
        with self.assertRaises(StoreError):
            db.get_potion(str(POTION_IDS[0]))
        with self.assertRaises(StoreError):
            db.aggregate(analytics.strength_flavor_ratio())
        assert db.ping() is False

    def test_field_values_skip_nulls(self):
        db = DBAPI(dao=InMemoryDAO(potions=[{"name": "a"}, {"name": None}, {"name": 7}, {"vendor_id": "v"}]))
        assert db.potion_field_values("name") == ["a", 7]

    def test_get_potion_keeps_the_stored_shape(self):
        doc = {"_id": POTION_IDS[0], "name": "x", "score": None}
        db = DBAPI(dao=InMemoryDAO(potions=[doc]))
        assert db.get_potion(str(POTION_IDS[0])).to_dict() == doc
