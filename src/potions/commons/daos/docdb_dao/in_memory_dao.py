"""In-memory DAO module.

Holds documents in process and evaluates filters and typed pipelines with
MongoDB semantics. Meant for tests and local demos.
"""

import copy
from typing import Any, Dict, Iterable, List

from bson import ObjectId

from potions.commons.daos.docdb_dao.docdb_dao_base import DocumentDBDAO
from potions.commons.exceptions import ConflictError, StoreError
from potions.commons.utils import get_nested, is_number
from potions.query.pipeline import run_pipeline

_COMPARISONS = {
    "$gt": lambda value, bound: value > bound,
    "$gte": lambda value, bound: value >= bound,
    "$lt": lambda value, bound: value < bound,
    "$lte": lambda value, bound: value <= bound,
}


def _matches_condition(value: Any, condition: Any) -> bool:
    if isinstance(condition, dict) and condition and all(k.startswith("$") for k in condition):
        for operator, operand in condition.items():
            if operator in _COMPARISONS:
                # Range operators only compare numbers against numbers.
                if not (is_number(value) and is_number(operand)):
                    return False
                if not _COMPARISONS[operator](value, operand):
                    return False
            elif operator == "$eq":
                if not _matches_condition(value, operand):
                    return False
            elif operator == "$in":
                if not any(_matches_condition(value, item) for item in operand):
                    return False
            else:
                raise StoreError(f"Unsupported filter operator: {operator}")
        return True
    if isinstance(value, list) and not isinstance(condition, list):
        return condition in value
    return value == condition


def matches(doc: Dict, filter: Dict) -> bool:
    """Return whether ``doc`` satisfies every clause of ``filter``."""
    return all(_matches_condition(get_nested(doc, key), cond) for key, cond in (filter or {}).items())


class InMemoryDAO(DocumentDBDAO):
    """Document store kept in Python lists."""

    def __init__(self, potions: Iterable[Dict] = None, users: Iterable[Dict] = None):
        self._potions: List[Dict] = []
        self._users: List[Dict] = []
        self.insert_potions(potions or [])
        for user in users or []:
            self.insert_user(user)

    def insert_potions(self, docs: Iterable[Dict]) -> List[ObjectId]:
        """Store copies of ``docs``, assigning an ObjectId where ``_id`` is absent."""
        ids = []
        for doc in docs:
            stored = copy.deepcopy(doc)
            stored.setdefault("_id", ObjectId())
            self._potions.append(stored)
            ids.append(stored["_id"])
        return ids

    def find(self, filter: Dict = None, projection: List[str] = None) -> List[Dict]:
        rs = [copy.deepcopy(doc) for doc in self._potions if matches(doc, filter)]
        if projection:
            keep = set(projection) | {"_id"}
            rs = [{k: v for k, v in doc.items() if k in keep} for doc in rs]
        return rs

    def find_by_id(self, potion_id: Any) -> Dict:
        for doc in self._potions:
            if doc.get("_id") == potion_id:
                return copy.deepcopy(doc)
        return None

    def aggregate(self, stages: List) -> List[Dict]:
        return run_pipeline(stages, copy.deepcopy(self._potions))

    def get_user(self, username: str) -> Dict:
        for user in self._users:
            if user.get("username") == username:
                return dict(user)
        return None

    def insert_user(self, user_doc: Dict) -> Any:
        if self.get_user(user_doc.get("username")) is not None:
            raise ConflictError(f"Username already taken: {user_doc.get('username')}")
        stored = dict(user_doc)
        stored.setdefault("_id", ObjectId())
        self._users.append(stored)
        return stored["_id"]

    def ping(self) -> bool:
        return True
