"""MongoDB DAO module."""

from typing import Any, Dict, List

from pymongo import ASCENDING, MongoClient
from pymongo.errors import DuplicateKeyError, PyMongoError

from potions.commons.daos.docdb_dao.docdb_dao_base import DocumentDBDAO
from potions.commons.exceptions import ConflictError, StoreError
from potions.commons.potions_logger import PotionsLogger
from potions.configs import (
    MONGO_URI,
    MONGO_DB,
    MONGO_POTIONS_COLLECTION,
    MONGO_USERS_COLLECTION,
)
from potions.query.pipeline import to_mongo_pipeline


class MongoDBDAO(DocumentDBDAO):
    """Document store backed by a MongoDB database."""

    def __init__(self, uri: str = None, db_name: str = None, create_indices: bool = True, client: MongoClient = None):
        self.logger = PotionsLogger()
        self._client = client if client is not None else MongoClient(uri or MONGO_URI)
        db = self._client[db_name or MONGO_DB]
        self._potions = db[MONGO_POTIONS_COLLECTION]
        self._users = db[MONGO_USERS_COLLECTION]
        if create_indices:
            self._create_indices()

    def _create_indices(self):
        try:
            self._users.create_index([("username", ASCENDING)], unique=True)
            self._potions.create_index([("vendor_id", ASCENDING)])
            self._potions.create_index([("price", ASCENDING)])
        except PyMongoError as e:
            self.logger.warning(f"Could not create MongoDB indices: {e}")

    def find(self, filter: Dict = None, projection: List[str] = None) -> List[Dict]:
        mongo_projection = None
        if projection:
            mongo_projection = {field: 1 for field in projection}
        try:
            return list(self._potions.find(filter or {}, mongo_projection))
        except PyMongoError as e:
            raise StoreError(f"Potion query failed: {e}") from e

    def find_by_id(self, potion_id: Any) -> Dict:
        try:
            return self._potions.find_one({"_id": potion_id})
        except PyMongoError as e:
            raise StoreError(f"Potion lookup failed: {e}") from e

    def aggregate(self, stages: List) -> List[Dict]:
        pipeline = to_mongo_pipeline(stages)
        self.logger.debug(f"Running aggregation pipeline {pipeline}")
        try:
            return list(self._potions.aggregate(pipeline))
        except PyMongoError as e:
            raise StoreError(f"Aggregation failed: {e}") from e

    def get_user(self, username: str) -> Dict:
        try:
            return self._users.find_one({"username": username})
        except PyMongoError as e:
            raise StoreError(f"User lookup failed: {e}") from e

    def insert_user(self, user_doc: Dict) -> Any:
        try:
            return self._users.insert_one(dict(user_doc)).inserted_id
        except DuplicateKeyError as e:
            raise ConflictError(f"Username already taken: {user_doc.get('username')}") from e
        except PyMongoError as e:
            raise StoreError(f"User insertion failed: {e}") from e

    def ping(self) -> bool:
        try:
            self._client.admin.command("ping")
            return True
        except PyMongoError as e:
            self.logger.error(f"MongoDB ping failed: {e}")
            return False

    def close(self):
        self._client.close()
        super().close()
