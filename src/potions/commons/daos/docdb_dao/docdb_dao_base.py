"""Document DB DAO base module."""

from abc import ABC, abstractmethod
from typing import Any, Dict, List

from potions.commons.potions_logger import PotionsLogger
from potions.configs import DB_BACKEND


class DocumentDBDAO(ABC):
    """Abstract document store holding potions and users.

    Backends raise ``StoreError`` for any failure of the underlying store so
    callers never see driver-specific exceptions.
    """

    _instance: "DocumentDBDAO" = None

    @staticmethod
    def get_instance(*args, **kwargs) -> "DocumentDBDAO":
        """Return the configured backend singleton, creating it on first use."""
        if DocumentDBDAO._instance is not None:
            return DocumentDBDAO._instance

        if DB_BACKEND == "mongodb":
            from potions.commons.daos.docdb_dao.mongodb_dao import MongoDBDAO

            DocumentDBDAO._instance = MongoDBDAO(*args, **kwargs)
        elif DB_BACKEND == "memory":
            from potions.commons.daos.docdb_dao.in_memory_dao import InMemoryDAO

            DocumentDBDAO._instance = InMemoryDAO(*args, **kwargs)
        else:
            raise ValueError(f"Unsupported DB backend: {DB_BACKEND}")

        PotionsLogger().debug(f"Using {type(DocumentDBDAO._instance).__name__} as document store.")
        return DocumentDBDAO._instance

    @abstractmethod
    def find(self, filter: Dict = None, projection: List[str] = None) -> List[Dict]:
        """Return potions matching ``filter``, optionally limited to ``projection`` fields."""
        raise NotImplementedError

    @abstractmethod
    def find_by_id(self, potion_id: Any) -> Dict:
        """Return the potion document with this ``_id`` or ``None``."""
        raise NotImplementedError

    @abstractmethod
    def aggregate(self, stages: List) -> List[Dict]:
        """Run a list of typed pipeline stages over the potions collection."""
        raise NotImplementedError

    @abstractmethod
    def get_user(self, username: str) -> Dict:
        """Return the user document for ``username`` or ``None``."""
        raise NotImplementedError

    @abstractmethod
    def insert_user(self, user_doc: Dict) -> Any:
        """Insert a user document and return its id. Raises ``ConflictError`` on a taken username."""
        raise NotImplementedError

    @abstractmethod
    def ping(self) -> bool:
        """Check the store is reachable."""
        raise NotImplementedError

    def close(self):
        """Release backend resources and forget the singleton."""
        if DocumentDBDAO._instance is self:
            DocumentDBDAO._instance = None
