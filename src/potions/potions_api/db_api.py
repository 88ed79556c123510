"""DB API module."""

from typing import Any, Dict, List

from bson import ObjectId

from potions.commons.daos.docdb_dao.docdb_dao_base import DocumentDBDAO
from potions.commons.exceptions import NotFoundError, StoreError, ValidationError
from potions.commons.potions_dataclasses.potion_object import PotionObject
from potions.commons.potions_logger import PotionsLogger


class DBAPI(object):
    """Read-only facade over the potions document store.

    Every method performs a single store round trip. Store failures are logged
    and re-raised as ``StoreError``.
    """

    def __init__(self, dao: DocumentDBDAO = None):
        self.logger = PotionsLogger()
        self._dao_instance = dao

    def _dao(self) -> DocumentDBDAO:
        """Return the injected DAO, or the configured singleton."""
        if self._dao_instance is None:
            self._dao_instance = DocumentDBDAO.get_instance()
        return self._dao_instance

    def potion_query(self, filter: Dict = None, projection: List[str] = None) -> List[Dict]:
        """Query the potions collection.

        Parameters
        ----------
        filter : dict, optional
            Equality/range filter. ``None`` matches every potion.
        projection : list of str, optional
            Fields to keep in each returned document (``_id`` is always kept).

        Returns
        -------
        list of dict
            Matching potion documents.
        """
        try:
            return self._dao().find(filter=filter, projection=projection)
        except StoreError as e:
            self.logger.exception(e)
            raise e

    def get_potion(self, potion_id: str) -> PotionObject:
        """Get a potion by its store identifier.

        Parameters
        ----------
        potion_id : str
            Hex string form of the potion ObjectId.

        Returns
        -------
        PotionObject
            The matching potion.

        Raises
        ------
        ValidationError
            If ``potion_id`` is not a well-formed ObjectId.
        NotFoundError
            If no potion has this identifier.
        """
        if not ObjectId.is_valid(potion_id):
            raise ValidationError(f"Malformed potion id: {potion_id}")
        try:
            doc = self._dao().find_by_id(ObjectId(potion_id))
        except StoreError as e:
            self.logger.exception(e)
            raise e
        if doc is None:
            raise NotFoundError(f"Potion not found: {potion_id}")
        return PotionObject.from_dict(doc)

    def potions_by_vendor(self, vendor_id: str) -> List[Dict]:
        """Get every potion sold by ``vendor_id``."""
        return self.potion_query(filter={"vendor_id": vendor_id})

    def potions_in_price_range(self, min_price: float, max_price: float) -> List[Dict]:
        """Get potions with ``min_price <= price <= max_price``."""
        return self.potion_query(filter={"price": {"$gte": min_price, "$lte": max_price}})

    def potion_field_values(self, field: str) -> List[Any]:
        """Return the non-null values of ``field`` across potions, as a flat list."""
        docs = self.potion_query(projection=[field])
        return [doc[field] for doc in docs if doc.get(field) is not None]

    def aggregate(self, stages: List) -> List[Dict]:
        """Run a typed aggregation pipeline over the potions collection."""
        self.logger.debug(f"DB API going to aggregate with {stages}")
        try:
            return self._dao().aggregate(stages)
        except StoreError as e:
            self.logger.exception(e)
            raise e

    def ping(self) -> bool:
        """Check whether the store answers."""
        try:
            return self._dao().ping()
        except StoreError as e:
            self.logger.exception(e)
            return False
