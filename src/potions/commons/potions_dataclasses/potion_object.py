"""Potion Object module."""

from typing import Dict, AnyStr, List


class PotionObject:
    """Potion object class.

    Wraps one document of the potions collection. Unknown keys found in stored
    documents are kept as attributes so nothing is lost on a round trip.
    """

    _id = None
    """Store-assigned identifier."""

    name: AnyStr = None
    """Display name of the potion."""

    effect: AnyStr = None
    """Free-text description of what the potion does."""

    vendor_id: AnyStr = None
    """Identifier of the single vendor selling this potion."""

    categories: List[str] = None
    """Category labels. May be empty and may repeat values."""

    price: float = None
    """Non-negative price."""

    score: float = None
    """Numeric rating."""

    ratings: Dict = None
    """Sub-ratings, at least ``strength`` and ``flavor``."""

    def __init__(
        self,
        _id=None,
        name=None,
        effect=None,
        vendor_id=None,
        categories=None,
        price=None,
        score=None,
        ratings=None,
    ):
        self._id = _id
        self.name = name
        self.effect = effect
        self.vendor_id = vendor_id
        self.categories = categories
        self.price = price
        self.score = score
        self.ratings = ratings

    @staticmethod
    def from_dict(dict_obj: Dict) -> "PotionObject":
        """Build a PotionObject from a dictionary."""
        obj = PotionObject.__new__(PotionObject)
        for k, v in dict_obj.items():
            setattr(obj, k, v)
        return obj

    def to_dict(self):
        """Convert this object to a dictionary holding exactly its set fields, nulls included."""
        return dict(self.__dict__)

    def __repr__(self):
        """String representation."""
        return (
            f"PotionObject("
            f"_id={repr(self._id)}, "
            f"name={repr(self.name)}, "
            f"vendor_id={repr(self.vendor_id)}, "
            f"categories={repr(self.categories)}, "
            f"price={repr(self.price)}, "
            f"score={repr(self.score)})"
        )

    def __str__(self):
        """String representation."""
        return self.__repr__()
