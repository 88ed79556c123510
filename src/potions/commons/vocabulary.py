"""Closed vocabularies accepted by the aggregation layer."""

from enum import Enum


class GroupField(str, Enum):
    """Fields potions can be grouped by."""

    VENDOR_ID = "vendor_id"
    CATEGORIES = "categories"

    @property
    def is_multi_valued(self) -> bool:
        """Whether grouping needs a fan-out stage first."""
        return self is GroupField.CATEGORIES


class Metric(str, Enum):
    """Per-group metrics."""

    AVG = "avg"
    SUM = "sum"
    COUNT = "count"

    @property
    def needs_field(self) -> bool:
        return self is not Metric.COUNT


class ValueField(str, Enum):
    """Numeric fields a metric can be computed on."""

    SCORE = "score"
    PRICE = "price"


def allowed_values(enum_cls) -> list:
    """Return the raw string values of a vocabulary."""
    return [member.value for member in enum_cls]
