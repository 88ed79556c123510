"""Fixed analytics pipelines."""

from typing import Any, Dict, List

from potions.commons.vocabulary import GroupField, Metric, ValueField
from potions.query.pipeline import (
    CountDocuments,
    Group,
    ProjectRatio,
    Stage,
    Unwind,
    build_aggregation_spec,
)

DISTINCT_CATEGORIES_OUTPUT = "nombreCategories"
AVERAGE_SCORE_OUTPUT = "averageScore"
RATIO_OUTPUT = "ratio"


def distinct_categories() -> List[Stage]:
    """Count distinct category values across all potions."""
    return [
        Unwind(GroupField.CATEGORIES.value),
        Group(key=GroupField.CATEGORIES.value),
        CountDocuments(DISTINCT_CATEGORIES_OUTPUT),
    ]


def distinct_categories_result(docs: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
    """Report an empty ``$count`` result as a zero count."""
    if not docs:
        return [{DISTINCT_CATEGORIES_OUTPUT: 0}]
    return docs


def average_score_by_vendor() -> List[Stage]:
    return build_aggregation_spec(GroupField.VENDOR_ID, Metric.AVG, ValueField.SCORE, output=AVERAGE_SCORE_OUTPUT)


def average_score_by_category() -> List[Stage]:
    return build_aggregation_spec(GroupField.CATEGORIES, Metric.AVG, ValueField.SCORE, output=AVERAGE_SCORE_OUTPUT)


def strength_flavor_ratio() -> List[Stage]:
    return [ProjectRatio(output=RATIO_OUTPUT, numerator="ratings.strength", denominator="ratings.flavor")]
