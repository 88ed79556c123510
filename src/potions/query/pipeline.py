"""Typed aggregation pipeline stages and the aggregation spec builder.

A pipeline is a list of stages from a closed set. Every stage renders to the
equivalent MongoDB stage document with ``to_mongo`` and can be evaluated over
plain dicts with ``apply``, following MongoDB semantics for the subset used
here.
"""

from __future__ import annotations

from collections import OrderedDict
from dataclasses import dataclass
from typing import Any, Dict, Iterable, List, Optional, Union

from potions.commons.exceptions import ValidationError
from potions.commons.utils import get_nested, is_number
from potions.commons.vocabulary import GroupField, Metric, ValueField

METRIC_OUTPUTS = {
    Metric.COUNT: "count",
    Metric.SUM: "total",
    Metric.AVG: "average",
}


def _hashable(value: Any) -> Any:
    """Turn list/dict group keys into hashable equivalents."""
    if isinstance(value, list):
        return ("__list__", tuple(_hashable(v) for v in value))
    if isinstance(value, dict):
        return ("__dict__", tuple((k, _hashable(v)) for k, v in value.items()))
    return value


@dataclass(frozen=True)
class Reducer:
    """Metric computed over the units of one group."""

    metric: Metric
    field: Optional[ValueField] = None

    def to_mongo(self) -> Dict[str, Any]:
        if self.metric is Metric.COUNT:
            return {"$sum": 1}
        operator = "$sum" if self.metric is Metric.SUM else "$avg"
        return {operator: f"${self.field.value}"}

    def reduce(self, units: List[Dict[str, Any]]) -> Any:
        if self.metric is Metric.COUNT:
            return len(units)
        values = [v for v in (get_nested(u, self.field.value) for u in units) if is_number(v)]
        if self.metric is Metric.SUM:
            return sum(values)
        if not values:
            return None
        return sum(values) / len(values)


@dataclass(frozen=True)
class Unwind:
    """Fan-out: one unit per element of an array field."""

    field: str

    def to_mongo(self) -> Dict[str, Any]:
        return {"$unwind": f"${self.field}"}

    def apply(self, docs: Iterable[Dict[str, Any]]) -> List[Dict[str, Any]]:
        units = []
        for doc in docs:
            value = get_nested(doc, self.field)
            if value is None:
                continue
            # MongoDB treats a non-array operand as a single-element array.
            items = value if isinstance(value, list) else [value]
            for item in items:
                unit = dict(doc)
                unit[self.field] = item
                units.append(unit)
        return units


@dataclass(frozen=True)
class Group:
    """Partition units by ``key`` and compute one optional metric per partition."""

    key: str
    output: Optional[str] = None
    reducer: Optional[Reducer] = None

    def __post_init__(self):
        if (self.output is None) != (self.reducer is None):
            raise ValueError("Group output and reducer must be given together.")

    def to_mongo(self) -> Dict[str, Any]:
        spec: Dict[str, Any] = {"_id": f"${self.key}"}
        if self.reducer is not None:
            spec[self.output] = self.reducer.to_mongo()
        return {"$group": spec}

    def apply(self, docs: Iterable[Dict[str, Any]]) -> List[Dict[str, Any]]:
        buckets: "OrderedDict[Any, tuple]" = OrderedDict()
        for doc in docs:
            value = get_nested(doc, self.key)
            bucket_key = _hashable(value)
            if bucket_key not in buckets:
                buckets[bucket_key] = (value, [])
            buckets[bucket_key][1].append(doc)

        results = []
        for value, members in buckets.values():
            row = {"_id": value}
            if self.reducer is not None:
                row[self.output] = self.reducer.reduce(members)
            results.append(row)
        return results


@dataclass(frozen=True)
class CountDocuments:
    """Collapse the input into a single ``{output: n}`` document."""

    output: str

    def to_mongo(self) -> Dict[str, Any]:
        return {"$count": self.output}

    def apply(self, docs: Iterable[Dict[str, Any]]) -> List[Dict[str, Any]]:
        n = len(list(docs))
        if n == 0:
            return []
        return [{self.output: n}]


@dataclass(frozen=True)
class ProjectRatio:
    """Per-record ``numerator / denominator``; null on missing operands or a zero denominator."""

    output: str
    numerator: str
    denominator: str

    def to_mongo(self) -> Dict[str, Any]:
        numerator = f"${self.numerator}"
        denominator = f"${self.denominator}"
        return {
            "$project": {
                self.output: {
                    "$cond": {
                        "if": {"$eq": [{"$ifNull": [denominator, 0]}, 0]},
                        "then": None,
                        "else": {"$divide": [numerator, denominator]},
                    }
                }
            }
        }

    def apply(self, docs: Iterable[Dict[str, Any]]) -> List[Dict[str, Any]]:
        results = []
        for doc in docs:
            num = get_nested(doc, self.numerator)
            den = get_nested(doc, self.denominator)
            ratio = None
            if is_number(num) and is_number(den) and den != 0:
                ratio = num / den
            row = {}
            if "_id" in doc:
                row["_id"] = doc["_id"]
            row[self.output] = ratio
            results.append(row)
        return results


Stage = Union[Unwind, Group, CountDocuments, ProjectRatio]


def to_mongo_pipeline(stages: List[Stage]) -> List[Dict[str, Any]]:
    """Render typed stages as a MongoDB aggregation pipeline."""
    return [stage.to_mongo() for stage in stages]


def run_pipeline(stages: List[Stage], docs: Iterable[Dict[str, Any]]) -> List[Dict[str, Any]]:
    """Evaluate typed stages over in-memory documents."""
    current = list(docs)
    for stage in stages:
        current = stage.apply(current)
    return current


def build_aggregation_spec(
    group: GroupField,
    metric: Metric,
    field: Optional[ValueField] = None,
    output: Optional[str] = None,
) -> List[Stage]:
    """Build the grouping pipeline for a ``(group, metric, field)`` triple.

    Parameters
    ----------
    group : GroupField
        Grouping key. ``CATEGORIES`` is multi-valued and gets a fan-out stage
        in front of the grouping stage.
    metric : Metric
        Metric computed per group.
    field : ValueField, optional
        Field the metric is computed on. Required for ``AVG`` and ``SUM``,
        ignored for ``COUNT``.
    output : str, optional
        Name of the computed field in each result. Defaults to ``count``,
        ``total`` or ``average`` depending on ``metric``.

    Returns
    -------
    list of Stage
        Zero or one ``Unwind`` followed by exactly one ``Group``.

    Raises
    ------
    ValidationError
        If an argument is not a member of its vocabulary, or ``field`` is
        missing for a metric that needs it.
    """
    if not isinstance(group, GroupField):
        raise ValidationError(f"Unsupported group field: {group!r}")
    if not isinstance(metric, Metric):
        raise ValidationError(f"Unsupported metric: {metric!r}")
    if metric.needs_field:
        if not isinstance(field, ValueField):
            raise ValidationError(f"Metric '{metric.value}' requires a value field, got {field!r}")
    else:
        field = None

    stages: List[Stage] = []
    if group.is_multi_valued:
        stages.append(Unwind(group.value))
    stages.append(
        Group(
            key=group.value,
            output=output or METRIC_OUTPUTS[metric],
            reducer=Reducer(metric=metric, field=field),
        )
    )
    return stages
