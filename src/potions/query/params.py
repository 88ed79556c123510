"""Parsing of raw query-string parameters into typed values."""

import math
from typing import NamedTuple, Optional, Tuple

from potions.commons.exceptions import ValidationError
from potions.commons.vocabulary import GroupField, Metric, ValueField, allowed_values


class SearchParams(NamedTuple):
    """Validated generic search parameters."""

    group: GroupField
    metric: Metric
    field: Optional[ValueField]


def _parse_enum(enum_cls, raw: Optional[str], name: str, errors: list):
    if raw is not None:
        try:
            return enum_cls(raw)
        except ValueError:
            pass
    errors.append(f"'{name}' must be one of {allowed_values(enum_cls)}")
    return None


def parse_search_params(group: Optional[str], metric: Optional[str], champ: Optional[str]) -> SearchParams:
    """Validate the ``group``, ``metric`` and ``champ`` query parameters.

    ``champ`` may be omitted when ``metric`` is ``count``; when given it must
    still be a known value field.

    Raises
    ------
    ValidationError
        Listing every parameter that is missing or outside its allowed values.
    """
    errors = []
    group_field = _parse_enum(GroupField, group, "group", errors)
    metric_value = _parse_enum(Metric, metric, "metric", errors)

    value_field = None
    if champ is not None or metric_value is None or metric_value.needs_field:
        value_field = _parse_enum(ValueField, champ, "champ", errors)

    if errors:
        raise ValidationError("Invalid parameters: " + "; ".join(errors))
    return SearchParams(group=group_field, metric=metric_value, field=value_field)


def _parse_number(raw: Optional[str], name: str) -> float:
    if raw is None or not raw.strip():
        raise ValidationError(f"Query parameter '{name}' is required.")
    try:
        value = float(raw)
    except ValueError as exc:
        raise ValidationError(f"Query parameter '{name}' must be a valid number, got {raw!r}.") from exc
    if not math.isfinite(value):
        raise ValidationError(f"Query parameter '{name}' must be a finite number, got {raw!r}.")
    return value


def parse_price_range(min_price: Optional[str], max_price: Optional[str]) -> Tuple[float, float]:
    """Validate the inclusive ``min``/``max`` price bounds."""
    return _parse_number(min_price, "min"), _parse_number(max_price, "max")
