"""Aggregation endpoints over the potions collection."""

from typing import Any, Dict, List

from fastapi import APIRouter, Depends

from potions.potions_api.db_api import DBAPI
from potions.query import analytics
from potions.query.params import parse_search_params
from potions.query.pipeline import build_aggregation_spec
from potions.webservice.deps import get_db_api
from potions.webservice.services.serializers import normalize_docs

router = APIRouter(prefix="/potions/analytics", tags=["analytics"])


@router.get("/distinct-categories", response_model=List[Dict[str, Any]])
def distinct_categories(db: DBAPI = Depends(get_db_api)) -> List[Dict[str, Any]]:
    """Count distinct categories across all potions."""
    docs = db.aggregate(analytics.distinct_categories())
    return normalize_docs(analytics.distinct_categories_result(docs))


@router.get("/average-score-by-vendor", response_model=List[Dict[str, Any]])
def average_score_by_vendor(db: DBAPI = Depends(get_db_api)) -> List[Dict[str, Any]]:
    """Average potion score per vendor."""
    return normalize_docs(db.aggregate(analytics.average_score_by_vendor()))


@router.get("/average-score-by-category", response_model=List[Dict[str, Any]])
def average_score_by_category(db: DBAPI = Depends(get_db_api)) -> List[Dict[str, Any]]:
    """Average potion score per category."""
    return normalize_docs(db.aggregate(analytics.average_score_by_category()))


@router.get("/strength-flavor-ratio", response_model=List[Dict[str, Any]])
def strength_flavor_ratio(db: DBAPI = Depends(get_db_api)) -> List[Dict[str, Any]]:
    """Strength to flavor ratio of every potion."""
    return normalize_docs(db.aggregate(analytics.strength_flavor_ratio()))


@router.get("/search", response_model=List[Dict[str, Any]])
def search(
    group: str | None = None,
    metric: str | None = None,
    champ: str | None = None,
    db: DBAPI = Depends(get_db_api),
) -> List[Dict[str, Any]]:
    """Group potions by ``group`` and compute ``metric`` over ``champ``.

    ``group`` is ``vendor_id`` or ``categories``, ``metric`` is ``avg``,
    ``sum`` or ``count`` and ``champ`` is ``score`` or ``price`` (optional for
    ``count``). Invalid values are rejected before the store is queried.
    """
    params = parse_search_params(group, metric, champ)
    stages = build_aggregation_spec(params.group, params.metric, params.field)
    return normalize_docs(db.aggregate(stages))
