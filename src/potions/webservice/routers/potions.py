"""Potion lookup endpoints."""

from typing import Any, Dict, List

from fastapi import APIRouter, Depends, Query

from potions.potions_api.db_api import DBAPI
from potions.query.params import parse_price_range
from potions.webservice.deps import get_db_api
from potions.webservice.services.serializers import normalize_docs, normalize_labels

router = APIRouter(prefix="/potions", tags=["potions"])


@router.get("", response_model=List[Dict[str, Any]])
def list_potions(db: DBAPI = Depends(get_db_api)) -> List[Dict[str, Any]]:
    """List every potion."""
    return normalize_docs(db.potion_query())


@router.get("/names", response_model=List[str])
def list_potion_names(db: DBAPI = Depends(get_db_api)) -> List[str]:
    """List potion names only."""
    return normalize_labels(db.potion_field_values("name"))


@router.get("/vendors", response_model=List[str])
def list_vendor_ids(db: DBAPI = Depends(get_db_api)) -> List[str]:
    """List the vendor id of every potion."""
    return normalize_labels(db.potion_field_values("vendor_id"))


@router.get("/vendor/{vendor_id}", response_model=List[Dict[str, Any]])
def list_potions_by_vendor(vendor_id: str, db: DBAPI = Depends(get_db_api)) -> List[Dict[str, Any]]:
    """List potions sold by a vendor."""
    return normalize_docs(db.potions_by_vendor(vendor_id))


@router.get("/price-range", response_model=List[Dict[str, Any]])
def list_potions_in_price_range(
    min_price: str | None = Query(default=None, alias="min"),
    max_price: str | None = Query(default=None, alias="max"),
    db: DBAPI = Depends(get_db_api),
) -> List[Dict[str, Any]]:
    """List potions whose price lies within ``[min, max]``."""
    low, high = parse_price_range(min_price, max_price)
    return normalize_docs(db.potions_in_price_range(low, high))


@router.get("/{potion_id}", response_model=Dict[str, Any])
def get_potion(potion_id: str, db: DBAPI = Depends(get_db_api)) -> Dict[str, Any]:
    """Get a potion by id."""
    potion = db.get_potion(potion_id)
    return normalize_docs([potion.to_dict()])[0]
