from datetime import timedelta
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Request
from sqlalchemy.orm import Session

from euporia.database.engine import get_db
from euporia.database.repositories.insight_cache_repository import (
    InsightCacheRepository,
    insight_cache_key,
)
from euporia.schemas import InsightSave

router = APIRouter(prefix="/insights", tags=["insights"])


@router.get("/{product_handle}")
def get_insight(product_handle: str, store: Optional[str] = None, db: Session = Depends(get_db)):
    """Return the cached insight document itself (not wrapped). Expired entries are a 404."""
    hit, insight = InsightCacheRepository(db).get(insight_cache_key(product_handle, store))
    if not hit:
        raise HTTPException(status_code=404, detail="Insight not cached")
    return insight


@router.post("/{product_handle}")
def save_insight(
    product_handle: str,
    data: InsightSave,
    request: Request,
    store: Optional[str] = None,
    db: Session = Depends(get_db),
):
    ttl = timedelta(seconds=request.app.state.settings.insight_ttl_seconds)
    InsightCacheRepository(db).save(insight_cache_key(product_handle, store), data.insight, ttl=ttl)
    return {"status": "cached"}
