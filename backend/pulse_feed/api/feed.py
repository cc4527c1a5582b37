from __future__ import annotations
from fastapi import APIRouter, Depends
from pulse_feed.config import Settings, get_settings
from pulse_feed.schemas.feed import FeedResponse, QueryPolicy
from pulse_feed.services.feed_store import FeedStore, get_feed_store
from pulse_feed.api.tokens import build_feed

router = APIRouter(prefix="/api/feed", tags=["feed"])


@router.get("/query-policy", response_model=QueryPolicy)
async def query_policy(settings: Settings = Depends(get_settings)):
    """Cache settings for the frontend query client (staleness, GC, retries)."""
    return QueryPolicy(
        stale_time_ms=settings.query_stale_time_seconds * 1000,
        gc_time_ms=settings.query_gc_time_seconds * 1000,
        retry=settings.query_retry_count,
        refetch_on_window_focus=settings.query_refetch_on_window_focus,
    )


@router.post("/reset", response_model=FeedResponse)
async def reset_feed(
    store: FeedStore = Depends(get_feed_store),
    settings: Settings = Depends(get_settings),
):
    store.seed(settings.tokens_per_category)
    return build_feed(store)
