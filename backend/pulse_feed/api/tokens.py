from __future__ import annotations
import asyncio
from fastapi import APIRouter, Depends, HTTPException, Query, Response
from sse_starlette.sse import EventSourceResponse
from typing import Optional
from pulse_feed.config import Settings, get_settings
from pulse_feed.schemas.feed import CategoryFeed, FeedResponse, RowsResponse, TokenRow
from pulse_feed.schemas.token import TokenCategory
from pulse_feed.services.feed_query import CATEGORY_LABELS, query_tokens
from pulse_feed.services.feed_store import FeedStore, get_feed_store

router = APIRouter(prefix="/api/tokens", tags=["tokens"])

MAX_ROWS_PER_CATEGORY = 200


def cache_headers(response: Response, settings: Settings) -> None:
    response.headers["Cache-Control"] = (
        f"max-age={settings.query_stale_time_seconds}, "
        f"stale-while-revalidate={settings.query_gc_time_seconds}"
    )


def _category_feed(store: FeedStore, category: TokenCategory, **query) -> CategoryFeed:
    rows, total = query_tokens(store.tokens(category), **query)
    return CategoryFeed(
        category=category,
        label=CATEGORY_LABELS[category],
        tokens=[TokenRow.model_validate(t) for t in rows],
        total=total,
    )


def build_feed(store: FeedStore) -> FeedResponse:
    return FeedResponse(
        tick=store.tick_count,
        updated_at=store.updated_at,
        categories=[_category_feed(store, category) for category in TokenCategory],
    )


@router.get("", response_model=FeedResponse)
async def list_feed(
    response: Response,
    store: FeedStore = Depends(get_feed_store),
    settings: Settings = Depends(get_settings),
):
    cache_headers(response, settings)
    return build_feed(store)


@router.get("/stream")
async def feed_stream(
    store: FeedStore = Depends(get_feed_store),
    settings: Settings = Depends(get_settings),
):
    """SSE endpoint pushing the whole feed whenever it changes (tick, top-up or reset)."""

    async def event_generator():
        last_generation = -1
        while True:
            if store.generation != last_generation:
                last_generation = store.generation
                yield {"event": "tick", "data": build_feed(store).model_dump_json()}
            await asyncio.sleep(settings.stream_interval_seconds)

    return EventSourceResponse(event_generator())


@router.get("/{category}", response_model=CategoryFeed)
async def list_category(
    category: TokenCategory,
    response: Response,
    sort_by: Optional[str] = Query(None),
    order: str = Query("asc", pattern="^(asc|desc)$"),
    preset: Optional[str] = Query(None, pattern="^P[123]$"),
    offset: int = Query(0, ge=0),
    limit: Optional[int] = Query(None, ge=1, le=MAX_ROWS_PER_CATEGORY),
    store: FeedStore = Depends(get_feed_store),
    settings: Settings = Depends(get_settings),
):
    cache_headers(response, settings)
    return _category_feed(
        store,
        category,
        sort_by=sort_by,
        order=order,
        preset=preset,
        offset=offset,
        limit=limit or settings.tokens_page_size,
    )


@router.get("/{category}/{token_id}", response_model=TokenRow)
async def get_token(
    category: TokenCategory,
    token_id: str,
    store: FeedStore = Depends(get_feed_store),
):
    token = store.find(token_id)
    if not token or token.category != category:
        raise HTTPException(status_code=404, detail="Token not found")
    return TokenRow.model_validate(token)


@router.post("/{category}/rows", response_model=RowsResponse)
async def add_rows(
    category: TokenCategory,
    count: int = Query(..., ge=1, le=MAX_ROWS_PER_CATEGORY),
    store: FeedStore = Depends(get_feed_store),
):
    """Top a category up to ``count`` rows (never shrinks it)."""
    added = store.ensure_rows(category, count)
    return RowsResponse(category=category, added=added, total=len(store.tokens(category)))
