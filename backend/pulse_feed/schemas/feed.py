from __future__ import annotations
from typing import List
from pydantic import BaseModel, computed_field

from pulse_feed.schemas.token import Token, TokenCategory
from pulse_feed.services.feed_query import risk_level


class TokenRow(Token):
    model_config = {"from_attributes": True}

    @computed_field
    @property
    def risk_level(self) -> str:
        return risk_level(self.risk_metrics.risk_score)


class CategoryFeed(BaseModel):
    category: TokenCategory
    label: str
    tokens: List[TokenRow]
    total: int


class FeedResponse(BaseModel):
    tick: int
    updated_at: int  # epoch ms
    categories: List[CategoryFeed]


class RowsResponse(BaseModel):
    category: TokenCategory
    added: int
    total: int


class QueryPolicy(BaseModel):
    """Cache policy the frontend query client is expected to run with."""
    stale_time_ms: int
    gc_time_ms: int
    retry: int
    refetch_on_window_focus: bool
