from __future__ import annotations
import enum
from typing import Optional
from pydantic import BaseModel, computed_field


class TokenCategory(str, enum.Enum):
    new_pairs = "new-pairs"
    final_stretch = "final-stretch"
    migrated = "migrated"


class TokenMetrics(BaseModel):
    market_cap: float
    volume: float
    price: float
    price_change: float  # cumulative fractional change, signed
    holders: int
    transactions: int
    liquidity: float
    fee_percentage: float

    model_config = {"frozen": True}


class SocialMetrics(BaseModel):
    likes: int = 0
    dislikes: int = 0
    comments: int = 0
    is_bookmarked: bool = False

    model_config = {"frozen": True}


class RiskMetrics(BaseModel):
    top_holder_percentage: float
    dev_holding_percentage: float
    sniper_percentage: float
    bundle_percentage: float
    risk_score: int  # 0-100

    model_config = {"frozen": True}


class SocialLinks(BaseModel):
    twitter: Optional[str] = None
    telegram: Optional[str] = None
    website: Optional[str] = None

    model_config = {"frozen": True}


class Token(BaseModel):
    id: str
    address: str
    name: str
    symbol: str
    image_url: str
    age_in_seconds: int
    category: TokenCategory
    metrics: TokenMetrics
    social_metrics: SocialMetrics
    risk_metrics: RiskMetrics
    social_links: SocialLinks = SocialLinks()
    created_at: int  # epoch ms
    updated_at: int  # epoch ms

    @computed_field
    @property
    def solscan_url(self) -> str:
        return f"https://solscan.io/token/{self.address}"

    model_config = {"frozen": True}
