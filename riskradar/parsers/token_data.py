"""Base token snapshot supplied by the caller, enriched from DEX data."""

from datetime import datetime, timezone

from pydantic import BaseModel, Field, field_validator

from riskradar.parsers.dexscreener.models import DexScreenerPair
from riskradar.utils.numbers import as_optional_float


class TopHolder(BaseModel):
    address: str = ""
    percentage: float = 0.0

    model_config = {"extra": "ignore"}


class CommunityData(BaseModel):
    twitter_followers: float | None = Field(default=None, alias="twitterFollowers")
    telegram_users: float | None = Field(default=None, alias="telegramUsers")

    model_config = {"extra": "ignore", "populate_by_name": True}

    @field_validator("*", mode="before")
    @classmethod
    def _number(cls, value: object) -> float | None:
        return as_optional_float(value)


class DeveloperData(BaseModel):
    stars: float | None = None
    forks: float | None = None
    commit_count: float | None = Field(default=None, alias="commitCount")

    model_config = {"extra": "ignore", "populate_by_name": True}

    @field_validator("*", mode="before")
    @classmethod
    def _number(cls, value: object) -> float | None:
        return as_optional_float(value)


def _parse_timestamp(value: object) -> datetime | None:
    """ISO string, epoch seconds/ms or datetime -> aware UTC datetime.

    Unparseable timestamps read as unknown rather than failing the request.
    """
    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, (int, float)) and not isinstance(value, bool):
        seconds = value / 1000 if value > 1e11 else value
        try:
            parsed = datetime.fromtimestamp(seconds, tz=timezone.utc)
        except (OverflowError, OSError, ValueError):
            return None
    elif isinstance(value, str) and value.strip():
        try:
            parsed = datetime.fromisoformat(value.strip().replace("Z", "+00:00"))
        except ValueError:
            return None
    else:
        return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


_NUMERIC_FIELDS = (
    "current_price",
    "market_cap",
    "trading_volume",
    "price_change_24h",
    "market_cap_rank",
    "liquidity_usd",
    "holder_count",
    "holder_concentration",
    "whale_holders",
)


class TokenData(BaseModel):
    """Loosely-typed token snapshot. Any field may be missing."""

    address: str = ""
    name: str | None = Field(default=None, alias="tokenName")
    symbol: str | None = Field(default=None, alias="tokenSymbol")
    creation_time: datetime | None = Field(default=None, alias="creationTime")

    current_price: float | None = Field(default=None, alias="currentPrice")
    market_cap: float | None = Field(default=None, alias="marketCap")
    trading_volume: float | None = Field(default=None, alias="tradingVolume")
    price_change_24h: float | None = Field(default=None, alias="priceChange24h")
    market_cap_rank: float | None = Field(default=None, alias="marketCapRank")
    liquidity_usd: float | None = Field(default=None, alias="liquidityUSD")

    holder_count: float | None = Field(default=None, alias="holderCount")
    holder_concentration: float | None = Field(default=None, alias="holderConcentration")
    whale_holders: float | None = Field(default=None, alias="whaleHolders")
    top_holders: list[TopHolder] = Field(default_factory=list, alias="topHolders")

    is_liquidity_locked: bool = Field(default=False, alias="isLiquidityLocked")
    liquidity_lock_end_time: datetime | None = Field(
        default=None, alias="liquidityLockEndTime"
    )

    community: CommunityData | None = Field(default=None, alias="communityData")
    developer: DeveloperData | None = Field(default=None, alias="developerData")
    has_whitepaper: bool = Field(default=False, alias="hasWhitepaper")
    team_doxxed: bool = Field(default=False, alias="teamDoxxed")

    model_config = {"extra": "ignore", "populate_by_name": True}

    @field_validator(*_NUMERIC_FIELDS, mode="before")
    @classmethod
    def _number(cls, value: object) -> float | None:
        return as_optional_float(value)

    @field_validator("creation_time", "liquidity_lock_end_time", mode="before")
    @classmethod
    def _timestamp(cls, value: object) -> object:
        return _parse_timestamp(value)

    @field_validator("top_holders", mode="before")
    @classmethod
    def _holders(cls, value: object) -> object:
        return value if isinstance(value, list) else []

    def enrich_from_pair(self, pair: DexScreenerPair | None) -> "TokenData":
        """Overlay live figures from the canonical DEX pair."""
        if pair is None:
            return self
        update: dict[str, object] = {}
        if pair.baseToken is not None:
            if pair.baseToken.name:
                update["name"] = pair.baseToken.name
            if pair.baseToken.symbol:
                update["symbol"] = pair.baseToken.symbol
        if pair.price_usd is not None:
            update["current_price"] = pair.price_usd
        update["market_cap"] = pair.market_cap_usd or self.market_cap or 0.0
        update["trading_volume"] = pair.volume_h24 or self.trading_volume or 0.0
        update["price_change_24h"] = pair.price_change_h24 or 0.0
        if pair.liquidity is not None and pair.liquidity.usd is not None:
            update["liquidity_usd"] = pair.liquidity_usd
        return self.model_copy(update=update)
