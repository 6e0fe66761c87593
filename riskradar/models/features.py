"""Flat per-token feature vector consumed by the heuristic risk model."""

from dataclasses import dataclass, fields


@dataclass(frozen=True)
class TokenFeatures:
    """One token snapshot. Flags are 0/1 ints so trees can split on them."""

    # Critical scam indicators
    is_honeypot: int = 0
    honeypot_probability: float = 0.0  # 0-100
    sell_tax_percentage: float = 0.0
    buy_tax_percentage: float = 0.0
    owner_token_percentage: float = 0.0  # % of supply held by deployer/owner
    liquidity_lock_duration: float = 0.0  # days remaining

    # Contract security
    is_verified: int = 0
    has_ownership_renounced: int = 0
    contract_age: float = 0.0  # days since creation
    contract_complexity: float = 0.0  # function/modifier count proxy
    has_proxy_contract: int = 0

    # Market and trading
    price_volatility: float = 0.0
    volume_anomaly_score: float = 0.0
    market_cap_rank: float = 9999.0
    volume_to_market_cap_ratio: float = 0.0
    price_change_24h: float = 0.0  # absolute value
    liquidity_amount: float = 0.0  # USD

    # Holder distribution
    top_holders_concentration: float = 50.0
    total_holders: float = 100.0
    holder_distribution_score: float = 50.0
    whale_holder_count: float = 0.0  # holders with >5% supply

    # Social and community
    twitter_followers: float = 0.0
    telegram_members: float = 0.0
    social_sentiment: float = 50.0
    social_volume_score: float = 0.0

    # Developer and project
    github_stars: float = 0.0
    github_forks: float = 0.0
    commit_activity: float = 0.0
    has_whitepaper: int = 0
    team_doxxed: int = 0

    def as_dict(self) -> dict[str, float]:
        return {name: getattr(self, name) for name in FEATURE_NAMES}


FEATURE_NAMES: tuple[str, ...] = tuple(f.name for f in fields(TokenFeatures))

# Trees prefer these when choosing a split
CRITICAL_FEATURES: tuple[str, ...] = (
    "is_honeypot",
    "honeypot_probability",
    "sell_tax_percentage",
    "owner_token_percentage",
    "liquidity_lock_duration",
)
