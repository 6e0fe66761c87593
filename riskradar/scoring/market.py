"""Market-stability and DEX liquidity rules shared by both scoring paths."""

from loguru import logger

from riskradar.parsers.dexscreener.models import DexScreenerPair, select_main_pair

STABLECOIN_SYMBOLS = frozenset(
    {"USDT", "USDC", "DAI", "BUSD", "TUSD", "USDD", "FRAX", "LUSD", "SUSD"}
)

ULTRA_HIGH_RISK_STABILITY = 5
SAFETY_BOOST = 30
SAFETY_BOOST_THRESHOLD = 80


def is_stablecoin(symbol: str | None, name: str | None) -> bool:
    return (symbol or "").upper() in STABLECOIN_SYMBOLS or "usd" in (name or "").lower()


def stablecoin_stability(price: float | None) -> int:
    """Score a stablecoin by its deviation from the $1.00 peg."""
    if price is None or price <= 0:
        return 70  # unknown price for a stablecoin is itself a concern
    deviation_pct = abs(price - 1.0) * 100
    if deviation_pct < 0.01:
        return 100
    if deviation_pct < 0.05:
        return 97
    if deviation_pct < 0.1:
        return 94
    if deviation_pct < 0.2:
        return 89
    return 80


def volatility_stability(price_change_24h: float | None) -> int:
    """|24h change| as a volatility proxy."""
    if price_change_24h is None:
        return 60
    volatility = abs(price_change_24h)
    if volatility <= 2:
        return 95
    if volatility <= 5:
        return 85
    if volatility <= 10:
        return 75
    return 50


def dex_volatility_stability(price_change_24h: float) -> int:
    """Strict band edges: a move of exactly 2% already falls in the 85 band."""
    volatility = abs(price_change_24h)
    if volatility < 2:
        return 95
    if volatility < 5:
        return 85
    if volatility < 10:
        return 75
    return 50


def market_stability_score(
    symbol: str | None,
    name: str | None,
    price: float | None,
    price_change_24h: float | None,
) -> int:
    if is_stablecoin(symbol, name):
        score = stablecoin_stability(price)
        logger.debug(f"[MARKET] {symbol or name} is a stablecoin, price={price} -> {score}")
        return score
    return volatility_stability(price_change_24h)


def dex_market_stability_score(
    pairs: list[DexScreenerPair] | None,
    contract_security: float,
    liquidity_safety: float,
    community_health: float,
) -> int:
    """Volatility bands on the canonical pair, boosted when all safety is high."""
    pair = select_main_pair(pairs)
    if pair is None:
        return 50

    score = dex_volatility_stability(pair.price_change_h24 or 0.0)
    if (
        contract_security > SAFETY_BOOST_THRESHOLD
        and liquidity_safety > SAFETY_BOOST_THRESHOLD
        and community_health > SAFETY_BOOST_THRESHOLD
    ):
        score += SAFETY_BOOST
        logger.debug(f"[MARKET] Applied +{SAFETY_BOOST} stability boost")
    return min(100, max(0, score))


def dex_liquidity_risk_score(pairs: list[DexScreenerPair] | None) -> int:
    """Liquidity risk from real on-chain liquidity and 24h volume."""
    pair = select_main_pair(pairs)
    if pair is None:
        return 80

    liquidity = pair.liquidity_usd
    volume = pair.volume_h24
    if liquidity < 10_000 or volume < 10_000:
        return 80
    if liquidity < 100_000:
        return 40
    return 10
