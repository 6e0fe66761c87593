"""Analyst prompt sent to the AI provider."""

from datetime import datetime, timezone

from riskradar.parsers.dexscreener.models import DexScreenerPair
from riskradar.parsers.etherscan.models import ContractInfo
from riskradar.parsers.honeypot.models import HoneypotCheck
from riskradar.parsers.token_data import TokenData

LABEL_SCALE = "Very Low/Low/Low-Moderate/Moderate/Moderate-High/High/Very High"

_RESPONSE_FIELDS = (
    "rugPullRisk",
    "liquidityRisk",
    "contractRisk",
    "communityRisk",
    "contractSecurity",
    "liquiditySafety",
    "communityHealth",
    "marketStability",
)


def _yes_no(flag: bool) -> str:
    return "YES" if flag else "NO"


def build_analysis_prompt(
    token: TokenData,
    contract: ContractInfo | None = None,
    honeypot: HoneypotCheck | None = None,
    pair: DexScreenerPair | None = None,
    *,
    now: datetime | None = None,
) -> str:
    now = now or datetime.now(timezone.utc)
    contract_age = 0
    if token.creation_time is not None:
        contract_age = max(0, (now - token.creation_time).days)

    hp = honeypot.honeypot_result if honeypot is not None else None
    is_honeypot = hp.is_honeypot if hp is not None else False
    sell_tax = hp.sell_tax if hp is not None else 0.0
    buy_tax = hp.buy_tax if hp is not None else 0.0
    is_verified = contract.is_verified if contract is not None else False
    renounced = contract.has_ownership_renounced if contract is not None else False

    if pair is not None:
        market_cap = pair.market_cap_usd or 0.0
        volume_24h = pair.volume_h24
        liquidity = pair.liquidity_usd
        price_change = pair.price_change_h24 or 0.0
    else:
        market_cap = token.market_cap or 0.0
        volume_24h = token.trading_volume or 0.0
        liquidity = token.liquidity_usd or 0.0
        price_change = token.price_change_24h or 0.0

    schema_lines = []
    for name in _RESPONSE_FIELDS:
        schema_lines.append(f'  "{name}": <0-100>,')
        schema_lines.append(f'  "{name}Label": "<{LABEL_SCALE}>",')
    schema = "\n".join(schema_lines)

    return f"""You are a professional cryptocurrency risk analyst. Analyze this token and provide EXACT numerical scores (0-100) and qualitative labels.

TOKEN INFORMATION:
- Name: {token.name or 'Unknown'}
- Symbol: {token.symbol or 'Unknown'}
- Contract Age: {contract_age} days
- Market Cap: ${market_cap:,.0f}
- 24h Volume: ${volume_24h:,.0f}
- Liquidity: ${liquidity:,.0f}
- Price Change 24h: {price_change}%
- Holder Count: {int(token.holder_count or 0)}

SECURITY DATA:
- Contract Verified: {_yes_no(is_verified)}
- Ownership Renounced: {_yes_no(renounced)}
- Honeypot Detected: {_yes_no(is_honeypot)}
- Buy Tax: {buy_tax}%
- Sell Tax: {sell_tax}%

QUALITATIVE LABELS:
- Very Low (0-10%), Low (11-25%), Low-Moderate (26-40%), Moderate (41-60%), Moderate-High (61-75%), High (76-90%), Very High (91-100%)

Return ONLY this JSON format (no markdown):
{{
{schema}
  "overallRisk": <0-100>,
  "confidence": <70-95>,
  "reasoning": "Brief analysis explanation",
  "recommendations": ["..."],
  "riskFactors": ["..."]
}}"""
