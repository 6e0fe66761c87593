"""Tests for the AI analyst prompt."""

from datetime import datetime, timedelta

from riskradar.parsers.dexscreener.models import DexScreenerPair
from riskradar.parsers.etherscan.models import ContractInfo
from riskradar.parsers.honeypot.models import HoneypotCheck, HoneypotResult
from riskradar.parsers.llm_analyzer.prompt import build_analysis_prompt
from riskradar.parsers.token_data import TokenData


def test_prompt_includes_security_context(now: datetime) -> None:
    token = TokenData(
        name="Pepe", symbol="PEPE", creation_time=now - timedelta(days=3), holder_count=1234
    )
    prompt = build_analysis_prompt(
        token,
        ContractInfo(is_verified=True),
        HoneypotCheck(honeypot_result=HoneypotResult(sell_tax=12, buy_tax=1)),
        now=now,
    )

    assert "- Name: Pepe" in prompt
    assert "- Contract Age: 3 days" in prompt
    assert "- Holder Count: 1234" in prompt
    assert "- Contract Verified: YES" in prompt
    assert "- Ownership Renounced: NO" in prompt
    assert "- Honeypot Detected: NO" in prompt
    assert "- Sell Tax: 12.0%" in prompt
    assert '"rugPullRiskLabel"' in prompt
    assert '"marketStability": <0-100>' in prompt


def test_prompt_prefers_pair_figures(now: datetime) -> None:
    pair = DexScreenerPair.model_validate(
        {"liquidity": {"usd": 500000}, "volume": {"h24": 1200000}, "marketCap": 9000000}
    )
    prompt = build_analysis_prompt(TokenData(liquidity_usd=5.0), pair=pair, now=now)

    assert "- Liquidity: $500,000" in prompt
    assert "- 24h Volume: $1,200,000" in prompt
    assert "- Market Cap: $9,000,000" in prompt
    assert "- Symbol: Unknown" in prompt
