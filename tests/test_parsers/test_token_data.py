"""Test the caller-supplied token snapshot model."""

from datetime import datetime, timezone

import pytest

from riskradar.parsers.dexscreener.models import DexScreenerPair
from riskradar.parsers.token_data import TokenData


def test_token_data_minimal():
    token = TokenData()
    assert token.address == ""
    assert token.symbol is None
    assert token.creation_time is None
    assert token.top_holders == []
    assert token.is_liquidity_locked is False


def test_token_data_camel_case_payload():
    token = TokenData.model_validate(
        {
            "tokenName": "Pepe",
            "tokenSymbol": "PEPE",
            "currentPrice": "0.0000012",
            "marketCap": 500_000_000,
            "holderCount": None,
            "topHolders": [{"address": "0xabc", "percentage": 12.5}],
            "communityData": {"twitterFollowers": "15000"},
            "developerData": {"stars": 10, "commitCount": "n/a"},
            "teamDoxxed": True,
            "somethingElse": 1,
        }
    )
    assert token.name == "Pepe"
    assert token.symbol == "PEPE"
    assert token.current_price == 0.0000012
    assert token.market_cap == 500_000_000
    assert token.holder_count is None
    assert token.top_holders[0].percentage == 12.5
    assert token.community.twitter_followers == 15000
    assert token.developer.commit_count is None
    assert token.team_doxxed is True


def test_junk_numbers_read_as_missing():
    token = TokenData.model_validate({"tradingVolume": "lots", "priceChange24h": float("nan")})
    assert token.trading_volume is None
    assert token.price_change_24h is None


def test_top_holders_not_a_list():
    assert TokenData.model_validate({"topHolders": "n/a"}).top_holders == []


class TestTimestamps:
    @pytest.mark.parametrize(
        "value",
        [
            "2024-06-01T12:00:00Z",
            "2024-06-01T12:00:00+00:00",
            1717243200,
            1717243200000,
            datetime(2024, 6, 1, 12, 0),
        ],
    )
    def test_formats(self, value: object) -> None:
        token = TokenData.model_validate({"creationTime": value})
        assert token.creation_time == datetime(2024, 6, 1, 12, 0, tzinfo=timezone.utc)

    @pytest.mark.parametrize("value", ["not a date", "", None, True])
    def test_invalid_reads_as_unknown(self, value: object) -> None:
        assert TokenData.model_validate({"creationTime": value}).creation_time is None


class TestEnrichFromPair:
    def test_no_pair(self) -> None:
        token = TokenData(symbol="X")
        assert token.enrich_from_pair(None) is token

    def test_pair_overrides_market_figures(self) -> None:
        token = TokenData(symbol="OLD", name="Old", market_cap=1.0, liquidity_usd=5.0)
        pair = DexScreenerPair.model_validate(
            {
                "baseToken": {"name": "New Token", "symbol": "NEW"},
                "priceUsd": "2.5",
                "volume": {"h24": 1000},
                "priceChange": {"h24": 4},
                "liquidity": {"usd": 9000},
                "marketCap": 1_000_000,
            }
        )
        enriched = token.enrich_from_pair(pair)

        assert enriched.symbol == "NEW"
        assert enriched.name == "New Token"
        assert enriched.current_price == 2.5
        assert enriched.trading_volume == 1000
        assert enriched.price_change_24h == 4
        assert enriched.market_cap == 1_000_000
        assert enriched.liquidity_usd == 9000
        assert token.symbol == "OLD"

    def test_missing_pair_figures_fall_back(self) -> None:
        token = TokenData(symbol="T", market_cap=300.0, trading_volume=50.0, liquidity_usd=5.0)
        enriched = token.enrich_from_pair(DexScreenerPair())

        assert enriched.symbol == "T"
        assert enriched.market_cap == 300
        assert enriched.trading_volume == 50
        assert enriched.current_price is None
        assert enriched.liquidity_usd == 5

    def test_pair_without_price_keeps_known_price(self) -> None:
        token = TokenData(symbol="USDC", current_price=1.0003)
        enriched = token.enrich_from_pair(DexScreenerPair.model_validate({"volume": {"h24": 10}}))

        assert enriched.current_price == 1.0003
