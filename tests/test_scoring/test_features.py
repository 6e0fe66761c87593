"""Tests for feature extraction from loosely-typed provider payloads."""

import random
from datetime import datetime, timedelta

import pytest

from riskradar.parsers.etherscan.models import ContractInfo
from riskradar.parsers.honeypot.models import HoneypotCheck, HoneypotResult
from riskradar.parsers.lunarcrush.models import SocialStats
from riskradar.parsers.token_data import CommunityData, TokenData, TopHolder
from riskradar.scoring.features import (
    FeatureExtractor,
    holder_distribution_score,
    honeypot_probability,
    volume_anomaly_score,
)


def _honeypot(**kwargs) -> HoneypotCheck:
    return HoneypotCheck(honeypot_result=HoneypotResult(**kwargs))


class TestHoneypotProbability:
    def test_no_data(self) -> None:
        assert honeypot_probability(None) == 0
        assert honeypot_probability(HoneypotCheck()) == 0

    def test_confirmed_honeypot(self) -> None:
        assert honeypot_probability(_honeypot(is_honeypot=True, sell_tax=0)) == 100

    def test_tax_bands_add_up(self) -> None:
        assert honeypot_probability(_honeypot(sell_tax=35, buy_tax=18)) == 80

    def test_capped_at_100(self) -> None:
        assert honeypot_probability(_honeypot(sell_tax=60, buy_tax=25)) == 100

    def test_low_taxes(self) -> None:
        assert honeypot_probability(_honeypot(sell_tax=5, buy_tax=5)) == 0

    def test_transfer_tax_adds_risk(self) -> None:
        assert honeypot_probability(_honeypot(sell_tax=15, transfer_tax=12)) == 50
        assert honeypot_probability(_honeypot(transfer_tax=10)) == 0


class TestVolumeAnomaly:
    @pytest.mark.parametrize(
        "volume,market_cap,expected",
        [
            (600, 100, 95),
            (300, 100, 80),
            (150, 100, 60),
            (0, 100, 70),
            (50, 100, 20),
        ],
    )
    def test_bands(self, volume: float, market_cap: float, expected: float) -> None:
        assert volume_anomaly_score(volume, market_cap) == pytest.approx(expected)

    def test_zero_market_cap_does_not_divide_by_zero(self) -> None:
        assert volume_anomaly_score(0, 0) == 70


def test_holder_distribution_score() -> None:
    assert holder_distribution_score(20_000, 30) == 90
    assert holder_distribution_score(5_000, 30) == 80
    assert holder_distribution_score(50, 50) == 30
    assert holder_distribution_score(50, 95) == 0


class TestFeatureExtractor:
    def test_empty_input_uses_defaults(self, extractor: FeatureExtractor) -> None:
        f = extractor.extract_features(None)

        assert f.is_honeypot == 0
        assert f.honeypot_probability == 0
        assert f.contract_age == 0
        assert f.liquidity_lock_duration == 0
        assert f.market_cap_rank == 9999
        assert f.top_holders_concentration == 50
        assert f.total_holders == 100
        assert f.holder_distribution_score == 50
        assert f.social_sentiment == 50
        assert f.volume_anomaly_score == 70
        # Unknown age, no contract: young-contract estimate range
        assert 30 <= f.owner_token_percentage <= 80
        assert 10 <= f.contract_complexity <= 59

    def test_contract_age_from_creation_time(
        self, extractor: FeatureExtractor, now: datetime
    ) -> None:
        token = TokenData(creation_time=now - timedelta(days=3))
        assert extractor.extract_features(token).contract_age == pytest.approx(3.0)

    def test_future_creation_time_is_zero_age(
        self, extractor: FeatureExtractor, now: datetime
    ) -> None:
        token = TokenData(creation_time=now + timedelta(days=3))
        assert extractor.extract_features(token).contract_age == 0

    def test_owner_share_from_creator_top_holder(self, extractor: FeatureExtractor) -> None:
        token = TokenData(top_holders=[TopHolder(address="0xabc", percentage=42.5)])
        contract = ContractInfo(contract_creator="0xABC")

        assert extractor.extract_features(token, contract).owner_token_percentage == 42.5

    def test_owner_estimate_when_renounced(self, extractor: FeatureExtractor) -> None:
        contract = ContractInfo(has_ownership_renounced=True)
        f = extractor.extract_features(TokenData(), contract)
        assert 0 <= f.owner_token_percentage <= 10
        assert f.has_ownership_renounced == 1

    def test_owner_estimate_for_older_contract(
        self, extractor: FeatureExtractor, now: datetime
    ) -> None:
        token = TokenData(creation_time=now - timedelta(days=100))
        assert 5 <= extractor.extract_features(token).owner_token_percentage <= 25

    def test_lock_duration_from_end_time(
        self, extractor: FeatureExtractor, now: datetime
    ) -> None:
        token = TokenData(is_liquidity_locked=True, liquidity_lock_end_time=now + timedelta(days=10))
        assert extractor.extract_features(token).liquidity_lock_duration == pytest.approx(10.0)

    def test_expired_lock_is_zero(self, extractor: FeatureExtractor, now: datetime) -> None:
        token = TokenData(is_liquidity_locked=True, liquidity_lock_end_time=now - timedelta(days=1))
        assert extractor.extract_features(token).liquidity_lock_duration == 0

    def test_locked_without_end_time_is_estimated(self, extractor: FeatureExtractor) -> None:
        token = TokenData(is_liquidity_locked=True)
        assert 30 <= extractor.extract_features(token).liquidity_lock_duration <= 330

    def test_complexity_from_source(self, extractor: FeatureExtractor) -> None:
        contract = ContractInfo(
            source_code="function a() {}\nfunction b() {}\nmodifier onlyOwner() { _; }"
        )
        assert extractor.extract_features(TokenData(), contract).contract_complexity == 4

    def test_honeypot_flags_and_taxes(self, extractor: FeatureExtractor) -> None:
        f = extractor.extract_features(
            TokenData(), honeypot_info=_honeypot(is_honeypot=True, sell_tax=99, buy_tax=12)
        )
        assert f.is_honeypot == 1
        assert f.honeypot_probability == 100
        assert f.sell_tax_percentage == 99
        assert f.buy_tax_percentage == 12

    def test_social_stats_preferred_over_community_data(
        self, extractor: FeatureExtractor
    ) -> None:
        token = TokenData(community=CommunityData(twitter_followers=5000, telegram_users=300))
        social = SocialStats(twitter_followers=7000, bullish_sentiment=80)

        f = extractor.extract_features(token, social_info=social)

        assert f.twitter_followers == 7000
        assert f.telegram_members == 300
        assert f.social_sentiment == 80

    def test_community_data_fallback(self, extractor: FeatureExtractor) -> None:
        token = TokenData(community=CommunityData(twitter_followers=5000))
        assert extractor.extract_features(token).twitter_followers == 5000

    def test_zero_sentiment_reads_as_neutral(self, extractor: FeatureExtractor) -> None:
        f = extractor.extract_features(TokenData(), social_info=SocialStats(bullish_sentiment=0))
        assert f.social_sentiment == 50

    def test_market_figures(self, extractor: FeatureExtractor) -> None:
        token = TokenData.model_validate(
            {
                "tradingVolume": 50_000,
                "marketCap": 1_000_000,
                "priceChange24h": -12.5,
                "liquidityUSD": "75000",
                "holderCount": 2000,
                "holderConcentration": 40,
                "marketCapRank": 150,
            }
        )
        f = extractor.extract_features(token)

        assert f.volume_to_market_cap_ratio == pytest.approx(0.05)
        assert f.price_change_24h == 12.5
        assert f.price_volatility == 12.5
        assert f.liquidity_amount == 75_000
        assert f.total_holders == 2000
        assert f.top_holders_concentration == 40
        assert f.holder_distribution_score == 70
        assert f.market_cap_rank == 150

    def test_same_seed_same_estimates(self, now: datetime) -> None:
        a = FeatureExtractor(rng=random.Random(5), clock=lambda: now)
        b = FeatureExtractor(rng=random.Random(5), clock=lambda: now)
        token = TokenData(is_liquidity_locked=True)

        assert a.extract_features(token) == b.extract_features(token)
