"""Tests for the rule-based heuristic risk model."""

import random
from dataclasses import replace

import pytest

from riskradar.models.features import TokenFeatures
from riskradar.scoring.aggregator import finalize
from riskradar.scoring.heuristic import (
    HeuristicRiskModel,
    community_risk,
    contract_risk,
    count_legit_indicators,
    count_scam_indicators,
    enforce_score_thresholds,
    liquidity_risk,
    rug_pull_risk,
)
from riskradar.scoring.training import generate_training_data


class TestSubScores:
    def test_scam_profile_saturates(self, scam_features: TokenFeatures) -> None:
        assert rug_pull_risk(scam_features) == 100
        assert liquidity_risk(scam_features) == 100
        assert contract_risk(scam_features) == 100
        assert community_risk(scam_features) == 100

    def test_legit_profile_floors(self, legit_features: TokenFeatures) -> None:
        assert rug_pull_risk(legit_features) == 0
        assert liquidity_risk(legit_features) == 3
        assert contract_risk(legit_features) == 0
        assert community_risk(legit_features) == 0

    def test_default_features(self) -> None:
        f = TokenFeatures()
        # 5 + lock 60 + unverified 25 + not renounced 30 + age<1 40
        assert rug_pull_risk(f) == 100
        # 8 + 50 + 30 + 45 + complexity<10 20
        assert contract_risk(f) == 100

    def test_sell_tax_bands(self) -> None:
        base = TokenFeatures(liquidity_amount=1_000_000, liquidity_lock_duration=365,
                             volume_to_market_cap_ratio=0.1)
        assert liquidity_risk(base) == 3
        assert liquidity_risk(replace(base, sell_tax_percentage=8)) == 13
        assert liquidity_risk(replace(base, sell_tax_percentage=12)) == 28
        assert liquidity_risk(replace(base, sell_tax_percentage=18)) == 43
        assert liquidity_risk(replace(base, sell_tax_percentage=25)) == 63
        assert liquidity_risk(replace(base, sell_tax_percentage=40)) == 83

    def test_very_low_sentiment_band_is_reachable(self) -> None:
        f = TokenFeatures(twitter_followers=200_000, telegram_members=60_000,
                          social_volume_score=50)
        assert community_risk(replace(f, social_sentiment=50)) == 0
        assert community_risk(replace(f, social_sentiment=25)) == 25
        assert community_risk(replace(f, social_sentiment=15)) == 35


class TestThresholds:
    def test_indicator_counts(
        self, scam_features: TokenFeatures, legit_features: TokenFeatures
    ) -> None:
        assert count_scam_indicators(scam_features) == 6
        assert count_scam_indicators(legit_features) == 0
        assert count_legit_indicators(legit_features) == 7

    def test_scam_floor(self, scam_features: TokenFeatures) -> None:
        assert enforce_score_thresholds(10, scam_features) == 85

    def test_two_scam_indicators_floor(self) -> None:
        f = TokenFeatures(is_honeypot=1, liquidity_lock_duration=0, is_verified=1)
        assert count_scam_indicators(f) == 2
        assert enforce_score_thresholds(40, f) == 80

    def test_legit_ceiling(self, legit_features: TokenFeatures) -> None:
        assert enforce_score_thresholds(60, legit_features) == 25

    def test_three_legit_indicators_ceiling(self) -> None:
        f = TokenFeatures(
            is_verified=1, has_ownership_renounced=1, liquidity_lock_duration=100,
            sell_tax_percentage=10, owner_token_percentage=20,
        )
        assert count_legit_indicators(f) == 2
        assert enforce_score_thresholds(60, f) == 60
        assert enforce_score_thresholds(60, replace(f, contract_age=400)) == 35

    def test_result_clamped(self) -> None:
        f = TokenFeatures(
            liquidity_lock_duration=100, is_verified=1,
            sell_tax_percentage=10, owner_token_percentage=20,
        )
        assert enforce_score_thresholds(150, f) == 100


class TestHeuristicRiskModel:
    def test_untrained_model(self) -> None:
        model = HeuristicRiskModel()
        assert not model.is_trained
        assert model.ensemble_prediction(TokenFeatures()) == (50.0, 0.4)

    def test_train_on_empty_set_raises(self) -> None:
        with pytest.raises(ValueError):
            HeuristicRiskModel().train([])

    def test_trained_confidence_bounds(
        self, trained_model: HeuristicRiskModel, scam_features: TokenFeatures
    ) -> None:
        assert trained_model.is_trained
        risk, confidence = trained_model.ensemble_prediction(scam_features)
        assert 0 <= risk <= 100
        assert 0.4 <= confidence <= 1.0

    def test_scam_scores_high(
        self, trained_model: HeuristicRiskModel, scam_features: TokenFeatures
    ) -> None:
        scores = finalize(trained_model.predict(scam_features))
        assert scores.overall_risk >= 80
        assert scores.contract_security == 1
        assert scores.rug_pull_risk == 98

    def test_legit_scores_low(
        self, trained_model: HeuristicRiskModel, legit_features: TokenFeatures
    ) -> None:
        scores = finalize(trained_model.predict(legit_features, market_stability=95))
        assert scores.overall_risk <= 35
        assert scores.contract_security == 98
        assert scores.liquidity_safety == 97
        assert scores.market_stability == 95

    def test_weighted_overall(self) -> None:
        # No scam indicators and fewer than 3 legit ones: blend is untouched
        f = TokenFeatures(
            is_verified=1, liquidity_lock_duration=100, contract_age=100,
            contract_complexity=50, owner_token_percentage=20,
            liquidity_amount=1_000_000, volume_to_market_cap_ratio=0.1,
            sell_tax_percentage=10, twitter_followers=500, telegram_members=500,
            social_volume_score=50,
        )
        scores = HeuristicRiskModel().predict(f)
        # rug 5+15+30=50, liq 3+10=13, contract 8+30=38, community 60
        assert (scores.rug_pull_risk, scores.liquidity_risk) == (50, 13)
        assert (scores.contract_risk, scores.community_risk) == (38, 60)
        # 20 + 4.55 + 7.6 + 3 = 35.15
        assert scores.overall_risk == 35
        assert scores.contract_security == 62
        assert scores.confidence == 0.4

    def test_deterministic_with_same_seed(self, scam_features: TokenFeatures) -> None:
        def build() -> HeuristicRiskModel:
            rng = random.Random(11)
            model = HeuristicRiskModel(num_trees=2, rng=rng)
            model.train(generate_training_data(80, rng))
            return model

        assert build().predict(scam_features) == build().predict(scam_features)
