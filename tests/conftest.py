"""Shared test fixtures."""

import random
from datetime import datetime, timezone

import pytest

from riskradar.models.features import TokenFeatures
from riskradar.scoring.features import FeatureExtractor
from riskradar.scoring.heuristic import HeuristicRiskModel
from riskradar.scoring.training import generate_training_data

NOW = datetime(2024, 6, 1, 12, 0, tzinfo=timezone.utc)


@pytest.fixture
def now() -> datetime:
    return NOW


@pytest.fixture
def extractor() -> FeatureExtractor:
    """Seeded extractor with a frozen clock."""
    return FeatureExtractor(rng=random.Random(42), clock=lambda: NOW)


@pytest.fixture(scope="session")
def trained_model() -> HeuristicRiskModel:
    """Small ensemble trained once per session; predictions are read-only."""
    rng = random.Random(7)
    model = HeuristicRiskModel(num_trees=3, rng=rng)
    model.train(generate_training_data(150, rng))
    return model


@pytest.fixture
def scam_features() -> TokenFeatures:
    return TokenFeatures(
        is_honeypot=1,
        honeypot_probability=100,
        sell_tax_percentage=50,
        buy_tax_percentage=25,
        owner_token_percentage=80,
        liquidity_lock_duration=0,
        is_verified=0,
        has_ownership_renounced=0,
        contract_age=0.5,
        contract_complexity=5,
        has_proxy_contract=1,
        volume_anomaly_score=95,
        volume_to_market_cap_ratio=0.0005,
        liquidity_amount=500,
        whale_holder_count=6,
        twitter_followers=50,
        telegram_members=20,
        social_sentiment=15,
        social_volume_score=5,
    )


@pytest.fixture
def legit_features() -> TokenFeatures:
    return TokenFeatures(
        sell_tax_percentage=1,
        buy_tax_percentage=1,
        owner_token_percentage=5,
        liquidity_lock_duration=400,
        is_verified=1,
        has_ownership_renounced=1,
        contract_age=800,
        contract_complexity=50,
        volume_anomaly_score=20,
        volume_to_market_cap_ratio=0.05,
        liquidity_amount=5_000_000,
        whale_holder_count=1,
        twitter_followers=200_000,
        telegram_members=60_000,
        social_sentiment=90,
        social_volume_score=90,
        has_whitepaper=1,
        team_doxxed=1,
    )
