"""Synthetic labelled populations for the heuristic ensemble.

40% scam profiles (risk 80-100), 40% legitimate (5-35), 20% borderline
(35-80) built as a per-field blend of the two templates.
"""

import random
from dataclasses import dataclass

from loguru import logger

from riskradar.models.features import FEATURE_NAMES, TokenFeatures

SCAM_SHARE = 0.4
LEGIT_SHARE = 0.4


@dataclass(frozen=True)
class TrainingSample:
    features: TokenFeatures
    risk: float


def _flag(rng: random.Random, threshold: float) -> int:
    return 1 if rng.random() > threshold else 0


def scam_token_features(rng: random.Random) -> TokenFeatures:
    return TokenFeatures(
        is_honeypot=_flag(rng, 0.4),
        honeypot_probability=rng.uniform(60, 100),
        sell_tax_percentage=rng.uniform(15, 85),
        buy_tax_percentage=rng.uniform(5, 35),
        owner_token_percentage=rng.uniform(40, 90),
        liquidity_lock_duration=rng.uniform(0, 7),
        is_verified=_flag(rng, 0.8),
        has_ownership_renounced=_flag(rng, 0.9),
        contract_age=rng.uniform(0, 14),
        contract_complexity=rng.uniform(5, 35),
        has_proxy_contract=_flag(rng, 0.7),
        price_volatility=rng.uniform(20, 100),
        volume_anomaly_score=rng.uniform(60, 100),
        market_cap_rank=rng.randrange(1000, 3000),
        volume_to_market_cap_ratio=rng.uniform(0, 0.1),
        price_change_24h=(rng.random() - 0.3) * 200,
        liquidity_amount=rng.uniform(0, 10000),
        top_holders_concentration=rng.uniform(70, 100),
        total_holders=rng.randrange(10, 510),
        holder_distribution_score=rng.uniform(0, 30),
        whale_holder_count=rng.randrange(2, 10),
        twitter_followers=rng.randrange(0, 1000),
        telegram_members=rng.randrange(0, 500),
        social_sentiment=rng.uniform(10, 50),
        social_volume_score=rng.uniform(0, 30),
        github_stars=rng.randrange(0, 10),
        github_forks=rng.randrange(0, 5),
        commit_activity=rng.randrange(0, 20),
        has_whitepaper=0,
        team_doxxed=0,
    )


def legit_token_features(rng: random.Random) -> TokenFeatures:
    return TokenFeatures(
        is_honeypot=0,
        honeypot_probability=rng.uniform(0, 15),
        sell_tax_percentage=rng.uniform(0, 8),
        buy_tax_percentage=rng.uniform(0, 5),
        owner_token_percentage=rng.uniform(0, 15),
        liquidity_lock_duration=rng.uniform(365, 1365),
        is_verified=1,
        has_ownership_renounced=_flag(rng, 0.3),
        contract_age=rng.uniform(365, 1865),
        contract_complexity=rng.uniform(30, 110),
        has_proxy_contract=_flag(rng, 0.8),
        price_volatility=rng.uniform(5, 35),
        volume_anomaly_score=rng.uniform(0, 30),
        market_cap_rank=rng.randrange(1, 501),
        volume_to_market_cap_ratio=rng.uniform(0.05, 0.85),
        price_change_24h=(rng.random() - 0.5) * 40,
        liquidity_amount=rng.uniform(100_000, 5_100_000),
        top_holders_concentration=rng.uniform(20, 60),
        total_holders=rng.randrange(5000, 55000),
        holder_distribution_score=rng.uniform(70, 100),
        whale_holder_count=rng.randrange(0, 3),
        twitter_followers=rng.randrange(10_000, 210_000),
        telegram_members=rng.randrange(5000, 105_000),
        social_sentiment=rng.uniform(60, 90),
        social_volume_score=rng.uniform(50, 90),
        github_stars=rng.randrange(100, 2100),
        github_forks=rng.randrange(50, 550),
        commit_activity=rng.randrange(100, 1100),
        has_whitepaper=_flag(rng, 0.2),
        team_doxxed=_flag(rng, 0.4),
    )


def borderline_token_features(rng: random.Random) -> TokenFeatures:
    scam = scam_token_features(rng)
    legit = legit_token_features(rng)
    blended = {
        name: getattr(scam, name) if rng.random() > 0.5 else getattr(legit, name)
        for name in FEATURE_NAMES
    }
    return TokenFeatures(**blended)


def generate_training_data(samples: int, rng: random.Random) -> list[TrainingSample]:
    scam_count = int(samples * SCAM_SHARE)
    legit_count = int(samples * LEGIT_SHARE)
    borderline_count = samples - scam_count - legit_count

    data = [
        TrainingSample(scam_token_features(rng), rng.uniform(80, 100))
        for _ in range(scam_count)
    ]
    data.extend(
        TrainingSample(legit_token_features(rng), rng.uniform(5, 35))
        for _ in range(legit_count)
    )
    data.extend(
        TrainingSample(borderline_token_features(rng), rng.uniform(35, 80))
        for _ in range(borderline_count)
    )

    logger.debug(
        f"[ML] Generated training data: {scam_count} scam, "
        f"{legit_count} legit, {borderline_count} borderline"
    )
    return data
