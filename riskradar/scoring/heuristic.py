"""Heuristic risk model used when the AI provider is unavailable.

The four sub-scores come from additive threshold tables and are fully
deterministic. A small bootstrap ensemble of decision trees, trained once
on synthetic populations, only contributes the confidence value.

Calibration constants (additive weights, band edges, 0.4/0.35/0.2/0.05
blend) are behavioural contracts; do not retune without new ground truth.
"""

import random
from dataclasses import dataclass

from loguru import logger

from riskradar.models.features import CRITICAL_FEATURES, FEATURE_NAMES, TokenFeatures
from riskradar.models.risk import RiskScoreSet
from riskradar.scoring.training import TrainingSample
from riskradar.utils.numbers import clamp, round_half_up

MAX_DEPTH = 8
MIN_SAMPLES = 3
MIN_CONFIDENCE = 0.4
UNTRAINED_PREDICTION = 50.0

OVERALL_WEIGHTS = {
    "rug_pull": 0.4,
    "liquidity": 0.35,
    "contract": 0.2,
    "community": 0.05,
}


@dataclass
class TreeNode:
    value: float = 0.0
    feature: str | None = None
    threshold: float = 0.0
    left: "TreeNode | None" = None
    right: "TreeNode | None" = None

    @property
    def is_leaf(self) -> bool:
        return self.feature is None


def _mean_risk(data: list[TrainingSample]) -> float:
    return sum(s.risk for s in data) / len(data)


class DecisionTree:
    """Splits on a random critical feature at the sample mean."""

    def __init__(self, rng: random.Random) -> None:
        self._rng = rng
        self.root: TreeNode | None = None

    def train(self, data: list[TrainingSample], features: list[str]) -> None:
        self.root = self._build(data, features, 0)

    def predict(self, features: TokenFeatures) -> float:
        node = self.root
        if node is None:
            return UNTRAINED_PREDICTION
        while not node.is_leaf:
            value = getattr(features, node.feature)  # type: ignore[arg-type]
            node = node.left if value <= node.threshold else node.right  # type: ignore[assignment]
        return node.value

    def _build(self, data: list[TrainingSample], features: list[str], depth: int) -> TreeNode:
        if len(data) < MIN_SAMPLES or depth > MAX_DEPTH:
            return TreeNode(value=_mean_risk(data))

        critical = [f for f in features if f in CRITICAL_FEATURES]
        candidates = critical or features
        feature = self._rng.choice(candidates)
        threshold = sum(getattr(s.features, feature) for s in data) / len(data)

        left = [s for s in data if getattr(s.features, feature) <= threshold]
        right = [s for s in data if getattr(s.features, feature) > threshold]
        if not left or not right:
            return TreeNode(value=_mean_risk(data))

        return TreeNode(
            feature=feature,
            threshold=threshold,
            left=self._build(left, candidates, depth + 1),
            right=self._build(right, candidates, depth + 1),
        )


# --- deterministic sub-scores ---


def rug_pull_risk(f: TokenFeatures) -> int:
    risk = 5

    if f.is_honeypot == 1:
        risk += 85
    if f.honeypot_probability > 80:
        risk += 80
    elif f.honeypot_probability > 60:
        risk += 60
    elif f.honeypot_probability > 40:
        risk += 40

    # Owner concentration
    if f.owner_token_percentage > 70:
        risk += 70
    elif f.owner_token_percentage > 50:
        risk += 50
    elif f.owner_token_percentage > 30:
        risk += 30
    elif f.owner_token_percentage > 10:
        risk += 15

    # Liquidity lock
    if f.liquidity_lock_duration == 0:
        risk += 60
    elif f.liquidity_lock_duration < 30:
        risk += 40
    elif f.liquidity_lock_duration < 90:
        risk += 20
    elif f.liquidity_lock_duration > 365:
        risk -= 15

    if f.is_verified == 0:
        risk += 25
    if f.has_ownership_renounced == 0:
        risk += 30
    if f.has_proxy_contract == 1:
        risk += 20

    if f.contract_age < 1:
        risk += 40
    elif f.contract_age < 7:
        risk += 25
    elif f.contract_age < 30:
        risk += 10
    elif f.contract_age > 365:
        risk -= 10

    if f.whale_holder_count > 5:
        risk += 25
    elif f.whale_holder_count > 2:
        risk += 15

    return int(clamp(risk, 0, 100))


def liquidity_risk(f: TokenFeatures) -> int:
    risk = 3

    if f.is_honeypot == 1:
        risk += 95
    if f.honeypot_probability > 70:
        risk += 85

    # High taxes prevent selling
    if f.sell_tax_percentage > 30:
        risk += 80
    elif f.sell_tax_percentage > 20:
        risk += 60
    elif f.sell_tax_percentage > 15:
        risk += 40
    elif f.sell_tax_percentage > 10:
        risk += 25
    elif f.sell_tax_percentage > 5:
        risk += 10

    if f.buy_tax_percentage > 20:
        risk += 40
    elif f.buy_tax_percentage > 15:
        risk += 25
    elif f.buy_tax_percentage > 10:
        risk += 15

    if f.liquidity_amount < 1000:
        risk += 50
    elif f.liquidity_amount < 10000:
        risk += 30
    elif f.liquidity_amount < 50000:
        risk += 15

    if f.liquidity_lock_duration == 0:
        risk += 45
    elif f.liquidity_lock_duration < 30:
        risk += 25

    if f.volume_anomaly_score > 80:
        risk += 35
    elif f.volume_anomaly_score > 60:
        risk += 20

    if f.volume_to_market_cap_ratio < 0.001:
        risk += 30
    elif f.volume_to_market_cap_ratio > 2:
        risk += 25

    return int(clamp(risk, 0, 100))


def contract_risk(f: TokenFeatures) -> int:
    risk = 8

    if f.is_verified == 0:
        risk += 50
    if f.has_ownership_renounced == 0:
        risk += 30

    if f.contract_age < 1:
        risk += 45
    elif f.contract_age < 7:
        risk += 30
    elif f.contract_age < 30:
        risk += 15
    elif f.contract_age > 730:
        risk -= 10

    # Too complex or suspiciously trivial
    if f.contract_complexity > 100:
        risk += 25
    elif f.contract_complexity < 10:
        risk += 20

    if f.has_proxy_contract == 1:
        risk += 25

    if f.sell_tax_percentage > 25 or f.buy_tax_percentage > 20:
        risk += 20

    return int(clamp(risk, 0, 100))


def community_risk(f: TokenFeatures) -> int:
    risk = 60  # neutral

    if f.twitter_followers > 100_000:
        risk -= 35
    elif f.twitter_followers > 50_000:
        risk -= 25
    elif f.twitter_followers > 10_000:
        risk -= 15
    elif f.twitter_followers > 1000:
        risk -= 8
    elif f.twitter_followers < 100:
        risk += 20

    if f.telegram_members > 50_000:
        risk -= 25
    elif f.telegram_members > 10_000:
        risk -= 15
    elif f.telegram_members > 1000:
        risk -= 8
    elif f.telegram_members < 100:
        risk += 15

    if f.social_sentiment > 85:
        risk -= 20
    elif f.social_sentiment > 70:
        risk -= 10
    elif f.social_sentiment < 20:
        risk += 35
    elif f.social_sentiment < 30:
        risk += 25

    if f.social_volume_score > 80:
        risk -= 15
    elif f.social_volume_score < 20:
        risk += 20

    if f.team_doxxed == 1:
        risk -= 20
    if f.has_whitepaper == 1:
        risk -= 10

    return int(clamp(risk, 0, 100))


def count_scam_indicators(f: TokenFeatures) -> int:
    return sum(
        [
            f.is_honeypot == 1,
            f.honeypot_probability > 70,
            f.sell_tax_percentage > 20,
            f.owner_token_percentage > 50,
            f.liquidity_lock_duration < 1,
            f.is_verified == 0 and f.contract_age < 7,
        ]
    )


def count_legit_indicators(f: TokenFeatures) -> int:
    return sum(
        [
            f.is_verified == 1,
            f.has_ownership_renounced == 1,
            f.contract_age > 365,
            f.liquidity_lock_duration > 365,
            f.twitter_followers > 10_000,
            f.sell_tax_percentage < 5,
            f.owner_token_percentage < 10,
        ]
    )


def enforce_score_thresholds(base_score: int, f: TokenFeatures) -> int:
    """Push scam profiles to >=80 and cap clearly legitimate ones at <=35."""
    scam = count_scam_indicators(f)
    if scam >= 3:
        return max(85, base_score)
    if scam >= 2:
        return max(80, base_score)

    legit = count_legit_indicators(f)
    if legit >= 5:
        return min(25, base_score)
    if legit >= 3:
        return min(35, base_score)

    return int(clamp(base_score, 0, 100))


class HeuristicRiskModel:
    """Rule-based scorer with a bootstrap-ensemble confidence estimate.

    Train once at startup; predict() is read-only afterwards and safe to
    share between concurrent analyses.
    """

    def __init__(self, num_trees: int = 15, rng: random.Random | None = None) -> None:
        self._num_trees = num_trees
        self._rng = rng or random.Random()
        self._trees: list[DecisionTree] = []

    @property
    def is_trained(self) -> bool:
        return bool(self._trees)

    def train(self, samples: list[TrainingSample]) -> None:
        if not samples:
            raise ValueError("cannot train on an empty sample set")
        logger.info(f"[ML] Training heuristic ensemble with {len(samples)} samples...")
        trees = []
        for _ in range(self._num_trees):
            bootstrap = [self._rng.choice(samples) for _ in range(len(samples))]
            tree = DecisionTree(self._rng)
            tree.train(bootstrap, list(FEATURE_NAMES))
            trees.append(tree)
        self._trees = trees
        logger.info(f"[ML] Ensemble ready ({len(trees)} trees)")

    def ensemble_prediction(self, features: TokenFeatures) -> tuple[float, float]:
        """(mean tree risk, confidence from prediction variance)."""
        if not self._trees:
            return UNTRAINED_PREDICTION, MIN_CONFIDENCE
        predictions = [tree.predict(features) for tree in self._trees]
        mean = sum(predictions) / len(predictions)
        variance = sum((p - mean) ** 2 for p in predictions) / len(predictions)
        confidence = clamp(1 - variance / 1000, MIN_CONFIDENCE, 1.0)
        return mean, confidence

    def predict(self, features: TokenFeatures, *, market_stability: int = 50) -> RiskScoreSet:
        rug = rug_pull_risk(features)
        liquidity = liquidity_risk(features)
        contract = contract_risk(features)
        community = community_risk(features)

        weighted = round_half_up(
            rug * OVERALL_WEIGHTS["rug_pull"]
            + liquidity * OVERALL_WEIGHTS["liquidity"]
            + contract * OVERALL_WEIGHTS["contract"]
            + community * OVERALL_WEIGHTS["community"]
        )
        overall = enforce_score_thresholds(weighted, features)
        ensemble_risk, confidence = self.ensemble_prediction(features)

        logger.debug(
            f"[ML] rug={rug} liq={liquidity} contract={contract} community={community} "
            f"weighted={weighted} overall={overall} ensemble={ensemble_risk:.1f} "
            f"confidence={confidence:.2f}"
        )

        return RiskScoreSet(
            rug_pull_risk=rug,
            liquidity_risk=liquidity,
            contract_risk=contract,
            community_risk=community,
            contract_security=100 - contract,
            liquidity_safety=100 - liquidity,
            community_health=100 - community,
            market_stability=int(clamp(market_stability, 0, 100)),
            overall_risk=overall,
            confidence=confidence,
        )
