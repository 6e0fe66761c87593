"""Final bounds enforcement shared by the AI and heuristic paths.

No reported score is ever exactly 0 or 100: every metric is capped to
[1, 98] once the producing path is done with it.
"""

import math

from riskradar.models.features import TokenFeatures
from riskradar.models.risk import FeatureSummary, RiskScoreSet
from riskradar.utils.numbers import clamp, round_half_up

SCORE_FLOOR = 1
SCORE_CEILING = 98


def cap_score(score: float) -> int:
    if score is None or math.isnan(score):
        return SCORE_FLOOR
    return int(clamp(round_half_up(clamp(score, -1e9, 1e9)), SCORE_FLOOR, SCORE_CEILING))


def overall_from_primaries(scores: RiskScoreSet) -> int:
    return cap_score(sum(scores.primary_risks()) / 4)


def finalize(scores: RiskScoreSet) -> RiskScoreSet:
    return scores.replace(
        rug_pull_risk=cap_score(scores.rug_pull_risk),
        liquidity_risk=cap_score(scores.liquidity_risk),
        contract_risk=cap_score(scores.contract_risk),
        community_risk=cap_score(scores.community_risk),
        contract_security=cap_score(scores.contract_security),
        liquidity_safety=cap_score(scores.liquidity_safety),
        community_health=cap_score(scores.community_health),
        market_stability=cap_score(scores.market_stability),
        overall_risk=cap_score(scores.overall_risk),
    )


def ownership_risk(features: TokenFeatures) -> int:
    risk = 40
    owner = features.owner_token_percentage
    if owner > 70:
        risk += 50
    elif owner > 50:
        risk += 35
    elif owner > 30:
        risk += 20
    elif owner > 10:
        risk += 10
    else:
        risk -= 15
    if features.has_ownership_renounced == 0:
        risk += 25
    return int(clamp(risk, 0, 100))


def honeypot_risk(features: TokenFeatures) -> int:
    if features.is_honeypot == 1:
        return 100
    return int(clamp(round_half_up(10 + features.honeypot_probability * 0.8), 0, 100))


def summarize_features(
    scores: RiskScoreSet, features: TokenFeatures | None = None
) -> FeatureSummary:
    """Dashboard feature card.

    Without a feature vector (AI path) rug-pull risk stands in for ownership
    risk and liquidity risk for honeypot risk.
    """
    if features is None:
        owner = scores.rug_pull_risk
        honeypot = scores.liquidity_risk
    else:
        owner = ownership_risk(features)
        honeypot = honeypot_risk(features)
    return FeatureSummary(
        contract_security=scores.contract_security,
        liquidity_safety=scores.liquidity_safety,
        community_health=scores.community_health,
        market_stability=scores.market_stability,
        ownership_risk=owner,
        honeypot_risk=honeypot,
    )
