"""AI risk normalizer: raw provider scores -> bounded, consistent RiskScoreSet.

Pipeline, in order:
  1. high-risk bypass (any raw score > 90 is trusted untouched)
  2. per-metric calibration transforms
  3. safety scores = 100 - risk
  4. ultra-high-risk market-stability override
  5. cap every score to [1, 98]
  6. overall risk = capped mean of the four primary risks
  7. label-consistency pass (primary/safety pairs only; overall is final)

The transform factors were tuned against observed over-estimation by the
upstream model. They are calibration constants, not derived values.
"""

from dataclasses import dataclass

from loguru import logger

from riskradar.models.risk import AILabels, RiskScoreSet
from riskradar.parsers.dexscreener.models import DexScreenerPair, select_main_pair
from riskradar.parsers.llm_analyzer.response import AIRiskAssessment
from riskradar.parsers.token_data import TokenData
from riskradar.scoring.aggregator import cap_score, overall_from_primaries
from riskradar.scoring.market import (
    ULTRA_HIGH_RISK_STABILITY,
    dex_liquidity_risk_score,
    dex_market_stability_score,
    is_stablecoin,
    market_stability_score,
    stablecoin_stability,
)
from riskradar.scoring.recommendations import qualitative_label
from riskradar.utils.numbers import clamp, round_half_up

HIGH_RISK_BYPASS = 90
ULTRA_HIGH_RISK = 80

RUG_PULL_FACTOR = 0.10
COMMUNITY_FACTOR = 0.40
CONTRACT_FACTOR = 0.40
CONTRACT_SPLIT = 30
CONTRACT_LOW_OFFSET = 10
LIQUIDITY_FACTOR = 0.40
LIQUIDITY_SPLIT = 20
LIQUIDITY_LOW_ADJUSTMENT = 5

AI_CONFIDENCE_MIN = 70
AI_CONFIDENCE_MAX = 95

DEFAULT_REASONING = "Analysis completed using AI assessment with real-time market data."
HIGH_RISK_PREFIX = "HIGH RISK TOKEN DETECTED: "
HIGH_RISK_SUFFIX = " Multiple risk factors exceed critical thresholds."

# (overall risk floor, primary risk floor,
#  contractSecurity / liquiditySafety / communityHealth / marketStability ceilings)
CRITICAL_BAND = (70, 90, (10, 5, 10, 10))
HIGH_BAND = (50, 80, (20, 15, 20, 20))


def _bounded(value: float) -> int:
    return round_half_up(clamp(value, 0, 100))


def transform_rug_pull(raw: float) -> int:
    return _bounded(raw * RUG_PULL_FACTOR)


def transform_community(raw: float) -> int:
    return _bounded(raw * COMMUNITY_FACTOR)


def transform_contract(raw: float) -> int:
    if raw > CONTRACT_SPLIT:
        return _bounded(raw * CONTRACT_FACTOR)
    return _bounded(raw - CONTRACT_LOW_OFFSET)


def transform_liquidity(raw: float) -> int:
    if raw > LIQUIDITY_SPLIT:
        return _bounded(raw * LIQUIDITY_FACTOR)
    return _bounded(raw)


def adjust_low_liquidity(transformed: float, raw: float) -> int:
    """Extra -5 when the provider's own liquidity call was already low."""
    if raw <= LIQUIDITY_SPLIT:
        transformed -= LIQUIDITY_LOW_ADJUSTMENT
    return _bounded(transformed)


def risk_band(overall_risk: int) -> str:
    if overall_risk >= CRITICAL_BAND[0]:
        return "Critical"
    if overall_risk >= HIGH_BAND[0]:
        return "High"
    if overall_risk >= 30:
        return "Moderate"
    return "Low"


def apply_label_consistency(scores: RiskScoreSet) -> RiskScoreSet:
    """Nudge primary/safety pairs so they never contradict the overall label.

    overall_risk is left untouched.
    """
    band = risk_band(scores.overall_risk)
    if band == "Critical":
        _, floor, ceilings = CRITICAL_BAND
    elif band == "High":
        _, floor, ceilings = HIGH_BAND
    else:
        return scores

    logger.debug(f"[AI] {band} risk consistency: primary >= {floor}, safety <= {ceilings}")
    cs_max, ls_max, ch_max, ms_max = ceilings
    return scores.replace(
        rug_pull_risk=cap_score(max(scores.rug_pull_risk, floor)),
        liquidity_risk=cap_score(max(scores.liquidity_risk, floor)),
        contract_risk=cap_score(max(scores.contract_risk, floor)),
        community_risk=cap_score(max(scores.community_risk, floor)),
        contract_security=cap_score(min(scores.contract_security, cs_max)),
        liquidity_safety=cap_score(min(scores.liquidity_safety, ls_max)),
        community_health=cap_score(min(scores.community_health, ch_max)),
        market_stability=cap_score(min(scores.market_stability, ms_max)),
    )


@dataclass(frozen=True)
class NormalizedAssessment:
    scores: RiskScoreSet
    labels: AILabels
    reasoning: str
    recommendations: list[str]
    risk_factors: list[str]
    ai_confidence: int
    high_risk: bool


class AIRiskNormalizer:
    """Stateless; one instance is shared by every analysis."""

    def normalize(
        self,
        assessment: AIRiskAssessment,
        token_data: TokenData | None = None,
        pairs: list[DexScreenerPair] | None = None,
    ) -> NormalizedAssessment:
        raw_rug, raw_liq, raw_contract, raw_community = assessment.raw_scores()

        bypass = any(score > HIGH_RISK_BYPASS for score in assessment.raw_scores())
        if bypass:
            logger.info("[AI] High-risk token - using provider scores without transformation")
            rug, liquidity, contract, community = raw_rug, raw_liq, raw_contract, raw_community
        else:
            rug = transform_rug_pull(raw_rug)
            community = transform_community(raw_community)
            contract = transform_contract(raw_contract)
            if pairs is not None:
                liquidity = dex_liquidity_risk_score(pairs)
                logger.debug(f"[AI] Using DEX liquidity risk: {liquidity}")
            else:
                liquidity = transform_liquidity(raw_liq)
            liquidity = adjust_low_liquidity(liquidity, raw_liq)

        contract_security = clamp(100 - contract, 0, 100)
        liquidity_safety = clamp(100 - liquidity, 0, 100)
        community_health = clamp(100 - community, 0, 100)

        ultra = all(score > ULTRA_HIGH_RISK for score in (rug, liquidity, contract, community))
        if ultra:
            logger.info(f"[AI] Ultra high-risk token - market stability forced to {ULTRA_HIGH_RISK_STABILITY}")
            market_stability = ULTRA_HIGH_RISK_STABILITY
        else:
            market_stability = self._market_stability(
                token_data, pairs, contract_security, liquidity_safety, community_health
            )

        capped = RiskScoreSet(
            rug_pull_risk=cap_score(rug),
            liquidity_risk=cap_score(liquidity),
            contract_risk=cap_score(contract),
            community_risk=cap_score(community),
            contract_security=cap_score(contract_security),
            liquidity_safety=cap_score(liquidity_safety),
            community_health=cap_score(community_health),
            market_stability=cap_score(market_stability),
            overall_risk=0,
            confidence=0.0,
        )
        ai_confidence = int(
            clamp(
                assessment.confidence if assessment.confidence is not None else AI_CONFIDENCE_MIN,
                AI_CONFIDENCE_MIN,
                AI_CONFIDENCE_MAX,
            )
        )
        capped = capped.replace(
            overall_risk=overall_from_primaries(capped),
            confidence=ai_confidence / 100,
        )
        final = apply_label_consistency(capped)

        reasoning = assessment.reasoning or DEFAULT_REASONING
        if bypass or ultra:
            reasoning = f"{HIGH_RISK_PREFIX}{reasoning}{HIGH_RISK_SUFFIX}"

        logger.debug(
            f"[AI] Normalized: overall={final.overall_risk} rug={final.rug_pull_risk} "
            f"liq={final.liquidity_risk} contract={final.contract_risk} "
            f"community={final.community_risk} stability={final.market_stability}"
        )

        return NormalizedAssessment(
            scores=final,
            labels=self._labels(assessment, final),
            reasoning=reasoning,
            recommendations=list(assessment.recommendations),
            risk_factors=list(assessment.risk_factors),
            ai_confidence=ai_confidence,
            high_risk=bypass or ultra,
        )

    @staticmethod
    def _market_stability(
        token: TokenData | None,
        pairs: list[DexScreenerPair] | None,
        contract_security: float,
        liquidity_safety: float,
        community_health: float,
    ) -> int:
        symbol = token.symbol if token is not None else None
        name = token.name if token is not None else None

        if pairs is not None:
            if is_stablecoin(symbol, name):
                pair = select_main_pair(pairs)
                price = pair.price_usd if pair is not None else None
                if price is None and token is not None:
                    price = token.current_price
                return stablecoin_stability(price)
            return dex_market_stability_score(
                pairs, contract_security, liquidity_safety, community_health
            )

        return market_stability_score(
            symbol,
            name,
            token.current_price if token is not None else None,
            token.price_change_24h if token is not None else None,
        )

    @staticmethod
    def _labels(assessment: AIRiskAssessment, scores: RiskScoreSet) -> AILabels:
        return AILabels(
            rug_pull_risk_label=assessment.rug_pull_risk_label
            or qualitative_label(scores.rug_pull_risk),
            liquidity_risk_label=assessment.liquidity_risk_label
            or qualitative_label(scores.liquidity_risk),
            contract_risk_label=assessment.contract_risk_label
            or qualitative_label(scores.contract_risk),
            community_risk_label=assessment.community_risk_label
            or qualitative_label(scores.community_risk),
            contract_security_label=assessment.contract_security_label
            or qualitative_label(scores.contract_security),
            liquidity_safety_label=assessment.liquidity_safety_label
            or qualitative_label(scores.liquidity_safety),
            community_health_label=assessment.community_health_label
            or qualitative_label(scores.community_health),
            market_stability_label=assessment.market_stability_label
            or qualitative_label(scores.market_stability),
        )
