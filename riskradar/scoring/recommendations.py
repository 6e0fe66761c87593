"""User-facing recommendation and risk-factor text.

Threshold bands here are part of the dashboard contract: users read the
same bands the scorers use.
"""

from riskradar.models.features import TokenFeatures
from riskradar.models.risk import ConfidenceLevel, FeatureSummary, RiskScoreSet
from riskradar.parsers.etherscan.models import ContractInfo
from riskradar.parsers.honeypot.models import HoneypotCheck
from riskradar.parsers.token_data import TokenData

DEFAULT_RECOMMENDATION = "📊 Standard due diligence recommended"
NO_RISK_FACTORS = "✅ No major risk factors identified"


def qualitative_label(score: float) -> str:
    if score <= 10:
        return "Very Low"
    if score <= 25:
        return "Low"
    if score <= 40:
        return "Low-Moderate"
    if score <= 60:
        return "Moderate"
    if score <= 75:
        return "Moderate-High"
    if score <= 90:
        return "High"
    return "Very High"


def _is_honeypot(honeypot: HoneypotCheck | None) -> bool:
    return bool(
        honeypot is not None
        and honeypot.honeypot_result is not None
        and honeypot.honeypot_result.is_honeypot
    )


def overall_risk_message(overall_risk: int) -> str | None:
    if overall_risk >= 85:
        return "🚨 EXTREME DANGER - DO NOT INVEST. This token shows multiple critical scam indicators."
    if overall_risk >= 70:
        return "💀 VERY HIGH RISK - Strong recommendation to avoid. Multiple red flags detected."
    if overall_risk >= 50:
        return "⚠️ HIGH RISK - Exercise extreme caution. Consider avoiding this investment."
    if overall_risk >= 35:
        return "⚠️ Moderate risk detected - Conduct thorough research before investing."
    if overall_risk < 25:
        return "✅ Low risk profile - This appears to be a relatively safe investment."
    return None


def generate_recommendations(
    scores: RiskScoreSet,
    summary: FeatureSummary,
    honeypot: HoneypotCheck | None = None,
) -> list[str]:
    recommendations = []

    headline = overall_risk_message(scores.overall_risk)
    if headline:
        recommendations.append(headline)

    if summary.honeypot_risk > 80 or _is_honeypot(honeypot):
        recommendations.append(
            "💀 CRITICAL: HONEYPOT DETECTED - You will NOT be able to sell this token after purchase"
        )
    elif summary.honeypot_risk > 50:
        recommendations.append("🔍 High honeypot risk - Verify selling capability before investing")

    if summary.ownership_risk > 70:
        recommendations.append("🚨 CRITICAL: High owner token concentration - Extreme rug pull risk")
    elif summary.ownership_risk > 50:
        recommendations.append("⚠️ Significant owner concentration - Monitor for potential rug pull")

    if summary.contract_security < 30:
        recommendations.append(
            "⚠️ DANGER: Critical contract security issues - Unverified or risky contract detected"
        )
    elif summary.contract_security > 80:
        recommendations.append("✅ Excellent contract security - Verified and well-structured")

    if summary.liquidity_safety < 25:
        recommendations.append("🚨 CRITICAL: Liquidity manipulation detected - Trading may be impossible")
    elif summary.liquidity_safety > 75:
        recommendations.append("💧 Good liquidity safety - Trading appears unrestricted")

    if scores.confidence > 0.8:
        recommendations.append("🎯 High confidence analysis - Sufficient data for reliable assessment")
    elif scores.confidence < 0.5:
        recommendations.append("❓ Moderate confidence - Limited data available, exercise extra caution")

    return recommendations or [DEFAULT_RECOMMENDATION]


def identify_risk_factors(
    scores: RiskScoreSet,
    features: TokenFeatures,
    contract: ContractInfo | None = None,
    honeypot: HoneypotCheck | None = None,
    token: TokenData | None = None,
) -> list[str]:
    factors = []

    if _is_honeypot(honeypot):
        factors.append("🚨 HONEYPOT CONFIRMED - Cannot sell after purchase")

    sell_tax = features.sell_tax_percentage
    buy_tax = features.buy_tax_percentage
    if sell_tax > 30:
        factors.append(f"💸 EXTREME sell tax: {sell_tax:g}% - May prevent selling")
    elif sell_tax > 20:
        factors.append(f"💸 Very high sell tax: {sell_tax:g}%")
    elif sell_tax > 10:
        factors.append(f"💸 High sell tax: {sell_tax:g}%")

    if buy_tax > 15:
        factors.append(f"💸 Very high buy tax: {buy_tax:g}%")
    elif buy_tax > 10:
        factors.append(f"💸 High buy tax: {buy_tax:g}%")

    if contract is not None and not contract.is_verified:
        factors.append("❌ Contract source code not verified")
    if contract is not None and not contract.has_ownership_renounced:
        factors.append("⚠️ Contract ownership not renounced - Owner retains control")

    if features.owner_token_percentage > 50:
        factors.append(
            f"🏦 High owner concentration: {features.owner_token_percentage:.1f}% of supply"
        )

    if features.liquidity_lock_duration == 0:
        factors.append("🌊 Liquidity not locked - Can be removed at any time")

    if token is not None and token.creation_time is not None:
        if features.contract_age < 1:
            factors.append("🕐 VERY NEW TOKEN - Less than 1 day old")
        elif features.contract_age < 7:
            factors.append("🕐 Very new token - Less than 1 week old")

    if scores.rug_pull_risk > 80:
        factors.append("💀 EXTREME rug pull probability")
    elif scores.rug_pull_risk > 60:
        factors.append("⚠️ High rug pull probability")

    if scores.liquidity_risk > 75:
        factors.append("🌊 Critical liquidity manipulation risk")
    if scores.liquidity_safety < 25:
        factors.append("🚫 Very low liquidity safety - Exit may be impossible")

    return factors or [NO_RISK_FACTORS]


def determine_confidence_level(
    confidence: float,
    contract: ContractInfo | None = None,
    honeypot: HoneypotCheck | None = None,
) -> ConfidenceLevel:
    adjusted = confidence
    if contract is not None and honeypot is not None:
        adjusted += 0.2
    if contract is not None and contract.is_verified:
        adjusted += 0.1
    if honeypot is not None and honeypot.honeypot_result is not None:
        adjusted += 0.15
    adjusted = min(1.0, adjusted)

    if adjusted > 0.85:
        return ConfidenceLevel.VERY_HIGH
    if adjusted > 0.7:
        return ConfidenceLevel.HIGH
    if adjusted > 0.5:
        return ConfidenceLevel.MEDIUM
    return ConfidenceLevel.LOW
