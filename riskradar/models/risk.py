"""Risk score containers returned by both scoring paths."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from enum import Enum
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from riskradar.parsers.dexscreener.models import DexScreenerPair


class ConfidenceLevel(str, Enum):
    LOW = "Low"
    MEDIUM = "Medium"
    HIGH = "High"
    VERY_HIGH = "Very High"


class AnalysisSource(str, Enum):
    AI = "ai"
    HEURISTIC = "heuristic"
    ERROR = "error"


@dataclass(frozen=True)
class RiskScoreSet:
    """Four primary risks, four safety scores, overall risk and confidence.

    Each safety score is 100 minus its paired risk unless an override
    (ultra-high-risk market stability, label consistency) moved it.
    """

    rug_pull_risk: int
    liquidity_risk: int
    contract_risk: int
    community_risk: int
    contract_security: int
    liquidity_safety: int
    community_health: int
    market_stability: int
    overall_risk: int
    confidence: float  # 0-1

    def primary_risks(self) -> tuple[int, int, int, int]:
        return (
            self.rug_pull_risk,
            self.liquidity_risk,
            self.contract_risk,
            self.community_risk,
        )

    def replace(self, **changes: Any) -> RiskScoreSet:
        return replace(self, **changes)


@dataclass(frozen=True)
class FeatureSummary:
    """Dashboard-facing feature scores (0-100)."""

    contract_security: int
    liquidity_safety: int
    community_health: int
    market_stability: int
    ownership_risk: int
    honeypot_risk: int


@dataclass(frozen=True)
class AILabels:
    """Qualitative label per metric (Very Low ... Very High)."""

    rug_pull_risk_label: str
    liquidity_risk_label: str
    contract_risk_label: str
    community_risk_label: str
    contract_security_label: str
    liquidity_safety_label: str
    community_health_label: str
    market_stability_label: str


@dataclass(frozen=True)
class AnalysisResult:
    scores: RiskScoreSet
    features: FeatureSummary
    recommendations: list[str]
    risk_factors: list[str]
    confidence_level: ConfidenceLevel
    source: AnalysisSource
    ai_reasoning: str | None = None
    ai_confidence: int | None = None  # 70-95, as reported by the provider
    ai_recommendations: list[str] = field(default_factory=list)
    ai_risk_factors: list[str] = field(default_factory=list)
    labels: AILabels | None = None
    dex_pair: DexScreenerPair | None = None

    def to_dict(self) -> dict[str, Any]:
        """camelCase payload in the shape the dashboard renders."""
        s = self.scores
        f = self.features
        payload: dict[str, Any] = {
            "mlScore": {
                "overallRisk": s.overall_risk,
                "rugPullRisk": s.rug_pull_risk,
                "liquidityRisk": s.liquidity_risk,
                "contractRisk": s.contract_risk,
                "communityRisk": s.community_risk,
                "confidence": s.confidence,
            },
            "features": {
                "contractSecurity": f.contract_security,
                "liquiditySafety": f.liquidity_safety,
                "communityHealth": f.community_health,
                "marketStability": f.market_stability,
                "ownershipRisk": f.ownership_risk,
                "honeypotRisk": f.honeypot_risk,
            },
            "recommendations": list(self.recommendations),
            "riskFactors": list(self.risk_factors),
            "confidenceLevel": self.confidence_level.value,
            "source": self.source.value,
        }
        if self.source is AnalysisSource.AI:
            ai: dict[str, Any] = {
                "reasoning": self.ai_reasoning or "",
                "confidence": self.ai_confidence,
                "aiRecommendations": list(self.ai_recommendations),
                "aiRiskFactors": list(self.ai_risk_factors),
            }
            if self.labels is not None:
                ai.update(
                    {
                        "rugPullRiskLabel": self.labels.rug_pull_risk_label,
                        "liquidityRiskLabel": self.labels.liquidity_risk_label,
                        "contractRiskLabel": self.labels.contract_risk_label,
                        "communityRiskLabel": self.labels.community_risk_label,
                        "contractSecurityLabel": self.labels.contract_security_label,
                        "liquiditySafetyLabel": self.labels.liquidity_safety_label,
                        "communityHealthLabel": self.labels.community_health_label,
                        "marketStabilityLabel": self.labels.market_stability_label,
                    }
                )
            payload["aiAnalysis"] = ai
        if self.dex_pair is not None:
            payload["dexscreenerData"] = self.dex_pair.model_dump(
                by_alias=True, mode="json"
            )
        return payload
