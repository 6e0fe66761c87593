from riskradar.models.features import CRITICAL_FEATURES, FEATURE_NAMES, TokenFeatures
from riskradar.models.risk import (
    AILabels,
    AnalysisResult,
    AnalysisSource,
    ConfidenceLevel,
    FeatureSummary,
    RiskScoreSet,
)

__all__ = [
    "TokenFeatures",
    "FEATURE_NAMES",
    "CRITICAL_FEATURES",
    "RiskScoreSet",
    "FeatureSummary",
    "AILabels",
    "AnalysisResult",
    "AnalysisSource",
    "ConfidenceLevel",
]
