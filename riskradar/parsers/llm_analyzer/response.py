"""Parse the AI provider's free-text answer into an AIRiskAssessment.

The provider is asked for a bare JSON object but routinely wraps it in
prose or markdown fences. The first balanced {...} block wins.
"""

import json

from loguru import logger
from pydantic import BaseModel, Field, ValidationError, field_validator

from riskradar.utils.numbers import as_float, as_optional_float

DEFAULT_RECOMMENDATIONS = ["Conduct thorough research before investing"]
DEFAULT_RISK_FACTORS = ["Standard investment risks apply"]


class AIResponseError(ValueError):
    """AI output had no parseable JSON object."""


class AIRiskAssessment(BaseModel):
    """Raw provider assessment, before any normalization."""

    rug_pull_risk: float = Field(default=0.0, alias="rugPullRisk")
    liquidity_risk: float = Field(default=0.0, alias="liquidityRisk")
    contract_risk: float = Field(default=0.0, alias="contractRisk")
    community_risk: float = Field(default=0.0, alias="communityRisk")
    overall_risk: float | None = Field(default=None, alias="overallRisk")
    confidence: float | None = None
    reasoning: str = ""
    recommendations: list[str] = Field(default_factory=lambda: list(DEFAULT_RECOMMENDATIONS))
    risk_factors: list[str] = Field(
        default_factory=lambda: list(DEFAULT_RISK_FACTORS), alias="riskFactors"
    )

    rug_pull_risk_label: str | None = Field(default=None, alias="rugPullRiskLabel")
    liquidity_risk_label: str | None = Field(default=None, alias="liquidityRiskLabel")
    contract_risk_label: str | None = Field(default=None, alias="contractRiskLabel")
    community_risk_label: str | None = Field(default=None, alias="communityRiskLabel")
    contract_security_label: str | None = Field(default=None, alias="contractSecurityLabel")
    liquidity_safety_label: str | None = Field(default=None, alias="liquiditySafetyLabel")
    community_health_label: str | None = Field(default=None, alias="communityHealthLabel")
    market_stability_label: str | None = Field(default=None, alias="marketStabilityLabel")

    model_config = {"extra": "ignore", "populate_by_name": True}

    @field_validator(
        "rug_pull_risk", "liquidity_risk", "contract_risk", "community_risk", mode="before"
    )
    @classmethod
    def _score(cls, value: object) -> float:
        # NaN / strings / null read as 0 before any transformation
        return as_float(value, 0.0)

    @field_validator("overall_risk", "confidence", mode="before")
    @classmethod
    def _optional(cls, value: object) -> float | None:
        return as_optional_float(value)

    @field_validator("reasoning", mode="before")
    @classmethod
    def _text(cls, value: object) -> str:
        return value if isinstance(value, str) else ""

    @field_validator("recommendations", mode="before")
    @classmethod
    def _recommendations(cls, value: object) -> list[str]:
        if not isinstance(value, list):
            return list(DEFAULT_RECOMMENDATIONS)
        return [str(v) for v in value]

    @field_validator("risk_factors", mode="before")
    @classmethod
    def _risk_factors(cls, value: object) -> list[str]:
        if not isinstance(value, list):
            return list(DEFAULT_RISK_FACTORS)
        return [str(v) for v in value]

    @field_validator(
        "rug_pull_risk_label",
        "liquidity_risk_label",
        "contract_risk_label",
        "community_risk_label",
        "contract_security_label",
        "liquidity_safety_label",
        "community_health_label",
        "market_stability_label",
        mode="before",
    )
    @classmethod
    def _label(cls, value: object) -> str | None:
        return value if isinstance(value, str) and value.strip() else None

    def raw_scores(self) -> tuple[float, float, float, float]:
        return (
            self.rug_pull_risk,
            self.liquidity_risk,
            self.contract_risk,
            self.community_risk,
        )


def _strip_code_fences(content: str) -> str:
    content = content.strip()
    if content.startswith("```"):
        content = content.split("\n", 1)[-1]
    if content.endswith("```"):
        content = content.rsplit("```", 1)[0]
    return content.replace("```json", "").replace("```", "").strip()


def extract_json_object(text: str) -> str:
    """Return the first balanced {...} block, ignoring braces inside strings."""
    content = _strip_code_fences(text or "")
    start = content.find("{")
    if start < 0:
        raise AIResponseError("no JSON object in AI response")

    depth = 0
    in_string = False
    escaped = False
    for i in range(start, len(content)):
        ch = content[i]
        if in_string:
            if escaped:
                escaped = False
            elif ch == "\\":
                escaped = True
            elif ch == '"':
                in_string = False
            continue
        if ch == '"':
            in_string = True
        elif ch == "{":
            depth += 1
        elif ch == "}":
            depth -= 1
            if depth == 0:
                return content[start : i + 1]

    raise AIResponseError("unbalanced JSON object in AI response")


def parse_ai_response(text: str) -> AIRiskAssessment:
    """Parse provider text; raises AIResponseError on anything malformed."""
    block = extract_json_object(text)
    try:
        data = json.loads(block)
    except json.JSONDecodeError as e:
        logger.warning(f"[AI] Parse failed: {e}, content: {block[:200]}")
        raise AIResponseError(f"invalid JSON: {e}") from e

    if not isinstance(data, dict):
        raise AIResponseError("AI response JSON is not an object")

    try:
        return AIRiskAssessment.model_validate(data)
    except ValidationError as e:
        raise AIResponseError(f"unexpected AI response shape: {e}") from e
