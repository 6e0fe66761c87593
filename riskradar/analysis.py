"""Token analysis pipeline: provider fan-out, AI scoring, heuristic fallback.

One TokenAnalysisService is built at startup (see riskradar.main) and shared
by every request. The trained model and the normalizer are read-only after
construction, so concurrent analyze_token calls need no locking.
"""

from dataclasses import dataclass

from loguru import logger

from riskradar.models.risk import (
    AnalysisResult,
    AnalysisSource,
    ConfidenceLevel,
    FeatureSummary,
    RiskScoreSet,
)
from riskradar.parsers.adapters import (
    AIProviderAdapter,
    ContractInfoAdapter,
    HoneypotAdapter,
    MarketDataAdapter,
    ProviderBundle,
    SocialStatsAdapter,
    gather_provider_data,
)
from riskradar.parsers.dexscreener.models import DexScreenerPair, select_main_pair
from riskradar.parsers.etherscan.models import ContractInfo
from riskradar.parsers.honeypot.models import HoneypotCheck
from riskradar.parsers.llm_analyzer.prompt import build_analysis_prompt
from riskradar.parsers.llm_analyzer.response import AIResponseError, parse_ai_response
from riskradar.parsers.lunarcrush.models import SocialStats
from riskradar.parsers.token_data import TokenData
from riskradar.scoring.aggregator import finalize, summarize_features
from riskradar.scoring.features import FeatureExtractor
from riskradar.scoring.heuristic import HeuristicRiskModel
from riskradar.scoring.market import market_stability_score
from riskradar.scoring.normalizer import AIRiskNormalizer
from riskradar.scoring.recommendations import (
    determine_confidence_level,
    generate_recommendations,
    identify_risk_factors,
)


def error_analysis_result() -> AnalysisResult:
    """Conservative high-risk result returned when the pipeline itself fails.

    Scores are fixed and deliberately not paired (safety != 100 - risk).
    """
    return AnalysisResult(
        scores=RiskScoreSet(
            rug_pull_risk=70,
            liquidity_risk=65,
            contract_risk=60,
            community_risk=80,
            contract_security=30,
            liquidity_safety=25,
            community_health=20,
            market_stability=35,
            overall_risk=75,
            confidence=0.3,
        ),
        features=FeatureSummary(
            contract_security=30,
            liquidity_safety=25,
            community_health=20,
            market_stability=35,
            ownership_risk=80,
            honeypot_risk=75,
        ),
        recommendations=[
            "⚠️ ANALYSIS ERROR - Exercise extreme caution",
            "🚨 Unable to verify token safety - Recommend avoiding until more data available",
        ],
        risk_factors=[
            "❌ Analysis system error",
            "⚠️ Unable to verify contract safety",
            "🔍 Manual verification required",
        ],
        confidence_level=ConfidenceLevel.LOW,
        source=AnalysisSource.ERROR,
    )


@dataclass(frozen=True)
class _Context:
    """Everything one scoring pass reads; token is already pair-enriched."""

    token: TokenData
    bundle: ProviderBundle
    pair: DexScreenerPair | None


class TokenAnalysisService:
    def __init__(
        self,
        model: HeuristicRiskModel,
        extractor: FeatureExtractor | None = None,
        normalizer: AIRiskNormalizer | None = None,
        *,
        contract_adapter: ContractInfoAdapter | None = None,
        honeypot_adapter: HoneypotAdapter | None = None,
        social_adapter: SocialStatsAdapter | None = None,
        market_adapter: MarketDataAdapter | None = None,
        ai_adapter: AIProviderAdapter | None = None,
        ai_enabled: bool = True,
        default_network: str = "ethereum",
    ) -> None:
        self._model = model
        self._extractor = extractor or FeatureExtractor()
        self._normalizer = normalizer or AIRiskNormalizer()
        self._contract_adapter = contract_adapter
        self._honeypot_adapter = honeypot_adapter
        self._social_adapter = social_adapter
        self._market_adapter = market_adapter
        self._ai_adapter = ai_adapter
        self._ai_enabled = ai_enabled
        self._default_network = default_network

    @property
    def ai_available(self) -> bool:
        return self._ai_enabled and self._ai_adapter is not None

    async def analyze_token(
        self,
        address: str,
        token_data: TokenData | None = None,
        network: str | None = None,
    ) -> AnalysisResult:
        """Full analysis for one token. Never raises."""
        try:
            token = token_data or TokenData(address=address)
            if not token.address:
                token = token.model_copy(update={"address": address})

            bundle = await gather_provider_data(
                address,
                symbol=token.symbol,
                network=network or self._default_network,
                contract_adapter=self._contract_adapter,
                honeypot_adapter=self._honeypot_adapter,
                social_adapter=self._social_adapter,
                market_adapter=self._market_adapter,
            )
            ctx = self._context(token, bundle)

            ai_text = await self._request_ai(ctx) if self.ai_available else None
            result = self._score(ctx, ai_text)
            logger.info(
                f"[ANALYSIS] {address[:12]} ({ctx.token.symbol or '?'}): "
                f"overall={result.scores.overall_risk} source={result.source.value} "
                f"confidence={result.confidence_level.value}"
            )
            return result
        except Exception as e:
            logger.error(f"[ANALYSIS] Pipeline failed for {address[:12]}: {type(e).__name__}: {e}")
            return error_analysis_result()

    def analyze_offline(
        self,
        token_data: TokenData | None,
        contract: ContractInfo | None = None,
        honeypot: HoneypotCheck | None = None,
        social: SocialStats | None = None,
        pairs: list[DexScreenerPair] | None = None,
        ai_text: str | None = None,
    ) -> AnalysisResult:
        """Score already-fetched payloads without touching any adapter."""
        try:
            bundle = ProviderBundle(contract=contract, honeypot=honeypot, social=social, pairs=pairs)
            return self._score(self._context(token_data or TokenData(), bundle), ai_text)
        except Exception as e:
            logger.error(f"[ANALYSIS] Offline analysis failed: {type(e).__name__}: {e}")
            return error_analysis_result()

    @staticmethod
    def _context(token: TokenData, bundle: ProviderBundle) -> _Context:
        pair = select_main_pair(bundle.pairs) if bundle.pairs else None
        return _Context(token=token.enrich_from_pair(pair), bundle=bundle, pair=pair)

    async def _request_ai(self, ctx: _Context) -> str | None:
        prompt = build_analysis_prompt(
            ctx.token, ctx.bundle.contract, ctx.bundle.honeypot, ctx.pair
        )
        try:
            text = await self._ai_adapter.complete(prompt)
        except Exception as e:
            logger.warning(f"[AI] Provider request failed: {type(e).__name__}: {e}")
            return None
        if not isinstance(text, str) or not text.strip():
            logger.warning("[AI] Provider returned an empty response")
            return None
        return text

    def _score(self, ctx: _Context, ai_text: str | None) -> AnalysisResult:
        if ai_text is not None:
            try:
                return self._ai_result(ctx, ai_text)
            except AIResponseError as e:
                logger.info(f"[AI] Unusable response, falling back to heuristic model: {e}")
        return self._heuristic_result(ctx)

    def _ai_result(self, ctx: _Context, ai_text: str) -> AnalysisResult:
        assessment = parse_ai_response(ai_text)
        normalized = self._normalizer.normalize(assessment, ctx.token, ctx.bundle.pairs)
        scores = normalized.scores
        return AnalysisResult(
            scores=scores,
            features=summarize_features(scores),
            recommendations=normalized.recommendations,
            risk_factors=normalized.risk_factors,
            confidence_level=determine_confidence_level(
                scores.confidence, ctx.bundle.contract, ctx.bundle.honeypot
            ),
            source=AnalysisSource.AI,
            ai_reasoning=normalized.reasoning,
            ai_confidence=normalized.ai_confidence,
            ai_recommendations=normalized.recommendations,
            ai_risk_factors=normalized.risk_factors,
            labels=normalized.labels,
            dex_pair=ctx.pair,
        )

    def _heuristic_result(self, ctx: _Context) -> AnalysisResult:
        bundle = ctx.bundle
        features = self._extractor.extract_features(
            ctx.token, bundle.contract, bundle.honeypot, bundle.social
        )
        stability = market_stability_score(
            ctx.token.symbol,
            ctx.token.name,
            ctx.token.current_price,
            ctx.token.price_change_24h,
        )
        scores = finalize(self._model.predict(features, market_stability=stability))
        summary = summarize_features(scores, features)
        return AnalysisResult(
            scores=scores,
            features=summary,
            recommendations=generate_recommendations(scores, summary, bundle.honeypot),
            risk_factors=identify_risk_factors(
                scores, features, bundle.contract, bundle.honeypot, ctx.token
            ),
            confidence_level=determine_confidence_level(
                scores.confidence, bundle.contract, bundle.honeypot
            ),
            source=AnalysisSource.HEURISTIC,
            dex_pair=ctx.pair,
        )
