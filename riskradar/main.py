"""Service bootstrap for the token risk analyzer."""

import random

from loguru import logger

from config.settings import Settings, settings as default_settings
from riskradar.analysis import TokenAnalysisService
from riskradar.parsers.adapters import (
    AIProviderAdapter,
    ContractInfoAdapter,
    HoneypotAdapter,
    MarketDataAdapter,
    SocialStatsAdapter,
)
from riskradar.scoring.features import FeatureExtractor
from riskradar.scoring.heuristic import HeuristicRiskModel
from riskradar.scoring.normalizer import AIRiskNormalizer
from riskradar.scoring.training import generate_training_data
from riskradar.utils.logger import setup_logger


def build_model(settings: Settings) -> HeuristicRiskModel:
    rng = random.Random(settings.heuristic_seed)
    model = HeuristicRiskModel(num_trees=settings.heuristic_num_trees, rng=rng)
    model.train(generate_training_data(settings.heuristic_training_samples, rng))
    return model


def create_analysis_service(
    settings: Settings | None = None,
    *,
    contract_adapter: ContractInfoAdapter | None = None,
    honeypot_adapter: HoneypotAdapter | None = None,
    social_adapter: SocialStatsAdapter | None = None,
    market_adapter: MarketDataAdapter | None = None,
    ai_adapter: AIProviderAdapter | None = None,
    configure_logging: bool = True,
) -> TokenAnalysisService:
    """Train the heuristic model once and wire the shared analysis service."""
    settings = settings or default_settings
    if configure_logging:
        setup_logger(
            json_logs=settings.json_logs,
            level=settings.log_level,
            log_to_file=settings.log_to_file,
        )
    logger.info("Starting token risk analyzer...")

    service = TokenAnalysisService(
        build_model(settings),
        FeatureExtractor(rng=random.Random(settings.feature_seed)),
        AIRiskNormalizer(),
        contract_adapter=contract_adapter,
        honeypot_adapter=honeypot_adapter,
        social_adapter=social_adapter,
        market_adapter=market_adapter,
        ai_adapter=ai_adapter,
        ai_enabled=settings.ai_enabled,
        default_network=settings.default_network,
    )
    logger.info(
        f"Analyzer ready (AI path {'enabled' if service.ai_available else 'disabled'})"
    )
    return service
