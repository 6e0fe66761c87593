"""Provider adapter protocols and the concurrent fan-out over them.

Each adapter call is isolated: an exception, a None, or a payload that does
not match the expected shape all become a missing value for that provider.
Nothing here retries or times out.
"""

import asyncio
from dataclasses import dataclass
from typing import Any, Protocol, TypeVar

from loguru import logger
from pydantic import BaseModel, ValidationError

from riskradar.parsers.dexscreener.models import DexScreenerPair, parse_pairs
from riskradar.parsers.etherscan.models import ContractInfo
from riskradar.parsers.honeypot.models import HoneypotCheck
from riskradar.parsers.lunarcrush.models import SocialStats

ModelT = TypeVar("ModelT", bound=BaseModel)


class ContractInfoAdapter(Protocol):
    async def get_contract_info(self, address: str) -> ContractInfo | dict | None: ...


class HoneypotAdapter(Protocol):
    async def check_honeypot(self, address: str, network: str) -> HoneypotCheck | dict | None: ...


class SocialStatsAdapter(Protocol):
    async def get_social_stats(self, symbol: str) -> SocialStats | dict | None: ...


class MarketDataAdapter(Protocol):
    async def get_pairs(self, address: str) -> list[DexScreenerPair] | list[dict] | dict | None: ...


class AIProviderAdapter(Protocol):
    async def complete(self, prompt: str) -> str: ...


@dataclass(frozen=True)
class ProviderBundle:
    contract: ContractInfo | None = None
    honeypot: HoneypotCheck | None = None
    social: SocialStats | None = None
    pairs: list[DexScreenerPair] | None = None

    def availability(self) -> dict[str, bool]:
        return {
            "contract": self.contract is not None,
            "honeypot": self.honeypot is not None,
            "social": self.social is not None,
            "dexscreener": self.pairs is not None,
        }


def coerce_model(tag: str, model: type[ModelT], payload: Any) -> ModelT | None:
    if payload is None or isinstance(payload, model):
        return payload
    try:
        return model.model_validate(payload)
    except ValidationError as e:
        logger.warning(f"[ADAPTER] {tag} returned unexpected payload: {e.error_count()} errors")
        return None


def coerce_pairs(payload: Any) -> list[DexScreenerPair] | None:
    if payload is None:
        return None
    if isinstance(payload, list) and all(isinstance(p, DexScreenerPair) for p in payload):
        return list(payload)
    try:
        return parse_pairs(payload)
    except ValidationError as e:
        logger.warning(f"[ADAPTER] dexscreener returned unexpected payload: {e.error_count()} errors")
        return None


async def _skip() -> None:
    return None


def _unwrap(tag: str, address: str, outcome: Any) -> Any:
    if isinstance(outcome, BaseException):
        logger.warning(f"[ADAPTER] {tag} failed for {address[:12]}: {type(outcome).__name__}: {outcome}")
        return None
    return outcome


async def gather_provider_data(
    address: str,
    *,
    symbol: str | None = None,
    network: str = "ethereum",
    contract_adapter: ContractInfoAdapter | None = None,
    honeypot_adapter: HoneypotAdapter | None = None,
    social_adapter: SocialStatsAdapter | None = None,
    market_adapter: MarketDataAdapter | None = None,
) -> ProviderBundle:
    """Fan out to every configured adapter and join, degrading per provider."""
    outcomes = await asyncio.gather(
        contract_adapter.get_contract_info(address) if contract_adapter else _skip(),
        honeypot_adapter.check_honeypot(address, network) if honeypot_adapter else _skip(),
        social_adapter.get_social_stats(symbol) if social_adapter and symbol else _skip(),
        market_adapter.get_pairs(address) if market_adapter else _skip(),
        return_exceptions=True,
    )
    contract_raw, honeypot_raw, social_raw, pairs_raw = (
        _unwrap(tag, address, outcome)
        for tag, outcome in zip(("contract", "honeypot", "social", "dexscreener"), outcomes)
    )

    bundle = ProviderBundle(
        contract=coerce_model("contract", ContractInfo, contract_raw),
        honeypot=coerce_model("honeypot", HoneypotCheck, honeypot_raw),
        social=coerce_model("social", SocialStats, social_raw),
        pairs=coerce_pairs(pairs_raw),
    )
    logger.debug(f"[ADAPTER] Data gathered for {address[:12]}: {bundle.availability()}")
    return bundle
