"""Feature extraction: loosely-typed provider payloads -> TokenFeatures.

Every missing datum degrades to a documented default. Three values are
*estimated* when the real measurement is unavailable (owner holdings, lock
duration, contract complexity); they are drawn from bounded ranges using an
injected random source so tests can pin them.
"""

import random
import re
from collections.abc import Callable
from datetime import datetime, timezone

from loguru import logger

from riskradar.models.features import TokenFeatures
from riskradar.parsers.etherscan.models import ContractInfo
from riskradar.parsers.honeypot.models import HoneypotCheck
from riskradar.parsers.lunarcrush.models import SocialStats
from riskradar.parsers.token_data import TokenData
from riskradar.utils.numbers import as_float, clamp

_FUNCTION_RE = re.compile(r"function\s+")
_MODIFIER_RE = re.compile(r"modifier\s+")

SECONDS_PER_DAY = 60 * 60 * 24


def honeypot_probability(honeypot: HoneypotCheck | None) -> float:
    """100 for a confirmed honeypot, else additive tax bands capped at 100."""
    hp = honeypot.honeypot_result if honeypot is not None else None
    if hp is None:
        return 0.0
    if hp.is_honeypot:
        return 100.0

    sell_tax = as_float(hp.sell_tax)
    buy_tax = as_float(hp.buy_tax)
    transfer_tax = as_float(hp.transfer_tax)
    probability = 0.0
    if sell_tax > 50:
        probability += 80
    elif sell_tax > 30:
        probability += 60
    elif sell_tax > 20:
        probability += 40
    elif sell_tax > 10:
        probability += 20

    if buy_tax > 20:
        probability += 30
    elif buy_tax > 15:
        probability += 20

    if transfer_tax > 10:
        probability += 30

    return min(100.0, probability)


def volume_anomaly_score(volume: float, market_cap: float) -> float:
    """Pump (very high turnover) and dead-volume (near zero) both score high."""
    ratio = volume / (market_cap or 1.0)
    if ratio > 5:
        return 95.0
    if ratio > 2:
        return 80.0
    if ratio > 1:
        return 60.0
    if ratio < 0.001:
        return 70.0
    return clamp(30 - ratio * 20, 0.0, 100.0)


def holder_distribution_score(total_holders: float, concentration: float) -> float:
    score = 100 - concentration
    if total_holders > 10000:
        score += 20
    elif total_holders > 1000:
        score += 10
    elif total_holders < 100:
        score -= 20
    return clamp(score, 0.0, 100.0)


class FeatureExtractor:
    """Builds TokenFeatures; never raises on missing provider data."""

    def __init__(
        self,
        rng: random.Random | None = None,
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        self._rng = rng or random.Random()
        self._clock = clock or (lambda: datetime.now(timezone.utc))

    def extract_features(
        self,
        token_data: TokenData | None,
        contract_info: ContractInfo | None = None,
        honeypot_info: HoneypotCheck | None = None,
        social_info: SocialStats | None = None,
    ) -> TokenFeatures:
        token = token_data or TokenData()
        now = self._clock()
        hp = honeypot_info.honeypot_result if honeypot_info is not None else None

        contract_age = self._days_since(token.creation_time, now)
        volume = as_float(token.trading_volume)
        market_cap = as_float(token.market_cap)
        concentration = as_float(token.holder_concentration) or 50.0
        total_holders = as_float(token.holder_count) or 100.0
        price_change = abs(as_float(token.price_change_24h))

        community = token.community
        developer = token.developer
        twitter = as_float(social_info.twitter_followers if social_info else None) or as_float(
            community.twitter_followers if community else None
        )
        telegram = as_float(
            social_info.telegram_channel_user_count if social_info else None
        ) or as_float(community.telegram_users if community else None)

        features = TokenFeatures(
            is_honeypot=1 if hp is not None and hp.is_honeypot else 0,
            honeypot_probability=honeypot_probability(honeypot_info),
            sell_tax_percentage=as_float(hp.sell_tax) if hp is not None else 0.0,
            buy_tax_percentage=as_float(hp.buy_tax) if hp is not None else 0.0,
            owner_token_percentage=self.estimate_owner_percentage(
                token, contract_info, contract_age
            ),
            liquidity_lock_duration=self.liquidity_lock_duration(token, now),
            is_verified=1 if contract_info is not None and contract_info.is_verified else 0,
            has_ownership_renounced=(
                1 if contract_info is not None and contract_info.has_ownership_renounced else 0
            ),
            contract_age=contract_age,
            contract_complexity=self.contract_complexity(contract_info),
            has_proxy_contract=1 if contract_info is not None and contract_info.is_proxy else 0,
            price_volatility=price_change,
            volume_anomaly_score=volume_anomaly_score(volume, market_cap),
            market_cap_rank=as_float(token.market_cap_rank) or 9999.0,
            volume_to_market_cap_ratio=volume / (market_cap or 1.0),
            price_change_24h=price_change,
            liquidity_amount=as_float(token.liquidity_usd),
            top_holders_concentration=concentration,
            total_holders=total_holders,
            holder_distribution_score=holder_distribution_score(total_holders, concentration),
            whale_holder_count=as_float(token.whale_holders),
            twitter_followers=twitter,
            telegram_members=telegram,
            social_sentiment=as_float(social_info.bullish_sentiment if social_info else None)
            or 50.0,
            social_volume_score=as_float(social_info.social_volume if social_info else None),
            github_stars=as_float(developer.stars if developer else None),
            github_forks=as_float(developer.forks if developer else None),
            commit_activity=as_float(developer.commit_count if developer else None),
            has_whitepaper=1 if token.has_whitepaper else 0,
            team_doxxed=1 if token.team_doxxed else 0,
        )

        logger.debug(
            f"[FEATURES] {token.symbol or token.address or '?'}: "
            f"honeypot={features.is_honeypot} prob={features.honeypot_probability:.0f} "
            f"sell_tax={features.sell_tax_percentage} owner={features.owner_token_percentage:.1f}% "
            f"lock={features.liquidity_lock_duration:.0f}d verified={features.is_verified} "
            f"age={features.contract_age:.1f}d"
        )
        return features

    @staticmethod
    def _days_since(moment: datetime | None, now: datetime) -> float:
        if moment is None:
            return 0.0
        return max(0.0, (now - moment).total_seconds() / SECONDS_PER_DAY)

    def estimate_owner_percentage(
        self,
        token: TokenData,
        contract: ContractInfo | None,
        contract_age: float,
    ) -> float:
        """Real top-holder share when the creator is the top holder, else estimate."""
        creator = contract.contract_creator if contract is not None else None
        if token.top_holders and creator:
            top = token.top_holders[0]
            if top.address.lower() == creator.lower():
                return as_float(top.percentage)

        # Estimation under missing data: younger contracts skew concentrated
        if contract is not None and contract.has_ownership_renounced:
            return self._rng.uniform(0, 10)
        if contract_age < 7:
            return self._rng.uniform(30, 80)
        if contract_age < 30:
            return self._rng.uniform(20, 50)
        return self._rng.uniform(5, 25)

    def liquidity_lock_duration(self, token: TokenData, now: datetime) -> float:
        if token.liquidity_lock_end_time is not None:
            remaining = (token.liquidity_lock_end_time - now).total_seconds()
            return max(0.0, remaining / SECONDS_PER_DAY)
        if token.is_liquidity_locked:
            # Locked but expiry unknown
            return self._rng.uniform(30, 330)
        return 0.0

    def contract_complexity(self, contract: ContractInfo | None) -> float:
        if contract is not None and contract.source_code:
            functions = len(_FUNCTION_RE.findall(contract.source_code))
            modifiers = len(_MODIFIER_RE.findall(contract.source_code))
            return float(functions + modifiers * 2)
        return float(self._rng.randint(10, 59))
