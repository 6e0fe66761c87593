from decimal import Decimal

from pydantic import BaseModel


class DexScreenerToken(BaseModel):
    address: str = ""
    name: str | None = None
    symbol: str | None = None

    model_config = {"extra": "ignore"}


class DexScreenerVolume(BaseModel):
    m5: Decimal | None = None
    h1: Decimal | None = None
    h6: Decimal | None = None
    h24: Decimal | None = None

    model_config = {"extra": "ignore"}


class DexScreenerPriceChange(BaseModel):
    m5: Decimal | None = None
    h1: Decimal | None = None
    h6: Decimal | None = None
    h24: Decimal | None = None

    model_config = {"extra": "ignore"}


class DexScreenerLiquidity(BaseModel):
    usd: Decimal | None = None
    base: Decimal | None = None
    quote: Decimal | None = None

    model_config = {"extra": "ignore"}


class DexScreenerTxns(BaseModel):
    buys: int | None = None
    sells: int | None = None

    model_config = {"extra": "ignore"}


class DexScreenerTxnsByPeriod(BaseModel):
    m5: DexScreenerTxns | None = None
    h1: DexScreenerTxns | None = None
    h6: DexScreenerTxns | None = None
    h24: DexScreenerTxns | None = None

    model_config = {"extra": "ignore"}


class DexScreenerPair(BaseModel):
    chainId: str = ""
    dexId: str = ""
    pairAddress: str = ""
    baseToken: DexScreenerToken | None = None
    quoteToken: DexScreenerToken | None = None
    priceUsd: str | None = None
    volume: DexScreenerVolume | None = None
    priceChange: DexScreenerPriceChange | None = None
    liquidity: DexScreenerLiquidity | None = None
    marketCap: Decimal | None = None
    fdv: Decimal | None = None
    pairCreatedAt: int | None = None
    txns: DexScreenerTxnsByPeriod | None = None

    model_config = {"extra": "ignore"}

    @property
    def volume_h24(self) -> float:
        if self.volume is None or self.volume.h24 is None:
            return 0.0
        return float(self.volume.h24)

    @property
    def liquidity_usd(self) -> float:
        if self.liquidity is None or self.liquidity.usd is None:
            return 0.0
        return float(self.liquidity.usd)

    @property
    def price_change_h24(self) -> float | None:
        if self.priceChange is None or self.priceChange.h24 is None:
            return None
        return float(self.priceChange.h24)

    @property
    def price_usd(self) -> float | None:
        if not self.priceUsd:
            return None
        try:
            return float(self.priceUsd)
        except ValueError:
            return None

    @property
    def market_cap_usd(self) -> float | None:
        """marketCap when reported, else fully diluted valuation."""
        value = self.marketCap if self.marketCap is not None else self.fdv
        return float(value) if value is not None else None


def select_main_pair(pairs: list[DexScreenerPair] | None) -> DexScreenerPair | None:
    """Canonical pair = highest 24h volume (first one wins ties)."""
    if not pairs:
        return None
    best = pairs[0]
    for pair in pairs[1:]:
        if pair.volume_h24 > best.volume_h24:
            best = pair
    return best


def parse_pairs(data: object) -> list[DexScreenerPair]:
    """Accept either a bare list or a {"pairs": [...]} envelope."""
    if isinstance(data, list):
        return [DexScreenerPair.model_validate(p) for p in data]
    if not isinstance(data, dict):
        return []
    pairs = data.get("pairs", data.get("pair", []))
    if not isinstance(pairs, list):
        pairs = [pairs] if pairs else []
    return [DexScreenerPair.model_validate(p) for p in pairs]
