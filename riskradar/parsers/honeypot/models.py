"""Honeypot simulator adapter contract (buy/sell simulation result)."""

from typing import Literal

from pydantic import BaseModel, Field, field_validator

from riskradar.utils.numbers import as_float

HoneypotRiskLevel = Literal["Low", "Medium", "High", "Unknown"]


class HoneypotResult(BaseModel):
    is_honeypot: bool = Field(default=False, alias="isHoneypot")
    sell_tax: float = Field(default=0.0, alias="sellTax")  # percentage (0-100)
    buy_tax: float = Field(default=0.0, alias="buyTax")
    transfer_tax: float = Field(default=0.0, alias="transferTax")
    blocked_sells: bool = Field(default=False, alias="blockedSells")
    custom_gas: bool = Field(default=False, alias="customGas")
    warnings: list[str] = Field(default_factory=list)
    honeypot_risk_level: HoneypotRiskLevel = Field(
        default="Unknown", alias="honeypotRiskLevel"
    )
    simulation_success: bool = Field(default=False, alias="simulationSuccess")

    model_config = {"extra": "ignore", "populate_by_name": True}

    @field_validator("sell_tax", "buy_tax", "transfer_tax", mode="before")
    @classmethod
    def _tax_or_zero(cls, value: object) -> float:
        # Simulator returns null or "N/A" taxes when the simulation did not run
        return as_float(value, 0.0)

    @field_validator("honeypot_risk_level", mode="before")
    @classmethod
    def _unknown_level(cls, value: object) -> object:
        return value if value in ("Low", "Medium", "High") else "Unknown"


class HoneypotCheck(BaseModel):
    honeypot_result: HoneypotResult | None = Field(default=None, alias="honeypotResult")

    model_config = {"extra": "ignore", "populate_by_name": True}
