"""Contract-info adapter contract (block explorer verified-source lookup)."""

from pydantic import BaseModel, Field


class ContractInfo(BaseModel):
    is_verified: bool = Field(default=False, alias="isVerified")
    has_ownership_renounced: bool = Field(default=False, alias="hasOwnershipRenounced")
    source_code: str | None = Field(default=None, alias="sourceCode")
    is_proxy: bool | None = Field(default=None, alias="isProxy")
    contract_creator: str | None = Field(default=None, alias="contractCreator")

    model_config = {"extra": "ignore", "populate_by_name": True}
