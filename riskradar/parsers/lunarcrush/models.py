"""Social-stats adapter contract."""

from pydantic import BaseModel, field_validator

from riskradar.utils.numbers import as_float


class SocialStats(BaseModel):
    twitter_followers: float = 0
    telegram_channel_user_count: float = 0
    bullish_sentiment: float = 0
    social_volume: float = 0
    social_contributors: float = 0

    model_config = {"extra": "ignore"}

    @field_validator("*", mode="before")
    @classmethod
    def _number_or_zero(cls, value: object) -> float:
        return as_float(value, 0.0)
