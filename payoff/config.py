# payoff/config.py
from functools import lru_cache

from dotenv import load_dotenv
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

load_dotenv()


class EngineSettings(BaseSettings):
    """
    Engine knobs read from the environment (or a .env file):
      PAYOFF_MAX_MONTHS              simulation cap, 600 = 50 years
      PAYOFF_EPSILON                 balances below this count as paid
      PAYOFF_COLLECTION_PROBABILITY  base probability for incoming debts
      PAYOFF_CURRENCY_SYMBOL         used by money()
      PAYOFF_LOG_LEVEL / PAYOFF_LOG_JSON
    """

    # unset or empty variables fall back to the field defaults
    model_config = SettingsConfigDict(
        env_prefix="PAYOFF_",
        env_ignore_empty=True,
        extra="ignore",
    )

    max_months: int = Field(default=600, gt=0)
    epsilon: float = Field(default=0.01, gt=0.0, lt=1.0)
    collection_probability: float = Field(default=0.8, ge=0.0, le=1.0)
    currency_symbol: str = "€"
    log_level: str = "INFO"
    log_json: bool = False

    @field_validator("log_level")
    @classmethod
    def _upper_level(cls, v: str) -> str:
        v = v.strip().upper()
        if v not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"Unknown log level '{v}'")
        return v

    @classmethod
    def from_env(cls) -> "EngineSettings":
        return cls()


@lru_cache(maxsize=1)
def get_settings() -> EngineSettings:
    return EngineSettings.from_env()


def reset_settings() -> None:
    get_settings.cache_clear()
