"""Engine defaults loaded from environment variables.

Every field has a default, so the engine runs with no environment at all.
Variables use the ``RISK_ENGINE_`` prefix, e.g. ``RISK_ENGINE_CONFIDENCE_LEVEL``.
"""

from __future__ import annotations

from functools import lru_cache

from pydantic_settings import BaseSettings


class EngineSettings(BaseSettings):
    """Risk engine configuration.

    Calculators never read these directly; only the assessment orchestrator
    falls back to them when the caller omits a value.
    """

    confidence_level: float = 0.95
    var_horizons: tuple[int, ...] = (1, 7, 30)
    trading_days: int = 252

    monte_carlo_simulations: int = 10000
    monte_carlo_horizon_days: int = 252
    monte_carlo_seed: int | None = None  # None draws fresh OS entropy

    # Market assumptions used when no MarketData is supplied
    risk_free_rate: float = 0.02
    market_return: float = 0.08
    market_volatility: float = 0.15

    log_level: str = "INFO"
    log_json: bool = False

    model_config = {
        "env_prefix": "RISK_ENGINE_",
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "extra": "ignore",
    }


@lru_cache(maxsize=1)
def get_settings() -> EngineSettings:
    """Return a cached EngineSettings instance."""
    return EngineSettings()
