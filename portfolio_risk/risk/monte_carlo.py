"""
Monte Carlo Simulation Module

Simulates a distribution of portfolio outcomes from per-holding volatility
assumptions.  Normal draws are produced with the Box-Muller transform from a
caller-supplied ``numpy.random.Generator`` (or a seed), so results are
reproducible whenever the random source is.
"""

from __future__ import annotations

import math
from typing import Dict

import numpy as np
import structlog

from portfolio_risk.models import MonteCarloResult, PortfolioData

logger = structlog.get_logger(__name__)

PERCENTILE_LEVELS: Dict[str, float] = {
    '1%': 0.01,
    '5%': 0.05,
    '10%': 0.10,
    '25%': 0.25,
    '50%': 0.50,
    '75%': 0.75,
    '90%': 0.90,
    '95%': 0.95,
    '99%': 0.99,
}


def box_muller(
    rng: np.random.Generator,
    size: int | tuple[int, ...],
    mean: float = 0.0,
    std: float = 1.0,
) -> np.ndarray:
    """Draw normal variates with the Box-Muller transform.

    z = sqrt(-2 ln u1) * cos(2 pi u2), with u1 in (0, 1] so the log is finite.
    """
    u1 = 1.0 - rng.random(size)
    u2 = rng.random(size)
    z = np.sqrt(-2.0 * np.log(u1)) * np.cos(2.0 * np.pi * u2)
    return z * std + mean


def run_monte_carlo_simulation(
    portfolio: PortfolioData,
    simulations: int = 10000,
    horizon_days: int = 252,
    rng: np.random.Generator | None = None,
    seed: int | None = None,
) -> MonteCarloResult:
    """Simulate portfolio outcomes over a horizon.

    Each trial draws one N(0, vol_i) return per holding, weight-sums them into
    a one-period portfolio return and scales it by sqrt(horizon_days).

    Args:
        portfolio: Portfolio snapshot
        simulations: Number of independent trials (>= 1)
        horizon_days: Horizon used to scale the one-period return
        rng: Random generator to draw from; takes precedence over ``seed``
        seed: Seed for a fresh ``numpy.random.default_rng`` when ``rng`` is None

    Returns:
        MonteCarloResult with sorted outcomes, percentile ladder, probability of
        a negative outcome, mean and population standard deviation
    """
    if simulations < 1:
        raise ValueError(f"Simulations must be >= 1, got {simulations}")

    if horizon_days < 1:
        raise ValueError(f"Horizon must be >= 1, got {horizon_days}")

    if rng is None:
        if seed is None:
            logger.debug("run_monte_carlo_simulation: no seed, results not reproducible")
        rng = np.random.default_rng(seed)

    holdings = portfolio.holdings
    weights = np.array([h.weight for h in holdings], dtype=float)
    vols = np.array([h.volatility for h in holdings], dtype=float)

    if holdings:
        draws = box_muller(rng, (simulations, len(holdings))) * vols
        period_returns = draws @ weights
    else:
        logger.warning("run_monte_carlo_simulation: empty portfolio")
        period_returns = np.zeros(simulations)

    outcomes = np.sort(period_returns * math.sqrt(horizon_days))
    n = outcomes.size

    percentiles = {
        label: float(outcomes[int(math.floor(level * n))])
        for label, level in PERCENTILE_LEVELS.items()
    }

    result = MonteCarloResult(
        simulations=simulations,
        time_horizon=horizon_days,
        outcomes=outcomes.tolist(),
        percentiles=percentiles,
        shortfall_probability=float(np.count_nonzero(outcomes < 0) / n),
        expected_return=float(outcomes.mean()),
        volatility=float(outcomes.std()),
    )

    logger.info(
        "run_monte_carlo_simulation: complete",
        simulations=simulations,
        horizon_days=horizon_days,
        expected_return=result.expected_return,
        shortfall_probability=result.shortfall_probability,
    )

    return result
