"""
Risk Metrics Module

Portfolio risk score and grade, historical and parametric VaR, Expected
Shortfall, maximum drawdown, and Sharpe/Sortino ratios.  Pure computation
functions over plain return series.

Sign convention: VaR and Expected Shortfall are reported as returns, so a loss
is negative (e.g. -0.032 for a 3.2% one-day VaR).
"""

from __future__ import annotations

import math
from typing import Dict, Sequence

import numpy as np
from scipy import stats

from portfolio_risk.models import PortfolioData
from portfolio_risk.risk.concentration import concentration_risk, diversification_score
from portfolio_risk.risk.statistics import mean, std_dev

TRADING_DAYS = 252

TOLERANCE_MULTIPLIERS: Dict[str, float] = {
    'conservative': 1.2,
    'moderate': 1.0,
    'aggressive': 0.8,
}

# Upper bound (inclusive) of each grade band
GRADE_BANDS = (
    (20.0, 'A'),
    (40.0, 'B'),
    (60.0, 'C'),
    (80.0, 'D'),
)


def weighted_volatility(portfolio: PortfolioData) -> float:
    """Weight-averaged holding volatility, sum(w_i * vol_i)."""
    return float(sum(h.weight * h.volatility for h in portfolio.holdings))


def overall_risk_score(portfolio: PortfolioData) -> float:
    """Overall portfolio risk score on a 0-100 scale.

    score = min(sum(w * vol) * 100, 100)
            + concentration_risk * 20
            - diversification_score / 100 * 15

    then scaled by the risk tolerance multiplier (conservative 1.2,
    moderate 1.0, aggressive 0.8) and clamped to [0, 100].

    Args:
        portfolio: Portfolio snapshot

    Returns:
        Risk score in [0, 100]
    """
    score = min(weighted_volatility(portfolio) * 100, 100.0)
    score += concentration_risk(portfolio.holdings) * 20
    score -= diversification_score(portfolio.holdings) / 100 * 15
    score *= TOLERANCE_MULTIPLIERS[portfolio.risk_tolerance]

    return float(max(0.0, min(100.0, score)))


def risk_grade(score: float) -> str:
    """Letter grade for a risk score: <=20 A, <=40 B, <=60 C, <=80 D, else F."""
    for upper, grade in GRADE_BANDS:
        if score <= upper:
            return grade
    return 'F'


def _tail_index(n: int, confidence: float) -> int:
    return int(math.floor((1 - confidence) * n))


def value_at_risk(
    returns: Sequence[float],
    confidence: float = 0.95,
    horizon_days: int = 1,
) -> float:
    """Historical-simulation Value-at-Risk.

    Sorts the returns ascending and takes the value at index
    floor((1 - confidence) * n), scaled to the horizon with the
    square-root-of-time rule (assumes i.i.d. daily returns).

    Args:
        returns: Daily return series
        confidence: Confidence level (e.g., 0.95 for 95% VaR)
        horizon_days: Time horizon in days

    Returns:
        VaR as a signed return (negative = loss); 0 for an empty series
    """
    if horizon_days < 1:
        raise ValueError(f"Horizon must be >= 1, got {horizon_days}")

    sorted_returns = np.sort(np.asarray(returns, dtype=float).flatten())
    n = sorted_returns.size
    if n == 0:
        return 0.0

    index = _tail_index(n, confidence)
    if not 0 <= index < n:
        return 0.0

    return float(sorted_returns[index] * math.sqrt(horizon_days))


def expected_shortfall(
    returns: Sequence[float],
    confidence: float = 0.95,
) -> float:
    """Historical Expected Shortfall (Conditional VaR).

    Mean of the sorted returns from the worst observation up to and including
    the VaR index.

    Args:
        returns: Daily return series
        confidence: Confidence level

    Returns:
        ES as a signed return (negative = loss); 0 for an empty series
    """
    sorted_returns = np.sort(np.asarray(returns, dtype=float).flatten())
    if sorted_returns.size == 0:
        return 0.0

    tail = sorted_returns[:_tail_index(sorted_returns.size, confidence) + 1]
    if tail.size == 0:
        return 0.0

    return float(tail.mean())


def parametric_var(
    returns: Sequence[float],
    confidence: float = 0.95,
    horizon_days: int = 1,
) -> float:
    """Parametric (normal) Value-at-Risk.

    VaR = (mu + z * sigma) * sqrt(horizon_days)

    where z = norm.ppf(1 - confidence) and mu, sigma are the population
    mean and standard deviation of the daily returns.

    Args:
        returns: Daily return series
        confidence: Confidence level, strictly between 0 and 1
        horizon_days: Time horizon in days

    Returns:
        VaR as a signed return (negative = loss); 0 for an empty series
    """
    if not 0 < confidence < 1:
        raise ValueError(f"Confidence must be between 0 and 1, got {confidence}")

    if horizon_days < 1:
        raise ValueError(f"Horizon must be >= 1, got {horizon_days}")

    if len(returns) == 0:
        return 0.0

    z_score = stats.norm.ppf(1 - confidence)  # e.g., -1.645 for 95% confidence
    var = (mean(returns) + z_score * std_dev(returns)) * math.sqrt(horizon_days)

    return float(var)


def max_drawdown(returns: Sequence[float]) -> float:
    """Largest peak-to-trough decline of the compounded wealth path.

    The path starts at 1 and compounds each return in the order given, so the
    result depends on the series being chronological.

    Returns:
        Maximum drawdown as a positive fraction (0.25 = 25%); 0 for an empty series
    """
    arr = np.asarray(returns, dtype=float).flatten()
    if arr.size == 0:
        return 0.0

    wealth = np.cumprod(1 + arr)
    peak = np.maximum.accumulate(np.concatenate(([1.0], wealth)))[1:]
    drawdowns = (peak - wealth) / peak

    return float(max(drawdowns.max(), 0.0))


def sharpe_ratio(
    returns: Sequence[float],
    annual_risk_free_rate: float,
    trading_days: int = TRADING_DAYS,
) -> float:
    """Sharpe ratio of daily returns against a daily risk-free rate.

    (mean - rf / trading_days) / std_dev.  Annualisation factors cancel in
    this form, so the result is on a daily basis.

    Returns:
        Sharpe ratio; 0 for an empty or constant series
    """
    if len(returns) == 0:
        return 0.0

    excess = mean(returns) - annual_risk_free_rate / trading_days
    sigma = std_dev(returns)
    if sigma == 0:
        return 0.0

    return float(excess / sigma)


def sortino_ratio(
    returns: Sequence[float],
    annual_target_return: float,
    trading_days: int = TRADING_DAYS,
) -> float:
    """Sortino ratio of daily returns against a daily target.

    Downside deviation sums squared shortfalls of returns below the daily
    target but divides by the total observation count, not the number of
    downside observations.

    Returns:
        Sortino ratio; inf when no return falls below the target, 0 for an
        empty series
    """
    arr = np.asarray(returns, dtype=float).flatten()
    if arr.size == 0:
        return 0.0

    daily_target = annual_target_return / trading_days
    excess = float(arr.mean()) - daily_target

    downside = arr[arr < daily_target]
    if downside.size == 0:
        return math.inf

    downside_dev = math.sqrt(float(np.sum((downside - daily_target) ** 2)) / arr.size)
    if downside_dev == 0:
        return 0.0

    return float(excess / downside_dev)
