"""
Statistics Primitives

Population moments, correlation and beta regression over daily return series.
These functions are total over their input domain: degenerate data (empty or
mismatched series, zero variance) yields a neutral fallback instead of raising.
"""

from __future__ import annotations

from typing import Sequence

import numpy as np
import pandas as pd
import structlog

from portfolio_risk.models import Holding

logger = structlog.get_logger(__name__)


def _as_array(xs: Sequence[float]) -> np.ndarray:
    return np.asarray(xs, dtype=float).flatten()


def _is_constant(arr: np.ndarray) -> bool:
    return bool(np.all(arr == arr[0]))


def mean(xs: Sequence[float]) -> float:
    """Arithmetic mean; 0 for an empty series."""
    arr = _as_array(xs)
    if arr.size == 0:
        return 0.0
    return float(arr.mean())


def variance(xs: Sequence[float]) -> float:
    """Population variance (divides by N); 0 for an empty or constant series."""
    arr = _as_array(xs)
    if arr.size == 0 or _is_constant(arr):
        return 0.0
    return float(np.mean((arr - arr.mean()) ** 2))


def std_dev(xs: Sequence[float]) -> float:
    """Population standard deviation."""
    return float(np.sqrt(variance(xs)))


def covariance(a: Sequence[float], b: Sequence[float]) -> float:
    """Population covariance; 0 if the series are empty or differ in length."""
    x = _as_array(a)
    y = _as_array(b)
    if x.size == 0 or x.size != y.size:
        return 0.0
    return float(np.mean((x - x.mean()) * (y - y.mean())))


def correlation(a: Sequence[float], b: Sequence[float]) -> float:
    """Pearson correlation between two return series.

    Requires equal lengths of at least 2.  Returns 0 when lengths differ, the
    series are too short, or either series has zero variance.

    Args:
        a: First return series
        b: Second return series

    Returns:
        Correlation in [-1, 1]
    """
    x = _as_array(a)
    y = _as_array(b)
    n = x.size
    if n != y.size or n < 2:
        return 0.0

    if _is_constant(x) or _is_constant(y):
        return 0.0

    dx = x - x.mean()
    dy = y - y.mean()
    std_x = np.sqrt(np.sum(dx * dx) / n)
    std_y = np.sqrt(np.sum(dy * dy) / n)
    if std_x == 0 or std_y == 0:
        return 0.0

    corr = np.sum(dx * dy) / (n * std_x * std_y)
    # Rounding can push |corr| a hair past 1
    return float(np.clip(corr, -1.0, 1.0))


def beta(asset_returns: Sequence[float], market_returns: Sequence[float]) -> float:
    """Regression beta = cov(asset, market) / var(market).

    Returns the market-neutral beta of 1 when the series differ in length,
    hold fewer than 2 observations, or the market series is constant.
    """
    x = _as_array(asset_returns)
    m = _as_array(market_returns)
    if x.size != m.size or x.size < 2:
        return 1.0

    if _is_constant(m):
        return 1.0

    dx = x - x.mean()
    dm = m - m.mean()
    market_var = np.sum(dm * dm)
    if market_var == 0:
        return 1.0

    return float(np.sum(dx * dm) / market_var)


def pooled_returns(holdings: Sequence[Holding]) -> list[float]:
    """All holdings' historical returns concatenated in holding order.

    This pooled series is what the portfolio-level VaR, drawdown and ratio
    metrics are computed over.
    """
    return [r for h in holdings for r in h.historical_returns]


def portfolio_beta(
    holdings: Sequence[Holding],
    market_returns: Sequence[float] = (),
) -> float:
    """Weighted portfolio beta.

    A holding's explicit ``beta`` is used when set; otherwise beta is regressed
    from its historical returns against ``market_returns`` (falling back to 1).
    An empty portfolio has beta 1.
    """
    if not holdings:
        return 1.0

    total = 0.0
    for holding in holdings:
        holding_beta = (
            holding.beta
            if holding.beta is not None
            else beta(holding.historical_returns, market_returns)
        )
        total += holding.weight * holding_beta

    return float(total)


def correlation_matrix(holdings: Sequence[Holding]) -> pd.DataFrame:
    """Build the symbol x symbol correlation matrix for a set of holdings.

    Diagonal entries are exactly 1; off-diagonal entries come from
    :func:`correlation` on each pair's historical returns, so pairs whose
    series differ in length get 0.  When a symbol appears more than once the
    last holding with that symbol is used.

    Args:
        holdings: Portfolio holdings

    Returns:
        DataFrame with symbol labels on both axes (empty for no holdings)
    """
    by_symbol = {h.symbol: h for h in holdings}
    symbols = list(by_symbol)
    n = len(symbols)

    values = np.eye(n)
    for i in range(n):
        for j in range(i + 1, n):
            corr = correlation(
                by_symbol[symbols[i]].historical_returns,
                by_symbol[symbols[j]].historical_returns,
            )
            values[i, j] = corr
            values[j, i] = corr

    if len(by_symbol) < len(holdings):
        logger.warning(
            "correlation_matrix: duplicate symbols collapsed",
            num_holdings=len(holdings),
            num_symbols=n,
        )

    logger.debug("correlation_matrix: correlation computed", num_assets=n)

    return pd.DataFrame(values, index=symbols, columns=symbols)
