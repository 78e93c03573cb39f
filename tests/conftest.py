"""
Shared test fixtures for the risk engine test suite.

Provides consistent test data across all test modules:
- Sample daily return series per symbol
- Sample holdings and portfolios (five-stock and three-holding)
- Market data and engine settings
"""

import pytest
import numpy as np
import structlog

from portfolio_risk.config import EngineSettings
from portfolio_risk.models import Holding, MarketData, PortfolioData


def _make_holding(symbol, weight, volatility=0.2, **kwargs):
    """Build a Holding with sensible defaults for the fields a test ignores."""
    kwargs.setdefault('quantity', 10.0)
    kwargs.setdefault('current_price', 100.0)
    return Holding(symbol=symbol, weight=weight, volatility=volatility, **kwargs)


@pytest.fixture
def sample_symbols():
    """Standard list of symbols used across tests."""
    return ['AAPL', 'GOOGL', 'MSFT', 'TSLA', 'AMZN']


@pytest.fixture
def sample_returns(sample_symbols):
    """Daily returns per symbol (252 days) with correlation structure.

    Returns:
        Dict[str, List[float]]: GOOGL and MSFT are correlated with AAPL
    """
    np.random.seed(42)
    data = np.random.normal(0, 0.02, (252, len(sample_symbols)))

    data[:, 1] = 0.7 * data[:, 0] + 0.3 * data[:, 1]  # GOOGL correlated with AAPL
    data[:, 2] = 0.5 * data[:, 0] + 0.5 * data[:, 2]  # MSFT correlated with AAPL

    return {sym: data[:, i].tolist() for i, sym in enumerate(sample_symbols)}


@pytest.fixture
def market_returns():
    """Market return series aligned with sample_returns (252 days)."""
    np.random.seed(7)
    return np.random.normal(0.0003, 0.01, 252).tolist()


@pytest.fixture
def sample_holdings(sample_symbols, sample_returns):
    """Five equity holdings, weights summing to 1.0, two sectors."""
    weights = [0.30, 0.25, 0.20, 0.15, 0.10]
    vols = [0.25, 0.30, 0.22, 0.55, 0.28]
    sectors = ['Technology', 'Technology', 'Technology', 'Consumer', 'Consumer']

    return [
        _make_holding(
            sym,
            weight=w,
            volatility=v,
            sector=s,
            asset_class='Equity',
            historical_returns=sample_returns[sym],
        )
        for sym, w, v, s in zip(sample_symbols, weights, vols, sectors)
    ]


@pytest.fixture
def sample_portfolio(sample_holdings):
    return PortfolioData(
        holdings=sample_holdings,
        total_value=100000.0,
        time_horizon=252,
        risk_tolerance='moderate',
    )


@pytest.fixture
def three_holdings():
    """Weights [0.6, 0.3, 0.1], volatilities [0.4, 0.2, 0.1], three sectors."""
    return [
        _make_holding('GROW', 0.6, 0.4, sector='Technology', asset_class='Equity'),
        _make_holding('CORE', 0.3, 0.2, sector='Healthcare', asset_class='Equity'),
        _make_holding('SAFE', 0.1, 0.1, sector='Utilities', asset_class='Equity'),
    ]


@pytest.fixture
def empty_portfolio():
    return PortfolioData(holdings=[], total_value=0.0, time_horizon=1)


@pytest.fixture
def market_data(market_returns):
    return MarketData(
        risk_free_rate=0.02,
        market_return=0.08,
        market_volatility=0.15,
        market_returns=market_returns,
    )


@pytest.fixture
def settings():
    """Engine settings with a small, seeded Monte Carlo run."""
    return EngineSettings(monte_carlo_simulations=500, monte_carlo_seed=11)


@pytest.fixture(autouse=True)
def _reset_structlog():
    yield
    structlog.reset_defaults()


@pytest.fixture
def holding_factory():
    """Factory for ad-hoc holdings: holding_factory('X', 0.5, 0.2, sector='TECH')."""
    return _make_holding
