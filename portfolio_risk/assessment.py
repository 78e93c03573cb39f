"""Risk assessment orchestration.

Composes the stateless calculators in ``portfolio_risk.risk`` into the metric
bundle and the full ``RiskAssessment`` for one portfolio snapshot.  Defaults
that the caller omits (market data, confidence, Monte Carlo size) come from
``EngineSettings``.
"""

from __future__ import annotations

from typing import Dict, Sequence

import numpy as np
import structlog

from portfolio_risk.config import EngineSettings, get_settings
from portfolio_risk.models import (
    MarketData,
    PortfolioData,
    RiskAssessment,
    RiskMetrics,
    ScenarioInput,
    VaRMetric,
    VolatilityMetric,
)
from portfolio_risk.risk.concentration import concentration_risk, diversification_score
from portfolio_risk.risk.factors import calculate_risk_factors
from portfolio_risk.risk.metrics import (
    expected_shortfall,
    max_drawdown,
    overall_risk_score,
    parametric_var,
    risk_grade,
    sharpe_ratio,
    sortino_ratio,
    value_at_risk,
    weighted_volatility,
)
from portfolio_risk.risk.monte_carlo import run_monte_carlo_simulation
from portfolio_risk.risk.recommendations import generate_risk_recommendations
from portfolio_risk.risk.statistics import correlation_matrix, pooled_returns, portfolio_beta
from portfolio_risk.risk.stress import analyze_stress_scenarios, default_scenarios

logger = structlog.get_logger(__name__)

VAR_METHODS = ('historical', 'parametric')


def default_market_data(settings: EngineSettings | None = None) -> MarketData:
    """MarketData built from the configured market assumptions."""
    settings = settings or get_settings()
    return MarketData(
        risk_free_rate=settings.risk_free_rate,
        market_return=settings.market_return,
        market_volatility=settings.market_volatility,
    )


def _var(returns: Sequence[float], confidence: float, horizon: int, methodology: str) -> float:
    if methodology == 'parametric':
        return parametric_var(returns, confidence, horizon)
    return value_at_risk(returns, confidence, horizon)


def calculate_var_horizons(
    portfolio: PortfolioData,
    confidence: float = 0.95,
    horizons: Sequence[int] | None = None,
    methodology: str = 'historical',
) -> Dict[str, float]:
    """VaR of the pooled return series for each horizon, keyed "{h}d".

    Horizons default to the configured ``var_horizons`` (1, 7 and 30 days).
    """
    if methodology not in VAR_METHODS:
        raise ValueError(f"Unknown VaR methodology: {methodology}")

    if horizons is None:
        horizons = get_settings().var_horizons

    returns = pooled_returns(portfolio.holdings)
    return {f"{h}d": _var(returns, confidence, h, methodology) for h in horizons}


def calculate_risk_metrics(
    portfolio: PortfolioData,
    market_data: MarketData,
    confidence: float = 0.95,
    methodology: str = 'historical',
    settings: EngineSettings | None = None,
) -> RiskMetrics:
    """Build the RiskMetrics bundle for a portfolio.

    VaR, ES, drawdown and the Sharpe/Sortino ratios are computed over the
    pooled return series of all holdings.  Calmar is reported as 0 (not
    computed).

    Args:
        portfolio: Portfolio snapshot
        market_data: Market snapshot (risk-free rate, market return series)
        confidence: VaR/ES confidence level
        methodology: 'historical' or 'parametric' VaR
        settings: Engine settings (trading days per year); cached environment
            settings when None

    Returns:
        RiskMetrics
    """
    settings = settings or get_settings()
    trading_days = settings.trading_days

    var_by_horizon = calculate_var_horizons(
        portfolio, confidence, horizons=(1, 7, 30), methodology=methodology
    )
    returns = pooled_returns(portfolio.holdings)

    metrics = RiskMetrics(
        value_at_risk=VaRMetric(
            one_day=var_by_horizon['1d'],
            one_week=var_by_horizon['7d'],
            one_month=var_by_horizon['30d'],
            confidence_level=confidence,
            methodology=methodology,
        ),
        expected_shortfall=expected_shortfall(returns, confidence),
        maximum_drawdown=max_drawdown(returns),
        volatility=VolatilityMetric(
            realized=weighted_volatility(portfolio),
            period=trading_days,
        ),
        beta=portfolio_beta(portfolio.holdings, market_data.market_returns),
        correlation=correlation_matrix(portfolio.holdings).to_dict(),
        sharpe_ratio=sharpe_ratio(returns, market_data.risk_free_rate, trading_days),
        sortino_ratio=sortino_ratio(returns, market_data.risk_free_rate, trading_days),
        calmar_ratio=0.0,
    )

    logger.info(
        "calculate_risk_metrics: metrics built",
        num_observations=len(returns),
        var_1d=metrics.value_at_risk.one_day,
        max_drawdown=metrics.maximum_drawdown,
        methodology=methodology,
    )

    return metrics


def assess_portfolio(
    portfolio: PortfolioData,
    market_data: MarketData | None = None,
    scenarios: Sequence[ScenarioInput] | None = None,
    simulations: int | None = None,
    seed: int | None = None,
    rng: np.random.Generator | None = None,
    settings: EngineSettings | None = None,
) -> RiskAssessment:
    """Run the full risk assessment for one portfolio snapshot.

    Args:
        portfolio: Portfolio snapshot
        market_data: Market snapshot; configured defaults when None
        scenarios: Stress scenarios; DEFAULT_STRESS_SCENARIOS when None
        simulations: Monte Carlo trials; configured default when None
        seed: Monte Carlo seed; configured default when None
        rng: Monte Carlo random generator, takes precedence over ``seed``
        settings: Engine settings; cached environment settings when None

    Returns:
        RiskAssessment
    """
    settings = settings or get_settings()
    market_data = market_data or default_market_data(settings)
    if scenarios is None:
        scenarios = default_scenarios()
    if seed is None:
        seed = settings.monte_carlo_seed

    logger.info(
        "assess_portfolio: starting",
        num_holdings=len(portfolio.holdings),
        risk_tolerance=portfolio.risk_tolerance,
        num_scenarios=len(scenarios),
    )

    score = overall_risk_score(portfolio)
    factors = calculate_risk_factors(portfolio, market_data.market_returns)

    assessment = RiskAssessment(
        overall_risk_score=score,
        risk_grade=risk_grade(score),
        concentration_risk=concentration_risk(portfolio.holdings),
        diversification_score=diversification_score(portfolio.holdings),
        factors=factors,
        metrics=calculate_risk_metrics(
            portfolio, market_data, confidence=settings.confidence_level,
            settings=settings,
        ),
        recommendations=generate_risk_recommendations(score, factors, portfolio),
        stress_tests=analyze_stress_scenarios(portfolio, scenarios),
        monte_carlo=run_monte_carlo_simulation(
            portfolio,
            simulations=(
                simulations if simulations is not None
                else settings.monte_carlo_simulations
            ),
            horizon_days=settings.monte_carlo_horizon_days,
            rng=rng,
            seed=seed,
        ),
    )

    logger.info(
        "assess_portfolio: complete",
        overall_risk_score=assessment.overall_risk_score,
        risk_grade=assessment.risk_grade,
        num_factors=len(assessment.factors),
        num_recommendations=len(assessment.recommendations),
    )

    return assessment
