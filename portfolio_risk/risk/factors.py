"""
Risk Factor Aggregation

Builds the named, weighted and categorised risk factors for a portfolio.
Factor weights are explanatory only; they are not inputs to the overall risk
score.
"""

from __future__ import annotations

from typing import List, Sequence

import structlog

from portfolio_risk.models import PortfolioData, RiskFactor
from portfolio_risk.risk.concentration import concentration_risk
from portfolio_risk.risk.metrics import weighted_volatility
from portfolio_risk.risk.statistics import portfolio_beta

logger = structlog.get_logger(__name__)

MARKET_RISK = 'Market Risk'
CONCENTRATION_RISK = 'Concentration Risk'
VOLATILITY_RISK = 'Volatility Risk'
LIQUIDITY_RISK = 'Liquidity Risk'
CURRENCY_RISK = 'Currency Risk'

# Holdings at which the liquidity score saturates at 100
LIQUIDITY_SATURATION = 20
INTERNATIONAL_MARKER = 'International'


def _impact(value: float, high: float, medium: float) -> str:
    """'high' above ``high``, 'medium' above ``medium``, else 'low'."""
    if value > high:
        return 'high'
    if value > medium:
        return 'medium'
    return 'low'


def market_risk_factor(beta: float) -> RiskFactor:
    return RiskFactor(
        name=MARKET_RISK,
        category='market',
        score=max(0.0, min(beta * 50, 100.0)),
        weight=0.3,
        description='Sensitivity to market movements',
        impact=_impact(beta, high=1.2, medium=0.8),
        mitigation=['Diversification', 'Hedging', 'Asset allocation'],
    )


def concentration_risk_factor(concentration: float) -> RiskFactor:
    return RiskFactor(
        name=CONCENTRATION_RISK,
        category='concentration',
        score=concentration * 100,
        weight=0.2,
        description='Risk from concentrated positions',
        impact=_impact(concentration, high=0.5, medium=0.25),
        mitigation=['Diversification', 'Position sizing', 'Rebalancing'],
    )


def volatility_risk_factor(avg_volatility: float) -> RiskFactor:
    return RiskFactor(
        name=VOLATILITY_RISK,
        category='market',
        score=min(avg_volatility * 200, 100.0),
        weight=0.25,
        description='Price fluctuation risk',
        impact=_impact(avg_volatility, high=0.3, medium=0.15),
        mitigation=[
            'Diversification',
            'Lower-volatility assets',
            'Dollar-cost averaging',
        ],
    )


def liquidity_score(num_holdings: int) -> float:
    """Liquidity score, 5 points per holding, saturating at 100 (20 holdings).

    Non-decreasing in the holding count: past 20 holdings the score stays at
    100 rather than dropping back to 20.
    """
    return float(min(num_holdings, LIQUIDITY_SATURATION) * 5)


def liquidity_risk_factor(num_holdings: int) -> RiskFactor:
    """Liquidity risk falls as the holding count grows.

    Impact is driven by the liquidity score itself, so lower means worse:
    below 50 is high, below 75 is medium.
    """
    score = liquidity_score(num_holdings)
    if score < 50:
        impact = 'high'
    elif score < 75:
        impact = 'medium'
    else:
        impact = 'low'

    return RiskFactor(
        name=LIQUIDITY_RISK,
        category='liquidity',
        score=max(0.0, 100.0 - score),
        weight=0.15,
        description='Risk of not being able to sell quickly',
        impact=impact,
        mitigation=[
            'Include liquid assets',
            'Diversify across markets',
            'Emergency fund',
        ],
    )


def currency_risk_factor() -> RiskFactor:
    return RiskFactor(
        name=CURRENCY_RISK,
        category='market',
        score=30.0,
        weight=0.1,
        description='Risk from currency fluctuations',
        impact='medium',
        mitigation=[
            'Currency hedging',
            'Diversified currency exposure',
            'Local currency assets',
        ],
    )


def calculate_risk_factors(
    portfolio: PortfolioData,
    market_returns: Sequence[float] = (),
) -> List[RiskFactor]:
    """Build the risk factor set for a portfolio.

    Always returns Market, Concentration, Volatility and Liquidity risk, in
    that order, plus Currency risk when any holding's sector mentions
    "International".

    Args:
        portfolio: Portfolio snapshot
        market_returns: Market return series for regressing holding betas

    Returns:
        List of RiskFactor
    """
    holdings = portfolio.holdings

    factors = [
        market_risk_factor(portfolio_beta(holdings, market_returns)),
        concentration_risk_factor(concentration_risk(holdings)),
        volatility_risk_factor(weighted_volatility(portfolio)),
        liquidity_risk_factor(len(holdings)),
    ]

    if any(INTERNATIONAL_MARKER in h.sector for h in holdings):
        factors.append(currency_risk_factor())

    logger.info(
        "calculate_risk_factors: factors built",
        num_factors=len(factors),
        high_impact=[f.name for f in factors if f.impact == 'high'],
    )

    return factors
