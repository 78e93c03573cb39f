"""
Stress Testing Module

Applies discrete shock sets to portfolio holdings and reports the
portfolio-level impact, the worst-hit holding and a rough recovery estimate.
Shocks are keyed by symbol first, then by sector.
"""

from __future__ import annotations

import math
from typing import Dict, List, Sequence

import structlog

from portfolio_risk.models import Holding, PortfolioData, ScenarioInput, StressTestResult

logger = structlog.get_logger(__name__)

# Fraction of weighted volatility assumed to be recovered per day
RECOVERY_RATE = 0.1

# Hypothetical shock scenarios: sector/asset-group key -> shocked return
DEFAULT_STRESS_SCENARIOS = {
    'market_crash': {
        'name': 'Market Crash',
        'shocks': {
            'STOCK': -0.30,
            'BOND': -0.10,
            'CRYPTO': -0.50,
        },
        'probability': 0.05,
    },
    'interest_rate_spike': {
        'name': 'Interest Rate Spike',
        'shocks': {
            'BOND': -0.20,
            'REIT': -0.15,
            'STOCK': -0.10,
        },
        'probability': 0.10,
    },
    'inflation_shock': {
        'name': 'Inflation Shock',
        'shocks': {
            'COMMODITY': 0.20,
            'STOCK': -0.05,
            'BOND': -0.15,
        },
        'probability': 0.15,
    },
    'geopolitical_crisis': {
        'name': 'Geopolitical Crisis',
        'shocks': {
            'EMERGING': -0.25,
            'COMMODITY': 0.15,
            'SAFE_HAVEN': 0.10,
        },
        'probability': 0.08,
    },
}


def default_scenarios() -> List[ScenarioInput]:
    """Return DEFAULT_STRESS_SCENARIOS as ScenarioInput models."""
    return [
        ScenarioInput(
            name=spec['name'],
            shocks=dict(spec['shocks']),
            probability=spec['probability'],
        )
        for spec in DEFAULT_STRESS_SCENARIOS.values()
    ]


def holding_shock(holding: Holding, shocks: Dict[str, float]) -> float:
    """Shock for a holding: by symbol if present, else by sector, else 0."""
    if holding.symbol in shocks:
        return shocks[holding.symbol]
    return shocks.get(holding.sector, 0.0)


def estimate_recovery_days(portfolio_impact: float, avg_volatility: float) -> float:
    """Rough recovery estimate |impact| / (weighted_vol * 0.1).

    Not a calibrated model.  With zero volatility a non-zero impact never
    recovers (inf) and a zero impact needs no recovery (0).
    """
    denominator = avg_volatility * RECOVERY_RATE
    if denominator == 0:
        return 0.0 if portfolio_impact == 0 else math.inf
    return abs(portfolio_impact) / denominator


def stress_test_scenario(
    holdings: Sequence[Holding],
    scenario: ScenarioInput,
) -> StressTestResult:
    """Apply one scenario to a set of holdings.

    Args:
        holdings: Portfolio holdings
        scenario: Shock set keyed by symbol or sector

    Returns:
        StressTestResult with weighted portfolio impact, the dollar P&L of
        the shocked positions (quantity * price * shock) and the holding
        with the largest absolute impact (first one wins on ties)
    """
    portfolio_impact = 0.0
    portfolio_pnl = 0.0
    worst_impact = 0.0
    worst_asset = ''

    for holding in holdings:
        shock = holding_shock(holding, scenario.shocks)
        impact = holding.weight * shock
        portfolio_impact += impact
        portfolio_pnl += holding.market_value * shock

        if abs(impact) > abs(worst_impact):
            worst_impact = impact
            worst_asset = holding.symbol

    avg_volatility = sum(h.volatility * h.weight for h in holdings)

    return StressTestResult(
        scenario=scenario.name,
        probability=scenario.probability,
        portfolio_impact=float(portfolio_impact),
        worst_asset=worst_asset,
        time_to_recover=float(estimate_recovery_days(portfolio_impact, avg_volatility)),
        portfolio_pnl=float(portfolio_pnl),
    )


def analyze_stress_scenarios(
    portfolio: PortfolioData,
    scenarios: Sequence[ScenarioInput],
) -> List[StressTestResult]:
    """Run every scenario against the portfolio, preserving scenario order."""
    if not portfolio.holdings:
        logger.warning("analyze_stress_scenarios: empty portfolio")

    results = [stress_test_scenario(portfolio.holdings, s) for s in scenarios]

    for result in results:
        if math.isinf(result.time_to_recover):
            logger.warning(
                "analyze_stress_scenarios: zero weighted volatility, recovery unbounded",
                scenario=result.scenario,
                portfolio_impact=result.portfolio_impact,
            )

    logger.info(
        "analyze_stress_scenarios: complete",
        num_scenarios=len(results),
        worst_impact=min((r.portfolio_impact for r in results), default=0.0),
    )

    return results
