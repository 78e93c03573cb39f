"""
Risk Recommendations

Rule table mapping the risk score and factor scores to mitigation actions.
Rules are evaluated independently, so several may fire together.
"""

from __future__ import annotations

from typing import List, Optional, Sequence

import structlog

from portfolio_risk.models import PortfolioData, RiskFactor, RiskRecommendation
from portfolio_risk.risk.factors import CONCENTRATION_RISK, VOLATILITY_RISK

logger = structlog.get_logger(__name__)

HIGH_RISK_SCORE = 80.0
HIGH_CONCENTRATION_SCORE = 50.0
HIGH_VOLATILITY_SCORE = 60.0

REDUCE_EXPOSURE = RiskRecommendation(
    type='reduce-exposure',
    priority='high',
    description='Reduce overall portfolio risk through position sizing',
    expected_impact=15.0,
    implementation=[
        'Reduce position sizes',
        'Add cash allocation',
        'Move to lower-risk assets',
    ],
)

DIVERSIFY = RiskRecommendation(
    type='diversify',
    priority='high',
    description='Improve diversification to reduce concentration risk',
    expected_impact=20.0,
    implementation=[
        'Add more holdings',
        'Diversify across sectors',
        'Include different asset classes',
    ],
)

ADD_PROTECTION = RiskRecommendation(
    type='add-protection',
    priority='medium',
    description='Add protective strategies to reduce volatility',
    expected_impact=10.0,
    implementation=[
        'Consider protective puts',
        'Add bonds or stable assets',
        'Implement stop-loss orders',
    ],
)


def _factor_score(factors: Sequence[RiskFactor], name: str) -> Optional[float]:
    for factor in factors:
        if factor.name == name:
            return factor.score
    return None


def generate_risk_recommendations(
    risk_score: float,
    risk_factors: Sequence[RiskFactor],
    portfolio: Optional[PortfolioData] = None,
) -> List[RiskRecommendation]:
    """Map the current risk picture to prioritised recommendations.

    Rules:
        - risk_score > 80                  -> reduce-exposure (high)
        - Concentration Risk score > 50    -> diversify (high)
        - Volatility Risk score > 60       -> add-protection (medium)

    Args:
        risk_score: Overall risk score (0-100)
        risk_factors: Factors from calculate_risk_factors
        portfolio: Portfolio snapshot, used only for log context

    Returns:
        Recommendations in rule order
    """
    recommendations = []

    if risk_score > HIGH_RISK_SCORE:
        recommendations.append(REDUCE_EXPOSURE.model_copy(deep=True))

    concentration = _factor_score(risk_factors, CONCENTRATION_RISK)
    if concentration is not None and concentration > HIGH_CONCENTRATION_SCORE:
        recommendations.append(DIVERSIFY.model_copy(deep=True))

    volatility = _factor_score(risk_factors, VOLATILITY_RISK)
    if volatility is not None and volatility > HIGH_VOLATILITY_SCORE:
        recommendations.append(ADD_PROTECTION.model_copy(deep=True))

    logger.info(
        "generate_risk_recommendations: recommendations built",
        risk_score=risk_score,
        num_holdings=len(portfolio.holdings) if portfolio is not None else None,
        types=[r.type for r in recommendations],
    )

    return recommendations
