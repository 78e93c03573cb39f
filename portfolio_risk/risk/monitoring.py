"""
Risk Threshold Monitoring

Compares current portfolio risk readings against caller-defined thresholds and
emits graded alerts with a short advisory per breach.
"""

from __future__ import annotations

import structlog

from portfolio_risk.models import PortfolioData, RiskAlert, RiskMonitorReport, RiskThresholds
from portfolio_risk.risk.concentration import concentration_risk
from portfolio_risk.risk.metrics import max_drawdown, overall_risk_score, weighted_volatility
from portfolio_risk.risk.statistics import pooled_returns

logger = structlog.get_logger(__name__)


def alert_severity(current: float, threshold: float) -> str:
    """Severity from the breach ratio current / threshold.

    > 2 critical, > 1.5 high, > 1.2 medium, otherwise low.
    """
    if threshold == 0:
        return 'critical'

    ratio = current / threshold
    if ratio > 2:
        return 'critical'
    if ratio > 1.5:
        return 'high'
    if ratio > 1.2:
        return 'medium'
    return 'low'


def monitor_risk(
    portfolio: PortfolioData,
    thresholds: RiskThresholds,
) -> RiskMonitorReport:
    """Check the portfolio against every threshold that is set.

    A check fires when the current reading is strictly above its threshold.
    Readings:
        - risk_score: overall_risk_score (0-100)
        - volatility: weighted holding volatility
        - drawdown: max drawdown of the pooled return series
        - concentration: HHI concentration risk

    Args:
        portfolio: Portfolio snapshot
        thresholds: Thresholds to check; None fields are skipped

    Returns:
        RiskMonitorReport with one alert and one advisory per breach
    """
    alerts = []
    recommendations = []

    if thresholds.risk_score is not None:
        current = overall_risk_score(portfolio)
        if current > thresholds.risk_score:
            alerts.append(RiskAlert(
                type='risk_score',
                severity=alert_severity(current, thresholds.risk_score),
                message=(
                    f"Portfolio risk score ({current:.1f}) exceeds "
                    f"threshold ({thresholds.risk_score})"
                ),
                threshold=thresholds.risk_score,
                current=current,
            ))
            recommendations.append(
                "Consider reducing portfolio risk through diversification or position sizing"
            )

    if thresholds.volatility is not None:
        current = weighted_volatility(portfolio)
        if current > thresholds.volatility:
            alerts.append(RiskAlert(
                type='volatility',
                severity=alert_severity(current, thresholds.volatility),
                message=(
                    f"Portfolio volatility ({current * 100:.1f}%) exceeds "
                    f"threshold ({thresholds.volatility * 100:.1f}%)"
                ),
                threshold=thresholds.volatility,
                current=current,
            ))
            recommendations.append(
                "Consider adding lower volatility assets to reduce portfolio risk"
            )

    if thresholds.drawdown is not None:
        current = max_drawdown(pooled_returns(portfolio.holdings))
        if current > thresholds.drawdown:
            alerts.append(RiskAlert(
                type='drawdown',
                severity=alert_severity(current, thresholds.drawdown),
                message=(
                    f"Maximum drawdown ({current * 100:.1f}%) exceeds "
                    f"threshold ({thresholds.drawdown * 100:.1f}%)"
                ),
                threshold=thresholds.drawdown,
                current=current,
            ))
            recommendations.append(
                "Review loss limits and consider protective positions to contain drawdowns"
            )

    if thresholds.concentration is not None:
        current = concentration_risk(portfolio.holdings)
        if current > thresholds.concentration:
            alerts.append(RiskAlert(
                type='concentration',
                severity=alert_severity(current, thresholds.concentration),
                message=(
                    f"Portfolio concentration ({current * 100:.1f}%) exceeds "
                    f"threshold ({thresholds.concentration * 100:.1f}%)"
                ),
                threshold=thresholds.concentration,
                current=current,
            ))
            recommendations.append("Diversify holdings to reduce concentration risk")

    if alerts:
        logger.warning(
            "monitor_risk: thresholds breached",
            breaches=[(a.type, a.severity) for a in alerts],
        )
    else:
        logger.info("monitor_risk: all readings within thresholds")

    return RiskMonitorReport(alerts=alerts, recommendations=recommendations)
