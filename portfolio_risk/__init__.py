"""
Portfolio Risk

Risk score, risk factors, VaR/ES, drawdown, Monte Carlo and stress testing for
a portfolio snapshot.  ``assess_portfolio`` runs the full assessment; the
individual calculators live in ``portfolio_risk.risk``.
"""

from .assessment import (
    assess_portfolio,
    calculate_risk_metrics,
    calculate_var_horizons,
    default_market_data,
)
from .config import EngineSettings, get_settings
from .log_config import configure_logging, configure_logging_from_settings
from .models import (
    Holding,
    MarketData,
    MonteCarloResult,
    PortfolioData,
    RiskAlert,
    RiskAssessment,
    RiskFactor,
    RiskMetrics,
    RiskMonitorReport,
    RiskRecommendation,
    RiskThresholds,
    ScenarioInput,
    StressTestResult,
    VaRMetric,
    VolatilityMetric,
)

__all__ = [
    # Assessment
    'assess_portfolio',
    'calculate_risk_metrics',
    'calculate_var_horizons',
    'default_market_data',
    # Config / logging
    'EngineSettings',
    'get_settings',
    'configure_logging',
    'configure_logging_from_settings',
    # Models
    'Holding',
    'MarketData',
    'MonteCarloResult',
    'PortfolioData',
    'RiskAlert',
    'RiskAssessment',
    'RiskFactor',
    'RiskMetrics',
    'RiskMonitorReport',
    'RiskRecommendation',
    'RiskThresholds',
    'ScenarioInput',
    'StressTestResult',
    'VaRMetric',
    'VolatilityMetric',
]
