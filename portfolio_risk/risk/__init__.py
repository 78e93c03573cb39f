"""
Risk Analytics Engine

Stateless risk calculators for portfolio snapshots.
Pure computation modules operating on pydantic models, numpy arrays and
plain return series.

Modules:
- statistics: Moments, correlation, beta and the correlation matrix
- concentration: HHI concentration and diversification score
- metrics: Risk score/grade, VaR, ES, drawdown, Sharpe, Sortino
- monte_carlo: Box-Muller Monte Carlo outcome distribution
- stress: Shock-scenario stress testing
- factors: Named, weighted risk factors
- recommendations: Rule-based mitigation recommendations
- monitoring: Threshold alerts
"""

# Statistics module
from .statistics import (
    mean,
    variance,
    std_dev,
    covariance,
    correlation,
    beta,
    pooled_returns,
    portfolio_beta,
    correlation_matrix,
)

# Concentration module
from .concentration import (
    concentration_risk,
    diversification_score,
)

# Metrics module
from .metrics import (
    weighted_volatility,
    overall_risk_score,
    risk_grade,
    value_at_risk,
    expected_shortfall,
    parametric_var,
    max_drawdown,
    sharpe_ratio,
    sortino_ratio,
    TOLERANCE_MULTIPLIERS,
)

# Monte Carlo module
from .monte_carlo import (
    box_muller,
    run_monte_carlo_simulation,
    PERCENTILE_LEVELS,
)

# Stress testing module
from .stress import (
    analyze_stress_scenarios,
    stress_test_scenario,
    default_scenarios,
    DEFAULT_STRESS_SCENARIOS,
)

# Risk factors module
from .factors import calculate_risk_factors

# Recommendations module
from .recommendations import generate_risk_recommendations

# Monitoring module
from .monitoring import alert_severity, monitor_risk

__all__ = [
    # Statistics
    'mean',
    'variance',
    'std_dev',
    'covariance',
    'correlation',
    'beta',
    'pooled_returns',
    'portfolio_beta',
    'correlation_matrix',
    # Concentration
    'concentration_risk',
    'diversification_score',
    # Metrics
    'weighted_volatility',
    'overall_risk_score',
    'risk_grade',
    'value_at_risk',
    'expected_shortfall',
    'parametric_var',
    'max_drawdown',
    'sharpe_ratio',
    'sortino_ratio',
    'TOLERANCE_MULTIPLIERS',
    # Monte Carlo
    'box_muller',
    'run_monte_carlo_simulation',
    'PERCENTILE_LEVELS',
    # Stress testing
    'analyze_stress_scenarios',
    'stress_test_scenario',
    'default_scenarios',
    'DEFAULT_STRESS_SCENARIOS',
    # Factors
    'calculate_risk_factors',
    # Recommendations
    'generate_risk_recommendations',
    # Monitoring
    'alert_severity',
    'monitor_risk',
]
