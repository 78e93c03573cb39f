"""Pydantic models for risk engine inputs and results.

Inputs (Holding, PortfolioData, MarketData, ScenarioInput) are supplied by the
caller for a single assessment.  Results are plain value objects that serialise
to JSON with ``model_dump_json()``.  All models are frozen.
"""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field

RiskTolerance = Literal["conservative", "moderate", "aggressive"]
RiskCategory = Literal[
    "market", "concentration", "liquidity", "credit", "operational", "regulatory"
]
Impact = Literal["high", "medium", "low"]
Priority = Literal["high", "medium", "low"]
Severity = Literal["low", "medium", "high", "critical"]
Grade = Literal["A", "B", "C", "D", "F"]
VaRMethodology = Literal["historical", "parametric", "monte-carlo"]
RecommendationType = Literal[
    "rebalance", "hedge", "diversify", "reduce-exposure", "add-protection"
]

# inf sentinels (Sortino, recovery time) serialise as Infinity so JSON round-trips
_FROZEN = {"frozen": True, "ser_json_inf_nan": "constants"}


# ---------------------------------------------------------------------------
# Inputs
# ---------------------------------------------------------------------------


class Holding(BaseModel):
    """A single portfolio position.

    ``weight`` is the fractional allocation and is never clamped or
    renormalised.  ``volatility`` is the period volatility used for the score
    and the Monte Carlo draws; it need not be derived from
    ``historical_returns``.
    """

    symbol: str
    quantity: float = 0.0
    current_price: float = 0.0
    weight: float
    historical_returns: list[float] = Field(default_factory=list)  # chronological, daily
    volatility: float = 0.0
    beta: float | None = None
    sector: str = "Unknown"
    asset_class: str = "Unknown"
    correlation: dict[str, float] | None = None

    model_config = _FROZEN

    @property
    def market_value(self) -> float:
        return self.quantity * self.current_price


class PortfolioData(BaseModel):
    """Portfolio snapshot for one assessment.  ``holdings`` may be empty."""

    holdings: list[Holding] = Field(default_factory=list)
    total_value: float = 0.0
    time_horizon: int = 1  # days
    risk_tolerance: RiskTolerance = "moderate"

    model_config = _FROZEN


class MarketData(BaseModel):
    """Market snapshot.

    ``market_returns`` is the market return series used to regress beta for
    holdings without an explicit beta; when empty every such holding gets the
    neutral beta of 1.
    """

    risk_free_rate: float = 0.02  # annualised
    market_return: float = 0.08
    market_volatility: float = 0.15
    correlation_matrix: dict[str, dict[str, float]] = Field(default_factory=dict)
    market_returns: list[float] = Field(default_factory=list)

    model_config = _FROZEN


class ScenarioInput(BaseModel):
    """A discrete shock set keyed by symbol or sector."""

    name: str
    shocks: dict[str, float] = Field(default_factory=dict)
    probability: float = 0.0

    model_config = _FROZEN


# ---------------------------------------------------------------------------
# Results
# ---------------------------------------------------------------------------


class RiskFactor(BaseModel):
    """A named, categorised risk driver.  ``weight`` is advisory only."""

    name: str
    category: RiskCategory
    score: float  # 0-100
    weight: float  # 0-1
    description: str
    impact: Impact
    mitigation: list[str] = Field(default_factory=list)

    model_config = _FROZEN


class VaRMetric(BaseModel):
    one_day: float
    one_week: float
    one_month: float
    confidence_level: float
    methodology: VaRMethodology

    model_config = _FROZEN


class VolatilityMetric(BaseModel):
    realized: float
    implied: float = 0.0  # needs options data
    garch: float = 0.0  # needs a fitted GARCH model
    period: int = 252
    annualized: bool = True

    model_config = _FROZEN


class RiskMetrics(BaseModel):
    """Aggregate metric bundle.  ``calmar_ratio`` is 0 when not computed."""

    value_at_risk: VaRMetric
    expected_shortfall: float
    maximum_drawdown: float
    volatility: VolatilityMetric
    beta: float
    correlation: dict[str, dict[str, float]] = Field(default_factory=dict)
    sharpe_ratio: float
    sortino_ratio: float
    calmar_ratio: float = 0.0

    model_config = _FROZEN


class MonteCarloResult(BaseModel):
    simulations: int
    time_horizon: int
    outcomes: list[float]  # sorted ascending
    percentiles: dict[str, float]
    shortfall_probability: float
    expected_return: float
    volatility: float

    model_config = _FROZEN


class StressTestResult(BaseModel):
    scenario: str
    probability: float = 0.0
    portfolio_impact: float
    worst_asset: str  # empty when no holding is impacted
    time_to_recover: float
    portfolio_pnl: float = 0.0  # sum of market_value * shock

    model_config = _FROZEN


class RiskRecommendation(BaseModel):
    type: RecommendationType
    priority: Priority
    description: str
    expected_impact: float  # percent
    implementation: list[str] = Field(default_factory=list)

    model_config = _FROZEN


class RiskThresholds(BaseModel):
    """Alert thresholds for ``monitor_risk``.  Unset thresholds are skipped."""

    risk_score: float | None = None
    volatility: float | None = None
    drawdown: float | None = None
    concentration: float | None = None

    model_config = _FROZEN


class RiskAlert(BaseModel):
    type: str  # "risk_score", "volatility", "drawdown", "concentration"
    severity: Severity
    message: str
    threshold: float
    current: float

    model_config = _FROZEN


class RiskMonitorReport(BaseModel):
    alerts: list[RiskAlert] = Field(default_factory=list)
    recommendations: list[str] = Field(default_factory=list)

    model_config = _FROZEN


class RiskAssessment(BaseModel):
    """Complete result of one engine invocation."""

    overall_risk_score: float
    risk_grade: Grade
    concentration_risk: float
    diversification_score: float
    factors: list[RiskFactor]
    metrics: RiskMetrics
    recommendations: list[RiskRecommendation]
    stress_tests: list[StressTestResult]
    monte_carlo: MonteCarloResult

    model_config = _FROZEN
