"""
Unit tests for models.py - input validation and result immutability
"""

import math

import pytest
from pydantic import ValidationError

from portfolio_risk.assessment import assess_portfolio
from portfolio_risk.models import (
    Holding,
    MarketData,
    PortfolioData,
    RiskAssessment,
    RiskFactor,
    ScenarioInput,
    StressTestResult,
)


class TestHolding:

    def test_defaults(self):
        holding = Holding(symbol='AAPL', weight=0.5)

        assert holding.historical_returns == []
        assert holding.volatility == 0.0
        assert holding.beta is None
        assert holding.sector == 'Unknown'
        assert holding.asset_class == 'Unknown'

    def test_market_value(self, holding_factory):
        holding = holding_factory('AAPL', 0.5, quantity=12, current_price=150.0)

        assert holding.market_value == pytest.approx(1800.0)

    def test_weight_required(self):
        with pytest.raises(ValidationError):
            Holding(symbol='AAPL')

    def test_frozen(self, holding_factory):
        holding = holding_factory('AAPL', 0.5)

        with pytest.raises(ValidationError):
            holding.weight = 0.6

    def test_weight_not_clamped(self):
        assert Holding(symbol='LEV', weight=1.5).weight == 1.5


class TestPortfolioData:

    def test_defaults(self):
        portfolio = PortfolioData()

        assert portfolio.holdings == []
        assert portfolio.time_horizon == 1
        assert portfolio.risk_tolerance == 'moderate'

    def test_invalid_risk_tolerance(self):
        with pytest.raises(ValidationError):
            PortfolioData(risk_tolerance='reckless')


class TestMarketData:

    def test_defaults(self):
        market_data = MarketData()

        assert market_data.risk_free_rate == 0.02
        assert market_data.market_return == 0.08
        assert market_data.market_volatility == 0.15
        assert market_data.market_returns == []


class TestResultModels:

    def test_invalid_factor_category(self):
        with pytest.raises(ValidationError):
            RiskFactor(
                name='Weather Risk',
                category='weather',
                score=10.0,
                weight=0.1,
                description='Rain',
                impact='low',
            )

    def test_scenario_round_trips_through_json(self):
        scenario = ScenarioInput(name='Crash', shocks={'STOCK': -0.3}, probability=0.05)

        assert ScenarioInput.model_validate_json(scenario.model_dump_json()) == scenario


class TestJsonRoundTrip:
    """Infinite sentinels must survive model_dump_json / model_validate_json."""

    def test_infinite_recovery_time(self):
        result = StressTestResult(
            scenario='Crash', portfolio_impact=-0.1, worst_asset='A', time_to_recover=math.inf
        )

        restored = StressTestResult.model_validate_json(result.model_dump_json())

        assert restored.time_to_recover == math.inf
        assert restored == result

    def test_assessment_without_downside(self, holding_factory, settings):
        """All-positive returns against a zero target give an infinite Sortino."""
        portfolio = PortfolioData(holdings=[
            holding_factory('UP', 1.0, volatility=0.0, historical_returns=[0.01, 0.02]),
        ])

        assessment = assess_portfolio(
            portfolio, MarketData(risk_free_rate=0.0), settings=settings
        )
        restored = RiskAssessment.model_validate_json(assessment.model_dump_json())

        assert assessment.metrics.sortino_ratio == math.inf
        assert restored.metrics.sortino_ratio == math.inf
        assert restored == assessment
