"""
Unit tests for recommendations.py - Risk Recommendations
"""

import pytest

from portfolio_risk.risk.factors import (
    concentration_risk_factor,
    liquidity_risk_factor,
    volatility_risk_factor,
)
from portfolio_risk.risk.recommendations import (
    DIVERSIFY,
    generate_risk_recommendations,
)


@pytest.fixture
def calm_factors():
    """Concentration 20, volatility 20."""
    return [concentration_risk_factor(0.2), volatility_risk_factor(0.1)]


@pytest.fixture
def stressed_factors():
    """Concentration 80, volatility 80."""
    return [concentration_risk_factor(0.8), volatility_risk_factor(0.4)]


class TestGenerateRiskRecommendations:
    """Tests for generate_risk_recommendations function."""

    def test_nothing_fires(self, calm_factors):
        assert generate_risk_recommendations(30.0, calm_factors) == []

    def test_all_rules_fire_in_order(self, stressed_factors):
        recommendations = generate_risk_recommendations(85.0, stressed_factors)

        assert [r.type for r in recommendations] == [
            'reduce-exposure',
            'diversify',
            'add-protection',
        ]
        assert [r.priority for r in recommendations] == ['high', 'high', 'medium']
        assert [r.expected_impact for r in recommendations] == [15.0, 20.0, 10.0]

    def test_thresholds_are_strict(self):
        factors = [concentration_risk_factor(0.5), volatility_risk_factor(0.3)]

        assert generate_risk_recommendations(80.0, factors) == []

    def test_high_score_only(self, calm_factors):
        recommendations = generate_risk_recommendations(80.5, calm_factors)

        assert [r.type for r in recommendations] == ['reduce-exposure']

    def test_missing_factors_are_skipped(self):
        """Only the score rule can fire without concentration/volatility factors."""
        factors = [liquidity_risk_factor(1)]

        assert generate_risk_recommendations(50.0, factors) == []
        assert len(generate_risk_recommendations(90.0, [])) == 1

    def test_returns_copies(self, stressed_factors):
        recommendations = generate_risk_recommendations(10.0, stressed_factors)
        recommendations[0].implementation.append('Sell everything')

        assert 'Sell everything' not in DIVERSIFY.implementation

    def test_portfolio_is_optional(self, sample_portfolio, stressed_factors):
        with_portfolio = generate_risk_recommendations(85.0, stressed_factors, sample_portfolio)

        assert with_portfolio == generate_risk_recommendations(85.0, stressed_factors)
