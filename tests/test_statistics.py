"""
Unit tests for statistics.py - Statistics Primitives

Tests cover:
- Population mean, variance, standard deviation and covariance
- Pearson correlation and its degenerate cases
- Beta regression and weighted portfolio beta
- Correlation matrix construction
"""

import pytest
import numpy as np
import pandas as pd
from numpy.testing import assert_allclose

from portfolio_risk.risk.statistics import (
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


class TestMoments:
    """Tests for mean, variance, std_dev and covariance."""

    def test_mean(self):
        assert mean([1.0, 2.0, 3.0]) == pytest.approx(2.0)

    def test_empty_series_is_zero(self):
        assert mean([]) == 0.0
        assert variance([]) == 0.0
        assert std_dev([]) == 0.0

    def test_variance_is_population(self):
        """Variance divides by N, not N - 1."""
        xs = [1.0, 2.0, 3.0, 4.0]

        assert variance(xs) == pytest.approx(1.25)
        assert variance(xs) == pytest.approx(np.var(xs, ddof=0))

    def test_std_dev(self):
        xs = [0.01, -0.02, 0.03, 0.0]

        assert_allclose(std_dev(xs), np.std(xs), rtol=1e-12)

    def test_covariance(self):
        a = [1.0, 2.0, 3.0]
        b = [2.0, 4.0, 6.0]

        assert covariance(a, b) == pytest.approx(2 * variance(a))

    def test_covariance_mismatched_is_zero(self):
        assert covariance([1.0, 2.0], [1.0, 2.0, 3.0]) == 0.0


class TestCorrelation:
    """Tests for correlation function."""

    def test_self_correlation_is_one(self, sample_returns):
        """Any non-constant series is perfectly correlated with itself."""
        series = sample_returns['AAPL']

        assert correlation(series, series) == pytest.approx(1.0)

    def test_negated_series_is_minus_one(self):
        x = [0.01, -0.02, 0.015, 0.03, -0.01]

        assert correlation(x, [-v for v in x]) == pytest.approx(-1.0)

    def test_matches_numpy(self, sample_returns):
        a = sample_returns['AAPL']
        b = sample_returns['GOOGL']

        assert_allclose(correlation(a, b), np.corrcoef(a, b)[0, 1], rtol=1e-10)

    def test_correlated_structure_detected(self, sample_returns):
        """GOOGL is built from AAPL in the fixture, TSLA is independent."""
        assert correlation(sample_returns['AAPL'], sample_returns['GOOGL']) > 0.8
        assert abs(correlation(sample_returns['AAPL'], sample_returns['TSLA'])) < 0.3

    def test_mismatched_lengths_is_zero(self):
        assert correlation([0.01, 0.02, 0.03], [0.01, 0.02]) == 0.0

    def test_single_observation_is_zero(self):
        assert correlation([0.01], [0.02]) == 0.0

    def test_constant_series_is_zero(self):
        """Zero variance must not divide by zero."""
        assert correlation([0.01, 0.01, 0.01], [0.01, 0.02, 0.03]) == 0.0

    def test_bounds(self, sample_returns):
        for a in sample_returns.values():
            for b in sample_returns.values():
                assert -1.0 <= correlation(a, b) <= 1.0


class TestBeta:
    """Tests for beta and portfolio_beta functions."""

    def test_beta_of_scaled_market(self, market_returns):
        asset = [2 * r for r in market_returns]

        assert beta(asset, market_returns) == pytest.approx(2.0)

    def test_beta_of_market_is_one(self, market_returns):
        assert beta(market_returns, market_returns) == pytest.approx(1.0)

    def test_beta_mismatched_defaults_to_one(self):
        assert beta([0.01, 0.02, 0.03], [0.01, 0.02]) == 1.0

    def test_beta_insufficient_data_defaults_to_one(self):
        assert beta([0.01], [0.02]) == 1.0
        assert beta([], []) == 1.0

    def test_beta_constant_market_defaults_to_one(self):
        assert beta([0.01, 0.02, 0.03], [0.01, 0.01, 0.01]) == 1.0

    def test_portfolio_beta_uses_explicit_betas(self, holding_factory):
        holdings = [
            holding_factory('A', 0.5, beta=1.6),
            holding_factory('B', 0.5, beta=1.2),
        ]

        assert portfolio_beta(holdings) == pytest.approx(1.4)

    def test_portfolio_beta_regresses_missing_betas(self, holding_factory, market_returns):
        holdings = [
            holding_factory('A', 0.5, historical_returns=[3 * r for r in market_returns]),
            holding_factory('B', 0.5, beta=1.0),
        ]

        assert portfolio_beta(holdings, market_returns) == pytest.approx(2.0)

    def test_portfolio_beta_without_market_data(self, sample_holdings):
        """Without market returns every holding falls back to beta 1."""
        expected = sum(h.weight for h in sample_holdings)

        assert portfolio_beta(sample_holdings) == pytest.approx(expected)

    def test_portfolio_beta_empty_is_one(self):
        assert portfolio_beta([]) == 1.0


class TestPooledReturns:
    """Tests for pooled_returns function."""

    def test_concatenates_in_holding_order(self, holding_factory):
        holdings = [
            holding_factory('A', 0.5, historical_returns=[0.01, 0.02]),
            holding_factory('B', 0.5, historical_returns=[-0.03]),
        ]

        assert pooled_returns(holdings) == [0.01, 0.02, -0.03]

    def test_empty(self):
        assert pooled_returns([]) == []


class TestCorrelationMatrix:
    """Tests for correlation_matrix function."""

    def test_diagonal_is_exactly_one(self, sample_holdings):
        corr = correlation_matrix(sample_holdings)

        assert np.all(np.diag(corr.values) == 1.0)

    def test_symmetric(self, sample_holdings):
        corr = correlation_matrix(sample_holdings)

        assert_allclose(corr.values, corr.values.T, rtol=1e-12)

    def test_labels(self, sample_holdings, sample_symbols):
        corr = correlation_matrix(sample_holdings)

        assert isinstance(corr, pd.DataFrame)
        assert list(corr.index) == sample_symbols
        assert list(corr.columns) == sample_symbols

    def test_entries_match_pairwise_correlation(self, sample_holdings, sample_returns):
        corr = correlation_matrix(sample_holdings)

        expected = correlation(sample_returns['AAPL'], sample_returns['MSFT'])
        assert corr.loc['AAPL', 'MSFT'] == pytest.approx(expected)

    def test_mismatched_history_lengths_are_zero(self, holding_factory):
        holdings = [
            holding_factory('A', 0.5, historical_returns=[0.01, 0.02, 0.03]),
            holding_factory('B', 0.5, historical_returns=[0.01, 0.02]),
        ]

        corr = correlation_matrix(holdings)

        assert corr.loc['A', 'B'] == 0.0
        assert corr.loc['A', 'A'] == 1.0

    def test_empty_holdings(self):
        corr = correlation_matrix([])

        assert corr.empty
        assert corr.to_dict() == {}

    def test_duplicate_symbols_use_last_holding(self, holding_factory):
        holdings = [
            holding_factory('A', 0.3, historical_returns=[0.01, 0.02, 0.03]),
            holding_factory('B', 0.4, historical_returns=[0.01, 0.02, 0.03]),
            holding_factory('A', 0.3, historical_returns=[0.03, 0.02, 0.01]),
        ]

        corr = correlation_matrix(holdings)

        assert corr.shape == (2, 2)
        assert corr.loc['A', 'B'] == pytest.approx(-1.0)
