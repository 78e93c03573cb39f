"""
Concentration and Diversification Scoring

Herfindahl-based concentration and a bounded multi-factor diversification
score.  Weights are used as supplied; drift away from a total of 1 passes
straight through.
"""

from __future__ import annotations

from typing import Sequence

from portfolio_risk.models import Holding

# Diversification sub-score caps
SECTOR_POINTS, SECTOR_CAP = 10.0, 50.0
ASSET_CLASS_POINTS, ASSET_CLASS_CAP = 15.0, 50.0
HOLDING_POINTS, HOLDING_CAP = 2.0, 20.0
MAX_WEIGHT_TARGET = 0.30


def concentration_risk(holdings: Sequence[Holding]) -> float:
    """Herfindahl-Hirschman Index of holding weights, clamped to [0, 1].

    An empty portfolio cannot be assessed and is treated as the worst case (1).
    """
    if not holdings:
        return 1.0

    hhi = sum(h.weight * h.weight for h in holdings)
    return float(min(max(hhi, 0.0), 1.0))


def diversification_score(holdings: Sequence[Holding]) -> float:
    """Diversification score in [0, 100], higher is better.

    Sum of four capped components:
        - sectors: 10 points per distinct sector, max 50
        - asset classes: 15 points per distinct asset class, max 50
        - holding count: 2 points per holding, max 20
        - weight spread: (0.30 - max_weight) * 100 when no holding exceeds 30%

    Args:
        holdings: Portfolio holdings

    Returns:
        Score in [0, 100]; 0 for an empty portfolio
    """
    if not holdings:
        return 0.0

    sectors = {h.sector for h in holdings}
    asset_classes = {h.asset_class for h in holdings}

    sector_score = min(len(sectors) * SECTOR_POINTS, SECTOR_CAP)
    asset_class_score = min(len(asset_classes) * ASSET_CLASS_POINTS, ASSET_CLASS_CAP)
    holding_count_score = min(len(holdings) * HOLDING_POINTS, HOLDING_CAP)

    max_weight = max(h.weight for h in holdings)
    weight_score = max(0.0, (MAX_WEIGHT_TARGET - max_weight) * 100)

    total = sector_score + asset_class_score + holding_count_score + weight_score
    return float(min(max(total, 0.0), 100.0))
