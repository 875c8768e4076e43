"""
Qualitative classification of alignment quality.
"""

import math
from typing import Dict, Optional, Tuple

from .errors import UndefinedMetricError
from .models import QualityTier

# Lower bounds (inclusive) on average identity, highest tier first
DEFAULT_THRESHOLDS = {
    QualityTier.EXCELLENT: 80.0,
    QualityTier.GOOD: 60.0,
    QualityTier.FAIR: 40.0,
}


def classify(
    average_identity: float,
    thresholds: Optional[Dict[QualityTier, float]] = None,
) -> Tuple[QualityTier, str]:
    """Map an average identity percentage to a quality tier and its color.

    Default thresholds:
    - Excellent: >= 80
    - Good: >= 60
    - Fair: >= 40
    - Poor: < 40

    Args:
        average_identity: Percentage in [0, 100]
        thresholds: Optional custom lower bounds keyed by tier

    Returns:
        Tuple of (tier, hex color)

    Raises:
        UndefinedMetricError: If average_identity is NaN
    """
    if math.isnan(average_identity):
        raise UndefinedMetricError("Cannot classify an undefined average identity")

    if thresholds is None:
        thresholds = DEFAULT_THRESHOLDS

    for tier in (QualityTier.EXCELLENT, QualityTier.GOOD, QualityTier.FAIR):
        if average_identity >= thresholds.get(tier, DEFAULT_THRESHOLDS[tier]):
            return tier, tier.color
    return QualityTier.POOR, QualityTier.POOR.color


def quality_label(average_identity: float) -> str:
    return classify(average_identity)[0].label


def quality_color(average_identity: float) -> str:
    return classify(average_identity)[1]
