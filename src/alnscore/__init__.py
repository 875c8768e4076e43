"""
alnscore: quality scoring for multiple sequence alignments

Computes pairwise and aggregate statistics (identity, similarity,
conservation, affine-gap score) for finished alignments so that alignments
produced by different upstream methods can be compared side by side.
"""

__version__ = "1.0.0"

from alnscore.config import Config, get_config
from alnscore.logging import setup_logging
from alnscore.scoring import (
    AlignmentScorer,
    QualityReport,
    QualityTier,
    ScoringParameters,
    batch_compare,
    calculate_msa_stats,
    classify,
    parse_fasta,
    score_pair,
)

__all__ = [
    "Config",
    "get_config",
    "setup_logging",
    "AlignmentScorer",
    "QualityReport",
    "QualityTier",
    "ScoringParameters",
    "batch_compare",
    "calculate_msa_stats",
    "classify",
    "parse_fasta",
    "score_pair",
    "__version__",
]
