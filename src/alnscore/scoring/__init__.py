"""
alnscore scoring: quality statistics for finished sequence alignments.

This module scores alignments that are already computed (equal-length,
gap-padded sequences). It does not align sequences itself.

Key Features:
- Parse FASTA alignments (and Clustal/Stockholm files via Biopython)
- Pairwise scoring with an affine gap model
- Column conservation and averaged pairwise statistics
- Quality tiers (Excellent/Good/Fair/Poor) from average identity
- Side-by-side comparison of alignments from several methods

Example Usage:
    >>> from alnscore.scoring import AlignmentScorer
    >>> scorer = AlignmentScorer()
    >>> report = scorer.assess(open("NC_002018_NC_002019.aln").read())
    >>> report.label, report.stats.average_identity

    # Or compare methods stored under data/<method>/<file>:
    >>> from alnscore.scoring import batch_compare
    >>> df = batch_compare(["NC_002018_NC_002019.aln"], data_dir="data")
"""

# Data models
from .models import (
    GAP_CHAR,
    UNDEFINED,
    AlignmentFormat,
    ColumnState,
    MSAStats,
    PairwiseScore,
    QualityReport,
    QualityTier,
    ScoringParameters,
    SequenceRecord,
    UnitResult,
    is_undefined,
)

# Errors
from .errors import (
    AlignmentScoringError,
    LengthMismatchError,
    MinimumSequencesError,
    UndefinedMetricError,
)

# Parsing
from .fasta_parser import (
    detect_format,
    parse_fasta,
    read_alignment,
)

# Scoring
from .pairwise import (
    column_states,
    next_state,
    round_half_up,
    score_pair,
)
from .aggregate import (
    calculate_msa_stats,
    count_conserved_positions,
    is_conserved_column,
)
from .quality import (
    classify,
    quality_color,
    quality_label,
)
from .report import (
    assemble_report,
    summarize_report,
)
from .scorer import AlignmentScorer

# Method comparison
from .batch import (
    DEFAULT_METHODS,
    batch_compare,
    compare_methods,
    list_alignment_files,
    results_to_dataframe,
    score_file,
)


__all__ = [
    # Models
    "GAP_CHAR",
    "UNDEFINED",
    "AlignmentFormat",
    "ColumnState",
    "MSAStats",
    "PairwiseScore",
    "QualityReport",
    "QualityTier",
    "ScoringParameters",
    "SequenceRecord",
    "UnitResult",
    "is_undefined",
    # Errors
    "AlignmentScoringError",
    "LengthMismatchError",
    "MinimumSequencesError",
    "UndefinedMetricError",
    # Parsing
    "detect_format",
    "parse_fasta",
    "read_alignment",
    # Scoring
    "column_states",
    "next_state",
    "round_half_up",
    "score_pair",
    "calculate_msa_stats",
    "count_conserved_positions",
    "is_conserved_column",
    "classify",
    "quality_color",
    "quality_label",
    "assemble_report",
    "summarize_report",
    "AlignmentScorer",
    # Comparison
    "DEFAULT_METHODS",
    "batch_compare",
    "compare_methods",
    "list_alignment_files",
    "results_to_dataframe",
    "score_file",
]
