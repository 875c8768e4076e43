"""
Report assembly for alignment quality results.

The report is a plain value; turning it into markup for a viewer is left
to the caller. summarize_report gives a plain-text rendering used by the
command-line tools.
"""

from typing import List, Optional, Tuple

from .models import MSAStats, QualityReport, QualityTier, is_undefined
from .quality import classify


def assemble_report(
    stats: MSAStats,
    classification: Optional[Tuple[QualityTier, str]] = None,
) -> QualityReport:
    """Bundle aggregate statistics with their quality classification.

    Args:
        stats: Aggregate alignment statistics
        classification: (tier, color) pair; computed from
            stats.average_identity if not given

    Returns:
        QualityReport
    """
    if classification is None:
        classification = classify(stats.average_identity)
    tier, color = classification
    return QualityReport(stats=stats, tier=tier, color=color)


def _fmt(value: float) -> str:
    if is_undefined(value):
        return "undefined"
    return f"{value:g}"


def summarize_report(report: QualityReport, include_pairs: bool = False) -> str:
    """Render a report as label/value lines."""
    stats = report.stats
    lines: List[str] = [
        "Alignment Quality Report",
        f"  Number of sequences:  {stats.num_sequences}",
        f"  Alignment length:     {stats.alignment_length}",
        f"  Conserved positions:  {stats.conserved_positions}",
        f"  Conservation:         {_fmt(stats.conservation)}%",
        f"  Average score:        {_fmt(stats.average_score)}",
        f"  Average identity:     {_fmt(stats.average_identity)}%",
        f"  Pairwise comparisons: {stats.total_pairs}",
        f"  Quality assessment:   {report.label}",
    ]

    if include_pairs:
        lines.append("  Pairwise scores:")
        for index, pair in enumerate(stats.pairwise_scores, start=1):
            lines.append(
                f"    #{index}: score={_fmt(pair.score)} identity={_fmt(pair.identity)}% "
                f"similarity={_fmt(pair.similarity)}% gaps={pair.gaps} gap_runs={pair.gap_runs}"
            )

    return "\n".join(lines)
