"""
Data models for alignment quality scoring.

This module defines the value objects passed between the scoring stages:
parsed sequence records, scoring parameters, per-pair and aggregate
statistics, quality tiers and the assembled report.
"""

import math
from dataclasses import dataclass, fields, replace
from enum import Enum
from pathlib import Path
from typing import Any, Dict, Optional, Tuple


GAP_CHAR = "-"

# Sentinel for a ratio whose denominator is zero (all-gap or empty alignment)
UNDEFINED = float("nan")


def is_undefined(value: float) -> bool:
    """Return True if a metric holds the UNDEFINED sentinel."""
    return isinstance(value, float) and math.isnan(value)


class AlignmentFormat(Enum):
    """Supported alignment file formats."""
    FASTA = "fasta"
    CLUSTAL = "clustal"
    STOCKHOLM = "stockholm"


class ColumnState(Enum):
    """State of a single column in a pairwise left-to-right scan."""
    MATCH = "match"
    MISMATCH = "mismatch"
    GAP_OPEN = "gap_open"
    GAP_EXTEND = "gap_extend"

    @property
    def is_gap(self) -> bool:
        return self in (ColumnState.GAP_OPEN, ColumnState.GAP_EXTEND)


class QualityTier(Enum):
    """Qualitative alignment quality, ordered from best to worst.

    Each member carries the display label, the hex color used by the
    report viewer and the terminal color name used for log output.
    """
    EXCELLENT = ("Excellent", "#28a745", "green")
    GOOD = ("Good", "#ffc107", "yellow")
    FAIR = ("Fair", "#fd7e14", "magenta")
    POOR = ("Poor", "#dc3545", "red")

    def __init__(self, label: str, color: str, terminal_color: str):
        self.label = label
        self.color = color
        self.terminal_color = terminal_color


@dataclass(frozen=True)
class ScoringParameters:
    """Affine gap scoring scheme. Defaults are tuned for DNA.

    Attributes:
        match_score: Added for each identical non-gap column
        mismatch_score: Added for each differing non-gap column
        gap_open_penalty: Added for the first column of a gap run
        gap_extension_penalty: Added for each further column of a gap run
    """
    match_score: float = 2
    mismatch_score: float = -1
    gap_open_penalty: float = -2
    gap_extension_penalty: float = -0.5

    def merge(self, **overrides: Optional[float]) -> "ScoringParameters":
        """Return a copy with only the supplied fields replaced.

        Fields passed as None keep their current value.

        Raises:
            TypeError: If an unknown parameter name is supplied
        """
        known = {f.name for f in fields(self)}
        unknown = set(overrides) - known
        if unknown:
            raise TypeError(f"Unknown scoring parameter(s): {', '.join(sorted(unknown))}")

        changes = {k: v for k, v in overrides.items() if v is not None}
        if not changes:
            return self
        return replace(self, **changes)

    def weight(self, state: ColumnState) -> float:
        """Score contribution of a column in the given state."""
        return {
            ColumnState.MATCH: self.match_score,
            ColumnState.MISMATCH: self.mismatch_score,
            ColumnState.GAP_OPEN: self.gap_open_penalty,
            ColumnState.GAP_EXTEND: self.gap_extension_penalty,
        }[state]

    def to_dict(self) -> Dict[str, float]:
        return {f.name: getattr(self, f.name) for f in fields(self)}


@dataclass(frozen=True)
class SequenceRecord:
    """A single record from a FASTA alignment.

    Attributes:
        id: Header text following the '>' marker
        sequence: Aligned sequence string (including gaps)
    """
    id: str
    sequence: str = ""

    def __len__(self) -> int:
        return len(self.sequence)

    def ungapped(self) -> str:
        """Return the sequence without gap characters."""
        return self.sequence.replace(GAP_CHAR, "")


@dataclass(frozen=True)
class PairwiseScore:
    """Score breakdown for one pair of aligned sequences.

    identity and similarity hold UNDEFINED when their denominator is zero.
    """
    score: float
    matches: int
    mismatches: int
    gaps: int
    gap_runs: int
    identity: float
    similarity: float
    length: int

    @property
    def is_defined(self) -> bool:
        return not (is_undefined(self.identity) or is_undefined(self.similarity))

    def to_dict(self) -> Dict[str, Any]:
        return {
            "score": self.score,
            "matches": self.matches,
            "mismatches": self.mismatches,
            "gaps": self.gaps,
            "gap_runs": self.gap_runs,
            "identity": self.identity,
            "similarity": self.similarity,
            "length": self.length,
        }


@dataclass(frozen=True)
class MSAStats:
    """Aggregate statistics for a multiple sequence alignment.

    Attributes:
        num_sequences: Number of records in the alignment
        alignment_length: Number of columns
        conserved_positions: Columns with exactly one distinct non-gap residue
        conservation: conserved_positions as a percentage of alignment_length
        average_score: Mean pairwise score
        average_identity: Mean pairwise identity percentage
        pairwise_scores: One PairwiseScore per (i, j) pair, i < j, in input order
        total_pairs: N * (N - 1) / 2
    """
    num_sequences: int
    alignment_length: int
    conserved_positions: int
    conservation: float
    average_score: float
    average_identity: float
    pairwise_scores: Tuple[PairwiseScore, ...] = ()
    total_pairs: int = 0

    def to_dict(self, include_pairs: bool = False) -> Dict[str, Any]:
        data = {
            "num_sequences": self.num_sequences,
            "alignment_length": self.alignment_length,
            "conserved_positions": self.conserved_positions,
            "conservation": self.conservation,
            "average_score": self.average_score,
            "average_identity": self.average_identity,
            "total_pairs": self.total_pairs,
        }
        if include_pairs:
            data["pairwise_scores"] = [p.to_dict() for p in self.pairwise_scores]
        return data


@dataclass(frozen=True)
class QualityReport:
    """Aggregate statistics bundled with their quality classification."""
    stats: MSAStats
    tier: QualityTier
    color: str

    @property
    def label(self) -> str:
        return self.tier.label

    def to_dict(self) -> Dict[str, Any]:
        """Flatten to a single row for DataFrame integration."""
        data = self.stats.to_dict()
        data["quality"] = self.tier.label
        data["quality_color"] = self.color
        return data


@dataclass
class UnitResult:
    """Outcome of scoring one alignment file for one upstream method.

    Attributes:
        file_name: Alignment file name shared across methods
        method: Name of the method that produced the alignment
        path: Location the alignment was read from
        status: "ok", "unavailable" (no file for this method) or "failed"
        report: The QualityReport when status is "ok"
        error: Error message for failed or unavailable units
    """
    file_name: str
    method: str
    path: Optional[Path] = None
    status: str = "ok"
    report: Optional[QualityReport] = None
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.status == "ok"

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            "file": self.file_name,
            "method": self.method,
            "status": self.status,
        }
        if self.report is not None:
            data.update(self.report.to_dict())
        data["error"] = self.error
        return data
