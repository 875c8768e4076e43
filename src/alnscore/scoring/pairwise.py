"""
Pairwise scoring of two aligned sequences under an affine gap model.

Each column is assigned a ColumnState by a left-to-right scan. A column
is a gap column if either sequence has a gap there; the first gap column
of a run opens the gap and the following ones extend it. The score is the
sum of the per-state weights from ScoringParameters.
"""

import math
from collections import Counter
from decimal import ROUND_HALF_UP, Decimal
from typing import Iterator, Optional

from .errors import LengthMismatchError, UndefinedMetricError
from .models import (
    GAP_CHAR,
    UNDEFINED,
    ColumnState,
    PairwiseScore,
    ScoringParameters,
)


def next_state(previous: Optional[ColumnState], char_a: str, char_b: str) -> ColumnState:
    """Transition function for the column scan.

    Args:
        previous: State of the preceding column, or None at the first column
        char_a: Residue of the first sequence (already upper-cased)
        char_b: Residue of the second sequence (already upper-cased)

    Returns:
        State of the current column
    """
    if char_a == GAP_CHAR or char_b == GAP_CHAR:
        if previous is not None and previous.is_gap:
            return ColumnState.GAP_EXTEND
        return ColumnState.GAP_OPEN
    if char_a == char_b:
        return ColumnState.MATCH
    return ColumnState.MISMATCH


def column_states(seq_a: str, seq_b: str) -> Iterator[ColumnState]:
    """Yield the state of every column of an aligned pair, case-insensitively."""
    state = None
    for char_a, char_b in zip(seq_a, seq_b):
        state = next_state(state, char_a.upper(), char_b.upper())
        yield state


def round_half_up(value: float, places: int = 2) -> float:
    """Round to `places` decimals, ties away from zero.

    Works on the exact binary value, so 3.125 gives 3.13 while 1.005
    (stored as 1.00499...) gives 1.0. NaN passes through.
    """
    if math.isnan(value):
        return UNDEFINED
    quantum = Decimal(1).scaleb(-places)
    return float(Decimal(value).quantize(quantum, rounding=ROUND_HALF_UP))


def percentage(numerator: float, denominator: float, strict: bool = False, name: str = "metric") -> float:
    """Return numerator / denominator * 100 rounded to 2 decimals.

    A zero denominator gives UNDEFINED, or raises UndefinedMetricError
    when strict is set.
    """
    if denominator == 0:
        if strict:
            raise UndefinedMetricError(f"{name} is undefined: denominator is zero")
        return UNDEFINED
    return round_half_up(numerator / denominator * 100)


def score_pair(
    seq_a: str,
    seq_b: str,
    params: Optional[ScoringParameters] = None,
    strict: bool = False,
) -> PairwiseScore:
    """Score one pair of equal-length aligned sequences.

    identity counts gap columns against the total; similarity is computed
    over non-gap columns only.

    Args:
        seq_a: First aligned sequence
        seq_b: Second aligned sequence
        params: Scoring scheme (DNA defaults if None)
        strict: Raise UndefinedMetricError instead of returning UNDEFINED
            for identity or similarity of an empty or all-gap alignment

    Returns:
        PairwiseScore for the pair

    Raises:
        LengthMismatchError: If the sequences differ in length
    """
    if len(seq_a) != len(seq_b):
        raise LengthMismatchError(
            f"Sequences must be of equal length for alignment scoring "
            f"({len(seq_a)} != {len(seq_b)})",
            lengths=(len(seq_a), len(seq_b)),
        )

    if params is None:
        params = ScoringParameters()

    counts: Counter = Counter()
    score = 0
    for state in column_states(seq_a, seq_b):
        counts[state] += 1
        score += params.weight(state)

    matches = counts[ColumnState.MATCH]
    mismatches = counts[ColumnState.MISMATCH]
    gap_runs = counts[ColumnState.GAP_OPEN]
    gaps = gap_runs + counts[ColumnState.GAP_EXTEND]
    length = len(seq_a)

    return PairwiseScore(
        score=score,
        matches=matches,
        mismatches=mismatches,
        gaps=gaps,
        gap_runs=gap_runs,
        identity=percentage(matches, matches + mismatches + gaps, strict, "identity"),
        similarity=percentage(matches, length - gaps, strict, "similarity"),
        length=length,
    )
