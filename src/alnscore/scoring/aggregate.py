"""
Multiple sequence alignment statistics.

Computes column conservation over all records and scores every
unordered pair of records with the pairwise scorer.
"""

import logging
import math
from itertools import combinations
from typing import List, Optional, Sequence

from .errors import LengthMismatchError, MinimumSequencesError
from .models import (
    GAP_CHAR,
    UNDEFINED,
    MSAStats,
    PairwiseScore,
    ScoringParameters,
    SequenceRecord,
)
from .pairwise import percentage, round_half_up, score_pair

logger = logging.getLogger(__name__)

MIN_SEQUENCES = 2


def check_uniform_length(records: Sequence[SequenceRecord]) -> int:
    """Return the common alignment length.

    Raises:
        LengthMismatchError: If any record differs in length from the first
    """
    alignment_length = len(records[0].sequence)
    inconsistent = [
        (record.id, len(record.sequence))
        for record in records
        if len(record.sequence) != alignment_length
    ]
    if inconsistent:
        raise LengthMismatchError(
            f"All sequences must be same length in MSA: expected {alignment_length}, "
            f"found {inconsistent[:5]}{'...' if len(inconsistent) > 5 else ''}",
            lengths=[len(record.sequence) for record in records],
        )
    return alignment_length


def is_conserved_column(column: Sequence[str]) -> bool:
    """A column is conserved when exactly one distinct residue remains after dropping gaps.

    Gaps elsewhere in the column do not prevent conservation; an all-gap
    column is not conserved.
    """
    residues = {char.upper() for char in column} - {GAP_CHAR}
    return len(residues) == 1


def count_conserved_positions(records: Sequence[SequenceRecord]) -> int:
    """Count conserved columns across equal-length records."""
    return sum(
        1
        for column in zip(*(record.sequence for record in records))
        if is_conserved_column(column)
    )


def _mean(values: List[float]) -> float:
    # NaN in any input propagates to the mean
    if not values:
        return UNDEFINED
    total = math.fsum(values)
    return round_half_up(total / len(values))


def calculate_msa_stats(
    records: Sequence[SequenceRecord],
    params: Optional[ScoringParameters] = None,
) -> MSAStats:
    """Calculate aggregate statistics for an alignment.

    Args:
        records: Aligned records, all of the same length
        params: Scoring scheme passed to every pairwise comparison

    Returns:
        MSAStats with pairwise scores ordered by (i, j), i < j, in input order

    Raises:
        MinimumSequencesError: If fewer than two records are supplied
        LengthMismatchError: If the records are not all the same length
    """
    if len(records) < MIN_SEQUENCES:
        raise MinimumSequencesError(len(records), MIN_SEQUENCES)

    alignment_length = check_uniform_length(records)
    num_sequences = len(records)

    if params is None:
        params = ScoringParameters()

    conserved_positions = count_conserved_positions(records)

    pairwise_scores: List[PairwiseScore] = [
        score_pair(first.sequence, second.sequence, params)
        for first, second in combinations(records, 2)
    ]

    logger.debug(
        "Scored %d pair(s) over %d column(s)", len(pairwise_scores), alignment_length
    )

    return MSAStats(
        num_sequences=num_sequences,
        alignment_length=alignment_length,
        conserved_positions=conserved_positions,
        conservation=percentage(conserved_positions, alignment_length, name="conservation"),
        average_score=_mean([p.score for p in pairwise_scores]),
        average_identity=_mean([p.identity for p in pairwise_scores]),
        pairwise_scores=tuple(pairwise_scores),
        total_pairs=len(pairwise_scores),
    )
