"""
Scorer facade bundling a scoring scheme with the scoring stages.
"""

import logging
from typing import List, Optional, Sequence

from .aggregate import calculate_msa_stats
from .fasta_parser import parse_fasta
from .models import (
    MSAStats,
    PairwiseScore,
    QualityReport,
    ScoringParameters,
    SequenceRecord,
)
from .pairwise import score_pair
from .quality import classify
from .report import assemble_report

logger = logging.getLogger(__name__)


class AlignmentScorer:
    """Score alignments with a fixed parameter snapshot.

    set_parameters replaces the snapshot rather than editing it, so a
    scoring call that is already running keeps the parameters it started
    with. Concurrent jobs should still use one scorer each.

    Example:
        >>> scorer = AlignmentScorer(match_score=1)
        >>> report = scorer.assess(">a\\nACGT\\n>b\\nACGA\\n")
        >>> report.label
        'Good'
    """

    def __init__(self, params: Optional[ScoringParameters] = None, **overrides: Optional[float]):
        base = params if params is not None else ScoringParameters()
        self._params = base.merge(**overrides)

    @property
    def params(self) -> ScoringParameters:
        return self._params

    def set_parameters(self, **overrides: Optional[float]) -> ScoringParameters:
        """Update only the supplied scoring parameters.

        Returns:
            The new parameter snapshot
        """
        self._params = self._params.merge(**overrides)
        logger.debug("Scoring parameters set to %s", self._params.to_dict())
        return self._params

    def parse_fasta(self, text: str) -> List[SequenceRecord]:
        return parse_fasta(text)

    def score_pair(self, seq_a: str, seq_b: str, strict: bool = False) -> PairwiseScore:
        return score_pair(seq_a, seq_b, self._params, strict=strict)

    def calculate_msa_stats(self, records: Sequence[SequenceRecord]) -> MSAStats:
        return calculate_msa_stats(records, self._params)

    def classify(self, average_identity: float) -> tuple:
        return classify(average_identity)

    def assess_records(self, records: Sequence[SequenceRecord]) -> QualityReport:
        params = self._params
        stats = calculate_msa_stats(records, params)
        return assemble_report(stats, classify(stats.average_identity))

    def assess(self, fasta_text: str) -> QualityReport:
        """Parse FASTA text, aggregate, classify and assemble a report."""
        return self.assess_records(parse_fasta(fasta_text))

    def __repr__(self) -> str:
        return f"AlignmentScorer({self._params!r})"
