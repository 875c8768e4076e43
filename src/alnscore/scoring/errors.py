"""
Exceptions raised by alignment scoring.

All errors derive from ValueError so callers that already guard
malformed-input handling with ``except ValueError`` keep working.
"""


class AlignmentScoringError(ValueError):
    """Base class for alignment scoring failures."""


class LengthMismatchError(AlignmentScoringError):
    """Sequences compared together are not the same length."""

    def __init__(self, message: str, lengths=None):
        super().__init__(message)
        self.lengths = lengths


class MinimumSequencesError(AlignmentScoringError):
    """Too few sequences were supplied for aggregate scoring."""

    def __init__(self, count: int, minimum: int = 2):
        super().__init__(
            f"Need at least {minimum} sequences for MSA scoring, got {count}"
        )
        self.count = count
        self.minimum = minimum


class UndefinedMetricError(AlignmentScoringError):
    """A ratio metric has a zero denominator."""
