"""
Tests for alnscore alignment scoring.

Tests cover:
- FASTA parsing
- Pairwise scoring with affine gaps
- MSA aggregation and column conservation
- Quality classification and report assembly
- The AlignmentScorer facade
"""

import math
import sys
from pathlib import Path

import pytest

# Add src to path for alnscore imports
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from alnscore.scoring import (
    AlignmentScorer,
    AlignmentScoringError,
    ColumnState,
    LengthMismatchError,
    MinimumSequencesError,
    MSAStats,
    QualityReport,
    QualityTier,
    ScoringParameters,
    SequenceRecord,
    UndefinedMetricError,
    assemble_report,
    calculate_msa_stats,
    classify,
    column_states,
    count_conserved_positions,
    is_conserved_column,
    is_undefined,
    parse_fasta,
    quality_color,
    quality_label,
    round_half_up,
    score_pair,
    summarize_report,
)


def _records(*sequences):
    return [SequenceRecord(f"seq{i + 1}", s) for i, s in enumerate(sequences)]


class TestParseFasta:
    """Tests for FASTA text parsing."""

    def test_parse_basic(self):
        """Test one record per header, in input order."""
        text = ">seq1\nACGT\n>seq2\nAC-T\n>seq3\nA--T\n"
        records = parse_fasta(text)

        assert [r.id for r in records] == ["seq1", "seq2", "seq3"]
        assert [r.sequence for r in records] == ["ACGT", "AC-T", "A--T"]

    def test_parse_multiline_sequences(self):
        """Test wrapped sequence lines are concatenated."""
        text = ">NC_002018.1 Influenza A segment 1\nACGTAC\nGTACGT\nAC\n>NC_002019.1\nACGTACGTACGTAC\n"
        records = parse_fasta(text)

        assert len(records) == 2
        assert records[0].id == "NC_002018.1 Influenza A segment 1"
        assert records[0].sequence == "ACGTACGTACGTAC"
        assert len(records[0]) == len(records[1])

    def test_parse_strips_whitespace_and_blank_lines(self):
        """Test surrounding and inner whitespace and blank lines are ignored."""
        text = "  >seq1  \r\n  AC GT \r\n\r\n\tAC\t\r\n>seq2\r\n\r\nACGTAC\r\n"
        records = parse_fasta(text)

        assert records[0].id == "seq1"
        assert records[0].sequence == "ACGTAC"
        assert records[1].sequence == "ACGTAC"

    def test_parse_lines_before_header_discarded(self):
        """Test sequence lines before the first header are dropped."""
        text = "ACGTACGT\nTTTT\n>seq1\nACGT\n"
        records = parse_fasta(text)

        assert len(records) == 1
        assert records[0].sequence == "ACGT"

    def test_parse_no_headers(self):
        """Test text without headers yields no records."""
        assert parse_fasta("ACGT\nACGT\n") == []
        assert parse_fasta("") == []

    def test_parse_header_without_sequence(self):
        """Test a header with no sequence lines gives an empty sequence."""
        records = parse_fasta(">empty\n>seq2\nACGT")

        assert records[0] == SequenceRecord("empty", "")
        assert records[1].sequence == "ACGT"

    def test_record_count_matches_headers(self):
        """Test number of records equals number of header lines."""
        text = "".join(f">s{i}\nAC\nGT\n" for i in range(7))
        records = parse_fasta(text)

        assert len(records) == text.count(">")
        assert all(r.sequence == "ACGT" for r in records)

    def test_record_ungapped(self):
        """Test SequenceRecord helpers."""
        record = SequenceRecord("s", "AC--GT")
        assert len(record) == 6
        assert record.ungapped() == "ACGT"


class TestScoringParameters:
    """Tests for the scoring scheme value object."""

    def test_defaults(self):
        """Test DNA defaults."""
        params = ScoringParameters()
        assert params.match_score == 2
        assert params.mismatch_score == -1
        assert params.gap_open_penalty == -2
        assert params.gap_extension_penalty == -0.5

    def test_merge_only_supplied_fields(self):
        """Test merge replaces supplied fields and keeps the rest."""
        params = ScoringParameters()
        merged = params.merge(match_score=5, gap_extension_penalty=None)

        assert merged.match_score == 5
        assert merged.mismatch_score == -1
        assert merged.gap_extension_penalty == -0.5
        assert params.match_score == 2  # source instance untouched

    def test_merge_unknown_field(self):
        """Test merge rejects unknown parameter names."""
        with pytest.raises(TypeError, match="gap_penalty"):
            ScoringParameters().merge(gap_penalty=-3)

    def test_frozen(self):
        """Test parameters cannot be mutated in place."""
        params = ScoringParameters()
        with pytest.raises(AttributeError):
            params.match_score = 10

    def test_weight(self):
        """Test per-state weights."""
        params = ScoringParameters()
        assert params.weight(ColumnState.MATCH) == 2
        assert params.weight(ColumnState.MISMATCH) == -1
        assert params.weight(ColumnState.GAP_OPEN) == -2
        assert params.weight(ColumnState.GAP_EXTEND) == -0.5


class TestPairwiseScore:
    """Tests for pairwise scoring."""

    def test_identical_sequences(self):
        """Test score for identical sequences."""
        result = score_pair("ACGT", "ACGT")

        assert result.matches == 4
        assert result.mismatches == 0
        assert result.gaps == 0
        assert result.gap_runs == 0
        assert result.score == 8
        assert result.identity == 100.0
        assert result.similarity == 100.0
        assert result.length == 4

    def test_single_gap(self):
        """Test a single gap column opens one gap run."""
        result = score_pair("AC-T", "ACGT")

        assert result.gaps == 1
        assert result.gap_runs == 1
        assert result.matches == 3
        assert result.mismatches == 0
        assert result.score == 4
        assert result.identity == 75.0
        assert result.similarity == 100.0

    def test_gap_extension(self):
        """Test consecutive gap columns open once then extend."""
        result = score_pair("A--T", "ACGT")

        assert result.gaps == 2
        assert result.gap_runs == 1
        assert result.score == pytest.approx(2 - 2 - 0.5 + 2)
        assert result.identity == 50.0
        assert result.similarity == 100.0

    def test_separate_gap_runs(self):
        """Test a non-gap column ends a gap run."""
        result = score_pair("A-C-", "AGCT")

        assert result.gaps == 2
        assert result.gap_runs == 2
        assert result.score == 0

    def test_gap_run_shared_across_sequences(self):
        """Test a run continues when the gap switches to the other sequence."""
        result = score_pair("A-G", "AC-")

        assert result.gaps == 2
        assert result.gap_runs == 1
        assert result.score == pytest.approx(-0.5)

    def test_column_states(self):
        """Test the per-column state sequence."""
        states = list(column_states("A--TG", "ACGTC"))
        assert states == [
            ColumnState.MATCH,
            ColumnState.GAP_OPEN,
            ColumnState.GAP_EXTEND,
            ColumnState.MATCH,
            ColumnState.MISMATCH,
        ]

    def test_mismatch(self):
        """Test mismatching columns."""
        result = score_pair("ACGT", "ACGA")

        assert result.matches == 3
        assert result.mismatches == 1
        assert result.score == 5
        assert result.identity == 75.0
        assert result.similarity == 75.0

    def test_case_insensitive(self):
        """Test residues are compared case-insensitively."""
        result = score_pair("acgt", "ACGT")
        assert result.matches == 4
        assert result.identity == 100.0

    def test_rounding(self):
        """Test percentages are rounded to 2 decimals."""
        result = score_pair("ACG", "ACT")
        assert result.identity == 66.67
        assert result.similarity == 66.67

    def test_custom_parameters(self):
        """Test a custom scoring scheme is applied."""
        params = ScoringParameters(match_score=1, mismatch_score=-3, gap_open_penalty=-5, gap_extension_penalty=-1)
        result = score_pair("AC--A", "ACGTT", params)
        assert result.score == 1 + 1 - 5 - 1 - 3

    def test_length_mismatch(self):
        """Test unequal lengths raise LengthMismatchError."""
        with pytest.raises(LengthMismatchError, match="equal length"):
            score_pair("ACGT", "ACG")

    def test_length_mismatch_is_value_error(self):
        """Test scoring errors are ValueErrors."""
        with pytest.raises(ValueError):
            score_pair("A", "")

    def test_empty_alignment_undefined(self):
        """Test zero-length alignment gives UNDEFINED ratios."""
        result = score_pair("", "")

        assert result.length == 0
        assert result.score == 0
        assert is_undefined(result.identity)
        assert is_undefined(result.similarity)
        assert result.is_defined is False

    def test_all_gap_similarity_undefined(self):
        """Test all-gap alignment has identity 0 but undefined similarity."""
        result = score_pair("---", "ACG")

        assert result.gaps == 3
        assert result.gap_runs == 1
        assert result.score == pytest.approx(-3.0)
        assert result.identity == 0.0
        assert is_undefined(result.similarity)

    def test_strict_raises_undefined(self):
        """Test strict mode raises instead of returning UNDEFINED."""
        with pytest.raises(UndefinedMetricError, match="similarity"):
            score_pair("--", "AC", strict=True)
        with pytest.raises(UndefinedMetricError):
            score_pair("", "", strict=True)

    def test_metrics_within_bounds(self):
        """Test identity and similarity stay in [0, 100]."""
        pairs = [("AC-GT-A", "ACTG-TA"), ("TTTT", "AAAA"), ("A-A-A", "-A-A-"), ("GATTACA", "GATTACA")]
        for seq_a, seq_b in pairs:
            result = score_pair(seq_a, seq_b)
            for value in (result.identity, result.similarity):
                if not is_undefined(value):
                    assert 0.0 <= value <= 100.0
                    assert round(value, 2) == value

    def test_to_dict(self):
        """Test PairwiseScore conversion to dict."""
        d = score_pair("AC-T", "ACGT").to_dict()
        assert d["gap_runs"] == 1
        assert d["identity"] == 75.0


class TestConservation:
    """Tests for column conservation."""

    def test_uniform_column_conserved(self):
        """Test a column identical across sequences is conserved."""
        assert is_conserved_column(["A", "a", "A"]) is True

    def test_all_gap_column_not_conserved(self):
        """Test a column of gaps is not conserved."""
        assert is_conserved_column(["-", "-", "-"]) is False

    def test_gapped_uniform_column_conserved(self):
        """Test gaps alongside a single residue still count as conserved."""
        assert is_conserved_column(["A", "-", "A"]) is True
        assert is_conserved_column(["-", "-", "G"]) is True

    def test_variable_column_not_conserved(self):
        """Test a column with two residues is not conserved."""
        assert is_conserved_column(["A", "C", "A"]) is False

    def test_count_conserved_positions(self):
        """Test counting over an alignment."""
        records = _records("ACGT-", "ACGA-", "aCGT-")
        assert count_conserved_positions(records) == 3


class TestMSAStats:
    """Tests for multiple sequence alignment aggregation."""

    def test_basic_stats(self):
        """Test aggregate statistics for three sequences."""
        stats = calculate_msa_stats(_records("ACGT", "ACGT", "ACGA"))

        assert stats.num_sequences == 3
        assert stats.alignment_length == 4
        assert stats.conserved_positions == 3
        assert stats.conservation == 75.0
        assert stats.total_pairs == 3
        assert stats.average_score == 6.0
        assert stats.average_identity == 83.33

    def test_pair_order(self):
        """Test pairwise scores follow (i, j) order with i < j."""
        stats = calculate_msa_stats(_records("AAAA", "AAAC", "AACC", "ACCC"))

        assert stats.total_pairs == 6
        assert len(stats.pairwise_scores) == 6
        assert [p.identity for p in stats.pairwise_scores] == [75.0, 50.0, 25.0, 75.0, 50.0, 75.0]

    def test_average_rounds_ties_up(self):
        """Test an exact two-decimal tie in the mean rounds up."""
        stats = calculate_msa_stats(_records("A" * 16, "A" + "C" * 15, "A" + "G" * 15, "T" * 16))

        assert [p.identity for p in stats.pairwise_scores] == [6.25, 6.25, 0.0, 6.25, 0.0, 0.0]
        # 18.75 / 6 == 3.125 exactly
        assert stats.average_identity == 3.13

    @pytest.mark.parametrize("value, expected", [(3.125, 3.13), (0.125, 0.13), (-0.125, -0.13), (2.675, 2.67), (83.3333, 83.33)])
    def test_round_half_up(self, value, expected):
        """Test ties round away from zero on the stored binary value."""
        assert round_half_up(value) == expected

    def test_round_half_up_nan(self):
        assert math.isnan(round_half_up(float("nan")))

    @pytest.mark.parametrize("n", [2, 3, 5, 8])
    def test_total_pairs(self, n):
        """Test total pairs is N * (N - 1) / 2."""
        stats = calculate_msa_stats(_records(*(["ACGT"] * n)))
        assert stats.total_pairs == n * (n - 1) // 2
        assert len(stats.pairwise_scores) == stats.total_pairs

    def test_gapped_alignment(self):
        """Test aggregation with gaps."""
        stats = calculate_msa_stats(_records("AC-T", "ACGT"))

        assert stats.conserved_positions == 4  # gapped column keeps a single residue
        assert stats.conservation == 100.0
        assert stats.average_score == 4.0
        assert stats.average_identity == 75.0

    def test_minimum_sequences(self):
        """Test one record raises MinimumSequencesError."""
        with pytest.raises(MinimumSequencesError, match="at least 2"):
            calculate_msa_stats(_records("ACGT"))
        with pytest.raises(MinimumSequencesError):
            calculate_msa_stats([])

    def test_length_mismatch(self):
        """Test records of different lengths raise LengthMismatchError."""
        with pytest.raises(LengthMismatchError, match="same length"):
            calculate_msa_stats(_records("ACGT", "ACGT", "ACG"))

    def test_custom_parameters(self):
        """Test parameters reach every pairwise comparison."""
        params = ScoringParameters(match_score=1)
        stats = calculate_msa_stats(_records("ACGT", "ACGT"), params)
        assert stats.average_score == 4.0

    def test_empty_alignment_undefined(self):
        """Test zero-length records give UNDEFINED metrics."""
        stats = calculate_msa_stats(_records("", ""))

        assert stats.alignment_length == 0
        assert is_undefined(stats.conservation)
        assert is_undefined(stats.average_identity)

    def test_frozen(self):
        """Test stats are immutable."""
        stats = calculate_msa_stats(_records("ACGT", "ACGT"))
        assert isinstance(stats.pairwise_scores, tuple)
        with pytest.raises(AttributeError):
            stats.total_pairs = 0


class TestQualityClassification:
    """Tests for quality tiers."""

    def test_tiers(self):
        """Test representative values."""
        assert classify(85)[0] == QualityTier.EXCELLENT
        assert classify(65)[0] == QualityTier.GOOD
        assert classify(45)[0] == QualityTier.FAIR
        assert classify(10)[0] == QualityTier.POOR

    def test_boundaries_inclusive(self):
        """Test boundary values map to the higher tier."""
        assert classify(80)[0] == QualityTier.EXCELLENT
        assert classify(60)[0] == QualityTier.GOOD
        assert classify(40)[0] == QualityTier.FAIR
        assert classify(79.99)[0] == QualityTier.GOOD
        assert classify(0)[0] == QualityTier.POOR

    def test_colors(self):
        """Test tier colors."""
        assert classify(95) == (QualityTier.EXCELLENT, "#28a745")
        assert quality_color(65) == "#ffc107"
        assert quality_color(45) == "#fd7e14"
        assert quality_color(5) == "#dc3545"

    def test_labels(self):
        """Test tier labels."""
        assert quality_label(100) == "Excellent"
        assert quality_label(60) == "Good"
        assert quality_label(40) == "Fair"
        assert quality_label(39.99) == "Poor"

    def test_custom_thresholds(self):
        """Test custom lower bounds."""
        thresholds = {QualityTier.EXCELLENT: 95, QualityTier.GOOD: 90, QualityTier.FAIR: 50}
        assert classify(92, thresholds)[0] == QualityTier.GOOD

    def test_undefined_raises(self):
        """Test NaN identity is not silently classified."""
        with pytest.raises(UndefinedMetricError):
            classify(math.nan)


class TestReport:
    """Tests for report assembly."""

    def test_assemble(self):
        """Test report bundles stats and classification."""
        stats = calculate_msa_stats(_records("ACGT", "ACGT", "ACGA"))
        report = assemble_report(stats, classify(stats.average_identity))

        assert isinstance(report, QualityReport)
        assert report.stats is stats
        assert report.tier == QualityTier.EXCELLENT
        assert report.color == "#28a745"
        assert report.label == "Excellent"

    def test_assemble_classifies_by_default(self):
        """Test classification is derived when not given."""
        stats = calculate_msa_stats(_records("AAAA", "CCCC"))
        report = assemble_report(stats)
        assert report.tier == QualityTier.POOR

    def test_to_dict(self):
        """Test flattened report row."""
        stats = calculate_msa_stats(_records("AC-T", "ACGT"))
        d = assemble_report(stats).to_dict()

        assert d["average_identity"] == 75.0
        assert d["quality"] == "Good"
        assert d["quality_color"] == "#ffc107"
        assert "pairwise_scores" not in d

    def test_summarize(self):
        """Test plain-text summary."""
        stats = calculate_msa_stats(_records("AC-T", "ACGT"))
        text = summarize_report(assemble_report(stats), include_pairs=True)

        assert "Average identity:     75%" in text
        assert "Quality assessment:   Good" in text
        assert "gap_runs=1" in text


class TestAlignmentScorer:
    """Tests for the scorer facade."""

    FASTA = ">seq1\nACGT\n>seq2\nACGT\n>seq3\nACGA\n"

    def test_assess(self):
        """Test the full parse-aggregate-classify pipeline."""
        report = AlignmentScorer().assess(self.FASTA)

        assert report.stats.num_sequences == 3
        assert report.stats.average_identity == 83.33
        assert report.tier == QualityTier.EXCELLENT

    def test_assess_single_record(self):
        """Test assessing a single record fails."""
        with pytest.raises(MinimumSequencesError):
            AlignmentScorer().assess(">only\nACGT\n")

    def test_constructor_overrides(self):
        """Test overrides given at construction."""
        scorer = AlignmentScorer(match_score=3)
        assert scorer.params.match_score == 3
        assert scorer.params.mismatch_score == -1
        assert scorer.score_pair("ACGT", "ACGT").score == 12

    def test_set_parameters_partial(self):
        """Test set_parameters changes only supplied fields."""
        scorer = AlignmentScorer()
        scorer.set_parameters(gap_open_penalty=-10)
        scorer.set_parameters(match_score=1)

        assert scorer.params == ScoringParameters(match_score=1, gap_open_penalty=-10)

    def test_set_parameters_copy_on_write(self):
        """Test earlier snapshots are unaffected by updates."""
        scorer = AlignmentScorer()
        snapshot = scorer.params
        scorer.set_parameters(match_score=5)

        assert snapshot.match_score == 2
        assert scorer.params.match_score == 5
        assert scorer.params is not snapshot

    def test_independent_instances(self):
        """Test scorers do not share parameters."""
        first = AlignmentScorer()
        second = AlignmentScorer()
        first.set_parameters(match_score=10)

        assert second.params.match_score == 2
        assert second.calculate_msa_stats(_records("ACGT", "ACGT")).average_score == 8.0

    def test_errors_share_base(self):
        """Test all scoring errors derive from AlignmentScoringError."""
        for error in (LengthMismatchError, MinimumSequencesError, UndefinedMetricError):
            assert issubclass(error, AlignmentScoringError)

    def test_stats_type(self):
        """Test calculate_msa_stats returns MSAStats."""
        scorer = AlignmentScorer()
        stats = scorer.calculate_msa_stats(scorer.parse_fasta(self.FASTA))
        assert isinstance(stats, MSAStats)
        assert scorer.classify(stats.average_identity)[0] == QualityTier.EXCELLENT
