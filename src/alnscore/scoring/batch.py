"""
Comparison of alignments produced by different upstream methods.

Alignment files are laid out as ``<data_dir>/<method>/<file_name>``; the
same file name is expected under each method's directory. Every
(file, method) unit is scored independently with its own scorer, and a
failure in one unit is recorded on that unit only.
"""

import logging
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path
from typing import Iterable, List, Optional, Sequence, Union

import pandas as pd

from .errors import AlignmentScoringError
from .fasta_parser import read_alignment
from .models import ScoringParameters, UnitResult
from .scorer import AlignmentScorer

logger = logging.getLogger(__name__)

DEFAULT_METHODS = ("EdgeAlign", "MLP", "XGBoost", "NeedlemanWunsch")

SUMMARY_COLUMNS = [
    "file", "method", "status", "num_sequences", "alignment_length",
    "conserved_positions", "conservation", "average_score",
    "average_identity", "total_pairs", "quality", "quality_color", "error",
]


def score_file(
    path: Union[str, Path],
    params: Optional[ScoringParameters] = None,
    method: str = "",
    file_name: Optional[str] = None,
) -> UnitResult:
    """Score a single alignment file, capturing failures on the result.

    Args:
        path: Alignment file to score
        params: Scoring scheme (DNA defaults if None)
        method: Name of the method that produced the file
        file_name: Name to report; defaults to the file's name

    Returns:
        UnitResult with status "ok", "unavailable" or "failed"
    """
    path = Path(path)
    file_name = file_name or path.name
    scorer = AlignmentScorer(params)

    try:
        records = read_alignment(path)
        report = scorer.assess_records(records)
    except FileNotFoundError:
        logger.warning("Alignment not available for method %s: %s", method or "-", file_name)
        return UnitResult(
            file_name, method, path,
            status="unavailable",
            error=f"No alignment available for method {method or '-'}",
        )
    except (AlignmentScoringError, ValueError, OSError) as e:
        logger.error("Error calculating score for %s (%s): %s", file_name, method or "-", e)
        return UnitResult(file_name, method, path, status="failed", error=str(e))

    logger.info(
        "%s [%s]: %s (average identity %s%%)",
        file_name, method or "-", report.label, report.stats.average_identity,
    )
    return UnitResult(file_name, method, path, status="ok", report=report)


def compare_methods(
    file_name: str,
    methods: Sequence[str] = DEFAULT_METHODS,
    data_dir: Union[str, Path] = "data",
    params: Optional[ScoringParameters] = None,
) -> List[UnitResult]:
    """Score one alignment file as produced by each method.

    Args:
        file_name: Alignment file name, looked up under each method directory
        methods: Method directory names, in reporting order
        data_dir: Root directory holding one sub-directory per method
        params: Scoring scheme shared by all units

    Returns:
        One UnitResult per method, in the order given
    """
    data_dir = Path(data_dir)
    return [
        score_file(data_dir / method / file_name, params, method=method, file_name=file_name)
        for method in methods
    ]


def list_alignment_files(
    data_dir: Union[str, Path] = "data",
    methods: Sequence[str] = DEFAULT_METHODS,
) -> List[str]:
    """Return the sorted union of file names found under the method directories."""
    data_dir = Path(data_dir)
    names = set()
    for method in methods:
        method_dir = data_dir / method
        if not method_dir.is_dir():
            logger.debug("Method directory missing: %s", method_dir)
            continue
        names.update(p.name for p in method_dir.iterdir() if p.is_file())
    return sorted(names)


def results_to_dataframe(results: Iterable[UnitResult]) -> pd.DataFrame:
    """Tabulate unit results, one row per (file, method)."""
    rows = [result.to_dict() for result in results]
    return pd.DataFrame(rows, columns=SUMMARY_COLUMNS)


def batch_compare(
    file_names: Optional[Sequence[str]] = None,
    methods: Sequence[str] = DEFAULT_METHODS,
    data_dir: Union[str, Path] = "data",
    params: Optional[ScoringParameters] = None,
    threads: int = 1,
) -> pd.DataFrame:
    """Compare methods across several alignment files.

    Args:
        file_names: Files to compare; all files found under data_dir if None
        methods: Method directory names
        data_dir: Root directory holding one sub-directory per method
        params: Scoring scheme used by every unit
        threads: Number of worker threads; 1 scores units sequentially

    Returns:
        DataFrame with SUMMARY_COLUMNS, rows ordered by file then method
    """
    data_dir = Path(data_dir)
    if file_names is None:
        file_names = list_alignment_files(data_dir, methods)

    units = [(name, method) for name in file_names for method in methods]
    logger.info("Scoring %d file(s) across %d method(s)", len(file_names), len(methods))

    def run(unit):
        name, method = unit
        return score_file(data_dir / method / name, params, method=method, file_name=name)

    if threads > 1 and len(units) > 1:
        with ThreadPoolExecutor(max_workers=threads) as executor:
            results = list(executor.map(run, units))
    else:
        results = [run(unit) for unit in units]

    df = results_to_dataframe(results)

    failed = int((df["status"] == "failed").sum())
    unavailable = int((df["status"] == "unavailable").sum())
    logger.info(
        "Batch complete: %d scored, %d unavailable, %d failed",
        len(df) - failed - unavailable, unavailable, failed,
    )
    return df
