"""
alnscore Command-Line Interface

Entry points for the alnscore-score, alnscore-compare and
alnscore-validate commands.
"""

import argparse
import sys
from pathlib import Path
from typing import List, Optional

from alnscore.config import get_config
from alnscore.logging import colorize, setup_logging
from alnscore.scoring import (
    batch_compare,
    results_to_dataframe,
    score_file,
    summarize_report,
)


def _add_scoring_arguments(parser: argparse.ArgumentParser) -> None:
    group = parser.add_argument_group("scoring parameters (override ALNSCORE_* settings)")
    group.add_argument("--match", type=float, dest="match_score", help="Match score (default: 2)")
    group.add_argument("--mismatch", type=float, dest="mismatch_score", help="Mismatch score (default: -1)")
    group.add_argument("--gap-open", type=float, dest="gap_open_penalty", help="Gap open penalty (default: -2)")
    group.add_argument(
        "--gap-extend", type=float, dest="gap_extension_penalty",
        help="Gap extension penalty (default: -0.5)",
    )


def _scoring_parameters(args: argparse.Namespace):
    return get_config().scoring_parameters(
        match_score=args.match_score,
        mismatch_score=args.mismatch_score,
        gap_open_penalty=args.gap_open_penalty,
        gap_extension_penalty=args.gap_extension_penalty,
    )


def score_main(argv: Optional[List[str]] = None) -> int:
    """Entry point for alnscore-score command."""
    parser = argparse.ArgumentParser(
        prog="alnscore-score",
        description="Report quality statistics for finished alignment files",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  alnscore-score NC_002018_NC_002019.aln
  alnscore-score *.aln --gap-open -5 --gap-extend -1 --tsv scores.tsv
        """,
    )
    parser.add_argument("alignments", nargs="+", type=Path, help="Alignment file(s) (FASTA, Clustal, Stockholm)")
    _add_scoring_arguments(parser)
    parser.add_argument("--pairs", action="store_true", help="Also list every pairwise score")
    parser.add_argument("--tsv", type=Path, help="Write a summary table to this TSV file")
    parser.add_argument("-v", "--verbose", action="store_true", help="Print debug messages")
    args = parser.parse_args(argv)

    logger = setup_logging("alnscore", verbose=args.verbose)
    params = _scoring_parameters(args)

    results = []
    for path in args.alignments:
        result = score_file(path, params)
        results.append(result)

        print(f"== {path}")
        if result.ok:
            text = summarize_report(result.report, include_pairs=args.pairs)
            print(text.replace(
                result.report.label,
                colorize(result.report.label, result.report.tier.terminal_color),
            ))
        else:
            print(f"  Error calculating score: {result.error}")
        print()

    if args.tsv:
        results_to_dataframe(results).to_csv(args.tsv, sep="\t", index=False)
        logger.info("Saved summary to: %s", args.tsv)

    failed = [r for r in results if not r.ok]
    if failed:
        logger.error("%d of %d alignment(s) could not be scored", len(failed), len(results))
        return 1
    return 0


def compare_main(argv: Optional[List[str]] = None) -> int:
    """Entry point for alnscore-compare command."""
    config = get_config()

    parser = argparse.ArgumentParser(
        prog="alnscore-compare",
        description="Compare alignments of the same file produced by several methods",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Alignments are read from <data-dir>/<method>/<file>.

Examples:
  alnscore-compare NC_002018_NC_002019.aln --data-dir ./data
  alnscore-compare --methods EdgeAlign,NeedlemanWunsch --threads 8 --tsv comparison.tsv
        """,
    )
    parser.add_argument(
        "files", nargs="*",
        help="Alignment file names (default: every file found under the method directories)",
    )
    parser.add_argument("--data-dir", type=Path, default=config.data_dir, help="Root data directory")
    parser.add_argument(
        "--methods", default=",".join(config.methods),
        help="Comma-separated method directory names",
    )
    parser.add_argument("--threads", type=int, default=config.threads, help="Worker threads")
    _add_scoring_arguments(parser)
    parser.add_argument("--tsv", type=Path, help="Write the comparison table to this TSV file")
    parser.add_argument("-v", "--verbose", action="store_true", help="Print debug messages")
    args = parser.parse_args(argv)

    logger = setup_logging("alnscore", verbose=args.verbose)

    methods = [m.strip() for m in args.methods.split(",") if m.strip()]
    if not methods:
        parser.error("--methods must name at least one method")

    df = batch_compare(
        args.files or None,
        methods=methods,
        data_dir=args.data_dir,
        params=_scoring_parameters(args),
        threads=args.threads,
    )

    if df.empty:
        logger.warning("No alignment files found under %s", args.data_dir)
        return 1

    columns = ["file", "method", "status", "average_identity", "average_score", "conservation", "quality"]
    print(df[columns].to_string(index=False))

    if args.tsv:
        df.to_csv(args.tsv, sep="\t", index=False)
        logger.info("Saved comparison to: %s", args.tsv)

    return 1 if (df["status"] == "failed").any() else 0


def validate_main(argv: Optional[List[str]] = None) -> int:
    """Entry point for alnscore-validate command."""
    parser = argparse.ArgumentParser(
        prog="alnscore-validate",
        description="Show and check the alnscore configuration",
    )
    parser.add_argument(
        "--require-data", action="store_true",
        help="Fail if the data directory does not exist",
    )
    args = parser.parse_args(argv)

    logger = setup_logging("alnscore.validate")

    config = get_config()
    config.print_status()

    is_valid, errors = config.validate(require_data=args.require_data)

    if errors:
        logger.error("Configuration Errors:")
        for error in errors:
            logger.error(f"  ✗ {error}")
        return 1

    logger.info("✓ Configuration is valid")
    return 0


def main() -> None:
    sys.exit(score_main())


if __name__ == "__main__":
    main()
