"""
Alignment parsing for FASTA text and alignment files.

FASTA text is parsed directly: header lines start a record and every
following non-blank line is appended to its sequence. Clustal and
Stockholm files are read through Biopython's AlignIO.

Alignment files produced by upstream aligners often carry a ``.aln``
extension while holding FASTA content, so file reading inspects the
content before falling back to the extension.
"""

import logging
from pathlib import Path
from typing import List, Optional, Union

from Bio import AlignIO

from .models import AlignmentFormat, SequenceRecord

logger = logging.getLogger(__name__)

HEADER_MARKER = ">"


def parse_fasta(text: str) -> List[SequenceRecord]:
    """Parse multi-record FASTA text into sequence records.

    Lines are stripped of surrounding whitespace. Blank lines are ignored
    and sequence lines that appear before the first header are dropped.
    Whitespace inside a sequence line is removed.

    Args:
        text: Raw FASTA content

    Returns:
        Records in input order; empty if the text has no header lines
    """
    records: List[SequenceRecord] = []
    current_id: Optional[str] = None
    current_parts: List[str] = []
    orphan_lines = 0

    for line in text.splitlines():
        line = line.strip()

        if line.startswith(HEADER_MARKER):
            if current_id is not None:
                records.append(SequenceRecord(current_id, "".join(current_parts)))
            current_id = line[len(HEADER_MARKER):]
            current_parts = []
        elif line:
            if current_id is None:
                orphan_lines += 1
                continue
            current_parts.append("".join(line.split()))

    if current_id is not None:
        records.append(SequenceRecord(current_id, "".join(current_parts)))

    if orphan_lines:
        logger.debug("Discarded %d sequence line(s) before the first header", orphan_lines)

    return records


def detect_format(filepath: Union[str, Path], text: Optional[str] = None) -> AlignmentFormat:
    """Detect alignment format from content, then from file extension.

    Args:
        filepath: Path to the alignment file
        text: File content, if already read

    Returns:
        Detected AlignmentFormat

    Raises:
        ValueError: If the format cannot be determined
    """
    path = Path(filepath)

    if text is not None:
        for line in text.splitlines():
            stripped = line.strip()
            if not stripped:
                continue
            if stripped.startswith(HEADER_MARKER):
                return AlignmentFormat.FASTA
            if stripped.startswith("CLUSTAL"):
                return AlignmentFormat.CLUSTAL
            if stripped.startswith("# STOCKHOLM"):
                return AlignmentFormat.STOCKHOLM
            break

    name_lower = path.name.lower()
    if name_lower.endswith((".sto", ".stockholm")):
        return AlignmentFormat.STOCKHOLM
    if name_lower.endswith((".aln", ".clustal")):
        return AlignmentFormat.CLUSTAL
    if name_lower.endswith((".fa", ".fasta", ".fas", ".fna", ".afa")):
        return AlignmentFormat.FASTA

    raise ValueError(f"Cannot determine alignment format from file: {filepath}")


def read_alignment(
    filepath: Union[str, Path],
    format: Optional[AlignmentFormat] = None,
) -> List[SequenceRecord]:
    """Read an alignment file into sequence records.

    Args:
        filepath: Path to the alignment file
        format: Optional explicit format. If None, detect from content and extension

    Returns:
        Records in file order

    Raises:
        FileNotFoundError: If the file doesn't exist
        ValueError: If the format is unknown or the file is malformed
    """
    path = Path(filepath)
    if not path.exists():
        raise FileNotFoundError(f"Alignment file not found: {filepath}")

    text = path.read_text()
    if format is None:
        format = detect_format(path, text)

    if format == AlignmentFormat.FASTA:
        records = parse_fasta(text)
    else:
        try:
            alignment = AlignIO.read(str(path), format.value)
        except Exception as e:
            raise ValueError(f"Failed to parse {format.value} alignment: {e}")
        records = [SequenceRecord(record.id, str(record.seq)) for record in alignment]

    logger.debug("Read %d record(s) from %s (%s)", len(records), path, format.value)
    return records
