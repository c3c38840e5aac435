"""Per-reference gzip TSV reports."""

from __future__ import annotations

import gzip
import logging
from pathlib import Path
from typing import Callable, Dict, List, Tuple, Union

from pileupcount.config import REPORT_COMPRESSLEVEL, REPORT_HEADER, REPORT_SUFFIX
from pileupcount.tally import TallyTable

logger = logging.getLogger(__name__)


def sanitize_filename(name: str) -> str:
    """Keep only alphanumeric characters, ``_`` and ``-``."""
    return "".join(c for c in name if c.isalnum() or c in "_-")


def report_path(
    output_dir: Union[str, Path],
    reference_name: str,
    sanitizer: Callable[[str], str] = sanitize_filename,
) -> Path:
    return Path(output_dir) / f"{sanitizer(reference_name)}{REPORT_SUFFIX}"


def write_reports(
    table: TallyTable,
    output_dir: Union[str, Path],
    sanitizer: Callable[[str], str] = sanitize_filename,
) -> List[Path]:
    """Write one ``<name>.tsv.gz`` per reference sequence in *table*.

    Two reference names that sanitize to the same file name overwrite each
    other; the later one wins. Files written before an ``OSError`` are left
    on disk.

    Returns:
        Paths written, in table order
    """
    output_dir = Path(output_dir)
    output_dir.mkdir(parents=True, exist_ok=True)

    written: List[Path] = []
    owners: Dict[Path, str] = {}
    for reference_name, reads in table.items():
        path = report_path(output_dir, reference_name, sanitizer)
        if path in owners:
            logger.warning(
                f"{reference_name!r} and {owners[path]!r} both map to {path.name}; "
                f"overwriting"
            )
        owners[path] = reference_name

        with gzip.open(path, "wt", compresslevel=REPORT_COMPRESSLEVEL) as fh:
            fh.write("\t".join(REPORT_HEADER) + "\n")
            for read_id, tally in reads.items():
                fh.write(f"{read_id}\t{tally.matches}\t{tally.mismatches}\n")

        logger.info(f"Wrote {len(reads)} reads for {reference_name} to {path.name}")
        if path not in written:
            written.append(path)

    return written


def read_report(filepath: Union[str, Path]) -> Dict[str, Tuple[int, int]]:
    """Read a report back as ``{read_id: (matches, mismatches)}``."""
    counts: Dict[str, Tuple[int, int]] = {}
    with gzip.open(filepath, "rt") as fh:
        header = fh.readline().rstrip("\n").split("\t")
        if tuple(header) != REPORT_HEADER:
            raise ValueError(f"Unexpected report header in {filepath}: {header}")
        for line in fh:
            read_id, matches, mismatches = line.rstrip("\n").split("\t")
            counts[read_id] = (int(matches), int(mismatches))
    return counts
