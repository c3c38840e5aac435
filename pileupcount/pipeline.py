"""End-to-end run: regions in, per-reference reports out."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import List

from pileupcount.config import PileupConfig
from pileupcount.io import PysamReadProvider, PysamReferenceProvider
from pileupcount.regions import load_regions
from pileupcount.report import write_reports
from pileupcount.scan import scan

logger = logging.getLogger(__name__)


def run_pileup(config: PileupConfig) -> List[Path]:
    """Scan every region of *config* and write the per-reference reports.

    Any error aborts the run. Reports are only written once scanning has
    finished, and a failure while writing leaves earlier files in place.

    Returns:
        Paths of the reports written
    """
    config.validate()
    config.output_dir.mkdir(parents=True, exist_ok=True)

    with PysamReadProvider(config.bam, reference_filename=config.fasta) as reads, \
            PysamReferenceProvider(config.fasta) as reference:
        regions = load_regions(config.bed)
        logger.info(
            f"Scanning {len(regions)} regions in {config.bam.name} "
            f"(Q-score cutoff {config.qscore_cutoff})"
        )
        acc = scan(regions, reads, reference, config.qscore_cutoff)

    logger.info(f"Tallied {acc.read_count()} reads across {len(acc)} reference sequences")
    written = write_reports(acc.drain(), config.output_dir)
    logger.info(f"Wrote {len(written)} reports to {config.output_dir}")
    return written
