"""
pileupcount: per-read match/mismatch tallies over targeted regions.

For every read overlapping a BED region, bases are compared against the
reference and counted as matches or mismatches, with a base-quality cutoff
as tie-break. Results are written as one gzip TSV per reference sequence.
"""

__version__ = "1.0.0"

from pileupcount.errors import (
    PileupError,
    ParseError,
    UnknownReferenceError,
    PreconditionViolation,
)
from pileupcount.regions import Region, build_region_table, load_regions
from pileupcount.compare import compare
from pileupcount.tally import Accumulator, ReadTally
from pileupcount.scan import scan
from pileupcount.report import sanitize_filename, write_reports, read_report
from pileupcount.config import PileupConfig

__all__ = [
    "PileupError",
    "ParseError",
    "UnknownReferenceError",
    "PreconditionViolation",
    "Region",
    "build_region_table",
    "load_regions",
    "compare",
    "Accumulator",
    "ReadTally",
    "scan",
    "sanitize_filename",
    "write_reports",
    "read_report",
    "PileupConfig",
]
