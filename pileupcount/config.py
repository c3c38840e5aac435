"""Defaults and run configuration for pileupcount."""

from __future__ import annotations

import re
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from pileupcount.errors import ParseError

DEFAULT_QSCORE_CUTOFF = 30
MAX_QSCORE = 255
MAX_COORDINATE = 2**32 - 1

REPORT_SUFFIX = ".tsv.gz"
REPORT_HEADER = ("read_id", "num_matches", "num_mismatches")
REPORT_COMPRESSLEVEL = 6

_UNSIGNED = re.compile(r"\+?[0-9]+")


def parse_unsigned(value: str, field: str = "value", maximum: Optional[int] = None) -> int:
    """Parse *value* as a non-negative base-10 integer.

    A leading "+" is accepted. Minus signs, decimal points and
    whitespace are rejected with ``ParseError``, as is anything above
    *maximum* when given.
    """
    if not isinstance(value, str) or not _UNSIGNED.fullmatch(value):
        raise ParseError(f"Invalid {field}: {value!r} is not an unsigned integer")
    number = int(value)
    if maximum is not None and number > maximum:
        raise ParseError(f"Invalid {field}: {number} exceeds {maximum}")
    return number


def parse_qscore(value: str) -> int:
    return parse_unsigned(value, "Q-score cutoff", MAX_QSCORE)


@dataclass
class PileupConfig:
    """Inputs and options for a single pileup run."""

    bam: Path
    bed: Path
    fasta: Path
    output_dir: Path
    qscore_cutoff: int = DEFAULT_QSCORE_CUTOFF
    log_file: Optional[Path] = None

    def __post_init__(self) -> None:
        self.bam = Path(self.bam)
        self.bed = Path(self.bed)
        self.fasta = Path(self.fasta)
        self.output_dir = Path(self.output_dir)
        if self.log_file is not None:
            self.log_file = Path(self.log_file)

    def validate(self) -> None:
        """Check that inputs exist and the cutoff fits in a byte.

        Raises:
            FileNotFoundError: If an input file is missing
            ParseError: If the cutoff is out of range
        """
        for description, path in (
            ("BAM file", self.bam),
            ("BED file", self.bed),
            ("FASTA file", self.fasta),
        ):
            if not path.exists():
                raise FileNotFoundError(f"{description} not found: {path}")
        if not 0 <= self.qscore_cutoff <= MAX_QSCORE:
            raise ParseError(
                f"Invalid Q-score cutoff: {self.qscore_cutoff} is outside 0-{MAX_QSCORE}"
            )

    @classmethod
    def from_args(cls, args) -> "PileupConfig":
        return cls(
            bam=args.bam,
            bed=args.bed,
            fasta=args.fasta,
            output_dir=args.output_dir,
            qscore_cutoff=args.qscore,
            log_file=args.log_file,
        )

