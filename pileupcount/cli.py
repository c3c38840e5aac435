"""CLI entry point for pileupcount."""

from __future__ import annotations

import argparse
import logging
import sys

from pileupcount import __version__
from pileupcount.config import DEFAULT_QSCORE_CUTOFF, PileupConfig, parse_qscore
from pileupcount.errors import ParseError, PileupError
from pileupcount.log import setup_logger


def _qscore_arg(value: str) -> int:
    try:
        return parse_qscore(value)
    except ParseError as e:
        raise argparse.ArgumentTypeError(str(e)) from e


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="pileupcount",
        description="Count per-read matches/mismatches against the reference in BED regions",
    )
    parser.add_argument("-b", "--bam", required=True, metavar="BAM_FILE",
                        help="Input BAM file (indexed)")
    parser.add_argument("-e", "--bed", required=True, metavar="BED_FILE",
                        help="Input BED file of regions")
    parser.add_argument("-f", "--fasta", required=True, metavar="FASTA_FILE",
                        help="Reference FASTA file (faidx-indexed)")
    parser.add_argument("-o", "--output-dir", required=True, metavar="OUTPUT_DIR",
                        help="Output directory for TSV.gz files")
    parser.add_argument("-q", "--qscore", type=_qscore_arg, default=DEFAULT_QSCORE_CUTOFF,
                        metavar="QSCORE", help="Minimum Q-score cutoff for a match (default: %(default)s)")
    parser.add_argument("--log-file", help="Also write log messages to this file")
    parser.add_argument("-v", "--verbose", action="store_true", help="Log per-region detail")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def main(argv: list[str] | None = None) -> None:
    parser = _build_parser()
    args = parser.parse_args(argv)

    logger = setup_logger(
        log_file=args.log_file,
        level=logging.DEBUG if args.verbose else logging.INFO,
    )

    from pileupcount.pipeline import run_pileup

    try:
        run_pileup(PileupConfig.from_args(args))
    except (PileupError, OSError, KeyError, ValueError) as e:
        logger.error(f"Error: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
