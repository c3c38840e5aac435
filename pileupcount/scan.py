"""Region scanner: fold every overlapping read of every region into tallies."""

from __future__ import annotations

import logging
from typing import Mapping, Optional

from pileupcount.compare import compare
from pileupcount.errors import PreconditionViolation
from pileupcount.regions import Region
from pileupcount.tally import Accumulator

logger = logging.getLogger(__name__)


def scan(
    regions: Mapping[str, Region],
    read_provider,
    reference_provider,
    qscore_cutoff: int,
    accumulator: Optional[Accumulator] = None,
) -> Accumulator:
    """Tally matches and mismatches for every read overlapping each region.

    Regions are visited in mapping order, then records in provider order.
    Each record is compared against the single reference base at its
    alignment start, and the result is folded under
    ``(reference_name, read_id)``.

    The reference window is fetched as ``[start, end - 1)``, so it stops one
    base short of the region end.

    Raises:
        UnknownReferenceError: If a region's reference is absent from the
            alignment header
        PreconditionViolation: If a record starts outside the fetched window
    """
    acc = accumulator if accumulator is not None else Accumulator()

    for name, region in regions.items():
        start, end = region.start, region.end
        tid = read_provider.reference_id(name)
        records = read_provider.fetch(tid, start, end)
        window = reference_provider.fetch(name, start, end - 1)

        n_records = 0
        for record in records:
            offset = record.reference_start - start
            if offset < 0 or offset >= len(window):
                raise PreconditionViolation(
                    f"Read {record.read_id!r} starts at {record.reference_start}, "
                    f"outside the reference window {name}:{start}-{start + len(window)}"
                )
            num_matches, num_mismatches = compare(
                record.bases, record.qualities, window[offset], qscore_cutoff
            )
            acc.fold(name, record.read_id, num_matches, num_mismatches)
            n_records += 1

        logger.debug(f"{name}:{start}-{end}: {n_records} records")

    return acc
