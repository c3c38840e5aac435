"""Per-read match/mismatch tallies grouped by reference sequence."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict

TallyTable = Dict[str, Dict[str, "ReadTally"]]


@dataclass
class ReadTally:
    """Running (matches, mismatches) counts for one read."""

    read_id: str
    matches: int = 0
    mismatches: int = 0

    @property
    def total(self) -> int:
        return self.matches + self.mismatches

    def add(self, matches: int, mismatches: int) -> None:
        self.matches += matches
        self.mismatches += mismatches


class Accumulator:
    """Owns every tally for the duration of a scan.

    Folds add to existing counts rather than replacing them. Once
    :meth:`drain` has handed the table over, the accumulator is consumed
    and further use raises ``RuntimeError``.
    """

    def __init__(self) -> None:
        self._table: TallyTable = {}
        self._drained = False

    def fold(self, reference_name: str, read_id: str, matches: int, mismatches: int) -> None:
        self._check_live()
        reads = self._table.setdefault(reference_name, {})
        tally = reads.get(read_id)
        if tally is None:
            tally = reads[read_id] = ReadTally(read_id)
        tally.add(matches, mismatches)

    def drain(self) -> TallyTable:
        """Return the full tally table and mark the accumulator consumed."""
        self._check_live()
        self._drained = True
        table, self._table = self._table, {}
        return table

    def read_count(self) -> int:
        """Number of distinct (reference, read) tallies held."""
        return sum(len(reads) for reads in self._table.values())

    def __len__(self) -> int:
        return len(self._table)

    def __contains__(self, reference_name: object) -> bool:
        return reference_name in self._table

    def _check_live(self) -> None:
        if self._drained:
            raise RuntimeError("Accumulator has already been drained")
