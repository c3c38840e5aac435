"""Read and reference providers for the region scanner.

The scanner only needs two small interfaces:

* a read provider with ``reference_id(name)`` and
  ``fetch(reference_id, start, end)`` yielding records that expose
  ``read_id``, ``reference_start``, ``bases`` and ``qualities``;
* a reference provider with ``fetch(name, start, stop)`` returning the
  bases of ``[start, stop)``.

``PysamReadProvider`` and ``PysamReferenceProvider`` back these with
indexed BAM/CRAM and FASTA files; the in-memory variants back them with
plain dictionaries.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Iterable, Iterator, List, Optional, Sequence, Union

import pysam

from pileupcount.errors import UnknownReferenceError


@dataclass
class AlignedRecord:
    """One aligned read, reduced to what the pileup needs."""

    read_id: str
    reference_start: int
    bases: Optional[str]
    qualities: Optional[Sequence[int]]

    @classmethod
    def from_segment(cls, segment) -> "AlignedRecord":
        """Build a record from a ``pysam.AlignedSegment``."""
        return cls(
            read_id=segment.query_name,
            reference_start=segment.reference_start,
            bases=segment.query_sequence,
            qualities=segment.query_qualities,
        )


class PysamReadProvider:
    """Region queries against an indexed BAM or CRAM file."""

    def __init__(
        self,
        path: Union[str, Path],
        reference_filename: Optional[Union[str, Path]] = None,
    ):
        path = Path(path)
        if path.suffix == ".cram":
            self._file = pysam.AlignmentFile(
                str(path), "rc",
                reference_filename=str(reference_filename) if reference_filename else None,
            )
        else:
            self._file = pysam.AlignmentFile(str(path), "rb")
        self.path = path

    def reference_id(self, name: str) -> int:
        tid = self._file.get_tid(name)
        if tid < 0:
            raise UnknownReferenceError(name)
        return tid

    def fetch(self, reference_id: int, start: int, end: int) -> Iterator[AlignedRecord]:
        for segment in self._file.fetch(tid=reference_id, start=start, stop=end):
            yield AlignedRecord.from_segment(segment)

    def close(self) -> None:
        self._file.close()

    def __enter__(self) -> "PysamReadProvider":
        return self

    def __exit__(self, *exc) -> None:
        self.close()


class PysamReferenceProvider:
    """Base lookups against a faidx-indexed FASTA file."""

    def __init__(self, path: Union[str, Path]):
        self.path = Path(path)
        self._file = pysam.FastaFile(str(self.path))

    def fetch(self, name: str, start: int, stop: int) -> str:
        return self._file.fetch(reference=name, start=start, end=stop)

    def close(self) -> None:
        self._file.close()

    def __enter__(self) -> "PysamReferenceProvider":
        return self

    def __exit__(self, *exc) -> None:
        self.close()


class InMemoryReadProvider:
    """Read provider over a fixed list of records per reference name.

    A record overlaps ``[start, end)`` when its footprint, taken as
    ``reference_start`` plus the length of its bases, intersects it.
    """

    def __init__(self, records: Dict[str, Iterable[AlignedRecord]]):
        self._names: List[str] = list(records)
        self._records: List[List[AlignedRecord]] = [
            sorted(records[name], key=lambda r: r.reference_start) for name in self._names
        ]

    def reference_id(self, name: str) -> int:
        try:
            return self._names.index(name)
        except ValueError:
            raise UnknownReferenceError(name) from None

    def fetch(self, reference_id: int, start: int, end: int) -> Iterator[AlignedRecord]:
        for record in self._records[reference_id]:
            footprint_end = record.reference_start + max(len(record.bases or ""), 1)
            if record.reference_start < end and footprint_end > start:
                yield record


class InMemoryReferenceProvider:
    """Reference provider backed by a name -> sequence dictionary."""

    def __init__(self, sequences: Dict[str, str]):
        self._sequences = dict(sequences)

    def fetch(self, name: str, start: int, stop: int) -> str:
        try:
            sequence = self._sequences[name]
        except KeyError:
            raise KeyError(f"Unknown reference sequence: {name!r}") from None
        return sequence[start:stop]
