"""Region table: one half-open interval per reference sequence."""

from __future__ import annotations

import gzip
import logging
from dataclasses import dataclass
from pathlib import Path
from types import MappingProxyType
from typing import Generator, Iterable, List, Mapping, Sequence, Union

from pileupcount.config import MAX_COORDINATE, parse_unsigned

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Region:
    """A half-open interval ``[start, end)`` on a named reference sequence."""

    reference_name: str
    start: int
    end: int

    @property
    def length(self) -> int:
        return max(self.end - self.start, 0)


def build_region_table(rows: Iterable[Sequence[str]]) -> Mapping[str, Region]:
    """Build a read-only name -> Region mapping from interval rows.

    Rows with fewer than three fields are skipped. A later row for the same
    reference name replaces the earlier one.

    Raises:
        ParseError: If start or end of a three-field row is not a 32-bit
            unsigned integer
    """
    table: dict[str, Region] = {}
    for row_number, fields in enumerate(rows, start=1):
        if len(fields) < 3:
            continue
        name = fields[0]
        start = parse_unsigned(fields[1], f"start on row {row_number}", MAX_COORDINATE)
        end = parse_unsigned(fields[2], f"end on row {row_number}", MAX_COORDINATE)
        if name in table:
            previous = table[name]
            logger.warning(
                f"Region {name}:{start}-{end} on row {row_number} replaces "
                f"{name}:{previous.start}-{previous.end}; only one interval "
                f"per reference is tracked"
            )
        table[name] = Region(name, start, end)
    return MappingProxyType(table)


def read_region_rows(filepath: Union[str, Path]) -> Generator[List[str], None, None]:
    """Yield the tab-separated fields of each line of a BED-like file.

    Supports plain-text and gzip-compressed files (.gz).
    """
    filepath = Path(filepath)
    opener = gzip.open if filepath.suffix == ".gz" else open

    with opener(filepath, "rt") as fh:  # type: ignore[arg-type]
        for line in fh:
            yield line.strip().split("\t")


def load_regions(filepath: Union[str, Path]) -> Mapping[str, Region]:
    regions = build_region_table(read_region_rows(filepath))
    logger.info(f"Loaded {len(regions)} regions from {Path(filepath).name}")
    return regions
