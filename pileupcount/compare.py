"""Per-base match/mismatch classification for a single read."""

from __future__ import annotations

from typing import Optional, Sequence, Tuple, Union

import numpy as np

Bases = Union[str, bytes, bytearray, Sequence[int]]
Base = Union[str, bytes, int]


def _base_codes(bases: Optional[Bases]) -> np.ndarray:
    """Encode a base sequence as a uint8 array of ASCII codes."""
    if bases is None:
        return np.empty(0, dtype=np.uint8)
    if isinstance(bases, str):
        bases = bases.encode("ascii")
    return np.frombuffer(bytes(bases), dtype=np.uint8)


def _quality_scores(qualities: Optional[Sequence[int]]) -> np.ndarray:
    if qualities is None:
        return np.empty(0, dtype=np.int64)
    if isinstance(qualities, (bytes, bytearray)):
        return np.frombuffer(bytes(qualities), dtype=np.uint8).astype(np.int64)
    return np.asarray(qualities, dtype=np.int64).reshape(-1)


def _base_code(base: Base) -> int:
    if isinstance(base, int):
        return base
    if isinstance(base, str):
        base = base.encode("ascii")
    return base[0]


def compare(
    read_bases: Optional[Bases],
    read_qualities: Optional[Sequence[int]],
    reference_base: Base,
    qscore_cutoff: int,
) -> Tuple[int, int]:
    """Count matches and mismatches of a read against one reference base.

    Bases and qualities are paired position by position and the shorter of
    the two sets the length. A position is a match when its base equals
    *reference_base* or its quality is at least *qscore_cutoff*; every other
    position is a mismatch. The same reference base is used for every
    position of the read.
    """
    codes = _base_codes(read_bases)
    quals = _quality_scores(read_qualities)
    n = min(len(codes), len(quals))
    if n == 0:
        return 0, 0

    matched = (codes[:n] == _base_code(reference_base)) | (quals[:n] >= qscore_cutoff)
    num_matches = int(np.count_nonzero(matched))
    return num_matches, n - num_matches
