"""Shared test fixtures for pileupcount tests."""

import logging

import pytest

from pileupcount.io import AlignedRecord, InMemoryReadProvider, InMemoryReferenceProvider
from pileupcount.regions import build_region_table


LOW_Q = 10
HIGH_Q = 40
CUTOFF = 30


def make_record(read_id, start, bases, qualities=None):
    """Build an AlignedRecord with uniform low quality unless given."""
    if qualities is None:
        qualities = [LOW_Q] * len(bases)
    return AlignedRecord(read_id=read_id, reference_start=start, bases=bases, qualities=qualities)


@pytest.fixture
def chr1_regions():
    """A single region chr1:[0, 5)."""
    return build_region_table([["chr1", "0", "5"]])


@pytest.fixture
def chr1_reference():
    """Reference provider whose chr1 starts with ACGTA."""
    return InMemoryReferenceProvider({"chr1": "ACGTACCGGT", "chr2": "TTTTTTTTTT"})


@pytest.fixture
def perfect_read():
    return make_record("read1", 0, "ACGTA")


@pytest.fixture
def read_provider_factory():
    """Build an in-memory read provider from ``{name: [records]}``."""
    def _factory(records):
        return InMemoryReadProvider(records)
    return _factory


@pytest.fixture
def bed_file(tmp_path):
    p = tmp_path / "regions.bed"
    p.write_text("chr1\t0\t5\n")
    return p


@pytest.fixture(autouse=True)
def reset_package_logger():
    """Drop handlers installed by CLI runs so they don't outlive the test."""
    yield
    logger = logging.getLogger("pileupcount")
    for handler in list(logger.handlers):
        handler.close()
        logger.removeHandler(handler)
