"""End-to-end tests against real BAM/FASTA files built with pysam."""

from array import array

import pysam
import pytest

from pileupcount.cli import main
from pileupcount.config import PileupConfig
from pileupcount.errors import ParseError, UnknownReferenceError
from pileupcount.io import PysamReadProvider, PysamReferenceProvider
from pileupcount.pipeline import run_pileup
from pileupcount.report import read_report

LOW, HIGH = 10, 40

# (name, reference index, start, bases, qualities)
READS = [
    ("read1", 0, 0, "AAAAA", [LOW] * 5),
    ("read2", 0, 0, "AATAA", [LOW] * 5),
    ("read3", 0, 0, "AATAA", [LOW, LOW, HIGH, LOW, LOW]),
    ("read4", 1, 2, "TTGT", [LOW] * 4),
]


@pytest.fixture
def inputs(tmp_path):
    fasta = tmp_path / "ref.fa"
    fasta.write_text(">chr1\nACGTACCGGT\n>chr2\nTTTTTTTTTT\n")
    pysam.faidx(str(fasta))

    header = {
        "HD": {"VN": "1.6", "SO": "coordinate"},
        "SQ": [{"SN": "chr1", "LN": 10}, {"SN": "chr2", "LN": 10}],
    }
    bam = tmp_path / "reads.bam"
    with pysam.AlignmentFile(str(bam), "wb", header=header) as out:
        for name, tid, start, bases, quals in READS:
            seg = pysam.AlignedSegment()
            seg.query_name = name
            seg.flag = 0
            seg.reference_id = tid
            seg.reference_start = start
            seg.mapping_quality = 60
            seg.cigartuples = [(0, len(bases))]
            seg.query_sequence = bases
            seg.query_qualities = array("B", quals)
            out.write(seg)
    pysam.index(str(bam))

    bed = tmp_path / "regions.bed"
    bed.write_text("chr1\t0\t5\nchr2\t2\t8\n")
    return {"bam": bam, "fasta": fasta, "bed": bed, "out": tmp_path / "out"}


class TestProviders:
    def test_read_provider(self, inputs):
        with PysamReadProvider(inputs["bam"]) as reads:
            tid = reads.reference_id("chr2")
            records = list(reads.fetch(tid, 2, 8))
        assert tid == 1
        assert [r.read_id for r in records] == ["read4"]
        assert records[0].bases == "TTGT"
        assert list(records[0].qualities) == [LOW] * 4

    def test_read_provider_unknown_reference(self, inputs):
        with PysamReadProvider(inputs["bam"]) as reads:
            with pytest.raises(UnknownReferenceError):
                reads.reference_id("chrZ")

    def test_reference_provider(self, inputs):
        with PysamReferenceProvider(inputs["fasta"]) as ref:
            assert ref.fetch("chr1", 0, 4) == "ACGT"

    def test_reference_provider_half_open(self, inputs):
        with PysamReferenceProvider(inputs["fasta"]) as ref:
            assert ref.fetch("chr2", 2, 7) == "TTTTT"
            assert ref.fetch("chr1", 4, 5) == "A"


class TestRunPileup:
    def test_reports(self, inputs):
        config = PileupConfig(inputs["bam"], inputs["bed"], inputs["fasta"], inputs["out"])
        paths = run_pileup(config)

        assert {p.name for p in paths} == {"chr1.tsv.gz", "chr2.tsv.gz"}
        assert read_report(inputs["out"] / "chr1.tsv.gz") == {
            "read1": (5, 0),
            "read2": (4, 1),
            "read3": (5, 0),
        }
        assert read_report(inputs["out"] / "chr2.tsv.gz") == {"read4": (3, 1)}

    def test_cutoff_zero_matches_everything(self, inputs):
        config = PileupConfig(inputs["bam"], inputs["bed"], inputs["fasta"], inputs["out"], qscore_cutoff=0)
        run_pileup(config)
        assert read_report(inputs["out"] / "chr1.tsv.gz")["read2"] == (5, 0)

    def test_missing_input(self, inputs, tmp_path):
        config = PileupConfig(tmp_path / "missing.bam", inputs["bed"], inputs["fasta"], inputs["out"])
        with pytest.raises(FileNotFoundError):
            run_pileup(config)

    def test_out_of_range_cutoff(self, inputs):
        config = PileupConfig(inputs["bam"], inputs["bed"], inputs["fasta"], inputs["out"], qscore_cutoff=256)
        with pytest.raises(ParseError):
            run_pileup(config)

    def test_unknown_reference_writes_nothing(self, inputs):
        inputs["bed"].write_text("chr1\t0\t5\nchrZ\t0\t5\n")
        config = PileupConfig(inputs["bam"], inputs["bed"], inputs["fasta"], inputs["out"])
        with pytest.raises(UnknownReferenceError):
            run_pileup(config)
        assert list(inputs["out"].iterdir()) == []


class TestCLI:
    def _argv(self, inputs, *extra):
        return [
            "-b", str(inputs["bam"]),
            "-e", str(inputs["bed"]),
            "-f", str(inputs["fasta"]),
            "-o", str(inputs["out"]),
            *extra,
        ]

    def test_run(self, inputs):
        main(self._argv(inputs))
        assert (inputs["out"] / "chr1.tsv.gz").exists()

    def test_qscore_flag(self, inputs):
        main(self._argv(inputs, "--qscore", "5"))
        assert read_report(inputs["out"] / "chr1.tsv.gz")["read2"] == (5, 0)

    def test_log_file(self, inputs, tmp_path):
        log_file = tmp_path / "logs" / "run.log"
        main(self._argv(inputs, "--log-file", str(log_file), "-v"))
        assert "Wrote" in log_file.read_text()

    def test_bad_qscore_is_usage_error(self, inputs, capsys):
        with pytest.raises(SystemExit) as exc:
            main(self._argv(inputs, "-q", "high"))
        assert exc.value.code == 2
        assert "Q-score cutoff" in capsys.readouterr().err

    def test_missing_required_flag(self):
        with pytest.raises(SystemExit) as exc:
            main(["-b", "x.bam"])
        assert exc.value.code == 2

    def test_unknown_reference_exits_nonzero(self, inputs):
        inputs["bed"].write_text("chrZ\t0\t5\n")
        with pytest.raises(SystemExit) as exc:
            main(self._argv(inputs))
        assert exc.value.code == 1

    def test_version(self, capsys):
        with pytest.raises(SystemExit) as exc:
            main(["--version"])
        assert exc.value.code == 0
        assert "pileupcount" in capsys.readouterr().out
