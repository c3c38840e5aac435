"""Error types raised by the pileup engine."""


class PileupError(Exception):
    """Base class for all pileupcount errors."""


class ParseError(PileupError, ValueError):
    """A numeric field in the region list or a CLI flag could not be parsed."""


class UnknownReferenceError(PileupError, KeyError):
    """A region names a reference sequence missing from the alignment header."""

    def __init__(self, reference_name: str):
        super().__init__(reference_name)
        self.reference_name = reference_name

    def __str__(self) -> str:
        return f"Reference sequence not found in alignment header: {self.reference_name!r}"


class PreconditionViolation(PileupError, IndexError):
    """A record's start falls outside the fetched reference window."""
