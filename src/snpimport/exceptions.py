"""Exceptions raised by the sub-SNP import core."""


class SnpImportError(Exception):
    """Base exception for snpimport."""


class InvalidCoordinateError(SnpImportError, ValueError):
    """Raised when a contig, chromosome or HGVS coordinate is negative."""


class InvalidOrientationCodeError(SnpImportError, ValueError):
    """Raised when an orientation code is not +1 or -1."""


class InvalidLocusTypeCodeError(SnpImportError, ValueError):
    """Raised when a dbSNP locus type code is unknown."""


class GroupOrderingError(SnpImportError):
    """Raised when rows are not grouped in ascending submission id order."""


class UndefinedHgvsAlleleError(SnpImportError):
    """Raised when neither HGVS annotation can anchor a reference or alternate."""

    def __init__(self, ss_id: int, allele: str) -> None:
        super().__init__(
            f"Cannot resolve {allele} allele of ss{ss_id}: no HGVS annotation is defined"
        )
        self.ss_id = ss_id
        self.allele = allele


class ConfigurationError(SnpImportError, ValueError):
    """Raised when import settings are invalid."""
