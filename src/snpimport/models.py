"""In-memory data models for legacy dbSNP sub-SNP rows and assembled records."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any

from snpimport import orientation
from snpimport.exceptions import (
    InvalidCoordinateError,
    InvalidLocusTypeCodeError,
    InvalidOrientationCodeError,
)


class Orientation(Enum):
    """Strand orientation of a submission, cluster, contig or HGVS mapping."""

    FORWARD = 1
    REVERSE = -1

    @classmethod
    def from_code(cls, code: Any) -> Orientation:
        """Convert a dbSNP orientation code (1 or -1) into an orientation."""

        if isinstance(code, Orientation):
            return code
        if isinstance(code, bool) or code not in (1, -1):
            raise InvalidOrientationCodeError(
                f"Orientation code must be 1 (forward) or -1 (reverse), got {code!r}"
            )
        return cls(int(code))

    @property
    def is_reverse(self) -> bool:
        return self is Orientation.REVERSE


class LocusType(Enum):
    """dbSNP locus type, keyed by its ``loc_type`` code."""

    INSERTION = 1
    SNP = 2
    DELETION = 3
    RANGE_INSERTION = 4
    RANGE_SUBSTITUTION = 5
    RANGE_DELETION = 6

    @classmethod
    def from_code(cls, code: Any) -> LocusType:
        if isinstance(code, LocusType):
            return code
        try:
            return cls(int(code))
        except (TypeError, ValueError):
            raise InvalidLocusTypeCodeError(f"Unknown locus type code: {code!r}") from None

    @property
    def category(self) -> str:
        """Coarse variant class: substitution, insertion, deletion or other."""

        return _LOCUS_CATEGORIES[self]


_LOCUS_CATEGORIES: dict[LocusType, str] = {
    LocusType.SNP: "substitution",
    LocusType.INSERTION: "insertion",
    LocusType.DELETION: "deletion",
    LocusType.RANGE_INSERTION: "other",
    LocusType.RANGE_SUBSTITUTION: "other",
    LocusType.RANGE_DELETION: "other",
}


def _check_coordinate(label: str, value: int | None) -> None:
    if value is not None and value < 0:
        raise InvalidCoordinateError(f"{label} must be a non-negative number, got {value}")


@dataclass(frozen=True)
class GenomicInterval:
    """Region in a named sequence (contig or chromosome)."""

    sequence_name: str
    start: int | None = None
    end: int | None = None

    def __post_init__(self) -> None:
        _check_coordinate(f"{self.sequence_name} start", self.start)
        _check_coordinate(f"{self.sequence_name} end", self.end)

    @classmethod
    def from_parts(
        cls,
        sequence_name: str | None,
        start: int | None,
        end: int | None,
    ) -> GenomicInterval | None:
        """Build an interval, or None when the sequence is unknown.

        A missing name happens for chromosomes when the contig has no
        chromosome mapping; coordinates are still validated.
        """

        if sequence_name is None:
            _check_coordinate("start", start)
            _check_coordinate("end", end)
            return None
        return cls(sequence_name=sequence_name, start=start, end=end)

    def __str__(self) -> str:
        if self.start is None:
            return self.sequence_name
        if self.end is None:
            return f"{self.sequence_name}:{self.start}"
        return f"{self.sequence_name}:{self.start}-{self.end}"


@dataclass(frozen=True)
class HgvsAnnotation:
    """Reference allele, coordinates and orientation taken from an HGVS table."""

    reference: str
    string: str
    start: int
    stop: int | None
    orientation: Orientation

    def __post_init__(self) -> None:
        _check_coordinate("HGVS start", self.start)
        _check_coordinate("HGVS stop", self.stop)

    @classmethod
    def from_parts(
        cls,
        reference: str | None,
        string: str | None,
        start: int | None,
        stop: int | None,
        orientation_code: Any,
    ) -> HgvsAnnotation | None:
        """Return an annotation only when reference, string and start are all known."""

        if reference is None or string is None or start is None:
            return None
        return cls(
            reference=reference,
            string=string,
            start=start,
            stop=stop,
            orientation=Orientation.from_code(orientation_code),
        )


@dataclass(frozen=True)
class SubmissionRow:
    """One raw row of the legacy sub-SNP query.

    A submission with several HGVS annotations spans several rows; all of them
    repeat the core fields.
    """

    ss_id: int
    rs_id: int | None
    subsnp_orientation: int
    snp_orientation: int
    contig_orientation: int
    contig_name: str | None
    contig_start: int | None
    contig_end: int | None
    chromosome: str | None
    chromosome_start: int | None
    chromosome_end: int | None
    locus_type: int
    hgvs_c_reference: str | None = None
    hgvs_c_string: str | None = None
    hgvs_c_start: int | None = None
    hgvs_c_stop: int | None = None
    hgvs_c_orientation: int | None = None
    hgvs_t_reference: str | None = None
    hgvs_t_string: str | None = None
    hgvs_t_start: int | None = None
    hgvs_t_stop: int | None = None
    hgvs_t_orientation: int | None = None
    alternate: str | None = None
    alleles: str | None = None
    batch: str | None = None

    def core_fields(self) -> tuple[Any, ...]:
        """Fields that every row of the same submission must agree on."""

        return (
            self.ss_id,
            self.rs_id,
            self.subsnp_orientation,
            self.snp_orientation,
            self.contig_orientation,
            self.contig_name,
            self.contig_start,
            self.contig_end,
            self.chromosome,
            self.chromosome_start,
            self.chromosome_end,
            self.locus_type,
            self.alternate,
            self.alleles,
            self.batch,
        )

    def validate(self) -> None:
        """Raise the construction error this row would cause, if any.

        Covers every orientation code, the locus type, every coordinate and
        both annotation bundles, whether or not the row ends up supplying them
        to the assembled record.
        """

        for code in (self.subsnp_orientation, self.snp_orientation, self.contig_orientation):
            Orientation.from_code(code)
        LocusType.from_code(self.locus_type)
        GenomicInterval.from_parts(self.contig_name, self.contig_start, self.contig_end)
        GenomicInterval.from_parts(self.chromosome, self.chromosome_start, self.chromosome_end)
        _check_coordinate("HGVS c. start", self.hgvs_c_start)
        _check_coordinate("HGVS c. stop", self.hgvs_c_stop)
        _check_coordinate("HGVS t. start", self.hgvs_t_start)
        _check_coordinate("HGVS t. stop", self.hgvs_t_stop)
        self.hgvs_c()
        self.hgvs_t()

    def hgvs_c(self) -> HgvsAnnotation | None:
        return HgvsAnnotation.from_parts(
            self.hgvs_c_reference,
            self.hgvs_c_string,
            self.hgvs_c_start,
            self.hgvs_c_stop,
            self.hgvs_c_orientation,
        )

    def hgvs_t(self) -> HgvsAnnotation | None:
        return HgvsAnnotation.from_parts(
            self.hgvs_t_reference,
            self.hgvs_t_string,
            self.hgvs_t_start,
            self.hgvs_t_stop,
            self.hgvs_t_orientation,
        )


@dataclass(frozen=True)
class SubmissionRecord:
    """Canonical sub-SNP record assembled from one or more rows.

    Records are immutable; forward-strand values are recomputed on each call
    and depend only on the stored fields.
    """

    ss_id: int
    rs_id: int | None
    subsnp_orientation: Orientation
    snp_orientation: Orientation
    contig_orientation: Orientation
    locus_type: LocusType
    contig_region: GenomicInterval | None
    chromosome_region: GenomicInterval | None = None
    hgvs_c: HgvsAnnotation | None = None
    hgvs_t: HgvsAnnotation | None = None
    alternate: str | None = None
    alleles: str | None = None
    batch: str | None = None

    @classmethod
    def from_row(
        cls,
        row: SubmissionRow,
        *,
        hgvs_c: HgvsAnnotation | None = None,
        hgvs_t: HgvsAnnotation | None = None,
    ) -> SubmissionRecord:
        """Build a record from a row's core fields and already selected annotations."""

        return cls(
            ss_id=row.ss_id,
            rs_id=row.rs_id,
            subsnp_orientation=Orientation.from_code(row.subsnp_orientation),
            snp_orientation=Orientation.from_code(row.snp_orientation),
            contig_orientation=Orientation.from_code(row.contig_orientation),
            locus_type=LocusType.from_code(row.locus_type),
            contig_region=GenomicInterval.from_parts(
                row.contig_name, row.contig_start, row.contig_end
            ),
            chromosome_region=GenomicInterval.from_parts(
                row.chromosome, row.chromosome_start, row.chromosome_end
            ),
            hgvs_c=hgvs_c,
            hgvs_t=hgvs_t,
            alternate=row.alternate,
            alleles=row.alleles,
            batch=row.batch,
        )

    def reference_forward_strand(self) -> str:
        return orientation.reference_forward_strand(self)

    def alternate_forward_strand(self) -> str:
        return orientation.alternate_forward_strand(self)

    def alleles_forward_strand(self) -> str:
        return orientation.alleles_forward_strand(self)

    def secondary_alternates_forward_strand(self) -> list[str]:
        return orientation.secondary_alternates_forward_strand(self)

    def to_row(self) -> dict[str, Any]:
        """Serialize the stored fields into a plain dict for downstream mappers."""

        return {
            "ss_id": self.ss_id,
            "rs_id": self.rs_id,
            "subsnp_orientation": self.subsnp_orientation.value,
            "snp_orientation": self.snp_orientation.value,
            "contig_orientation": self.contig_orientation.value,
            "locus_type": self.locus_type.name,
            "contig_region": str(self.contig_region) if self.contig_region else None,
            "chromosome_region": (
                str(self.chromosome_region) if self.chromosome_region else None
            ),
            "hgvs_c": self.hgvs_c.string if self.hgvs_c else None,
            "hgvs_t": self.hgvs_t.string if self.hgvs_t else None,
            "alternate": self.alternate,
            "alleles": self.alleles,
            "batch": self.batch,
        }
