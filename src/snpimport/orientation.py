"""Resolve sub-SNP alleles onto the forward strand of the reference genome.

A submission's alleles are reported relative to the submitter's strand. Three
independent flags relate that strand to the genome: the sub-SNP orientation
(submission vs. cluster), the SNP orientation (cluster vs. contig) and the
contig orientation (contig vs. chromosome). An odd number of reverse flags
means the alleles must be read from the opposite strand.

Reference and alternate alleles come from the HGVS tables instead, so they are
anchored on the orientation of whichever HGVS annotation is defined.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING

from snpimport.alleles import (
    join_alleles,
    normalize_allele,
    reverse_complement,
    reverse_complement_alleles,
    split_alleles,
)
from snpimport.exceptions import UndefinedHgvsAlleleError

if TYPE_CHECKING:
    from snpimport.models import HgvsAnnotation, SubmissionRecord


class AnnotationKind(str, Enum):
    """Which HGVS table anchors the reference and alternate alleles."""

    HGVS_C = "hgvs_c"
    HGVS_T = "hgvs_t"


@dataclass(frozen=True)
class AnnotationAnchor:
    """The HGVS annotation chosen for a record, with its composed strand flip."""

    kind: AnnotationKind
    annotation: HgvsAnnotation
    flip: bool


def select_anchor(record: SubmissionRecord) -> AnnotationAnchor | None:
    """Pick the annotation used for reference/alternate resolution.

    ``hgvs_c`` (chromosome mapping) always wins over ``hgvs_t`` (contig
    mapping) when both are defined; their orientations are never compared.
    """

    subsnp_reverse = record.subsnp_orientation.is_reverse

    if record.hgvs_c is not None:
        return AnnotationAnchor(
            kind=AnnotationKind.HGVS_C,
            annotation=record.hgvs_c,
            flip=subsnp_reverse
            ^ record.snp_orientation.is_reverse
            ^ record.hgvs_c.orientation.is_reverse,
        )

    if record.hgvs_t is not None:
        return AnnotationAnchor(
            kind=AnnotationKind.HGVS_T,
            annotation=record.hgvs_t,
            flip=subsnp_reverse
            ^ record.contig_orientation.is_reverse
            ^ record.hgvs_t.orientation.is_reverse,
        )

    return None


def _require_anchor(record: SubmissionRecord, allele: str) -> AnnotationAnchor:
    anchor = select_anchor(record)
    if anchor is None:
        raise UndefinedHgvsAlleleError(record.ss_id, allele)
    return anchor


def _oriented(allele: str, flip: bool) -> str:
    return reverse_complement(allele) if flip else allele


def alleles_flip(record: SubmissionRecord) -> bool:
    return (
        record.subsnp_orientation.is_reverse
        ^ record.snp_orientation.is_reverse
        ^ record.contig_orientation.is_reverse
    )


def reference_forward_strand(record: SubmissionRecord) -> str:
    anchor = _require_anchor(record, "reference")
    return _oriented(normalize_allele(anchor.annotation.reference), anchor.flip)


def alternate_forward_strand(record: SubmissionRecord) -> str:
    anchor = _require_anchor(record, "alternate")
    return _oriented(normalize_allele(record.alternate), anchor.flip)


def _forward_tokens(record: SubmissionRecord) -> list[str]:
    tokens = split_alleles(record.alleles)
    if alleles_flip(record):
        return reverse_complement_alleles(tokens)
    return tokens


def alleles_forward_strand(record: SubmissionRecord) -> str:
    """Return the full allele list as read on the forward strand.

    Only the three base orientation flags are used, so this resolves even
    when no HGVS annotation is available.
    """

    return join_alleles(_forward_tokens(record))


def secondary_alternates_forward_strand(record: SubmissionRecord) -> list[str]:
    """Return forward-strand alleles other than the primary reference and alternate.

    The primary reference is the anchoring annotation's stored reference, or
    the first submitted allele when no annotation is defined. The stored
    alternate is excluded only when one was recorded.
    """

    anchor = select_anchor(record)
    if anchor is not None:
        primary = {normalize_allele(anchor.annotation.reference)}
    else:
        primary = set(split_alleles(record.alleles)[:1])
    if record.alternate is not None:
        primary.add(normalize_allele(record.alternate))

    return [token for token in _forward_tokens(record) if token not in primary]
