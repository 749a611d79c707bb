"""String helpers for slash-delimited dbSNP allele lists.

dbSNP stores the alleles of a submission as a single string such as
``"T/A"`` or ``"-/CCCT"``, where a dash (or an empty slot) stands for the
missing bases of an insertion or deletion. Placeholders are normalized to the
empty string.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence

ALLELE_SEPARATOR = "/"
PLACEHOLDER = "-"

_COMPLEMENTS = str.maketrans("ACGTacgt", "TGCAtgca")


def normalize_allele(token: str | None) -> str:
    """Trim an allele and map the insertion/deletion placeholder to ``""``."""

    if token is None:
        return ""
    cleaned = token.strip()
    if cleaned == PLACEHOLDER:
        return ""
    return cleaned


def split_alleles(raw: str | None) -> list[str]:
    """Split an allele list, keeping empty positions."""

    if raw is None:
        return []
    return [normalize_allele(token) for token in raw.split(ALLELE_SEPARATOR)]


def join_alleles(tokens: Iterable[str]) -> str:
    return ALLELE_SEPARATOR.join(tokens)


def reverse_complement(token: str) -> str:
    """Return the reverse complement of a DNA token.

    Case is kept per base and characters outside ACGT (``N``, IUPAC codes)
    are copied through unchanged.
    """

    if not token:
        return token
    return token.translate(_COMPLEMENTS)[::-1]


def reverse_complement_alleles(tokens: Sequence[str]) -> list[str]:
    """Read an allele list from the opposite strand.

    Reading the other strand reverses the whole list string, so each allele is
    reverse-complemented and their order is reversed: ``G/A`` becomes ``T/C``.
    """

    return [reverse_complement(token) for token in reversed(tokens)]
