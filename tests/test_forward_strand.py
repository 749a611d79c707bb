import sys
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(ROOT / "src"))

from snpimport import (  # noqa: E402
    AnnotationKind,
    GenomicInterval,
    HgvsAnnotation,
    LocusType,
    Orientation,
    SubmissionRecord,
    UndefinedHgvsAlleleError,
    select_anchor,
)

F = Orientation.FORWARD
R = Orientation.REVERSE


def _hgvs(reference, string="NC_006091.4:g.91223961T>A", orientation=F, start=91223961):
    return HgvsAnnotation(
        reference=reference,
        string=string,
        start=start,
        stop=start,
        orientation=orientation,
    )


def _record(
    *,
    alleles,
    alternate=None,
    subsnp=F,
    snp=F,
    contig=F,
    hgvs_c=None,
    hgvs_t=None,
    locus_type=LocusType.SNP,
) -> SubmissionRecord:
    return SubmissionRecord(
        ss_id=26201546,
        rs_id=13677177,
        subsnp_orientation=subsnp,
        snp_orientation=snp,
        contig_orientation=contig,
        locus_type=locus_type,
        contig_region=GenomicInterval("NT_455866.1", 1766472, 1766472),
        chromosome_region=GenomicInterval("4", 91223961, 91223961),
        hgvs_c=hgvs_c,
        hgvs_t=hgvs_t,
        alternate=alternate,
        alleles=alleles,
        batch="batch",
    )


def _with_reference(reference, alternate, alleles, subsnp=F, snp=F, contig=F) -> SubmissionRecord:
    return _record(
        alleles=alleles,
        alternate=alternate,
        subsnp=subsnp,
        snp=snp,
        contig=contig,
        hgvs_c=_hgvs(reference, string=""),
        hgvs_t=_hgvs(reference, string=""),
    )


def test_snp_alleles_in_forward_strand_do_not_change() -> None:
    record = _record(
        alleles="T/A",
        alternate="A",
        hgvs_c=_hgvs("T"),
        hgvs_t=_hgvs("T", "NT_455866.1:g.1766472T>A", start=1766472),
    )

    assert record.reference_forward_strand() == "T"
    assert record.alternate_forward_strand() == "A"
    assert record.alleles_forward_strand() == "T/A"


@pytest.mark.parametrize(
    ("reference", "alternate", "expected"),
    [
        ("T", "TAGA", ("T", "TAGA")),
        ("-", "TA", ("", "TA")),
    ],
)
def test_insertion_alleles_in_forward_strand(reference, alternate, expected) -> None:
    record = _record(
        alleles=f"{reference}/{alternate}",
        alternate=alternate,
        locus_type=LocusType.INSERTION,
        hgvs_c=_hgvs(reference, "NC_006091.4:g.91223962insAGA"),
        hgvs_t=_hgvs(reference, "NT_455866.1:g.1766473insAGA", start=1766472),
    )

    assert (record.reference_forward_strand(), record.alternate_forward_strand()) == expected


@pytest.mark.parametrize(
    ("reference", "alternate", "expected"),
    [
        ("TAGA", "T", ("TAGA", "T")),
        ("TA", "-", ("TA", "")),
        ("TA", None, ("TA", "")),
    ],
)
def test_deletion_alleles_in_forward_strand(reference, alternate, expected) -> None:
    record = _record(
        alleles="TA/-",
        alternate=alternate,
        locus_type=LocusType.DELETION,
        hgvs_c=_hgvs(reference, "NC_006091.4:g.91223961delTA"),
        hgvs_t=_hgvs(reference, "NT_455866.1:g.1766472delTA", start=1766472),
    )

    assert (record.reference_forward_strand(), record.alternate_forward_strand()) == expected


def test_missing_hgvs_c_falls_back_to_hgvs_t() -> None:
    record = _record(
        alleles="TAGA/T",
        alternate="T",
        locus_type=LocusType.DELETION,
        hgvs_t=_hgvs("TAGA", "NT_455866.1:g.1766473delAGA", start=1766472),
    )

    assert select_anchor(record).kind is AnnotationKind.HGVS_T
    assert record.reference_forward_strand() == "TAGA"
    assert record.alternate_forward_strand() == "T"


def test_reverse_hgvs_c_is_reverse_complemented() -> None:
    record = _record(
        alleles="T/TAGA",
        alternate="TAGA",
        locus_type=LocusType.INSERTION,
        hgvs_c=_hgvs("T", "NC_006091.4:g.91223962insAGA", orientation=R),
        hgvs_t=_hgvs("T", "NT_455866.1:g.1766473insAGA", start=1766472),
    )

    assert record.reference_forward_strand() == "A"
    assert record.alternate_forward_strand() == "TCTA"


def test_reverse_hgvs_c_on_reverse_contig_insertion() -> None:
    record = _record(
        alleles="-/G",
        alternate="G",
        contig=R,
        locus_type=LocusType.INSERTION,
        hgvs_c=_hgvs("-", "NC_006112.3:g.88998_88999insC", orientation=R, start=88997),
        hgvs_t=_hgvs("-", "NT_456010.1:g.107453_107454insG", start=107452),
    )

    assert record.reference_forward_strand() == ""
    assert record.alternate_forward_strand() == "C"


def test_hgvs_c_wins_over_conflicting_hgvs_t() -> None:
    record = _record(
        alleles="T/TAGA",
        alternate="TAGA",
        hgvs_c=_hgvs("T"),
        hgvs_t=_hgvs("T", "NT_455866.1:g.1766473insAGA", orientation=R, start=1766472),
    )

    assert select_anchor(record).kind is AnnotationKind.HGVS_C
    assert record.reference_forward_strand() == "T"
    assert record.alternate_forward_strand() == "TAGA"


def test_reverse_hgvs_t_without_hgvs_c_is_reverse_complemented() -> None:
    record = _record(
        alleles="T/TAGA",
        alternate="TAGA",
        hgvs_t=_hgvs("T", "NT_455866.1:g.1766473insAGA", orientation=R, start=1766472),
    )

    assert record.reference_forward_strand() == "A"
    assert record.alternate_forward_strand() == "TCTA"


def test_sub_snp_orientation_flips_reference_and_alternate() -> None:
    forward = _record(alleles="-/CCCT", alternate="CCCT", hgvs_c=_hgvs("-"))
    reverse = _record(alleles="-/CCCT", alternate="CCCT", subsnp=R, hgvs_c=_hgvs("-"))

    assert (forward.reference_forward_strand(), forward.alternate_forward_strand()) == ("", "CCCT")
    assert (reverse.reference_forward_strand(), reverse.alternate_forward_strand()) == ("", "AGGG")


def test_hgvs_t_anchor_composes_contig_orientation() -> None:
    record = _record(
        alleles="T/A",
        alternate="A",
        snp=R,
        contig=R,
        hgvs_t=_hgvs("T", "NT_455866.1:g.1766472T>A", start=1766472),
    )

    anchor = select_anchor(record)
    assert anchor.flip is True
    assert record.reference_forward_strand() == "A"
    assert record.alternate_forward_strand() == "T"


@pytest.mark.parametrize(
    ("subsnp", "snp", "contig"),
    [(R, F, F), (F, R, F), (F, F, R), (R, R, R)],
)
def test_odd_number_of_reverse_flags_changes_alleles(subsnp, snp, contig) -> None:
    record = _record(alleles="G/A", subsnp=subsnp, snp=snp, contig=contig)
    assert record.alleles_forward_strand() == "T/C"


@pytest.mark.parametrize(
    ("subsnp", "snp", "contig"),
    [(F, F, F), (R, R, F), (F, R, R), (R, F, R)],
)
def test_even_number_of_reverse_flags_keeps_alleles(subsnp, snp, contig) -> None:
    record = _record(alleles="T/C", subsnp=subsnp, snp=snp, contig=contig)
    assert record.alleles_forward_strand() == "T/C"


def test_long_alleles_on_reverse_strand() -> None:
    record = _record(alleles="GGA/CCCT", subsnp=R)
    assert record.alleles_forward_strand() == "AGGG/TCC"


@pytest.mark.parametrize(
    ("alleles", "subsnp", "expected"),
    [
        ("-/CCCT", R, "AGGG/"),
        ("-/CCCT", F, "/CCCT"),
        ("-/-/-", F, "//"),
        ("//", F, "//"),
        ("/A/", R, "/T/"),
        ("/- /-/A", R, "T///"),
    ],
)
def test_placeholder_alleles(alleles, subsnp, expected) -> None:
    assert _record(alleles=alleles, subsnp=subsnp).alleles_forward_strand() == expected


@pytest.mark.parametrize(
    ("alleles", "subsnp", "expected"),
    [
        ("GT /CCCT", R, "AGGG/AC"),
        ("GT /CCCT", F, "GT/CCCT"),
        ("GT / CCCT ", F, "GT/CCCT"),
        (" / / ", F, "//"),
        ("/A /", R, "/T/"),
    ],
)
def test_trimmed_alleles(alleles, subsnp, expected) -> None:
    assert _record(alleles=alleles, subsnp=subsnp).alleles_forward_strand() == expected


@pytest.mark.parametrize(
    ("reference", "alternate", "alleles", "subsnp", "expected"),
    [
        ("T", "A", "T/A", F, []),
        ("T", "A", "T/A/C", F, ["C"]),
        ("T", "G", "T/A/C", R, ["A"]),
        ("T", "GGG", "TT/A/CCC/-", R, ["", "AA"]),
        ("T", "GGG", "TT/A/CCC/", R, ["", "AA"]),
    ],
)
def test_secondary_alternates(reference, alternate, alleles, subsnp, expected) -> None:
    record = _with_reference(reference, alternate, alleles, subsnp=subsnp)
    assert record.secondary_alternates_forward_strand() == expected


def test_secondary_alternates_without_hgvs_use_first_submitted_allele() -> None:
    record = _record(alleles="T/A/C", alternate="A")
    assert record.secondary_alternates_forward_strand() == ["C"]


def test_undefined_hgvs_only_fails_reference_and_alternate() -> None:
    record = _record(alleles="T/A", alternate="A")

    with pytest.raises(UndefinedHgvsAlleleError):
        record.reference_forward_strand()
    with pytest.raises(UndefinedHgvsAlleleError):
        record.alternate_forward_strand()

    assert record.alleles_forward_strand() == "T/A"
    assert record.secondary_alternates_forward_strand() == []


def test_forward_strand_accessors_are_repeatable() -> None:
    record = _with_reference("T", "GGG", "TT/A/CCC/-", subsnp=R)

    first = (
        record.secondary_alternates_forward_strand(),
        record.alleles_forward_strand(),
        record.reference_forward_strand(),
        record.alternate_forward_strand(),
    )
    second = (
        record.alleles_forward_strand(),
        record.alternate_forward_strand(),
        record.reference_forward_strand(),
        record.secondary_alternates_forward_strand(),
    )

    assert first == (second[3], second[0], second[2], second[1])
    assert record.alleles == "TT/A/CCC/-"
