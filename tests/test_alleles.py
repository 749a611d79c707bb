import sys
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(ROOT / "src"))

from snpimport.alleles import (  # noqa: E402
    join_alleles,
    normalize_allele,
    reverse_complement,
    reverse_complement_alleles,
    split_alleles,
)


def test_split_keeps_every_position_and_normalizes_placeholders() -> None:
    assert split_alleles("T/A") == ["T", "A"]
    assert split_alleles("-/CCCT") == ["", "CCCT"]
    assert split_alleles("//") == ["", "", ""]
    assert split_alleles("/- /-/A") == ["", "", "", "A"]
    assert split_alleles("GT / CCCT ") == ["GT", "CCCT"]
    assert split_alleles(" / / ") == ["", "", ""]


def test_split_of_missing_allele_list_is_empty() -> None:
    assert split_alleles(None) == []


@pytest.mark.parametrize(
    ("token", "expected"),
    [("-", ""), (" - ", ""), ("", ""), ("   ", ""), (None, ""), (" TA ", "TA")],
)
def test_normalize_allele(token, expected) -> None:
    assert normalize_allele(token) == expected


@pytest.mark.parametrize(
    ("token", "expected"),
    [
        ("A", "T"),
        ("TAGA", "TCTA"),
        ("CCCT", "AGGG"),
        ("acgT", "Acgt"),
        ("ANC", "GNT"),
        ("", ""),
    ],
)
def test_reverse_complement(token, expected) -> None:
    assert reverse_complement(token) == expected


@pytest.mark.parametrize("token", ["GATTACA", "ggaCCt", "ANRYT", "", "T"])
def test_reverse_complement_round_trip(token) -> None:
    assert reverse_complement(reverse_complement(token)) == token


def test_reverse_complement_of_placeholder_is_empty_not_dash() -> None:
    assert reverse_complement(normalize_allele("-")) == ""


def test_reverse_complement_alleles_reads_list_from_other_strand() -> None:
    assert reverse_complement_alleles(["G", "A"]) == ["T", "C"]
    assert reverse_complement_alleles(["GGA", "CCCT"]) == ["AGGG", "TCC"]
    assert reverse_complement_alleles(["", "CCCT"]) == ["AGGG", ""]
    assert len(reverse_complement_alleles(["", "", "", "A"])) == 4


def test_join_alleles() -> None:
    assert join_alleles(["", "CCCT"]) == "/CCCT"
    assert join_alleles(["", "", ""]) == "//"
