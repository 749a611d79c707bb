"""Shared conversions for tabular sub-SNP row sources."""

from __future__ import annotations

from typing import Any, Mapping

import pandas as pd

from snpimport.models import SubmissionRow

ROW_COLUMNS: tuple[str, ...] = (
    "ss_id",
    "rs_id",
    "subsnp_orientation",
    "snp_orientation",
    "contig_orientation",
    "contig_name",
    "contig_start",
    "contig_end",
    "chromosome",
    "chromosome_start",
    "chromosome_end",
    "locus_type",
    "hgvs_c_reference",
    "hgvs_c_string",
    "hgvs_c_start",
    "hgvs_c_stop",
    "hgvs_c_orientation",
    "hgvs_t_reference",
    "hgvs_t_string",
    "hgvs_t_start",
    "hgvs_t_stop",
    "hgvs_t_orientation",
    "alternate",
    "alleles",
    "batch",
)

FILTER_COLUMNS: tuple[str, ...] = ("assembly", "assembly_type")

_NULL_MARKERS = {"nan", "none", "null", "na", "\\n"}


class TabularRowMixin:
    """Convert loosely typed mappings (CSV or SQL rows) into ``SubmissionRow``."""

    @staticmethod
    def _is_missing(value: Any) -> bool:
        if value is None:
            return True
        try:
            return bool(pd.isna(value))
        except (TypeError, ValueError):
            return False

    @staticmethod
    def _to_string(value: Any) -> str | None:
        """Return text as stored, keeping whitespace-only and dash alleles intact."""

        if TabularRowMixin._is_missing(value):
            return None

        text = str(value)
        if text.strip().lower() in _NULL_MARKERS:
            return None
        return text

    @staticmethod
    def _to_label(value: Any) -> str | None:
        text = TabularRowMixin._to_string(value)
        if text is None:
            return None
        cleaned = text.strip()
        return cleaned or None

    @staticmethod
    def _to_int(value: Any) -> int | None:
        if TabularRowMixin._is_missing(value):
            return None
        if isinstance(value, str):
            cleaned = value.strip()
            if not cleaned or cleaned.lower() in _NULL_MARKERS:
                return None
            value = cleaned

        try:
            as_float = float(value)
        except (TypeError, ValueError):
            raise ValueError(f"Expected an integer, got {value!r}") from None
        if not as_float.is_integer():
            raise ValueError(f"Expected an integer, got {value!r}")
        return int(as_float)

    def _build_row(self, row: Mapping[str, Any]) -> SubmissionRow:
        ss_id = self._to_int(row.get("ss_id"))
        if ss_id is None:
            raise ValueError(f"Row without ss_id: {dict(row)!r}")

        return SubmissionRow(
            ss_id=ss_id,
            rs_id=self._to_int(row.get("rs_id")),
            subsnp_orientation=self._to_int(row.get("subsnp_orientation")),
            snp_orientation=self._to_int(row.get("snp_orientation")),
            contig_orientation=self._to_int(row.get("contig_orientation")),
            contig_name=self._to_label(row.get("contig_name")),
            contig_start=self._to_int(row.get("contig_start")),
            contig_end=self._to_int(row.get("contig_end")),
            chromosome=self._to_label(row.get("chromosome")),
            chromosome_start=self._to_int(row.get("chromosome_start")),
            chromosome_end=self._to_int(row.get("chromosome_end")),
            locus_type=self._to_int(row.get("locus_type")),
            hgvs_c_reference=self._to_string(row.get("hgvs_c_reference")),
            hgvs_c_string=self._to_label(row.get("hgvs_c_string")),
            hgvs_c_start=self._to_int(row.get("hgvs_c_start")),
            hgvs_c_stop=self._to_int(row.get("hgvs_c_stop")),
            hgvs_c_orientation=self._to_int(row.get("hgvs_c_orientation")),
            hgvs_t_reference=self._to_string(row.get("hgvs_t_reference")),
            hgvs_t_string=self._to_label(row.get("hgvs_t_string")),
            hgvs_t_start=self._to_int(row.get("hgvs_t_start")),
            hgvs_t_stop=self._to_int(row.get("hgvs_t_stop")),
            hgvs_t_orientation=self._to_int(row.get("hgvs_t_orientation")),
            alternate=self._to_string(row.get("alternate")),
            alleles=self._to_string(row.get("alleles")),
            batch=self._to_label(row.get("batch")),
        )

    @staticmethod
    def _matches_assembly(
        row: Mapping[str, Any],
        assembly: str | None,
        assembly_types: set[str] | None,
    ) -> bool:
        if assembly is not None and TabularRowMixin._to_label(row.get("assembly")) != assembly:
            return False
        if assembly_types is not None:
            return TabularRowMixin._to_label(row.get("assembly_type")) in assembly_types
        return True
