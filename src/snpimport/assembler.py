"""Assemble paged sub-SNP rows into one record per submission."""

from __future__ import annotations

import logging
from collections.abc import Iterator
from dataclasses import dataclass, field

from snpimport.config import check_page_size
from snpimport.exceptions import GroupOrderingError
from snpimport.models import HgvsAnnotation, SubmissionRecord, SubmissionRow
from snpimport.sources.base import RowSource

logger = logging.getLogger(__name__)


@dataclass
class _PendingGroup:
    """Rows seen so far for the submission currently being assembled."""

    ss_id: int
    first_row: SubmissionRow
    row_count: int = 1
    hgvs_c: HgvsAnnotation | None = None
    hgvs_t: HgvsAnnotation | None = None

    @classmethod
    def start(cls, row: SubmissionRow) -> _PendingGroup:
        return cls(ss_id=row.ss_id, first_row=row, hgvs_c=row.hgvs_c(), hgvs_t=row.hgvs_t())

    def add(self, row: SubmissionRow) -> None:
        if row.core_fields() != self.first_row.core_fields():
            logger.warning(
                "Rows of ss%s disagree on core fields; keeping the first row's values",
                self.ss_id,
            )

        # First annotation of each kind wins; later rows only fill gaps.
        if self.hgvs_c is None:
            self.hgvs_c = row.hgvs_c()
        if self.hgvs_t is None:
            self.hgvs_t = row.hgvs_t()
        self.row_count += 1

    def close(self) -> SubmissionRecord:
        return SubmissionRecord.from_row(self.first_row, hgvs_c=self.hgvs_c, hgvs_t=self.hgvs_t)


@dataclass
class SubmissionAssembler:
    """Pull pages from a row source and merge rows that share a submission id.

    Rows must arrive ordered ascending by ``ss_id``. A group that straddles a
    page boundary is kept open until a row with a different id (or the end of
    input) is seen. Every row of a page is validated before the page is
    grouped, so a construction error aborts the pass at the page that carries
    it. The assembler is single-pass: iterate it once.
    """

    row_source: RowSource
    page_size: int
    pages_read: int = field(default=0, init=False)
    rows_read: int = field(default=0, init=False)
    records_emitted: int = field(default=0, init=False)

    def __post_init__(self) -> None:
        check_page_size(self.page_size)

    def __iter__(self) -> Iterator[SubmissionRecord]:
        pending: _PendingGroup | None = None

        while True:
            page = self.row_source.next_page(self.page_size)
            if not page:
                break

            self.pages_read += 1
            self.rows_read += len(page)
            logger.debug("Page %d: %d rows", self.pages_read, len(page))

            # A bad row rejects its whole page before any of it is grouped.
            for row in page:
                row.validate()

            for row in page:
                if pending is None:
                    pending = _PendingGroup.start(row)
                    continue

                if row.ss_id == pending.ss_id:
                    pending.add(row)
                    continue

                if row.ss_id < pending.ss_id:
                    raise GroupOrderingError(
                        f"ss{row.ss_id} arrived after ss{pending.ss_id}; rows must be "
                        "ordered ascending by submission id and each group must be contiguous"
                    )

                yield self._emit(pending)
                pending = _PendingGroup.start(row)

        if pending is not None:
            yield self._emit(pending)

    def _emit(self, group: _PendingGroup) -> SubmissionRecord:
        record = group.close()
        self.records_emitted += 1
        logger.debug("Closed ss%s from %d rows", group.ss_id, group.row_count)
        return record


def assemble(row_source: RowSource, page_size: int) -> Iterator[SubmissionRecord]:
    """Lazily yield one ``SubmissionRecord`` per submission id in ``row_source``."""

    return iter(SubmissionAssembler(row_source=row_source, page_size=page_size))
