"""Row source backed by rows already held in memory."""

from __future__ import annotations

from collections.abc import Iterable, Mapping, Sequence
from typing import Any

from snpimport.models import SubmissionRow
from snpimport.sources.base import RowSource
from snpimport.sources.common import TabularRowMixin


class InMemoryRowSource(RowSource, TabularRowMixin):
    """Serve pre-sorted rows page by page.

    Rows may be ``SubmissionRow`` instances or plain mappings using the
    column names in ``ROW_COLUMNS``.
    """

    name = "memory"

    def __init__(self, *, rows: Iterable[SubmissionRow | Mapping[str, Any]]) -> None:
        self.rows: list[SubmissionRow] = [
            row if isinstance(row, SubmissionRow) else self._build_row(row) for row in rows
        ]
        self._offset = 0

    def next_page(self, page_size: int) -> Sequence[SubmissionRow]:
        page = self.rows[self._offset : self._offset + page_size]
        self._offset += len(page)
        return page

    def close(self) -> None:
        self._offset = len(self.rows)
