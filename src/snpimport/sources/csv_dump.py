"""Row source reading a CSV export of the legacy sub-SNP query."""

from __future__ import annotations

import logging
from collections import deque
from collections.abc import Iterable, Iterator, Sequence
from pathlib import Path

import pandas as pd

from snpimport.models import SubmissionRow
from snpimport.sources.base import RowSource
from snpimport.sources.common import FILTER_COLUMNS, ROW_COLUMNS, TabularRowMixin

logger = logging.getLogger(__name__)


class CsvRowSource(RowSource, TabularRowMixin):
    """Page rows out of a (possibly compressed) CSV dump ordered by ``ss_id``.

    When ``assembly``/``assembly_types`` are given, rows for other assemblies
    are skipped. Pages are refilled across CSV chunks, so filtering never
    produces an empty page before the file is exhausted.
    """

    name = "csv_dump"
    filters_by_assembly = True

    def __init__(
        self,
        *,
        csv_path: str | Path,
        assembly: str | None = None,
        assembly_types: Iterable[str] | None = None,
        chunksize: int = 100_000,
        sep: str = ",",
    ) -> None:
        self.csv_path = Path(csv_path)
        self.assembly = assembly
        self.assembly_types = set(assembly_types) if assembly_types is not None else None
        self.chunksize = chunksize
        self.sep = sep
        self._rows: Iterator[SubmissionRow] | None = None
        self._buffer: deque[SubmissionRow] = deque()
        self._exhausted = False

    def next_page(self, page_size: int) -> Sequence[SubmissionRow]:
        if self._rows is None:
            self._rows = self._iter_rows()

        while len(self._buffer) < page_size and not self._exhausted:
            try:
                self._buffer.append(next(self._rows))
            except StopIteration:
                self._exhausted = True

        count = min(page_size, len(self._buffer))
        return [self._buffer.popleft() for _ in range(count)]

    def close(self) -> None:
        self._exhausted = True
        self._buffer.clear()
        if self._rows is not None:
            # Closing the generator exits the reader's ``with`` block.
            self._rows.close()

    def _iter_rows(self) -> Iterator[SubmissionRow]:
        wanted = set(ROW_COLUMNS) | set(FILTER_COLUMNS)
        reader = pd.read_csv(
            self.csv_path,
            usecols=lambda column: column in wanted,
            chunksize=self.chunksize,
            compression="infer",
            sep=self.sep,
            dtype=str,
            keep_default_na=False,
            na_values=[""],
        )

        skipped = 0
        with reader:
            for frame in reader:
                for row in frame.to_dict(orient="records"):
                    if not self._matches_assembly(row, self.assembly, self.assembly_types):
                        skipped += 1
                        continue
                    yield self._build_row(row)

        if skipped:
            logger.info("Skipped %d rows outside %s in %s", skipped, self.assembly, self.csv_path)
