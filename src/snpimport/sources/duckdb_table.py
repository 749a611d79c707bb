"""Row source paging a legacy sub-SNP table stored in DuckDB."""

from __future__ import annotations

import logging
import re
from collections.abc import Iterable, Sequence
from pathlib import Path
from typing import Any

from snpimport.models import SubmissionRow
from snpimport.sources.base import RowSource
from snpimport.sources.common import ROW_COLUMNS, TabularRowMixin

try:
    import duckdb
except ImportError:  # pragma: no cover - exercised only when dependency missing
    duckdb = None

logger = logging.getLogger(__name__)

_TABLE_RE = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")


class DuckDBRowSource(RowSource, TabularRowMixin):
    """Page rows with ``ORDER BY ss_id, rowid LIMIT/OFFSET`` from a DuckDB table.

    The table carries the ``ROW_COLUMNS`` plus ``assembly`` and
    ``assembly_type``, which restrict rows to the target assembly. Rows of one
    submission keep their insertion order across pages. Pass an
    open ``connection`` or a ``db_path``; connections opened here are closed
    once the table is exhausted or the source is closed, whichever comes first.
    """

    name = "duckdb"
    filters_by_assembly = True

    def __init__(
        self,
        *,
        assembly: str,
        assembly_types: Iterable[str],
        table_name: str = "subsnp_core_fields",
        db_path: str | Path | None = None,
        connection: Any | None = None,
    ) -> None:
        if not _TABLE_RE.match(table_name):
            raise ValueError(f"Unsafe table name: {table_name}")
        if connection is None and db_path is None:
            raise ValueError("DuckDBRowSource needs either a connection or a db_path")

        self.assembly = assembly
        self.assembly_types = tuple(assembly_types)
        if not self.assembly_types:
            raise ValueError("At least one assembly type is required")
        self.table_name = table_name
        self.db_path = Path(db_path) if db_path is not None else None
        self._connection = connection
        self._owns_connection = connection is None
        self._offset = 0
        self._exhausted = False

    def next_page(self, page_size: int) -> Sequence[SubmissionRow]:
        if self._exhausted:
            return []

        connection = self._connect()
        placeholders = ", ".join("?" for _ in self.assembly_types)
        query = (
            f"SELECT {', '.join(ROW_COLUMNS)} FROM {self.table_name} "
            f"WHERE assembly = ? AND assembly_type IN ({placeholders}) "
            "ORDER BY ss_id, rowid LIMIT ? OFFSET ?"
        )
        params = [self.assembly, *self.assembly_types, page_size, self._offset]
        frame = connection.execute(query, params).fetchdf()

        rows = [self._build_row(row) for row in frame.to_dict(orient="records")]
        self._offset += len(rows)
        logger.debug("Fetched %d rows from %s at offset %d", len(rows), self.table_name, self._offset)

        if not rows:
            self.close()
        return rows

    def close(self) -> None:
        self._exhausted = True
        if self._owns_connection and self._connection is not None:
            self._connection.close()
            self._connection = None

    def _connect(self) -> Any:
        if self._connection is not None:
            return self._connection

        if duckdb is None:
            raise RuntimeError(
                "duckdb is not installed. Add it to requirements before reading DuckDB tables."
            )

        self._connection = duckdb.connect(str(self.db_path), read_only=True)
        return self._connection
