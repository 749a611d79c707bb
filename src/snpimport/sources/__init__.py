"""Row sources feeding the sub-SNP assembler."""

from .base import RowSource
from .common import FILTER_COLUMNS, ROW_COLUMNS, TabularRowMixin
from .csv_dump import CsvRowSource
from .duckdb_table import DuckDBRowSource
from .memory import InMemoryRowSource
from .registry import (
    RowSourceRegistry,
    build_default_source_registry,
    load_source_class,
)

__all__ = [
    "FILTER_COLUMNS",
    "ROW_COLUMNS",
    "RowSource",
    "TabularRowMixin",
    "InMemoryRowSource",
    "CsvRowSource",
    "DuckDBRowSource",
    "RowSourceRegistry",
    "build_default_source_registry",
    "load_source_class",
]
