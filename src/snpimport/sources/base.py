"""Base interface for sub-SNP row sources."""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Sequence
from typing import Any

from snpimport.models import SubmissionRow


class RowSource(ABC):
    """Source that pages legacy sub-SNP rows ordered ascending by ``ss_id``.

    Sources that restrict rows to one assembly set ``filters_by_assembly`` and
    accept ``assembly``/``assembly_types`` keyword arguments.
    """

    name: str
    filters_by_assembly: bool = False

    @abstractmethod
    def next_page(self, page_size: int) -> Sequence[SubmissionRow]:
        """Return up to ``page_size`` rows; an empty page means the source is exhausted."""

    def close(self) -> None:
        """Release anything the source opened. A closed source yields no more pages."""

    def __enter__(self) -> RowSource:
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()
