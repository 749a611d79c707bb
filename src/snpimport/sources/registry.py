"""Look up row sources by name and build them for an import config."""

from __future__ import annotations

import importlib
import logging
from typing import Any

from snpimport.config import ImportConfig
from snpimport.exceptions import ConfigurationError
from snpimport.sources.base import RowSource
from snpimport.sources.csv_dump import CsvRowSource
from snpimport.sources.duckdb_table import DuckDBRowSource
from snpimport.sources.memory import InMemoryRowSource

logger = logging.getLogger(__name__)


def load_source_class(target: str) -> type[RowSource]:
    """Import a row source class given as ``package.module:ClassName``."""

    module_name, sep, class_name = target.partition(":")
    if not sep or not module_name or not class_name:
        raise ConfigurationError(f"Row source target must look like 'module:ClassName', got {target!r}")

    module = importlib.import_module(module_name)
    source_cls = getattr(module, class_name, None)
    if not isinstance(source_cls, type) or not issubclass(source_cls, RowSource):
        raise ConfigurationError(f"{target} is not a RowSource subclass")
    return source_cls


class RowSourceRegistry:
    """Row source classes keyed by their lower-cased ``name``.

    Names containing ``:`` that are not registered are imported on first use
    with ``load_source_class`` and cached under that name.
    """

    def __init__(self) -> None:
        self._sources: dict[str, type[RowSource]] = {}

    def register(self, source_cls: type[RowSource], *, name: str | None = None) -> type[RowSource]:
        key = (name if name is not None else getattr(source_cls, "name", "")).strip().lower()
        if not key:
            raise ValueError("Row source name cannot be empty")
        if self._sources.get(key, source_cls) is not source_cls:
            raise ValueError(f"Row source already registered: {key}")
        self._sources[key] = source_cls
        return source_cls

    def resolve(self, name: str) -> type[RowSource]:
        key = name.strip().lower()
        if key in self._sources:
            return self._sources[key]
        if ":" in name:
            return self.register(load_source_class(name.strip()), name=key)
        raise KeyError(f"Unknown row source '{name}'. Available: {', '.join(self.available())}")

    def create(self, name: str, config: ImportConfig | None = None, **options: Any) -> RowSource:
        """Instantiate a row source, filling its assembly filter from ``config``."""

        source_cls = self.resolve(name)
        if config is not None and source_cls.filters_by_assembly:
            clashing = {"assembly", "assembly_types"} & set(options)
            if clashing:
                raise ConfigurationError(
                    f"{', '.join(sorted(clashing))} come from the import config, not source options"
                )
            options["assembly"] = config.assembly
            options["assembly_types"] = config.assembly_types

        logger.debug("Creating %s row source with options %s", source_cls.__name__, sorted(options))
        return source_cls(**options)

    def available(self) -> list[str]:
        return sorted(self._sources)


def build_default_source_registry() -> RowSourceRegistry:
    """Create a registry preloaded with the built-in row sources."""

    registry = RowSourceRegistry()
    for source_cls in (InMemoryRowSource, CsvRowSource, DuckDBRowSource):
        registry.register(source_cls)
    return registry
