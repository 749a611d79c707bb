"""Configuration contracts for sub-SNP import runs."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Mapping

from snpimport.exceptions import ConfigurationError

DEFAULT_PAGE_SIZE = 2000
DEFAULT_ASSEMBLY_TYPES: tuple[str, ...] = ("Primary_Assembly",)

_CONFIG_KEYS = frozenset(
    {"assembly", "assembly_types", "page_size", "max_workers", "source", "source_options"}
)
# Source options holding file locations; relative values are read from the config's folder.
_PATH_OPTIONS = ("csv_path", "db_path")


def check_page_size(page_size: Any) -> int:
    """Return ``page_size`` if it is a positive integer, else raise."""

    if isinstance(page_size, bool) or not isinstance(page_size, int) or page_size < 1:
        raise ConfigurationError(f"Page size must be a positive integer, got {page_size!r}")
    return page_size


@dataclass(frozen=True)
class ImportConfig:
    """Settings supplied by the caller of an import run.

    ``assembly`` and ``assembly_types`` are only used by row sources to filter
    rows before assembly; the core never inspects them. ``source`` names a
    registered row source (or a ``module:ClassName`` target) and
    ``source_options`` holds its constructor arguments.
    """

    assembly: str
    assembly_types: tuple[str, ...] = DEFAULT_ASSEMBLY_TYPES
    page_size: int = DEFAULT_PAGE_SIZE
    max_workers: int = 1
    source: str | None = None
    source_options: Mapping[str, Any] = field(default_factory=dict, hash=False)

    def __post_init__(self) -> None:
        if not self.assembly or not self.assembly.strip():
            raise ConfigurationError("Target assembly cannot be empty")
        if isinstance(self.assembly_types, str):
            object.__setattr__(self, "assembly_types", (self.assembly_types,))
        else:
            object.__setattr__(self, "assembly_types", tuple(self.assembly_types))
        if not self.assembly_types:
            raise ConfigurationError("At least one assembly type must be accepted")
        check_page_size(self.page_size)
        if (
            isinstance(self.max_workers, bool)
            or not isinstance(self.max_workers, int)
            or self.max_workers < 1
        ):
            raise ConfigurationError(
                f"Worker count must be a positive integer, got {self.max_workers!r}"
            )
        if self.source is not None and (not isinstance(self.source, str) or not self.source.strip()):
            raise ConfigurationError(f"Row source name must be a non-empty string, got {self.source!r}")
        if not isinstance(self.source_options, Mapping):
            raise ConfigurationError("Row source options must be a mapping")
        object.__setattr__(self, "source_options", dict(self.source_options))

    @classmethod
    def from_mapping(cls, payload: Mapping[str, Any]) -> ImportConfig:
        """Build a config from a JSON-like mapping, rejecting unknown keys."""

        if "assembly" not in payload:
            raise ConfigurationError("Import config requires an 'assembly' entry")
        unknown = sorted(set(payload) - _CONFIG_KEYS)
        if unknown:
            raise ConfigurationError(f"Unknown import config keys: {', '.join(unknown)}")

        return cls(
            assembly=str(payload["assembly"]),
            assembly_types=payload.get("assembly_types", DEFAULT_ASSEMBLY_TYPES),
            page_size=payload.get("page_size", DEFAULT_PAGE_SIZE),
            max_workers=payload.get("max_workers", 1),
            source=payload.get("source"),
            source_options=payload.get("source_options") or {},
        )


class ImportConfigLoader:
    """Read import configs kept as ``<name>.json`` under ``config/imports``.

    ``load`` takes either a config name or a path ending in ``.json``.
    Relative ``csv_path``/``db_path`` source options are resolved against the
    folder holding the config file, so a config and its dump can travel
    together.
    """

    def __init__(self, configs_dir: str | Path | None = None) -> None:
        if configs_dir is None:
            configs_dir = Path(__file__).resolve().parents[2] / "config" / "imports"
        self.configs_dir = Path(configs_dir)

    def list_configs(self) -> list[str]:
        return sorted(path.stem for path in self.configs_dir.glob("*.json"))

    def path_for(self, name_or_path: str | Path) -> Path:
        path = Path(name_or_path)
        if path.suffix != ".json":
            path = self.configs_dir / f"{path}.json"
        if not path.is_file():
            raise FileNotFoundError(
                f"Import config not found: {name_or_path}. "
                f"Available in {self.configs_dir}: {', '.join(self.list_configs())}"
            )
        return path

    def load(self, name_or_path: str | Path) -> ImportConfig:
        path = self.path_for(name_or_path)
        try:
            payload = json.loads(path.read_text())
        except json.JSONDecodeError as exc:
            raise ConfigurationError(f"Invalid import config {path}: {exc}") from exc
        if not isinstance(payload, dict):
            raise ConfigurationError(f"Import config {path} must hold a JSON object")

        options = payload.get("source_options")
        if isinstance(options, dict):
            payload = {**payload, "source_options": _anchor_paths(options, path.parent)}
        return ImportConfig.from_mapping(payload)


def _anchor_paths(options: Mapping[str, Any], base: Path) -> dict[str, Any]:
    anchored = dict(options)
    for key in _PATH_OPTIONS:
        value = anchored.get(key)
        if isinstance(value, str) and not Path(value).is_absolute():
            anchored[key] = str(base / value)
    return anchored
