"""Core of the dbSNP sub-SNP import pipeline.

This package assembles paged legacy rows into one record per submission and
resolves submission alleles onto the forward strand.
"""

from .alleles import (
    join_alleles,
    normalize_allele,
    reverse_complement,
    reverse_complement_alleles,
    split_alleles,
)
from .assembler import SubmissionAssembler, assemble
from .config import ImportConfig, ImportConfigLoader
from .exceptions import (
    ConfigurationError,
    GroupOrderingError,
    InvalidCoordinateError,
    InvalidLocusTypeCodeError,
    InvalidOrientationCodeError,
    SnpImportError,
    UndefinedHgvsAlleleError,
)
from .models import (
    GenomicInterval,
    HgvsAnnotation,
    LocusType,
    Orientation,
    SubmissionRecord,
    SubmissionRow,
)
from .orientation import AnnotationAnchor, AnnotationKind, select_anchor
from .pipeline import (
    CollectingSink,
    ForwardStrandAlleles,
    ImportRunReport,
    RecordSink,
    ResolvedSubmission,
    SubmissionImportPipeline,
    resolve_forward_strand,
)
from .sources import (
    CsvRowSource,
    DuckDBRowSource,
    InMemoryRowSource,
    RowSource,
    RowSourceRegistry,
    build_default_source_registry,
)

__all__ = [
    "AnnotationAnchor",
    "AnnotationKind",
    "CollectingSink",
    "ConfigurationError",
    "CsvRowSource",
    "DuckDBRowSource",
    "ForwardStrandAlleles",
    "GenomicInterval",
    "GroupOrderingError",
    "HgvsAnnotation",
    "ImportConfig",
    "ImportConfigLoader",
    "ImportRunReport",
    "InMemoryRowSource",
    "InvalidCoordinateError",
    "InvalidLocusTypeCodeError",
    "InvalidOrientationCodeError",
    "LocusType",
    "Orientation",
    "RecordSink",
    "ResolvedSubmission",
    "RowSource",
    "RowSourceRegistry",
    "SnpImportError",
    "SubmissionAssembler",
    "SubmissionImportPipeline",
    "SubmissionRecord",
    "SubmissionRow",
    "UndefinedHgvsAlleleError",
    "assemble",
    "build_default_source_registry",
    "join_alleles",
    "normalize_allele",
    "resolve_forward_strand",
    "reverse_complement",
    "reverse_complement_alleles",
    "select_anchor",
    "split_alleles",
]
