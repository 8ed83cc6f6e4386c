"""Bundle pipeline: rewrite, validate and write every chunk of a build."""

from .pipeline import (
    CHUNK_SUFFIXES,
    BundleResult,
    OutputPolicy,
    UnitReport,
    load_bundle,
    run_bundle,
    write_bundle,
)

__all__ = [
    "CHUNK_SUFFIXES",
    "BundleResult",
    "OutputPolicy",
    "UnitReport",
    "load_bundle",
    "run_bundle",
    "write_bundle",
]
