"""Export-list detection and signature capture for bundled chunks."""

from .clause import (
    EXPORT_CLAUSE_PATTERN,
    ExportClause,
    ExportEntry,
    find_export_clause,
    parse_entries,
    strip_export_clause,
)
from .signatures import FunctionSignature, find_signature, forward_arguments, split_parameters

__all__ = [
    "EXPORT_CLAUSE_PATTERN",
    "ExportClause",
    "ExportEntry",
    "FunctionSignature",
    "find_export_clause",
    "find_signature",
    "forward_arguments",
    "parse_entries",
    "split_parameters",
    "strip_export_clause",
]
