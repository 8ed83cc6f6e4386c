"""Export rewriting for bundled JavaScript chunks."""

from .core import (
    COMPAT_COMMENT,
    DEFAULT_NAMESPACE,
    ConfigurationError,
    ExportRewriter,
    RewriteError,
    RewriteOptions,
    RewriteResult,
    SourceUnit,
    UnitKind,
    append_compat_bindings,
    rename_declarations,
    rewrite_source,
    rewrite_unit,
)

__all__ = [
    "COMPAT_COMMENT",
    "DEFAULT_NAMESPACE",
    "ConfigurationError",
    "ExportRewriter",
    "RewriteError",
    "RewriteOptions",
    "RewriteResult",
    "SourceUnit",
    "UnitKind",
    "append_compat_bindings",
    "rename_declarations",
    "rewrite_source",
    "rewrite_unit",
]
