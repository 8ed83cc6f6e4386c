"""Text emission for isolated chunks and their top-level forwarders."""

from .writer import (
    HIDDEN_TAGS,
    EmitResult,
    emit_chunk,
    emit_forwarders,
    emit_isolated,
    prepend_banner,
)

__all__ = [
    "HIDDEN_TAGS",
    "EmitResult",
    "emit_chunk",
    "emit_forwarders",
    "emit_isolated",
    "prepend_banner",
]
