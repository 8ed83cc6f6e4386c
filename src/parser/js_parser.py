"""
JavaScript syntax checks built on top of the Python `esprima` port.

The rewrite itself is regex driven; this module only answers "does this text
still parse?". Input chunks are checked as ES modules (they carry an export
list) and rewritten output as classic scripts, which is all a host without a
module system can load.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, List, Optional

import esprima


@dataclass(frozen=True)
class ParseError:
    """A syntax problem reported by esprima."""

    description: str
    line: Optional[int]
    column: Optional[int]


@dataclass(frozen=True)
class ParseResult:
    ast: Any
    errors: List[ParseError]
    source_name: str

    @property
    def ok(self) -> bool:
        return self.ast is not None and not self.errors


def _field(error: Any, name: str) -> Any:
    if isinstance(error, dict):
        return error.get(name)
    return getattr(error, name, None)


def _to_parse_error(error: Any) -> ParseError:
    description = _field(error, "description") or _field(error, "message") or str(error)
    return ParseError(
        description=str(description),
        line=_field(error, "lineNumber"),
        column=_field(error, "column"),
    )


def parse_js(
    source: str,
    *,
    source_name: str = "<input>",
    tolerant: bool = False,
    source_type: str = "script",
) -> ParseResult:
    """
    Parse JavaScript source text into an esprima AST.

    Args:
        source: Raw JavaScript source code.
        source_name: Label used for diagnostics (defaults to `<input>`).
        tolerant: When True, esprima performs error recovery and reports the
            recovered problems in `errors`.
        source_type: `"script"` or `"module"`; modules allow import/export.

    Returns:
        ParseResult with the AST (None when parsing failed) and any errors.
    """
    parser = esprima.parseModule if source_type == "module" else esprima.parseScript
    try:
        ast = parser(source, loc=True, tolerant=tolerant)
    except esprima.Error as exc:
        return ParseResult(ast=None, errors=[_to_parse_error(exc)], source_name=source_name)

    errors: List[ParseError] = []
    raw_errors = getattr(ast, "errors", None) or []
    for error in raw_errors:
        errors.append(_to_parse_error(error))
    return ParseResult(ast=ast, errors=errors, source_name=source_name)


def check_script(source: str, *, source_name: str = "<input>") -> ParseResult:
    """Check that `source` loads as a classic (non-module) script."""
    return parse_js(source, source_name=source_name, source_type="script")


def check_module(source: str, *, source_name: str = "<input>") -> ParseResult:
    return parse_js(source, source_name=source_name, source_type="module")


__all__ = ["ParseError", "ParseResult", "check_module", "check_script", "parse_js"]
