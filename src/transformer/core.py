"""
Rewrite module-style bundle chunks for hosts with a single global scope.

`ExportRewriter` runs a fixed, linear sequence of textual steps over one
chunk: locate and strip the trailing export list, rename aliased `function` /
`const` declarations to their public names, append compatibility bindings for
the old internal names, optionally capture doc comments and parameter lists,
then hand the body to the emitter to be isolated inside a namespace closure
with top-level forwarders.

The rewrite never raises for unexpected input. Shapes it does not recognise
are left as they are and reported through `RewriteResult.diagnostics`.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Mapping, Optional, Tuple

from emitter import emit_chunk
from exports import FunctionSignature, find_export_clause, find_signature, strip_export_clause

logger = logging.getLogger(__name__)

COMPAT_COMMENT = "// Connect internal name with function names"
DEFAULT_NAMESPACE = "APP"

_JS_IDENTIFIER = re.compile(r"^[A-Za-z_$][\w$]*$")


class ConfigurationError(ValueError):
    """Raised when rewrite options cannot produce valid output."""


class RewriteError(RuntimeError):
    """Raised when a unit cannot be read or written around the rewrite."""

    def __init__(self, message: str, file_name: Optional[str] = None):
        prefix = f"{file_name}: " if file_name else ""
        super().__init__(f"{prefix}{message}")
        self.file_name = file_name


class UnitKind(str, Enum):
    CHUNK = "chunk"
    ASSET = "asset"


@dataclass(frozen=True)
class SourceUnit:
    """One output of the bundler: a code chunk or an opaque asset."""

    file_name: str
    code: str
    kind: UnitKind = UnitKind.CHUNK

    @property
    def is_chunk(self) -> bool:
        return self.kind == UnitKind.CHUNK

    def with_code(self, code: str) -> "SourceUnit":
        return SourceUnit(file_name=self.file_name, code=code, kind=self.kind)


@dataclass(frozen=True)
class RewriteOptions:
    namespace: str = DEFAULT_NAMESPACE
    banner: Optional[str] = None
    preserve_signatures: bool = False

    def __post_init__(self) -> None:
        if not _JS_IDENTIFIER.match(self.namespace or ""):
            raise ConfigurationError(
                f"Namespace must be a JavaScript identifier, got {self.namespace!r}."
            )


@dataclass(frozen=True)
class RewriteResult:
    unit: SourceUnit
    changed: bool
    public_names: List[str] = field(default_factory=list)
    renamed: List[str] = field(default_factory=list)
    signatures: Dict[str, Optional[FunctionSignature]] = field(default_factory=dict)
    diagnostics: List[str] = field(default_factory=list)


def _declaration_patterns(internal: str) -> List[Tuple[re.Pattern, str]]:
    name = re.escape(internal)
    return [
        (re.compile(rf"\bfunction\s+{name}\s*\("), "function {public}("),
        (re.compile(rf"\bconst\s+{name}\s*=(?!=)"), "const {public} ="),
    ]


def rename_declarations(code: str, alias_map: Mapping[str, str]) -> Tuple[str, List[str]]:
    """
    Rename `function <internal>(` and `const <internal> =` to the public name.

    Each of the two shapes is replaced at most once per alias. Returns the new
    text and the internal names for which at least one replacement happened.
    """
    renamed: List[str] = []
    for internal, public in alias_map.items():
        hit = False
        for pattern, template in _declaration_patterns(internal):
            replacement = template.format(public=public)
            code, count = pattern.subn(lambda _m: replacement, code, count=1)
            hit = hit or count > 0
        if hit:
            renamed.append(internal)
    return code, renamed


def append_compat_bindings(code: str, alias_map: Mapping[str, str]) -> str:
    """Bind every old internal name to its public replacement at the end of `code`."""
    if not alias_map:
        return code
    if code and not code.endswith("\n"):
        code += "\n"
    code += COMPAT_COMMENT
    for internal, public in alias_map.items():
        code += f"\nconst {internal} = {public};"
    return code


class ExportRewriter:
    """Rewrites chunks with one export list into namespace-isolated scripts."""

    def __init__(self, options: Optional[RewriteOptions] = None):
        self.options = options or RewriteOptions()

    def rewrite(self, unit: SourceUnit) -> RewriteResult:
        if not unit.is_chunk:
            logger.debug("Skipping asset (file=%s)", unit.file_name)
            return RewriteResult(unit=unit, changed=False)

        clause = find_export_clause(unit.code)
        if clause is None:
            logger.debug("No export list found (file=%s)", unit.file_name)
            return RewriteResult(unit=unit, changed=False)

        diagnostics: List[str] = []
        for text in clause.skipped:
            diagnostics.append(f"Skipped malformed export entry '{text}'.")
        for name in clause.duplicate_public_names:
            diagnostics.append(
                f"Public name '{name}' is exported more than once; the last alias wins."
            )
            logger.warning(
                "Duplicate public export name (file=%s name=%s)", unit.file_name, name
            )

        code = strip_export_clause(unit.code, clause)
        alias_map = clause.alias_map
        public_names = clause.public_names

        code, renamed = rename_declarations(code, alias_map)
        for internal, public in alias_map.items():
            if internal not in renamed:
                diagnostics.append(
                    f"No function or const declaration found for '{internal}'; "
                    f"'{public}' was not renamed."
                )
        code = append_compat_bindings(code, alias_map)

        signatures: Optional[Dict[str, Optional[FunctionSignature]]] = None
        if self.options.preserve_signatures:
            signatures = {name: find_signature(code, name) for name in public_names}
            for name, signature in signatures.items():
                if signature is None:
                    diagnostics.append(
                        f"No signature found for '{name}'; forwarding without parameters."
                    )

        emitted = emit_chunk(
            code,
            public_names,
            namespace=self.options.namespace,
            banner=self.options.banner,
            signatures=signatures,
        )
        logger.debug(
            "Rewrote chunk (file=%s exports=%d renamed=%d)",
            unit.file_name,
            len(public_names),
            len(renamed),
        )
        return RewriteResult(
            unit=unit.with_code(emitted.source),
            changed=True,
            public_names=public_names,
            renamed=renamed,
            signatures=signatures or {},
            diagnostics=diagnostics,
        )


def rewrite_unit(unit: SourceUnit, options: Optional[RewriteOptions] = None) -> RewriteResult:
    """Functional wrapper around `ExportRewriter.rewrite`."""
    return ExportRewriter(options).rewrite(unit)


def rewrite_source(
    code: str, options: Optional[RewriteOptions] = None, *, file_name: str = "<chunk>"
) -> str:
    """Rewrite a single chunk's text; returns it unchanged when nothing applies."""
    return rewrite_unit(SourceUnit(file_name=file_name, code=code), options).unit.code
