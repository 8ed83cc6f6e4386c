"""
Bundle-level glue: run the export rewriter over every output of a build.

`run_bundle` takes the bundler's mapping of output file name to unit, rewrites
each code chunk independently, decides the output file name from the write
policy, and optionally re-parses the rewritten text with esprima to confirm it
still loads as a classic script. `load_bundle` and `write_bundle` provide the
directory round trip used by the command line.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Mapping, Optional, Union

from parser import ParseResult, check_script
from transformer import (
    ExportRewriter,
    RewriteError,
    RewriteOptions,
    RewriteResult,
    SourceUnit,
    UnitKind,
)

logger = logging.getLogger(__name__)

CHUNK_SUFFIXES = (".js", ".mjs", ".cjs")
DEFAULT_PREFIX = "modified-"


@dataclass(frozen=True)
class OutputPolicy:
    """Whether rewritten chunks overwrite their source file or get a new name."""

    replace_file: bool = True
    new_file_name: Optional[str] = None

    def output_name(self, file_name: str) -> str:
        if self.replace_file:
            return file_name
        if self.new_file_name:
            return self.new_file_name
        path = Path(file_name)
        return str(path.with_name(DEFAULT_PREFIX + path.name))


@dataclass(frozen=True)
class UnitReport:
    """Outcome for one bundle entry."""

    file_name: str
    output_name: Optional[str]
    rewrite: RewriteResult
    validation: Optional[ParseResult] = None

    @property
    def diagnostics(self) -> List[str]:
        messages = list(self.rewrite.diagnostics)
        if self.validation is not None:
            for error in self.validation.errors:
                loc = f" (line {error.line}, column {error.column})" if error.line else ""
                messages.append(f"Output does not parse as a script: {error.description}{loc}")
        return messages


@dataclass
class BundleResult:
    outputs: Dict[str, SourceUnit] = field(default_factory=dict)
    reports: List[UnitReport] = field(default_factory=list)

    @property
    def changed(self) -> List[str]:
        return [report.file_name for report in self.reports if report.rewrite.changed]

    @property
    def has_diagnostics(self) -> bool:
        return any(report.diagnostics for report in self.reports)


def run_bundle(
    bundle: Mapping[str, SourceUnit],
    options: Optional[RewriteOptions] = None,
    *,
    policy: Optional[OutputPolicy] = None,
    validate: bool = False,
) -> BundleResult:
    """
    Rewrite every chunk of a bundle.

    Args:
        bundle: Output file name mapped to the unit the bundler produced.
        options: Namespace, banner and signature preservation settings.
        policy: Output naming; defaults to replacing the original file.
        validate: Parse each rewritten chunk as a script and report failures
            as diagnostics.

    Returns:
        BundleResult holding the rewritten outputs keyed by output name and a
        report per input unit. Units that were not rewritten produce no output.
    """
    rewriter = ExportRewriter(options)
    policy = policy or OutputPolicy()
    result = BundleResult()

    for file_name, unit in bundle.items():
        rewrite = rewriter.rewrite(unit)
        if not rewrite.changed:
            result.reports.append(
                UnitReport(file_name=file_name, output_name=None, rewrite=rewrite)
            )
            continue

        output_name = policy.output_name(file_name)
        if output_name in result.outputs:
            logger.warning(
                "Output name collision, earlier output overwritten (file=%s output=%s)",
                file_name,
                output_name,
            )
        validation = None
        if validate:
            validation = check_script(rewrite.unit.code, source_name=output_name)
            if validation.errors:
                logger.warning(
                    "Rewritten chunk failed to parse (file=%s errors=%d)",
                    output_name,
                    len(validation.errors),
                )
        result.outputs[output_name] = rewrite.unit
        result.reports.append(
            UnitReport(
                file_name=file_name,
                output_name=output_name,
                rewrite=rewrite,
                validation=validation,
            )
        )
        logger.info(
            "Rewrote %s -> %s (exports=%s)",
            file_name,
            output_name,
            ", ".join(rewrite.public_names),
        )

    return result


def load_bundle(directory: Union[str, Path]) -> Dict[str, SourceUnit]:
    """Read a build output directory into a bundle mapping keyed by relative path."""
    root = Path(directory)
    if not root.is_dir():
        raise RewriteError("Bundle directory not found.", file_name=str(root))

    bundle: Dict[str, SourceUnit] = {}
    for path in sorted(root.rglob("*")):
        if not path.is_file():
            continue
        name = path.relative_to(root).as_posix()
        if path.suffix not in CHUNK_SUFFIXES:
            bundle[name] = SourceUnit(file_name=name, code="", kind=UnitKind.ASSET)
            continue
        try:
            code = path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as exc:
            raise RewriteError(f"Failed to read chunk: {exc}", file_name=name) from exc
        bundle[name] = SourceUnit(file_name=name, code=code)
    return bundle


def write_bundle(result: BundleResult, out_dir: Union[str, Path]) -> List[Path]:
    """Persist rewritten outputs under `out_dir`; returns the written paths."""
    root = Path(out_dir)
    written: List[Path] = []
    for output_name, unit in result.outputs.items():
        target = root / output_name
        try:
            target.parent.mkdir(parents=True, exist_ok=True)
            target.write_text(unit.code, encoding="utf-8")
        except OSError as exc:
            raise RewriteError(f"Failed to write output: {exc}", file_name=output_name) from exc
        written.append(target)
    return written


__all__ = [
    "BundleResult",
    "CHUNK_SUFFIXES",
    "OutputPolicy",
    "UnitReport",
    "load_bundle",
    "run_bundle",
    "write_bundle",
]
