"""
Detection and parsing of the trailing `export { ... };` statement of a chunk.

Bundlers such as rollup/vite emit a single export list at the end of every
chunk. The helpers here locate that statement with a regular expression,
split its entries into bare names and `internal as public` aliases, and expose
the derived alias map and ordered list of public names. No JavaScript parsing
is involved; anything outside the recognised shapes is skipped rather than
reported as an error.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple

EXPORT_CLAUSE_PATTERN = re.compile(r"export\s*{([^}]+)};")

_ALIAS_PATTERN = re.compile(r"^(\S+)\s+as\s+(\S+)$")
_AS_TOKEN = re.compile(r"(?:^|\s)as(?:\s|$)")


@dataclass(frozen=True)
class ExportEntry:
    """One item of an export list; bare names have `internal == public`."""

    internal: str
    public: str

    @property
    def aliased(self) -> bool:
        return self.internal != self.public


@dataclass(frozen=True)
class ExportClause:
    """A located export statement together with its parsed entries."""

    raw: str
    start: int
    end: int
    entries: List[ExportEntry]
    skipped: List[str] = field(default_factory=list)

    @property
    def alias_map(self) -> Dict[str, str]:
        """Internal name → public name for aliased entries (last one wins)."""
        mapping: Dict[str, str] = {}
        for entry in self.entries:
            if entry.aliased:
                mapping[entry.internal] = entry.public
        return mapping

    @property
    def public_names(self) -> List[str]:
        return [entry.public for entry in self.entries]

    @property
    def duplicate_public_names(self) -> List[str]:
        seen = set()
        duplicates: List[str] = []
        for name in self.public_names:
            if name in seen and name not in duplicates:
                duplicates.append(name)
            seen.add(name)
        return duplicates


def parse_entries(raw: str) -> Tuple[List[ExportEntry], List[str]]:
    """
    Split the text between the export braces into entries.

    Args:
        raw: Comma separated export list, e.g. `foo, bar as baz`.

    Returns:
        A tuple of the parsed entries (in source order) and the texts of
        entries that mention `as` without forming a valid `A as B` pair.
    """
    entries: List[ExportEntry] = []
    skipped: List[str] = []
    for item in raw.split(","):
        text = item.strip()
        if not text:
            continue
        alias = _ALIAS_PATTERN.match(text)
        if alias:
            entries.append(ExportEntry(internal=alias.group(1), public=alias.group(2)))
        elif _AS_TOKEN.search(text):
            skipped.append(text)
        else:
            entries.append(ExportEntry(internal=text, public=text))
    return entries, skipped


def find_export_clause(code: str) -> Optional[ExportClause]:
    """
    Locate the first `export { ... };` statement in `code`.

    Returns None when the chunk has no export list, which callers treat as
    "nothing to rewrite" rather than a failure.
    """
    match = EXPORT_CLAUSE_PATTERN.search(code)
    if match is None:
        return None
    raw = match.group(1).strip()
    if not raw:
        return None
    entries, skipped = parse_entries(raw)
    return ExportClause(
        raw=raw,
        start=match.start(),
        end=match.end(),
        entries=entries,
        skipped=skipped,
    )


def strip_export_clause(code: str, clause: ExportClause) -> str:
    """Remove the located export statement, leaving the rest of the text intact."""
    return code[: clause.start] + code[clause.end :]


__all__ = [
    "EXPORT_CLAUSE_PATTERN",
    "ExportClause",
    "ExportEntry",
    "find_export_clause",
    "parse_entries",
    "strip_export_clause",
]
