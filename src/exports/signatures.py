"""
Doc-comment and parameter-list capture for exported functions.

Host tooling (documentation generators, the Apps Script editor's function
picker) only sees top-level declarations, so forwarding stubs can reproduce the
original `/** ... */` block and parameter list of each exported symbol. The
capture is purely textual: a doc block counts only when nothing but whitespace
separates it from the declaration, and parameter lists containing parentheses
are not recognised.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import List, Optional

_IDENTIFIER = re.compile(r"^[A-Za-z_$][\w$]*$")
_DOC_BLOCK = r"(?P<doc>/\*\*(?:(?!\*/)[\s\S])*\*/)?\s*"
_BOUNDARY = r"(?<![\w$.])"


@dataclass(frozen=True)
class FunctionSignature:
    """Doc block and raw parameter text captured for one public name."""

    name: str
    doc: Optional[str]
    params: str

    @property
    def arguments(self) -> Optional[str]:
        return forward_arguments(self.params)


def _signature_pattern(name: str) -> re.Pattern:
    ident = re.escape(name)
    declaration = (
        rf"{_BOUNDARY}(?:"
        rf"(?:async\s+)?function\s*\*?\s*{ident}\s*\((?P<fn>[^()]*)\)"
        rf"|(?:const|let)\s+{ident}\s*=\s*(?:async\s*)?\((?P<arrow>[^()]*)\)\s*=>"
        rf"|(?:const|let)\s+{ident}\s*=\s*(?:async\s+)?function\s*\*?\s*(?:[\w$]+\s*)?"
        rf"\((?P<expr>[^()]*)\)"
        r")"
    )
    return re.compile(_DOC_BLOCK + declaration)


def find_signature(code: str, name: str) -> Optional[FunctionSignature]:
    """
    Capture the doc comment and parameter list declared for `name`.

    Args:
        code: Chunk text after export removal and alias renames.
        name: Public name whose declaration should be located.

    Returns:
        The first matching signature, or None when no function-shaped
        declaration with a parenthesised parameter list exists for `name`.
    """
    match = _signature_pattern(name).search(code)
    if match is None:
        return None
    params = next(
        group for group in (match.group("fn"), match.group("arrow"), match.group("expr"))
        if group is not None
    )
    return FunctionSignature(name=name, doc=match.group("doc"), params=params.strip())


def split_parameters(params: str) -> List[str]:
    """Split a parameter list at commas that are not nested or quoted."""
    parts: List[str] = []
    depth = 0
    quote: Optional[str] = None
    current: List[str] = []
    for char in params:
        if quote:
            current.append(char)
            if char == quote:
                quote = None
            continue
        if char in "'\"`":
            quote = char
        elif char in "[{":
            depth += 1
        elif char in "]}":
            depth -= 1
        elif char == "," and depth == 0:
            parts.append("".join(current).strip())
            current = []
            continue
        current.append(char)
    tail = "".join(current).strip()
    if tail:
        parts.append(tail)
    return [part for part in parts if part]


def forward_arguments(params: str) -> Optional[str]:
    """
    Render the call arguments that forward `params` positionally.

    Defaults are dropped and rest parameters become spreads. Returns None when
    a parameter is a destructuring pattern or otherwise not a plain name.
    """
    names: List[str] = []
    for param in split_parameters(params):
        spread = param.startswith("...")
        target = param[3:].strip() if spread else param
        target = target.split("=", 1)[0].strip()
        if not _IDENTIFIER.match(target):
            return None
        names.append(f"...{target}" if spread else target)
    return ", ".join(names)


__all__ = ["FunctionSignature", "find_signature", "forward_arguments", "split_parameters"]
