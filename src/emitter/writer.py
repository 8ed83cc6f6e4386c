"""
Render rewritten chunks as flat-global JavaScript text.

The chunk body is wrapped in an immediately-invoked arrow function bound to a
single namespace constant; the closure returns an object literal with every
public name, and each name is re-declared at top level so hosts without a
module system can still call it. The namespace binding carries JSDoc tags that
hide it from documentation tooling and the host's function picker.
"""

from __future__ import annotations

import io
from dataclasses import dataclass
from typing import Iterable, List, Mapping, Optional

from exports import FunctionSignature

HIDDEN_TAGS = ("@ignore", "@hidden", "@private")


@dataclass(frozen=True)
class EmitResult:
    source: str
    forwarders: List[str]


def emit_isolated(code: str, public_names: Iterable[str], namespace: str) -> str:
    """Wrap `code` in a closure assigned to `namespace` returning `public_names`."""
    buffer = io.StringIO()
    buffer.write("/**\n")
    for tag in HIDDEN_TAGS:
        buffer.write(f"* {tag}\n")
    buffer.write("*/\n")
    buffer.write(f"const {namespace} = (() => {{\n\n")
    buffer.write(code)
    buffer.write("\n\nreturn {\n  ")
    buffer.write(",\n  ".join(public_names))
    buffer.write("\n}\n\n})();\n\n")
    return buffer.getvalue()


def _forwarding_function(
    name: str, namespace: str, signature: Optional[FunctionSignature]
) -> str:
    lines: List[str] = []
    if signature is None:
        lines.append(f"function {name}() {{")
        lines.append(f"  return {namespace}.{name}(...arguments);")
        lines.append("}")
        return "\n".join(lines) + "\n"

    if signature.doc:
        lines.append(signature.doc)
    arguments = signature.arguments
    if arguments is None:
        arguments = "...arguments"
    lines.append(f"function {name}({signature.params}) {{")
    lines.append(f"  return {namespace}.{name}({arguments});")
    lines.append("}")
    return "\n".join(lines) + "\n"


def emit_forwarders(
    public_names: Iterable[str],
    namespace: str,
    signatures: Optional[Mapping[str, Optional[FunctionSignature]]] = None,
) -> List[str]:
    """
    Build one top-level declaration per public name, in order.

    Args:
        public_names: Names exposed by the namespace object.
        namespace: Identifier holding the isolated closure's result.
        signatures: When given, emit full function declarations reproducing
            the captured doc block and parameters; names mapped to None fall
            back to a pass-through call without declared parameters.

    Returns:
        The declaration texts, each terminated by a newline.
    """
    forwarders: List[str] = []
    for name in public_names:
        if signatures is None:
            forwarders.append(f"const {name} = {namespace}.{name};\n")
        else:
            forwarders.append(_forwarding_function(name, namespace, signatures.get(name)))
    return forwarders


def prepend_banner(text: str, banner: Optional[str]) -> str:
    if not banner:
        return text
    return banner + "\n\n" + text


def emit_chunk(
    code: str,
    public_names: List[str],
    *,
    namespace: str,
    banner: Optional[str] = None,
    signatures: Optional[Mapping[str, Optional[FunctionSignature]]] = None,
) -> EmitResult:
    """Produce the final text for a rewritten chunk."""
    forwarders = emit_forwarders(public_names, namespace, signatures)
    source = emit_isolated(code, public_names, namespace)
    if signatures is None:
        source += "".join(forwarders)
    else:
        source += "\n".join(forwarders)
    return EmitResult(source=prepend_banner(source, banner), forwarders=forwarders)


__all__ = [
    "EmitResult",
    "HIDDEN_TAGS",
    "emit_chunk",
    "emit_forwarders",
    "emit_isolated",
    "prepend_banner",
]
