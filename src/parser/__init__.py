"""esprima-backed syntax checks for chunks before and after rewriting."""

from .js_parser import ParseError, ParseResult, check_module, check_script, parse_js

__all__ = ["ParseError", "ParseResult", "check_module", "check_script", "parse_js"]
