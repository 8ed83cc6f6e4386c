from pathlib import Path

from exports import find_export_clause, parse_entries, strip_export_clause

CASES = Path(__file__).parent / "cases"


def _load(name: str) -> str:
    return (CASES / name).read_text(encoding="utf-8")


def test_parse_entries_bare_and_aliased():
    entries, skipped = parse_entries(" first ,second as  shown,third ")
    assert [(e.internal, e.public) for e in entries] == [
        ("first", "first"),
        ("second", "shown"),
        ("third", "third"),
    ]
    assert [e.aliased for e in entries] == [False, True, False]
    assert skipped == []


def test_parse_entries_skips_malformed_alias_and_empty_items():
    entries, skipped = parse_entries("a, , b as, c as d")
    assert [(e.internal, e.public) for e in entries] == [("a", "a"), ("c", "d")]
    assert skipped == ["b as"]


def test_parse_entries_keeps_names_containing_as():
    entries, skipped = parse_entries("basis, alias as canvas")
    assert [(e.internal, e.public) for e in entries] == [
        ("basis", "basis"),
        ("alias", "canvas"),
    ]
    assert not skipped


def test_find_clause_spanning_lines():
    code = _load("multi_alias.js")
    clause = find_export_clause(code)
    assert clause is not None
    assert clause.public_names == ["onOpen", "doGet", "count", "menu"]
    assert clause.alias_map == {
        "onOpen$1": "onOpen",
        "doGet$2": "doGet",
        "counter": "count",
    }


def test_find_clause_absent():
    assert find_export_clause(_load("no_export.js")) is None
    assert find_export_clause("export {  };") is None
    assert find_export_clause("export default foo;") is None


def test_strip_removes_only_first_clause():
    code = "a();\nexport { a };\nb();\nexport { b };\n"
    clause = find_export_clause(code)
    assert clause is not None
    assert clause.public_names == ["a"]
    stripped = strip_export_clause(code, clause)
    assert stripped == "a();\n\nb();\nexport { b };\n"


def test_duplicate_public_names_last_alias_wins():
    clause = find_export_clause("export { a as x, b as x, a as y };")
    assert clause is not None
    assert clause.public_names == ["x", "x", "y"]
    assert clause.duplicate_public_names == ["x"]
    assert clause.alias_map == {"a": "y", "b": "x"}


def test_clause_braces_may_span_lines_without_flags():
    clause = find_export_clause("const a = 1;\nexport {\n  a\n};\n")
    assert clause is not None
    assert clause.public_names == ["a"]
