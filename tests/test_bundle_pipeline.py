from pathlib import Path

import pytest

from bundle import OutputPolicy, load_bundle, run_bundle, write_bundle
from parser import check_module, check_script
from transformer import RewriteError, RewriteOptions, SourceUnit, UnitKind

CASES = Path(__file__).parent / "cases"


def _bundle(*names: str):
    return {
        name: SourceUnit(file_name=name, code=(CASES / name).read_text(encoding="utf-8"))
        for name in names
    }


def test_output_policy_names():
    assert OutputPolicy().output_name("main.js") == "main.js"
    assert OutputPolicy(replace_file=False).output_name("main.js") == "modified-main.js"
    assert OutputPolicy(replace_file=False).output_name("assets/main.js") == "assets/modified-main.js"
    assert (
        OutputPolicy(replace_file=False, new_file_name="Code.js").output_name("main.js")
        == "Code.js"
    )


def test_run_bundle_rewrites_only_chunks_with_exports():
    bundle = _bundle("alias_function.js", "no_export.js")
    bundle["index.html"] = SourceUnit(file_name="index.html", code="", kind=UnitKind.ASSET)

    result = run_bundle(bundle)

    assert list(result.outputs) == ["alias_function.js"]
    assert result.changed == ["alias_function.js"]
    assert [report.file_name for report in result.reports] == [
        "alias_function.js",
        "no_export.js",
        "index.html",
    ]
    assert bundle["alias_function.js"].code.endswith("export { internalFoo as publicBar };\n")


def test_inputs_are_modules_and_outputs_are_scripts():
    bundle = _bundle("alias_function.js", "bare_const.js", "documented.js")
    for unit in bundle.values():
        assert check_module(unit.code).ok
        assert not check_script(unit.code).ok

    for options in (RewriteOptions(), RewriteOptions(preserve_signatures=True)):
        result = run_bundle(bundle, options, validate=True)
        assert len(result.outputs) == 3
        for report in result.reports:
            assert report.validation is not None
            assert report.validation.ok, report.diagnostics
        if options.preserve_signatures:
            assert [report.rewrite.diagnostics for report in result.reports] == [
                [],
                [],
                ["No signature found for 'VERSION'; forwarding without parameters."],
            ]
        else:
            assert not result.has_diagnostics


def test_validation_reports_broken_output():
    result = run_bundle(
        _bundle("bare_const.js"),
        RewriteOptions(banner="this is not ( javascript"),
        validate=True,
    )
    report = result.reports[0]
    assert report.validation is not None
    assert report.validation.errors
    assert result.has_diagnostics
    assert any("does not parse" in message for message in report.diagnostics)


def test_load_and_write_bundle(tmp_path):
    dist = tmp_path / "dist"
    (dist / "assets").mkdir(parents=True)
    (dist / "main.js").write_text((CASES / "bare_const.js").read_text(encoding="utf-8"), encoding="utf-8")
    (dist / "assets" / "logo.svg").write_text("<svg/>", encoding="utf-8")

    bundle = load_bundle(dist)
    assert bundle["main.js"].kind == UnitKind.CHUNK
    assert bundle["assets/logo.svg"].kind == UnitKind.ASSET

    result = run_bundle(bundle, policy=OutputPolicy(replace_file=False))
    out_dir = tmp_path / "out"
    written = write_bundle(result, out_dir)

    assert written == [out_dir / "modified-main.js"]
    assert "const plainName = APP.plainName;" in written[0].read_text(encoding="utf-8")


def test_load_bundle_missing_directory(tmp_path):
    with pytest.raises(RewriteError):
        load_bundle(tmp_path / "missing")


def test_load_bundle_classifies_module_suffixes(tmp_path):
    dist = tmp_path / "dist"
    dist.mkdir()
    for name in ("a.mjs", "b.cjs", "c.js", "d.map", "e.ts"):
        (dist / name).write_text("const a = 1;\nexport { a };\n", encoding="utf-8")

    bundle = load_bundle(dist)

    assert {name: unit.kind for name, unit in bundle.items()} == {
        "a.mjs": UnitKind.CHUNK,
        "b.cjs": UnitKind.CHUNK,
        "c.js": UnitKind.CHUNK,
        "d.map": UnitKind.ASSET,
        "e.ts": UnitKind.ASSET,
    }
    assert bundle["a.mjs"].code.startswith("const a = 1;")
    assert bundle["d.map"].code == ""


def test_write_bundle_wraps_os_errors(tmp_path):
    result = run_bundle(_bundle("bare_const.js"))
    blocker = tmp_path / "out"
    blocker.write_text("not a directory", encoding="utf-8")

    with pytest.raises(RewriteError) as excinfo:
        write_bundle(result, blocker)
    assert excinfo.value.file_name == "bare_const.js"
    assert "Failed to write output" in str(excinfo.value)
