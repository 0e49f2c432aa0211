from testgen import analyze_files


def _ids(cases):
    return [c.id for c in cases]


def test_single_python_file():
    cases = analyze_files(["src/app/utils.py"])
    assert _ids(cases) == ["tc-0-unit"]
    assert cases[0].framework == "pytest"
    assert cases[0].title == "Unit Tests for utils.py"


def test_tsx_component_gets_unit_integration_and_e2e():
    cases = analyze_files(["src/Button.tsx"])
    assert _ids(cases) == ["tc-0-unit", "tc-0-integration", "tc-e2e-user-flow"]
    assert cases[0].framework == "jest"
    e2e = cases[-1]
    assert e2e.framework == "cypress" and e2e.test_type == "e2e" and e2e.files == ["src/Button.tsx"]


def test_framework_hint_applies_to_js_only():
    cases = analyze_files(["a.ts", "b.py"], framework="vitest")
    by_id = {c.id: c for c in cases}
    assert by_id["tc-0-unit"].framework == "vitest"
    assert by_id["tc-1-unit"].framework == "pytest"
    assert by_id["tc-integration-all"].framework == "vitest"


def test_cross_file_case_uses_first_three_files():
    files = ["a.java", "b.java", "c.java", "d.java"]
    cases = analyze_files(files)
    cross = [c for c in cases if c.id == "tc-integration-all"][0]
    assert cross.files == files[:3]
    assert all(c.framework == "junit" for c in cases if c.test_type == "unit")


def test_unknown_extensions_produce_nothing():
    assert analyze_files(["README.md"]) == []
    assert analyze_files([]) == []


def test_page_path_triggers_e2e_with_no_frontend_files():
    cases = analyze_files(["pages/index.js"])
    e2e = [c for c in cases if c.test_type == "e2e"]
    assert len(e2e) == 1 and e2e[0].files == []
