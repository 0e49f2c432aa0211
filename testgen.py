# Deterministic test-case descriptors from a repo file list.
# Classification is by extension and path only; file contents are never read.
from __future__ import annotations

from typing import List, Optional

from schemas.testcases import TestCase

JS_EXTS = ("js", "jsx", "ts", "tsx")
COMPONENT_EXTS = ("jsx", "tsx")
FRONTEND_SUFFIXES = (".jsx", ".tsx", ".vue")
MAX_CROSS_FILE = 3


def _ext(path: str) -> str:
    name = _basename(path)
    return name.rsplit(".", 1)[-1].lower() if "." in name else ""


def _basename(path: str) -> str:
    return path.rsplit("/", 1)[-1] or path


def _per_file_cases(index: int, path: str, framework: Optional[str]) -> List[TestCase]:
    ext = _ext(path)
    name = _basename(path)
    cases: List[TestCase] = []

    if ext in JS_EXTS:
        cases.append(
            TestCase(
                id=f"tc-{index}-unit",
                title=f"Unit Tests for {name}",
                description=f"Test individual functions and components in {name}",
                framework=framework or "jest",
                test_type="unit",
                files=[path],
                priority="high",
            )
        )
        if ext in COMPONENT_EXTS:
            cases.append(
                TestCase(
                    id=f"tc-{index}-integration",
                    title=f"Component Integration Tests for {name}",
                    description=f"Test React component interactions and props in {name}",
                    framework=framework or "jest",
                    test_type="integration",
                    files=[path],
                    priority="medium",
                )
            )
    elif ext == "py":
        cases.append(
            TestCase(
                id=f"tc-{index}-unit",
                title=f"Unit Tests for {name}",
                description=f"Test functions and classes in {name}",
                framework="pytest",
                test_type="unit",
                files=[path],
                priority="high",
            )
        )
    elif ext == "java":
        cases.append(
            TestCase(
                id=f"tc-{index}-unit",
                title=f"JUnit Tests for {name}",
                description=f"Test methods and classes in {name}",
                framework="junit",
                test_type="unit",
                files=[path],
                priority="high",
            )
        )
    return cases


def _is_frontend(path: str) -> bool:
    return "component" in path or "page" in path or path.endswith(FRONTEND_SUFFIXES)


def analyze_files(files: List[str], framework: Optional[str] = None) -> List[TestCase]:
    """
    Map a file list to test-case descriptors.

    Per file: js/ts get a unit case (plus an integration case for jsx/tsx),
    py gets pytest, java gets junit. Then one cross-file integration case when
    there is more than one file, and one cypress e2e case when anything looks
    like frontend code.
    """
    cases: List[TestCase] = []
    for index, path in enumerate(files):
        cases.extend(_per_file_cases(index, path, framework))

    if len(files) > 1:
        cases.append(
            TestCase(
                id="tc-integration-all",
                title="Cross-File Integration Tests",
                description="Test interactions between multiple files and modules",
                framework=framework or "jest",
                test_type="integration",
                files=files[:MAX_CROSS_FILE],
                priority="medium",
            )
        )

    if any(_is_frontend(p) for p in files):
        cases.append(
            TestCase(
                id="tc-e2e-user-flow",
                title="End-to-End User Flow Tests",
                description="Test complete user workflows and interactions",
                framework="cypress",
                test_type="e2e",
                files=[p for p in files if p.endswith(FRONTEND_SUFFIXES)],
                priority="low",
            )
        )
    return cases
