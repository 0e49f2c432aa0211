from __future__ import annotations

from typing import List, Literal, Optional

from pydantic import Field

from schemas.questions import CamelModel

TestType = Literal["unit", "integration", "e2e"]
Priority = Literal["low", "medium", "high"]


class Repository(CamelModel):
    owner: str
    repo: str
    branch: Optional[str] = None


class AnalyzeFilesRequest(CamelModel):
    repository: Repository
    files: List[str]
    framework: Optional[str] = None


class TestCase(CamelModel):
    id: str
    title: str
    description: str
    framework: str
    test_type: TestType
    files: List[str]
    priority: Priority


class AnalyzeFilesResponse(CamelModel):
    test_cases: List[TestCase] = Field(default_factory=list)
    total_files: int
    analyzed_files: int
