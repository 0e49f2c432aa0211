import logging

from fastapi import APIRouter

from schemas.testcases import AnalyzeFilesRequest, AnalyzeFilesResponse
from testgen import analyze_files

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/github", tags=["github"])


@router.post("/analyze", response_model=AnalyzeFilesResponse)
def analyze(req: AnalyzeFilesRequest):
    cases = analyze_files(req.files, req.framework)
    logger.info(
        "analyzed %d files from %s/%s -> %d test cases",
        len(req.files),
        req.repository.owner,
        req.repository.repo,
        len(cases),
    )
    return AnalyzeFilesResponse(
        test_cases=cases, total_files=len(req.files), analyzed_files=len(req.files)
    )
