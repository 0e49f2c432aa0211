# routers/responses.py
from __future__ import annotations

import logging
from typing import List, Optional

from fastapi import APIRouter, HTTPException, Query, Request

from deps.storage import StorageDep
from schemas.forms import MessageOut
from schemas.responses import FormResponse, Pagination, ResponseIn, ResponsePage, SubmitOut
from storage.base import FormNotFound, page_count

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/responses", tags=["responses"])


@router.post("", response_model=SubmitOut, status_code=201)
def submit_response(payload: ResponseIn, request: Request, storage: StorageDep):
    ip_address = request.client.host if request.client else None
    user_agent = request.headers.get("user-agent")
    try:
        saved = storage.submit_response(
            payload.form_id, payload.answers, ip_address=ip_address, user_agent=user_agent
        )
    except FormNotFound:
        raise HTTPException(status_code=404, detail="Form not found")

    logger.info("response %s submitted for form %s", saved.id, saved.form_id)
    return SubmitOut(id=saved.id, form_id=saved.form_id, submitted_at=saved.submitted_at)


@router.get("", response_model=ResponsePage)
def list_responses(
    storage: StorageDep,
    page: int = Query(default=1, ge=1),
    limit: int = Query(default=20, ge=1, le=100),
    form_id: Optional[str] = Query(default=None, alias="formId"),
):
    rows, total = storage.list_responses(form_id=form_id, page=page, limit=limit)
    return ResponsePage(
        responses=rows,
        pagination=Pagination(page=page, limit=limit, total=total, pages=page_count(total, limit)),
    )


@router.get("/form/{form_id}", response_model=List[FormResponse])
def responses_for_form(form_id: str, storage: StorageDep):
    if not storage.get_form(form_id):
        raise HTTPException(status_code=404, detail="Form not found")
    return storage.list_responses_for_form(form_id)


@router.get("/{response_id}", response_model=FormResponse)
def get_response(response_id: str, storage: StorageDep):
    r = storage.get_response(response_id)
    if not r:
        raise HTTPException(status_code=404, detail="Response not found")
    return r


@router.delete("/{response_id}", response_model=MessageOut)
def delete_response(response_id: str, storage: StorageDep):
    if not storage.delete_response(response_id):
        raise HTTPException(status_code=404, detail="Response not found")
    return {"message": "Response deleted successfully"}
