# routers/forms.py
from __future__ import annotations

import logging
from typing import List

from fastapi import APIRouter, HTTPException

from deps.storage import StorageDep
from schemas.forms import Form, FormIn, FormSummary, MessageOut

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/forms", tags=["forms"])


@router.get("", response_model=List[FormSummary])
def list_forms(storage: StorageDep):
    # list view: summary fields only, question payloads dropped
    return [FormSummary.from_form(f) for f in storage.list_forms()]


@router.get("/{form_id}", response_model=Form)
def get_form(form_id: str, storage: StorageDep):
    form = storage.get_form(form_id)
    if not form:
        raise HTTPException(status_code=404, detail="Form not found")
    return form


@router.post("", response_model=Form, status_code=201)
def create_form(payload: FormIn, storage: StorageDep):
    form = storage.create_form(payload)
    logger.info("created form %s (%d questions)", form.id, len(form.questions))
    return form


@router.put("/{form_id}", response_model=Form)
def update_form(form_id: str, payload: FormIn, storage: StorageDep):
    form = storage.update_form(form_id, payload)
    if not form:
        raise HTTPException(status_code=404, detail="Form not found")
    return form


@router.delete("/{form_id}", response_model=MessageOut)
def delete_form(form_id: str, storage: StorageDep):
    if not storage.delete_form(form_id):
        raise HTTPException(status_code=404, detail="Form not found")
    return {"message": "Form deleted successfully"}
