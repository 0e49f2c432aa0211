from __future__ import annotations

import itertools
import threading
from typing import Dict, List, Optional, Sequence, Tuple

from schemas.forms import Form, FormIn
from schemas.responses import Answer, FormResponse
from storage.base import Clock, FormNotFound, Storage


class MemoryStorage(Storage):
    """Process-local store. Everything is lost on restart."""

    backend = "memory"

    def __init__(self, clock: Optional[Clock] = None):
        super().__init__(clock)
        self._forms: Dict[str, Form] = {}
        self._responses: Dict[str, FormResponse] = {}
        self._form_ids = itertools.count(1)
        self._response_ids = itertools.count(1)
        self._lock = threading.Lock()

    # --- forms ---

    def list_forms(self) -> List[Form]:
        with self._lock:
            forms = sorted(self._forms.values(), key=lambda f: f.updated_at, reverse=True)
        return [f.model_copy(deep=True) for f in forms]

    def get_form(self, form_id: str) -> Optional[Form]:
        form = self._forms.get(form_id)
        return form.model_copy(deep=True) if form else None

    def create_form(self, payload: FormIn) -> Form:
        with self._lock:
            now = self.clock()
            form = Form.model_validate(
                {
                    **payload.model_dump(),
                    "id": f"form_{next(self._form_ids)}",
                    "created_at": now,
                    "updated_at": now,
                }
            )
            self._forms[form.id] = form
        return form.model_copy(deep=True)

    def update_form(self, form_id: str, payload: FormIn) -> Optional[Form]:
        with self._lock:
            existing = self._forms.get(form_id)
            if existing is None:
                return None
            form = Form.model_validate(
                {
                    **payload.model_dump(),
                    "id": existing.id,
                    "created_at": existing.created_at,
                    "updated_at": self._touch(existing.updated_at),
                }
            )
            self._forms[form_id] = form
        return form.model_copy(deep=True)

    def delete_form(self, form_id: str) -> bool:
        with self._lock:
            return self._forms.pop(form_id, None) is not None

    # --- responses ---

    def submit_response(
        self,
        form_id: str,
        answers: Sequence[Answer],
        ip_address: Optional[str] = None,
        user_agent: Optional[str] = None,
    ) -> FormResponse:
        if form_id not in self._forms:
            raise FormNotFound(form_id)
        with self._lock:
            response = FormResponse(
                id=f"response_{next(self._response_ids)}",
                form_id=form_id,
                answers=[a.model_dump() for a in answers],
                submitted_at=self.clock(),
                ip_address=ip_address,
                user_agent=user_agent,
            )
            self._responses[response.id] = response
        return response.model_copy(deep=True)

    def _newest_first(self, form_id: Optional[str] = None) -> List[FormResponse]:
        with self._lock:
            rows = [r for r in self._responses.values() if form_id is None or r.form_id == form_id]
        rows.sort(key=lambda r: r.submitted_at, reverse=True)
        return rows

    def list_responses(
        self, form_id: Optional[str] = None, page: int = 1, limit: int = 20
    ) -> Tuple[List[FormResponse], int]:
        rows = self._newest_first(form_id)
        skip = (page - 1) * limit
        return [r.model_copy(deep=True) for r in rows[skip : skip + limit]], len(rows)

    def list_responses_for_form(self, form_id: str) -> List[FormResponse]:
        return [r.model_copy(deep=True) for r in self._newest_first(form_id)]

    def get_response(self, response_id: str) -> Optional[FormResponse]:
        r = self._responses.get(response_id)
        return r.model_copy(deep=True) if r else None

    def delete_response(self, response_id: str) -> bool:
        with self._lock:
            return self._responses.pop(response_id, None) is not None
