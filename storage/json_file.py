# storage/json_file.py
"""
File-backed fallback store: one JSON array per entity, rewritten on every mutation.

Each call is a full read-modify-write with no locking, so two overlapping
mutations can both read the old array and the later write wins. A write that
is interrupted mid-flight leaves a corrupt file; loading it raises StorageError.
"""

from __future__ import annotations

import json
import logging
import re
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence, Tuple

from pydantic import ValidationError

from schemas.forms import Form, FormIn
from schemas.responses import Answer, FormResponse
from storage.base import Clock, FormNotFound, Storage, StorageError

logger = logging.getLogger(__name__)

FORMS_FILE = "forms.json"
RESPONSES_FILE = "responses.json"
# high-water marks for id counters; never decreases, so deleted ids are not handed out again
COUNTERS_FILE = "counters.json"

_COUNTER_RE = re.compile(r"^(?:form|response)_(\d+)$")


def _highest(rows: List[Dict[str, Any]], key: str = "id") -> int:
    highest = 0
    for row in rows:
        m = _COUNTER_RE.match(str(row.get(key, "")))
        if m:
            highest = max(highest, int(m.group(1)))
    return highest


class JsonFileStorage(Storage):
    backend = "json-file"

    def __init__(self, data_dir: str | Path, clock: Optional[Clock] = None):
        super().__init__(clock)
        self.data_dir = Path(data_dir)
        try:
            self.data_dir.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise StorageError(f"cannot create data dir {self.data_dir}: {e}") from e

    # --- raw file access ---

    def _read(self, name: str, default: Any) -> Any:
        p = self.data_dir / name
        if not p.exists():
            return default
        try:
            with p.open("r", encoding="utf-8") as f:
                return json.load(f)
        except (OSError, UnicodeDecodeError, json.JSONDecodeError) as e:
            # no recovery: a half-written file stays broken until fixed by hand
            logger.error("Failed to read %s: %s", p, e)
            raise StorageError(f"cannot read {p}: {e}") from e

    def _load(self, name: str) -> List[Dict[str, Any]]:
        data = self._read(name, [])
        if not isinstance(data, list):
            raise StorageError(f"{self.data_dir / name} does not hold a JSON array")
        if not all(isinstance(row, dict) for row in data):
            raise StorageError(f"{self.data_dir / name} holds non-object records")
        return data

    def _save(self, name: str, rows: Any) -> None:
        p = self.data_dir / name
        try:
            with p.open("w", encoding="utf-8") as f:
                json.dump(rows, f, ensure_ascii=False, indent=2)
        except (OSError, TypeError) as e:
            raise StorageError(f"cannot write {p}: {e}") from e

    def _allocate_id(self, prefix: str, rows: List[Dict[str, Any]], floor: int = 0) -> str:
        counters = self._read(COUNTERS_FILE, {})
        if not isinstance(counters, dict) or not all(
            isinstance(v, int) for v in counters.values()
        ):
            raise StorageError(f"{self.data_dir / COUNTERS_FILE} is not a map of counters")

        # data dirs written before counters.json existed still get a safe start
        n = max(counters.get(prefix, 0), _highest(rows), floor) + 1
        counters[prefix] = n
        self._save(COUNTERS_FILE, counters)
        return f"{prefix}_{n}"

    @staticmethod
    def _dump(model: Form | FormResponse) -> Dict[str, Any]:
        return model.model_dump(mode="json", by_alias=True)

    def _forms(self) -> List[Form]:
        try:
            return [Form.model_validate(raw) for raw in self._load(FORMS_FILE)]
        except ValidationError as e:
            raise StorageError(f"invalid record in {FORMS_FILE}: {e}") from e

    def _responses(self) -> List[FormResponse]:
        try:
            return [FormResponse.model_validate(raw) for raw in self._load(RESPONSES_FILE)]
        except ValidationError as e:
            raise StorageError(f"invalid record in {RESPONSES_FILE}: {e}") from e

    # --- forms ---

    def list_forms(self) -> List[Form]:
        return sorted(self._forms(), key=lambda f: f.updated_at, reverse=True)

    def get_form(self, form_id: str) -> Optional[Form]:
        return next((f for f in self._forms() if f.id == form_id), None)

    def create_form(self, payload: FormIn) -> Form:
        rows = self._load(FORMS_FILE)
        # orphaned responses keep their formId; a new form must not inherit them
        form_id = self._allocate_id(
            "form", rows, floor=_highest(self._load(RESPONSES_FILE), "formId")
        )
        now = self.clock()
        form = Form.model_validate(
            {
                **payload.model_dump(),
                "id": form_id,
                "created_at": now,
                "updated_at": now,
            }
        )
        rows.append(self._dump(form))
        self._save(FORMS_FILE, rows)
        return form

    def update_form(self, form_id: str, payload: FormIn) -> Optional[Form]:
        rows = self._load(FORMS_FILE)
        for idx, raw in enumerate(rows):
            if raw.get("id") != form_id:
                continue
            existing = Form.model_validate(raw)
            form = Form.model_validate(
                {
                    **payload.model_dump(),
                    "id": existing.id,
                    "created_at": existing.created_at,
                    "updated_at": self._touch(existing.updated_at),
                }
            )
            rows[idx] = self._dump(form)
            self._save(FORMS_FILE, rows)
            return form
        return None

    def delete_form(self, form_id: str) -> bool:
        rows = self._load(FORMS_FILE)
        kept = [r for r in rows if r.get("id") != form_id]
        if len(kept) == len(rows):
            return False
        self._save(FORMS_FILE, kept)
        return True

    # --- responses ---

    def submit_response(
        self,
        form_id: str,
        answers: Sequence[Answer],
        ip_address: Optional[str] = None,
        user_agent: Optional[str] = None,
    ) -> FormResponse:
        if self.get_form(form_id) is None:
            raise FormNotFound(form_id)

        rows = self._load(RESPONSES_FILE)
        response = FormResponse(
            id=self._allocate_id("response", rows),
            form_id=form_id,
            answers=[a.model_dump() for a in answers],
            submitted_at=self.clock(),
            ip_address=ip_address,
            user_agent=user_agent,
        )
        rows.append(self._dump(response))
        self._save(RESPONSES_FILE, rows)
        return response

    def _newest_first(self, form_id: Optional[str] = None) -> List[FormResponse]:
        rows = [r for r in self._responses() if form_id is None or r.form_id == form_id]
        rows.sort(key=lambda r: r.submitted_at, reverse=True)
        return rows

    def list_responses(
        self, form_id: Optional[str] = None, page: int = 1, limit: int = 20
    ) -> Tuple[List[FormResponse], int]:
        rows = self._newest_first(form_id)
        skip = (page - 1) * limit
        return rows[skip : skip + limit], len(rows)

    def list_responses_for_form(self, form_id: str) -> List[FormResponse]:
        return self._newest_first(form_id)

    def get_response(self, response_id: str) -> Optional[FormResponse]:
        return next((r for r in self._responses() if r.id == response_id), None)

    def delete_response(self, response_id: str) -> bool:
        rows = self._load(RESPONSES_FILE)
        kept = [r for r in rows if r.get("id") != response_id]
        if len(kept) == len(rows):
            return False
        self._save(RESPONSES_FILE, kept)
        return True
