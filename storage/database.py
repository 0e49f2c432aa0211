from __future__ import annotations

import logging
from contextlib import contextmanager
from datetime import UTC, datetime
from typing import Iterator, List, Optional, Sequence, Tuple
from uuid import uuid4

from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from db import Base, make_session_factory
from models import FormRow, ResponseRow
from schemas.forms import Form, FormIn
from schemas.responses import Answer, FormResponse
from storage.base import Clock, FormNotFound, Storage, StorageError

logger = logging.getLogger(__name__)


def _aware(dt: datetime) -> datetime:
    # sqlite hands back naive datetimes even for timezone=True columns
    return dt if dt.tzinfo is not None else dt.replace(tzinfo=UTC)


def _new_id() -> str:
    return uuid4().hex


def _form_out(row: FormRow) -> Form:
    return Form.model_validate(
        {
            "id": row.id,
            "title": row.title,
            "description": row.description or "",
            "header_image": row.header_image,
            "questions": row.questions or [],
            "created_at": _aware(row.created_at),
            "updated_at": _aware(row.updated_at),
        }
    )


def _response_out(row: ResponseRow) -> FormResponse:
    return FormResponse.model_validate(
        {
            "id": row.id,
            "form_id": row.form_id,
            "answers": row.answers or [],
            "submitted_at": _aware(row.submitted_at),
            "ip_address": row.ip_address,
            "user_agent": row.user_agent,
        }
    )


def _questions_json(payload: FormIn) -> list:
    return [q.model_dump(mode="json", by_alias=True) for q in payload.questions]


class DatabaseStorage(Storage):
    """One row per document; every mutation is a single-row write and commit."""

    backend = "database"

    def __init__(self, engine: Engine, clock: Optional[Clock] = None, create_tables: bool = True):
        super().__init__(clock)
        self.engine = engine
        self._sessions = make_session_factory(engine)
        if create_tables:
            try:
                Base.metadata.create_all(engine)
            except SQLAlchemyError as e:
                raise StorageError(f"cannot create tables: {e}") from e

    @contextmanager
    def _session(self) -> Iterator[Session]:
        db = self._sessions()
        try:
            yield db
        except SQLAlchemyError as e:
            db.rollback()
            logger.exception("database operation failed")
            raise StorageError(f"{type(e).__name__}: {e}") from e
        finally:
            db.close()

    # --- forms ---

    def list_forms(self) -> List[Form]:
        with self._session() as db:
            rows = db.query(FormRow).order_by(FormRow.updated_at.desc()).all()
            return [_form_out(r) for r in rows]

    def get_form(self, form_id: str) -> Optional[Form]:
        with self._session() as db:
            row = db.get(FormRow, form_id)
            return _form_out(row) if row else None

    def create_form(self, payload: FormIn) -> Form:
        now = self.clock()
        with self._session() as db:
            row = FormRow(
                id=_new_id(),
                title=payload.title,
                description=payload.description,
                header_image=payload.header_image,
                questions=_questions_json(payload),
                created_at=now,
                updated_at=now,
            )
            db.add(row)
            db.commit()
            db.refresh(row)
            return _form_out(row)

    def update_form(self, form_id: str, payload: FormIn) -> Optional[Form]:
        with self._session() as db:
            row = db.get(FormRow, form_id)
            if not row:
                return None
            row.title = payload.title
            row.description = payload.description
            row.header_image = payload.header_image
            row.questions = _questions_json(payload)
            row.updated_at = self._touch(_aware(row.updated_at))
            db.commit()
            db.refresh(row)
            return _form_out(row)

    def delete_form(self, form_id: str) -> bool:
        with self._session() as db:
            row = db.get(FormRow, form_id)
            if not row:
                return False
            db.delete(row)
            db.commit()
            return True

    # --- responses ---

    def submit_response(
        self,
        form_id: str,
        answers: Sequence[Answer],
        ip_address: Optional[str] = None,
        user_agent: Optional[str] = None,
    ) -> FormResponse:
        with self._session() as db:
            if db.get(FormRow, form_id) is None:
                raise FormNotFound(form_id)
            row = ResponseRow(
                id=_new_id(),
                form_id=form_id,
                answers=[a.model_dump(mode="json", by_alias=True) for a in answers],
                submitted_at=self.clock(),
                ip_address=ip_address,
                user_agent=user_agent,
            )
            db.add(row)
            db.commit()
            db.refresh(row)
            return _response_out(row)

    def list_responses(
        self, form_id: Optional[str] = None, page: int = 1, limit: int = 20
    ) -> Tuple[List[FormResponse], int]:
        with self._session() as db:
            q = db.query(ResponseRow)
            if form_id is not None:
                q = q.filter(ResponseRow.form_id == form_id)
            total = q.count()
            rows = (
                q.order_by(ResponseRow.submitted_at.desc())
                .offset((page - 1) * limit)
                .limit(limit)
                .all()
            )
            return [_response_out(r) for r in rows], total

    def list_responses_for_form(self, form_id: str) -> List[FormResponse]:
        with self._session() as db:
            rows = (
                db.query(ResponseRow)
                .filter(ResponseRow.form_id == form_id)
                .order_by(ResponseRow.submitted_at.desc())
                .all()
            )
            return [_response_out(r) for r in rows]

    def get_response(self, response_id: str) -> Optional[FormResponse]:
        with self._session() as db:
            row = db.get(ResponseRow, response_id)
            return _response_out(row) if row else None

    def delete_response(self, response_id: str) -> bool:
        with self._session() as db:
            row = db.get(ResponseRow, response_id)
            if not row:
                return False
            db.delete(row)
            db.commit()
            return True

    def close(self) -> None:
        self.engine.dispose()
