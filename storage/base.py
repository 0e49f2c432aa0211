"""
Storage contract shared by every backend.

Absent ids are reported with ``None`` (get/update) or ``False`` (delete) rather
than by raising. Backend failures surface as ``StorageError`` and are not retried.
"""

from __future__ import annotations

import math
from abc import ABC, abstractmethod
from datetime import UTC, datetime
from typing import Callable, List, Optional, Sequence, Tuple

from schemas.forms import Form, FormIn
from schemas.responses import Answer, FormResponse

Clock = Callable[[], datetime]


def utcnow() -> datetime:
    return datetime.now(UTC)


class StorageError(Exception):
    """Any database or file-system failure inside a store."""


class FormNotFound(LookupError):
    def __init__(self, form_id: str):
        super().__init__(f"Form not found: {form_id}")
        self.form_id = form_id


def page_count(total: int, limit: int) -> int:
    return math.ceil(total / limit) if limit else 0


class Storage(ABC):
    backend: str = "abstract"

    def __init__(self, clock: Optional[Clock] = None):
        self.clock: Clock = clock or utcnow

    def _touch(self, previous: datetime) -> datetime:
        # updatedAt never moves backwards, even if the clock does
        now = self.clock()
        return now if now >= previous else previous

    # --- forms ---

    @abstractmethod
    def list_forms(self) -> List[Form]: ...

    @abstractmethod
    def get_form(self, form_id: str) -> Optional[Form]: ...

    @abstractmethod
    def create_form(self, payload: FormIn) -> Form: ...

    @abstractmethod
    def update_form(self, form_id: str, payload: FormIn) -> Optional[Form]: ...

    @abstractmethod
    def delete_form(self, form_id: str) -> bool: ...

    # --- responses ---

    @abstractmethod
    def submit_response(
        self,
        form_id: str,
        answers: Sequence[Answer],
        ip_address: Optional[str] = None,
        user_agent: Optional[str] = None,
    ) -> FormResponse: ...

    @abstractmethod
    def list_responses(
        self, form_id: Optional[str] = None, page: int = 1, limit: int = 20
    ) -> Tuple[List[FormResponse], int]: ...

    @abstractmethod
    def list_responses_for_form(self, form_id: str) -> List[FormResponse]: ...

    @abstractmethod
    def get_response(self, response_id: str) -> Optional[FormResponse]: ...

    @abstractmethod
    def delete_response(self, response_id: str) -> bool: ...

    def close(self) -> None:
        return None
