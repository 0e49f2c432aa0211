from __future__ import annotations

from datetime import datetime
from typing import Annotated, Dict, List, Literal, Optional, Union

from pydantic import Field

from schemas.questions import CamelModel

# ---------- Answers ----------


class AnswerBase(CamelModel):
    question_id: str
    # keys: item (categorize), blank index (cloze), sub-question id (comprehension)
    data: Dict[str, str] = Field(default_factory=dict)


class CategorizeAnswer(AnswerBase):
    type: Literal["categorize"]


class ClozeAnswer(AnswerBase):
    type: Literal["cloze"]


class ComprehensionAnswer(AnswerBase):
    type: Literal["comprehension"]


Answer = Annotated[
    Union[CategorizeAnswer, ClozeAnswer, ComprehensionAnswer],
    Field(discriminator="type"),
]


# ---------- Submit ----------


class ResponseIn(CamelModel):
    form_id: str
    answers: List[Answer] = Field(default_factory=list)


class SubmitOut(CamelModel):
    id: str
    form_id: str
    submitted_at: datetime
    message: str = "Response submitted successfully"


# ---------- Stored ----------


class FormResponse(CamelModel):
    id: str
    form_id: str
    answers: List[Answer] = Field(default_factory=list)
    submitted_at: datetime
    ip_address: Optional[str] = None
    user_agent: Optional[str] = None


# ---------- Listing ----------


class Pagination(CamelModel):
    page: int
    limit: int
    total: int
    pages: int


class ResponsePage(CamelModel):
    responses: List[FormResponse]
    pagination: Pagination
