from __future__ import annotations

from datetime import datetime
from typing import List, Optional

from pydantic import Field, field_validator, model_validator

from schemas.questions import CamelModel, Question


class FormIn(CamelModel):
    """Body of POST /forms and PUT /forms/{id}: every mutable field, replaced wholesale."""

    title: str = "Untitled Form"
    description: str = ""
    header_image: Optional[str] = None
    questions: List[Question] = Field(default_factory=list)

    @field_validator("title", mode="before")
    @classmethod
    def _default_title(cls, v):
        # the builder sends "" or null for a cleared title
        return "Untitled Form" if v is None or v == "" else v

    @field_validator("description", mode="before")
    @classmethod
    def _default_description(cls, v):
        return "" if v is None else v

    @model_validator(mode="after")
    def _unique_question_ids(self) -> "FormIn":
        seen = set()
        dupes = []
        for q in self.questions:
            if q.id in seen:
                dupes.append(q.id)
            seen.add(q.id)
        if dupes:
            raise ValueError(f"duplicate question ids: {sorted(set(dupes))}")
        return self


class Form(FormIn):
    id: str
    created_at: datetime
    updated_at: datetime


class FormSummary(CamelModel):
    id: str
    title: str
    description: str = ""
    created_at: datetime
    updated_at: datetime
    question_count: int

    @classmethod
    def from_form(cls, form: Form) -> "FormSummary":
        return cls(
            id=form.id,
            title=form.title,
            description=form.description,
            created_at=form.created_at,
            updated_at=form.updated_at,
            question_count=len(form.questions),
        )


class MessageOut(CamelModel):
    message: str
