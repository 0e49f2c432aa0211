# schemas/questions.py
from __future__ import annotations

from typing import Annotated, List, Literal, Optional, Union
from uuid import uuid4

from pydantic import BaseModel, ConfigDict, Field, model_validator
from pydantic.alias_generators import to_camel

from cloze import parse_blanks


class CamelModel(BaseModel):
    # snake_case in Python, camelCase on the wire; accept either on input
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class PayloadModel(CamelModel):
    # payload keys we don't model are kept as-is
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="allow")


def _question_id() -> str:
    return f"q_{uuid4().hex[:12]}"


# ---------- Categorize ----------


class CategorizeData(PayloadModel):
    categories: List[str] = []
    items: List[str] = []


# ---------- Cloze ----------


class ClozeBlank(PayloadModel):
    id: int
    answer: str = ""


class ClozeData(PayloadModel):
    text: str = ""
    blanks: List[ClozeBlank] = []

    @model_validator(mode="after")
    def _derive_blanks(self) -> "ClozeData":
        # A client may send only the marked-up text
        if not self.blanks and self.text:
            self.blanks = [ClozeBlank(**b) for b in parse_blanks(self.text)]
        return self


# ---------- Comprehension ----------

SubQuestionType = Literal["text", "multiple-choice", "true-false"]


class SubQuestion(PayloadModel):
    id: int
    question: str = ""
    type: SubQuestionType = "text"
    options: Optional[List[str]] = None
    correct_answer: Optional[str] = None


class ComprehensionData(PayloadModel):
    passage: str = ""
    questions: List[SubQuestion] = []


# ---------- Question union ----------


class QuestionBase(CamelModel):
    id: str = Field(default_factory=_question_id)
    title: str = ""
    image: Optional[str] = None


class CategorizeQuestion(QuestionBase):
    type: Literal["categorize"]
    data: CategorizeData = Field(default_factory=CategorizeData)


class ClozeQuestion(QuestionBase):
    type: Literal["cloze"]
    data: ClozeData = Field(default_factory=ClozeData)


class ComprehensionQuestion(QuestionBase):
    type: Literal["comprehension"]
    data: ComprehensionData = Field(default_factory=ComprehensionData)


Question = Annotated[
    Union[CategorizeQuestion, ClozeQuestion, ComprehensionQuestion],
    Field(discriminator="type"),
]
