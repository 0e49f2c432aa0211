# Blank markers inside cloze text: "The [cat] sat on the [blank]."
from __future__ import annotations

import re
from typing import Any, Dict, List, Tuple

BLANK_RE = re.compile(r"\[([^\]]+)\]")
EMPTY_TOKEN = "blank"


def parse_blanks(text: str) -> List[Dict[str, Any]]:
    """
    Derive the blanks list from the bracket markers in ``text``, left to right.
    Ids are 1-based positions; the literal ``[blank]`` marker has no answer yet.
    """
    blanks: List[Dict[str, Any]] = []
    for idx, m in enumerate(BLANK_RE.finditer(text or ""), 1):
        token = m.group(1)
        blanks.append({"id": idx, "answer": "" if token == EMPTY_TOKEN else token})
    return blanks


def sync_blank_answer(
    text: str, blanks: List[Dict[str, Any]], blank_id: int, answer: str
) -> Tuple[str, List[Dict[str, Any]]]:
    """
    Set a blank's answer and rewrite the matching marker in ``text``.

    This is the form builder's edit step for cloze questions. The stores never call
    it: forms arrive with text and blanks already in step and are saved as sent.

    Markers pair with blanks by position. When the counts diverge, markers past
    the end of ``blanks`` are left as they are, and a blank with no marker at
    its position only changes in the blanks list.
    """
    position = next((i for i, b in enumerate(blanks) if b.get("id") == blank_id), None)
    if position is None:
        return text, list(blanks)

    new_blanks = [dict(b, answer=answer) if i == position else dict(b) for i, b in enumerate(blanks)]

    seen = 0

    def _swap(m: "re.Match[str]") -> str:
        nonlocal seen
        current = seen
        seen += 1
        if current == position:
            return f"[{answer}]"
        return m.group(0)

    return BLANK_RE.sub(_swap, text or ""), new_blanks
