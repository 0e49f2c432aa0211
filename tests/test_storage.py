from datetime import UTC, datetime

import pytest

from schemas.forms import FormIn
from schemas.responses import ClozeAnswer
from storage.base import FormNotFound


def _form(title="Quiz", **extra):
    return FormIn.model_validate({"title": title, **extra})


CLOZE_FORM = {
    "title": "Quiz",
    "questions": [
        {"type": "cloze", "data": {"text": "A [cat] sat.", "blanks": [{"id": 1, "answer": "cat"}]}}
    ],
}


def test_create_assigns_server_fields(store):
    f = store.create_form(_form(description="d"))
    assert f.id
    assert f.created_at == f.updated_at
    assert f.created_at.tzinfo is not None
    assert f.title == "Quiz" and f.description == "d"


def test_create_then_get_returns_same_form(store):
    created = store.create_form(FormIn.model_validate(CLOZE_FORM))
    fetched = store.get_form(created.id)
    assert fetched == created


def test_cloze_scenario(store):
    f = store.create_form(FormIn.model_validate(CLOZE_FORM))
    stored = store.get_form(f.id)
    assert len(stored.questions) == 1
    q = stored.questions[0]
    assert q.type == "cloze"
    assert [(b.id, b.answer) for b in q.data.blanks] == [(1, "cat")]


def test_get_missing_returns_none(store):
    assert store.get_form("nope") is None


def test_update_keeps_id_and_created_at(store):
    f = store.create_form(_form())
    u = store.update_form(f.id, _form("Renamed"))
    assert u.id == f.id
    assert u.created_at == f.created_at
    assert u.updated_at > f.updated_at
    assert store.get_form(f.id).title == "Renamed"


def test_update_is_full_replace(store):
    f = store.create_form(
        _form(description="old", headerImage="data:image/png;base64,xx", questions=CLOZE_FORM["questions"])
    )
    u = store.update_form(f.id, _form("Only title"))
    assert u.description == ""
    assert u.header_image is None
    assert u.questions == []


def test_update_never_moves_updated_at_backwards(store):
    f = store.create_form(_form())
    store.clock = lambda: datetime(2000, 1, 1, tzinfo=UTC)
    u = store.update_form(f.id, _form("Again"))
    assert u.updated_at == f.updated_at


def test_update_missing_returns_none(store):
    assert store.update_form("nope", _form()) is None


def test_delete_then_get_is_not_found(store):
    f = store.create_form(_form())
    assert store.delete_form(f.id) is True
    assert store.get_form(f.id) is None
    assert store.delete_form(f.id) is False


def test_list_empty(store):
    assert store.list_forms() == []


def test_list_sorted_by_updated_at_desc(store):
    a = store.create_form(_form("a"))
    b = store.create_form(_form("b"))
    c = store.create_form(_form("c"))
    store.update_form(a.id, _form("a2"))

    forms = store.list_forms()
    assert [f.id for f in forms] == [a.id, c.id, b.id]
    stamps = [f.updated_at for f in forms]
    assert stamps == sorted(stamps, reverse=True)


def test_submit_for_missing_form_writes_nothing(store):
    with pytest.raises(FormNotFound):
        store.submit_response("nope", [])
    rows, total = store.list_responses()
    assert rows == [] and total == 0


def test_submit_and_fetch_response(store):
    f = store.create_form(FormIn.model_validate(CLOZE_FORM))
    qid = f.questions[0].id
    answer = ClozeAnswer(type="cloze", question_id=qid, data={"0": "cat"})

    r = store.submit_response(f.id, [answer], ip_address="10.0.0.1", user_agent="pytest")
    got = store.get_response(r.id)
    assert got.form_id == f.id
    assert got.answers[0].question_id == qid
    assert got.answers[0].data == {"0": "cat"}
    assert got.ip_address == "10.0.0.1" and got.user_agent == "pytest"


def test_list_responses_paging_and_filter(store):
    f1 = store.create_form(_form("one"))
    f2 = store.create_form(_form("two"))
    ids = [store.submit_response(f1.id, []).id for _ in range(3)]
    other = store.submit_response(f2.id, []).id

    rows, total = store.list_responses(page=1, limit=2)
    assert total == 4
    assert [r.id for r in rows] == [other, ids[2]]

    rows, total = store.list_responses(form_id=f1.id, page=2, limit=2)
    assert total == 3
    assert [r.id for r in rows] == [ids[0]]

    assert [r.id for r in store.list_responses_for_form(f1.id)] == list(reversed(ids))


def test_delete_form_leaves_responses(store):
    f = store.create_form(_form())
    r = store.submit_response(f.id, [])
    store.delete_form(f.id)
    assert store.get_response(r.id) is not None


def test_delete_response(store):
    f = store.create_form(_form())
    r = store.submit_response(f.id, [])
    assert store.delete_response(r.id) is True
    assert store.get_response(r.id) is None
    assert store.delete_response(r.id) is False


def test_id_scheme(store):
    f = store.create_form(_form())
    if store.backend == "database":
        assert len(f.id) == 32 and not f.id.startswith("form_")
    else:
        assert f.id == "form_1"
