CLOZE_QUESTION = {
    "id": "q1",
    "type": "cloze",
    "title": "Fill in",
    "data": {"text": "A [cat] sat.", "blanks": [{"id": 1, "answer": "cat"}]},
}


def test_create_form_defaults(client):
    r = client.post("/api/forms", json={})
    assert r.status_code == 201
    body = r.json()
    assert body["title"] == "Untitled Form"
    assert body["description"] == ""
    assert body["questions"] == []
    assert body["createdAt"] == body["updatedAt"]


def test_blank_title_and_null_description_get_defaults(client):
    r = client.post("/api/forms", json={"title": "", "description": None})
    assert r.status_code == 201
    assert r.json()["title"] == "Untitled Form"
    assert r.json()["description"] == ""

    r = client.put(f"/api/forms/{r.json()['id']}", json={"title": None, "description": "d"})
    assert r.status_code == 200
    assert r.json()["title"] == "Untitled Form" and r.json()["description"] == "d"


def test_create_and_get_form(client):
    r = client.post("/api/forms", json={"title": "Quiz", "questions": [CLOZE_QUESTION]})
    assert r.status_code == 201
    form_id = r.json()["id"]

    r2 = client.get(f"/api/forms/{form_id}")
    assert r2.status_code == 200
    body = r2.json()
    assert body["title"] == "Quiz"
    q = body["questions"][0]
    assert q["type"] == "cloze"
    assert q["data"]["blanks"] == [{"id": 1, "answer": "cat"}]


def test_all_question_types_roundtrip(client):
    questions = [
        {
            "id": "c1",
            "type": "categorize",
            "title": "Sort",
            "data": {"categories": ["Fruit", "Veg"], "items": ["Apple", "Leek"]},
        },
        CLOZE_QUESTION,
        {
            "id": "r1",
            "type": "comprehension",
            "title": "Read",
            "image": "https://example.com/p.png",
            "data": {
                "passage": "Once upon a time.",
                "questions": [
                    {
                        "id": 1,
                        "question": "When?",
                        "type": "multiple-choice",
                        "options": ["Once", "Twice"],
                        "correctAnswer": "Once",
                    }
                ],
            },
        },
    ]
    r = client.post("/api/forms", json={"title": "Mixed", "questions": questions})
    assert r.status_code == 201
    body = client.get(f"/api/forms/{r.json()['id']}").json()
    assert [q["type"] for q in body["questions"]] == ["categorize", "cloze", "comprehension"]
    sub = body["questions"][2]["data"]["questions"][0]
    assert sub["correctAnswer"] == "Once" and sub["options"] == ["Once", "Twice"]


def test_list_forms_summary(client):
    client.post("/api/forms", json={"title": "first"})
    client.post("/api/forms", json={"title": "second", "questions": [CLOZE_QUESTION]})
    r = client.get("/api/forms")
    assert r.status_code == 200
    items = r.json()
    assert [f["title"] for f in items] == ["second", "first"]
    assert items[0]["questionCount"] == 1
    assert "questions" not in items[0]


def test_update_form_replaces_fields(client):
    created = client.post(
        "/api/forms", json={"title": "t", "description": "d", "headerImage": "img"}
    ).json()
    r = client.put(f"/api/forms/{created['id']}", json={"title": "t2"})
    assert r.status_code == 200
    body = r.json()
    assert body["id"] == created["id"]
    assert body["createdAt"] == created["createdAt"]
    assert body["title"] == "t2" and body["description"] == "" and body["headerImage"] is None


def test_form_404s(client):
    assert client.get("/api/forms/missing").status_code == 404
    assert client.put("/api/forms/missing", json={"title": "x"}).status_code == 404
    assert client.delete("/api/forms/missing").status_code == 404


def test_delete_form(client):
    form_id = client.post("/api/forms", json={"title": "bye"}).json()["id"]
    r = client.delete(f"/api/forms/{form_id}")
    assert r.status_code == 200
    assert r.json()["message"] == "Form deleted successfully"
    assert client.get(f"/api/forms/{form_id}").status_code == 404


def test_unknown_question_type_is_400(client):
    r = client.post("/api/forms", json={"questions": [{"type": "essay", "data": {}}]})
    assert r.status_code == 400


def test_missing_question_type_is_400(client):
    r = client.post("/api/forms", json={"questions": [{"title": "no type"}]})
    assert r.status_code == 400


def test_duplicate_question_ids_is_400(client):
    r = client.post("/api/forms", json={"questions": [CLOZE_QUESTION, CLOZE_QUESTION]})
    assert r.status_code == 400
    assert client.get("/api/forms").json() == []
