from pathlib import Path

import pytest
from fastapi.testclient import TestClient

from api.app import app
from api.utils import paths
from models import PALETTE_ID, end_sentinel


@pytest.fixture
def client(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> TestClient:
    monkeypatch.setattr(paths, "FORMS_DIR", tmp_path)
    return TestClient(app)


def _form_payload() -> dict[str, object]:
    return {
        "formName": "Commute",
        "questions": [
            {
                "clientId": "A",
                "questionType": "mcq",
                "questionText": "Do you drive?",
                "choices": [
                    {"text": "yes", "nextQuestionId": "C"},
                    {"text": "no"},
                ],
            },
            {"clientId": "B", "questionType": "text", "questionText": "Why not?"},
            {
                "clientId": "C",
                "questionType": "text",
                "questionText": "Car model",
                "minLength": 2,
                "maxLength": 10,
            },
        ],
    }


def test_save_and_load_form(client: TestClient, tmp_path: Path) -> None:
    response = client.post("/api/forms", json=_form_payload())
    assert response.status_code == 201
    form_id = response.json()["formId"]
    assert (tmp_path / form_id / "form.json").exists()

    stored = client.get(f"/api/forms/{form_id}").json()
    assert stored["formName"] == "Commute"
    assert [question["clientId"] for question in stored["questions"]] == ["A", "B", "C"]


def test_save_form_rejects_incomplete_form(client: TestClient) -> None:
    payload = _form_payload()
    payload["formName"] = ""
    response = client.post("/api/forms", json=payload)
    assert response.status_code == 400
    assert response.json()["detail"]["error"] == "Invalid form data"
    assert "Form title is required" in response.json()["detail"]["problems"]

    response = client.post("/api/forms", json={"formName": "x"})
    assert response.status_code == 422


def test_responses_for_unknown_questions_rejected(client: TestClient) -> None:
    form_id = client.post("/api/forms", json=_form_payload()).json()["formId"]
    response = client.post(
        f"/api/forms/{form_id}/responses",
        json={"answers": [{"questionId": "Z", "text": "hi"}]},
    )
    assert response.status_code == 400

    response = client.post(
        f"/api/forms/{form_id}/responses",
        json={"answers": [{"questionId": "B", "text": "bus"}]},
    )
    assert response.status_code == 201
    stored = client.get(f"/api/forms/{form_id}/responses").json()
    assert stored[0]["answers"] == [{"questionId": "B", "text": "bus"}]

    assert client.get("/api/forms/missing/responses").status_code == 404


def test_drag_gestures_build_a_form(client: TestClient) -> None:
    builder_id = client.post("/api/builders", json={"title": "Drag"}).json()["builderId"]
    base = f"/api/builders/{builder_id}"

    assert client.post(f"{base}/drag/start", json={"activeId": f"{PALETTE_ID}-text"}).json()["active"]
    first = client.post(f"{base}/drag/end", json={"overId": end_sentinel("form")}).json()
    assert first["action"] == "inserted"

    client.post(f"{base}/drag/start", json={"activeId": f"{PALETTE_ID}-mcq"})
    over = client.post(f"{base}/drag/over", json={"overId": first["itemId"]}).json()
    assert over["placement"] == {"containerId": "form", "index": 0, "delete": False}
    second = client.post(f"{base}/drag/end", json={"overId": first["itemId"]}).json()
    ids = [question["clientId"] for question in second["form"]["questions"]]
    assert ids == [second["itemId"], first["itemId"]]

    client.post(f"{base}/drag/start", json={"activeId": first["itemId"]})
    removed = client.post(f"{base}/drag/end", json={"overId": PALETTE_ID}).json()
    assert removed["action"] == "deleted"
    assert len(removed["form"]["questions"]) == 1

    client.post(f"{base}/drag/start", json={"activeId": second["itemId"]})
    assert client.post(f"{base}/drag/end", json={}).json()["action"] == "noop"


def test_preview_branching_round_trip(client: TestClient) -> None:
    created = client.post("/api/builders", json={"form": _form_payload()})
    assert created.status_code == 201
    builder_id = created.json()["builderId"]
    base = f"/api/builders/{builder_id}"

    state = client.post(f"{base}/preview").json()
    assert state["mode"] == "previewing"
    assert state["preview"]["currentIndex"] == 0

    refused = client.post(f"{base}/preview/next").json()
    assert refused["moved"] is False

    client.post(f"{base}/preview/answers", json={"questionId": "A", "value": 0})
    moved = client.post(f"{base}/preview/next").json()
    assert moved["currentIndex"] == 2
    assert moved["history"] == [0]

    back = client.post(f"{base}/preview/previous").json()
    assert back["currentIndex"] == 0
    assert back["history"] == []

    client.post(f"{base}/preview/next")
    client.post(f"{base}/preview/answers", json={"questionId": "C", "value": "Volvo"})
    assert client.get(f"{base}/preview").json()["canSubmit"] is True

    form_id = client.post(f"{base}/submit").json()["formId"]
    submitted = client.post(f"{base}/preview/submit", json={"formId": form_id})
    assert submitted.status_code == 201
    stored = client.get(f"/api/forms/{form_id}/responses").json()
    assert stored[0]["answers"] == [
        {"questionId": "A", "choiceText": "yes"},
        {"questionId": "C", "text": "Volvo"},
    ]


def test_editing_is_locked_during_preview(client: TestClient) -> None:
    builder_id = client.post("/api/builders", json={"form": _form_payload()}).json()["builderId"]
    base = f"/api/builders/{builder_id}"
    client.post(f"{base}/preview")
    response = client.post(f"{base}/questions", json={"kind": "text"})
    assert response.status_code == 409
    assert client.post(f"{base}/drag/start", json={"activeId": "A"}).json()["active"] is False

    state = client.delete(f"{base}/preview").json()
    assert state["mode"] == "editing"
    assert client.post(f"{base}/questions", json={"kind": "text"}).status_code == 201


def test_explicit_authoring_endpoints(client: TestClient) -> None:
    builder_id = client.post("/api/builders", json={"title": "Edit"}).json()["builderId"]
    base = f"/api/builders/{builder_id}"

    section_id = client.post(f"{base}/sections", json={"header": "Intro"}).json()["sectionId"]
    question_id = client.post(
        f"{base}/questions", json={"kind": "mcq", "containerId": section_id}
    ).json()["questionId"]
    target_id = client.post(f"{base}/questions", json={"kind": "text"}).json()["questionId"]

    edited = client.patch(
        f"{base}/questions/{question_id}",
        json={"questionText": "Pick", "choices": [{"text": "x"}, {"text": "y"}]},
    )
    assert edited.status_code == 200
    assert client.patch(f"{base}/questions/{question_id}", json={"minLength": 2}).status_code == 400

    branched = client.put(
        f"{base}/questions/{question_id}/branches",
        json={"choiceIndex": 1, "targetId": target_id},
    ).json()
    choices = branched["form"]["questions"][0]["choices"]
    assert choices[1]["nextQuestionId"] == target_id
    assert client.put(
        f"{base}/questions/{question_id}/branches",
        json={"choiceIndex": 0, "targetId": "nope"},
    ).status_code == 400

    assert client.delete(f"{base}/items/{section_id}").status_code == 200
    assert client.delete(f"{base}/items/{section_id}").status_code == 404
    assert client.get("/api/builders/missing").status_code == 404


def test_answers_rejected_for_dot_form_id(client: TestClient, tmp_path: Path) -> None:
    (tmp_path / "form.json").write_text('{"id": "outside", "questions": []}', encoding="utf-8")
    builder_id = client.post("/api/builders", json={"form": _form_payload()}).json()["builderId"]
    base = f"/api/builders/{builder_id}"
    client.post(f"{base}/preview")
    client.post(f"{base}/preview/answers", json={"questionId": "A", "value": 0})
    client.post(f"{base}/preview/next")
    client.post(f"{base}/preview/answers", json={"questionId": "C", "value": "Volvo"})

    for form_id in (".", ".."):
        response = client.post(f"{base}/preview/submit", json={"formId": form_id})
        assert response.status_code == 400
        assert response.json()["detail"] == "Invalid formId"
