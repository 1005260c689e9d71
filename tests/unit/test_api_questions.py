"""Tests for /questions endpoints."""

from __future__ import annotations

from typing import Any

from fastapi.testclient import TestClient

from qanda.core.errors import PersistenceError
from qanda.store.repository import EntityRepository

MISSING_ID = "0123456789abcdef01234567"


# -- POST /questions -----------------------------------------------------------


class TestCreateQuestion:
    def test_created(self, client: TestClient) -> None:
        body = {"title": "A", "description": "Why?", "category": "tech"}
        resp = client.post("/questions", json=body)
        assert resp.status_code == 201
        payload = resp.json()
        assert payload["message"]
        data = payload["data"]
        assert len(data["id"]) == 24
        for key, value in body.items():
            assert data[key] == value
        assert data["created_at"].endswith("+00:00")
        assert data["updated_at"] == data["created_at"]

    def test_missing_field(self, client: TestClient) -> None:
        resp = client.post("/questions", json={"title": "A", "category": "tech"})
        assert resp.status_code == 422

    def test_unknown_field_rejected(self, client: TestClient) -> None:
        body = {"title": "A", "description": "B", "category": "C", "admin": True}
        resp = client.post("/questions", json=body)
        assert resp.status_code == 422
        assert client.get("/questions").json()["data"] == []

    def test_store_failure_is_generic(
        self, client: TestClient, monkeypatch: Any
    ) -> None:
        async def _fail(self, kind, data):  # type: ignore[no-untyped-def]
            raise PersistenceError("disk on fire at /var/lib/secret")

        monkeypatch.setattr(EntityRepository, "create", _fail)
        body = {"title": "A", "description": "B", "category": "C"}
        resp = client.post("/questions", json=body)
        assert resp.status_code == 500
        assert resp.json() == {"detail": "Internal Server Error"}


# -- GET /questions ------------------------------------------------------------


class TestListQuestions:
    def test_empty(self, client: TestClient) -> None:
        resp = client.get("/questions")
        assert resp.status_code == 200
        assert resp.json()["data"] == []

    def test_default_page_size(self, client: TestClient, make_question: Any) -> None:
        for i in range(12):
            make_question(title=f"Question Title {i}")
        resp = client.get("/questions")
        assert len(resp.json()["data"]) == 10

    def test_explicit_limit(self, client: TestClient, make_question: Any) -> None:
        for i in range(4):
            make_question(title=f"Question Title {i}")
        resp = client.get("/questions", params={"limit": 2})
        assert len(resp.json()["data"]) == 2

    def test_limit_bounds(self, client: TestClient) -> None:
        assert client.get("/questions", params={"limit": 0}).status_code == 422
        assert client.get("/questions", params={"limit": 1000}).status_code == 422

    def test_title_filter(self, client: TestClient, make_question: Any) -> None:
        for i in range(1, 8):
            make_question(title=f"Question Title {i}")
        resp = client.get("/questions", params={"title": "QUESTION TITLE 5"})
        titles = [q["title"] for q in resp.json()["data"]]
        assert titles == ["Question Title 5"]

    def test_title_or_category(self, client: TestClient, make_question: Any) -> None:
        make_question(title="Rust ownership", category="programming")
        make_question(title="Sourdough", category="baking")
        make_question(title="Gardening", category="outdoors")
        resp = client.get(
            "/questions", params={"title": "sourdough", "category": "PROGRAM"}
        )
        titles = {q["title"] for q in resp.json()["data"]}
        assert titles == {"Rust ownership", "Sourdough"}


# -- GET/PUT /questions/{id} ---------------------------------------------------


class TestGetQuestion:
    def test_found(self, client: TestClient, make_question: Any) -> None:
        created = make_question(title="A")
        resp = client.get(f"/questions/{created['id']}")
        assert resp.status_code == 200
        assert resp.json()["data"] == created

    def test_not_found(self, client: TestClient) -> None:
        resp = client.get(f"/questions/{MISSING_ID}")
        assert resp.status_code == 404
        assert MISSING_ID in resp.json()["detail"]

    def test_malformed_id(self, client: TestClient) -> None:
        resp = client.get("/questions/not-an-object-id")
        assert resp.status_code == 400
        assert "Invalid identifier" in resp.json()["detail"]


class TestUpdateQuestion:
    def test_partial_update(self, client: TestClient, make_question: Any) -> None:
        created = make_question(title="Old", category="tech")
        resp = client.put(f"/questions/{created['id']}", json={"title": "New"})
        assert resp.status_code == 200
        data = resp.json()["data"]
        assert data["title"] == "New"
        assert data["category"] == "tech"
        assert data["description"] == created["description"]
        assert data["created_at"] == created["created_at"]
        assert data["updated_at"] >= created["updated_at"]

    def test_not_found(self, client: TestClient) -> None:
        resp = client.put(f"/questions/{MISSING_ID}", json={"title": "New"})
        assert resp.status_code == 404

    def test_empty_body(self, client: TestClient, make_question: Any) -> None:
        created = make_question()
        resp = client.put(f"/questions/{created['id']}", json={})
        assert resp.status_code == 422


# -- DELETE /questions/{id} ----------------------------------------------------


class TestDeleteQuestion:
    def test_deletes_with_answers(self, client: TestClient, make_question: Any) -> None:
        qid = make_question()["id"]
        answer_ids = [
            client.post(f"/questions/{qid}/answers", json={"content": f"a{i}"}).json()[
                "data"
            ]["id"]
            for i in range(3)
        ]

        resp = client.delete(f"/questions/{qid}")
        assert resp.status_code == 200
        assert resp.json()["data"] == {"id": qid, "deleted_answers": 3}

        assert client.get(f"/questions/{qid}").status_code == 404
        for aid in answer_ids:
            assert client.get(f"/answers/{aid}").status_code == 404

    def test_without_answers(self, client: TestClient, make_question: Any) -> None:
        qid = make_question()["id"]
        resp = client.delete(f"/questions/{qid}")
        assert resp.status_code == 200
        assert resp.json()["data"]["deleted_answers"] == 0

    def test_not_found(self, client: TestClient) -> None:
        assert client.delete(f"/questions/{MISSING_ID}").status_code == 404


# -- Answers under a question --------------------------------------------------


class TestQuestionAnswers:
    def test_create_and_list(self, client: TestClient, make_question: Any) -> None:
        qid = make_question()["id"]
        resp = client.post(f"/questions/{qid}/answers", json={"content": "hi"})
        assert resp.status_code == 201
        answer = resp.json()["data"]
        assert answer["question_id"] == qid
        assert answer["content"] == "hi"

        listed = client.get(f"/questions/{qid}/answers").json()["data"]
        assert listed == [answer]

    def test_list_for_missing_question(self, client: TestClient) -> None:
        assert client.get(f"/questions/{MISSING_ID}/answers").status_code == 404

    def test_create_for_missing_question(self, client: TestClient) -> None:
        resp = client.post(f"/questions/{MISSING_ID}/answers", json={"content": "x"})
        assert resp.status_code == 404

    def test_content_too_long(self, client: TestClient, make_question: Any) -> None:
        qid = make_question()["id"]
        resp = client.post(f"/questions/{qid}/answers", json={"content": "x" * 301})
        assert resp.status_code == 422


# -- Votes ---------------------------------------------------------------------


class TestQuestionVotes:
    def test_up_and_down(self, client: TestClient, make_question: Any) -> None:
        qid = make_question(title="A")["id"]
        client.post(f"/questions/{qid}/upvote")
        client.post(f"/questions/{qid}/upvote")
        resp = client.post(f"/questions/{qid}/downvote")
        assert resp.status_code == 200
        data = resp.json()["data"]
        assert data["id"] == qid
        assert data["title"] == "A"
        assert (data["upvotes"], data["downvotes"]) == (2, 1)

    def test_missing_question(self, client: TestClient) -> None:
        assert client.post(f"/questions/{MISSING_ID}/upvote").status_code == 404
        assert client.post(f"/questions/{MISSING_ID}/downvote").status_code == 404

    def test_malformed_id(self, client: TestClient) -> None:
        assert client.post("/questions/zzz/upvote").status_code == 400


def test_end_to_end_scenario(client: TestClient) -> None:
    q1 = client.post(
        "/questions",
        json={"title": "A", "description": "first", "category": "tech"},
    ).json()["data"]["id"]
    a1 = client.post(f"/questions/{q1}/answers", json={"content": "hi"}).json()[
        "data"
    ]["id"]

    client.post(f"/questions/{q1}/upvote")
    client.post(f"/questions/{q1}/upvote")
    tally = client.post(f"/questions/{q1}/downvote").json()["data"]
    assert (tally["upvotes"], tally["downvotes"]) == (2, 1)

    assert client.delete(f"/questions/{q1}").status_code == 200
    assert client.get(f"/questions/{q1}").status_code == 404
    assert client.get(f"/answers/{a1}").status_code == 404
