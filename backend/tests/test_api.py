"""
Fake Stack Overflow Backend — API Endpoint Tests
==================================================

What:  End-to-end tests through the FastAPI app (HTTPX + ASGITransport).

What we test:
    ✅ Posting questions and answers (201) and reading them back
    ✅ Form errors → 400 with per-field messages
    ✅ Unknown ids → 404, malformed ids → 422
    ✅ Listings, tag pages, search, view counts
    ✅ Health check and request ID header
"""

from uuid import uuid4

import pytest


async def post_question(client, **overrides):
    body = {
        "title": "How do I center a div?",
        "text": "Flexbox or grid, see [MDN](https://developer.mozilla.org).",
        "tags": "css html",
        "asked_by": "alice",
    }
    body.update(overrides)
    return await client.post("/api/questions", json=body)


class TestQuestionEndpoints:

    @pytest.mark.asyncio
    async def test_post_and_get_question(self, test_client):
        created = await post_question(test_client)

        assert created.status_code == 201
        data = created.json()
        assert data["views"] == 0
        assert data["answers"] == []
        assert len(data["tags"]) == 2

        fetched = await test_client.get(f"/api/questions/{data['id']}")
        assert fetched.status_code == 200
        assert fetched.json()["title"] == "How do I center a div?"

    @pytest.mark.asyncio
    async def test_post_invalid_question(self, test_client):
        response = await post_question(
            test_client,
            title="x" * 101,
            tags="a b c d e f",
            text="[broken](ftp://example.com)",
        )

        assert response.status_code == 400
        body = response.json()
        assert body["error"] == "validation_error"
        assert body["details"]["fields"] == {
            "title": "Title cannot be more than 100 characters",
            "text": "Invalid hyperlink",
            "tags": "Cannot have more than 5 tags",
        }

    @pytest.mark.asyncio
    async def test_unknown_question(self, test_client):
        response = await test_client.get(f"/api/questions/{uuid4()}")
        assert response.status_code == 404
        assert response.json()["error"] == "not_found"

    @pytest.mark.asyncio
    async def test_malformed_id(self, test_client):
        response = await test_client.get("/api/questions/not-a-uuid")
        assert response.status_code == 422

    @pytest.mark.asyncio
    async def test_listings(self, test_client):
        first = (await post_question(test_client, title="First", tags="a")).json()
        second = (await post_question(test_client, title="Second", tags="b")).json()
        await test_client.post(
            "/api/answers",
            json={"qid": first["id"], "text": "Answer", "ans_by": "bob"},
        )

        newest = (await test_client.get("/api/questions/newest")).json()
        unanswered = (await test_client.get("/api/questions/unanswered")).json()
        active = (await test_client.get("/api/questions/active")).json()

        assert [q["id"] for q in newest] == [second["id"], first["id"]]
        assert [q["id"] for q in unanswered] == [second["id"]]
        assert [q["id"] for q in active] == [first["id"], second["id"]]

    @pytest.mark.asyncio
    async def test_questions_with_tags(self, test_client):
        await post_question(test_client, tags="css")

        for url in ("/api/questions/tags?order=active", "/api/questions/questionwithtags/newest"):
            response = await test_client.get(url)
            assert response.status_code == 200
            [item] = response.json()
            assert [t["name"] for t in item["tags"]] == ["css"]

    @pytest.mark.asyncio
    async def test_invalid_order(self, test_client):
        response = await test_client.get("/api/questions/questionwithtags/oldest")
        assert response.status_code == 400
        assert response.json()["details"]["field"] == "order"

    @pytest.mark.asyncio
    async def test_questions_by_tag(self, test_client):
        tagged = (await post_question(test_client, title="Tagged", tags="css")).json()
        await post_question(test_client, title="Other", tags="python")

        response = await test_client.get(f"/api/questions/tag/{tagged['tags'][0]}")

        assert response.status_code == 200
        assert [item["question"]["id"] for item in response.json()] == [tagged["id"]]

    @pytest.mark.asyncio
    async def test_view_count(self, test_client):
        qid = (await post_question(test_client)).json()["id"]

        first = await test_client.put(f"/api/questions/{qid}/views")
        second = await test_client.put(f"/api/questions/{qid}/views")

        assert first.json()["views"] == 1
        assert second.json()["views"] == 2
        assert (await test_client.get(f"/api/questions/{qid}")).json()["views"] == 2

    @pytest.mark.asyncio
    async def test_view_count_unknown_question(self, test_client):
        response = await test_client.put(f"/api/questions/{uuid4()}/views")
        assert response.status_code == 404


class TestAnswerEndpoints:

    @pytest.mark.asyncio
    async def test_post_answer(self, test_client):
        qid = (await post_question(test_client)).json()["id"]

        response = await test_client.post(
            "/api/answers",
            json={"qid": qid, "text": "Use display: flex.", "ans_by": "bob"},
        )

        assert response.status_code == 201
        answer = response.json()
        question = (await test_client.get(f"/api/questions/{qid}")).json()
        assert question["answers"] == [answer["id"]]

        answers = (await test_client.get(f"/api/questions/{qid}/answers")).json()
        assert [a["id"] for a in answers] == [answer["id"]]

    @pytest.mark.asyncio
    async def test_answer_unknown_question(self, test_client):
        response = await test_client.post(
            "/api/answers",
            json={"qid": str(uuid4()), "text": "Hello", "ans_by": "bob"},
        )
        assert response.status_code == 404

    @pytest.mark.asyncio
    async def test_answer_missing_fields(self, test_client):
        qid = (await post_question(test_client)).json()["id"]

        response = await test_client.post("/api/answers", json={"qid": qid})

        assert response.status_code == 400
        assert set(response.json()["details"]["fields"]) == {"text", "ans_by"}


class TestTagEndpoints:

    @pytest.mark.asyncio
    async def test_tag_counts(self, test_client):
        await post_question(test_client, tags="css html")
        await post_question(test_client, tags="CSS")

        response = await test_client.get("/api/tags")

        assert response.status_code == 200
        assert {t["name"]: t["count"] for t in response.json()} == {"css": 2, "html": 1}

    @pytest.mark.asyncio
    async def test_tags_by_ids(self, test_client):
        tag_ids = (await post_question(test_client, tags="css html")).json()["tags"]

        response = await test_client.post("/api/tags/ids", json={"tag_ids": tag_ids})

        assert response.status_code == 200
        assert [t["name"] for t in response.json()] == ["css", "html"]


class TestSearchEndpoint:

    @pytest.mark.asyncio
    async def test_search(self, test_client):
        css = (await post_question(test_client, title="Centering", tags="css")).json()
        loop = (await post_question(
            test_client, title="A loop question", text="plain body", tags="python",
        )).json()
        await post_question(test_client, title="Looping forever", text="plain body", tags="go")

        response = await test_client.get("/api/search", params={"q": "[CSS] loop"})

        assert response.status_code == 200
        ids = [item["question"]["id"] for item in response.json()]
        assert ids == [loop["id"], css["id"]]

    @pytest.mark.asyncio
    async def test_search_without_matches(self, test_client):
        await post_question(test_client)
        response = await test_client.get("/api/search", params={"q": "[cobol]"})
        assert response.json() == []


class TestHealthEndpoint:

    @pytest.mark.asyncio
    async def test_health(self, test_client):
        response = await test_client.get("/health")

        assert response.status_code == 200
        data = response.json()
        assert data["status"] in ("healthy", "unhealthy")
        assert "version" in data

    @pytest.mark.asyncio
    async def test_request_id_header(self, test_client):
        response = await test_client.get("/api/tags")
        assert "X-Request-ID" in response.headers
