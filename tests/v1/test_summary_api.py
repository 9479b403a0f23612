"""Tests for the reply summary endpoint."""

import httpx

from tests.helpers import gemini_response
from threadline.services.summarizer import SUMMARY_EMPTY, SUMMARY_FAILED


def _post_with_replies(client, *texts: str) -> int:
    post = client.post("/api/posts", json={"uid": "u-1", "content": "hello"}).json()
    for text in texts:
        client.post("/api/replies", json={"uid": "u-2", "post_id": post["id"], "content": text})
    return post["id"]


def test_summary_of_replies(client, make_summary_service, use_summary_service, provider_requests) -> None:
    use_summary_service(
        make_summary_service(lambda request: httpx.Response(200, json=gemini_response("S")))
    )
    post_id = _post_with_replies(client, "good", "bad")

    response = client.get(f"/api/summary/{post_id}")

    assert response.status_code == 200
    assert response.json() == {"summary": "S"}
    assert len(provider_requests) == 1
    assert b"good\\nbad" in provider_requests[0].content


def test_summary_without_replies(client, make_summary_service, use_summary_service, provider_requests) -> None:
    use_summary_service(
        make_summary_service(lambda request: httpx.Response(200, json=gemini_response("S")))
    )
    post_id = _post_with_replies(client)

    response = client.get(f"/api/summary/{post_id}")

    assert response.status_code == 200
    assert response.json() == {"summary": SUMMARY_EMPTY}
    assert provider_requests == []


def test_summary_for_unknown_post(client, make_summary_service, use_summary_service) -> None:
    """An unknown post simply has no replies to summarize."""
    use_summary_service(
        make_summary_service(lambda request: httpx.Response(200, json=gemini_response("S")))
    )
    response = client.get("/api/summary/424242")
    assert response.status_code == 200
    assert response.json() == {"summary": SUMMARY_EMPTY}


def test_provider_failure_still_succeeds(client, make_summary_service, use_summary_service) -> None:
    use_summary_service(make_summary_service(lambda request: httpx.Response(503)))
    post_id = _post_with_replies(client, "good")

    response = client.get(f"/api/summary/{post_id}")

    assert response.status_code == 200
    assert response.json() == {"summary": SUMMARY_FAILED}


def test_summary_rejects_non_numeric_key(client) -> None:
    assert client.get("/api/summary/abc").status_code == 422
