"""Comment Routes — HTTP surface of the comment tree.

Invariants:
    - POST comment / reply answer 201 with the new node in camelCase
    - Unknown course or parent answers 404; blank content answers 400
    - A reply beyond MAX_REPLY_DEPTH answers 400; the deepest allowed thread still lists
    - PATCH / DELETE by someone other than the author or an admin answers 403
    - Every comment route requires a bearer token
"""

from classroom.core.domain_types import MAX_REPLY_DEPTH

BASE = "/api/v1/courses/1/comments"


async def test_add_comment_returns_201(client, student, student_headers):
    res = await client.post(BASE, json={"content": "  Great course!  "}, headers=student_headers)
    assert res.status_code == 201
    body = res.json()
    assert body["content"] == "Great course!"
    assert body["authorId"] == student.id
    assert body["authorName"] == "alice@classroom.dev"
    assert body["replies"] == []
    assert "createdAt" in body


async def test_comment_requires_token(client):
    res = await client.post(BASE, json={"content": "hi"})
    assert res.status_code == 401
    assert res.headers["www-authenticate"] == "Bearer"
    assert res.json()["error"]["code"] == "AUTHENTICATION_FAILED"


async def test_invalid_token_rejected(client):
    res = await client.get(BASE, headers={"Authorization": "Bearer not-a-jwt"})
    assert res.status_code == 401


async def test_blank_content_returns_400(client, student_headers):
    res = await client.post(BASE, json={"content": "   "}, headers=student_headers)
    assert res.status_code == 400
    assert res.json()["error"]["code"] == "VALIDATION_ERROR"


async def test_unknown_course_returns_404(client, student_headers):
    res = await client.post(
        "/api/v1/courses/missing-course/comments",
        json={"content": "hi"}, headers=student_headers,
    )
    assert res.status_code == 404
    assert res.json()["error"]["context"]["course_id"] == "missing-course"


async def test_reply_thread_and_cascade_delete(client, student_headers, other_headers):
    a = (await client.post(BASE, json={"content": "question"}, headers=student_headers)).json()
    r1 = await client.post(
        f"{BASE}/{a['id']}/replies", json={"content": "nice"}, headers=other_headers,
    )
    assert r1.status_code == 201
    r2 = await client.post(
        f"{BASE}/{r1.json()['id']}/replies", json={"content": "agreed"}, headers=student_headers,
    )
    assert r2.status_code == 201

    forest = (await client.get(BASE, headers=student_headers)).json()
    assert forest[0]["replies"][0]["id"] == r1.json()["id"]
    assert forest[0]["replies"][0]["replies"][0]["id"] == r2.json()["id"]

    res = await client.delete(f"{BASE}/{r1.json()['id']}", headers=other_headers)
    assert res.status_code == 204

    forest = (await client.get(BASE, headers=student_headers)).json()
    assert forest[0]["replies"] == []


async def test_reply_to_unknown_parent_returns_404(client, student_headers):
    res = await client.post(
        f"{BASE}/nope/replies", json={"content": "hi"}, headers=student_headers,
    )
    assert res.status_code == 404


async def test_author_can_edit(client, student_headers):
    a = (await client.post(BASE, json={"content": "draft"}, headers=student_headers)).json()
    res = await client.patch(f"{BASE}/{a['id']}", json={"content": "final"}, headers=student_headers)
    assert res.status_code == 200
    assert res.json()["content"] == "final"
    assert res.json()["createdAt"] == a["createdAt"]


async def test_other_student_cannot_edit_or_delete(client, student_headers, other_headers):
    a = (await client.post(BASE, json={"content": "mine"}, headers=student_headers)).json()

    res = await client.patch(f"{BASE}/{a['id']}", json={"content": "hijack"}, headers=other_headers)
    assert res.status_code == 403
    res = await client.delete(f"{BASE}/{a['id']}", headers=other_headers)
    assert res.status_code == 403


async def test_admin_can_delete_any_comment(client, student_headers, admin_headers):
    a = (await client.post(BASE, json={"content": "spam"}, headers=student_headers)).json()
    res = await client.delete(f"{BASE}/{a['id']}", headers=admin_headers)
    assert res.status_code == 204


async def test_delete_missing_comment_returns_404(client, student_headers):
    res = await client.delete(f"{BASE}/nope", headers=student_headers)
    assert res.status_code == 404


async def test_course_detail_embeds_forest(client, student_headers):
    await client.post(BASE, json={"content": "first"}, headers=student_headers)
    detail = (await client.get("/api/v1/courses/1", headers=student_headers)).json()
    assert [c["content"] for c in detail["comments"]] == ["first"]


async def test_reply_beyond_depth_limit_returns_400(client, student_headers):
    parent_id = (await client.post(BASE, json={"content": "root"}, headers=student_headers)).json()["id"]
    for level in range(1, MAX_REPLY_DEPTH + 1):
        res = await client.post(
            f"{BASE}/{parent_id}/replies", json={"content": f"level {level}"}, headers=student_headers,
        )
        assert res.status_code == 201
        parent_id = res.json()["id"]

    res = await client.post(
        f"{BASE}/{parent_id}/replies", json={"content": "too deep"}, headers=student_headers,
    )
    assert res.status_code == 400
    assert res.json()["error"]["code"] == "VALIDATION_ERROR"

    node = (await client.get(BASE, headers=student_headers)).json()[0]
    depth = 0
    while node["replies"]:
        node = node["replies"][0]
        depth += 1
    assert depth == MAX_REPLY_DEPTH
    assert node["id"] == parent_id
