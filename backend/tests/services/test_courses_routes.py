"""Course Routes — authenticated catalogue, admin-only writes."""

COURSES = "/api/v1/courses"


async def test_list_requires_token(client):
    res = await client.get(COURSES)
    assert res.status_code == 401


async def test_list_demo_catalogue(client, student_headers):
    res = await client.get(COURSES, headers=student_headers)
    assert res.status_code == 200
    courses = res.json()
    assert [c["id"] for c in courses] == ["1", "2", "3"]
    assert courses[0]["commentCount"] == 0
    assert courses[0]["videoUrl"]
    assert "comments" not in courses[0]


async def test_comment_count_includes_replies(client, student_headers):
    base = f"{COURSES}/2/comments"
    a = (await client.post(base, json={"content": "q"}, headers=student_headers)).json()
    await client.post(f"{base}/{a['id']}/replies", json={"content": "r"}, headers=student_headers)

    courses = (await client.get(COURSES, headers=student_headers)).json()
    assert next(c for c in courses if c["id"] == "2")["commentCount"] == 2


async def test_get_unknown_course_returns_404(client, student_headers):
    res = await client.get(f"{COURSES}/nope", headers=student_headers)
    assert res.status_code == 404


async def test_student_cannot_create(client, student_headers):
    res = await client.post(COURSES, json={"title": "Hack"}, headers=student_headers)
    assert res.status_code == 403


async def test_admin_course_lifecycle(client, admin_headers):
    res = await client.post(
        COURSES, headers=admin_headers,
        json={
            "title": "Python Basics",
            "videoUrl": "https://example.com/v.mp4",
            "resources": [{"name": "notes.pdf", "type": "pdf", "url": "/notes.pdf"}],
        },
    )
    assert res.status_code == 201
    course = res.json()
    assert course["comments"] == []
    assert course["resources"][0]["type"] == "pdf"

    res = await client.put(
        f"{COURSES}/{course['id']}", headers=admin_headers, json={"description": "intro"},
    )
    assert res.status_code == 200
    assert res.json()["title"] == "Python Basics"
    assert res.json()["description"] == "intro"

    res = await client.delete(f"{COURSES}/{course['id']}", headers=admin_headers)
    assert res.status_code == 204
    res = await client.get(f"{COURSES}/{course['id']}", headers=admin_headers)
    assert res.status_code == 404


async def test_create_rejects_unknown_resource_type(client, admin_headers):
    res = await client.post(
        COURSES, headers=admin_headers,
        json={"title": "X", "resources": [{"name": "a", "type": "exe", "url": "/a"}]},
    )
    assert res.status_code == 400


async def test_update_unknown_course_returns_404(client, admin_headers):
    res = await client.put(f"{COURSES}/nope", headers=admin_headers, json={"title": "x"})
    assert res.status_code == 404
