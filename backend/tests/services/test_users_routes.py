"""User Management Routes — admin-only CRUD."""

USERS = "/api/v1/users"


async def test_students_get_403(client, student_headers):
    res = await client.get(USERS, headers=student_headers)
    assert res.status_code == 403
    assert res.json()["error"]["code"] == "PERMISSION_DENIED"


async def test_anonymous_gets_401(client):
    res = await client.get(USERS)
    assert res.status_code == 401


async def test_admin_lists_users(client, admin_headers, student):
    res = await client.get(USERS, headers=admin_headers)
    assert res.status_code == 200
    emails = {u["email"] for u in res.json()}
    assert emails == {"admin@classroom.dev", student.email}


async def test_admin_creates_and_fetches_user(client, admin_headers):
    res = await client.post(
        USERS, headers=admin_headers,
        json={"email": "instructor@classroom.dev", "password": "secret123", "role": "admin"},
    )
    assert res.status_code == 201
    created = res.json()
    assert created["role"] == "admin"

    res = await client.get(f"{USERS}/{created['id']}", headers=admin_headers)
    assert res.status_code == 200
    assert res.json()["email"] == "instructor@classroom.dev"


async def test_create_duplicate_returns_409(client, admin_headers, student):
    res = await client.post(
        USERS, headers=admin_headers,
        json={"email": student.email, "password": "secret123"},
    )
    assert res.status_code == 409


async def test_update_user(client, admin_headers, student):
    res = await client.put(
        f"{USERS}/{student.id}", headers=admin_headers,
        json={"email": "alice2@classroom.dev", "password": "changed1"},
    )
    assert res.status_code == 200
    assert res.json()["email"] == "alice2@classroom.dev"
    assert res.json()["role"] == "student"

    login = await client.post(
        "/api/v1/auth/login", json={"email": "alice2@classroom.dev", "password": "changed1"},
    )
    assert login.status_code == 200


async def test_update_to_taken_email_returns_409(client, admin_headers, student, other_student):
    res = await client.put(
        f"{USERS}/{student.id}", headers=admin_headers,
        json={"email": other_student.email, "password": "secret123"},
    )
    assert res.status_code == 409


async def test_update_unknown_user_returns_404(client, admin_headers):
    res = await client.put(
        f"{USERS}/nope", headers=admin_headers,
        json={"email": "nope@classroom.dev", "password": "secret123"},
    )
    assert res.status_code == 404


async def test_delete_user(client, admin_headers, student):
    res = await client.delete(f"{USERS}/{student.id}", headers=admin_headers)
    assert res.status_code == 200
    assert res.json() == {"message": "User deleted successfully"}

    res = await client.get(f"{USERS}/{student.id}", headers=admin_headers)
    assert res.status_code == 404
