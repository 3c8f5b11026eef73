from datetime import timedelta

from task_system.token_service import TokenService

from .conftest import TEST_SIGNING_KEY, bearer, signup


def _add_task(client, token, title, comment="", priority=None):
    params = {"title": title, "comment": comment}
    if priority:
        params["priority"] = priority
    r = client.post("/task", params=params, headers=bearer(token))
    assert r.status_code == 200, r.text
    return r.json()


# ---------------- auth ----------------

def test_signup_and_signin(client, app):
    token = signup(client, "a@x.com", "Alice", "pw123456")
    assert app.state.token_service.extract_subject(token) == "Alice"

    r = client.post("/auth/signin", json={"email": "a@x.com", "password": "pw123456"})
    assert r.status_code == 200
    assert app.state.token_service.extract_user(r.json()["token"]).email == "a@x.com"


def test_signin_accepts_the_email_as_typed_at_signup(client, app):
    signup(client, "Alice@Example.COM", "Alice", "pw123456")

    r = client.post("/auth/signin", json={"email": "Alice@Example.COM", "password": "pw123456"})
    assert r.status_code == 200
    assert app.state.token_service.extract_user(r.json()["token"]).email == "Alice@example.com"


def test_signup_duplicate_email_is_409(client):
    signup(client, "a@x.com", "Alice")

    r = client.post("/auth/signup", json={"email": "a@x.com", "username": "Alice", "password": "secret123"})
    assert r.status_code == 409
    assert r.text.startswith("Entity already exists. Exception:")


def test_signin_wrong_password_is_401(client):
    signup(client, "a@x.com", "Alice", "pw123456")

    r = client.post("/auth/signin", json={"email": "a@x.com", "password": "wrongpw"})
    assert r.status_code == 401
    assert r.text.startswith("Authentication Failed")


def test_signup_validation_is_400(client):
    r = client.post("/auth/signup", json={"email": "not-an-email", "username": "Al", "password": "123"})
    assert r.status_code == 400
    assert r.text.startswith("Validation Failed")


def test_malformed_json_is_400(client):
    r = client.post("/auth/signin", content=b"{not json", headers={"Content-Type": "application/json"})
    assert r.status_code == 400


def test_legacy_auth_paths(client):
    r = client.post("/user/signUp", json={"email": "a@x.com", "username": "Alice", "password": "pw123456"})
    assert r.status_code == 200
    r = client.post("/user/signIn", json={"email": "a@x.com", "password": "pw123456"})
    assert r.status_code == 200
    assert r.json()["token"]


# ---------------- bearer handling ----------------

def test_missing_header_is_403_with_empty_body(client):
    r = client.get("/task")
    assert r.status_code == 403
    assert r.content == b""


def test_wrong_scheme_is_403(client):
    token = signup(client, "a@x.com")
    r = client.post("/task", params={"title": "T"}, headers={"Authorization": f"Token {token}"})
    assert r.status_code == 403


def test_garbage_token_is_403(client):
    r = client.get("/task", headers=bearer("not.a.token"))
    assert r.status_code == 403
    assert r.content == b""


def test_expired_token_is_403(client, app):
    signup(client, "a@x.com", "Alice")
    user = app.state.token_service.extract_user(
        client.post("/auth/signin", json={"email": "a@x.com", "password": "secret123"}).json()["token"]
    )
    expired = TokenService(TEST_SIGNING_KEY, timedelta(seconds=-5)).issue(user)

    r = client.get("/task", headers=bearer(expired))
    assert r.status_code == 403


# ---------------- tasks ----------------

def test_task_lifecycle(client):
    token = signup(client, "a@x.com", "Alice")

    task = _add_task(client, token, "T", "c", "High")
    assert task["status"] == "Received"
    assert task["priority"] == "High"
    assert task["author"]["email"] == "a@x.com"
    assert "password" not in task["author"]

    r = client.put("/task", params={"taskID": task["id"], "title": "T2", "comment": "c2"}, headers=bearer(token))
    assert r.status_code == 200
    assert (r.json()["title"], r.json()["comment"], r.json()["priority"]) == ("T2", "c2", "High")

    r = client.put("/task/status", params={"taskID": task["id"], "status": "Done"}, headers=bearer(token))
    assert r.json()["status"] == "Done"

    r = client.get("/task", headers=bearer(token))
    page = r.json()
    assert page["total_elements"] == 1
    assert page["content"][0]["title"] == "T2"

    r = client.delete("/task", params={"taskID": task["id"]}, headers=bearer(token))
    assert r.status_code == 200
    assert r.text == "Task deleted"
    assert client.get("/task", headers=bearer(token)).json()["total_elements"] == 0


def test_priority_defaults_to_low(client):
    token = signup(client, "a@x.com")
    assert _add_task(client, token, "T")["priority"] == "Low"


def test_duplicate_title_is_409(client):
    token = signup(client, "a@x.com", "Alice")
    _add_task(client, token, "Ship v1", "", "Low")

    r = client.post("/task", params={"title": "Ship v1", "priority": "High"}, headers=bearer(token))
    assert r.status_code == 409


def test_empty_title_is_400(client):
    token = signup(client, "a@x.com")
    r = client.post("/task", params={"title": ""}, headers=bearer(token))
    assert r.status_code == 400


def test_unknown_status_is_400(client):
    token = signup(client, "a@x.com")
    task = _add_task(client, token, "T")
    r = client.put("/task/status", params={"taskID": task["id"], "status": "Exploded"}, headers=bearer(token))
    assert r.status_code == 400


def test_foreign_task_is_indistinguishable_from_missing(client):
    alice = signup(client, "a@x.com", "Alice")
    bob = signup(client, "b@x.com", "Bob")
    task = _add_task(client, alice, "T")

    foreign = client.put("/task/status", params={"taskID": task["id"], "status": "Done"}, headers=bearer(bob))
    missing = client.put("/task/status", params={"taskID": 999, "status": "Done"}, headers=bearer(bob))

    assert foreign.status_code == missing.status_code == 404
    assert foreign.text == f"Entity not found. Exception: Task {task['id']} not found"
    assert missing.text == "Entity not found. Exception: Task 999 not found"

    r = client.delete("/task", params={"taskID": task["id"]}, headers=bearer(bob))
    assert r.status_code == 404
    assert client.get("/task", headers=bearer(alice)).json()["total_elements"] == 1


def test_workers(client):
    alice = signup(client, "a@x.com", "Alice")
    signup(client, "b@x.com", "Bob")
    task = _add_task(client, alice, "T")
    params = {"taskID": task["id"], "email": "b@x.com"}

    r = client.put("/task/worker", params=params, headers=bearer(alice))
    assert r.status_code == 200
    assert [w["email"] for w in r.json()["workers"]] == ["b@x.com"]

    assert client.put("/task/worker", params=params, headers=bearer(alice)).status_code == 409

    r = client.get("/task/worker/b@x.com")
    assert [t["title"] for t in r.json()["content"]] == ["T"]

    assert client.delete("/task/worker", params=params, headers=bearer(alice)).json()["workers"] == []
    r = client.delete("/task/worker", params=params, headers=bearer(alice))
    assert r.status_code == 200
    assert r.json()["workers"] == []


def test_unknown_worker_is_404(client):
    alice = signup(client, "a@x.com", "Alice")
    task = _add_task(client, alice, "T")

    r = client.put("/task/worker", params={"taskID": task["id"], "email": "ghost@x.com"}, headers=bearer(alice))
    assert r.status_code == 404


def test_public_reads(client):
    alice = signup(client, "a@x.com", "Alice")
    signup(client, "b@x.com", "Bob")
    low = _add_task(client, alice, "low", priority="Low")
    high = _add_task(client, alice, "high", priority="High")
    client.put("/task/status", params={"taskID": low["id"], "status": "In_progress"}, headers=bearer(alice))
    client.put("/task/worker", params={"taskID": high["id"], "email": "b@x.com"}, headers=bearer(alice))

    assert client.get("/task/a@x.com").json()["total_elements"] == 2
    assert [t["title"] for t in client.get("/task/a@x.com/status", params={"status": "In_progress"}).json()["content"]] == ["low"]
    assert [t["title"] for t in client.get("/task/a@x.com/priority", params={"priority": "High"}).json()["content"]] == ["high"]
    assert client.get("/task/worker/b@x.com/status", params={"status": "Received"}).json()["total_elements"] == 1
    assert client.get("/task/worker/b@x.com/priority", params={"priority": "Low"}).json()["total_elements"] == 0
    assert client.get("/task/b@x.com").json()["total_elements"] == 0


def test_paging_params(client):
    alice = signup(client, "a@x.com", "Alice")
    for title in ("b", "a", "c"):
        _add_task(client, alice, title)

    page = client.get("/task", params={"page": 0, "size": 2, "sort": "title"}, headers=bearer(alice)).json()

    assert [t["title"] for t in page["content"]] == ["a", "b"]
    assert (page["page"], page["size"], page["total_elements"], page["total_pages"]) == (0, 2, 3, 2)

    r = client.get("/task", params={"sort": "password"}, headers=bearer(alice))
    assert r.status_code == 400


def test_invalid_email_path_is_400(client):
    assert client.get("/task/not-an-email").status_code == 400


def test_task_id_beyond_64_bits_is_400(client):
    token = signup(client, "a@x.com")

    r = client.put("/task/status", params={"taskID": 2**70, "status": "Done"}, headers=bearer(token))
    assert r.status_code == 400


def test_page_offset_beyond_64_bits_is_400(client):
    token = signup(client, "a@x.com")

    r = client.get("/task", params={"page": 2**62, "size": 50}, headers=bearer(token))
    assert r.status_code == 400
    assert r.text.startswith("Validation Failed")
