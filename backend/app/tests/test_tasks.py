"""
Tests for task endpoints.
"""
from datetime import datetime
from conftest import auth_headers, register_user


def _create(client, token, title="buy milk"):
    response = client.post("/api/tasks", json={"title": title}, headers=auth_headers(token))
    assert response.status_code == 201, response.text
    return response.json()


def test_task_lifecycle(client):
    """Register, create, complete, list, delete."""
    token = register_user(client, "alice", "alice@x.com", "pw123456")["token"]
    headers = auth_headers(token)

    task = _create(client, token, "buy milk")
    assert task["title"] == "buy milk"
    assert task["completed"] is False
    assert task["created_at"] == task["updated_at"]
    assert set(task) == {"id", "title", "completed", "created_at", "updated_at"}

    response = client.put(f"/api/tasks/{task['id']}", json={"completed": True}, headers=headers)
    assert response.status_code == 200
    updated = response.json()
    assert updated["completed"] is True
    assert updated["title"] == "buy milk"
    assert datetime.fromisoformat(updated["updated_at"]) > datetime.fromisoformat(updated["created_at"])

    listed = client.get("/api/tasks", headers=headers)
    assert listed.status_code == 200
    assert listed.json() == [updated]

    deleted = client.delete(f"/api/tasks/{task['id']}", headers=headers)
    assert deleted.status_code == 200
    assert deleted.json()["message"] == "Task deleted successfully"

    assert client.get("/api/tasks", headers=headers).json() == []


def test_list_tasks_empty(client, alice):
    response = client.get("/api/tasks", headers=auth_headers(alice["token"]))
    assert response.status_code == 200
    assert response.json() == []


def test_list_tasks_newest_first(client, alice):
    titles = ["first", "second", "third"]
    for title in titles:
        _create(client, alice["token"], title)

    response = client.get("/api/tasks", headers=auth_headers(alice["token"]))
    assert [t["title"] for t in response.json()] == list(reversed(titles))


def test_tasks_are_private(client, alice, bob):
    """Another user's task is invisible and behaves as if it does not exist."""
    task = _create(client, alice["token"], "alice only")
    bob_headers = auth_headers(bob["token"])

    assert client.get("/api/tasks", headers=bob_headers).json() == []

    update = client.put(f"/api/tasks/{task['id']}", json={"title": "mine now"}, headers=bob_headers)
    delete = client.delete(f"/api/tasks/{task['id']}", headers=bob_headers)
    missing = client.delete("/api/tasks/987654", headers=bob_headers)
    assert update.status_code == 404
    assert delete.status_code == 404
    assert update.json() == delete.json() == missing.json()

    own_update = client.put(
        f"/api/tasks/{task['id']}",
        json={"title": "still alice"},
        headers=auth_headers(alice["token"])
    )
    assert own_update.status_code == 200
    assert own_update.json()["title"] == "still alice"


def test_create_task_blank_title(client, alice):
    headers = auth_headers(alice["token"])
    for body in ({"title": ""}, {"title": "   "}, {}):
        response = client.post("/api/tasks", json=body, headers=headers)
        assert response.status_code == 400, body

    assert client.get("/api/tasks", headers=headers).json() == []


def test_create_task_trims_title(client, alice):
    task = _create(client, alice["token"], "  water plants  ")
    assert task["title"] == "water plants"


def test_create_task_title_too_long(client, alice):
    response = client.post("/api/tasks", json={"title": "x" * 256}, headers=auth_headers(alice["token"]))
    assert response.status_code == 400


def test_update_task_requires_a_field(client, alice):
    task = _create(client, alice["token"])
    response = client.put(f"/api/tasks/{task['id']}", json={}, headers=auth_headers(alice["token"]))
    assert response.status_code == 400
    assert response.json()["detail"] == "No fields to update"


def test_update_task_blank_title(client, alice):
    task = _create(client, alice["token"])
    response = client.put(f"/api/tasks/{task['id']}", json={"title": " "}, headers=auth_headers(alice["token"]))
    assert response.status_code == 400


def test_update_task_toggles_both_ways(client, alice):
    headers = auth_headers(alice["token"])
    task = _create(client, alice["token"])

    done = client.patch(f"/api/tasks/{task['id']}", json={"completed": True}, headers=headers).json()
    pending = client.patch(f"/api/tasks/{task['id']}", json={"completed": False}, headers=headers).json()
    assert done["completed"] is True
    assert pending["completed"] is False
    assert datetime.fromisoformat(pending["updated_at"]) > datetime.fromisoformat(done["updated_at"])


def test_update_task_title_and_status(client, alice):
    task = _create(client, alice["token"])
    response = client.put(
        f"/api/tasks/{task['id']}",
        json={"title": "buy oat milk", "completed": True},
        headers=auth_headers(alice["token"])
    )
    assert response.status_code == 200
    assert response.json()["title"] == "buy oat milk"
    assert response.json()["completed"] is True
    assert response.json()["created_at"] == task["created_at"]


def test_delete_task_twice(client, alice):
    headers = auth_headers(alice["token"])
    task = _create(client, alice["token"])

    assert client.delete(f"/api/tasks/{task['id']}", headers=headers).status_code == 200
    second = client.delete(f"/api/tasks/{task['id']}", headers=headers)
    assert second.status_code == 404
    assert second.json()["detail"] == "Task not found"


def test_non_integer_task_id(client, alice):
    response = client.delete("/api/tasks/abc", headers=auth_headers(alice["token"]))
    assert response.status_code == 400


def test_update_task_completed_must_be_boolean(client, alice):
    headers = auth_headers(alice["token"])
    task = _create(client, alice["token"])
    for value in ("yes", "on", "true", 1):
        response = client.put(f"/api/tasks/{task['id']}", json={"completed": value}, headers=headers)
        assert response.status_code == 400, value

    listed = client.get("/api/tasks", headers=headers).json()
    assert listed[0]["completed"] is False
