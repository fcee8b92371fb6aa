import dataclasses
import logging
import time

import pytest
from fastapi.testclient import TestClient

from src.api.main import create_app
from src.domain.todo import InternalError, TodoID
from src.infrastructure.settings import Settings

BASE = "/oniongo.v1.TodoService"

client = TestClient(create_app(Settings(persistence_backend="memory")))


def rpc(method: str, payload: dict = None, c: TestClient = client):
    return c.post(f"{BASE}/{method}", json=payload)


def create_todo(title="Test Task", body="Do something", c: TestClient = client) -> dict:
    res = rpc("CreateTodo", {"title": title, "body": body}, c)
    assert res.status_code == 200, res.text
    return res.json()["todo"]


def get_todo(todo_id: str, c: TestClient = client) -> dict:
    res = rpc("GetTodo", {"id": todo_id}, c)
    assert res.status_code == 200, res.text
    return res.json()["todo"]


def assert_todo_shape(todo: dict):
    for key in ["id", "title", "body", "status", "created_at", "updated_at"]:
        assert key in todo
    TodoID.from_string(todo["id"])
    assert isinstance(todo["created_at"], int)
    assert isinstance(todo["updated_at"], int)
    assert todo["updated_at"] >= todo["created_at"]
    # seconds, not milliseconds
    assert abs(todo["created_at"] - time.time()) < 3600


class TestHealth:
    def test_health_check(self):
        res = client.get("/")
        assert res.status_code == 200
        data = res.json()
        assert data["message"] == "Healthy"
        assert data["backend"] == "memory"


class TestTodoService:
    def test_create_todo(self):
        todo = create_todo(title="Buy milk", body="2%")
        assert_todo_shape(todo)
        assert todo["title"] == "Buy milk"
        assert todo["body"] == "2%"
        assert todo["status"] == "TODO_STATUS_NOT_STARTED"
        assert todo.get("completed_at") is None
        assert todo["created_at"] == todo["updated_at"]

    def test_create_without_body(self):
        res = rpc("CreateTodo", {"title": "No body"})
        assert res.status_code == 200
        assert res.json()["todo"]["body"] == ""

    def test_get_todo_and_not_found(self):
        created = create_todo(title="Read book")
        fetched = get_todo(created["id"])
        assert fetched == created

        res_404 = rpc("GetTodo", {"id": str(TodoID.new())})
        assert res_404.status_code == 404
        assert res_404.json()["code"] == "not_found"

    def test_get_todos_lists_created(self):
        created = create_todo(title="Listed")
        res = rpc("GetTodos", {})
        assert res.status_code == 200
        ids = [t["id"] for t in res.json()["todos"]]
        assert created["id"] in ids

    def test_get_todos_without_body(self):
        res = client.post(f"{BASE}/GetTodos")
        assert res.status_code == 200
        assert isinstance(res.json()["todos"], list)

    def test_update_todo(self):
        created = create_todo(title="Initial", body="A")
        res = rpc("UpdateTodo", {"id": created["id"], "title": "Replaced", "body": "B"})
        assert res.status_code == 200
        assert res.json() == {}
        fetched = get_todo(created["id"])
        assert fetched["title"] == "Replaced"
        assert fetched["body"] == "B"

        res_nf = rpc("UpdateTodo", {"id": str(TodoID.new()), "title": "Nope"})
        assert res_nf.status_code == 404
        assert res_nf.json()["code"] == "not_found"

    def test_update_empty_title_changes_nothing(self):
        created = create_todo(title="Keep", body="A")
        res = rpc("UpdateTodo", {"id": created["id"], "title": "", "body": "B"})
        assert res.status_code == 400
        assert res.json()["code"] == "invalid_argument"
        assert get_todo(created["id"]) == created

    def test_start_and_complete(self):
        created = create_todo(title="Buy milk", body="2%")
        assert rpc("StartTodo", {"id": created["id"]}).status_code == 200
        assert get_todo(created["id"])["status"] == "TODO_STATUS_IN_PROGRESS"

        assert rpc("CompleteTodo", {"id": created["id"]}).status_code == 200
        done = get_todo(created["id"])
        assert done["status"] == "TODO_STATUS_COMPLETED"
        assert done["completed_at"] is not None
        assert done["completed_at"] >= created["updated_at"]
        assert done["title"] == "Buy milk"

    def test_completed_todo_rejects_transitions(self):
        created = create_todo(title="Finished")
        assert rpc("CompleteTodo", {"id": created["id"]}).status_code == 200

        again = rpc("CompleteTodo", {"id": created["id"]})
        assert again.status_code == 400
        assert again.json()["code"] == "failed_precondition"

        restart = rpc("StartTodo", {"id": created["id"]})
        assert restart.status_code == 400
        assert restart.json()["code"] == "failed_precondition"
        assert get_todo(created["id"])["status"] == "TODO_STATUS_COMPLETED"

    def test_delete_todo(self):
        created = create_todo(title="ToDelete")
        res_del = rpc("DeleteTodo", {"id": created["id"]})
        assert res_del.status_code == 200

        res_get = rpc("GetTodo", {"id": created["id"]})
        assert res_get.status_code == 404
        listed = [t["id"] for t in rpc("GetTodos", {}).json()["todos"]]
        assert created["id"] not in listed

        res_del_again = rpc("DeleteTodo", {"id": created["id"]})
        assert res_del_again.status_code == 404
        assert res_del_again.json()["code"] == "not_found"


class TestValidationErrors:
    def test_create_empty_title(self):
        before = rpc("GetTodos", {}).json()["todos"]
        res = rpc("CreateTodo", {"title": "", "body": "x"})
        assert res.status_code == 400
        body = res.json()
        assert body["code"] == "invalid_argument"
        assert "title" in body["message"]
        assert rpc("GetTodos", {}).json()["todos"] == before

    def test_create_missing_title(self):
        res = rpc("CreateTodo", {"body": "x"})
        assert res.status_code == 400
        assert res.json()["code"] == "invalid_argument"

    @pytest.mark.parametrize("method", ["GetTodo", "StartTodo", "CompleteTodo", "DeleteTodo"])
    def test_malformed_id(self, method):
        res = rpc(method, {"id": "not-a-uuid"})
        assert res.status_code == 400
        assert res.json()["code"] == "invalid_argument"


class TestSqliteBackend:
    def test_scenario_on_sqlite(self, tmp_path):
        settings = Settings(persistence_backend="sqlite", sqlite_db_path=str(tmp_path / "api.db"))
        with TestClient(create_app(settings)) as c:
            assert c.get("/").json()["backend"] == "sqlite"
            created = create_todo(title="Buy milk", body="2%", c=c)
            assert rpc("StartTodo", {"id": created["id"]}, c).status_code == 200
            assert rpc("CompleteTodo", {"id": created["id"]}, c).status_code == 200
            final = get_todo(created["id"], c=c)
            assert final["status"] == "TODO_STATUS_COMPLETED"
            assert final["completed_at"] is not None

            res = rpc("CreateTodo", {"title": "", "body": "x"}, c)
            assert res.json()["code"] == "invalid_argument"
            titles = [t["title"] for t in rpc("GetTodos", {}, c).json()["todos"]]
            assert titles == ["Buy milk"]


class TestInternalErrors:
    def test_internal_error_does_not_leak(self):
        app = create_app(Settings(persistence_backend="memory"))

        class Broken:
            def execute(self, req):
                raise InternalError("disk on fire")

        use_cases = app.state.container.use_cases
        app.state.container.use_cases = dataclasses.replace(use_cases, get=Broken())
        res = TestClient(app).post(f"{BASE}/GetTodo", json={"id": str(TodoID.new())})
        assert res.status_code == 500
        assert res.json() == {"code": "internal", "message": "internal error"}

    def test_unexpected_exception_is_internal_and_logged(self, caplog):
        app = create_app(Settings(persistence_backend="memory"))

        class Exploding:
            def execute(self, req):
                raise RuntimeError("boom")

        use_cases = app.state.container.use_cases
        app.state.container.use_cases = dataclasses.replace(use_cases, get=Exploding())
        c = TestClient(app, raise_server_exceptions=False)
        with caplog.at_level(logging.INFO, logger="src.api.main"):
            res = c.post(f"{BASE}/GetTodo", json={"id": str(TodoID.new())})
        assert res.status_code == 500
        assert res.json() == {"code": "internal", "message": "internal error"}
        assert "boom" not in res.text

        failed = [r for r in caplog.records if getattr(r, "error_code", None) == "internal"]
        assert len(failed) == 1
        assert failed[0].levelno == logging.ERROR
        assert failed[0].procedure == f"{BASE}/GetTodo"
        assert failed[0].duration_ms >= 0


class TestCors:
    def test_only_configured_origins_are_allowed(self):
        app = create_app(Settings(persistence_backend="memory", cors_allow_origins=["http://app.test"]))
        c = TestClient(app)
        allowed = c.post(f"{BASE}/GetTodos", json={}, headers={"Origin": "http://app.test"})
        assert allowed.headers["access-control-allow-origin"] == "http://app.test"
        other = c.post(f"{BASE}/GetTodos", json={}, headers={"Origin": "http://evil.test"})
        assert "access-control-allow-origin" not in other.headers
