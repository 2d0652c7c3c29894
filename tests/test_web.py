"""
Tests for AnonBoard Web Interface
"""

import pytest

from anonboard.config import Config
from anonboard.core.boards import BoardService
from anonboard.web.app import create_app


def make_config() -> Config:
    config = Config()
    # Cheap hashing for tests
    config.crypto.argon2_time_cost = 1
    config.crypto.argon2_memory_kb = 8192
    return config


class TestScenario:
    """End-to-end walk through the board API."""

    def setup_method(self):
        """Set up test fixtures."""
        self.app = create_app(make_config())
        self.client = self.app.test_client()

    def test_full_scenario(self):
        """Post, list, reply, fail a delete, delete, list again."""
        resp = self.client.post("/threads/test", json={"text": "hello", "delete_password": "pw"})
        assert resp.status_code == 201
        thread = resp.get_json()
        assert thread["thread_id"] == 1
        assert thread["id"] == 1
        assert thread["text"] == "hello"
        assert thread["board"] == "test"
        assert "created_on" in thread
        assert "bumped_on" in thread
        assert "delete_password" not in thread
        assert "reported" not in thread

        resp = self.client.get("/threads/test")
        assert resp.status_code == 200
        threads = resp.get_json()
        assert len(threads) == 1
        assert threads[0]["thread_id"] == 1
        assert threads[0]["replies"] == []

        resp = self.client.post("/replies/test", json={"thread_id": 1, "text": "hi", "delete_password": "rp"})
        assert resp.status_code == 201
        reply = resp.get_json()
        assert reply["reply_id"] == 1
        assert reply["text"] == "hi"
        assert "delete_password" not in reply

        resp = self.client.delete("/replies/test", json={"thread_id": 1, "reply_id": 1, "delete_password": "wrong"})
        assert resp.status_code == 403
        assert "error" in resp.get_json()

        resp = self.client.delete("/replies/test", json={"thread_id": 1, "reply_id": 1, "delete_password": "rp"})
        assert resp.status_code == 200
        assert resp.get_json()["message"] == "Reply deleted successfully"

        threads = self.client.get("/threads/test").get_json()
        assert threads[0]["replies"] == []


class TestThreadRoutes:
    """Tests for /threads/{board}."""

    def setup_method(self):
        """Set up test fixtures."""
        self.app = create_app(make_config())
        self.client = self.app.test_client()

    def _post(self, text="t", password="pw", board="test"):
        return self.client.post(f"/threads/{board}", json={"text": text, "delete_password": password}).get_json()

    def test_form_encoded_post(self):
        """Form bodies work like JSON bodies."""
        resp = self.client.post("/threads/test", data={"text": "hello", "delete_password": "pw"})

        assert resp.status_code == 201
        assert resp.get_json()["text"] == "hello"

    def test_post_missing_fields(self):
        """Missing text or password is a 400."""
        resp = self.client.post("/threads/test", json={"text": "hello"})
        assert resp.status_code == 400
        assert "error" in resp.get_json()

        resp = self.client.post("/threads/test", json={"delete_password": "pw"})
        assert resp.status_code == 400

    def test_post_non_string_fields(self):
        """Lists, objects and numbers in text fields are a 400."""
        resp = self.client.post("/threads/test", json={"text": ["x"], "delete_password": "pw"})
        assert resp.status_code == 400

        resp = self.client.post("/threads/test", json={"text": "hello", "delete_password": {"a": 1}})
        assert resp.status_code == 400

        assert self.client.get("/threads/test").get_json() == []

    def test_delete_non_string_password(self):
        """A non-string delete password never matches a stringified one."""
        self._post(password="{'a': 1}")

        resp = self.client.delete("/threads/test", json={"thread_id": 1, "delete_password": {"a": 1}})

        assert resp.status_code == 400
        assert len(self.client.get("/threads/test").get_json()) == 1

    def test_reply_non_string_text(self):
        """Replies with non-string text are a 400."""
        self._post()

        resp = self.client.post("/replies/test", json={"thread_id": 1, "text": 5, "delete_password": "pw"})

        assert resp.status_code == 400

    @pytest.mark.parametrize("board", ["my%20board", "caf%C3%A9"])
    def test_any_board_name(self, board):
        """Boards with spaces or non-ASCII names work by default."""
        resp = self.client.post(f"/threads/{board}", json={"text": "hello", "delete_password": "pw"})

        assert resp.status_code == 201
        assert len(self.client.get(f"/threads/{board}").get_json()) == 1

    def test_long_text_accepted(self):
        """Text has no length cap by default."""
        resp = self.client.post("/threads/test", json={"text": "x" * 2001, "delete_password": "pw"})

        assert resp.status_code == 201

    def test_list_limits(self):
        """Listings return at most ten threads with three replies each."""
        for i in range(12):
            self._post(text=f"t{i}")
        for i in range(5):
            self.client.post("/replies/test", json={"thread_id": 12, "text": f"r{i}", "delete_password": "pw"})

        threads = self.client.get("/threads/test").get_json()

        assert len(threads) == 10
        assert threads[0]["thread_id"] == 12
        assert [r["text"] for r in threads[0]["replies"]] == ["r4", "r3", "r2"]
        assert threads[0]["reply_count"] == 5
        for thread in threads:
            assert "delete_password" not in thread
            assert "reported" not in thread

    def test_report_thread(self):
        """PUT reports a thread."""
        self._post()

        resp = self.client.put("/threads/test", json={"thread_id": 1})

        assert resp.status_code == 200
        assert resp.get_json()["message"] == "Thread reported successfully"

    def test_report_missing_thread(self):
        """PUT on an unknown thread is a 404."""
        resp = self.client.put("/threads/test", json={"thread_id": 42})

        assert resp.status_code == 404
        assert resp.get_json()["error"] == "Thread not found"

    def test_report_form_encoded_id(self):
        """Identifiers may arrive as strings."""
        self._post()

        resp = self.client.put("/threads/test", data={"thread_id": "1"})

        assert resp.status_code == 200

    @pytest.mark.parametrize("thread_id", [None, "", "abc", True, 1.5])
    def test_bad_thread_id(self, thread_id):
        """Missing or malformed identifiers are a 400."""
        self._post()

        body = {} if thread_id is None else {"thread_id": thread_id}
        resp = self.client.put("/threads/test", json=body)

        assert resp.status_code == 400

    def test_delete_thread(self):
        """DELETE with the right password removes the thread."""
        self._post()

        resp = self.client.delete("/threads/test", json={"thread_id": 1, "delete_password": "wrong"})
        assert resp.status_code == 403
        assert resp.get_json()["error"] == "Incorrect delete password"

        resp = self.client.delete("/threads/test", json={"thread_id": 1, "delete_password": "pw"})
        assert resp.status_code == 200
        assert resp.get_json()["message"] == "Thread deleted successfully"

        assert self.client.get("/threads/test").get_json() == []

    def test_delete_missing_thread(self):
        """DELETE on an unknown thread is a 404."""
        resp = self.client.delete("/threads/test", json={"thread_id": 9, "delete_password": "pw"})

        assert resp.status_code == 404

    def test_boards_are_independent(self):
        """Threads posted to one board are not visible on another."""
        self._post(board="a")

        assert self.client.get("/threads/b").get_json() == []
        resp = self.client.delete("/threads/b", json={"thread_id": 1, "delete_password": "pw"})
        assert resp.status_code == 404


class TestReplyRoutes:
    """Tests for /replies/{board}."""

    def setup_method(self):
        """Set up test fixtures."""
        self.app = create_app(make_config())
        self.client = self.app.test_client()
        self.client.post("/threads/test", json={"text": "t", "delete_password": "pw"})

    def _reply(self, text="r", password="rp", thread_id=1):
        return self.client.post("/replies/test", json={
            "thread_id": thread_id, "text": text, "delete_password": password
        })

    def test_reply_to_missing_thread(self):
        """Replying to an unknown thread is a 404."""
        resp = self._reply(thread_id=99)

        assert resp.status_code == 404

    def test_reply_missing_text(self):
        """Replying without text is a 400."""
        resp = self._reply(text="")

        assert resp.status_code == 400

    def test_reply_bumps_thread(self):
        """A reply moves its thread to the top of the board."""
        self.client.post("/threads/test", json={"text": "newer", "delete_password": "pw"})
        assert self.client.get("/threads/test").get_json()[0]["thread_id"] == 2

        self._reply(thread_id=1)

        threads = self.client.get("/threads/test").get_json()
        assert threads[0]["thread_id"] == 1
        assert threads[0]["bumped_on"] >= threads[1]["bumped_on"]

    def test_show_thread(self):
        """GET with thread_id returns every reply."""
        for i in range(5):
            self._reply(text=f"r{i}")

        resp = self.client.get("/replies/test?thread_id=1")

        assert resp.status_code == 200
        data = resp.get_json()
        assert len(data["replies"]) == 5
        assert "delete_password" not in data
        for reply in data["replies"]:
            assert "reported" not in reply

    def test_show_missing_thread(self):
        """GET on an unknown thread is a 404, without an id a 400."""
        assert self.client.get("/replies/test?thread_id=7").status_code == 404
        assert self.client.get("/replies/test").status_code == 400

    def test_report_reply(self):
        """PUT reports a reply."""
        self._reply()

        resp = self.client.put("/replies/test", json={"thread_id": 1, "reply_id": 1})

        assert resp.status_code == 200
        assert resp.get_json()["message"] == "Reply reported successfully"

    def test_report_missing_reply(self):
        """PUT on an unknown reply is a 404."""
        resp = self.client.put("/replies/test", json={"thread_id": 1, "reply_id": 5})

        assert resp.status_code == 404
        assert resp.get_json()["error"] == "Reply not found"

    def test_delete_reply_keeps_siblings(self):
        """Deleting one reply leaves the others."""
        self._reply(text="a", password="one")
        self._reply(text="b", password="two")

        resp = self.client.delete("/replies/test", data={
            "thread_id": "1", "reply_id": "1", "delete_password": "one"
        })

        assert resp.status_code == 200
        thread = self.client.get("/replies/test?thread_id=1").get_json()
        assert [r["text"] for r in thread["replies"]] == ["b"]


class TestAppBehaviour:
    """Tests for app-level behaviour."""

    def test_index(self):
        """Root reports service info and stats."""
        client = create_app(make_config()).test_client()

        data = client.get("/").get_json()

        assert data["status"] == "running"
        assert data["stats"]["threads"] == 0

    def test_unknown_route_is_json(self):
        """Unknown paths are JSON 404s."""
        client = create_app(make_config()).test_client()

        resp = client.get("/nope")

        assert resp.status_code == 404
        assert "error" in resp.get_json()

    def test_url_prefix(self):
        """Routes mount under the configured prefix."""
        config = make_config()
        config.web.url_prefix = "/api"
        client = create_app(config).test_client()

        assert client.get("/api/threads/test").status_code == 200
        assert client.get("/threads/test").status_code == 404

    def test_internal_error(self):
        """Unexpected faults become a JSON 500."""

        class BrokenService(BoardService):
            def list_recent_threads(self, board, limit=None):
                raise RuntimeError("boom")

        client = create_app(make_config(), service=BrokenService()).test_client()

        resp = client.get("/threads/test")

        assert resp.status_code == 500
        assert resp.get_json() == {"error": "Internal server error"}

    def test_injected_service_is_used(self):
        """An injected service backs the app."""
        config = make_config()
        app1 = create_app(config)
        app2 = create_app(config)
        app1.test_client().post("/threads/test", json={"text": "t", "delete_password": "pw"})

        assert len(app1.test_client().get("/threads/test").get_json()) == 1
        assert app2.test_client().get("/threads/test").get_json() == []
