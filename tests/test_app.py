import pytest
from fastapi.testclient import TestClient

from app import app, get_page_manager
from pages import PageManager


@pytest.fixture
def pages():
    return PageManager()


@pytest.fixture
def client(pages):
    app.dependency_overrides[get_page_manager] = lambda: pages
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def loaded(client, root_payload):
    response = client.put("/api/pages/root", json=root_payload)
    assert response.status_code == 200
    return client


def thread_ids(body):
    return [thread["parent"]["PostHashHex"] for thread in body["threads"]]


class TestPages:

    def test_load_page(self, client, root_payload):
        response = client.put("/api/pages/root", json=root_payload)
        assert response.status_code == 200
        body = response.json()
        assert body["root_id"] == "root"
        assert body["thread_count"] == 2
        assert thread_ids(body) == ["t1", "t2"]
        assert body["threads"][0]["children"] == [{"PostHashHex": "x", "CommentCount": 0, "IsHidden": False}]
        assert "ETag" in response.headers

    def test_root_mismatch(self, client, root_payload):
        response = client.put("/api/pages/other", json=root_payload)
        assert response.status_code == 400

    def test_negative_count_rejected(self, client):
        response = client.put("/api/pages/root", json={"PostHashHex": "root", "CommentCount": -1})
        assert response.status_code == 422

    def test_unknown_page(self, client):
        response = client.get("/api/pages/nope/threads")
        assert response.status_code == 404
        assert response.json()["error"] == "PageNotFoundError"

    def test_list_close_and_reset(self, loaded):
        assert loaded.get("/api/pages").json() == ["root"]
        body = loaded.post("/api/pages/root/reset").json()
        assert body["thread_count"] == 0
        assert body["threads"] == []
        assert loaded.delete("/api/pages/root").status_code == 200
        assert loaded.delete("/api/pages/root").status_code == 404

    def test_page_limit(self, client, pages):
        pages.max_pages = 0
        response = client.put("/api/pages/root", json={"PostHashHex": "root"})
        assert response.status_code == 409


class TestThreads:

    def test_get_thread(self, loaded):
        response = loaded.get("/api/pages/root/threads/t1")
        assert response.status_code == 200
        assert response.json()["parent"]["CommentCount"] == 1
        assert loaded.get("/api/pages/root/threads/nope").status_code == 404

    def test_add_first_and_last(self, loaded):
        loaded.post("/api/pages/root/threads", json={"comment": {"PostHashHex": "n1"}, "position": "first"})
        body = loaded.post("/api/pages/root/threads", json={"comment": {"PostHashHex": "n2"}}).json()
        assert thread_ids(body) == ["n1", "t1", "t2", "n2"]

    def test_remove_thread(self, loaded):
        body = loaded.delete("/api/pages/root/threads/t1").json()
        assert thread_ids(body) == ["t2"]
        assert loaded.delete("/api/pages/root/threads/t1").status_code == 200

    def test_version_moves_on_change(self, loaded):
        first = loaded.get("/api/pages/root/threads").json()["version"]
        assert loaded.get("/api/pages/root/threads").json()["version"] == first
        loaded.delete("/api/pages/root/threads/t2")
        assert loaded.get("/api/pages/root/threads").json()["version"] > first


class TestReplies:

    def test_reply_to_last_child(self, loaded):
        response = loaded.post("/api/pages/root/threads/t1/replies",
                               json={"replying_to": "x", "reply": {"PostHashHex": "r"}})
        assert response.status_code == 200
        children = response.json()["children"]
        assert [c["PostHashHex"] for c in children] == ["x", "r"]
        assert children[0]["CommentCount"] == 1

    def test_reply_starts_chain(self, loaded):
        body = loaded.post("/api/pages/root/threads/t2/replies",
                           json={"replying_to": "t2", "reply": {"PostHashHex": "r"}}).json()
        assert body["parent"]["CommentCount"] == 1
        assert [c["PostHashHex"] for c in body["children"]] == ["r"]

    def test_reply_with_nested_comments_rejected(self, loaded):
        response = loaded.post("/api/pages/root/threads/t1/replies",
                               json={"replying_to": "x",
                                     "reply": {"PostHashHex": "r", "Comments": [{"PostHashHex": "q"}]}})
        assert response.status_code == 422

    def test_reply_unknown_thread(self, loaded):
        response = loaded.post("/api/pages/root/threads/nope/replies",
                               json={"replying_to": "nope", "reply": {"PostHashHex": "r"}})
        assert response.status_code == 404
        assert response.json()["error"] == "ThreadNotFoundError"

    def test_reply_unmatched_target_strict(self, client, pages, root_payload):
        pages.strict = True
        client.put("/api/pages/root", json=root_payload)
        loaded_children = client.get("/api/pages/root/threads/t1").json()["children"]
        response = client.post("/api/pages/root/threads/t1/replies",
                               json={"replying_to": "ghost", "reply": {"PostHashHex": "r"}})
        # "ghost" is neither the parent, the last child, nor in the chain
        assert response.status_code == 404
        assert response.json()["error"] == "CommentNotFoundError"
        assert client.get("/api/pages/root/threads/t1").json()["children"] == loaded_children


class TestHide:

    def test_hide_chain_comment(self, loaded, pages):
        response = loaded.post("/api/pages/root/threads/t1/hide", json={"comment": "x", "parent": "t1"})
        assert response.status_code == 200
        body = response.json()
        assert body["parent"]["CommentCount"] == 0
        assert body["children"][0]["IsHidden"] is True

    def test_hide_unknown_thread(self, loaded):
        response = loaded.post("/api/pages/root/threads/nope/hide", json={"comment": "x", "parent": "nope"})
        assert response.status_code == 404


def test_health(client):
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json()["status"] == "healthy"
