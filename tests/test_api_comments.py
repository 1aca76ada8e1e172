import pytest


@pytest.fixture
def doc_id(login, make_document):
    return make_document(login("alice"))["id"]


def post_comment(client, headers, doc_id, line, content, parent=None):
    body = {"documentId": doc_id, "lineNumber": line, "content": content}
    if parent is not None:
        body["parentCommentId"] = parent
    return client.post("/api/comments", json=body, headers=headers)


def test_thread_scenario(client, login, doc_id):
    alice = login("alice")
    bob = login("bob")
    top = post_comment(client, alice, doc_id, 5, "needs clarification")
    assert top.status_code == 201
    assert top.json()["author"] == "alice"
    assert top.json()["parentCommentId"] is None
    reply = post_comment(client, bob, doc_id, 5, "agreed", parent=top.json()["id"])
    assert reply.status_code == 201
    assert reply.json()["author"] == "bob"

    comments = client.get(f"/api/documents/{doc_id}/comments").json()
    assert [c["content"] for c in comments] == ["needs clarification", "agreed"]

    view = client.get(f"/api/documents/{doc_id}/view").json()
    assert len(view["threads"]["5"]) == 1
    assert len(view["threads"]["5"][0]["replies"]) == 1
    assert view["commentCounts"]["5"] == 2


def test_author_comes_from_session(client, login, doc_id):
    alice = login("alice")
    r = client.post(
        "/api/comments",
        json={"documentId": doc_id, "lineNumber": 1, "content": "hi", "author": "mallory"},
        headers=alice,
    )
    assert r.status_code == 201
    assert r.json()["author"] == "alice"


def test_comment_requires_auth(client, doc_id):
    assert post_comment(client, {}, doc_id, 1, "anon").status_code == 401


def test_comment_on_missing_document(client, login):
    r = post_comment(client, login("alice"), "missing", 1, "hello")
    assert r.status_code == 404


@pytest.mark.parametrize("line", [0, 21, -3])
def test_comment_line_out_of_range(client, login, doc_id, line):
    r = post_comment(client, login("alice"), doc_id, line, "hello")
    assert r.status_code == 400
    assert r.json()["fields"] == ["lineNumber"]


def test_blank_comment_rejected(client, login, doc_id):
    r = post_comment(client, login("alice"), doc_id, 1, "   ")
    assert r.status_code == 400


def test_only_author_can_edit(client, login, doc_id):
    alice = login("alice")
    bob = login("bob")
    cid = post_comment(client, alice, doc_id, 2, "draft").json()["id"]

    r = client.put(f"/api/comments/{cid}", json={"content": "hijacked"}, headers=bob)
    assert r.status_code == 403
    assert r.json()["error"] == "forbidden"

    r = client.put(f"/api/comments/{cid}", json={"content": "  final  "}, headers=alice)
    assert r.status_code == 200
    assert r.json()["content"] == "final"


def test_edit_missing_comment(client, login):
    r = client.put("/api/comments/missing", json={"content": "x"}, headers=login("alice"))
    assert r.status_code == 404


def test_only_author_can_delete(client, login, doc_id):
    alice = login("alice")
    bob = login("bob")
    cid = post_comment(client, alice, doc_id, 2, "mine").json()["id"]
    assert client.delete(f"/api/comments/{cid}", headers=bob).status_code == 403
    assert client.delete(f"/api/comments/{cid}", headers=alice).status_code == 204
    assert client.get(f"/api/documents/{doc_id}/comments").json() == []


def test_comment_with_replies_cannot_be_deleted(client, login, doc_id):
    alice = login("alice")
    bob = login("bob")
    top = post_comment(client, alice, doc_id, 3, "question").json()["id"]
    reply = post_comment(client, bob, doc_id, 3, "answer", parent=top).json()["id"]

    r = client.delete(f"/api/comments/{top}", headers=alice)
    assert r.status_code == 409
    assert r.json()["error"] == "conflict"

    assert client.delete(f"/api/comments/{reply}", headers=bob).status_code == 204
    assert client.delete(f"/api/comments/{top}", headers=alice).status_code == 204
    assert client.get(f"/api/documents/{doc_id}/comments").json() == []


def test_reply_to_reply_is_refused(client, login, doc_id):
    alice = login("alice")
    top = post_comment(client, alice, doc_id, 4, "top").json()["id"]
    reply = post_comment(client, alice, doc_id, 4, "reply", parent=top).json()["id"]
    r = post_comment(client, alice, doc_id, 4, "nested", parent=reply)
    assert r.status_code == 409


def test_reply_must_share_line(client, login, doc_id):
    alice = login("alice")
    top = post_comment(client, alice, doc_id, 4, "top").json()["id"]
    r = post_comment(client, alice, doc_id, 6, "elsewhere", parent=top)
    assert r.status_code == 400
    assert r.json()["fields"] == ["parentCommentId"]


def test_reply_to_missing_parent(client, login, doc_id):
    r = post_comment(client, login("alice"), doc_id, 4, "reply", parent="nope")
    assert r.status_code == 404
