from datetime import datetime, timedelta


def test_create_and_fetch_document(client, login, make_document):
    headers = login("alice")
    doc = make_document(headers)
    assert doc["name"] == "notes.txt"
    assert doc["type"] == "txt"
    assert "uploadedAt" in doc

    r = client.get(f"/api/documents/{doc['id']}")
    assert r.status_code == 200
    assert r.json()["content"].split("\n")[4] == "line 5"


def test_list_documents_newest_first(client, login, make_document):
    headers = login("alice")
    first = make_document(headers, name="first.txt")
    second = make_document(headers, name="second.txt")
    ids = [d["id"] for d in client.get("/api/documents").json()]
    assert ids == [second["id"], first["id"]]


def test_missing_document_is_404(client):
    r = client.get("/api/documents/does-not-exist")
    assert r.status_code == 404
    assert r.json() == {"detail": "Document not found", "error": "not_found"}


def test_create_requires_auth(client):
    r = client.post("/api/documents", json={"name": "x.txt", "content": "x", "type": "txt"})
    assert r.status_code == 401


def test_create_validates_fields(client, login):
    headers = login("alice")
    r = client.post("/api/documents", json={"name": "", "type": "docx"}, headers=headers)
    assert r.status_code == 400
    assert set(r.json()["fields"]) == {"name", "content", "type"}


def test_delete_document_cascades(client, login, make_document):
    headers = login("alice")
    doc = make_document(headers)
    doc_id = doc["id"]
    parent = client.post("/api/comments", json={"documentId": doc_id, "lineNumber": 1, "content": "top"}, headers=headers).json()
    client.post("/api/comments", json={"documentId": doc_id, "lineNumber": 1, "content": "reply", "parentCommentId": parent["id"]}, headers=headers)
    client.post("/api/highlights/toggle", json={"documentId": doc_id, "lineNumber": 2}, headers=headers)
    client.post("/api/relations", json={"documentId": doc_id, "url": "https://example.com", "lines": [1, 2]}, headers=headers)

    assert client.delete(f"/api/documents/{doc_id}").status_code == 401
    r = client.delete(f"/api/documents/{doc_id}", headers=headers)
    assert r.status_code == 204

    assert client.get(f"/api/documents/{doc_id}").status_code == 404
    for kind in ("comments", "highlights", "relations"):
        r = client.get(f"/api/documents/{doc_id}/{kind}")
        assert r.status_code == 200
        assert r.json() == []
    assert client.get("/api/documents").json() == []


def test_delete_missing_document(client, login):
    headers = login("alice")
    assert client.delete("/api/documents/nope", headers=headers).status_code == 404


def test_document_view(client, login, make_document):
    alice = login("alice")
    bob = login("bob")
    doc = make_document(alice)
    doc_id = doc["id"]
    top = client.post("/api/comments", json={"documentId": doc_id, "lineNumber": 5, "content": "needs clarification"}, headers=alice).json()
    client.post("/api/comments", json={"documentId": doc_id, "lineNumber": 5, "content": "agreed", "parentCommentId": top["id"]}, headers=bob)
    client.post("/api/highlights/toggle", json={"documentId": doc_id, "lineNumber": 7}, headers=bob)
    rel = client.post("/api/relations", json={"documentId": doc_id, "url": "https://example.com", "lines": [3, 4, 5, 9]}, headers=alice).json()

    r = client.get(f"/api/documents/{doc_id}/view")
    assert r.status_code == 200
    view = r.json()
    assert view["lineCount"] == 20
    [thread] = view["threads"]["5"]
    assert thread["id"] == top["id"]
    assert [reply["content"] for reply in thread["replies"]] == ["agreed"]
    assert thread["count"] == 2
    assert view["commentCounts"] == {"5": 2}
    assert view["highlightedLines"] == [7]
    assert view["relationsByLine"] == {str(n): [rel["id"]] for n in (3, 4, 5, 9)}
    assert view["relationCounts"] == {"3": 1, "4": 1, "5": 1, "9": 1}


def test_health(client, app):
    r = client.get("/health")
    assert r.status_code == 200
    assert r.json()["status"] == "ok"
    expected = "sql" if app.dependency_overrides else "memory"
    assert r.json()["store"] == expected


def test_timestamps_serialize_as_utc(client, login, make_document):
    headers = login("alice")
    doc = make_document(headers)
    r = client.post("/api/comments", json={"documentId": doc["id"], "lineNumber": 1, "content": "hi"}, headers=headers)
    assert r.status_code == 201

    stamps = [
        client.get(f"/api/documents/{doc['id']}").json()["uploadedAt"],
        client.get(f"/api/documents/{doc['id']}/comments").json()[0]["createdAt"],
    ]
    for stamp in stamps:
        parsed = datetime.fromisoformat(stamp.replace("Z", "+00:00"))
        assert parsed.utcoffset() == timedelta(0)
