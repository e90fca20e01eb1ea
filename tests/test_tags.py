"""Tests for the tag query endpoints."""


def test_list_tags_empty_store(client):
    response = client.get("/tags")

    assert response.status_code == 200
    assert response.json() == []


def test_list_tags_is_sorted_union(client, make_todo):
    make_todo("a", tags=["work", "urgent"])
    make_todo("b", tags=["home", "work"])
    make_todo("c")

    response = client.get("/tags")

    assert response.status_code == 200
    assert response.json() == ["home", "urgent", "work"]


def test_list_tags_follows_tag_changes(client, make_todo):
    created = make_todo("a", tags=["old"])
    client.post(f"/todos/{created['_id']}/tags", json={"tag": "new"})
    client.delete(f"/todos/{created['_id']}/tags/old")

    assert client.get("/tags").json() == ["new"]


def test_get_tag(client, make_todo):
    make_todo(tags=["work"])

    response = client.get("/tags/work")

    assert response.status_code == 200
    assert response.json() == {"tag": "work"}


def test_get_unused_tag_is_404(client, make_todo):
    make_todo(tags=["work"])

    response = client.get("/tags/play")

    assert response.status_code == 404
    assert response.headers["content-type"].startswith("text/plain")
    assert response.text == "Tag 'play' not found"


def test_tag_disappears_with_last_todo(client, make_todo):
    created = make_todo(tags=["solo"])
    client.delete(f"/todos/{created['_id']}")

    assert client.get("/tags/solo").status_code == 404


def test_list_tagged_todos(client, make_todo):
    make_todo("later", order=9, tags=["work"])
    make_todo("unrelated", tags=["home"])
    make_todo("sooner", order=1, tags=["work"])

    response = client.get("/tags/work/todos")

    assert response.status_code == 200
    body = response.json()
    assert [todo["title"] for todo in body] == ["sooner", "later"]
    assert all(todo["url"].endswith(f"/todos/{todo['_id']}") for todo in body)


def test_list_tagged_todos_unused_tag_is_404(client, make_todo):
    make_todo(tags=["work"])

    response = client.get("/tags/play/todos")

    assert response.status_code == 404
    assert response.text == "Tag 'play' not found"
