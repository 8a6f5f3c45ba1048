def _create_post(client, headers, text="hello"):
    return client.post("/api/posts", json={"text": text}, headers=headers)


def test_create_post_snapshots_author(client, make_user, auth_headers):
    user = make_user("Alice")

    response = _create_post(client, auth_headers(user))

    assert response.status_code == 200
    post = response.json()
    assert post["text"] == "hello"
    assert post["user"] == user.id
    assert post["name"] == "Alice"
    assert post["avatar"] == user.avatar
    assert post["likes"] == []
    assert post["comments"] == []


def test_create_post_requires_text(client, make_user, auth_headers):
    response = client.post("/api/posts", json={"text": "   "}, headers=auth_headers(make_user("Alice")))

    assert response.status_code == 400
    assert response.json() == {"errors": [{"msg": "Text is required", "param": "text"}]}


def test_posts_require_token(client):
    response = client.get("/api/posts")

    assert response.status_code == 401
    assert response.json() == {"msg": "No token, authorization denied"}


def test_list_posts_newest_first(client, make_user, auth_headers):
    headers = auth_headers(make_user("Alice"))
    for text in ("first", "second", "third"):
        _create_post(client, headers, text)

    response = client.get("/api/posts", headers=headers)

    assert [post["text"] for post in response.json()] == ["third", "second", "first"]


def test_get_post(client, make_user, auth_headers):
    headers = auth_headers(make_user("Alice"))
    post_id = _create_post(client, headers).json()["id"]

    assert client.get(f"/api/posts/{post_id}", headers=headers).json()["id"] == post_id
    missing = client.get("/api/posts/9999", headers=headers)
    assert missing.status_code == 404
    assert missing.json() == {"msg": "Post not found"}


def test_second_like_by_same_user_is_rejected(client, make_user, auth_headers):
    u1, u2 = make_user("Alice"), make_user("Bob")
    post_id = _create_post(client, auth_headers(u1), "hello").json()["id"]

    first = client.put(f"/api/posts/like/{post_id}", headers=auth_headers(u2))
    second = client.put(f"/api/posts/like/{post_id}", headers=auth_headers(u2))

    assert first.status_code == 200
    assert first.json() == [{"user": u2.id}]
    assert second.status_code == 400
    assert second.json() == {"msg": "Post already liked"}
    likes = client.get(f"/api/posts/{post_id}", headers=auth_headers(u1)).json()["likes"]
    assert likes == [{"user": u2.id}]


def test_likes_are_newest_first(client, make_user, auth_headers):
    u1, u2 = make_user("Alice"), make_user("Bob")
    post_id = _create_post(client, auth_headers(u1)).json()["id"]

    client.put(f"/api/posts/like/{post_id}", headers=auth_headers(u1))
    response = client.put(f"/api/posts/like/{post_id}", headers=auth_headers(u2))

    assert response.json() == [{"user": u2.id}, {"user": u1.id}]


def test_unlike_removes_only_callers_like(client, make_user, auth_headers):
    u1, u2, u3 = make_user("Alice"), make_user("Bob"), make_user("Carol")
    post_id = _create_post(client, auth_headers(u1)).json()["id"]
    for user in (u1, u2, u3):
        client.put(f"/api/posts/like/{post_id}", headers=auth_headers(user))

    response = client.put(f"/api/posts/unlike/{post_id}", headers=auth_headers(u2))

    assert response.status_code == 200
    assert response.json() == [{"user": u3.id}, {"user": u1.id}]


def test_unlike_without_like_is_rejected(client, make_user, auth_headers):
    u1, u2 = make_user("Alice"), make_user("Bob")
    post_id = _create_post(client, auth_headers(u1)).json()["id"]
    client.put(f"/api/posts/like/{post_id}", headers=auth_headers(u1))

    response = client.put(f"/api/posts/unlike/{post_id}", headers=auth_headers(u2))

    assert response.status_code == 400
    assert response.json() == {"msg": "Post has not yet been liked"}


def test_like_missing_post(client, make_user, auth_headers):
    response = client.put("/api/posts/like/9999", headers=auth_headers(make_user("Alice")))

    assert response.status_code == 404
    assert response.json() == {"msg": "Post not found"}


def test_comments_are_newest_first(client, make_user, auth_headers):
    u1, u2 = make_user("Alice"), make_user("Bob")
    post_id = _create_post(client, auth_headers(u1)).json()["id"]

    client.post(f"/api/posts/comment/{post_id}", json={"text": "first!"}, headers=auth_headers(u2))
    response = client.post(f"/api/posts/comment/{post_id}", json={"text": "thanks"}, headers=auth_headers(u1))

    comments = response.json()["comments"]
    assert [c["text"] for c in comments] == ["thanks", "first!"]
    assert comments[1]["user"] == u2.id
    assert comments[1]["name"] == "Bob"
    assert comments[1]["avatar"] == u2.avatar
    assert comments[0]["id"] != comments[1]["id"]


def test_comment_requires_text(client, make_user, auth_headers):
    headers = auth_headers(make_user("Alice"))
    post_id = _create_post(client, headers).json()["id"]

    response = client.post(f"/api/posts/comment/{post_id}", json={}, headers=headers)

    assert response.status_code == 400
    assert response.json()["errors"][0]["msg"] == "Text is required"


def test_delete_own_comment(client, make_user, auth_headers):
    u1, u2 = make_user("Alice"), make_user("Bob")
    post_id = _create_post(client, auth_headers(u1)).json()["id"]
    client.post(f"/api/posts/comment/{post_id}", json={"text": "keep"}, headers=auth_headers(u1))
    comments = client.post(
        f"/api/posts/comment/{post_id}", json={"text": "oops"}, headers=auth_headers(u2)
    ).json()["comments"]

    response = client.delete(f"/api/posts/comment/{post_id}/{comments[0]['id']}", headers=auth_headers(u2))

    assert response.status_code == 200
    assert [c["text"] for c in response.json()] == ["keep"]


def test_delete_someone_elses_comment_is_forbidden(client, make_user, auth_headers):
    u1, u2 = make_user("Alice"), make_user("Bob")
    post_id = _create_post(client, auth_headers(u1)).json()["id"]
    comment = client.post(
        f"/api/posts/comment/{post_id}", json={"text": "mine"}, headers=auth_headers(u2)
    ).json()["comments"][0]

    response = client.delete(f"/api/posts/comment/{post_id}/{comment['id']}", headers=auth_headers(u1))

    assert response.status_code == 401
    assert response.json() == {"msg": "User not authorized"}
    remaining = client.get(f"/api/posts/{post_id}", headers=auth_headers(u1)).json()["comments"]
    assert [c["id"] for c in remaining] == [comment["id"]]


def test_delete_missing_comment(client, make_user, auth_headers):
    headers = auth_headers(make_user("Alice"))
    post_id = _create_post(client, headers).json()["id"]

    response = client.delete(f"/api/posts/comment/{post_id}/nope", headers=headers)

    assert response.status_code == 404
    assert response.json() == {"msg": "Comment does not exist"}


def test_delete_post_by_author(client, make_user, auth_headers):
    headers = auth_headers(make_user("Alice"))
    post_id = _create_post(client, headers).json()["id"]

    response = client.delete(f"/api/posts/{post_id}", headers=headers)

    assert response.json() == {"msg": "Post removed"}
    assert client.get(f"/api/posts/{post_id}", headers=headers).status_code == 404


def test_delete_post_by_someone_else_is_forbidden(client, make_user, auth_headers):
    u1, u2 = make_user("Alice"), make_user("Bob")
    post_id = _create_post(client, auth_headers(u1)).json()["id"]

    response = client.delete(f"/api/posts/{post_id}", headers=auth_headers(u2))

    assert response.status_code == 401
    assert response.json() == {"msg": "User not authorized"}
    assert client.get(f"/api/posts/{post_id}", headers=auth_headers(u1)).status_code == 200


def test_delete_missing_post(client, make_user, auth_headers):
    response = client.delete("/api/posts/9999", headers=auth_headers(make_user("Alice")))

    assert response.status_code == 404
