import math

import pytest
from bson import ObjectId

from forumflow.db.base import POSTS
from forumflow.modules.posts.services.post import paginate


def test_post_lifecycle(client, make_post):
    post_id = make_post(postTitle="Hello", postDescription="World", tag="intro")

    response = client.get(f"/api/posts/{post_id}")
    assert response.status_code == 200
    post = response.json()
    assert post["id"] == post_id
    assert post["postTitle"] == "Hello"
    assert post["postDescription"] == "World"
    assert post["upVote"] == 0
    assert post["downVote"] == 0
    assert post["comments"] == []
    assert post["status"] == "published"

    response = client.put(f"/api/posts/vote/{post_id}", json={"type": "upvote"})
    assert response.status_code == 200
    assert response.json()["upVote"] == 1

    response = client.post(f"/api/posts/comment/{post_id}", json={"comment": "nice!", "userId": "user-1"})
    assert response.status_code == 200
    assert len(response.json()["comments"]) == 1

    response = client.delete(f"/api/posts/{post_id}")
    assert response.status_code == 200
    assert response.json()["postId"] == post_id

    response = client.get(f"/api/posts/{post_id}")
    assert response.status_code == 404
    assert response.json()["error"] == "Post not found"


def test_create_post_returns_id(client):
    response = client.post("/api/posts", json={"postTitle": "T", "postDescription": "D"})
    assert response.status_code == 201
    body = response.json()
    assert body["message"] == "Post created successfully"
    assert ObjectId.is_valid(body["postId"])


@pytest.mark.parametrize("field", ["postTitle", "postDescription"])
def test_create_post_rejects_blank_text(client, db, field):
    body = {"postTitle": "Title", "postDescription": "Body"}
    body[field] = "   "
    response = client.post("/api/posts", json=body)
    assert response.status_code == 400
    assert response.json()["error"] == "Invalid request"
    assert db[POSTS].count_documents({}) == 0


def test_unknown_post_id_is_not_found(client):
    assert client.get(f"/api/posts/{ObjectId()}").status_code == 404
    assert client.get("/api/posts/not-an-object-id").status_code == 404


def test_pagination_counts_filtered_set(client, make_post):
    for i in range(7):
        make_post(postTitle=f"Post {i}", authorEmail="ada@forumflow.dev")
    for i in range(2):
        make_post(postTitle=f"Other {i}", authorEmail="bob@forumflow.dev")

    response = client.get("/api/posts", params={"email": "ada@forumflow.dev", "limit": 3, "page": 3})
    assert response.status_code == 200
    body = response.json()
    assert body["total"] == 7
    assert body["pages"] == math.ceil(7 / 3)
    assert body["page"] == 3
    assert len(body["posts"]) == 1

    for limit in (1, 2, 4, 5, 9, 20):
        body = client.get("/api/posts", params={"limit": limit}).json()
        assert len(body["posts"]) <= limit
        assert body["total"] == 9
        assert body["pages"] == math.ceil(9 / limit)


def test_listing_defaults(client, make_post):
    for i in range(6):
        make_post(postTitle=f"Post {i}")
    body = client.get("/api/posts").json()
    assert body["page"] == 1
    assert len(body["posts"]) == 5
    assert body["pages"] == 2


def test_empty_listing_has_zero_pages(client):
    body = client.get("/api/posts").json()
    assert body == {"posts": [], "total": 0, "page": 1, "pages": 0}


def test_recent_sort_is_newest_first(client, make_post):
    ids = [make_post(postTitle=f"Post {i}") for i in range(3)]
    body = client.get("/api/posts", params={"sort": "recent"}).json()
    assert [p["id"] for p in body["posts"]] == list(reversed(ids))


def test_popularity_sort_uses_net_votes(client, make_post):
    many_votes = make_post(postTitle="Contested")
    liked = make_post(postTitle="Liked")
    disliked = make_post(postTitle="Disliked")
    quiet = make_post(postTitle="Quiet")

    for _ in range(3):
        client.put(f"/api/posts/vote/{many_votes}", json={"type": "upvote"})
        client.put(f"/api/posts/vote/{many_votes}", json={"type": "downvote"})
    client.put(f"/api/posts/vote/{liked}", json={"type": "upvote"})
    client.put(f"/api/posts/vote/{disliked}", json={"type": "downvote"})

    body = client.get("/api/posts", params={"sort": "popularity", "limit": 10}).json()
    # net score 1, then the two zero-score posts newest first, then -1
    assert [p["id"] for p in body["posts"]] == [liked, quiet, many_votes, disliked]


def test_invalid_listing_params_are_rejected(client):
    assert client.get("/api/posts", params={"page": 0}).status_code == 400
    assert client.get("/api/posts", params={"limit": 0}).status_code == 400
    assert client.get("/api/posts", params={"sort": "oldest"}).status_code == 400


def test_tag_filter_is_exact(client, make_post):
    make_post(tag="python")
    make_post(tag="python-web")
    body = client.get("/api/posts", params={"tag": "python"}).json()
    assert body["total"] == 1
    assert body["posts"][0]["tag"] == "python"


def test_listing_includes_comment_count(client, make_post):
    post_id = make_post()
    client.post(f"/api/posts/comment/{post_id}", json={"comment": "one"})
    client.post(f"/api/posts/comment/{post_id}", json={"comment": "two"})
    post = client.get("/api/posts").json()["posts"][0]
    assert post["commentCount"] == 2
    assert [c["text"] for c in post["comments"]] == ["one", "two"]


def test_downvote_leaves_upvote_unchanged(client, make_post):
    post_id = make_post()
    client.put(f"/api/posts/vote/{post_id}", json={"type": "upvote"})
    post = client.put(f"/api/posts/vote/{post_id}", json={"type": "downvote"}).json()
    assert post["upVote"] == 1
    assert post["downVote"] == 1


def test_vote_on_missing_post(client, db, make_post):
    post_id = make_post()
    response = client.put(f"/api/posts/vote/{ObjectId()}", json={"type": "upvote"})
    assert response.status_code == 404
    assert db[POSTS].find_one({"_id": ObjectId(post_id)})["upVote"] == 0


def test_invalid_vote_type(client, db, make_post):
    post_id = make_post()
    response = client.put(f"/api/posts/vote/{post_id}", json={"type": "sideways"})
    assert response.status_code == 400
    doc = db[POSTS].find_one({"_id": ObjectId(post_id)})
    assert (doc["upVote"], doc["downVote"]) == (0, 0)


def test_comment_is_trimmed_and_attributed(client, make_post):
    post_id = make_post()
    post = client.post(
        f"/api/posts/comment/{post_id}",
        json={"comment": "  looks good  ", "userId": "user-1", "authorName": "Reader"},
    ).json()
    comment = post["comments"][0]
    assert comment["text"] == "looks good"
    assert comment["authorId"] == "user-1"
    assert comment["authorName"] == "Reader"
    assert comment["createdAt"]


def test_blank_comment_is_rejected(client, db, make_post):
    post_id = make_post()
    response = client.post(f"/api/posts/comment/{post_id}", json={"comment": "   "})
    assert response.status_code == 400
    assert db[POSTS].find_one({"_id": ObjectId(post_id)})["comments"] == []


def test_comment_on_missing_post(client):
    response = client.post(f"/api/posts/comment/{ObjectId()}", json={"comment": "hi"})
    assert response.status_code == 404


def test_update_post(client, make_post):
    post_id = make_post()
    response = client.put(
        f"/api/posts/{post_id}",
        json={"postTitle": "New title", "tag": "news", "status": "draft"},
    )
    assert response.status_code == 200
    post = response.json()
    assert post["postTitle"] == "New title"
    assert post["postDescription"] == "World"
    assert post["tag"] == "news"
    assert post["status"] == "draft"
    assert post["updatedAt"] is not None


def test_update_rejects_blank_title_and_empty_body(client, make_post):
    post_id = make_post()
    assert client.put(f"/api/posts/{post_id}", json={"postTitle": ""}).status_code == 400
    assert client.put(f"/api/posts/{post_id}", json={}).status_code == 400


def test_update_missing_post(client):
    response = client.put(f"/api/posts/{ObjectId()}", json={"postTitle": "x"})
    assert response.status_code == 404


def test_delete_missing_post(client):
    assert client.delete(f"/api/posts/{ObjectId()}").status_code == 404


def test_post_count(client, make_post):
    make_post(authorEmail="ada@forumflow.dev")
    make_post(authorEmail="ada@forumflow.dev")
    make_post(authorEmail="bob@forumflow.dev")
    assert client.get("/api/posts/count", params={"email": "ada@forumflow.dev"}).json() == {"count": 2}
    assert client.get("/api/posts/count").json() == {"count": 3}


def test_limit_over_cap_is_clamped(client, make_post):
    for i in range(3):
        make_post(postTitle=f"Post {i}")
    response = client.get("/api/posts", params={"limit": 101})
    assert response.status_code == 200
    body = response.json()
    assert body["total"] == 3
    assert body["pages"] == 1
    assert len(body["posts"]) == 3

    response = client.get("/api/tags/intro", params={"limit": 1000})
    assert response.status_code == 200
    assert response.json()["total"] == 3


def test_page_beyond_encodable_skip_is_empty(client, make_post):
    make_post()
    response = client.get("/api/posts", params={"page": 10 ** 19})
    assert response.status_code == 200
    body = response.json()
    assert body["posts"] == []
    assert body["total"] == 1
    assert body["page"] == 10 ** 19


def test_page_skip_bound_skips_query(db):
    class RecordingPosts:
        def __init__(self, collection):
            self.collection = collection
            self.finds = 0

        def count_documents(self, query):
            return self.collection.count_documents(query)

        def find(self, query):
            self.finds += 1
            return self.collection.find(query)

    posts = RecordingPosts(db[POSTS])
    result = paginate({POSTS: posts}, {}, page=2 ** 62, limit=5)
    assert result["posts"] == []
    assert posts.finds == 0
