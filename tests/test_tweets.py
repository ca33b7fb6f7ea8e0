from sqlalchemy import func, select

from src.like.models import Like


def test_create_tweet_is_owned_by_caller(client, make_user):
    user = make_user("alice")

    response = client.post("/tweets", json={"content": "hello"}, headers=user["headers"])

    assert response.status_code == 201
    body = response.json()
    assert body["success"] is True
    assert body["data"]["content"] == "hello"
    assert body["data"]["owner"] == user["id"]


def test_create_tweet_requires_content_and_auth(client, make_user):
    user = make_user("bob")

    assert client.post("/tweets", json={"content": "   "}, headers=user["headers"]).status_code == 400
    assert client.post("/tweets", json={}, headers=user["headers"]).status_code == 400
    assert client.post("/tweets", json={"content": "hi"}).status_code == 401


def test_only_owner_can_update_or_delete(client, make_user):
    owner = make_user("carol")
    other = make_user("dave")
    tweet = client.post("/tweets", json={"content": "original"}, headers=owner["headers"]).json()["data"]

    update = client.patch(f"/tweets/{tweet['id']}", json={"content": "hijacked"}, headers=other["headers"])
    delete = client.delete(f"/tweets/{tweet['id']}", headers=other["headers"])
    tweets = client.get(f"/tweets/user/{owner['id']}").json()["data"]

    assert update.status_code == 403
    assert update.json()["success"] is False
    assert delete.status_code == 403
    assert [t["content"] for t in tweets] == ["original"]


def test_owner_updates_and_deletes(client, make_user):
    owner = make_user("erin")
    tweet = client.post("/tweets", json={"content": "draft"}, headers=owner["headers"]).json()["data"]

    updated = client.patch(f"/tweets/{tweet['id']}", json={"content": "final"}, headers=owner["headers"])
    deleted = client.delete(f"/tweets/{tweet['id']}", headers=owner["headers"])
    missing = client.delete(f"/tweets/{tweet['id']}", headers=owner["headers"])

    assert updated.json()["data"]["content"] == "final"
    assert deleted.json()["data"] == {"tweetId": tweet["id"]}
    assert missing.status_code == 404


def test_malformed_tweet_id_is_a_bad_request(client, make_user):
    owner = make_user("frank")

    response = client.delete("/tweets/not-a-number", headers=owner["headers"])

    assert response.status_code == 400


def test_user_tweets_carry_like_counts_and_viewer_state(client, make_user):
    author = make_user("gina")
    fan = make_user("henry")
    first = client.post("/tweets", json={"content": "first"}, headers=author["headers"]).json()["data"]
    client.post("/tweets", json={"content": "second"}, headers=author["headers"])
    client.post(f"/likes/toggle/t/{first['id']}", headers=fan["headers"])

    as_fan = client.get(f"/tweets/user/{author['id']}", headers=fan["headers"]).json()["data"]
    anonymous = client.get(f"/tweets/user/{author['id']}").json()["data"]

    assert [t["content"] for t in as_fan] == ["second", "first"]
    assert as_fan[1]["likesCount"] == 1
    assert as_fan[1]["isLiked"] is True
    assert as_fan[0]["likesCount"] == 0
    assert as_fan[0]["isLiked"] is False
    assert as_fan[0]["ownerDetails"] == {"id": author["id"], "username": "gina", "avatar": "https://cdn.example.com/gina.png"}
    assert all(t["isLiked"] is False for t in anonymous)


def test_user_tweets_for_unknown_user(client):
    assert client.get("/tweets/user/999").status_code == 404


def test_deleting_tweet_removes_its_likes(client, make_user, db):
    author = make_user("iris")
    tweet = client.post("/tweets", json={"content": "bye"}, headers=author["headers"]).json()["data"]
    client.post(f"/likes/toggle/t/{tweet['id']}", headers=author["headers"])

    client.delete(f"/tweets/{tweet['id']}", headers=author["headers"])

    assert db.scalar(select(func.count(Like.id))) == 0
