from src.auth.models import User
from src.common.query import Aggregation
from src.like.models import Like, LikeKind
from src.tweet.models import Tweet
from src.video.models import Video


def _user(db, username):
    user = User(
        username=username,
        email=f"{username}@example.com",
        full_name=username.title(),
        hashed_password="x",
        avatar=f"https://cdn.example.com/{username}.png",
    )
    db.add(user)
    db.commit()
    return user


def test_lookup_without_a_match_is_none(db):
    _user(db, "alice")

    doc = (
        Aggregation(User)
        .project(id=User.id, username=User.username)
        .lookup("watching", Video, User.watching_video_id, ("title",))
        .first(db)
    )

    assert doc["username"] == "alice"
    assert doc["watching"] is None


def test_lookup_nests_camel_cased_fields(db):
    owner = _user(db, "bob")
    db.add(Tweet(owner_id=owner.id, content="hi"))
    db.commit()

    doc = Aggregation(Tweet).project(content=Tweet.content).lookup_owner().first(db)

    assert doc == {
        "content": "hi",
        "owner": {"id": owner.id, "username": "bob", "fullName": "Bob", "avatar": "https://cdn.example.com/bob.png"},
    }


def test_like_count_and_anonymous_viewer(db):
    owner = _user(db, "carol")
    fan = _user(db, "dave")
    tweet = Tweet(owner_id=owner.id, content="counted")
    db.add(tweet)
    db.commit()
    db.add(Like(liked_by=fan.id, target_type=LikeKind.TWEET.value, target_id=tweet.id))
    # same id, different kind: must not be counted
    db.add(Like(liked_by=fan.id, target_type=LikeKind.COMMENT.value, target_id=tweet.id))
    db.commit()

    def fetch(viewer_id):
        return (
            Aggregation(Tweet)
            .project(id=Tweet.id)
            .add_like_count(LikeKind.TWEET)
            .add_is_liked(LikeKind.TWEET, viewer_id)
            .first(db)
        )

    assert fetch(None) == {"id": tweet.id, "likesCount": 1, "isLiked": False}
    assert fetch(fan.id)["isLiked"] is True
    assert fetch(owner.id)["isLiked"] is False


def test_paginate_metadata(db):
    owner = _user(db, "erin")
    for n in range(5):
        db.add(Tweet(owner_id=owner.id, content=str(n)))
    db.commit()

    aggregation = Aggregation(Tweet).project(content=Tweet.content).sort(Tweet.id)
    middle = aggregation.paginate(db, page=2, limit=2)
    beyond = aggregation.paginate(db, page=4, limit=2)

    assert [d["content"] for d in middle["docs"]] == ["2", "3"]
    assert {k: v for k, v in middle.items() if k != "docs"} == {
        "totalDocs": 5,
        "limit": 2,
        "page": 2,
        "totalPages": 3,
        "hasPrevPage": True,
        "hasNextPage": True,
        "prevPage": 1,
        "nextPage": 3,
    }
    assert beyond["docs"] == []
    assert beyond["hasNextPage"] is False


def test_healthcheck(client):
    response = client.get("/healthcheck")

    assert response.json() == {
        "statusCode": 200,
        "data": {"status": "OK"},
        "message": "Service is healthy",
        "success": True,
    }
