def test_stats_for_an_empty_channel(client, make_user):
    user = make_user("alice")

    response = client.get("/dashboard/stats", headers=user["headers"])

    assert response.status_code == 200
    assert response.json()["data"] == {
        "subscriberCount": 0,
        "totalLikes": 0,
        "totalViews": 0,
        "totalVideoCount": 0,
    }


def test_stats_aggregate_only_the_callers_channel(client, make_user, publish_video):
    owner = make_user("bob")
    fan = make_user("carol")
    first = publish_video(owner, title="One")
    second = publish_video(owner, title="Two")
    theirs = publish_video(fan, title="Other channel")
    client.post(f"/subscriptions/c/{owner['id']}", headers=fan["headers"])
    client.post(f"/likes/toggle/v/{first['id']}", headers=fan["headers"])
    client.post(f"/likes/toggle/v/{second['id']}", headers=fan["headers"])
    client.post(f"/likes/toggle/v/{second['id']}", headers=owner["headers"])
    client.post(f"/likes/toggle/v/{theirs['id']}", headers=owner["headers"])
    for _ in range(3):
        client.get(f"/videos/{first['id']}")
    client.get(f"/videos/{theirs['id']}")

    stats = client.get("/dashboard/stats", headers=owner["headers"]).json()["data"]

    assert stats == {
        "subscriberCount": 1,
        "totalLikes": 3,
        "totalViews": 3,
        "totalVideoCount": 2,
    }


def test_channel_videos_include_unpublished(client, make_user, publish_video):
    owner = make_user("dave")
    other = make_user("erin")
    published = publish_video(owner, title="Live")
    draft = publish_video(owner, title="Draft")
    publish_video(other, title="Not mine")
    client.patch(f"/videos/toggle/publish/{draft['id']}", headers=owner["headers"])
    client.post(f"/likes/toggle/v/{published['id']}", headers=other["headers"])

    videos = client.get("/dashboard/videos", headers=owner["headers"]).json()["data"]

    by_title = {v["title"]: v for v in videos}
    assert set(by_title) == {"Live", "Draft"}
    assert by_title["Draft"]["isPublished"] is False
    assert by_title["Live"]["likesCount"] == 1


def test_dashboard_requires_auth(client):
    assert client.get("/dashboard/stats").status_code == 401
    assert client.get("/dashboard/videos").status_code == 401
