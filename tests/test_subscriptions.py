def test_toggle_subscription(client, make_user):
    channel = make_user("alice")
    fan = make_user("bob")

    on = client.post(f"/subscriptions/c/{channel['id']}", headers=fan["headers"])
    off = client.post(f"/subscriptions/c/{channel['id']}", headers=fan["headers"])

    assert on.json()["data"] == {"channelId": channel["id"], "isSubscribed": True}
    assert off.json()["data"] == {"channelId": channel["id"], "isSubscribed": False}
    assert client.get(f"/subscriptions/c/{channel['id']}").json()["data"] == []


def test_cannot_subscribe_to_self_or_unknown_channel(client, make_user):
    user = make_user("carol")

    self_sub = client.post(f"/subscriptions/c/{user['id']}", headers=user["headers"])
    unknown = client.post("/subscriptions/c/999", headers=user["headers"])

    assert self_sub.status_code == 400
    assert unknown.status_code == 404
    assert unknown.json()["message"] == "Channel not found"


def test_subscriber_and_channel_lists(client, make_user):
    channel = make_user("dave")
    first = make_user("erin")
    second = make_user("frank")
    client.post(f"/subscriptions/c/{channel['id']}", headers=first["headers"])
    client.post(f"/subscriptions/c/{channel['id']}", headers=second["headers"])

    subscribers = client.get(f"/subscriptions/c/{channel['id']}").json()["data"]
    channels = client.get(f"/subscriptions/u/{first['id']}").json()["data"]

    assert sorted(s["subscriber"]["username"] for s in subscribers) == ["erin", "frank"]
    assert all(s["subscribedAt"] for s in subscribers)
    assert channels[0]["channel"] == {
        "id": channel["id"],
        "username": "dave",
        "fullName": "dave Tester",
        "avatar": "https://cdn.example.com/dave.png",
    }


def test_lists_for_unknown_users(client):
    assert client.get("/subscriptions/c/999").status_code == 404
    assert client.get("/subscriptions/u/999").json()["message"] == "Subscriber not found"


def test_toggle_requires_auth(client, make_user):
    channel = make_user("gina")

    assert client.post(f"/subscriptions/c/{channel['id']}").status_code == 401
