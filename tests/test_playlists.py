def _playlist(client, user, name="Watch later"):
    response = client.post("/playlists", json={"name": name, "description": f"{name} list"}, headers=user["headers"])
    assert response.status_code == 201, response.text
    return response.json()["data"]


def test_adding_the_same_video_twice_keeps_one_entry(client, make_user, publish_video):
    user = make_user("alice")
    video = publish_video(user)
    playlist = _playlist(client, user)

    first = client.patch(f"/playlists/add/{video['id']}/{playlist['id']}", headers=user["headers"])
    second = client.patch(f"/playlists/add/{video['id']}/{playlist['id']}", headers=user["headers"])

    assert first.json()["data"]["videos"] == [video["id"]]
    assert second.status_code == 200
    assert second.json()["data"]["videos"] == [video["id"]]


def test_create_requires_name_and_description(client, make_user):
    user = make_user("bob")

    response = client.post("/playlists", json={"name": "x", "description": " "}, headers=user["headers"])

    assert response.status_code == 400


def test_non_owner_cannot_change_playlist(client, make_user, publish_video):
    owner = make_user("carol")
    other = make_user("dave")
    video = publish_video(other)
    playlist = _playlist(client, owner, "Mine")

    update = client.patch(
        f"/playlists/{playlist['id']}",
        json={"name": "Stolen", "description": "nope"},
        headers=other["headers"],
    )
    add = client.patch(f"/playlists/add/{video['id']}/{playlist['id']}", headers=other["headers"])
    delete = client.delete(f"/playlists/{playlist['id']}", headers=other["headers"])
    current = client.get(f"/playlists/{playlist['id']}").json()["data"]

    assert update.status_code == 403
    assert add.status_code == 403
    assert delete.status_code == 403
    assert current["name"] == "Mine"
    assert current["totalVideos"] == 0


def test_membership_not_found_cases(client, make_user, publish_video):
    user = make_user("erin")
    video = publish_video(user)
    playlist = _playlist(client, user)

    missing_playlist = client.patch(f"/playlists/add/{video['id']}/999", headers=user["headers"])
    missing_video = client.patch(f"/playlists/add/999/{playlist['id']}", headers=user["headers"])

    assert missing_playlist.json()["message"] == "Playlist not found"
    assert missing_video.json()["message"] == "Video not found"


def test_playlist_detail_shows_published_videos_only(client, make_user, publish_video):
    user = make_user("frank")
    shown = publish_video(user, title="Shown")
    hidden = publish_video(user, title="Hidden")
    client.patch(f"/videos/toggle/publish/{hidden['id']}", headers=user["headers"])
    playlist = _playlist(client, user)
    client.patch(f"/playlists/add/{shown['id']}/{playlist['id']}", headers=user["headers"])
    client.patch(f"/playlists/add/{hidden['id']}/{playlist['id']}", headers=user["headers"])
    client.get(f"/videos/{shown['id']}")

    detail = client.get(f"/playlists/{playlist['id']}").json()["data"]

    assert [v["title"] for v in detail["videos"]] == ["Shown"]
    assert detail["totalVideos"] == 1
    assert detail["totalViews"] == 1
    assert detail["owner"]["username"] == "frank"


def test_remove_video_and_user_playlists(client, make_user, publish_video):
    user = make_user("gina")
    video = publish_video(user)
    playlist = _playlist(client, user, "Faves")
    _playlist(client, user, "Empty")
    client.patch(f"/playlists/add/{video['id']}/{playlist['id']}", headers=user["headers"])

    listing = client.get(f"/playlists/user/{user['id']}").json()["data"]
    removed = client.patch(f"/playlists/remove/{video['id']}/{playlist['id']}", headers=user["headers"])

    assert [p["name"] for p in listing] == ["Empty", "Faves"]
    assert listing[1]["totalVideos"] == 1
    assert listing[0]["totalVideos"] == 0
    assert listing[0]["totalViews"] == 0
    assert removed.json()["data"]["videos"] == []


def test_owner_updates_and_deletes(client, make_user):
    user = make_user("henry")
    playlist = _playlist(client, user)

    updated = client.patch(
        f"/playlists/{playlist['id']}",
        json={"name": "Renamed", "description": "New description"},
        headers=user["headers"],
    )
    deleted = client.delete(f"/playlists/{playlist['id']}", headers=user["headers"])

    assert updated.json()["data"]["name"] == "Renamed"
    assert deleted.status_code == 200
    assert client.get(f"/playlists/{playlist['id']}").status_code == 404
