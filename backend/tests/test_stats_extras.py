import pytest


@pytest.fixture
def stat(client, auth_headers, project):
    res = client.post(
        f"/api/projects/{project['id']}/stats",
        json={"icon_key": "battery", "title": "Runtime", "description": "On one charge", "text": "4 h"},
        headers=auth_headers,
    )
    assert res.status_code == 201
    return res.get_json()["data"]


# ------------------------
# Stats
# ------------------------

def test_stat_is_listed(client, project, stat):
    listed = client.get(f"/api/projects/{project['id']}/stats").get_json()["data"]

    assert listed == [stat]
    assert stat["text"] == "4 h"


def test_stat_requires_fields(client, auth_headers, project):
    res = client.post(f"/api/projects/{project['id']}/stats", json={"title": "Runtime"}, headers=auth_headers)

    assert res.status_code == 400
    assert res.get_json()["message"] == "Missing required fields: icon_key, text"


def test_update_stat(client, auth_headers, stat):
    res = client.put(f"/api/stats/{stat['id']}", json={"text": "6 h"}, headers=auth_headers)

    assert res.status_code == 200
    assert res.get_json()["data"] == dict(stat, text="6 h")


def test_update_unknown_stat(client, auth_headers):
    res = client.put("/api/stats/999", json={"text": "6 h"}, headers=auth_headers)

    assert res.status_code == 404
    assert res.get_json()["message"] == "Stat not found"


def test_delete_stat(client, auth_headers, project, stat):
    assert client.delete(f"/api/stats/{stat['id']}", headers=auth_headers).status_code == 200
    assert client.get(f"/api/projects/{project['id']}/stats").get_json()["data"] == []


# ------------------------
# Extras
# ------------------------

def test_create_extra(client, auth_headers, project):
    res = client.post(
        f"/api/projects/{project['id']}/extras",
        json={"title": "Open source", "description": "MIT licensed", "stat": "100%"},
        headers=auth_headers,
    )

    assert res.status_code == 201
    extra = res.get_json()["data"]
    assert extra["feature_id"] is None
    assert extra["stat"] == "100%"


def test_extra_requires_title(client, auth_headers, project):
    res = client.post(f"/api/projects/{project['id']}/extras", json={"stat": "1"}, headers=auth_headers)

    assert res.status_code == 400
    assert res.get_json()["message"] == "Missing required fields: title"


def test_extra_feature_must_belong_to_project(client, auth_headers, project, make_project):
    other = make_project(title="Other")
    foreign_feature = client.post(
        f"/api/projects/{other['id']}/features",
        data={"title": "Arm", "media_type": "image"},
        headers=auth_headers,
    ).get_json()["data"]

    res = client.post(
        f"/api/projects/{project['id']}/extras",
        json={"title": "Borrowed", "feature_id": foreign_feature["id"]},
        headers=auth_headers,
    )

    assert res.status_code == 400
    assert res.get_json()["message"] == "feature_id must reference a feature of the same project"


def test_update_extra_and_clear_feature(client, auth_headers, project):
    feature = client.post(
        f"/api/projects/{project['id']}/features",
        data={"title": "Arm", "media_type": "image"},
        headers=auth_headers,
    ).get_json()["data"]
    extra = client.post(
        f"/api/projects/{project['id']}/extras",
        json={"title": "Grip", "feature_id": feature["id"]},
        headers=auth_headers,
    ).get_json()["data"]
    assert extra["feature_id"] == feature["id"]

    res = client.put(f"/api/extras/{extra['id']}", json={"feature_id": None}, headers=auth_headers)

    assert res.status_code == 200
    assert res.get_json()["data"]["feature_id"] is None


def test_delete_extra(client, auth_headers, project):
    extra = client.post(
        f"/api/projects/{project['id']}/extras", json={"title": "Grip"}, headers=auth_headers
    ).get_json()["data"]

    assert client.delete(f"/api/extras/{extra['id']}", headers=auth_headers).status_code == 200
    assert client.delete(f"/api/extras/{extra['id']}", headers=auth_headers).status_code == 404
