import json

import pytest


@pytest.fixture
def advantage_payload():
    return {
        "title": "Fast",
        "description": "Reacts within 10 ms",
        "icon": "bolt",
        "stat": "10 ms",
    }


def create_advantage(client, auth_headers, project_id, payload):
    return client.post(
        f"/api/projects/{project_id}/advantages", json=payload, headers=auth_headers
    )


def test_create_and_list_advantages(client, auth_headers, project, advantage_payload):
    res = create_advantage(client, auth_headers, project["id"], advantage_payload)

    assert res.status_code == 201
    created = res.get_json()["data"]
    assert created["project_id"] == project["id"]
    assert created["icon"] == "bolt"

    listed = client.get(f"/api/projects/{project['id']}/advantages").get_json()["data"]
    assert [a["id"] for a in listed] == [created["id"]]


def test_missing_stat_is_rejected(client, auth_headers, project, advantage_payload):
    url = f"/api/projects/{project['id']}/advantages"
    create_advantage(client, auth_headers, project["id"], advantage_payload)
    before = len(client.get(url).get_json()["data"])

    incomplete = dict(advantage_payload, title="Cheap")
    del incomplete["stat"]
    res = create_advantage(client, auth_headers, project["id"], incomplete)

    assert res.status_code == 400
    assert res.get_json()["message"] == "Missing required fields: stat"
    assert len(client.get(url).get_json()["data"]) == before == 1


def test_partial_title_update_changes_only_title(client, auth_headers, project, advantage_payload):
    created = create_advantage(client, auth_headers, project["id"], advantage_payload).get_json()["data"]

    res = client.put(
        f"/api/projects/{project['id']}/advantages/{created['id']}",
        json={"title": "Faster"},
        headers=auth_headers,
    )

    assert res.get_json()["data"] == dict(created, title="Faster")


def test_structured_icon_round_trips_as_text(client, auth_headers, project, advantage_payload):
    icon = {"library": "lucide", "name": "zap", "size": 24}
    advantage_payload["icon"] = icon

    created = create_advantage(client, auth_headers, project["id"], advantage_payload).get_json()["data"]

    assert json.loads(created["icon"]) == icon
    listed = client.get(f"/api/projects/{project['id']}/advantages").get_json()["data"]
    assert listed[0]["icon"] == created["icon"]


def test_heading_is_shared_by_all_advantages(client, auth_headers, project, advantage_payload):
    advantage_payload["section_title"] = "Why it works"
    advantage_payload["section_subtitle"] = "Three reasons"
    create_advantage(client, auth_headers, project["id"], advantage_payload)

    second = dict(advantage_payload, title="Cheap")
    del second["section_title"], second["section_subtitle"]
    create_advantage(client, auth_headers, project["id"], second)

    listed = client.get(f"/api/projects/{project['id']}/advantages").get_json()["data"]
    assert {a["section_title"] for a in listed} == {"Why it works"}
    assert {a["section_subtitle"] for a in listed} == {"Three reasons"}

    detail = client.get(f"/api/projects/{project['id']}").get_json()["data"]
    assert detail["advantages_title"] == "Why it works"


def test_partial_update_keeps_other_fields(client, auth_headers, project, advantage_payload):
    created = create_advantage(client, auth_headers, project["id"], advantage_payload).get_json()["data"]

    res = client.put(
        f"/api/projects/{project['id']}/advantages/{created['id']}",
        json={"description": "Reacts within 5 ms"},
        headers=auth_headers,
    )

    assert res.status_code == 200
    updated = res.get_json()["data"]
    assert updated["description"] == "Reacts within 5 ms"
    assert updated["title"] == created["title"]
    assert updated["stat"] == created["stat"]
    assert updated["icon"] == created["icon"]


def test_update_heading_only(client, auth_headers, project, advantage_payload):
    created = create_advantage(client, auth_headers, project["id"], advantage_payload).get_json()["data"]

    res = client.put(
        f"/api/projects/{project['id']}/advantages/{created['id']}",
        json={"section_title": "Highlights"},
        headers=auth_headers,
    )

    assert res.status_code == 200
    assert res.get_json()["data"]["section_title"] == "Highlights"


def test_update_with_empty_body(client, auth_headers, project, advantage_payload):
    created = create_advantage(client, auth_headers, project["id"], advantage_payload).get_json()["data"]

    res = client.put(
        f"/api/projects/{project['id']}/advantages/{created['id']}", json={}, headers=auth_headers
    )

    assert res.status_code == 400
    assert res.get_json()["message"] == "Nothing to update"


def test_advantage_is_scoped_to_its_project(
    client, auth_headers, make_project, project, advantage_payload
):
    created = create_advantage(client, auth_headers, project["id"], advantage_payload).get_json()["data"]
    other = make_project(title="Other")

    res = client.put(
        f"/api/projects/{other['id']}/advantages/{created['id']}",
        json={"title": "Hijack"},
        headers=auth_headers,
    )
    assert res.status_code == 404
    assert res.get_json()["message"] == "Advantage not found"

    res = client.delete(f"/api/projects/{other['id']}/advantages/{created['id']}", headers=auth_headers)
    assert res.status_code == 404


def test_delete_advantage(client, auth_headers, project, advantage_payload):
    created = create_advantage(client, auth_headers, project["id"], advantage_payload).get_json()["data"]

    res = client.delete(
        f"/api/projects/{project['id']}/advantages/{created['id']}", headers=auth_headers
    )

    assert res.status_code == 200
    assert client.get(f"/api/projects/{project['id']}/advantages").get_json()["data"] == []


def test_advantages_of_unknown_project(client, auth_headers, advantage_payload):
    assert client.get("/api/projects/999/advantages").status_code == 404
    assert create_advantage(client, auth_headers, 999, advantage_payload).status_code == 404
