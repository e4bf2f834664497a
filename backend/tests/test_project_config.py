ALL_OFF = {
    "showAdvantages": False,
    "showFeatures": False,
    "showWorkflow": False,
    "showTeam": False,
    "showContact": False,
}


def test_config_missing(client, project):
    res = client.get(f"/api/projects/{project['id']}/config")

    assert res.status_code == 404
    assert res.get_json()["message"] == "No configuration for this project"


def test_config_of_unknown_project(client):
    assert client.get("/api/projects/999/config").get_json()["message"] == "Project not found"


def test_first_save_creates_with_defaults(client, auth_headers, project):
    res = client.post(
        f"/api/projects/{project['id']}/config", json={"showAdvantages": True}, headers=auth_headers
    )

    assert res.status_code == 201
    assert res.get_json()["data"] == dict(ALL_OFF, project_id=project["id"], showAdvantages=True)


def test_second_save_updates_in_place(client, auth_headers, project):
    url = f"/api/projects/{project['id']}/config"
    client.post(url, json={"showAdvantages": True}, headers=auth_headers)

    res = client.post(url, json={"showTeam": "true"}, headers=auth_headers)

    assert res.status_code == 200
    data = res.get_json()["data"]
    assert data["showAdvantages"] is True
    assert data["showTeam"] is True
    assert data["showContact"] is False


def test_config_read_is_public(client, auth_headers, project):
    url = f"/api/projects/{project['id']}/config"
    client.post(url, json={"showWorkflow": True}, headers=auth_headers)

    res = client.get(url)

    assert res.status_code == 200
    assert res.get_json()["data"]["showWorkflow"] is True


def test_update_requires_existing_config(client, auth_headers, project):
    res = client.put(f"/api/projects/{project['id']}/config", json={"showTeam": True}, headers=auth_headers)

    assert res.status_code == 404


def test_update_rejects_non_boolean(client, auth_headers, project):
    url = f"/api/projects/{project['id']}/config"
    client.post(url, json={}, headers=auth_headers)

    res = client.put(url, json={"showTeam": "maybe"}, headers=auth_headers)

    assert res.status_code == 400
    assert res.get_json()["message"] == "'showTeam' must be a boolean"


def test_update_flags(client, auth_headers, project):
    url = f"/api/projects/{project['id']}/config"
    client.post(url, json={"showTeam": True}, headers=auth_headers)

    res = client.put(url, json={"showTeam": False, "showContact": 1}, headers=auth_headers)

    assert res.status_code == 200
    data = res.get_json()["data"]
    assert data["showTeam"] is False
    assert data["showContact"] is True


def test_delete_config(client, auth_headers, project):
    url = f"/api/projects/{project['id']}/config"
    client.post(url, json={"showTeam": True}, headers=auth_headers)

    assert client.delete(url, headers=auth_headers).status_code == 200
    assert client.get(url).status_code == 404
    assert client.delete(url, headers=auth_headers).status_code == 404


def test_config_mutation_requires_token(client, project):
    res = client.post(f"/api/projects/{project['id']}/config", json={"showTeam": True})

    assert res.status_code == 401
    assert client.get(f"/api/projects/{project['id']}/config").status_code == 404
