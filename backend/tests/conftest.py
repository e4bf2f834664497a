import io
from urllib.parse import urlsplit

import pytest

from showcase import create_app
from showcase.extensions import db

ADMIN_EMAIL = "admin@example.com"
ADMIN_PASSWORD = "admin123"

PNG_BYTES = b"\x89PNG\r\n\x1a\n" + b"\x00" * 16
MP4_BYTES = b"\x00\x00\x00\x18ftypmp42" + b"\x00" * 16


def png(name="image.png"):
    return (io.BytesIO(PNG_BYTES), name, "image/png")


def mp4(name="clip.mp4"):
    return (io.BytesIO(MP4_BYTES), name, "video/mp4")


@pytest.fixture
def media_root(tmp_path):
    return tmp_path / "media"


@pytest.fixture
def app(media_root):
    app = create_app("testing", MEDIA_ROOT=str(media_root))
    yield app

    with app.app_context():
        db.session.remove()
        db.drop_all()


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def admin_token(client):
    res = client.post("/api/login", json={"email": ADMIN_EMAIL, "password": ADMIN_PASSWORD})
    assert res.status_code == 200
    return res.get_json()["data"]["token"]


@pytest.fixture
def auth_headers(admin_token):
    return {"Authorization": f"Bearer {admin_token}"}


def stored_file(media_root, url):
    """Filesystem path of a media URL returned by the API."""
    path = urlsplit(url).path
    assert path.startswith("/media/")
    return media_root / path[len("/media/"):]


# ------------------------
# Factories
# ------------------------

@pytest.fixture
def make_section(client, auth_headers):
    def factory(name="Robotics"):
        res = client.post("/api/sections", json={"name": name}, headers=auth_headers)
        assert res.status_code == 201, res.get_json()
        return res.get_json()["data"]
    return factory


@pytest.fixture
def make_project(client, auth_headers, make_section):
    def factory(section_id=None, **fields):
        if section_id is None:
            section_id = make_section()["id"]

        data = {
            "title": "Line follower",
            "description": "Autonomous line following robot",
            "category": "hardware",
            "section_id": str(section_id),
            "image": png(),
        }
        data.update(fields)

        res = client.post("/api/projects", data=data, headers=auth_headers)
        assert res.status_code == 201, res.get_json()
        return res.get_json()["data"]
    return factory


@pytest.fixture
def project(make_project):
    return make_project()


# ------------------------
# requests-style adapter for the client layer
# ------------------------

class FakeResponse:
    def __init__(self, response):
        self._response = response
        self.status_code = response.status_code

    def json(self):
        body = self._response.get_json(silent=True)
        if body is None:
            raise ValueError("Response body is not JSON")
        return body


class FlaskSession:
    """Routes ``requests.Session.request`` calls into a Flask test client."""

    def __init__(self, test_client):
        self.test_client = test_client
        self.calls = []

    def request(self, method, url, headers=None, timeout=None, params=None,
                json=None, data=None, files=None):
        self.calls.append((method, url, dict(headers or {})))

        kwargs = {"headers": headers or {}, "query_string": params}
        if files is not None or data is not None:
            form = dict(data or {})
            for field, upload in (files or {}).items():
                filename, fileobj, *content_type = upload
                form[field] = (fileobj, filename, *content_type)
            kwargs["data"] = form
        elif json is not None:
            kwargs["json"] = json

        path = urlsplit(url).path
        return FakeResponse(self.test_client.open(path, method=method, **kwargs))


@pytest.fixture
def flask_session(client):
    return FlaskSession(client)
