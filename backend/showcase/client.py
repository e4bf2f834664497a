from __future__ import annotations

import dataclasses
import os
from enum import Enum
from typing import Any, BinaryIO, Mapping, Optional, Tuple, Union

import requests

# (filename, fileobj, mimetype) as accepted by requests, or a bare file object
Upload = Union[Tuple[str, BinaryIO, str], Tuple[str, BinaryIO], BinaryIO]

_DROP = object()


class ShowcaseAPIError(Exception):
    def __init__(self, status_code: int, message: str, payload: Any = None):
        super().__init__(f"{status_code}: {message}")
        self.status_code = status_code
        self.message = message
        self.payload = payload


def _to_wire(value: Any) -> Any:
    if value is None or isinstance(value, (str, bool, int, float)):
        return value
    if isinstance(value, Enum):
        return _to_wire(value.value)
    if isinstance(value, Mapping):
        out = {}
        for key, item in value.items():
            item = _to_wire(item)
            if item is not _DROP:
                out[str(key)] = item
        return out
    if isinstance(value, (list, tuple)):
        return [item for item in map(_to_wire, value) if item is not _DROP]
    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        return _to_wire(dataclasses.asdict(value))

    # Presentation objects (rendered icons etc.) only cross as their identifier
    for attr in ("key", "name"):
        identifier = getattr(value, attr, None)
        if isinstance(identifier, str):
            return identifier
    return _DROP


def to_wire(payload: Any) -> Any:
    """Reduce an outgoing payload to plain JSON values, dropping anything else."""
    value = _to_wire(payload)
    return None if value is _DROP else value


def _form_value(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def to_form(payload: Optional[Mapping[str, Any]]) -> dict[str, str]:
    """Flatten a payload into multipart form fields; None values are omitted."""
    fields = to_wire(payload or {}) or {}
    return {
        key: _form_value(value)
        for key, value in fields.items()
        if value is not None and not isinstance(value, (dict, list))
    }


class ShowcaseClient:
    """
    Thin data-access layer over the showcase REST API.

    One method per endpoint. Public reads go out without credentials; every
    mutating call carries the bearer token set by ``login`` or passed in.
    """

    def __init__(
        self,
        base_url: str,
        token: Optional[str] = None,
        *,
        session: Optional[requests.Session] = None,
        timeout: float = 30.0,
    ):
        self.base_url = base_url.rstrip("/")
        self.token = token
        self.session = session or requests.Session()
        self.timeout = timeout

    @classmethod
    def from_env(cls) -> "ShowcaseClient":
        url = os.environ.get("SHOWCASE_API_URL", "http://localhost:5000/api")
        token = os.environ.get("SHOWCASE_API_TOKEN")
        return cls(url, token)

    # ------------------------
    # Transport
    # ------------------------

    def _headers(self, auth: bool) -> dict[str, str]:
        if not auth:
            return {}
        if not self.token:
            raise ShowcaseAPIError(401, "Authorization token required")
        return {"Authorization": f"Bearer {self.token}"}

    def _request(
        self,
        method: str,
        path: str,
        *,
        json: Any = None,
        form: Optional[Mapping[str, Any]] = None,
        files: Optional[Mapping[str, Upload]] = None,
        params: Optional[Mapping[str, Any]] = None,
        auth: bool = False,
    ) -> Any:
        kwargs: dict[str, Any] = {
            "headers": self._headers(auth),
            "timeout": self.timeout,
        }
        if params:
            kwargs["params"] = dict(params)

        if files is not None or form is not None:
            kwargs["data"] = to_form(form)
            kwargs["files"] = {k: v for k, v in (files or {}).items() if v is not None}
        elif json is not None:
            kwargs["json"] = to_wire(json)

        response = self.session.request(method, f"{self.base_url}{path}", **kwargs)

        try:
            body = response.json()
        except ValueError:
            body = None

        if not 200 <= response.status_code < 300:
            message = None
            if isinstance(body, dict):
                message = body.get("message") or body.get("error")
            raise ShowcaseAPIError(
                response.status_code,
                message or f"Request failed with status {response.status_code}",
                body,
            )

        if isinstance(body, dict) and "data" in body:
            return body["data"]
        return body

    # ------------------------
    # Auth
    # ------------------------

    def login(self, email: str, password: str) -> dict[str, Any]:
        if not email or not password:
            raise ValueError("email and password are required")
        data = self._request("POST", "/login", json={"email": email, "password": password})
        self.token = data["token"]
        return data

    def verify(self) -> dict[str, Any]:
        return self._request("GET", "/verify", auth=True)

    # ------------------------
    # Sections
    # ------------------------

    def list_sections(self) -> list[dict[str, Any]]:
        return self._request("GET", "/sections")

    def get_section(self, section_id: int) -> dict[str, Any]:
        return self._request("GET", f"/sections/{section_id}")

    def create_section(self, name: str) -> dict[str, Any]:
        return self._request("POST", "/sections", json={"name": name}, auth=True)

    def update_section(self, section_id: int, name: str) -> dict[str, Any]:
        return self._request("PUT", f"/sections/{section_id}", json={"name": name}, auth=True)

    def delete_section(self, section_id: int) -> dict[str, Any]:
        return self._request("DELETE", f"/sections/{section_id}", auth=True)

    # ------------------------
    # Projects
    # ------------------------

    def list_projects(self, section_id: Optional[int] = None) -> list[dict[str, Any]]:
        params = {"section_id": section_id} if section_id is not None else None
        return self._request("GET", "/projects", params=params)

    def get_project(self, project_id: int) -> dict[str, Any]:
        return self._request("GET", f"/projects/{project_id}")

    def get_last_project(self) -> Optional[dict[str, Any]]:
        try:
            return self._request("GET", "/projects/last")
        except ShowcaseAPIError as exc:
            if exc.status_code == 404:
                return None
            raise

    def create_project(self, fields: Mapping[str, Any], image: Upload) -> dict[str, Any]:
        return self._request("POST", "/projects", form=fields, files={"image": image}, auth=True)

    def update_project(
        self,
        project_id: int,
        fields: Mapping[str, Any],
        image: Optional[Upload] = None,
    ) -> dict[str, Any]:
        return self._request(
            "PUT", f"/projects/{project_id}", form=fields, files={"image": image}, auth=True
        )

    def delete_project(self, project_id: int) -> dict[str, Any]:
        return self._request("DELETE", f"/projects/{project_id}", auth=True)

    def upload_project_image(self, image: Upload) -> str:
        return self._request("POST", "/projects/upload", files={"image": image}, auth=True)["fileUrl"]

    # ------------------------
    # Advantages
    # ------------------------

    def list_advantages(self, project_id: int) -> list[dict[str, Any]]:
        return self._request("GET", f"/projects/{project_id}/advantages")

    def create_advantage(self, project_id: int, advantage: Mapping[str, Any]) -> dict[str, Any]:
        return self._request("POST", f"/projects/{project_id}/advantages", json=advantage, auth=True)

    def update_advantage(
        self, project_id: int, advantage_id: int, changes: Mapping[str, Any]
    ) -> dict[str, Any]:
        return self._request(
            "PUT", f"/projects/{project_id}/advantages/{advantage_id}", json=changes, auth=True
        )

    def delete_advantage(self, project_id: int, advantage_id: int) -> dict[str, Any]:
        return self._request("DELETE", f"/projects/{project_id}/advantages/{advantage_id}", auth=True)

    # ------------------------
    # Project config
    # ------------------------

    def get_project_config(self, project_id: int) -> dict[str, Any]:
        return self._request("GET", f"/projects/{project_id}/config")

    def save_project_config(self, project_id: int, flags: Mapping[str, bool]) -> dict[str, Any]:
        return self._request("POST", f"/projects/{project_id}/config", json=flags, auth=True)

    def update_project_config(self, project_id: int, flags: Mapping[str, bool]) -> dict[str, Any]:
        return self._request("PUT", f"/projects/{project_id}/config", json=flags, auth=True)

    def delete_project_config(self, project_id: int) -> dict[str, Any]:
        return self._request("DELETE", f"/projects/{project_id}/config", auth=True)

    # ------------------------
    # Features
    # ------------------------

    def list_features(self, project_id: int) -> list[dict[str, Any]]:
        return self._request("GET", f"/projects/{project_id}/features")

    def create_feature(
        self,
        project_id: int,
        feature: Mapping[str, Any],
        media: Optional[Upload] = None,
    ) -> dict[str, Any]:
        return self._request(
            "POST", f"/projects/{project_id}/features", form=feature, files={"media": media}, auth=True
        )

    def update_feature(
        self,
        feature_id: int,
        changes: Mapping[str, Any],
        media: Optional[Upload] = None,
    ) -> dict[str, Any]:
        return self._request(
            "PUT", f"/features/{feature_id}", form=changes, files={"media": media}, auth=True
        )

    def delete_feature(self, feature_id: int) -> dict[str, Any]:
        return self._request("DELETE", f"/features/{feature_id}", auth=True)

    def upload_feature_media(self, media: Upload) -> str:
        return self._request("POST", "/features/upload", files={"media": media}, auth=True)["fileUrl"]

    # ------------------------
    # Stats
    # ------------------------

    def list_stats(self, project_id: int) -> list[dict[str, Any]]:
        return self._request("GET", f"/projects/{project_id}/stats")

    def create_stat(self, project_id: int, stat: Mapping[str, Any]) -> dict[str, Any]:
        return self._request("POST", f"/projects/{project_id}/stats", json=stat, auth=True)

    def update_stat(self, stat_id: int, changes: Mapping[str, Any]) -> dict[str, Any]:
        return self._request("PUT", f"/stats/{stat_id}", json=changes, auth=True)

    def delete_stat(self, stat_id: int) -> dict[str, Any]:
        return self._request("DELETE", f"/stats/{stat_id}", auth=True)

    # ------------------------
    # Extras
    # ------------------------

    def list_extras(self, project_id: int) -> list[dict[str, Any]]:
        return self._request("GET", f"/projects/{project_id}/extras")

    def create_extra(self, project_id: int, extra: Mapping[str, Any]) -> dict[str, Any]:
        return self._request("POST", f"/projects/{project_id}/extras", json=extra, auth=True)

    def update_extra(self, extra_id: int, changes: Mapping[str, Any]) -> dict[str, Any]:
        return self._request("PUT", f"/extras/{extra_id}", json=changes, auth=True)

    def delete_extra(self, extra_id: int) -> dict[str, Any]:
        return self._request("DELETE", f"/extras/{extra_id}", auth=True)

    # ------------------------
    # Team members
    # ------------------------

    def list_team_members(self, project_id: int) -> list[dict[str, Any]]:
        return self._request("GET", f"/projects/{project_id}/team-members")

    def create_team_member(
        self,
        project_id: int,
        member: Mapping[str, Any],
        avatar: Optional[Upload] = None,
    ) -> dict[str, Any]:
        """``avatar`` may be a file, or ``member["avatar"]`` a data URI / stored URL."""
        return self._request(
            "POST", f"/projects/{project_id}/team-members", form=member, files={"avatar": avatar}, auth=True
        )

    def update_team_member(
        self,
        member_id: int,
        changes: Mapping[str, Any],
        avatar: Optional[Upload] = None,
    ) -> dict[str, Any]:
        return self._request(
            "PUT", f"/team-members/{member_id}", form=changes, files={"avatar": avatar}, auth=True
        )

    def delete_team_member(self, member_id: int) -> dict[str, Any]:
        return self._request("DELETE", f"/team-members/{member_id}", auth=True)

    def upload_avatar(self, avatar: Upload) -> str:
        return self._request("POST", "/team-members/upload-avatar", files={"avatar": avatar}, auth=True)["fileUrl"]

    # ------------------------
    # Workflow
    # ------------------------

    def get_workflow(self, project_id: int) -> dict[str, Any]:
        return self._request("GET", f"/projects/{project_id}/workflow")

    def save_workflow(self, project_id: int, heading: Mapping[str, Any]) -> dict[str, Any]:
        return self._request("POST", f"/projects/{project_id}/workflow", json=heading, auth=True)

    def update_workflow(self, project_id: int, changes: Mapping[str, Any]) -> dict[str, Any]:
        return self._request("PUT", f"/projects/{project_id}/workflow", json=changes, auth=True)

    def delete_workflow(self, project_id: int) -> dict[str, Any]:
        return self._request("DELETE", f"/projects/{project_id}/workflow", auth=True)

    def list_workflow_steps(self, project_id: int) -> list[dict[str, Any]]:
        steps = self._request("GET", f"/projects/{project_id}/workflow-steps")
        return sorted(steps, key=lambda s: (s.get("step_number") or 0, s.get("id") or 0))

    def create_workflow_step(
        self,
        project_id: int,
        step: Mapping[str, Any],
        image: Optional[Upload] = None,
    ) -> dict[str, Any]:
        return self._request(
            "POST", f"/projects/{project_id}/workflow-steps", form=step, files={"image": image}, auth=True
        )

    def update_workflow_step(
        self,
        step_id: int,
        changes: Mapping[str, Any],
        image: Optional[Upload] = None,
    ) -> dict[str, Any]:
        return self._request(
            "PUT", f"/workflow-steps/{step_id}", form=changes, files={"image": image}, auth=True
        )

    def delete_workflow_step(self, step_id: int) -> dict[str, Any]:
        return self._request("DELETE", f"/workflow-steps/{step_id}", auth=True)
