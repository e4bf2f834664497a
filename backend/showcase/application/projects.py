from typing import Any, Mapping, Optional

from flask import current_app
from werkzeug.datastructures import FileStorage

from showcase.extensions import db
from showcase.models.project import Project
from showcase.models.section import Section
from showcase.utils.lookup import get_or_404, get_project_or_404
from showcase.utils.media import delete_file, delete_files, staged_upload
from showcase.utils.patch import PatchField, apply_patch, build_patch, ensure_not_empty
from showcase.utils.transaction import transactional
from showcase.utils.validation import (
    integer,
    missing_fields,
    raise_if_missing,
    required_text,
    text,
)

PROJECT_FIELDS = (
    PatchField("title", convert=required_text),
    PatchField("description", convert=text),
    PatchField("category", convert=required_text),
    PatchField("section_id", convert=integer),
    PatchField("advantages_title", convert=text),
    PatchField("advantages_subtitle", convert=text),
    PatchField("workflow_title", convert=text),
    PatchField("workflow_subtitle", convert=text),
)


def create_project(
    *,
    data: Mapping[str, Any],
    image: Optional[FileStorage],
) -> Project:
    """
    Create a project inside an existing section.

    Edge cases handled:
    - Missing required fields (title, section_id, category, image)
    - Unknown section (checked before the image is written)
    - Failed insert (the stored image is removed again)
    """
    missing = missing_fields(data, "title", "section_id", "category")
    if not image:
        missing.append("image")
    raise_if_missing(missing)

    section_id = integer(data["section_id"], "section_id")
    get_or_404(Section, section_id, "Section")

    with staged_upload(image, "image") as image_path:
        with transactional():
            # Re-checked under lock in case the section was removed meanwhile
            get_or_404(Section, section_id, "Section", lock=True)

            project = Project()
            project.title = required_text(data["title"], "title")
            project.description = text(data.get("description"), "description")
            project.category = required_text(data["category"], "category")
            project.section_id = section_id
            project.image = image_path

            db.session.add(project)
            db.session.flush()

    current_app.logger.info("project.create id=%s section_id=%s", project.id, section_id)
    return project


def update_project(
    *,
    project_id: int,
    data: Mapping[str, Any],
    image: Optional[FileStorage],
) -> Project:
    """Partial update; a new image replaces the stored one."""
    patch = build_patch(data, PROJECT_FIELDS)
    ensure_not_empty(patch, image)

    get_project_or_404(project_id)
    if "section_id" in patch:
        get_or_404(Section, patch["section_id"], "Section")

    with staged_upload(image, "image") as image_path:
        with transactional():
            project = get_project_or_404(project_id, lock=True)
            if "section_id" in patch:
                get_or_404(Section, patch["section_id"], "Section")

            previous_image = project.image
            changed_fields = apply_patch(project, patch)

            if image_path:
                project.image = image_path
                changed_fields.append("image")

    if image_path and previous_image and previous_image != image_path:
        delete_file(previous_image)

    current_app.logger.info("project.update id=%s fields=%s", project_id, changed_fields)
    return project


def delete_project(*, project_id: int) -> None:
    """
    Hard-delete a project and its sub-entities.

    Stored media is removed best-effort before the rows; a missing or
    undeletable file never blocks the row delete.
    """
    with transactional():
        project = get_project_or_404(project_id, lock=True)

        delete_files(project.media_paths())
        db.session.delete(project)

    current_app.logger.info("project.delete id=%s", project_id)


def last_project() -> Optional[Project]:
    return Project.query.order_by(Project.id.desc()).first()
