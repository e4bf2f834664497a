from flask import current_app
from showcase.errors import ConflictError
from showcase.extensions import db
from showcase.models.project import Project
from showcase.models.section import Section
from showcase.utils.lookup import exists, get_or_404
from showcase.utils.transaction import transactional
from showcase.utils.validation import require_fields, required_text


def create_section(*, data) -> Section:
    require_fields(data, "name")

    section = Section()
    section.name = required_text(data["name"], "name")

    with transactional():
        db.session.add(section)
        db.session.flush()

    current_app.logger.info("section.create id=%s", section.id)
    return section


def rename_section(*, section_id: int, data) -> Section:
    require_fields(data, "name")
    name = required_text(data["name"], "name")

    with transactional():
        section = get_or_404(Section, section_id, "Section", lock=True)
        section.name = name

    current_app.logger.info("section.update id=%s", section_id)
    return section


def delete_section(*, section_id: int) -> None:
    """
    Hard-delete a section.

    Blocked while any project still references it; projects are never
    deleted as a side effect.
    """
    with transactional():
        section = get_or_404(Section, section_id, "Section", lock=True)

        if exists(Project, section_id=section.id):
            raise ConflictError(
                "Cannot delete this section because it still has projects"
            )

        db.session.delete(section)

    current_app.logger.info("section.delete id=%s", section_id)
