from flask import current_app
from showcase.extensions import db
from showcase.models.advantage import Advantage
from showcase.normalizers import envelope
from showcase.normalizers.advantage import normalize_advantage
from showcase.utils.lookup import get_or_404, get_project_or_404
from showcase.utils.patch import PatchField, apply_patch, build_patch, ensure_not_empty
from showcase.utils.transaction import transactional
from showcase.utils.validation import icon, request_data, require_fields, required_text, text
from . import api_bp

ADVANTAGE_FIELDS = (
    PatchField("title", convert=required_text),
    PatchField("description", convert=required_text),
    PatchField("icon", convert=icon),
    PatchField("stat", convert=required_text),
)

# Block heading, stored once on the owning project
HEADING_FIELDS = (
    PatchField("section_title", column="advantages_title", convert=text),
    PatchField("section_subtitle", column="advantages_subtitle", convert=text),
)


# ------------------------
# Advantages
# ------------------------

@api_bp.route("/projects/<int:project_id>/advantages", methods=["GET"])
def list_advantages(project_id):
    get_project_or_404(project_id)

    advantages = Advantage.query.filter_by(
        project_id=project_id
    ).order_by(Advantage.id.asc()).all()

    return envelope([normalize_advantage(a) for a in advantages])


@api_bp.route("/projects/<int:project_id>/advantages", methods=["POST"])
def create_advantage(project_id):
    get_project_or_404(project_id)
    data = request_data()

    require_fields(data, "title", "description", "icon", "stat")
    heading = build_patch(data, HEADING_FIELDS)

    with transactional():
        project = get_project_or_404(project_id, lock=True)
        apply_patch(project, heading)

        advantage = Advantage()
        advantage.project_id = project.id
        advantage.title = required_text(data["title"], "title")
        advantage.description = required_text(data["description"], "description")
        advantage.icon = icon(data["icon"], "icon")
        advantage.stat = required_text(data["stat"], "stat")

        db.session.add(advantage)
        db.session.flush()

    current_app.logger.info("advantage.create id=%s project_id=%s", advantage.id, project_id)
    return envelope(normalize_advantage(advantage), "Advantage created successfully", 201)


@api_bp.route("/projects/<int:project_id>/advantages/<int:advantage_id>", methods=["PUT"])
def update_advantage(project_id, advantage_id):
    data = request_data()

    patch = build_patch(data, ADVANTAGE_FIELDS)
    heading = build_patch(data, HEADING_FIELDS)
    ensure_not_empty(patch, heading)

    with transactional():
        advantage = get_or_404(
            Advantage, advantage_id, "Advantage", lock=True, project_id=project_id
        )
        changed_fields = apply_patch(advantage, patch)
        # One parent-row update instead of rewriting every advantage
        changed_fields += apply_patch(advantage.project, heading)

    current_app.logger.info("advantage.update id=%s fields=%s", advantage_id, changed_fields)
    return envelope(normalize_advantage(advantage), "Advantage updated successfully")


@api_bp.route("/projects/<int:project_id>/advantages/<int:advantage_id>", methods=["DELETE"])
def delete_advantage(project_id, advantage_id):
    with transactional():
        advantage = get_or_404(
            Advantage, advantage_id, "Advantage", lock=True, project_id=project_id
        )
        db.session.delete(advantage)

    current_app.logger.info("advantage.delete id=%s project_id=%s", advantage_id, project_id)
    return envelope({"id": advantage_id}, "Advantage deleted successfully")
