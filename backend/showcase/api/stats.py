from flask import current_app
from showcase.extensions import db
from showcase.models.stat import Stat
from showcase.normalizers import envelope
from showcase.normalizers.stat import normalize_stat
from showcase.utils.lookup import get_or_404, get_project_or_404
from showcase.utils.patch import PatchField, apply_patch, build_patch, ensure_not_empty
from showcase.utils.transaction import transactional
from showcase.utils.validation import request_data, require_fields, required_text, text
from . import api_bp

STAT_FIELDS = (
    PatchField("icon_key", convert=required_text),
    PatchField("title", convert=required_text),
    PatchField("description", convert=text),
    PatchField("text", convert=required_text),
)


@api_bp.route("/projects/<int:project_id>/stats", methods=["GET"])
def list_stats(project_id):
    get_project_or_404(project_id)

    stats = Stat.query.filter_by(project_id=project_id).order_by(Stat.id.asc()).all()
    return envelope([normalize_stat(s) for s in stats])


@api_bp.route("/projects/<int:project_id>/stats", methods=["POST"])
def create_stat(project_id):
    get_project_or_404(project_id)
    data = request_data()

    require_fields(data, "icon_key", "title", "text")

    with transactional():
        get_project_or_404(project_id, lock=True)

        stat = Stat()
        stat.project_id = project_id
        stat.icon_key = required_text(data["icon_key"], "icon_key")
        stat.title = required_text(data["title"], "title")
        stat.description = text(data.get("description"), "description")
        stat.text = required_text(data["text"], "text")

        db.session.add(stat)
        db.session.flush()

    current_app.logger.info("stat.create id=%s project_id=%s", stat.id, project_id)
    return envelope(normalize_stat(stat), "Stat created successfully", 201)


@api_bp.route("/stats/<int:stat_id>", methods=["PUT"])
def update_stat(stat_id):
    patch = build_patch(request_data(), STAT_FIELDS)
    ensure_not_empty(patch)

    with transactional():
        stat = get_or_404(Stat, stat_id, "Stat", lock=True)
        changed_fields = apply_patch(stat, patch)

    current_app.logger.info("stat.update id=%s fields=%s", stat_id, changed_fields)
    return envelope(normalize_stat(stat), "Stat updated successfully")


@api_bp.route("/stats/<int:stat_id>", methods=["DELETE"])
def delete_stat(stat_id):
    with transactional():
        stat = get_or_404(Stat, stat_id, "Stat", lock=True)
        db.session.delete(stat)

    current_app.logger.info("stat.delete id=%s", stat_id)
    return envelope({"id": stat_id}, "Stat deleted successfully")
