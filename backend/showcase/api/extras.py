from flask import current_app
from showcase.errors import ValidationError
from showcase.extensions import db
from showcase.models.feature import Feature
from showcase.models.project_extra import ProjectExtra
from showcase.normalizers import envelope
from showcase.normalizers.extra import normalize_extra
from showcase.utils.lookup import get_or_404, get_project_or_404
from showcase.utils.patch import PatchField, apply_patch, build_patch, ensure_not_empty
from showcase.utils.transaction import transactional
from showcase.utils.validation import (
    optional_integer,
    request_data,
    require_fields,
    required_text,
    text,
)
from . import api_bp

EXTRA_FIELDS = (
    PatchField("title", convert=required_text),
    PatchField("description", convert=text),
    PatchField("stat", convert=text),
    PatchField("feature_id", convert=optional_integer),
)


def _check_feature(feature_id, project_id):
    """An extra may hang off a feature, but only one of its own project."""
    if feature_id is None:
        return
    feature = Feature.query.filter_by(id=feature_id).first()
    if feature is None or feature.project_id != project_id:
        raise ValidationError("feature_id must reference a feature of the same project")


@api_bp.route("/projects/<int:project_id>/extras", methods=["GET"])
def list_extras(project_id):
    get_project_or_404(project_id)

    extras = ProjectExtra.query.filter_by(
        project_id=project_id
    ).order_by(ProjectExtra.id.asc()).all()

    return envelope([normalize_extra(e) for e in extras])


@api_bp.route("/projects/<int:project_id>/extras", methods=["POST"])
def create_extra(project_id):
    get_project_or_404(project_id)
    data = request_data()

    require_fields(data, "title")
    feature_id = optional_integer(data.get("feature_id"), "feature_id")

    with transactional():
        get_project_or_404(project_id, lock=True)
        _check_feature(feature_id, project_id)

        extra = ProjectExtra()
        extra.project_id = project_id
        extra.feature_id = feature_id
        extra.title = required_text(data["title"], "title")
        extra.description = text(data.get("description"), "description")
        extra.stat = text(data.get("stat"), "stat")

        db.session.add(extra)
        db.session.flush()

    current_app.logger.info("extra.create id=%s project_id=%s", extra.id, project_id)
    return envelope(normalize_extra(extra), "Extra created successfully", 201)


@api_bp.route("/extras/<int:extra_id>", methods=["PUT"])
def update_extra(extra_id):
    patch = build_patch(request_data(), EXTRA_FIELDS)
    ensure_not_empty(patch)

    with transactional():
        extra = get_or_404(ProjectExtra, extra_id, "Extra", lock=True)
        if "feature_id" in patch:
            _check_feature(patch["feature_id"], extra.project_id)
        changed_fields = apply_patch(extra, patch)

    current_app.logger.info("extra.update id=%s fields=%s", extra_id, changed_fields)
    return envelope(normalize_extra(extra), "Extra updated successfully")


@api_bp.route("/extras/<int:extra_id>", methods=["DELETE"])
def delete_extra(extra_id):
    with transactional():
        extra = get_or_404(ProjectExtra, extra_id, "Extra", lock=True)
        db.session.delete(extra)

    current_app.logger.info("extra.delete id=%s", extra_id)
    return envelope({"id": extra_id}, "Extra deleted successfully")
