from flask import current_app
from showcase.errors import NotFoundError
from showcase.extensions import db
from showcase.models.project_config import CONFIG_FLAGS, ProjectConfig
from showcase.normalizers import envelope
from showcase.normalizers.config import normalize_config
from showcase.utils.lookup import get_project_or_404
from showcase.utils.patch import PatchField, apply_patch, build_patch, ensure_not_empty
from showcase.utils.transaction import transactional
from showcase.utils.validation import boolean, request_data
from . import api_bp

CONFIG_FIELDS = tuple(
    PatchField(key, column=column, convert=boolean)
    for key, column in CONFIG_FLAGS.items()
)


def _config_or_404(project_id, lock=False):
    query = ProjectConfig.query.filter_by(project_id=project_id)
    if lock:
        query = query.with_for_update()

    config = query.first()
    if config is None:
        raise NotFoundError("No configuration for this project")
    return config


# ------------------------
# Project config
# ------------------------

@api_bp.route("/projects/<int:project_id>/config", methods=["GET"])
def get_project_config(project_id):
    get_project_or_404(project_id)
    return envelope(normalize_config(_config_or_404(project_id)))


@api_bp.route("/projects/<int:project_id>/config", methods=["POST"])
def save_project_config(project_id):
    """Upsert: missing flags default to false on create and are kept on replace."""
    patch = build_patch(request_data(), CONFIG_FIELDS)

    with transactional():
        get_project_or_404(project_id, lock=True)

        config = ProjectConfig.query.filter_by(project_id=project_id).with_for_update().first()
        created = config is None
        if created:
            config = ProjectConfig()
            config.project_id = project_id
            for column in CONFIG_FLAGS.values():
                setattr(config, column, False)
            db.session.add(config)

        apply_patch(config, patch)
        db.session.flush()

    current_app.logger.info("project_config.save project_id=%s created=%s", project_id, created)
    if created:
        return envelope(normalize_config(config), "Configuration created successfully", 201)
    return envelope(normalize_config(config), "Configuration saved successfully")


@api_bp.route("/projects/<int:project_id>/config", methods=["PUT"])
def update_project_config(project_id):
    patch = build_patch(request_data(), CONFIG_FIELDS)
    ensure_not_empty(patch)

    with transactional():
        get_project_or_404(project_id)
        config = _config_or_404(project_id, lock=True)
        changed_fields = apply_patch(config, patch)

    current_app.logger.info("project_config.update project_id=%s fields=%s", project_id, changed_fields)
    return envelope(normalize_config(config), "Configuration updated successfully")


@api_bp.route("/projects/<int:project_id>/config", methods=["DELETE"])
def delete_project_config(project_id):
    with transactional():
        config = _config_or_404(project_id, lock=True)
        db.session.delete(config)

    current_app.logger.info("project_config.delete project_id=%s", project_id)
    return envelope({"project_id": project_id}, "Configuration deleted successfully")
