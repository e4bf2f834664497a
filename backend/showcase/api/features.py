from flask import current_app, request
from showcase.errors import ValidationError
from showcase.extensions import db
from showcase.models.feature import Feature, MEDIA_TYPES
from showcase.normalizers import envelope
from showcase.normalizers.feature import normalize_feature
from showcase.normalizers.media import normalize_upload
from showcase.utils.lookup import get_or_404, get_project_or_404
from showcase.utils.media import delete_file, save_file, staged_upload
from showcase.utils.patch import PatchField, apply_patch, build_patch, ensure_not_empty
from showcase.utils.transaction import transactional
from showcase.utils.validation import choice, request_data, require_fields, required_text, text
from . import api_bp

FEATURE_FIELDS = (
    PatchField("title", convert=required_text),
    PatchField("subtitle", convert=text),
    PatchField("icon_key", convert=text),
    PatchField("media_type", convert=choice(*MEDIA_TYPES)),
)


# ------------------------
# Features
# ------------------------

@api_bp.route("/projects/<int:project_id>/features", methods=["GET"])
def list_features(project_id):
    get_project_or_404(project_id)

    features = Feature.query.filter_by(
        project_id=project_id
    ).order_by(Feature.id.asc()).all()

    return envelope([normalize_feature(f) for f in features])


@api_bp.route("/projects/<int:project_id>/features", methods=["POST"])
def create_feature(project_id):
    get_project_or_404(project_id)
    data = request_data()

    require_fields(data, "title", "media_type")
    media_type = choice(*MEDIA_TYPES)(data["media_type"], "media_type")

    with staged_upload(request.files.get("media"), media_type) as media_url:
        with transactional():
            get_project_or_404(project_id, lock=True)

            feature = Feature()
            feature.project_id = project_id
            feature.title = required_text(data["title"], "title")
            feature.subtitle = text(data.get("subtitle"), "subtitle")
            feature.icon_key = text(data.get("icon_key"), "icon_key")
            feature.media_type = media_type
            feature.media_url = media_url

            db.session.add(feature)
            db.session.flush()

    current_app.logger.info("feature.create id=%s project_id=%s", feature.id, project_id)
    return envelope(normalize_feature(feature), "Feature created successfully", 201)


@api_bp.route("/features/<int:feature_id>", methods=["PUT"])
def update_feature(feature_id):
    data = request_data()
    media = request.files.get("media")

    patch = build_patch(data, FEATURE_FIELDS)
    ensure_not_empty(patch, media)

    feature = get_or_404(Feature, feature_id, "Feature")
    media_type = patch.get("media_type", feature.media_type)

    if media_type != feature.media_type and feature.media_url and not media:
        raise ValidationError("Changing media_type requires uploading new media")

    with staged_upload(media, media_type) as media_url:
        with transactional():
            feature = get_or_404(Feature, feature_id, "Feature", lock=True)
            previous_media = feature.media_url
            changed_fields = apply_patch(feature, patch)

            if media_url:
                feature.media_url = media_url
                changed_fields.append("media_url")

    if media_url and previous_media and previous_media != media_url:
        delete_file(previous_media)

    current_app.logger.info("feature.update id=%s fields=%s", feature_id, changed_fields)
    return envelope(normalize_feature(feature), "Feature updated successfully")


@api_bp.route("/features/<int:feature_id>", methods=["DELETE"])
def delete_feature(feature_id):
    with transactional():
        feature = get_or_404(Feature, feature_id, "Feature", lock=True)

        if feature.media_url:
            delete_file(feature.media_url)

        db.session.delete(feature)

    current_app.logger.info("feature.delete id=%s", feature_id)
    return envelope({"id": feature_id}, "Feature deleted successfully")


@api_bp.route("/features/upload", methods=["POST"])
def upload_feature_media():
    media_path = save_file(request.files.get("media"))
    return envelope(normalize_upload(media_path), "Media uploaded successfully", 201)
