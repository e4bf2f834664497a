from flask import current_app, request
from showcase.extensions import db
from showcase.models.team_member import TeamMember
from showcase.normalizers import envelope
from showcase.normalizers.media import normalize_upload
from showcase.normalizers.team_member import normalize_team_member
from showcase.utils.lookup import get_or_404, get_project_or_404
from showcase.utils.media import (
    cleanup_on_error,
    copy_media,
    delete_file,
    save_data_uri,
    save_file,
    to_relative,
)
from showcase.utils.patch import PatchField, apply_patch, build_patch, ensure_not_empty
from showcase.utils.transaction import transactional
from showcase.utils.validation import (
    is_blank,
    missing_fields,
    raise_if_missing,
    request_data,
    required_text,
)
from . import api_bp

MEMBER_FIELDS = (
    PatchField("name", convert=required_text),
    PatchField("role", convert=required_text),
    PatchField("bio", convert=required_text),
)


def _resolve_avatar(data, current=None):
    """
    Turn the submitted avatar into a stored relative path.

    Accepts an uploaded file, a base64 data URI, or a reference to an
    already stored file. A reference is copied so the member owns its
    file; re-submitting ``current`` keeps it as is. Returns (path, written)
    where ``written`` marks a file created by this request.
    """
    upload = request.files.get("avatar")
    if upload:
        return save_file(upload, "image"), True

    value = data.get("avatar")
    if is_blank(value):
        return None, False

    value = str(value)
    if value.startswith("data:"):
        return save_data_uri(value), True

    reference = to_relative(value)
    if current and reference == current:
        return current, False
    return copy_media(reference, "image"), True


# ------------------------
# Team members
# ------------------------

@api_bp.route("/projects/<int:project_id>/team-members", methods=["GET"])
def list_team_members(project_id):
    get_project_or_404(project_id)

    members = TeamMember.query.filter_by(
        project_id=project_id
    ).order_by(TeamMember.id.asc()).all()

    return envelope([normalize_team_member(m) for m in members])


@api_bp.route("/projects/<int:project_id>/team-members", methods=["POST"])
@api_bp.route("/projects/<int:project_id>/team", methods=["POST"])
def create_team_member(project_id):
    get_project_or_404(project_id)
    data = request_data()

    missing = missing_fields(data, "name", "role", "bio")
    if not request.files.get("avatar") and is_blank(data.get("avatar")):
        missing.append("avatar")
    raise_if_missing(missing)

    avatar, written = _resolve_avatar(data)

    with cleanup_on_error(avatar if written else None):
        with transactional():
            get_project_or_404(project_id, lock=True)

            member = TeamMember()
            member.project_id = project_id
            member.name = required_text(data["name"], "name")
            member.role = required_text(data["role"], "role")
            member.bio = required_text(data["bio"], "bio")
            member.avatar = avatar

            db.session.add(member)
            db.session.flush()

    current_app.logger.info("team_member.create id=%s project_id=%s", member.id, project_id)
    return envelope(normalize_team_member(member), "Team member created successfully", 201)


@api_bp.route("/team-members/<int:member_id>", methods=["PUT"])
def update_team_member(member_id):
    data = request_data()
    patch = build_patch(data, MEMBER_FIELDS)

    has_avatar = bool(request.files.get("avatar")) or not is_blank(data.get("avatar"))
    ensure_not_empty(patch, has_avatar)

    existing = get_or_404(TeamMember, member_id, "Team member")
    avatar, written = _resolve_avatar(data, existing.avatar) if has_avatar else (None, False)

    with cleanup_on_error(avatar if written else None):
        with transactional():
            member = get_or_404(TeamMember, member_id, "Team member", lock=True)
            previous_avatar = member.avatar
            changed_fields = apply_patch(member, patch)

            if avatar and avatar != previous_avatar:
                member.avatar = avatar
                changed_fields.append("avatar")

    if written and previous_avatar and previous_avatar != avatar:
        delete_file(previous_avatar)

    current_app.logger.info("team_member.update id=%s fields=%s", member_id, changed_fields)
    return envelope(normalize_team_member(member), "Team member updated successfully")


@api_bp.route("/team-members/<int:member_id>", methods=["DELETE"])
def delete_team_member(member_id):
    with transactional():
        member = get_or_404(TeamMember, member_id, "Team member", lock=True)

        if member.avatar:
            delete_file(member.avatar)

        db.session.delete(member)

    current_app.logger.info("team_member.delete id=%s", member_id)
    return envelope({"id": member_id}, "Team member deleted successfully")


@api_bp.route("/team-members/upload-avatar", methods=["POST"])
def upload_avatar():
    media_path = save_file(request.files.get("avatar"), "image")
    return envelope(normalize_upload(media_path), "Avatar uploaded successfully", 201)
