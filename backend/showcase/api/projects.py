from flask import request
from showcase.application import projects as project_service
from showcase.errors import NotFoundError
from showcase.models.project import Project
from showcase.normalizers import envelope
from showcase.normalizers.media import normalize_upload
from showcase.normalizers.project import normalize_project
from showcase.utils.lookup import get_project_or_404
from showcase.utils.media import save_file
from showcase.utils.validation import integer, request_data
from . import api_bp


# ------------------------
# Projects
# ------------------------

@api_bp.route("/projects", methods=["GET"])
def list_projects():
    query = Project.query

    section_id = request.args.get("section_id")
    if section_id is not None:
        query = query.filter_by(section_id=integer(section_id, "section_id"))

    projects = query.order_by(Project.id.asc()).all()
    return envelope([normalize_project(p) for p in projects])


@api_bp.route("/projects/last", methods=["GET"])
def get_last_project():
    project = project_service.last_project()
    if project is None:
        raise NotFoundError("No projects available")

    return envelope(normalize_project(project, detail=True))


@api_bp.route("/projects/<int:project_id>", methods=["GET"])
def get_project(project_id):
    project = get_project_or_404(project_id)
    return envelope(normalize_project(project, detail=True))


@api_bp.route("/projects", methods=["POST"])
def create_project():
    project = project_service.create_project(
        data=request_data(),
        image=request.files.get("image"),
    )
    return envelope(normalize_project(project, detail=True), "Project created successfully", 201)


@api_bp.route("/projects/<int:project_id>", methods=["PUT"])
def update_project(project_id):
    project = project_service.update_project(
        project_id=project_id,
        data=request_data(),
        image=request.files.get("image"),
    )
    return envelope(normalize_project(project, detail=True), "Project updated successfully")


@api_bp.route("/projects/<int:project_id>", methods=["DELETE"])
def delete_project(project_id):
    project_service.delete_project(project_id=project_id)
    return envelope({"id": project_id}, "Project deleted successfully")


@api_bp.route("/projects/upload", methods=["POST"])
def upload_project_image():
    media_path = save_file(request.files.get("image"), "image")
    return envelope(normalize_upload(media_path), "Image uploaded successfully", 201)
