from flask import current_app, request
from showcase.extensions import db
from showcase.models.workflow_step import WorkflowStep
from showcase.normalizers import envelope
from showcase.normalizers.workflow import normalize_workflow, normalize_workflow_step
from showcase.utils.lookup import get_or_404, get_project_or_404
from showcase.utils.media import delete_file, staged_upload
from showcase.utils.patch import PatchField, apply_patch, build_patch, ensure_not_empty
from showcase.utils.transaction import transactional
from showcase.utils.validation import integer, request_data, require_fields, required_text, text
from . import api_bp

HEADING_FIELDS = (
    PatchField("title", column="workflow_title", convert=text),
    PatchField("subtitle", column="workflow_subtitle", convert=text),
)

STEP_FIELDS = (
    PatchField("title", convert=required_text),
    PatchField("description", convert=text),
    PatchField("step_number", convert=integer),
)


# ------------------------
# Workflow heading
# ------------------------

@api_bp.route("/projects/<int:project_id>/workflow", methods=["GET"])
def get_workflow(project_id):
    project = get_project_or_404(project_id)
    return envelope(normalize_workflow(project))


@api_bp.route("/projects/<int:project_id>/workflow", methods=["POST"])
def save_workflow(project_id):
    """Create-or-replace the heading; absent fields are cleared."""
    data = request_data()
    require_fields(data, "title")

    with transactional():
        project = get_project_or_404(project_id, lock=True)
        project.workflow_title = text(data.get("title"), "title")
        project.workflow_subtitle = text(data.get("subtitle"), "subtitle")

    current_app.logger.info("workflow.save project_id=%s", project_id)
    return envelope(normalize_workflow(project), "Workflow saved successfully")


@api_bp.route("/projects/<int:project_id>/workflow", methods=["PUT"])
def update_workflow(project_id):
    patch = build_patch(request_data(), HEADING_FIELDS)
    ensure_not_empty(patch)

    with transactional():
        project = get_project_or_404(project_id, lock=True)
        changed_fields = apply_patch(project, patch)

    current_app.logger.info("workflow.update project_id=%s fields=%s", project_id, changed_fields)
    return envelope(normalize_workflow(project), "Workflow updated successfully")


@api_bp.route("/projects/<int:project_id>/workflow", methods=["DELETE"])
def delete_workflow(project_id):
    with transactional():
        project = get_project_or_404(project_id, lock=True)
        project.workflow_title = None
        project.workflow_subtitle = None

    current_app.logger.info("workflow.delete project_id=%s", project_id)
    return envelope({"project_id": project_id}, "Workflow deleted successfully")


# ------------------------
# Workflow steps
# ------------------------

@api_bp.route("/projects/<int:project_id>/workflow-steps", methods=["GET"])
def list_workflow_steps(project_id):
    get_project_or_404(project_id)

    steps = WorkflowStep.query.filter_by(
        project_id=project_id
    ).order_by(WorkflowStep.step_number.asc(), WorkflowStep.id.asc()).all()

    return envelope([normalize_workflow_step(s) for s in steps])


@api_bp.route("/projects/<int:project_id>/workflow-steps", methods=["POST"])
def create_workflow_step(project_id):
    get_project_or_404(project_id)
    data = request_data()

    require_fields(data, "title", "step_number")
    step_number = integer(data["step_number"], "step_number")

    with staged_upload(request.files.get("image"), "image") as image_url:
        with transactional():
            get_project_or_404(project_id, lock=True)

            step = WorkflowStep()
            step.project_id = project_id
            step.step_number = step_number
            step.title = required_text(data["title"], "title")
            step.description = text(data.get("description"), "description")
            step.image_url = image_url

            db.session.add(step)
            db.session.flush()

    current_app.logger.info("workflow_step.create id=%s project_id=%s", step.id, project_id)
    return envelope(normalize_workflow_step(step), "Workflow step created successfully", 201)


@api_bp.route("/workflow-steps/<int:step_id>", methods=["PUT"])
def update_workflow_step(step_id):
    image = request.files.get("image")
    patch = build_patch(request_data(), STEP_FIELDS)
    ensure_not_empty(patch, image)

    get_or_404(WorkflowStep, step_id, "Workflow step")

    with staged_upload(image, "image") as image_url:
        with transactional():
            step = get_or_404(WorkflowStep, step_id, "Workflow step", lock=True)
            previous_image = step.image_url
            changed_fields = apply_patch(step, patch)

            if image_url:
                step.image_url = image_url
                changed_fields.append("image_url")

    if image_url and previous_image and previous_image != image_url:
        delete_file(previous_image)

    current_app.logger.info("workflow_step.update id=%s fields=%s", step_id, changed_fields)
    return envelope(normalize_workflow_step(step), "Workflow step updated successfully")


@api_bp.route("/workflow-steps/<int:step_id>", methods=["DELETE"])
def delete_workflow_step(step_id):
    with transactional():
        step = get_or_404(WorkflowStep, step_id, "Workflow step", lock=True)

        if step.image_url:
            delete_file(step.image_url)

        db.session.delete(step)

    current_app.logger.info("workflow_step.delete id=%s", step_id)
    return envelope({"id": step_id}, "Workflow step deleted successfully")
