from showcase.utils.media import public_url


def normalize_workflow(project):
    return {
        "project_id": project.id,
        "title": project.workflow_title,
        "subtitle": project.workflow_subtitle
    }


def normalize_workflow_step(step):
    return {
        "id": step.id,
        "project_id": step.project_id,
        "step_number": step.step_number,
        "title": step.title,
        "description": step.description,
        "image_url": public_url(step.image_url)
    }
