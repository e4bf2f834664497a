from showcase.utils.media import public_url


def normalize_project(project, detail=False):
    data = {
        "id": project.id,
        "title": project.title,
        "description": project.description,
        "image": public_url(project.image),
        "category": project.category,
        "section_id": project.section_id
    }

    if detail:
        data["section_name"] = project.section.name if project.section else None
        data["advantages_title"] = project.advantages_title
        data["advantages_subtitle"] = project.advantages_subtitle
        data["workflow_title"] = project.workflow_title
        data["workflow_subtitle"] = project.workflow_subtitle

    return data
