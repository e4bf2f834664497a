def normalize_advantage(advantage):
    project = advantage.project
    return {
        "id": advantage.id,
        "project_id": advantage.project_id,
        # The heading lives on the project; echoed on every row for the page
        "section_title": project.advantages_title if project else None,
        "section_subtitle": project.advantages_subtitle if project else None,
        "title": advantage.title,
        "description": advantage.description,
        "icon": advantage.icon,
        "stat": advantage.stat
    }
