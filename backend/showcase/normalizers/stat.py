def normalize_stat(stat):
    return {
        "id": stat.id,
        "project_id": stat.project_id,
        "icon_key": stat.icon_key,
        "title": stat.title,
        "description": stat.description,
        "text": stat.text
    }
