def normalize_extra(extra):
    return {
        "id": extra.id,
        "project_id": extra.project_id,
        "feature_id": extra.feature_id,
        "title": extra.title,
        "description": extra.description,
        "stat": extra.stat
    }
