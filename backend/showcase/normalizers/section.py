from .project import normalize_project


def normalize_section(section, include_projects=True):
    data = {
        "id": section.id,
        "name": section.name
    }

    if include_projects:
        data["projects"] = [
            normalize_project(p) for p in section.projects
        ]

    return data
