from showcase.extensions import db
from showcase.errors import NotFoundError
from showcase.utils.validation import INT_MAX, INT_MIN


def get_or_404(model, entity_id, label=None, *, lock=False, **filters):
    """
    Fetch a row by id (plus optional equality filters) or raise NotFoundError.
    ``lock`` selects FOR UPDATE on backends that support it.
    """
    # Ids beyond the column range cannot exist
    if not INT_MIN <= entity_id <= INT_MAX:
        raise NotFoundError(f"{label or model.__name__} not found")

    query = model.query.filter_by(id=entity_id, **filters)
    if lock:
        query = query.with_for_update()

    entity = query.first()
    if entity is None:
        raise NotFoundError(f"{label or model.__name__} not found")
    return entity


def get_project_or_404(project_id, *, lock=False):
    from showcase.models.project import Project

    return get_or_404(Project, project_id, "Project", lock=lock)


def exists(model, **filters):
    return db.session.query(
        model.query.filter_by(**filters).exists()
    ).scalar()
