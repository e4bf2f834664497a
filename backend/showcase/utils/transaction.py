from contextlib import contextmanager
from flask import current_app
from showcase.extensions import db


@contextmanager
def transactional():
    """
    Run the block as one unit of work on the request session.
    Commits on success; any exception rolls back and propagates.
    """
    try:
        yield db.session
        db.session.commit()
    except Exception as exc:
        db.session.rollback()
        current_app.logger.debug("transaction.rollback reason=%s", type(exc).__name__)
        raise
