from flask import current_app
from sqlalchemy import inspect
from showcase.extensions import db
from showcase.models.user import User


def ensure_admin_user():
    """
    Create the seeded administrator if no user has its email yet.
    Returns the created user, or None when it already existed.
    """
    email = current_app.config["ADMIN_EMAIL"]
    password = current_app.config.get("ADMIN_PASSWORD")

    if not password:
        raise RuntimeError("ADMIN_PASSWORD must be set to seed the administrator")

    if User.query.filter_by(email=email).first():
        current_app.logger.info("Administrator already exists: %s", email)
        return None

    user = User()
    user.name = current_app.config.get("ADMIN_NAME", "Administrator")
    user.email = email
    user.role = "admin"
    user.set_password(password)

    db.session.add(user)
    db.session.commit()

    current_app.logger.info("Administrator created: %s", email)
    return user


def bootstrap(app):
    """Create tables (dev/testing) and seed the administrator."""
    with app.app_context():
        if app.config.get("AUTO_CREATE_TABLES"):
            db.create_all()

        if not app.config.get("SEED_ADMIN"):
            return

        if not app.config.get("ADMIN_PASSWORD"):
            app.logger.warning("ADMIN_PASSWORD not set; skipping administrator seeding")
            return

        # Tables come from migrations outside dev/testing
        if not inspect(db.engine).has_table(User.__tablename__):
            app.logger.warning("Users table missing; run `flask db upgrade` before seeding")
            return

        ensure_admin_user()
