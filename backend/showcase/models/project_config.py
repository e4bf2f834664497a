from showcase.extensions import db
from .base import BaseModel

# JSON key -> column
CONFIG_FLAGS = {
    "showAdvantages": "show_advantages",
    "showFeatures": "show_features",
    "showWorkflow": "show_workflow",
    "showTeam": "show_team",
    "showContact": "show_contact",
}


class ProjectConfig(BaseModel):
    __tablename__ = "project_config"

    project_id = db.Column(
        db.Integer,
        db.ForeignKey("projects.id"),
        unique=True,
        nullable=False
    )
    show_advantages = db.Column(db.Boolean, nullable=False, default=False)
    show_features = db.Column(db.Boolean, nullable=False, default=False)
    show_workflow = db.Column(db.Boolean, nullable=False, default=False)
    show_team = db.Column(db.Boolean, nullable=False, default=False)
    show_contact = db.Column(db.Boolean, nullable=False, default=False)

    project = db.relationship("Project", back_populates="config")
