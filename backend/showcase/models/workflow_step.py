from showcase.extensions import db
from .base import BaseModel


class WorkflowStep(BaseModel):
    __tablename__ = "workflow_steps"

    project_id = db.Column(db.Integer, db.ForeignKey("projects.id"), nullable=False, index=True)
    # Neither unique nor contiguous
    step_number = db.Column(db.Integer, nullable=False)
    title = db.Column(db.String(255), nullable=False)
    description = db.Column(db.Text, nullable=True)
    image_url = db.Column(db.String(512), nullable=True)

    project = db.relationship("Project", back_populates="workflow_steps")

    __table_args__ = (
        db.Index("idx_workflow_step_project_number", "project_id", "step_number"),
    )
