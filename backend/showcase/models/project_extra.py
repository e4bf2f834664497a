from showcase.extensions import db
from .base import BaseModel


class ProjectExtra(BaseModel):
    __tablename__ = "project_extras"

    project_id = db.Column(db.Integer, db.ForeignKey("projects.id"), nullable=False, index=True)
    feature_id = db.Column(
        db.Integer,
        db.ForeignKey("features.id", ondelete="SET NULL"),
        nullable=True,
        index=True
    )
    title = db.Column(db.String(255), nullable=False)
    description = db.Column(db.Text, nullable=True)
    stat = db.Column(db.String(120), nullable=True)

    project = db.relationship("Project", back_populates="extras")
    feature = db.relationship("Feature", back_populates="extras")
