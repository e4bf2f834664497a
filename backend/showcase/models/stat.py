from showcase.extensions import db
from .base import BaseModel


class Stat(BaseModel):
    __tablename__ = "stats"

    project_id = db.Column(db.Integer, db.ForeignKey("projects.id"), nullable=False, index=True)
    icon_key = db.Column(db.String(120), nullable=False)
    title = db.Column(db.String(255), nullable=False)
    description = db.Column(db.Text, nullable=True)
    text = db.Column(db.String(255), nullable=False)

    project = db.relationship("Project", back_populates="stats")
