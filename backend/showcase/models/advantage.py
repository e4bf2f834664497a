from showcase.extensions import db
from .base import BaseModel


class Advantage(BaseModel):
    __tablename__ = "advantages"

    project_id = db.Column(db.Integer, db.ForeignKey("projects.id"), nullable=False, index=True)
    title = db.Column(db.String(255), nullable=False)
    description = db.Column(db.Text, nullable=False)
    icon = db.Column(db.Text, nullable=False)  # opaque serialized value
    stat = db.Column(db.String(120), nullable=False)

    project = db.relationship("Project", back_populates="advantages")
