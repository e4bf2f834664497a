from showcase.extensions import db
from .base import BaseModel


class Section(BaseModel):
    __tablename__ = "sections"

    name = db.Column(db.String(200), nullable=False)

    # No cascade: a section with projects cannot be deleted
    projects = db.relationship(
        "Project",
        back_populates="section",
        order_by="Project.id"
    )
