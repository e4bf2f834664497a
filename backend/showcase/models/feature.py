from showcase.extensions import db
from .base import BaseModel

MEDIA_TYPES = ("image", "video")


class Feature(BaseModel):
    __tablename__ = "features"

    project_id = db.Column(db.Integer, db.ForeignKey("projects.id"), nullable=False, index=True)
    title = db.Column(db.String(255), nullable=False)
    subtitle = db.Column(db.String(255), nullable=True)
    icon_key = db.Column(db.String(120), nullable=True)
    media_type = db.Column(db.String(10), nullable=False)  # image | video
    media_url = db.Column(db.String(512), nullable=True)

    project = db.relationship("Project", back_populates="features")
    extras = db.relationship("ProjectExtra", back_populates="feature")
