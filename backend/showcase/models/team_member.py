from showcase.extensions import db
from .base import BaseModel


class TeamMember(BaseModel):
    __tablename__ = "team_members"

    project_id = db.Column(db.Integer, db.ForeignKey("projects.id"), nullable=False, index=True)
    name = db.Column(db.String(255), nullable=False)
    role = db.Column(db.String(255), nullable=False)
    bio = db.Column(db.Text, nullable=False)
    avatar = db.Column(db.String(512), nullable=False)  # relative media path

    project = db.relationship("Project", back_populates="team_members")
