from showcase.extensions import db
from .base import BaseModel


class Project(BaseModel):
    __tablename__ = "projects"

    title = db.Column(db.String(255), nullable=False)
    description = db.Column(db.Text, nullable=True)
    image = db.Column(db.String(512), nullable=True)  # relative media path
    category = db.Column(db.String(120), nullable=False)
    section_id = db.Column(db.Integer, db.ForeignKey("sections.id"), nullable=False, index=True)

    # Headings for the advantages and workflow blocks of the project page
    advantages_title = db.Column(db.String(255), nullable=True)
    advantages_subtitle = db.Column(db.String(255), nullable=True)
    workflow_title = db.Column(db.String(255), nullable=True)
    workflow_subtitle = db.Column(db.String(255), nullable=True)

    section = db.relationship("Section", back_populates="projects")

    advantages = db.relationship(
        "Advantage", back_populates="project", order_by="Advantage.id",
        cascade="all, delete-orphan"
    )
    features = db.relationship(
        "Feature", back_populates="project", order_by="Feature.id",
        cascade="all, delete-orphan"
    )
    stats = db.relationship(
        "Stat", back_populates="project", order_by="Stat.id",
        cascade="all, delete-orphan"
    )
    extras = db.relationship(
        "ProjectExtra", back_populates="project", order_by="ProjectExtra.id",
        cascade="all, delete-orphan"
    )
    team_members = db.relationship(
        "TeamMember", back_populates="project", order_by="TeamMember.id",
        cascade="all, delete-orphan"
    )
    workflow_steps = db.relationship(
        "WorkflowStep", back_populates="project",
        order_by="[WorkflowStep.step_number, WorkflowStep.id]",
        cascade="all, delete-orphan"
    )
    config = db.relationship(
        "ProjectConfig", back_populates="project", uselist=False,
        cascade="all, delete-orphan"
    )

    def media_paths(self):
        """Every stored media path owned by the project and its sub-entities."""
        paths = [self.image]
        paths.extend(feature.media_url for feature in self.features)
        paths.extend(member.avatar for member in self.team_members)
        paths.extend(step.image_url for step in self.workflow_steps)
        return [path for path in paths if path]
