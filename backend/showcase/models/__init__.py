from .user import User
from .section import Section
from .project import Project
from .advantage import Advantage
from .feature import Feature
from .stat import Stat
from .project_extra import ProjectExtra
from .team_member import TeamMember
from .workflow_step import WorkflowStep
from .project_config import ProjectConfig

__all__ = [
    "User",
    "Section",
    "Project",
    "Advantage",
    "Feature",
    "Stat",
    "ProjectExtra",
    "TeamMember",
    "WorkflowStep",
    "ProjectConfig",
]
