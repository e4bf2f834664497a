from flask import Blueprint
from showcase.middleware.auth_middleware import auth_middleware

# Mounted under /api by the app factory
api_bp = Blueprint("api", __name__)
auth_middleware(api_bp)

# Import route modules so they register with api_bp
from . import health
from . import auth
from . import sections
from . import projects
from . import advantages
from . import features
from . import stats
from . import extras
from . import team_members
from . import workflow
from . import project_config
