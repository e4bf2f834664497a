from functools import wraps
from flask import g
from flask_jwt_extended import verify_jwt_in_request
from showcase.errors import PermissionDenied
from showcase.middleware.auth_middleware import current_principal


def roles_required(*allowed_roles):
    """Verify the bearer token and, when roles are given, the caller's role."""
    def decorator(fn):
        @wraps(fn)
        def wrapper(*args, **kwargs):
            verify_jwt_in_request()
            principal = current_principal()

            if allowed_roles and principal["role"] not in allowed_roles:
                raise PermissionDenied("Insufficient permissions")

            g.current_user = principal
            return fn(*args, **kwargs)
        return wrapper
    return decorator
