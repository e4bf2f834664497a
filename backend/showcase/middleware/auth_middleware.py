from flask import g, request
from flask_jwt_extended import get_jwt, get_jwt_identity, verify_jwt_in_request
from showcase.errors import error_response, PermissionDenied

SAFE_METHODS = {"GET", "HEAD", "OPTIONS"}

# Mutating endpoints reachable without a token
PUBLIC_ENDPOINTS = {"api.login"}


def current_principal():
    """The decoded {id, role} of the verified token."""
    claims = get_jwt()
    return {
        "id": int(get_jwt_identity()),
        "role": claims.get("role")
    }


def register_jwt_callbacks(jwt):
    @jwt.unauthorized_loader
    def missing_token(reason):
        return error_response("AuthError", "Authorization token required", 401)

    @jwt.invalid_token_loader
    def invalid_token(reason):
        return error_response("AuthError", "Invalid or expired token", 401)

    @jwt.expired_token_loader
    def expired_token(jwt_header, jwt_payload):
        return error_response("AuthError", "Invalid or expired token", 401)


def auth_middleware(bp):
    @bp.before_request
    def require_admin_for_mutations():
        if request.method in SAFE_METHODS or request.endpoint in PUBLIC_ENDPOINTS:
            return None

        # Runs before any handler touches the body or uploaded files
        verify_jwt_in_request()
        principal = current_principal()

        if principal["role"] != "admin":
            raise PermissionDenied("Insufficient permissions")

        g.current_user = principal
        return None
