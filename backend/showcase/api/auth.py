from flask import current_app, g
from flask_jwt_extended import create_access_token
from werkzeug.security import check_password_hash, generate_password_hash
from showcase.errors import AuthError
from showcase.models.user import User
from showcase.normalizers import envelope
from showcase.normalizers.user import normalize_user
from showcase.utils.decorators import roles_required
from showcase.utils.validation import request_data, require_fields, required_text
from . import api_bp

# Compared against when the email is unknown so both failures cost the same
_DUMMY_HASH = generate_password_hash("not-a-real-password")


@api_bp.route("/login", methods=["POST"])
def login():
    data = request_data()
    require_fields(data, "email", "password")

    email = required_text(data["email"], "email")
    password = required_text(data["password"], "password")

    user = User.query.filter_by(email=email).first()

    if user is None:
        check_password_hash(_DUMMY_HASH, password)
        current_app.logger.info("Login failed for %s", email)
        raise AuthError("Invalid credentials")

    if not user.check_password(password):
        current_app.logger.info("Login failed for %s", email)
        raise AuthError("Invalid credentials")

    access_token = create_access_token(
        identity=str(user.id),
        additional_claims={"role": user.role}
    )
    current_app.logger.info("Login succeeded for user id=%s", user.id)

    return envelope({
        "token": access_token,
        "user": normalize_user(user)
    })


@api_bp.route("/verify", methods=["GET"])
@roles_required()
def verify():
    principal = g.current_user
    user = User.query.filter_by(id=principal["id"]).first()
    if user is None:
        raise AuthError("Invalid or expired token")

    payload = normalize_user(user)
    payload["role"] = principal["role"]
    return envelope({"user": payload}, message="Token valid")
