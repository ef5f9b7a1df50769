from flask import Blueprint, request
from flask_jwt_extended import jwt_required

from errandhub.extensions import limiter
from errandhub.schemas.user_schema import JoinSchema, LoginSchema
from errandhub.services.auth_service import register_user, authenticate_user, generate_token_for_user
from errandhub.services.user_service import get_user
from errandhub.utils.auth_utils import current_user_id
from errandhub.utils.response_formatter import success_response
from errandhub.utils.validation import load_or_raise

bp = Blueprint("auth", __name__, url_prefix="/api/v1/auth")

@bp.route("/join", methods=["POST"])
def join():
    data = load_or_raise(JoinSchema(), request.get_json(silent=True))
    user = register_user(data["email"], data["password"], name=data["name"], gender=data["gender"])
    return success_response({"user": user.to_dict()}, status=201)


@bp.route("/login", methods=["POST"])
@limiter.limit("10 per minute")
def login():
    data = load_or_raise(LoginSchema(), request.get_json(silent=True))
    user = authenticate_user(data["email"], data["password"])
    token = generate_token_for_user(user)
    return success_response({"user": user.to_dict(), "token": token})


@bp.route("/verify", methods=["GET"])
@jwt_required()
def verify_token():
    user = get_user(current_user_id())
    return success_response({"user": user.to_dict()})
