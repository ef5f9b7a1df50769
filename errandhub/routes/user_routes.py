from flask import Blueprint, request
from flask_jwt_extended import jwt_required

from errandhub.schemas.user_schema import UserUpdateSchema, PasswordUpdateSchema
from errandhub.services.user_service import get_user, update_user, update_password, deactivate_user
from errandhub.utils.auth_utils import current_user_id
from errandhub.utils.response_formatter import success_response
from errandhub.utils.validation import load_or_raise

bp = Blueprint("users", __name__, url_prefix="/api/v1/users")


@bp.route("/<int:user_id>", methods=["GET"])
@jwt_required()
def get_user_by_id(user_id):
    user = get_user(user_id)
    return success_response({"user": user.to_public_dict()})


@bp.route("/me", methods=["PUT"])
@jwt_required()
def update_me():
    fields = load_or_raise(UserUpdateSchema(), request.get_json(silent=True))
    user = update_user(current_user_id(), fields)
    return success_response({"user": user.to_dict()})


@bp.route("/me/password", methods=["PUT"])
@jwt_required()
def update_my_password():
    data = load_or_raise(PasswordUpdateSchema(), request.get_json(silent=True))
    update_password(current_user_id(), data["password"], data["new_password"])
    return success_response({})


@bp.route("/me", methods=["DELETE"])
@jwt_required()
def delete_me():
    """Soft delete: the account is deactivated and its email anonymized."""
    is_deleted = deactivate_user(current_user_id())
    return success_response({"isDeleted": is_deleted})
