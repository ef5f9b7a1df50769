from errandhub.extensions import db
from errandhub.models.user import User
from errandhub.utils.auth_utils import hash_password, check_password
from errandhub.utils.exceptions import Conflict, Forbidden
from flask_jwt_extended import create_access_token
from datetime import timedelta
from flask import current_app
from sqlalchemy.exc import IntegrityError

def register_user(email, password, name=None, gender=None):
    if User.query.filter_by(email=email).first():
        raise Conflict(
            message="User with that email already exists",
            details={"field": "email"}
        )

    user = User(
        email=email,
        password_hash=hash_password(password),
        name=name,
        gender=gender,
    )
    db.session.add(user)
    try:
        db.session.commit()
    except IntegrityError:
        db.session.rollback()
        raise Conflict(
            message="User with that email already exists",
            details={"field": "email"}
        )
    return user

def authenticate_user(email, password):
    user = User.query.filter_by(email=email).first()
    if not user or not user.is_active or not check_password(password, user.password_hash):
        raise Forbidden(message="Invalid credentials")
    return user

def generate_token_for_user(user):
    # JWT subjects must be strings; routes turn them back into ints
    return create_access_token(
        identity=str(user.id),
        expires_delta=timedelta(seconds=current_app.config.get("ACCESS_EXPIRES", 86400))
    )
