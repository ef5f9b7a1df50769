from flask_jwt_extended import get_jwt_identity
from errandhub.extensions import bcrypt

def hash_password(password: str) -> str:
    return bcrypt.generate_password_hash(password).decode("utf-8")

def check_password(password, hashed_password):
    return bcrypt.check_password_hash(hashed_password, password)

def current_user_id():
    """Integer id of the token holder, or None on routes with optional auth."""
    identity = get_jwt_identity()
    return int(identity) if identity is not None else None
