from errandhub.extensions import db
from errandhub.models.user import User
from errandhub.utils.auth_utils import hash_password, check_password
from errandhub.utils.exceptions import NotFound, Forbidden
from sqlalchemy import func

UPDATABLE_FIELDS = (
    "name",
    "gender",
    "address",
    "detail_address",
    "start_contact_time",
    "end_contact_time",
    "payments",
    "profile_image",
)

def get_user(user_id):
    user = db.session.get(User, user_id)
    if not user or not user.is_active:
        raise NotFound("User not found")
    return user

def get_users_by_ids(user_ids):
    return User.query.filter(User.id.in_(list(user_ids))).order_by(User.id).all()

def count_active_users(user_ids):
    return (
        db.session.query(func.count(User.id))
        .filter(User.id.in_(list(user_ids)), User.is_active.is_(True))
        .scalar()
    )

def update_user(user_id, fields):
    user = get_user(user_id)
    for key, value in fields.items():
        if key in UPDATABLE_FIELDS:
            setattr(user, key, value)
    db.session.commit()
    return user

def update_password(user_id, password, new_password):
    user = get_user(user_id)
    if not check_password(password, user.password_hash):
        raise Forbidden("Password is incorrect")
    user.password_hash = hash_password(new_password)
    db.session.commit()

def deactivate_user(user_id):
    user = db.session.get(User, user_id)
    if not user or not user.is_active:
        return False
    user.deactivate()
    db.session.commit()
    return True
