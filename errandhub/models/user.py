from errandhub.extensions import db
from errandhub.utils.time_utils import utcnow
import uuid

GENDERS = ("M", "F", "O")
DELETED_EMAIL_PREFIX = "deleted:"

def anonymized_email():
    return f"{DELETED_EMAIL_PREFIX}{uuid.uuid4().hex}"

class User(db.Model):
    __tablename__ = "users"

    id = db.Column(db.Integer, primary_key=True, autoincrement=True)
    email = db.Column(db.String(255), unique=True, nullable=False, index=True)
    password_hash = db.Column(db.String(255), nullable=False)
    name = db.Column(db.String(255))
    gender = db.Column(db.Enum(*GENDERS, name="user_gender"), nullable=True)
    address = db.Column(db.String(255), nullable=True)
    detail_address = db.Column(db.String(255), nullable=True)
    start_contact_time = db.Column(db.Time, nullable=True)
    end_contact_time = db.Column(db.Time, nullable=True)
    payments = db.Column(db.String(255), nullable=True)
    profile_image = db.Column(db.String(1024), nullable=True)
    is_active = db.Column(db.Boolean, nullable=False, default=True)
    joined_at = db.Column(db.DateTime, default=utcnow)

    def deactivate(self):
        """Tombstone the account: keep the row, release the email."""
        self.is_active = False
        self.email = anonymized_email()

    def to_dict(self):
        return {
            "id": self.id,
            "email": self.email,
            "name": self.name,
            "gender": self.gender,
            "address": self.address,
            "detail_address": self.detail_address,
            "start_contact_time": self.start_contact_time.isoformat() if self.start_contact_time else None,
            "end_contact_time": self.end_contact_time.isoformat() if self.end_contact_time else None,
            "payments": self.payments,
            "profile_image": self.profile_image,
            "is_active": self.is_active,
            "joined_at": self.joined_at.isoformat() + "Z" if self.joined_at else None,
        }

    def to_public_dict(self):
        return {
            "id": self.id,
            "name": self.name,
            "gender": self.gender,
            "profile_image": self.profile_image,
        }
