from errandhub.extensions import db
from errandhub.utils.time_utils import utcnow

MESSAGE_TYPES = ("text", "image", "file")

class ChattingMessage(db.Model):
    __tablename__ = "chatting_messages"

    __table_args__ = (
        db.Index("idx_chatting_messages_room_created", "room_id", "created_at"),
    )

    id = db.Column(db.Integer, primary_key=True, autoincrement=True)
    room_id = db.Column(db.Integer, db.ForeignKey("chatting_rooms.id", ondelete="CASCADE"), nullable=False)
    user_id = db.Column(db.Integer, db.ForeignKey("users.id"), nullable=False)
    message = db.Column(db.Text, nullable=False)
    type = db.Column(db.String(20), nullable=False, default="text")
    created_at = db.Column(db.DateTime, default=utcnow)

    room = db.relationship("ChattingRoom", lazy=True)
    user = db.relationship("User", lazy=True)
