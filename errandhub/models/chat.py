from errandhub.extensions import db
from errandhub.utils.time_utils import utcnow


class ChattingRoom(db.Model):
    __tablename__ = "chatting_rooms"

    id = db.Column(db.Integer, primary_key=True, autoincrement=True)

    # sorted, dash-joined member ids; one room per member set
    room_key = db.Column(db.Text, unique=True, nullable=False, index=True)

    created_at = db.Column(db.DateTime, default=utcnow)

    members = db.relationship(
        "ChattingRoomMember",
        backref="room",
        lazy=True,
        cascade="all, delete-orphan",
        order_by="ChattingRoomMember.user_id"
    )

    @property
    def member_ids(self):
        return [m.user_id for m in self.members]


class ChattingRoomMember(db.Model):
    __tablename__ = "chatting_room_members"

    room_id = db.Column(
        db.Integer,
        db.ForeignKey("chatting_rooms.id", ondelete="CASCADE"),
        primary_key=True
    )
    user_id = db.Column(
        db.Integer,
        db.ForeignKey("users.id"),
        primary_key=True,
        index=True
    )

    user = db.relationship("User", lazy=True)
