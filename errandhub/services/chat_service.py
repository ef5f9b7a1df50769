from errandhub.extensions import db
from errandhub.models.chat import ChattingRoom, ChattingRoomMember
from errandhub.models.message import ChattingMessage
from errandhub.schemas.chat_schema import ChattingMessageSchema
from errandhub.services.user_service import count_active_users
from errandhub.utils.exceptions import NotFound, InvalidMembership, InvalidArgument, Conflict
from errandhub.utils.pagination import paginate_query
from sqlalchemy.exc import IntegrityError

ROOM_KEY_SEPARATOR = "-"
MESSAGE_EVENT = "message"

message_schema = ChattingMessageSchema()


# ---------------------------------------
# Room identity
# ---------------------------------------

def resolve_room_key(participant_ids):
    """Canonical key for a member set: unique ids, ascending, dash-joined."""
    return ROOM_KEY_SEPARATOR.join(str(i) for i in sorted({int(i) for i in participant_ids}))


def parse_room_key(room_key):
    try:
        ids = [int(part) for part in str(room_key).split(ROOM_KEY_SEPARATOR)]
    except ValueError:
        raise InvalidArgument("Malformed roomKey", details={"roomKey": room_key})
    return ids


def _lookup_room(room_key):
    return ChattingRoom.query.filter_by(room_key=room_key).first()


def get_room_by_key(room_key, user_id):
    """The room behind ``room_key`` if ``user_id`` is one of its members."""
    key = resolve_room_key(parse_room_key(room_key))
    return (
        ChattingRoom.query
        .join(ChattingRoomMember, ChattingRoomMember.room_id == ChattingRoom.id)
        .filter(ChattingRoom.room_key == key, ChattingRoomMember.user_id == user_id)
        .first()
    )


def find_or_create_room(participant_ids, requester_id):
    members = {int(i) for i in participant_ids}
    members.add(int(requester_id))
    if len(members) < 2:
        raise InvalidMembership("A chatting room needs at least two members")

    room_key = resolve_room_key(members)
    room = _lookup_room(room_key)
    if room:
        return room

    if count_active_users(members) != len(members):
        raise InvalidMembership(
            "Every chatting room member must be an active user",
            details={"userIds": sorted(members)}
        )

    room = ChattingRoom(
        room_key=room_key,
        members=[ChattingRoomMember(user_id=uid) for uid in sorted(members)]
    )
    db.session.add(room)
    try:
        db.session.commit()
    except IntegrityError:
        # lost the race on the unique room_key; the winner's room is the answer
        db.session.rollback()
        room = _lookup_room(room_key)
        if room is None:
            raise Conflict("Chatting room could not be created", details={"roomKey": room_key})
    return room


def load_rooms(user_id, limit=30, offset=0):
    q = (
        ChattingRoom.query
        .join(ChattingRoomMember, ChattingRoomMember.room_id == ChattingRoom.id)
        .filter(ChattingRoomMember.user_id == user_id)
        .order_by(ChattingRoom.created_at.desc(), ChattingRoom.id.desc())
    )
    items, _ = paginate_query(q, offset, limit)
    return items


# ---------------------------------------
# Message ledger
# ---------------------------------------

def append_message(room_key, author_id, body, broadcaster, type="text"):
    """Store a message, then push it to everyone subscribed to the room."""
    room = get_room_by_key(room_key, author_id)
    if not room:
        raise NotFound("Chatting room not found", details={"roomKey": room_key})

    msg = ChattingMessage(room_id=room.id, user_id=author_id, message=body, type=type or "text")
    db.session.add(msg)
    db.session.commit()

    if broadcaster is not None:
        broadcaster.emit(room.room_key, MESSAGE_EVENT, message_schema.dump(msg))
    return msg


def page_messages(room_id, limit=30, offset=0):
    q = (
        ChattingMessage.query
        .filter(ChattingMessage.room_id == room_id)
        .order_by(ChattingMessage.created_at.desc(), ChattingMessage.id.desc())
    )
    items, _ = paginate_query(q, offset, limit)
    return items
