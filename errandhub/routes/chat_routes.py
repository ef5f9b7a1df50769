from flask import Blueprint, request, current_app
from flask_jwt_extended import jwt_required

from errandhub.schemas.chat_schema import (
    ChattingRoomSchema,
    ChattingMessageSchema,
    RoomKeyQuerySchema,
    RoomJoinSchema,
    RoomListQuerySchema,
    MessageListQuerySchema,
    MessageSendSchema,
)
from errandhub.schemas.user_schema import UserPublicSchema
from errandhub.services.chat_service import (
    get_room_by_key,
    find_or_create_room,
    load_rooms,
    append_message,
    page_messages,
)
from errandhub.services.user_service import get_users_by_ids
from errandhub.utils.auth_utils import current_user_id
from errandhub.utils.exceptions import NotFound
from errandhub.utils.response_formatter import success_response
from errandhub.utils.validation import load_or_raise

bp = Blueprint("chatting", __name__, url_prefix="/api/v1/chatting")

BROADCASTER_KEY = "errandhub.broadcaster"

room_schema = ChattingRoomSchema()
rooms_schema = ChattingRoomSchema(many=True)
message_schema = ChattingMessageSchema()
messages_schema = ChattingMessageSchema(many=True)
users_schema = UserPublicSchema(many=True)


def get_broadcaster():
    return current_app.extensions.get(BROADCASTER_KEY)


def _room_payload(room):
    return {
        "chattingRoom": room_schema.dump(room),
        "users": users_schema.dump(get_users_by_ids(room.member_ids)),
    }


# -----------------------------------------------------------
# GET ROOM BY KEY
# -----------------------------------------------------------
@bp.route("/room", methods=["GET"])
@jwt_required()
def room():
    args = load_or_raise(RoomKeyQuerySchema(), request.args)
    chatting_room = get_room_by_key(args["room_key"], current_user_id())
    if not chatting_room:
        raise NotFound("Chatting room not found", details={"roomKey": args["room_key"]})
    return success_response(_room_payload(chatting_room))


# -----------------------------------------------------------
# JOIN (FIND OR CREATE) ROOM
# -----------------------------------------------------------
@bp.route("/room", methods=["POST"])
@jwt_required()
def join_room():
    data = load_or_raise(RoomJoinSchema(), request.get_json(silent=True))
    chatting_room = find_or_create_room(data["user_ids"], current_user_id())
    return success_response(_room_payload(chatting_room))


# -----------------------------------------------------------
# LIST MY ROOMS
# -----------------------------------------------------------
@bp.route("/rooms", methods=["GET"])
@jwt_required()
def list_rooms():
    args = load_or_raise(RoomListQuerySchema(), request.args)
    rooms = load_rooms(current_user_id(), args["limit"], args["offset"])
    return success_response({"chattingRooms": rooms_schema.dump(rooms)})


# -----------------------------------------------------------
# LIST MESSAGES (newest first)
# -----------------------------------------------------------
@bp.route("/messages", methods=["GET"])
@jwt_required()
def list_messages():
    args = load_or_raise(MessageListQuerySchema(), request.args)
    chatting_room = get_room_by_key(args["room_key"], current_user_id())
    if not chatting_room:
        raise NotFound("Chatting room not found", details={"roomKey": args["room_key"]})

    messages = page_messages(chatting_room.id, args["limit"], args["offset"])
    return success_response({"chattingMessage": messages_schema.dump(messages)})


# -----------------------------------------------------------
# SEND MESSAGE
# -----------------------------------------------------------
@bp.route("/message", methods=["POST"])
@jwt_required()
def send_message():
    data = load_or_raise(MessageSendSchema(), request.get_json(silent=True))
    msg = append_message(
        data["room_key"],
        current_user_id(),
        data["message"],
        get_broadcaster(),
        type=data["type"],
    )
    return success_response({"chattingMessage": message_schema.dump(msg)})
