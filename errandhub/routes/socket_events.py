import logging

from flask_jwt_extended import decode_token
from flask_jwt_extended.exceptions import JWTExtendedException
from flask_socketio import join_room, leave_room
from jwt.exceptions import PyJWTError

from errandhub.extensions import socketio
from errandhub.services.chat_service import get_room_by_key
from errandhub.services.user_service import get_user
from errandhub.utils.exceptions import ServiceError, NotFound

logger = logging.getLogger(__name__)


def _resolve_room(data):
    """Authenticate a socket payload and return (user_id, room) or an error ack."""
    data = data or {}
    try:
        user_id = int(decode_token(data.get("token") or "")["sub"])
        get_user(user_id)
    except (PyJWTError, JWTExtendedException, KeyError, ValueError, NotFound):
        return None, {"success": False, "error": {"code": "UNAUTHORIZED", "message": "Invalid token"}}

    try:
        room = get_room_by_key(data.get("roomKey") or "", user_id)
    except ServiceError as e:
        return None, {"success": False, "error": {"code": e.code, "message": e.message}}

    if not room:
        return None, {"success": False, "error": {"code": "NOT_FOUND", "message": "Chatting room not found"}}
    return (user_id, room), None


@socketio.on("join")
def on_join(data):
    resolved, error = _resolve_room(data)
    if error:
        return error
    user_id, room = resolved
    join_room(room.room_key)
    logger.info("user %s joined chatting room %s", user_id, room.room_key)
    return {"success": True, "data": {"roomKey": room.room_key}}


@socketio.on("leave")
def on_leave(data):
    resolved, error = _resolve_room(data)
    if error:
        return error
    user_id, room = resolved
    leave_room(room.room_key)
    logger.info("user %s left chatting room %s", user_id, room.room_key)
    return {"success": True, "data": {"roomKey": room.room_key}}
