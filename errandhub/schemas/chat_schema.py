from marshmallow import fields, validate, EXCLUDE
from errandhub.extensions import ma
from errandhub.models.message import MESSAGE_TYPES

MAX_ROOM_MEMBERS = 50

class ChattingRoomSchema(ma.Schema):
    id = fields.Integer()
    room_key = fields.String()
    member_ids = fields.List(fields.Integer())
    created_at = fields.DateTime()

class ChattingMessageSchema(ma.Schema):
    id = fields.Integer()
    room_id = fields.Integer()
    user_id = fields.Integer()
    message = fields.String()
    type = fields.String()
    created_at = fields.DateTime()


class RoomKeyQuerySchema(ma.Schema):
    class Meta:
        unknown = EXCLUDE

    room_key = fields.String(required=True, validate=validate.Length(min=1), data_key="roomKey")

class RoomJoinSchema(ma.Schema):
    class Meta:
        unknown = EXCLUDE

    user_ids = fields.List(
        fields.Integer(strict=False),
        required=True,
        validate=validate.Length(min=1, max=MAX_ROOM_MEMBERS),
        data_key="userIds"
    )

class RoomListQuerySchema(ma.Schema):
    class Meta:
        unknown = EXCLUDE

    offset = fields.Integer(load_default=0, validate=validate.Range(min=0))
    limit = fields.Integer(load_default=30, validate=validate.Range(min=0))

class MessageListQuerySchema(RoomListQuerySchema):
    room_key = fields.String(required=True, validate=validate.Length(min=1), data_key="roomKey")

class MessageSendSchema(ma.Schema):
    class Meta:
        unknown = EXCLUDE

    room_key = fields.String(required=True, validate=validate.Length(min=1), data_key="roomKey")
    message = fields.String(required=True)
    type = fields.String(load_default="text", validate=validate.OneOf(MESSAGE_TYPES))
