from marshmallow import fields, validate, EXCLUDE
from errandhub.extensions import ma
from errandhub.models.user import GENDERS

class UserPublicSchema(ma.Schema):
    id = fields.Integer()
    name = fields.String()
    gender = fields.String()
    profile_image = fields.String()


class JoinSchema(ma.Schema):
    class Meta:
        unknown = EXCLUDE

    email = fields.Email(required=True)
    password = fields.String(required=True, validate=validate.Length(min=1))
    name = fields.String(load_default=None)
    gender = fields.String(load_default=None, validate=validate.OneOf(GENDERS))


class LoginSchema(ma.Schema):
    class Meta:
        unknown = EXCLUDE

    email = fields.Email(required=True)
    password = fields.String(required=True)


class UserUpdateSchema(ma.Schema):
    class Meta:
        unknown = EXCLUDE

    name = fields.String()
    gender = fields.String(validate=validate.OneOf(GENDERS))
    address = fields.String(allow_none=True)
    detail_address = fields.String(allow_none=True, data_key="detailAddress")
    start_contact_time = fields.Time(allow_none=True, data_key="startContactTime")
    end_contact_time = fields.Time(allow_none=True, data_key="endContactTime")
    payments = fields.String(allow_none=True)
    profile_image = fields.String(allow_none=True, data_key="profileImage")


class PasswordUpdateSchema(ma.Schema):
    class Meta:
        unknown = EXCLUDE

    password = fields.String(required=True)
    new_password = fields.String(required=True, validate=validate.Length(min=1), data_key="newPassword")
