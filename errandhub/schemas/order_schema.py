from marshmallow import fields, validate, EXCLUDE
from errandhub.extensions import ma
from errandhub.models.order import OrderRole, OrderStatus, PRIORITIES, DISTANCES
from errandhub.models.order_request import RequestStatus
from errandhub.schemas.user_schema import UserPublicSchema


class OrderItemSchema(ma.Schema):
    class Meta:
        unknown = EXCLUDE

    id = fields.Integer(dump_only=True)
    name = fields.String(required=True, validate=validate.Length(min=1))
    count = fields.Integer(load_default=1, validate=validate.Range(min=1))
    price = fields.Integer(load_default=0, validate=validate.Range(min=0))


class OrderImageSchema(ma.Schema):
    class Meta:
        unknown = EXCLUDE

    id = fields.Integer(dump_only=True)
    filename = fields.String(load_default=None)
    size = fields.Integer(load_default=None, validate=validate.Range(min=0))
    path = fields.String(required=True)


class OrderRequestSchema(ma.Schema):
    id = fields.Integer()
    order_id = fields.Integer()
    requester_id = fields.Integer()
    requester = fields.Nested(UserPublicSchema)
    request_status = fields.Enum(RequestStatus, by_value=True)
    status_changed_by = fields.Integer(allow_none=True)
    message = fields.String(allow_none=True)
    created_at = fields.DateTime()
    updated_at = fields.DateTime(allow_none=True)


class OrderSchema(ma.Schema):
    id = fields.Integer()
    role = fields.Enum(OrderRole, by_value=True)
    owner_id = fields.Integer()
    owner = fields.Nested(UserPublicSchema)
    title = fields.String()
    contents = fields.String()
    priority = fields.String()
    distance = fields.String()
    estimated_time = fields.String()
    introduce = fields.String()
    start_time = fields.Time()
    end_time = fields.Time()
    address = fields.String()
    additional_message = fields.String()
    payments = fields.String()
    estimated_price = fields.Integer()
    tip = fields.Integer()
    status = fields.Enum(OrderStatus, by_value=True)
    created_at = fields.DateTime()
    updated_at = fields.DateTime(allow_none=True)
    items = fields.Nested(OrderItemSchema, many=True)
    images = fields.Nested(OrderImageSchema, many=True)


class OrderDetailSchema(OrderSchema):
    requests = fields.Nested(OrderRequestSchema, many=True)


class OrderRequestDetailSchema(OrderRequestSchema):
    order = fields.Nested(OrderSchema)


# ------------------------------------------------------------
# Input
# ------------------------------------------------------------
class OrderCreateSchema(ma.Schema):
    class Meta:
        unknown = EXCLUDE

    title = fields.String(load_default=None)
    contents = fields.String(load_default=None)
    start_time = fields.Time(load_default=None, data_key="startTime")
    end_time = fields.Time(load_default=None, data_key="endTime")
    address = fields.String(load_default=None)
    additional_message = fields.String(load_default=None, data_key="additionalMessage")
    payments = fields.String(load_default=None)
    estimated_price = fields.Integer(load_default=0, validate=validate.Range(min=0), data_key="estimatedPrice")
    tip = fields.Integer(load_default=0, validate=validate.Range(min=0))
    items = fields.List(fields.Nested(OrderItemSchema), load_default=list, data_key="orderItems")
    images = fields.List(fields.Nested(OrderImageSchema), load_default=list, data_key="orderImages")


class ShopperOrderCreateSchema(OrderCreateSchema):
    title = fields.String(required=True, validate=validate.Length(min=1))
    priority = fields.String(load_default="FREE", validate=validate.OneOf(PRIORITIES))


class RunnerOrderCreateSchema(OrderCreateSchema):
    distance = fields.String(required=True, validate=validate.OneOf(DISTANCES))
    estimated_time = fields.String(load_default=None, data_key="estimatedTime")
    introduce = fields.String(load_default=None)


ORDER_CREATE_SCHEMAS = {
    OrderRole.SHOPPER: ShopperOrderCreateSchema,
    OrderRole.RUNNER: RunnerOrderCreateSchema,
}


class PageQuerySchema(ma.Schema):
    class Meta:
        unknown = EXCLUDE

    offset = fields.Integer(load_default=0, validate=validate.Range(min=0))
    limit = fields.Integer(load_default=20, validate=validate.Range(min=0))


class OrderListQuerySchema(PageQuerySchema):
    status = fields.Enum(OrderStatus, by_value=True, load_default=None)


class RequestListQuerySchema(PageQuerySchema):
    request_status = fields.Enum(RequestStatus, by_value=True, load_default=None, data_key="requestStatus")


class RequestCreateSchema(ma.Schema):
    class Meta:
        unknown = EXCLUDE

    message = fields.String(load_default=None)


class RequestStatusUpdateSchema(ma.Schema):
    class Meta:
        unknown = EXCLUDE

    request_status = fields.Enum(RequestStatus, by_value=True, required=True, data_key="requestStatus")
