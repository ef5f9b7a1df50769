from errandhub.extensions import db
from errandhub.models.order import Order, OrderItem, OrderImage, OrderRole
from errandhub.models.order_request import OrderRequest
from errandhub.utils.exceptions import NotFound, Forbidden, InvalidArgument
from errandhub.utils.pagination import paginate_query

ME = "me"

ORDER_FIELDS = (
    "title",
    "contents",
    "priority",
    "distance",
    "estimated_time",
    "introduce",
    "start_time",
    "end_time",
    "address",
    "additional_message",
    "payments",
    "estimated_price",
    "tip",
)


def resolve_user_filter(value, caller_id):
    """Turn an owner/requester filter ("me", an id, or None) into a user id."""
    if value is None or value == "":
        return None
    if value == ME:
        if caller_id is None:
            raise InvalidArgument("'me' requires an authenticated caller")
        return caller_id
    try:
        return int(value)
    except (TypeError, ValueError):
        raise InvalidArgument("User filter must be an id or 'me'", details={"value": value})


def create_order(role, owner_id, data):
    role = OrderRole(role)
    order = Order(role=role, owner_id=owner_id)
    for field in ORDER_FIELDS:
        if field in data:
            setattr(order, field, data[field])

    order.items = [
        OrderItem(name=item["name"], count=item.get("count", 1), price=item.get("price", 0))
        for item in data.get("items") or []
    ]
    order.images = [
        OrderImage(filename=image.get("filename"), size=image.get("size"), path=image["path"])
        for image in data.get("images") or []
    ]

    db.session.add(order)
    db.session.commit()
    return order


def get_order(order_id, role=None):
    order = db.session.get(Order, order_id)
    if not order or (role is not None and order.role != OrderRole(role)):
        raise NotFound("Order not found")
    return order


def delete_order(owner_id, order_id, role=None):
    order = db.session.get(Order, order_id)
    if not order or (role is not None and order.role != OrderRole(role)):
        return False
    if not order.is_owned_by(owner_id):
        raise Forbidden("Only the owner may delete this order")

    db.session.delete(order)
    db.session.commit()
    return True


def list_orders(role, owner_filter=None, status=None, offset=0, limit=20, caller_id=None):
    owner_id = resolve_user_filter(owner_filter, caller_id)

    q = Order.query.filter(Order.role == OrderRole(role))
    if owner_id is not None:
        q = q.filter(Order.owner_id == owner_id)
    if status is not None:
        q = q.filter(Order.status == status)

    q = q.order_by(Order.created_at.desc(), Order.id.desc())
    return paginate_query(q, offset, limit)


def list_requests(role, requester_filter=None, request_status=None, offset=0, limit=20, caller_id=None):
    """Requests placed by users acting as ``role``, i.e. on orders posted by the other side."""
    requester_id = resolve_user_filter(requester_filter, caller_id)

    q = (
        OrderRequest.query
        .join(Order, Order.id == OrderRequest.order_id)
        .filter(Order.role == OrderRole(role).counterpart)
    )
    if requester_id is not None:
        q = q.filter(OrderRequest.requester_id == requester_id)
    if request_status is not None:
        q = q.filter(OrderRequest.request_status == request_status)

    q = q.order_by(OrderRequest.created_at.desc(), OrderRequest.id.desc())
    return paginate_query(q, offset, limit)


def list_order_requests(order_id, offset=0, limit=20, role=None):
    get_order(order_id, role)
    q = (
        OrderRequest.query
        .filter(OrderRequest.order_id == order_id)
        .order_by(OrderRequest.created_at.asc(), OrderRequest.id.asc())
    )
    return paginate_query(q, offset, limit)
