"""Lifecycle of a counterpart's request against an order.

A request starts at REQUESTING and only moves along the edges in
``TRANSITIONS``. Creating the request is the requester's proposal, so only the
order owner may accept it (MATCHED). The ``*_REQUEST`` steps are proposals too:
the confirming step (DELIVERED, REVIEWED) has to come from the other
participant.

An order holds at most one request at MATCHED or later, and its status is
always recomputed from its requests.
"""
from errandhub.extensions import db
from errandhub.models.order import Order, OrderRole, OrderStatus
from errandhub.models.order_request import (
    OrderRequest,
    RequestStatus,
    HANDSHAKES,
    OWNER_ONLY_STATUSES,
    FULFILLED_STATUSES,
    MATCHED_OR_LATER,
    can_transition,
)
from errandhub.utils.exceptions import (
    NotFound,
    Forbidden,
    Conflict,
    InvalidTransition,
)
from sqlalchemy.exc import IntegrityError


def get_request(request_id, role=None):
    req = db.session.get(OrderRequest, request_id)
    if not req or (role is not None and req.order.role != OrderRole(role)):
        raise NotFound("Request not found")
    return req


def create_request(order_id, requester_id, message=None, role=None):
    order = db.session.get(Order, order_id)
    if not order or (role is not None and order.role != OrderRole(role)):
        raise NotFound("Order not found")

    if order.is_owned_by(requester_id):
        raise Forbidden("You cannot request your own order")

    if order.status != OrderStatus.WAITING:
        raise Conflict(
            "This order is no longer taking requests",
            details={"status": order.status.value}
        )

    existing = OrderRequest.query.filter_by(
        order_id=order_id,
        requester_id=requester_id,
        is_open=True
    ).first()
    if existing:
        raise Conflict(
            "You already have an active request on this order",
            details={"request_id": existing.id}
        )

    req = OrderRequest(
        order_id=order_id,
        requester_id=requester_id,
        request_status=RequestStatus.REQUESTING,
        is_open=True,
        status_changed_by=requester_id,
        message=message,
    )
    db.session.add(req)
    try:
        db.session.commit()
    except IntegrityError:
        # a concurrent request for the same pair won the partial unique index
        db.session.rollback()
        raise Conflict("You already have an active request on this order")
    return req


def update_request_status(request_id, new_status, caller_id, role=None):
    req = get_request(request_id, role)
    order = req.order
    new_status = RequestStatus(new_status)

    if not req.involves(caller_id):
        raise Forbidden("Only the order owner or the requester may change this request")

    current = req.request_status
    if not can_transition(current, new_status):
        raise InvalidTransition(
            f"Cannot change request status from {current.value} to {new_status.value}",
            details={"from": current.value, "to": new_status.value}
        )

    if new_status in OWNER_ONLY_STATUSES and not order.is_owned_by(caller_id):
        raise Forbidden(f"Only the order owner may set {new_status.value}")

    if new_status in HANDSHAKES and req.status_changed_by == caller_id:
        raise Forbidden(
            f"{HANDSHAKES[new_status].value} must be confirmed by the other participant"
        )

    if new_status == RequestStatus.MATCHED:
        if order.status != OrderStatus.WAITING or _matched_statuses(order.id, exclude_id=req.id):
            raise Conflict(
                "This order is already matched with another request",
                details={"status": order.status.value}
            )

    req.apply_status(new_status, caller_id)
    _sync_order_status(order)
    db.session.commit()
    return req


def _matched_statuses(order_id, exclude_id=None):
    q = db.session.query(OrderRequest.request_status).filter(
        OrderRequest.order_id == order_id,
        OrderRequest.request_status.in_(list(MATCHED_OR_LATER)),
    )
    if exclude_id is not None:
        q = q.filter(OrderRequest.id != exclude_id)
    return {row.request_status for row in q}


def _sync_order_status(order):
    # autoflush makes pending status changes and deletes visible to the query
    statuses = _matched_statuses(order.id)
    if statuses & FULFILLED_STATUSES:
        order.status = OrderStatus.COMPLETED
    elif statuses:
        order.status = OrderStatus.MATCHED
    else:
        order.status = OrderStatus.WAITING


def delete_request(request_id, caller_id, role=None):
    req = db.session.get(OrderRequest, request_id)
    if not req or (role is not None and req.order.role != OrderRole(role)):
        return False

    if not req.involves(caller_id):
        raise Forbidden("Only the order owner or the requester may delete this request")

    order = req.order
    db.session.delete(req)
    _sync_order_status(order)
    db.session.commit()
    return True
