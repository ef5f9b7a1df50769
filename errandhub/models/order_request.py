from errandhub.extensions import db
from errandhub.utils.time_utils import utcnow
import enum


class RequestStatus(str, enum.Enum):
    REQUESTING = "REQUESTING"
    MATCHED = "MATCHED"
    MATCH_FAIL = "MATCH_FAIL"
    DELIVERED_REQUEST = "DELIVERED_REQUEST"
    DELIVERED = "DELIVERED"
    REVIEW_REQUEST = "REVIEW_REQUEST"
    REVIEWED = "REVIEWED"


TRANSITIONS = {
    RequestStatus.REQUESTING: frozenset({RequestStatus.MATCHED, RequestStatus.MATCH_FAIL}),
    RequestStatus.MATCHED: frozenset({RequestStatus.DELIVERED_REQUEST, RequestStatus.MATCH_FAIL}),
    RequestStatus.DELIVERED_REQUEST: frozenset({RequestStatus.DELIVERED}),
    RequestStatus.DELIVERED: frozenset({RequestStatus.REVIEW_REQUEST}),
    RequestStatus.REVIEW_REQUEST: frozenset({RequestStatus.REVIEWED}),
    RequestStatus.MATCH_FAIL: frozenset(),
    RequestStatus.REVIEWED: frozenset(),
}

CLOSED_STATUSES = frozenset({RequestStatus.MATCH_FAIL, RequestStatus.REVIEWED})

# confirmation step -> the proposal it confirms
HANDSHAKES = {
    RequestStatus.DELIVERED: RequestStatus.DELIVERED_REQUEST,
    RequestStatus.REVIEWED: RequestStatus.REVIEW_REQUEST,
}

# creating the request is the requester's proposal; only the order owner accepts it
OWNER_ONLY_STATUSES = frozenset({RequestStatus.MATCHED})

# a request in one of these holds the order
ACTIVE_STATUSES = frozenset({RequestStatus.MATCHED, RequestStatus.DELIVERED_REQUEST})
FULFILLED_STATUSES = frozenset({
    RequestStatus.DELIVERED,
    RequestStatus.REVIEW_REQUEST,
    RequestStatus.REVIEWED,
})
MATCHED_OR_LATER = ACTIVE_STATUSES | FULFILLED_STATUSES


def can_transition(current, new):
    return RequestStatus(new) in TRANSITIONS[RequestStatus(current)]


class OrderRequest(db.Model):
    __tablename__ = "order_requests"

    id = db.Column(db.Integer, primary_key=True, autoincrement=True)
    order_id = db.Column(
        db.Integer,
        db.ForeignKey("orders.id", ondelete="CASCADE"),
        nullable=False,
        index=True
    )
    requester_id = db.Column(
        db.Integer,
        db.ForeignKey("users.id"),
        nullable=False,
        index=True
    )

    request_status = db.Column(
        db.Enum(RequestStatus, name="request_status"),
        nullable=False,
        default=RequestStatus.REQUESTING
    )
    # False once the request reaches a closed status; backs the partial unique index
    is_open = db.Column(db.Boolean, nullable=False, default=True)
    status_changed_by = db.Column(db.Integer, db.ForeignKey("users.id"), nullable=True)
    message = db.Column(db.Text, nullable=True)

    created_at = db.Column(db.DateTime, default=utcnow)
    updated_at = db.Column(db.DateTime, default=utcnow, onupdate=utcnow)

    requester = db.relationship("User", foreign_keys=[requester_id], lazy=True)

    __table_args__ = (
        db.Index(
            "uq_order_requests_open",
            "order_id",
            "requester_id",
            unique=True,
            sqlite_where=db.text("is_open = 1"),
            postgresql_where=db.text("is_open"),
        ),
    )

    @property
    def is_closed(self):
        return self.request_status in CLOSED_STATUSES

    def involves(self, user_id):
        return user_id == self.requester_id or (self.order is not None and self.order.owner_id == user_id)

    def apply_status(self, new_status, actor_id):
        self.request_status = RequestStatus(new_status)
        self.is_open = self.request_status not in CLOSED_STATUSES
        self.status_changed_by = actor_id
