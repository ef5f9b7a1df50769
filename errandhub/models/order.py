from errandhub.extensions import db
from errandhub.utils.time_utils import utcnow
import enum


class OrderRole(str, enum.Enum):
    """Which side of the marketplace posted the order."""

    SHOPPER = "shopper"
    RUNNER = "runner"

    @property
    def counterpart(self):
        return OrderRole.RUNNER if self is OrderRole.SHOPPER else OrderRole.SHOPPER


class OrderStatus(str, enum.Enum):
    WAITING = "WAITING"
    MATCHED = "MATCHED"
    COMPLETED = "COMPLETED"


PRIORITIES = ("FREE", "NORMAL", "URGENT")
DISTANCES = ("100M", "250M", "500M", "1KM", "1.5KM", "2.5KM", "5KM", "10KM")


class Order(db.Model):
    __tablename__ = "orders"

    __table_args__ = (
        db.Index("idx_orders_role_status", "role", "status"),
    )

    id = db.Column(db.Integer, primary_key=True, autoincrement=True)
    role = db.Column(db.Enum(OrderRole, name="order_role"), nullable=False)
    owner_id = db.Column(
        db.Integer,
        db.ForeignKey("users.id"),
        nullable=False,
        index=True
    )

    title = db.Column(db.String(255))
    contents = db.Column(db.Text)

    # shopper orders
    priority = db.Column(db.String(20))
    # runner orders
    distance = db.Column(db.String(20))
    estimated_time = db.Column(db.String(100))
    introduce = db.Column(db.Text)

    # receive window for shoppers, contactable window for runners
    start_time = db.Column(db.Time)
    end_time = db.Column(db.Time)
    address = db.Column(db.String(255))
    additional_message = db.Column(db.Text)
    payments = db.Column(db.String(255))

    estimated_price = db.Column(db.Integer, default=0)
    tip = db.Column(db.Integer, default=0)

    status = db.Column(
        db.Enum(OrderStatus, name="order_status"),
        nullable=False,
        default=OrderStatus.WAITING
    )

    created_at = db.Column(db.DateTime, default=utcnow)
    updated_at = db.Column(db.DateTime, default=utcnow, onupdate=utcnow)

    owner = db.relationship("User", backref="orders", lazy=True)
    items = db.relationship(
        "OrderItem",
        backref="order",
        lazy=True,
        cascade="all, delete-orphan",
        order_by="OrderItem.id"
    )
    images = db.relationship(
        "OrderImage",
        backref="order",
        lazy=True,
        cascade="all, delete-orphan",
        order_by="OrderImage.id"
    )
    requests = db.relationship(
        "OrderRequest",
        backref="order",
        lazy=True,
        cascade="all, delete-orphan",
        order_by="OrderRequest.id"
    )

    def is_owned_by(self, user_id):
        return self.owner_id == user_id


class OrderItem(db.Model):
    __tablename__ = "order_items"

    id = db.Column(db.Integer, primary_key=True, autoincrement=True)
    order_id = db.Column(
        db.Integer,
        db.ForeignKey("orders.id", ondelete="CASCADE"),
        nullable=False,
        index=True
    )
    name = db.Column(db.String(255), nullable=False)
    count = db.Column(db.Integer, default=1)
    price = db.Column(db.Integer, default=0)


class OrderImage(db.Model):
    __tablename__ = "order_images"

    id = db.Column(db.Integer, primary_key=True, autoincrement=True)
    order_id = db.Column(
        db.Integer,
        db.ForeignKey("orders.id", ondelete="CASCADE"),
        nullable=False,
        index=True
    )
    filename = db.Column(db.String(255))
    size = db.Column(db.Integer)
    path = db.Column(db.String(1024), nullable=False)
