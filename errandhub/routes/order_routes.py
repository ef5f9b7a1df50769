from flask import Blueprint, request
from flask_jwt_extended import jwt_required

from errandhub.models.order import OrderRole
from errandhub.schemas.order_schema import (
    ORDER_CREATE_SCHEMAS,
    OrderSchema,
    OrderDetailSchema,
    OrderRequestSchema,
    OrderRequestDetailSchema,
    OrderListQuerySchema,
    RequestListQuerySchema,
    PageQuerySchema,
    RequestCreateSchema,
    RequestStatusUpdateSchema,
)
from errandhub.services.order_service import (
    create_order,
    get_order,
    delete_order,
    list_orders,
    list_requests,
    list_order_requests,
)
from errandhub.services.request_service import (
    create_request,
    get_request,
    update_request_status,
    delete_request,
)
from errandhub.utils.auth_utils import current_user_id
from errandhub.utils.response_formatter import success_response
from errandhub.utils.validation import load_or_raise

orders_schema = OrderSchema(many=True)
order_detail_schema = OrderDetailSchema()
requests_schema = OrderRequestSchema(many=True)
request_schema = OrderRequestSchema()
request_detail_schema = OrderRequestDetailSchema()


def build_blueprint(role):
    """Order/request endpoints for one side of the marketplace.

    Shopper and runner workflows are the same state machine; only the role tag
    and the name of the owner filter (``shopperId`` / ``runnerId``) differ.
    """
    role = OrderRole(role)
    owner_param = f"{role.value}Id"
    create_schema = ORDER_CREATE_SCHEMAS[role]()

    bp = Blueprint(role.value, __name__, url_prefix=f"/api/v1/{role.value}")

    # ------------------------------------------------------------
    #  GET /orders: public marketplace listing, optionally by owner
    # ------------------------------------------------------------
    @bp.route("/orders", methods=["GET"])
    @jwt_required(optional=True)
    def get_orders():
        args = load_or_raise(OrderListQuerySchema(), request.args)
        items, total = list_orders(
            role,
            owner_filter=request.args.get(owner_param),
            status=args["status"],
            offset=args["offset"],
            limit=args["limit"],
            caller_id=current_user_id(),
        )
        return success_response({"totalCount": total, "orders": orders_schema.dump(items)})

    # ------------------------------------------------------------
    #  GET /requests: requests this side placed on the other side's orders
    # ------------------------------------------------------------
    @bp.route("/requests", methods=["GET"])
    @jwt_required()
    def get_requests():
        args = load_or_raise(RequestListQuerySchema(), request.args)
        items, total = list_requests(
            role,
            requester_filter=request.args.get(owner_param),
            request_status=args["request_status"],
            offset=args["offset"],
            limit=args["limit"],
            caller_id=current_user_id(),
        )
        return success_response({
            "totalCount": total,
            "requests": [request_detail_schema.dump(r) for r in items],
        })

    @bp.route("/orders/<int:order_id>", methods=["GET"])
    def get_order_by_id(order_id):
        order = get_order(order_id, role)
        return success_response({"order": order_detail_schema.dump(order)})

    @bp.route("/orders", methods=["POST"])
    @jwt_required()
    def post_order():
        data = load_or_raise(create_schema, request.get_json(silent=True))
        order = create_order(role, current_user_id(), data)
        return success_response({"order": order_detail_schema.dump(order)}, status=201)

    @bp.route("/orders/<int:order_id>", methods=["DELETE"])
    @jwt_required()
    def remove_order(order_id):
        is_deleted = delete_order(current_user_id(), order_id, role)
        return success_response({"isDeleted": is_deleted})

    # ------------------------------------------------------------
    #  Requests on a single order
    # ------------------------------------------------------------
    @bp.route("/orders/<int:order_id>/requests", methods=["POST"])
    @jwt_required()
    def post_order_request(order_id):
        data = load_or_raise(RequestCreateSchema(), request.get_json(silent=True))
        req = create_request(order_id, current_user_id(), message=data["message"], role=role)
        return success_response({"request": request_schema.dump(req)}, status=201)

    @bp.route("/orders/<int:order_id>/requests", methods=["GET"])
    @jwt_required()
    def get_order_requests(order_id):
        args = load_or_raise(PageQuerySchema(), request.args)
        items, total = list_order_requests(order_id, args["offset"], args["limit"], role=role)
        return success_response({"totalCount": total, "requests": requests_schema.dump(items)})

    @bp.route("/orders/requests/<int:request_id>", methods=["GET"])
    @jwt_required()
    def get_order_request(request_id):
        req = get_request(request_id, role)
        return success_response({"request": request_detail_schema.dump(req)})

    @bp.route("/orders/requests/<int:request_id>", methods=["PUT"])
    @jwt_required()
    def put_order_request(request_id):
        data = load_or_raise(RequestStatusUpdateSchema(), request.get_json(silent=True))
        req = update_request_status(request_id, data["request_status"], current_user_id(), role=role)
        return success_response({"request": request_schema.dump(req)})

    @bp.route("/orders/requests/<int:request_id>", methods=["DELETE"])
    @jwt_required()
    def remove_order_request(request_id):
        is_deleted = delete_request(request_id, current_user_id(), role=role)
        return success_response({"isDeleted": is_deleted})

    return bp


shopper_bp = build_blueprint(OrderRole.SHOPPER)
runner_bp = build_blueprint(OrderRole.RUNNER)
