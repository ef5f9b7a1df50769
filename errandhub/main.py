from flask import Flask, request
from .config import CONFIGS
from .extensions import db, migrate, jwt, ma, limiter, bcrypt, socketio
import os
from flask_cors import CORS
from werkzeug.exceptions import HTTPException

def create_app(config_name=None):
    app = Flask(__name__, instance_relative_config=False)
    env = config_name or os.getenv("FLASK_ENV", "development")
    app.config.from_object(CONFIGS.get(env, CONFIGS["development"]))

    # initialize extensions
    db.init_app(app)
    migrate.init_app(app, db)
    jwt.init_app(app)
    ma.init_app(app)
    origins = [o.strip() for o in app.config["CORS_ORIGINS"].split(",")]
    CORS(
        app,
        resources={r"/api/*": {"origins": origins}},
        supports_credentials=True,
        allow_headers=["Content-Type", "Authorization"],
        methods=["GET", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"],
    )
    bcrypt.init_app(app)
    limiter.init_app(app)

    # socket handlers are declared before init_app so every app instance picks them up
    from errandhub.routes import socket_events  # noqa: F401
    socketio.init_app(
        app,
        cors_allowed_origins=origins,
        message_queue=app.config.get("SOCKETIO_MESSAGE_QUEUE"),
    )

    from errandhub.services.broadcast import SocketIOBroadcaster
    from errandhub.routes.chat_routes import BROADCASTER_KEY
    app.extensions[BROADCASTER_KEY] = SocketIOBroadcaster(socketio)

    # register blueprints
    from errandhub.routes.auth_routes import bp as auth_bp
    from errandhub.routes.user_routes import bp as user_bp
    from errandhub.routes.order_routes import shopper_bp, runner_bp
    from errandhub.routes.chat_routes import bp as chat_bp

    app.register_blueprint(auth_bp)
    app.register_blueprint(user_bp)
    app.register_blueprint(shopper_bp)
    app.register_blueprint(runner_bp)
    app.register_blueprint(chat_bp)

    register_error_handlers(app)

    return app


def register_error_handlers(app):
    from errandhub.utils.exceptions import ServiceError
    from errandhub.utils.response_formatter import error_response

    @app.errorhandler(ServiceError)
    def service_error(e):
        app.logger.info("%s %s -> %s: %s", request.method, request.path, e.code, e.message)
        return error_response(e.code, e.message, e.details, status=e.status)

    @app.errorhandler(HTTPException)
    def http_error(e):
        code = (e.name or "HTTP_ERROR").upper().replace(" ", "_")
        return error_response(code, e.description, status=e.code)

    @app.errorhandler(500)
    def server_error(e):
        app.logger.exception("Unhandled error: %s", e)
        return error_response("SERVER_ERROR", "Internal server error", status=500)

    @jwt.unauthorized_loader
    def missing_token(reason):
        return error_response("UNAUTHORIZED", reason, status=401)

    @jwt.invalid_token_loader
    def invalid_token(reason):
        return error_response("UNAUTHORIZED", reason, status=401)

    @jwt.expired_token_loader
    def expired_token(jwt_header, jwt_payload):
        return error_response("UNAUTHORIZED", "Token has expired", status=401)

    @jwt.user_lookup_loader
    def load_active_user(jwt_header, jwt_data):
        from errandhub.models.user import User
        user = db.session.get(User, int(jwt_data["sub"]))
        return user if user is not None and user.is_active else None

    @jwt.user_lookup_error_loader
    def inactive_user(jwt_header, jwt_data):
        return error_response("UNAUTHORIZED", "Account is not active", status=401)
