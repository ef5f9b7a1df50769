class ServiceError(Exception):
    status = 400

    def __init__(self, code="SERVICE_ERROR", message="Service error", details=None):
        self.code = code
        self.message = message
        self.details = details or {}
        super().__init__(message)


class NotFound(ServiceError):
    status = 404

    def __init__(self, message="Resource not found", details=None):
        super().__init__("NOT_FOUND", message, details)


class InvalidMembership(ServiceError):
    status = 400

    def __init__(self, message="Invalid chatting room members", details=None):
        super().__init__("INVALID_MEMBERSHIP", message, details)


class InvalidTransition(ServiceError):
    status = 409

    def __init__(self, message="Status change not allowed", details=None):
        super().__init__("INVALID_TRANSITION", message, details)


class Conflict(ServiceError):
    status = 409

    def __init__(self, message="Resource already exists", details=None):
        super().__init__("CONFLICT", message, details)


class Forbidden(ServiceError):
    status = 403

    def __init__(self, message="Not allowed", details=None):
        super().__init__("FORBIDDEN", message, details)


class InvalidArgument(ServiceError):
    status = 400

    def __init__(self, message="Invalid argument", details=None):
        super().__init__("INVALID_ARGUMENT", message, details)
