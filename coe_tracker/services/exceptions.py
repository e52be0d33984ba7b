"""Service-layer errors; the app maps each to an HTTP status via its ``status_code``."""


class ServiceError(Exception):
    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class UnauthenticatedError(ServiceError):
    status_code = 401


class ForbiddenError(ServiceError):
    status_code = 403


class NotFoundError(ServiceError):
    status_code = 404


class InvalidArgumentError(ServiceError):
    status_code = 400


class InternalError(ServiceError):
    status_code = 500
