"""
Typed failures raised by the report services.

Routers translate each one into an HTTP response carrying ``status_code``.
"""


class CityFixError(Exception):
    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class NotFoundError(CityFixError):
    status_code = 404


class ForbiddenError(CityFixError):
    status_code = 403


class ValidationError(CityFixError):
    status_code = 422


class PayloadTooLargeError(CityFixError):
    status_code = 413


class UnsupportedMediaTypeError(CityFixError):
    status_code = 415


class StorageFailureError(CityFixError):
    status_code = 502
