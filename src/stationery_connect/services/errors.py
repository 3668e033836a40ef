"""
stationery_connect.services.errors

Expected failures raised by the service layer.

The API layer maps each subclass to its `http_status` (see `api.errors`).
"""

from __future__ import annotations


class ServiceError(Exception):
    """Base error for expected failures."""

    http_status: int = 400

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class PermissionDenied(ServiceError):
    http_status = 403

    def __init__(self, message: str = "Not permitted") -> None:
        super().__init__(message)


class RecordNotFound(ServiceError):
    http_status = 404

    def __init__(self, message: str = "Not found") -> None:
        super().__init__(message)


class InvalidRequest(ServiceError):
    http_status = 422
